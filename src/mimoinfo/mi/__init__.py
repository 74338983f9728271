#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Mutual Information Module of mimoinfo"""

from .enumeration import SymbolVectorEnumerator, FiniteEnumerator,\
                         RandomSampler, enumerator_from_mode,\
                         normalize_sampling_mode
from .estimator import MutualInformationEstimator,\
                       estimate_mutual_information, mi_mimo_true, mi_vs_snr
