#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Mutual information of MIMO channels with finite-alphabet inputs"""

__version__ = "1.0.0"

from .config import config, dtypes
from .constants import *
from .errors import InvalidConfiguration, NumericalUnderflow
from .block import Object, Block
from . import utils
from . import mapping
from . import mi
from .mapping import get_alphabet
from .utils import decode_index
from .mi import mi_mimo_true, estimate_mutual_information, mi_vs_snr
