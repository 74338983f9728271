#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Constants for the mimoinfo package"""

import numpy as np
import scipy

PI = scipy.constants.pi
LN2 = np.log(2.)
SAMPLING_MODES = ("EXHAUSTIVE", "RANDOMIZED")
AVERAGING_METHODS = ("linear", "logsumexp")
