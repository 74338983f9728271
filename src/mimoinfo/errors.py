#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Exceptions and warnings raised by mimoinfo"""

class InvalidConfiguration(ValueError):
    """Raised for malformed estimator inputs

    Examples are an empty alphabet, a channel matrix with a zero
    dimension, an unknown sampling mode or modulation, or non-positive
    iteration counts. It is raised before any sampling takes place.
    """

class NumericalUnderflow(RuntimeWarning):
    """Issued when an inner likelihood average collapses to zero

    The logarithm of such an average is `-inf`, which is propagated into
    the estimate instead of being clamped. Promote the warning to an error
    with ``warnings.simplefilter("error", NumericalUnderflow)`` to abort
    the estimation instead.
    """
