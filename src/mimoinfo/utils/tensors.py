#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Functions for mixed-radix symbol index vectors"""

import numpy as np
import tensorflow as tf

from mimoinfo.config import config
from mimoinfo.errors import InvalidConfiguration

_INT64_MAX = np.iinfo(np.int64).max


def _radix_weights(vector_length, radix):
    """Returns ``[1, radix, ..., radix**(vector_length-1)]`` as `tf.int64`"""
    if int(vector_length) != vector_length or vector_length < 1:
        raise InvalidConfiguration("`vector_length` must be a positive integer")
    if int(radix) != radix or radix < 2:
        raise InvalidConfiguration("`radix` must be an integer >= 2")
    vector_length = int(vector_length)
    radix = int(radix)
    if radix**vector_length - 1 > _INT64_MAX:
        raise InvalidConfiguration(
            f"radix**vector_length = {radix}**{vector_length} does not fit "
            "into a 64 bit index")
    return tf.constant([radix**m for m in range(vector_length)], tf.int64)


def decode_index(linear_index, vector_length, radix):
    r"""
    Decodes linear indices into mixed-radix digit vectors

    Digit :math:`m` of the output is
    :math:`\lfloor i / r^m \rfloor \bmod r`, i.e., the first entry is the
    least significant digit and the last entry (highest antenna index) the
    most significant one. The mapping is a bijection between
    :math:`[0, r^L)` and :math:`[0, r)^L`.

    Input
    -----
    linear_index : `int` | [...], `tf.int`
        Nonnegative linear index or tensor of indices

    vector_length : `int`
        Number of digits :math:`L`, e.g., the number of transmit antennas

    radix : `int`
        Base :math:`r`, e.g., the size of the alphabet

    Output
    ------
    : [..., vector_length], `tf.int32`
        Digit vectors

    Example
    -------

    .. code-block:: Python

        from mimoinfo.utils import decode_index

        print(decode_index(5, 3, 2).numpy())
        # [1 0 1]
    """
    weights = _radix_weights(vector_length, radix)
    idx = tf.cast(linear_index, tf.int64)

    if tf.executing_eagerly() and tf.size(idx) > 0:
        bound = int(radix)**int(vector_length)
        if tf.reduce_min(idx) < 0 or tf.reduce_max(idx) > bound - 1:
            raise InvalidConfiguration(
                f"`linear_index` must be in [0, {bound})")

    digits = tf.math.floormod(tf.math.floordiv(idx[..., tf.newaxis], weights),
                              tf.cast(radix, tf.int64))
    return tf.cast(digits, tf.int32)


def encode_index(digits, radix):
    r"""
    Encodes mixed-radix digit vectors into linear indices

    Inverse of :func:`~mimoinfo.utils.decode_index`.

    Input
    -----
    digits : [..., vector_length], `tf.int`
        Digit vectors with entries in :math:`[0, r)`

    radix : `int`
        Base :math:`r`

    Output
    ------
    : [...], `tf.int64`
        Linear indices
    """
    digits = tf.cast(digits, tf.int64)
    weights = _radix_weights(digits.shape[-1], radix)
    return tf.reduce_sum(digits*weights, axis=-1)


def enumerate_indices(vector_length, radix):
    r"""
    Enumerates all digit vectors of length ``vector_length`` in base ``radix``

    The vectors are produced in the order of a running counter
    :math:`0, 1, \dots, r^L-1` decoded by
    :func:`~mimoinfo.utils.decode_index`. The number of vectors grows
    exponentially with ``vector_length``.

    Input
    -----
    vector_length : `int`
        Number of digits :math:`L`

    radix : `int`
        Base :math:`r`

    Output
    ------
    : [radix**vector_length, vector_length], `tf.int32`
        All digit vectors, in counter order

    Example
    -------

    .. code-block:: Python

        from mimoinfo.utils import enumerate_indices

        print(enumerate_indices(2, 3).numpy())
        # [[0 0]
        #  [1 0]
        #  [2 0]
        #  [0 1]
        #  [1 1]
        #  [2 1]
        #  [0 2]
        #  [1 2]
        #  [2 2]]
    """
    _radix_weights(vector_length, radix)
    idx_flat = tf.range(int(radix)**int(vector_length), dtype=tf.int64)
    return decode_index(idx_flat, vector_length, radix)


def random_indices(shape, radix, rng=None):
    r"""
    Draws i.i.d. uniformly distributed integers in :math:`[0, r)`

    Input
    -----
    shape : `list` | `tf.TensorShape`
        Shape of the output

    radix : `int`
        Number of values :math:`r`

    rng : `None` (default) | `tf.random.Generator`
        Random stream to draw from. If `None`,
        :attr:`~mimoinfo.config.Config.tf_rng` is used.

    Output
    ------
    : ``shape``, `tf.int32`
        Random indices
    """
    if rng is None:
        rng = config.tf_rng
    return rng.uniform(shape, minval=0, maxval=int(radix), dtype=tf.int32)
