#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Miscellaneous utility functions of mimoinfo"""

import tensorflow as tf
from tensorflow.experimental.numpy import log10 as _log10

from mimoinfo.config import config, dtypes


def complex_normal(shape, var=1.0, precision=None, rng=None):
    r"""Generates a tensor of complex normal random variables

    Input
    -----
    shape : `tf.shape`, or `list`
        Desired shape

    var : `float`
        Total variance., i.e., each complex dimension has
        variance ``var/2``.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    rng : `None` (default) | `tf.random.Generator`
        Random stream to draw from. If `None`,
        :attr:`~mimoinfo.config.Config.tf_rng` is used.

    Output
    ------
    : ``shape``, `tf.complex`
        Tensor of complex normal random variables
    """
    if precision is None:
        precision = config.precision
    rdtype = dtypes[precision]['tf']['rdtype']
    if rng is None:
        rng = config.tf_rng

    # Half the variance for each dimension
    var_dim = tf.cast(var, rdtype)/tf.cast(2, rdtype)
    stddev = tf.sqrt(var_dim)

    # Generate complex Gaussian noise with the right variance
    xr = rng.normal(shape, stddev=stddev, dtype=rdtype)
    xi = rng.normal(shape, stddev=stddev, dtype=rdtype)
    x = tf.complex(xr, xi)

    return x


def lin_to_db(x,
              precision=None):
    r"""
    Converts the input in linear scale to dB scale

    Input
    -----
    x : `tf.float`
        Input value in linear scale

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : `tf.float`
        Input value converted to [dB]
    """
    if precision is None:
        rdtype = config.tf_rdtype
    else:
        rdtype = dtypes[precision]["tf"]["rdtype"]

    ten = tf.cast(10, rdtype)
    x = tf.cast(x, rdtype)
    return ten * log10(x)


def db_to_lin(x,
              precision=None):
    r"""
    Converts the input [dB] to linear scale

    Input
    -----
    x : `tf.float`
        Input value [dB]

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : `tf.float`
        Input value converted to linear scale
    """
    if precision is None:
        rdtype = config.tf_rdtype
    else:
        rdtype = dtypes[precision]["tf"]["rdtype"]

    ten = tf.cast(10, rdtype)
    x = tf.cast(x, rdtype)
    return tf.math.pow(ten, x / ten)


def log10(x):
    """TensorFlow implementation of NumPy's `log10` function

    Casts the result of `tf.experimental.numpy.log10` to the `dtype`
    of the input.
    """
    return tf.cast(_log10(x), x.dtype)
