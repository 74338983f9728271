#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Finite signal alphabets (constellations) used as channel inputs"""

import re
import numpy as np
import tensorflow as tf
import matplotlib.pyplot as plt

from mimoinfo.block import Block
from mimoinfo.config import config, dtypes
from mimoinfo.errors import InvalidConfiguration

def pam_gray(b):
    # pylint: disable=line-too-long
    r"""Maps a vector of bits to a PAM constellation points with Gray labeling

    This recursive function maps a binary vector to Gray-labelled PAM
    constellation points. It can be used to generated QAM constellations.
    The constellation is not normalized.

    Input
    -----
    b : [n], `np.array`
        Tensor with with binary entries

    Output
    ------
    : `signed int`
        PAM constellation point taking values in
        :math:`\{\pm 1,\pm 3,\dots,\pm (2^n-1)\}`.

    Note
    ----
    This algorithm is a recursive implementation of the expressions found in
    Section 5.1 of 3GPP TS 38.211.
    """ # pylint: disable=C0301

    if len(b)>1:
        return (1-2*b[0])*(2**len(b[1:]) - pam_gray(b[1:]))
    return 1-2*b[0]

def _np_dtypes(precision):
    if precision is None:
        return config.np_rdtype, config.np_cdtype
    return dtypes[precision]["np"]["rdtype"], dtypes[precision]["np"]["cdtype"]

def qam(num_bits_per_symbol, normalize=True, precision=None):
    r"""Generates a QAM constellation

    This function generates a complex-valued vector, where each element is
    a constellation point of an M-ary QAM constellation. The bit
    label of the ``n`` th point is given by the length-``num_bits_per_symbol``
    binary represenation of ``n``.

    Input
    -----
    num_bits_per_symbol : `int`
        Number of bits per constellation point.
        Must be a multiple of two, e.g., 2, 4, 6, 8, etc.

    normalize: `bool`, (default `True`)
        If `True`, the constellation is normalized to have unit power.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : [2**num_bits_per_symbol], `np.complex`
        QAM constellation points

    Note
    ----
    The normalization factor of a QAM constellation is given in
    closed-form as:

    .. math::
        \sqrt{\frac{1}{2^{n-2}}\sum_{i=1}^{2^{n-1}}(2i-1)^2}

    where :math:`n= \text{num_bits_per_symbol}/2` is the number of bits
    per dimension.
    """ # pylint: disable=C0301

    if num_bits_per_symbol % 2 != 0 or num_bits_per_symbol <= 0:
        raise InvalidConfiguration("num_bits_per_symbol must be a multiple of 2")
    assert isinstance(normalize, bool), "normalize must be boolean"

    rdtype, cdtype = _np_dtypes(precision)

    # Build constellation by iterating through all points
    c = np.zeros([2**num_bits_per_symbol], dtype=cdtype)
    for i in range(0, 2**num_bits_per_symbol):
        b = np.array(list(np.binary_repr(i,num_bits_per_symbol)),
                     dtype=np.int32)
        c[i] = pam_gray(b[0::2]) + 1j*pam_gray(b[1::2]) # PAM in each dimension

    if normalize: # Normalize to unit energy
        n = int(num_bits_per_symbol/2)
        qam_var = 1/(2**(n-2))*np.sum(np.linspace(1,2**n-1, 2**(n-1),
                                                  dtype=rdtype)**2)
        c /= np.sqrt(qam_var)
    return c

def pam(num_bits_per_symbol, normalize=True, precision=None):
    r"""Generates a PAM constellation

    This function generates a real-valued vector, where each element is
    a constellation point of an M-ary PAM constellation. The bit
    label of the ``n`` th point is given by the length-``num_bits_per_symbol``
    binary represenation of ``n``. For ``num_bits_per_symbol=1`` this is
    BPSK with points :math:`\{+1, -1\}`.

    Input
    -----
    num_bits_per_symbol : `int`
        Number of bits per constellation point.
        Must be positive.

    normalize: `bool`, (default `True`)
        If `True`, the constellation is normalized to have unit power.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : [2**num_bits_per_symbol], `np.complex`
        PAM constellation symbols
    """ # pylint: disable=C0301

    if num_bits_per_symbol <= 0:
        raise InvalidConfiguration("num_bits_per_symbol must be positive")
    assert isinstance(normalize, bool), "normalize must be boolean"

    rdtype, cdtype = _np_dtypes(precision)

    # Build constellation by iterating through all points
    c = np.zeros([2**num_bits_per_symbol], dtype=cdtype)
    for i in range(0, 2**num_bits_per_symbol):
        b = np.array(list(np.binary_repr(i,num_bits_per_symbol)),
                     dtype=np.int32)
        c[i] = pam_gray(b)

    if normalize: # Normalize to unit energy
        n = int(num_bits_per_symbol)
        pam_var = 1/(2**(n-1))*np.sum(np.linspace(1,2**n-1, 2**(n-1),
                                                  dtype=rdtype)**2)
        c /= np.sqrt(pam_var)
    return c

def psk(num_bits_per_symbol, precision=None):
    r"""Generates a PSK constellation

    The ``n`` th point is :math:`e^{j 2\pi n / 2^k}` with
    :math:`k=` ``num_bits_per_symbol``, i.e., the points are listed in
    natural (not Gray) order on the unit circle.

    Input
    -----
    num_bits_per_symbol : `int`
        Number of bits per constellation point.
        Must be positive.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : [2**num_bits_per_symbol], `np.complex`
        PSK constellation symbols with unit energy
    """
    if num_bits_per_symbol <= 0:
        raise InvalidConfiguration("num_bits_per_symbol must be positive")

    _, cdtype = _np_dtypes(precision)
    num_points = 2**num_bits_per_symbol
    phi = 2*np.pi*np.arange(num_points)/num_points
    return np.exp(1j*phi).astype(cdtype)

class Constellation(Block):
    # pylint: disable=line-too-long
    r"""
    Finite signal alphabet

    This class defines a constellation, i.e., a complex-valued vector of
    constellation points. The position of a point within this vector is its
    symbol index, which is what the estimators in :mod:`mimoinfo.mi`
    enumerate and sample.

    Parameters
    ----------
    constellation_type : "qam" | "pam" | "psk" | "custom"
        For "custom", the constellation ``points`` must be provided.

    num_bits_per_symbol : int
        Number of bits per constellation symbol, e.g., 4 for QAM16.

    points : `None` (default) | [2**num_bits_per_symbol], `array_like`
        Custom constellation points

    normalize : `bool`, (default `False`)
        If `True`, the constellation is normalized to have unit power.
        Only applies to custom constellations.

    center : `bool`, (default `False`)
        If `True`, the constellation is ensured to have zero mean.
        Only applies to custom constellations.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Input
    -----
    : `None`

    Output
    ------
    : [2**num_bits_per_symbol], `tf.complex`
        (Possibly) centered and normalized constellation points
    """
    # pylint: enable=C0301
    def __init__(self,
                 constellation_type,
                 num_bits_per_symbol,
                 points=None,
                 normalize=False,
                 center=False,
                 precision=None,
                 **kwargs):
        super().__init__(precision=precision, **kwargs)

        if constellation_type not in ("qam", "pam", "psk", "custom"):
            raise InvalidConfiguration(
                f"Wrong `constellation_type` {constellation_type}")
        self._constellation_type = constellation_type

        if num_bits_per_symbol is None:
            raise InvalidConfiguration("No value for `num_bits_per_symbol`")
        n = num_bits_per_symbol
        if (n <= 0) or (n%1 != 0):
            raise InvalidConfiguration("`num_bits_per_symbol` must be a" +
                                       " positive integer")
        if self.constellation_type == "qam":
            if n%2 != 0:
                raise InvalidConfiguration("`num_bits_per_symbol` must " +
                                    "be a positive integer multiple of 2")
        self._num_bits_per_symbol = int(n)
        self._num_points = 2**self._num_bits_per_symbol

        self.normalize = normalize
        self.center = center

        if (points is not None) and (constellation_type != "custom"):
            raise InvalidConfiguration("`points` can only be provided for" +
                                       " `constellation_type`='custom'")
        elif (points is None) and (constellation_type == "custom"):
            raise InvalidConfiguration("You must provide a value for `points`")

        if self.constellation_type == "qam":
            points = qam(self.num_bits_per_symbol, precision=self.precision)
        elif self.constellation_type == "pam":
            points = pam(self.num_bits_per_symbol, precision=self.precision)
        elif self.constellation_type == "psk":
            points = psk(self.num_bits_per_symbol, precision=self.precision)

        points = np.asarray(points, dtype=np.complex128)
        if points.shape != (self._num_points,):
            err_msg = "`points` must have shape [2**num_bits_per_symbol]"
            raise InvalidConfiguration(err_msg)
        self._points = tf.cast(points, self.cdtype)

    @property
    def constellation_type(self):
        """
        "qam" | "pam" | "psk" | "custom" : Constellation type"""
        return self._constellation_type

    @property
    def num_bits_per_symbol(self):
        """
        `int` : Number of bits per symbol"""
        return self._num_bits_per_symbol

    @property
    def num_points(self):
        """
        `int` : Number of constellation points"""
        return self._num_points

    @property
    def normalize(self):
        """
        `bool` : Get/set if the constellation is normalized"""
        return self._normalize

    @normalize.setter
    def normalize(self, value):
        assert isinstance(value, bool), "`normalize` must be boolean"
        self._normalize = value

    @property
    def center(self):
        """
        `bool` : Get/set if the constellation is centered"""
        return self._center

    @center.setter
    def center(self, value):
        assert isinstance(value, bool), "`center` must be boolean"
        self._center = value

    @property
    def points(self):
        """
        [2**num_bits_per_symbol], `tf.complex` : Raw constellation points"""
        return self._points

    def call(self):
        x = self.points
        if self.constellation_type == "custom":
            if self._center:
                x = x - tf.reduce_mean(x)
            if self.normalize:
                energy = tf.reduce_mean(tf.square(tf.abs(x)))
                energy_sqrt = tf.complex(tf.sqrt(energy),
                                        tf.constant(0.,
                                        dtype=self.rdtype))
                x = x / energy_sqrt
        return x

    def show(self, labels=True, figsize=(7,7)):
        """Generate a scatter-plot of the constellation

        Input
        -----
        labels : `bool`, (default `True`)
            If `True`, the symbol indices will be drawn next to each
            constellation point.

        figsize : Two-element Tuple, `float`, (default `(7,7)`)
            Width and height in inches

        Output
        ------
        : matplotlib.figure.Figure
            Handle to matplot figure object
        """
        p = self().numpy()
        maxval = np.max(np.abs(p))*1.05
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(111)
        plt.xlim(-maxval, maxval)
        plt.ylim(-maxval, maxval)
        plt.scatter(np.real(p), np.imag(p))
        ax.set_aspect("equal", adjustable="box")
        plt.xlabel("Real Part")
        plt.ylabel("Imaginary Part")
        plt.grid(True, which="both", axis="both")
        plt.title("Constellation Plot")
        if labels is True:
            for j, pj in enumerate(p):
                plt.annotate(str(j), (np.real(pj), np.imag(pj)))
        return fig

    @staticmethod
    def from_name(modulation, precision=None):
        """Creates a constellation from a modulation name

        Accepted names are "BPSK", "QPSK", "<2^k>PSK" (e.g., "8PSK"),
        "<4^k>QAM" (e.g., "16QAM") and "<2^k>PAM" (e.g., "4PAM").
        Case as well as "-" and "_" are ignored.
        """
        if not isinstance(modulation, str):
            raise InvalidConfiguration("`modulation` must be a string")
        name = re.sub(r"[-_\s]", "", modulation).upper()
        if name == "BPSK":
            return Constellation("pam", 1, precision=precision)
        if name == "QPSK":
            return Constellation("qam", 2, precision=precision)

        match = re.fullmatch(r"(\d+)(PSK|QAM|PAM)", name)
        if match is None:
            raise InvalidConfiguration(f"Unknown modulation '{modulation}'")
        num_points = int(match.group(1))
        num_bits_per_symbol = int(np.log2(num_points)) if num_points > 1 else 0
        if num_points < 2 or 2**num_bits_per_symbol != num_points:
            raise InvalidConfiguration(
                f"Unknown modulation '{modulation}': the number of points "
                "must be a power of two")
        return Constellation(match.group(2).lower(),
                             num_bits_per_symbol,
                             precision=precision)

def get_alphabet(modulation, precision=None):
    """Returns the ordered points of a named modulation alphabet

    Input
    -----
    modulation : `str`
        Modulation name, see :meth:`Constellation.from_name`

    precision : `None` (default) | "single" | "double"
        Precision of the output.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Output
    ------
    : [num_points], `tf.complex`
        Constellation points
    """
    return Constellation.from_name(modulation, precision=precision)()
