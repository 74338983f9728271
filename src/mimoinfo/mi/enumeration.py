#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Enumeration and sampling of transmitted symbol index vectors"""

from abc import ABC, abstractmethod
import tensorflow as tf

from mimoinfo.constants import SAMPLING_MODES
from mimoinfo.errors import InvalidConfiguration
from mimoinfo.utils import decode_index, enumerate_indices, random_indices


class SymbolVectorEnumerator(ABC):
    r"""Abstract source of symbol index vectors

    An enumerator produces sets of ``num_samples`` index vectors of length
    ``num_streams`` with entries in ``[0, num_points)``. The estimators use
    the same enumerator for the true transmitted vectors and for the
    candidate vectors, and ``num_samples`` is the count by which the
    corresponding averages are normalized.

    Parameters
    ----------
    num_streams : `int`
        Number of transmit dimensions :math:`M`

    num_points : `int`
        Alphabet size :math:`|\mathcal{A}|`
    """
    def __init__(self, num_streams, num_points):
        if int(num_streams) != num_streams or num_streams < 1:
            raise InvalidConfiguration(
                "`num_streams` must be a positive integer")
        if int(num_points) != num_points or num_points < 1:
            raise InvalidConfiguration("The alphabet must not be empty")
        self._num_streams = int(num_streams)
        self._num_points = int(num_points)

    @property
    def num_streams(self):
        """
        `int` : Length of the index vectors"""
        return self._num_streams

    @property
    def num_points(self):
        """
        `int` : Number of values per entry"""
        return self._num_points

    @property
    @abstractmethod
    def num_samples(self):
        """
        `int` : Number of index vectors per set"""

    @abstractmethod
    def sample(self, batch_shape=(), rng=None):
        """Returns a set of index vectors for each entry of ``batch_shape``

        Input
        -----
        batch_shape : `list` | `tuple`, (default `()`)
            Number of independent sets to produce

        rng : `None` (default) | `tf.random.Generator`
            Random stream

        Output
        ------
        : ``batch_shape`` + [num_samples, num_streams], `tf.int32`
            Index vectors. Deterministic enumerators may return a tensor
            of shape [num_samples, num_streams] that broadcasts against
            ``batch_shape``.
        """

    @abstractmethod
    def _batch(self, start, size, rng):
        """Returns the outer vectors ``start, ..., start+size-1``"""

    def batches(self, batch_size, rng=None):
        """Yields all ``num_samples`` index vectors in chunks

        Input
        -----
        batch_size : `int`
            Maximum number of vectors per chunk

        rng : `None` (default) | `tf.random.Generator`
            Random stream

        Output
        ------
        : [<=batch_size, num_streams], `tf.int32`
            Chunks of index vectors which together contain exactly
            ``num_samples`` vectors
        """
        if int(batch_size) != batch_size or batch_size < 1:
            raise InvalidConfiguration(
                "`batch_size` must be a positive integer")
        batch_size = int(batch_size)
        for start in range(0, self.num_samples, batch_size):
            size = min(batch_size, self.num_samples - start)
            yield self._batch(start, size, rng)


class FiniteEnumerator(SymbolVectorEnumerator):
    r"""Exhaustive enumeration of all index vectors

    All ``num_points**num_streams`` vectors are produced exactly once, in
    the order of a running counter decoded by
    :func:`~mimoinfo.utils.decode_index`. Averaging over this set is
    exact, but its size and thus the cost of the estimators grow
    exponentially with ``num_streams``.

    Parameters
    ----------
    num_streams : `int`
        Number of transmit dimensions :math:`M`

    num_points : `int`
        Alphabet size :math:`|\mathcal{A}|`
    """
    def __init__(self, num_streams, num_points):
        super().__init__(num_streams, num_points)
        self._num_samples = self.num_points**self.num_streams
        self._all = None

    @property
    def num_samples(self):
        return self._num_samples

    @property
    def indices(self):
        """
        [num_samples, num_streams], `tf.int32` : All index vectors"""
        if self._all is None:
            if self.num_points == 1:
                self._all = tf.zeros([1, self.num_streams], tf.int32)
            else:
                self._all = enumerate_indices(self.num_streams,
                                              self.num_points)
        return self._all

    # pylint: disable=unused-argument
    def sample(self, batch_shape=(), rng=None):
        return self.indices

    def _batch(self, start, size, rng):
        if self.num_points == 1:
            return tf.zeros([size, self.num_streams], tf.int32)
        idx = tf.range(start, start+size, dtype=tf.int64)
        return decode_index(idx, self.num_streams, self.num_points)


class RandomSampler(SymbolVectorEnumerator):
    r"""Monte-Carlo sampling of index vectors

    Every call draws ``num_samples`` i.i.d. vectors whose entries are
    uniformly distributed over ``[0, num_points)``.

    Parameters
    ----------
    num_streams : `int`
        Number of transmit dimensions :math:`M`

    num_points : `int`
        Alphabet size :math:`|\mathcal{A}|`

    num_samples : `int`
        Number of vectors per set
    """
    def __init__(self, num_streams, num_points, num_samples):
        super().__init__(num_streams, num_points)
        if num_samples is None or int(num_samples) != num_samples \
                or num_samples < 1:
            raise InvalidConfiguration(
                "The number of signal iterations must be a positive integer")
        self._num_samples = int(num_samples)

    @property
    def num_samples(self):
        return self._num_samples

    def sample(self, batch_shape=(), rng=None):
        shape = list(batch_shape) + [self.num_samples, self.num_streams]
        return random_indices(shape, self.num_points, rng=rng)

    def _batch(self, start, size, rng):
        return random_indices([size, self.num_streams], self.num_points,
                              rng=rng)


def enumerator_from_mode(mode, num_streams, num_points, n_signal_iters=None):
    """Creates the enumerator for a sampling mode

    Input
    -----
    mode : "EXHAUSTIVE" | "RANDOMIZED"
        Sampling mode (case-insensitive)

    num_streams : `int`
        Number of transmit dimensions

    num_points : `int`
        Alphabet size

    n_signal_iters : `None` (default) | `int`
        Number of sampled vectors. Only used for "RANDOMIZED".

    Output
    ------
    : :class:`~mimoinfo.mi.SymbolVectorEnumerator`
        :class:`~mimoinfo.mi.FiniteEnumerator` or
        :class:`~mimoinfo.mi.RandomSampler`
    """
    mode = normalize_sampling_mode(mode)
    if mode == "EXHAUSTIVE":
        return FiniteEnumerator(num_streams, num_points)
    return RandomSampler(num_streams, num_points, n_signal_iters)


def normalize_sampling_mode(mode):
    """Returns the upper-case sampling mode or raises
    :class:`~mimoinfo.errors.InvalidConfiguration`"""
    if not isinstance(mode, str) or mode.upper() not in SAMPLING_MODES:
        raise InvalidConfiguration(
            f"Unknown sampling mode '{mode}'. " \
            f"Must be one of {SAMPLING_MODES}")
    return mode.upper()
