#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Mutual information of MIMO channels with finite-alphabet inputs"""

import logging
import time
import warnings
import numpy as np
import tensorflow as tf

from mimoinfo.block import Block
from mimoinfo.config import config
from mimoinfo.constants import PI, LN2, AVERAGING_METHODS
from mimoinfo.errors import InvalidConfiguration, NumericalUnderflow
from mimoinfo.mapping import Constellation
from mimoinfo.utils import complex_normal, db_to_lin
from .enumeration import enumerator_from_mode, normalize_sampling_mode


class MutualInformationEstimator(Block):
    # pylint: disable=line-too-long
    r"""
    Estimates the mutual information of a MIMO channel with finite-alphabet inputs

    The channel model is

    .. math::
        \mathbf{y} = \mathbf{H}\mathbf{x} + \mathbf{n}

    where :math:`\mathbf{H}\in\mathbb{C}^{N\times M}` is a fixed channel
    matrix, the entries of :math:`\mathbf{x}` are i.i.d. uniform over the
    alphabet :math:`\mathcal{A}`, and
    :math:`\mathbf{n}\sim\mathcal{CN}(\mathbf{0},\mathbf{I}_N)`.
    The output entropy is evaluated by the nested average

    .. math::
        h(\mathbf{y}) = -\mathbb{E}_{\mathbf{x}_0}\mathbb{E}_{\mathbf{n}}
        \ln\left(\frac{1}{K}\sum_{\mathbf{x}}
        \frac{1}{\pi^N}e^{-\lVert\mathbf{H}(\mathbf{x}_0-\mathbf{x})+\mathbf{n}\rVert^2}\right)

    over true vectors :math:`\mathbf{x}_0`, noise realizations and
    :math:`K` candidate vectors :math:`\mathbf{x}`, and the mutual
    information in bits per channel use and transmit dimension is

    .. math::
        I = \frac{h(\mathbf{y}) - N(\ln\pi + 1)}{M\ln 2}.

    With ``sampling="EXHAUSTIVE"``, true and candidate vectors run over all
    :math:`|\mathcal{A}|^M` vectors, so the cost grows as
    :math:`|\mathcal{A}|^{2M}` times ``n_noise_iters``. With
    ``sampling="RANDOMIZED"``, ``n_signal_iters`` true vectors are drawn and,
    for every pair of true vector and noise realization, a fresh independent
    set of ``n_signal_iters`` candidate vectors.

    Parameters
    ----------
    alphabet : `str` | :class:`~mimoinfo.mapping.Constellation` | [num_points], `array_like`
        Modulation name (see :func:`~mimoinfo.mapping.get_alphabet`),
        constellation object, or constellation points

    sampling : "EXHAUSTIVE" (default) | "RANDOMIZED"
        Averaging over the signal vectors

    n_signal_iters : `None` (default) | `int`
        Number of sampled true and candidate vectors.
        Required for "RANDOMIZED", ignored for "EXHAUSTIVE".

    n_noise_iters : `int`, (default 1000)
        Number of noise realizations per true vector

    averaging : "linear" (default) | "logsumexp"
        "linear" averages the likelihoods directly. An average that
        underflows to zero yields `-inf` in the log domain, which is
        propagated into the result and reported with a
        :class:`~mimoinfo.errors.NumericalUnderflow` warning.
        "logsumexp" evaluates the same average in the log domain.

    signal_batch_size : `int`, (default 32)
        Number of true vectors processed jointly

    noise_batch_size : `None` (default) | `int`
        Number of noise realizations processed jointly. If `None`, all
        ``n_noise_iters`` realizations are processed at once.

    rng : `None` (default) | `tf.random.Generator`
        Random stream for noise and signal sampling. If `None`,
        :attr:`~mimoinfo.config.Config.tf_rng` is used.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~mimoinfo.config.Config.precision` is used.

    Input
    -----
    h : [N, M], `tf.complex` | `array_like`
        Channel matrix

    Output
    ------
    : [], `tf.float`
        Mutual information [bit/channel use/transmit dimension]

    Note
    ----
    The tensors processed per step have
    ``signal_batch_size*noise_batch_size*K*N`` complex entries. Reduce
    the batch sizes if memory is exhausted.
    """
    def __init__(self,
                 alphabet,
                 sampling="EXHAUSTIVE",
                 n_signal_iters=None,
                 n_noise_iters=1000,
                 averaging="linear",
                 signal_batch_size=32,
                 noise_batch_size=None,
                 rng=None,
                 precision=None,
                 **kwargs):
        super().__init__(precision=precision, **kwargs)

        self._sampling = normalize_sampling_mode(sampling)
        if self._sampling == "RANDOMIZED":
            _check_positive_int(n_signal_iters, "n_signal_iters")
        _check_positive_int(n_noise_iters, "n_noise_iters")
        _check_positive_int(signal_batch_size, "signal_batch_size")
        if noise_batch_size is not None:
            _check_positive_int(noise_batch_size, "noise_batch_size")
        if averaging not in AVERAGING_METHODS:
            raise InvalidConfiguration(
                f"`averaging` must be one of {AVERAGING_METHODS}")

        self._n_signal_iters = n_signal_iters
        self._n_noise_iters = int(n_noise_iters)
        self._averaging = averaging
        self._signal_batch_size = int(signal_batch_size)
        if noise_batch_size is None:
            self._noise_batch_size = self._n_noise_iters
        else:
            self._noise_batch_size = int(noise_batch_size)
        self._rng = rng
        self._alphabet = self._alphabet_points(alphabet)
        self._last_elapsed_minutes = None
        self._last_num_underflows = None

    def _alphabet_points(self, alphabet):
        if isinstance(alphabet, str):
            alphabet = Constellation.from_name(alphabet,
                                               precision=self.precision)
        if isinstance(alphabet, Constellation):
            alphabet = alphabet()
        if isinstance(alphabet, tf.Tensor):
            if not alphabet.dtype.is_complex:
                alphabet = tf.cast(alphabet, self.rdtype)
        else:
            alphabet = np.asarray(alphabet, dtype=np.complex128)
        points = tf.reshape(tf.cast(alphabet, self.cdtype), [-1])
        if points.shape[0] == 0:
            raise InvalidConfiguration("The alphabet must not be empty")
        return points

    @property
    def alphabet(self):
        """
        [num_points], `tf.complex` : Constellation points"""
        return self._alphabet

    @property
    def sampling(self):
        """
        "EXHAUSTIVE" | "RANDOMIZED" : Sampling mode"""
        return self._sampling

    @property
    def n_noise_iters(self):
        """
        `int` : Number of noise realizations per true vector"""
        return self._n_noise_iters

    @property
    def averaging(self):
        """
        "linear" | "logsumexp" : Evaluation of the inner average"""
        return self._averaging

    @property
    def rng(self):
        """
        `tf.random.Generator` : Random stream used by the next call"""
        if self._rng is None:
            return config.tf_rng
        return self._rng

    @property
    def last_elapsed_minutes(self):
        """
        `None` | `float` : Process time of the last call [min]"""
        return self._last_elapsed_minutes

    @property
    def last_num_underflows(self):
        """
        `None` | `int` : Number of inner averages of the last call that
        underflowed to zero"""
        return self._last_num_underflows

    def _log_likelihood_avg(self, d):
        """Computes ln((1/K) sum_k exp(-d_k)) over the last axis"""
        if self._averaging == "logsumexp":
            k = tf.cast(tf.shape(d)[-1], self.rdtype)
            return tf.reduce_logsumexp(-d, axis=-1) - tf.math.log(k)
        return tf.math.log(tf.reduce_mean(tf.exp(-d), axis=-1))

    def call(self, h):
        if h.shape.rank != 2:
            raise InvalidConfiguration("`h` must be a matrix of shape [N, M]")
        num_rx, num_tx = h.shape
        if num_rx == 0 or num_tx == 0:
            raise InvalidConfiguration(
                "`h` must have positive dimensions")
        if not h.dtype.is_complex:
            h = tf.cast(h, self.rdtype)
        h = tf.cast(h, self.cdtype)

        enumerator = enumerator_from_mode(self._sampling,
                                          num_tx,
                                          self._alphabet.shape[0],
                                          self._n_signal_iters)
        rng = self.rng
        logging.info("Estimating MI: N=%d, M=%d, |A|=%d, %s sampling, "
                     "%d true x %d noise x %d candidate vectors",
                     num_rx, num_tx, self._alphabet.shape[0], self._sampling,
                     enumerator.num_samples, self._n_noise_iters,
                     enumerator.num_samples)

        time_begin = time.process_time()

        # Constant part of the log-likelihood, ln(1/pi^N)
        log_norm = -tf.cast(num_rx*np.log(PI), self.rdtype)

        sum_over_true_signal = tf.zeros([], self.rdtype)
        num_underflows = 0
        for ind0 in enumerator.batches(self._signal_batch_size, rng):
            # [b, N]
            hx0 = tf.linalg.matvec(h, tf.gather(self._alphabet, ind0))
            batch_size = ind0.shape[0]

            sum_over_noise = tf.zeros([batch_size], self.rdtype)
            for start in range(0, self._n_noise_iters,
                               self._noise_batch_size):
                num_noise = min(self._noise_batch_size,
                                self._n_noise_iters - start)
                # [b, n, N]
                n = complex_normal([batch_size, num_noise, num_rx],
                                   precision=self.precision, rng=rng)

                # [b, n, K, M] or [K, M]
                ind = enumerator.sample([batch_size, num_noise], rng)
                hx = tf.linalg.matvec(h, tf.gather(self._alphabet, ind))

                # H(x0-x) + n : [b, n, K, N]
                r = hx0[:, tf.newaxis, tf.newaxis] \
                    + n[:, :, tf.newaxis] - hx
                d = tf.reduce_sum(tf.math.real(r)**2 + tf.math.imag(r)**2,
                                  axis=-1)

                # ln sum_over_signal : [b, n]
                log_p = self._log_likelihood_avg(d) + log_norm
                num_underflows += int(tf.reduce_sum(
                            tf.cast(tf.math.is_inf(log_p), tf.int32)))

                sum_over_noise += tf.reduce_sum(log_p, axis=-1)

            sum_over_noise /= tf.cast(self._n_noise_iters, self.rdtype)
            sum_over_true_signal -= tf.reduce_sum(sum_over_noise)
            logging.debug("Processed %d true vectors", batch_size)

        entropy = sum_over_true_signal \
                  / tf.cast(enumerator.num_samples, self.rdtype)
        entropy_noise = tf.cast(num_rx*(np.log(PI) + 1.), self.rdtype)
        mi = (entropy - entropy_noise) / tf.cast(num_tx*LN2, self.rdtype)

        self._last_elapsed_minutes = (time.process_time() - time_begin)/60
        self._last_num_underflows = num_underflows

        if num_underflows > 0:
            warnings.warn(f"{num_underflows} inner likelihood average(s) "
                          "underflowed to zero. The estimate is not finite. "
                          "Use averaging='logsumexp' or a higher precision.",
                          NumericalUnderflow)
        logging.info("MI = %.6f bit/cu/dim (%.4f min)",
                     float(mi), self._last_elapsed_minutes)
        return mi


def _check_positive_int(value, name):
    if value is None or int(value) != value or value < 1:
        raise InvalidConfiguration(f"`{name}` must be a positive integer")


def estimate_mutual_information(h,
                                alphabet,
                                sampling,
                                n_signal_iters,
                                n_noise_iters,
                                rng=None,
                                **kwargs):
    r"""Estimates the mutual information for a given alphabet

    Input
    -----
    h : [N, M], `array_like`
        Channel matrix

    alphabet : [num_points], `array_like` | :class:`~mimoinfo.mapping.Constellation`
        Constellation points

    sampling : "EXHAUSTIVE" | "RANDOMIZED"
        Averaging over the signal vectors

    n_signal_iters : `None` | `int`
        Number of sampled signal vectors for "RANDOMIZED"

    n_noise_iters : `int`
        Number of noise realizations per true vector

    rng : `None` (default) | `tf.random.Generator`
        Random stream

    kwargs :
        Passed to :class:`~mimoinfo.mi.MutualInformationEstimator`

    Output
    ------
    mi : `float`
        Mutual information [bit/channel use/transmit dimension]

    elapsed : `float`
        Process time [min]
    """
    if isinstance(alphabet, str):
        raise InvalidConfiguration(
            "Use `mi_mimo_true` to pass a modulation name")
    estimator = MutualInformationEstimator(alphabet,
                                           sampling=sampling,
                                           n_signal_iters=n_signal_iters,
                                           n_noise_iters=n_noise_iters,
                                           rng=rng,
                                           **kwargs)
    mi = estimator(h)
    return float(mi), estimator.last_elapsed_minutes


def mi_mimo_true(h,
                 modulation,
                 sampling,
                 n_signal_iters,
                 n_noise_iters,
                 **kwargs):
    r"""Estimates the mutual information for a named modulation

    Input
    -----
    h : [N, M], `array_like`
        Channel matrix

    modulation : `str`
        Modulation name, e.g., "BPSK", "QPSK", "16QAM"

    sampling : "EXHAUSTIVE" | "RANDOMIZED"
        Averaging over the signal vectors

    n_signal_iters : `None` | `int`
        Number of sampled signal vectors for "RANDOMIZED"

    n_noise_iters : `int`
        Number of noise realizations per true vector

    kwargs :
        Passed to :class:`~mimoinfo.mi.MutualInformationEstimator`

    Output
    ------
    mi : `float`
        Mutual information [bit/channel use/transmit dimension]

    elapsed : `float`
        Process time [min]

    Example
    -------

    .. code-block:: Python

        from mimoinfo import config
        from mimoinfo.mi import mi_mimo_true

        config.seed = 1
        mi, t = mi_mimo_true([[1., 0.5], [0.2, 1.]], "QPSK", "EXHAUSTIVE",
                             None, 2000, precision="double")
    """
    if not isinstance(modulation, str):
        raise InvalidConfiguration("`modulation` must be a string")
    estimator = MutualInformationEstimator(modulation,
                                           sampling=sampling,
                                           n_signal_iters=n_signal_iters,
                                           n_noise_iters=n_noise_iters,
                                           **kwargs)
    mi = estimator(h)
    return float(mi), estimator.last_elapsed_minutes


def mi_vs_snr(h,
              modulation,
              snr_db,
              sampling,
              n_signal_iters,
              n_noise_iters,
              **kwargs):
    r"""Evaluates the mutual information over a range of SNRs

    For every SNR point, the estimator is run on the scaled channel
    :math:`\sqrt{\text{SNR}}\,\mathbf{H}`, which is equivalent to a noise
    variance of :math:`1/\text{SNR}`.

    Input
    -----
    h : [N, M], `array_like`
        Channel matrix

    modulation : `str` | :class:`~mimoinfo.mapping.Constellation` | [num_points], `array_like`
        Signal alphabet

    snr_db : [num_snr], `array_like`
        SNR points [dB]

    sampling : "EXHAUSTIVE" | "RANDOMIZED"
        Averaging over the signal vectors

    n_signal_iters : `None` | `int`
        Number of sampled signal vectors for "RANDOMIZED"

    n_noise_iters : `int`
        Number of noise realizations per true vector

    kwargs :
        Passed to :class:`~mimoinfo.mi.MutualInformationEstimator`

    Output
    ------
    mi : [num_snr], `np.float64`
        Mutual information [bit/channel use/transmit dimension]

    elapsed : [num_snr], `np.float64`
        Process time per SNR point [min]
    """
    estimator = MutualInformationEstimator(modulation,
                                           sampling=sampling,
                                           n_signal_iters=n_signal_iters,
                                           n_noise_iters=n_noise_iters,
                                           **kwargs)
    h = np.asarray(h, dtype=np.complex128)
    snr_db = np.atleast_1d(np.asarray(snr_db, dtype=np.float64))

    mi = np.zeros(snr_db.shape, np.float64)
    elapsed = np.zeros(snr_db.shape, np.float64)
    for i, s in enumerate(snr_db):
        gain = float(tf.sqrt(db_to_lin(s, precision="double")))
        mi[i] = float(estimator(h*gain))
        elapsed[i] = estimator.last_elapsed_minutes
        logging.info("SNR = %.2f dB: MI = %.6f bit/cu/dim", s, mi[i])
    return mi, elapsed
