#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Definition of mimoinfo Object and Block classes"""

from abc import ABC
from abc import abstractmethod
import tensorflow as tf
import numpy as np
from .config import config, dtypes
from .errors import InvalidConfiguration

class Object(ABC):
    """Abstract class for mimoinfo objects

    Parameters
    ----------
    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations.
        If set to `None`, the default
        :attr:`~mimoinfo.config.Config.precision` is used.
    """

    # pylint: disable=unused-argument
    def __init__(self, *args, precision=None, **kwargs):
        if precision is None:
            self._precision = config.precision
        elif precision in ['single', 'double']:
            self._precision = precision
        else:
            raise InvalidConfiguration(
                                "'precision' must be 'single' or 'double'")

    @property
    def precision(self):
        """
        `str`, "single" | "double" : Precision used for all compuations
        """
        return self._precision

    @property
    def cdtype(self):
        """
        `tf.complex` : Type for complex floating point numbers
        """
        return dtypes[self.precision]['tf']['cdtype']

    @property
    def rdtype(self):
        """
        `tf.float` : Type for real floating point numbers
        """
        return dtypes[self.precision]['tf']['rdtype']

class Block(Object):
    """Abstract class for mimoinfo processing blocks

    Array-like positional and keyword inputs are converted to tensors.
    Floating point and complex tensors are cast to the block's precision
    before :meth:`call` is invoked; integer tensors are left untouched.

    Parameters
    ----------
    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`, the default
        :attr:`~mimoinfo.config.Config.precision` is used.
    """

    @abstractmethod
    def call(self, *args, **kwargs):
        """
        Abstract call method with arbitrary arguments and keyword
        arguments
        """
        raise NotImplementedError("Subclasses must implement this method.")

    def _convert_to_tensor(self, v):
        """Casts floating or complex inputs to the block's precision"""
        if isinstance(v, (list, np.ndarray)):
            v = tf.convert_to_tensor(np.asarray(v))
        if isinstance(v, tf.Tensor):
            if v.dtype.is_floating:
                v = tf.cast(v, self.rdtype)
            elif v.dtype.is_complex:
                v = tf.cast(v, self.cdtype)
        return v

    def __call__(self, *args, **kwargs):
        args = [self._convert_to_tensor(a) for a in args]
        kwargs = {k : self._convert_to_tensor(v) for k, v in kwargs.items()}
        return self.call(*args, **kwargs)
