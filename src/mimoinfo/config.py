#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Global mimoinfo configuration"""

import random
import numpy as np
import tensorflow as tf

# Mapping from precision to dtypes
dtypes = {
    'single' : {
        'tf' : {
            'cdtype' : tf.complex64,
            'rdtype' : tf.float32
        },
        'np' : {
            'cdtype' : np.complex64,
            'rdtype' : np.float32
        }
    },
    'double' : {
        'tf' : {
            'cdtype' : tf.complex128,
            'rdtype' : tf.float64
        },
        'np' : {
            'cdtype' : np.complex128,
            'rdtype' : np.float64
        }
    }
}

class Config():
    """mimoinfo Configuration Class

    This singleton holds the default precision and the random number
    generators used whenever no explicit generator is passed to an
    estimator. It is instantiated immediately and its properties can be
    accessed as :code:`mimoinfo.config.desired_property`.
    """

    # This object is a singleton
    _instance = None
    def __new__(cls):
        if cls._instance is None:
            instance = object.__new__(cls)
            cls._instance = instance
        return cls._instance

    def __init__(self):
        self._seed = None
        self._py_rng = None
        self._np_rng = None
        self._tf_rng = None
        self._precision = None

        # Set default properties
        self.precision = 'single'

    @property
    def py_rng(self):
        """
        `random.Random` : Python random number generator
        """
        if self._py_rng is None:
            self._py_rng = random.Random()
        return self._py_rng

    @property
    def np_rng(self):
        """
        `np.random.Generator` : NumPy random number generator
        """
        if self._np_rng is None:
            self._np_rng = np.random.default_rng()
        return self._np_rng

    @property
    def tf_rng(self):
        """
        `tf.random.Generator` : TensorFlow random number generator

        This is the default stream for noise and symbol sampling.

        .. code-block:: python

            from mimoinfo import config
            config.seed = 42 # Set seed for deterministic results

            # Independent streams, e.g., one per worker
            rngs = config.tf_rng.split(4)
        """
        if self._tf_rng  is None:
            self._tf_rng = tf.random.Generator.from_non_deterministic_state()
        return self._tf_rng

    @property
    def seed(self):
        """
        `None` (default) | `int` : Get/set seed for all random number generators

        It defaults to `None` which implies that a random
        seed will be used and results are non-deterministic.

        .. code-block:: python

            # This code will lead to deterministic results
            from mimoinfo import config, mi_mimo_true
            config.seed = 42
            print(mi_mimo_true([[1.]], "BPSK", "EXHAUSTIVE", 1, 1000)[0])
        """
        return self._seed

    @seed.setter
    def seed(self, seed):
        # Store seed
        if seed is not None:
            seed = int(seed)
        self._seed = seed

        #TensorFlow
        if seed is None:
            self._tf_rng = tf.random.Generator.from_non_deterministic_state()
        else:
            self.tf_rng.reset_from_seed(seed)

        # Python
        self.py_rng.seed(seed)

        # NumPy
        self._np_rng = np.random.default_rng(seed)

    @property
    def precision(self):
        """
        "single" (default) | "double" : Default precision used for all computations

        The "single" option represents real-valued floating-point numbers
        using 32 bits, whereas the "double" option uses 64 bits.
        Note that the inner likelihood average underflows much earlier
        in single precision.
        """
        return self._precision

    @precision.setter
    def precision(self, v):
        if v not in ["single", "double"]:
            raise ValueError("Precision must be ``single`` or ``double``.")
        self._precision = v

    @property
    def np_rdtype(self):
        """
        `np.dtype` : Default NumPy dtype for real floating point numbers
        """
        return dtypes[self.precision]['np']['rdtype']

    @property
    def np_cdtype(self):
        """
        `np.dtype` : Default NumPy dtype for complex floating point numbers
        """
        return dtypes[self.precision]['np']['cdtype']

    @property
    def tf_rdtype(self):
        """
        `tf.dtype` : Default TensorFlow dtype for real floating point numbers
        """
        return dtypes[self.precision]['tf']['rdtype']

    @property
    def tf_cdtype(self):
        """
        `tf.dtype` : Default TensorFlow dtype for complex floating point numbers
        """
        return dtypes[self.precision]['tf']['cdtype']

config = Config()
