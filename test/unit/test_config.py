#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#

import unittest
import numpy as np
import tensorflow as tf

from mimoinfo import config, Block, InvalidConfiguration
from mimoinfo.config import Config

class TestConfig(unittest.TestCase):
    def test_singleton(self):
        self.assertIs(Config(), config)

    def test_seed(self):
        """Setting the seed makes all generators deterministic"""
        config.seed = 12
        a = (config.tf_rng.normal([5]).numpy(),
             config.np_rng.normal(size=[5]),
             config.py_rng.random())
        config.seed = 12
        b = (config.tf_rng.normal([5]).numpy(),
             config.np_rng.normal(size=[5]),
             config.py_rng.random())
        self.assertTrue(np.array_equal(a[0], b[0]))
        self.assertTrue(np.array_equal(a[1], b[1]))
        self.assertEqual(a[2], b[2])
        self.assertEqual(config.seed, 12)

    def test_precision(self):
        config.precision = "double"
        self.assertEqual(config.tf_rdtype, tf.float64)
        self.assertEqual(config.np_cdtype, np.complex128)
        config.precision = "single"
        self.assertEqual(config.tf_cdtype, tf.complex64)
        with self.assertRaises(ValueError):
            config.precision = "half"

class TestBlock(unittest.TestCase):
    def test_casting(self):
        """Inputs are cast to the block precision"""
        class Identity(Block):
            def call(self, *args):
                return args

        for precision in ["single", "double"]:
            f = Identity(precision=precision)
            x, y, z = f(np.ones([2]), [1+1j, 2.], tf.constant([1, 2]))
            self.assertEqual(x.dtype, f.rdtype)
            self.assertEqual(y.dtype, f.cdtype)
            self.assertEqual(z.dtype, tf.int32)

    def test_precision(self):
        class Identity(Block):
            def call(self, x):
                return x
        with self.assertRaises(InvalidConfiguration):
            Identity(precision="half")
