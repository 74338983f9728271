#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#

import unittest
import numpy as np
import tensorflow as tf
from mimoinfo.config import dtypes
from mimoinfo.errors import InvalidConfiguration
from mimoinfo.mapping import pam_gray, pam, qam, psk, Constellation,\
                             get_alphabet

def bpsk(b):
    return 1-2*b[0]

def pam4(b):
    return (1-2*b[0])*(2-(1-2*b[1]))

def pam8(b):
    return (1-2*b[0])*(4-(1-2*b[1])*(2-(1-2*b[2])))

def pam16(b):
    return (1-2*b[0])*(8-(1-2*b[1])*(4-(1-2*b[2])*(2-(1-2*b[3]))))

class TestPAMGray(unittest.TestCase):
    def test_pam(self):
        """Test against 5G formulars"""
        for n, comp in enumerate([bpsk, pam4, pam8, pam16]):
            for i in range(0, 2**n):
                b = np.array(list(np.binary_repr(i,n+1)), dtype=np.int32)
                self.assertEqual(pam_gray(b), comp(b))

class TestPAM(unittest.TestCase):
    def test_pam(self):
        """Test constellations against 5G formulars"""
        for n, comp in enumerate([bpsk, pam4, pam8, pam16]):
            num_bits_per_symbol = n+1
            c = pam(num_bits_per_symbol, normalize=False)
            for i in range(0, 2**num_bits_per_symbol):
                b = np.array(list(np.binary_repr(i,num_bits_per_symbol)), dtype=np.int32)
                self.assertTrue(np.equal(c[i], comp(b)))

    def test_normalization(self):
        """Test that constellations have unit energy"""
        for num_bits_per_symbol in np.arange(1,11):
            c = pam(num_bits_per_symbol, normalize=True)
            self.assertAlmostEqual(1, np.mean(np.abs(c)**2), 4)

    def test_bpsk(self):
        """1-bit PAM is antipodal signaling"""
        c = pam(1)
        self.assertTrue(np.allclose(c, [1, -1]))

class TestQAM(unittest.TestCase):
    def test_normalization(self):
        """Test that constellations have unit energy"""
        for num_bits_per_symbol in [2, 4, 6, 8, 10]:
            c = qam(num_bits_per_symbol, normalize=True)
            self.assertAlmostEqual(1, np.mean(np.abs(c)**2), 4)

    def test_qam(self):
        """Test constellations against 5G formulars"""
        for n, pam_ in enumerate([bpsk, pam4, pam8, pam16]):
            num_bits_per_symbol = 2*(n+1)
            c = qam(num_bits_per_symbol, normalize=False)
            for i in range(0, 2**num_bits_per_symbol):
                b = np.array(list(np.binary_repr(i,2*(n+1))), dtype=np.int32)
                self.assertTrue(np.equal(c[i], pam_(b[0::2]) + 1j*pam_(b[1::2])))

    def test_odd_bits(self):
        with self.assertRaises(InvalidConfiguration):
            qam(3)

class TestPSK(unittest.TestCase):
    def test_psk(self):
        """Points lie on the unit circle in natural order"""
        for num_bits_per_symbol in [1, 2, 3, 4]:
            c = psk(num_bits_per_symbol, precision="double")
            m = 2**num_bits_per_symbol
            self.assertEqual(c.shape, (m,))
            self.assertTrue(np.allclose(np.abs(c), 1))
            phi = np.mod(np.angle(c), 2*np.pi)
            phi[np.isclose(phi, 2*np.pi)] = 0
            self.assertTrue(np.allclose(phi, 2*np.pi*np.arange(m)/m))

    def test_precision(self):
        for precision in ["single", "double"]:
            c = psk(3, precision=precision)
            self.assertEqual(c.dtype, dtypes[precision]["np"]["cdtype"])

class TestConstellation(unittest.TestCase):
    def test_assertions(self):
        with self.assertRaises(InvalidConfiguration):
            Constellation("custom2", 2)
        with self.assertRaises(InvalidConfiguration):
            Constellation("custom", 0)
        with self.assertRaises(InvalidConfiguration):
            Constellation("qam", 0)
        with self.assertRaises(InvalidConfiguration):
            Constellation("qam", 3)
        with self.assertRaises(InvalidConfiguration):
            Constellation("qam", 2.1)
        with self.assertRaises(InvalidConfiguration):
            Constellation("custom", 3.7)
        with self.assertRaises(InvalidConfiguration):
            num_bits_per_symbol = 3
            points = np.zeros([2**num_bits_per_symbol-1])
            Constellation("custom", num_bits_per_symbol, points=points)
        with self.assertRaises(InvalidConfiguration):
            Constellation("custom", 2)
        with self.assertRaises(InvalidConfiguration):
            Constellation("qam", 2, points=np.ones([4]))

    def test_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Constellation("qam", 3)

    def test_outputs(self):
        """Check that the output has the right shape and dtype"""
        for constellation_type in ["qam", "pam", "psk"]:
            for num_bits_per_symbol in [2, 4]:
                for precision in ["single", "double"]:
                    c = Constellation(constellation_type,
                                      num_bits_per_symbol,
                                      precision=precision)
                    x = c()
                    self.assertEqual(x.shape, [2**num_bits_per_symbol])
                    self.assertEqual(x.dtype,
                                     dtypes[precision]["tf"]["cdtype"])
                    self.assertEqual(c.num_points, 2**num_bits_per_symbol)

    def test_custom_normalize_center(self):
        points = np.array([1.+1j, 3.+1j, 1.+3j, 3.+3j])
        c = Constellation("custom", 2, points=points,
                          normalize=True, center=True, precision="double")
        x = c().numpy()
        self.assertAlmostEqual(0, np.abs(np.mean(x)))
        self.assertAlmostEqual(1, np.mean(np.abs(x)**2))
        # Raw points are kept
        self.assertTrue(np.allclose(c.points.numpy(), points))

    def test_custom_real_points(self):
        c = Constellation("custom", 1, points=[2., -2.])
        self.assertTrue(c().dtype.is_complex)
        self.assertTrue(np.allclose(c().numpy(), [2, -2]))

class TestGetAlphabet(unittest.TestCase):
    def test_names(self):
        cases = {"BPSK": pam(1, precision="double"),
                 "bpsk": pam(1, precision="double"),
                 "QPSK": qam(2, precision="double"),
                 "4QAM": qam(2, precision="double"),
                 "16-QAM": qam(4, precision="double"),
                 "64qam": qam(6, precision="double"),
                 "8PSK": psk(3, precision="double"),
                 "16_psk": psk(4, precision="double"),
                 "4PAM": pam(2, precision="double")}
        for name, ref in cases.items():
            a = get_alphabet(name, precision="double")
            self.assertTrue(np.allclose(a.numpy(), ref), msg=name)

    def test_deterministic(self):
        a = get_alphabet("16QAM")
        b = get_alphabet("16QAM")
        self.assertTrue(np.array_equal(a.numpy(), b.numpy()))

    def test_unknown(self):
        for name in ["", "QAM", "3PSK", "8QAM", "1PSK", "2QAM", "OOK", 4]:
            with self.assertRaises(InvalidConfiguration, msg=str(name)):
                get_alphabet(name)

    def test_from_name(self):
        c = Constellation.from_name("8PSK")
        self.assertEqual(c.constellation_type, "psk")
        self.assertEqual(c.num_bits_per_symbol, 3)
        self.assertEqual(tf.shape(c()).numpy()[0], 8)
