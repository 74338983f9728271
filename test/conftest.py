#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
import pytest

def pytest_addoption(parser):
    parser.addoption("--gpu", action="store", default=None, help="GPU to be used. Defaults to CPU execution.")
    parser.addoption("--seed", action="store", default=42, help="Set mimoinfo random seed. Defaults to 42.")

def pytest_configure(config):

    import os
    os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3'

    gpu = config.getoption("gpu")
    if gpu is None:
        os.environ['CUDA_VISIBLE_DEVICES'] = ""
    else:
        os.environ['CUDA_VISIBLE_DEVICES'] = f"{gpu}"
        import tensorflow as tf
        gpus = tf.config.list_physical_devices('GPU')
        if gpus:
            tf.config.experimental.set_memory_growth(gpus[0], True)

@pytest.fixture(scope="class", autouse=True)
def set_class_random_seed(request):
    """Set random seed for all test classes"""
    import mimoinfo
    mimoinfo.config.seed = request.config.getoption("seed")

@pytest.fixture(scope="function", autouse=True)
def set_function_random_seed(request):
    """Set random seed for every individual test"""
    import mimoinfo
    mimoinfo.config.seed = request.config.getoption("seed")
    mimoinfo.config.precision = "single"
