# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

import tensorcore as tc
from tensorcore.testing import almost_equal, assert_tensor_options, exactly_equal


def test_exactly_equal_converts_to_value_type():
    assert exactly_equal(tc.tensor(3), 3)
    assert exactly_equal(tc.tensor(3.75), 3.75)
    assert exactly_equal(tc.tensor(3.75), 3)
    assert not exactly_equal(tc.tensor(3.75), 4)
    assert exactly_equal(tc.tensor(True), True)


def test_almost_equal_tolerance():
    t = tc.tensor(1.0, dtype="float32")
    assert almost_equal(t, 1.00005)
    assert not almost_equal(t, 1.001)
    assert almost_equal(t, 1.001, tolerance=1e-2)


def test_helpers_require_single_element():
    with pytest.raises(tc.InvalidArgumentError):
        exactly_equal(tc.tensor([1, 2]), 1)
    with pytest.raises(tc.InvalidArgumentError):
        almost_equal(tc.tensor([1.0, 2.0]), 1.0)


def test_assert_tensor_options():
    t = tc.tensor([1.0], dtype="float16")
    assert_tensor_options(t, "cpu", "half", "strided")
    assert_tensor_options(t, tc.cpu(), tc.float16)
    with pytest.raises(AssertionError):
        assert_tensor_options(t, "cpu", "float32")
    with pytest.raises(AssertionError):
        assert_tensor_options(t, "cpu", "float16", "sparse")
