# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import tensorcore as tc


def test_subtraction_broadcasting():
    a = tc.tensor([[5.0, 6.0], [7.0, 8.0]])
    b = tc.tensor([1.0, 2.0])
    c = a - b
    expected = np.array([[4.0, 4.0], [6.0, 6.0]])
    np.testing.assert_allclose(c.numpy(), expected)


def test_multiplication_broadcasting():
    a = tc.tensor([[1.0, 2.0], [3.0, 4.0]])
    b = tc.tensor(2.0)
    c = a * b
    expected = np.array([[2.0, 4.0], [6.0, 8.0]])
    np.testing.assert_allclose(c.numpy(), expected)


def test_division_broadcasting_and_zero():
    a = tc.tensor([[1.0, 2.0], [3.0, 4.0]])
    b = tc.tensor([0.0, 2.0])
    c = a / b
    result = c.numpy()
    assert np.isinf(result[0, 0])
    np.testing.assert_allclose(result[0, 1], 1.0)


def test_boolean_arithmetic():
    a = tc.tensor([True, False])
    b = tc.tensor([False, True])

    added = a + b
    assert added.dtype == "bool"
    np.testing.assert_array_equal(added.numpy(), np.array([True, True]))

    with pytest.raises(ValueError):
        _ = a - b

    multiplied = a * b
    assert multiplied.dtype == "bool"
    np.testing.assert_array_equal(multiplied.numpy(), np.array([False, False]))

    divided = a / b
    assert divided.dtype == "float32"
    np.testing.assert_allclose(
        divided.numpy(), np.array([np.inf, 0.0], dtype=np.float32)
    )

    with pytest.raises(tc.InvalidArgumentError):
        _ = -a


def test_shape_mismatch_error():
    a = tc.tensor([1.0, 2.0, 3.0])
    b = tc.tensor([[1.0, 2.0]])
    with pytest.raises(ValueError):
        _ = a * b


def test_tensor_tensor_dtype_promotion():
    a = tc.tensor([1.0, 2.0], dtype="float32")
    b = tc.tensor([1, 2], dtype="int32")
    result = a + b
    assert result.dtype == "float32"
    np.testing.assert_allclose(result.numpy(), np.array([2.0, 4.0], dtype=np.float32))

    c = tc.tensor([1, 2], dtype="int32")
    d = tc.tensor([1, 2], dtype="int64")
    promoted = c + d
    assert promoted.dtype == "int64"
    np.testing.assert_array_equal(promoted.numpy(), np.array([2, 4], dtype=np.int64))

    e = tc.tensor([1, 2], dtype="int32")
    f = tc.tensor([1, 2], dtype="int32")
    quotient = e / f
    assert quotient.dtype == "float32"
    np.testing.assert_allclose(quotient.numpy(), np.array([1.0, 1.0], dtype=np.float32))


def test_empty_tensor_arithmetic():
    a = tc.tensor([], dtype="float32").reshape([0])
    b = tc.tensor([], dtype="float32").reshape([0])
    assert (a + b).tolist() == []
    assert (a * b).tolist() == []


def test_nan_propagation():
    a = tc.tensor([np.nan, 1.0])
    b = tc.tensor([1.0, 2.0])
    result = (a + b).numpy()
    assert np.isnan(result[0])
    np.testing.assert_allclose(result[1], 3.0)


def test_inf_minus_inf_nan():
    a = tc.tensor([np.inf])
    b = tc.tensor([np.inf])
    assert np.isnan((a - b).numpy()).all()


def test_python_float_promotes_int_tensor():
    t = tc.tensor([1, 2, 3], dtype="int32")
    result = t + 1.5
    assert result.dtype == "float32"
    np.testing.assert_allclose(
        result.numpy(), np.array([2.5, 3.5, 4.5], dtype=np.float32)
    )


def test_python_int_keeps_integer_dtype():
    t = tc.tensor([1, 2, 3], dtype="int8")
    result = t * 3
    assert result.dtype == "int8"
    assert result.tolist() == [3, 6, 9]


def test_reflected_operators():
    t = tc.tensor([1.0, 2.0, 4.0], dtype="float32")
    assert (1 + t).tolist() == [2.0, 3.0, 5.0]
    assert (10 - t).tolist() == [9.0, 8.0, 6.0]
    assert (2 * t).tolist() == [2.0, 4.0, 8.0]
    assert (8 / t).tolist() == [8.0, 4.0, 2.0]
    assert (-t).tolist() == [-1.0, -2.0, -4.0]


def test_requires_grad_propagates():
    a = tc.tensor([1.0], requires_grad=True)
    b = tc.tensor([2.0])
    assert (a + b).requires_grad
    assert (b * 2).requires_grad is False
    assert (b - a).requires_grad


def test_unsupported_operand_type():
    t = tc.tensor([1.0])
    with pytest.raises(TypeError):
        _ = t + "1"
    with pytest.raises(TypeError):
        _ = t + [1.0]


def test_result_is_new_owned_tensor():
    a = tc.tensor([1, 2])
    b = a + 0
    assert b.data_ptr() != a.data_ptr()
    assert a.tolist() == [1, 2]
