# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import logging

import numpy as np
import pytest

import tensorcore as tc
from tensorcore import options
from tensorcore.testing import assert_tensor_options


def test_to_respects_requires_grad():
    t = tc.tensor([1], dtype="float32", requires_grad=True)
    assert t.requires_grad

    t = t.to("float64")
    assert t.requires_grad

    t = tc.tensor([1], dtype="float32", requires_grad=False)
    assert not t.requires_grad

    t = t.to("float64")
    assert not t.requires_grad


def test_to_does_not_copy_when_options_are_all_the_same():
    t = tc.tensor(123, dtype="float32")
    same = t.to(dtype="float32", device="cpu")
    assert same is not t
    assert same.data_ptr() == t.data_ptr()
    assert same.untyped_storage() is t.untyped_storage()


def test_aliased_storage_cannot_be_written():
    t = tc.tensor([1.0, 2.0])
    same = t.to("float64")
    data = t.untyped_storage().data
    assert not data.flags.writeable
    with pytest.raises(ValueError):
        data[0] = -5.0
    assert same.tolist() == [1.0, 2.0]


def test_to_without_arguments_aliases():
    t = tc.tensor([1, 2, 3])
    assert t.to().data_ptr() == t.data_ptr()
    assert t.astype("int32").data_ptr() == t.data_ptr()


def test_to_copy_flag_forces_new_storage():
    t = tc.tensor([1, 2, 3])
    copied = t.to("int32", copy=True)
    assert copied.data_ptr() != t.data_ptr()
    assert copied.tolist() == [1, 2, 3]


def test_to_with_options_record():
    t = tc.tensor([1.5, 2.5], dtype="float32")
    converted = t.to(options.dtype("int64"))
    assert converted.dtype == "int64"
    assert converted.tolist() == [1, 2]
    merged = t.to(options=tc.TensorOptions(dtype="float64", device="cpu"))
    assert_tensor_options(merged, tc.cpu(), "float64", "strided")


def test_to_rejects_requires_grad_in_options():
    t = tc.tensor([1.0])
    with pytest.raises(tc.InvalidArgumentError):
        t.to(options.requires_grad(True))


def test_to_sparse_layout_unsupported():
    t = tc.tensor([1.0, 2.0])
    with pytest.raises(tc.UnsupportedOperationError):
        t.to(layout=tc.sparse)
    with pytest.raises(tc.InvalidArgumentError):
        t.to(layout="blocked")


@pytest.mark.parametrize(
    "args, kwargs",
    [
        (("float32",), {"dtype": "float64"}),
        (("cpu",), {"device": "cpu"}),
        ((tc.Device("cpu"),), {"device": "cpu"}),
    ],
)
def test_to_duplicate_specifications(args, kwargs):
    t = tc.tensor([1.0])
    with pytest.raises(TypeError):
        t.to(*args, **kwargs)


def test_to_unknown_string_is_device_error():
    t = tc.tensor([1.0])
    with pytest.raises(tc.InvalidArgumentError):
        t.to("tpu")


def test_to_unavailable_device_raises():
    t = tc.tensor([1.0])
    assert tc.device_count() == 0
    with pytest.raises(tc.DeviceError):
        t.to("cuda")
    with pytest.raises(tc.DeviceError):
        t.cuda()


def test_to_device(accelerators):
    t = tc.tensor([1, 2, 3], dtype="float32", requires_grad=True)

    on_0 = t.to(tc.Device("cuda", 0))
    assert_tensor_options(on_0, "cuda:0", "float32")
    assert on_0.requires_grad
    assert on_0.data_ptr() != t.data_ptr()

    on_1 = on_0.to("cuda:1")
    assert_tensor_options(on_1, "cuda:1", "float32")

    back = on_1.cpu()
    assert_tensor_options(back, "cpu", "float32")
    assert back.tolist() == [1.0, 2.0, 3.0]
    assert t.tolist() == [1.0, 2.0, 3.0]


def test_to_device_and_dtype(accelerators):
    t = tc.tensor([1.5, -2.5])
    converted = t.to("cuda:1", "int32")
    assert_tensor_options(converted, "cuda:1", "int32")
    assert converted.tolist() == [1, -2]

    also = t.to(1, dtype="int8")
    assert_tensor_options(also, "cuda:1", "int8")


def test_unindexed_cuda_aliases_cuda_0(accelerators):
    t = tc.tensor([1.0]).cuda()
    assert t.device == "cuda:0"
    assert t.to("cuda").data_ptr() == t.data_ptr()
    assert t.cuda(0).data_ptr() == t.data_ptr()


def test_to_out_of_range_device(accelerators):
    with pytest.raises(tc.DeviceError):
        tc.tensor([1.0]).to("cuda:2")


def test_failed_conversion_leaves_source_intact(accelerators):
    t = tc.tensor([1.0, 2.0]).to("cuda:0")
    with pytest.raises(tc.DeviceError):
        t.to("cuda:5", "int32")
    assert_tensor_options(t, "cuda:0", "float64")
    assert t.tolist() == [1.0, 2.0]


def test_mixed_device_arithmetic_rejected(accelerators):
    a = tc.tensor([1.0])
    b = a.cuda(1)
    with pytest.raises(tc.DeviceError):
        _ = a + b
    with pytest.raises(tc.DeviceError):
        _ = a == b


def test_noop_conversion_is_logged(caplog):
    t = tc.tensor([1.0])
    with caplog.at_level(logging.DEBUG, logger="tensorcore"):
        t.to("float64")
    assert any("no-op" in record.getMessage() for record in caplog.records)


def test_converted_values_are_copied():
    arr = np.array([1, 2, 3], dtype=np.int32)
    view = tc.from_buffer(arr, 3, "int32")
    converted = view.to("int64")
    arr[0] = 10
    assert view.element(0) == 10
    assert converted.element(0) == 1
