# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

import tensorcore as tc
from tensorcore._device import as_device, check_available


def test_device_parsing_and_str():
    cpu = tc.Device("cpu")
    assert cpu.type == "cpu"
    assert cpu.index is None
    assert str(cpu) == "cpu"
    assert repr(cpu) == "device(type='cpu')"

    cuda1 = tc.device("cuda:1")
    assert cuda1.type == "cuda"
    assert cuda1.index == 1
    assert str(cuda1) == "cuda:1"
    assert repr(cuda1) == "device(type='cuda', index=1)"

    assert tc.Device("cuda", 1) == cuda1
    assert tc.Device("CUDA:1") == cuda1
    assert tc.Device(cuda1) == cuda1


def test_device_equality_and_hash():
    assert tc.Device("cpu") == "cpu"
    assert tc.Device("cuda:0") != tc.Device("cuda")
    assert tc.Device("cpu") != "not a device"
    assert len({tc.Device("cpu"), tc.cpu(), tc.Device("cuda", 0)}) == 2


def test_cpu_index_is_dropped():
    assert tc.Device("cpu", 0).index is None
    assert tc.Device("cuda", -1).index is None


@pytest.mark.parametrize(
    "spec",
    ["tpu", "cuda:x", "cuda:-2"],
)
def test_invalid_device_strings(spec):
    with pytest.raises(tc.InvalidArgumentError):
        tc.Device(spec)


def test_index_given_twice():
    with pytest.raises(tc.InvalidArgumentError):
        tc.Device("cuda:0", 1)


def test_non_string_device_type():
    with pytest.raises(TypeError):
        tc.Device(3)


def test_as_device():
    assert as_device(None) is None
    assert as_device("cpu") == tc.cpu()
    assert as_device(2) == tc.Device("cuda", 2)
    with pytest.raises(TypeError):
        as_device(2.0)


def test_resolved():
    assert tc.Device("cuda").resolved() == tc.Device("cuda:0")
    assert tc.Device("cpu").resolved() == tc.Device("cpu")


def test_no_accelerators_by_default():
    assert tc.device_count() == 0
    assert not tc.is_available()
    with pytest.raises(tc.DeviceError):
        check_available(tc.Device("cuda"))


def test_configured_accelerators(accelerators):
    assert tc.device_count() == 2
    assert tc.is_available()
    assert check_available(tc.Device("cuda")) == tc.Device("cuda:0")
    assert check_available(tc.Device("cuda:1")) == tc.Device("cuda:1")
    with pytest.raises(tc.DeviceError):
        check_available(tc.Device("cuda:2"))


def test_factories_place_storage(accelerators):
    t = tc.zeros(2, 2, device="cuda:1")
    assert t.device == tc.Device("cuda", 1)
    assert tc.tensor([1, 2], device=tc.Device("cuda")).device == "cuda:0"
    assert "device='cuda:1'" in repr(t)


def test_device_module_is_importable():
    import tensorcore._device as device_module

    assert device_module.Device is tc.Device
    assert tc.device is tc.Device
    assert callable(device_module.check_available)
