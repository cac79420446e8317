# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Assertion helpers for tests that check single tensor values."""

from __future__ import annotations

from typing import Any, Optional

from ._device import as_device
from .dtypes import canonical_dtype
from .options import canonical_layout
from .tensor import Tensor


def exactly_equal(tensor: Tensor, value: Any) -> bool:
    """``True`` if the tensor's single element, read as ``type(value)``, equals ``value``."""

    return tensor.element(as_type=type(value)) == value


def almost_equal(tensor: Tensor, value: float, tolerance: float = 1e-4) -> bool:
    """``True`` if the tensor's single element is within ``tolerance`` of ``value``."""

    return abs(tensor.element(as_type=float) - value) < tolerance


def assert_tensor_options(
    tensor: Tensor,
    device: Any,
    dtype: Any,
    layout: Optional[str] = None,
) -> None:
    expected_device = as_device(device).resolved()
    assert tensor.device == expected_device, (
        f"expected device {expected_device}, got {tensor.device}"
    )
    expected_dtype = canonical_dtype(dtype)
    assert tensor.dtype == expected_dtype, (
        f"expected dtype {expected_dtype}, got {tensor.dtype}"
    )
    if layout is not None:
        expected_layout = canonical_layout(layout)
        assert tensor.layout == expected_layout, (
            f"expected layout {expected_layout}, got {tensor.layout}"
        )


__all__ = ["exactly_equal", "almost_equal", "assert_tensor_options"]
