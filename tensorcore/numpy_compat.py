# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""NumPy-style helpers built on top of :class:`tensorcore.Tensor`."""

from __future__ import annotations

from typing import Any, Optional

from .dtypes import canonical_dtype
from .tensor import Tensor


def asarray(data: Any, dtype: Optional[Any] = None, requires_grad: bool = False) -> Tensor:
    """Convert ``data`` to a tensor, sharing storage when it already is one.

    Existing tensors are only copied when a different ``dtype`` is requested;
    their gradient flag is cleared unless ``requires_grad`` is set.
    """

    if isinstance(data, Tensor):
        converted = data if dtype is None else data.astype(canonical_dtype(dtype))
        if converted.requires_grad and not requires_grad:
            return converted.detach()
        return converted
    return Tensor(data, requires_grad=requires_grad, dtype=dtype)


def _like(
    factory: Any,
    tensor: Tensor,
    dtype: Optional[Any],
    device: Optional[Any],
    requires_grad: bool,
    *args: Any,
) -> Tensor:
    return factory(
        tensor.shape,
        *args,
        dtype=dtype if dtype is not None else tensor.dtype,
        device=device if device is not None else tensor.device,
        requires_grad=requires_grad,
    )


def empty_like(
    tensor: Tensor,
    dtype: Optional[Any] = None,
    device: Optional[Any] = None,
    requires_grad: bool = False,
) -> Tensor:
    """Uninitialised tensor with the shape (and by default dtype and device) of ``tensor``."""
    return _like(Tensor.empty, tensor, dtype, device, requires_grad)


def zeros_like(
    tensor: Tensor,
    dtype: Optional[Any] = None,
    device: Optional[Any] = None,
    requires_grad: bool = False,
) -> Tensor:
    return _like(Tensor.zeros, tensor, dtype, device, requires_grad)


def ones_like(
    tensor: Tensor,
    dtype: Optional[Any] = None,
    device: Optional[Any] = None,
    requires_grad: bool = False,
) -> Tensor:
    return _like(Tensor.ones, tensor, dtype, device, requires_grad)


def full_like(
    tensor: Tensor,
    fill_value: Any,
    dtype: Optional[Any] = None,
    device: Optional[Any] = None,
    requires_grad: bool = False,
) -> Tensor:
    return _like(Tensor.full, tensor, dtype, device, requires_grad, fill_value)


__all__ = ["asarray", "empty_like", "zeros_like", "ones_like", "full_like"]
