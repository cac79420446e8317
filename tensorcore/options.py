# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tensor construction options and memory layouts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from ._device import Device, as_device
from .dtypes import canonical_dtype
from .errors import InvalidArgumentError, UnsupportedOperationError

strided = "strided"
sparse = "sparse"

LAYOUTS = (strided, sparse)


def canonical_layout(value: Any) -> str:
    if value not in LAYOUTS:
        raise InvalidArgumentError(
            f"Unknown layout {value!r}; expected one of {', '.join(LAYOUTS)}"
        )
    return value


def require_strided(value: Optional[str]) -> None:
    """Raise if ``value`` names a layout other than ``strided``."""

    if value is None:
        return
    if canonical_layout(value) != strided:
        raise UnsupportedOperationError(
            f"Layout '{value}' is not supported; only strided tensors can be created"
        )


@dataclass(frozen=True)
class TensorOptions:
    """Optional ``dtype``/``device``/``layout``/``requires_grad`` overrides.

    ``None`` means "not specified", so options can be layered with
    :meth:`merge` and keyword arguments passed to a factory win over the
    fields of an options record.
    """

    dtype: Optional[str] = None
    device: Optional[Device] = None
    layout: Optional[str] = None
    requires_grad: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.dtype is not None:
            object.__setattr__(self, "dtype", canonical_dtype(self.dtype))
        if self.device is not None:
            object.__setattr__(self, "device", as_device(self.device))
        if self.layout is not None:
            object.__setattr__(self, "layout", canonical_layout(self.layout))
        if self.requires_grad is not None:
            object.__setattr__(self, "requires_grad", bool(self.requires_grad))

    def with_dtype(self, value: Any) -> "TensorOptions":
        return replace(self, dtype=value)

    def with_device(self, value: Any) -> "TensorOptions":
        return replace(self, device=value)

    def with_layout(self, value: Any) -> "TensorOptions":
        return replace(self, layout=value)

    def with_requires_grad(self, value: bool = True) -> "TensorOptions":
        return replace(self, requires_grad=value)

    def merge(self, other: Optional["TensorOptions"]) -> "TensorOptions":
        """Overlay the fields ``other`` specifies on top of this record."""

        if other is None:
            return self
        return TensorOptions(
            dtype=other.dtype if other.dtype is not None else self.dtype,
            device=other.device if other.device is not None else self.device,
            layout=other.layout if other.layout is not None else self.layout,
            requires_grad=(
                other.requires_grad
                if other.requires_grad is not None
                else self.requires_grad
            ),
        )


def dtype(value: Any) -> TensorOptions:
    return TensorOptions(dtype=value)


def device(value: Any) -> TensorOptions:
    return TensorOptions(device=value)


def layout(value: Any) -> TensorOptions:
    return TensorOptions(layout=value)


def requires_grad(value: bool = True) -> TensorOptions:
    return TensorOptions(requires_grad=value)


def resolve_options(
    options: Optional[TensorOptions] = None, **overrides: Any
) -> TensorOptions:
    """Combine an options record with keyword overrides (``None`` skipped)."""

    base = options if options is not None else TensorOptions()
    if not isinstance(base, TensorOptions):
        raise TypeError(
            f"options must be a TensorOptions instance, got {base.__class__.__name__}"
        )
    return base.merge(TensorOptions(**overrides))


__all__ = [
    "strided",
    "sparse",
    "LAYOUTS",
    "TensorOptions",
    "canonical_layout",
    "require_strided",
    "dtype",
    "device",
    "layout",
    "requires_grad",
    "resolve_options",
]
