# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Element types supported by tensorcore.

A dtype is identified by its canonical name (``"int32"``, ``"float64"``...).
The table below is closed: every conversion routine in the package dispatches
on the ``kind`` of an entry, so adding a dtype means adding a row here.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from .errors import InvalidArgumentError

bool_ = "bool"
uint8 = "uint8"
int8 = "int8"
int16 = "int16"
int32 = "int32"
int64 = "int64"
float16 = "float16"
float32 = "float32"
float64 = "float64"


@dataclass(frozen=True)
class DTypeInfo:
    name: str
    itemsize: int
    kind: str
    numpy_dtype: np.dtype

    @property
    def is_floating_point(self) -> bool:
        return self.kind == "float"

    @property
    def is_integral(self) -> bool:
        return self.kind in ("bool", "int")


_DTYPE_TABLE: Dict[str, DTypeInfo] = {
    info.name: info
    for info in (
        DTypeInfo(bool_, 1, "bool", np.dtype(np.bool_)),
        DTypeInfo(uint8, 1, "int", np.dtype(np.uint8)),
        DTypeInfo(int8, 1, "int", np.dtype(np.int8)),
        DTypeInfo(int16, 2, "int", np.dtype(np.int16)),
        DTypeInfo(int32, 4, "int", np.dtype(np.int32)),
        DTypeInfo(int64, 8, "int", np.dtype(np.int64)),
        DTypeInfo(float16, 2, "float", np.dtype(np.float16)),
        DTypeInfo(float32, 4, "float", np.dtype(np.float32)),
        DTypeInfo(float64, 8, "float", np.dtype(np.float64)),
    )
}

# C-style spellings.
_ALIASES: Dict[str, str] = {
    "byte": uint8,
    "char": int8,
    "short": int16,
    "int": int32,
    "long": int64,
    "half": float16,
    "float": float32,
    "double": float64,
}

# Python builtin types follow the same rules as scalar inference.
_PYTHON_TYPES: Dict[type, str] = {
    bool: bool_,
    int: int32,
    float: float64,
}

_NP_TO_DTYPE: Dict[np.dtype, str] = {
    info.numpy_dtype: name for name, info in _DTYPE_TABLE.items()
}

_KIND_RANK: Dict[str, int] = {"bool": 0, "int": 1, "float": 2}

_INT32_RANGE: Tuple[int, int] = (-(2**31), 2**31 - 1)
_INT64_RANGE: Tuple[int, int] = (-(2**63), 2**63 - 1)

DTYPES: Tuple[str, ...] = tuple(_DTYPE_TABLE)
FLOATING_DTYPES: Tuple[str, ...] = tuple(
    name for name, info in _DTYPE_TABLE.items() if info.is_floating_point
)


def canonical_dtype(dtype: Any) -> str:
    """Resolve a dtype name, alias, Python type or NumPy dtype to its canonical name."""

    if dtype is None:
        raise InvalidArgumentError("dtype must not be None")

    if isinstance(dtype, str):
        name = _ALIASES.get(dtype, dtype)
        if name in _DTYPE_TABLE:
            return name
        raise InvalidArgumentError(f"Unsupported dtype '{dtype}'")

    if isinstance(dtype, type) and dtype in _PYTHON_TYPES:
        return _PYTHON_TYPES[dtype]

    try:
        np_dtype = np.dtype(dtype)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Unsupported dtype {dtype!r}") from exc

    name = _NP_TO_DTYPE.get(np_dtype)
    if name is None:
        raise InvalidArgumentError(f"Unsupported dtype '{np_dtype}'")
    return name


def dtype_info(dtype: Any) -> DTypeInfo:
    """Return the table entry for ``dtype``."""

    return _DTYPE_TABLE[canonical_dtype(dtype)]


def is_floating_point(dtype: Any) -> bool:
    return dtype_info(dtype).is_floating_point


def infer_dtype(value: Any) -> str:
    """Infer the dtype of a single Python or NumPy scalar.

    Python ``int`` maps to ``int32`` (``int64`` when the value needs more than
    32 bits), Python ``float`` is a C double and maps to ``float64``, and NumPy
    scalars keep their own type.
    """

    if isinstance(value, (bool, np.bool_)):
        return bool_

    if isinstance(value, np.generic):
        return canonical_dtype(value.dtype)

    if isinstance(value, numbers.Integral):
        as_int = int(value)
        if _INT32_RANGE[0] <= as_int <= _INT32_RANGE[1]:
            return int32
        if _INT64_RANGE[0] <= as_int <= _INT64_RANGE[1]:
            return int64
        raise InvalidArgumentError(f"Integer value {as_int} does not fit in int64")

    if isinstance(value, numbers.Real):
        return float64

    raise InvalidArgumentError(
        f"Cannot infer a dtype from a value of type {type(value).__name__}"
    )


def promote_types(a: str, b: str) -> str:
    """Promote two tensor dtypes along ``bool < int < float``."""

    info_a = dtype_info(a)
    info_b = dtype_info(b)
    rank_a = _KIND_RANK[info_a.kind]
    rank_b = _KIND_RANK[info_b.kind]
    if rank_a != rank_b:
        return info_a.name if rank_a > rank_b else info_b.name
    return canonical_dtype(np.promote_types(info_a.numpy_dtype, info_b.numpy_dtype))


def result_type(dtype: str, other: Any) -> str:
    """Dtype of a binary arithmetic result.

    ``other`` is either the dtype name of a tensor operand or a Python scalar.
    A scalar only changes the result when its kind ranks above the tensor's.
    """

    if isinstance(other, str):
        return promote_types(dtype, other)

    tensor_kind = dtype_info(dtype).kind
    scalar_kind = dtype_info(infer_dtype(other)).kind
    if _KIND_RANK[scalar_kind] <= _KIND_RANK[tensor_kind]:
        return canonical_dtype(dtype)
    if scalar_kind == "int":
        return int64

    from .config import get_default_dtype

    return get_default_dtype()


def cast_array(array: np.ndarray, dtype: str) -> np.ndarray:
    """Convert ``array`` to ``dtype`` with C conversion semantics.

    Floating values truncate toward zero when cast to an integer type; NaN
    becomes 0 and out-of-range values saturate. Any value cast to ``bool`` is
    ``value != 0``. The result is always a fresh C-contiguous array.
    """

    target = dtype_info(dtype)
    source_kind = _numpy_kind(array.dtype)

    if target.kind == "bool":
        return np.ascontiguousarray(array != 0)

    if target.kind == "int" and source_kind == "float":
        limits = np.iinfo(target.numpy_dtype)
        with np.errstate(invalid="ignore", over="ignore"):
            values = np.trunc(array.astype(np.float64))
            high = values >= float(limits.max)
            low = values <= float(limits.min)
            finite = np.where(np.isnan(values) | high | low, 0.0, values)
            result = finite.astype(target.numpy_dtype)
        result[high] = limits.max
        result[low] = limits.min
        return np.ascontiguousarray(result)

    with np.errstate(over="ignore", invalid="ignore"):
        return np.array(array, dtype=target.numpy_dtype, order="C", copy=True)


def _numpy_kind(np_dtype: np.dtype) -> str:
    if np_dtype == np.bool_:
        return "bool"
    if np.issubdtype(np_dtype, np.floating):
        return "float"
    return "int"


__all__ = [
    "DTypeInfo",
    "DTYPES",
    "FLOATING_DTYPES",
    "canonical_dtype",
    "dtype_info",
    "is_floating_point",
    "infer_dtype",
    "promote_types",
    "result_type",
    "cast_array",
]
