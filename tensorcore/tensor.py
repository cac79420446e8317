# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Tensor class: an immutable, strided view over a device storage buffer.
"""

from __future__ import annotations

import logging
import numbers
import operator
from functools import reduce
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._backend import Storage
from ._device import Device, as_device, check_available
from .config import get_default_dtype
from .dtypes import (
    canonical_dtype,
    cast_array,
    dtype_info,
    infer_dtype,
    is_floating_point,
    promote_types,
    result_type,
)
from .errors import (
    DeviceError,
    IndexOutOfRangeError,
    InvalidArgumentError,
)
from .options import TensorOptions, require_strided, resolve_options, strided

logger = logging.getLogger(__name__)

_CPU = Device("cpu")

ShapeArg = Union[int, Sequence[int]]

# ufunc -> (method when the tensor is on the left, method when on the right)
_UFUNC_OPERATORS = {
    np.add: ("__add__", "__radd__"),
    np.subtract: ("__sub__", "__rsub__"),
    np.multiply: ("__mul__", "__rmul__"),
    np.true_divide: ("__truediv__", "__rtruediv__"),
    np.equal: ("__eq__", "__eq__"),
    np.not_equal: ("__ne__", "__ne__"),
    np.less: ("__lt__", "__gt__"),
    np.less_equal: ("__le__", "__ge__"),
    np.greater: ("__gt__", "__lt__"),
    np.greater_equal: ("__ge__", "__le__"),
}


def _contiguous_strides(shape: Tuple[int, ...]) -> Tuple[int, ...]:
    strides = []
    step = 1
    for size in reversed(shape):
        strides.append(step)
        step *= max(size, 1)
    return tuple(reversed(strides))


def _normalize_shape(shape: Tuple[Any, ...]) -> Tuple[int, ...]:
    """Accept ``f(2, 3)`` as well as ``f((2, 3))`` and validate the sizes."""

    if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
        shape = tuple(shape[0])
    dims = []
    for size in shape:
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidArgumentError(f"Shape entries must be integers, got {size!r}")
        if size < 0:
            raise InvalidArgumentError(f"Shape entries must be non-negative, got {size}")
        dims.append(int(size))
    return tuple(dims)


def _infer_reshape(shape: Tuple[int, ...], numel: int) -> Tuple[int, ...]:
    if shape.count(-1) > 1:
        raise InvalidArgumentError("Only one dimension can be inferred")
    known = 1
    for size in shape:
        if size != -1:
            if size < 0:
                raise InvalidArgumentError(f"Invalid shape dimension {size}")
            known *= size
    if -1 in shape:
        if known == 0 or numel % known != 0:
            raise InvalidArgumentError(
                f"shape {list(shape)} is invalid for input of size {numel}"
            )
        shape = tuple(numel // known if size == -1 else size for size in shape)
    elif known != numel:
        raise InvalidArgumentError(f"shape {list(shape)} is invalid for input of size {numel}")
    return shape


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _collect(data: Any) -> Tuple[Tuple[int, ...], List[Any]]:
    """Flatten a nested rectangular sequence into ``(shape, values)``.

    Tensors and NumPy arrays nested inside the sequence count as sub-sequences
    of their own shape; their elements keep their dtype.
    """

    if isinstance(data, Tensor):
        data = data.numpy()
    if isinstance(data, np.ndarray):
        return tuple(data.shape), list(data.ravel())
    if not _is_sequence(data):
        return (), [data]

    if len(data) == 0:
        return (0,), []

    parts = [_collect(item) for item in data]
    inner = parts[0][0]
    for shape, _ in parts[1:]:
        if shape != inner:
            raise InvalidArgumentError(
                f"Expected a rectangular sequence; found sub-sequences of shape "
                f"{list(inner)} and {list(shape)}"
            )
    values = [value for _, flat in parts for value in flat]
    return (len(data),) + inner, values


def _array_from_data(data: Any, dtype: Optional[str]) -> np.ndarray:
    """Build a C-contiguous NumPy array holding a copy of ``data``."""

    if isinstance(data, np.ndarray):
        inferred = canonical_dtype(data.dtype)
        source = data
    elif isinstance(data, (numbers.Number, np.generic)) or _is_sequence(data):
        shape, values = _collect(data)
        if not values:
            if dtype is None:
                raise InvalidArgumentError(
                    "Cannot infer a dtype from an empty sequence; pass dtype explicitly"
                )
            return np.zeros(shape, dtype=dtype_info(dtype).numpy_dtype)
        inferred = reduce(promote_types, (infer_dtype(value) for value in values))
        source = np.array(values, dtype=dtype_info(inferred).numpy_dtype).reshape(shape)
    else:
        raise InvalidArgumentError(
            f"Cannot construct a tensor from an object of type {data.__class__.__name__}"
        )

    if dtype is None or dtype == inferred:
        return np.array(source, order="C", copy=True)
    return cast_array(source, dtype)


def _scalar_as(value: Any, as_type: Any) -> Any:
    if as_type is None:
        return value
    if as_type in (int, float, bool):
        try:
            return as_type(value)
        except (ValueError, OverflowError) as exc:
            raise InvalidArgumentError(
                f"Cannot convert {value!r} to {as_type.__name__}"
            ) from exc
    return cast_array(np.asarray(value), canonical_dtype(as_type)).item()


class Tensor:
    """
    An N-dimensional array of a single dtype living on one device.

    Tensors are immutable handles: conversions, arithmetic and indexing
    always hand back a new ``Tensor``. Handles produced by indexing, ``view``,
    ``detach`` or a no-op ``to`` share the same storage.
    """

    # Ensure NumPy defers to Tensor's arithmetic operators.
    __array_priority__ = 1000
    __hash__ = object.__hash__

    _storage: Storage
    _shape: Tuple[int, ...]
    _strides: Tuple[int, ...]
    _offset: int
    _requires_grad: bool

    @classmethod
    def _wrap_storage(
        cls,
        storage: Storage,
        shape: Sequence[int],
        strides: Optional[Sequence[int]] = None,
        offset: int = 0,
        requires_grad: bool = False,
    ) -> "Tensor":
        """Instantiate a ``Tensor`` (or subclass) over ``storage``."""

        instance = cls.__new__(cls)
        instance._storage = storage
        instance._shape = tuple(int(s) for s in shape)
        instance._strides = (
            tuple(int(s) for s in strides)
            if strides is not None
            else _contiguous_strides(instance._shape)
        )
        instance._offset = int(offset)
        instance._requires_grad = bool(requires_grad)
        return instance

    @classmethod
    def _from_array(
        cls, array: np.ndarray, device: Optional[Device] = None, requires_grad: bool = False
    ) -> "Tensor":
        """Copy ``array`` into new owned storage on ``device``."""

        storage = Storage.transfer(array, device)
        return cls._wrap_storage(storage, array.shape, requires_grad=requires_grad)

    def __init__(
        self,
        data: Any,
        requires_grad: Optional[bool] = None,
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        *,
        layout: Optional[str] = None,
        options: Optional[TensorOptions] = None,
    ):
        """
        Initialize a tensor by copying ``data``.

        Args:
            data: A Python scalar, a (nested) list or tuple of scalars, a NumPy
                array or another tensor.
            requires_grad: Whether the tensor is flagged for gradient tracking.
            dtype: Element type. Inferred from ``data`` when omitted: Python
                ``int`` -> int32, ``float`` -> float64, ``bool`` -> bool, NumPy
                values keep their own type.
            device: Device to place the tensor on (``"cpu"``, ``"cuda:1"``...).
            layout: Only ``"strided"`` is supported.
            options: A :class:`TensorOptions` record; explicit keyword arguments
                take precedence over its fields.

        Examples:
            >>> Tensor(123).dtype
            'int32'
            >>> Tensor([1.1, 2.2, 3.3], dtype="int32").tolist()
            [1, 2, 3]
        """
        opts = resolve_options(
            options,
            dtype=dtype,
            device=device,
            layout=layout,
            requires_grad=requires_grad,
        )
        require_strided(opts.layout)

        if isinstance(data, Tensor):
            source = data._view()
            target_dtype = opts.dtype or data.dtype
            target_device = opts.device or data.device
            array = cast_array(source, target_dtype)
        else:
            target_device = opts.device or _CPU
            array = _array_from_data(data, opts.dtype)

        storage = Storage.transfer(array, target_device)
        self._storage = storage
        self._shape = tuple(array.shape)
        self._strides = _contiguous_strides(self._shape)
        self._offset = 0
        self._requires_grad = bool(opts.requires_grad)

    # Core properties
    @property
    def shape(self) -> Tuple[int, ...]:
        """Get tensor shape as tuple."""
        return self._shape

    @property
    def dtype(self) -> str:
        """Get tensor data type."""
        return self._storage.dtype

    @property
    def device(self) -> Device:
        """Get tensor device."""
        return self._storage.device

    @property
    def layout(self) -> str:
        return strided

    @property
    def requires_grad(self) -> bool:
        """Check if tensor is flagged for gradient tracking."""
        return self._requires_grad

    @property
    def is_borrowed(self) -> bool:
        """``True`` when the tensor views caller memory it does not own."""
        return not self._storage.owned

    # NumPy compatibility properties
    @property
    def size(self) -> int:
        """Total number of elements."""
        return self.numel()

    @property
    def itemsize(self) -> int:
        """Size of each element in bytes."""
        return dtype_info(self.dtype).itemsize

    @property
    def nbytes(self) -> int:
        """Total bytes spanned by the tensor's elements."""
        return self.numel() * self.itemsize

    @property
    def strides(self) -> Tuple[int, ...]:
        """Strides of the tensor, in elements."""
        return self._strides

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    # Basic tensor info methods
    def numel(self) -> int:
        """Get total number of elements."""
        count = 1
        for size in self._shape:
            count *= size
        return count

    def dim(self) -> int:
        """Get number of dimensions."""
        return self.ndim

    def stride(self, dim: Optional[int] = None) -> Union[int, Tuple[int, ...]]:
        if dim is None:
            return self._strides
        return self._strides[self._normalize_dim(dim)]

    def storage_offset(self) -> int:
        return self._offset

    def untyped_storage(self) -> Storage:
        return self._storage

    def element_size(self) -> int:
        """Get size of each element in bytes."""
        return self.itemsize

    def data_ptr(self) -> int:
        """Address of the tensor's first element."""
        return self._storage.data_ptr() + self._offset * self.itemsize

    def is_contiguous(self) -> bool:
        """Check if tensor is contiguous in memory."""
        if self.numel() == 0:
            return True
        expected = 1
        for size, stride in zip(reversed(self._shape), reversed(self._strides)):
            if size != 1 and stride != expected:
                return False
            expected *= size
        return True

    def _normalize_dim(self, dim: int) -> int:
        rank = max(self.ndim, 1)
        if not -rank <= dim < rank:
            raise IndexOutOfRangeError(
                f"Dimension out of range (expected to be in range of [{-rank}, {rank - 1}], but got {dim})"
            )
        return dim % rank

    def _view(self) -> np.ndarray:
        """Read-only NumPy view of exactly this tensor's elements."""

        data = self._storage.data
        itemsize = data.itemsize
        return np.lib.stride_tricks.as_strided(
            data[self._offset :],
            shape=self._shape,
            strides=tuple(stride * itemsize for stride in self._strides),
            writeable=False,
        )

    def _alias(self, requires_grad: Optional[bool] = None) -> "Tensor":
        return self._wrap_storage(
            self._storage,
            self._shape,
            self._strides,
            self._offset,
            self._requires_grad if requires_grad is None else requires_grad,
        )

    # Data conversion methods
    def numpy(self) -> np.ndarray:
        """Return a read-only NumPy view sharing this tensor's memory."""
        return self._view()

    def __array__(self, dtype: Optional[Any] = None, copy: Optional[bool] = None) -> np.ndarray:
        """Support NumPy's array protocol for seamless interoperability."""
        array = self._view()
        if copy:
            return np.array(array, dtype=dtype, copy=True)
        if dtype is not None and np.dtype(dtype) != array.dtype:
            if copy is False:
                raise ValueError(
                    f"Unable to avoid a copy converting {self.dtype} to {np.dtype(dtype)}"
                )
            return array.astype(dtype)
        return array

    def __array_ufunc__(self, ufunc: Any, method: str, *inputs: Any, **kwargs: Any) -> Any:
        """Route NumPy arithmetic ufuncs to tensor operators.

        Other ufuncs run on the NumPy views and return plain arrays.
        """
        if method == "__call__" and not kwargs:
            if ufunc is np.negative and len(inputs) == 1:
                return self.__neg__()
            names = _UFUNC_OPERATORS.get(ufunc)
            if names is not None and len(inputs) == 2:
                left, right = inputs
                if isinstance(left, Tensor):
                    return getattr(left, names[0])(right)
                return getattr(right, names[1])(left)

        arrays = [value._view() if isinstance(value, Tensor) else value for value in inputs]
        return getattr(ufunc, method)(*arrays, **kwargs)

    def tolist(self) -> Any:
        """Convert to a (nested) Python list, or a scalar for 0-d tensors."""
        return self._view().tolist()

    def element(self, index: Optional[int] = None, as_type: Optional[Any] = None) -> Any:
        """Return one element by flat row-major ``index`` as a Python scalar.

        Without an index the tensor must hold exactly one element. ``as_type``
        may be ``int``, ``float``, ``bool`` or a dtype name; dtype conversions
        follow the same rules as :meth:`to`.
        """
        numel = self.numel()
        if index is None:
            if numel != 1:
                raise InvalidArgumentError(
                    f"a Tensor with {numel} elements cannot be converted to Scalar"
                )
            flat = 0
        else:
            flat = operator.index(index)
            if flat < 0:
                flat += numel
            if not 0 <= flat < numel:
                raise IndexOutOfRangeError(
                    f"index {index} is out of bounds for a tensor with {numel} elements"
                )

        view = self._view()
        if self.ndim == 0:
            value = view[()]
        else:
            value = view[np.unravel_index(flat, self._shape)]
        return _scalar_as(value.item(), as_type)

    def item(self) -> Union[float, int, bool]:
        """Return the Python scalar value for a single-element tensor."""
        return self.element()

    def __int__(self) -> int:
        return self.element(as_type=int)

    def __float__(self) -> float:
        return self.element(as_type=float)

    def __bool__(self) -> bool:
        if self.numel() != 1:
            raise InvalidArgumentError(
                f"Boolean value of Tensor with {self.numel()} values is ambiguous"
            )
        return self.element(as_type=bool)

    # Option conversion
    def to(
        self,
        device_or_dtype: Optional[Any] = None,
        dtype: Optional[Any] = None,
        *,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        options: Optional[TensorOptions] = None,
        copy: bool = False,
    ) -> "Tensor":
        """Convert the tensor to another dtype and/or device.

        ``requires_grad`` is carried over unchanged. When every requested
        option already matches and ``copy`` is false, the result shares this
        tensor's storage.
        """

        target_dtype = None if dtype is None else canonical_dtype(dtype)
        target_device = as_device(device)

        if isinstance(device_or_dtype, TensorOptions):
            if options is not None:
                raise TypeError("to() received multiple options records")
            options = device_or_dtype
        elif isinstance(device_or_dtype, (Device, int)) and not isinstance(
            device_or_dtype, bool
        ):
            if target_device is not None:
                raise TypeError("to() received multiple device specifications")
            target_device = as_device(device_or_dtype)
        elif device_or_dtype is not None:
            spec_dtype = _try_dtype(device_or_dtype)
            if spec_dtype is not None:
                if target_dtype is not None:
                    raise TypeError("dtype specified both positionally and via keyword")
                target_dtype = spec_dtype
            elif isinstance(device_or_dtype, str):
                if target_device is not None:
                    raise TypeError("to() received multiple device specifications")
                target_device = Device(device_or_dtype)
            else:
                raise TypeError("to() expects dtype or device specifications")

        opts = resolve_options(
            options, dtype=target_dtype, device=target_device, layout=layout
        )
        if opts.requires_grad is not None:
            raise InvalidArgumentError(
                "to() does not change requires_grad; use detach() or a factory instead"
            )
        require_strided(opts.layout)

        new_dtype = opts.dtype or self.dtype
        new_device = (
            check_available(opts.device) if opts.device is not None else self.device
        )

        if new_dtype == self.dtype and new_device == self.device and not copy:
            logger.debug("to(%s, %s) is a no-op; sharing storage", new_dtype, new_device)
            return self._alias()

        return self._convert(new_dtype, new_device)

    def _convert(self, dtype: str, device: Device) -> "Tensor":
        logger.debug(
            "Converting %s tensor on %s to %s on %s",
            self.dtype,
            self.device,
            dtype,
            device,
        )
        source = self._view()
        array = source if dtype == self.dtype else cast_array(source, dtype)
        # The new tensor is created only after its storage is fully populated.
        storage = Storage.transfer(array, device)
        return self._wrap_storage(storage, self._shape, requires_grad=self._requires_grad)

    def astype(self, dtype: Any) -> "Tensor":
        """Convert tensor to a different data type."""
        return self.to(dtype=dtype)

    def cpu(self) -> "Tensor":
        """Move tensor to CPU."""
        return self.to(device=_CPU)

    def cuda(self, index: Optional[int] = None) -> "Tensor":
        """Move tensor to an accelerator device."""
        return self.to(device=Device("cuda", index))

    # Views and copies
    def reshape(self, *shape: ShapeArg) -> "Tensor":
        """Reshape tensor; shares storage when the tensor is contiguous."""
        if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
            shape = tuple(shape[0])
        dims = tuple(operator.index(size) for size in shape)
        new_shape = _infer_reshape(dims, self.numel())
        if not self.is_contiguous():
            return self.contiguous().reshape(new_shape)
        return self._wrap_storage(
            self._storage, new_shape, offset=self._offset, requires_grad=self._requires_grad
        )

    def view(self, *shape: ShapeArg) -> "Tensor":
        """Reshape without copying; the tensor must be contiguous."""
        if not self.is_contiguous():
            raise InvalidArgumentError(
                "view size is not compatible with input tensor's size and stride; "
                "use reshape() instead"
            )
        return self.reshape(*shape)

    def flatten(self, start_dim: int = 0, end_dim: int = -1) -> "Tensor":
        """Flatten dimensions ``start_dim`` through ``end_dim`` into one."""
        if self.ndim == 0:
            return self.reshape(1)
        start = self._normalize_dim(start_dim)
        end = self._normalize_dim(end_dim)
        if start > end:
            raise InvalidArgumentError("flatten() has invalid args: start_dim cannot come after end_dim")
        merged = 1
        for size in self._shape[start : end + 1]:
            merged *= size
        return self.reshape(self._shape[:start] + (merged,) + self._shape[end + 1 :])

    def contiguous(self) -> "Tensor":
        """Return a contiguous tensor, copying only when necessary."""
        if self.is_contiguous():
            return self._alias()
        return self._from_array(self._view(), self.device, self._requires_grad)

    def clone(self) -> "Tensor":
        """Create a copy of the tensor in new storage."""
        return self._from_array(self._view(), self.device, self._requires_grad)

    def detach(self) -> "Tensor":
        """Return a handle sharing storage with ``requires_grad`` cleared."""
        return self._alias(requires_grad=False)

    # Indexing
    def __getitem__(self, key: Any) -> "Tensor":
        """Basic indexing with integers, slices, ``None`` and ``...``.

        The result shares this tensor's storage.
        """
        key_tuple = key if isinstance(key, tuple) else (key,)
        for part in key_tuple:
            if part is None or part is Ellipsis or isinstance(part, slice):
                continue
            if isinstance(part, (int, np.integer)) and not isinstance(part, (bool, np.bool_)):
                continue
            raise InvalidArgumentError(
                "only integers, slices, None and Ellipsis are valid tensor indices, "
                f"got {part.__class__.__name__}"
            )
        if Ellipsis not in key_tuple:
            # Keeps NumPy returning a 0-d view rather than a scalar copy.
            key_tuple = key_tuple + (Ellipsis,)

        base = self._storage.data
        try:
            result = self._view()[key_tuple]
        except IndexError as exc:
            raise IndexOutOfRangeError(str(exc)) from None

        itemsize = base.itemsize
        offset = (int(result.ctypes.data) - int(base.ctypes.data)) // itemsize
        strides = tuple(stride // itemsize for stride in result.strides)
        return self._wrap_storage(
            self._storage, result.shape, strides, offset, self._requires_grad
        )

    def __len__(self) -> int:
        if self.ndim == 0:
            raise TypeError("len() of a 0-d tensor")
        return self._shape[0]

    def __iter__(self) -> Iterator["Tensor"]:
        if self.ndim == 0:
            raise TypeError("iteration over a 0-d tensor")
        return (self[index] for index in range(self._shape[0]))

    # Arithmetic
    def _binary(
        self,
        other: Any,
        op: Callable[[np.ndarray, Any], np.ndarray],
        reverse: bool = False,
        true_divide: bool = False,
    ) -> "Tensor":
        if isinstance(other, np.ndarray):
            other = Tensor(other, device=self.device)
        if isinstance(other, Tensor):
            if other.device != self.device:
                raise DeviceError(
                    "Expected all tensors to be on the same device, but found at least "
                    f"two devices, {self.device} and {other.device}"
                )
            dtype = promote_types(self.dtype, other.dtype)
            other_value: Any = other._view()
            requires_grad = self._requires_grad or other._requires_grad
        elif isinstance(other, (numbers.Number, np.generic)):
            dtype = result_type(self.dtype, other)
            other_value = other
            requires_grad = self._requires_grad
        else:
            return NotImplemented

        if true_divide and not is_floating_point(dtype):
            dtype = get_default_dtype()

        np_dtype = dtype_info(dtype).numpy_dtype
        left = self._view().astype(np_dtype)
        right = np.array(other_value).astype(np_dtype)
        if reverse:
            left, right = right, left

        try:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                result = op(left, right)
        except TypeError as exc:
            raise InvalidArgumentError(f"Unsupported operation for dtype {dtype}: {exc}") from None
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from None

        result = np.asarray(result).astype(np_dtype, copy=False)
        return self._from_array(result, self.device, requires_grad)

    def __add__(self, other: Any) -> "Tensor":
        return self._binary(other, np.add)

    def __radd__(self, other: Any) -> "Tensor":
        return self._binary(other, np.add, reverse=True)

    def __sub__(self, other: Any) -> "Tensor":
        return self._binary(other, np.subtract)

    def __rsub__(self, other: Any) -> "Tensor":
        return self._binary(other, np.subtract, reverse=True)

    def __mul__(self, other: Any) -> "Tensor":
        return self._binary(other, np.multiply)

    def __rmul__(self, other: Any) -> "Tensor":
        return self._binary(other, np.multiply, reverse=True)

    def __truediv__(self, other: Any) -> "Tensor":
        return self._binary(other, np.true_divide, true_divide=True)

    def __rtruediv__(self, other: Any) -> "Tensor":
        return self._binary(other, np.true_divide, reverse=True, true_divide=True)

    def __neg__(self) -> "Tensor":
        if self.dtype == "bool":
            raise InvalidArgumentError("Negation is not supported for bool tensors")
        return self._from_array(np.negative(self._view()), self.device, self._requires_grad)

    # Comparisons
    def _compare(self, other: Any, op: Callable[[np.ndarray, Any], np.ndarray]) -> "Tensor":
        if isinstance(other, np.ndarray):
            other = Tensor(other, device=self.device)
        if isinstance(other, Tensor):
            if other.device != self.device:
                raise DeviceError(
                    f"Cannot compare tensors on {self.device} and {other.device}"
                )
            other_value: Any = other._view()
        elif isinstance(other, (numbers.Number, np.generic)):
            other_value = other
        else:
            return NotImplemented
        try:
            result = op(self._view(), other_value)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from None
        return self._from_array(np.asarray(result, dtype=np.bool_), self.device)

    def __eq__(self, other: object) -> "Tensor":  # type: ignore[override]
        return self._compare(other, np.equal)

    def __ne__(self, other: object) -> "Tensor":  # type: ignore[override]
        return self._compare(other, np.not_equal)

    def __lt__(self, other: Any) -> "Tensor":
        return self._compare(other, np.less)

    def __le__(self, other: Any) -> "Tensor":
        return self._compare(other, np.less_equal)

    def __gt__(self, other: Any) -> "Tensor":
        return self._compare(other, np.greater)

    def __ge__(self, other: Any) -> "Tensor":
        return self._compare(other, np.greater_equal)

    def equal(self, other: "Tensor") -> bool:
        """Return ``True`` if both tensors have the same shape and values."""
        return self._shape == other._shape and bool(np.array_equal(self._view(), other._view()))

    def allclose(self, other: "Tensor", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """Check if all elements are close within tolerance."""
        return bool(np.allclose(self._view(), np.asarray(other), rtol=rtol, atol=atol))

    # String representations
    def __repr__(self) -> str:
        body = np.array2string(self._view(), separator=", ", prefix="tensor(")
        suffix = [f"dtype={self.dtype}"]
        if not self.device.is_cpu:
            suffix.append(f"device='{self.device}'")
        if self._requires_grad:
            suffix.append("requires_grad=True")
        return f"tensor({body}, {', '.join(suffix)})"

    __str__ = __repr__

    # Static tensor creation methods
    @staticmethod
    def empty(
        *shape: ShapeArg,
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        requires_grad: Optional[bool] = None,
        options: Optional[TensorOptions] = None,
    ) -> "Tensor":
        """Create a tensor with uninitialised contents."""
        dims = _normalize_shape(shape)
        opts = _factory_options(options, dtype, device, layout, requires_grad)
        numel = 1
        for size in dims:
            numel *= size
        storage = Storage.allocate(numel, opts.dtype or get_default_dtype(), opts.device)
        return Tensor._wrap_storage(storage, dims, requires_grad=bool(opts.requires_grad))

    @staticmethod
    def full(
        shape: ShapeArg,
        fill_value: Union[int, float, bool],
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        requires_grad: Optional[bool] = None,
        options: Optional[TensorOptions] = None,
    ) -> "Tensor":
        """Create a tensor filled with a specific value.

        Without a dtype, integer and bool fills keep their inferred type and
        floating fills use the default dtype.
        """
        dims = _normalize_shape(
            (shape,) if isinstance(shape, (int, np.integer)) else tuple(shape)
        )
        opts = _factory_options(options, dtype, device, layout, requires_grad)
        target = opts.dtype
        if target is None:
            inferred = infer_dtype(fill_value)
            target = get_default_dtype() if is_floating_point(inferred) else inferred
        array = cast_array(np.full(dims, fill_value), target)
        return Tensor._from_array(array, opts.device, bool(opts.requires_grad))

    @staticmethod
    def zeros(
        *shape: ShapeArg,
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        requires_grad: Optional[bool] = None,
        options: Optional[TensorOptions] = None,
    ) -> "Tensor":
        """Create a tensor filled with zeros."""
        return Tensor.full(
            _normalize_shape(shape),
            0.0,
            dtype=dtype,
            device=device,
            layout=layout,
            requires_grad=requires_grad,
            options=options,
        )

    @staticmethod
    def ones(
        *shape: ShapeArg,
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        requires_grad: Optional[bool] = None,
        options: Optional[TensorOptions] = None,
    ) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor.full(
            _normalize_shape(shape),
            1.0,
            dtype=dtype,
            device=device,
            layout=layout,
            requires_grad=requires_grad,
            options=options,
        )

    @staticmethod
    def arange(
        start: Union[int, float],
        end: Optional[Union[int, float]] = None,
        step: Union[int, float] = 1,
        dtype: Optional[Any] = None,
        device: Optional[Any] = None,
        layout: Optional[str] = None,
        requires_grad: Optional[bool] = None,
        options: Optional[TensorOptions] = None,
    ) -> "Tensor":
        """Create a tensor with evenly spaced values in ``[start, end)``.

        Integer arguments produce int64 values unless a dtype is given.
        """
        if end is None:
            end = start
            start = 0
        if step == 0:
            raise InvalidArgumentError("arange() step must be nonzero")
        opts = _factory_options(options, dtype, device, layout, requires_grad)
        target = opts.dtype
        if target is None:
            integral = all(
                isinstance(value, (int, np.integer)) for value in (start, end, step)
            )
            target = "int64" if integral else get_default_dtype()
        array = cast_array(np.arange(start, end, step), target)
        return Tensor._from_array(array, opts.device, bool(opts.requires_grad))

    @staticmethod
    def from_numpy(array: np.ndarray, requires_grad: bool = False) -> "Tensor":
        """Create a tensor holding a copy of a NumPy array."""
        return Tensor(np.asarray(array), requires_grad=requires_grad)

    @staticmethod
    def from_numpy_shared(array: np.ndarray, requires_grad: bool = False) -> "Tensor":
        """Create a tensor viewing a C-contiguous NumPy array without copying."""
        if not isinstance(array, np.ndarray):
            raise InvalidArgumentError(
                f"from_numpy_shared() expects a numpy.ndarray, got {array.__class__.__name__}"
            )
        if not array.flags.c_contiguous:
            raise InvalidArgumentError(
                "from_numpy_shared() requires a C-contiguous array; use from_numpy() to copy"
            )
        return Tensor.from_buffer(
            array, array.size, array.dtype, shape=array.shape, requires_grad=requires_grad
        )

    @staticmethod
    def from_buffer(
        buffer: Any,
        count: int,
        dtype: Any,
        *,
        shape: Optional[Sequence[int]] = None,
        strides: Optional[Sequence[int]] = None,
        offset: int = 0,
        device: Optional[Any] = None,
        requires_grad: bool = True,
        deleter: Optional[Callable[[int], None]] = None,
    ) -> "Tensor":
        """
        Create a tensor that views caller-owned memory without copying.

        Args:
            buffer: An object exporting the buffer protocol (``bytearray``,
                ``array.array``, NumPy array, ctypes array...) or a raw
                address given as an ``int`` or ctypes pointer.
            count: Number of ``dtype`` elements available at the address.
            dtype: Element type of the memory.
            shape: Logical shape; defaults to ``(count,)``.
            strides: Strides in elements; defaults to contiguous strides.
            offset: Byte offset of the first element within ``buffer``.
            device: Device the memory belongs to; defaults to CPU.
            requires_grad: Gradient-tracking flag, enabled by default.
            deleter: Called with the data pointer once no tensor uses the memory.

        The memory is not copied and its lifetime is not managed: it must stay
        valid for as long as the returned tensor (or any view of it) is used.
        External writes to the buffer are visible through the tensor.
        """
        storage = Storage.borrow(
            buffer, count, dtype, offset=offset, device=device, deleter=deleter
        )
        dims = (storage.numel,) if shape is None else _normalize_shape(tuple(shape))
        if strides is None:
            steps = _contiguous_strides(dims)
        else:
            steps = tuple(operator.index(step) for step in strides)
            if len(steps) != len(dims):
                raise InvalidArgumentError(
                    f"strides {list(steps)} do not match shape {list(dims)}"
                )
            if any(step < 0 for step in steps):
                raise InvalidArgumentError("from_buffer() does not accept negative strides")

        extent = 0 if 0 in dims else 1 + sum((size - 1) * step for size, step in zip(dims, steps))
        if extent > storage.numel:
            raise InvalidArgumentError(
                f"shape {list(dims)} with strides {list(steps)} needs {extent} elements "
                f"but only {storage.numel} were given"
            )
        return Tensor._wrap_storage(storage, dims, steps, 0, requires_grad)

    from_blob = from_buffer

    # Dtype shorthands; defined last so the builtins keep their meaning above.
    def double(self) -> "Tensor":
        return self.to(dtype="float64")

    def float(self) -> "Tensor":
        return self.to(dtype="float32")

    def half(self) -> "Tensor":
        return self.to(dtype="float16")

    def int(self) -> "Tensor":
        return self.to(dtype="int32")

    def long(self) -> "Tensor":
        return self.to(dtype="int64")

    def char(self) -> "Tensor":
        return self.to(dtype="int8")

    def bool(self) -> "Tensor":
        return self.to(dtype="bool")


def _try_dtype(spec: Any) -> Optional[str]:
    try:
        return canonical_dtype(spec)
    except InvalidArgumentError:
        return None


def _factory_options(
    options: Optional[TensorOptions],
    dtype: Optional[Any],
    device: Optional[Any],
    layout: Optional[str],
    requires_grad: Optional[bool],
) -> TensorOptions:
    opts = resolve_options(
        options, dtype=dtype, device=device, layout=layout, requires_grad=requires_grad
    )
    require_strided(opts.layout)
    return opts


# Convenience functions for tensor creation (NumPy-style)
def tensor(
    data: Any,
    dtype: Optional[Any] = None,
    device: Optional[Any] = None,
    requires_grad: Optional[bool] = None,
    *,
    layout: Optional[str] = None,
    options: Optional[TensorOptions] = None,
) -> Tensor:
    """Create a tensor from data."""
    return Tensor(
        data,
        requires_grad=requires_grad,
        dtype=dtype,
        device=device,
        layout=layout,
        options=options,
    )


def empty(*shape: ShapeArg, **kwargs: Any) -> Tensor:
    """Create a tensor with uninitialised contents."""
    return Tensor.empty(*shape, **kwargs)


def zeros(*shape: ShapeArg, **kwargs: Any) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(*shape, **kwargs)


def ones(*shape: ShapeArg, **kwargs: Any) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor.ones(*shape, **kwargs)


def full(shape: ShapeArg, fill_value: Union[int, float, bool], **kwargs: Any) -> Tensor:
    """Create a tensor filled with a specific value."""
    return Tensor.full(shape, fill_value, **kwargs)


def arange(
    start: Union[int, float],
    end: Optional[Union[int, float]] = None,
    step: Union[int, float] = 1,
    **kwargs: Any,
) -> Tensor:
    """Create a tensor with evenly spaced values."""
    return Tensor.arange(start, end, step, **kwargs)


def from_numpy(array: np.ndarray, requires_grad: bool = False) -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array, requires_grad=requires_grad)


def from_numpy_shared(array: np.ndarray, requires_grad: bool = False) -> Tensor:
    """Create a tensor sharing memory with a NumPy array."""
    return Tensor.from_numpy_shared(array, requires_grad=requires_grad)


def from_buffer(buffer: Any, count: int, dtype: Any, **kwargs: Any) -> Tensor:
    """Create a zero-copy tensor view over caller-owned memory."""
    return Tensor.from_buffer(buffer, count, dtype, **kwargs)


from_blob = from_buffer


# Export all public symbols
__all__ = [
    "Tensor",
    "tensor",
    "empty",
    "zeros",
    "ones",
    "full",
    "arange",
    "from_numpy",
    "from_numpy_shared",
    "from_buffer",
    "from_blob",
]
