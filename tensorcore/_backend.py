# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Storage buffers and the per-device allocators that hand them out.

A :class:`Storage` is either *owned* (allocated here and released when the
last tensor referencing it is collected) or *borrowed* (a zero-copy window
onto caller memory). Borrowed storage never counts towards allocator
statistics and is never freed by tensorcore.
"""

from __future__ import annotations

import ctypes
import logging
import weakref
from threading import RLock
from typing import Any, Callable, Dict, Optional

import numpy as np

from ._device import Device, as_device, check_available
from .dtypes import canonical_dtype, dtype_info
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class DeviceAllocator:
    """Hands out owned buffers for one device and tracks their byte usage."""

    def __init__(self, device: Device):
        self.device = device
        self._lock = RLock()
        self._allocated = 0
        self._peak = 0
        self._live_blocks = 0

    def allocate(self, numel: int, dtype: str) -> np.ndarray:
        info = dtype_info(dtype)
        array = np.empty(numel, dtype=info.numpy_dtype)
        with self._lock:
            self._allocated += array.nbytes
            self._live_blocks += 1
            self._peak = max(self._peak, self._allocated)
        logger.debug("Allocated %d bytes on %s", array.nbytes, self.device)
        return array

    def release(self, nbytes: int) -> None:
        with self._lock:
            self._allocated -= nbytes
            self._live_blocks -= 1
        logger.debug("Released %d bytes on %s", nbytes, self.device)

    @property
    def allocated(self) -> int:
        with self._lock:
            return self._allocated

    @property
    def peak(self) -> int:
        with self._lock:
            return self._peak

    @property
    def live_blocks(self) -> int:
        with self._lock:
            return self._live_blocks

    def reset_peak(self) -> None:
        with self._lock:
            self._peak = self._allocated


# Allocators are created on first use and cached for the life of the process.
_ALLOCATORS: Dict[Device, DeviceAllocator] = {}
_ALLOCATOR_LOCK = RLock()


def get_allocator(device: Any) -> DeviceAllocator:
    """Return the allocator for ``device``, raising if it is unavailable."""

    target = check_available(as_device(device) or Device("cpu"))
    with _ALLOCATOR_LOCK:
        allocator = _ALLOCATORS.get(target)
        if allocator is None:
            allocator = DeviceAllocator(target)
            _ALLOCATORS[target] = allocator
        return allocator


def memory_allocated(device: Any = "cpu") -> int:
    """Bytes currently held by owned storage on ``device``."""

    return get_allocator(device).allocated


def max_memory_allocated(device: Any = "cpu") -> int:
    """Peak bytes held by owned storage on ``device`` since the last reset."""

    return get_allocator(device).peak


def reset_peak_memory_stats(device: Any = "cpu") -> None:
    get_allocator(device).reset_peak()


def _address_of(pointer: Any) -> Optional[int]:
    if isinstance(pointer, int) and not isinstance(pointer, bool):
        return pointer
    if isinstance(pointer, ctypes.c_void_p):
        return pointer.value or 0
    if isinstance(pointer, ctypes._Pointer):
        return ctypes.cast(pointer, ctypes.c_void_p).value or 0
    return None


class Storage:
    """A flat, typed buffer living on one device."""

    def __init__(
        self,
        data: np.ndarray,
        device: Device,
        *,
        owned: bool,
        source: Any = None,
        finalizer: Optional[Callable[[], None]] = None,
    ):
        self._data = data
        self._device = device
        self._dtype = canonical_dtype(data.dtype)
        self._owned = owned
        # Keeps a borrowed buffer's exporter alive while the storage is.
        self._source = source
        self._finalizer = (
            weakref.finalize(self, finalizer) if finalizer is not None else None
        )

    @classmethod
    def allocate(cls, numel: int, dtype: str, device: Any = None) -> "Storage":
        """Allocate uninitialised owned storage for ``numel`` elements."""

        allocator = get_allocator(device)
        data = allocator.allocate(numel, dtype)
        return cls(
            data,
            allocator.device,
            owned=True,
            finalizer=_release_callback(allocator, data.nbytes),
        )

    @classmethod
    def transfer(cls, array: np.ndarray, device: Any = None) -> "Storage":
        """Copy ``array`` into fresh owned storage on ``device``.

        The returned storage is fully populated; nothing refers to it until the
        copy has finished.
        """

        storage = cls.allocate(array.size, canonical_dtype(array.dtype), device)
        np.copyto(storage._data.reshape(array.shape), array, casting="no")
        logger.debug(
            "Copied %d bytes into new storage on %s", storage.nbytes, storage.device
        )
        return storage

    @classmethod
    def borrow(
        cls,
        buffer: Any,
        count: int,
        dtype: Any,
        *,
        offset: int = 0,
        device: Any = None,
        deleter: Optional[Callable[[int], None]] = None,
    ) -> "Storage":
        """Wrap caller memory without copying.

        ``buffer`` is an object exporting the buffer protocol or a raw address
        (an ``int`` or ctypes pointer). ``count`` is taken on trust for raw
        addresses: the memory must stay valid for as long as any tensor uses
        the storage. ``deleter`` receives the data pointer once the storage is
        collected.
        """

        name = canonical_dtype(dtype)
        info = dtype_info(name)
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise InvalidArgumentError(f"count must be an integer, got {count!r}")
        count = int(count)
        if count < 0:
            raise InvalidArgumentError(f"count must be non-negative, got {count}")
        if offset < 0:
            raise InvalidArgumentError(f"offset must be non-negative, got {offset}")

        target = check_available(as_device(device) or Device("cpu"))
        address = _address_of(buffer)
        if address is not None:
            if address == 0:
                raise InvalidArgumentError("Cannot create a view over a null pointer")
            nbytes = count * info.itemsize
            raw = (ctypes.c_char * max(nbytes, 1)).from_address(address + offset)
            data = np.frombuffer(raw, dtype=info.numpy_dtype, count=count)
            source = None
        else:
            try:
                data = np.frombuffer(
                    buffer, dtype=info.numpy_dtype, count=count, offset=offset
                )
            except (TypeError, ValueError, BufferError) as exc:
                raise InvalidArgumentError(
                    f"Cannot view {buffer.__class__.__name__} as {count} x {name}: {exc}"
                ) from exc
            source = buffer

        finalizer = None
        if deleter is not None:
            finalizer = _deleter_callback(deleter, int(data.ctypes.data))

        logger.debug(
            "Borrowed %d x %s at 0x%x on %s", count, name, data.ctypes.data, target
        )
        return cls(data, target, owned=False, source=source, finalizer=finalizer)

    @property
    def data(self) -> np.ndarray:
        """Read-only flat view of the elements backing this storage."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def device(self) -> Device:
        return self._device

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def owned(self) -> bool:
        return self._owned

    @property
    def numel(self) -> int:
        return self._data.size

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def data_ptr(self) -> int:
        return int(self._data.ctypes.data)

    def __repr__(self) -> str:
        kind = "owned" if self._owned else "borrowed"
        return (
            f"Storage({kind}, {self.numel} x {self._dtype}, device={self._device}, "
            f"ptr=0x{self.data_ptr():x})"
        )


def _release_callback(allocator: DeviceAllocator, nbytes: int) -> Callable[[], None]:
    # Must not close over the storage itself or it would never be collected.
    def _release() -> None:
        allocator.release(nbytes)

    return _release


def _deleter_callback(deleter: Callable[[int], None], pointer: int) -> Callable[[], None]:
    def _delete() -> None:
        deleter(pointer)

    return _delete


__all__ = [
    "DeviceAllocator",
    "Storage",
    "get_allocator",
    "memory_allocated",
    "max_memory_allocated",
    "reset_peak_memory_stats",
]
