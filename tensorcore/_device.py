# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Compute devices.

A device is a ``(type, index)`` pair. ``cpu`` carries no index; ``cuda``
devices are numbered from zero. Accelerator memory is emulated in host memory
by the per-device allocators in :mod:`tensorcore._backend`, so the number of
addressable accelerators is a configuration value rather than a hardware
query.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Union

from . import config
from .errors import DeviceError, InvalidArgumentError

DEVICE_TYPES: Tuple[str, ...] = ("cpu", "cuda")


def _parse_spec(spec: str) -> Tuple[str, Optional[int]]:
    text = spec.strip().lower()
    kind, sep, raw_index = text.partition(":")
    if not sep:
        return kind, None
    try:
        return kind, int(raw_index)
    except ValueError:
        raise InvalidArgumentError(f"Invalid device string: '{spec}'") from None


class Device:
    """An immutable compute target such as ``cpu`` or ``cuda:1``."""

    __slots__ = ("_type", "_index")

    def __init__(self, type: Union[str, "Device"], index: Optional[int] = None):
        if isinstance(type, Device):
            if index is not None:
                raise InvalidArgumentError("Device() received a Device and an index")
            kind, parsed = type.type, type.index
        elif isinstance(type, str):
            kind, parsed = _parse_spec(type)
            if index is not None:
                if parsed is not None:
                    raise InvalidArgumentError(
                        f"Device index given twice: '{type}' and {index}"
                    )
                parsed = index
        else:
            raise TypeError(
                f"Device() expects a string or Device, got {type.__class__.__name__}"
            )

        if kind not in DEVICE_TYPES:
            raise InvalidArgumentError(
                f"Unknown device type '{kind}'; expected one of {', '.join(DEVICE_TYPES)}"
            )

        if parsed is not None:
            if isinstance(parsed, bool) or not isinstance(parsed, int):
                raise InvalidArgumentError(f"Device index must be an int, got {parsed!r}")
            # -1 means "no index".
            if parsed == -1:
                parsed = None
            elif parsed < 0:
                raise InvalidArgumentError(f"Device index must be non-negative, got {parsed}")

        if kind == "cpu":
            parsed = None

        self._type = kind
        self._index = parsed

    @classmethod
    def cpu(cls) -> "Device":
        return cls("cpu")

    @classmethod
    def cuda(cls, index: Optional[int] = None) -> "Device":
        return cls("cuda", index)

    @property
    def type(self) -> str:
        return self._type

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def is_cpu(self) -> bool:
        return self._type == "cpu"

    def resolved(self) -> "Device":
        """Return the concrete device storage is placed on (``cuda`` -> ``cuda:0``)."""

        if self._type != "cpu" and self._index is None:
            return Device(self._type, 0)
        return self

    def __str__(self) -> str:
        if self._index is None:
            return self._type
        return f"{self._type}:{self._index}"

    def __repr__(self) -> str:
        if self._index is None:
            return f"device(type='{self._type}')"
        return f"device(type='{self._type}', index={self._index})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            try:
                other = Device(other)
            except InvalidArgumentError:
                return False
        if not isinstance(other, Device):
            return NotImplemented
        return self._type == other._type and self._index == other._index

    def __hash__(self) -> int:
        return hash((self._type, self._index))


def as_device(spec: Any) -> Optional[Device]:
    """Coerce a user supplied device specification; ``None`` passes through."""

    if spec is None or isinstance(spec, Device):
        return spec
    if isinstance(spec, str):
        return Device(spec)
    if isinstance(spec, int) and not isinstance(spec, bool):
        return Device("cuda", spec)
    raise TypeError(
        f"Expected a device string, index or Device, got {spec.__class__.__name__}"
    )


def device_count() -> int:
    """Return the number of addressable accelerator devices."""

    return config.accelerator_count()


def is_available() -> bool:
    """Return ``True`` when at least one accelerator device is configured."""

    return device_count() > 0


def check_available(device: Device) -> Device:
    """Resolve ``device`` and raise ``DeviceError`` if it cannot hold storage."""

    target = device.resolved()
    if target.is_cpu:
        return target

    count = device_count()
    if target.index >= count:
        raise DeviceError(
            f"Device {target} is not available; {count} accelerator device(s) configured"
        )
    return target


__all__ = [
    "DEVICE_TYPES",
    "Device",
    "as_device",
    "device_count",
    "is_available",
    "check_available",
]
