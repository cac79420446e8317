# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception hierarchy raised by tensorcore.

Every error derives from :class:`TensorCoreError` (itself a ``RuntimeError``)
and from the builtin exception a Python caller would expect, so both
``except ValueError`` and ``except tensorcore.InvalidArgumentError`` work.
"""

from __future__ import annotations


class TensorCoreError(RuntimeError):
    """Base class for all tensorcore errors."""


class InvalidArgumentError(TensorCoreError, ValueError):
    """An argument has the right type but an unusable value."""


class IndexOutOfRangeError(TensorCoreError, IndexError):
    """An element or dimension index lies outside the tensor."""


class UnsupportedOperationError(TensorCoreError, NotImplementedError):
    """The requested conversion or layout is not implemented."""


class DeviceError(TensorCoreError):
    """A device is unavailable or operands live on different devices."""


__all__ = [
    "TensorCoreError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "UnsupportedOperationError",
    "DeviceError",
]
