# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging

from . import config, numpy_compat, options, testing
from ._backend import (
    Storage,
    max_memory_allocated,
    memory_allocated,
    reset_peak_memory_stats,
)
from ._device import Device, device_count, is_available
from ._version import __version__, __version_tuple__
from .config import (
    configure_logging,
    default_dtype,
    get_config,
    get_default_dtype,
    set_default_dtype,
)
from .dtypes import (
    DTYPES,
    canonical_dtype,
    dtype_info,
    float16,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    promote_types,
    result_type,
    uint8,
)
from .errors import (
    DeviceError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    TensorCoreError,
    UnsupportedOperationError,
)
from .numpy_compat import asarray
from .options import TensorOptions, sparse, strided
from .tensor import (
    Tensor,
    arange,
    empty,
    from_blob,
    from_buffer,
    from_numpy,
    from_numpy_shared,
    full,
    ones,
    tensor,
    zeros,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

device = Device
cpu = Device.cpu

# Assigned last: shadows the builtin for the rest of this module.
bool = "bool"

__all__ = [
    "Tensor",
    "Storage",
    "Device",
    "TensorOptions",
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
    "asarray",
    "bool",
    "uint8",
    "int8",
    "int16",
    "int32",
    "int64",
    "float16",
    "float32",
    "float64",
    "DTYPES",
    "canonical_dtype",
    "dtype_info",
    "promote_types",
    "result_type",
    "strided",
    "sparse",
    "device",
    "cpu",
    "device_count",
    "is_available",
    "memory_allocated",
    "max_memory_allocated",
    "reset_peak_memory_stats",
    "config",
    "options",
    "testing",
    "numpy_compat",
    "get_config",
    "get_default_dtype",
    "set_default_dtype",
    "default_dtype",
    "configure_logging",
    "TensorCoreError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "UnsupportedOperationError",
    "DeviceError",
    "__version__",
]
