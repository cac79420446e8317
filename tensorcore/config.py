# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Process-wide configuration.

Values are read once from the environment at import time and may be changed
afterwards through the setters below or temporarily through :func:`override`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from os import getenv
from threading import RLock
from typing import Any, Iterator

from .dtypes import FLOATING_DTYPES, canonical_dtype
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    default_dtype: str = "float32"
    accelerator_count: int = 0
    log_level: str = "WARNING"

    def validated(self) -> "Config":
        """Return a normalised copy or raise ``InvalidArgumentError``."""

        dtype = canonical_dtype(self.default_dtype)
        if dtype not in FLOATING_DTYPES:
            raise InvalidArgumentError(
                f"Default dtype must be a floating point type, got '{dtype}'"
            )

        try:
            count = int(self.accelerator_count)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"accelerator_count must be an integer, got {self.accelerator_count!r}"
            ) from exc
        if count < 0:
            raise InvalidArgumentError("accelerator_count must be non-negative")

        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise InvalidArgumentError(f"Unknown log level '{self.log_level}'")

        return replace(self, default_dtype=dtype, accelerator_count=count, log_level=level)

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            default_dtype=getenv("TENSORCORE_DEFAULT_DTYPE", cls.default_dtype),
            accelerator_count=getenv("TENSORCORE_ACCELERATORS", str(cls.accelerator_count)),
            log_level=getenv("TENSORCORE_LOG_LEVEL", cls.log_level),
        ).validated()


_CONFIG_LOCK = RLock()
_CONFIG: Config = Config.from_env()


def get_config() -> Config:
    """Return the active configuration snapshot."""

    with _CONFIG_LOCK:
        return _CONFIG


def update_config(**changes: Any) -> Config:
    """Replace configuration fields and return the new snapshot."""

    global _CONFIG

    known = {f.name for f in fields(Config)}
    unknown = set(changes) - known
    if unknown:
        raise InvalidArgumentError(f"Unknown config field(s): {', '.join(sorted(unknown))}")

    with _CONFIG_LOCK:
        updated = replace(_CONFIG, **changes).validated()
        _CONFIG = updated
    logger.debug("Configuration updated: %s", updated)
    return updated


@contextmanager
def override(**changes: Any) -> Iterator[Config]:
    """Temporarily override configuration fields."""

    previous = get_config()
    updated = update_config(**changes)
    try:
        yield updated
    finally:
        _restore(previous)


def _restore(previous: Config) -> None:
    global _CONFIG

    with _CONFIG_LOCK:
        _CONFIG = previous


def set_default_dtype(dtype: Any) -> None:
    """Set the global default data type for new floating point tensors."""

    update_config(default_dtype=dtype)


def get_default_dtype() -> str:
    """Get the current global default data type."""

    return get_config().default_dtype


@contextmanager
def default_dtype(dtype: Any) -> Iterator[str]:
    """Use ``dtype`` as the default floating point type inside the block."""

    previous = get_default_dtype()
    set_default_dtype(dtype)
    try:
        yield get_default_dtype()
    finally:
        set_default_dtype(previous)


def accelerator_count() -> int:
    return get_config().accelerator_count


_HANDLER_MARKER = "_tensorcore_handler"


def configure_logging(level: Any = None) -> logging.Handler:
    """Attach a stream handler to the ``tensorcore`` logger.

    Calling this more than once reuses the handler installed by the first call.
    """

    package_logger = logging.getLogger(__name__.rpartition(".")[0])
    if isinstance(level, int) and not isinstance(level, bool):
        level = logging.getLevelName(level)
    resolved = str(level or get_config().log_level).upper()
    if resolved not in _LOG_LEVELS:
        raise InvalidArgumentError(f"Unknown log level '{level}'")

    for handler in package_logger.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            break
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s")
        )
        setattr(handler, _HANDLER_MARKER, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(resolved)
    return handler


__all__ = [
    "Config",
    "get_config",
    "update_config",
    "override",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "accelerator_count",
    "configure_logging",
]
