# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Viewing memory owned by another library without copying it.

A ctypes array stands in for a buffer handed over by C code. The tensor reads
the caller's memory directly, so writes made through ctypes show up in the
tensor, while arithmetic produces fresh tensors that own their storage.
"""

from __future__ import annotations

import ctypes
from typing import List, Tuple

import tensorcore as tc


def share_buffer(n: int = 6) -> Tuple[List[float], List[float], List[int]]:
    buffer = (ctypes.c_float * n)(*range(n))
    released: List[int] = []

    view = tc.from_blob(
        buffer, n, "float32", shape=(2, n // 2), requires_grad=False, deleter=released.append
    )
    print("view:", view)
    print("borrowed:", view.is_borrowed, "at", hex(view.data_ptr()))

    buffer[0] = 100.0
    before = view.tolist()[0]

    scaled = view * 0.5
    print("scaled:", scaled)

    del view
    return before, scaled.tolist()[0], released


def main() -> None:  # pragma: no cover - example script
    tc.configure_logging("DEBUG")
    share_buffer()


if __name__ == "__main__":  # pragma: no cover - example script
    main()
