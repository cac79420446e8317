# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Moving a tensor between dtypes and emulated accelerator devices."""

from __future__ import annotations

from typing import Dict

import tensorcore as tc
from tensorcore import config


def round_trip(accelerators: int = 2) -> Dict[str, object]:
    with config.override(accelerator_count=accelerators):
        weights = tc.tensor([[0.25, -1.5], [2.75, 4.0]], dtype="float32", requires_grad=True)

        on_device = weights.to("cuda:1")
        as_int = on_device.to(dtype="int32")
        unchanged = as_int.to("cuda:1", "int32")
        back = as_int.cpu().double()

        print("on device:", on_device)
        print("truncated:", as_int)
        print("back on host:", back)

        return {
            "device": str(back.device),
            "dtype": back.dtype,
            "values": back.tolist(),
            "requires_grad": back.requires_grad,
            "aliased": unchanged.data_ptr() == as_int.data_ptr(),
            "peak_bytes": tc.max_memory_allocated("cuda:1"),
        }


def main() -> None:  # pragma: no cover - example script
    print(round_trip())


if __name__ == "__main__":  # pragma: no cover - example script
    main()
