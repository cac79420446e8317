# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import gc

import examples.device_conversion as dc
import examples.zero_copy_views as zc


def test_zero_copy_views_sees_external_writes():
    before, scaled, released = zc.share_buffer()
    assert before == [100.0, 1.0, 2.0]
    assert scaled == [50.0, 0.5, 1.0]
    gc.collect()
    assert len(released) == 1


def test_device_round_trip():
    result = dc.round_trip()
    assert result["device"] == "cpu"
    assert result["dtype"] == "float64"
    assert result["values"] == [[0.0, -1.0], [2.0, 4.0]]
    assert result["requires_grad"] is True
    assert result["aliased"] is True
    assert result["peak_bytes"] >= 16
