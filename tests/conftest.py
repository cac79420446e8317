# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tensorcore import config  # noqa: E402


@pytest.fixture
def accelerators():
    """Expose two emulated accelerator devices for the duration of a test."""
    with config.override(accelerator_count=2) as active:
        yield active
