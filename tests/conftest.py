"""Pytest configuration.

Ensures the project root is on sys.path so 'import prisoners_puzzle' works
from a plain checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(123)
