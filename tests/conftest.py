"""Pytest configuration."""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Add src and the project root to path for imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from property_market.data.loader import CORPUS_COLUMNS, prepare_corpus


def make_corpus(rows: list[tuple]) -> pd.DataFrame:
    """Build a corpus the way the loader does, from string cells."""
    raw = pd.DataFrame([[str(v) for v in row] for row in rows], columns=CORPUS_COLUMNS)
    return prepare_corpus(raw)


@pytest.fixture
def sample_corpus():
    """Five reference houses; row 0 is an exact match for the standard query."""
    return make_corpus([
        (1, 2, 1, 60, 72, 1, 0, "500000000", "IDR", "juta"),
        (1, 2, 1, 65, 80, 1, 0, "550000000", "IDR", "juta"),
        (2, 3, 2, 90, 100, 1, 0, "750000000", "IDR", "juta"),
        (2, 4, 3, 150, 160, 2, 1, "1.5", "IDR", "miliar"),
        (1, 3, 1, 55, 70, 1, 0, "480000000", "IDR", "juta"),
    ])


@pytest.fixture
def standard_query():
    return {
        "jumlah_lantai": 1,
        "kamar_tidur": 2,
        "kamar_mandi": 1,
        "luas_bangunan": 60,
        "luas_tanah": 72,
        "jumlah_carport": 1,
        "jumlah_garage": 0,
    }
