"""Reference corpus loading utilities."""

import logging
from pathlib import Path

import pandas as pd

from property_market.estimator.errors import CorpusUnavailable

logger = logging.getLogger(__name__)

FEATURE_COLUMNS = [
    "jumlah_lantai",
    "kamar_tidur",
    "kamar_mandi",
    "luas_bangunan",
    "luas_tanah",
    "jumlah_carport",
    "jumlah_garage",
]
PRICE_COLUMNS = ["price_value", "price_currency", "price_unit"]
CORPUS_COLUMNS = FEATURE_COLUMNS + PRICE_COLUMNS


def read_corpus_csv(path: str | Path) -> pd.DataFrame:
    """Read the raw corpus CSV with every cell kept as a string."""
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        # Zero-byte file: no header, no rows
        return pd.DataFrame(columns=CORPUS_COLUMNS, dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise CorpusUnavailable(f"Cannot read reference corpus {path}: {e}") from e


def prepare_corpus(raw: pd.DataFrame) -> pd.DataFrame:
    """Validate columns and convert feature cells to floats.

    Price cells stay strings; they are parsed only for the rows that end up
    among the nearest neighbors.
    """
    missing = [col for col in CORPUS_COLUMNS if col not in raw.columns]
    if missing:
        raise CorpusUnavailable(f"Reference corpus is missing columns: {missing}")

    corpus = raw[CORPUS_COLUMNS].reset_index(drop=True).copy()
    for col in FEATURE_COLUMNS:
        try:
            corpus[col] = pd.to_numeric(corpus[col].str.strip(), errors="raise").astype(float)
        except (ValueError, TypeError) as e:
            raise CorpusUnavailable(f"Non-numeric value in feature column '{col}': {e}") from e
        if corpus[col].isna().any():
            raise CorpusUnavailable(f"Missing value in feature column '{col}'")
    return corpus


def load_reference_corpus(path: str | Path) -> pd.DataFrame:
    """Load the reference corpus used by the price estimator."""
    corpus = prepare_corpus(read_corpus_csv(path))
    logger.info(f"Loaded reference corpus from {path}: {corpus.shape}")
    return corpus
