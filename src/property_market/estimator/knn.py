"""Nearest-neighbor price range estimation."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from property_market.data.loader import FEATURE_COLUMNS
from property_market.estimator.errors import EmptyCorpus, InvalidPriceFormat

logger = logging.getLogger(__name__)

N_NEIGHBORS = 3
ZERO_PRICE = "Rp. 0"


@dataclass(frozen=True)
class PriceEstimate:
    """Formatted price range plus how much support it has."""

    price_range: str
    neighbor_count: int
    max_distance: float | None


def has_any_feature(query: Mapping) -> bool:
    """True when at least one of the seven features is supplied."""
    return any(query.get(col) is not None for col in FEATURE_COLUMNS)


def to_feature_value(value) -> float:
    """Coerce a supplied query value to float; anything non-numeric is NaN."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def query_vector(query: Mapping) -> pd.Series:
    """Supplied features only, indexed by column name."""
    return pd.Series(
        {col: to_feature_value(query[col]) for col in FEATURE_COLUMNS if query.get(col) is not None},
        dtype=float,
    )


def compute_distances(corpus: pd.DataFrame, query: Mapping) -> pd.Series:
    """Euclidean distance from the query to every corpus row.

    Absent features are left out of the sum. A supplied but non-numeric
    feature yields NaN for every row (incomputable distance).
    """
    q = query_vector(query)
    diffs = corpus[list(q.index)].sub(q, axis=1)
    return np.sqrt((diffs**2).sum(axis=1, skipna=False, min_count=1))


def select_nearest(corpus: pd.DataFrame, query: Mapping, k: int = N_NEIGHBORS) -> pd.DataFrame:
    """Return the k closest rows, with a ``distance`` column.

    Sorting is stable, so equal distances keep corpus order. Incomputable
    (NaN) distances rank after every computable one.
    """
    ranked = corpus.assign(distance=compute_distances(corpus, query))
    ranked = ranked.sort_values("distance", kind="stable", na_position="last")
    return ranked.head(k)


def parse_price(value) -> float:
    """Strict decimal parse of a ``price_value`` cell."""
    try:
        price = float(str(value).strip())
    except ValueError as e:
        raise InvalidPriceFormat(f"Invalid price_value: {value!r}") from e
    if not math.isfinite(price):
        raise InvalidPriceFormat(f"Invalid price_value: {value!r}")
    return price


def format_price_range(neighbors: pd.DataFrame) -> str:
    """Format min and max price among the neighbors as a display range."""
    if neighbors.empty:
        raise EmptyCorpus("No reference rows to derive a price range from")

    prices = np.array([parse_price(v) for v in neighbors["price_value"]])
    # argmin/argmax return the first occurrence on ties
    min_row = neighbors.iloc[int(prices.argmin())]
    max_row = neighbors.iloc[int(prices.argmax())]
    min_price = prices.min()
    max_price = prices.max()

    return (
        f"{min_row['price_currency']}. {min_price:.2f} {min_row['price_unit']} - "
        f"{max_row['price_currency']}. {max_price:.2f} {max_row['price_unit']}"
    )


def estimate_price(corpus: pd.DataFrame, query: Mapping, k: int = N_NEIGHBORS) -> PriceEstimate:
    """Estimate a price range from the k nearest reference rows."""
    if corpus.empty:
        raise EmptyCorpus("Reference corpus has no rows")

    neighbors = select_nearest(corpus, query, k=k)
    price_range = format_price_range(neighbors)

    max_distance = float(neighbors["distance"].max(skipna=False))
    # NaN (incomputable) and inf (overflow) are both reported as unknown
    if not math.isfinite(max_distance):
        max_distance = None

    logger.info(f"Estimated {price_range} from {len(neighbors)} neighbors (max distance: {max_distance})")
    return PriceEstimate(
        price_range=price_range,
        neighbor_count=len(neighbors),
        max_distance=max_distance,
    )
