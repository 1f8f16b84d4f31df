"""Exceptions raised while estimating a price range."""


class EstimationError(Exception):
    """Base class for estimation failures."""


class CorpusUnavailable(EstimationError):
    """The reference corpus could not be read or has the wrong shape."""


class EmptyCorpus(EstimationError):
    """The reference corpus holds no rows, so no range can be derived."""


class InvalidPriceFormat(EstimationError):
    """A ``price_value`` cell is not a decimal number."""
