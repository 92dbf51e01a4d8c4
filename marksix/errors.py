"""Exceptions raised by the Mark Six predictor."""


class MarkSixError(Exception):
    """Base class for predictor errors."""


class DataUnavailable(MarkSixError):
    """No historical draws could be found."""


class StrategyFailure(MarkSixError):
    """A prediction strategy failed while computing a prediction."""


class FetchError(MarkSixError):
    """The HKJC data source could not be reached or returned no draws."""
