class ValuationError(ValueError):
    """
    Base class for every error raised by the valuation engine.

    Subclasses ValueError so callers that already guard numeric input with
    ``except ValueError`` keep working.
    """


class InvalidParameterError(ValuationError):
    """A parameter is structurally malformed (wrong length, out of domain)."""


class InvalidHorizonError(InvalidParameterError):
    """Years-to-established must be a positive number of years."""

    def __init__(self, years):
        self.years = years
        super().__init__(f"years_to_established must be > 0 (got {years}).")


class DivisionSingularityError(ValuationError):
    """
    The annual failure rate is indistinguishable from 1.

    The risk-adjusted rate r_adj = (r + f) / (1 - f) has no finite value, so the
    risk-adjusted DCF cannot be computed. Callers should report the valuation as
    intractable rather than substitute zero or infinity.
    """

    def __init__(self, failure_rate: float):
        self.failure_rate = failure_rate
        super().__init__(
            f"Annual failure rate {failure_rate!r} leaves no surviving fraction; "
            "risk-adjusted discount rate is undefined."
        )


class UnknownStageError(InvalidParameterError, KeyError):
    """Requested funding stage is not in the preset registry."""

    def __init__(self, stage_key, known=()):
        self.stage_key = stage_key
        self.known = tuple(known)
        super().__init__(f"Unknown stage '{stage_key}'. Use one of {list(self.known)}.")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
