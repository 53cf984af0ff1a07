"""Exception classes for round planning and result reporting."""


class RoundPlanningError(Exception):
    """Base exception for round planning errors."""

    pass


class RoundNotClosedError(RoundPlanningError):
    """Raised when the latest round still has matches that are not completed."""

    def __init__(self, round_number: int, open_matches: int) -> None:
        self.round_number = round_number
        self.open_matches = open_matches
        super().__init__(
            f"All matches of round {round_number} must be completed before pairing the "
            f"next round ({open_matches} still open)"
        )


class RoundLimitReachedError(RoundPlanningError):
    """Raised when a Swiss phase has already generated all of its rounds."""

    def __init__(self, max_rounds: int) -> None:
        self.max_rounds = max_rounds
        super().__init__(f"All {max_rounds} rounds have already been generated")


class UnsupportedRoundError(RoundPlanningError):
    """Raised when a bracket phase is asked to pair a round after the first."""

    pass


class InsufficientCompetitorsError(RoundPlanningError):
    """Raised when there are too few competitors to pair a round."""

    def __init__(self, message: str, min_required: int | None = None) -> None:
        self.min_required = min_required
        super().__init__(message)


class ResultReportError(Exception):
    """Raised when a result report or confirmation is not allowed."""

    pass
