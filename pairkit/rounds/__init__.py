from pairkit.rounds.errors import (
    InsufficientCompetitorsError,
    ResultReportError,
    RoundLimitReachedError,
    RoundNotClosedError,
    RoundPlanningError,
    UnsupportedRoundError,
)
from pairkit.rounds.results import confirm_result, report_result
from pairkit.rounds.round_service import RoundPlan, RoundPlanner

__all__ = [
    "InsufficientCompetitorsError",
    "ResultReportError",
    "RoundLimitReachedError",
    "RoundNotClosedError",
    "RoundPlan",
    "RoundPlanner",
    "RoundPlanningError",
    "UnsupportedRoundError",
    "confirm_result",
    "report_result",
]
