"""Result reporting transitions.

A pending match becomes completed when a score is reported, or goes
through ``in_progress`` first when the event requires the opponent to
confirm the report. Every transition returns a new MatchResult; the
input record is never changed.
"""

import logging

from pairkit.common.models import CompetitorId, MatchResult, MatchStatus, MatchType
from pairkit.rounds.errors import ResultReportError

logger = logging.getLogger(__name__)


def report_result(
    match: MatchResult,
    player1_score: int,
    player2_score: int,
    winner: CompetitorId | None = None,
    reported_by: CompetitorId | None = None,
    require_confirmation: bool = False,
    match_type: MatchType | None = None,
) -> MatchResult:
    """Record the score of a match.

    Args:
        match: The match being reported. Must not be completed yet.
        player1_score: Sub-games won by player1.
        player2_score: Sub-games won by player2.
        winner: Winning competitor, None for a draw.
        reported_by: Who reported the result.
        require_confirmation: Leave the match ``in_progress`` until
            confirm_result() is called.
        match_type: Best-of format; when given, neither side may score more
            sub-games than it takes to win the match.

    Returns:
        A validated copy of the match carrying the reported result.

    Raises:
        ResultReportError: If the match is already completed or a score
            does not fit the match type.
        pydantic.ValidationError: If the winner is not one of the players or a
            score is negative.
    """
    if match.is_completed:
        raise ResultReportError(f"Match {match.player1} vs {match.player2} is already completed")
    if match_type is not None and max(player1_score, player2_score) > match_type.games_to_win:
        raise ResultReportError(
            f"Score {player1_score}-{player2_score} is not possible in a {match_type} match"
        )

    status = MatchStatus.IN_PROGRESS if require_confirmation else MatchStatus.COMPLETED
    update = match.model_dump()
    update.update(
        player1_score=player1_score,
        player2_score=player2_score,
        winner=winner,
        status=status,
        reported_by=reported_by,
        confirmed_by=None if require_confirmation else reported_by,
    )
    reported = MatchResult.model_validate(update)

    logger.debug(
        "Reported %s %d-%d %s (%s)",
        match.player1,
        player1_score,
        player2_score,
        match.player2,
        status,
    )
    return reported


def confirm_result(match: MatchResult, confirmed_by: CompetitorId) -> MatchResult:
    """Confirm a reported result, completing the match.

    Raises:
        ResultReportError: If the match is not awaiting confirmation or the
            reporter tries to confirm their own report.
    """
    if match.status != MatchStatus.IN_PROGRESS:
        raise ResultReportError(
            f"Match {match.player1} vs {match.player2} is not awaiting confirmation "
            f"(status: {match.status})"
        )
    if match.reported_by is not None and match.reported_by == confirmed_by:
        raise ResultReportError("A result cannot be confirmed by the competitor who reported it")

    return match.model_copy(update={"confirmed_by": confirmed_by, "status": MatchStatus.COMPLETED})
