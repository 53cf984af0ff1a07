"""Standings calculation with multi-level tie-breaks.

This module folds completed match results into one standing row per
competitor and ranks the rows.

Scoring:
    Match points are fixed: 3 for a win, 1 for a draw, 0 for a loss.
    Sub-game scores accumulate into games won/lost for both sides whatever
    the match outcome.

Opponent match-win percentage (OMW%):
    For each competitor, the arithmetic mean over every distinct opponent
    met in a completed match of that opponent's ``wins / matches_played``
    (0 for an opponent without matches). This is a single lookahead level;
    it is not the iterated Swiss normalisation.

Ranking:
    1. match points (desc)
    2. OMW%, absent counted as 0 (desc)
    3. games difference (desc)
    4. games won (desc)
    Remaining ties keep roster order, the sort being stable.

Dependencies:
    - pairkit.common.models: MatchResult, StandingRow
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pairkit.common.models import CompetitorId, MatchResult, StandingRow

logger = logging.getLogger(__name__)

WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0


@dataclass
class _Tally:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    match_points: int = 0
    games_won: int = 0
    games_lost: int = 0
    opponents: list[CompetitorId] = field(default_factory=list)

    def add_opponent(self, opponent: CompetitorId) -> None:
        if opponent not in self.opponents:
            self.opponents.append(opponent)


def compute_standings(
    competitor_ids: Iterable[CompetitorId], matches: Iterable[MatchResult]
) -> list[StandingRow]:
    """Compute the ranked standing table.

    Args:
        competitor_ids: Roster of competitors. Iteration order is the final
            tie-break; duplicates are collapsed to their first occurrence.
        matches: Match results of any status. Only completed matches whose
            two players are both on the roster are counted.

    Returns:
        One StandingRow per competitor, best first.

    Example:
        >>> from pairkit.common.models import MatchResult, MatchStatus
        >>> matches = [
        ...     MatchResult(player1="A", player2="B", player1_score=2, player2_score=1,
        ...         winner="A", status=MatchStatus.COMPLETED),
        ... ]
        >>> [row.competitor for row in compute_standings(["C", "B", "A"], matches)]
        ['A', 'B', 'C']

    Negative case:
        >>> compute_standings([], [])
        []
    """
    tallies: dict[CompetitorId, _Tally] = {}
    for competitor in competitor_ids:
        tallies.setdefault(competitor, _Tally())

    skipped = 0
    for match in matches:
        if not match.is_completed:
            continue

        first = tallies.get(match.player1)
        second = tallies.get(match.player2)
        if first is None or second is None:
            skipped += 1
            continue

        first.games_won += match.player1_score
        first.games_lost += match.player2_score
        second.games_won += match.player2_score
        second.games_lost += match.player1_score
        first.add_opponent(match.player2)
        second.add_opponent(match.player1)

        if match.is_draw:
            first.draws += 1
            second.draws += 1
            first.match_points += DRAW_POINTS
            second.match_points += DRAW_POINTS
        else:
            winner, loser = (first, second) if match.winner == match.player1 else (second, first)
            winner.wins += 1
            winner.match_points += WIN_POINTS
            loser.losses += 1
            loser.match_points += LOSS_POINTS

    if skipped:
        logger.debug("Skipped %d completed matches referencing unknown competitors", skipped)

    rows = {
        competitor: StandingRow(
            competitor=competitor,
            wins=tally.wins,
            losses=tally.losses,
            draws=tally.draws,
            match_points=tally.match_points,
            games_won=tally.games_won,
            games_lost=tally.games_lost,
            games_diff=tally.games_won - tally.games_lost,
        )
        for competitor, tally in tallies.items()
    }

    ranked = [
        row.model_copy(
            update={
                "opponent_match_win_percentage": _opponent_match_win_percentage(
                    tallies[competitor].opponents, rows
                )
            }
        )
        for competitor, row in rows.items()
    ]
    return sorted(ranked, key=_ranking_key)


def _opponent_match_win_percentage(
    opponents: list[CompetitorId], rows: dict[CompetitorId, StandingRow]
) -> float | None:
    """Mean of the opponents' own match-win rates, None without opponents."""
    if not opponents:
        return None
    return sum(rows[opponent].match_win_percentage for opponent in opponents) / len(opponents)


def _ranking_key(row: StandingRow) -> tuple[int, float, int, int]:
    omw = row.opponent_match_win_percentage or 0.0
    return (-row.match_points, -omw, -row.games_diff, -row.games_won)
