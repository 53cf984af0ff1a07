"""Single-elimination bracket seeding and labelling.

Seeds come from the standings over the whole supplied history. The bracket
is sized to the next power of two and the first round uses classic seeding
(1 vs N, 2 vs N-1, ...). Seeds whose opponent slot is empty advance on a
bye and get no pairing.
"""

import logging
from collections.abc import Iterable

from pairkit.common.models import CompetitorId, MatchResult, Pairing
from pairkit.engine.standings import compute_standings

logger = logging.getLogger(__name__)


def bracket_size(competitor_count: int) -> int:
    """Smallest power of two that holds competitor_count entrants.

    Example:
        >>> bracket_size(5)
        8
        >>> bracket_size(8)
        8
    """
    if competitor_count <= 1:
        return 1
    return 1 << (competitor_count - 1).bit_length()


def bracket_round_count(competitor_count: int) -> int:
    """Number of rounds a single-elimination bracket needs, ceil(log2(n)).

    Example:
        >>> [bracket_round_count(n) for n in (1, 2, 5, 8, 9)]
        [0, 1, 3, 3, 4]
    """
    if competitor_count <= 1:
        return 0
    return (competitor_count - 1).bit_length()


def bracket_position_label(match_index: int, total_matches_in_round: int) -> str:
    """Display label of a match inside its round.

    The ladder is fixed: ``F`` for a final, ``SF{n}``, ``QF{n}`` and
    ``R16-{n}`` for rounds of 2, 4 and 8 matches, ``R{n}`` for anything else,
    where n is the 1-based match number.
    """
    number = match_index + 1
    if total_matches_in_round == 1:
        return "F"
    if total_matches_in_round == 2:
        return f"SF{number}"
    if total_matches_in_round == 4:
        return f"QF{number}"
    if total_matches_in_round == 8:
        return f"R16-{number}"
    return f"R{number}"


def _seeds(
    competitor_ids: Iterable[CompetitorId],
    match_history: Iterable[MatchResult],
    top_cut: int | None,
) -> list[CompetitorId]:
    seeds = [row.competitor for row in compute_standings(competitor_ids, match_history)]
    if top_cut is not None and 0 < top_cut < len(seeds):
        seeds = seeds[:top_cut]
    return seeds


def _first_round_slots(seeds: list[CompetitorId]) -> list[tuple[int, Pairing]]:
    size = bracket_size(len(seeds))
    return [
        (top_seed, Pairing(player1=seeds[top_seed], player2=seeds[size - 1 - top_seed]))
        for top_seed in range(size // 2)
        if size - 1 - top_seed < len(seeds)
    ]


def generate_elimination_bracket(
    competitor_ids: Iterable[CompetitorId],
    match_history: Iterable[MatchResult],
    top_cut: int | None = None,
) -> list[Pairing]:
    """Generate first-round pairings of a single-elimination bracket.

    Args:
        competitor_ids: Roster of competitors.
        match_history: Results used to seed the bracket.
        top_cut: Optional number of top seeds admitted to the bracket.
            Ignored unless 0 < top_cut < roster size.

    Returns:
        Pairings with the higher seed as player1, in bracket order.

    Example:
        >>> pairings = generate_elimination_bracket(["A", "B", "C", "D"], [])
        >>> [p.as_tuple() for p in pairings]
        [('A', 'D'), ('B', 'C')]
    """
    seeds = _seeds(competitor_ids, match_history, top_cut)
    count = len(seeds)
    if count < 2:
        return []

    size = bracket_size(count)
    pairings = [pairing for _, pairing in _first_round_slots(seeds)]

    logger.debug(
        "Seeded bracket of %d for %d competitors: %d matches, %d byes",
        size,
        count,
        len(pairings),
        size - count,
    )
    return pairings


def seeded_byes(
    competitor_ids: Iterable[CompetitorId],
    match_history: Iterable[MatchResult],
    top_cut: int | None = None,
) -> list[CompetitorId]:
    """Seeds that advance past the first round without an opponent."""
    seeds = _seeds(competitor_ids, match_history, top_cut)
    if len(seeds) < 2:
        return []
    size = bracket_size(len(seeds))
    return [seeds[i] for i in range(size // 2) if size - 1 - i >= len(seeds)]


def bracket_match_labels(
    competitor_ids: Iterable[CompetitorId],
    match_history: Iterable[MatchResult],
    top_cut: int | None = None,
) -> list[str]:
    """Position labels of the first-round matches, in bracket order.

    Matches are numbered by their slot in the full round, bye slots
    included, so the labels line up with ``generate_elimination_bracket``.

    Example:
        >>> bracket_match_labels(["A", "B", "C", "D", "E"], [])
        ['QF4']
    """
    seeds = _seeds(competitor_ids, match_history, top_cut)
    if len(seeds) < 2:
        return []
    slots_in_round = bracket_size(len(seeds)) // 2
    return [
        bracket_position_label(slot, slots_in_round) for slot, _ in _first_round_slots(seeds)
    ]
