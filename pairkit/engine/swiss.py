"""Swiss-system pairing.

Round 1 pairs a Fisher-Yates shuffle of the roster consecutively. Later
rounds walk the standings from the top and pair each competitor with the
highest-ranked remaining competitor they have not met yet, falling back to
a rematch with the next available competitor when no fresh opponent is
left. An odd competitor out receives an implicit bye: no pairing is
emitted for them.

The pairing is greedy on purpose; it is not a maximum matching and must
not be swapped for one since that changes who plays whom.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from pairkit.common.models import CompetitorId, MatchResult, Pairing
from pairkit.engine.history import PlayedPairs
from pairkit.engine.standings import compute_standings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a shuffled copy of items; the input is left untouched.

    Args:
        items: Items to shuffle.
        rng: Randomness source. Pass ``random.Random(seed)`` for a
            reproducible order.

    Returns:
        New list holding the same items in shuffled order.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_swiss_pairings(
    competitor_ids: Iterable[CompetitorId],
    match_history: Iterable[MatchResult],
    round_number: int,
    rng: random.Random | None = None,
) -> list[Pairing]:
    """Generate the pairings of a Swiss round.

    Args:
        competitor_ids: Roster of competitors, in a fixed order.
        match_history: Results of all prior rounds. Only completed matches
            count, both for standings and for rematch avoidance.
        round_number: 1-based number of the round being paired.
        rng: Randomness source for the round-1 shuffle. A fresh
            OS-seeded generator is used when omitted.

    Returns:
        Pairings in table order. A competitor absent from the list has a bye.

    Example:
        >>> import random
        >>> pairings = generate_swiss_pairings(["A", "B", "C"], [], 1, random.Random(7))
        >>> len(pairings)
        1

    Negative case:
        >>> generate_swiss_pairings(["A"], [], 2)
        []
    """
    roster = list(dict.fromkeys(competitor_ids))
    if len(roster) < 2:
        return []

    if round_number <= 1:
        return _pair_first_round(roster, rng if rng is not None else random.Random())

    history = list(match_history)
    ranked = [row.competitor for row in compute_standings(roster, history)]
    return _pair_by_standing(ranked, PlayedPairs(history))


def _pair_first_round(roster: list[CompetitorId], rng: random.Random) -> list[Pairing]:
    shuffled = fisher_yates_shuffle(roster, rng)
    pairings = [
        Pairing(player1=shuffled[i], player2=shuffled[i + 1])
        for i in range(0, len(shuffled) - 1, 2)
    ]
    if len(shuffled) % 2 == 1:
        logger.debug("Round 1 bye: %s", shuffled[-1])
    return pairings


def _pair_by_standing(ranked: list[CompetitorId], played: PlayedPairs) -> list[Pairing]:
    available = list(ranked)
    pairings: list[Pairing] = []

    while len(available) >= 2:
        player1 = available.pop(0)

        opponent_index = next(
            (i for i, other in enumerate(available) if not played.have_played(player1, other)),
            None,
        )
        if opponent_index is None:
            opponent_index = 0
            logger.info(
                "No unplayed opponent left for %s, pairing rematch with %s",
                player1,
                available[0],
            )

        player2 = available.pop(opponent_index)
        pairings.append(Pairing(player1=player1, player2=player2))

    if available:
        logger.debug("Bye: %s", available[0])

    return pairings


def bye_recipient(
    competitor_ids: Iterable[CompetitorId], pairings: Iterable[Pairing]
) -> CompetitorId | None:
    """Return the competitor left without an opponent, if any."""
    paired: set[CompetitorId] = set()
    for pairing in pairings:
        paired.update(pairing.as_tuple())
    return next((c for c in competitor_ids if c not in paired), None)


class SwissPairingGenerator:
    """Swiss pairing bound to one randomness source.

    Hosts that pair many rounds of the same event can hold one instance so
    the round-1 shuffle draws from a source they own instead of module
    state.
    """

    def __init__(self, rng: random.Random | None = None):
        """Initialize SwissPairingGenerator.

        Args:
            rng: Randomness source for round-1 shuffles. A fresh OS-seeded
                generator is created if not provided.
        """
        self._rng = rng if rng is not None else random.Random()

    def generate(
        self,
        competitor_ids: Iterable[CompetitorId],
        match_history: Iterable[MatchResult],
        round_number: int,
    ) -> list[Pairing]:
        return generate_swiss_pairings(competitor_ids, match_history, round_number, self._rng)
