"""Match history lookups.

The history is only ever asked one question: have these two competitors
already met in a completed match? Pairs are stored unordered so that
``(a, b)`` and ``(b, a)`` are the same encounter.
"""

from collections.abc import Iterable

from pairkit.common.models import CompetitorId, MatchResult


class PlayedPairs:
    """Unordered-pair adjacency built from completed match results."""

    def __init__(self, matches: Iterable[MatchResult]):
        self._pairs: set[frozenset[CompetitorId]] = {
            frozenset((match.player1, match.player2)) for match in matches if match.is_completed
        }

    def have_played(self, a: CompetitorId, b: CompetitorId) -> bool:
        """Return True if a and b have faced each other in a completed match.

        Example:
            >>> from pairkit.common.models import MatchResult, MatchStatus
            >>> pairs = PlayedPairs([
            ...     MatchResult(player1="A", player2="B", winner="A", status=MatchStatus.COMPLETED),
            ... ])
            >>> pairs.have_played("B", "A")
            True
            >>> pairs.have_played("A", "C")
            False
        """
        return frozenset((a, b)) in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)
