"""RoundPlanner for turning match history into the next round.

The planner wraps the engine with the round bookkeeping a host needs:
working out which round comes next, refusing to pair while the previous
round is still open, dispatching to Swiss or bracket pairing by phase type
and producing pending match records labelled with their round and bracket
position.

Dependencies:
    - pairkit.engine: standings, Swiss and bracket pairing
    - pairkit.common.config: PhaseConfig, Settings
"""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from pairkit.common.config import PhaseConfig, Settings
from pairkit.common.models import CompetitorId, MatchResult, Pairing, StandingRow
from pairkit.engine.elimination import (
    bracket_match_labels,
    generate_elimination_bracket,
    seeded_byes,
)
from pairkit.engine.standings import compute_standings
from pairkit.engine.swiss import bye_recipient, generate_swiss_pairings
from pairkit.rounds.errors import (
    InsufficientCompetitorsError,
    RoundLimitReachedError,
    RoundNotClosedError,
    UnsupportedRoundError,
)
from pairkit.rounds.results import report_result

logger = logging.getLogger(__name__)


@dataclass
class RoundPlan:
    """Pairings of one round and the pending matches created for them."""

    round_number: int
    pairings: list[Pairing]
    matches: list[MatchResult]
    byes: list[CompetitorId] = field(default_factory=list)


class RoundPlanner:
    """Plans the next round of a tournament phase.

    Stateless between calls: every method works only from the roster and
    match history it is given.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the RoundPlanner.

        Args:
            settings: Engine settings. The round-1 randomness source is built
                from ``settings.make_rng()`` unless a plan call passes its own.
        """
        self.settings = settings or Settings()

    def next_round_number(self, matches: Iterable[MatchResult]) -> int:
        """Return the number of the round to pair next.

        Matches without a round number count as round 1.

        Raises:
            RoundNotClosedError: If the latest round has open matches.
        """
        matches = list(matches)
        if not matches:
            return 1

        latest = max(match.round_number or 1 for match in matches)
        open_matches = sum(
            1 for match in matches if (match.round_number or 1) == latest and not match.is_completed
        )
        if open_matches:
            raise RoundNotClosedError(latest, open_matches)
        return latest + 1

    def standings(
        self, competitor_ids: Iterable[CompetitorId], matches: Iterable[MatchResult]
    ) -> list[StandingRow]:
        return compute_standings(competitor_ids, matches)

    def plan_round(
        self,
        phase: PhaseConfig,
        competitor_ids: Iterable[CompetitorId],
        matches: Iterable[MatchResult],
        rng: random.Random | None = None,
        seeding_matches: Iterable[MatchResult] | None = None,
    ) -> RoundPlan:
        """Pair the next round of a phase.

        Args:
            phase: Phase being played.
            competitor_ids: Roster of the phase.
            matches: Every match of the phase so far.
            rng: Randomness source for a Swiss round-1 shuffle.
            seeding_matches: Bracket phases only. Results to seed from, such as
                a preceding Swiss phase. Defaults to ``matches``.

        Returns:
            RoundPlan with pending matches in table order.

        Raises:
            InsufficientCompetitorsError: Fewer than two competitors.
            RoundNotClosedError: Latest round still has open matches.
            RoundLimitReachedError: Swiss phase already played all its rounds.
            UnsupportedRoundError: Bracket phase past its first round.
        """
        roster = list(dict.fromkeys(competitor_ids))
        if len(roster) < 2:
            raise InsufficientCompetitorsError(
                "At least 2 competitors are required to pair a round", min_required=2
            )

        history = list(matches)
        round_number = self.next_round_number(history)

        if phase.type == "swiss":
            if phase.rounds is not None and round_number > phase.rounds:
                raise RoundLimitReachedError(phase.rounds)
            pairings = generate_swiss_pairings(
                roster, history, round_number, rng if rng is not None else self.settings.make_rng()
            )
            bye = bye_recipient(roster, pairings)
            byes = [bye] if bye is not None else []
            positions: list[str | None] = [None] * len(pairings)
        else:
            if round_number > 1:
                raise UnsupportedRoundError(
                    "Only the first round of a bracket phase can be generated automatically"
                )
            seeding = list(seeding_matches) if seeding_matches is not None else history
            pairings = generate_elimination_bracket(roster, seeding, phase.top_cut)
            byes = seeded_byes(roster, seeding, phase.top_cut)
            positions = bracket_match_labels(roster, seeding, phase.top_cut)

        new_matches = [
            MatchResult(
                player1=pairing.player1,
                player2=pairing.player2,
                round_number=round_number,
                bracket_position=position,
            )
            for pairing, position in zip(pairings, positions, strict=True)
        ]

        logger.info(
            f"Planned {phase.type} round {round_number} of phase {phase.name!r}: "
            f"{len(pairings)} matches, {len(byes)} byes"
        )
        return RoundPlan(
            round_number=round_number, pairings=pairings, matches=new_matches, byes=byes
        )

    def report(
        self,
        phase: PhaseConfig,
        match: MatchResult,
        player1_score: int,
        player2_score: int,
        winner: CompetitorId | None = None,
        reported_by: CompetitorId | None = None,
    ) -> MatchResult:
        """Report a result under the phase's match type and confirmation policy."""
        return report_result(
            match,
            player1_score,
            player2_score,
            winner=winner,
            reported_by=reported_by,
            require_confirmation=self.settings.require_confirmation,
            match_type=phase.match_type,
        )
