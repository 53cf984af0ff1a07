from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Opaque competitor token; only used as a dict key and for equality.
CompetitorId = str | int


class MatchStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DISPUTED = "disputed"


class MatchType(StrEnum):
    """Best-of format of a match."""

    BO1 = "BO1"
    BO2 = "BO2"
    BO3 = "BO3"
    BO5 = "BO5"

    @property
    def games_to_win(self) -> int:
        """Number of sub-game wins that decide a match of this type."""
        return _GAMES_TO_WIN[self]


_GAMES_TO_WIN = {
    MatchType.BO1: 1,
    MatchType.BO2: 2,
    MatchType.BO3: 2,
    MatchType.BO5: 3,
}


class MatchResult(BaseModel):
    """A decided or pending contest between exactly two competitors.

    Records are immutable; status transitions produce copies via
    ``model_copy``. A winner that is not one of the two players is rejected
    at construction time.
    """

    model_config = ConfigDict(frozen=True)

    player1: CompetitorId
    player2: CompetitorId
    player1_score: int = Field(default=0, ge=0)
    player2_score: int = Field(default=0, ge=0)
    winner: CompetitorId | None = None
    status: MatchStatus = MatchStatus.PENDING
    round_number: int | None = None
    bracket_position: str | None = None
    reported_by: CompetitorId | None = None
    confirmed_by: CompetitorId | None = None

    @field_validator("round_number")
    @classmethod
    def validate_round_number(cls, v: int | None) -> int | None:
        """Validate round_number is 1-based."""
        if v is not None and v < 1:
            msg = "round_number must be at least 1"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_players(self) -> "MatchResult":
        """Validate the two sides differ and the winner is one of them."""
        if self.player1 == self.player2:
            msg = "player1 and player2 must be different competitors"
            raise ValueError(msg)
        if self.winner is not None and self.winner not in (self.player1, self.player2):
            msg = f"winner {self.winner!r} is neither player1 nor player2"
            raise ValueError(msg)
        return self

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class Pairing(BaseModel):
    """One scheduled contest for the next round."""

    model_config = ConfigDict(frozen=True)

    player1: CompetitorId
    player2: CompetitorId

    def as_tuple(self) -> tuple[CompetitorId, CompetitorId]:
        return (self.player1, self.player2)


class StandingRow(BaseModel):
    """Aggregated record for one competitor, rebuilt on every computation."""

    model_config = ConfigDict(frozen=True)

    competitor: CompetitorId
    wins: int = 0
    losses: int = 0
    draws: int = 0
    match_points: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_diff: int = 0
    opponent_match_win_percentage: float | None = None

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def match_win_percentage(self) -> float:
        """Share of matches won, 0.0 when no matches were played."""
        played = self.matches_played
        return self.wins / played if played > 0 else 0.0
