from pairkit.engine.elimination import (
    bracket_match_labels,
    bracket_position_label,
    bracket_round_count,
    bracket_size,
    generate_elimination_bracket,
    seeded_byes,
)
from pairkit.engine.history import PlayedPairs
from pairkit.engine.standings import DRAW_POINTS, LOSS_POINTS, WIN_POINTS, compute_standings
from pairkit.engine.swiss import (
    SwissPairingGenerator,
    bye_recipient,
    fisher_yates_shuffle,
    generate_swiss_pairings,
)

__all__ = [
    "DRAW_POINTS",
    "LOSS_POINTS",
    "WIN_POINTS",
    "PlayedPairs",
    "SwissPairingGenerator",
    "bracket_match_labels",
    "bracket_position_label",
    "bracket_round_count",
    "bracket_size",
    "bye_recipient",
    "compute_standings",
    "fisher_yates_shuffle",
    "generate_elimination_bracket",
    "generate_swiss_pairings",
    "seeded_byes",
]
