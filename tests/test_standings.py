"""Tests for standings calculation."""

import pytest
from pydantic import ValidationError

from pairkit.common.models import MatchResult, MatchStatus
from pairkit.engine.standings import DRAW_POINTS, WIN_POINTS, compute_standings


def _completed(p1, p2, s1=0, s2=0, winner=None) -> MatchResult:
    return MatchResult(
        player1=p1,
        player2=p2,
        player1_score=s1,
        player2_score=s2,
        winner=winner,
        status=MatchStatus.COMPLETED,
    )


def _order(rows) -> list:
    return [row.competitor for row in rows]


class TestComputeStandingsDegenerate:
    """Tests for empty and match-free inputs."""

    def test_empty_roster_returns_empty_list(self):
        """Empty roster returns no rows."""
        assert compute_standings([], []) == []

    def test_no_matches_returns_zero_rows_in_roster_order(self):
        """Without matches every row is zero and roster order is kept."""
        rows = compute_standings(["C", "A", "B"], [])

        assert _order(rows) == ["C", "A", "B"]
        for row in rows:
            assert row.wins == row.losses == row.draws == 0
            assert row.match_points == 0
            assert row.games_won == row.games_lost == row.games_diff == 0
            assert row.opponent_match_win_percentage is None

    def test_duplicate_roster_entries_are_collapsed(self):
        """A competitor listed twice gets a single row."""
        rows = compute_standings(["A", "B", "A"], [])
        assert _order(rows) == ["A", "B"]


class TestComputeStandingsAggregation:
    """Tests for folding match results into rows."""

    def test_win_awards_three_points_and_games(self):
        """Winner gains 3 points, loser gets a loss, games go to each side."""
        rows = compute_standings(["A", "B"], [_completed("A", "B", 2, 1, winner="A")])
        by_id = {row.competitor: row for row in rows}

        assert by_id["A"].wins == 1
        assert by_id["A"].match_points == WIN_POINTS
        assert by_id["A"].games_won == 2
        assert by_id["A"].games_lost == 1
        assert by_id["A"].games_diff == 1
        assert by_id["B"].losses == 1
        assert by_id["B"].match_points == 0
        assert by_id["B"].games_won == 1
        assert by_id["B"].games_lost == 2
        assert by_id["B"].games_diff == -1

    def test_player2_win_is_attributed_to_player2(self):
        """A win by the second side is credited to the second side."""
        rows = compute_standings(["A", "B"], [_completed("A", "B", 0, 2, winner="B")])
        by_id = {row.competitor: row for row in rows}

        assert by_id["B"].wins == 1
        assert by_id["B"].games_won == 2
        assert by_id["A"].losses == 1
        assert _order(rows) == ["B", "A"]

    def test_draw_awards_one_point_each(self):
        """Draw gives both competitors a draw and one point."""
        rows = compute_standings(["A", "B"], [_completed("A", "B", 1, 1)])

        for row in rows:
            assert row.draws == 1
            assert row.match_points == DRAW_POINTS
            assert row.games_won == 1
            assert row.games_lost == 1

    def test_pending_matches_are_ignored(self):
        """Only completed matches are counted."""
        pending = MatchResult(player1="A", player2="B", player1_score=2, winner="A")
        in_progress = MatchResult(
            player1="A", player2="B", player1_score=2, winner="A", status=MatchStatus.IN_PROGRESS
        )

        rows = compute_standings(["A", "B"], [pending, in_progress])

        assert all(row.match_points == 0 for row in rows)
        assert all(row.opponent_match_win_percentage is None for row in rows)

    def test_unknown_competitor_is_skipped(self):
        """Matches referencing a competitor outside the roster are skipped."""
        rows = compute_standings(["A", "B"], [_completed("A", "Z", 2, 0, winner="A")])

        assert [row.competitor for row in rows] == ["A", "B"]
        assert all(row.match_points == 0 for row in rows)
        assert all(row.games_won == 0 for row in rows)

    def test_integer_identifiers(self):
        """Integer competitor identifiers work as map keys."""
        rows = compute_standings([1, 2], [_completed(1, 2, 0, 2, winner=2)])
        assert _order(rows) == [2, 1]

    def test_rows_are_immutable(self):
        """Standing rows cannot be changed after computation."""
        row = compute_standings(["A"], [])[0]
        with pytest.raises(ValidationError):
            row.wins = 5  # type: ignore[misc]


class TestPointConservation:
    """Total match points follow from the number of matches."""

    def test_decisive_matches_total_three_per_match(self):
        """All-decisive sets total 3 points per match."""
        matches = [
            _completed("A", "B", 2, 0, winner="A"),
            _completed("C", "D", 1, 2, winner="D"),
            _completed("A", "D", 2, 1, winner="A"),
            _completed("B", "C", 0, 2, winner="C"),
        ]
        rows = compute_standings(["A", "B", "C", "D"], matches)
        assert sum(row.match_points for row in rows) == 3 * len(matches)

    def test_draws_total_two_per_match(self):
        """All-draw sets total 2 points per match."""
        matches = [
            _completed("A", "B", 1, 1),
            _completed("C", "D"),
            _completed("A", "C", 1, 1),
        ]
        rows = compute_standings(["A", "B", "C", "D"], matches)
        assert sum(row.match_points for row in rows) == 2 * len(matches)


class TestOpponentMatchWinPercentage:
    """Tests for the OMW% tie-break metric."""

    def test_omw_values(self):
        """OMW% is the mean of opponents' own win rates."""
        matches = [
            _completed("A", "B", 1, 0, winner="A"),
            _completed("C", "D", 1, 0, winner="C"),
            _completed("B", "E", 1, 0, winner="B"),
        ]
        rows = compute_standings(["E", "D", "C", "B", "A"], matches)
        omw = {row.competitor: row.opponent_match_win_percentage for row in rows}

        assert omw["A"] == pytest.approx(0.5)
        assert omw["B"] == pytest.approx(0.5)
        assert omw["C"] == pytest.approx(0.0)
        assert omw["D"] == pytest.approx(1.0)
        assert omw["E"] == pytest.approx(0.5)

    def test_omw_breaks_match_point_ties(self):
        """Equal match points are ordered by OMW% before games difference."""
        matches = [
            _completed("A", "B", 1, 0, winner="A"),
            _completed("C", "D", 1, 0, winner="C"),
            _completed("B", "E", 1, 0, winner="B"),
        ]
        rows = compute_standings(["E", "D", "C", "B", "A"], matches)
        assert _order(rows) == ["A", "B", "C", "D", "E"]

    def test_omw_counts_each_opponent_once(self):
        """A repeated opponent contributes once to the mean."""
        matches = [
            _completed("A", "B", 2, 0, winner="A"),
            _completed("A", "B", 2, 0, winner="A"),
            _completed("C", "A", 2, 0, winner="C"),
        ]
        rows = compute_standings(["A", "B", "C"], matches)
        by_id = {row.competitor: row for row in rows}

        # B is 0/2 and C is 1/1
        assert by_id["A"].opponent_match_win_percentage == pytest.approx(0.5)

    def test_omw_is_one_level_only(self):
        """OMW% uses opponents' raw win rates, not their OMW%."""
        matches = [_completed("A", "B", 1, 0, winner="A"), _completed("B", "C", 1, 1)]
        rows = compute_standings(["A", "B", "C"], matches)
        by_id = {row.competitor: row for row in rows}

        # B: 0 wins out of 2 matches
        assert by_id["A"].opponent_match_win_percentage == pytest.approx(0.0)
        # C: 0 wins out of 1 match, A: 1 win out of 1 match
        assert by_id["B"].opponent_match_win_percentage == pytest.approx(0.5)

    def test_omw_matches_opponent_rows(self):
        """Each OMW% equals the mean of the opponents' reported match-win rates."""
        matches = [
            _completed("A", "B", 2, 1, winner="A"),
            _completed("C", "D", 1, 1),
            _completed("A", "C", 0, 2, winner="C"),
            _completed("B", "D", 2, 0, winner="B"),
        ]
        rows = compute_standings(["A", "B", "C", "D"], matches)
        by_id = {row.competitor: row for row in rows}
        opponents = {"A": ["B", "C"], "B": ["A", "D"], "C": ["D", "A"], "D": ["C", "B"]}

        for competitor, met in opponents.items():
            expected = sum(by_id[o].match_win_percentage for o in met) / len(met)
            assert by_id[competitor].opponent_match_win_percentage == pytest.approx(expected)
        assert by_id["A"].opponent_match_win_percentage == pytest.approx(0.5)


class TestTieBreakChain:
    """Tests for the ranking order."""

    def test_games_diff_breaks_equal_points_and_omw(self):
        """Higher games difference ranks first when points and OMW% tie."""
        matches = [
            _completed("A", "C", 2, 0, winner="A"),
            _completed("B", "D", 2, 1, winner="B"),
        ]
        rows = compute_standings(["B", "A", "C", "D"], matches)
        by_id = {row.competitor: row for row in rows}

        assert by_id["A"].match_points == by_id["B"].match_points
        assert by_id["A"].opponent_match_win_percentage == by_id["B"].opponent_match_win_percentage
        assert _order(rows) == ["A", "B", "D", "C"]

    def test_games_won_breaks_equal_diff(self):
        """Higher games won ranks first when games difference also ties."""
        matches = [
            _completed("A", "C", 2, 1, winner="A"),
            _completed("B", "D", 1, 0, winner="B"),
        ]
        rows = compute_standings(["B", "A", "C", "D"], matches)
        assert _order(rows) == ["A", "B", "C", "D"]

    def test_full_ties_keep_roster_order(self):
        """Rows equal on every level stay in roster order."""
        matches = [_completed("A", "B", 1, 1), _completed("C", "D", 1, 1)]
        rows = compute_standings(["D", "B", "C", "A"], matches)
        assert _order(rows) == ["D", "B", "C", "A"]

    def test_absent_omw_counts_as_zero(self):
        """A competitor without opponents sorts as OMW% 0."""
        matches = [_completed("A", "B", 1, 0, winner="A")]
        rows = compute_standings(["C", "B", "A"], matches)
        # B has OMW% 1.0 and beats C's absent OMW% despite a worse games difference
        assert _order(rows) == ["A", "B", "C"]

    def test_determinism(self):
        """Repeated calls return the same ordered list."""
        matches = [
            _completed("A", "B", 2, 1, winner="A"),
            _completed("C", "D", 1, 1),
            _completed("B", "C", 0, 2, winner="C"),
        ]
        roster = ["A", "B", "C", "D"]
        assert compute_standings(roster, matches) == compute_standings(roster, matches)
