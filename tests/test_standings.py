import itertools

import pytest

from alliancepairing.models import (
    Match,
    MatchScore,
    TeamRecord,
    WinningAlliance,
)
from alliancepairing.ranking import (
    build_standings,
    compute_team_results,
    derive_record_fields,
    match_outcome,
    sort_standings,
)
from conftest import play

TEAM_IDS = [f"team-{n}" for n in range(1, 9)]


def _record(team_id, **fields):
    return TeamRecord(team_id=team_id, stage_id="swiss", tournament_id="t", **fields)


def test_match_outcome_prefers_recorded_winner(store, swiss_stage):
    match = play(store, "swiss", ["team-1", "team-2"], ["team-3", "team-4"], 10, 40)
    assert match_outcome(match) is WinningAlliance.BLUE

    match.winning_alliance = WinningAlliance.RED
    assert match_outcome(match) is WinningAlliance.RED


def test_match_outcome_falls_back_to_totals():
    match = Match(id="m", stage_id="s", match_number=1, round_number=1)
    assert match_outcome(match) is None

    match.score = MatchScore(match_id="m", red_total_score=12, blue_total_score=12)
    assert match_outcome(match) is WinningAlliance.TIE

    match.score.red_total_score = 13
    assert match_outcome(match) is WinningAlliance.RED


def test_results_count_wins_ties_points_and_opponents(store, swiss_stage):
    play(store, "swiss", ["team-1", "team-2"], ["team-3", "team-4"], 50, 30)
    play(store, "swiss", ["team-5", "team-6"], ["team-7", "team-8"], 20, 20)

    results = compute_team_results(store.find_completed_matches("swiss"), TEAM_IDS)

    assert results["team-1"].wins == 1
    assert results["team-1"].points_scored == 50
    assert results["team-1"].points_conceded == 30
    assert results["team-1"].opponents == {"team-3", "team-4"}
    assert results["team-4"].losses == 1
    assert results["team-7"].ties == 1

    fields = derive_record_fields(results)
    assert fields["team-1"]["ranking_points"] == 2
    assert fields["team-5"]["ranking_points"] == 1
    assert fields["team-3"]["ranking_points"] == 0
    assert fields["team-3"]["point_differential"] == -20
    assert fields["team-1"]["opponent_win_percentage"] == 0.0
    assert fields["team-3"]["opponent_win_percentage"] == 1.0
    assert fields["team-5"]["matches_played"] == 1


def test_surrogate_counts_only_as_an_opponent(store, swiss_stage):
    play(
        store, "swiss", ["team-1", "team-2"], ["team-3", "team-4"], 50, 30,
        surrogates=("team-1",),
    )
    results = compute_team_results(store.find_completed_matches("swiss"), TEAM_IDS)

    assert results["team-1"].matches_played == 0
    assert results["team-1"].points_scored == 0
    assert results["team-2"].wins == 1
    assert "team-1" in results["team-3"].opponents


def test_untracked_teams_are_ignored(store, swiss_stage):
    play(store, "swiss", ["team-1", "team-2"], ["team-3", "team-4"], 5, 1)
    results = compute_team_results(store.find_completed_matches("swiss"), ["team-1"])
    assert list(results) == ["team-1"]


def test_ranking_points_come_first():
    better = _record("a", ranking_points=4, point_differential=-30)
    worse = _record("b", ranking_points=2, point_differential=90)
    assert sort_standings([worse, better]) == [better, worse]


def test_opponent_win_percentage_breaks_ranking_point_ties():
    tough = _record("a", ranking_points=2, opponent_win_percentage=0.75)
    easy = _record("b", ranking_points=2, opponent_win_percentage=0.25, point_differential=50)
    assert sort_standings([easy, tough]) == [tough, easy]


def test_close_opponent_win_percentages_give_one_order():
    records = [
        _record("a", opponent_win_percentage=0.0, point_differential=10),
        _record("b", opponent_win_percentage=0.0008, point_differential=5),
        _record("c", opponent_win_percentage=0.0016, point_differential=0),
    ]
    orders = {
        tuple(r.team_id for r in sort_standings(list(perm)))
        for perm in itertools.permutations(records)
    }
    assert orders == {("c", "b", "a")}


def test_matches_played_is_last_tiebreak():
    a = _record("a", ranking_points=2, matches_played=1)
    b = _record("b", ranking_points=2, matches_played=2)
    assert sort_standings([a, b]) == [b, a]


def test_equal_records_keep_their_order():
    records = [_record(f"t{n}") for n in range(5)]
    assert sort_standings(records) == records
    assert sort_standings(list(reversed(records))) == list(reversed(records))


def test_build_standings_rows():
    records = [
        _record("a", wins=1, losses=1, matches_played=2, ranking_points=2, points_scored=60),
        _record("b", wins=2, matches_played=2, ranking_points=4, points_scored=90),
    ]
    rows = build_standings(records)

    assert [(row.position, row.team_id) for row in rows] == [(1, "b"), (2, "a")]
    assert rows[0].record == "2-0-0"
    assert rows[0].win_percentage == 1.0
    assert rows[1].avg_points_scored == pytest.approx(30.0)
    assert rows[1].rank is None
