import pytest

from alliancepairing.controllers import MatchScheduler
from alliancepairing.exceptions import NoAdvancementInfoException
from alliancepairing.models import EngineConfig, MatchStatus, StageType
from alliancepairing.testing import ResultSimulator, SimulatorConfig
from conftest import START, add_stage, make_teams


@pytest.fixture
def scheduler(store):
    return MatchScheduler(store, EngineConfig(seed=5, max_iterations=200))


@pytest.fixture
def simulator(store):
    return ResultSimulator(store, SimulatorConfig(seed=5, allow_ties=False))


def test_swiss_then_playoffs(store, scheduler, simulator, swiss_stage, playoff_stage):
    for played_rounds in range(3):
        swiss_round = scheduler.generate_swiss_round(
            "swiss", played_rounds, start_time=START
        )
        paired = [t for m in swiss_round.matches for t in m.team_ids]
        assert len(paired) + len(swiss_round.deferred_team_ids) == 8
        assert len(set(paired)) == len(paired)

        results = simulator.play_round("swiss", played_rounds + 1)
        assert len(results) == len(swiss_round.matches)
        scheduler.update_swiss_rankings("swiss")

    final = scheduler.finalize_swiss_rankings("swiss")
    assert [r.rank for r in final] == list(range(1, 9))
    standings = scheduler.get_standings("swiss")
    assert [row.team_id for row in standings] == [r.team_id for r in final]
    assert scheduler.get_swiss_rankings("swiss") == final

    bracket = scheduler.generate_playoff_bracket("playoff", 2, start_time=START)
    assert bracket.seeds == tuple(r.team_id for r in final[:4])

    for match in simulator.play_round("playoff", 1):
        scheduler.advance_winner(match.id)
    played_final = simulator.play_round("playoff", 2)
    assert len(played_final) == 1

    ranks = scheduler.finalize_playoff_rankings("playoff")
    assert set(ranks) == set(bracket.seeds)
    assert sorted(ranks.values()) == [1, 2, 3, 3]


def test_qualification_schedule_through_facade(store, scheduler, simulator):
    add_stage(store, "quals", StageType.QUALIFICATION, teams=make_teams(8))
    matches = scheduler.generate_qualification_schedule("quals", rounds=2, start_time=START)

    assert len(matches) == 4
    simulator.play_stage("quals")
    assert all(m.status is MatchStatus.COMPLETED for m in store.find_matches("quals"))

    rankings = scheduler.update_swiss_rankings("quals")
    assert sum(r.matches_played for r in rankings) == 16


def test_empty_bracket_matches_are_not_simulated(store, scheduler, simulator, playoff_stage):
    scheduler.generate_playoff_bracket(
        "playoff", 2, seeds=["a", "b", "c", "d"], start_time=START
    )
    assert simulator.play_round("playoff", 2) == []


def test_advance_without_saved_bracket(store, scheduler, swiss_stage):
    swiss_round = scheduler.generate_swiss_round("swiss", 0, start_time=START)
    with pytest.raises(NoAdvancementInfoException):
        scheduler.advance_winner(swiss_round.matches[0].id)


def test_simulator_rejects_bad_score_range(store):
    with pytest.raises(ValueError):
        ResultSimulator(store, SimulatorConfig(min_score=10, max_score=5))
