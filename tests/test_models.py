import pytest

from alliancepairing.exceptions import (
    InvalidConfigurationException,
    InvalidMatchTransitionException,
)
from alliancepairing.models import (
    AdvancementEntry,
    AdvancementMap,
    AllianceColor,
    EngineConfig,
    Match,
    MatchStatus,
    Stage,
    StageType,
    TeamRecord,
    WinningAlliance,
)
from conftest import make_fields, make_teams


def test_match_lifecycle():
    match = Match(id="m", stage_id="s", match_number=1, round_number=1)
    match.start()
    assert match.status is MatchStatus.IN_PROGRESS

    with pytest.raises(InvalidMatchTransitionException):
        match.start()

    match.complete(WinningAlliance.BLUE)
    assert match.status is MatchStatus.COMPLETED

    with pytest.raises(InvalidMatchTransitionException):
        match.cancel()


def test_cancelled_match_cannot_complete():
    match = Match(id="m", stage_id="s", match_number=1, round_number=1)
    match.cancel()
    with pytest.raises(InvalidMatchTransitionException):
        match.complete(WinningAlliance.RED)


def test_alliance_colour_opposite():
    assert AllianceColor.RED.opposite is AllianceColor.BLUE
    assert AllianceColor.BLUE.opposite is AllianceColor.RED


def test_team_record_derived_values():
    record = TeamRecord(
        "a", "s", "t", wins=3, losses=1, ties=1, matches_played=5, points_scored=250
    )
    assert record.record == "3-1-1"
    assert record.calculate_ranking_points() == 7
    assert record.win_percentage == pytest.approx(0.6)
    assert record.avg_points_scored == pytest.approx(50.0)
    assert TeamRecord("b", "s", "t").avg_points_conceded == 0.0


def test_team_record_rejects_unknown_fields():
    record = TeamRecord("a", "s", "t")
    record.apply({"wins": 2, "rank": 4})
    assert (record.wins, record.rank) == (2, 4)
    with pytest.raises(ValueError):
        record.apply({"team_id": "b"})


def test_advancement_map_is_read_only():
    edges = AdvancementMap(
        stage_id="p", entries={"m1": AdvancementEntry("m3", AllianceColor.RED)}
    )
    with pytest.raises(TypeError):
        edges.entries["m2"] = AdvancementEntry("m3", AllianceColor.BLUE)
    assert "m2" not in edges
    assert list(edges) == ["m1"]


def test_advancement_map_serialization():
    edges = AdvancementMap(
        stage_id="p",
        entries={
            "m1": AdvancementEntry("m3", AllianceColor.RED),
            "m2": AdvancementEntry("m3", AllianceColor.BLUE),
        },
    )
    data = edges.to_dict()
    assert data["entries"]["m2"] == {"next_match_id": "m3", "color": "BLUE"}

    restored = AdvancementMap.from_dict(data)
    assert restored.get("m1") == AdvancementEntry("m3", AllianceColor.RED)
    assert len(restored) == 2


def test_empty_advancement_map():
    edges = AdvancementMap(stage_id="p")
    assert len(edges) == 0
    assert edges.get("m1") is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"quality_level": "ultra"},
        {"min_match_separation": -1},
        {"max_iterations": -5},
        {"time_limit_seconds": 0},
        {"match_interval_minutes": -1},
    ],
)
def test_engine_config_validation(kwargs):
    with pytest.raises(InvalidConfigurationException):
        EngineConfig(**kwargs)


def test_engine_config_budget_and_round_trip():
    config = EngineConfig(quality_level="high", seed=3)
    assert config.iteration_budget == 25000
    assert EngineConfig(max_iterations=40).iteration_budget == 40
    assert EngineConfig.from_dict(config.to_dict()) == config


def test_stage_from_dict():
    stage = Stage(
        id="s",
        tournament_id="t",
        type=StageType.SWISS,
        teams=make_teams(2),
        fields=make_fields(1),
        name="Swiss",
    )
    assert Stage.from_dict(stage.to_dict()) == stage
