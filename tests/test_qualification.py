from collections import Counter

import pytest
from dateutil.relativedelta import relativedelta

from alliancepairing.exceptions import (
    InsufficientTeamsException,
    StageNotFoundException,
)
from alliancepairing.models import AllianceColor, EngineConfig, MatchStatus, StageType
from alliancepairing.scheduling import (
    QualificationScheduler,
    ScheduleState,
    build_match_specs,
)
from conftest import START, add_stage, make_fields, make_teams


def _entries(match):
    return [entry for alliance in match.alliances for entry in alliance.entries]


def test_generate_schedule_persists_matches_with_score_sheets(
    store, config, qualification_stage
):
    scheduler = QualificationScheduler(store, config)
    matches = scheduler.generate_schedule(
        "quals", rounds=3, max_iterations=200, start_time=START
    )

    assert len(matches) == 9
    assert [m.match_number for m in matches] == list(range(1, 10))
    assert [m.round_number for m in matches] == [1, 1, 1, 2, 2, 2, 3, 3, 3]
    assert [m.field_id for m in matches[:4]] == ["field-1", "field-2", "field-1", "field-2"]
    assert matches[2].scheduled_time == START + relativedelta(minutes=12)
    assert scheduler.last_result is not None

    for match in matches:
        assert store.find_match(match.id) is match
        assert match.status is MatchStatus.PENDING
        assert match.score is not None
        assert match.score.red_total_score == 0
        assert len(match.alliance(AllianceColor.RED).entries) == 2
        assert len(match.alliance(AllianceColor.BLUE).entries) == 2
        assert len(set(match.team_ids)) == 4

    counts = Counter(e.team_id for m in matches for e in _entries(m))
    assert set(counts.values()) == {3}
    assert not any(e.is_surrogate for m in matches for e in _entries(m))


def test_extra_appearances_are_flagged_as_surrogates(store, config):
    add_stage(store, "small", StageType.QUALIFICATION, teams=make_teams(5))
    matches = QualificationScheduler(store, config).generate_schedule(
        "small", rounds=1, max_iterations=50, start_time=START
    )

    entries = [e for m in matches for e in _entries(m)]
    assert len(matches) == 2
    assert sum(e.is_surrogate for e in entries) == 3

    regular = Counter(e.team_id for e in entries if not e.is_surrogate)
    assert len(regular) == 5
    assert set(regular.values()) == {1}


def test_unknown_stage(store, config):
    with pytest.raises(StageNotFoundException):
        QualificationScheduler(store, config).generate_schedule("missing", rounds=2)


def test_too_few_teams(store, config):
    add_stage(store, "tiny", StageType.QUALIFICATION, teams=make_teams(3))
    with pytest.raises(InsufficientTeamsException):
        QualificationScheduler(store, config).generate_schedule("tiny", rounds=2)


def test_config_seed_makes_schedules_reproducible(store):
    add_stage(store, "a", StageType.QUALIFICATION, teams=make_teams(10))
    add_stage(store, "b", StageType.QUALIFICATION, teams=make_teams(10))
    config = EngineConfig(seed=99, max_iterations=300)

    first = QualificationScheduler(store, config).generate_schedule("a", 2, start_time=START)
    second = QualificationScheduler(store, config).generate_schedule("b", 2, start_time=START)

    assert [m.team_ids for m in first] == [m.team_ids for m in second]


def test_build_match_specs_maps_team_numbers_and_stations():
    teams = make_teams(4)
    state = ScheduleState(num_teams=4, matches=[([3, 1], [2, 4]), ([1, 2], [4, 3])])
    specs = build_match_specs(
        "quals", state, teams, rounds=1, fields=make_fields(3),
        start_time=START, interval_minutes=6,
    )

    first_red = specs[0].entries_for(AllianceColor.RED)
    assert [(e.team_id, e.station_position) for e in first_red] == [
        ("team-3", 1),
        ("team-1", 2),
    ]
    assert all(e.is_surrogate for e in specs[1].red + specs[1].blue)
    assert specs[1].field_id == "field-2"
    assert specs[1].round_number == 2
    assert specs[1].scheduled_time == START + relativedelta(minutes=6)
