import pytest

from alliancepairing.exceptions import (
    MatchNotFoundException,
    RecordNotFoundException,
    StageNotFoundException,
)
from alliancepairing.models import Match, MatchSpec, TeamAllianceEntry
from conftest import TOURNAMENT_ID


def _spec(match_number, round_number):
    return MatchSpec(
        stage_id="swiss",
        match_number=match_number,
        round_number=round_number,
        red=[TeamAllianceEntry("team-1", 1)],
        blue=[TeamAllianceEntry("team-2", 1)],
    )


def test_matches_are_listed_in_play_order(store, swiss_stage):
    late = store.create_match(_spec(1, 2))
    early = store.create_match(_spec(2, 1))
    first = store.create_match(_spec(1, 1))
    assert store.find_matches("swiss") == [first, early, late]


def test_create_match_needs_a_stage(store):
    with pytest.raises(StageNotFoundException):
        store.create_match(_spec(1, 1))


def test_update_team_record_creates_missing_records(store, swiss_stage):
    record = store.update_team_record("team-9", "swiss", {"wins": 1})
    assert record.tournament_id == TOURNAMENT_ID
    assert store.find_team_record("team-9", "swiss") is record
    assert store.find_tournament_records(TOURNAMENT_ID) == [record]

    with pytest.raises(RecordNotFoundException):
        store.update_team_record("team-9", "unknown", {"wins": 1})


def test_add_team_to_alliance(store, swiss_stage):
    match = store.create_match(_spec(1, 1))
    red = match.alliances[0]
    store.add_team_to_alliance(red.id, "team-5", 2)
    assert store.find_match(match.id).alliances[0].team_ids == ["team-1", "team-5"]

    with pytest.raises(MatchNotFoundException):
        store.add_team_to_alliance("alliance-missing", "team-5", 1)


def test_update_match_requires_existing_match(store, swiss_stage):
    with pytest.raises(MatchNotFoundException):
        store.update_match(Match(id="ghost", stage_id="swiss", match_number=1, round_number=1))


def test_fields_are_looked_up_per_tournament(store, swiss_stage):
    assert [f.id for f in store.find_fields(TOURNAMENT_ID)] == ["field-1", "field-2"]
    assert store.find_fields("other") == []
    assert store.find_advancement_map("swiss") is None
