import pytest

from alliancepairing.controllers import ResultRecorder
from alliancepairing.exceptions import (
    InvalidMatchTransitionException,
    MatchNotFoundException,
)
from alliancepairing.models import MatchSpec, MatchStatus, TeamAllianceEntry, WinningAlliance


@pytest.fixture
def match(store, swiss_stage):
    created = store.create_match(
        MatchSpec(
            stage_id="swiss",
            match_number=1,
            round_number=1,
            red=[TeamAllianceEntry("team-1", 1), TeamAllianceEntry("team-2", 2)],
            blue=[TeamAllianceEntry("team-3", 1), TeamAllianceEntry("team-4", 2)],
        )
    )
    store.create_initial_score(created.id)
    return created


def test_record_result_completes_match(store, match):
    recorded = ResultRecorder(store).record_result(match.id, 45, 60)

    assert recorded.status is MatchStatus.COMPLETED
    assert recorded.winning_alliance is WinningAlliance.BLUE
    assert recorded.score.red_total_score == 45
    assert recorded.score.blue_total_score == 60
    assert store.find_completed_matches("swiss") == [recorded]


def test_equal_totals_are_a_tie(store, match):
    recorded = ResultRecorder(store).record_result(match.id, 30, 30)
    assert recorded.winning_alliance is WinningAlliance.TIE


def test_explicit_winner_overrides_totals(store, match):
    recorded = ResultRecorder(store).record_result(
        match.id, 30, 30, winning_alliance=WinningAlliance.RED
    )
    assert recorded.winning_alliance is WinningAlliance.RED


def test_result_can_only_be_recorded_once(store, match, caplog):
    recorder = ResultRecorder(store)
    recorder.record_result(match.id, 1, 0)
    with pytest.raises(InvalidMatchTransitionException):
        recorder.record_result(match.id, 0, 1)

    assert match.score.blue_total_score == 0
    rejected = [r for r in caplog.records if "Cannot record a result" in r.getMessage()]
    assert [r.levelname for r in rejected] == ["ERROR"]


def test_negative_totals_are_rejected(store, match):
    with pytest.raises(ValueError):
        ResultRecorder(store).record_result(match.id, -1, 10)
    assert match.status is MatchStatus.PENDING


def test_start_and_cancel(store, match):
    recorder = ResultRecorder(store)
    assert recorder.start_match(match.id).status is MatchStatus.IN_PROGRESS
    assert recorder.cancel_match(match.id).status is MatchStatus.CANCELLED
    with pytest.raises(InvalidMatchTransitionException):
        recorder.record_result(match.id, 1, 2)


def test_unknown_match(store):
    with pytest.raises(MatchNotFoundException):
        ResultRecorder(store).record_result("nope", 1, 2)


def test_record_round(store, swiss_stage, match):
    other = store.create_match(
        MatchSpec(
            stage_id="swiss",
            match_number=2,
            round_number=1,
            red=[TeamAllianceEntry("team-5", 1), TeamAllianceEntry("team-6", 2)],
            blue=[TeamAllianceEntry("team-7", 1), TeamAllianceEntry("team-8", 2)],
        )
    )
    recorded = ResultRecorder(store).record_round([(match.id, 9, 3), (other.id, 2, 8)])
    assert [m.winning_alliance for m in recorded] == [
        WinningAlliance.RED,
        WinningAlliance.BLUE,
    ]
    assert other.score is not None
