from datetime import datetime

import pytest

from alliancepairing.controllers import ResultRecorder
from alliancepairing.models import (
    EngineConfig,
    Field,
    MatchSpec,
    Stage,
    StageType,
    Team,
    TeamAllianceEntry,
)
from alliancepairing.storage import InMemoryMatchStore

TOURNAMENT_ID = "tournament-1"
START = datetime(2025, 3, 8, 9, 0)


def make_teams(count, prefix="team"):
    return [
        Team(id=f"{prefix}-{n}", team_number=str(1000 + n), name=f"Team {n}")
        for n in range(1, count + 1)
    ]


def make_fields(count):
    return [Field(id=f"field-{n}", number=n, name=f"Field {n}") for n in range(1, count + 1)]


def add_stage(store, stage_id, stage_type, teams=None, fields=None):
    return store.add_stage(
        Stage(
            id=stage_id,
            tournament_id=TOURNAMENT_ID,
            type=stage_type,
            teams=list(teams or []),
            fields=list(fields if fields is not None else make_fields(2)),
        )
    )


@pytest.fixture
def store():
    return InMemoryMatchStore()


@pytest.fixture
def config():
    return EngineConfig(quality_level="low", seed=7)


@pytest.fixture
def swiss_stage(store):
    return add_stage(store, "swiss", StageType.SWISS, teams=make_teams(8))


@pytest.fixture
def playoff_stage(store):
    return add_stage(store, "playoff", StageType.PLAYOFF)


@pytest.fixture
def qualification_stage(store):
    return add_stage(store, "quals", StageType.QUALIFICATION, teams=make_teams(12))


def play(store, stage_id, red, blue, red_total, blue_total, round_number=1, surrogates=()):
    """Create a match between two alliances and record its totals."""

    def entries(team_ids):
        return [
            TeamAllianceEntry(team_id, position, team_id in surrogates)
            for position, team_id in enumerate(team_ids, start=1)
        ]

    match = store.create_match(
        MatchSpec(
            stage_id=stage_id,
            match_number=len(store.find_matches(stage_id)) + 1,
            round_number=round_number,
            red=entries(red),
            blue=entries(blue),
        )
    )
    store.create_initial_score(match.id)
    return ResultRecorder(store).record_result(match.id, red_total, blue_total)
