"""Qualification schedule generation for a stage."""

# Alliance Pairing
# Copyright (C) 2025  Alliance Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
import random
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from alliancepairing.constants import TEAMS_PER_MATCH
from alliancepairing.exceptions import StageNotFoundException
from alliancepairing.models import (
    EngineConfig,
    Field,
    Match,
    MatchSpec,
    Team,
    TeamAllianceEntry,
)
from alliancepairing.scheduling.annealing import (
    OptimizationResult,
    QualificationOptimizer,
)
from alliancepairing.scheduling.schedule_state import ScheduleState
from alliancepairing.storage import MatchStore
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


def build_match_specs(
    stage_id: str,
    state: ScheduleState,
    teams: Sequence[Team],
    rounds: int,
    fields: Sequence[Field] = (),
    start_time: Optional[datetime] = None,
    interval_minutes: int = 0,
) -> List[MatchSpec]:
    """Convert an optimized schedule into match specs.

    Team number ``n`` maps to ``teams[n - 1]``. Station positions follow
    the order of the team list inside each alliance. Every appearance of a
    team after its first ``rounds`` ones is flagged as a surrogate. Matches
    are grouped ``ceil(N / 4)`` per round and fields are used in turn.
    """
    matches_per_round = max(1, math.ceil(len(teams) / TEAMS_PER_MATCH))
    appearances: Dict[int, int] = {}
    specs = []

    for index, (red, blue) in enumerate(state.matches):
        alliances = []
        for side in (red, blue):
            entries = []
            for position, team_number in enumerate(side, start=1):
                seen = appearances.get(team_number, 0)
                appearances[team_number] = seen + 1
                entries.append(
                    TeamAllianceEntry(
                        team_id=teams[team_number - 1].id,
                        station_position=position,
                        is_surrogate=seen >= rounds,
                    )
                )
            alliances.append(entries)

        scheduled_time = None
        if start_time is not None:
            scheduled_time = start_time + relativedelta(
                minutes=index * interval_minutes
            )

        specs.append(
            MatchSpec(
                stage_id=stage_id,
                match_number=index + 1,
                round_number=index // matches_per_round + 1,
                red=alliances[0],
                blue=alliances[1],
                field_id=fields[index % len(fields)].id if fields else None,
                scheduled_time=scheduled_time,
            )
        )
    return specs


class QualificationScheduler:
    """Builds and persists an annealed qualification schedule for a stage."""

    def __init__(self, store: MatchStore, config: Optional[EngineConfig] = None):
        self.store = store
        self.config = config or EngineConfig()
        self.rng = random.Random(self.config.seed)
        self.last_result: Optional[OptimizationResult] = None

    def generate_schedule(
        self,
        stage_id: str,
        rounds: int,
        min_match_separation: Optional[int] = None,
        quality_level: Optional[str] = None,
        max_iterations: Optional[int] = None,
        start_time: Optional[datetime] = None,
    ) -> List[Match]:
        """Generate, persist and return the qualification matches of a stage.

        Args:
            stage_id: Stage to schedule
            rounds: Matches each team should play
            min_match_separation: Overrides the configured separation
            quality_level: Overrides the configured quality tier
            max_iterations: Overrides the iteration budget
            start_time: Start of the first match, defaults to now

        Returns:
            The created matches in play order

        Raises:
            StageNotFoundException: If the stage does not exist
            InsufficientTeamsException: If the stage has fewer than 4 teams
        """
        stage = self.store.find_stage(stage_id)
        if stage is None:
            logger.error(f"Cannot schedule unknown stage {stage_id}")
            raise StageNotFoundException(f"Stage with ID {stage_id} not found")

        teams = self.store.find_teams_for_phase(stage_id)
        optimizer = QualificationOptimizer(
            num_teams=len(teams),
            rounds=rounds,
            min_match_separation=(
                min_match_separation
                if min_match_separation is not None
                else self.config.min_match_separation
            ),
            quality_level=quality_level or self.config.quality_level,
            max_iterations=(
                max_iterations
                if max_iterations is not None
                else self.config.max_iterations
            ),
            time_limit_seconds=self.config.time_limit_seconds,
            rng=self.rng,
        )
        result = optimizer.optimize()
        self.last_result = result

        fields = self.store.find_fields(stage.tournament_id)
        specs = build_match_specs(
            stage_id,
            result.state,
            teams,
            rounds,
            fields=fields,
            start_time=start_time or datetime.now(),
            interval_minutes=self.config.match_interval_minutes,
        )

        matches = []
        for spec in specs:
            match = self.store.create_match(spec)
            self.store.create_initial_score(match.id)
            matches.append(match)

        logger.info(
            f"Created {len(matches)} qualification matches for stage {stage_id} "
            f"({len(teams)} teams, {rounds} rounds, score {result.score:.2f})"
        )
        return matches
