"""Swiss-system rankings and round pairing for 2v2 alliance play.

Per stage the engine cycles through::

    NO_RESULTS -> RANKED -> PAIRED -> RESULTS_RECORDED -> RANKED -> ...

Callers must serialize "record results -> update rankings -> generate
round" per stage; two pairing runs for the same stage must never overlap.
"""

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

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set

from dateutil.relativedelta import relativedelta

from alliancepairing.constants import TEAMS_PER_MATCH
from alliancepairing.exceptions import (
    StageNotFoundException,
    WrongStageTypeException,
)
from alliancepairing.models import (
    EngineConfig,
    Match,
    MatchSpec,
    Stage,
    StageType,
    TeamAllianceEntry,
    TeamRecord,
)
from alliancepairing.pairing.field_assignment import FieldAssigner
from alliancepairing.pairing.matchup_history import MatchupHistory
from alliancepairing.ranking import (
    compute_team_results,
    derive_record_fields,
    sort_standings,
)
from alliancepairing.storage import MatchStore
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class SwissRound:
    """Matches created for one Swiss round.

    Attributes:
        round_number: The round the matches belong to
        matches: Created matches, numbered from 1
        deferred_team_ids: Teams left unpaired because their record group
            could not fill another match
    """

    round_number: int
    matches: List[Match] = field(default_factory=list)
    deferred_team_ids: List[str] = field(default_factory=list)


class SwissPairingEngine:
    """Recomputes Swiss standings and pairs teams with similar records."""

    def __init__(self, store: MatchStore, config: Optional[EngineConfig] = None):
        self.store = store
        self.config = config or EngineConfig()
        self.rng = random.Random(self.config.seed)

    def _require_stage(self, stage_id: str) -> Stage:
        stage = self.store.find_stage(stage_id)
        if stage is None:
            logger.error(f"Stage {stage_id} not found")
            raise StageNotFoundException(f"Stage with ID {stage_id} not found")
        return stage

    # --- Rankings ---

    def _ensure_records(self, stage: Stage) -> List[str]:
        """Create zeroed records for stage teams that have none yet."""
        existing = {r.team_id for r in self.store.find_team_records(stage.id)}
        if not existing:
            logger.warning(
                f"No team records for stage {stage.id}, seeding zeroed records "
                f"for {len(stage.teams)} teams"
            )
        for team in stage.teams:
            if team.id not in existing:
                self.store.create_team_record(team.id, stage.id, stage.tournament_id)
                existing.add(team.id)
        return [r.team_id for r in self.store.find_team_records(stage.id)]

    def update_rankings(self, stage_id: str) -> List[TeamRecord]:
        """Recompute every team record of a stage from its completed matches.

        Writes wins, losses, ties, points, matches played, ranking points,
        opponent win percentage and point differential. Running it twice on
        the same results yields the same values.

        Args:
            stage_id: Stage to rank

        Returns:
            The stage's records in ranking order

        Raises:
            StageNotFoundException: If the stage does not exist
        """
        stage = self._require_stage(stage_id)
        team_ids = self._ensure_records(stage)

        matches = self.store.find_completed_matches(stage_id)
        results = compute_team_results(matches, team_ids)
        for team_id, fields in derive_record_fields(results).items():
            self.store.update_team_record(team_id, stage_id, fields)

        logger.info(
            f"Updated rankings for stage {stage_id}: {len(team_ids)} teams, "
            f"{len(matches)} completed matches"
        )
        return self.get_rankings(stage_id)

    def get_rankings(self, stage_id: str) -> List[TeamRecord]:
        """Return the stage's records in ranking order."""
        return sort_standings(self.store.find_team_records(stage_id))

    def finalize_swiss_rankings(self, stage_id: str) -> List[TeamRecord]:
        """Write integer ranks 1..n in ranking order and return the records."""
        self._require_stage(stage_id)
        rankings = self.get_rankings(stage_id)
        for position, record in enumerate(rankings, start=1):
            self.store.update_team_record(record.team_id, stage_id, {"rank": position})
        logger.info(f"Wrote final Swiss ranks for {len(rankings)} teams")
        return self.get_rankings(stage_id)

    # --- Pairing ---

    def _group_by_record(
        self, rankings: List[TeamRecord]
    ) -> List[List[TeamRecord]]:
        """Group records by ``w-l-t`` string, best ranking points first."""
        groups: Dict[str, List[TeamRecord]] = {}
        for record in rankings:
            groups.setdefault(record.record, []).append(record)

        logger.debug(
            "Teams grouped by record: "
            + ", ".join(f"{rec}: {len(teams)} teams" for rec, teams in groups.items())
        )
        ordered = sorted(groups.values(), key=lambda g: -g[0].calculate_ranking_points())
        return ordered

    def generate_round(
        self,
        stage_id: str,
        current_round_number: int,
        start_time: Optional[datetime] = None,
    ) -> SwissRound:
        """Pair the next Swiss round and persist its matches.

        Teams are grouped by exact record and paired four at a time in
        ranking order inside each group. Groups are never merged: a group's
        last one to three teams sit out the round.

        Args:
            stage_id: SWISS stage to pair
            current_round_number: Last round played; matches are created for
                the following one
            start_time: Start of the first match, defaults to now

        Returns:
            The created round

        Raises:
            StageNotFoundException: If the stage does not exist
            WrongStageTypeException: If the stage is not a SWISS stage
            NoFieldsAvailableException: If the tournament has no fields
        """
        stage = self._require_stage(stage_id)
        if stage.type is not StageType.SWISS:
            logger.error(f"Stage {stage_id} is {stage.type.value}, not SWISS")
            raise WrongStageTypeException(
                f"Stage with ID {stage_id} is not a SWISS stage"
            )

        assigner = FieldAssigner(
            self.store.find_fields(stage.tournament_id), rng=self.rng
        )

        rankings = self.get_rankings(stage_id)
        if not rankings:
            rankings = self.update_rankings(stage_id)

        history = MatchupHistory.from_matches(self.store.find_matches(stage_id))
        next_round = current_round_number + 1
        start_time = start_time or datetime.now()
        swiss_round = SwissRound(round_number=next_round)
        paired: Set[str] = set()
        match_number = 1

        logger.info(
            f"Generating Swiss round {next_round} for stage {stage_id} "
            f"with {len(rankings)} teams"
        )

        for group in self._group_by_record(rankings):
            available = [r for r in sort_standings(group) if r.team_id not in paired]
            usable = len(available) - len(available) % TEAMS_PER_MATCH

            for start in range(0, usable, TEAMS_PER_MATCH):
                batch = available[start : start + TEAMS_PER_MATCH]
                red, blue = history.optimize_alliance_assignment(batch)
                paired.update(r.team_id for r in batch)
                chosen_field = assigner.assign()

                spec = MatchSpec(
                    stage_id=stage_id,
                    match_number=match_number,
                    round_number=next_round,
                    red=[
                        TeamAllianceEntry(r.team_id, position)
                        for position, r in enumerate(red, start=1)
                    ],
                    blue=[
                        TeamAllianceEntry(r.team_id, position)
                        for position, r in enumerate(blue, start=1)
                    ],
                    field_id=chosen_field.id,
                    scheduled_time=start_time
                    + relativedelta(
                        minutes=(match_number - 1) * self.config.match_interval_minutes
                    ),
                )
                match = self.store.create_match(spec)
                self.store.create_initial_score(match.id)
                swiss_round.matches.append(match)
                logger.debug(
                    f"Created match {match_number}: "
                    f"[{', '.join(r.team_id for r in red)}] vs "
                    f"[{', '.join(r.team_id for r in blue)}] on field {chosen_field.number}"
                )
                match_number += 1

            leftovers = available[usable:]
            if leftovers:
                logger.warning(
                    f"Not enough teams for a complete match in the "
                    f"{leftovers[0].record} group, deferring {len(leftovers)} teams"
                )
                swiss_round.deferred_team_ids.extend(r.team_id for r in leftovers)

        logger.info(
            f"Generated {len(swiss_round.matches)} Swiss matches for round {next_round}"
        )
        return swiss_round
