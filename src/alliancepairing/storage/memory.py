"""Dict-backed MatchStore used by tests and storage-less callers."""

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

from typing import Dict, List, Optional, Tuple

from alliancepairing.exceptions import (
    MatchNotFoundException,
    RecordNotFoundException,
    StageNotFoundException,
)
from alliancepairing.models import (
    AdvancementMap,
    Alliance,
    AllianceColor,
    Field,
    Match,
    MatchScore,
    MatchSpec,
    MatchStatus,
    Stage,
    Team,
    TeamAllianceEntry,
    TeamRecord,
)
from alliancepairing.type_hints import RecordFields
from alliancepairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class InMemoryMatchStore:
    """Keeps stages, matches, records and advancement maps in dictionaries.

    Records are keyed by ``(team_id, stage_id)``; ``update_team_record``
    creates the record when it does not exist yet.
    """

    def __init__(self) -> None:
        self.stages: Dict[str, Stage] = {}
        self.matches: Dict[str, Match] = {}
        self.records: Dict[Tuple[str, str], TeamRecord] = {}
        self.advancement_maps: Dict[str, AdvancementMap] = {}
        self._alliances: Dict[str, Alliance] = {}

    def add_stage(self, stage: Stage) -> Stage:
        self.stages[stage.id] = stage
        return stage

    def _require_stage(self, stage_id: str) -> Stage:
        stage = self.stages.get(stage_id)
        if stage is None:
            raise StageNotFoundException(f"Stage with ID {stage_id} not found")
        return stage

    # --- Stages, teams, fields ---

    def find_stage(self, stage_id: str) -> Optional[Stage]:
        return self.stages.get(stage_id)

    def find_teams_for_phase(self, stage_id: str) -> List[Team]:
        return list(self._require_stage(stage_id).teams)

    def find_fields(self, tournament_id: str) -> List[Field]:
        # Fields belong to the tournament; every stage carries the same list
        for stage in self.stages.values():
            if stage.tournament_id == tournament_id and stage.fields:
                return list(stage.fields)
        return []

    # --- Matches ---

    def find_match(self, match_id: str) -> Optional[Match]:
        return self.matches.get(match_id)

    def find_matches(self, stage_id: str) -> List[Match]:
        matches = [m for m in self.matches.values() if m.stage_id == stage_id]
        return sorted(matches, key=lambda m: (m.round_number, m.match_number))

    def find_completed_matches(self, stage_id: str) -> List[Match]:
        return [
            m for m in self.find_matches(stage_id) if m.status is MatchStatus.COMPLETED
        ]

    def create_match(self, spec: MatchSpec) -> Match:
        self._require_stage(spec.stage_id)
        alliances = []
        for color in (AllianceColor.RED, AllianceColor.BLUE):
            alliance = Alliance(
                id=generate_id("alliance"),
                color=color,
                entries=[
                    TeamAllianceEntry(e.team_id, e.station_position, e.is_surrogate)
                    for e in spec.entries_for(color)
                ],
            )
            self._alliances[alliance.id] = alliance
            alliances.append(alliance)

        match = Match(
            id=generate_id("match"),
            stage_id=spec.stage_id,
            match_number=spec.match_number,
            round_number=spec.round_number,
            alliances=alliances,
            field_id=spec.field_id,
            scheduled_time=spec.scheduled_time,
        )
        self.matches[match.id] = match
        logger.debug(
            f"Stored match {match.match_number} (round {match.round_number}) as {match.id}"
        )
        return match

    def create_initial_score(self, match_id: str) -> MatchScore:
        match = self.matches.get(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match with ID {match_id} not found")
        match.score = MatchScore(match_id=match_id)
        return match.score

    def update_match(self, match: Match) -> Match:
        if match.id not in self.matches:
            raise MatchNotFoundException(f"Match with ID {match.id} not found")
        self.matches[match.id] = match
        return match

    def add_team_to_alliance(
        self, alliance_id: str, team_id: str, station_position: int
    ) -> TeamAllianceEntry:
        alliance = self._alliances.get(alliance_id)
        if alliance is None:
            raise MatchNotFoundException(f"Alliance with ID {alliance_id} not found")
        entry = TeamAllianceEntry(team_id=team_id, station_position=station_position)
        alliance.entries.append(entry)
        return entry

    # --- Team records ---

    def find_team_records(self, stage_id: str) -> List[TeamRecord]:
        return [r for (_, sid), r in self.records.items() if sid == stage_id]

    def find_tournament_records(self, tournament_id: str) -> List[TeamRecord]:
        return [r for r in self.records.values() if r.tournament_id == tournament_id]

    def find_team_record(self, team_id: str, stage_id: str) -> Optional[TeamRecord]:
        return self.records.get((team_id, stage_id))

    def create_team_record(
        self, team_id: str, stage_id: str, tournament_id: str
    ) -> TeamRecord:
        record = TeamRecord(
            team_id=team_id, stage_id=stage_id, tournament_id=tournament_id
        )
        self.records[(team_id, stage_id)] = record
        return record

    def update_team_record(
        self, team_id: str, stage_id: str, fields: RecordFields
    ) -> TeamRecord:
        record = self.records.get((team_id, stage_id))
        if record is None:
            stage = self.stages.get(stage_id)
            if stage is None:
                raise RecordNotFoundException(
                    f"No record for team {team_id} and unknown stage {stage_id}"
                )
            record = self.create_team_record(team_id, stage_id, stage.tournament_id)
        record.apply(dict(fields))
        return record

    # --- Advancement maps ---

    def save_advancement_map(self, advancement_map: AdvancementMap) -> None:
        self.advancement_maps[advancement_map.stage_id] = advancement_map

    def find_advancement_map(self, stage_id: str) -> Optional[AdvancementMap]:
        return self.advancement_maps.get(stage_id)
