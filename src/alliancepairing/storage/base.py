"""Contract between the engines and their storage collaborator."""

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

from typing import List, Optional, Protocol

from alliancepairing.models import (
    AdvancementMap,
    Field,
    Match,
    MatchScore,
    MatchSpec,
    Stage,
    Team,
    TeamAllianceEntry,
    TeamRecord,
)
from alliancepairing.type_hints import RecordFields


class MatchStore(Protocol):
    """Storage collaborator used by every engine.

    Calls are synchronous and may raise; the engines never retry them and
    never roll back writes already made.
    """

    def find_stage(self, stage_id: str) -> Optional[Stage]: ...

    def find_teams_for_phase(self, stage_id: str) -> List[Team]: ...

    def find_fields(self, tournament_id: str) -> List[Field]: ...

    def find_match(self, match_id: str) -> Optional[Match]: ...

    def find_matches(self, stage_id: str) -> List[Match]: ...

    def find_completed_matches(self, stage_id: str) -> List[Match]: ...

    def create_match(self, spec: MatchSpec) -> Match: ...

    def create_initial_score(self, match_id: str) -> MatchScore: ...

    def update_match(self, match: Match) -> Match: ...

    def find_team_records(self, stage_id: str) -> List[TeamRecord]: ...

    def find_tournament_records(self, tournament_id: str) -> List[TeamRecord]: ...

    def create_team_record(
        self, team_id: str, stage_id: str, tournament_id: str
    ) -> TeamRecord: ...

    def update_team_record(
        self, team_id: str, stage_id: str, fields: RecordFields
    ) -> TeamRecord: ...

    def add_team_to_alliance(
        self, alliance_id: str, team_id: str, station_position: int
    ) -> TeamAllianceEntry: ...

    def save_advancement_map(self, advancement_map: AdvancementMap) -> None: ...

    def find_advancement_map(self, stage_id: str) -> Optional[AdvancementMap]: ...
