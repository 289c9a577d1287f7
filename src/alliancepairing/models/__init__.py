"""Plain data records shared by the scheduling and ranking engines."""

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

from alliancepairing.models.advancement import AdvancementEntry, AdvancementMap
from alliancepairing.models.engine_config import EngineConfig
from alliancepairing.models.enums import (
    AllianceColor,
    MatchStatus,
    StageType,
    WinningAlliance,
)
from alliancepairing.models.match import (
    Alliance,
    Match,
    MatchScore,
    MatchSpec,
    TeamAllianceEntry,
)
from alliancepairing.models.stage import Field, Stage, Team
from alliancepairing.models.team_record import TeamRecord

__all__ = [
    "AdvancementEntry",
    "AdvancementMap",
    "Alliance",
    "AllianceColor",
    "EngineConfig",
    "Field",
    "Match",
    "MatchScore",
    "MatchSpec",
    "MatchStatus",
    "Stage",
    "StageType",
    "Team",
    "TeamAllianceEntry",
    "TeamRecord",
    "WinningAlliance",
]
