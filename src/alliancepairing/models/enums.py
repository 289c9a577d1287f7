"""Enumerations shared by the data model."""

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

from enum import Enum


class AllianceColor(str, Enum):
    """Side of a match."""

    RED = "RED"
    BLUE = "BLUE"

    @property
    def opposite(self) -> "AllianceColor":
        return AllianceColor.BLUE if self is AllianceColor.RED else AllianceColor.RED


class WinningAlliance(str, Enum):
    """Recorded outcome of a completed match."""

    RED = "RED"
    BLUE = "BLUE"
    TIE = "TIE"


class MatchStatus(str, Enum):
    """Lifecycle of a match."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class StageType(str, Enum):
    """Kind of competition phase."""

    SWISS = "SWISS"
    PLAYOFF = "PLAYOFF"
    QUALIFICATION = "QUALIFICATION"
