"""Alliance Pairing - match scheduling and ranking for alliance-based tournaments.

This package provides:
- Annealed qualification schedules
- Swiss-style pairing by win-loss-tie record
- Single-elimination playoff brackets with winner advancement
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

from alliancepairing.bracket import Bracket, BracketEngine
from alliancepairing.controllers import MatchScheduler, ResultRecorder
from alliancepairing.models import AdvancementMap, EngineConfig
from alliancepairing.pairing import SwissPairingEngine, SwissRound
from alliancepairing.scheduling import QualificationOptimizer, QualificationScheduler
from alliancepairing.storage import InMemoryMatchStore, MatchStore

__version__ = "0.1.0"

__all__ = [
    "AdvancementMap",
    "Bracket",
    "BracketEngine",
    "EngineConfig",
    "InMemoryMatchStore",
    "MatchScheduler",
    "MatchStore",
    "QualificationOptimizer",
    "QualificationScheduler",
    "ResultRecorder",
    "SwissPairingEngine",
    "SwissRound",
]
