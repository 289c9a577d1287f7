"""Qualification scheduling by simulated annealing."""

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

from alliancepairing.scheduling.annealing import (
    OptimizationResult,
    QualificationOptimizer,
)
from alliancepairing.scheduling.qualification import (
    QualificationScheduler,
    build_match_specs,
)
from alliancepairing.scheduling.schedule_state import (
    ScheduleState,
    TeamStats,
    build_initial_schedule,
    compute_stats,
    required_matches,
    score_schedule,
)

__all__ = [
    "OptimizationResult",
    "QualificationOptimizer",
    "QualificationScheduler",
    "ScheduleState",
    "TeamStats",
    "build_initial_schedule",
    "build_match_specs",
    "compute_stats",
    "required_matches",
    "score_schedule",
]
