"""Engine configuration."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from alliancepairing.constants import (
    DEFAULT_MATCH_INTERVAL_MINUTES,
    DEFAULT_MIN_MATCH_SEPARATION,
    DEFAULT_QUALITY,
    ITERATION_BUDGETS,
)
from alliancepairing.exceptions import InvalidConfigurationException
from alliancepairing.type_hints import Quality


@dataclass
class EngineConfig:
    """Configuration settings for the scheduling engines.

    Attributes:
        quality_level: Annealing budget tier ('low', 'medium', 'high')
        min_match_separation: Matches required between two appearances of a team
        max_iterations: Explicit annealing iteration budget, overrides the tier
        time_limit_seconds: Hard wall-clock budget for one annealing run
        match_interval_minutes: Spacing between scheduled start times
        seed: Random seed for reproducible schedules and field draws
    """

    quality_level: Quality = DEFAULT_QUALITY
    min_match_separation: int = DEFAULT_MIN_MATCH_SEPARATION
    max_iterations: Optional[int] = None
    time_limit_seconds: Optional[float] = None
    match_interval_minutes: int = DEFAULT_MATCH_INTERVAL_MINUTES
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationException on out-of-range values."""
        if self.quality_level not in ITERATION_BUDGETS:
            raise InvalidConfigurationException(
                f"Unknown quality level '{self.quality_level}', "
                f"expected one of {sorted(ITERATION_BUDGETS)}"
            )
        if self.min_match_separation < 0:
            raise InvalidConfigurationException(
                "min_match_separation must not be negative"
            )
        if self.max_iterations is not None and self.max_iterations < 0:
            raise InvalidConfigurationException("max_iterations must not be negative")
        if self.time_limit_seconds is not None and self.time_limit_seconds <= 0:
            raise InvalidConfigurationException("time_limit_seconds must be positive")
        if self.match_interval_minutes < 0:
            raise InvalidConfigurationException(
                "match_interval_minutes must not be negative"
            )

    @property
    def iteration_budget(self) -> int:
        if self.max_iterations is not None:
            return self.max_iterations
        return ITERATION_BUDGETS[self.quality_level]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "quality_level": self.quality_level,
            "min_match_separation": self.min_match_separation,
            "max_iterations": self.max_iterations,
            "time_limit_seconds": self.time_limit_seconds,
            "match_interval_minutes": self.match_interval_minutes,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            quality_level=data.get("quality_level", DEFAULT_QUALITY),
            min_match_separation=data.get(
                "min_match_separation", DEFAULT_MIN_MATCH_SEPARATION
            ),
            max_iterations=data.get("max_iterations"),
            time_limit_seconds=data.get("time_limit_seconds"),
            match_interval_minutes=data.get(
                "match_interval_minutes", DEFAULT_MATCH_INTERVAL_MINUTES
            ),
            seed=data.get("seed"),
        )
