"""Simulated annealing over qualification schedules."""

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
import time
from dataclasses import dataclass, field
from typing import List, Optional

from alliancepairing.constants import (
    COOLING_INTERVAL,
    COOLING_RATE,
    DEFAULT_MIN_MATCH_SEPARATION,
    DEFAULT_QUALITY,
    INITIAL_TEMPERATURE,
    ITERATION_BUDGETS,
    MIN_TEMPERATURE,
    TEAMS_PER_ALLIANCE,
    TEAMS_PER_MATCH,
)
from alliancepairing.exceptions import (
    InsufficientTeamsException,
    InvalidConfigurationException,
)
from alliancepairing.scheduling.schedule_state import (
    BLUE,
    RED,
    ScheduleState,
    build_initial_schedule,
    compute_stats,
    required_matches,
    score_schedule,
)
from alliancepairing.type_hints import Quality
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class OptimizationResult:
    """Outcome of one annealing run.

    Attributes:
        state: Best schedule found
        score: Penalty score of ``state``
        iterations: Iterations actually run
        best_score_history: Best score after the initial state and after
            every iteration; never increases
        elapsed_seconds: Wall-clock time spent
    """

    state: ScheduleState
    score: float
    iterations: int
    best_score_history: List[float] = field(default_factory=list)
    elapsed_seconds: float = 0.0


class QualificationOptimizer:
    """Locally improves a qualification schedule with simulated annealing.

    The result is the best schedule seen within the iteration and time
    budget. It is not guaranteed to be optimal and may still carry penalties.
    """

    def __init__(
        self,
        num_teams: int,
        rounds: int,
        min_match_separation: int = DEFAULT_MIN_MATCH_SEPARATION,
        quality_level: Quality = DEFAULT_QUALITY,
        max_iterations: Optional[int] = None,
        time_limit_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the optimizer.

        Args:
            num_teams: Number of teams N
            rounds: Appearances each team should get
            min_match_separation: Matches wanted between two appearances
            quality_level: 'low', 'medium' or 'high' iteration budget
            max_iterations: Explicit budget overriding the quality level
            time_limit_seconds: Optional hard wall-clock budget
            rng: Random source, for reproducible runs

        Raises:
            InsufficientTeamsException: If N < 4
            InvalidConfigurationException: On a bad round count or quality level
        """
        if num_teams < TEAMS_PER_MATCH:
            raise InsufficientTeamsException(
                f"At least {TEAMS_PER_MATCH} teams are required, got {num_teams}"
            )
        if rounds < 1:
            raise InvalidConfigurationException(
                f"Each team must play at least one round, got {rounds}"
            )
        if quality_level not in ITERATION_BUDGETS:
            raise InvalidConfigurationException(
                f"Unknown quality level '{quality_level}'"
            )

        self.num_teams = num_teams
        self.rounds = rounds
        self.min_match_separation = min_match_separation
        self.iteration_budget = (
            max_iterations
            if max_iterations is not None
            else ITERATION_BUDGETS[quality_level]
        )
        self.time_limit_seconds = time_limit_seconds
        self.rng = rng or random.Random()

    @property
    def num_matches(self) -> int:
        return required_matches(self.num_teams, self.rounds)

    def score(self, state: ScheduleState) -> float:
        return score_schedule(compute_stats(state), self.min_match_separation)

    def neighbor(self, state: ScheduleState) -> Optional[ScheduleState]:
        """Swap one team between two random matches.

        Returns None when the drawn swap would put a team twice into the
        same match; the caller treats that as a spent iteration.
        """
        if len(state.matches) < 2:
            return None

        first, second = self.rng.sample(range(len(state.matches)), 2)
        first_side = self.rng.choice((RED, BLUE))
        second_side = self.rng.choice((RED, BLUE))
        first_pos = self.rng.randrange(TEAMS_PER_ALLIANCE)
        second_pos = self.rng.randrange(TEAMS_PER_ALLIANCE)

        team_a = state.matches[first][first_side][first_pos]
        team_b = state.matches[second][second_side][second_pos]
        if team_a in state.teams_in(second) or team_b in state.teams_in(first):
            return None

        candidate = state.copy()
        candidate.matches[first][first_side][first_pos] = team_b
        candidate.matches[second][second_side][second_pos] = team_a
        return candidate

    def optimize(self) -> OptimizationResult:
        """Run annealing and return the best schedule seen."""
        started = time.monotonic()

        current = build_initial_schedule(self.num_teams, self.rounds, self.rng)
        current_score = self.score(current)
        best, best_score = current, current_score
        history = [best_score]

        temperature = INITIAL_TEMPERATURE
        iterations = 0

        while iterations < self.iteration_budget and temperature >= MIN_TEMPERATURE:
            if (
                self.time_limit_seconds is not None
                and time.monotonic() - started >= self.time_limit_seconds
            ):
                logger.info(
                    f"Annealing stopped by time limit after {iterations} iterations"
                )
                break

            iterations += 1
            candidate = self.neighbor(current)
            if candidate is not None:
                candidate_score = self.score(candidate)
                delta = candidate_score - current_score
                if delta < 0 or self.rng.random() < math.exp(-delta / temperature):
                    current, current_score = candidate, candidate_score
                    if current_score < best_score:
                        best, best_score = current, current_score

            history.append(best_score)

            if iterations % COOLING_INTERVAL == 0:
                temperature *= COOLING_RATE
                logger.debug(
                    f"Iteration {iterations}: temperature {temperature:.4f}, "
                    f"current {current_score:.2f}, best {best_score:.2f}"
                )

        elapsed = time.monotonic() - started
        logger.info(
            f"Optimized schedule for {self.num_teams} teams: {len(best.matches)} "
            f"matches, score {best_score:.2f} after {iterations} iterations "
            f"({elapsed:.2f}s)"
        )
        return OptimizationResult(
            state=best,
            score=best_score,
            iterations=iterations,
            best_score_history=history,
            elapsed_seconds=elapsed,
        )
