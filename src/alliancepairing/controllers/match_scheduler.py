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

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from alliancepairing.bracket import Bracket, BracketEngine
from alliancepairing.exceptions import (
    MatchNotFoundException,
    NoAdvancementInfoException,
)
from alliancepairing.models import AdvancementMap, EngineConfig, Match, TeamRecord
from alliancepairing.pairing import SwissPairingEngine, SwissRound
from alliancepairing.ranking import StandingsEntry, build_standings
from alliancepairing.scheduling import QualificationScheduler
from alliancepairing.storage import MatchStore
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


class MatchScheduler:
    """Single entry point over the three scheduling engines.

    This class is responsible for:
    - Building annealed qualification schedules
    - Ranking and pairing Swiss rounds
    - Building, advancing and finalizing playoff brackets

    It holds no tournament state of its own; everything is read from and
    written to the store.
    """

    def __init__(self, store: MatchStore, config: Optional[EngineConfig] = None):
        """Initialize the scheduler.

        Args:
            store: Storage collaborator shared by every engine
            config: Engine configuration, defaults to ``EngineConfig()``
        """
        self.store = store
        self.config = config or EngineConfig()
        self.qualification = QualificationScheduler(store, self.config)
        self.swiss = SwissPairingEngine(store, self.config)
        self.bracket = BracketEngine(store, self.config)

    # --- Qualification ---

    def generate_qualification_schedule(
        self,
        stage_id: str,
        rounds: int,
        min_match_separation: Optional[int] = None,
        quality_level: Optional[str] = None,
        max_iterations: Optional[int] = None,
        start_time: Optional[datetime] = None,
    ) -> List[Match]:
        return self.qualification.generate_schedule(
            stage_id,
            rounds,
            min_match_separation=min_match_separation,
            quality_level=quality_level,
            max_iterations=max_iterations,
            start_time=start_time,
        )

    # --- Swiss ---

    def update_swiss_rankings(self, stage_id: str) -> List[TeamRecord]:
        return self.swiss.update_rankings(stage_id)

    def get_swiss_rankings(self, stage_id: str) -> List[TeamRecord]:
        return self.swiss.get_rankings(stage_id)

    def generate_swiss_round(
        self,
        stage_id: str,
        current_round_number: int,
        start_time: Optional[datetime] = None,
    ) -> SwissRound:
        return self.swiss.generate_round(
            stage_id, current_round_number, start_time=start_time
        )

    def finalize_swiss_rankings(self, stage_id: str) -> List[TeamRecord]:
        return self.swiss.finalize_swiss_rankings(stage_id)

    def get_standings(self, stage_id: str) -> List[StandingsEntry]:
        """Leaderboard rows of a stage in ranking order."""
        return build_standings(self.store.find_team_records(stage_id))

    # --- Playoffs ---

    def generate_playoff_bracket(
        self,
        stage_id: str,
        number_of_rounds: int,
        seeds: Optional[Sequence[str]] = None,
        start_time: Optional[datetime] = None,
    ) -> Bracket:
        return self.bracket.generate_bracket(
            stage_id, number_of_rounds, seeds=seeds, start_time=start_time
        )

    def advance_winner(
        self, match_id: str, advancement_map: Optional[AdvancementMap] = None
    ) -> Match:
        """Advance a completed match's winner.

        Uses the given map, or the one saved with the match's stage.
        """
        if advancement_map is None:
            match = self.store.find_match(match_id)
            if match is None:
                raise MatchNotFoundException(f"Match with ID {match_id} not found")
            advancement_map = self.store.find_advancement_map(match.stage_id)
            if advancement_map is None:
                raise NoAdvancementInfoException(
                    f"No bracket saved for stage {match.stage_id}"
                )
        return self.bracket.advance_winner(match_id, advancement_map)

    def finalize_playoff_rankings(self, stage_id: str) -> Dict[str, int]:
        return self.bracket.finalize_rankings(stage_id)
