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

from typing import List, Optional, Tuple

from alliancepairing.exceptions import (
    InvalidMatchTransitionException,
    MatchNotFoundException,
)
from alliancepairing.models import Match, MatchScore, MatchStatus, WinningAlliance
from alliancepairing.storage import MatchStore
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Records alliance totals and completes matches.

    This class is responsible for:
    - Writing red and blue totals onto the match score sheet
    - Deriving the winning alliance from the totals
    - Moving the match through its lifecycle to COMPLETED
    """

    def __init__(self, store: MatchStore):
        self.store = store

    def _require_match(self, match_id: str) -> Match:
        match = self.store.find_match(match_id)
        if match is None:
            logger.error(f"Cannot find match {match_id}")
            raise MatchNotFoundException(f"Match with ID {match_id} not found")
        return match

    def start_match(self, match_id: str) -> Match:
        match = self._require_match(match_id)
        match.start()
        self.store.update_match(match)
        logger.debug(f"Match {match.match_number} started")
        return match

    def record_result(
        self,
        match_id: str,
        red_total: int,
        blue_total: int,
        winning_alliance: Optional[WinningAlliance] = None,
    ) -> Match:
        """Record final totals and complete the match.

        Args:
            match_id: Match to complete
            red_total: RED alliance total score
            blue_total: BLUE alliance total score
            winning_alliance: Explicit outcome; derived from the totals when
                omitted

        Returns:
            The completed match

        Raises:
            MatchNotFoundException: If the match does not exist
            InvalidMatchTransitionException: If the match is already
                completed or cancelled
        """
        match = self._require_match(match_id)
        if red_total < 0 or blue_total < 0:
            raise ValueError(
                f"Scores must not be negative: red {red_total}, blue {blue_total}"
            )

        if match.status in (MatchStatus.COMPLETED, MatchStatus.CANCELLED):
            logger.error(
                f"Cannot record a result for match {match.match_number}: "
                f"it is {match.status.value}"
            )
            raise InvalidMatchTransitionException(
                f"Match {match_id} is {match.status.value} and cannot take a result"
            )

        if match.score is None:
            match.score = MatchScore(match_id=match.id)
        match.score.red_total_score = red_total
        match.score.blue_total_score = blue_total

        if winning_alliance is None:
            winning_alliance = self.winner_from_totals(red_total, blue_total)
        match.complete(winning_alliance)
        self.store.update_match(match)

        logger.debug(
            f"Recorded match {match.match_number} (round {match.round_number}): "
            f"red {red_total} - blue {blue_total}, {winning_alliance.value}"
        )
        return match

    def record_round(
        self, results: List[Tuple[str, int, int]]
    ) -> List[Match]:
        """Record ``(match_id, red_total, blue_total)`` tuples in order."""
        return [self.record_result(*result) for result in results]

    def cancel_match(self, match_id: str) -> Match:
        match = self._require_match(match_id)
        match.cancel()
        self.store.update_match(match)
        logger.info(f"Match {match.match_number} cancelled")
        return match

    @staticmethod
    def winner_from_totals(red_total: int, blue_total: int) -> WinningAlliance:
        if red_total > blue_total:
            return WinningAlliance.RED
        if blue_total > red_total:
            return WinningAlliance.BLUE
        return WinningAlliance.TIE
