"""Single-elimination bracket: construction, advancement and final ranks.

The engine keeps no state between calls. The bracket edges live in an
``AdvancementMap`` that is saved with the stage and handed back in
explicitly. Callers must not run two advancements into the same destination
alliance at the same time.
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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from alliancepairing.bracket.seeding import bracket_size, ranked_snapshot, seed_pairs
from alliancepairing.exceptions import (
    IncompleteMatchesException,
    InsufficientRankedTeamsException,
    InvalidConfigurationException,
    MatchNotCompletedException,
    MatchNotFoundException,
    NoAdvancementInfoException,
    NoWinningAllianceException,
    StageNotFoundException,
    WrongStageTypeException,
)
from alliancepairing.models import (
    AdvancementEntry,
    AdvancementMap,
    AllianceColor,
    EngineConfig,
    Match,
    MatchSpec,
    MatchStatus,
    Stage,
    StageType,
    TeamAllianceEntry,
)
from alliancepairing.storage import MatchStore
from alliancepairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Bracket:
    """A generated bracket.

    Attributes:
        stage_id: PLAYOFF stage the bracket belongs to
        seeds: Team ids in seeding order used to build round one
        rounds: Matches per round, round one first
        advancement_map: Edges from every non-final match to its successor
    """

    stage_id: str
    seeds: Tuple[str, ...]
    rounds: List[List[Match]] = field(default_factory=list)
    advancement_map: Optional[AdvancementMap] = None

    @property
    def matches(self) -> List[Match]:
        return [match for round_matches in self.rounds for match in round_matches]

    @property
    def final(self) -> Match:
        return self.rounds[-1][0]


class BracketEngine:
    """Builds and advances single-elimination brackets."""

    def __init__(self, store: MatchStore, config: Optional[EngineConfig] = None):
        self.store = store
        self.config = config or EngineConfig()

    def _require_playoff_stage(self, stage_id: str) -> Stage:
        stage = self.store.find_stage(stage_id)
        if stage is None:
            logger.error(f"Stage {stage_id} not found")
            raise StageNotFoundException(f"Stage with ID {stage_id} not found")
        if stage.type is not StageType.PLAYOFF:
            logger.error(f"Stage {stage_id} is {stage.type.value}, not PLAYOFF")
            raise WrongStageTypeException(
                f"Stage with ID {stage_id} is not a PLAYOFF stage"
            )
        return stage

    def generate_bracket(
        self,
        stage_id: str,
        number_of_rounds: int,
        seeds: Optional[Sequence[str]] = None,
        start_time: Optional[datetime] = None,
    ) -> Bracket:
        """Create every match of the bracket and its advancement map.

        Args:
            stage_id: PLAYOFF stage to fill
            number_of_rounds: Rounds in the bracket; ``2^rounds`` teams play
            seeds: Team ids in seeding order. Defaults to a snapshot of the
                tournament-wide ranking taken once before construction.
            start_time: Start of the first match, defaults to now

        Returns:
            The bracket; only round one has teams

        Raises:
            StageNotFoundException: If the stage does not exist
            WrongStageTypeException: If the stage is not a PLAYOFF stage
            InsufficientRankedTeamsException: If fewer than ``2^rounds``
                teams are ranked
            InvalidConfigurationException: On fewer than one round or a
                team seeded twice
        """
        stage = self._require_playoff_stage(stage_id)
        if number_of_rounds < 1:
            raise InvalidConfigurationException(
                f"A bracket needs at least one round, got {number_of_rounds}"
            )

        if seeds is None:
            seeds = ranked_snapshot(self.store.find_tournament_records(stage.tournament_id))
        seeds = tuple(seeds)
        if len(set(seeds)) != len(seeds):
            logger.error(f"Duplicate team ids in seeds for stage {stage_id}")
            raise InvalidConfigurationException(
                f"Each team may be seeded only once, got {list(seeds)}"
            )

        size = bracket_size(number_of_rounds)
        if len(seeds) < size:
            logger.error(
                f"Bracket of {number_of_rounds} rounds needs {size} ranked teams, "
                f"found {len(seeds)}"
            )
            raise InsufficientRankedTeamsException(
                f"Not enough teams for {number_of_rounds} rounds: need {size}, "
                f"have {len(seeds)}"
            )
        seeds = seeds[:size]

        fields = self.store.find_fields(stage.tournament_id)
        start_time = start_time or datetime.now()
        bracket = Bracket(stage_id=stage_id, seeds=seeds)
        edges: Dict[str, AdvancementEntry] = {}
        match_number = 1

        def create(round_number: int, red: List[str], blue: List[str]) -> Match:
            nonlocal match_number
            spec = MatchSpec(
                stage_id=stage_id,
                match_number=match_number,
                round_number=round_number,
                red=[TeamAllianceEntry(t, i) for i, t in enumerate(red, start=1)],
                blue=[TeamAllianceEntry(t, i) for i, t in enumerate(blue, start=1)],
                field_id=fields[(match_number - 1) % len(fields)].id if fields else None,
                scheduled_time=start_time
                + relativedelta(
                    minutes=(match_number - 1) * self.config.match_interval_minutes
                ),
            )
            match = self.store.create_match(spec)
            self.store.create_initial_score(match.id)
            match_number += 1
            return match

        bracket.rounds.append(
            [create(1, [seeds[high]], [seeds[low]]) for high, low in seed_pairs(number_of_rounds)]
        )

        for round_number in range(2, number_of_rounds + 1):
            previous = bracket.rounds[-1]
            current = []
            for sibling in range(0, len(previous), 2):
                next_match = create(round_number, [], [])
                edges[previous[sibling].id] = AdvancementEntry(
                    next_match.id, AllianceColor.RED
                )
                edges[previous[sibling + 1].id] = AdvancementEntry(
                    next_match.id, AllianceColor.BLUE
                )
                current.append(next_match)
            bracket.rounds.append(current)

        bracket.advancement_map = AdvancementMap(stage_id=stage_id, entries=edges)
        self.store.save_advancement_map(bracket.advancement_map)

        logger.info(
            f"Generated {number_of_rounds}-round bracket for stage {stage_id}: "
            f"{len(bracket.matches)} matches, {len(edges)} advancement edges"
        )
        return bracket

    def advance_winner(self, match_id: str, advancement_map: AdvancementMap) -> Match:
        """Copy the winning alliance's teams into the mapped next match.

        Station positions are kept and the surrogate flag is dropped. Teams
        already present in the destination alliance are left alone, nothing
        is removed or reordered.

        Args:
            match_id: Completed match whose winner advances
            advancement_map: The bracket's edges

        Returns:
            The destination match after the update

        Raises:
            MatchNotFoundException: If the match or its successor is missing
            NoAdvancementInfoException: If the match has no successor
            NoWinningAllianceException: If no winner is recorded
            MatchNotCompletedException: If the match is not COMPLETED
        """
        match = self.store.find_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match with ID {match_id} not found")

        entry = advancement_map.get(match_id)
        if entry is None:
            logger.error(f"No advancement info for match {match_id}")
            raise NoAdvancementInfoException(
                f"No advancement info for match {match_id}"
            )

        outcome = match.winner_and_loser()
        if outcome is None:
            logger.error(f"Match {match_id} has no winning alliance")
            raise NoWinningAllianceException(
                f"Match {match_id} has no winning alliance"
            )
        if match.status is not MatchStatus.COMPLETED:
            raise MatchNotCompletedException(
                f"Match {match_id} is {match.status.value}, not COMPLETED"
            )
        winner, _ = outcome

        next_match = self.store.find_match(entry.next_match_id)
        if next_match is None:
            raise MatchNotFoundException(
                f"Next match {entry.next_match_id} for match {match_id} not found"
            )
        target = next_match.alliance(entry.color)
        if target is None:
            raise MatchNotFoundException(
                f"Match {next_match.id} has no {entry.color.value} alliance"
            )

        for team_entry in winner.entries:
            if target.has_team(team_entry.team_id):
                logger.warning(
                    f"Team {team_entry.team_id} already in {entry.color.value} "
                    f"alliance of match {next_match.id}, skipping"
                )
                continue
            self.store.add_team_to_alliance(
                target.id, team_entry.team_id, team_entry.station_position
            )

        logger.info(
            f"Advanced {winner.team_ids} from match {match.match_number} to "
            f"{entry.color.value} of match {next_match.match_number}"
        )
        return self.store.find_match(next_match.id)

    def finalize_rankings(self, stage_id: str) -> Dict[str, int]:
        """Write bracket placements once every match is completed.

        The final's winner ranks 1 and its loser 2. Losers of round ``r``
        all share rank ``2^(max_round - r) + 1``.

        Returns:
            Mapping team id -> rank

        Raises:
            StageNotFoundException: If the stage does not exist
            MatchNotFoundException: If the stage has no matches
            IncompleteMatchesException: If any match is not COMPLETED
            NoWinningAllianceException: If a match ended without a winner
        """
        self._require_playoff_stage(stage_id)
        matches = self.store.find_matches(stage_id)
        if not matches:
            raise MatchNotFoundException(f"No matches found for stage {stage_id}")

        incomplete = [m for m in matches if m.status is not MatchStatus.COMPLETED]
        if incomplete:
            logger.error(
                f"Cannot finalize stage {stage_id}: {len(incomplete)} matches "
                "not completed"
            )
            raise IncompleteMatchesException(
                f"Stage {stage_id} has {len(incomplete)} matches that are not completed"
            )

        max_round = max(m.round_number for m in matches)
        ranks: Dict[str, int] = {}
        for match in matches:
            outcome = match.winner_and_loser()
            if outcome is None:
                raise NoWinningAllianceException(
                    f"Match {match.id} has no winning alliance"
                )
            winner, loser = outcome
            if match.round_number == max_round:
                for team_id in winner.team_ids:
                    ranks[team_id] = 1
                for team_id in loser.team_ids:
                    ranks[team_id] = 2
            else:
                for team_id in loser.team_ids:
                    ranks[team_id] = 2 ** (max_round - match.round_number) + 1

        for team_id, rank in ranks.items():
            self.store.update_team_record(team_id, stage_id, {"rank": rank})

        logger.info(f"Finalized playoff ranks for {len(ranks)} teams in stage {stage_id}")
        return ranks
