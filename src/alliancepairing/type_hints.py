"""Type hints used in Alliance Pairing."""

from typing import Dict, List, Literal, Set, Tuple

# Quality tier for the qualification optimizer
Quality = Literal["low", "medium", "high"]

# Internal (1-indexed) team number used by the optimizer
TeamNumber = int
# Red and blue team numbers of one optimizer match
MatchSlots = Tuple[List[TeamNumber], List[TeamNumber]]
# Team id -> set of team ids already faced
OpponentHistory = Dict[str, Set[str]]
# Field names accepted by MatchStore.update_team_record
RecordFields = Dict[str, object]

#  LocalWords:  MatchSlots OpponentHistory
