"""Seeding helpers for single-elimination brackets."""

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

from typing import Iterable, List, Tuple

from alliancepairing.models import TeamRecord
from alliancepairing.ranking import sort_standings


def bracket_size(number_of_rounds: int) -> int:
    return 2**number_of_rounds


def seed_pairs(number_of_rounds: int) -> List[Tuple[int, int]]:
    """First-round pairs of 0-indexed seeds.

    Seed ``i`` meets seed ``2^rounds - 1 - i``; for three rounds that is
    (0, 7), (1, 6), (2, 5), (3, 4).
    """
    size = bracket_size(number_of_rounds)
    return [(i, size - 1 - i) for i in range(size // 2)]


def ranked_snapshot(records: Iterable[TeamRecord]) -> Tuple[str, ...]:
    """Freeze team ids in ranking order, one entry per team, best first.

    A team holding records in several stages is seeded by its best one.
    """
    seeds: List[str] = []
    seen = set()
    for record in sort_standings(records):
        if record.team_id in seen:
            continue
        seen.add(record.team_id)
        seeds.append(record.team_id)
    return tuple(seeds)
