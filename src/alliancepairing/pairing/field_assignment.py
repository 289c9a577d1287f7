"""Balanced field assignment."""

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

import random
from typing import Dict, Optional, Sequence

from alliancepairing.exceptions import NoFieldsAvailableException
from alliancepairing.models import Field


class FieldAssigner:
    """Hands out fields so that match counts stay level.

    Each call picks a field currently holding the fewest matches, choosing
    uniformly at random among the tied ones.
    """

    def __init__(self, fields: Sequence[Field], rng: Optional[random.Random] = None):
        if not fields:
            raise NoFieldsAvailableException("No fields found for this tournament.")
        self.rng = rng or random.Random()
        self.fields = list(fields)
        self.rng.shuffle(self.fields)
        self.counts = [0] * len(self.fields)

    def assign(self) -> Field:
        lowest = min(self.counts)
        candidates = [i for i, count in enumerate(self.counts) if count == lowest]
        chosen = self.rng.choice(candidates)
        self.counts[chosen] += 1
        return self.fields[chosen]

    def usage(self) -> Dict[str, int]:
        """Matches assigned so far per field id."""
        return {f.id: count for f, count in zip(self.fields, self.counts)}
