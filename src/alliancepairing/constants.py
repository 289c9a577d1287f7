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

# --- Match geometry ---
RED_ALLIANCE_SIZE = 2
BLUE_ALLIANCE_SIZE = 2
TEAMS_PER_ALLIANCE = 2
TEAMS_PER_MATCH = RED_ALLIANCE_SIZE + BLUE_ALLIANCE_SIZE
# red 1, red 2, blue 1, blue 2
STATIONS_PER_MATCH = TEAMS_PER_MATCH

# Ranking points awarded per result
WIN_RANKING_POINTS = 2
TIE_RANKING_POINTS = 1
LOSS_RANKING_POINTS = 0

# --- Qualification schedule scoring weights ---
PARTNER_REPEAT_PENALTY = 3.0
OPPONENT_REPEAT_PENALTY = 2.0
SEPARATION_PENALTY = 10.0
COLOR_BALANCE_PENALTY = 2.0
STATION_BALANCE_PENALTY = 0.5

# --- Simulated annealing ---
INITIAL_TEMPERATURE = 100.0
COOLING_RATE = 0.95
COOLING_INTERVAL = 100
MIN_TEMPERATURE = 0.01

QUALITY_LOW = "low"
QUALITY_MEDIUM = "medium"
QUALITY_HIGH = "high"

ITERATION_BUDGETS = {
    QUALITY_LOW: 5000,
    QUALITY_MEDIUM: 10000,
    QUALITY_HIGH: 25000,
}

DEFAULT_QUALITY = QUALITY_MEDIUM
DEFAULT_MIN_MATCH_SEPARATION = 1

# Minutes between scheduled match start times
DEFAULT_MATCH_INTERVAL_MINUTES = 6
