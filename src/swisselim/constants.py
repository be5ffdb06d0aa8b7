# Swiss Elimination
# Copyright (C) 2025  Swiss Elimination developers
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

# --- Logging ---
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL_ENV_VAR = "SWISSELIM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# --- Tournament defaults ---
DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"
DEFAULT_ALLOWED_LOSSES = 3
# Number of times two contestants may meet again (0 = no rematches)
DEFAULT_MAX_REPEAT_PAIRINGS = 0
DEFAULT_TRACK_FIRST_MOVE_ADVANTAGE = True

# --- Pairing search limits ---
# Total candidate evaluations allowed while pairing one round
DEFAULT_SEARCH_BUDGET = 20000
# Best candidates of a bracket explored further down the bracket tree
BRACKET_BRANCH_LIMIT = 4

# Result type constants (for display)
RESULT_WIN = "1-0"
RESULT_LOSS = "0-1"
RESULT_IN_PROGRESS = "*"
RESULT_BYE = "Bye"

# Tournament state names
STATE_IDLE = "idle"
STATE_ROUND_IN_PROGRESS = "round_in_progress"

# Seed kinds
SEED_RATING = "rating"
SEED_PLACEMENT = "placement"
