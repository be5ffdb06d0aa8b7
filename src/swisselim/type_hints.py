"""Type hints used in Swiss Elimination."""

from typing import Dict, List, Mapping, Tuple

# Identifier of a contestant inside the tournament arena
ContestantId = str

# Arena of contestants, addressed by stable identifiers
Arena = Mapping[ContestantId, "Contestant"]
MutableArena = Dict[ContestantId, "Contestant"]

# Pair of contestant ids, first entry moves first when advantage is tracked
PairingIDs = Tuple[ContestantId, ContestantId]
# (winner_id, loser_id) as reported by the outside world
ResultReport = Tuple[ContestantId, ContestantId]

# Ordered list of contestants sharing a win count
Bracket = List["Contestant"]

#  LocalWords:  PairingIDs ResultReport
