"""Perfect-matching search used by every history-aware format.

A round is one maximum-weight perfect matching over the players, computed
with the blossom algorithm from networkx in O(N^3). Edge weights rank the
candidate matchings lexicographically, most important first:

1. fewest rematches
2. the preferred bye recipient, when a bye is part of the matching
3. fewest pairs of players due the same colour
4. smallest score-group distance
5. standing order, each player taking the earliest acceptable opponent

Pairs that met more often than the cap have no edge at all, so a missing
perfect matching proves that the round cannot be paired under the cap.
"""

# Pairing Engine
# Copyright (C) 2025  Pairing Engine developers
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

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import networkx as nx

from pairingengine.pairing.colour import colours_compatible
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

# (higher-ranked player, lower-ranked player, is_rematch)
MatchedPair = Tuple[Player, Player, bool]
MeetingCounter = Callable[[Player, Player], int]
CandidateOrder = Callable[[Player, List[Player]], List[Player]]
GroupIndex = Callable[[Player], int]

# Graph node standing for the bye
BYE_NODE = -1


def count_meetings(first: Player, second: Player) -> int:
    """Games already played between two players, from either history."""
    return max(first.times_played(second.id), second.times_played(first.id))


@dataclass(frozen=True)
class RematchPolicy:
    """How many prior meetings a format tolerates.

    Attributes:
        preferred: Prior meetings allowed during normal pairing
        hard_limit: Prior meetings allowed by the forced fallback
    """

    preferred: int = 0
    hard_limit: int = 1

    def __post_init__(self):
        if self.preferred < 0 or self.hard_limit < self.preferred:
            raise ValueError(
                f"Invalid rematch policy: preferred={self.preferred}, "
                f"hard_limit={self.hard_limit}"
            )


SWISS_POLICY = RematchPolicy(preferred=0, hard_limit=1)


class MatchingSolver:
    """Finds the best perfect matching that respects a prior-meeting cap.

    Args:
        max_prior_meetings: Largest number of earlier games a pair may have
        meetings: Function counting earlier games between two players
        candidate_order: Orders the possible opponents of a player; by
            default opponents are preferred in the order they were given
        balance_colours: Avoid pairing two players due the same colour
        group_of: Score-group index of a player, 0 for the top group;
            pairs across distant groups are avoided when given
        avoid_rematches: Minimize rematches before anything else; when
            False the standing order alone decides among allowed pairs
    """

    def __init__(
        self,
        max_prior_meetings: int = 0,
        meetings: Optional[MeetingCounter] = None,
        candidate_order: Optional[CandidateOrder] = None,
        balance_colours: bool = False,
        group_of: Optional[GroupIndex] = None,
        avoid_rematches: bool = True,
    ):
        self.max_prior_meetings = max_prior_meetings
        self.meetings = meetings or count_meetings
        self.candidate_order = candidate_order
        self.balance_colours = balance_colours
        self.group_of = group_of
        self.avoid_rematches = avoid_rematches
        self._meeting_cache: Dict[Tuple[str, str], int] = {}

    def _meeting_count(self, first: Player, second: Player) -> int:
        key = (first.id, second.id) if first.id < second.id else (second.id, first.id)
        if key not in self._meeting_cache:
            self._meeting_cache[key] = self.meetings(first, second)
        return self._meeting_cache[key]

    def solve(
        self, players: Sequence[Player], rematch_budget: int = 0
    ) -> Optional[List[MatchedPair]]:
        """Pair every player, using at most ``rematch_budget`` rematches.

        Args:
            players: Players in standing order, must be an even count
            rematch_budget: Number of pairs that may have met before

        Returns:
            Pairs ordered by their higher-ranked player, or None when no
            matching exists
        """
        result = self._match(list(players))
        if result is None:
            return None
        pairs, _ = result
        if _rematches(pairs) > rematch_budget:
            return None
        return pairs

    def solve_minimizing_rematches(
        self, players: Sequence[Player]
    ) -> Optional[List[MatchedPair]]:
        """Find a matching with the fewest rematches the cap allows."""
        result = self._match(list(players))
        if result is None:
            return None
        pairs, _ = result
        if _rematches(pairs):
            logger.info(
                "Matching needed %s rematch(es) for %s players",
                _rematches(pairs),
                len(players),
            )
        return pairs

    def solve_with_bye(
        self, players: Sequence[Player], bye_candidates: Sequence[Player]
    ) -> Optional[Tuple[List[MatchedPair], Player]]:
        """Pair an odd field, choosing who sits out as part of the matching.

        The earliest bye candidate wins unless giving the bye elsewhere
        saves a rematch.

        Args:
            players: Players in standing order, an odd count
            bye_candidates: Players allowed the bye, most deserving first

        Returns:
            (pairs, bye recipient), or None when no matching exists
        """
        players = list(players)
        if len(players) % 2 == 0 or not bye_candidates:
            return None
        result = self._match(players, list(bye_candidates))
        if result is None:
            return None
        pairs, bye_player = result
        if _rematches(pairs):
            logger.info(
                "Matching needed %s rematch(es) for %s players",
                _rematches(pairs),
                len(players),
            )
        return pairs, bye_player

    def _match(
        self,
        players: List[Player],
        bye_candidates: Optional[List[Player]] = None,
    ) -> Optional[Tuple[List[MatchedPair], Optional[Player]]]:
        node_count = len(players) + (1 if bye_candidates else 0)
        if node_count % 2:
            return None
        if not players:
            return [], None

        graph = self._graph(players, bye_candidates or [])
        matching = nx.max_weight_matching(graph, maxcardinality=True)
        if 2 * len(matching) < node_count:
            logger.debug("No perfect matching for %s players", len(players))
            return None

        bye_player: Optional[Player] = None
        edges: List[Tuple[int, int]] = []
        for u, v in matching:
            if BYE_NODE in (u, v):
                bye_player = players[v if u == BYE_NODE else u]
            else:
                edges.append((min(u, v), max(u, v)))
        pairs = [
            (
                players[i],
                players[j],
                self._meeting_count(players[i], players[j]) > 0,
            )
            for i, j in sorted(edges)
        ]
        return pairs, bye_player

    def _graph(self, players: List[Player], bye_candidates: List[Player]) -> nx.Graph:
        """Weighted graph of every allowed pair.

        Each criterion's unit is larger than the sum the criteria below it
        can reach over a whole matching, so the heaviest matching is the
        lexicographically best one.
        """
        count = len(players)
        games = count // 2
        base = count + 2
        position = {p.id: i for i, p in enumerate(players)}

        groups = [self.group_of(p) for p in players] if self.group_of else []
        spread = max(groups) - min(groups) if groups else 0

        group_unit = base**count
        colour_unit = group_unit * (games * spread + 1)
        bye_unit = colour_unit * (games + 1)
        rematch_unit = bye_unit * (len(bye_candidates) + 1)

        graph = nx.Graph()
        graph.add_nodes_from(range(count))
        for i, head in enumerate(players):
            rest = players[i + 1 :]
            ordered = self.candidate_order(head, rest) if self.candidate_order else rest
            for rank, opponent in enumerate(ordered):
                met = self._meeting_count(head, opponent)
                if met > self.max_prior_meetings:
                    continue
                j = position[opponent.id]
                weight = base ** (count - 1 - i) * (count - rank)
                if groups:
                    weight += group_unit * (spread - abs(groups[i] - groups[j]))
                if self.balance_colours and colours_compatible(head, opponent):
                    weight += colour_unit
                if self.avoid_rematches and met == 0:
                    weight += rematch_unit
                graph.add_edge(i, j, weight=weight)

        for rank, player in enumerate(bye_candidates):
            graph.add_edge(
                position[player.id],
                BYE_NODE,
                weight=bye_unit * (len(bye_candidates) - rank),
            )
        return graph


def _rematches(pairs: List[MatchedPair]) -> int:
    return sum(1 for _, _, is_rematch in pairs if is_rematch)
