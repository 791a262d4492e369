"""Score-group pairing for the Swiss family of formats.

Players are grouped by score, highest group first, and the whole field is
paired as one weighted matching that keeps pairs inside their group where
it can. A player who cannot be paired at home floats to the nearest group
that has an opponent for them. When no rematch-free pairing exists the
forced fallback allows one flagged rematch per pair, as few as possible.
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

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pairingengine.exceptions import NoPairingAvailableException
from pairingengine.pairing.solver import (
    SWISS_POLICY,
    MatchedPair,
    MatchingSolver,
    MeetingCounter,
    RematchPolicy,
    count_meetings,
)
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

ScoreFunction = Callable[[Player], float]


def player_score(player: Player) -> float:
    return player.score


def rank_players(
    players: Sequence[Player], score_of: ScoreFunction = player_score
) -> List[Player]:
    """Standing order: score, then rating, both descending, then input order."""
    order = {p.id: i for i, p in enumerate(players)}
    return sorted(players, key=lambda p: (-score_of(p), -p.rating, order[p.id]))


class ScoreGroupPartitioner:
    """Pairs a field by score groups.

    Args:
        policy: Rematch tolerance for normal and forced pairing
        score_of: Score used for grouping (effective score for Accelerated)
        meetings: Counts earlier games between two players
        balance_colours: Keep players due the same colour apart
    """

    def __init__(
        self,
        policy: RematchPolicy = SWISS_POLICY,
        score_of: ScoreFunction = player_score,
        meetings: Optional[MeetingCounter] = None,
        balance_colours: bool = True,
    ):
        self.policy = policy
        self.score_of = score_of
        self.meetings = meetings or count_meetings
        self.balance_colours = balance_colours
        self.forced_used = False

    def group(self, players: Sequence[Player]) -> List[List[Player]]:
        """Split players into score groups, highest score first.

        Players within a group keep standing order.
        """
        groups: Dict[float, List[Player]] = {}
        for player in rank_players(players, self.score_of):
            groups.setdefault(self.score_of(player), []).append(player)
        return [groups[score] for score in sorted(groups, reverse=True)]

    def pair(
        self, players: Sequence[Player], allow_forced: bool = True
    ) -> List[MatchedPair]:
        """Pair an even-sized field.

        Args:
            players: Players to pair, the bye recipient already removed
            allow_forced: Whether the rematch fallback may be used

        Returns:
            (higher-ranked, lower-ranked, is_rematch) triples in board order

        Raises:
            NoPairingAvailableException: if even forced pairing fails
        """
        if len(players) % 2:
            raise NoPairingAvailableException(
                f"Cannot pair an odd number of players ({len(players)}) without a bye"
            )
        pairs, _ = self._pair(players, [], allow_forced)
        return pairs

    def pair_with_bye(
        self, players: Sequence[Player], bye_candidates: Sequence[Player]
    ) -> Tuple[List[MatchedPair], Player]:
        """Pair an odd-sized field and pick the bye recipient.

        The first candidate gets the bye unless a later one lets the round
        be paired with fewer rematches.

        Raises:
            NoPairingAvailableException: if no bye choice leads to a pairing
        """
        if len(players) % 2 == 0:
            raise NoPairingAvailableException(
                f"An even field of {len(players)} players needs no bye"
            )
        pairs, bye_player = self._pair(players, bye_candidates, True)
        return pairs, bye_player

    def _pair(
        self,
        players: Sequence[Player],
        bye_candidates: Sequence[Player],
        allow_forced: bool,
    ) -> Tuple[List[MatchedPair], Optional[Player]]:
        self.forced_used = False
        ranked = rank_players(players, self.score_of)
        caps = [self.policy.preferred]
        if allow_forced and self.policy.hard_limit > self.policy.preferred:
            caps.append(self.policy.hard_limit)

        for cap in caps:
            solver = self._solver(cap, ranked)
            if bye_candidates:
                result = solver.solve_with_bye(ranked, bye_candidates)
            else:
                pairs = solver.solve_minimizing_rematches(ranked)
                result = (pairs, None) if pairs is not None else None
            if result is None:
                continue
            if cap > self.policy.preferred:
                self.forced_used = True
                logger.warning("Forced pairing used for %s players", len(ranked))
            self._log_floaters(result[0])
            return result

        raise NoPairingAvailableException(
            "Pairing Impossible\nNo valid pairing exists for the remaining "
            f"{len(players)} players without repeating games beyond the "
            "allowed limit."
        )

    def _solver(self, cap: int, ranked: List[Player]) -> MatchingSolver:
        group_index = {
            p.id: index
            for index, group in enumerate(self.group(ranked))
            for p in group
        }
        return MatchingSolver(
            max_prior_meetings=cap,
            meetings=self.meetings,
            balance_colours=self.balance_colours,
            group_of=lambda p: group_index[p.id],
        )

    def _log_floaters(self, pairs: List[MatchedPair]) -> None:
        floated = [
            (first.id, second.id)
            for first, second, _ in pairs
            if self.score_of(first) != self.score_of(second)
        ]
        if floated:
            logger.debug("Pairs across score groups: %s", floated)


#  LocalWords:  floaters
