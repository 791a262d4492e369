"""Final and intermediate standings for the supported formats."""

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

import functools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pairingengine.constants import (
    DEFAULT_TIEBREAK_SORT_ORDER,
    DRAW_SCORE,
    LOSS_SCORE,
    WIN_SCORE,
)
from pairingengine.pairing.double_swiss import cycle_one_score, cycle_two_score
from pairingengine.pairing.scheveningen import split_teams
from pairingengine.player import Player
from pairingengine.tournament.models import MatchRecord, TiebreakSet
from pairingengine.tournament.tiebreak_calculator import calculate_tiebreaks
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class StandingEntry:
    """One line of a standings table.

    Attributes:
        rank: 1-based position; tied entries share a rank
        player: The participant
        score: Points used for ranking (combined score in Double Swiss)
        tiebreaks: The participant's tiebreak values
        placement: Knockout placement, None for other formats
    """

    rank: int
    player: Player
    score: float
    tiebreaks: Optional[TiebreakSet] = None
    placement: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "player_id": self.player.id,
            "name": self.player.name,
            "score": self.score,
            "tiebreaks": self.tiebreaks.to_dict() if self.tiebreaks else None,
            "placement": self.placement,
        }


def _compare_entries(
    e1: StandingEntry, e2: StandingEntry, tiebreak_order: Sequence[str]
) -> int:
    """Compare two entries for standings order.

    Returns:
        1 if e1 ranks higher, -1 if e2 ranks higher, 0 if equal
    """
    if e1.score != e2.score:
        return 1 if e1.score > e2.score else -1
    for tb_key in tiebreak_order:
        tb1 = e1.tiebreaks.get(tb_key)
        tb2 = e2.tiebreaks.get(tb_key)
        if tb1 != tb2:
            return 1 if tb1 > tb2 else -1
    return 0


def _assign_ranks(entries: List[StandingEntry], compare) -> List[StandingEntry]:
    for index, entry in enumerate(entries):
        if index and compare(entries[index - 1], entry) == 0:
            entry.rank = entries[index - 1].rank
        else:
            entry.rank = index + 1
    return entries


def rank_standings(
    participants: Sequence[Player],
    matches: Iterable[MatchRecord],
    tiebreak_order: Optional[Sequence[str]] = None,
) -> List[StandingEntry]:
    """Rank participants by score, then by tiebreaks in the given order.

    Args:
        participants: Players with their current scores
        matches: Complete match history
        tiebreak_order: Tiebreak keys, highest priority first. Defaults to
            the FIDE-style order in :mod:`pairingengine.constants`.

    Returns:
        Standings, best first. Players level on score and every tiebreak
        share a rank and keep their input order.
    """
    order = list(tiebreak_order or DEFAULT_TIEBREAK_SORT_ORDER)
    tiebreaks = calculate_tiebreaks(participants, list(matches))
    entries = [
        StandingEntry(rank=0, player=p, score=p.score, tiebreaks=tb)
        for p, tb in zip(participants, tiebreaks)
    ]

    def compare(e1, e2):
        return _compare_entries(e1, e2, order)

    entries.sort(key=functools.cmp_to_key(compare), reverse=True)
    # sort(reverse=True) keeps stability, so equal entries stay in input order
    return _assign_ranks(entries, compare)


def knockout_standings(
    players: Sequence[Player], total_rounds: int
) -> List[StandingEntry]:
    """Placement of every knockout participant.

    The champion (the only player still active) places 1. A player knocked
    out in round r places ``2 ** (total_rounds - r) + 1``, so both losing
    semi-finalists share 3rd, quarter-finalists share 5th, and so on.

    Args:
        players: Knockout participants with status and elimination round
        total_rounds: Number of rounds in the bracket

    Returns:
        Entries sorted by placement, best first
    """
    entries = []
    for player in players:
        if player.is_active_in_knockout or player.knockout_round is None:
            placement = 1
        else:
            placement = 2 ** max(total_rounds - player.knockout_round, 0) + 1
        entries.append(
            StandingEntry(
                rank=placement,
                player=player,
                score=player.score,
                placement=placement,
            )
        )
    entries.sort(key=lambda e: e.placement)
    active = [e for e in entries if e.placement == 1]
    if len(active) > 1:
        logger.warning(
            "%s knockout players still active, no single champion", len(active)
        )
    return entries


def double_swiss_standings(players: Sequence[Player]) -> List[StandingEntry]:
    """Rank Double Swiss players by combined score over both cycles.

    Ties are broken by the cycle-two score, rewarding later form.
    """
    scored = [
        (p, cycle_one_score(p) + cycle_two_score(p), cycle_two_score(p))
        for p in players
    ]
    scored.sort(key=lambda item: (-item[1], -item[2]))

    entries: List[StandingEntry] = []
    for index, (player, total, second) in enumerate(scored):
        rank = index + 1
        if index and (total, second) == scored[index - 1][1:]:
            rank = entries[-1].rank
        entries.append(StandingEntry(rank=rank, player=player, score=total))
    return entries


@dataclass
class PlayerPerformance:
    """Individual record of a Scheveningen team member."""

    player_id: str
    name: Optional[str]
    team: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    score: float = 0.0
    opponents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "team": self.team,
            "played": self.played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "score": self.score,
            "opponents": list(self.opponents),
        }


@dataclass
class ScheveningenResults:
    """Match result between the two Scheveningen teams."""

    team_scores: Dict[str, float]
    matches_completed: int
    total_matches: int
    performances: Dict[str, PlayerPerformance]

    @property
    def is_complete(self) -> bool:
        return self.matches_completed == self.total_matches

    @property
    def winner(self) -> Optional[str]:
        """Winning team name, None while the teams are level."""
        (team_a, score_a), (team_b, score_b) = self.team_scores.items()
        if score_a == score_b:
            return None
        return team_a if score_a > score_b else team_b

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_scores": dict(self.team_scores),
            "matches_completed": self.matches_completed,
            "total_matches": self.total_matches,
            "winner": self.winner,
            "performances": {k: v.to_dict() for k, v in self.performances.items()},
        }


def scheveningen_results(
    players: Sequence[Player], matches: Iterable[MatchRecord]
) -> ScheveningenResults:
    """Team totals and individual performance for a Scheveningen match.

    Only finished games between members of opposite teams count; a game
    between two members of the same team is logged and skipped.

    Raises:
        StructuralPairingException: if the players do not form two equal teams
    """
    (name_a, team_a), (name_b, team_b) = split_teams(players)
    team_of: Dict[str, str] = {}
    performances: Dict[str, PlayerPerformance] = {}
    for team_name, members in ((name_a, team_a), (name_b, team_b)):
        for player in members:
            team_of[player.id] = team_name
            performances[player.id] = PlayerPerformance(
                player_id=player.id, name=player.name, team=team_name
            )

    team_scores = {name_a: 0.0, name_b: 0.0}
    completed = 0
    for match in matches:
        if not match.is_decided:
            continue
        white_team = team_of.get(match.white_id)
        black_team = team_of.get(match.black_id)
        if white_team is None or black_team is None or white_team == black_team:
            logger.warning(
                "Skipping round %s game %s - %s: not a cross-team game",
                match.round,
                match.white_id,
                match.black_id,
            )
            continue

        completed += 1
        white_points, black_points = match.points
        team_scores[white_team] += white_points
        team_scores[black_team] += black_points
        for player_id, opponent_id, points in (
            (match.white_id, match.black_id, white_points),
            (match.black_id, match.white_id, black_points),
        ):
            perf = performances[player_id]
            perf.played += 1
            perf.score += points
            perf.opponents.append(opponent_id)
            if points == WIN_SCORE:
                perf.wins += 1
            elif points == DRAW_SCORE:
                perf.draws += 1
            elif points == LOSS_SCORE:
                perf.losses += 1

    return ScheveningenResults(
        team_scores=team_scores,
        matches_completed=completed,
        total_matches=len(team_a) * len(team_b),
        performances=performances,
    )
