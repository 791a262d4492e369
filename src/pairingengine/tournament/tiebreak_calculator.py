"""Tiebreak calculation for tournaments.

Every call rebuilds all values from the participant list and the complete
match history. Nothing is cached between calls, so corrected or reversed
results are always reflected.
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

from typing import Dict, Iterable, List, Sequence, Tuple

from pairingengine.constants import WIN_SCORE
from pairingengine.player import Player
from pairingengine.tournament.models import MatchRecord, TiebreakSet
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

# (round, opponent id, points scored, played black)
GameEntry = Tuple[int, str, float, bool]


class TiebreakCalculator:
    """Calculates tiebreak scores for tournament standings.

    Implemented systems:
    - Buchholz: sum of the current scores of all opponents
    - Buchholz Cut-1: Buchholz dropping the lowest opponent score
    - Sonneborn-Berger: sum of (opponent score x result against them)
    - Progressive: sum of the running score after each round
    - Wins and Wins with Black: decisive wins, and those won with black

    Only finished games count. Byes and pending games (``"*"``) are ignored.
    Opponent scores come from the participant list passed in, not from the
    time of the game.
    """

    def calculate_all_tiebreaks(
        self, participants: Sequence[Player], matches: Iterable[MatchRecord]
    ) -> List[TiebreakSet]:
        """Calculate all tiebreaks for all participants.

        Args:
            participants: Current standings (scores as persisted by the host)
            matches: Complete match history of the tournament

        Returns:
            One TiebreakSet per participant, in participant order
        """
        scores: Dict[str, float] = {p.id: p.score for p in participants}
        games = self._games_by_player(matches)
        return [
            self.calculate_player_tiebreaks(p.id, games.get(p.id, []), scores)
            for p in participants
        ]

    def calculate_player_tiebreaks(
        self, player_id: str, games: List[GameEntry], scores: Dict[str, float]
    ) -> TiebreakSet:
        """Calculate every tiebreak for one participant.

        Args:
            player_id: The participant
            games: The participant's finished games
            scores: Current score of every participant, by id

        Returns:
            The participant's TiebreakSet
        """
        tiebreaks = TiebreakSet(player_id=player_id)
        if not games:
            return tiebreaks

        opponent_scores = []
        sb_score = 0.0
        for _, opponent_id, points, played_black in games:
            if opponent_id not in scores:
                logger.warning(
                    "Opponent %s of %s is not a participant, counting 0 points",
                    opponent_id,
                    player_id,
                )
            opp_score = scores.get(opponent_id, 0.0)
            opponent_scores.append(opp_score)
            sb_score += opp_score * points
            if points == WIN_SCORE:
                tiebreaks.wins += 1
                if played_black:
                    tiebreaks.black_wins += 1

        tiebreaks.buchholz = sum(opponent_scores)
        tiebreaks.buchholz_cut1 = self._calculate_buchholz_cut_1(opponent_scores)
        tiebreaks.sonneborn_berger = sb_score
        tiebreaks.progressive_score = self._calculate_progressive(games)
        return tiebreaks

    def _games_by_player(
        self, matches: Iterable[MatchRecord]
    ) -> Dict[str, List[GameEntry]]:
        games: Dict[str, List[GameEntry]] = {}
        for match in matches:
            if not match.is_decided:
                continue
            white_points, black_points = match.points
            games.setdefault(match.white_id, []).append(
                (match.round, match.black_id, white_points, False)
            )
            games.setdefault(match.black_id, []).append(
                (match.round, match.white_id, black_points, True)
            )
        return games

    def _calculate_buchholz_cut_1(self, opponent_scores: List[float]) -> float:
        """Calculate Buchholz Cut-1.

        Drop the lowest opponent score.

        Args:
            opponent_scores: List of opponent scores

        Returns:
            The Buchholz Cut-1 score
        """
        if not opponent_scores:
            return 0.0

        if len(opponent_scores) == 1:
            return opponent_scores[0]

        sorted_scores = sorted(opponent_scores)
        # Drop the lowest score
        return sum(sorted_scores[1:])

    def _calculate_progressive(self, games: List[GameEntry]) -> float:
        """Sum of the running total after each round played, in round order."""
        per_round: Dict[int, float] = {}
        for round_number, _, points, _ in games:
            per_round[round_number] = per_round.get(round_number, 0.0) + points

        running = 0.0
        progressive = 0.0
        for round_number in sorted(per_round):
            running += per_round[round_number]
            progressive += running
        return progressive


def calculate_tiebreaks(
    participants: Sequence[Player], completed_matches: Iterable[MatchRecord]
) -> List[TiebreakSet]:
    """Recompute tiebreaks for every participant.

    Pure function: identical input always yields identical output.
    """
    return TiebreakCalculator().calculate_all_tiebreaks(participants, completed_matches)
