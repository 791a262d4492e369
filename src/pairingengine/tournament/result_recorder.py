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

from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from pairingengine.constants import (
    KNOCKOUT_ACTIVE,
    KNOCKOUT_ELIMINATED,
    RESULT_BYE,
    RESULT_DRAW,
    RESULT_PENDING,
    RESULT_WHITE_WIN,
    SECOND_CYCLE,
)
from pairingengine.exceptions import DuplicateResultException, InvalidResultException
from pairingengine.models import Pairing, PairingConfig
from pairingengine.pairing.dispatcher import TournamentFormat
from pairingengine.player import Player
from pairingengine.tournament.arena import PlayerArena
from pairingengine.tournament.models import MatchRecord
from pairingengine.type_hints import WHITE
from pairingengine.utils import setup_logger
from pairingengine.utils.validation import validate_result

logger = setup_logger(__name__)

# Formats in which a bye is worth points
BYE_POINT_FORMATS = {
    TournamentFormat.SWISS,
    TournamentFormat.DOUBLE_SWISS,
    TournamentFormat.MONRAD,
    TournamentFormat.RANDOM,
    TournamentFormat.ACCELERATED,
}


class ResultRecorder:
    """Handles recording match results into a :class:`PlayerArena`.

    This class is responsible for:
    - Validating result strings
    - Updating player scores (and cycle-two scores in Double Swiss)
    - Awarding bye points in Swiss-family formats
    - Eliminating knockout losers
    - Producing the :class:`MatchRecord` list used for tiebreaks
    """

    def __init__(
        self,
        tournament_format: Union[TournamentFormat, str],
        config: Optional[PairingConfig] = None,
    ):
        self.tournament_format = TournamentFormat.parse(tournament_format)
        self.config = config if config is not None else PairingConfig()
        self._recorded: Set[Tuple[int, int]] = set()

    def record_round(
        self,
        arena: PlayerArena,
        pairings: Sequence[Pairing],
        results: Dict[int, str],
    ) -> List[MatchRecord]:
        """Record results for all boards of a round.

        Args:
            arena: Player store to update
            pairings: The round's pairings
            results: Result string per board number; boards without an
                entry are stored as pending (``"*"``)

        Returns:
            One MatchRecord per pairing, in board order

        Raises:
            InvalidResultException: if a result string is not understood
            DuplicateResultException: if a board was already recorded
        """
        checked: Dict[int, str] = {}
        for board, result in results.items():
            check = validate_result(result)
            if not check:
                raise InvalidResultException(f"Board {board}: {check.error_message}")
            checked[board] = check.sanitized_value

        records = []
        for pairing in sorted(pairings, key=lambda p: p.board):
            key = (pairing.round, pairing.board)
            if key in self._recorded:
                raise DuplicateResultException(
                    f"Round {pairing.round} board {pairing.board} is already recorded"
                )
            if pairing.is_bye:
                records.append(self._record_bye(arena, pairing))
            else:
                result = checked.get(pairing.board, RESULT_PENDING)
                records.append(self._record_game(arena, pairing, result))
            if records[-1].result != RESULT_PENDING:
                self._recorded.add(key)
        return records

    def _record_bye(self, arena: PlayerArena, pairing: Pairing) -> MatchRecord:
        player = arena.get(pairing.white_id)
        if self.tournament_format in BYE_POINT_FORMATS:
            self._add_points(player, self.config.bye_score, pairing.cycle)
            logger.info(
                "Round %s: %s receives a bye worth %s",
                pairing.round,
                player.name,
                self.config.bye_score,
            )
        return MatchRecord(
            round=pairing.round,
            white_id=player.id,
            black_id=None,
            result=RESULT_BYE,
            board=pairing.board,
        )

    def _record_game(
        self, arena: PlayerArena, pairing: Pairing, result: str
    ) -> MatchRecord:
        record = MatchRecord(
            round=pairing.round,
            white_id=pairing.white_id,
            black_id=pairing.black_id,
            result=result,
            board=pairing.board,
        )
        if result == RESULT_PENDING:
            return record
        if result == RESULT_BYE:
            raise InvalidResultException(
                f"Board {pairing.board} is a game and cannot be recorded as a bye"
            )

        white = arena.get(pairing.white_id)
        black = arena.get(pairing.black_id)
        white_points, black_points = record.points
        self._add_points(white, white_points, pairing.cycle)
        self._add_points(black, black_points, pairing.cycle)

        if self.tournament_format == TournamentFormat.KNOCKOUT:
            self._eliminate_loser(white, black, result, pairing.round)
        return record

    def _add_points(self, player: Player, points: float, cycle: Optional[int]) -> None:
        player.score += points
        if (
            self.tournament_format == TournamentFormat.DOUBLE_SWISS
            and cycle == SECOND_CYCLE
        ):
            player.cycle_two_score = (player.cycle_two_score or 0.0) + points

    def _eliminate_loser(
        self, white: Player, black: Player, result: str, round_number: int
    ) -> None:
        if result == RESULT_WHITE_WIN:
            winner, loser = white, black
        elif result == RESULT_DRAW:
            if self.config.knockout_draw_advances == WHITE:
                winner, loser = white, black
            else:
                winner, loser = black, white
            logger.info(
                "Drawn knockout game, %s advances on colour", winner.name
            )
        else:
            winner, loser = black, white
        winner.knockout_status = KNOCKOUT_ACTIVE
        loser.knockout_status = KNOCKOUT_ELIMINATED
        loser.knockout_round = round_number
