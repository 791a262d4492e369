"""Shared building blocks for the format generators.

``RoundBuilder`` collects games, byes and transient field updates, then
numbers the boards and produces the deltas. ``pairing_generator`` wraps a
generator with the checks every format shares and turns raised pairing
exceptions into error values.
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

import functools
import random
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pairingengine.exceptions import (
    InvalidRoundException,
    NoPairingAvailableException,
    StructuralPairingException,
    TournamentCompleteException,
)
from pairingengine.models import (
    InvalidRoundError,
    Pairing,
    PairingConfig,
    PairingImpossibleError,
    PairingResult,
    PlayerDelta,
    StructuralError,
    TerminalStateError,
)
from pairingengine.pairing.solver import count_meetings
from pairingengine.player import Player
from pairingengine.type_hints import BLACK, WHITE
from pairingengine.utils import setup_logger
from pairingengine.utils.validation import validate_player_pool, validate_round_number

logger = setup_logger(__name__)

Generator = Callable[..., PairingResult]


class RoundBuilder:
    """Accumulates one round and turns it into a :class:`PairingResult`.

    Games are numbered first, in the order they were added, and byes take
    the boards after the last game.
    """

    def __init__(self, round_number: int, cycle: Optional[int] = None):
        self.round_number = round_number
        self.cycle = cycle
        self._games: List[Tuple[Player, Player, bool, Optional[int]]] = []
        self._byes: List[Tuple[Player, Optional[int]]] = []
        self._updates: Dict[str, Dict[str, Any]] = {}
        self._update_order: List[str] = []
        self._seen: set = set()

    def _claim(self, player: Player) -> None:
        if player.id in self._seen:
            raise StructuralPairingException(
                f"Player {player.id} was paired twice in round {self.round_number}"
            )
        self._seen.add(player.id)

    def add_game(
        self,
        white: Player,
        black: Player,
        is_rematch: Optional[bool] = None,
        cycle: Optional[int] = None,
    ) -> None:
        if white.id == black.id:
            raise StructuralPairingException(f"Player {white.id} paired with themself")
        self._claim(white)
        self._claim(black)
        if is_rematch is None:
            is_rematch = count_meetings(white, black) > 0
        self._games.append(
            (white, black, is_rematch, cycle if cycle is not None else self.cycle)
        )

    def add_bye(self, player: Player, cycle: Optional[int] = None) -> None:
        self._claim(player)
        self._byes.append((player, cycle if cycle is not None else self.cycle))

    def update(self, player: Player, **fields: Any) -> None:
        """Record transient field assignments for ``player``."""
        if player.id not in self._updates:
            self._updates[player.id] = {}
            self._update_order.append(player.id)
        self._updates[player.id].update(fields)

    def is_paired(self, player: Player) -> bool:
        return player.id in self._seen

    def placed_players(self) -> List[Player]:
        """Players placed on a board so far, in board order."""
        placed = []
        for white, black, _, _ in self._games:
            placed.extend([white, black])
        placed.extend(player for player, _ in self._byes)
        return placed

    @property
    def game_count(self) -> int:
        return len(self._games)

    def build(self) -> PairingResult:
        pairings: List[Pairing] = []
        deltas: List[PlayerDelta] = []
        board = 0
        for white, black, is_rematch, cycle in self._games:
            board += 1
            pairings.append(
                Pairing(
                    round=self.round_number,
                    board=board,
                    white_player=white,
                    black_player=black,
                    is_rematch=is_rematch,
                    cycle=cycle,
                )
            )
            deltas.append(self._delta(white.id, WHITE, black.id))
            deltas.append(self._delta(black.id, BLACK, white.id))
        for player, cycle in self._byes:
            board += 1
            pairings.append(
                Pairing(
                    round=self.round_number,
                    board=board,
                    white_player=player,
                    is_bye=True,
                    cycle=cycle,
                )
            )
            deltas.append(self._delta(player.id, bye=True))
        for player_id in self._update_order:
            if player_id not in self._seen:
                deltas.append(self._delta(player_id))
        return PairingResult.success(pairings, deltas)

    def _delta(
        self,
        player_id: str,
        colour: Optional[str] = None,
        opponent_id: Optional[str] = None,
        bye: bool = False,
    ) -> PlayerDelta:
        return PlayerDelta(
            player_id=player_id,
            colour=colour,
            opponent_id=opponent_id,
            bye=bye,
            updates=dict(self._updates.get(player_id, {})),
        )


def players_without_bye_first(
    ranked: Sequence[Player], score_of: Callable[[Player], float]
) -> List[Player]:
    """Order bye candidates.

    No previous bye first, then lowest score, lowest rating, lowest standing,
    and finally fewest byes.
    """
    position = {p.id: i for i, p in enumerate(ranked)}
    return sorted(
        ranked,
        key=lambda p: (
            p.byes > 0,
            score_of(p),
            p.rating,
            -position[p.id],
            p.byes,
        ),
    )


def pairing_generator(
    format_name: str,
    max_rounds: Callable[[int], Optional[int]],
    min_players: int = 2,
) -> Callable[[Generator], Generator]:
    """Wrap a generator with shared checks and error-value conversion.

    The wrapped function is called as ``func(players, round_number, rng, config)``
    and may raise any :class:`~pairingengine.exceptions.PairingException`.

    Args:
        format_name: Human name used in messages ("Swiss", "Knockout", ...)
        max_rounds: Round ceiling for a player count, None for unbounded
        min_players: Smallest pairable field
    """

    def decorator(func: Generator) -> Generator:
        @functools.wraps(func)
        def wrapper(
            players: Sequence[Player],
            round_number: int,
            rng: Optional[random.Random] = None,
            config: Optional[PairingConfig] = None,
        ) -> PairingResult:
            rng = rng if rng is not None else random.Random()
            config = config if config is not None else PairingConfig()
            players = list(players)
            try:
                round_check = validate_round_number(round_number)
                if not round_check:
                    raise InvalidRoundException(round_check.error_message)

                pool_check = validate_player_pool(players, min_players)
                if not pool_check:
                    raise StructuralPairingException(
                        f"{format_name}: {pool_check.error_message}"
                    )

                ceiling = max_rounds(len(players))
                if ceiling is not None and round_number > ceiling:
                    raise InvalidRoundException(
                        f"Maximum number of rounds ({ceiling}) exceeded for "
                        f"{format_name} tournament with {len(players)} players."
                    )

                logger.info(
                    "Generating %s pairings for round %s with %s players",
                    format_name,
                    round_number,
                    len(players),
                )
                return func(players, round_number, rng, config)
            except InvalidRoundException as e:
                logger.warning("Invalid round: %s", e)
                return PairingResult.failure(InvalidRoundError(str(e)))
            except TournamentCompleteException as e:
                logger.info("Tournament complete: %s", e)
                return PairingResult.failure(
                    TerminalStateError(str(e), champion_id=e.champion_id)
                )
            except StructuralPairingException as e:
                logger.warning("Structural error: %s", e)
                return PairingResult.failure(StructuralError(str(e)))
            except NoPairingAvailableException as e:
                logger.error("Pairing impossible: %s", e)
                return PairingResult.failure(PairingImpossibleError(str(e)))

        return wrapper

    return decorator
