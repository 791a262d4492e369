"""Routes a tournament format to its generator and round ceiling."""

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

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Union

from pairingengine.exceptions import UnsupportedFormatException
from pairingengine.models import (
    InvalidRoundError,
    PairingConfig,
    PairingResult,
    StructuralError,
)
from pairingengine.pairing import max_rounds
from pairingengine.pairing.accelerated import generate_accelerated_pairings
from pairingengine.pairing.double_swiss import generate_double_swiss_pairings
from pairingengine.pairing.knockout import generate_knockout_pairings
from pairingengine.pairing.monrad import generate_monrad_pairings
from pairingengine.pairing.random_pairing import generate_random_pairings
from pairingengine.pairing.round_robin import (
    generate_double_round_robin_pairings,
    generate_round_robin_pairings,
)
from pairingengine.pairing.scheveningen import generate_scheveningen_pairings
from pairingengine.pairing.swiss import generate_swiss_pairings
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


class TournamentFormat(Enum):
    """The closed set of supported tournament formats."""

    SWISS = "swiss"
    DOUBLE_SWISS = "doubleSwiss"
    ROUND_ROBIN = "roundRobin"
    DOUBLE_ROUND_ROBIN = "doubleRoundRobin"
    KNOCKOUT = "knockout"
    SCHEVENINGEN = "scheveningen"
    MONRAD = "monrad"
    RANDOM = "random"
    ACCELERATED = "accelerated"

    @classmethod
    def parse(cls, value: Union["TournamentFormat", str]) -> "TournamentFormat":
        """Resolve a format from an enum member, host key or snake_case name.

        Raises:
            UnsupportedFormatException: if the value names no known format
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for member in cls:
                if key == member.value or key.upper() == member.name:
                    return member
            compact = key.replace("_", "").replace("-", "").lower()
            for member in cls:
                if compact == member.value.lower():
                    return member
        raise UnsupportedFormatException(f"Unsupported tournament type: {value!r}")


@dataclass(frozen=True)
class FormatHandler:
    """Generator and round ceiling for one format."""

    generate: Callable[..., PairingResult]
    max_rounds: Callable[[int], Optional[int]]
    display_name: str


FORMAT_HANDLERS: Dict[TournamentFormat, FormatHandler] = {
    TournamentFormat.SWISS: FormatHandler(
        generate_swiss_pairings, max_rounds.swiss_max_rounds, "Swiss"
    ),
    TournamentFormat.DOUBLE_SWISS: FormatHandler(
        generate_double_swiss_pairings,
        max_rounds.double_swiss_max_rounds,
        "Double Swiss",
    ),
    TournamentFormat.ROUND_ROBIN: FormatHandler(
        generate_round_robin_pairings,
        max_rounds.round_robin_max_rounds,
        "Round Robin",
    ),
    TournamentFormat.DOUBLE_ROUND_ROBIN: FormatHandler(
        generate_double_round_robin_pairings,
        max_rounds.double_round_robin_max_rounds,
        "Double Round Robin",
    ),
    TournamentFormat.KNOCKOUT: FormatHandler(
        generate_knockout_pairings, max_rounds.knockout_max_rounds, "Knockout"
    ),
    TournamentFormat.SCHEVENINGEN: FormatHandler(
        generate_scheveningen_pairings,
        max_rounds.scheveningen_max_rounds,
        "Scheveningen",
    ),
    TournamentFormat.MONRAD: FormatHandler(
        generate_monrad_pairings, max_rounds.monrad_max_rounds, "Monrad"
    ),
    TournamentFormat.RANDOM: FormatHandler(
        generate_random_pairings, max_rounds.random_max_rounds, "Random"
    ),
    TournamentFormat.ACCELERATED: FormatHandler(
        generate_accelerated_pairings,
        max_rounds.accelerated_max_rounds,
        "Accelerated Swiss",
    ),
}

_missing = set(TournamentFormat) - set(FORMAT_HANDLERS)
if _missing:
    raise RuntimeError(
        f"No handler registered for: {', '.join(sorted(f.value for f in _missing))}"
    )


def handler_for(tournament_format: Union[TournamentFormat, str]) -> FormatHandler:
    return FORMAT_HANDLERS[TournamentFormat.parse(tournament_format)]


def calculate_max_rounds(
    tournament_format: Union[TournamentFormat, str], player_count: int
) -> Optional[int]:
    """Legal round ceiling for a format and field size.

    Args:
        tournament_format: Format enum member or host key
        player_count: Number of players in the field

    Returns:
        Ceiling, or None when the format has no ceiling

    Raises:
        UnsupportedFormatException: if the format is unknown
    """
    return handler_for(tournament_format).max_rounds(player_count)


def generate_pairings(
    tournament_format: Union[TournamentFormat, str],
    players: Sequence[Player],
    round_number: int,
    random_seed: Optional[int] = None,
    config: Optional[PairingConfig] = None,
    rng: Optional[random.Random] = None,
) -> PairingResult:
    """Pair one round of a tournament.

    Never raises for pairing problems: an unknown format, an out-of-range
    round, unmet preconditions and impossible pairings all come back as an
    error value on the result.

    Args:
        tournament_format: Format enum member or host key such as ``"doubleSwiss"``
        players: Current standings, not modified
        round_number: Round to pair (1-based)
        random_seed: Seed for formats that draw at random
        config: Pairing configuration, defaults to :class:`PairingConfig`
        rng: Random source, overrides ``random_seed`` when given

    Returns:
        PairingResult with pairings and deltas, or an error
    """
    try:
        handler = handler_for(tournament_format)
    except UnsupportedFormatException as e:
        logger.warning("%s", e)
        return PairingResult.failure(StructuralError(str(e)))

    ceiling = handler.max_rounds(len(players))
    if ceiling is not None and isinstance(round_number, int) and round_number > ceiling:
        return PairingResult.failure(
            InvalidRoundError(
                f"Maximum number of rounds ({ceiling}) exceeded for "
                f"{handler.display_name} tournament with {len(players)} players."
            )
        )

    if rng is None:
        rng = random.Random(random_seed)
    return handler.generate(players, round_number, rng=rng, config=config)
