"""Validation utilities for the Pairing Engine.

This module provides reusable validation functions with consistent error handling.
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

from typing import TYPE_CHECKING, Any, Optional, Sequence

from pairingengine.constants import VALID_RESULTS
from pairingengine.type_hints import BLACK, WHITE

if TYPE_CHECKING:
    from pairingengine.player import Player


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Round Validation ==========


def validate_round_number(round_number: Any) -> ValidationResult:
    """Validate a requested round number.

    Args:
        round_number: Round requested by the host (1-based)

    Returns:
        ValidationResult with the round as ``int`` when valid
    """
    if isinstance(round_number, bool) or not isinstance(round_number, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"Round number must be an integer, got {round_number!r}",
        )
    if round_number < 1:
        return ValidationResult(
            is_valid=False,
            error_message=f"Round number must be at least 1, got {round_number}",
        )
    return ValidationResult(is_valid=True, sanitized_value=round_number)


# ========== Player Validation ==========


def validate_player_pool(
    players: Sequence["Player"], minimum: int = 2
) -> ValidationResult:
    """Validate the player list handed to a generator.

    Checks the minimum field size, unique ids and the history invariant
    (one colour per recorded opponent, colours drawn from white/black).

    Args:
        players: Players supplied by the host
        minimum: Smallest field the format can pair

    Returns:
        ValidationResult, the sanitized value is the number of players
    """
    if len(players) < minimum:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"At least {minimum} players are required, got {len(players)}."
            ),
        )

    seen = set()
    for player in players:
        if player.id in seen:
            return ValidationResult(
                is_valid=False,
                error_message=f"Duplicate player id: {player.id}",
            )
        seen.add(player.id)

        if len(player.color_history) != len(player.previous_opponents):
            return ValidationResult(
                is_valid=False,
                error_message=(
                    f"Player {player.id} has {len(player.color_history)} colours "
                    f"but {len(player.previous_opponents)} opponents recorded"
                ),
            )
        for colour in player.color_history:
            if colour not in (WHITE, BLACK):
                return ValidationResult(
                    is_valid=False,
                    error_message=f"Player {player.id} has invalid colour {colour!r}",
                )
        if player.byes < 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"Player {player.id} has a negative bye count",
            )

    return ValidationResult(is_valid=True, sanitized_value=len(players))


# ========== Result Validation ==========


def validate_result(result: Optional[str]) -> ValidationResult:
    """Validate a stored match result string.

    Args:
        result: Result string such as ``"1-0"`` or ``"1/2-1/2"``

    Returns:
        ValidationResult with the stripped result string
    """
    if result is None:
        return ValidationResult(is_valid=False, error_message="Result is required")
    result = result.strip()
    # some hosts store draws with the decimal notation
    if result == "0.5-0.5":
        result = "1/2-1/2"
    if result in VALID_RESULTS:
        return ValidationResult(is_valid=True, sanitized_value=result)
    return ValidationResult(
        is_valid=False,
        error_message=(
            f"Unknown result {result!r}, "
            f"expected one of {', '.join(VALID_RESULTS)}"
        ),
    )
