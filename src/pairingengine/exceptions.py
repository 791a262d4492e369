"""Exceptions for use in the Pairing Engine.

Generators raise these internally. The ``pairing_generator`` boundary in
:mod:`pairingengine.pairing.base` turns pairing exceptions into error values,
so none of them escape a ``generate_pairings`` call.
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

from typing import Optional

# ========== Base Application Exception ==========


class PairingEngineException(Exception):
    """Base exception for all Pairing Engine errors.

    All custom exceptions in the engine inherit from this class, so a host can
    catch every engine-specific error with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(PairingEngineException):
    """Base exception for pairing-related errors."""

    pass


class InvalidRoundException(PairingException):
    """Raised when the requested round is below 1 or above the format's ceiling."""

    pass


class StructuralPairingException(PairingException):
    """Raised when format preconditions are unmet (teams, player count, history)."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing exists even with every fallback applied."""

    pass


class TournamentCompleteException(PairingException):
    """Raised when the tournament has reached a terminal state (champion decided)."""

    def __init__(self, message: str, champion_id: Optional[str] = None):
        super().__init__(message)
        self.champion_id = champion_id


class UnsupportedFormatException(StructuralPairingException):
    """Raised when a tournament format identifier is not recognised."""

    pass


# ========== Player Exceptions ==========


class PlayerException(PairingEngineException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a player id is not present in the arena."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data breaks a model invariant."""

    pass


# ========== Result Exceptions ==========


class ResultException(PairingEngineException):
    """Base exception for result-related errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result string is not one the engine understands."""

    pass


class DuplicateResultException(ResultException):
    """Raised when a result is recorded twice for the same pairing."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PairingEngineException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration values are invalid."""

    pass
