"""Pairing Checker - structural validation of generated rounds.

Every generator promises the same shape of output: each expected player
placed exactly once, boards numbered 1..k with the bye last, and rematches
flagged honestly. This module checks a :class:`PairingResult` against the
players it was generated from and reports each criterion separately.
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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pairingengine.models import PairingResult
from pairingengine.pairing.solver import count_meetings
from pairingengine.player import Player
from pairingengine.type_hints import BLACK, WHITE
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

# Whites minus blacks beyond which a player's colours count as unbalanced
MAX_COLOUR_IMBALANCE = 2


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Severity of a violation."""

    ABSOLUTE = "ABSOLUTE"  # the round is malformed
    QUALITY = "QUALITY"  # legal, but worth a look


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for one round."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=description,
    )


def _violation(
    criterion: str,
    description: str,
    violation_type: ViolationType = ViolationType.ABSOLUTE,
    **details,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=details,
    )


class PairingChecker:
    """Validates generated rounds against the invariants every format shares."""

    def check_coverage(
        self, result: PairingResult, expected_ids: Sequence[str]
    ) -> CriterionResult:
        """P1: every expected player is placed exactly once and nobody else."""
        placed = Counter(pid for p in result.pairings for pid in p.player_ids)
        duplicates = sorted(pid for pid, count in placed.items() if count > 1)
        missing = sorted(set(expected_ids) - set(placed))
        unexpected = sorted(set(placed) - set(expected_ids))
        if duplicates or missing or unexpected:
            return _violation(
                "P1",
                "Players not placed exactly once",
                duplicates=duplicates,
                missing=missing,
                unexpected=unexpected,
            )
        return _compliant("P1", f"All {len(expected_ids)} players placed once")

    def check_boards(self, result: PairingResult) -> CriterionResult:
        """P2: boards run 1..k in order, games first, bye last."""
        boards = [p.board for p in result.pairings]
        if boards != list(range(1, len(boards) + 1)):
            return _violation("P2", f"Boards are not contiguous: {boards}")
        byes = [i for i, p in enumerate(result.pairings) if p.is_bye]
        if len(byes) > 1:
            return _violation("P2", f"{len(byes)} byes in one round")
        if byes and byes[0] != len(result.pairings) - 1:
            return _violation("P2", "The bye is not on the last board")
        return _compliant("P2", f"{len(boards)} boards numbered in order")

    def check_bye_shape(self, result: PairingResult) -> CriterionResult:
        """P3: byes have no opponent, games have two distinct players."""
        for pairing in result.pairings:
            if pairing.is_bye != (pairing.black_player is None):
                return _violation(
                    "P3",
                    f"Board {pairing.board} bye flag disagrees with its players",
                    board=pairing.board,
                )
            if not pairing.is_bye and pairing.white_id == pairing.black_id:
                return _violation(
                    "P3",
                    f"Board {pairing.board} pairs a player against themselves",
                    board=pairing.board,
                )
        return _compliant("P3", "Bye and game boards well formed")

    def check_rematch_flags(
        self, result: PairingResult, players: Dict[str, Player]
    ) -> CriterionResult:
        """P4: a pairing of players who already met carries the rematch flag."""
        unflagged = []
        for pairing in result.games:
            white = players.get(pairing.white_id)
            black = players.get(pairing.black_id)
            if white is None or black is None:
                continue
            if count_meetings(white, black) and not pairing.is_rematch:
                unflagged.append(pairing.board)
        if unflagged:
            return _violation(
                "P4", f"Unflagged rematches on boards {unflagged}", boards=unflagged
            )
        return _compliant("P4", "Rematch flags match history")

    def check_rematches(self, result: PairingResult) -> CriterionResult:
        """P5: report rematches, which formats only use as a last resort."""
        rematches = [p.board for p in result.games if p.is_rematch]
        if rematches:
            return _violation(
                "P5",
                f"{len(rematches)} rematches in round",
                ViolationType.QUALITY,
                boards=rematches,
            )
        return _compliant("P5", "No rematches")

    def check_deltas(self, result: PairingResult) -> CriterionResult:
        """P6: each placed player has one delta matching their board."""
        for pairing in result.pairings:
            if pairing.is_bye:
                expected = [(pairing.white_id, None, None, True)]
            else:
                expected = [
                    (pairing.white_id, WHITE, pairing.black_id, False),
                    (pairing.black_id, BLACK, pairing.white_id, False),
                ]
            for player_id, colour, opponent_id, bye in expected:
                delta = result.delta_for(player_id)
                if delta is None or (
                    delta.colour,
                    delta.opponent_id,
                    delta.bye,
                ) != (colour, opponent_id, bye):
                    return _violation(
                        "P6",
                        f"Delta for {player_id} disagrees with board {pairing.board}",
                        player_id=player_id,
                    )
        ids = Counter(d.player_id for d in result.deltas)
        repeated = sorted(pid for pid, count in ids.items() if count > 1)
        if repeated:
            return _violation("P6", "Several deltas for one player", players=repeated)
        return _compliant("P6", "Deltas match the boards")

    def check_colour_balance(
        self, result: PairingResult, players: Dict[str, Player]
    ) -> CriterionResult:
        """P7: nobody drifts more than two colours out of balance."""
        drifting = []
        for delta in result.deltas:
            player = players.get(delta.player_id)
            if player is None or delta.colour is None:
                continue
            shift = 1 if delta.colour == WHITE else -1
            imbalance = player.white_count - player.black_count + shift
            if abs(imbalance) > MAX_COLOUR_IMBALANCE:
                drifting.append(player.id)
        if drifting:
            return _violation(
                "P7",
                f"Colour imbalance above {MAX_COLOUR_IMBALANCE} "
                f"for {len(drifting)} players",
                ViolationType.QUALITY,
                players=drifting,
            )
        return _compliant("P7", "Colours balanced")

    def validate_round(
        self,
        result: PairingResult,
        players: Sequence[Player],
        expected_ids: Optional[Sequence[str]] = None,
    ) -> ValidationReport:
        """Validate a successful round against every criterion.

        Args:
            result: The generator's output
            players: The players the round was generated from
            expected_ids: Players that must be placed; defaults to all of
                ``players`` (knockout callers pass the active ones)

        Returns:
            ValidationReport listing every criterion result
        """
        if not result.ok:
            raise ValueError("Only successful pairing results can be validated")

        by_id = {p.id: p for p in players}
        if expected_ids is None:
            expected_ids = list(by_id)
        round_number = result.pairings[0].round if result.pairings else None
        logger.info("Starting pairing validation for round %s", round_number)

        all_results = [
            self.check_coverage(result, expected_ids),
            self.check_boards(result),
            self.check_bye_shape(result),
            self.check_rematch_flags(result, by_id),
            self.check_rematches(result),
            self.check_deltas(result),
            self.check_colour_balance(result, by_id),
        ]

        compliant_count = sum(
            1 for r in all_results if r.status == CriterionStatus.COMPLIANT
        )
        absolute_violations = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.ABSOLUTE
        ]
        quality_warnings = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.QUALITY
        ]
        overall_status = (
            CriterionStatus.VIOLATION
            if absolute_violations
            else CriterionStatus.COMPLIANT
        )
        if overall_status == CriterionStatus.COMPLIANT:
            summary = (
                f"Round well formed; {len(quality_warnings)} quality criteria flagged"
            )
        else:
            summary = (
                f"Malformed round - {len(absolute_violations)} criteria failed; "
                f"{len(quality_warnings)} quality warnings"
            )
        logger.info("Pairing validation complete: %s", summary)

        return ValidationReport(
            total_criteria=len(all_results),
            compliant_count=compliant_count,
            violations=absolute_violations,
            quality_warnings=quality_warnings,
            overall_status=overall_status,
            summary=summary,
            criteria_results=all_results,
        )


def validate_pairings(
    result: PairingResult, players: Sequence[Player], **kwargs
) -> ValidationReport:
    """Quick validation function."""
    return PairingChecker().validate_round(result, players, **kwargs)
