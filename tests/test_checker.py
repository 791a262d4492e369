import pytest

from pairingengine import generate_pairings
from pairingengine.models import Pairing, PairingResult, PlayerDelta, StructuralError
from pairingengine.player import Player
from pairingengine.validation import (
    CriterionStatus,
    PairingChecker,
    ViolationType,
    validate_pairings,
)


def _players(count):
    return [Player(f"p{i}", rating=1500 + i) for i in range(count)]


def _criterion(report, name):
    return next(r for r in report.criteria_results if r.criterion == name)


def test_generated_round_is_valid():
    players = _players(7)
    result = generate_pairings("swiss", players, 1, random_seed=12)
    report = validate_pairings(result, players)
    assert report.is_valid
    assert report.total_criteria == 7
    assert report.compliance_percentage == 100.0


def test_missing_player_is_reported():
    players = _players(4)
    a, b, c, _ = players
    result = PairingResult.success(
        [
            Pairing(round=1, board=1, white_player=a, black_player=b),
            Pairing(round=1, board=2, white_player=c, is_bye=True),
        ],
        [
            PlayerDelta("p0", colour="white", opponent_id="p1"),
            PlayerDelta("p1", colour="black", opponent_id="p0"),
            PlayerDelta("p2", bye=True),
        ],
    )
    report = PairingChecker().validate_round(result, players)
    assert not report.is_valid
    p1 = _criterion(report, "P1")
    assert p1.details["missing"] == ["p3"]


def test_bye_must_be_last_board():
    players = _players(3)
    a, b, c = players
    result = PairingResult.success(
        [
            Pairing(round=1, board=1, white_player=c, is_bye=True),
            Pairing(round=1, board=2, white_player=a, black_player=b),
        ],
        [],
    )
    check = PairingChecker().check_boards(result)
    assert check.violation_type == ViolationType.ABSOLUTE
    assert "last board" in check.message


def test_unflagged_rematch_is_reported():
    a = Player("a", color_history=["white"], previous_opponents=["b"])
    b = Player("b", color_history=["black"], previous_opponents=["a"])
    result = PairingResult.success(
        [Pairing(round=2, board=1, white_player=b, black_player=a)],
        [
            PlayerDelta("b", colour="white", opponent_id="a"),
            PlayerDelta("a", colour="black", opponent_id="b"),
        ],
    )
    report = PairingChecker().validate_round(result, [a, b])
    assert [v.criterion for v in report.violations] == ["P4"]


def test_flagged_rematch_is_only_a_quality_warning():
    a = Player("a", color_history=["white"], previous_opponents=["b"])
    b = Player("b", color_history=["black"], previous_opponents=["a"])
    result = generate_pairings("random", [a, b], 2, random_seed=1)
    report = PairingChecker().validate_round(result, [a, b])
    assert report.is_valid
    assert [w.criterion for w in report.quality_warnings] == ["P5"]


def test_delta_mismatch_is_reported():
    a, b = _players(2)
    result = PairingResult.success(
        [Pairing(round=1, board=1, white_player=a, black_player=b)],
        [
            PlayerDelta("p0", colour="black", opponent_id="p1"),
            PlayerDelta("p1", colour="white", opponent_id="p0"),
        ],
    )
    assert PairingChecker().check_deltas(result).status == CriterionStatus.VIOLATION
    assert not PairingChecker().validate_round(result, [a, b]).is_valid


def test_failed_result_cannot_be_validated():
    with pytest.raises(ValueError):
        validate_pairings(PairingResult.failure(StructuralError("x")), [])


def test_knockout_checks_only_expected_players():
    players = _players(4)
    players[3].knockout_status = "eliminated"
    for player in players[:3]:
        player.knockout_status = "active"
    result = generate_pairings("knockout", players, 2)
    report = validate_pairings(result, players, expected_ids=["p0", "p1", "p2"])
    assert report.is_valid
