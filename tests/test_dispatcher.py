import pytest

from pairingengine import generate_pairings
from pairingengine.exceptions import UnsupportedFormatException
from pairingengine.models import (
    InvalidRoundError,
    PairingImpossibleError,
    StructuralError,
)
from pairingengine.pairing import TournamentFormat, calculate_max_rounds
from pairingengine.pairing.max_rounds import ceil_log2
from pairingengine.player import Player


def _players(count):
    return [Player(f"p{i}", rating=2000 - 10 * i) for i in range(count)]


@pytest.mark.parametrize(
    "count, expected",
    [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (64, 6)],
)
def test_ceil_log2(count, expected):
    assert ceil_log2(count) == expected


@pytest.mark.parametrize(
    "tournament_format, expected",
    [
        ("swiss", 3),
        ("doubleSwiss", 6),
        ("roundRobin", 7),
        ("doubleRoundRobin", 14),
        ("knockout", 3),
        ("scheveningen", 4),
        ("monrad", 3),
        ("random", None),
        ("accelerated", 3),
    ],
)
def test_max_rounds_for_eight_players(tournament_format, expected):
    assert calculate_max_rounds(tournament_format, 8) == expected


def test_round_robin_ceiling_for_odd_field():
    assert calculate_max_rounds(TournamentFormat.ROUND_ROBIN, 5) == 5
    assert calculate_max_rounds(TournamentFormat.DOUBLE_ROUND_ROBIN, 5) == 10


def test_max_rounds_unknown_format():
    with pytest.raises(UnsupportedFormatException):
        calculate_max_rounds("lightning", 8)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("swiss", TournamentFormat.SWISS),
        ("doubleSwiss", TournamentFormat.DOUBLE_SWISS),
        ("DOUBLE_SWISS", TournamentFormat.DOUBLE_SWISS),
        ("double_swiss", TournamentFormat.DOUBLE_SWISS),
        ("double-round-robin", TournamentFormat.DOUBLE_ROUND_ROBIN),
        (" knockout ", TournamentFormat.KNOCKOUT),
        (TournamentFormat.MONRAD, TournamentFormat.MONRAD),
    ],
)
def test_parse_format(value, expected):
    assert TournamentFormat.parse(value) is expected


def test_unknown_format_is_structural_error():
    result = generate_pairings("lightning", _players(4), 1)
    assert not result.ok
    assert isinstance(result.error, StructuralError)
    assert result.error.kind == "structural"
    assert result.pairings == []


def test_round_above_ceiling():
    result = generate_pairings("swiss", _players(4), 3)
    assert isinstance(result.error, InvalidRoundError)
    assert result.error.message == (
        "Maximum number of rounds (2) exceeded for Swiss tournament with 4 players."
    )


@pytest.mark.parametrize("round_number", [0, -1, "1", 1.0])
def test_round_must_be_positive_integer(round_number):
    result = generate_pairings("swiss", _players(4), round_number)
    assert isinstance(result.error, InvalidRoundError)


def test_field_too_small_is_structural_error():
    result = generate_pairings("random", _players(1), 1)
    assert isinstance(result.error, StructuralError)


def test_duplicate_player_ids_rejected():
    players = [Player("a"), Player("a"), Player("b")]
    result = generate_pairings("random", players, 1, random_seed=1)
    assert isinstance(result.error, StructuralError)
    assert "Duplicate" in result.error.message


def test_same_seed_same_draw():
    first = generate_pairings("random", _players(9), 1, random_seed=42)
    second = generate_pairings("random", _players(9), 1, random_seed=42)
    assert [(p.white_id, p.black_id) for p in first.pairings] == [
        (p.white_id, p.black_id) for p in second.pairings
    ]


def test_random_third_meeting_is_impossible():
    a = Player(
        "a", color_history=["white", "black"], previous_opponents=["b", "b"]
    )
    b = Player(
        "b", color_history=["black", "white"], previous_opponents=["a", "a"]
    )
    result = generate_pairings("random", [a, b], 3, random_seed=3)
    assert isinstance(result.error, PairingImpossibleError)
    assert result.error.message.startswith("Pairing Impossible")


def test_error_to_dict():
    result = generate_pairings("swiss", _players(4), 5)
    data = result.to_dict()
    assert data["pairings"] == []
    assert data["error"]["kind"] == "invalid_round"
