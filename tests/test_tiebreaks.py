import pytest

from pairingengine.exceptions import InvalidResultException
from pairingengine.player import Player
from pairingengine.tournament import MatchRecord, calculate_tiebreaks


def _participants():
    return [
        Player("A", score=2.5),
        Player("B", score=1.0),
        Player("C", score=0.5),
        Player("D", score=1.0),
    ]


def _matches():
    return [
        MatchRecord(1, "A", "B", "1-0"),
        MatchRecord(1, "C", "D", "1/2-1/2"),
        MatchRecord(2, "A", "C", "1-0"),
        MatchRecord(2, "D", "B", "0-1"),
        MatchRecord(3, "A", "D", "1/2-1/2"),
        MatchRecord(3, "B", "C", "*"),
        MatchRecord(4, "D", None, "BYE"),
    ]


def _by_id():
    return {tb.player_id: tb for tb in calculate_tiebreaks(_participants(), _matches())}


@pytest.mark.parametrize(
    "player_id, buchholz, cut1, sb, progressive, wins",
    [
        ("A", 2.5, 2.0, 2.0, 5.5, 2),
        ("B", 3.5, 2.5, 1.0, 1.0, 1),
        ("C", 3.5, 2.5, 0.5, 1.0, 0),
        ("D", 4.0, 3.5, 1.5, 2.0, 0),
    ],
)
def test_tiebreak_values(player_id, buchholz, cut1, sb, progressive, wins):
    tb = _by_id()[player_id]
    assert tb.buchholz == pytest.approx(buchholz)
    assert tb.buchholz_cut1 == pytest.approx(cut1)
    assert tb.sonneborn_berger == pytest.approx(sb)
    assert tb.progressive_score == pytest.approx(progressive)
    assert tb.wins == wins


def test_black_wins():
    by_id = _by_id()
    assert by_id["A"].black_wins == 0
    assert by_id["B"].black_wins == 1


def test_results_follow_participant_order():
    tiebreaks = calculate_tiebreaks(_participants(), _matches())
    assert [tb.player_id for tb in tiebreaks] == ["A", "B", "C", "D"]


def test_calculation_is_idempotent():
    first = [tb.to_dict() for tb in calculate_tiebreaks(_participants(), _matches())]
    second = [tb.to_dict() for tb in calculate_tiebreaks(_participants(), _matches())]
    assert first == second


def test_single_opponent_cut1_equals_buchholz():
    players = [Player("x", score=1.0), Player("y", score=0.0)]
    tb = calculate_tiebreaks(players, [MatchRecord(1, "x", "y", "1-0")])[1]
    assert tb.buchholz_cut1 == tb.buchholz == 1.0


def test_no_games_gives_zeros():
    tb = calculate_tiebreaks([Player("solo")], [MatchRecord(1, "solo", None, "BYE")])[0]
    assert tb.to_dict() == {
        "player_id": "solo",
        "buchholz": 0.0,
        "buchholz_cut1": 0.0,
        "sonneborn_berger": 0.0,
        "progressive_score": 0.0,
        "wins": 0,
        "black_wins": 0,
    }


def test_unknown_opponent_counts_zero():
    tb = calculate_tiebreaks(
        [Player("x", score=1.0)], [MatchRecord(1, "x", "ghost", "1-0")]
    )[0]
    assert tb.buchholz == 0.0
    assert tb.wins == 1


def test_tiebreaks_use_current_scores():
    players = _participants()
    players[1].score = 3.0
    tb = calculate_tiebreaks(players, _matches())[0]
    assert tb.buchholz == pytest.approx(4.5)


def test_decimal_draw_notation_is_accepted():
    record = MatchRecord(1, "a", "b", "0.5-0.5")
    assert record.result == "1/2-1/2"
    assert record.points == (0.5, 0.5)


def test_unknown_result_rejected():
    with pytest.raises(InvalidResultException):
        MatchRecord(1, "a", "b", "2-0")


def test_match_record_from_host_keys():
    record = MatchRecord.from_dict(
        {"round": 2, "whitePlayer": 7, "blackPlayer": None, "result": "BYE"}
    )
    assert record.white_id == "7"
    assert record.is_bye
    assert not record.is_decided
