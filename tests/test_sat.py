import pytest

from ordinals.rarity import Rarity
from ordinals.sat import (
    COIN_VALUE,
    CYCLE_EPOCHS,
    DIFFCHANGE_INTERVAL,
    SUBSIDY_HALVING_INTERVAL,
    Sat,
    epoch_starting_sat,
    epoch_subsidy,
    height_starting_sat,
    height_subsidy,
    starting_sats,
)


def test_n():
    assert Sat(1).n == 1
    assert Sat(100).n == 100
    assert Sat(2099999997689999).n == 2099999997689999


def test_height():
    assert Sat(0).height() == 0
    assert Sat(1).height() == 0
    assert Sat(epoch_subsidy(0)).height() == 1
    assert Sat(epoch_subsidy(0) * 2).height() == 2
    assert epoch_starting_sat(2).height() == SUBSIDY_HALVING_INTERVAL * 2
    assert Sat(50 * COIN_VALUE).height() == 1
    assert Sat(2099999997689999).height() == 6929999


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, "nvtdijuwxlp"),
        (1, "nvtdijuwxlo"),
        (26, "nvtdijuwxkp"),
        (27, "nvtdijuwxko"),
        (2099999997689999, "a"),
        (2099999997689999 - 1, "b"),
        (2099999997689999 - 25, "z"),
        (2099999997689999 - 26, "aa"),
    ],
)
def test_name(n, expected):
    assert Sat(n).name() == expected


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, "0°0′0″0‴"),
        (1, "0°0′0″1‴"),
        (50 * COIN_VALUE - 1, "0°0′0″4999999999‴"),
        (50 * COIN_VALUE, "0°1′1″0‴"),
        (50 * COIN_VALUE + 1, "0°1′1″1‴"),
        (50 * COIN_VALUE * DIFFCHANGE_INTERVAL - 1, "0°2015′2015″4999999999‴"),
        (50 * COIN_VALUE * DIFFCHANGE_INTERVAL, "0°2016′0″0‴"),
        (50 * COIN_VALUE * DIFFCHANGE_INTERVAL + 1, "0°2016′0″1‴"),
        (50 * COIN_VALUE * SUBSIDY_HALVING_INTERVAL - 1, "0°209999′335″4999999999‴"),
        (50 * COIN_VALUE * SUBSIDY_HALVING_INTERVAL, "0°0′336″0‴"),
        (50 * COIN_VALUE * SUBSIDY_HALVING_INTERVAL + 1, "0°0′336″1‴"),
        (2067187500000000 - 1, "0°209999′2015″156249999‴"),
        (2067187500000000, "1°0′0″0‴"),
        (2067187500000000 + 1, "1°0′0″1‴"),
    ],
)
def test_degree(n, expected):
    assert str(Sat(n).degree()) == expected


def test_invalid_degree_bugfix():
    assert str(Sat(1054200000000000).degree()) == "0°1680′0″0‴"
    assert Sat.parse("0°1680′0″0‴") == 1054200000000000
    assert str(Sat(1914226250000000).degree()) == "0°122762′794″0‴"
    assert Sat.parse("0°122762′794″0‴") == 1914226250000000


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, 0),
        (10080000000000, 1),
        (2099999997689999, 3437),
        (10075000000000, 0),
        (10080000000000 - 1, 0),
        (10080000000000 + 1, 1),
        (10085000000000, 1),
    ],
)
def test_period(n, expected):
    assert Sat(n).period() == expected


def test_epoch():
    assert Sat(0).epoch() == 0
    assert Sat(1).epoch() == 0
    assert Sat(50 * COIN_VALUE * SUBSIDY_HALVING_INTERVAL).epoch() == 1
    assert Sat(2099999997689999).epoch() == 32


def test_epoch_position():
    assert epoch_starting_sat(0).epoch_position() == 0
    assert (epoch_starting_sat(0) + 100).epoch_position() == 100
    assert epoch_starting_sat(1).epoch_position() == 0
    assert epoch_starting_sat(2).epoch_position() == 0


def test_subsidy_position():
    assert Sat(0).third() == 0
    assert Sat(1).third() == 1
    assert Sat(height_subsidy(0) - 1).third() == height_subsidy(0) - 1
    assert Sat(height_subsidy(0)).third() == 0
    assert Sat(height_subsidy(0) + 1).third() == 1
    assert Sat(epoch_starting_sat(1).n + epoch_subsidy(1)).third() == 0
    assert Sat.LAST.third() == 0


def test_supply_matches_starting_sats():
    sats = starting_sats()
    assert len(sats) == 34
    assert sats[0] == 0
    assert sats[1] == 1050000000000000
    assert sats[-1] == Sat.SUPPLY
    assert epoch_subsidy(33) == 0
    assert epoch_subsidy(32) > 0
    assert all(a < b for a, b in zip(sats, sats[1:]))


def test_last():
    assert Sat.LAST == Sat.SUPPLY - 1
    assert Sat.parse(str(Sat.SUPPLY - 1)) == Sat.LAST
    assert Sat.LAST.name() == "a"
    assert Sat.LAST + 1 == Sat.SUPPLY


def test_eq():
    assert Sat(0) == 0
    assert Sat(1) == 1


def test_partial_ord():
    assert Sat(1) > 0
    assert Sat(0) < 1


def test_add():
    assert Sat(0) + 1 == 1
    result = Sat(1) + 100
    assert result == 101
    assert isinstance(result, Sat)


def test_add_assign():
    sat = Sat(0)
    sat += 1
    assert sat == 1
    sat += 100
    assert sat == 101
    assert repr(sat) == "Sat(101)"


def test_from_str_decimal():
    assert Sat.parse("0.0") == 0
    assert Sat.parse("0.1") == 1
    assert Sat.parse("1.0") == 50 * COIN_VALUE
    assert Sat.parse("1.1") == 50 * COIN_VALUE + 1
    assert Sat.parse("6929999.0") == 2099999997689999
    with pytest.raises(ValueError):
        Sat.parse("0.5000000000")
    with pytest.raises(ValueError):
        Sat.parse("6930000.0")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0°0′0″0‴", 0),
        ("0°0′0″", 0),
        ("0°0′0″1‴", 1),
        ("0°2015′2015″0‴", 10075000000000),
        ("0°2016′0″0‴", 10080000000000),
        ("0°2017′1″0‴", 10085000000000),
        ("0°2016′0″1‴", 10080000000001),
        ("0°2017′1″1‴", 10085000000001),
        ("0°209999′335″0‴", 1049995000000000),
        ("0°0′336″0‴", 1050000000000000),
        ("0°0′672″0‴", 1575000000000000),
        ("0°209999′1007″0‴", 1837498750000000),
        ("0°0′1008″0‴", 1837500000000000),
        ("1°0′0″0‴", 2067187500000000),
        ("2°0′0″0‴", 2099487304530000),
        ("3°0′0″0‴", 2099991988080000),
        ("4°0′0″0‴", 2099999873370000),
        ("5°0′0″0‴", 2099999996220000),
        ("5°1′673″0‴", 2099999997480001),
        ("5°209999′1007″0‴", 2099999997689999),
    ],
)
def test_from_str_degree(text, expected):
    assert Sat.parse(text) == expected


def test_from_str_number():
    assert Sat.parse("0") == 0
    assert Sat.parse("2099999997689999") == 2099999997689999
    with pytest.raises(ValueError, match="invalid sat"):
        Sat.parse("2099999997690000")


@pytest.mark.parametrize(
    "valid, invalid",
    [
        ("5°0′0″0‴", "6°0′0″0‴"),
        ("0°209999′335″0‴", "0°210000′336″0‴"),
        ("0°2015′2015″0‴", "0°2016′2016″0‴"),
        ("0°0′0″4999999999‴", "0°0′0″5000000000‴"),
        ("0°209999′335″4999999999‴", "0°0′336″4999999999‴"),
        ("0°2016′0″0‴", "0°2016′1″0‴"),
        ("5°209999′1007″0‴", "5°0′1008″0‴"),
    ],
)
def test_from_str_degree_invalid(valid, invalid):
    assert Sat.parse(valid) >= 0
    with pytest.raises(ValueError):
        Sat.parse(invalid)


def test_from_str_degree_relationship_message():
    with pytest.raises(ValueError, match="multiple of 336"):
        Sat.parse("0°2016′1″0‴")


def test_from_str_degree_trailing():
    with pytest.raises(ValueError, match="trailing characters"):
        Sat.parse("0°0′0″0‴0")


def test_from_str_name():
    assert Sat.parse("nvtdijuwxlp") == 0
    assert Sat.parse("a") == 2099999997689999
    with pytest.raises(ValueError):
        Sat.parse("(")
    with pytest.raises(ValueError):
        Sat.parse("")
    with pytest.raises(ValueError, match="out of range"):
        Sat.parse("nvtdijuwxlq")


def test_cycle():
    assert SUBSIDY_HALVING_INTERVAL * CYCLE_EPOCHS % DIFFCHANGE_INTERVAL == 0
    for i in range(1, CYCLE_EPOCHS):
        assert i * SUBSIDY_HALVING_INTERVAL % DIFFCHANGE_INTERVAL != 0
    assert Sat(0).cycle() == 0
    assert Sat(2067187500000000 - 1).cycle() == 0
    assert Sat(2067187500000000).cycle() == 1
    assert Sat(2067187500000000 + 1).cycle() == 1


def test_third():
    assert Sat(0).third() == 0
    assert Sat(50 * COIN_VALUE - 1).third() == 4999999999
    assert Sat(50 * COIN_VALUE).third() == 0
    assert Sat(50 * COIN_VALUE + 1).third() == 1


def test_decimal():
    assert str(Sat(50 * COIN_VALUE + 1).decimal()) == "1.1"
    assert str(Sat(0).decimal()) == "0.0"


def test_percentile():
    assert Sat(0).percentile() == "0%"
    assert Sat(Sat.LAST.n // 2).percentile() == "49.99999999999998%"
    assert Sat.LAST.percentile() == "100%"


def test_from_percentile():
    assert Sat.parse("0%") == 0
    with pytest.raises(ValueError):
        Sat.parse("-1%")
    with pytest.raises(ValueError):
        Sat.parse("101%")


def test_percentile_round_trip():
    last = Sat.LAST.n
    for n in range(1024):
        for value in (n, last // 2 + n, last - n, last // (n + 1)):
            expected = Sat(value)
            assert Sat.parse(expected.percentile()) == expected


@pytest.mark.parametrize(
    "n",
    [
        0,
        1,
        50 * COIN_VALUE - 1,
        50 * COIN_VALUE,
        50 * COIN_VALUE + 1,
        2067187500000000 - 1,
        2067187500000000,
        2067187500000000 + 1,
    ],
)
def test_is_common(n):
    assert Sat(n).is_common() == (Sat(n).rarity() == Rarity.COMMON)


def test_height_starting_sat():
    assert height_starting_sat(0) == 0
    assert height_starting_sat(1) == 50 * COIN_VALUE
    assert height_starting_sat(SUBSIDY_HALVING_INTERVAL) == 1050000000000000
    assert height_starting_sat(7_000_000) == Sat.SUPPLY


def test_str():
    assert str(Sat(42)) == "42"


def test_negative_rejected():
    with pytest.raises(ValueError):
        Sat(-1)