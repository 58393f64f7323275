import dataclasses

import pytest

import combomatic_core as core
from combomatic_core import Candidate, ComboConfig


def _config(combination, **kwargs) -> ComboConfig:
    return ComboConfig(combination=tuple(combination), **kwargs)


def test_modular_distance_misc() -> None:
    assert core.modular_distance(0, 1, 10) == 1
    assert core.modular_distance(0, 9, 10) == 1
    assert core.modular_distance(0, 1, 2) == 1
    assert core.modular_distance(0, 0, 2) == 0
    assert core.modular_distance(0, 9, 11) == 2
    assert core.modular_distance(0, 9, 100) == 9


def test_modular_distance_single_position_ring() -> None:
    assert core.modular_distance(0, 0, 1) == 0


def test_modular_distance_properties() -> None:
    for modulus in range(1, 13):
        for a in range(modulus):
            assert core.modular_distance(a, a, modulus) == 0
            for b in range(modulus):
                d = core.modular_distance(a, b, modulus)
                assert d == core.modular_distance(b, a, modulus)
                assert 0 <= d <= modulus // 2


def test_offset_tuples_first_position_turns_fastest() -> None:
    offsets = list(core.offset_tuples(2, 1))
    assert len(offsets) == 9
    assert offsets[:4] == [(0, 0), (1, 0), (2, 0), (0, 1)]
    assert offsets[-1] == (2, 2)


def test_wrap_digit_wraps_both_ways() -> None:
    assert core.wrap_digit(0, 0, 0, 99, 1) == 99
    assert core.wrap_digit(99, 2, 0, 99, 1) == 0
    assert core.wrap_digit(1, 0, 1, 40, 1) == 40
    assert core.wrap_digit(50, 1, 0, 99, 1) == 50


def test_range_zero() -> None:
    config = _config([0, 1, 2], dial_min=0, dial_max=99, range=0)
    assert core.guesses(config) == [Candidate(digits=(0, 1, 2), errors=0)]


def test_range_zero_single_digit_small_dial() -> None:
    config = _config([5], dial_min=0, dial_max=9, range=0)
    assert core.guesses(config) == [Candidate(digits=(5,), errors=0)]


def test_range_one() -> None:
    config = _config([0], range=1)
    assert len(core.guesses(config)) == 3


def test_range_one_two() -> None:
    config = _config([0, 1], range=1)
    assert len(core.guesses(config)) == 9


def test_two_digit_example_order() -> None:
    config = _config([0, 1], dial_min=0, dial_max=99, range=1)
    result = core.guesses(config)

    assert [c.digits for c in result] == [
        (0, 1),
        (0, 0), (99, 1), (1, 1), (0, 2),
        (99, 0), (1, 0), (99, 2), (1, 2),
    ]
    assert [c.errors for c in result] == [0, 1, 1, 1, 1, 2, 2, 2, 2]
    for c in result:
        assert all(0 <= n <= 99 for n in c.digits)


@pytest.mark.parametrize(
    "combination, dial_min, dial_max, radius",
    [
        ([10, 20, 30], 0, 39, 2),
        ([1, 1], 1, 3, 1),
        ([7], 0, 9, 4),
        ([0, 5, 9, 3], 0, 9, 1),
    ],
)
def test_count_and_sort_order(combination, dial_min, dial_max, radius) -> None:
    config = _config(combination, dial_min=dial_min, dial_max=dial_max, range=radius)
    result = core.guesses(config)

    assert len(result) == (2 * radius + 1) ** len(combination)
    scores = [c.errors for c in result]
    assert scores == sorted(scores)
    for c in result:
        assert all(dial_min <= n <= dial_max for n in c.digits)
        assert c.errors == core.error_score(config, c.digits)


def test_wraparound_duplicates_are_kept() -> None:
    config = _config([5], dial_min=5, dial_max=5, range=1)
    assert core.guesses(config) == [Candidate(digits=(5,), errors=0)] * 3


def test_negative_dial_numbers() -> None:
    config = _config([-5], dial_min=-5, dial_max=5, range=1)
    result = core.guesses(config)
    assert result[0] == Candidate(digits=(-5,), errors=0)
    assert sorted(c.digits[0] for c in result) == [-5, -4, 5]


def test_invalid_ring_bounds() -> None:
    with pytest.raises(core.InvalidRingBounds, match="invalid ring bounds"):
        core.guesses(_config([5], dial_min=10, dial_max=9))


def test_empty_combination() -> None:
    with pytest.raises(core.EmptyCombination, match="no combination supplied"):
        core.guesses(_config([]))


def test_digit_out_of_range() -> None:
    with pytest.raises(core.DigitOutOfRange, match="number 2"):
        core.guesses(_config([5, 100], dial_min=0, dial_max=99))
    with pytest.raises(core.DigitOutOfRange, match=r"number 1 of the combination \(0\) is outside \[1, 40\]"):
        core.guesses(_config([0], dial_min=1, dial_max=40))


def test_negative_range() -> None:
    with pytest.raises(core.InvalidRange):
        core.guesses(_config([5], range=-1))


def test_search_space_overflow() -> None:
    with pytest.raises(core.SearchSpaceOverflow, match="search space too large"):
        core.guesses(_config([1] * 10, range=2))

    assert len(core.guesses(_config([1, 2], range=1), max_candidates=9)) == 9
    with pytest.raises(core.SearchSpaceOverflow):
        core.guesses(_config([1, 2], range=2), max_candidates=9)


def test_max_candidates_must_be_positive() -> None:
    for bound in (0, -1):
        with pytest.raises(core.ConfigError, match="max candidates must be at least 1"):
            core.guesses(_config([1], range=0), max_candidates=bound)


def test_errors_are_value_errors() -> None:
    for exc in (
        core.InvalidRingBounds,
        core.InvalidRange,
        core.EmptyCombination,
        core.DigitOutOfRange,
        core.SearchSpaceOverflow,
    ):
        assert issubclass(exc, core.ConfigError)
        assert issubclass(exc, ValueError)


def test_config_from_dict_defaults_and_coercion() -> None:
    config = core.config_from_dict({"combination": "10,20,30"})
    assert config == ComboConfig(combination=(10, 20, 30), dial_min=0, dial_max=99, range=2, csv=False)

    config = core.config_from_dict({"combination": "1 2", "min": "1", "max": "40", "range": None})
    assert config.combination == (1, 2)
    assert config.dial_min == 1
    assert config.dial_max == 40
    assert config.range == 2
    assert config.modulus == 40


def test_config_from_dict_rejects_bad_numbers() -> None:
    with pytest.raises(core.ConfigError, match="min must be an integer"):
        core.config_from_dict({"combination": [1], "min": "abc"})
    with pytest.raises(core.ConfigError):
        core.config_from_dict({"combination": [1], "range": True})
    with pytest.raises(core.ConfigError, match="combination number 2"):
        core.config_from_dict({"combination": "1,x"})
    with pytest.raises(core.ConfigError, match="combination must be a list or string"):
        core.config_from_dict({"combination": 5})
    with pytest.raises(core.ConfigError, match="csv must be yes/no"):
        core.config_from_dict({"combination": "5", "csv": "maybe"})


def test_config_from_dict_csv_flag_strings() -> None:
    for raw in ("false", "False", "0", "no", "N", 0, False):
        assert core.config_from_dict({"combination": "5", "csv": raw}).csv is False
    for raw in ("true", "TRUE", "1", "yes", "y", 1, True):
        assert core.config_from_dict({"combination": "5", "csv": raw}).csv is True


def test_config_from_dict_validates() -> None:
    with pytest.raises(core.EmptyCombination):
        core.config_from_dict({})
    with pytest.raises(core.DigitOutOfRange):
        core.config_from_dict({"combination": [10], "max": 9})


def test_config_is_immutable() -> None:
    config = _config([1, 2, 3])
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.range = 5  # type: ignore[misc]


def test_group_by_errors_and_histogram() -> None:
    result = core.guesses(_config([0, 1], range=1))

    groups = core.group_by_errors(result)
    assert [(errors, len(group)) for errors, group in groups] == [(0, 1), (1, 4), (2, 4)]
    assert core.error_histogram(result) == [1, 4, 4]
    assert core.error_histogram([]) == []
