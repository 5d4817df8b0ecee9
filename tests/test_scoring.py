import pytest

from clarity_backend.services.scoring import clamp_score, to_five_point


@pytest.mark.parametrize("value,expected", [
    (0, 1),
    (1, 5),
    (0.5, 3),
    (0.3, 2),
    (0.4, 3),
    (0.625, 4),
    (0.375, 3),
])
def test_to_five_point(value, expected):
    assert to_five_point(value) == expected


def test_to_five_point_clamps_out_of_range():
    assert to_five_point(-2) == 1
    assert to_five_point(3.5) == 5
    assert to_five_point(float("nan")) == 1
    assert to_five_point(float("inf")) == 5


def test_to_five_point_returns_int():
    assert isinstance(to_five_point(0.77), int)


def test_clamp_score():
    assert clamp_score(0) == 1
    assert clamp_score(6) == 5
    assert clamp_score(3) == 3
