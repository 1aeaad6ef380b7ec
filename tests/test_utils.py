import math

import pytest

from utils import Point, parse_coord, parse_point, rad_to_deg, rad_to_mrad, round_half_away


X_COORDINATE = 5
Y_COORDINATE = 10


@pytest.fixture
def point():
    return Point(X_COORDINATE, Y_COORDINATE)


def test_point_accessors(point):
    assert point.x == X_COORDINATE
    assert point.y == Y_COORDINATE


def test_point_label(point):
    assert point.label() == "(5, 10)"
    assert Point(-1, 0).label() == "(-1, 0)"


def test_point_as_pair(point):
    assert point.as_pair() == {"x": X_COORDINATE, "y": Y_COORDINATE}


def test_point_is_immutable(point):
    with pytest.raises(AttributeError):
        point.x = 7


@pytest.mark.parametrize("bad", [1.5, "1", None, True])
def test_point_rejects_non_integers(bad):
    with pytest.raises(TypeError):
        Point(bad, 0)


def test_points_compare_by_value():
    assert Point(1, 2) == Point(1, 2)
    assert Point(1, 2) != Point(2, 1)


@pytest.mark.parametrize("text,expected", [
    ("042", 42),
    (" 1_000 ", 1000),
    ("-3", -3),
    ("+7", 7),
    ("x12", 12),
    ("Y-4", -4),
    ("0", 0),
])
def test_parse_coord(text, expected):
    assert parse_coord(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "-", "abc", "1.5", "x"])
def test_parse_coord_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_coord(text)


@pytest.mark.parametrize("text", ["1,2", "1 2", "1;2", " 1 , 2 "])
def test_parse_point_separators(text):
    assert parse_point(text) == Point(1, 2)


def test_parse_point_negative():
    assert parse_point("-1,-1") == Point(-1, -1)


@pytest.mark.parametrize("text", ["1", "1,2,3", ""])
def test_parse_point_needs_two_values(text):
    with pytest.raises(ValueError):
        parse_point(text)


@pytest.mark.parametrize("value,expected", [
    (0.5, 1),
    (1.5, 2),
    (2.5, 3),
    (2.4999, 2),
    (-0.5, -1),
    (-2.5, -3),
    (0.0, 0),
    (141.42135623730951, 141),
])
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_angle_conversions():
    assert rad_to_deg(math.pi / 2) == 90
    assert rad_to_deg(math.pi) == 180
    assert rad_to_mrad(math.pi) == 3142
    assert rad_to_mrad(3 * math.pi / 2) == 4712


def test_point_accepts_numpy_integers():
    np = pytest.importorskip("numpy")
    p = Point(np.int64(3), np.int32(-4))
    assert p == Point(3, -4)
    assert type(p.x) is int
    assert p.label() == "(3, -4)"


def test_point_rejects_numpy_bool():
    np = pytest.importorskip("numpy")
    with pytest.raises(TypeError):
        Point(np.bool_(True), 0)
