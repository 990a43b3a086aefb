import math

import pytest

from minirt.errors import SceneError
from minirt.values import (
    parse_double,
    parse_double_vector,
    parse_int,
    parse_int_vector,
)
from minirt.vector import Vec3


def test_parse_int_accepts_value_in_range():
    assert parse_int("42", 0, 255) == 42
    assert parse_int("-7", -10, 10) == -7


@pytest.mark.parametrize("text", ["4a", "", "1.5", "abc", None])
def test_parse_int_rejects_bad_type(text):
    with pytest.raises(SceneError, match="correct type"):
        parse_int(text, 0, 255)


def test_parse_int_rejects_out_of_range():
    with pytest.raises(SceneError, match="standard range"):
        parse_int("256", 0, 255)


def test_parse_double_in_range():
    assert parse_double("0.5", 0.0, 1.0) == 0.5
    assert parse_double(".25", 0.0, 1.0) == 0.25


def test_parse_double_unbounded():
    assert parse_double("-1234.5", 0, 0) == -1234.5


def test_parse_double_rejects_bad_type():
    with pytest.raises(SceneError, match="correct type"):
        parse_double("abc", 0, 1)


def test_parse_double_negative_shape_property():
    with pytest.raises(SceneError, match="must be positive"):
        parse_double("-2", 0, math.inf)


def test_parse_double_fov_limits():
    with pytest.raises(SceneError, match="under 180"):
        parse_double("180", 0, 180)
    with pytest.raises(SceneError, match="over 0"):
        parse_double("-1", 0, 180)
    assert parse_double("70", 0, 180) == 70.0


def test_parse_double_out_of_range():
    with pytest.raises(SceneError, match="standard range"):
        parse_double("1.5", 0, 1)


def test_parse_int_vector_colour_is_scaled():
    colour = parse_int_vector("255,0,128", 0, 255)
    assert colour.x * 255 == pytest.approx(255)
    assert colour.y == 0
    assert colour.z * 255 == pytest.approx(128)


def test_parse_int_vector_other_range_not_scaled():
    assert parse_int_vector("1,2,3", 0, 10) == Vec3(1, 2, 3)


def test_parse_int_vector_too_many_components():
    with pytest.raises(SceneError, match="elements must came in standard"):
        parse_int_vector("1,2,3,4", 0, 255)


def test_parse_int_vector_missing_component():
    with pytest.raises(SceneError, match="correct type"):
        parse_int_vector("1,2", 0, 255)


def test_parse_int_vector_out_of_range():
    with pytest.raises(SceneError, match="standard range"):
        parse_int_vector("1,300,3", 0, 255)


def test_parse_double_vector_point():
    assert parse_double_vector("1.5,-2,3", 0, 0) == Vec3(1.5, -2, 3)


def test_parse_double_vector_normal_is_unit():
    normal = parse_double_vector("1,1,0", -1, 1)
    assert normal.length() == pytest.approx(1.0)
    assert normal.x == pytest.approx(normal.y)
    assert normal.z == 0


def test_parse_double_vector_axis_normal_unchanged():
    assert parse_double_vector("0,0,1", -1, 1) == Vec3(0, 0, 1)


def test_parse_double_vector_zero_normal():
    with pytest.raises(SceneError, match="Normalized vector"):
        parse_double_vector("0,0,0", -1, 1)


def test_parse_double_vector_normal_out_of_range():
    with pytest.raises(SceneError, match="standard range"):
        parse_double_vector("0,0,5", -1, 1)


def test_parse_double_vector_too_many_components():
    with pytest.raises(SceneError, match="elements must came in standard"):
        parse_double_vector("1,2,3,4", 0, 0)