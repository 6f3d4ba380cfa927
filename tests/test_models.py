"""Tests for the definition data models."""

import pytest

from ros_msgdigest import Constant, Field, InvalidNameError, Type, split_full_name


def test_type_str():
    assert str(Type("int32")) == "int32"
    assert str(Type("uint8", is_array=True)) == "uint8[]"
    point_array = Type("Point", "geometry_msgs", is_array=True, array_size=3)
    assert str(point_array) == "geometry_msgs/Point[3]"


def test_primitive_requires_no_package():
    assert Type("int32").is_primitive
    assert not Type("Point", "geometry_msgs").is_primitive
    assert not Type("Foo").is_primitive


def test_field_and_constant_str():
    assert str(Field(Type("Header", "std_msgs"), "header")) == "std_msgs/Header header"
    assert str(Constant(Type("uint8"), "OK", "0")) == "uint8 OK=0"


@pytest.mark.parametrize(
    "type_",
    [Type("int32", is_array=True), Type("Point", "geometry_msgs"), Type("time")],
)
def test_constant_type_validation(type_):
    with pytest.raises(TypeError, match="Constants must be primitive"):
        Constant(type_, "BAD", "1")


@pytest.mark.parametrize(
    ("full_name", "expected"),
    [("std_msgs/String", ("std_msgs", "String")), ("String", ("", "String"))],
)
def test_split_full_name(full_name, expected):
    assert split_full_name(full_name) == expected


@pytest.mark.parametrize("full_name", ["", "a/b/c", "/String", "std_msgs/"])
def test_split_invalid_name(full_name):
    with pytest.raises(InvalidNameError):
        split_full_name(full_name)
