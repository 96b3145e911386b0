# Copyright 2018 Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"). You
# may not use this file except in compliance with the License. A copy of
# the License is located at
#
# http://aws.amazon.com/apache2.0/
#
# or in the "license" file accompanying this file. This file is
# distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF
# ANY KIND, either express or implied. See the License for the specific
# language governing permissions and limitations under the License.
"""Functional tests for item de/serialization."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Set, Tuple

import attr
import pytest
from boto3.dynamodb.types import Binary

from dynamodb_codec.exceptions import (
    InvalidTypeError,
    MalformedAttributeValueError,
    MissingAggregateRootError,
    MissingFieldError,
    SerializationError,
    UnsupportedKeyTypeError,
    UnsupportedShapeError,
)
from dynamodb_codec.identifiers import ATTRIBUTE_NAME
from dynamodb_codec.internal.formatting.deserialize.attribute import deserialize_item
from dynamodb_codec.internal.formatting.serialize.attribute import serialize_item
from dynamodb_codec.scalars import Char, UInt32
from dynamodb_codec.structures import CodecConfig

from ...functional_test_utils import (
    SAMPLE,
    SAMPLE_ITEM,
    Blank,
    Circle,
    Drawing,
    Intern,
    Point,
    Priority,
    Rectangle,
    Sample,
    Segment,
    Settings,
    Shape,
)

pytestmark = [pytest.mark.functional, pytest.mark.local]


@attr.s
class Marker:
    pass


@attr.s
class Holder:
    ids = attr.ib(type=Set[UInt32], factory=set)
    marker = attr.ib(type=Optional[Marker], default=None)
    data = attr.ib(type=bytes, default=b"")
    initial = attr.ib(type=Optional[Char], default=None)
    extra = attr.ib(default=None)


@attr.s
class Required:
    marker = attr.ib(type=Marker)
    initial = attr.ib(type=Char)


@attr.s
class Reserved:
    values = attr.ib(type=str, metadata={ATTRIBUTE_NAME: "___enum_values"})


DRAWING = Drawing(
    name="d",
    shapes=[Blank(), Circle(1.5), Segment(1, 2), Rectangle(3, 4)],
    primary=None,
)
DRAWING_ITEM = {
    "name": {"S": "d"},
    "shapes": {
        "L": [
            {"M": {"___enum_tag": {"S": "Blank"}}},
            {"M": {"___enum_tag": {"S": "Circle"}, "___enum_values": {"M": {"_0": {"N": "1.5"}}}}},
            {"M": {"___enum_tag": {"S": "Segment"}, "___enum_values": {"M": {"_0": {"N": "1"}, "_1": {"N": "2"}}}}},
            {
                "M": {
                    "___enum_tag": {"S": "rect"},
                    "___enum_values": {"M": {"width": {"N": "3"}, "height": {"N": "4"}}},
                }
            },
        ]
    },
    "primary": {"NULL": True},
}


@pytest.mark.parametrize(
    "value, expected",
    (
        (SAMPLE, SAMPLE_ITEM),
        (DRAWING, DRAWING_ITEM),
        (Circle(2.0), {"___enum_tag": {"S": "Circle"}, "___enum_values": {"M": {"_0": {"N": "2.0"}}}}),
        (Blank(), {"___enum_tag": {"S": "Blank"}}),
        (Priority.HIGH, {"___enum_tag": {"S": "HIGH"}}),
        ((1, "a", ""), {"_0": {"N": "1"}, "_1": {"S": "a"}}),
        (Point(1, 2), {"_0": {"N": "1"}, "_1": {"N": "2"}, "_2": {"S": "origin"}}),
        ({"b": b"x", "e": b"", "s": ""}, {"b": {"B": b"x"}}),
        ({"b": Binary(b"x"), "a": bytearray(b"y")}, {"b": {"B": b"x"}, "a": {"B": b"y"}}),
        ({"tags": ["a", "", "b"]}, {"tags": {"L": [{"S": "a"}, {"S": "b"}]}}),
        ({"ids": {3}}, {"ids": {"L": [{"N": "3"}]}}),
        ({"ids": set()}, {"ids": {"L": []}}),
        ({1: True, 2.5: False}, {"1": {"BOOL": True}, "2.5": {"BOOL": False}}),
        ({"m": Marker(), "n": None}, {"m": {"NULL": True}, "n": {"NULL": True}}),
        ({"pair": (1, 2)}, {"pair": {"M": {"_0": {"N": "1"}, "_1": {"N": "2"}}}}),
        ({"level": Priority.LOW}, {"level": {"M": {"___enum_tag": {"S": "LOW"}}}}),
        (
            Settings(),
            {
                "path": {"S": "/"},
                "timeout": {"N": "30"},
                "priority": {"M": {"___enum_tag": {"S": "EXTRA_LOW"}}},
                "label": {"NULL": True},
            },
        ),
    ),
)
def test_serialize_item(value, expected):
    assert serialize_item(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    (
        ({"ids": {5, 3, 4}}, {"ids": {"NS": ["3", "4", "5"]}}),
        ({"ids": {Decimal("1.5"), 2}}, {"ids": {"NS": ["1.5", "2"]}}),
        ({"tags": frozenset(["b", "a"])}, {"tags": {"SS": ["a", "b"]}}),
        ({"blobs": {b"b", b"a"}}, {"blobs": {"BS": [b"a", b"b"]}}),
        ({"tags": {"", "a"}}, {"tags": {"L": [{"S": "a"}]}}),
        ({"ids": set()}, {"ids": {"L": []}}),
        ({"ids": [3, 3]}, {"ids": {"L": [{"N": "3"}, {"N": "3"}]}}),
    ),
)
def test_serialize_item_native_sets(value, expected):
    assert serialize_item(value, CodecConfig(native_sets=True)) == expected


@pytest.mark.parametrize(
    "value, expected_type, expected_message",
    (
        (5, MissingAggregateRootError, r"Top level value must be a struct, tuple, mapping or enum, not int"),
        ("text", MissingAggregateRootError, r"Top level value*"),
        ([1, 2], MissingAggregateRootError, r"Top level value*"),
        (None, MissingAggregateRootError, r"Top level value*"),
        (Marker(), MissingAggregateRootError, r"Top level value*"),
        ({"x": 1j}, UnsupportedShapeError, r'Unsupported value type: "complex"'),
        ({"x": float("nan")}, UnsupportedShapeError, r"cannot be stored as a number"),
        ({"x": 1e200}, SerializationError, r"cannot be stored as a number"),
        ({"x": -1e-200}, SerializationError, r"cannot be stored as a number"),
        ({"x": {(1, 2): "a"}}, UnsupportedKeyTypeError, r'Mapping keys at "x" must be scalars, not tuple'),
        ({b"k": 1}, UnsupportedShapeError, r"Mapping keys at*"),
        ({1: "a", "1": "b"}, SerializationError, r'Mapping keys at "<root>" collide on "1"'),
        (Reserved(values="v"), UnsupportedShapeError, r'uses the reserved key "___enum_values"'),
    ),
)
def test_serialize_item_errors(value, expected_type, expected_message):
    with pytest.raises(expected_type) as excinfo:
        serialize_item(value)

    excinfo.match(expected_message)


@pytest.mark.parametrize(
    "item, cls, expected",
    (
        (SAMPLE_ITEM, Sample, SAMPLE),
        (DRAWING_ITEM, Drawing, DRAWING),
        ({}, Settings, Settings()),
        ({"priority": {"S": "HIGH"}}, Settings, Settings(priority=Priority.HIGH)),
        ({"name": {"S": "d"}, "shapes": {"L": [{"S": "Blank"}]}}, Drawing, Drawing(name="d", shapes=[Blank()])),
        ({"name": {"S": "d"}, "unknown": {"N": "1"}}, Drawing, Drawing(name="d")),
        ({"ids": {"NS": ["3", "4", "5"]}}, Holder, Holder(ids={3, 4, 5})),
        ({"ids": {"L": [{"N": "3"}]}}, Holder, Holder(ids={3})),
        ({"marker": {"NULL": True}}, Holder, Holder(marker=None)),
        ({"marker": {"NULL": True}, "initial": {"S": "c"}}, Required, Required(marker=Marker(), initial=Char("c"))),
        ({"data": {"B": Binary(b"x")}}, Holder, Holder(data=b"x")),
        ({"initial": {"S": "c"}}, Holder, Holder(initial=Char("c"))),
        ({"extra": {"SS": ["x"]}}, Holder, Holder(extra=["x"])),
        (
            {"___enum_tag": {"S": "Circle"}, "___enum_values": {"M": {"_0": {"N": "2.5"}}}},
            Shape,
            Circle(2.5),
        ),
        (
            {"___enum_tag": {"S": "rect"}, "___enum_values": {"M": {"width": {"N": "3"}, "height": {"N": "4"}}}},
            Rectangle,
            Rectangle(3, 4),
        ),
        ({"___enum_tag": {"S": "LOW"}}, Priority, Priority.LOW),
        ({"_0": {"N": "1"}}, Tuple[int, str], (1, "")),
        ({"_0": {"N": "1"}, "_1": {"N": "2"}, "_3": {"N": "4"}}, Tuple[int, ...], (1, 2)),
        ({"_0": {"N": "1"}, "_1": {"N": "2"}}, Point, Point(1, 2)),
        ({"a": {"N": "1"}}, Dict[str, int], {"a": 1}),
        ({"1": {"BOOL": True}}, Dict[int, bool], {1: True}),
        (
            {
                "b": {"B": b"x"},
                "n": {"N": "1.5"},
                "l": {"L": [{"S": "a"}, {"NULL": True}]},
                "m": {"M": {"t": {"BOOL": False}}},
                "s": {"SS": ["x"]},
            },
            dict,
            {"b": b"x", "n": Decimal("1.5"), "l": ["a", None], "m": {"t": False}, "s": ["x"]},
        ),
        ({"x": {"N": "1"}}, Any, {"x": Decimal("1")}),
        ({"x": {"L": [{"N": "1"}]}}, Dict[str, List[int]], {"x": [1]}),
    ),
)
def test_deserialize_item(item, cls, expected):
    assert deserialize_item(item, cls) == expected


def test_deserialize_item_does_not_mutate_input():
    item = {"name": {"S": "d"}, "shapes": {"L": [{"S": "Blank"}]}}
    original = {"name": {"S": "d"}, "shapes": {"L": [{"S": "Blank"}]}}

    deserialize_item(item, Drawing)

    assert item == original


@pytest.mark.parametrize(
    "item, cls, expected_type, expected_message",
    (
        (dict(SAMPLE_ITEM, i={"S": "18"}), Sample, InvalidTypeError, r'Expected "N" at "i" but found "S"'),
        ({"f": {"N": "1"}}, Intern, MissingFieldError, r'Missing integer at "k"'),
        (
            {"k": {"N": "4294967296"}, "f": {"N": "1"}},
            Intern,
            InvalidTypeError,
            r'Value 4294967296 at "k" is out of range for UInt32',
        ),
        ({"k": {"N": "1"}, "f": {"N": "x"}}, Intern, InvalidTypeError, r'Expected number at "f"'),
        ({}, int, MissingAggregateRootError, r"Top level type must be a struct, tuple, mapping or enum, not integer"),
        ({}, Optional[Intern], MissingAggregateRootError, r"Top level type*"),
        ({}, List[int], MissingAggregateRootError, r"Top level type*"),
        ({"___enum_tag": {"S": "NOPE"}}, Priority, InvalidTypeError, r'Unknown variant "NOPE" of Priority'),
        ({"___enum_tag": {"S": "NOPE"}}, Shape, InvalidTypeError, r'Unknown variant "NOPE" of Shape'),
        (
            {"___enum_tag": {"S": "LOW"}, "___enum_values": {"M": {}}},
            Priority,
            InvalidTypeError,
            r'Variant "LOW" at "<root>" does not take a payload',
        ),
        (
            {"___enum_tag": {"S": "Blank"}, "___enum_values": {"M": {}}},
            Shape,
            InvalidTypeError,
            r'Variant "Blank" at "<root>" does not take a payload',
        ),
        ({"___enum_tag": {"S": "Circle"}}, Shape, MissingFieldError, r'Missing payload of variant "Circle"'),
        ({}, Shape, MissingFieldError, r'Missing enum tag at "<root>"'),
        ({"___enum_tag": {"N": "1"}}, Shape, InvalidTypeError, r"Expected enum tag*"),
        (
            {"___enum_tag": {"S": "Circle"}, "___enum_values": {"M": {"_0": {"N": "2.5"}}}},
            Segment,
            InvalidTypeError,
            r'Unknown variant "Circle" of Segment',
        ),
        (
            {"shapes": {"L": [{"N": "1"}]}, "name": {"S": "d"}},
            Drawing,
            InvalidTypeError,
            r'Expected enum at "shapes\[0\]" but found "N"',
        ),
        ({"marker": {"S": "x"}}, Holder, InvalidTypeError, r'Expected "NULL" at "marker" but found "S"'),
        ({"initial": {"S": "c"}}, Required, MissingFieldError, r'Missing unit_struct at "marker"'),
        ({"marker": {"NULL": True}}, Required, MissingFieldError, r'Missing char at "initial"'),
        (
            {"marker": {"NULL": True}, "initial": {"S": "cc"}},
            Required,
            InvalidTypeError,
            r'Expected single character at "initial" but found "cc"',
        ),
        ({"ids": {"S": "x"}}, Holder, InvalidTypeError, r'Expected list or set at "ids" but found "S"'),
        ({"x": {}}, dict, MalformedAttributeValueError, r"Attribute value has no populated member*"),
        ({"values": {"S": "v"}}, Reserved, UnsupportedShapeError, r'uses the reserved key "___enum_values"'),
    ),
)
def test_deserialize_item_errors(item, cls, expected_type, expected_message):
    with pytest.raises(expected_type) as excinfo:
        deserialize_item(item, cls)

    excinfo.match(expected_message)


def test_deserialize_item_error_path():
    with pytest.raises(InvalidTypeError) as excinfo:
        deserialize_item(dict(SAMPLE_ITEM, intern={"M": {"k": {"S": "1"}, "f": {"N": "1"}}}), Sample)

    assert excinfo.value.path == ("intern", "k")


def test_deserialize_item_requires_dict():
    with pytest.raises(TypeError) as excinfo:
        deserialize_item([], Sample)

    excinfo.match(r"Invalid item type*")


def test_deserialize_item_logs_unknown_keys(caplog):
    caplog.set_level(logging.DEBUG, logger="dynamodb_codec")

    deserialize_item({"name": {"S": "d"}, "unknown": {"N": "1"}}, Drawing)

    assert 'Ignoring unknown key "unknown" at "<root>" for Drawing' in caplog.text


def test_serialize_item_logs_omitted_strings(caplog):
    caplog.set_level(logging.DEBUG, logger="dynamodb_codec")

    serialize_item({"outer": {"inner": ""}})

    assert 'Omitting empty string at "outer.inner"' in caplog.text
