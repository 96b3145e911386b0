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
"""Functional tests for ``dynamodb_codec.internal.formatting.enum_tag``."""
import pytest

from dynamodb_codec.exceptions import InvalidTypeError, MissingFieldError
from dynamodb_codec.internal.formatting.enum_tag import enum_members, read_enum, read_enum_members

pytestmark = [pytest.mark.functional, pytest.mark.local]


@pytest.mark.parametrize(
    "name, payload, expected",
    (
        ("Stopped", None, {"___enum_tag": {"S": "Stopped"}}),
        (
            "Started",
            {"_0": {"N": "1"}},
            {"___enum_tag": {"S": "Started"}, "___enum_values": {"M": {"_0": {"N": "1"}}}},
        ),
        ("Named", {}, {"___enum_tag": {"S": "Named"}, "___enum_values": {"M": {}}}),
    ),
)
def test_enum_members(name, payload, expected):
    assert enum_members(name, payload) == expected


@pytest.mark.parametrize(
    "members, expected",
    (
        ({"___enum_tag": {"S": "Stopped"}}, ("Stopped", None)),
        (
            {"___enum_tag": {"S": "Started"}, "___enum_values": {"M": {"_0": {"N": "1"}}}},
            ("Started", {"_0": {"N": "1"}}),
        ),
        ({"___enum_tag": {"S": "Stopped"}, "other": {"N": "1"}}, ("Stopped", None)),
    ),
)
def test_read_enum_members(members, expected):
    assert read_enum_members(members) == expected


@pytest.mark.parametrize(
    "attribute, expected",
    (
        ({"S": "Stopped"}, ("Stopped", None)),
        ({"M": {"___enum_tag": {"S": "Stopped"}}}, ("Stopped", None)),
        (
            {"M": {"___enum_tag": {"S": "Started"}, "___enum_values": {"M": {"at": {"N": "1"}}}}},
            ("Started", {"at": {"N": "1"}}),
        ),
    ),
)
def test_read_enum(attribute, expected):
    assert read_enum(attribute, ("state",)) == expected


@pytest.mark.parametrize(
    "members, expected_type, expected_message",
    (
        ({}, MissingFieldError, r'Missing enum tag at "state"'),
        ({"___enum_tag": {"N": "1"}}, InvalidTypeError, r'Expected enum tag at "state.___enum_tag" to be a string'),
        (
            {"___enum_tag": {"S": "Started"}, "___enum_values": {"L": []}},
            InvalidTypeError,
            r'Expected enum values at "state.___enum_values" to be a map',
        ),
    ),
)
def test_read_enum_members_errors(members, expected_type, expected_message):
    with pytest.raises(expected_type) as excinfo:
        read_enum_members(members, ("state",))

    excinfo.match(expected_message)


def test_read_enum_wrong_type():
    with pytest.raises(InvalidTypeError) as excinfo:
        read_enum({"BOOL": True}, ("state",))

    excinfo.match(r'Expected enum at "state" but found "BOOL"')
