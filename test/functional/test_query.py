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
"""Functional tests for ``dynamodb_codec.query``."""
import attr
import pytest

from dynamodb_codec import build_query_input, decode, encode
from dynamodb_codec.exceptions import InvalidArgumentError
from dynamodb_codec.identifiers import ATTRIBUTE_NAME

from .functional_test_utils import (
    TEST_TABLE_NAME,
    Priority,
    Task,
    TaskFilter,
    example_table,  # noqa pylint: disable=unused-import
    mock_ddb_service,  # noqa pylint: disable=unused-import
)

pytestmark = [pytest.mark.functional, pytest.mark.local]


@attr.s
class RenamedFilter:
    owner = attr.ib(default=None, metadata={ATTRIBUTE_NAME: "user"})
    title = attr.ib(default=None)


def test_build_query_input():
    assert build_query_input(TaskFilter(owner="alice", created=5), TEST_TABLE_NAME) == {
        "TableName": TEST_TABLE_NAME,
        "KeyConditionExpression": "#k0 = :v0 AND #k1 = :v1",
        "ExpressionAttributeNames": {"#k0": "owner", "#k1": "created"},
        "ExpressionAttributeValues": {":v0": {"S": "alice"}, ":v1": {"N": "5"}},
    }


def test_build_query_input_skips_absent_fields():
    assert build_query_input(TaskFilter(created=5), TEST_TABLE_NAME) == {
        "TableName": TEST_TABLE_NAME,
        "KeyConditionExpression": "#k0 = :v0",
        "ExpressionAttributeNames": {"#k0": "created"},
        "ExpressionAttributeValues": {":v0": {"N": "5"}},
    }


def test_build_query_input_renamed_fields():
    query = build_query_input(RenamedFilter(owner="alice", title=""), TEST_TABLE_NAME)

    assert query["ExpressionAttributeNames"] == {"#k0": "user"}
    assert query["ExpressionAttributeValues"] == {":v0": {"S": "alice"}}


@pytest.mark.parametrize(
    "filter_value, expected_message",
    (
        (TaskFilter(), r"Query filter TaskFilter has no present field"),
        (RenamedFilter(title=""), r"Query filter RenamedFilter has no present field"),
        ({"owner": "alice"}, r"Query filters must be attrs instances, not dict"),
    ),
)
def test_build_query_input_errors(filter_value, expected_message):
    with pytest.raises(InvalidArgumentError) as excinfo:
        build_query_input(filter_value, TEST_TABLE_NAME)

    excinfo.match(expected_message)


def test_put_query_get(example_table):
    tasks = [
        Task(owner="alice", created=1, title="write", tags={"home"}),
        Task(owner="alice", created=2, priority=Priority.HIGH),
        Task(owner="bob", created=1, title="read"),
    ]
    for task in tasks:
        example_table.put_item(TableName=TEST_TABLE_NAME, Item=encode(task))

    response = example_table.query(**build_query_input(TaskFilter(owner="alice"), TEST_TABLE_NAME))
    found = sorted((decode(item, Task) for item in response["Items"]), key=lambda task: task.created)
    assert found == tasks[:2]

    stored = example_table.get_item(
        TableName=TEST_TABLE_NAME, Key={"owner": {"S": "bob"}, "created": {"N": "1"}}
    )["Item"]
    assert decode(stored, Task) == tasks[2]
