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
"""Helpers for building DynamoDB query requests from typed filter values."""
import logging
from typing import Any, Dict, Optional, Text  # noqa pylint: disable=unused-import

import attr

from dynamodb_codec.exceptions import InvalidArgumentError
from dynamodb_codec.identifiers import LOGGER_NAME
from dynamodb_codec.internal.shapes import struct_fields
from dynamodb_codec.structures import CodecConfig  # noqa pylint: disable=unused-import
from dynamodb_codec.transform import encode

__all__ = ("build_query_input",)
_LOGGER = logging.getLogger(LOGGER_NAME)


def build_query_input(filter_value, table_name, config=None):
    # type: (Any, Text, Optional[CodecConfig]) -> Dict[Text, Any]
    """Build the arguments of a DynamoDB ``Query`` request matching every present field of ``filter_value``.

    Fields set to None, and fields whose value is not written (empty strings and byte
    strings), are left out of the key condition.

    >>> import attr
    >>> import boto3
    >>> from dynamodb_codec import build_query_input
    >>> @attr.s
    ... class TaskFilter:
    ...     owner = attr.ib(default=None)
    ...     created = attr.ib(default=None)
    >>> client = boto3.client('dynamodb')
    >>> response = client.query(**build_query_input(TaskFilter(owner='alice'), 'tasks'))

    :param filter_value: attrs instance whose fields are all optional
    :param str table_name: Name of the table to query
    :param CodecConfig config: Serialization options (optional)
    :returns: Keyword arguments for ``boto3.client('dynamodb').query``
    :rtype: dict
    :raises InvalidArgumentError: if ``filter_value`` is not an attrs instance or has no present field
    """
    if not attr.has(type(filter_value)):
        raise InvalidArgumentError("Query filters must be attrs instances, not {}".format(type(filter_value).__name__))

    item = encode(filter_value, config)

    conditions = []
    names = {}
    values = {}
    for field in struct_fields(type(filter_value)):
        if getattr(filter_value, field.name) is None or field.key not in item:
            continue
        name_placeholder = "#k{:d}".format(len(conditions))
        value_placeholder = ":v{:d}".format(len(conditions))
        names[name_placeholder] = field.key
        values[value_placeholder] = item[field.key]
        conditions.append("{} = {}".format(name_placeholder, value_placeholder))

    if not conditions:
        raise InvalidArgumentError("Query filter {} has no present field".format(type(filter_value).__name__))

    _LOGGER.debug("Built key condition on %s for table %s", sorted(names.values()), table_name)
    return {
        "TableName": table_name,
        "KeyConditionExpression": " AND ".join(conditions),
        "ExpressionAttributeNames": names,
        "ExpressionAttributeValues": values,
    }
