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
"""Top-level functions for converting between typed values and DynamoDB items."""
from typing import Any, Optional, Type, TypeVar  # noqa pylint: disable=unused-import

from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting.deserialize.attribute import deserialize_item
from dynamodb_codec.internal.formatting.serialize.attribute import serialize_item
from dynamodb_codec.structures import CodecConfig  # noqa pylint: disable=unused-import

__all__ = ("encode", "decode")

T = TypeVar("T")  # pylint: disable=invalid-name


def encode(value, config=None):
    # type: (Any, Optional[CodecConfig]) -> dynamodb_types.ITEM
    """Convert a typed value into a DynamoDB item.

    >>> import attr
    >>> from dynamodb_codec import encode
    >>> @attr.s
    ... class Order:
    ...     customer = attr.ib(type=str)
    ...     quantity = attr.ib(type=int)
    >>> encode(Order(customer="alice", quantity=3))
    {'customer': {'S': 'alice'}, 'quantity': {'N': '3'}}

    .. note::

        This produces DynamoDB-formatted items and is for use with the boto3 DynamoDB client.

    Empty strings and byte strings are not written, so they read back as empty values only
    where the requested type allows a missing value.

    :param value: attrs instance, tuple, named tuple, mapping, enum member or variant instance
    :param CodecConfig config: Serialization options (optional)
    :returns: DynamoDB item
    :rtype: dict
    :raises MissingAggregateRootError: if ``value`` cannot be the top level of an item
    """
    return serialize_item(value, config)


def decode(item, cls):
    # type: (dynamodb_types.ITEM, Type[T]) -> T
    """Convert a DynamoDB item into a value of the requested type.

    >>> from dynamodb_codec import decode
    >>> decode({'customer': {'S': 'alice'}, 'quantity': {'N': '3'}}, Order)
    Order(customer='alice', quantity=3)

    :param dict item: DynamoDB item, as returned by the boto3 DynamoDB client
    :param cls: attrs class, tuple or named tuple type, mapping type, enum or tagged union base
    :returns: Value of type ``cls``
    :raises MissingAggregateRootError: if ``cls`` cannot be read from the top level of an item
    :raises MissingFieldError: if a required value is absent from ``item``
    :raises InvalidTypeError: if a stored value does not match the requested type
    """
    return deserialize_item(item, cls)
