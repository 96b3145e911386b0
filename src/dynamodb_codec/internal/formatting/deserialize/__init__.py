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
"""Helper functions and structures for deserializing values.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import decimal
import re
from typing import Any, Optional, Text, Union  # noqa pylint: disable=unused-import

import attr
from boto3.dynamodb.types import DYNAMODB_CONTEXT

from dynamodb_codec.exceptions import InvalidTypeError
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting import format_path
from dynamodb_codec.internal.formatting.attribute_value import attribute_tag, sequence_members
from dynamodb_codec.internal.identifiers import ShapeKind, Tag
from dynamodb_codec.internal.shapes import TypeShape  # noqa pylint: disable=unused-import
from dynamodb_codec.scalars import Integer

__all__ = ("Cursor", "parse_number")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


@attr.s(frozen=True)
class Cursor:
    """Immutable pointer to a position inside an item.

    A cursor without a position refers to its container itself, which is then a map of
    members (the item at the top level or the contents of a map attribute) or a list of
    attribute values (the contents of a list or set attribute). Moving to a member or
    opening a nested attribute returns a new cursor.

    :param container: Members of the enclosing map, or attribute values of the enclosing list
    :type container: dict or list
    :param position: Key or index of the current value inside ``container``, if any
    :type position: str or int
    :param tuple path: Keys and indexes leading to the current value
    """

    container = attr.ib()
    position = attr.ib(default=None)
    path = attr.ib(default=(), converter=tuple)

    @classmethod
    def root(cls, item):
        # type: (dynamodb_types.ITEM) -> Cursor
        """Build a cursor referring to the top level of an item."""
        return cls(container=item)

    @property
    def location(self):
        # type: () -> Text
        """Key path of the current value, rendered for error messages."""
        return format_path(self.path)

    def value(self):
        # type: () -> Optional[dynamodb_types.RAW_ATTRIBUTE]
        """Read the attribute value at the current position.

        :returns: Attribute value, or None if nothing is stored at this position
        """
        if self.position is None:
            return None
        if isinstance(self.container, list):
            if self.position < len(self.container):
                return self.container[self.position]
            return None
        return self.container.get(self.position)

    def member(self, position):
        # type: (Union[Text, int]) -> Cursor
        """Move to a member of the container.

        :param position: Key or index of the member
        :rtype: Cursor
        """
        if self.position is not None:
            raise ValueError("Cursor must refer to its container to move to a member")
        return Cursor(container=self.container, position=position, path=self.path + (position,))

    def open_map(self):
        # type: () -> Optional[Cursor]
        """Refer to the members of the map at the current position.

        :returns: Cursor over the map members, or None if nothing is stored here
        :raises InvalidTypeError: if the stored value is not a map
        """
        if self.position is None:
            return self

        attribute = self.value()
        if attribute is None:
            return None

        tag = attribute_tag(attribute)
        if tag is not Tag.MAP:
            raise InvalidTypeError(
                'Expected map at "{}" but found "{}"'.format(self.location, tag.dynamodb_tag), self.path
            )
        return Cursor(container=attribute[Tag.MAP.dynamodb_tag], path=self.path)

    def open_sequence(self):
        # type: () -> Optional[Cursor]
        """Refer to the members of the list or set at the current position.

        :returns: Cursor over the sequence members, or None if nothing is stored here
        :raises InvalidTypeError: if the stored value is neither a list nor a set
        """
        attribute = self.value()
        if attribute is None:
            return None

        tag = attribute_tag(attribute)
        if not tag.is_sequence:
            raise InvalidTypeError(
                'Expected list or set at "{}" but found "{}"'.format(self.location, tag.dynamodb_tag), self.path
            )
        return Cursor(container=sequence_members(attribute, tag), path=self.path)

    def keys(self):
        """List the keys or indexes of the container."""
        if isinstance(self.container, list):
            return list(range(len(self.container)))
        return list(self.container.keys())


def _parse_integer(text, shape, path):
    if _INTEGER.fullmatch(text) is None:
        raise InvalidTypeError('Expected integer at "{}" but found "{}"'.format(format_path(path), text), path)

    value = int(text)
    if issubclass(shape.target, Integer):
        if not shape.target.in_range(value):
            raise InvalidTypeError(
                'Value {} at "{}" is out of range for {}'.format(text, format_path(path), shape.target.__name__), path
            )
        return shape.target(value)
    return value


def parse_number(text, shape, path=()):
    # type: (Text, TypeShape, dynamodb_types.PATH) -> Any
    """Parse the text of a number attribute into the requested numeric type.

    :param str text: Stored number text
    :param TypeShape shape: Integer, float or decimal shape to parse into
    :param tuple path: Path to the stored value, used in error messages
    :raises InvalidTypeError: if the text is not a number of the requested type
    """
    if not isinstance(text, str):
        raise InvalidTypeError('Expected number text at "{}"'.format(format_path(path)), path)

    if shape.kind is ShapeKind.INTEGER:
        return _parse_integer(text, shape, path)

    if _NUMBER.fullmatch(text) is None:
        raise InvalidTypeError('Expected number at "{}" but found "{}"'.format(format_path(path), text), path)

    if shape.kind is ShapeKind.FLOAT:
        return float(text)

    try:
        return DYNAMODB_CONTEXT.create_decimal(text)
    except decimal.DecimalException as error:
        raise InvalidTypeError(
            'Number {} at "{}" does not fit a DynamoDB number: {!r}'.format(text, format_path(path), error), path
        )
