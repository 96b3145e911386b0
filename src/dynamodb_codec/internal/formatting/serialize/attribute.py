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
"""Tooling for serializing typed values into DynamoDB items.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional  # noqa pylint: disable=unused-import

from boto3.dynamodb.types import Binary

from dynamodb_codec.exceptions import MissingAggregateRootError, SerializationError
from dynamodb_codec.identifiers import LOGGER_NAME, PayloadKind
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting import format_path
from dynamodb_codec.internal.formatting.attribute_value import (
    binary_attribute,
    boolean_attribute,
    list_attribute,
    map_attribute,
    null_attribute,
    number_attribute,
    set_attribute,
    string_attribute,
)
from dynamodb_codec.internal.formatting.enum_tag import enum_members
from dynamodb_codec.internal.formatting.serialize import format_number
from dynamodb_codec.internal.formatting.serialize.key import serialize_key
from dynamodb_codec.internal.identifiers import AGGREGATE_KINDS, ReservedKeys, Tag, ValueKind, positional_key
from dynamodb_codec.internal.shapes import struct_fields, value_kind
from dynamodb_codec.structures import CodecConfig, variant_info

__all__ = ("serialize_item",)
_LOGGER = logging.getLogger(LOGGER_NAME)


def serialize_item(value, config=None):  # noqa: C901 pylint: disable=too-many-locals,too-many-statements
    # type: (Any, Optional[CodecConfig]) -> dynamodb_types.ITEM
    """Serialize a typed value into a DynamoDB item.

    The members of ``value`` become the top level members of the item. Nested aggregates
    are written as map attributes, empty strings and byte strings are not written at all.

    :param value: Struct, tuple, mapping, enum member or variant instance to serialize
    :param CodecConfig config: Serialization options (default: ``CodecConfig()``)
    :returns: Serialized item
    :rtype: dict
    :raises MissingAggregateRootError: if ``value`` cannot be the top level of an item
    :raises UnsupportedKeyTypeError: if a mapping key is a composite value
    :raises UnsupportedShapeError: if a value has no representation in DynamoDB
    """
    if config is None:
        config = CodecConfig()

    def _serialize_null(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.RAW_ATTRIBUTE
        """
        :param _value: Unit value or field-less struct
        :returns: Null attribute
        """
        return null_attribute()

    def _serialize_boolean(_value, path):
        # type: (bool, dynamodb_types.PATH) -> dynamodb_types.RAW_ATTRIBUTE
        return boolean_attribute(_value)

    def _serialize_number(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.RAW_ATTRIBUTE
        return number_attribute(format_number(_value, path))

    def _serialize_string(_value, path):
        # type: (str, dynamodb_types.PATH) -> Optional[dynamodb_types.RAW_ATTRIBUTE]
        """
        :param str _value: Value to serialize
        :returns: String attribute, or None if the value is empty and must not be written
        """
        if not _value:
            _LOGGER.debug('Omitting empty string at "%s"', format_path(path))
            return None
        return string_attribute(str(_value))

    def _transform_binary_value(_value):
        # type: (dynamodb_types.BINARY) -> bytes
        if isinstance(_value, Binary):
            return bytes(_value.value)
        return bytes(_value)

    def _serialize_binary(_value, path):
        # type: (dynamodb_types.BINARY, dynamodb_types.PATH) -> Optional[dynamodb_types.RAW_ATTRIBUTE]
        """
        :param _value: Value to serialize
        :type _value: bytes, bytearray or boto3.dynamodb.types.Binary
        :returns: Binary attribute, or None if the value is empty and must not be written
        """
        raw = _transform_binary_value(_value)
        if not raw:
            _LOGGER.debug('Omitting empty byte string at "%s"', format_path(path))
            return None
        return binary_attribute(raw)

    def _serialize_native_set(_value, path):
        # type: (Any, dynamodb_types.PATH) -> Optional[dynamodb_types.RAW_ATTRIBUTE]
        """
        :param set _value: Non-empty set to serialize
        :returns: String, number or binary set attribute, or None if the members are not
            all non-empty strings, all numbers or all non-empty byte strings
        """
        kinds = {value_kind(member) for member in _value}
        if kinds == {ValueKind.NUMBER}:
            return set_attribute(Tag.NUMBER_SET, [format_number(member, path) for member in sorted(_value)])
        if kinds == {ValueKind.STRING} and all(_value):
            return set_attribute(Tag.STRING_SET, sorted(str(member) for member in _value))
        if kinds == {ValueKind.BYTES}:
            members = sorted(_transform_binary_value(member) for member in _value)
            if all(members):
                return set_attribute(Tag.BINARY_SET, members)
        return None

    def _serialize_sequence(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.RAW_ATTRIBUTE
        """
        :param _value: List, set or frozenset to serialize
        :returns: List attribute, or a set attribute if native sets are enabled
        """
        if config.native_sets and isinstance(_value, (set, frozenset)) and _value:
            native = _serialize_native_set(_value, path)
            if native is not None:
                return native

        members = []
        for index, member in enumerate(_value):
            attribute = _serialize(member, path + (index,))
            if attribute is not None:
                members.append(attribute)
        return list_attribute(members)

    def _tuple_members(_value, path):
        # type: (tuple, dynamodb_types.PATH) -> dynamodb_types.MAP
        members = {}
        for index, member in enumerate(_value):
            key = positional_key(index)
            attribute = _serialize(member, path + (key,))
            if attribute is not None:
                members[key] = attribute
        return members

    def _mapping_members(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.MAP
        members = {}
        for key, member in _value.items():
            _key = serialize_key(key, path)
            if _key in members:
                raise SerializationError(
                    'Mapping keys at "{}" collide on "{}"'.format(format_path(path), _key), path + (_key,)
                )
            attribute = _serialize(member, path + (_key,))
            if attribute is not None:
                members[_key] = attribute
        return members

    def _struct_members(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.MAP
        members = {}
        for field in struct_fields(type(_value)):
            attribute = _serialize(getattr(_value, field.name), path + (field.key,))
            if attribute is not None:
                members[field.key] = attribute
        return members

    def _enum_members(_value, path):
        # type: (Any, dynamodb_types.PATH) -> dynamodb_types.MAP
        """
        :param _value: Enum member or variant instance
        :returns: Members describing the variant
        """
        if isinstance(_value, Enum):
            return enum_members(_value.name)

        info = variant_info(type(_value))
        kind = info.kind
        if kind is PayloadKind.UNIT:
            return enum_members(info.name)

        values_path = path + (ReservedKeys.ENUM_VALUES.value,)
        if kind is PayloadKind.NAMED:
            payload = _struct_members(_value, values_path)
        else:
            positions = tuple(getattr(_value, field.name) for field in struct_fields(type(_value)))
            payload = _tuple_members(positions, values_path)
        return enum_members(info.name, payload)

    def _member_function(kind):
        # type: (ValueKind) -> Callable[[Any, dynamodb_types.PATH], dynamodb_types.MAP]
        """Locates the function collecting the members of an aggregate value."""
        member_functions = {
            ValueKind.TUPLE: _tuple_members,
            ValueKind.MAP: _mapping_members,
            ValueKind.STRUCT: _struct_members,
            ValueKind.ENUM: _enum_members,
        }
        return member_functions[kind]

    def _serialize_function(kind):
        # type: (ValueKind) -> Callable[[Any, dynamodb_types.PATH], Optional[dynamodb_types.RAW_ATTRIBUTE]]
        """Locates the serialization function for a non-aggregate value."""
        serialize_functions = {
            ValueKind.UNIT: _serialize_null,
            ValueKind.UNIT_STRUCT: _serialize_null,
            ValueKind.BOOLEAN: _serialize_boolean,
            ValueKind.NUMBER: _serialize_number,
            ValueKind.STRING: _serialize_string,
            ValueKind.BYTES: _serialize_binary,
            ValueKind.SEQUENCE: _serialize_sequence,
        }
        return serialize_functions[kind]

    def _serialize(_value, path):
        # type: (Any, dynamodb_types.PATH) -> Optional[dynamodb_types.RAW_ATTRIBUTE]
        """Serialize a nested value, returning None if nothing must be written."""
        kind = value_kind(_value)
        if kind in AGGREGATE_KINDS:
            return map_attribute(_member_function(kind)(_value, path))
        return _serialize_function(kind)(_value, path)

    root_kind = value_kind(value)
    if root_kind not in AGGREGATE_KINDS:
        raise MissingAggregateRootError(
            "Top level value must be a struct, tuple, mapping or enum, not {}".format(type(value).__name__)
        )
    return _member_function(root_kind)(value, ())
