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
"""Tooling for deserializing DynamoDB items into typed values.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import logging
from typing import Any, Callable, Optional, Text, Tuple  # noqa pylint: disable=unused-import

from boto3.dynamodb.types import Binary

from dynamodb_codec.exceptions import InvalidTypeError, MissingAggregateRootError, MissingFieldError
from dynamodb_codec.identifiers import LOGGER_NAME, PayloadKind
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting.attribute_value import attribute_tag
from dynamodb_codec.internal.formatting.deserialize import Cursor, parse_number
from dynamodb_codec.internal.formatting.deserialize.key import deserialize_key
from dynamodb_codec.internal.formatting.enum_tag import read_enum, read_enum_members
from dynamodb_codec.internal.identifiers import ReservedKeys, ShapeKind, Tag, positional_key
from dynamodb_codec.internal.shapes import (
    TypeShape,
    enumeration_of,
    named_tuple_fields,
    struct_fields,
    type_shape,
)
from dynamodb_codec.scalars import Char
from dynamodb_codec.structures import enumeration_variants

__all__ = ("deserialize_item", "ROOT_SHAPE_KINDS")
_LOGGER = logging.getLogger(LOGGER_NAME)

#: Requested type shapes that may be read from the top level of an item.
ROOT_SHAPE_KINDS = frozenset(
    (ShapeKind.ANY, ShapeKind.TUPLE, ShapeKind.MAP, ShapeKind.STRUCT, ShapeKind.ENUM, ShapeKind.VARIANTS)
)
_ANY = TypeShape(ShapeKind.ANY)
_DECIMAL = TypeShape(ShapeKind.DECIMAL)


def deserialize_item(item, cls):  # noqa: C901 pylint: disable=too-many-locals,too-many-statements
    # type: (dynamodb_types.ITEM, Any) -> Any
    """Deserialize a DynamoDB item into a value of the requested type.

    :param dict item: Item as returned by the low-level DynamoDB client
    :param cls: Requested type: attrs class, named tuple, tuple, mapping or enum type
    :returns: Deserialized value
    :raises MissingAggregateRootError: if ``cls`` cannot be read from the top level of an item
    :raises MissingFieldError: if a required value is absent
    :raises InvalidTypeError: if a stored value does not match the requested type
    """

    def _missing(cursor, shape):
        # type: (Cursor, TypeShape) -> MissingFieldError
        return MissingFieldError(
            'Missing {} at "{}"'.format(shape.kind.name.lower(), cursor.location), cursor.path
        )

    def _required(cursor, shape):
        # type: (Cursor, TypeShape) -> dynamodb_types.RAW_ATTRIBUTE
        """Read the attribute value at the cursor, failing if it is absent."""
        attribute = cursor.value()
        if attribute is None:
            raise _missing(cursor, shape)
        return attribute

    def _expect(cursor, attribute, tag):
        # type: (Cursor, dynamodb_types.RAW_ATTRIBUTE, Tag) -> Any
        """Unwrap an attribute value, failing if it is not of the expected type."""
        found = attribute_tag(attribute)
        if found is not tag:
            raise InvalidTypeError(
                'Expected "{}" at "{}" but found "{}"'.format(tag.dynamodb_tag, cursor.location, found.dynamodb_tag),
                cursor.path,
            )
        return attribute[tag.dynamodb_tag]

    def _transform_binary_value(value):
        # type: (dynamodb_types.BINARY) -> bytes
        if isinstance(value, Binary):
            return bytes(value.value)
        return bytes(value)

    def _deserialize_boolean(cursor, shape):
        # type: (Cursor, TypeShape) -> bool
        return bool(_expect(cursor, _required(cursor, shape), Tag.BOOLEAN))

    def _deserialize_number(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: Integer, float or decimal as requested by ``shape``
        """
        return parse_number(_expect(cursor, _required(cursor, shape), Tag.NUMBER), shape, cursor.path)

    def _deserialize_char(cursor, shape):
        # type: (Cursor, TypeShape) -> Char
        text = _expect(cursor, _required(cursor, shape), Tag.STRING)
        try:
            return Char(text)
        except ValueError:
            raise InvalidTypeError(
                'Expected single character at "{}" but found "{}"'.format(cursor.location, text), cursor.path
            )

    def _deserialize_string(cursor, shape):
        # type: (Cursor, TypeShape) -> Text
        """
        :returns: Stored text, or an empty string if nothing is stored
        """
        attribute = cursor.value()
        if attribute is None:
            return ""
        return _expect(cursor, attribute, Tag.STRING)

    def _deserialize_binary(cursor, shape):
        # type: (Cursor, TypeShape) -> dynamodb_types.BINARY
        """
        :returns: Stored bytes, or an empty byte string if nothing is stored
        """
        attribute = cursor.value()
        raw = b"" if attribute is None else _transform_binary_value(_expect(cursor, attribute, Tag.BINARY))
        return shape.target(raw)

    def _deserialize_null(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: None, or a new instance of a field-less attrs class
        """
        _expect(cursor, _required(cursor, shape), Tag.NULL)
        if shape.kind is ShapeKind.UNIT_STRUCT:
            return shape.target()
        return None

    def _deserialize_option(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        attribute = cursor.value()
        if attribute is None or attribute_tag(attribute) is Tag.NULL:
            return None
        return _deserialize(cursor, shape.members[0])

    def _deserialize_sequence(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: List, set or frozenset as requested by ``shape``
        """
        members = cursor.open_sequence()
        if members is None:
            raise _missing(cursor, shape)
        element = shape.members[0]
        return shape.target(_deserialize(members.member(index), element) for index in members.keys())

    def _deserialize_tuple(cursor, shape):
        # type: (Cursor, TypeShape) -> tuple
        members = cursor.open_map()
        if members is None:
            raise _missing(cursor, shape)

        if shape.variadic:
            values = []
            while positional_key(len(values)) in members.container:
                values.append(_deserialize(members.member(positional_key(len(values))), shape.members[0]))
            return tuple(values)

        if shape.target is tuple:
            return tuple(
                _deserialize(members.member(positional_key(index)), member)
                for index, member in enumerate(shape.members)
            )

        values = {}
        for index, (member, (name, _field_type, has_default)) in enumerate(
            zip(shape.members, named_tuple_fields(shape.target))
        ):
            position = members.member(positional_key(index))
            if position.value() is None and has_default:
                continue
            values[name] = _deserialize(position, member)
        return shape.target(**values)

    def _deserialize_map(cursor, shape):
        # type: (Cursor, TypeShape) -> dict
        members = cursor.open_map()
        if members is None:
            raise _missing(cursor, shape)

        key_shape, value_shape = shape.members
        return {
            deserialize_key(key, key_shape, members.path): _deserialize(members.member(key), value_shape)
            for key in members.keys()
        }

    def _field_shape(field):
        # type: (Any) -> TypeShape
        if field.field_type is None:
            return _ANY
        return type_shape(field.field_type)

    def _struct_values(members, cls):
        # type: (Cursor, type) -> dict
        """Collect constructor arguments for an attrs class from named members."""
        values = {}
        known = set()
        for field in struct_fields(cls):
            known.add(field.key)
            position = members.member(field.key)
            if position.value() is None and field.has_default:
                continue
            values[field.init_name] = _deserialize(position, _field_shape(field))

        for key in members.keys():
            if key not in known:
                _LOGGER.debug('Ignoring unknown key "%s" at "%s" for %s', key, members.location, cls.__name__)
        return values

    def _deserialize_struct(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        members = cursor.open_map()
        if members is None:
            raise _missing(cursor, shape)
        return shape.target(**_struct_values(members, shape.target))

    def _read_variant(cursor, shape):
        # type: (Cursor, TypeShape) -> Tuple[Text, Optional[dynamodb_types.MAP]]
        """Read the name and payload of the variant at the cursor."""
        if cursor.position is None:
            return read_enum_members(cursor.container, cursor.path)
        return read_enum(_required(cursor, shape), cursor.path)

    def _unknown_variant(cursor, name, cls):
        # type: (Cursor, Text, type) -> InvalidTypeError
        return InvalidTypeError(
            'Unknown variant "{}" of {} at "{}"'.format(name, cls.__name__, cursor.location), cursor.path
        )

    def _unexpected_payload(cursor, name):
        # type: (Cursor, Text) -> InvalidTypeError
        return InvalidTypeError(
            'Variant "{}" at "{}" does not take a payload'.format(name, cursor.location),
            cursor.path + (ReservedKeys.ENUM_VALUES.value,),
        )

    def _deserialize_enum(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: Member of the requested ``enum.Enum`` class
        """
        name, payload = _read_variant(cursor, shape)
        try:
            member = shape.target[name]
        except KeyError:
            raise _unknown_variant(cursor, name, shape.target)
        if payload is not None:
            raise _unexpected_payload(cursor, name)
        return member

    def _deserialize_variants(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: Instance of the variant class named in the item
        """
        union = enumeration_of(shape.target)
        name, payload = _read_variant(cursor, shape)

        info = enumeration_variants(union).get(name)
        if info is None or not issubclass(info.variant_class, shape.target):
            raise _unknown_variant(cursor, name, shape.target)

        kind = info.kind
        if kind is PayloadKind.UNIT:
            if payload is not None:
                raise _unexpected_payload(cursor, name)
            return info.variant_class()

        values_path = cursor.path + (ReservedKeys.ENUM_VALUES.value,)
        if payload is None:
            raise MissingFieldError(
                'Missing payload of variant "{}" at "{}"'.format(name, cursor.location), values_path
            )

        members = Cursor(container=payload, path=values_path)
        if kind is PayloadKind.NAMED:
            return info.variant_class(**_struct_values(members, info.variant_class))

        values = {}
        for index, field in enumerate(struct_fields(info.variant_class)):
            position = members.member(positional_key(index))
            if position.value() is None and field.has_default:
                continue
            values[field.init_name] = _deserialize(position, _field_shape(field))
        return info.variant_class(**values)

    def _deserialize_any(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        """
        :returns: Stored value as bytes, bool, list, dict, Decimal, None or str
        """
        if cursor.position is None:
            return {key: _deserialize_any(cursor.member(key), shape) for key in cursor.keys()}

        attribute = _required(cursor, shape)
        tag = attribute_tag(attribute)
        if tag is Tag.BINARY:
            return _transform_binary_value(attribute[tag.dynamodb_tag])
        if tag is Tag.BOOLEAN:
            return bool(attribute[tag.dynamodb_tag])
        if tag.is_sequence:
            members = cursor.open_sequence()
            return [_deserialize_any(members.member(index), shape) for index in members.keys()]
        if tag is Tag.MAP:
            return _deserialize_any(cursor.open_map(), shape)
        if tag is Tag.NUMBER:
            return parse_number(attribute[tag.dynamodb_tag], _DECIMAL, cursor.path)
        if tag is Tag.NULL:
            return None
        return attribute[tag.dynamodb_tag]

    def _deserialize_function(kind):
        # type: (ShapeKind) -> Callable[[Cursor, TypeShape], Any]
        """Locates the deserialization function for the requested shape."""
        deserialize_functions = {
            ShapeKind.ANY: _deserialize_any,
            ShapeKind.UNIT: _deserialize_null,
            ShapeKind.UNIT_STRUCT: _deserialize_null,
            ShapeKind.BOOLEAN: _deserialize_boolean,
            ShapeKind.INTEGER: _deserialize_number,
            ShapeKind.FLOAT: _deserialize_number,
            ShapeKind.DECIMAL: _deserialize_number,
            ShapeKind.CHAR: _deserialize_char,
            ShapeKind.STRING: _deserialize_string,
            ShapeKind.BYTES: _deserialize_binary,
            ShapeKind.OPTION: _deserialize_option,
            ShapeKind.SEQUENCE: _deserialize_sequence,
            ShapeKind.TUPLE: _deserialize_tuple,
            ShapeKind.MAP: _deserialize_map,
            ShapeKind.STRUCT: _deserialize_struct,
            ShapeKind.ENUM: _deserialize_enum,
            ShapeKind.VARIANTS: _deserialize_variants,
        }
        return deserialize_functions[kind]

    def _deserialize(cursor, shape):
        # type: (Cursor, TypeShape) -> Any
        return _deserialize_function(shape.kind)(cursor, shape)

    if not isinstance(item, dict):
        raise TypeError('Invalid item type "{}": must be dict'.format(type(item)))

    root_shape = type_shape(cls)
    if root_shape.kind not in ROOT_SHAPE_KINDS:
        raise MissingAggregateRootError(
            "Top level type must be a struct, tuple, mapping or enum, not {}".format(root_shape.kind.name.lower())
        )
    return _deserialize(Cursor.root(item), root_shape)
