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
"""Classification of typed values and requested types into the closed set of shapes
the codec understands.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import collections.abc
import typing
from decimal import Decimal
from enum import Enum
from types import UnionType
from typing import Any, List, Optional, Text, Tuple  # noqa pylint: disable=unused-import

import attr
from boto3.dynamodb.types import Binary

from dynamodb_codec.exceptions import UnsupportedShapeError
from dynamodb_codec.identifiers import ATTRIBUTE_NAME
from dynamodb_codec.internal.identifiers import ReservedKeys, ShapeKind, ValueKind
from dynamodb_codec.scalars import Char, Integer
from dynamodb_codec.structures import enumeration_variants, variant_info

__all__ = (
    "TypeShape",
    "StructField",
    "value_kind",
    "type_shape",
    "struct_fields",
    "named_tuple_fields",
    "enumeration_of",
)

_RESERVED_KEYS = frozenset(key.value for key in ReservedKeys)
_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_BINARY_TYPES = (bytes, bytearray, Binary)


@attr.s(frozen=True)
class TypeShape:
    """Shape of a requested type.

    :param ShapeKind kind: Shape of the type
    :param target: Type to build, where the shape needs one
    :param tuple members: Shapes of contained values
        (option and sequence: element; mapping: key and value; tuple: each position)
    :param bool variadic: Tuple of any length, every member having ``members[0]`` shape
    """

    kind = attr.ib(validator=attr.validators.instance_of(ShapeKind))
    target = attr.ib(default=None)
    members = attr.ib(default=(), converter=tuple)
    variadic = attr.ib(default=False)


_ANY = TypeShape(ShapeKind.ANY)


@attr.s(frozen=True)
class StructField:
    """A field read from or written to an item.

    :param str name: Python attribute name
    :param str key: Item key for this field
    :param str init_name: Keyword used to pass this field to the class constructor
    :param field_type: Declared type of the field
    :param bool has_default: The class provides a default for this field
    """

    name = attr.ib()
    key = attr.ib()
    init_name = attr.ib()
    field_type = attr.ib()
    has_default = attr.ib(default=False)


def value_kind(value):  # noqa: C901 pylint: disable=too-many-return-statements
    # type: (Any) -> ValueKind
    """Identify the shape of a typed value.

    :param value: Value to classify
    :rtype: ValueKind
    :raises UnsupportedShapeError: if the value has no item representation
    """
    if value is None:
        return ValueKind.UNIT
    if isinstance(value, Enum) or variant_info(type(value)) is not None:
        return ValueKind.ENUM
    if enumeration_of(type(value)) is not None:
        raise UnsupportedShapeError(
            '"{}" derives from an enumeration but is not a registered variant'.format(type(value).__name__)
        )
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, _BINARY_TYPES):
        return ValueKind.BYTES
    if isinstance(value, tuple):
        return ValueKind.TUPLE
    if isinstance(value, (collections.abc.Sequence, collections.abc.Set)):
        return ValueKind.SEQUENCE
    if isinstance(value, collections.abc.Mapping):
        return ValueKind.MAP
    if attr.has(type(value)):
        if any(field.init for field in attr.fields(type(value))):
            return ValueKind.STRUCT
        return ValueKind.UNIT_STRUCT
    raise UnsupportedShapeError('Unsupported value type: "{}"'.format(type(value).__name__))


def enumeration_of(cls):
    # type: (type) -> Optional[type]
    """Locate the tagged union base that ``cls`` is or derives from, if any."""
    for base in cls.__mro__:
        if enumeration_variants(base) is not None:
            return base
    return None


def _generic_shape(requested, origin, args):
    if origin in _SEQUENCE_ORIGINS:
        element = type_shape(args[0]) if args else _ANY
        return TypeShape(ShapeKind.SEQUENCE, target=_SEQUENCE_ORIGINS[origin], members=(element,))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeShape(ShapeKind.TUPLE, target=tuple, members=(type_shape(args[0]),), variadic=True)
        if not args:
            return TypeShape(ShapeKind.TUPLE, target=tuple, members=(_ANY,), variadic=True)
        return TypeShape(ShapeKind.TUPLE, target=tuple, members=[type_shape(arg) for arg in args])

    if origin in _MAPPING_ORIGINS:
        if args:
            members = (type_shape(args[0]), type_shape(args[1]))
        else:
            members = (_ANY, _ANY)
        return TypeShape(ShapeKind.MAP, target=dict, members=members)

    raise UnsupportedShapeError('Unsupported type: "{}"'.format(requested))


def _class_shape(requested):  # noqa: C901 pylint: disable=too-many-return-statements
    if issubclass(requested, bool):
        return TypeShape(ShapeKind.BOOLEAN, target=bool)
    if issubclass(requested, Enum):
        return TypeShape(ShapeKind.ENUM, target=requested)
    if issubclass(requested, Integer):
        return TypeShape(ShapeKind.INTEGER, target=requested)
    if issubclass(requested, int):
        return TypeShape(ShapeKind.INTEGER, target=int)
    if issubclass(requested, float):
        return TypeShape(ShapeKind.FLOAT, target=float)
    if issubclass(requested, Decimal):
        return TypeShape(ShapeKind.DECIMAL, target=Decimal)
    if issubclass(requested, Char):
        return TypeShape(ShapeKind.CHAR, target=Char)
    if issubclass(requested, str):
        return TypeShape(ShapeKind.STRING, target=str)
    if issubclass(requested, _BINARY_TYPES):
        return TypeShape(ShapeKind.BYTES, target=requested)
    if issubclass(requested, tuple):
        if hasattr(requested, "_fields"):
            members = [type_shape(field_type) for _name, field_type, _default in named_tuple_fields(requested)]
            return TypeShape(ShapeKind.TUPLE, target=requested, members=members)
        return TypeShape(ShapeKind.TUPLE, target=tuple, members=(_ANY,), variadic=True)
    if requested in _SEQUENCE_ORIGINS:
        return TypeShape(ShapeKind.SEQUENCE, target=_SEQUENCE_ORIGINS[requested], members=(_ANY,))
    if requested in _MAPPING_ORIGINS:
        return TypeShape(ShapeKind.MAP, target=dict, members=(_ANY, _ANY))

    if enumeration_of(requested) is not None:
        return TypeShape(ShapeKind.VARIANTS, target=requested)

    if attr.has(requested):
        if any(field.init for field in attr.fields(requested)):
            return TypeShape(ShapeKind.STRUCT, target=requested)
        return TypeShape(ShapeKind.UNIT_STRUCT, target=requested)

    raise UnsupportedShapeError('Unsupported type: "{}"'.format(requested.__name__))


def type_shape(requested):  # pylint: disable=too-many-return-statements
    # type: (Any) -> TypeShape
    """Identify the shape of a requested type.

    :param requested: Class or ``typing`` construct
    :rtype: TypeShape
    :raises UnsupportedShapeError: if the type has no item representation
    """
    if requested is None or requested is _NONE_TYPE:
        return TypeShape(ShapeKind.UNIT)
    if requested is Any or requested is object:
        return _ANY

    supertype = getattr(requested, "__supertype__", None)
    if supertype is not None:
        # NewType is transparent
        return type_shape(supertype)

    origin = typing.get_origin(requested)
    args = typing.get_args(requested)
    if origin is typing.Annotated:
        return type_shape(args[0])
    if origin is typing.Union or origin is UnionType:
        present = [arg for arg in args if arg is not _NONE_TYPE]
        if len(present) == 1 and len(args) == 2:
            return TypeShape(ShapeKind.OPTION, members=(type_shape(present[0]),))
        raise UnsupportedShapeError('Only Optional unions are supported, not "{}"'.format(requested))
    if origin is not None:
        return _generic_shape(requested, origin, args)

    if isinstance(requested, type):
        return _class_shape(requested)

    raise UnsupportedShapeError('Unsupported type: "{}"'.format(requested))


def _field_key(field):
    return field.metadata.get(ATTRIBUTE_NAME, field.name)


def struct_fields(cls):
    # type: (type) -> List[StructField]
    """Collect the fields of an attrs class that are written to and read from items.

    :param type cls: attrs class
    :rtype: list of StructField
    :raises UnsupportedShapeError: if a field uses a reserved key or its type cannot be resolved
    """
    fields = [field for field in attr.fields(cls) if field.init]
    if any(isinstance(field.type, str) for field in fields):
        try:
            attr.resolve_types(cls)
        except NameError as error:
            raise UnsupportedShapeError('Cannot resolve field types of "{}": {}'.format(cls.__name__, error))
        fields = [field for field in attr.fields(cls) if field.init]

    struct = []
    for field in fields:
        key = _field_key(field)
        if key in _RESERVED_KEYS:
            raise UnsupportedShapeError(
                'Field "{}" of "{}" uses the reserved key "{}"'.format(field.name, cls.__name__, key)
            )
        struct.append(
            StructField(
                name=field.name,
                key=key,
                init_name=getattr(field, "alias", None) or field.name.lstrip("_"),
                field_type=field.type,
                has_default=field.default is not attr.NOTHING,
            )
        )
    return struct


def named_tuple_fields(cls):
    # type: (type) -> List[Tuple[Text, Any, bool]]
    """Collect name, type and default presence for each position of a named tuple class."""
    hints = typing.get_type_hints(cls) if getattr(cls, "__annotations__", None) else {}
    defaults = getattr(cls, "_field_defaults", {})
    return [(name, hints.get(name, Any), name in defaults) for name in cls._fields]
