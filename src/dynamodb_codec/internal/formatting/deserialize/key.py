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
"""Tooling for deserializing mapping keys.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
from typing import Any, Text  # noqa pylint: disable=unused-import

from dynamodb_codec.exceptions import InvalidTypeError, UnsupportedKeyTypeError, UnsupportedShapeError
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting import format_path
from dynamodb_codec.internal.formatting.deserialize import parse_number
from dynamodb_codec.internal.identifiers import ShapeKind
from dynamodb_codec.internal.shapes import TypeShape  # noqa pylint: disable=unused-import
from dynamodb_codec.scalars import Char

__all__ = ("deserialize_key",)
_BOOLEANS = {"true": True, "false": False}
_NUMBER_KINDS = (ShapeKind.INTEGER, ShapeKind.FLOAT, ShapeKind.DECIMAL)
_UNSUPPORTED_KINDS = (ShapeKind.UNIT, ShapeKind.BYTES, ShapeKind.OPTION)


def deserialize_key(key, shape, path=()):
    # type: (Text, TypeShape, dynamodb_types.PATH) -> Any
    """Parse the key of a map member into the requested key type.

    :param str key: Stored key
    :param TypeShape shape: Shape of the requested key type
    :param tuple path: Path to the map, used in error messages
    :raises InvalidTypeError: if the key cannot be parsed into the requested type
    :raises UnsupportedShapeError: if keys of the requested type cannot be stored
    :raises UnsupportedKeyTypeError: if the requested key type is a composite type
    """
    if shape.kind in (ShapeKind.ANY, ShapeKind.STRING):
        return key

    if shape.kind is ShapeKind.CHAR:
        try:
            return Char(key)
        except ValueError:
            raise InvalidTypeError(
                'Expected single character key at "{}" but found "{}"'.format(format_path(path), key), path + (key,)
            )

    if shape.kind is ShapeKind.BOOLEAN:
        try:
            return _BOOLEANS[key]
        except KeyError:
            raise InvalidTypeError(
                'Expected boolean key at "{}" but found "{}"'.format(format_path(path), key), path + (key,)
            )

    if shape.kind in _NUMBER_KINDS:
        return parse_number(key, shape, path + (key,))

    if shape.kind in _UNSUPPORTED_KINDS:
        raise UnsupportedShapeError(
            'Mapping keys at "{}" cannot be read as {}'.format(format_path(path), shape.kind.name.lower()), path
        )

    raise UnsupportedKeyTypeError(
        'Mapping keys at "{}" must be scalars, not {}'.format(format_path(path), shape.kind.name.lower()), path
    )
