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
"""Tooling for serializing mapping keys.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
from typing import Any, Text  # noqa pylint: disable=unused-import

from dynamodb_codec.exceptions import UnsupportedKeyTypeError, UnsupportedShapeError
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting import format_path
from dynamodb_codec.internal.formatting.serialize import format_number
from dynamodb_codec.internal.identifiers import ValueKind
from dynamodb_codec.internal.shapes import value_kind

__all__ = ("serialize_key",)


def serialize_key(key, path=()):
    # type: (Any, dynamodb_types.PATH) -> Text
    """Render a mapping key as the string used for its map member.

    :param key: Scalar mapping key
    :param tuple path: Path to the mapping, used in error messages
    :rtype: str
    :raises UnsupportedShapeError: if ``key`` is a byte string or None
    :raises UnsupportedKeyTypeError: if ``key`` is a composite value
    """
    kind = value_kind(key)

    if kind is ValueKind.STRING:
        return str(key)

    if kind is ValueKind.BOOLEAN:
        return "true" if key else "false"

    if kind is ValueKind.NUMBER:
        return format_number(key, path)

    if kind in (ValueKind.UNIT, ValueKind.BYTES):
        raise UnsupportedShapeError(
            'Mapping keys at "{}" cannot be {}'.format(format_path(path), type(key).__name__), path
        )

    raise UnsupportedKeyTypeError(
        'Mapping keys at "{}" must be scalars, not {}'.format(format_path(path), type(key).__name__), path
    )
