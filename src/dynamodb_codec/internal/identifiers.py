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
"""Unique identifiers for internal use only.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
from enum import Enum
from typing import Optional, Text  # noqa pylint: disable=unused-import

__all__ = ("ReservedKeys", "Tag", "ValueKind", "ShapeKind", "AGGREGATE_KINDS", "positional_key")


class ReservedKeys(Enum):
    """Item keys reserved for the enum tag protocol."""

    ENUM_TAG = "___enum_tag"
    ENUM_VALUES = "___enum_values"


class Tag(Enum):
    """Attribute value type identifiers.

    Members are declared in the order used when sniffing the type of an attribute value
    whose shape is not known in advance.
    """

    BINARY = ("B",)
    BOOLEAN = ("BOOL",)
    LIST = ("L",)
    NUMBER_SET = ("NS", "N")
    STRING_SET = ("SS", "S")
    BINARY_SET = ("BS", "B")
    MAP = ("M",)
    NUMBER = ("N",)
    NULL = ("NULL",)
    STRING = ("S",)

    def __init__(self, dynamodb_tag, element_tag=None):
        # type: (Text, Optional[Text]) -> None
        """Sets up new Tag object.

        :param str dynamodb_tag: DynamoDB tag
        :param str element_tag: DynamoDB tag of the members of attributes of this type
        """
        self.dynamodb_tag = dynamodb_tag
        self.element_tag = element_tag

    @property
    def is_sequence(self):
        # type: () -> bool
        """Determine whether attributes of this type can be read as a sequence."""
        return self is Tag.LIST or self.element_tag is not None


class ValueKind(Enum):
    """Shapes of typed values, as seen by the encoder."""

    UNIT = 0
    BOOLEAN = 1
    NUMBER = 2
    STRING = 3
    BYTES = 4
    SEQUENCE = 5
    TUPLE = 6
    MAP = 7
    STRUCT = 8
    UNIT_STRUCT = 9
    ENUM = 10


class ShapeKind(Enum):
    """Shapes of requested types, as seen by the decoder."""

    ANY = 0
    UNIT = 1
    BOOLEAN = 2
    INTEGER = 3
    FLOAT = 4
    DECIMAL = 5
    CHAR = 6
    STRING = 7
    BYTES = 8
    OPTION = 9
    SEQUENCE = 10
    TUPLE = 11
    MAP = 12
    STRUCT = 13
    UNIT_STRUCT = 14
    ENUM = 15
    VARIANTS = 16


#: Value kinds that may be written as the top level of an item.
AGGREGATE_KINDS = frozenset((ValueKind.TUPLE, ValueKind.MAP, ValueKind.STRUCT, ValueKind.ENUM))


def positional_key(index):
    # type: (int) -> Text
    """Build the synthetic key used to store a tuple member.

    :param int index: Position of the member
    :rtype: str
    """
    return "_{:d}".format(index)
