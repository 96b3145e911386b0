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
"""Reading and writing the enum tag protocol.

A variant is described by the reserved ``___enum_tag`` key, holding the variant name as a
string, and, when the variant carries a payload, the reserved ``___enum_values`` key holding
a map of the payload members. At the top level of an item both keys are members of the item
itself; anywhere else they are wrapped in a map.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import logging
from typing import Optional, Text, Tuple  # noqa pylint: disable=unused-import

from dynamodb_codec.exceptions import InvalidTypeError, MissingFieldError
from dynamodb_codec.identifiers import LOGGER_NAME
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.formatting import format_path
from dynamodb_codec.internal.formatting.attribute_value import attribute_tag, map_attribute, string_attribute
from dynamodb_codec.internal.identifiers import ReservedKeys, Tag

__all__ = ("enum_members", "read_enum_members", "read_enum")
_LOGGER = logging.getLogger(LOGGER_NAME)


def enum_members(name, payload=None):
    # type: (Text, Optional[dynamodb_types.MAP]) -> dynamodb_types.MAP
    """Build the members describing a variant.

    :param str name: Variant name
    :param dict payload: Encoded payload members, or None if the variant carries no payload
    :returns: Members to place at the top level of an item or inside a map attribute
    :rtype: dict
    """
    members = {ReservedKeys.ENUM_TAG.value: string_attribute(name)}
    if payload is not None:
        members[ReservedKeys.ENUM_VALUES.value] = map_attribute(payload)
    return members


def read_enum_members(members, path=()):
    # type: (dynamodb_types.MAP, dynamodb_types.PATH) -> Tuple[Text, Optional[dynamodb_types.MAP]]
    """Split the members describing a variant into its name and payload.

    :param dict members: Members of the item or map holding the reserved keys
    :param tuple path: Path to ``members``
    :returns: Variant name and payload members (None if no payload is stored)
    :rtype: tuple
    :raises MissingFieldError: if no enum tag is stored
    :raises InvalidTypeError: if the reserved keys do not hold a string and a map
    """
    tag_key = ReservedKeys.ENUM_TAG.value
    values_key = ReservedKeys.ENUM_VALUES.value

    name_attribute = members.get(tag_key)
    if name_attribute is None:
        raise MissingFieldError('Missing enum tag at "{}"'.format(format_path(path)), path + (tag_key,))
    if attribute_tag(name_attribute) is not Tag.STRING:
        raise InvalidTypeError(
            'Expected enum tag at "{}" to be a string'.format(format_path(path + (tag_key,))), path + (tag_key,)
        )

    values_attribute = members.get(values_key)
    if values_attribute is None:
        return name_attribute[Tag.STRING.dynamodb_tag], None
    if attribute_tag(values_attribute) is not Tag.MAP:
        raise InvalidTypeError(
            'Expected enum values at "{}" to be a map'.format(format_path(path + (values_key,))), path + (values_key,)
        )
    return name_attribute[Tag.STRING.dynamodb_tag], values_attribute[Tag.MAP.dynamodb_tag]


def read_enum(attribute, path=()):
    # type: (dynamodb_types.RAW_ATTRIBUTE, dynamodb_types.PATH) -> Tuple[Text, Optional[dynamodb_types.MAP]]
    """Split a nested variant attribute into its name and payload.

    A bare string is accepted as the name of a variant without payload.

    :param dict attribute: Attribute value at the enum position
    :param tuple path: Path to ``attribute``
    :returns: Variant name and payload members (None if no payload is stored)
    :rtype: tuple
    :raises InvalidTypeError: if the attribute is neither a string nor a map
    """
    tag = attribute_tag(attribute)
    if tag is Tag.STRING:
        _LOGGER.debug('Reading short form enum at "%s"', format_path(path))
        return attribute[Tag.STRING.dynamodb_tag], None
    if tag is Tag.MAP:
        return read_enum_members(attribute[Tag.MAP.dynamodb_tag], path)
    raise InvalidTypeError(
        'Expected enum at "{}" but found "{}"'.format(format_path(path), tag.dynamodb_tag), path
    )
