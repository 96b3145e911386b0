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
"""Helpers for building and reading low-level DynamoDB attribute values.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
from typing import List  # noqa pylint: disable=unused-import

from dynamodb_codec.exceptions import MalformedAttributeValueError
from dynamodb_codec.internal import dynamodb_types  # noqa pylint: disable=unused-import
from dynamodb_codec.internal.identifiers import Tag

__all__ = (
    "NULL_ATTRIBUTE",
    "string_attribute",
    "number_attribute",
    "binary_attribute",
    "boolean_attribute",
    "null_attribute",
    "list_attribute",
    "map_attribute",
    "set_attribute",
    "attribute_tag",
    "sequence_members",
)

#: Value written for unit values and absent options.
NULL_ATTRIBUTE = {Tag.NULL.dynamodb_tag: True}


def string_attribute(value):
    # type: (dynamodb_types.STRING) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap text as a string attribute."""
    return {Tag.STRING.dynamodb_tag: value}


def number_attribute(value):
    # type: (dynamodb_types.NUMBER) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap decimal text as a number attribute."""
    return {Tag.NUMBER.dynamodb_tag: value}


def binary_attribute(value):
    # type: (dynamodb_types.BINARY) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap a byte string as a binary attribute."""
    return {Tag.BINARY.dynamodb_tag: value}


def boolean_attribute(value):
    # type: (dynamodb_types.BOOLEAN) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap a boolean as a boolean attribute."""
    return {Tag.BOOLEAN.dynamodb_tag: value}


def null_attribute():
    # type: () -> dynamodb_types.RAW_ATTRIBUTE
    """Build a new null attribute."""
    return dict(NULL_ATTRIBUTE)


def list_attribute(members):
    # type: (dynamodb_types.LIST) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap attribute values as a list attribute."""
    return {Tag.LIST.dynamodb_tag: members}


def map_attribute(members):
    # type: (dynamodb_types.MAP) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap keyed attribute values as a map attribute."""
    return {Tag.MAP.dynamodb_tag: members}


def set_attribute(tag, members):
    # type: (Tag, dynamodb_types.SET) -> dynamodb_types.RAW_ATTRIBUTE
    """Wrap raw scalar members as a string, number or binary set attribute.

    :param Tag tag: Set tag
    :param list members: Raw members, already sorted
    """
    return {tag.dynamodb_tag: members}


def attribute_tag(attribute):
    # type: (dynamodb_types.RAW_ATTRIBUTE) -> Tag
    """Identify which member of an attribute value is populated.

    Members are checked in a fixed priority order: binary, boolean, list and sets,
    map, number, null, string.

    :param dict attribute: Attribute value
    :rtype: Tag
    :raises MalformedAttributeValueError: if no known member is populated
    """
    if isinstance(attribute, dict):
        for tag in Tag:
            if attribute.get(tag.dynamodb_tag) is not None:
                return tag
    raise MalformedAttributeValueError("Attribute value has no populated member: {!r}".format(attribute))


def sequence_members(attribute, tag=None):
    # type: (dynamodb_types.RAW_ATTRIBUTE, Tag) -> List[dynamodb_types.RAW_ATTRIBUTE]
    """Read a list or set attribute as a list of attribute values.

    Set members are rewrapped with the tag of their scalar type.

    :param dict attribute: List or set attribute value
    :param Tag tag: Tag of ``attribute``, if already known
    :rtype: list
    """
    if tag is None:
        tag = attribute_tag(attribute)
    if tag is Tag.LIST:
        return list(attribute[tag.dynamodb_tag])
    return [{tag.element_tag: member} for member in attribute[tag.dynamodb_tag]]
