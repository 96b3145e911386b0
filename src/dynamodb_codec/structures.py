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
"""Common structures used by the DynamoDB item codec."""
from typing import Dict, Optional, Text, Type  # noqa pylint: disable=unused-import

import attr

from dynamodb_codec.exceptions import InvalidArgumentError
from dynamodb_codec.identifiers import PayloadKind
from dynamodb_codec.internal.validators import attrs_class_validator

__all__ = ("CodecConfig", "VariantInfo", "enumeration", "variant", "enumeration_variants", "variant_info")

_VARIANTS = "__dynamodb_variants__"
_VARIANT = "__dynamodb_variant__"


@attr.s(init=False)
class CodecConfig:
    # pylint: disable=too-few-public-methods
    """Configuration for encoding typed values.

    :param bool native_sets: Write sets of strings, numbers or binary values as the
        DynamoDB ``SS``, ``NS`` and ``BS`` types instead of as lists
    """

    native_sets = attr.ib(validator=attr.validators.instance_of(bool), default=False)

    def __init__(self, native_sets=False):  # noqa=D107
        # type: (bool) -> None
        # Workaround pending resolution of attrs/mypy interaction.
        # https://github.com/python/mypy/issues/2088
        # https://github.com/python-attrs/attrs/issues/215
        self.native_sets = native_sets
        attr.validate(self)


@attr.s(frozen=True)
class VariantInfo:
    """Description of one variant of a tagged union.

    :param str name: Variant name written under the enum tag key
    :param type variant_class: attrs class holding the variant payload
    :param bool positional: Store the payload under positional keys rather than field names
    """

    name = attr.ib(validator=attr.validators.instance_of(str))
    variant_class = attr.ib(validator=attrs_class_validator)
    positional = attr.ib(validator=attr.validators.instance_of(bool), default=False)

    @property
    def kind(self):
        # type: () -> PayloadKind
        """Payload kind, derived from the fields of the variant class."""
        field_count = len([field for field in attr.fields(self.variant_class) if field.init])
        if field_count == 0:
            return PayloadKind.UNIT
        if not self.positional:
            return PayloadKind.NAMED
        if field_count == 1:
            return PayloadKind.SINGLE
        return PayloadKind.POSITIONAL


def enumeration(cls):
    """Class decorator marking ``cls`` as the base of a tagged union.

    Subclasses registered with :func:`variant` become the variants of the union, and
    ``cls`` itself can then be requested when decoding.

    >>> import attr
    >>> from dynamodb_codec.structures import enumeration, variant
    >>> @enumeration
    ... class Shape:
    ...     pass
    >>> @variant()
    ... @attr.s
    ... class Circle(Shape):
    ...     radius = attr.ib(type=float)
    >>> @variant(positional=True)
    ... @attr.s
    ... class Point(Shape):
    ...     x = attr.ib(type=int)
    ...     y = attr.ib(type=int)

    :param type cls: Tagged union base class
    :returns: ``cls``
    """
    if not isinstance(cls, type):
        raise InvalidArgumentError("enumeration can only decorate classes")
    setattr(cls, _VARIANTS, {})
    return cls


def _enumeration_root(cls):
    # type: (Type) -> Optional[Type]
    for base in cls.__mro__[1:]:
        if _VARIANTS in vars(base):
            return base
    return None


def variant(name=None, positional=False):
    # type: (Optional[Text], bool) -> callable
    """Class decorator registering an attrs class as a variant of its tagged union base.

    :param str name: Variant name to store (default: the class name)
    :param bool positional: Store fields under ``_0``, ``_1``, ... instead of their names
    :raises InvalidArgumentError: if the class is not an attrs class, does not derive from
        a class decorated with :func:`enumeration`, or reuses a variant name
    """

    def _register(cls):
        if not attr.has(cls):
            raise InvalidArgumentError('Variant "{}" must be an attrs class'.format(cls.__name__))

        root = _enumeration_root(cls)
        if root is None:
            raise InvalidArgumentError('Variant "{}" does not derive from an enumeration'.format(cls.__name__))

        info = VariantInfo(name=name or cls.__name__, variant_class=cls, positional=positional)
        variants = vars(root)[_VARIANTS]
        if info.name in variants:
            raise InvalidArgumentError(
                'Variant name "{}" is already registered on "{}"'.format(info.name, root.__name__)
            )

        variants[info.name] = info
        setattr(cls, _VARIANT, info)
        return cls

    return _register


def enumeration_variants(cls):
    # type: (Type) -> Optional[Dict[Text, VariantInfo]]
    """Collect the variants registered on a tagged union base.

    :param type cls: Candidate tagged union base
    :returns: Variants by name, or None if ``cls`` is not decorated with :func:`enumeration`
    :rtype: dict
    """
    if not isinstance(cls, type):
        return None
    return vars(cls).get(_VARIANTS)


def variant_info(cls):
    # type: (Type) -> Optional[VariantInfo]
    """Locate the registration of a variant class, if any.

    Registrations are not inherited: a subclass of a variant is not a variant unless it
    is registered itself.
    """
    if not isinstance(cls, type):
        return None
    return vars(cls).get(_VARIANT)
