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
"""Scalar types with a fixed representation range.

Python integers are unbounded, so these types are used as field types when a stored
number must fit a specific width. Decoding into one of them fails if the stored value
is out of range instead of silently accepting it.

>>> import attr
>>> from dynamodb_codec.scalars import UInt8
>>> @attr.s
... class Pixel:
...     red = attr.ib(type=UInt8)
"""

__all__ = (
    "Integer",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Char",
)


class Integer(int):
    """Base for fixed width integers.

    :raises ValueError: if the value does not fit the width
    """

    minimum = None
    maximum = None

    def __new__(cls, *args, **kwargs):
        value = super().__new__(cls, *args, **kwargs)
        if not cls.in_range(value):
            raise ValueError("{} out of range for {}".format(int(value), cls.__name__))
        return value

    @classmethod
    def in_range(cls, value):
        # type: (int) -> bool
        """Determine whether ``value`` fits this width."""
        if cls.minimum is not None and value < cls.minimum:
            return False
        if cls.maximum is not None and value > cls.maximum:
            return False
        return True


class Int8(Integer):
    minimum = -(2 ** 7)
    maximum = 2 ** 7 - 1


class Int16(Integer):
    minimum = -(2 ** 15)
    maximum = 2 ** 15 - 1


class Int32(Integer):
    minimum = -(2 ** 31)
    maximum = 2 ** 31 - 1


class Int64(Integer):
    minimum = -(2 ** 63)
    maximum = 2 ** 63 - 1


class UInt8(Integer):
    minimum = 0
    maximum = 2 ** 8 - 1


class UInt16(Integer):
    minimum = 0
    maximum = 2 ** 16 - 1


class UInt32(Integer):
    minimum = 0
    maximum = 2 ** 32 - 1


class UInt64(Integer):
    minimum = 0
    maximum = 2 ** 64 - 1


class Char(str):
    """A single character.

    :raises ValueError: if the value is not exactly one character long
    """

    def __new__(cls, *args, **kwargs):
        value = super().__new__(cls, *args, **kwargs)
        if len(value) != 1:
            raise ValueError("Char must be exactly one character, not {!r}".format(str(value)))
        return value
