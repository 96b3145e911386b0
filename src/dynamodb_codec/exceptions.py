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


class DynamodbCodecError(Exception):
    """Base class for all custom exceptions.

    :param str message: Error message
    :param tuple path: Keys and indexes leading to the offending value
    """

    def __init__(self, message, path=()):
        super().__init__(message)
        self.path = tuple(path)


class InvalidArgumentError(DynamodbCodecError):
    """"""


class SerializationError(DynamodbCodecError):
    """Otherwise undifferentiated errors encountered while serializing data."""


class DeserializationError(DynamodbCodecError):
    """Otherwise undifferentiated errors encountered while deserializing data."""


class MissingFieldError(DeserializationError):
    """Raised when a required position is absent from the item."""


class InvalidTypeError(DeserializationError):
    """Raised when the stored attribute value does not match the requested type."""


class MissingAggregateRootError(DynamodbCodecError):
    """Raised when the top level value is not a struct, tuple, mapping or enum."""


class UnsupportedKeyTypeError(DynamodbCodecError):
    """Raised when a composite value is used as a mapping key."""


class UnsupportedShapeError(DynamodbCodecError):
    """Raised when a value or type has no representation in DynamoDB items."""


class MalformedAttributeValueError(DynamodbCodecError):
    """Raised when an attribute value has none of the known members populated."""
