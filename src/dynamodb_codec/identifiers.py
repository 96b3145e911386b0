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
"""Unique identifiers used by the DynamoDB item codec."""
from enum import Enum

__all__ = ("LOGGER_NAME", "ATTRIBUTE_NAME", "PayloadKind")

__version__ = "1.0.0"

LOGGER_NAME = "dynamodb_codec"

#: attrs field metadata key used to store a field under a different attribute name.
ATTRIBUTE_NAME = "dynamodb_codec.attribute_name"


class PayloadKind(Enum):
    """Shapes of payload a tagged-union variant can carry."""

    UNIT = 0
    SINGLE = 1
    POSITIONAL = 2
    NAMED = 3

    @property
    def has_values(self):
        # type: () -> bool
        """Determine whether variants of this kind write an enum values map."""
        return self is not PayloadKind.UNIT
