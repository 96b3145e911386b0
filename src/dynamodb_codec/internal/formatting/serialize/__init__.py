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
"""Helper functions for serializing values.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import decimal
import math
from typing import Text, Union  # noqa pylint: disable=unused-import

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from dynamodb_codec.exceptions import SerializationError, UnsupportedShapeError

__all__ = ("format_number",)


def format_number(value, path=()):
    # type: (Union[int, float, decimal.Decimal], tuple) -> Text
    """Render a number as the base-10 text stored in number attributes.

    Integers are written exactly. Floats start from the shortest text that reads back as
    the same float, and both floats and decimals are checked against the DynamoDB number
    precision and range.

    :param value: Number to render
    :param tuple path: Path to ``value``, used in error messages
    :rtype: str
    :raises UnsupportedShapeError: if ``value`` is NaN or infinite
    :raises SerializationError: if a float or decimal cannot be stored without rounding
    """
    if isinstance(value, int):
        return str(int(value))

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedShapeError("{!r} cannot be stored as a number".format(value), path)
        text = repr(value)
    else:
        if not value.is_finite():
            raise UnsupportedShapeError("{} cannot be stored as a number".format(value), path)
        text = value

    try:
        return str(DYNAMODB_CONTEXT.create_decimal(text))
    except decimal.DecimalException as error:
        raise SerializationError("{} cannot be stored as a number: {!r}".format(value, error), path)
