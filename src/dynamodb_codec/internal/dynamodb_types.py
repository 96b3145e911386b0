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
"""Types used with mypy for DynamoDB items and attributes.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
# constant naming for types so pylint: disable=invalid-name
from typing import Any, Dict, List, Text, Union

from boto3.dynamodb.types import Binary

ATTRIBUTE = Dict[Text, Any]  # exactly one member
RAW_ATTRIBUTE = ATTRIBUTE
ITEM = Dict[Text, ATTRIBUTE]
NULL = bool  # always True
BOOLEAN = bool
NUMBER = Text  # base-10 text, as sent on the wire
STRING = Text
BINARY = Union[bytes, bytearray, Binary]
SET = List
MAP = ITEM
LIST = List[ATTRIBUTE]
PATH = tuple
