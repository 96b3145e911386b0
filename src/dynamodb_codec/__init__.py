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
"""Typed value codec for DynamoDB items."""
from dynamodb_codec.identifiers import __version__
from dynamodb_codec.query import build_query_input
from dynamodb_codec.structures import CodecConfig, enumeration, variant
from dynamodb_codec.transform import decode, encode

__all__ = ("encode", "decode", "build_query_input", "CodecConfig", "enumeration", "variant", "__version__")
