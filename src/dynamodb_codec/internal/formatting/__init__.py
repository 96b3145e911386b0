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
"""Components for converting between typed values and DynamoDB items.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
from typing import Iterable, Text, Union  # noqa pylint: disable=unused-import

__all__ = ("format_path",)


def format_path(path):
    # type: (Iterable[Union[Text, int]]) -> Text
    """Render a key path for error messages.

    >>> format_path(("Meta", "k", 2))
    'Meta.k[2]'

    :param path: Keys and list indexes leading to a value
    :rtype: str
    """
    rendered = ""
    for position in path:
        if isinstance(position, int):
            rendered += "[{:d}]".format(position)
        elif rendered:
            rendered += "." + position
        else:
            rendered = position
    return rendered or "<root>"
