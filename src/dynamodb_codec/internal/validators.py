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
"""Custom validators for ``attrs``.

.. warning::
    No guarantee is provided on the modules and APIs within this
    namespace staying consistent. Directly reference at your own risk.
"""
import attr

__all__ = ("attrs_class_validator",)


def attrs_class_validator(instance, attribute, value):
    # pylint: disable=unused-argument
    """Validate that an attribute value is an attrs class.

    :raises TypeError: if ``value`` is not a class decorated with ``attr.s``
    """
    if not (isinstance(value, type) and attr.has(value)):
        raise TypeError('"{name}" value "{value}" must be an attrs class'.format(name=attribute.name, value=value))
