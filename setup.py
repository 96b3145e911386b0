"""Typed value codec for DynamoDB items."""
import io
import os
import re

from setuptools import find_packages, setup

VERSION_RE = re.compile(r"""__version__ = ['"]([0-9.]+)['"]""")
HERE = os.path.abspath(os.path.dirname(__file__))


def read(*args):
    """Reads complete file contents."""
    return io.open(os.path.join(HERE, *args), encoding="utf-8").read()


def get_version():
    """Reads the version from this module."""
    init = read("src", "dynamodb_codec", "identifiers.py")
    return VERSION_RE.search(init).group(1)


def get_requirements():
    """Reads the requirements file."""
    requirements = read("requirements.txt")
    return [r for r in requirements.strip().splitlines()]


setup(
    name="dynamodb-codec",
    version=get_version(),
    packages=find_packages("src"),
    package_dir={"": "src"},
    author="Amazon Web Services",
    maintainer="Amazon Web Services",
    description="Convert typed Python values to and from DynamoDB items",
    long_description=read("README.rst"),
    keywords="dynamodb aws attrs serialization",
    data_files=["README.rst", "CHANGELOG.rst", "LICENSE", "requirements.txt"],
    license="Apache License 2.0",
    python_requires=">=3.10",
    install_requires=get_requirements(),
    extras_require={"tests": ["pytest", "hypothesis", "moto[dynamodb]>=5"]},
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Database",
    ],
)
