#!/usr/bin/env python3
#
# Copyright (c) 2012-2025 Snowflake Computing Inc. All rights reserved.
#
import os
from codecs import open

from setuptools import setup

THIS_DIR = os.path.dirname(os.path.realpath(__file__))
SRC_DIR = os.path.join(THIS_DIR, "src")
PACKAGE_SRC_DIR = os.path.join(SRC_DIR, "distributed_dbapi")
INSTALL_REQ_LIST = [
    "setuptools>=40.6.0",
    "wheel",
    "typing-extensions>=4.1.0, <5.0.0",
    "pyyaml",  # data source registry files
    "cloudpickle>=1.6.0,<=3.0.0,!=2.1.0,!=2.2.0",  # shipping partition cursors to other processes
]
REQUIRED_PYTHON_VERSION = ">=3.9, <3.14"

DEVELOPMENT_REQUIREMENTS = [
    "pytest<8.0.0",
    "pytest-cov",
    "coverage",
    "pytest-timeout",
    "pytest-xdist",
    "pre-commit",
    "tox",  # used for setting up testing environments
]

# read the version
VERSION = ()
with open(os.path.join(PACKAGE_SRC_DIR, "version.py"), encoding="utf-8") as f:
    exec(f.read())
if not VERSION:
    raise ValueError("version can't be read")
version = ".".join([str(v) for v in VERSION if v is not None])

with open(os.path.join(THIS_DIR, "README.md"), encoding="utf-8") as f:
    readme = f.read()
with open(os.path.join(THIS_DIR, "CHANGELOG.md"), encoding="utf-8") as f:
    changelog = f.read()


setup(
    name="distributed-dbapi",
    version=version,
    description="Partitioned, paged reads of many DBAPI2 tables",
    long_description=readme + "\n\n" + changelog,
    long_description_content_type="text/markdown",
    license="Apache License, Version 2.0",
    keywords="db database dbapi partition pagination ingestion",
    python_requires=REQUIRED_PYTHON_VERSION,
    install_requires=INSTALL_REQ_LIST,
    # When a new package (directory) is added, we should also add it here
    packages=[
        "distributed_dbapi",
        "distributed_dbapi._internal",
        "distributed_dbapi._internal.data_source",
        "distributed_dbapi._internal.data_source.dbms_dialects",
        "distributed_dbapi._internal.data_source.drivers",
    ],
    package_dir={
        "": "src",
    },
    extras_require={
        "development": DEVELOPMENT_REQUIREMENTS,
        "postgres": ["psycopg2-binary"],
        "mysql": ["pymysql"],
        "oracle": ["oracledb"],
        "sqlserver": ["pyodbc"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: SQL",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    zip_safe=False,
)
