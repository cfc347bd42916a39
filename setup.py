#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup


setup(
    name="osklayout",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Compile on-screen keyboard layout files into views, shared key states and an XKB keymap",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"osklayout": ["keyboards/*.yaml"]},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing :: General",
    ],
    keywords=["keyboard", "xkb", "layout", "on-screen keyboard"],
    python_requires=">=3.11",
    install_requires=[
        "cffi>=1.0.0",
        "attrs",
        "cattrs",
        "msgspec",
        "PyYAML",
        "xkbcommon",
    ],
    tests_require=["pytest>=6.2.4"],
    extras_require={
        "test": ["pytest>=6.2.4"],
    },
    entry_points={
        "console_scripts": [
            "osklayout-dump = osklayout.scripts:dump_layout_cli",
        ],
    },
)
