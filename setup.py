#!/usr/bin/python3
# Copyright (C) 2024 Jelmer Vernooij
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA

from setuptools import setup

setup(
    name="sudo-touchid",
    version="0.1",
    description="Enable or disable Touch ID authentication for sudo",
    license="GPL-2.0-or-later",
    packages=["sudo_touchid", "sudo_touchid.tests"],
    python_requires=">=3.9",
    install_requires=[
        "breezy",
        "configobj",
    ],
    extras_require={
        "testing": ["testtools"],
    },
    entry_points={
        "console_scripts": [
            "sudo-touchid=sudo_touchid.__main__:main",
        ],
    },
    test_suite="sudo_touchid.tests.test_suite",
)
