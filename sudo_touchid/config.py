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

"""sudo-touchid configuration file."""

import os
import warnings

from configobj import ConfigObj

DEFAULT_CONFIG_PATH = "/etc/sudo-touchid.conf"


SUPPORTED_KEYS = [
    "path",
    "atomic",
    "file-mode",
]


class Config:
    """A configuration file."""

    def __init__(self, path):
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        self._obj = ConfigObj(path, raise_errors=True, file_error=True)
        for k in self._obj.keys():
            if k not in SUPPORTED_KEYS:
                warnings.warn(f"unknown setting {k} in {path}")

    def path(self):
        return self._obj.get("path")

    def atomic(self):
        try:
            return self._obj.as_bool("atomic")
        except KeyError:
            return None

    def file_mode(self):
        value = self._obj.get("file-mode")
        if value is None:
            return None
        try:
            return int(value, 8)
        except ValueError as e:
            raise ValueError(f"invalid file-mode {value!r}") from e
