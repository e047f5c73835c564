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

"""Enable or disable Touch ID authentication for sudo."""

import logging
from enum import Enum
from typing import List

__version__ = (0, 1)
version_string = ".".join(map(str, __version__))
SUDO_LOCAL_PATH = "/etc/pam.d/sudo_local"
# Owner read/write only; the PAM include is a privileged file.
DEFAULT_FILE_MODE = 0o600
logger = logging.getLogger(__name__)


class Mode(Enum):
    """Desired state of the pam_tid directive."""

    ENABLED = "enabled"
    DISABLED = "disabled"

    def opposite(self) -> "Mode":
        if self is Mode.ENABLED:
            return Mode.DISABLED
        return Mode.ENABLED


def directive_line(mode: Mode) -> List[str]:
    """Return the canonical token sequence for a mode."""
    if mode is Mode.ENABLED:
        return ["auth", "sufficient", "pam_tid.so"]
    elif mode is Mode.DISABLED:
        return ["#auth", "sufficient", "pam_tid.so"]
    raise ValueError(mode)


class TouchIdError(Exception):
    """Base class for errors while toggling Touch ID."""

    def __init__(self, path, error):
        super().__init__(path, error)
        self.path = path
        self.error = error


class AccessError(TouchIdError):
    """The target file could not be opened or created."""

    def __str__(self):
        return f"unable to open {self.path}: {self.error}"


class EditFailed(TouchIdError):
    """Reading, rewriting or closing the target file failed."""

    def __str__(self):
        return f"failed to edit {self.path}: {self.error}"
