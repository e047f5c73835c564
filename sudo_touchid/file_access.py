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

"""Open the target file, creating it when necessary."""

import os
from typing import IO, Tuple

from . import DEFAULT_FILE_MODE, AccessError, logger


def open_or_create(
        path: str, new_mode: int = DEFAULT_FILE_MODE,
        encoding: str = 'utf-8') -> Tuple[IO[str], bool]:
    """Open a file for reading and writing, creating it if it is missing.

    Args:
      path: Path to the file
      new_mode: Permission bits for a newly created file
      encoding: Text encoding of the file
    Returns:
      tuple with the open file and whether it was just created
    Raises:
      AccessError: when the file can not be opened or created
    """
    try:
        return open(path, 'r+', encoding=encoding), False
    except FileNotFoundError:
        pass
    except OSError as e:
        raise AccessError(path, e) from e
    logger.debug('Creating %s with mode %o', path, new_mode)
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_EXCL, new_mode)
    except OSError as e:
        raise AccessError(path, e) from e
    return os.fdopen(fd, 'r+', encoding=encoding), True
