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

"""Switch the pam_tid directive between its enabled and disabled forms."""

from io import StringIO
from typing import Optional

from . import (
    DEFAULT_FILE_MODE,
    AccessError,
    EditFailed,
    Mode,
    directive_line,
    logger,
)
from .file_access import open_or_create
from .line_editor import (
    DirectiveEditor,
    find_and_replace,
    format_line,
    lines_equal,
    split_line,
    write_single_line,
)


def set_touchid(path: str, mode: Mode, atomic: bool = True,
                new_mode: int = DEFAULT_FILE_MODE) -> bool:
    """Put the pam_tid directive in a file into the given mode.

    Args:
      path: Path to the PAM file
      mode: Desired mode
      atomic: Replace the file through a temporary file rather than
        truncating and rewriting it in place
      new_mode: Permission bits used if the file has to be created
    Returns:
      whether an existing directive was replaced
    Raises:
      AccessError: when the file can not be opened or created
      EditFailed: when the file can not be rewritten
    """
    find_line = directive_line(mode.opposite())
    replace_line = directive_line(mode)
    if atomic:
        with DirectiveEditor(path, new_mode=new_mode) as editor:
            replaced = editor.replace_directive(
                find_line, replace_line, also_match=[replace_line])
        if editor.created:
            logger.info('Created %s', path)
        return replaced

    f, created = open_or_create(path, new_mode=new_mode)
    try:
        if created:
            logger.info('Created %s', path)
            write_single_line(f, replace_line)
            replaced = False
        else:
            replaced = find_and_replace(f, find_line, replace_line)
    finally:
        try:
            f.close()
        except OSError as e:
            raise EditFailed(path, e) from e
    return replaced


def touchid_status(path: str) -> Optional[Mode]:
    """Determine the mode of the first pam_tid directive in a file.

    Returns:
      the mode, or None if the file is missing or has no directive
    Raises:
      AccessError: when the file exists but can not be read
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                tokens = split_line(line)
                for mode in Mode:
                    if lines_equal(tokens, directive_line(mode)):
                        return mode
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise AccessError(path, e) from e
    return None


def preview_touchid(path: str, mode: Mode, atomic: bool = True) -> str:
    """Compute what set_touchid would write, without touching the file.

    Returns:
      the new contents of the file
    Raises:
      AccessError: when the file exists but can not be read
    """
    find_line = directive_line(mode.opposite())
    replace_line = directive_line(mode)
    if atomic:
        with DirectiveEditor(path, dry_run=True) as editor:
            editor.replace_directive(
                find_line, replace_line, also_match=[replace_line])
        return editor.render()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        return format_line(replace_line)
    except (OSError, UnicodeDecodeError) as e:
        raise AccessError(path, e) from e
    f = StringIO(text)
    find_and_replace(f, find_line, replace_line)
    return f.getvalue()
