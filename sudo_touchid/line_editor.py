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

"""Utility functions for editing directive lines in a file."""

__all__ = [
    'split_line',
    'format_line',
    'lines_equal',
    'write_single_line',
    'find_and_replace',
    'DirectiveEditor',
    ]

import os
import stat
from typing import IO, Iterable, List, Sequence

from breezy.atomicfile import AtomicFile

from . import DEFAULT_FILE_MODE, AccessError, EditFailed, logger


def split_line(text: str) -> List[str]:
    """Split a line into its whitespace separated tokens."""
    return text.split()


def format_line(tokens: Sequence[str]) -> str:
    """Join tokens into a newline terminated line."""
    return " ".join(tokens) + "\n"


def lines_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    """Check whether two lines have the same tokens, in the same order."""
    return list(a) == list(b)


def _name(f):
    return getattr(f, 'name', None)


def write_single_line(f: IO[str], line: Sequence[str]) -> None:
    """Make a line the sole content of an open file.

    Args:
      f: File opened for reading and writing
      line: Tokens of the line to write
    Raises:
      EditFailed: when the file can not be written
    """
    try:
        f.seek(0)
        f.truncate(0)
        f.write(format_line(line))
        f.flush()
    except (OSError, ValueError) as e:
        raise EditFailed(_name(f), e) from e


def find_and_replace(
        f: IO[str], find_line: Sequence[str],
        replace_line: Sequence[str]) -> bool:
    """Replace every occurrence of a line in an open file.

    Lines are compared by their whitespace separated tokens, so
    "auth   sufficient pam_tid.so" matches
    ["auth", "sufficient", "pam_tid.so"]. Unrelated lines are written back
    unchanged, with a trailing newline. If no line matched, the replacement
    is appended.

    The file is truncated before it is rewritten; a failure halfway
    through can leave it empty or partially written. Use DirectiveEditor
    for a crash safe edit.

    Args:
      f: File opened for reading and writing
      find_line: Tokens of the line to look for
      replace_line: Tokens of the line to write instead
    Returns:
      whether a line was replaced (rather than appended)
    Raises:
      EditFailed: when reading or rewriting the file fails
    """
    try:
        f.seek(0)
        lines = f.read().split("\n")
        if lines[-1] == "":
            lines.pop()
        f.seek(0)
        f.truncate(0)
        replaced = False
        for lineno, line in enumerate(lines, 1):
            if lines_equal(split_line(line), find_line):
                logger.debug('Replacing line %d: %r', lineno, line)
                f.write(format_line(replace_line))
                replaced = True
            else:
                f.write(line + "\n")
        if not replaced:
            logger.debug('No match for %r, appending', " ".join(find_line))
            f.write(format_line(replace_line))
        f.flush()
    except (OSError, ValueError) as e:
        raise EditFailed(_name(f), e) from e
    return replaced


class DirectiveEditor:
    """Edit a file line by line, replacing it atomically when done.

    Lines are kept without their line terminator; every line is written
    back followed by a newline.
    """

    def __init__(self, path, new_mode=DEFAULT_FILE_MODE, encoding='utf-8',
                 dry_run=False):
        self.path = path
        self.new_mode = new_mode
        self.encoding = encoding
        self.dry_run = dry_run
        self.created = False

    def __enter__(self):
        try:
            with open(self.path, 'r', encoding=self.encoding,
                      newline='') as f:
                raw = list(f)
            self._oldtext = "".join(raw)
            self._oldlines = [line.rstrip('\r\n') for line in raw]
            self._mode = stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            self.created = True
            self._oldlines = []
            self._oldtext = None
            self._mode = self.new_mode
        except (OSError, UnicodeDecodeError) as e:
            raise AccessError(self.path, e) from e
        self._newlines = list(self._oldlines)
        return self

    def render(self) -> str:
        return "".join(line + "\n" for line in self._newlines)

    def changed(self) -> bool:
        return self._oldtext != self.render()

    def done(self) -> bool:
        """Write out the file if it has changed.

        Returns:
          whether the file was written
        """
        if not self.changed():
            return False
        if self.dry_run:
            logger.debug('Not writing %s: dry run', self.path)
            return False
        try:
            f = AtomicFile(self.path, "wb", new_mode=self._mode)
        except OSError as e:
            raise AccessError(self.path, e) from e
        try:
            f.write(self.render().encode(self.encoding))
            f.commit()
        except OSError as e:
            raise EditFailed(self.path, e) from e
        finally:
            f.close()
        return True

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.done()
        return False

    def __iter__(self):
        return enumerate(self._newlines, 1)

    def __setitem__(self, i: int, newline):
        self._newlines[i - 1] = newline

    def __getitem__(self, i: int):
        return self._newlines[i - 1]

    def __delitem__(self, i: int):
        del self._newlines[i - 1]

    def append(self, line):
        self._newlines.append(line)

    def __len__(self) -> int:
        return len(self._newlines)

    def replace_directive(
            self, find_line: Sequence[str], replace_line: Sequence[str],
            also_match: Iterable[Sequence[str]] = ()) -> bool:
        """Replace a directive, leaving a single copy in the file.

        The first line matching find_line or one of also_match is replaced
        in place; later matches are dropped. If nothing matched, the
        replacement is appended.

        Returns:
          whether an existing line was replaced
        """
        candidates = [list(find_line)] + [list(m) for m in also_match]
        matches = [
            lineno for (lineno, line) in self
            if any(lines_equal(split_line(line), c) for c in candidates)]
        if not matches:
            logger.debug(
                'No match for %r in %s, appending',
                " ".join(find_line), self.path)
            self.append(" ".join(replace_line))
            return False
        first = matches[0]
        self[first] = " ".join(replace_line)
        for lineno in reversed(matches[1:]):
            logger.debug('Removing duplicate directive on line %d', lineno)
            del self[lineno]
        return True
