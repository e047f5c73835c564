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

import argparse
import logging
import sys

from configobj import ConfigObjError

from . import (
    DEFAULT_FILE_MODE,
    SUDO_LOCAL_PATH,
    AccessError,
    EditFailed,
    Mode,
    version_string,
)
from .config import DEFAULT_CONFIG_PATH, Config
from .toggle import preview_touchid, set_touchid, touchid_status


def main(argv=None):
    parser = argparse.ArgumentParser(prog="sudo-touchid")
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "--enable", action="store_true",
        help="enable touch id for sudo")
    action.add_argument(
        "--disable", action="store_true",
        help="disable touch id for sudo")
    parser.add_argument(
        "--file",
        metavar="PATH",
        type=str,
        help="PAM file to edit (default: %s)" % SUDO_LOCAL_PATH,
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="configuration file to read",
    )
    parser.add_argument(
        "--no-atomic",
        action="store_false",
        dest="atomic",
        default=None,
        help="truncate and rewrite the file in place",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="show the new file contents rather than writing them",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + version_string
    )
    parser.add_argument(
        "--debug", help="Show debug output.", action="store_true"
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')

    mode = Mode.ENABLED if args.enable else Mode.DISABLED

    path = args.file
    atomic = args.atomic
    file_mode = None
    try:
        cfg = Config(args.config)
    except FileNotFoundError:
        cfg = None
    except ConfigObjError as e:
        logging.error("%s: %s", args.config, e)
        return 1
    if cfg is not None:
        try:
            if path is None:
                path = cfg.path()
            if atomic is None:
                atomic = cfg.atomic()
            file_mode = cfg.file_mode()
        except ValueError as e:
            logging.error("%s: %s", args.config, e)
            return 1
    if path is None:
        path = SUDO_LOCAL_PATH
    if atomic is None:
        atomic = True
    if file_mode is None:
        file_mode = DEFAULT_FILE_MODE

    try:
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            logging.debug(
                "Current state of %s: %s", path, touchid_status(path))
        if args.dry_run:
            sys.stdout.write(preview_touchid(path, mode, atomic=atomic))
            return 0
        if mode is Mode.ENABLED:
            print("enable touch id for sudo")
        else:
            print("disable touch id for sudo")
        set_touchid(path, mode, atomic=atomic, new_mode=file_mode)
    except AccessError as e:
        logging.error("%s", e)
        return 1
    except EditFailed as e:
        logging.error("%s", e)
        if not atomic:
            logging.error(
                "%s may have been left empty or partially written.", path)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
