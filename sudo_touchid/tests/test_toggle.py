#!/usr/bin/python
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

"""Tests for sudo_touchid.toggle."""

import os
import stat

from breezy.tests import TestCaseWithTransport

from sudo_touchid import AccessError, EditFailed, Mode, toggle
from sudo_touchid.toggle import preview_touchid, set_touchid, touchid_status


class CloseFailingFile:

    def __init__(self, f):
        self._f = f

    def __getattr__(self, name):
        return getattr(self._f, name)

    def close(self):
        self._f.close()
        raise OSError(5, "Input/output error")


class SetTouchIdTests(TestCaseWithTransport):

    atomic = True

    def test_new_file_enable(self):
        self.assertFalse(set_touchid(
            "sudo_local", Mode.ENABLED, atomic=self.atomic))
        self.assertFileEqual("auth sufficient pam_tid.so\n", "sudo_local")
        self.assertEqual(
            0o600, stat.S_IMODE(os.stat("sudo_local").st_mode))

    def test_new_file_disable(self):
        self.assertFalse(set_touchid(
            "sudo_local", Mode.DISABLED, atomic=self.atomic))
        self.assertFileEqual("#auth sufficient pam_tid.so\n", "sudo_local")

    def test_new_file_mode(self):
        set_touchid(
            "sudo_local", Mode.ENABLED, atomic=self.atomic, new_mode=0o400)
        self.assertEqual(
            0o400, stat.S_IMODE(os.stat("sudo_local").st_mode))

    def test_enable_disabled(self):
        self.build_tree_contents(
            [("sudo_local", "#auth sufficient pam_tid.so\n")])
        self.assertTrue(set_touchid(
            "sudo_local", Mode.ENABLED, atomic=self.atomic))
        self.assertFileEqual("auth sufficient pam_tid.so\n", "sudo_local")

    def test_disable_enabled(self):
        self.build_tree_contents(
            [("sudo_local", "auth sufficient pam_tid.so\n")])
        self.assertTrue(set_touchid(
            "sudo_local", Mode.DISABLED, atomic=self.atomic))
        self.assertFileEqual("#auth sufficient pam_tid.so\n", "sudo_local")

    def test_enable_unrelated(self):
        self.build_tree_contents([("sudo_local", "foo bar baz\n")])
        self.assertFalse(set_touchid(
            "sudo_local", Mode.ENABLED, atomic=self.atomic))
        self.assertFileEqual(
            "foo bar baz\nauth sufficient pam_tid.so\n", "sudo_local")

    def test_toggle_back(self):
        self.build_tree_contents([("sudo_local", """\
# sudo_local: local config file which survives system update
auth       sufficient     pam_tid.so
auth       sufficient     pam_smartcard.so
""")])
        set_touchid("sudo_local", Mode.DISABLED, atomic=self.atomic)
        set_touchid("sudo_local", Mode.ENABLED, atomic=self.atomic)
        self.assertFileEqual("""\
# sudo_local: local config file which survives system update
auth sufficient pam_tid.so
auth       sufficient     pam_smartcard.so
""", "sudo_local")

    def test_invalid_path(self):
        self.assertRaises(
            AccessError, set_touchid, "nonexistent/sudo_local",
            Mode.ENABLED, atomic=self.atomic)


class SetTouchIdInPlaceTests(SetTouchIdTests):

    atomic = False

    def test_enable_twice_appends(self):
        self.build_tree_contents(
            [("sudo_local", "auth sufficient pam_tid.so\n")])
        self.assertFalse(
            set_touchid("sudo_local", Mode.ENABLED, atomic=False))
        self.assertFileEqual(
            "auth sufficient pam_tid.so\nauth sufficient pam_tid.so\n",
            "sudo_local")


    def test_close_failure(self):
        self.build_tree_contents(
            [("sudo_local", "#auth sufficient pam_tid.so\n")])
        open_or_create = toggle.open_or_create

        def open_failing_close(path, new_mode):
            f, created = open_or_create(path, new_mode=new_mode)
            return CloseFailingFile(f), created
        self.overrideAttr(toggle, "open_or_create", open_failing_close)
        e = self.assertRaises(
            EditFailed, set_touchid, "sudo_local", Mode.ENABLED,
            atomic=False)
        self.assertEqual("sudo_local", e.path)
        self.assertIsInstance(e.error, OSError)


class SetTouchIdAtomicTests(TestCaseWithTransport):

    def test_enable_twice_is_noop(self):
        self.build_tree_contents(
            [("sudo_local", "auth sufficient pam_tid.so\n")])
        self.assertTrue(set_touchid("sudo_local", Mode.ENABLED))
        self.assertFileEqual("auth sufficient pam_tid.so\n", "sudo_local")

    def test_single_directive_left(self):
        self.build_tree_contents([("sudo_local", """\
#auth sufficient pam_tid.so
auth sufficient pam_tid.so
""")])
        set_touchid("sudo_local", Mode.ENABLED)
        self.assertFileEqual("auth sufficient pam_tid.so\n", "sudo_local")

    def test_no_temporary_files_left(self):
        self.build_tree_contents([("sudo_local", "foo bar baz\n")])
        set_touchid("sudo_local", Mode.DISABLED)
        self.assertEqual(
            [], [n for n in os.listdir(".") if n.endswith(".tmp")])


class TouchIdStatusTests(TestCaseWithTransport):

    def test_missing(self):
        self.assertIs(None, touchid_status("sudo_local"))

    def test_no_directive(self):
        self.build_tree_contents([("sudo_local", "foo bar baz\n")])
        self.assertIs(None, touchid_status("sudo_local"))

    def test_enabled(self):
        self.build_tree_contents(
            [("sudo_local", "foo\nauth  sufficient pam_tid.so\n")])
        self.assertIs(Mode.ENABLED, touchid_status("sudo_local"))

    def test_disabled(self):
        self.build_tree_contents(
            [("sudo_local", "#auth sufficient pam_tid.so\n")])
        self.assertIs(Mode.DISABLED, touchid_status("sudo_local"))

    def test_not_utf8(self):
        self.build_tree_contents([("sudo_local", b"# caf\xe9\n")])
        self.assertRaises(AccessError, touchid_status, "sudo_local")


class PreviewTouchIdTests(TestCaseWithTransport):

    def test_atomic(self):
        self.build_tree_contents(
            [("sudo_local", "auth sufficient pam_tid.so\n")])
        self.assertEqual(
            "auth sufficient pam_tid.so\n",
            preview_touchid("sudo_local", Mode.ENABLED))

    def test_in_place(self):
        self.build_tree_contents(
            [("sudo_local", "auth sufficient pam_tid.so\n")])
        self.assertEqual(
            "auth sufficient pam_tid.so\nauth sufficient pam_tid.so\n",
            preview_touchid("sudo_local", Mode.ENABLED, atomic=False))
        self.assertFileEqual("auth sufficient pam_tid.so\n", "sudo_local")

    def test_in_place_replace(self):
        self.build_tree_contents(
            [("sudo_local", "foo\nauth  sufficient pam_tid.so\n")])
        self.assertEqual(
            "foo\n#auth sufficient pam_tid.so\n",
            preview_touchid("sudo_local", Mode.DISABLED, atomic=False))

    def test_missing(self):
        for atomic in (True, False):
            self.assertEqual(
                "auth sufficient pam_tid.so\n",
                preview_touchid("sudo_local", Mode.ENABLED, atomic=atomic))
        self.assertFalse(os.path.exists("sudo_local"))

    def test_not_utf8(self):
        self.build_tree_contents([("sudo_local", b"# caf\xe9\n")])
        for atomic in (True, False):
            self.assertRaises(
                AccessError, preview_touchid, "sudo_local", Mode.ENABLED,
                atomic=atomic)
