#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from chip8vm import parse_args, run


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _rom(self, data):
        filename = os.path.join(self.tmp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def _run(self, filename):
        return run([filename, "-r", "null", "-c", "60000", "--exit_on_halt"])

    def test_cli_defaults(self):
        args = vars(parse_args(["test.ch8"]))
        self.assertEqual("qwerty", args["keymap"])
        self.assertEqual("normal", args["size"])
        self.assertEqual(600, args["clock_speed"])
        self.assertEqual("pygame", args["renderer"])
        self.assertFalse(args["exit_on_halt"])

    def test_cli_runs_until_halt(self):
        self.assertEqual(0, self._run(self._rom(b"\x60\x01\xFF\xFF")))

    def test_cli_missing_rom(self):
        with self.assertLogs("chip8vm", level="ERROR") as logs:
            self.assertEqual(1, self._run(os.path.join(self.tmp_dir.name, "NoFile.ch8")))

        self.assertIn("Unable to read ROM", logs.output[0])

    def test_cli_stack_underflow(self):
        # RET with nothing on the stack
        with self.assertLogs("chip8vm", level="ERROR") as logs:
            self.assertEqual(1, self._run(self._rom(b"\x00\xEE")))

        self.assertIn("Stack underflow", logs.output[0])

    def test_cli_stack_overflow(self):
        # CALL 0x200 forever
        with self.assertLogs("chip8vm", level="ERROR") as logs:
            self.assertEqual(1, self._run(self._rom(b"\x22\x00")))

        self.assertIn("Stack overflow", logs.output[0])
