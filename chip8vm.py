#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import logging
import sys
from argparse import ArgumentParser
from c8vm import main, StartupError
from c8vm.stack import StackError
from c8vm.constants import DEFAULT_CLOCK_SPEED, DEFAULT_DISPLAY_SIZE, DEFAULT_KEYMAP, DISPLAY_SIZES, KEYMAPS


logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = ArgumentParser(description="A CHIP-8 virtual machine")
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help=" ".join((
            "set the key layout: {} (default {}),".format(", ".join(KEYMAPS.keys()), DEFAULT_KEYMAP),
            "or redefine the 16 keyscan codes.  Separate each decimal with a comma"
        ))
    )
    parser.add_argument(
        "-s", "--size", default=DEFAULT_DISPLAY_SIZE,
        help="set the window size: {}, or a pixel scale factor (default {})".format(
            ", ".join(DISPLAY_SIZES.keys()), DEFAULT_DISPLAY_SIZE
        )
    )
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in operations/second (default {})".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"], default="pygame",
        help="set the rendering, input, and audio systems (default pygame)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1], default=0,
        help="mute the emulated audio.  0 = unmuted (default), 1 = muted"
    )
    parser.add_argument(
        "--screen_wrap_quirks", type=int, choices=[0, 1], default=0,
        help="wrap sprites around the screen edges instead of clipping them (default 0)"
    )
    parser.add_argument(
        "--shift_flag_quirks", type=int, choices=[0, 1], default=0,
        help="store 0 or 1 in VF after a left shift, instead of the raw high bit (default 0)"
    )
    parser.add_argument(
        "--frame_sync", action="store_true", default=False,
        help="only redraw the screen at 60Hz, rather than after every change"
    )
    parser.add_argument(
        "--exit_on_halt", action="store_true", default=False,
        help="quit as soon as the program halts, rather than waiting for the window to close"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False,
        help="show informational log messages"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable debug logging, including a live trace of every instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def configure_logging(verbose=False, debug=False):
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format="%(levelname)5s: %(message)s")


def run(argv=None):
    args = vars(parse_args(argv))
    configure_logging(args["verbose"], args["debug"])

    # It is possible to start the emulator from a GUI by calling main with a dictionary
    try:
        main(args)
    except (StartupError, StackError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
