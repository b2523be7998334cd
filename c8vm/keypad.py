#!/usr/bin/env python3

"""
Keypad Emulator

The machine has a 16-key hexadecimal keypad (0-F).  The keypad only knows
about logical keys.  Mapping physical keys onto it is the job of an Inputs
plugin, which calls 'key_down', 'key_up' and 'request_quit' as host events
arrive.

The last key pressed is latched, so that a program waiting for a keypress
sees keys that were pressed and released between two polls.  The latch has to
be reset before each wait, which 'wait_for_key' does itself.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import sleep
from .constants import KEY_POLL_INTERVAL

logger = logging.getLogger(__name__)


class Keypad:
    def __init__(self):
        self.keys = [False] * 0x10
        self.last_keypress = None
        self.quit_requested = False

    def key_down(self, key):
        key &= 0xF
        self.keys[key] = True
        self.last_keypress = key

    def key_up(self, key):
        self.keys[key & 0xF] = False

    def is_pressed(self, key):
        return self.keys[key & 0xF]

    def request_quit(self):
        self.quit_requested = True

    def is_quit_requested(self):
        return self.quit_requested

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def wait_for_key(self, pump, poll_interval=KEY_POLL_INTERVAL, max_polls=None):
        # Blocks until a key is pressed, polling the host for input in between short sleeps.  Returns None if a quit
        # was requested, or max_polls ran out, before any key arrived.
        logger.debug("Waiting for keypress")
        self.setup_keypress()
        polls = 0

        while self.last_keypress is None:
            pump()

            if self.quit_requested:
                return None

            if self.last_keypress is not None:
                break

            polls += 1

            if max_polls is not None and polls >= max_polls:
                return None

            sleep(poll_interval)

        return self.last_keypress
