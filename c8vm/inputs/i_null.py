#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

The keymap is either the name of a built-in layout (see KEYMAPS), or 16
comma-separated decimal key codes for keypad keys 0-F, in that order.  Host
key codes are translated to keypad keys via 'keymap_dict', and plugins feed
the results to the Keypad.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import KEYMAPS


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, keypad):
        self.keymap_dict = {}
        self.keypad = keypad
        keymap_split = KEYMAPS.get(keymap.lower(), keymap).split(",")

        if len(keymap_split) != 0x10:
            raise InputsError(
                "Unknown keymap, or incorrect number of keys defined -- 16 required.  Use commas to split numbers"
            )

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def host_key_down(self, code):
        hex_key = self.keymap_dict.get(code)

        if hex_key is not None:
            self.keypad.key_down(hex_key)

    def host_key_up(self, code):
        hex_key = self.keymap_dict.get(code)

        if hex_key is not None:
            self.keypad.key_up(hex_key)

    def process_messages(self):
        # Returns True if the program should exit
        return self.keypad.is_quit_requested()

    def shutdown(self):
        pass
