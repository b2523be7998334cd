#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the keyboard via the PyGame event queue, and properly detects key
'press' and 'release' events.  Presses and releases are passed on to the
Keypad, which keeps track of which keys are held and the last key pressed.

Closing the window, pressing ESC, or pressing CTRL+C will request a quit.

Requires the PyGame display to be initialised, so a PyGame Renderer must be
created first.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
import pygame
from .i_null import Inputs as InputsBase

logger = logging.getLogger(__name__)


class Inputs(InputsBase):
    def __init__(self, keymap, keypad):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, keypad)
        logger.debug("Key map: %s", self.keymap_dict)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method:
                pygame_method(event)  # Process more events, even if planning to quit

        return super().process_messages()

    def _pygame_quit(self, _):
        logger.info("Window closed")
        self.keypad.request_quit()

    def _pygame_keydown(self, event):
        if event.key == pygame.K_ESCAPE or (event.key == pygame.K_c and event.mod & pygame.KMOD_CTRL):
            logger.info("Quit key pressed")
            self.keypad.request_quit()
            return

        self.host_key_down(event.key)

    def _pygame_keyup(self, event):
        self.host_key_up(event.key)
