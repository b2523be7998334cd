#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Used by a Framebuffer object to draw the screen.  This draws graphics onto an
SDL window surface via PyGame.  The surface is allocated at the size of the
emulated screen, and then the contents are stretched (using 'Nearest
Neighbour' translation) to fit the window, which is the screen size multiplied
by the scale factor.  This means we don't have to draw the same pixel multiple
times.

Set pixels are drawn in white on a dark background.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

COLOUR_OFF = 0x222222
COLOUR_ON = 0xDDDDDD


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 10  # Default pixel scale if not supplied

        try:
            pygame.display.init()
        except pygame.error as e:
            raise RendererError("Unable to initialise the display: {}".format(e)) from None

        self.rgb_buffer = None
        self.display_surface = None

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes([i >> 16, (i >> 8) & 0xFF, i & 0xFF]) for i in (COLOUR_OFF, COLOUR_ON)]

        super().__init__(scale, **kwargs)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        # Call superclass method so display size is known on the next refresh
        super().set_resolution(width, height)

        if width == 0 or height == 0:
            return

        self.scaled_size = (width * self.scale, height * self.scale)

        try:
            self.display_surface = pygame.display.set_mode(self.scaled_size)
        except pygame.error as e:
            raise RendererError("Unable to open a window: {}".format(e)) from None

        self.rgb_buffer = bytearray(self.rgb_map[0] * (width * height))  # 24-bit
        self._blit()

    def refresh_display(self, pixels):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        rgb_map = self.rgb_map

        for location, pixel in enumerate(pixels):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[pixel]

        self._blit()
        super().refresh_display(pixels)

    def _blit(self):
        # Blit the bytearray straight to the surface, then stretch it over the whole window
        render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
