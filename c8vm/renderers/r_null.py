#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
log output, or to run ROMs headless in tests.  The last frame pushed is kept,
so it can still be inspected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale

        if self.scale < 1:
            raise RendererError("Scale must be at least 1")

        self.last_frame = None
        self.frames_presented = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def refresh_display(self, pixels):
        # Pixels are a read-only, row-major view of the screen.  Each byte is 0 (off) or 1 (on).
        self.last_frame = bytes(pixels)
        self.frames_presented += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
