#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only pushed to the actual display (the host
rendering system) when something has changed.  The interpreter may run
hundreds of instructions per frame, and PyGame can lower speed substantially
when it is asked to redraw that often.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method.
Each sprite row is a byte, with the most significant bit on the left.

Collisions (where any pixel was set, but was unset by an XOR), are reported
back to the caller, which sets the flag register.

Edge handling:  the sprite's origin always wraps around the screen.  Pixels
that run past the right or bottom edge are clipped, unless wrapping is
enabled, in which case they reappear on the opposite side.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH
from .ram import RAM

# Text rendering lookup for (upper pixel, lower pixel) pairs
HALF_BLOCKS = {
    (0, 0): " ",
    (0, 1): "▄",
    (1, 0): "▀",
    (1, 1): "█"
}


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, allow_wrapping=False, vid_width=SCREEN_WIDTH, vid_height=SCREEN_HEIGHT):
        self.renderer = renderer
        self.allow_wrapping = allow_wrapping
        self.vram = RAM()
        self.dirty = False
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)  # Update screen resolution
        self.dirty = True

    def clear(self):
        self.vram.clear()
        self.dirty = True

    def xor_pixel(self, x, y):
        # Returns True if a pixel was switched off, False if not, or None if the pixel was clipped

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def draw_sprite(self, sprite, x, y):
        # The origin wraps regardless of edge handling
        x %= self.vid_width
        y %= self.vid_height
        toggled_off = False

        for dy, row in enumerate(sprite):
            for dx in range(SPRITE_WIDTH):
                if row & (0x80 >> dx):
                    if self.xor_pixel(x + dx, y + dy):
                        # Don't stop drawing.  Any single collision sets the flag.
                        toggled_off = True

        self.dirty = True
        return toggled_off

    def get_pixel(self, x, y):
        return self.vram.read(y * self.vid_width + x)

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def is_dirty(self):
        return self.dirty

    def refresh_display(self, force=False):
        # Push the whole screen to the renderer, but only if it has changed since the last push
        if not (self.dirty or force):
            return False

        self.renderer.refresh_display(self.vram.readonly())
        self.dirty = False
        return True

    def __str__(self):
        lines = []

        for y in range(0, self.vid_height, 2):
            lines.append("".join(
                HALF_BLOCKS[(
                    self.get_pixel(x, y),
                    self.get_pixel(x, y + 1) if y + 1 < self.vid_height else 0
                )]
                for x in range(self.vid_width)
            ))

        return "\n".join(lines)
