#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "c8vm CHIP-8 Virtual Machine"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
ADDR_MASK = 0xFFF     # PC and I are both limited to 12 bits
FONT_START = 0x000
FONT_GLYPH_SIZE = 5
STACK_START = 0x1E0
STACK_DEPTH = 16      # 2 bytes per entry, so the stack fills 0x1E0 - 0x1FF
PROGRAM_START = 0x200

# Display
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8

# Timing
TIMER_FREQ = 60                # 60Hz delay and sound timers
DEFAULT_CLOCK_SPEED = 600      # Instructions per second
KEY_POLL_INTERVAL = 0.005      # Sleep between input polls while waiting for a keypress

# Hexadecimal digit glyphs, 4x5 pixels each (left-aligned in 8-bit rows)
FONT_DATA = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Mappings for keys 0-F.  The PyGame keyscans for letters and digits are the same as their lowercase ASCII codes.
KEYMAPS = {
    "qwerty":  "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118",
    "colemak": "120,49,50,51,113,119,102,97,114,115,122,99,52,112,116,118"
}
DEFAULT_KEYMAP = "qwerty"

# Pixel scale factors for the window
DISPLAY_SIZES = {
    "small":  5,
    "normal": 10,
    "large":  15
}
DEFAULT_DISPLAY_SIZE = "normal"
