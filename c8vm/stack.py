#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives in system RAM, in the 32 bytes just below the program
area (0x1E0 - 0x1FF).  Each entry is a 2-byte big-endian return address, so
there is room for 16 nested subroutine calls.

The stack pointer starts one entry below the stack area, and always points at
the most recently pushed address.  A push moves it up by 2 before writing, and
a pop reads the entry before moving it back down.

Running off either end of the stack is fatal.  A real interpreter would just
overwrite the program or the font, which is never what a ROM intended.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_START, STACK_DEPTH

STACK_ENDIAN = "big"
ENTRY_SIZE = 2


class StackError(Exception):
    pass


class Stack:
    def __init__(self, ram, base=STACK_START, depth=STACK_DEPTH):
        self.ram = ram
        self.base = base
        self.depth = depth
        self.sp_empty = base - ENTRY_SIZE
        self.sp_full = base + (depth - 1) * ENTRY_SIZE
        self.sp = self.sp_empty

    def push(self, item):
        if self.sp >= self.sp_full:
            raise StackError("Stack overflow")

        self.sp += ENTRY_SIZE
        self.ram.write_block(self.sp, item.to_bytes(ENTRY_SIZE, STACK_ENDIAN))

    def pop(self):
        if self.sp <= self.sp_empty:
            raise StackError("Stack underflow")

        item = int.from_bytes(self.ram.read_block(self.sp, ENTRY_SIZE), STACK_ENDIAN)
        self.sp -= ENTRY_SIZE
        return item

    def __len__(self):
        return (self.sp - self.sp_empty) // ENTRY_SIZE

    def get_items(self):
        # For debugging.  Oldest entry first.
        return [
            int.from_bytes(self.ram.read_block(location, ENTRY_SIZE), STACK_ENDIAN)
            for location in range(self.base, self.sp + 1, ENTRY_SIZE)
        ]
