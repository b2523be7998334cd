#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, and
zeroing of memory blocks.  Used for the 4K system memory, and as the backing
store for the framebuffer.

Programs are loaded with 'load_rom', which truncates anything that does not
fit and zeroes the remainder of memory after it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        return self.mem[location]

    def read_block(self, location, size=1):
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow")

    def load_rom(self, location, data):
        # Anything past the end of memory is dropped, and anything between the end of the data and the end of memory
        # is zeroed, so a previously loaded program can't leak into this one.
        if location > self.mem_size:
            raise RAMError("Memory overflow")

        data = bytes(data[:self.mem_size - location])
        self.write_block(location, data)
        self.zero_block(location + len(data), self.mem_size - location - len(data))
        return len(data)

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)
        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)

    def readonly(self):
        return self.mem.toreadonly()
