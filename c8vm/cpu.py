#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each
call to 'step' fetches one instruction, moves the program counter past it,
decodes it, and executes it.  Timing is not handled here at all.  The cycle
driver decides how often to step, and when the 60Hz timers tick.

An instruction that can't be decoded (or a machine code subroutine call,
which can't be emulated) halts the CPU for good.  Halting is not an error:
later steps simply do nothing, and the host can check 'is_halted' to report
that the program has ended.

All arithmetic wraps at 8 bits, and all addressing wraps at 12 bits, so no
instruction can fault once decoded.  The only exception is the call stack,
which raises StackError if it over- or underflows.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import Random
from .constants import ADDR_MASK, FONT_DATA, FONT_GLYPH_SIZE, FONT_START, PROGRAM_START
from .opcodes import Op, decode

logger = logging.getLogger(__name__)


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, inputs, debugger, rng=None, shift_flag_quirks=False):
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.inputs = inputs
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.rng = Random() if rng is None else rng

        """
        Quirks
        ------

        - Shift flag quirks: Disabled.  SHL stores the raw high bit (0x80) in Vf.  Enable to store 0 or 1 instead,
                             as most other interpreters do.
        """

        self.shift_flag_quirks = shift_flag_quirks

        # One executor per decoded instruction type
        self.instructions = {
            Op.CLS:    self._00E0,
            Op.RET:    self._00EE,
            Op.SYS:    self._0nnn,
            Op.JP:     self._1nnn,
            Op.CALL:   self._2nnn,
            Op.SE:     self._3xkk,
            Op.SNE:    self._4xkk,
            Op.SE_V:   self._5xy0,
            Op.LD:     self._6xkk,
            Op.ADD:    self._7xkk,
            Op.LD_V:   self._8xy0,
            Op.OR:     self._8xy1,
            Op.AND:    self._8xy2,
            Op.XOR:    self._8xy3,
            Op.ADD_V:  self._8xy4,
            Op.SUB:    self._8xy5,
            Op.SHR:    self._8xy6,
            Op.SUBN:   self._8xy7,
            Op.SHL:    self._8xyE,
            Op.SNE_V:  self._9xy0,
            Op.LD_I:   self._Annn,
            Op.JP_V0:  self._Bnnn,
            Op.RND:    self._Cxkk,
            Op.DRW:    self._Dxyn,
            Op.SKP:    self._Ex9E,
            Op.SKNP:   self._ExA1,
            Op.LD_DT:  self._Fx07,
            Op.LD_K:   self._Fx0A,
            Op.SET_DT: self._Fx15,
            Op.SET_ST: self._Fx18,
            Op.ADD_I:  self._Fx1E,
            Op.LD_F:   self._Fx29,
            Op.BCD:    self._Fx33,
            Op.STORE:  self._Fx55,
            Op.LOAD:   self._Fx65,
            Op.INVALID: self._opcode_unsupported
        }

        # Initialise registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register

        # Initialise timers
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Initialise program counter and current opcode
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0
        self.halted = False

        # Write the system font into RAM
        self.ram.write_block(FONT_START, FONT_DATA)

    def load_rom(self, data):
        loaded = self.ram.load_rom(PROGRAM_START, data)

        if loaded < len(data):
            logger.warning("ROM is %d bytes, only the first %d bytes were loaded", len(data), loaded)

        logger.info("Loaded %d byte program at 0x%03x", loaded, PROGRAM_START)
        self.pc = PROGRAM_START

    def step(self):
        if self.halted:
            return

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        self.execute(decode(self.opcode))

    def fetch(self):
        pc = self.pc
        return (self.ram.read(pc) << 8) | self.ram.read((pc + 1) & ADDR_MASK)

    def execute(self, instruction):
        if self.live_debug:
            self.debugger.output(self, instruction)

        self.instructions[instruction.op](instruction)

    def tick_timers(self):
        # Called at 60Hz.  Neither timer goes below zero.
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def is_halted(self):
        return self.halted

    def is_sound_on(self):
        return self.st > 0

    def inc_pc(self):
        self.pc = (self.pc + 2) & ADDR_MASK

    def dec_pc(self):
        # Only used to re-run an instruction (an abandoned keypress wait)
        self.pc = (self.pc - 2) & ADDR_MASK

    def _halt(self, reason):
        self.halted = True
        logger.info(
            "Emulation halted: %s 0x%04x at address 0x%03x", reason, self.opcode, self.debug_pc
        )
        self.debugger.output(self, reason, verbose=True)

    def _opcode_unsupported(self, _):
        self._halt("unsupported opcode")

    def _0nnn(self, ins):  # SYS addr
        # Machine code routines on the original hardware can't be emulated
        self._halt("system call to 0x{:03x}, opcode".format(ins.addr))

    def _00E0(self, _):  # CLS
        self.framebuffer.clear()

    def _00EE(self, _):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.pc = ins.addr

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self.pc = ins.addr

    def _3xkk(self, ins):  # SE Vx, byte
        if self.v[ins.x] == ins.byte:
            self.inc_pc()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.v[ins.x] != ins.byte:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.x] == self.v[ins.y]:
            self.inc_pc()

    def _6xkk(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.byte

    def _7xkk(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.byte) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/SUBN
        self.v[ins.x] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.x] - self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx
        val = self.v[ins.x]
        self.v[ins.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.y] - self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx
        val = self.v[ins.x]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7 if self.shift_flag_quirks else val & 0x80

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.x] != self.v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.addr

    def _Bnnn(self, ins):  # JP V0, addr
        self.pc = (self.v[0] + ins.addr) & ADDR_MASK

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = self.rng.randint(0, 0xFF) & ins.byte

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        i = self.i
        sprite = bytes(self.ram.read((i + row) & ADDR_MASK) for row in range(ins.n))
        collision = self.framebuffer.draw_sprite(sprite, self.v[ins.x], self.v[ins.y])
        self.v[0xF] = int(collision)

    def _Ex9E(self, ins):  # SKP Vx
        if self.keypad.is_pressed(self.v[ins.x]):
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.keypad.is_pressed(self.v[ins.x]):
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # Everything stops here until a key is pressed, including the timers.  The keypad keeps pumping host input
        # so the wait can be abandoned if the user quits.  Show any pending screen changes first.
        self.framebuffer.refresh_display()
        key = self.keypad.wait_for_key(self.inputs.process_messages)

        if key is None:
            # Quit requested.  Leave Vx alone, and come back to this instruction if the CPU is ever stepped again.
            self.dec_pc()
        else:
            self.v[ins.x] = key

    def _Fx15(self, ins):  # LD DT, Vx
        self.dt = self.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.st = self.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        self.i = (self.i + self.v[ins.x]) & ADDR_MASK

    def _Fx29(self, ins):  # LD F, Vx
        self.i = FONT_START + FONT_GLYPH_SIZE * (self.v[ins.x] & 0xF)

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.x]
        i = self.i
        self.ram.write(i, val // 100)                          # Most-significant digit
        self.ram.write((i + 1) & ADDR_MASK, (val // 10) % 10)  # Middle digit
        self.ram.write((i + 2) & ADDR_MASK, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        i = self.i

        for reg in range(ins.x + 1):
            self.ram.write((i + reg) & ADDR_MASK, self.v[reg])

        self.i = (i + ins.x + 1) & ADDR_MASK

    def _Fx65(self, ins):  # LD Vx, [I]
        i = self.i

        for reg in range(ins.x + 1):
            self.v[reg] = self.ram.read((i + reg) & ADDR_MASK)

        self.i = (i + ins.x + 1) & ADDR_MASK
