#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit instruction word into an Instruction: one member of the closed
Op enumeration plus the operand fields.  The fields are always in the same
positions in every instruction, so they are all extracted up front:

    n    = Nibble (lowest 4 bits)
    kk   = Byte (lowest 8 bits)
    nnn  = Address (lowest 12 bits)
    x/y  = Register (0-15)

Lookup is done with a mask chosen by the first nibble, then an exact match on
the masked word.  Anything that doesn't match decodes to Op.SYS (for 0nnn) or
Op.INVALID, both of which halt the interpreter.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum


class Op(Enum):
    # Values are the disassembly templates
    CLS = "CLS"
    RET = "RET"
    SYS = "SYS 0x{addr:03x}"
    JP = "JP 0x{addr:03x}"
    CALL = "CALL 0x{addr:03x}"
    SE = "SE V{x:01x}, 0x{byte:02x}"
    SNE = "SNE V{x:01x}, 0x{byte:02x}"
    SE_V = "SE V{x:01x}, V{y:01x}"
    LD = "LD V{x:01x}, 0x{byte:02x}"
    ADD = "ADD V{x:01x}, 0x{byte:02x}"
    LD_V = "LD V{x:01x}, V{y:01x}"
    OR = "OR V{x:01x}, V{y:01x}"
    AND = "AND V{x:01x}, V{y:01x}"
    XOR = "XOR V{x:01x}, V{y:01x}"
    ADD_V = "ADD V{x:01x}, V{y:01x}"
    SUB = "SUB V{x:01x}, V{y:01x}"
    SHR = "SHR V{x:01x}"
    SUBN = "SUBN V{x:01x}, V{y:01x}"
    SHL = "SHL V{x:01x}"
    SNE_V = "SNE V{x:01x}, V{y:01x}"
    LD_I = "LD I, 0x{addr:03x}"
    JP_V0 = "JP V0, 0x{addr:03x}"
    RND = "RND V{x:01x}, 0x{byte:02x}"
    DRW = "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"
    SKP = "SKP V{x:01x}"
    SKNP = "SKNP V{x:01x}"
    LD_DT = "LD V{x:01x}, DT"
    LD_K = "LD V{x:01x}, K"
    SET_DT = "LD DT, V{x:01x}"
    SET_ST = "LD ST, V{x:01x}"
    ADD_I = "ADD I, V{x:01x}"
    LD_F = "LD F, V{x:01x}"
    BCD = "LD B, V{x:01x}"
    STORE = "LD [I], V{x:01x}"
    LOAD = "LD V{x:01x}, [I]"
    INVALID = "???"


# Bitmask to apply for each first nibble before looking up the exact opcode.  Unlisted nibbles only use the first
# nibble.
DECODE_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

OPCODES = {
    0x00E0: Op.CLS,
    0x00EE: Op.RET,
    0x1000: Op.JP,
    0x2000: Op.CALL,
    0x3000: Op.SE,
    0x4000: Op.SNE,
    0x5000: Op.SE_V,
    0x6000: Op.LD,
    0x7000: Op.ADD,
    0x8000: Op.LD_V,
    0x8001: Op.OR,
    0x8002: Op.AND,
    0x8003: Op.XOR,
    0x8004: Op.ADD_V,
    0x8005: Op.SUB,
    0x8006: Op.SHR,
    0x8007: Op.SUBN,
    0x800E: Op.SHL,
    0x9000: Op.SNE_V,
    0xA000: Op.LD_I,
    0xB000: Op.JP_V0,
    0xC000: Op.RND,
    0xD000: Op.DRW,
    0xE09E: Op.SKP,
    0xE0A1: Op.SKNP,
    0xF007: Op.LD_DT,
    0xF00A: Op.LD_K,
    0xF015: Op.SET_DT,
    0xF018: Op.SET_ST,
    0xF01E: Op.ADD_I,
    0xF029: Op.LD_F,
    0xF033: Op.BCD,
    0xF055: Op.STORE,
    0xF065: Op.LOAD
}


class Instruction(namedtuple("Instruction", "op word x y n addr byte")):
    __slots__ = ()

    def __str__(self):
        return self.op.value.format(**self._asdict())


def decode(word):
    first_nibble = word >> 12
    op = OPCODES.get(word & DECODE_MASKS.get(first_nibble, 0xF000))

    if op is None:
        op = Op.SYS if first_nibble == 0x0 else Op.INVALID

    return Instruction(
        op,
        word,
        (word & 0xF00) >> 8,
        (word & 0xF0) >> 4,
        word & 0xF,
        word & 0xFFF,
        word & 0xFF
    )
