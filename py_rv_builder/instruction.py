#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Format Definitions

Each of the six base formats (R, I, S, B, U, J) is described by an ordered
list of InstructionComponent entries, most significant field first. Both the
encoder and the field decomposer in assembler.py read these tables, so a
format's layout is defined exactly once.

Immediate layouts:
    CONTIGUOUS: the raw low bits of the immediate are laid into the
        immediate slots in order. B splits its 12 bits as 7 high / 5 low
        and J keeps all 20 bits in one field.
    ISA: B and J use the RISC-V scrambled order. The immediate is a byte
        offset whose bit 0 is implicit, so the stored bits are
        imm[12:1] (B) or imm[20:1] (J). R, I, S and U are unaffected.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .utils import assert_, format_binary

INSTRUCTION_WIDTH = 32

# Defaults of a freshly created instruction
DEFAULT_OPCODE = '0000000'
DEFAULT_FUNCT3 = '000'
DEFAULT_FUNCT7 = '0000000'


class InstructionFormat(Enum):
    """RISC-V base instruction formats"""

    R = 'R'
    I = 'I'
    S = 'S'
    B = 'B'
    U = 'U'
    J = 'J'

    @property
    def description(self) -> str:
        return _descriptions[self]

    def uses(self, slot: str) -> bool:
        """Whether this format carries the register operand `slot` (rs1, rs2 or rd)"""
        assert_(slot in ('rs1', 'rs2', 'rd'), f"Unknown register slot: {slot}")
        return slot in _register_slots[self]


_descriptions = {
    InstructionFormat.R: 'Register-Register operations (e.g., ADD, SUB, SLL). '
                         'Uses two source registers and one destination register.',
    InstructionFormat.I: 'Register-Immediate operations (e.g., ADDI, SLTI) and loads (e.g., LW, LH, LB). '
                         'Uses one source register, one immediate value, and one destination register.',
    InstructionFormat.S: 'Store operations (e.g., SW, SH, SB). '
                         'Uses two source registers and an immediate value to store a value to memory.',
    InstructionFormat.B: 'Branch operations (e.g., BEQ, BNE, BLT). '
                         'Compares two registers and branches to a PC-relative target if the condition is true.',
    InstructionFormat.U: 'Upper-immediate operations (e.g., LUI, AUIPC). '
                         'Places a 20-bit immediate in the upper 20 bits of the destination register.',
    InstructionFormat.J: 'Jump operations (e.g., JAL). '
                         'Jumps to a PC-relative target and stores the return address in a register.',
}

_register_slots = {
    InstructionFormat.R: ('rs1', 'rs2', 'rd'),
    InstructionFormat.I: ('rs1', 'rd'),
    InstructionFormat.S: ('rs1', 'rs2'),
    InstructionFormat.B: ('rs1', 'rs2'),
    InstructionFormat.U: ('rd',),
    InstructionFormat.J: ('rd',),
}


class ImmediateLayout(Enum):
    """How B and J immediates are placed in the instruction word"""

    CONTIGUOUS = 'contiguous'
    ISA = 'isa'


_immediate_widths = {
    InstructionFormat.R: 0,
    InstructionFormat.I: 12,
    InstructionFormat.S: 12,
    InstructionFormat.B: 12,
    InstructionFormat.U: 20,
    InstructionFormat.J: 20,
}


def immediate_width(format_: InstructionFormat) -> int:
    """Number of immediate bits carried by a format"""
    return _immediate_widths[format_]


def max_immediate(format_: InstructionFormat) -> int:
    """Largest unsigned immediate that fits without truncation"""
    return (1 << immediate_width(format_)) - 1


@dataclass(frozen=True)
class InstructionSpec:
    """Field values of one instruction to be encoded"""

    format: InstructionFormat
    rs1: Optional[int] = None
    rs2: Optional[int] = None
    rd: Optional[int] = None
    immediate: int = 0
    opcode: str = DEFAULT_OPCODE
    funct3: str = DEFAULT_FUNCT3
    funct7: str = DEFAULT_FUNCT7
    layout: ImmediateLayout = ImmediateLayout.CONTIGUOUS

    def normalized(self) -> 'InstructionSpec':
        """Copy with register slots the format does not use cleared"""
        return dataclasses.replace(
            self,
            rs1=self.rs1 if self.format.uses('rs1') else None,
            rs2=self.rs2 if self.format.uses('rs2') else None,
            rd=self.rd if self.format.uses('rd') else None,
        )

    def unused_registers(self) -> List[str]:
        """Register slots that are set but ignored by the format"""
        return [slot for slot in ('rs1', 'rs2', 'rd')
                if getattr(self, slot) is not None and not self.format.uses(slot)]


@dataclass(frozen=True)
class BitField:
    """One labeled group of bits in an instruction word"""

    name: str
    width: int
    value: str
    category: str


@dataclass(frozen=True)
class EncodedInstruction:
    """A 32-bit instruction word in binary and hex form"""

    binary: str
    hex: str

    @property
    def word(self) -> int:
        return int(self.binary, 2)

    def grouped(self, group_size: int = 4) -> str:
        return format_binary(self.binary, group_size)


class InstructionComponent:
    """
    Instruction Component

    `to_binary` receives the rendered operands (see assembler.render_operands)
    and returns this component's bits.
    """
    def __init__(self, desc: str, width: int, category: str,
                 to_binary: Callable[[Dict[str, str]], str]):
        self.desc = desc              # Label shown in the field breakdown
        self.width = width            # Width in bits
        self.category = category      # funct7, rs2, rs1, funct3, rd, opcode or imm
        self.to_binary = to_binary


def operand(name: str, width: int) -> InstructionComponent:
    """Component copied whole from a rendered operand"""
    return InstructionComponent(name, width, name, lambda parts: parts[name])


def imm_bits(desc: str, *slices: slice) -> InstructionComponent:
    """
    Component built from slices of the rendered immediate

    Slices index the immediate string, which is stored most significant
    bit first.
    """
    def to_binary(parts: Dict[str, str]) -> str:
        return ''.join(parts['imm'][s] for s in slices)

    width = sum(s.stop - s.start for s in slices)
    return InstructionComponent(desc, width, 'imm', to_binary)


# ISA B-type: rendered immediate t holds imm[12:1], so t[0] is imm[12],
# t[1] is imm[11], t[2:8] is imm[10:5] and t[8:12] is imm[4:1].
# ISA J-type: rendered immediate s holds imm[20:1], so s[0] is imm[20],
# s[1:9] is imm[19:12], s[9] is imm[11] and s[10:20] is imm[10:1].
_contiguous_components = {
    InstructionFormat.R: [
        operand('funct7', 7),
        operand('rs2', 5),
        operand('rs1', 5),
        operand('funct3', 3),
        operand('rd', 5),
        operand('opcode', 7),
    ],
    InstructionFormat.I: [
        imm_bits('imm[11:0]', slice(0, 12)),
        operand('rs1', 5),
        operand('funct3', 3),
        operand('rd', 5),
        operand('opcode', 7),
    ],
    InstructionFormat.S: [
        imm_bits('imm[11:5]', slice(0, 7)),
        operand('rs2', 5),
        operand('rs1', 5),
        operand('funct3', 3),
        imm_bits('imm[4:0]', slice(7, 12)),
        operand('opcode', 7),
    ],
    InstructionFormat.B: [
        imm_bits('imm[11:5]', slice(0, 7)),
        operand('rs2', 5),
        operand('rs1', 5),
        operand('funct3', 3),
        imm_bits('imm[4:0]', slice(7, 12)),
        operand('opcode', 7),
    ],
    InstructionFormat.U: [
        imm_bits('imm[31:12]', slice(0, 20)),
        operand('rd', 5),
        operand('opcode', 7),
    ],
    InstructionFormat.J: [
        imm_bits('imm[19:0]', slice(0, 20)),
        operand('rd', 5),
        operand('opcode', 7),
    ],
}

_isa_components = dict(_contiguous_components)
_isa_components[InstructionFormat.B] = [
    imm_bits('imm[12|10:5]', slice(0, 1), slice(2, 8)),
    operand('rs2', 5),
    operand('rs1', 5),
    operand('funct3', 3),
    imm_bits('imm[4:1|11]', slice(8, 12), slice(1, 2)),
    operand('opcode', 7),
]
_isa_components[InstructionFormat.J] = [
    imm_bits('imm[20]', slice(0, 1)),
    imm_bits('imm[10:1]', slice(10, 20)),
    imm_bits('imm[11]', slice(9, 10)),
    imm_bits('imm[19:12]', slice(1, 9)),
    operand('rd', 5),
    operand('opcode', 7),
]

_components = {
    ImmediateLayout.CONTIGUOUS: _contiguous_components,
    ImmediateLayout.ISA: _isa_components,
}


def get_components(format_: InstructionFormat,
                   layout: ImmediateLayout = ImmediateLayout.CONTIGUOUS) -> List[InstructionComponent]:
    """Components of a format, most significant first"""
    components = _components[layout].get(format_)
    assert_(components is not None, f"Unknown instruction format: {format_}")
    return components
