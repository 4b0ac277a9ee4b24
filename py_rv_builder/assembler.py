#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Field Assembler

encode() packs an InstructionSpec into a 32-bit word; decompose() returns
the labeled fields that word is made of. Both walk the same component table
from instruction.py, so the fields of decompose(spec) always concatenate to
encode(spec).binary.
"""

from typing import Dict, List

from .instruction import (
    INSTRUCTION_WIDTH, BitField, EncodedInstruction, ImmediateLayout,
    InstructionFormat, InstructionSpec, get_components, immediate_width,
)
from .register import reg_to_bin
from .utils import bin_to_hex, dec_to_bin, fit_bits

# Formats whose ISA immediate is a byte offset with an implicit bit 0
_OFFSET_FORMATS = (InstructionFormat.B, InstructionFormat.J)


def stored_immediate(spec: InstructionSpec) -> int:
    """Immediate value before truncation, with the implicit ISA bit 0 dropped"""
    if spec.layout is ImmediateLayout.ISA and spec.format in _OFFSET_FORMATS:
        return spec.immediate >> 1
    return spec.immediate


def immediate_fits(spec: InstructionSpec) -> bool:
    """Whether the immediate survives truncation as a signed or unsigned value"""
    width = immediate_width(spec.format)
    value = stored_immediate(spec)
    if width == 0:
        return True
    return -(1 << (width - 1)) <= value < (1 << width)


def immediate_to_bin(spec: InstructionSpec) -> str:
    """Immediate bits of a spec, most significant first"""
    return dec_to_bin(stored_immediate(spec), immediate_width(spec.format))


def render_operands(spec: InstructionSpec) -> Dict[str, str]:
    """
    Render every operand of a spec as a fixed-width bit string

    Unset registers render as x0. Bit-string fields are zero-padded or
    truncated to their declared widths.
    """
    return {
        'funct7': fit_bits(spec.funct7, 7),
        'funct3': fit_bits(spec.funct3, 3),
        'opcode': fit_bits(spec.opcode, 7),
        'rs1': reg_to_bin(spec.rs1),
        'rs2': reg_to_bin(spec.rs2),
        'rd': reg_to_bin(spec.rd),
        'imm': immediate_to_bin(spec),
    }


def decompose(spec: InstructionSpec) -> List[BitField]:
    """
    Split an instruction into its named bit fields, most significant first
    """
    parts = render_operands(spec)
    fields = []
    for comp in get_components(spec.format, spec.layout):
        fields.append(BitField(
            name=comp.desc,
            width=comp.width,
            value=fit_bits(comp.to_binary(parts), comp.width),
            category=comp.category,
        ))
    return fields


def encode(spec: InstructionSpec) -> EncodedInstruction:
    """
    Convert an instruction spec to its binary and hexadecimal encoding
    """
    binary = ''.join(field.value for field in decompose(spec))
    binary = fit_bits(binary, INSTRUCTION_WIDTH)
    return EncodedInstruction(binary=binary, hex=bin_to_hex(binary))
