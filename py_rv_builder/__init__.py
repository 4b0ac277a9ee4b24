#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Builder Package
"""

from .assembler import encode, decompose, render_operands
from .instruction import (
    InstructionFormat, ImmediateLayout, InstructionSpec, BitField,
    EncodedInstruction, immediate_width, max_immediate,
)
from .register import reg_to_bin, register_name, parse_register, register_names
from .utils import (
    SevereError, EncodingError, assert_, bin_to_hex, parse_immediate,
    parse_bits, format_binary,
)

__version__ = '1.0.0'
__all__ = [
    # Assembler
    'encode', 'decompose', 'render_operands',
    # Instruction
    'InstructionFormat', 'ImmediateLayout', 'InstructionSpec', 'BitField',
    'EncodedInstruction', 'immediate_width', 'max_immediate',
    # Register
    'reg_to_bin', 'register_name', 'parse_register', 'register_names',
    # Utils
    'SevereError', 'EncodingError', 'assert_', 'bin_to_hex', 'parse_immediate',
    'parse_bits', 'format_binary',
]
