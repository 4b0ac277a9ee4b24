#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32I Register Definitions
"""

from typing import Optional

from .utils import assert_, dec_to_bin

REGISTER_COUNT = 32

# ABI names in register order
register_names = [
    'zero',  # x0, hardwired zero
    'ra',    # x1, return address
    'sp',    # x2, stack pointer
    'gp',    # x3, global pointer
    'tp',    # x4, thread pointer
    't0', 't1', 't2',
    's0',    # x8, also fp
    's1',
    'a0', 'a1',  # arguments / return values
    'a2', 'a3', 'a4', 'a5', 'a6', 'a7',
    's2', 's3', 's4', 's5', 's6', 's7', 's8', 's9', 's10', 's11',
    't3', 't4', 't5', 't6',
]

# Extra spellings accepted on input
aliases = {
    'fp': 8,
}


def check_register(index: Optional[int]) -> None:
    """Reject register references outside x0..x31"""
    if index is None:
        return
    assert_(isinstance(index, int) and not isinstance(index, bool),
            f"Invalid register: {index!r}")
    assert_(0 <= index < REGISTER_COUNT, f"Invalid register: {index}")


def reg_to_bin(index: Optional[int]) -> str:
    """
    Convert a register index to 5-bit binary

    An unset register (None) encodes as x0.
    """
    if index is None:
        return dec_to_bin(0, 5)
    check_register(index)
    return dec_to_bin(index, 5)


def register_name(index: int) -> str:
    """ABI name of a register, e.g. 5 -> 't0'"""
    check_register(index)
    return register_names[index]


def parse_register(reg: str) -> int:
    """
    Convert a register name or number to its index

    @example: x1, 1, sp, zero, fp
    """
    reg = reg.strip().lower()

    if reg in aliases:
        return aliases[reg]
    if reg in register_names:
        return register_names.index(reg)

    number = reg[1:] if reg.startswith('x') else reg
    assert_(number.isdecimal(), f"Invalid register name: {reg}")

    reg_number = int(number)
    assert_(0 <= reg_number < REGISTER_COUNT, f"Invalid register: {reg}")
    return reg_number
