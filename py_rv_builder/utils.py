#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Builder Utility Functions
"""

import re


class SevereError(Exception):
    """Severe error that should terminate the builder"""
    pass


class EncodingError(Exception):
    """Error converting a literal or bit string"""
    pass


# Assertion function with message
def assert_(condition: bool, message: str) -> None:
    """Assert with custom message"""
    if not condition:
        raise SevereError(message)


def dec_to_bin(value: int, width: int) -> str:
    """
    Convert an integer to a binary string of exactly `width` bits

    Negative values use two's complement; anything wider than `width`
    keeps only the low bits.
    """
    if width <= 0:
        return ''
    return bin(value & ((1 << width) - 1))[2:].zfill(width)


def fit_bits(bits: str, width: int) -> str:
    """
    Left-pad with zeros or truncate a bit string to `width` characters

    Truncation keeps the rightmost (least significant) bits.
    """
    if width <= 0:
        return ''
    if len(bits) > width:
        return bits[-width:]
    return bits.zfill(width)


def bin_to_hex(bin_str: str, zero_x: bool = True) -> str:
    """Convert a 32-bit binary string to 8 uppercase hex digits"""
    bin_str = fit_bits(bin_str, 32)
    try:
        hex_str = hex(int(bin_str, 2))[2:].upper().zfill(8)
    except ValueError as e:
        raise EncodingError(f"Error converting binary to hex: {str(e)}")
    if zero_x:
        return '0x' + hex_str
    return hex_str


def parse_immediate(value: str) -> int:
    """
    Parse an immediate literal

    @example: 42, -8, 0x7FF, 0b1010, +3
    """
    text = value.strip().replace('_', '')
    sign = 1
    if text.startswith('-'):
        sign = -1
        text = text[1:]
    elif text.startswith('+'):
        text = text[1:]

    try:
        # Handle hexadecimal values
        if text.lower().startswith('0x'):
            num = int(text[2:], 16)
        # Handle binary values
        elif text.lower().startswith('0b'):
            num = int(text[2:], 2)
        elif text.isdecimal():
            num = int(text)
        else:
            raise ValueError(f"Invalid literal: {value}")
    except ValueError as e:
        raise EncodingError(f"Error parsing immediate {value!r}: {str(e)}")

    return sign * num


def parse_bits(value: str, width: int) -> str:
    """
    Parse a raw bit-string field such as an opcode or funct3

    Accepts an optional 0b prefix and '_' separators. The result is
    fitted to `width` bits.
    """
    text = value.strip().replace('_', '')
    if text.lower().startswith('0b'):
        text = text[2:]
    if not re.match(r'^[01]*$', text):
        raise EncodingError(f"Invalid bit string: {value!r}")
    return fit_bits(text, width)


def format_binary(binary: str, group_size: int = 4) -> str:
    """Format a binary string by grouping bits"""
    # Remove any existing spaces
    binary = binary.replace(' ', '')

    groups = [binary[i:i+group_size] for i in range(0, len(binary), group_size)]
    return ' '.join(groups)
