#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RV32 Instruction Builder Main Entry Point
"""

import sys
import argparse
from typing import List, Optional

from .assembler import decompose, encode, immediate_fits
from .instruction import (
    DEFAULT_FUNCT3, DEFAULT_FUNCT7, DEFAULT_OPCODE,
    ImmediateLayout, InstructionFormat, InstructionSpec, immediate_width,
)
from .register import parse_register, register_name
from .utils import EncodingError, SevereError, parse_bits, parse_immediate


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments
    """
    parser = argparse.ArgumentParser(
        description='RV32 Instruction Builder - Assemble an instruction word from its fields'
    )

    # Required arguments
    parser.add_argument('format', type=str.upper,
                        choices=[f.value for f in InstructionFormat],
                        help='Instruction format')

    # Field values
    parser.add_argument('--opcode', default=DEFAULT_OPCODE,
                        help='7-bit opcode as a bit string')
    parser.add_argument('--funct3', default=DEFAULT_FUNCT3,
                        help='3-bit funct3 as a bit string')
    parser.add_argument('--funct7', default=DEFAULT_FUNCT7,
                        help='7-bit funct7 as a bit string')
    parser.add_argument('--rs1', help='First source register (x1, 1, ra, ...)')
    parser.add_argument('--rs2', help='Second source register')
    parser.add_argument('--rd', help='Destination register')
    parser.add_argument('--imm', default='0',
                        help='Immediate value (decimal, 0x hex or 0b binary; may be negative)')

    # Optional arguments
    parser.add_argument('--isa-layout', action='store_true',
                        help='Use the RISC-V scrambled layout for B/J immediates')
    parser.add_argument('-f', '--fields', action='store_true',
                        help='Print the bit-field breakdown')
    parser.add_argument('--describe', action='store_true',
                        help='Print a description of the instruction format')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Enable debug output')

    return parser.parse_args(join_negative_immediate(argv))


def join_negative_immediate(argv: Optional[List[str]]) -> List[str]:
    """
    Rewrite `--imm -0x10` as `--imm=-0x10`

    argparse only takes a dash-prefixed value for an option when it looks
    like a decimal number.
    """
    if argv is None:
        argv = sys.argv[1:]
    result = []
    i = 0
    while i < len(argv):
        if argv[i] == '--imm' and i + 1 < len(argv) and argv[i + 1].startswith('-'):
            result.append(f"--imm={argv[i + 1]}")
            i += 2
        else:
            result.append(argv[i])
            i += 1
    return result


def build_spec(args: argparse.Namespace) -> InstructionSpec:
    """
    Build an instruction spec from parsed arguments
    """
    def register(value: Optional[str]) -> Optional[int]:
        return parse_register(value) if value is not None else None

    return InstructionSpec(
        format=InstructionFormat(args.format),
        rs1=register(args.rs1),
        rs2=register(args.rs2),
        rd=register(args.rd),
        immediate=parse_immediate(args.imm),
        opcode=parse_bits(args.opcode, 7),
        funct3=parse_bits(args.funct3, 3),
        funct7=parse_bits(args.funct7, 7),
        layout=ImmediateLayout.ISA if args.isa_layout else ImmediateLayout.CONTIGUOUS,
    )


def debug_spec(spec: InstructionSpec) -> None:
    """
    Print diagnostics about a spec
    """
    width = immediate_width(spec.format)
    print(f"Format: {spec.format.value}-type ({spec.layout.value} layout)")
    print(f"Immediate width: {width} bits")
    if not immediate_fits(spec):
        print(f"Warning: immediate {spec.immediate} truncated to {width} bits")
    for slot in spec.unused_registers():
        print(f"Warning: {slot} is not used by {spec.format.value}-type instructions, ignoring")
    normalized = spec.normalized()
    for slot in ('rs1', 'rs2', 'rd'):
        index = getattr(normalized, slot)
        if index is not None:
            print(f"  {slot} = x{index} ({register_name(index)})")


def print_fields(spec: InstructionSpec) -> None:
    """
    Print the bit-field breakdown, one field per line
    """
    fields = decompose(spec)
    name_width = max(len(field.name) for field in fields)
    for field in fields:
        print(f"  {field.name:<{name_width}}  {field.width:>2}  {field.value}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function
    """
    try:
        args = parse_arguments(argv)
        spec = build_spec(args)

        if args.debug:
            debug_spec(spec)
        spec = spec.normalized()

        if args.describe:
            print(spec.format.description)

        result = encode(spec)
        print(f"Binary: {result.binary}")
        print(f"Hex: {result.hex}")

        if args.fields:
            print("Fields:")
            print_fields(spec)

        return 0

    except (SevereError, EncodingError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
