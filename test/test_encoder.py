import sys
import os
import re
import unittest

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from py_rv_builder.assembler import decompose, encode, immediate_fits, render_operands, stored_immediate
from py_rv_builder.instruction import (
    ImmediateLayout, InstructionFormat, InstructionSpec, get_components,
    immediate_width, max_immediate,
)
from py_rv_builder.utils import SevereError

ALL_FORMATS = list(InstructionFormat)
ALL_LAYOUTS = list(ImmediateLayout)
SAMPLE_IMMEDIATES = [0, 1, -1, 4, -8, 2047, -2048, 0xFFF, 0xFFFFF, 0x123456, -(1 << 40)]


def sample_specs():
    """A spread of specs over every format and layout"""
    for format_ in ALL_FORMATS:
        for layout in ALL_LAYOUTS:
            for imm in SAMPLE_IMMEDIATES:
                yield InstructionSpec(format_, rs1=1, rs2=30, rd=17, immediate=imm,
                                      opcode='1010101', funct3='101', funct7='1100110',
                                      layout=layout)
            yield InstructionSpec(format_, layout=layout)


class TestImmediateWidth(unittest.TestCase):
    def test_widths(self):
        expected = {'R': 0, 'I': 12, 'S': 12, 'B': 12, 'U': 20, 'J': 20}
        for format_ in ALL_FORMATS:
            with self.subTest(format=format_):
                self.assertEqual(immediate_width(format_), expected[format_.value])

    def test_max_immediate(self):
        self.assertEqual(max_immediate(InstructionFormat.R), 0)
        self.assertEqual(max_immediate(InstructionFormat.I), 0xFFF)
        self.assertEqual(max_immediate(InstructionFormat.J), 0xFFFFF)

    def test_component_widths_sum_to_32(self):
        for format_ in ALL_FORMATS:
            for layout in ALL_LAYOUTS:
                with self.subTest(format=format_, layout=layout):
                    components = get_components(format_, layout)
                    self.assertEqual(sum(c.width for c in components), 32)
                    imm = sum(c.width for c in components if c.category == 'imm')
                    self.assertEqual(imm, immediate_width(format_))


class TestEncode(unittest.TestCase):
    def test_all_zero_spec(self):
        for format_ in ALL_FORMATS:
            with self.subTest(format=format_):
                result = encode(InstructionSpec(format_))
                self.assertEqual(result.binary, '0' * 32)
                self.assertEqual(result.hex, '0x00000000')

    def test_u_type_full_immediate(self):
        spec = InstructionSpec(InstructionFormat.U, rd=1, immediate=0xFFFFF, opcode='0110111')
        result = encode(spec)
        self.assertEqual(result.binary, '11111111111111111111' + '00001' + '0110111')
        self.assertEqual(result.hex, '0xFFFFF0B7')

    def test_i_type_load(self):
        spec = InstructionSpec(InstructionFormat.I, rs1=2, rd=5, immediate=4,
                               opcode='0000011', funct3='010')
        result = encode(spec)
        self.assertEqual(result.binary, '00000000010000010010001010000011')
        self.assertEqual(result.hex, '0x00412283')

    def test_output_shape(self):
        for spec in sample_specs():
            with self.subTest(spec=spec):
                result = encode(spec)
                self.assertEqual(len(result.binary), 32)
                self.assertTrue(re.match(r'^[01]{32}$', result.binary))
                self.assertTrue(re.match(r'^0x[0-9A-F]{8}$', result.hex))
                self.assertEqual(int(result.hex, 16), int(result.binary, 2))
                self.assertEqual(result.word, int(result.binary, 2))

    def test_encode_is_deterministic(self):
        for spec in sample_specs():
            with self.subTest(spec=spec):
                self.assertEqual(encode(spec), encode(spec))

    def test_immediate_truncation_does_not_leak(self):
        # Everything but the immediate is zero, so any stray bit would show
        cases = [
            (InstructionFormat.I, 0x1FFF, '0xFFF00000'),
            (InstructionFormat.I, -1, '0xFFF00000'),
            (InstructionFormat.S, 0x1FFF, '0xFE000F80'),
            (InstructionFormat.U, 0x1FFFFF, '0xFFFFF000'),
            (InstructionFormat.J, -1, '0xFFFFF000'),
            (InstructionFormat.R, 0xFFFFFFFF, '0x00000000'),
        ]
        for format_, imm, expected in cases:
            with self.subTest(format=format_, immediate=imm):
                self.assertEqual(encode(InstructionSpec(format_, immediate=imm)).hex, expected)

    def test_bit_string_padding_and_truncation(self):
        short = InstructionSpec(InstructionFormat.R, opcode='11', funct3='1', funct7='1')
        self.assertEqual(encode(short).binary,
                         '0000001' + '00000' + '00000' + '001' + '00000' + '0000011')

        long_ = InstructionSpec(InstructionFormat.R, opcode='110110011', funct3='1111', funct7='00000000001')
        parts = render_operands(long_)
        self.assertEqual(parts['opcode'], '0110011')
        self.assertEqual(parts['funct3'], '111')
        self.assertEqual(parts['funct7'], '0000001')

    def test_unset_registers_encode_as_zero(self):
        spec = InstructionSpec(InstructionFormat.R, opcode='0110011')
        parts = render_operands(spec)
        self.assertEqual(parts['rs1'], '00000')
        self.assertEqual(parts['rs2'], '00000')
        self.assertEqual(parts['rd'], '00000')

    def test_register_zero_is_not_unset(self):
        unset = InstructionSpec(InstructionFormat.I, rs1=None)
        zero = InstructionSpec(InstructionFormat.I, rs1=0)
        self.assertNotEqual(unset, zero)
        self.assertEqual(encode(unset), encode(zero))

    def test_invalid_register_rejected(self):
        for bad in (32, -1, 100, True):
            with self.subTest(register=bad):
                with self.assertRaises(SevereError):
                    encode(InstructionSpec(InstructionFormat.R, rd=bad))

    def test_unused_register_slots_are_ignored(self):
        plain = InstructionSpec(InstructionFormat.U, rd=3, immediate=0x12345, opcode='0110111')
        noisy = InstructionSpec(InstructionFormat.U, rd=3, immediate=0x12345, opcode='0110111',
                                rs1=7, rs2=9, funct3='111', funct7='1111111')
        self.assertEqual(encode(plain), encode(noisy))
        self.assertEqual(noisy.unused_registers(), ['rs1', 'rs2'])
        self.assertEqual(noisy.normalized().rs1, None)
        self.assertEqual(noisy.normalized().rd, 3)

    def test_grouped(self):
        result = encode(InstructionSpec(InstructionFormat.I, rs1=2, rd=5, immediate=4,
                                        opcode='0000011', funct3='010'))
        self.assertEqual(result.grouped(), '0000 0000 0100 0001 0010 0010 1000 0011')

    def test_immediate_fits(self):
        fmt = InstructionFormat
        isa = ImmediateLayout.ISA
        cases = [
            (InstructionSpec(fmt.I, immediate=-2048), True),
            (InstructionSpec(fmt.I, immediate=4095), True),
            (InstructionSpec(fmt.I, immediate=-2049), False),
            (InstructionSpec(fmt.I, immediate=-3000), False),
            (InstructionSpec(fmt.I, immediate=4096), False),
            (InstructionSpec(fmt.B, immediate=5000), False),
            (InstructionSpec(fmt.B, immediate=5000, layout=isa), True),
            (InstructionSpec(fmt.B, immediate=-4096, layout=isa), True),
            (InstructionSpec(fmt.B, immediate=-4098, layout=isa), False),
            (InstructionSpec(fmt.J, immediate=2097150, layout=isa), True),
            (InstructionSpec(fmt.R, immediate=1 << 40), True),
        ]
        for spec, fits in cases:
            with self.subTest(spec=spec):
                self.assertEqual(immediate_fits(spec), fits)

    def test_stored_immediate_drops_isa_bit_zero(self):
        spec = InstructionSpec(InstructionFormat.B, immediate=5000, layout=ImmediateLayout.ISA)
        self.assertEqual(stored_immediate(spec), 2500)
        self.assertEqual(stored_immediate(InstructionSpec(InstructionFormat.B, immediate=5000)), 5000)
        self.assertEqual(stored_immediate(InstructionSpec(InstructionFormat.S, immediate=-7,
                                                          layout=ImmediateLayout.ISA)), -7)


class TestDecompose(unittest.TestCase):
    def test_r_type_fields(self):
        spec = InstructionSpec(InstructionFormat.R, rs1=1, rs2=2, rd=3,
                               opcode='0110011', funct3='000', funct7='0000000')
        fields = decompose(spec)
        self.assertEqual([f.width for f in fields], [7, 5, 5, 3, 5, 7])
        self.assertEqual([f.name for f in fields], ['funct7', 'rs2', 'rs1', 'funct3', 'rd', 'opcode'])
        self.assertEqual(''.join(f.value for f in fields), encode(spec).binary)
        self.assertEqual(encode(spec).hex, '0x002081B3')

    def test_field_names(self):
        expected = {
            (InstructionFormat.I, ImmediateLayout.CONTIGUOUS): ['imm[11:0]', 'rs1', 'funct3', 'rd', 'opcode'],
            (InstructionFormat.S, ImmediateLayout.CONTIGUOUS): ['imm[11:5]', 'rs2', 'rs1', 'funct3', 'imm[4:0]', 'opcode'],
            (InstructionFormat.B, ImmediateLayout.CONTIGUOUS): ['imm[11:5]', 'rs2', 'rs1', 'funct3', 'imm[4:0]', 'opcode'],
            (InstructionFormat.B, ImmediateLayout.ISA): ['imm[12|10:5]', 'rs2', 'rs1', 'funct3', 'imm[4:1|11]', 'opcode'],
            (InstructionFormat.U, ImmediateLayout.CONTIGUOUS): ['imm[31:12]', 'rd', 'opcode'],
            (InstructionFormat.J, ImmediateLayout.CONTIGUOUS): ['imm[19:0]', 'rd', 'opcode'],
            (InstructionFormat.J, ImmediateLayout.ISA): ['imm[20]', 'imm[10:1]', 'imm[11]', 'imm[19:12]', 'rd', 'opcode'],
        }
        for (format_, layout), names in expected.items():
            with self.subTest(format=format_, layout=layout):
                fields = decompose(InstructionSpec(format_, layout=layout))
                self.assertEqual([f.name for f in fields], names)

    def test_fields_concatenate_to_binary(self):
        for spec in sample_specs():
            with self.subTest(spec=spec):
                fields = decompose(spec)
                self.assertEqual(''.join(f.value for f in fields), encode(spec).binary)
                for field in fields:
                    self.assertEqual(len(field.value), field.width)

    def test_zero_immediate_gives_zero_fields(self):
        for format_ in ALL_FORMATS:
            for layout in ALL_LAYOUTS:
                spec = InstructionSpec(format_, rs1=31, rs2=31, rd=31, immediate=0,
                                       opcode='1111111', funct3='111', funct7='1111111', layout=layout)
                with self.subTest(format=format_, layout=layout):
                    for field in decompose(spec):
                        if field.category == 'imm':
                            self.assertEqual(field.value, '0' * field.width)

    def test_categories(self):
        categories = {'funct7', 'rs2', 'rs1', 'funct3', 'rd', 'opcode', 'imm'}
        for spec in sample_specs():
            for field in decompose(spec):
                self.assertIn(field.category, categories)


if __name__ == '__main__':
    unittest.main()
