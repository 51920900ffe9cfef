import unittest

from chip8vm import instruction as ops
from chip8vm.exception import UnknownOpCodeException
from chip8vm.instruction import decode, disassemble


class TestDecode(unittest.TestCase):
    def test_clear_and_return(self):
        self.assertEqual(decode(0x00E0), ops.ClearDisplay())
        self.assertEqual(decode(0x00EE), ops.Return())

    def test_other_system_calls_are_unsupported(self):
        for op_code in (0x0000, 0x0123, 0x00E1, 0x00FF, 0x0FFF):
            with self.assertRaises(UnknownOpCodeException):
                decode(op_code)

    def test_jump(self):
        self.assertEqual(decode(0x1234), ops.Jump(0x234))

    def test_call(self):
        self.assertEqual(decode(0x2ABC), ops.Call(0xABC))

    def test_fixed_families(self):
        self.assertEqual(decode(0x3A42), ops.SkipIfEqualValue(0xA, 0x42))
        self.assertEqual(decode(0x4B17), ops.SkipIfNotEqualValue(0xB, 0x17))
        self.assertEqual(decode(0x5120), ops.SkipIfEqualRegister(1, 2))
        self.assertEqual(decode(0x6CFF), ops.LoadValue(0xC, 0xFF))
        self.assertEqual(decode(0x7D01), ops.AddValue(0xD, 0x01))
        self.assertEqual(decode(0x9340), ops.SkipIfNotEqualRegister(3, 4))
        self.assertEqual(decode(0xA2F0), ops.LoadIndex(0x2F0))
        self.assertEqual(decode(0xB234), ops.JumpWithOffset(2, 0x234))
        self.assertEqual(decode(0xC50F), ops.Random(5, 0x0F))
        self.assertEqual(decode(0xD125), ops.Draw(1, 2, 5))

    def test_register_skips_ignore_low_nibble(self):
        self.assertEqual(decode(0x5127), ops.SkipIfEqualRegister(1, 2))
        self.assertEqual(decode(0x934F), ops.SkipIfNotEqualRegister(3, 4))

    def test_logical_group(self):
        self.assertEqual(decode(0x8010), ops.Move(0, 1))
        self.assertEqual(decode(0x8011), ops.Or(0, 1))
        self.assertEqual(decode(0x8012), ops.And(0, 1))
        self.assertEqual(decode(0x8013), ops.Xor(0, 1))
        self.assertEqual(decode(0x8014), ops.AddRegister(0, 1))
        self.assertEqual(decode(0x8015), ops.SubtractRegister(0, 1))
        self.assertEqual(decode(0x8016), ops.ShiftRight(0, 1))
        self.assertEqual(decode(0x8017), ops.SubtractReverse(0, 1))
        self.assertEqual(decode(0x801E), ops.ShiftLeft(0, 1))

    def test_unknown_logical_operations(self):
        for low_nibble in (0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF):
            with self.assertRaises(UnknownOpCodeException):
                decode(0x8010 | low_nibble)

    def test_keyboard_group(self):
        self.assertEqual(decode(0xE39E), ops.SkipIfKeyPressed(3))
        self.assertEqual(decode(0xE3A1), ops.SkipIfKeyNotPressed(3))
        with self.assertRaises(UnknownOpCodeException):
            decode(0xE39F)

    def test_misc_group(self):
        self.assertEqual(decode(0xF107), ops.LoadDelayTimer(1))
        self.assertEqual(decode(0xF20A), ops.WaitForKey(2))
        self.assertEqual(decode(0xF315), ops.SetDelayTimer(3))
        self.assertEqual(decode(0xF418), ops.SetSoundTimer(4))
        self.assertEqual(decode(0xF51E), ops.AddIndex(5))
        self.assertEqual(decode(0xF629), ops.LoadFontSprite(6))
        self.assertEqual(decode(0xF733), ops.StoreBCD(7))
        self.assertEqual(decode(0xF855), ops.StoreRegisters(8))
        self.assertEqual(decode(0xF965), ops.LoadRegisters(9))

    def test_ffff_is_unsupported(self):
        with self.assertRaises(UnknownOpCodeException) as context:
            decode(0xFFFF)
        self.assertEqual(context.exception.op_code, 0xFFFF)
        self.assertIn("FFFF", str(context.exception))

    def test_out_of_range_word(self):
        with self.assertRaises(UnknownOpCodeException):
            decode(0x10000)

    def test_decode_is_total(self):
        decoded = 0
        for op_code in range(0x10000):
            try:
                result = decode(op_code)
            except UnknownOpCodeException as error:
                self.assertEqual(error.op_code, op_code)
            else:
                self.assertIsInstance(result, ops._Mnemonic)
                decoded += 1
        # 2 in group 0, 12 full groups, 9 logical ops, 2 key ops, 9 misc ops
        self.assertEqual(decoded, 2 + 12 * 0x1000 + 9 * 0x100 + 2 * 0x10 + 9 * 0x10)

    def test_decode_is_deterministic(self):
        for op_code in (0x00E0, 0x1234, 0x8014, 0xD125, 0xF033):
            self.assertEqual(decode(op_code), decode(op_code))


class TestInstructionValues(unittest.TestCase):
    def test_variants_do_not_compare_equal(self):
        self.assertNotEqual(ops.Jump(0x200), ops.Call(0x200))
        self.assertNotEqual(ops.ClearDisplay(), ops.Return())
        self.assertNotEqual(hash(ops.Jump(0x200)), hash(ops.Call(0x200)))

    def test_instructions_are_immutable(self):
        with self.assertRaises(AttributeError):
            decode(0x1234).address = 0x300

    def test_mnemonics(self):
        self.assertEqual(str(decode(0x00E0)), "CLS")
        self.assertEqual(str(decode(0x8AB4)), "ADD  VA, VB")
        self.assertEqual(str(decode(0xA2F0)), "LOAD I, 2F0")
        self.assertEqual(str(decode(0xD125)), "DRAW V1, V2, 5")
        self.assertEqual(str(decode(0xF20A)), "KEYD V2")


class TestDisassemble(unittest.TestCase):
    def test_listing(self):
        listing = list(disassemble(bytes([0x00, 0xE0, 0x12, 0x00, 0xFF, 0xFF, 0x01])))
        self.assertEqual(listing, [
            (0x200, 0x00E0, ops.ClearDisplay()),
            (0x202, 0x1200, ops.Jump(0x200)),
            (0x204, 0xFFFF, None),
        ])

    def test_offset(self):
        listing = list(disassemble(bytes([0x60, 0x01]), offset=0x300))
        self.assertEqual(listing, [(0x300, 0x6001, ops.LoadValue(0, 1))])


if __name__ == "__main__":
    unittest.main()
