import unittest

from chip8vm.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()

    def test_starts_released(self):
        self.assertEqual(self.keypad.pressed_keys(), [])

    def test_press_and_release(self):
        self.keypad.press(0xA)
        self.assertTrue(self.keypad.is_pressed(0xA))
        self.assertTrue(self.keypad[0xA])
        self.keypad.release(0xA)
        self.assertFalse(self.keypad[0xA])

    def test_item_assignment(self):
        self.keypad[3] = True
        self.keypad[0xF] = 1
        self.assertEqual(self.keypad.pressed_keys(), [3, 0xF])

    def test_clear(self):
        self.keypad.press(1)
        self.keypad.clear()
        self.assertFalse(self.keypad[1])

    def test_unknown_key(self):
        with self.assertRaises(IndexError):
            self.keypad.press(0x10)
        with self.assertRaises(IndexError):
            self.keypad.is_pressed(-1)


if __name__ == "__main__":
    unittest.main()
