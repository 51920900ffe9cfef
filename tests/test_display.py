import unittest

from chip8vm.display import Display, DISPLAY_HEIGHT, DISPLAY_WIDTH


class TestDisplay(unittest.TestCase):
    def setUp(self):
        self.display = Display()

    def all_pixels(self):
        return [self.display.get(x, y)
                for y in range(DISPLAY_HEIGHT) for x in range(DISPLAY_WIDTH)]

    def test_starts_blank(self):
        self.assertFalse(any(self.all_pixels()))

    def test_clear(self):
        self.display.clear(True)
        self.assertTrue(all(self.all_pixels()))
        self.display.clear(False)
        self.assertFalse(any(self.all_pixels()))

    def test_flip(self):
        self.display.flip(3, 4)
        self.assertTrue(self.display.get(3, 4))
        self.assertFalse(self.display.get(4, 3))

    def test_double_flip_restores_pixel(self):
        self.display.flip(63, 31)
        self.display.flip(63, 31)
        self.assertFalse(self.display.get(63, 31))

    def test_does_not_wrap(self):
        for x_pos, y_pos in ((DISPLAY_WIDTH, 0), (0, DISPLAY_HEIGHT), (-1, 0), (0, -1)):
            with self.assertRaises(IndexError):
                self.display.get(x_pos, y_pos)
            with self.assertRaises(IndexError):
                self.display.flip(x_pos, y_pos)

    def test_rows_is_a_copy(self):
        rows = self.display.rows()
        self.assertEqual(len(rows), DISPLAY_HEIGHT)
        self.assertEqual(len(rows[0]), DISPLAY_WIDTH)
        rows[0][0] = True
        self.assertFalse(self.display.get(0, 0))

    def test_str(self):
        display = Display(width=3, height=2)
        display.flip(1, 1)
        self.assertEqual(str(display), "...\n.#.")


if __name__ == "__main__":
    unittest.main()
