import unittest

import pygame

from chip8vm.cpu import CPU
from chip8vm.display import Display
from chip8vm.main import TIMER, handle_events, parse_arguments
from chip8vm.screen import Screen


class TestScreen(unittest.TestCase):
    def setUp(self):
        pygame.init()
        self.screen = Screen(ratio=2)
        self.screen.init_display()

    def tearDown(self):
        pygame.quit()

    def test_window_size(self):
        self.assertEqual(self.screen.screen_surface.get_size(), (128, 64))

    def test_draw_display(self):
        display = Display()
        display.flip(3, 4)
        self.screen.draw_display(display)
        self.assertTrue(self.screen.get_screen_pixel(3, 4))
        self.assertFalse(self.screen.get_screen_pixel(4, 3))

    def test_redraw_clears_old_pixels(self):
        display = Display()
        display.flip(1, 1)
        self.screen.draw_display(display)
        display.flip(1, 1)
        self.screen.draw_display(display)
        self.assertFalse(self.screen.get_screen_pixel(1, 1))


class TestHostEvents(unittest.TestCase):
    def setUp(self):
        pygame.init()
        Screen(ratio=1).init_display()
        pygame.event.clear()
        self.cpu = CPU()

    def tearDown(self):
        pygame.quit()

    def test_key_down_and_up(self):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
        self.assertTrue(handle_events(self.cpu))
        self.assertTrue(self.cpu.cpu_keypad[0xA])
        pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_a))
        handle_events(self.cpu)
        self.assertFalse(self.cpu.cpu_keypad[0xA])

    def test_timer_event(self):
        self.cpu.cpu_timers['delay'] = 5
        pygame.event.post(pygame.event.Event(TIMER))
        handle_events(self.cpu)
        self.assertEqual(self.cpu.cpu_timers['delay'], 4)

    def test_quit(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        self.assertFalse(handle_events(self.cpu))


class TestArguments(unittest.TestCase):
    def test_defaults(self):
        args = parse_arguments(["game.ch8"])
        self.assertEqual(args.rom, "game.ch8")
        self.assertEqual(args.scale, 10)
        self.assertFalse(args.legacy_shift)
        self.assertTrue(args.chip48_jump)
        self.assertFalse(args.verbose)

    def test_quirk_flags(self):
        args = parse_arguments(["game.ch8", "--legacy-shift", "--no-chip48-jump", "-t", "20"])
        self.assertTrue(args.legacy_shift)
        self.assertFalse(args.chip48_jump)
        self.assertEqual(args.ticks, 20)


if __name__ == "__main__":
    unittest.main()
