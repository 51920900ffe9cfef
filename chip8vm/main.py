import argparse
import logging
import sys

import pygame

from chip8vm.cpu import CPU
from chip8vm.exception import Chip8Exception
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)

# A simple timer event used for the delay and sound timers
TIMER = pygame.USEREVENT + 1
# Delay timer decrement interval (in ms), roughly 60 times per second
DELAY_INTERVAL = 17

# Sets which keys on the keyboard map to the Chip 8 keys
KEY_MAPPINGS = {
    pygame.K_KP0: 0x0,
    pygame.K_KP1: 0x1,
    pygame.K_KP2: 0x2,
    pygame.K_KP3: 0x3,
    pygame.K_KP4: 0x4,
    pygame.K_KP5: 0x5,
    pygame.K_KP6: 0x6,
    pygame.K_KP7: 0x7,
    pygame.K_KP8: 0x8,
    pygame.K_KP9: 0x9,
    pygame.K_a: 0xA,
    pygame.K_b: 0xB,
    pygame.K_c: 0xC,
    pygame.K_d: 0xD,
    pygame.K_e: 0xE,
    pygame.K_f: 0xF,
}


def handle_events(project_cpu):
    """
    Drain the pygame event queue, feeding key changes to the CPU and
    decrementing the timers on every timer event.

    :param project_cpu: the CPU to update
    :return: False once the user asked to quit, True otherwise
    """
    running = True
    for event in pygame.event.get():
        if event.type == TIMER:
            project_cpu.cpu_decrement_timers()
        elif event.type == pygame.QUIT:
            running = False
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            if event.key == pygame.K_q:
                running = False
            elif event.key in KEY_MAPPINGS:
                pressed = event.type == pygame.KEYDOWN
                logger.debug("Key %X %s", KEY_MAPPINGS[event.key], "down" if pressed else "up")
                project_cpu.cpu_set_key(KEY_MAPPINGS[event.key], pressed)
    return running


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    project_screen = Screen(ratio=args.scale)
    project_screen.init_display()
    project_cpu = CPU(shift_legacy=args.legacy_shift, chip48_mode=args.chip48_jump)
    project_cpu.cpu_load_font()
    project_cpu.cpu_load_rom(args.rom)
    pygame.time.set_timer(TIMER, DELAY_INTERVAL)
    running = True

    while running:
        pygame.time.wait(args.op_delay)
        try:
            project_cpu.cpu_run(args.ticks)
        except Chip8Exception as error:
            logger.error("Halting at PC %03X: %s", project_cpu.cpu_registers['pc'], error)
            logger.debug("CPU state:\n%s", project_cpu)
            return 1

        running = handle_events(project_cpu)
        with project_cpu.cpu_lock:
            project_screen.draw_display(project_cpu.cpu_display)
        project_screen.update_screen()

    return 0


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator"
                    )
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is 10)", type=int, default=10, dest="scale")
    parser.add_argument(
        "-d", help="the number of milliseconds to wait between batches of "
                   "instructions (default is 1)",
        type=int, default=1, dest="op_delay")
    parser.add_argument(
        "-t", help="the number of instructions to execute per batch "
                   "(default is 10)", type=int, default=10, dest="ticks")
    parser.add_argument(
        "--legacy-shift", help="shift Vx in place for 8xy6 and 8xyE",
        action="store_true", dest="legacy_shift")
    parser.add_argument(
        "--no-chip48-jump", help="always use V0 for the Bnnn jump offset",
        action="store_false", dest="chip48_jump")
    parser.add_argument(
        "-v", help="log every executed instruction",
        action="store_true", dest="verbose")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s]:  %(message)s", stream=sys.stdout)
    pygame.init()
    try:
        return screen_cpu_connector(args)
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())
