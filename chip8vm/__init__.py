from chip8vm.cpu import CPU, MAX_MEMORY, PROGRAM_COUNTER_START
from chip8vm.display import Display, DISPLAY_HEIGHT, DISPLAY_WIDTH
from chip8vm.exception import (Chip8Exception, RomTooLargeException, StackOverflowException,
                               StackUnderflowException, UnknownOpCodeException)
from chip8vm.font import FONT_ADDRESS, FONT_SPRITES
from chip8vm.instruction import decode, disassemble
from chip8vm.keypad import Keypad
from chip8vm.stack import Stack, STACK_SIZE
