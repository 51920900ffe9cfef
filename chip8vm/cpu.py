import logging
import random
import threading

from chip8vm import instruction as ops
from chip8vm.display import Display
from chip8vm.exception import RomTooLargeException
from chip8vm.font import FONT_ADDRESS, FONT_SPRITE_SIZE, FONT_SPRITES
from chip8vm.keypad import Keypad
from chip8vm.stack import Stack

logger = logging.getLogger(__name__)

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where programs are loaded and where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# VF doubles as the carry, borrow and collision flag
FLAG_REGISTER = 0xF

# The highest address reachable with 12 bits
ADDRESS_LIMIT = 0xFFF

# Width of a sprite row in pixels
SPRITE_WIDTH = 8

# Program counter increments returned by the instruction handlers
NEXT_INSTRUCTION = ops.INSTRUCTION_SIZE
SKIP_INSTRUCTION = 2 * ops.INSTRUCTION_SIZE
NO_INCREMENT = 0


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    To summarize these sources, the Chip 8 has:

        * 4096 bytes of memory
        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)
        * a call stack of 16 return addresses

    ** VF is a special register - it is used to store the overflow bit

    Two historical quirks are configurable per instance:

        shift_legacy  - 8xy6 / 8xyE shift Vx in place and ignore Vy
        chip48_mode   - Bnnn jumps to Vx + nnn instead of V0 + nnn

    Note that both shifts store bit 0 of Vx in VF in either mode. For
    the left shift this deviates from the original interpreter, which
    stores bit 7, and is kept on purpose for compatibility.
    """
    def __init__(self, display=None, keypad=None, shift_legacy=False,
                 chip48_mode=True, cpu_random=None):
        """
        Initialize the Chip8 CPU. The display and keypad are created when
        they are not passed in, so the host can share its own instances.

        :param display: the Display to draw sprites on
        :param keypad: the Keypad the host writes key state into
        :param shift_legacy: shift Vx in place instead of shifting Vy into Vx
        :param chip48_mode: jump with offset uses Vx instead of V0
        :param cpu_random: a random.Random-like object used by RAND
        """
        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. The timers are loaded with a value
        # and then decremented 60 times per second by the host.
        self.cpu_timers = {
            'delay': 0,
            'sound': 0,
        }

        # Defines the general purpose, index and program counter registers.
        self.cpu_registers = {
            'v': [],
            'index': 0,
            'pc': 0,
        }

        # Each decoded instruction is executed by the handler registered for
        # its class. Handlers return how far the program counter advances.
        self.cpu_operation_lookup = {
            ops.ClearDisplay: self.cpu_clear_display,
            ops.Return: self.cpu_return_from_subroutine,
            ops.Jump: self.cpu_jump_to_address,
            ops.Call: self.cpu_jump_to_subroutine,
            ops.SkipIfEqualValue: self.cpu_skip_if_reg_equal_val,
            ops.SkipIfNotEqualValue: self.cpu_skip_if_reg_not_equal_val,
            ops.SkipIfEqualRegister: self.cpu_skip_if_reg_equal_reg,
            ops.LoadValue: self.cpu_move_value_to_reg,
            ops.AddValue: self.cpu_add_value_to_reg,
            ops.Move: self.cpu_move_reg_into_reg,
            ops.Or: self.cpu_logical_or,
            ops.And: self.cpu_logical_and,
            ops.Xor: self.cpu_exclusive_or,
            ops.AddRegister: self.cpu_add_reg_to_reg,
            ops.SubtractRegister: self.cpu_subtract_reg_from_reg,
            ops.ShiftRight: self.cpu_right_shift_reg,
            ops.SubtractReverse: self.cpu_subtract_reg_from_reg1,
            ops.ShiftLeft: self.cpu_left_shift_reg,
            ops.SkipIfNotEqualRegister: self.cpu_skip_if_reg_not_equal_reg,
            ops.LoadIndex: self.cpu_load_index_reg_with_value,
            ops.JumpWithOffset: self.cpu_jump_to_reg_plus_value,
            ops.Random: self.cpu_generate_random_number,
            ops.Draw: self.cpu_draw_sprite,
            ops.SkipIfKeyPressed: self.cpu_skip_if_key_pressed,
            ops.SkipIfKeyNotPressed: self.cpu_skip_if_key_not_pressed,
            ops.LoadDelayTimer: self.cpu_move_delay_timer_into_reg,
            ops.WaitForKey: self.cpu_wait_for_keypress,
            ops.SetDelayTimer: self.cpu_move_reg_into_delay_timer,
            ops.SetSoundTimer: self.cpu_move_reg_into_sound_timer,
            ops.AddIndex: self.cpu_add_reg_into_index,
            ops.LoadFontSprite: self.cpu_load_index_with_reg_sprite,
            ops.StoreBCD: self.cpu_store_bcd_in_memory,
            ops.StoreRegisters: self.cpu_store_regs_in_memory,
            ops.LoadRegisters: self.cpu_read_regs_from_memory,
        }
        self.cpu_shift_legacy = shift_legacy
        self.cpu_chip48_mode = chip48_mode
        self.cpu_random = cpu_random if cpu_random is not None else random.Random()
        self.cpu_display = display if display is not None else Display()
        self.cpu_keypad = keypad if keypad is not None else Keypad()
        self.cpu_stack = Stack()
        self.cpu_memory = bytearray(MAX_MEMORY)

        # Guards all of the state above for hosts that tick on one thread
        # and read the display or write keys on another.
        self.cpu_lock = threading.RLock()
        self.cpu_reset()

    def __str__(self):
        val = 'PC: {:4X}  I: {:4X}  SP: {:2d}\n'.format(
            self.cpu_registers['pc'], self.cpu_registers['index'], len(self.cpu_stack))
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'DT: {:2X}  ST: {:2X}\n'.format(
            self.cpu_timers['delay'], self.cpu_timers['sound'])
        return val

    def cpu_fetch(self):
        """
        Read the op-code at the program counter (high byte first) and decode
        it. Nothing is modified, and the program counter is not advanced.

        :return: the decoded instruction
        :raises UnknownOpCodeException: if the op-code is not supported
        """
        cpu_pc = self.cpu_registers['pc']
        self._check_memory_range(cpu_pc, ops.INSTRUCTION_SIZE)
        cpu_operand = (self.cpu_memory[cpu_pc] << 8) | self.cpu_memory[cpu_pc + 1]
        return ops.decode(cpu_operand)

    def cpu_tick(self):
        """
        Perform a single fetch, decode and execute step. If the op-code can't
        be decoded, or the stack over- or underflows, the exception is raised
        to the caller and the CPU state is left as it was before the tick.

        :return: the instruction that was executed
        """
        with self.cpu_lock:
            cpu_instruction = self.cpu_fetch()
            self.cpu_execute_instruction(cpu_instruction)
            return cpu_instruction

    def cpu_execute_instruction(self, cpu_instruction):
        """
        Apply the effect of an already decoded instruction as if it had been
        fetched from the current program counter, then advance the program
        counter by the increment the instruction asks for.

        :param cpu_instruction: the instruction to execute
        """
        with self.cpu_lock:
            cpu_pc = self.cpu_registers['pc']
            increment = self.cpu_operation_lookup[type(cpu_instruction)](cpu_instruction)
            self.cpu_registers['pc'] += increment
            logger.debug("%03X: %-20s -> PC %03X", cpu_pc, cpu_instruction,
                         self.cpu_registers['pc'])

    def cpu_run(self, cycles):
        """
        Execute the given number of ticks.

        :param cycles: the number of instructions to execute
        """
        for _ in range(cycles):
            self.cpu_tick()

    def cpu_set_key(self, key, pressed):
        """
        Record a key going down or up. Taken under the CPU lock so a key
        never changes in the middle of a tick.
        """
        with self.cpu_lock:
            self.cpu_keypad.set_key(key, pressed)

    def cpu_clear_display(self, cpu_instruction):
        """
        00E0 - CLS

        Turn off every pixel on the display.
        """
        self.cpu_display.clear(False)
        return NEXT_INSTRUCTION

    def cpu_return_from_subroutine(self, cpu_instruction):
        """
        00EE - RTS

        Pop the return address off the stack and continue from there.
        """
        self.cpu_registers['pc'] = self.cpu_stack.pop()
        return NO_INCREMENT

    def cpu_jump_to_address(self, cpu_instruction):
        """
        1nnn - JUMP nnn

        Jump to address.
        """
        self.cpu_registers['pc'] = cpu_instruction.address
        return NO_INCREMENT

    def cpu_jump_to_subroutine(self, cpu_instruction):
        """
        2nnn - CALL nnn

        Jump to subroutine. The address of the instruction following the
        call is saved on the stack first; if the stack is full nothing else
        happens.
        """
        self.cpu_stack.push(self.cpu_registers['pc'] + ops.INSTRUCTION_SIZE)
        self.cpu_registers['pc'] = cpu_instruction.address
        return NO_INCREMENT

    def cpu_skip_if_reg_equal_val(self, cpu_instruction):
        """
        3xnn - SKE Vx, nn

        Skip if register contents equal to constant value.
        """
        if self.cpu_registers['v'][cpu_instruction.x] == cpu_instruction.value:
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_skip_if_reg_not_equal_val(self, cpu_instruction):
        """
        4xnn - SKNE Vx, nn

        Skip if register contents not equal to constant value.
        """
        if self.cpu_registers['v'][cpu_instruction.x] != cpu_instruction.value:
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_skip_if_reg_equal_reg(self, cpu_instruction):
        """
        5xy0 - SKE Vx, Vy

        Skip if register x is equal to register y.
        """
        cpu_v = self.cpu_registers['v']
        if cpu_v[cpu_instruction.x] == cpu_v[cpu_instruction.y]:
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_move_value_to_reg(self, cpu_instruction):
        """
        6xnn - LOAD Vx, nn
        """
        self.cpu_registers['v'][cpu_instruction.x] = cpu_instruction.value
        return NEXT_INSTRUCTION

    def cpu_add_value_to_reg(self, cpu_instruction):
        """
        7xnn - ADD Vx, nn

        Add the constant value to the register, wrapping at 256. Unlike
        8xy4, VF is never touched.
        """
        cpu_v = self.cpu_registers['v']
        cpu_v[cpu_instruction.x] = (cpu_v[cpu_instruction.x] + cpu_instruction.value) & 0xFF
        return NEXT_INSTRUCTION

    def cpu_move_reg_into_reg(self, cpu_instruction):
        """
        8xy0 - LOAD Vx, Vy
        """
        cpu_v = self.cpu_registers['v']
        cpu_v[cpu_instruction.x] = cpu_v[cpu_instruction.y]
        return NEXT_INSTRUCTION

    def cpu_logical_or(self, cpu_instruction):
        """
        8xy1 - OR Vx, Vy
        """
        cpu_v = self.cpu_registers['v']
        cpu_v[cpu_instruction.x] |= cpu_v[cpu_instruction.y]
        return NEXT_INSTRUCTION

    def cpu_logical_and(self, cpu_instruction):
        """
        8xy2 - AND Vx, Vy
        """
        cpu_v = self.cpu_registers['v']
        cpu_v[cpu_instruction.x] &= cpu_v[cpu_instruction.y]
        return NEXT_INSTRUCTION

    def cpu_exclusive_or(self, cpu_instruction):
        """
        8xy3 - XOR Vx, Vy
        """
        cpu_v = self.cpu_registers['v']
        cpu_v[cpu_instruction.x] ^= cpu_v[cpu_instruction.y]
        return NEXT_INSTRUCTION

    def cpu_add_reg_to_reg(self, cpu_instruction):
        """
        8xy4 - ADD Vx, Vy

        Add register y to register x. VF is set to 1 if the sum does not fit
        in a byte, 0 otherwise; the wrapped sum is then stored in register x.
        """
        cpu_v = self.cpu_registers['v']
        temp = cpu_v[cpu_instruction.x] + cpu_v[cpu_instruction.y]
        cpu_v[FLAG_REGISTER] = 1 if temp > 0xFF else 0
        cpu_v[cpu_instruction.x] = temp & 0xFF
        return NEXT_INSTRUCTION

    def cpu_subtract_reg_from_reg(self, cpu_instruction):
        """
        8xy5 - SUB Vx, Vy

        Subtract register y from register x. VF is set to 1 if register x
        is greater than register y (no borrow), 0 otherwise.
        """
        cpu_v = self.cpu_registers['v']
        cpu_x_reg = cpu_v[cpu_instruction.x]
        cpu_y_reg = cpu_v[cpu_instruction.y]
        cpu_v[FLAG_REGISTER] = 1 if cpu_x_reg > cpu_y_reg else 0
        cpu_v[cpu_instruction.x] = (cpu_x_reg - cpu_y_reg) & 0xFF
        return NEXT_INSTRUCTION

    def cpu_right_shift_reg(self, cpu_instruction):
        """
        8xy6 - SHR Vx, Vy

        Shift the source 1 bit to the right into register x. The source is
        register x in legacy shift mode and register y otherwise. VF always
        receives bit 0 of register x, whichever register is shifted.
        """
        cpu_source = self._shift_source(cpu_instruction)
        cpu_v = self.cpu_registers['v']
        cpu_v[FLAG_REGISTER] = cpu_v[cpu_instruction.x] & 0x1
        cpu_v[cpu_instruction.x] = cpu_source >> 1
        return NEXT_INSTRUCTION

    def cpu_subtract_reg_from_reg1(self, cpu_instruction):
        """
        8xy7 - SUBN Vx, Vy

        Subtract register x from register y and store the result in register
        x. VF is set to 1 if register y is greater than register x.
        """
        cpu_v = self.cpu_registers['v']
        cpu_x_reg = cpu_v[cpu_instruction.x]
        cpu_y_reg = cpu_v[cpu_instruction.y]
        cpu_v[FLAG_REGISTER] = 1 if cpu_y_reg > cpu_x_reg else 0
        cpu_v[cpu_instruction.x] = (cpu_y_reg - cpu_x_reg) & 0xFF
        return NEXT_INSTRUCTION

    def cpu_left_shift_reg(self, cpu_instruction):
        """
        8xyE - SHL Vx, Vy

        Shift the source 1 bit to the left into register x. VF receives bit
        0 (not bit 7) of register x, in both shift modes.
        """
        cpu_source = self._shift_source(cpu_instruction)
        cpu_v = self.cpu_registers['v']
        cpu_v[FLAG_REGISTER] = cpu_v[cpu_instruction.x] & 0x1
        cpu_v[cpu_instruction.x] = (cpu_source << 1) & 0xFF
        return NEXT_INSTRUCTION

    def _shift_source(self, cpu_instruction):
        if self.cpu_shift_legacy:
            return self.cpu_registers['v'][cpu_instruction.x]
        return self.cpu_registers['v'][cpu_instruction.y]

    def cpu_skip_if_reg_not_equal_reg(self, cpu_instruction):
        """
        9xy0 - SKNE Vx, Vy

        Skip if register x is not equal to register y.
        """
        cpu_v = self.cpu_registers['v']
        if cpu_v[cpu_instruction.x] != cpu_v[cpu_instruction.y]:
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_load_index_reg_with_value(self, cpu_instruction):
        """
        Annn - LOAD I, nnn
        """
        self.cpu_registers['index'] = cpu_instruction.address
        return NEXT_INSTRUCTION

    def cpu_jump_to_reg_plus_value(self, cpu_instruction):
        """
        Bnnn - JUMP [V0] + nnn

        Jump to the address plus the value of a register. In CHIP-48 mode
        the register is the one encoded in the second nibble (Bxnn jumps to
        Vx + xnn); otherwise V0 is always used.
        """
        cpu_register = cpu_instruction.x if self.cpu_chip48_mode else 0
        self.cpu_registers['pc'] = self.cpu_registers['v'][cpu_register] + cpu_instruction.address
        return NO_INCREMENT

    def cpu_generate_random_number(self, cpu_instruction):
        """
        Cxnn - RAND Vx, nn

        A random number between 0 and 255 is generated, ANDed with the
        constant value and stored in register x.
        """
        self.cpu_registers['v'][cpu_instruction.x] = \
            self.cpu_random.randint(0, 255) & cpu_instruction.value
        return NEXT_INSTRUCTION

    def cpu_draw_sprite(self, cpu_instruction):
        """
        Dxyn - DRAW Vx, Vy, n

        Draws the n byte sprite pointed to by the index register at the
        coordinates held in registers x and y. Drawing is done via an XOR
        routine: every set bit of the sprite toggles the pixel under it.
        Each sprite row is 8 bits wide, most significant bit on the left.
        For example, assume that the index register pointed to the
        following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'.
        Every pixel wraps around the edges of the display on its own, so a
        sprite drawn near the right edge continues on the left. VF is
        cleared first and set to 1 if any pixel was turned off.
        """
        cpu_v = self.cpu_registers['v']
        cpu_index = self.cpu_registers['index']
        self._check_memory_range(cpu_index, cpu_instruction.height)

        cpu_width = self.cpu_display.display_width
        cpu_height = self.cpu_display.display_height
        cpu_x_pos = cpu_v[cpu_instruction.x] % cpu_width
        cpu_y_pos = cpu_v[cpu_instruction.y] % cpu_height
        cpu_v[FLAG_REGISTER] = 0
        cpu_collision = 0

        for cpu_y_index in range(cpu_instruction.height):
            cpu_sprite_byte = self.cpu_memory[cpu_index + cpu_y_index]
            cpu_y_coord = (cpu_y_pos + cpu_y_index) % cpu_height

            for cpu_x_index in range(SPRITE_WIDTH):
                if not cpu_sprite_byte & (0x80 >> cpu_x_index):
                    continue
                cpu_x_coord = (cpu_x_pos + cpu_x_index) % cpu_width
                if self.cpu_display.get(cpu_x_coord, cpu_y_coord):
                    cpu_collision = 1
                self.cpu_display.flip(cpu_x_coord, cpu_y_coord)

        cpu_v[FLAG_REGISTER] = cpu_collision
        return NEXT_INSTRUCTION

    def cpu_skip_if_key_pressed(self, cpu_instruction):
        """
        Ex9E - SKPR Vx

        Skip the next instruction if the key in register x is down. Only the
        low nibble of the register selects the key.
        """
        if self.cpu_keypad.is_pressed(self.cpu_registers['v'][cpu_instruction.x] & 0xF):
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_skip_if_key_not_pressed(self, cpu_instruction):
        """
        ExA1 - SKUP Vx

        Skip the next instruction if the key in register x is up.
        """
        if not self.cpu_keypad.is_pressed(self.cpu_registers['v'][cpu_instruction.x] & 0xF):
            return SKIP_INSTRUCTION
        return NEXT_INSTRUCTION

    def cpu_move_delay_timer_into_reg(self, cpu_instruction):
        """
        Fx07 - LOAD Vx, DELAY
        """
        self.cpu_registers['v'][cpu_instruction.x] = self.cpu_timers['delay']
        return NEXT_INSTRUCTION

    def cpu_wait_for_keypress(self, cpu_instruction):
        """
        Fx0A - KEYD Vx

        Hold the program counter on this instruction until the key whose
        number is in register x is down. The CPU never blocks: every tick
        re-executes this instruction and checks the keypad again.
        """
        if self.cpu_keypad.is_pressed(self.cpu_registers['v'][cpu_instruction.x] & 0xF):
            return NEXT_INSTRUCTION
        return NO_INCREMENT

    def cpu_move_reg_into_delay_timer(self, cpu_instruction):
        """
        Fx15 - LOAD DELAY, Vx
        """
        self.cpu_timers['delay'] = self.cpu_registers['v'][cpu_instruction.x]
        return NEXT_INSTRUCTION

    def cpu_move_reg_into_sound_timer(self, cpu_instruction):
        """
        Fx18 - LOAD SOUND, Vx
        """
        self.cpu_timers['sound'] = self.cpu_registers['v'][cpu_instruction.x]
        return NEXT_INSTRUCTION

    def cpu_add_reg_into_index(self, cpu_instruction):
        """
        Fx1E - ADD I, Vx

        Add the value of register x into the index register. VF is set to 1
        when the result goes past the 12-bit address space (0xFFF), and to
        0 otherwise.
        """
        cpu_v = self.cpu_registers['v']
        temp = self.cpu_registers['index'] + cpu_v[cpu_instruction.x]
        self.cpu_registers['index'] = temp & 0xFFFF
        cpu_v[FLAG_REGISTER] = 1 if temp > ADDRESS_LIMIT else 0
        return NEXT_INSTRUCTION

    def cpu_load_index_with_reg_sprite(self, cpu_instruction):
        """
        Fx29 - LOAD I, SPRITE Vx

        Point the index register at the font glyph for the hex digit in the
        low nibble of register x. All glyphs are 5 bytes long.
        """
        cpu_digit = self.cpu_registers['v'][cpu_instruction.x] & 0xF
        self.cpu_registers['index'] = FONT_ADDRESS + cpu_digit * FONT_SPRITE_SIZE
        return NEXT_INSTRUCTION

    def cpu_store_bcd_in_memory(self, cpu_instruction):
        """
        Fx33 - BCD Vx

        Take the value stored in register x and place the digits in the
        following locations:

            hundreds   -> self.cpu_memory[index]
            tens       -> self.cpu_memory[index + 1]
            ones       -> self.cpu_memory[index + 2]
        """
        cpu_index = self.cpu_registers['index']
        self._check_memory_range(cpu_index, 3)
        cpu_bcd_value = self.cpu_registers['v'][cpu_instruction.x]
        self.cpu_memory[cpu_index] = cpu_bcd_value // 100
        self.cpu_memory[cpu_index + 1] = (cpu_bcd_value // 10) % 10
        self.cpu_memory[cpu_index + 2] = cpu_bcd_value % 10
        return NEXT_INSTRUCTION

    def cpu_store_regs_in_memory(self, cpu_instruction):
        """
        Fx55 - STOR [I], Vx

        Store registers V0 to Vx (inclusive) in the memory pointed to by the
        index register. The index register itself is left unchanged.
        """
        cpu_index = self.cpu_registers['index']
        self._check_memory_range(cpu_index, cpu_instruction.x + 1)
        for cpu_counter in range(cpu_instruction.x + 1):
            self.cpu_memory[cpu_index + cpu_counter] = self.cpu_registers['v'][cpu_counter]
        return NEXT_INSTRUCTION

    def cpu_read_regs_from_memory(self, cpu_instruction):
        """
        Fx65 - LOAD Vx, [I]

        Read registers V0 to Vx (inclusive) from the memory pointed to by the
        index register.
        """
        cpu_index = self.cpu_registers['index']
        self._check_memory_range(cpu_index, cpu_instruction.x + 1)
        for cpu_counter in range(cpu_instruction.x + 1):
            self.cpu_registers['v'][cpu_counter] = self.cpu_memory[cpu_index + cpu_counter]
        return NEXT_INSTRUCTION

    @staticmethod
    def _check_memory_range(cpu_address, cpu_length):
        assert 0 <= cpu_address and cpu_address + cpu_length <= MAX_MEMORY, \
            "Memory access {:X}+{} is outside of {} bytes of memory".format(
                cpu_address, cpu_length, MAX_MEMORY)

    def cpu_reset(self):
        """
        Reset the CPU by blanking out all registers, timers, the stack, the
        display and the keypad, and pointing the program counter at the
        program start. Memory is left as it is.
        """
        with self.cpu_lock:
            # Cleared in place so references held by the host stay valid
            self.cpu_registers['v'][:] = [0] * NUM_REGISTERS
            self.cpu_registers['pc'] = PROGRAM_COUNTER_START
            self.cpu_registers['index'] = 0
            self.cpu_timers['delay'] = 0
            self.cpu_timers['sound'] = 0
            self.cpu_stack.clear()
            self.cpu_display.clear(False)
            self.cpu_keypad.clear()

    def cpu_load_bytes(self, cpu_data, cpu_offset=PROGRAM_COUNTER_START):
        """
        Copy a program image into memory verbatim.

        :param cpu_data: the bytes to load
        :param cpu_offset: the location in memory at which to load them
        :raises RomTooLargeException: if the data does not fit in memory
        """
        if cpu_offset < 0 or cpu_offset + len(cpu_data) > MAX_MEMORY:
            raise RomTooLargeException(len(cpu_data), cpu_offset)
        with self.cpu_lock:
            self.cpu_memory[cpu_offset:cpu_offset + len(cpu_data)] = cpu_data

    def cpu_load_rom(self, filename, cpu_offset=PROGRAM_COUNTER_START):
        """
        Load the ROM indicated by the filename into memory.

        :param filename: the name of the file to load
        :param cpu_offset: the location in memory at which to load the ROM
        """
        with open(filename, 'rb') as rom_file:
            cpu_romdata = rom_file.read()
        self.cpu_load_bytes(cpu_romdata, cpu_offset)
        logger.info("Loaded %d bytes from %s at %03X", len(cpu_romdata), filename, cpu_offset)

    def cpu_load_font(self, cpu_offset=FONT_ADDRESS):
        """
        Load the built-in hex digit glyphs into memory.
        """
        self.cpu_load_bytes(FONT_SPRITES, cpu_offset)

    def cpu_decrement_timers(self):
        """
        Decrement both the sound and delay timer.
        """
        with self.cpu_lock:
            if self.cpu_timers['delay'] != 0:
                self.cpu_timers['delay'] -= 1

            if self.cpu_timers['sound'] != 0:
                self.cpu_timers['sound'] -= 1
