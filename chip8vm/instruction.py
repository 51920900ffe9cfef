"""
Decoding of raw Chip 8 op-codes into instruction values.

Every op-code is two bytes long and stored big-endian in memory. The most
significant nibble selects the operation group; the remaining nibbles hold
the operands, laid out as follows depending on the group:

   Bits:  15-12     11-8      7-4       3-0
          group      x         y         n
          group      x      value     value
          group   address  address  address

Groups 0x8, 0xE and 0xF overload the low nibble (or low byte) as a
sub-selector. Any op-code that does not map onto a known instruction raises
UnknownOpCodeException, so decode() is defined for all 65536 inputs.
"""
from collections import namedtuple

from chip8vm.exception import UnknownOpCodeException

# Masks used to pull the operand fields out of an op-code
GROUP_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
NIBBLE_MASK = 0x000F
BYTE_MASK = 0x00FF
ADDRESS_MASK = 0x0FFF

# Size of a single op-code in bytes
INSTRUCTION_SIZE = 2


class _Mnemonic(object):
    """
    Renders an instruction as its assembler mnemonic, using the fields of
    the named tuple it is mixed into.
    """
    __slots__ = ()
    mnemonic = ''

    def __str__(self):
        return self.mnemonic.format(**self._asdict())

    # Plain tuples compare equal across classes (Jump(5) == Call(5)), so the
    # variant takes part in equality and hashing.
    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(self))


class ClearDisplay(_Mnemonic, namedtuple('ClearDisplay', [])):
    """00E0 - Clear the display."""
    __slots__ = ()
    mnemonic = 'CLS'


class Return(_Mnemonic, namedtuple('Return', [])):
    """00EE - Return from subroutine."""
    __slots__ = ()
    mnemonic = 'RTS'


class Jump(_Mnemonic, namedtuple('Jump', ['address'])):
    """1nnn - Jump to address."""
    __slots__ = ()
    mnemonic = 'JUMP {address:03X}'


class Call(_Mnemonic, namedtuple('Call', ['address'])):
    """2nnn - Call subroutine at address."""
    __slots__ = ()
    mnemonic = 'CALL {address:03X}'


class SkipIfEqualValue(_Mnemonic, namedtuple('SkipIfEqualValue', ['x', 'value'])):
    """3xnn - Skip next instruction if Vx == nn."""
    __slots__ = ()
    mnemonic = 'SKE  V{x:X}, {value:02X}'


class SkipIfNotEqualValue(_Mnemonic, namedtuple('SkipIfNotEqualValue', ['x', 'value'])):
    """4xnn - Skip next instruction if Vx != nn."""
    __slots__ = ()
    mnemonic = 'SKNE V{x:X}, {value:02X}'


class SkipIfEqualRegister(_Mnemonic, namedtuple('SkipIfEqualRegister', ['x', 'y'])):
    """5xy0 - Skip next instruction if Vx == Vy."""
    __slots__ = ()
    mnemonic = 'SKE  V{x:X}, V{y:X}'


class LoadValue(_Mnemonic, namedtuple('LoadValue', ['x', 'value'])):
    """6xnn - Vx = nn."""
    __slots__ = ()
    mnemonic = 'LOAD V{x:X}, {value:02X}'


class AddValue(_Mnemonic, namedtuple('AddValue', ['x', 'value'])):
    """7xnn - Vx += nn, without touching VF."""
    __slots__ = ()
    mnemonic = 'ADD  V{x:X}, {value:02X}'


class Move(_Mnemonic, namedtuple('Move', ['x', 'y'])):
    """8xy0 - Vx = Vy."""
    __slots__ = ()
    mnemonic = 'LOAD V{x:X}, V{y:X}'


class Or(_Mnemonic, namedtuple('Or', ['x', 'y'])):
    """8xy1 - Vx |= Vy."""
    __slots__ = ()
    mnemonic = 'OR   V{x:X}, V{y:X}'


class And(_Mnemonic, namedtuple('And', ['x', 'y'])):
    """8xy2 - Vx &= Vy."""
    __slots__ = ()
    mnemonic = 'AND  V{x:X}, V{y:X}'


class Xor(_Mnemonic, namedtuple('Xor', ['x', 'y'])):
    """8xy3 - Vx ^= Vy."""
    __slots__ = ()
    mnemonic = 'XOR  V{x:X}, V{y:X}'


class AddRegister(_Mnemonic, namedtuple('AddRegister', ['x', 'y'])):
    """8xy4 - Vx += Vy, VF = carry."""
    __slots__ = ()
    mnemonic = 'ADD  V{x:X}, V{y:X}'


class SubtractRegister(_Mnemonic, namedtuple('SubtractRegister', ['x', 'y'])):
    """8xy5 - Vx -= Vy, VF = NOT borrow."""
    __slots__ = ()
    mnemonic = 'SUB  V{x:X}, V{y:X}'


class ShiftRight(_Mnemonic, namedtuple('ShiftRight', ['x', 'y'])):
    """8xy6 - Vx = source >> 1, VF = bit shifted out."""
    __slots__ = ()
    mnemonic = 'SHR  V{x:X}, V{y:X}'


class SubtractReverse(_Mnemonic, namedtuple('SubtractReverse', ['x', 'y'])):
    """8xy7 - Vx = Vy - Vx, VF = NOT borrow."""
    __slots__ = ()
    mnemonic = 'SUBN V{x:X}, V{y:X}'


class ShiftLeft(_Mnemonic, namedtuple('ShiftLeft', ['x', 'y'])):
    """8xyE - Vx = source << 1, VF = low bit of source."""
    __slots__ = ()
    mnemonic = 'SHL  V{x:X}, V{y:X}'


class SkipIfNotEqualRegister(_Mnemonic, namedtuple('SkipIfNotEqualRegister', ['x', 'y'])):
    """9xy0 - Skip next instruction if Vx != Vy."""
    __slots__ = ()
    mnemonic = 'SKNE V{x:X}, V{y:X}'


class LoadIndex(_Mnemonic, namedtuple('LoadIndex', ['address'])):
    """Annn - I = nnn."""
    __slots__ = ()
    mnemonic = 'LOAD I, {address:03X}'


class JumpWithOffset(_Mnemonic, namedtuple('JumpWithOffset', ['x', 'address'])):
    """Bnnn - Jump to nnn plus V0 (or Vx in CHIP-48 mode)."""
    __slots__ = ()
    mnemonic = 'JUMP [V{x:X}] + {address:03X}'


class Random(_Mnemonic, namedtuple('Random', ['x', 'value'])):
    """Cxnn - Vx = random byte AND nn."""
    __slots__ = ()
    mnemonic = 'RAND V{x:X}, {value:02X}'


class Draw(_Mnemonic, namedtuple('Draw', ['x', 'y', 'height'])):
    """Dxyn - Draw an 8 x n sprite from [I] at (Vx, Vy)."""
    __slots__ = ()
    mnemonic = 'DRAW V{x:X}, V{y:X}, {height:X}'


class SkipIfKeyPressed(_Mnemonic, namedtuple('SkipIfKeyPressed', ['x'])):
    """Ex9E - Skip next instruction if key Vx is down."""
    __slots__ = ()
    mnemonic = 'SKPR V{x:X}'


class SkipIfKeyNotPressed(_Mnemonic, namedtuple('SkipIfKeyNotPressed', ['x'])):
    """ExA1 - Skip next instruction if key Vx is up."""
    __slots__ = ()
    mnemonic = 'SKUP V{x:X}'


class LoadDelayTimer(_Mnemonic, namedtuple('LoadDelayTimer', ['x'])):
    """Fx07 - Vx = delay timer."""
    __slots__ = ()
    mnemonic = 'LOAD V{x:X}, DELAY'


class WaitForKey(_Mnemonic, namedtuple('WaitForKey', ['x'])):
    """Fx0A - Re-execute until key Vx is down."""
    __slots__ = ()
    mnemonic = 'KEYD V{x:X}'


class SetDelayTimer(_Mnemonic, namedtuple('SetDelayTimer', ['x'])):
    """Fx15 - delay timer = Vx."""
    __slots__ = ()
    mnemonic = 'LOAD DELAY, V{x:X}'


class SetSoundTimer(_Mnemonic, namedtuple('SetSoundTimer', ['x'])):
    """Fx18 - sound timer = Vx."""
    __slots__ = ()
    mnemonic = 'LOAD SOUND, V{x:X}'


class AddIndex(_Mnemonic, namedtuple('AddIndex', ['x'])):
    """Fx1E - I += Vx, VF = 1 when I leaves the 12-bit address range."""
    __slots__ = ()
    mnemonic = 'ADD  I, V{x:X}'


class LoadFontSprite(_Mnemonic, namedtuple('LoadFontSprite', ['x'])):
    """Fx29 - I = address of the font glyph for the low nibble of Vx."""
    __slots__ = ()
    mnemonic = 'LOAD I, SPRITE V{x:X}'


class StoreBCD(_Mnemonic, namedtuple('StoreBCD', ['x'])):
    """Fx33 - [I], [I+1], [I+2] = hundreds, tens, ones of Vx."""
    __slots__ = ()
    mnemonic = 'BCD  V{x:X}'


class StoreRegisters(_Mnemonic, namedtuple('StoreRegisters', ['x'])):
    """Fx55 - Store V0..Vx at [I]."""
    __slots__ = ()
    mnemonic = 'STOR [I], V{x:X}'


class LoadRegisters(_Mnemonic, namedtuple('LoadRegisters', ['x'])):
    """Fx65 - Load V0..Vx from [I]."""
    __slots__ = ()
    mnemonic = 'LOAD V{x:X}, [I]'


def _x(op_code):
    return (op_code & X_MASK) >> 8


def _y(op_code):
    return (op_code & Y_MASK) >> 4


# This set of operations is selected when the op-code starts with 8, keyed
# on the low nibble (e.g. op-code 8xy4 decodes to AddRegister)
LOGICAL_OPERATION_LOOKUP = {
    0x0: Move,                       # 8xy0 - LOAD Vx, Vy
    0x1: Or,                         # 8xy1 - OR   Vx, Vy
    0x2: And,                        # 8xy2 - AND  Vx, Vy
    0x3: Xor,                        # 8xy3 - XOR  Vx, Vy
    0x4: AddRegister,                # 8xy4 - ADD  Vx, Vy
    0x5: SubtractRegister,           # 8xy5 - SUB  Vx, Vy
    0x6: ShiftRight,                 # 8xy6 - SHR  Vx, Vy
    0x7: SubtractReverse,            # 8xy7 - SUBN Vx, Vy
    0xE: ShiftLeft,                  # 8xyE - SHL  Vx, Vy
}

# Selected when the op-code starts with E, keyed on the low byte
KEYBOARD_OPERATION_LOOKUP = {
    0x9E: SkipIfKeyPressed,          # Ex9E - SKPR Vx
    0xA1: SkipIfKeyNotPressed,       # ExA1 - SKUP Vx
}

# Selected when the op-code starts with F, keyed on the low byte
MISC_OPERATION_LOOKUP = {
    0x07: LoadDelayTimer,            # Fx07 - LOAD Vx, DELAY
    0x0A: WaitForKey,                # Fx0A - KEYD Vx
    0x15: SetDelayTimer,             # Fx15 - LOAD DELAY, Vx
    0x18: SetSoundTimer,             # Fx18 - LOAD SOUND, Vx
    0x1E: AddIndex,                  # Fx1E - ADD  I, Vx
    0x29: LoadFontSprite,            # Fx29 - LOAD I, SPRITE Vx
    0x33: StoreBCD,                  # Fx33 - BCD  Vx
    0x55: StoreRegisters,            # Fx55 - STOR [I], Vx
    0x65: LoadRegisters,             # Fx65 - LOAD Vx, [I]
}


def _decode_clear_return(op_code):
    if op_code == 0x00E0:
        return ClearDisplay()
    if op_code == 0x00EE:
        return Return()
    raise UnknownOpCodeException(op_code)


def _decode_logical(op_code):
    try:
        instruction_class = LOGICAL_OPERATION_LOOKUP[op_code & NIBBLE_MASK]
    except KeyError:
        raise UnknownOpCodeException(op_code)
    return instruction_class(_x(op_code), _y(op_code))


def _decode_keyboard(op_code):
    try:
        instruction_class = KEYBOARD_OPERATION_LOOKUP[op_code & BYTE_MASK]
    except KeyError:
        raise UnknownOpCodeException(op_code)
    return instruction_class(_x(op_code))


def _decode_misc(op_code):
    try:
        instruction_class = MISC_OPERATION_LOOKUP[op_code & BYTE_MASK]
    except KeyError:
        raise UnknownOpCodeException(op_code)
    return instruction_class(_x(op_code))


# The operation lookup table is keyed on the most significant nibble of the
# op-code (e.g. op-code 8xy4 is handed to _decode_logical)
OPERATION_LOOKUP = {
    0x0: _decode_clear_return,
    0x1: lambda op_code: Jump(op_code & ADDRESS_MASK),
    0x2: lambda op_code: Call(op_code & ADDRESS_MASK),
    0x3: lambda op_code: SkipIfEqualValue(_x(op_code), op_code & BYTE_MASK),
    0x4: lambda op_code: SkipIfNotEqualValue(_x(op_code), op_code & BYTE_MASK),
    0x5: lambda op_code: SkipIfEqualRegister(_x(op_code), _y(op_code)),
    0x6: lambda op_code: LoadValue(_x(op_code), op_code & BYTE_MASK),
    0x7: lambda op_code: AddValue(_x(op_code), op_code & BYTE_MASK),
    0x8: _decode_logical,
    0x9: lambda op_code: SkipIfNotEqualRegister(_x(op_code), _y(op_code)),
    0xA: lambda op_code: LoadIndex(op_code & ADDRESS_MASK),
    0xB: lambda op_code: JumpWithOffset(_x(op_code), op_code & ADDRESS_MASK),
    0xC: lambda op_code: Random(_x(op_code), op_code & BYTE_MASK),
    0xD: lambda op_code: Draw(_x(op_code), _y(op_code), op_code & NIBBLE_MASK),
    0xE: _decode_keyboard,
    0xF: _decode_misc,
}


def decode(op_code):
    """
    Decode a 16-bit op-code into one of the instruction values above.

    :param op_code: the raw op-code, 0x0000 to 0xFFFF
    :return: the decoded instruction
    :raises UnknownOpCodeException: if the op-code is not supported
    """
    if not 0 <= op_code <= 0xFFFF:
        raise UnknownOpCodeException(op_code)
    return OPERATION_LOOKUP[(op_code & GROUP_MASK) >> 12](op_code)


def disassemble(data, offset=0x200):
    """
    Walk a program image two bytes at a time and decode each word. A
    trailing odd byte is ignored. Words that fail to decode (usually sprite
    data mixed in with the code) yield None instead of an instruction.

    :param data: the program image
    :param offset: the address the image is loaded at
    :return: a generator of (address, op_code, instruction) tuples
    """
    for index in range(0, len(data) - 1, INSTRUCTION_SIZE):
        op_code = (data[index] << 8) | data[index + 1]
        try:
            instruction = decode(op_code)
        except UnknownOpCodeException:
            instruction = None
        yield offset + index, op_code, instruction
