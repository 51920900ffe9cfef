class Chip8Exception(Exception):
    """
    Base class for the failures a single CPU tick can report to the host.
    """


class UnknownOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions. The offending 16-bit word
    is kept on the exception for diagnostics.
    """
    def __init__(self, op_code):
        Chip8Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))
        self.op_code = op_code


class StackOverflowException(Chip8Exception):
    """
    Raised when a subroutine call would push past the capacity of the stack.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Stack overflow while pushing return address {:03X}".format(address))
        self.address = address


class StackUnderflowException(Chip8Exception):
    """
    Raised when returning from a subroutine with an empty stack.
    """
    def __init__(self):
        Chip8Exception.__init__(self, "Stack underflow: return without a matching call")


class RomTooLargeException(Chip8Exception):
    """
    Raised when a program image does not fit into memory at the requested
    offset.
    """
    def __init__(self, size, offset):
        Chip8Exception.__init__(
            self, "ROM of {} bytes does not fit in memory at {:03X}".format(size, offset))
        self.size = size
        self.offset = offset
