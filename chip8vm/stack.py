from chip8vm.exception import StackOverflowException, StackUnderflowException

# The number of return addresses the Chip 8 stack can hold
STACK_SIZE = 16


class Stack(object):
    """
    A bounded LIFO of 16-bit return addresses. Pushing onto a full stack
    or popping from an empty one raises instead of truncating or returning
    a default value.
    """
    def __init__(self, capacity=STACK_SIZE):
        self.stack_capacity = capacity
        self.stack_addresses = []

    def __len__(self):
        return len(self.stack_addresses)

    def push(self, address):
        """
        Push a return address.

        :param address: the address to save
        :raises StackOverflowException: if the stack is already full
        """
        assert 0 <= address <= 0xFFFF, "return address {:#x} does not fit in 16 bits".format(address)
        if len(self.stack_addresses) >= self.stack_capacity:
            raise StackOverflowException(address)
        self.stack_addresses.append(address)

    def pop(self):
        """
        Remove and return the most recently pushed address.

        :raises StackUnderflowException: if the stack is empty
        """
        if not self.stack_addresses:
            raise StackUnderflowException()
        return self.stack_addresses.pop()

    def peek(self):
        """
        Return the most recently pushed address without removing it.
        """
        if not self.stack_addresses:
            raise StackUnderflowException()
        return self.stack_addresses[-1]

    def clear(self):
        self.stack_addresses = []
