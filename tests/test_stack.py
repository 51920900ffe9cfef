import unittest

from chip8vm.exception import StackOverflowException, StackUnderflowException
from chip8vm.stack import Stack, STACK_SIZE


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack()

    def test_push_pop_round_trip(self):
        self.stack.push(0x202)
        self.assertEqual(self.stack.pop(), 0x202)
        self.assertEqual(len(self.stack), 0)

    def test_lifo_order(self):
        for address in range(STACK_SIZE):
            self.stack.push(0x200 + address * 2)
        popped = [self.stack.pop() for _ in range(STACK_SIZE)]
        self.assertEqual(popped, [0x200 + address * 2 for address in reversed(range(STACK_SIZE))])

    def test_overflow(self):
        for address in range(STACK_SIZE):
            self.stack.push(address)
        with self.assertRaises(StackOverflowException) as context:
            self.stack.push(0x300)
        self.assertEqual(context.exception.address, 0x300)
        self.assertEqual(len(self.stack), STACK_SIZE)
        self.assertEqual(self.stack.peek(), STACK_SIZE - 1)

    def test_underflow(self):
        with self.assertRaises(StackUnderflowException):
            self.stack.pop()

    def test_peek(self):
        with self.assertRaises(StackUnderflowException):
            self.stack.peek()
        self.stack.push(0x123)
        self.assertEqual(self.stack.peek(), 0x123)
        self.assertEqual(len(self.stack), 1)

    def test_clear(self):
        self.stack.push(1)
        self.stack.push(2)
        self.stack.clear()
        self.assertEqual(len(self.stack), 0)

    def test_address_is_stored_unchanged(self):
        self.stack.push(0xFFFF)
        self.assertEqual(self.stack.pop(), 0xFFFF)
        with self.assertRaises(AssertionError):
            self.stack.push(0x10000)
        self.assertEqual(len(self.stack), 0)

    def test_custom_capacity(self):
        stack = Stack(capacity=2)
        stack.push(1)
        stack.push(2)
        with self.assertRaises(StackOverflowException):
            stack.push(3)


if __name__ == "__main__":
    unittest.main()
