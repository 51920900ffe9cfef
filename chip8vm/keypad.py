# The number of keys on the hexadecimal keypad (0x0 - 0xF)
NUM_KEYS = 0x10


class Keypad(object):
    """
    The state of the 16 key hexadecimal keypad. The host writes the flags
    as keys go up and down; the CPU only ever reads them.
    """
    def __init__(self):
        self.keypad_keys = [False] * NUM_KEYS

    def __getitem__(self, key):
        return self.is_pressed(key)

    def __setitem__(self, key, pressed):
        self.set_key(key, pressed)

    def set_key(self, key, pressed):
        self._check_key(key)
        self.keypad_keys[key] = bool(pressed)

    def press(self, key):
        self.set_key(key, True)

    def release(self, key):
        self.set_key(key, False)

    def is_pressed(self, key):
        self._check_key(key)
        return self.keypad_keys[key]

    def pressed_keys(self):
        """
        Returns the keys that are currently down, lowest first.
        """
        return [key for key, pressed in enumerate(self.keypad_keys) if pressed]

    def clear(self):
        self.keypad_keys = [False] * NUM_KEYS

    @staticmethod
    def _check_key(key):
        if not 0 <= key < NUM_KEYS:
            raise IndexError("Unknown key: {}".format(key))
