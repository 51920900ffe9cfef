# The height and width of the Chip 8 display in pixels
DISPLAY_HEIGHT = 32
DISPLAY_WIDTH = 64


class Display(object):
    """
    The Chip 8 framebuffer: a 64 x 32 grid of pixels that are either on
    (True) or off (False). The coordinate system starts with (0, 0) being
    the top left of the screen.

    The display does not wrap coordinates. Wrapping sprites around the
    edges is the job of the draw instruction; an out of range coordinate
    here is a caller error and raises IndexError.
    """
    def __init__(self, width=DISPLAY_WIDTH, height=DISPLAY_HEIGHT):
        self.display_width = width
        self.display_height = height
        self.display_pixels = [[False] * width for _ in range(height)]

    def get(self, x_axis_position, y_axis_position):
        """
        Returns whether the pixel at the specified location is on.

        :param x_axis_position: the x coordinate to check
        :param y_axis_position: the y coordinate to check
        :return: True if the pixel is on
        """
        self._check_position(x_axis_position, y_axis_position)
        return self.display_pixels[y_axis_position][x_axis_position]

    def flip(self, x_axis_position, y_axis_position):
        """
        Toggle the pixel at the specified location.

        :param x_axis_position: the x coordinate of the pixel
        :param y_axis_position: the y coordinate of the pixel
        """
        self._check_position(x_axis_position, y_axis_position)
        row = self.display_pixels[y_axis_position]
        row[x_axis_position] = not row[x_axis_position]

    def clear(self, value=False):
        """
        Set every pixel to the given state.

        :param value: True to turn all pixels on, False to turn them off
        """
        value = bool(value)
        for row in self.display_pixels:
            for x_axis_position in range(self.display_width):
                row[x_axis_position] = value

    def rows(self):
        """
        Returns a copy of the pixel grid, one list of booleans per row.
        """
        return [list(row) for row in self.display_pixels]

    def _check_position(self, x_axis_position, y_axis_position):
        # Negative indexes would silently wrap on a Python list
        if not (0 <= x_axis_position < self.display_width and
                0 <= y_axis_position < self.display_height):
            raise IndexError("Pixel ({}, {}) is outside the {} x {} display".format(
                x_axis_position, y_axis_position, self.display_width, self.display_height))

    def __str__(self):
        return '\n'.join(
            ''.join('#' if pixel else '.' for pixel in row)
            for row in self.display_pixels)
