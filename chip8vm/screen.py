from pygame import display, Color, draw

from chip8vm.display import DISPLAY_HEIGHT, DISPLAY_WIDTH

SCREEN_NAME = 'CHIP8 Emulator'

# The colors of the pixels to draw. The Chip 8 supports two colors: off
# and on. The format of the colors is in RGBA format.
PIXEL_COLORS = {
    False: Color(0, 0, 0, 255),
    True: Color(250, 250, 250, 255)
}


class Screen(object):
    """
    Paints a Display onto a pygame window. The original Chip 8 screen was
    64 x 32 with 2 colors, which is quite small, so every pixel is drawn as
    a ratio x ratio square.
    """
    def __init__(self, ratio, screen_height=DISPLAY_HEIGHT, screen_width=DISPLAY_WIDTH):
        """
        :param ratio: the scaling factor to apply to the screen
        :param screen_height: the height of the screen in Chip 8 pixels
        :param screen_width: the width of the screen in Chip 8 pixels
        """
        self.screen_height = screen_height
        self.screen_width = screen_width
        self.scaling_ratio = ratio
        self.screen_surface = None

    def init_display(self):
        """
        Attempts to initialize a window with the scaled height and width.
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)))
        display.set_caption(SCREEN_NAME)
        self.clear_screen()
        display.flip()

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_on):
        """
        Paint a single scaled pixel. The change only becomes visible after
        update_screen().
        """
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[bool(pixel_on)],
                  (x_axis_position * self.scaling_ratio,
                   y_axis_position * self.scaling_ratio,
                   self.scaling_ratio, self.scaling_ratio))

    def draw_display(self, chip8_display):
        """
        Paint every pixel of the Display onto the window surface.

        :param chip8_display: the Display to render
        """
        self.clear_screen()
        for y_axis_position, row in enumerate(chip8_display.rows()):
            for x_axis_position, pixel_on in enumerate(row):
                if pixel_on:
                    self.draw_screen_pixel(x_axis_position, y_axis_position, True)

    def get_screen_pixel(self, x_axis_position, y_axis_position):
        """
        Returns whether the painted pixel at the specified location is on.
        """
        pixel_color = self.screen_surface.get_at(
            (x_axis_position * self.scaling_ratio, y_axis_position * self.scaling_ratio))
        return pixel_color != PIXEL_COLORS[False]

    def clear_screen(self):
        self.screen_surface.fill(PIXEL_COLORS[False])

    @staticmethod
    def update_screen():
        """
        Updates the window by swapping the back buffer and screen buffer.
        """
        display.flip()
