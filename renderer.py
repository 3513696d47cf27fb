# renderer.py

import logging
import numpy as np
import pygame

import constants

logger = logging.getLogger(constants.LOGGER_NAME)


class HdrRenderer:
    """
    A floating-point canvas that stores emissive colors unclamped and only
    converts to 8-bit sRGB when the frame is presented.

    Data Contract:
    - Inputs:
        - width, height (int): Canvas size in display units.
        - tone_mapping (str): "clip" or "reinhard", applied at presentation.
        - white_level (float): Channel value that maps to display white.
    - Outputs: to_srgb8() returns a (width, height, 3) uint8 array laid out for
      pygame.surfarray.
    - Side Effects: fill_circle() and clear() mutate the framebuffer.
    - Invariants: The framebuffer never clamps; values above 1.0 survive until
      to_srgb8().
    """
    def __init__(self, width: int, height: int, tone_mapping: str = "reinhard",
                 white_level: float = constants.SDR_WHITE_LEVEL):
        if tone_mapping not in constants.TONE_MAPPING_MODES:
            raise ValueError(
                f"Unknown tone mapping '{tone_mapping}', expected one of {constants.TONE_MAPPING_MODES}"
            )
        if white_level <= 0:
            raise ValueError(f"white_level must be positive, got {white_level}")
        self.width = width
        self.height = height
        self.tone_mapping = tone_mapping
        self.white_level = white_level
        # Indexed [x, y, channel] to match pygame.surfarray.
        self.framebuffer = np.zeros((width, height, 3), dtype=np.float32)
        self._xs = np.arange(width, dtype=np.float32)[:, np.newaxis]
        self._ys = np.arange(height, dtype=np.float32)[np.newaxis, :]

        logger.info(f"HdrRenderer created: {width}x{height}, tone mapping '{tone_mapping}'.")

    def clear(self, color=(0.0, 0.0, 0.0)):
        self.framebuffer[:] = color

    def fill_circle(self, center, radius: float, color):
        """
        Fills a circle with an opaque emissive color. Pixels whose centers lie
        within radius of center are overwritten. A circle smaller than a pixel
        still lights the pixel it falls in.
        """
        cx, cy = float(center[0]), float(center[1])
        x0 = max(int(np.floor(cx - radius)), 0)
        x1 = min(int(np.ceil(cx + radius)) + 1, self.width)
        y0 = max(int(np.floor(cy - radius)), 0)
        y1 = min(int(np.ceil(cy + radius)) + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return # Entirely off-canvas

        # Pixel centers are at integer + 0.5.
        dx = self._xs[x0:x1] + 0.5 - cx
        dy = self._ys[:, y0:y1] + 0.5 - cy
        mask = dx * dx + dy * dy <= radius * radius
        if not mask.any():
            px, py = int(np.floor(cx)), int(np.floor(cy))
            if 0 <= px < self.width and 0 <= py < self.height:
                self.framebuffer[px, py] = color
            return
        self.framebuffer[x0:x1, y0:y1][mask] = color

    def draw(self, render_state):
        """Draws a drawable's RenderState snapshot."""
        self.fill_circle(render_state.display_position, render_state.requested_radius, render_state.color)

    def tone_map(self) -> np.ndarray:
        """Maps the linear framebuffer to [0, 1] display-referred values."""
        scaled = np.maximum(self.framebuffer / self.white_level, 0.0)
        if self.tone_mapping == "reinhard":
            scaled = scaled / (1.0 + scaled)
        return np.clip(scaled, 0.0, 1.0)

    def to_srgb8(self) -> np.ndarray:
        linear = self.tone_map()
        # sRGB transfer function
        encoded = np.where(
            linear <= 0.0031308,
            12.92 * linear,
            1.055 * np.power(linear, 1.0 / 2.4) - 0.055
        )
        return np.round(encoded * 255.0).astype(np.uint8)

    def present(self, surface: pygame.Surface):
        pygame.surfarray.blit_array(surface, self.to_srgb8())
