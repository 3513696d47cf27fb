# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs. Physical tuning that
experiments may vary lives in config.TuningConfig instead.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 1600  # Pixels (display units)
HEIGHT = 900  # Pixels (display units)

# Framerate
FPS = 60  # Frames per second

# Window Title
TITLE = "HDR Fireworks"

# Name of the application's dedicated logger.
LOGGER_NAME = "hdr_fireworks"

# Drawables
# Every drawable asks for the same render radius, in display units.
MAX_RENDER_RADIUS_DIPS = 1.0
DEFAULT_METERS_PER_DIP = 1.0

# HDR presentation
# scRGB convention: a channel value of 1.0 is reference white (80 nits).
SDR_WHITE_LEVEL = 1.0
TONE_MAPPING_MODES = ("clip", "reinhard")

# Bloom effect settings
BLOOM_RADIUS = 8 # Downscale factor for the glow pass. Larger is more diffuse.
BLOOM_INTENSITY = 60 # The brightness of the glow (0-255).
