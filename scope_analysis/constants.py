"""Shared constants for scope analysis."""

# ITU-R BT.709 luminance coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

# BT.709 chroma divisors, scale Cb/Cr into [-0.5, 0.5]
CB_DIVISOR = 1.8556
CR_DIVISOR = 1.5748

HISTOGRAM_BINS = 256
MAX_CHANNEL_VALUE = 255
BYTES_PER_PIXEL = 4

# RGBA channel offsets
RED_OFFSET = 0
GREEN_OFFSET = 1
BLUE_OFFSET = 2
ALPHA_OFFSET = 3

DEFAULT_WAVEFORM_WIDTH = 256
DEFAULT_VECTORSCOPE_SIZE = 256
DEFAULT_SAMPLE_RATE = 1

# Roughly a 720p frame; larger frames get a wider stride when auto sampling
DEFAULT_TARGET_SAMPLE_PIXELS = 1280 * 720

EXPOSURE_MIDPOINT = 128.0
UNDEREXPOSURE_THRESHOLD = -0.3
OVEREXPOSURE_THRESHOLD = 0.3

DEFAULT_SETTINGS_FILE = "scope_analysis_settings.json"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
