"""
Project-wide constants for the sky_height decode-and-derive pipeline
"""  # noqa: D200, D212, D415

# ==============================================================================
# Payload Location
# ==============================================================================

# Base64 of '"body"'; always precedes the encoded block in valid payloads.
# The anchor is kept as part of the block handed to the decoder.
ANCHOR_TOKEN = "ImJvZHki"

# ==============================================================================
# Field Markers (matched case-insensitively against the decoded plaintext)
# ==============================================================================

HEIGHT_MARKER = "eigh"
SCALE_MARKER = "scale"

# Bare-integer scale fallback: search window after the marker, digit-run length
# and the fixed-point divisor the integer is assumed to be scaled by.
SCALE_INTEGER_WINDOW = 30
SCALE_INTEGER_MAX_DIGITS = 10
SCALE_INTEGER_DIVISOR = 1_000_000_000.0

# ==============================================================================
# Calibration Constants
# ==============================================================================

# Opaque values from an external domain model. Do not alter.
BASE_OFFSET = 7.6  # A
SCALE_COEFFICIENT = 8.3  # B
HEIGHT_COEFFICIENT = 3.0  # C
HEIGHT_BOUND = 2.0  # R, assumed height domain is [-R, R]

# ==============================================================================
# Simulation & Display
# ==============================================================================

DEFAULT_EXTREME_THRESHOLD = 1.96
DEFAULT_DISPLAY_PRECISION = 4
DEFAULT_PLAINTEXT_ENCODING = "latin-1"

# Every failure kind currently surfaces with the same text.
GENERIC_ERROR_MESSAGE = "Error: data format is incorrect."
NO_MEASUREMENT_MESSAGE = "Please calculate a height first."
