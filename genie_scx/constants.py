"""
Constants used across the scenario modules.

Consolidates magic numbers and version thresholds shared by the codecs.
"""

# Container format tokens known to the reader
KNOWN_FORMATS = (b"1.10", b"1.11", b"1.18", b"1.19", b"1.20", b"1.21", b"1.22")

# Legacy single-byte code page for scenario strings
SCX_ENCODING = 'cp1252'

# Number of player slots stored in per-player tables
MAX_PLAYERS = 16

# Player object lists: GAIA + 8 players
OBJECT_PLAYER_COUNT = 9

# Fixed-size player name slot (bytes, NUL padded)
PLAYER_NAME_LENGTH = 256

# Marker written between body sections
SECTION_SEPARATOR = -99

# Bitmap palette entries and DIB header size
PALETTE_SIZE = 256
DIB_HEADER_SIZE = 40

# Bytes per map tile (terrain, elevation, zone)
TILE_SIZE = 3

# Data version where StartingAge switched to the HD numbering
STARTING_AGE_MODERN_VERSION = 1.25

# Header version that adds DLC options
DLC_OPTIONS_HEADER_VERSION = 3

# DLC options version carrying an explicit data set field
DLC_OPTIONS_VERSIONED = 1000

# Data version thresholds for optional body fields
DATA_VERSION_OBJECT_FRAME = 1.12
DATA_VERSION_GARRISON = 1.13
DATA_VERSION_TRIGGERS = 1.14
DATA_VERSION_STRING_IDS = 1.16
DATA_VERSION_AI_MAP_TYPE = 1.21
DATA_VERSION_SCOUT_MESSAGE = 1.22

# Victory version that adds mode/score/time limit and entry groups
VICTORY_VERSION_EXTENDED = 2.0

# Trigger system version thresholds
TRIGGER_VERSION_ORDER = 1.4
TRIGGER_VERSION_OBJECTIVES_STATE = 1.5
TRIGGER_VERSION_MODERN_LAYOUT = 1.6

# Default raw deflate compression level for scenario bodies
DEFAULT_COMPRESSION_LEVEL = 9
