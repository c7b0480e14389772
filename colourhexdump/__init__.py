__version__ = "0.1.0"

DEFAULT_COLOUR_PROFILE = "DefaultColourProfile"
DEFAULT_ROW_LENGTH = 32
DEFAULT_CHUNK_LENGTH = 4
