'''
This module contains the constant values used throughout the area format.

Note: use IntEnum for the positions into the directory so that they can be
used directly as indices.
'''
from enum import Enum, IntEnum


# 0x80808080 read as a signed word
MISSING = -0x7f7f7f80

DIRECTORY_SIZE = 64

# the version is a small number, anything bigger means the words are flipped
MAX_VERSION = 255


class DirectoryIndex(IntEnum):
    STATUS               = 0
    VERSION              = 1
    SENSOR_ID            = 2
    IMAGE_DATE           = 3
    IMAGE_TIME           = 4
    START_LINE           = 5
    START_ELEMENT        = 6
    NUM_LINES            = 8
    NUM_ELEMENTS         = 9
    DATA_WIDTH           = 10
    LINE_RES             = 11
    ELEMENT_RES          = 12
    NUM_BANDS            = 13
    PREFIX_SIZE          = 14
    PROJECT              = 15
    CREATION_DATE        = 16
    CREATION_TIME        = 17
    BAND_MAP             = 18
    MEMO                 = 24  # 8 words of text
    DATA_OFFSET          = 33
    NAV_OFFSET           = 34
    VALIDITY_CODE        = 35
    START_SCAN           = 47
    DOC_LENGTH           = 48
    CAL_LENGTH           = 49
    LEVEL_LENGTH         = 50
    SOURCE_TYPE          = 51  # text
    CAL_TYPE             = 52  # text
    AVERAGING_FLAG       = 53
    ORIGINAL_SOURCE_TYPE = 56  # text
    AUX_OFFSET           = 59
    CAL_OFFSET           = 62


MEMO_WORDS = 8


class NavigationFamily(Enum):
    '''The first word of the navigation block is the name of the navigation
    type in ASCII: it tells the layout of the block.'''
    GVAR    = 0x47564152
    DMSP    = 0x444d5250
    POES    = 0x5449524f
    UNKNOWN = None

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class SampleWidth(IntEnum):
    BYTE  = 1
    SHORT = 2
    INT   = 4
