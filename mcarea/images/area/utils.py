import logging
from typing import List

from ...common.flip import flip, flip_ranges
from .enum import MISSING, NavigationFamily


logger = logging.getLogger(__name__)


# words 24-31 contain the memo, 51-52 the cal info and 56 the original
# source type: all ASCII
DIRECTORY_FLIP_RANGES = (
    (0, 19),
    (21, 23),
    (32, 50),
    (53, 55),
    (57, 63),
)

# the first word is always the navigation type in ASCII
NAVIGATION_FLIP_RANGES = {
    NavigationFamily.GVAR: (
        (2, 126),
        (129, 254),
        (257, 382),
        (385, 510),
        (513, 638),
    ),
    NavigationFamily.DMSP: (
        (1, 43),
        (45, 51),
    ),
    NavigationFamily.POES: (
        (1, 119),
    ),
}


def is_present(offset: int) -> bool:
    return offset > 0 and offset != MISSING


def flip_directory(words: List[int]) -> int:
    count = flip_ranges(words, DIRECTORY_FLIP_RANGES)

    # word 20 may contain characters -- if small integer, flip it
    if (words[20] & 0xffff) == 0:
        count += flip(words, 20, 20)

    return count


def flip_navigation(words: List[int]) -> int:
    if not words:
        return 0

    family = NavigationFamily(words[0])
    ranges = NAVIGATION_FLIP_RANGES.get(family, ((1, len(words) - 1),))

    logger.debug('flipping navigation of type %s', family.name)

    return flip_ranges(words, ranges)


def word_to_text(word: int) -> str:
    return (word & 0xffffffff).to_bytes(4, 'big').decode('latin1')
