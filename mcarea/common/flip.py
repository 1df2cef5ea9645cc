'''
We are implementing the selective byte-flipping of 32-bit words.

Some formats are written in the byte order of the machine that produced them
and don't say which one it is: the reader finds it out by looking at a value
that must be small, and then has to reverse the bytes of the words already
read. Words containing text must be left alone, so the flipping is done on
ranges of word indices.
'''
import logging
import struct
from typing import Iterable, List, Tuple

from bitstring import BitArray

from ..fields import WORD_SIZE


logger = logging.getLogger(__name__)


def flip(words: List[int], first: int, last: int) -> int:
    '''Reverse in place the bytes of the words with index in [first, last].

    The range is clipped to the length of the sequence, the number of
    flipped words is returned.'''
    last = min(last, len(words) - 1)
    if first > last:
        return 0

    n = last - first + 1
    fmt = '>%di' % n

    bits = BitArray(struct.pack(fmt, *words[first:last + 1]))
    count = bits.byteswap(WORD_SIZE)

    words[first:last + 1] = struct.unpack(fmt, bits.tobytes())

    return count


def flip_ranges(words: List[int], ranges: Iterable[Tuple[int, int]]) -> int:
    count = 0
    for first, last in ranges:
        count += flip(words, first, last)

    logger.debug('flipped %d words', count)

    return count
