import io
import logging
import os
import struct
from dataclasses import dataclass
from typing import List

import numpy as np
import pytest

from mcarea.images.area.enum import DirectoryIndex as AD, MISSING


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

DIRECTORY_BYTES = 256

MEMO = b'SYNTHETIC AREA FOR TESTING ONLY '
TEXT_WORDS = {
    AD.SOURCE_TYPE: b'VISR',
    AD.CAL_TYPE: b'RAW ',
    AD.ORIGINAL_SOURCE_TYPE: b'GVAR',
}
SAMPLE_CODES = {1: 'u1', 2: 'i2', 4: 'i4'}


@dataclass
class SyntheticArea:
    raw: bytes
    directory: List[int]  # as the decoder must return it
    pixels: np.ndarray    # [band][line][element]
    line_length: int
    data_offset: int


def pattern(num_bands, num_lines, num_elements, width):
    '''values spanning the whole range of the sample width'''
    index = np.arange(num_bands * num_lines * num_elements, dtype=np.int64).reshape(
        num_bands, num_lines, num_elements)
    if width == 1:
        values = (index * 37 + 11) % 256
    elif width == 2:
        values = (index * 1237 + 5) % 65536 - 32768
    else:
        values = index * 100003 - 2 ** 30

    return values


def encode_words(words, byte_order):
    '''ints are written in the byte order of the file, bytes (text) as they are'''
    return b''.join(
        _ if isinstance(_, bytes) else struct.pack(byte_order + 'i', _) for _ in words
    )


def as_read(words):
    '''what the words look like to the reader: text is read big-endian'''
    return [struct.unpack('>i', _)[0] if isinstance(_, bytes) else _ for _ in words]


def build_area(num_lines=4, num_elements=5, num_bands=1, width=1, pixels=None,
               nav=None, cal=None, aux=None, doc_length=0, cal_length=0, level_length=0,
               validity_code=0, prefix_size=None, byte_order='>', overrides=None):
    if pixels is None:
        pixels = pattern(num_bands, num_lines, num_elements, width)
    pixels = np.asarray(pixels)

    line_prefix_length = doc_length + cal_length + level_length + (4 if validity_code else 0)
    line_length = line_prefix_length + num_bands * num_elements * width

    words = [0] * 64
    words[AD.VERSION] = 4
    words[AD.SENSOR_ID] = 70
    words[AD.IMAGE_DATE] = 124100
    words[AD.IMAGE_TIME] = 173000
    words[AD.START_LINE] = 1001
    words[AD.START_ELEMENT] = 2001
    words[AD.NUM_LINES] = num_lines
    words[AD.NUM_ELEMENTS] = num_elements
    words[AD.DATA_WIDTH] = width
    words[AD.LINE_RES] = 4
    words[AD.ELEMENT_RES] = 4
    words[AD.NUM_BANDS] = num_bands
    words[AD.PREFIX_SIZE] = line_prefix_length if prefix_size is None else prefix_size
    words[AD.BAND_MAP] = (1 << num_bands) - 1
    for i in range(8):
        words[AD.MEMO + i] = MEMO[i * 4:i * 4 + 4]
    for index, text in TEXT_WORDS.items():
        words[index] = text
    words[AD.VALIDITY_CODE] = validity_code
    words[AD.DOC_LENGTH] = doc_length
    words[AD.CAL_LENGTH] = cal_length
    words[AD.LEVEL_LENGTH] = level_length
    words[AD.NAV_OFFSET] = 0
    words[AD.CAL_OFFSET] = 0
    words[AD.AUX_OFFSET] = 0

    blocks = b''
    offset = DIRECTORY_BYTES
    for index, block in ((AD.NAV_OFFSET, nav), (AD.CAL_OFFSET, cal), (AD.AUX_OFFSET, aux)):
        if block is None:
            continue
        words[index] = offset
        encoded = encode_words(block, byte_order)
        blocks += encoded
        offset += len(encoded)

    data_offset = offset
    words[AD.DATA_OFFSET] = data_offset

    for index, value in (overrides or {}).items():
        words[index] = value

    dtype = np.dtype(byte_order + SAMPLE_CODES[width])
    data = b''
    for line in range(num_lines):
        data += b'\xaa' * line_prefix_length
        # band varies fastest
        data += pixels[:, line, :].T.astype(dtype).tobytes()

    raw = encode_words(words, byte_order) + blocks + data

    return SyntheticArea(
        raw=raw,
        directory=as_read(words),
        pixels=pixels,
        line_length=line_length,
        data_offset=data_offset,
    )


class CountingReader(object):
    '''File-like double counting the reads that hit it.'''

    def __init__(self, data):
        self._obj = io.BytesIO(data)
        self.reads = 0
        self.bytes_read = 0

    @property
    def closed(self):
        return self._obj.closed

    def read(self, n=-1):
        self.reads += 1
        data = self._obj.read(n)
        self.bytes_read += len(data)
        return data

    def close(self):
        self._obj.close()


@pytest.fixture
def make_area():
    return build_area


@pytest.fixture
def counting_reader():
    return CountingReader


@pytest.fixture
def missing():
    return MISSING
