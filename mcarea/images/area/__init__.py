'''
# McIDAS area format

Format used to store satellite imagery together with the navigation (how to
map lines and elements to the Earth) and the calibration (how to map the
values to physical quantities) of the image.

The general structure is the following

  .----------------------------.
  | directory (64 words)       |
  | navigation block           |
  | calibration block          |
  | auxiliary block            |
  | data: line 1               |
  |   [prefix][samples]        |
  |  ...                       |
  | data: line N               |
  '----------------------------'

The directory stores the offsets of the blocks, not their lengths: these are
derived from the offset of the next block present. Every block except the
directory is optional.

Words are big-endian, unless the file was written on a little-endian machine:
there isn't a flag for that, but the version number is always small so if it
looks big we know we have to flip the bytes of the words (except the ones
containing text).

Within a line the samples are interleaved by band, i.e. the band varies
fastest.

This implementation does not do calibration (other than accounting for its
presence in the data). Also, the validity code is not checked on each line.
'''
import logging
import threading

import numpy as np

from ... import fields
from ...core import Chunk
from ...exceptions import (
    BlockReadError,
    ChunkUnpackException,
    DirectoryReadError,
    LayoutError,
    LineDecodeFault,
    MissingBlockError,
    NotReady,
    UnpackException,
)
from ...properties import DecodeState, Dependency
from ...streams import Stream
from .cube import PixelCube, PIXEL_DTYPE
from .enum import (
    DirectoryIndex as AD,
    DIRECTORY_SIZE,
    MAX_VERSION,
    MEMO_WORDS,
    NavigationFamily,
    SampleWidth,
)
from .layout import AreaLayout
from .sources import open_source
from .utils import flip_directory, flip_navigation, is_present, word_to_text


class AreaDirectory(Chunk):
    '''The 64 words describing the image: use DirectoryIndex to pick them.'''
    words = fields.WordArrayField(n=DIRECTORY_SIZE)

    def __init__(self, *args, **kwargs):
        self.is_flipped = False
        super().__init__(*args, **kwargs)

    def validate(self):
        '''see if the directory needs to be byte-flipped'''
        if self.words[AD.VERSION] > MAX_VERSION:
            self.logger.debug('version 0x%08x is too big, flipping the directory', self.words[AD.VERSION])
            flip_directory(self.words.value)
            self.is_flipped = True

    def __getitem__(self, index):
        return self.words[index]

    def __len__(self):
        return len(self.words)

    def __iter__(self):
        return iter(self.values)

    @property
    def values(self):
        return tuple(self.words.value)

    def text(self, first, count=1):
        '''Decode words containing ASCII characters'''
        return ''.join(word_to_text(_) for _ in self.words[first:first + count])

    @property
    def memo(self):
        return self.text(AD.MEMO, MEMO_WORDS).rstrip()

    @property
    def source_type(self):
        return self.text(AD.SOURCE_TYPE).rstrip()

    @property
    def calibration_type(self):
        return self.text(AD.CAL_TYPE).rstrip()

    @property
    def original_source_type(self):
        return self.text(AD.ORIGINAL_SOURCE_TYPE).rstrip()

    @property
    def band_numbers(self):
        '''The band map is a bitmask over two words: bit n of the first
        word is set if band n + 1 is present, the second word covers the bands 33-64.'''
        numbers = []
        for word_index, base in ((AD.BAND_MAP, 1), (AD.BAND_MAP + 1, 33)):
            word = self.words[word_index] & 0xffffffff
            numbers.extend(base + bit for bit in range(32) if word & (1 << bit))

        return numbers


class WordBlock(Chunk):
    '''Block of words whose length is known only from the directory.'''
    words = fields.WordArrayField(n=Dependency('#n_words'))

    def __init__(self, *args, n_words=0, **kwargs):
        self.n_words = n_words
        super().__init__(*args, **kwargs)

    def __getitem__(self, index):
        return self.words[index]

    def __len__(self):
        return len(self.words)

    def __iter__(self):
        return iter(self.values)

    @property
    def values(self):
        return tuple(self.words.value)

    @property
    def tag(self):
        '''the first word, that is usually the type of the block in ASCII'''
        return word_to_text(self.words[0]) if len(self) else ''


class NavigationBlock(WordBlock):

    def __init__(self, *args, flipped=False, **kwargs):
        self.flipped = flipped
        super().__init__(*args, **kwargs)

    def validate(self):
        if self.flipped:
            flip_navigation(self.words.value)

    @property
    def family(self):
        return NavigationFamily(self.words[0]) if len(self) else NavigationFamily.UNKNOWN


class CalibrationBlock(WordBlock):
    '''Raw calibration: never flipped nor interpreted.'''
    pass


SAMPLE_DTYPE_CODES = {
    SampleWidth.BYTE: 'u1',
    SampleWidth.SHORT: 'i2',
    SampleWidth.INT: 'i4',
}


class AreaFile(object):
    '''Reader of the area format.

    The metadata (directory, navigation and calibration) are read when the
    instance is created, the image data the first time they are requested.

    The source can be a path or URL (tried with each of the openers in order),
    raw bytes, a binary file-like object or a Stream: in any case the instance
    owns it and closes it with close().
    '''

    def __init__(self, source, openers=None):
        self.logger = logging.getLogger(__name__)
        self.state = DecodeState.UNOPENED
        self.layout = None
        self._directory = None
        self._navigation = None
        self._calibration = None
        self._cube = None
        self._lock = threading.Lock()

        self.stream = self._open(source, openers)

        try:
            self._read_metadata()
        except BaseException:
            self.stream.close()
            raise

    def __repr__(self):
        return '<%s(%r, state=%s)>' % (self.__class__.__name__, self.stream, self.state.name)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @staticmethod
    def _open(source, openers):
        if isinstance(source, Stream):
            return source

        if isinstance(source, (bytes, bytearray)) or hasattr(source, 'read'):
            return Stream(source)

        return Stream(open_source(source, openers))

    def close(self):
        self.stream.close()

    def _read_metadata(self):
        '''Read the directory, the navigation and the calibration.'''
        try:
            directory = AreaDirectory(self.stream)
        except ChunkUnpackException as e:
            raise DirectoryReadError('Error reading AreaFile directory: %s' % e) from e

        if directory.is_flipped:
            self.logger.info('the words of %s are flipped', self.stream)

        self.layout = AreaLayout.from_directory(directory)
        self._directory = directory

        if self.layout.has_navigation():
            self._navigation = self._read_block(
                NavigationBlock,
                self.layout.nav_offset,
                self.layout.nav_bytes,
                flipped=directory.is_flipped,
            )

        if self.layout.has_calibration():
            self._calibration = self._read_block(
                CalibrationBlock,
                self.layout.cal_offset,
                self.layout.cal_bytes,
            )

        if self.layout.num_lines > 0 and self.layout.line_offset(0) < self.stream.tell():
            raise LayoutError('image data at offset %d are behind the current position %d' % (
                self.layout.line_offset(0), self.stream.tell()))

        self.state = DecodeState.METADATA_READY

    def _read_block(self, block_cls, offset, nbytes, **kwargs):
        if offset < self.stream.tell():
            raise LayoutError('%s at offset %d is behind the current position %d' % (
                block_cls.__name__, offset, self.stream.tell()))

        try:
            return block_cls(self.stream, n_words=nbytes // fields.WORD_SIZE, offset=offset, **kwargs)
        except (UnpackException, ChunkUnpackException) as e:
            raise BlockReadError('Error reading AreaFile %s: %s' % (block_cls.__name__, e)) from e

    def _check_ready(self):
        if self.state is DecodeState.UNOPENED:
            raise NotReady('Error reading AreaFile: metadata not available')

    def directory(self):
        self._check_ready()

        return self._directory

    def navigation(self):
        self._check_ready()

        if not is_present(self._directory[AD.NAV_OFFSET]) or self._navigation is None:
            raise MissingBlockError('Error reading AreaFile navigation: no navigation block')

        return self._navigation

    def calibration(self):
        self._check_ready()

        if not is_present(self._directory[AD.CAL_OFFSET]) or self._calibration is None:
            raise MissingBlockError('Error reading AreaFile calibration: no calibration block')

        return self._calibration

    def full_image(self):
        '''Read the data and return the whole PixelCube, [band][line][element].'''
        self._check_ready()

        if self._cube is None:
            with self._lock:
                # somebody else could have read it while we were waiting
                if self._cube is None:
                    self._cube = self._read_data()
                    self.state = DecodeState.FULLY_DECODED

        return self._cube

    def region(self, start_line, start_element, num_lines, num_elements, band=1):
        '''Return num_lines x num_elements values of the band starting at the
        file-relative coordinates given; outside the image the values are zero.

        Note: the band number is 1-based.'''
        return self.full_image().region(start_line, start_element, num_lines, num_elements, band - 1)

    def _sample_dtype(self):
        try:
            code = SAMPLE_DTYPE_CODES[SampleWidth(self.layout.data_width)]
        except ValueError:
            return None

        return np.dtype(self.layout.byte_order.prefix + code)

    def _seek_line(self, line):
        try:
            self.stream.skip_to(self.layout.line_offset(line))
        except UnpackException as e:
            raise LineDecodeFault('cannot reach line %d: %s' % (line, e)) from e

    def _read_data(self):
        if self.stream.closed:
            raise NotReady('Error reading AreaFile data: the source is closed')

        layout = self.layout
        num_bands, num_lines, num_elements = layout.shape

        dtype = self._sample_dtype()
        if dtype is None:
            self.logger.warning('unsupported sample width %d, the image is left blank', layout.data_width)
            return PixelCube.zeros(num_bands, num_lines, num_elements)

        cube = np.zeros(num_bands * num_lines * num_elements, dtype=PIXEL_DTYPE)
        values = cube.reshape(layout.shape)

        samples_per_line = num_bands * num_elements
        missing_lines = 0

        self.logger.debug('reading %d lines of %d samples (%s)', num_lines, samples_per_line, dtype)

        for line in range(num_lines):
            try:
                self._seek_line(line)
            except LineDecodeFault as e:
                # the line stays zero, maybe the next ones are readable
                self.logger.debug('%s', e)
                missing_lines += 1
                continue

            raw = self.stream.read_upto(samples_per_line * layout.data_width)
            count = len(raw) // layout.data_width
            if count < samples_per_line:
                self.logger.debug('line %d: %d samples instead of %d', line, count, samples_per_line)

            samples = np.zeros(samples_per_line, dtype=PIXEL_DTYPE)
            if count:
                samples[:count] = np.frombuffer(raw, dtype=dtype, count=count)

            values[:, line, :] = samples.reshape(num_elements, num_bands).T

        if missing_lines:
            self.logger.warning('%d lines out of %d could not be read and are zero', missing_lines, num_lines)

        return PixelCube(cube, num_bands, num_lines, num_elements)


def open_area(source, **kwargs):
    return AreaFile(source, **kwargs)
