'''
The pixel values of an area file, indexed as [band][line][element].

Whatever the width of the samples on disk (1, 2 or 4 bytes) the values are
widened to signed 32-bit integers and kept in a single contiguous buffer.
'''
import logging

import numpy as np


logger = logging.getLogger(__name__)

PIXEL_DTYPE = np.int32


class PixelCube(object):

    def __init__(self, buffer: np.ndarray, num_bands: int, num_lines: int, num_elements: int):
        if buffer.ndim != 1 or buffer.size != num_bands * num_lines * num_elements:
            raise ValueError('buffer of %d values can\'t hold %d bands of %dx%d' % (
                buffer.size, num_bands, num_lines, num_elements))

        self._buffer = buffer
        self._buffer.setflags(write=False)
        self.shape = (num_bands, num_lines, num_elements)
        # strides in number of values, not bytes
        self.strides = (num_lines * num_elements, num_elements, 1)

    @classmethod
    def zeros(cls, num_bands, num_lines, num_elements):
        buffer = np.zeros(num_bands * num_lines * num_elements, dtype=PIXEL_DTYPE)
        return cls(buffer, num_bands, num_lines, num_elements)

    def __repr__(self):
        return '<%s(bands=%d, lines=%d, elements=%d)>' % (self.__class__.__name__, *self.shape)

    def __len__(self):
        return self.shape[0]

    def __eq__(self, other):
        if not isinstance(other, PixelCube):
            return NotImplemented

        return self.shape == other.shape and np.array_equal(self._buffer, other._buffer)

    __hash__ = None

    def _check(self, axis, index):
        if not 0 <= index < self.shape[axis]:
            raise IndexError('index %d is out of bounds for axis %d with size %d' % (
                index, axis, self.shape[axis]))

    def __getitem__(self, item):
        if isinstance(item, tuple):
            if len(item) != 3:
                raise IndexError('a pixel is identified by (band, line, element)')

            offset = 0
            for axis, (index, stride) in enumerate(zip(item, self.strides)):
                self._check(axis, index)
                offset += index * stride

            return int(self._buffer[offset])

        return self.band(item)

    @property
    def array(self) -> np.ndarray:
        '''read-only [band][line][element] view of the buffer'''
        return self._buffer.reshape(self.shape)

    def band(self, index: int) -> np.ndarray:
        '''read-only [line][element] view of the band with zero-based index'''
        self._check(0, index)
        start = index * self.strides[0]

        return self._buffer[start:start + self.strides[0]].reshape(self.shape[1:])

    def region(self, start_line, start_element, num_lines, num_elements, band=0) -> np.ndarray:
        '''Copy the rectangle from the band with zero-based index: the cells
        falling outside the image are set to zero.'''
        values = self.band(band)
        subset = np.zeros((num_lines, num_elements), dtype=PIXEL_DTYPE)

        _, lines, elements = self.shape
        first_line, last_line = max(start_line, 0), min(start_line + num_lines, lines)
        first_element, last_element = max(start_element, 0), min(start_element + num_elements, elements)

        if first_line < last_line and first_element < last_element:
            subset[
                first_line - start_line:last_line - start_line,
                first_element - start_element:last_element - start_element,
            ] = values[first_line:last_line, first_element:last_element]

        return subset
