'''
Geometry of an area file derived from its directory.

The directory doesn't store the length of the blocks that follow it, only
their offsets: the length of a block is the distance to the next block
present in the file, that are (in order) navigation, calibration, auxiliary
and data.
'''
import logging
from dataclasses import dataclass

from ...exceptions import LayoutError
from ...meta import Endianess
from .enum import DirectoryIndex as AD
from .utils import is_present


logger = logging.getLogger(__name__)

VALIDITY_CODE_LENGTH = 4


@dataclass(frozen=True)
class AreaLayout:
    num_lines: int
    num_elements: int
    num_bands: int
    data_width: int
    line_prefix_length: int
    line_data_length: int
    line_length: int
    data_offset: int
    nav_offset: int
    cal_offset: int
    aux_offset: int
    nav_bytes: int = 0
    cal_bytes: int = 0
    aux_bytes: int = 0
    byte_order: Endianess = Endianess.BIG_ENDIAN

    @classmethod
    def from_directory(cls, directory) -> "AreaLayout":
        """Pull together the values needed to read the blocks and the lines.

        Raises LayoutError if the line prefix length computed from its
        components doesn't match the one declared."""
        line_prefix_length = (
            directory[AD.DOC_LENGTH] + directory[AD.CAL_LENGTH] + directory[AD.LEVEL_LENGTH]
        )
        if directory[AD.VALIDITY_CODE] != 0:
            line_prefix_length += VALIDITY_CODE_LENGTH

        if line_prefix_length != directory[AD.PREFIX_SIZE]:
            raise LayoutError('Invalid line prefix length in AREA file: %d computed, %d declared' % (
                line_prefix_length, directory[AD.PREFIX_SIZE]))

        num_bands = directory[AD.NUM_BANDS]
        line_data_length = num_bands * directory[AD.NUM_ELEMENTS] * directory[AD.DATA_WIDTH]

        nav_offset = directory[AD.NAV_OFFSET]
        cal_offset = directory[AD.CAL_OFFSET]
        aux_offset = directory[AD.AUX_OFFSET]
        data_offset = directory[AD.DATA_OFFSET]

        nav_bytes = cal_bytes = aux_bytes = 0
        # each block ends where the next one present starts
        if is_present(data_offset):
            nav_bytes = data_offset - nav_offset
            cal_bytes = data_offset - cal_offset
            aux_bytes = data_offset - aux_offset
        if is_present(aux_offset):
            nav_bytes = aux_offset - nav_offset
            cal_bytes = aux_offset - cal_offset
        if is_present(cal_offset):
            nav_bytes = cal_offset - nav_offset

        layout = cls(
            num_lines=directory[AD.NUM_LINES],
            num_elements=directory[AD.NUM_ELEMENTS],
            num_bands=num_bands,
            data_width=directory[AD.DATA_WIDTH],
            line_prefix_length=line_prefix_length,
            line_data_length=line_data_length,
            line_length=line_prefix_length + line_data_length,
            data_offset=data_offset,
            nav_offset=nav_offset,
            cal_offset=cal_offset,
            aux_offset=aux_offset,
            nav_bytes=nav_bytes,
            cal_bytes=cal_bytes,
            aux_bytes=aux_bytes,
            byte_order=Endianess.LITTLE_ENDIAN if directory.is_flipped else Endianess.BIG_ENDIAN,
        )
        logger.debug('layout: %r', layout)

        return layout

    @property
    def shape(self):
        return (self.num_bands, self.num_lines, self.num_elements)

    def line_offset(self, line: int) -> int:
        '''Absolute offset of the first sample of the line'''
        return self.data_offset + self.line_prefix_length + line * self.line_length

    def has_navigation(self) -> bool:
        return is_present(self.nav_offset) and self.nav_bytes > 0

    def has_calibration(self) -> bool:
        return is_present(self.cal_offset) and self.cal_bytes > 0
