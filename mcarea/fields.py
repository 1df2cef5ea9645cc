"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from the stream: for the area format everything is made of 32-bit words.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import UnpackException


WORD_SIZE = 4


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.BIG_ENDIAN):
        super().__init__()
        self.logger = logging.getLogger(self.__module__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def resolve(self, attribute):
        '''Returns the attribute resolving it if it's a Dependency'''
        value = getattr(self, attribute)
        if isinstance(value, Dependency):
            return value.resolve(self)

        return value

    @property
    def size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}.size not implemented")

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class WordField(Field):
    """
    Simplest of the fields: a signed 32-bit integer, mimicking the struct module.
    """

    def __init__(self, default=0, **kw):
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(0x%08x)>' % (self.__class__.__name__, self.value & 0xffffffff)

    def get_format(self, n=1):
        return '%s%di' % (self.endianess.prefix, n)

    @property
    def size(self):
        return WORD_SIZE

    def unpack(self, stream):
        self.value = struct.unpack(self.get_format(), stream.read(self.size))[0]


class WordArrayField(WordField):
    '''Un/Pack an array of words.

    You can indicate an explicit number of elements via the parameter named "n",
    either an integer or a Dependency resolved at unpacking time.
    '''

    def __init__(self, n=0, **kw):
        if not isinstance(n, (int, Dependency)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)
        self.n = n
        super().__init__(default=[], **kw)

    def value_from_default(self):
        return [0] * self.n if isinstance(self.n, int) else []

    def __repr__(self):
        return f'<{self.__class__.__name__}(n={len(self)})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    @property
    def size(self):
        return WORD_SIZE * len(self.value)

    def unpack(self, stream):
        n = self.resolve('n')
        if n < 0:
            raise UnpackException('negative number of words (%d) for \'%s\'' % (n, self.name))

        self.logger.debug('unpacking %d words for \'%s\'', n, self.name)

        self.value = list(struct.unpack(self.get_format(n), stream.read(n * WORD_SIZE)))
