"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk contains fields that are unpacked in the order they are declared;
    the stream only moves forward, so a field with an explicit offset makes the
    stream skip up to it.

    Passing a stream (or anything a Stream can wrap) to the constructor
    unpacks the chunk right away.
    """

    def __init__(self, stream=None, **kwargs):
        super().__init__(**kwargs)

        if stream is not None:
            stream = stream if isinstance(stream, Stream) else Stream(stream)
            self.logger.debug('unpacking \'%s\' from %s', self.__class__.__name__, stream)
            self.unpack(stream)

    def init(self):
        pass

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    @property
    def value(self):
        return self

    @value.setter
    def value(self, value):
        pass

    def unpack(self, stream):
        '''Take the binary data from the stream and transform it in the
        representation given by the class this method is implemented.

        If a field fails, the exception raised tells the chain of names
        from the outermost chunk to the field.
        '''
        if self.offset is not None:
            stream.skip_to(self.offset)
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d', self.__class__.__name__, field_name, stream.tell())

            if field.offset is not None:
                stream.skip_to(field.offset)
            offset = stream.tell()

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(str(e), chain=chain) from e
            field.offset = offset

        if hasattr(self, 'validate'):
            self.validate()
