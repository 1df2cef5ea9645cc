import io
import logging
import os

from .exceptions import UnpackException


logger = logging.getLogger(__name__)

SKIP_CHUNK_SIZE = 64 * 1024


class Stream(object):
    '''This is a simple wrapper around bytes/file/socket-like objects to
    uniform their properties: the format is laid out to be read from the
    start to the end, so the only movement allowed is forward and we keep
    track of the position ourselves (network streams don't have tell()).'''
    def __init__(self, obj, buffering=2048):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self.obj = obj
        self.buffering = buffering
        self.position = 0

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_fileobj)

        init_method()

    def __repr__(self):
        return '<%s(%r @ %d)>' % (self.__class__.__name__, self.obj, self.position)

    def __del__(self):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'', self.obj)
        self.obj = open(self.obj, 'rb', buffering=self.buffering)

    def init_PosixPath(self):
        self.obj = os.fspath(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def init_fileobj(self):
        if not hasattr(self.obj, 'read'):
            raise ValueError('\'%s\' is not something we can read from' % self.obj.__class__.__name__)

    @property
    def closed(self):
        return getattr(self.obj, 'closed', False)

    def close(self):
        obj = getattr(self, 'obj', None)
        if obj is not None and hasattr(obj, 'close'):
            obj.close()

    def read(self, n):
        '''Read exactly n bytes, it raises UnpackException otherwise.'''
        data = self.read_upto(n, tolerate_errors=False)

        if len(data) != n:
            raise UnpackException('short read: %d bytes instead of %d at offset %d' % (
                len(data), n, self.position - len(data)))

        return data

    def read_upto(self, n, tolerate_errors=True):
        '''Read at most n bytes.

        Network objects can return less than asked, so we loop until EOF.
        An I/O error in the middle truncates the result if tolerate_errors is set.'''
        chunks = []
        missing = n
        while missing > 0:
            try:
                chunk = self.obj.read(missing)
            except OSError as e:
                if not tolerate_errors:
                    raise UnpackException('read failed at offset %d: %s' % (self.position, e)) from e
                logger.warning('read failed at offset %d: %s', self.position, e)
                break

            if not chunk:
                break

            chunks.append(chunk)
            self.position += len(chunk)
            missing -= len(chunk)

        return b''.join(chunks)

    def skip(self, n):
        '''Move forward n bytes discarding them.'''
        if n < 0:
            raise ValueError('trying to go back %d bytes from offset %d' % (-n, self.position))

        while n > 0:
            data = self.read_upto(min(n, SKIP_CHUNK_SIZE), tolerate_errors=False)
            if not data:
                raise UnpackException('end of stream skipping to offset %d' % (self.position + n))
            n -= len(data)

    def skip_to(self, offset):
        self.skip(offset - self.position)

    def tell(self):
        return self.position
