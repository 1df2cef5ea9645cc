class McAreaException(Exception):
    '''Base class to extend in order to throw exception in mcarea.

    It takes an optional argument named "chain" that represents the chain of
    the layers (field names) that caused the exception.
    '''

    def __init__(self, *args, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(*args)


class UnpackException(McAreaException):
    pass


class ChunkUnpackException(McAreaException):
    def __str__(self):
        return 'failed to unpack %s: %s' % ('.'.join(reversed(self.chain)), super().__str__())


class DecodeError(McAreaException):
    '''Fatal error during the metadata pass: no decoder is returned.'''
    pass


class OpenError(DecodeError):
    '''The byte source could not be established by any of the openers.'''

    def __init__(self, *args, causes=None, **kwargs):
        self.causes = causes or []
        super().__init__(*args, **kwargs)


class DirectoryReadError(DecodeError):
    pass


class LayoutError(DecodeError):
    '''The directory describes a layout this decoder can't honour.'''
    pass


class BlockReadError(DecodeError):
    pass


class MissingBlockError(McAreaException):
    '''The requested block is not present, the caller can go on without it.'''
    pass


class NotReady(McAreaException):
    pass


class LineDecodeFault(UnpackException):
    '''Internal: positioning to an image line failed.'''
    pass
