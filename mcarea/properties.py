import logging
from enum import Enum, auto


class DecodeState(Enum):
    '''Enum to state what a decoder is allowed to do'''
    UNOPENED       = 0
    METADATA_READY = auto()
    FULLY_DECODED  = auto()


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between a field and a value living somewhere
    else possible: the resolution happens when the field needs it, i.e.
    during the unpacking.

    The syntax for defining the expression is inspired from module resolution
    with an extra element via the first char of the expression:

     - '.' indicates we refer to a field at the same level (the father)
     - '#' indicates a plain attribute of the father, not a field

    anything else is resolved starting from the root chunk. So we can write

        class Block(Chunk):
            words = fields.WordArrayField(n=Dependency('#n_words'))

    and have the length of "words" taken from the attribute "n_words" of
    the Block instance.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        self.logger.debug('trying to resolve \'%s\' for %s', self.expression, instance.__class__.__name__)

        if self.expression.startswith('#'):
            return getattr(instance.father, self.expression[1:])

        if self.expression.startswith('.'):
            field = instance.father
            fields_path = self.expression[1:].split('.')
        else:
            field = get_root_from_chunk(instance)
            fields_path = self.expression.split('.')

        for component_name in fields_path:
            field = getattr(field, component_name)

        value = field.value

        self.logger.debug(' resolved with value %s', value)

        return value
