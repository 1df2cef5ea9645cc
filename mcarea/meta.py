import copy
import logging
from enum import Enum


class Endianess(Enum):
    LITTLE_ENDIAN = '<'
    BIG_ENDIAN    = '>'

    @property
    def prefix(self):
        '''the byte-order character used by struct and numpy'''
        return self.value


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class: each chunk
    instance gets its own copy of the field declared in the class body."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            self.logger.debug("create new field for field named '%s'", self.field.name)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        raise AttributeError(f"field '{self.field.name}' of {instance.__class__.__name__} is read-only")


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the abstraction"""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''Fields declared in the class body are moved into descriptors, keeping
        their order of declaration: that order is the order on disk.'''
        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, {
            name: value for name, value in attrs.items() if not hasattr(value, 'contribute_to_chunk')
        })

        new_cls._meta = Meta()

        # handle inheritance
        for parent in bases:
            if isinstance(parent, MetaChunk):
                new_cls._meta.fields.extend(parent._meta.fields)

        for obj_name, obj in attrs.items():
            if hasattr(obj, 'contribute_to_chunk'):
                new_cls._meta.fields.append(obj_name)
                obj.contribute_to_chunk(new_cls, obj_name)

        return new_cls
