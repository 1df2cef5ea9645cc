import pytest

from mcarea.exceptions import UnpackException
from mcarea.fields import WordField, WordArrayField
from mcarea.meta import Endianess
from mcarea.streams import Stream


def test_wordfield_default():
    field = WordField()

    assert field.size == 4
    assert field.value == 0
    assert str(field) == '0'


def test_wordfield_is_signed():
    field = WordField()
    field.unpack(Stream(b'\x80\x80\x80\x80'))

    assert field.value == -0x7f7f7f80


def test_wordfield_little_endian():
    field = WordField(endianess=Endianess.LITTLE_ENDIAN)
    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x04030201


def test_wordfield_short_read():
    field = WordField()

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_wordarrayfield():
    length = 10
    array = WordArrayField(n=length)

    assert isinstance(array.value, list)
    assert len(array) == length
    assert array.size == 4 * length
    assert all(_ == 0 for _ in array)

    array.unpack(Stream(bytes(range(4 * length))))

    assert array[0] == 0x00010203
    assert array[9] == 0x24252627
    assert array.size == 4 * length


def test_wordarrayfield_wrong_n():
    with pytest.raises(ValueError):
        WordArrayField(n='10')
