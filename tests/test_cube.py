import numpy as np
import pytest

from mcarea.images.area.cube import PixelCube


@pytest.fixture
def cube():
    buffer = np.arange(2 * 3 * 4, dtype=np.int32)
    return PixelCube(buffer, 2, 3, 4)


def test_strides(cube):
    assert cube.shape == (2, 3, 4)
    assert cube.strides == (12, 4, 1)
    assert len(cube) == 2

    assert cube[0, 0, 0] == 0
    assert cube[0, 1, 2] == 6
    assert cube[1, 2, 3] == 23
    assert cube[1][2][3] == 23


def test_bounds(cube):
    with pytest.raises(IndexError):
        cube[2, 0, 0]

    with pytest.raises(IndexError):
        cube[0, 3, 0]

    with pytest.raises(IndexError):
        cube[0, 0, -1]

    with pytest.raises(IndexError):
        cube[0, 0]

    with pytest.raises(IndexError):
        cube.band(-1)


def test_band_is_a_view(cube):
    band = cube.band(1)

    assert band.shape == (3, 4)
    assert np.shares_memory(band, cube.array)
    assert not band.flags.writeable


def test_region(cube):
    subset = cube.region(1, 1, 3, 4, band=1)

    np.testing.assert_array_equal(subset, np.array([
        [17, 18, 19, 0],
        [21, 22, 23, 0],
        [0, 0, 0, 0],
    ]))


def test_zeros_and_equality(cube):
    empty = PixelCube.zeros(2, 3, 4)

    assert empty.shape == cube.shape
    assert not empty.array.any()
    assert empty != cube
    assert PixelCube(np.arange(24, dtype=np.int32), 2, 3, 4) == cube


def test_wrong_buffer():
    with pytest.raises(ValueError):
        PixelCube(np.zeros(10, dtype=np.int32), 2, 3, 4)
