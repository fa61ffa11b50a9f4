import pytest

from area import Area


def test_iterates_rows_of_z():
    assert list(Area(0, 3, 5, 7)) == [(0, 5), (1, 5), (2, 5), (0, 6), (1, 6), (2, 6)]


def test_iteration_can_be_repeated():
    area = Area(-2, 0, -1, 1)
    assert list(area) == list(area)
    assert len(area) == 4


def test_sizes():
    area = Area(-3, 5, 2, 4)
    assert (area.width_x, area.width_z) == (8, 2)
    assert area.block_origin == (-48, 32)


def test_contains():
    area = Area(0, 2, 0, 2)
    assert area.contains(1, 1)
    assert not area.contains(2, 0)
    assert not area.contains(0, -1)


def test_to_visual():
    area = Area(-3, 5, 2, 4)
    assert area.to_visual(-3, 2) == (0, 0)
    assert area.to_visual(4, 3) == (7, 1)


def test_from_list():
    assert Area.from_list([0, 32, 0, 32]) == Area(0, 32, 0, 32)


def test_empty_area():
    assert list(Area(1, 1, 0, 5)) == []
    with pytest.raises(ValueError):
        Area(2, 1, 0, 0)
