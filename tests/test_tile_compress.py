import pytest

from kannweg.utils.tile_compress import decode_tiles, encode_tiles


def test_empty_list():
    assert encode_tiles([]) == "D:"
    assert decode_tiles("D:") == []


def test_order_is_preserved():
    tiles = [(5, 5), (4, 5), (3, 5), (3, 6), (3, 7), (10, 1)]
    data = encode_tiles(tiles)
    assert data == "D:5,5|-1,0|-1,0|0,1|0,1|7,-6"
    assert decode_tiles(data) == tiles


@pytest.mark.parametrize("bad", ["", "5,5", "D:5", "D:a,b", "D:1,2|3"])
def test_malformed_input_raises(bad):
    with pytest.raises(ValueError):
        decode_tiles(bad)
