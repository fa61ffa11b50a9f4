'''
Codec for the packed BlockStates array of a section.
Every 64 bit word holds 64 // width block ids starting from the least significant bit,
the high bits left over are padding, so an id is never split between two words.
'''
import numpy as np

from errors import PaletteIndexError

CHUNK_SIZE = 16
SECTION_VOLUME = CHUNK_SIZE * CHUNK_SIZE * CHUNK_SIZE
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def unpack_blockstates(words, width: int) -> np.ndarray:
    '''
    words: signed 64 bit integers as stored in the long array tag
    width: bits per id
    return: np.array(4096,) of ids, ids past the end of words are 0 (air)
    '''
    result = np.zeros(SECTION_VOLUME, dtype=np.uint32)
    if len(words) == 0:
        return result
    per_word = WORD_BITS // width
    data = np.array([w & WORD_MASK for w in words], dtype=np.uint64)
    shifts = np.arange(per_word, dtype=np.uint64) * np.uint64(width)
    mask = np.uint64((1 << width) - 1)
    ids = ((data[:, None] >> shifts) & mask).reshape(-1)[:SECTION_VOLUME]
    result[:len(ids)] = ids
    return result


def pack_blockstates(ids, width: int) -> list:
    '''inverse of unpack_blockstates, the words come out signed like the long array tag wants them'''
    per_word = WORD_BITS // width
    ids = [int(i) for i in ids]
    words = []
    for start in range(0, len(ids), per_word):
        word = 0
        for offset, value in enumerate(ids[start:start + per_word]):
            if value >> width:
                raise ValueError(f"id {value} doesn't fit in {width} bits")
            word |= value << (offset * width)
        if word >> (WORD_BITS - 1):
            word -= 1 << WORD_BITS
        words.append(word)
    return words


def decode_section_blocks(words, palette) -> np.ndarray:
    '''unpack with the bit size of palette, every id has to be in the palette'''
    blocks = unpack_blockstates(words, palette.elem_bit_size)
    top = int(blocks.max())
    if top >= len(palette):
        raise PaletteIndexError(top, len(palette))
    return blocks


def remap_blocks(blocks: np.ndarray, palette, global_palette) -> np.ndarray:
    '''translate section ids into global_palette ids, adding the names it doesn't know yet'''
    lookup = np.array([global_palette.add(name) for name in palette.elements], dtype=np.uint32)
    return lookup[blocks]
