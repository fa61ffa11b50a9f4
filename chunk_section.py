from collections import namedtuple

import numpy as np
from nbt import nbt

from blockstates import CHUNK_SIZE, SECTION_VOLUME, decode_section_blocks, remap_blocks
from palette import Palette
from tags import get_tag

LAYER_VOLUME = CHUNK_SIZE * CHUNK_SIZE

#chunk_pos is relative to the section, global_pos to the world
SectionBlock = namedtuple("SectionBlock", ["chunk_pos", "global_pos", "blockstate"])


def coords_from_index(index: int):
    '''array offset -> (x, y, z) inside the section, the array is in y, z, x order'''
    y, rest = divmod(index, LAYER_VOLUME)
    z, x = divmod(rest, CHUNK_SIZE)
    return x, y, z


def index_from_coords(x: int, y: int, z: int) -> int:
    return y * LAYER_VOLUME + z * CHUNK_SIZE + x


class ChunkSection:
    def __init__(self, blocks: np.ndarray, pos: tuple, palette: Palette):
        '''
        blocks: 4096 ids of palette
        pos: (chunk_x, section_y, chunk_z)
        '''
        if blocks.shape != (SECTION_VOLUME,):
            raise ValueError(f"a section holds {SECTION_VOLUME} blocks, got {blocks.shape}")
        self.blocks = blocks
        self.pos = pos
        self.palette = palette

    @classmethod
    def from_nbt(cls, section_nbt, chunk_x: int, chunk_z: int, section_range=None, global_palette=None):
        '''
        decode one entry of the Sections list
        return: ChunkSection, or None for sections without Y or BlockStates and sections outside section_range
        '''
        y_tag = get_tag(section_nbt, "Y", nbt.TAG_Byte, required=False)
        if y_tag is None:
            return None
        section_y = y_tag.value
        if section_range is not None and section_y not in section_range:
            return None
        block_states = get_tag(section_nbt, "BlockStates", nbt.TAG_Long_Array, required=False)
        if block_states is None:
            #nothing but air in this section
            return None
        palette = Palette.from_nbt(get_tag(section_nbt, "Palette", nbt.TAG_List, required=False))
        blocks = decode_section_blocks(block_states.value, palette)
        if global_palette is not None:
            blocks = remap_blocks(blocks, palette, global_palette)
            palette = global_palette
        return cls(blocks, (chunk_x, section_y, chunk_z), palette)

    @property
    def y(self) -> int:
        return self.pos[1]

    @property
    def origin(self):
        '''global position of the block at (0, 0, 0)'''
        chunk_x, section_y, chunk_z = self.pos
        return chunk_x * CHUNK_SIZE, section_y * CHUNK_SIZE, chunk_z * CHUNK_SIZE

    def get_block_at(self, x: int, y: int, z: int):
        if not (0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE and 0 <= z < CHUNK_SIZE):
            raise IndexError(f"({x}, {y}, {z}) is outside the section")
        return self.palette.get_state(int(self.blocks[index_from_coords(x, y, z)]))

    def global_pos(self, index: int):
        x, y, z = coords_from_index(index)
        ox, oy, oz = self.origin
        return ox + x, oy + y, oz + z

    def block(self, index: int) -> SectionBlock:
        return SectionBlock(
            coords_from_index(index),
            self.global_pos(index),
            self.palette.get_state(int(self.blocks[index])),
        )

    def __iter__(self):
        for index in range(SECTION_VOLUME):
            yield self.block(index)

    def block_indices(self, names) -> np.ndarray:
        '''array offsets of every block whose state is in names, in array order'''
        ids = self.palette.ids_of(names)
        if not ids:
            return np.empty(0, dtype=np.intp)
        return np.flatnonzero(np.isin(self.blocks, ids))

    def layer_counts(self):
        '''
        count the blocks of every layer
        yield: (global y, {blockstate: count})
        '''
        base_y = self.origin[1]
        layers = self.blocks.reshape(CHUNK_SIZE, LAYER_VOLUME)
        for y in range(CHUNK_SIZE):
            ids, counts = np.unique(layers[y], return_counts=True)
            composition = {}
            for block_id, count in zip(ids, counts):
                name = self.palette.get_state(int(block_id))
                composition[name] = composition.get(name, 0) + int(count)
            yield base_y + y, composition
