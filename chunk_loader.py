import logging
from collections import OrderedDict

from blockstates import CHUNK_SIZE
from chunk_column import Chunk

logger = logging.getLogger(__name__)

CHUNK_CACHE_SIZE = 32


class ChunkLoader:
    def __init__(self, store, capacity=CHUNK_CACHE_SIZE, section_range=None, global_palette=None):
        '''
        store: anything with load_chunk(chunk_x, chunk_z) -> chunk nbt, normally a RegionStore
        capacity: how many decoded chunks stay in memory, the least recently used ones go first
        section_range: passed on to Chunk.from_nbt
        global_palette: passed on to Chunk.from_nbt
        '''
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.store = store
        self.capacity = capacity
        self.section_range = section_range
        self.global_palette = global_palette
        #oldest first
        self.loaded_chunks = OrderedDict()
        self.loads = 0

    def __len__(self):
        return len(self.loaded_chunks)

    def __contains__(self, coords):
        return coords in self.loaded_chunks

    def cached(self) -> list:
        '''coordinates of the cached chunks, least recently used first'''
        return list(self.loaded_chunks)

    def get_or_load(self, chunk_x: int, chunk_z: int) -> Chunk:
        key = (chunk_x, chunk_z)
        chunk = self.loaded_chunks.get(key)
        if chunk is not None:
            self.loaded_chunks.move_to_end(key)
            return chunk

        logger.debug("Loading chunk (%d,%d)", chunk_x, chunk_z)
        chunk = Chunk.from_nbt(
            self.store.load_chunk(chunk_x, chunk_z),
            section_range=self.section_range,
            global_palette=self.global_palette,
        )
        self.loads += 1
        self.loaded_chunks[key] = chunk
        while len(self.loaded_chunks) > self.capacity:
            evicted, _ = self.loaded_chunks.popitem(last=False)
            logger.debug("Evicting chunk (%d,%d)", *evicted)
        return chunk

    def get_blockstate_at(self, x: int, y: int, z: int):
        '''
        block state at a world position, the chunk holding it is loaded when needed
        return: None when its section isn't loaded (filtered out or empty)
        '''
        chunk_x, local_x = divmod(x, CHUNK_SIZE)
        section_y, local_y = divmod(y, CHUNK_SIZE)
        chunk_z, local_z = divmod(z, CHUNK_SIZE)
        section = self.get_or_load(chunk_x, chunk_z).get_section(section_y)
        if section is None:
            return None
        return section.get_block_at(local_x, local_y, local_z)
