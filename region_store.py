import logging
import os

import anvil

from errors import ChunkNotFound, RegionNotFound

logger = logging.getLogger(__name__)

REGION_SIZE = 32


def region_of(chunk_x: int, chunk_z: int):
    return chunk_x // REGION_SIZE, chunk_z // REGION_SIZE


class RegionStore:
    '''
    Reads chunk nbt out of the r.<x>.<z>.mca files of a region folder.
    Only the region file read last is kept open, walking an area row by row stays inside one region most of the time.
    '''

    def __init__(self, folder: str):
        self.folder = folder
        self._region_pos = None
        self._region = None

    def region_path(self, region_x: int, region_z: int) -> str:
        return os.path.join(self.folder, f"r.{region_x}.{region_z}.mca")

    def get_region(self, region_x: int, region_z: int):
        if self._region_pos != (region_x, region_z):
            path = self.region_path(region_x, region_z)
            if not os.path.isfile(path):
                raise RegionNotFound(path)
            logger.debug("Opening region file %s", path)
            self._region = anvil.Region.from_file(path)
            self._region_pos = (region_x, region_z)
        return self._region

    def load_chunk(self, chunk_x: int, chunk_z: int):
        '''
        return: the chunk's root nbt compound
        raises RegionNotFound or ChunkNotFound, there is no such thing as an empty chunk here
        '''
        region = self.get_region(*region_of(chunk_x, chunk_z))
        #chunk_data only looks at the coordinates modulo 32
        chunk_nbt = region.chunk_data(chunk_x, chunk_z)
        if chunk_nbt is None:
            raise ChunkNotFound(chunk_x, chunk_z)
        return chunk_nbt
