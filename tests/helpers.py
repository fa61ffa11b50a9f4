'''
Builds chunk nbt the way region files store it, so tests don't need a saved world.
'''
import io
import zlib

import numpy as np
from nbt import nbt

from blockstates import SECTION_VOLUME, pack_blockstates
from chunk_section import index_from_coords
from errors import ChunkNotFound
from palette import AIR, bit_size

STONE = "minecraft:stone"
DIAMOND = "minecraft:diamond_ore"
DEEPSLATE_DIAMOND = "minecraft:deepslate_diamond_ore"
PALETTE = [AIR, STONE, DIAMOND, DEEPSLATE_DIAMOND]


def palette_nbt(names):
    palette = nbt.TAG_List(type=nbt.TAG_Compound)
    for name in names:
        entry = nbt.TAG_Compound()
        entry["Name"] = nbt.TAG_String(name)
        palette.tags.append(entry)
    return palette


def section_nbt(y, names=None, ids=None, width=None):
    '''
    y: None leaves the Y tag out
    names: Palette entries, None leaves the tag out
    ids: 4096 ids packed into BlockStates, None leaves the tag out
    '''
    section = nbt.TAG_Compound()
    if y is not None:
        section["Y"] = nbt.TAG_Byte(y)
    if names is not None:
        section["Palette"] = palette_nbt(names)
    if ids is not None:
        states = nbt.TAG_Long_Array()
        states.value = pack_blockstates(ids, width or bit_size(len(names)))
        section["BlockStates"] = states
    return section


def chunk_nbt(x, z, sections=()):
    root = nbt.NBTFile()
    level = nbt.TAG_Compound()
    level["xPos"] = nbt.TAG_Int(x)
    level["zPos"] = nbt.TAG_Int(z)
    section_list = nbt.TAG_List(type=nbt.TAG_Compound)
    for section in sections:
        section_list.tags.append(section)
    level["Sections"] = section_list
    root["Level"] = level
    return root


class MemoryStore:
    '''load_chunk over a dict, remembers every request'''

    def __init__(self, chunks=None):
        self.chunks = dict(chunks or {})
        self.requests = []

    def load_chunk(self, chunk_x, chunk_z):
        self.requests.append((chunk_x, chunk_z))
        if (chunk_x, chunk_z) not in self.chunks:
            raise ChunkNotFound(chunk_x, chunk_z)
        return self.chunks[(chunk_x, chunk_z)]


def empty_store(min_x, max_x, min_z=0, max_z=1):
    return MemoryStore({
        (x, z): chunk_nbt(x, z)
        for x in range(min_x, max_x)
        for z in range(min_z, max_z)
    })


class World:
    '''
    Block columns filled with one block, chunks over [min_x, max_x) x [min_z, max_z),
    every chunk has the sections listed in section_ys.
    '''

    def __init__(self, min_x, max_x, min_z, max_z, section_ys=(0,), fill=STONE):
        self.blocks = {}
        for x in range(min_x, max_x):
            for z in range(min_z, max_z):
                for y in section_ys:
                    self.blocks[(x, z, y)] = np.full(SECTION_VOLUME, PALETTE.index(fill), dtype=np.uint32)

    def set(self, x, y, z, name):
        chunk_x, local_x = divmod(x, 16)
        section_y, local_y = divmod(y, 16)
        chunk_z, local_z = divmod(z, 16)
        self.blocks[(chunk_x, chunk_z, section_y)][index_from_coords(local_x, local_y, local_z)] = PALETTE.index(name)

    def chunk_nbt(self, chunk_x, chunk_z):
        sections = [
            section_nbt(y, PALETTE, ids)
            for (x, z, y), ids in sorted(self.blocks.items())
            if (x, z) == (chunk_x, chunk_z)
        ]
        return chunk_nbt(chunk_x, chunk_z, sections)

    def store(self):
        columns = {(x, z) for x, z, _ in self.blocks}
        return MemoryStore({(x, z): self.chunk_nbt(x, z) for x, z in columns})


def write_region(path, chunks):
    '''
    write a region file the way Minecraft does: 4KiB location and timestamp tables,
    then every chunk zlib compressed and padded to whole sectors
    chunks: (chunk_x, chunk_z) -> NBTFile, all of them in the same region
    '''
    header = bytearray(8192)
    body = bytearray()
    sector = 2
    for (chunk_x, chunk_z), chunk in chunks.items():
        raw = io.BytesIO()
        chunk.write_file(buffer=raw)
        data = zlib.compress(raw.getvalue())
        payload = (len(data) + 1).to_bytes(4, byteorder="big") + bytes([2]) + data
        sectors = -(-len(payload) // 4096)
        payload += bytes(sectors * 4096 - len(payload))
        off = 4 * (chunk_x % 32 + chunk_z % 32 * 32)
        header[off:off + 3] = sector.to_bytes(3, byteorder="big")
        header[off + 3] = sectors
        body += payload
        sector += sectors
    with open(path, "wb") as f:
        f.write(bytes(header + body))
