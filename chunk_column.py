from nbt import nbt

from blockstates import CHUNK_SIZE
from chunk_section import ChunkSection
from errors import MalformedChunk
from tags import get_tag


class Chunk:
    def __init__(self, x: int, z: int, sections: dict):
        '''
        sections: section y -> ChunkSection, a missing y means there are no blocks loaded there
        '''
        self.x = x
        self.z = z
        self.sections = sections

    @classmethod
    def from_nbt(cls, chunk_nbt, section_range=None, global_palette=None):
        '''
        chunk_nbt: root compound of the chunk as read from the region file
        section_range: only decode sections whose y is in it, None decodes all of them
        global_palette: Palette shared by every section decoded with it
        '''
        level = get_tag(chunk_nbt, "Level", nbt.TAG_Compound)
        x = get_tag(level, "xPos", nbt.TAG_Int).value
        z = get_tag(level, "zPos", nbt.TAG_Int).value
        sections = {}
        for section_nbt in get_tag(level, "Sections", nbt.TAG_List):
            if not isinstance(section_nbt, nbt.TAG_Compound):
                raise MalformedChunk("Sections should be a list of compounds")
            section = ChunkSection.from_nbt(section_nbt, x, z, section_range, global_palette)
            if section is None:
                continue
            if section.y in sections:
                raise MalformedChunk(f"Chunk ({x},{z}) has two sections at y={section.y}")
            sections[section.y] = section
        return cls(x, z, sections)

    @property
    def global_pos(self):
        '''(x, z) of the chunk's first block column'''
        return self.x * CHUNK_SIZE, self.z * CHUNK_SIZE

    def get_section(self, y: int):
        return self.sections.get(y)

    def __len__(self):
        return len(self.sections)

    def __iter__(self):
        #bottom to top
        for y in sorted(self.sections):
            yield self.sections[y]

    def __repr__(self):
        return f"Chunk({self.x}, {self.z}, sections={sorted(self.sections)})"
