from errors import MalformedChunk

AIR = "minecraft:air"
MIN_BIT_SIZE = 4


class Palette:
    def __init__(self, elements=None):
        '''
        elements: block state names, the index of a name is its id
        a palette without elements only holds air, so it can be used as the global palette
        '''
        self.elements = []
        self.indices = {}
        for name in elements if elements is not None else [AIR]:
            #section palettes list the same name once per block state, the first id wins
            self.indices.setdefault(name, len(self.elements))
            self.elements.append(name)

    @classmethod
    def from_nbt(cls, palette_nbt):
        '''
        palette_nbt: the Palette tag list of a section, may be None when the section doesn't have one
        id 0 is always air, even when the save doesn't list it first
        '''
        names = [parse_palette_entry(entry) for entry in palette_nbt or []]
        if not names or names[0] != AIR:
            names.insert(0, AIR)
        return cls(names)

    def __len__(self):
        return len(self.elements)

    def __contains__(self, name):
        return name in self.indices

    def __repr__(self):
        return f"Palette({self.elements!r})"

    @property
    def elem_bit_size(self) -> int:
        return bit_size(len(self.elements))

    def add(self, name: str) -> int:
        if name in self.indices:
            return self.indices[name]
        index = len(self.elements)
        self.indices[name] = index
        self.elements.append(name)
        return index

    def get_state(self, index: int):
        if 0 <= index < len(self.elements):
            return self.elements[index]
        return None

    def ids_of(self, names) -> list:
        '''every id whose name is in names, duplicates included'''
        return [i for i, name in enumerate(self.elements) if name in names]


def bit_size(palette_size: int) -> int:
    '''bits per block in BlockStates: ceil(log2(palette_size)), never less than 4'''
    return max(MIN_BIT_SIZE, (palette_size - 1).bit_length())


def parse_palette_entry(entry) -> str:
    try:
        name = entry["Name"].value
    except (KeyError, TypeError) as e:
        raise MalformedChunk("Couldn't get field Name for palette entry") from e
    if not isinstance(name, str):
        raise MalformedChunk(f"Palette entry Name should be a string, got {name!r}")
    return name
