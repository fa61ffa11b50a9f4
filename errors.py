'''
Errors raised while reading a region folder.
None of them is recovered from: the analysis is a single pass and stops on the first one.
'''


class AnalyzerError(Exception):
    pass


class RegionNotFound(AnalyzerError):
    def __init__(self, path):
        super().__init__(f"Region file {path} doesn't exist")
        self.path = path


class ChunkNotFound(AnalyzerError):
    def __init__(self, chunk_x, chunk_z):
        super().__init__(f"Chunk ({chunk_x},{chunk_z}) isn't in its region file")
        self.chunk_x = chunk_x
        self.chunk_z = chunk_z


class MalformedChunk(AnalyzerError):
    '''a required tag is missing or has the wrong tag type'''


class PaletteIndexError(AnalyzerError):
    def __init__(self, index, palette_size):
        super().__init__(f"Palette index out of bounds: {index} (palette size {palette_size})")
        self.index = index
        self.palette_size = palette_size


class SettingsError(AnalyzerError):
    pass
