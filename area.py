from blockstates import CHUNK_SIZE


class Area:
    '''
    Rectangle of chunk coordinates, [min_x, max_x) x [min_z, max_z).
    Iterating gives (chunk_x, chunk_z) row by row: z is the outer loop, x the inner one,
    which is the order pixels are written in an image.
    '''

    __slots__ = ("x_range", "z_range")

    def __init__(self, min_x: int, max_x: int, min_z: int, max_z: int):
        if max_x < min_x or max_z < min_z:
            raise ValueError(f"empty area: x {min_x}..{max_x}, z {min_z}..{max_z}")
        self.x_range = (min_x, max_x)
        self.z_range = (min_z, max_z)

    @classmethod
    def from_list(cls, bounds):
        '''[min_x, max_x, min_z, max_z] as written in settings.json'''
        return cls(*bounds)

    def __iter__(self):
        for z in range(*self.z_range):
            for x in range(*self.x_range):
                yield x, z

    def __len__(self):
        return self.width_x * self.width_z

    def __eq__(self, other):
        if not isinstance(other, Area):
            return NotImplemented
        return (self.x_range, self.z_range) == (other.x_range, other.z_range)

    def __hash__(self):
        return hash((self.x_range, self.z_range))

    def __repr__(self):
        return f"Area({self.x_range[0]}, {self.x_range[1]}, {self.z_range[0]}, {self.z_range[1]})"

    @property
    def width_x(self) -> int:
        return self.x_range[1] - self.x_range[0]

    @property
    def width_z(self) -> int:
        return self.z_range[1] - self.z_range[0]

    @property
    def block_origin(self):
        '''(x, z) of the first block column in the area'''
        return self.x_range[0] * CHUNK_SIZE, self.z_range[0] * CHUNK_SIZE

    def contains(self, chunk_x: int, chunk_z: int) -> bool:
        return self.x_range[0] <= chunk_x < self.x_range[1] and self.z_range[0] <= chunk_z < self.z_range[1]

    def to_visual(self, chunk_x: int, chunk_z: int):
        '''chunk coordinates -> (column, row) of its pixel, the area's corner is (0, 0)'''
        return chunk_x - self.x_range[0], chunk_z - self.z_range[0]
