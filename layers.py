from collections import Counter


class Layer:
    def __init__(self, y: int):
        self.y = y
        self.composition = Counter()

    def get_count(self, blockstate: str) -> int:
        return self.composition[blockstate]

    def increment(self, blockstate: str, count=1):
        self.composition[blockstate] += count


class Layers:
    '''block counts for every y that has been seen, iterated bottom to top'''

    def __init__(self):
        self.layers = {}

    def __len__(self):
        return len(self.layers)

    def __iter__(self):
        for y in sorted(self.layers):
            yield self.layers[y]

    def get(self, y: int):
        return self.layers.get(y)

    def increment(self, blockstate: str, y: int, count=1):
        layer = self.layers.get(y)
        if layer is None:
            layer = self.layers[y] = Layer(y)
        layer.increment(blockstate, count)
