import csv
import logging
import sys
from collections import Counter

from layers import Layers

logger = logging.getLogger(__name__)


class CompositionAnalyzer:
    '''Counts every block of an area, in total and per layer.'''

    def __init__(self, chunk_loader):
        self.chunk_loader = chunk_loader
        self.blockstate_map = Counter()
        self.layers = Layers()

    def analyze(self, area):
        for chunk_x, chunk_z in area:
            chunk = self.chunk_loader.get_or_load(chunk_x, chunk_z)
            logger.info("Analyzing chunk (%d,%d)", chunk_x, chunk_z)
            for section in chunk:
                self.count_chunk_section(section)

    def count_chunk_section(self, section):
        for y, composition in section.layer_counts():
            for blockstate, count in composition.items():
                self.blockstate_map[blockstate] += count
                self.layers.increment(blockstate, y, count)

    def blockstate_list(self) -> list:
        '''(blockstate, total) most common first, ties by name'''
        return sorted(self.blockstate_map.items(), key=lambda item: (-item[1], item[0]))

    def write_csv(self, out=None):
        '''
        Layer,<blockstate>,...
        <y>,<count>,...
        Total,<total>,...
        '''
        if out is None:
            out = sys.stdout
        blockstates = self.blockstate_list()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(["Layer"] + [name for name, _ in blockstates])
        for layer in self.layers:
            writer.writerow([layer.y] + [layer.get_count(name) for name, _ in blockstates])
        writer.writerow(["Total"] + [total for _, total in blockstates])
