import csv
import itertools
import logging
import sys
from collections import Counter

import numpy as np

import heatmap
from blockstates import CHUNK_SIZE

logger = logging.getLogger(__name__)

MAX_VEIN_SIZE = 16

DIAMOND_ORES = frozenset(["minecraft:diamond_ore", "minecraft:deepslate_diamond_ore"])

#the 3x3x3 cube around a block, the block itself included
NEIGHBOUR_OFFSETS = tuple(itertools.product((-1, 0, 1), repeat=3))


class Vein:
    def __init__(self, location):
        self.blocks = set()
        #smallest member, compared x first, then y, then z
        self.location = location

    def __len__(self):
        return len(self.blocks)

    def add(self, pos):
        self.blocks.add(pos)
        self.location = min(self.location, pos)


class VeinAnalyzer:
    '''
    Finds veins of the target blocks with a flood fill that follows them into neighbouring chunks.
    Veins bigger than max_vein_size are thrown away whole.
    An accepted vein is remembered by its location ("location") or by all of its blocks ("members"),
    a flood fill that runs into a remembered position is thrown away too so veins are only counted once.
    '''

    def __init__(self, chunk_loader, area, targets=DIAMOND_ORES, max_vein_size=MAX_VEIN_SIZE, dedup="location"):
        if dedup not in ("location", "members"):
            raise ValueError(f"unknown dedup policy {dedup!r}")
        self.chunk_loader = chunk_loader
        self.area = area
        self.targets = frozenset(targets)
        self.max_vein_size = max_vein_size
        self.dedup = dedup

        self.found_veins = set()
        #(size, height) -> count
        self.vein_table = Counter()
        #ores in a chunk -> chunks with that many
        self.diamonds_per_chunk = Counter()
        #blockstate -> ores seen
        self.ore_counts = Counter()
        self.rejected_veins = 0

        self.seed_grid = np.full((area.width_z, area.width_x), -1, dtype=np.int32)
        self.density_grid = np.zeros((area.width_z * CHUNK_SIZE, area.width_x * CHUNK_SIZE), dtype=np.int32)

    @property
    def vein_count_by_size(self) -> Counter:
        counts = Counter()
        for (size, _), count in self.vein_table.items():
            counts[size] += count
        return counts

    @property
    def vein_count_by_height(self) -> Counter:
        counts = Counter()
        for (_, height), count in self.vein_table.items():
            counts[height] += count
        return counts

    def analyze(self, area=None):
        '''
        scan area, or the area the analyzer was made for
        scanning a second area keeps the veins found so far, apart from the ones it can't reach
        '''
        if area is None:
            area = self.area
        self.prune_found_veins(*area.block_origin)
        for chunk_x, chunk_z in area:
            chunk = self.chunk_loader.get_or_load(chunk_x, chunk_z)
            logger.info(
                "Analyzing chunk (%d,%d). [fv %d, vt %d, dc %d, cache %d]",
                chunk_x,
                chunk_z,
                len(self.found_veins),
                len(self.vein_table),
                len(self.diamonds_per_chunk),
                len(self.chunk_loader),
            )
            diamonds_in_chunk = self.analyze_chunk(chunk)
            self.diamonds_per_chunk[diamonds_in_chunk] += 1
            self.update_seed_grid(chunk_x, chunk_z, diamonds_in_chunk)

    def analyze_chunk(self, chunk) -> int:
        '''return: number of target blocks in the chunk'''
        diamond_count = 0
        for section in chunk:
            for index in section.block_indices(self.targets):
                block = section.block(int(index))
                diamond_count += 1
                self.ore_counts[block.blockstate] += 1
                vein = self.explore_vein(*block.global_pos)
                if vein is None:
                    self.rejected_veins += 1
                    continue
                self.record_vein(vein)
        return diamond_count

    def explore_vein(self, x: int, y: int, z: int):
        '''
        flood fill from a target block
        return: the Vein, or None if it's too big, touches a vein found before or is empty
        '''
        vein = Vein((x, y, z))
        stack = [(x, y, z)]
        while stack:
            pos = stack.pop()
            if pos in self.found_veins:
                return None
            if pos in vein.blocks:
                continue
            if self.chunk_loader.get_blockstate_at(*pos) not in self.targets:
                continue
            if len(vein) >= self.max_vein_size:
                logger.debug("Vein at %s is bigger than %d blocks", vein.location, self.max_vein_size)
                return None
            vein.add(pos)
            px, py, pz = pos
            #reversed so the first offset is popped first
            stack.extend((px + dx, py + dy, pz + dz) for dx, dy, dz in reversed(NEIGHBOUR_OFFSETS))
        if not vein.blocks:
            return None
        return vein

    def record_vein(self, vein):
        if self.dedup == "members":
            self.found_veins.update(vein.blocks)
        else:
            self.found_veins.add(vein.location)
        x, y, z = vein.location
        self.vein_table[(len(vein), y)] += 1
        origin_x, origin_z = self.area.block_origin
        row, col = z - origin_z, x - origin_x
        if 0 <= row < self.density_grid.shape[0] and 0 <= col < self.density_grid.shape[1]:
            self.density_grid[row, col] += 1

    def prune_found_veins(self, min_x: int, min_z: int):
        '''
        forget veins no flood fill starting at or beyond (min_x, min_z) can reach,
        a vein's blocks are never further than max_vein_size from its location
        '''
        limit_x = min_x - self.max_vein_size
        limit_z = min_z - self.max_vein_size
        self.found_veins = {pos for pos in self.found_veins if not (pos[0] < limit_x and pos[2] < limit_z)}

    def update_seed_grid(self, chunk_x: int, chunk_z: int, diamond_count: int):
        if not self.area.contains(chunk_x, chunk_z):
            return
        col, row = self.area.to_visual(chunk_x, chunk_z)
        self.seed_grid[row, col] = diamond_count

    def render_image(self, variant="seeds"):
        if variant == "seeds":
            return heatmap.render_seed_map(self.seed_grid)
        if variant == "veins":
            return heatmap.render_density_map(self.density_grid)
        raise ValueError(f"unknown heat map {variant!r}")

    def print_img(self, path: str, variant="seeds"):
        heatmap.save(self.render_image(variant), path)

    def write_csv(self, out=None):
        if out is None:
            out = sys.stdout
        writer = csv.writer(out, lineterminator="\n")

        writer.writerow(["Number of diamonds", "Chunks"])
        for diamonds, chunks in sorted(self.diamonds_per_chunk.items()):
            writer.writerow([diamonds, chunks])
        writer.writerow([])

        sizes = sorted(self.vein_count_by_size)
        heights = sorted(self.vein_count_by_height)
        writer.writerow(["Veins"] + sizes)
        for height in heights:
            writer.writerow([height] + [self.vein_table[(size, height)] for size in sizes])
        writer.writerow([])

        writer.writerow(["Vein Size", "Vein Count"])
        for size, count in sorted(self.vein_count_by_size.items()):
            writer.writerow([size, count])
        writer.writerow([])

        writer.writerow(["Vein Height", "Vein Count"])
        for height, count in sorted(self.vein_count_by_height.items()):
            writer.writerow([height, count])
