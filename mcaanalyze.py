'''
Analyze the .mca region files of a Minecraft world.
What gets analyzed, and where, comes from settings.json, see settings.py.
'''
import argparse
import logging
import os
import sys

import settings
from area import Area
from chunk_loader import ChunkLoader
from composition_analyzer import CompositionAnalyzer
from palette import Palette
from region_store import RegionStore
from vein_analyzer import VeinAnalyzer

logger = logging.getLogger("mcaanalyze")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="mca-analyzer", description="Analyze Minecraft's .mca region files")
    parser.add_argument("folder", help="The region folder to be analyzed")
    parser.add_argument("-o", "--output", metavar="FILE", help="An optional output file")
    return parser.parse_args(argv)


def make_loader(folder, config, section_range):
    return ChunkLoader(
        RegionStore(folder),
        capacity=config["chunk_cache_size"],
        section_range=settings.section_range(section_range),
        global_palette=Palette() if config["global_palette"] else None,
    )


def run_composition(folder, config, output=None):
    analyzer = CompositionAnalyzer(make_loader(folder, config, config["composition_section_range"]))
    analyzer.analyze(Area.from_list(config["area"]))
    if output is None:
        analyzer.write_csv(sys.stdout)
        return analyzer
    with open(output, "w", newline="", encoding="utf-8") as f:
        analyzer.write_csv(f)
    logger.info("Wrote %s", output)
    return analyzer


def run_veins(folder, config, output=None):
    area = Area.from_list(config["area"])
    analyzer = VeinAnalyzer(
        make_loader(folder, config, config["vein_section_range"]),
        area,
        targets=config["target_blocks"],
        max_vein_size=config["max_vein_size"],
        dedup=config["dedup"],
    )
    analyzer.analyze()
    analyzer.write_csv(sys.stdout)
    analyzer.print_img(output or config["image"], config["heatmap"])
    return analyzer


def main(argv=None) -> int:
    args = parse_args(argv)
    if not os.path.isdir(args.folder):
        print(f"'{args.folder}' is not a folder!", file=sys.stderr)
        return 1
    config = settings.load()
    logging.basicConfig(
        stream=sys.stderr,
        level=config["log_level"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if config["mode"] == "veins":
        run_veins(args.folder, config, args.output)
    else:
        run_composition(args.folder, config, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
