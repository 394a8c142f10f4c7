# generate_map.py

"""
================================================================================
WORLD MAP GENERATOR SCRIPT
================================================================================
This script is a command-line tool for generating a world map and saving it
as a JSON document that the simulation backend can load. It can optionally
run a number of simulation ticks before saving, which is useful for checking
how resources evolve on a fresh map.

Usage:
    python generate_map.py --parcels 500 --seed 42 --output maps/default-map.json
    python generate_map.py --config path/to/your/config.json --simulate-ticks 60
================================================================================
"""
import sys
import logging
import argparse
import time
from tqdm import tqdm

from world_engine import MapConfig, Simulation, WorldEngineError, generate
from world_engine import config as DEFAULTS
from world_engine import serialization, stats


def log_summary(logger: logging.Logger, summary: dict):
    logger.info("--- Map Statistics ---")
    logger.info(
        f"  {summary['parcels']} parcels, {summary['boundaries']} boundaries, "
        f"{summary['parcels_with_resources']} parcels with resources"
    )
    for terrain, count in summary['terrain'].items():
        logger.info(f"  - {terrain}: {count}")
    for resource, entry in summary['resources'].items():
        logger.info(
            f"  - {resource}: {entry['count']} deposits, "
            f"{entry['current']:.1f}/{entry['maximum']:.1f}"
        )


def build_config(args: argparse.Namespace) -> MapConfig:
    """Config file values first, then any explicit command-line overrides."""
    base = MapConfig.from_json_file(args.config).to_dict() if args.config else {}
    overrides = {
        'width': args.width,
        'height': args.height,
        'num_parcels': args.parcels,
        'seed': args.seed,
        'ocean_proportion': args.ocean,
        'resource_richness': args.richness,
    }
    base.update({key: value for key, value in overrides.items() if value is not None})
    if args.no_ice_caps:
        base['polar_ice_caps'] = False
    return MapConfig.from_dict(base)


def run(args: argparse.Namespace) -> int:
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("MapGenerator")

    # 2. --- Load Configuration and Generate ---
    try:
        config = build_config(args)
        world = generate(config, logger)
    except (OSError, ValueError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1
    except WorldEngineError as e:
        logger.critical(f"Map generation failed: {e}")
        return 1

    log_summary(logger, stats.summarize(world))

    # 3. --- Optional Warm-up Simulation ---
    if args.simulate_ticks > 0:
        simulation = Simulation(world)
        simulation.start()
        changed = 0
        start_time = time.perf_counter()
        for _ in tqdm(range(args.simulate_ticks), desc="Simulating Ticks"):
            changed += len(simulation.tick(args.tick_seconds))
        simulation.stop()
        end_time = time.perf_counter()
        logger.info(
            f"Simulated {args.simulate_ticks} ticks in {end_time - start_time:.2f} seconds "
            f"({changed} parcel updates)."
        )

    # 4. --- Save ---
    serialization.save_world(world, args.output)
    logger.info(f"World map saved to: {args.output}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a procedural world map for the parcel simulation.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    parser.add_argument("-W", "--width", type=float, help=f"Map width (default {DEFAULTS.DEFAULT_WIDTH}).")
    parser.add_argument("-H", "--height", type=float, help=f"Map height (default {DEFAULTS.DEFAULT_HEIGHT}).")
    parser.add_argument("-p", "--parcels", type=int, help=f"Number of parcels (default {DEFAULTS.DEFAULT_NUM_PARCELS}).")
    parser.add_argument("-s", "--seed", type=int, help="Random seed for reproducibility.")
    parser.add_argument("--ocean", type=float, help="Target ocean proportion in [0, 1].")
    parser.add_argument("--richness", type=float, help="Resource richness in [0, 1].")
    parser.add_argument("--no-ice-caps", action="store_true", help="Disable forced polar ice caps.")
    parser.add_argument("-o", "--output", type=str, default="maps/default-map.json", help="Output file path.")
    parser.add_argument("--simulate-ticks", type=int, default=0, help="Simulation ticks to run before saving.")
    parser.add_argument(
        "--tick-seconds", type=float, default=DEFAULTS.DEFAULT_TICK_SECONDS,
        help="Real seconds represented by each simulated tick."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sys.exit(run(parser.parse_args()))
