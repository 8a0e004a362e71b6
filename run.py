"""Cavern CLI entry point.

Provides subcommands for generating a single cave level, building a full
multi-level world and sweeping seeds for structural problems. Accepts
configuration via flags and CAVERN_* environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from cavern import __version__
from cavern.dungeon.config import DungeonConfig
from cavern.dungeon.diagnostics import diagnose_seed
from cavern.dungeon.pipeline import Dungeon
from cavern.dungeon.tiles import FLOOR
from cavern.logging_utils import log
from cavern.loot.generator import item_kinds_for_level, summarize
from cavern.services.spawn_service import enemy_types_for_level
from cavern.world import GameWorld

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

MIN_SIZE = 3
DEFAULT_SEEDS = [292372, 730727]


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Cavern level generator

    Generate cellular-automata cave levels, build a multi-level world or
    check seeds for structural issues. Configuration can be provided via CLI
    flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          CAVERN_WIDTH / CAVERN_HEIGHT   Level size (default: 80 x 40)
          CAVERN_WALL_PERCENT            Initial wall density (default: 28)
          CAVERN_SMOOTHING_ITERATIONS    Automata passes (default: 4)
          CAVERN_SEED                    Seed (default: random)
          CAVERN_LOG_LEVEL               debug | info | warn | error
          CAVERN_LOG_JSON                Emit JSON log lines when truthy

        Examples:
          # Generate a level and print the map
          python run.py generate --seed 42 --show

          # Build a three level world
          python run.py world --seed 7 --levels 3

          # Check a handful of seeds
          python run.py diagnose 1 2 3
        """
    )

    parser = argparse.ArgumentParser(
        prog="cavern",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Cavern {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print its summary",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env CAVERN_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Level width")
    gen_parser.add_argument("--height", type=int, default=None, help="Level height")
    gen_parser.add_argument("--wall-percent", dest="wall_percent", type=int, default=None)
    gen_parser.add_argument("--smoothing", dest="smoothing_iterations", type=int, default=None)
    gen_parser.add_argument("--enemies", type=int, default=13, help="Enemies to place (default: 13)")
    gen_parser.add_argument("--items", type=int, default=15, help="Items to place (default: 15)")
    gen_parser.add_argument("--show", action="store_true", help="Print the ASCII map")
    gen_parser.add_argument("--metrics", action="store_true", help="Print generation metrics as JSON")
    gen_parser.set_defaults(command="generate")

    world_parser = subparsers.add_parser(
        "world",
        help="Build a multi-level world and summarize each level",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    world_parser.add_argument("--seed", type=int, default=None)
    world_parser.add_argument("--levels", type=int, default=3, help="Number of levels (default: 3)")
    world_parser.set_defaults(command="world")

    diag_parser = subparsers.add_parser(
        "diagnose",
        help="Check border, connectivity and placement for seeds",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    diag_parser.add_argument("seeds", nargs="*", type=int, help="Seeds to check")
    diag_parser.set_defaults(command="diagnose")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def banner(title: str, rows: list) -> str:
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    heading = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if _COLOR_ENABLED else title
    lines = [divider, f"  {heading}", divider]
    lines += [f"  {label(k + ':'):12} {value(v)}" for k, v in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def _error(message: str) -> int:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {message}", file=sys.stderr)
    return 1


def cmd_generate(args: argparse.Namespace) -> int:
    cfg = DungeonConfig.from_env(
        seed=args.seed,
        width=args.width,
        height=args.height,
        wall_percent=args.wall_percent,
        smoothing_iterations=args.smoothing_iterations,
    )
    if cfg.width < MIN_SIZE or cfg.height < MIN_SIZE:
        return _error(f"width and height must be at least {MIN_SIZE} (got {cfg.width}x{cfg.height})")
    d = Dungeon(cfg)
    start = d.find_start_position()
    enemies = d.place_enemies(args.enemies, start, enemy_types_for_level(1))
    items = d.place_items(args.items, item_kinds_for_level(1))
    print(
        banner(
            "Cave Level",
            [
                ("Seed", d.seed),
                ("Size", f"{d.width}x{d.height}"),
                ("Floor", d.grid.count(FLOOR)),
                ("Start", start),
                ("Enemies", len(enemies)),
                ("Items", len(items)),
            ],
        )
    )
    if args.show:
        rows = d.grid.rows()
        marks = {e.position: "E" for e in enemies}
        marks.update({p: "i" for p in items})
        marks[start] = "@"
        for y, row in enumerate(rows):
            print("".join(marks.get((x, y), ch) for x, ch in enumerate(row)))
        print()
    for name, count in summarize(items):
        print(f"  {label(name)} x{count}")
    if args.metrics:
        print(json.dumps(d.metrics, indent=2, sort_keys=True))
    return 0


def cmd_world(args: argparse.Namespace) -> int:
    if args.levels < 1:
        return _error("--levels must be at least 1")
    cfg = DungeonConfig.from_env(seed=args.seed)
    world = GameWorld(args.levels, seed=cfg.seed, config=cfg)
    print(banner("Cave World", [("Seed", world.seed), ("Levels", world.max_levels)]))
    for n, level in world.levels.items():
        print(
            f"  {label(f'Level {n}:'):12} {value(f'{level.grid.width}x{level.grid.height}')}"
            f" start={level.start} exit={level.exit} shop={level.shop}"
            f" enemies={len(level.enemies)} items={len(level.items)}"
        )
    return 0


def cmd_diagnose(args: argparse.Namespace) -> int:
    seeds = args.seeds or DEFAULT_SEEDS
    results = [diagnose_seed(s, DungeonConfig.from_env()) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    return 0 if all(r["ok"] for r in results) else 1


COMMANDS = {
    "generate": cmd_generate,
    "world": cmd_world,
    "diagnose": cmd_diagnose,
}


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default one if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    log.info(event="startup", mode=mode, version=__version__)
    try:
        return COMMANDS[mode](args)
    except ValueError as exc:
        return _error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
