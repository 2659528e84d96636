"""Dark Station CLI entry point.

Generates a station deck for a given level and seed and prints a summary,
optionally with an ASCII debug map. Accepts configuration via flags and
STATION_* environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dark Station deck generator

    Carve a deck with binary space partitioning, gate it with locked doors
    and keycards, place generators, terminals, hazards and furniture, and
    print what was built.
    """

    epilog = dedent(
        """
        Environment variables:
          STATION_SEED            Default seed when --seed is omitted
          STATION_MAX_DOORS       Cap on gating doors per deck (default: 10)
          STATION_FOV_RADIUS      Field-of-view radius (default: 3)
          STATION_LOG_LEVEL       debug | info | warn | error (default: warn)
          STATION_LOG_JSON        Emit JSON log lines when truthy

        Examples:
          # Generate level 1 with a random seed
          python run.py generate

          # Reproduce a deck and show the map
          python run.py generate --level 4 --seed 1234 --map

          # Machine-readable metrics
          python run.py generate --level 3 --seed 7 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="darkstation",
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
        version=f"Dark Station {_version()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one deck and print a summary",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--level", type=int, default=1, help="Deck level, 1 or higher (default: 1)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed (default: env STATION_SEED or random)")
    gen_parser.add_argument("--map", action="store_true", help="Print the ASCII debug map")
    gen_parser.add_argument("--json", action="store_true", help="Print metrics as JSON instead of the banner")
    gen_parser.add_argument("--verbose", action="store_true", help="Log placement decisions (STATION_LOG_LEVEL=debug)")
    gen_parser.set_defaults(command="generate")

    if len(argv) == 0:
        argv = ["generate"]

    ns = parser.parse_args(argv)
    if ns.command is None:  # only global flags given
        ns = parser.parse_args(list(argv) + ["generate"])
    return ns


def _version() -> str:
    from station import __version__

    return __version__


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def render_summary(lv) -> str:
    title = f"{Fore.CYAN}{Style.BRIGHT}Dark Station Deck{Style.RESET_ALL}" if _COLOR_ENABLED else "Dark Station Deck"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    m = lv.metrics
    exit_state = "LOCKED" if lv.exit.locked else "open"
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Level:'):14} {value(lv.number)}",
        f"  {label('Seed:'):14} {value(lv.seed)}",
        f"  {label('Size:'):14} {value(f'{lv.grid.rows}x{lv.grid.cols}')}",
        f"  {label('Rooms:'):14} {value(m.get('rooms', len(lv.rooms)))}",
        f"  {label('Doors:'):14} {value(m.get('doors_placed', len(lv.setup.locked_doors)))}",
        f"  {label('Generators:'):14} {value(m.get('generators', len(lv.setup.generators)))}",
        f"  {label('Batteries:'):14} {value(m.get('batteries', len(lv.setup.batteries)))}",
        f"  {label('Hazards:'):14} {value(m.get('hazards', 0))}",
        f"  {label('Exit:'):14} {value(exit_state)}",
        f"  {label('Runtime ms:'):14} {value(m.get('runtime_ms', '-'))}",
        divider,
    ]
    if lv.setup.hints:
        lines.append(label("Hints:"))
        lines.extend(f"  - {h}" for h in lv.setup.hints)
    return "\n".join(lines)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    if getattr(args, "verbose", False):
        os.environ["STATION_LOG_LEVEL"] = "debug"

    from station import GenerationError, Level

    try:
        lv = Level(args.level, args.seed)
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except GenerationError as e:
        print(f"[ERROR] generation failed ({e.code}): {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"level": lv.number, "seed": lv.seed, "metrics": lv.metrics}, indent=2))
    else:
        print(render_summary(lv))
    if args.map:
        print(lv.to_ascii())
    return 0


def _entry() -> int:  # console_scripts hook
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))