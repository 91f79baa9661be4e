"""Delve CLI entry point.

Provides subcommands for generating a dungeon straight to the terminal and
for running the HTTP generation service. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        from delve import __version__ as pkg_version

        return pkg_version


__version__ = _load_version()

_CONFIG_FLAGS = (
    ("width", "Grid width in tiles"),
    ("height", "Grid height in tiles"),
    ("min_room_size", "Smallest room edge"),
    ("max_room_size", "Largest room edge"),
    ("min_partition_size", "Smallest BSP partition edge"),
    ("max_partition_size", "Partition edge at which splitting starts"),
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve dungeon generator

    Generate BSP dungeons in the terminal or run the HTTP generation service.
    Configuration can be provided via CLI flags or DELVE_* environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                       Bind address for the web server (default: 0.0.0.0)
          PORT                       Port for the web server (default: 5000)
          DELVE_DUNGEON_WIDTH        Default grid width (default: 80)
          DELVE_DUNGEON_HEIGHT       Default grid height (default: 80)
          DELVE_DUNGEON_SEED         Default seed (default: random)
          DELVE_LOG_LEVEL            debug | info | warn | error

        Examples:
          # Print an 80x80 dungeon for seed 42
          python run.py generate --seed 42

          # Smaller map with tighter partitions, as JSON
          python run.py generate --width 40 --height 30 --max-partition-size 18 --json

          # Run the HTTP service on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="delve",
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
        version=f"Delve Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon and print it as ASCII (or JSON with --json)",
    )
    for name, help_text in _CONFIG_FLAGS:
        gen_parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=int, default=None, help=help_text)
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: env or random)")
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Emit the full result as JSON")
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP generation service",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon generation service",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _banner(mode: str, rows: list[tuple[str, object]]) -> str:
    title = f"Delve {mode.title()}"
    if _COLOR_ENABLED:
        title = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [divider, f"  {title}", divider]
    lines += [f"  {label(k + ':'):12} {value(v)}" for k, v in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def _run_generate(args: argparse.Namespace) -> int:
    from delve.dungeon import DungeonConfig, DungeonConfigError, generate_dungeon
    from delve.utils.seeds import coerce_seed

    try:
        base = DungeonConfig.from_env()
        overrides = {name: getattr(args, name) for name, _ in _CONFIG_FLAGS if getattr(args, name) is not None}
        config = DungeonConfig.from_mapping(overrides, base=base)
        seed = args.seed if args.seed is not None else base.seed
        config = config.with_seed(coerce_seed(seed))
        result = generate_dungeon(config)
    except DungeonConfigError as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.as_json:
        print(json.dumps(result.to_dict()))
        return 0
    print(
        _banner(
            "generate",
            [
                ("Seed", result.seed),
                ("Size", f"{result.width}x{result.height}"),
                ("Rooms", len(result.rooms)),
                ("Corridors", len(result.corridors)),
                ("Start", f"room {result.start_room.id} @ {result.start_room.center}"),
                ("Boss", f"room {result.boss_room.id} @ {result.boss_room.center}"),
            ],
        )
    )
    print(result.to_ascii())
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from delve.logging_utils import log
    from delve.server import start_server

    print(_banner("server", [("Mode", mode.upper()), ("Host", host), ("Port", port)]))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
