"""kannweg CLI entry point.

Provides subcommands for running the level API server and for generating a
single level to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from dotenv import load_dotenv


def _load_version() -> str:
    from kannweg import __version__

    return __version__


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    kannweg level generator

    Run the level API server or print a generated level. Configuration can be
    provided via CLI flags or environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 5000)
          DUNGEON_WIDTH/HEIGHT      Level size, odd integers (default: 23x39)
          DUNGEON_SEED              Fixed seed for generated levels
          DUNGEON_MAX_ROOMS         Room budget (default: 10)
          KANNWEG_LOG_LEVEL         debug|info|warn|error
          KANNWEG_LOG_JSON          1 for JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 41x41 level for a fixed seed
          python run.py generate --width 41 --height 41 --seed 1234

          # Load variables from .env then generate
          python run.py --env-file .env generate
        """
    )

    parser = argparse.ArgumentParser(
        prog="kannweg",
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
        version=f"kannweg {_load_version()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the level API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask level API server",
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

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Print an ASCII level followed by its metrics as JSON.",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Odd level width (default: env or 23)")
    gen_parser.add_argument("--height", type=int, default=None, help="Odd level height (default: env or 39)")
    gen_parser.add_argument("--seed", default=None, help="Integer or phrase; phrases are hashed")
    gen_parser.add_argument("--max-rooms", dest="max_rooms", type=int, default=None)
    gen_parser.add_argument("--max-attempts", dest="max_attempts", type=int, default=None)
    gen_parser.add_argument("--min-size", dest="min_size", type=int, default=None)
    gen_parser.add_argument("--max-size", dest="max_size", type=int, default=None)
    gen_parser.add_argument(
        "--keep-dead-ends",
        action="store_true",
        help="Skip dead-end pruning",
    )
    gen_parser.add_argument(
        "--format",
        choices=("ascii", "json"),
        default="ascii",
        help="ascii: grid then metrics; json: full level document",
    )
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _build_config(args):
    from kannweg.dungeon import DungeonConfig, coerce_seed

    config = DungeonConfig.from_env()
    for name in ("width", "height"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    for name in ("max_rooms", "max_attempts", "min_size", "max_size"):
        value = getattr(args, name)
        if value is not None:
            setattr(config.rooms, name, value)
    if args.seed is not None:
        config.seed = coerce_seed(args.seed)
    if args.keep_dead_ends:
        config.remove_dead_ends = False
    return config


def _generate(args) -> int:
    from kannweg.dungeon import ConfigurationError, create_dungeon

    # keep stdout to the level itself unless the caller asked for logs
    os.environ.setdefault("KANNWEG_LOG_LEVEL", "warn")
    try:
        config = _build_config(args)
        level = create_dungeon(config.width, config.height, config=config)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if args.format == "json":
        print(json.dumps(level.to_dict()))
    else:
        print(level.to_ascii())
        print()
        print(json.dumps(level.metrics, indent=2, sort_keys=True))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from kannweg.logging_utils import log
    from kannweg.server import start_server

    divider = "=" * 40
    print("\n".join([divider, "  kannweg level server", divider, f"  Host:  {host}", f"  Port:  {port}", divider, ""]))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
