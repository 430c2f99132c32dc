"""
Command-line interface for the NPC voice relay.

Provides CLI commands for relay management:
- run: Start the HTTP relay
- sweep: Delete expired audio files once and exit
- config: Print the effective configuration

Usage:
    npc-relay run [--host HOST] [--port PORT]
    npc-relay sweep
    npc-relay config

Environment Variables:
    GROQ_API_KEY: Provider credential (required for transcription and chat)
    BASE_URL: Public base URL used in returned audio links
    PORT / NPC_PORT: Port for the HTTP relay (default: 3000)
    NPC_HOST: Host to bind (default: 0.0.0.0)
"""

import argparse
import sys

from npc_relay.config import config, print_config_summary
from npc_relay.logging_setup import configure_logging


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the relay in the foreground.

    Configuration Priority:
        1. CLI arguments (--port, --host)
        2. Environment variables (PORT/NPC_PORT, NPC_HOST)
        3. config/relay.ini, then built-in defaults

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on startup error
    """
    from npc_relay.api.server import start_server

    try:
        start_server(host=getattr(args, "host", None), port=getattr(args, "port", None))
        return 0
    except KeyboardInterrupt:
        print("\nRelay stopped.")
        return 0
    except Exception as e:
        print(f"Error starting relay: {e}", file=sys.stderr)
        return 1


def cmd_sweep(args: argparse.Namespace) -> int:
    """
    Run one eviction pass over the audio store.

    Useful from cron when the relay runs with several worker processes and
    only one of them should own cleanup.

    Returns:
        0 on success, 1 on error
    """
    from npc_relay.storage import AudioStore

    try:
        store = AudioStore(
            config.storage.absolute_audio_dir,
            public_base_url=config.public_base_url,
            retention_seconds=config.storage.retention_seconds,
        )
        removed = store.sweep()
    except OSError as e:
        print(f"Error sweeping audio store: {e}", file=sys.stderr)
        return 1

    print(f"Removed {removed} expired file(s) from {store.root}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective configuration. Returns 0."""
    print_config_summary()
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="npc-relay",
        description="NPC Voice Relay - speech, dialogue and action tags for game NPCs",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the HTTP relay",
        description="Start the HTTP relay and its background audio sweeper.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Port to listen on (default: 3000, or PORT / NPC_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: 0.0.0.0, or NPC_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    # sweep command
    sweep_parser = subparsers.add_parser(
        "sweep",
        help="Delete expired audio files once",
        description="Remove every audio file older than the retention window, then exit.",
    )
    sweep_parser.set_defaults(func=cmd_sweep)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
        description="Print configuration sources and values (the API key is never shown).",
    )
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(config.logging)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
