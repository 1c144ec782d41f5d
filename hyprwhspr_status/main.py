"""Command-line entry point for the hyprwhspr status publisher."""

import sys
import time
import argparse
import logging
from pathlib import Path
from typing import Tuple

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import StatusConfig
from .engine import EngineEventPublisher
from .models.status import StatusClass
from .publishing.file_transport import FileTransport
from .services import PublicationService
from .storage.history_store import HistoryStore
from .storage.paths import PathResolver
from .storage.readers import read_history, read_status, watch_status

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    StatusClass.INACTIVE: "dim",
    StatusClass.ACTIVE: "bold red",
    StatusClass.PROCESSING: "yellow",
    StatusClass.ERROR: "bold magenta",
}


def setup_logging(config: StatusConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get_log_file()
    console_output = config.get('logging.console_output', True)

    handlers = []

    # File handler - skipped if the log directory is not writable
    try:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path)
    except OSError as e:
        print(f"Cannot open log file {log_file_path}: {e}", file=sys.stderr)
        file_handler = None
    if file_handler is not None:
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info(f"hyprwhspr-status {__version__} starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def target_paths(config: StatusConfig) -> Tuple[Path, Path]:
    """Status and history paths for reading, without creating directories."""
    resolver = PathResolver()
    status_file = config.get_status_file() or resolver.cache_path()
    history_file = config.get_history_file() or resolver.data_path()
    return resolver.locate(status_file), resolver.locate(history_file)


def cmd_status(config: StatusConfig, args: argparse.Namespace, console: Console) -> int:
    status_file, _ = target_paths(config)
    record = read_status(status_file)
    if args.json:
        print(record.to_json())
        return 0

    style = STATUS_STYLES[record.status_class]
    console.print(Panel(
        f"[{style}]{escape(record.text)}  {escape(record.tooltip)}[/{style}]",
        title=f"hyprwhspr: {record.status_class.value}",
        subtitle=str(status_file),
        expand=False,
    ))
    return 0


def cmd_history(config: StatusConfig, args: argparse.Namespace, console: Console) -> int:
    _, history_file = target_paths(config)
    entries = read_history(history_file)[:args.limit]
    if args.json:
        print("[" + ",".join(entry.model_dump_json() for entry in entries) + "]")
        return 0

    if not entries:
        console.print("No transcriptions yet.", style="dim")
        return 0

    table = Table(title="Recent Transcriptions")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Time", style="green", no_wrap=True)
    table.add_column("Text")
    for i, entry in enumerate(entries, 1):
        table.add_row(str(i), entry.timestamp, escape(entry.text))
    console.print(table)
    return 0


def cmd_watch(config: StatusConfig, args: argparse.Namespace, console: Console) -> int:
    status_file, _ = target_paths(config)
    try:
        for record in watch_status(status_file, interval=args.interval, keepalive=args.keepalive):
            print(record.to_json(), flush=True)
    except KeyboardInterrupt:
        pass
    return 0


def cmd_simulate(config: StatusConfig, args: argparse.Namespace, console: Console) -> int:
    service = PublicationService(config)
    service.start()
    engine = EngineEventPublisher()

    engine.recording_started()
    time.sleep(args.delay)
    engine.recording_stopped()
    time.sleep(args.delay)
    if args.fail:
        engine.transcription_failed(args.fail)
    else:
        engine.transcription_succeeded(" ".join(args.text))
    time.sleep(args.delay)

    ok = service.shutdown()
    console.print("✅ Simulated cycle published" if ok else "⚠️  Some writes did not complete",
                  style="green" if ok else "yellow")
    return 0 if ok else 1


def cmd_clear_history(config: StatusConfig, args: argparse.Namespace, console: Console) -> int:
    paths = PathResolver().resolve(config.get_status_file(), config.get_history_file())
    store = HistoryStore(FileTransport(paths), config.get_max_history())
    removed = store.clear()
    console.print(f"Removed {removed} transcriptions", style="green")
    return 0


COMMANDS = {
    "status": cmd_status,
    "history": cmd_history,
    "watch": cmd_watch,
    "simulate": cmd_simulate,
    "clear-history": cmd_clear_history,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyprwhspr-status",
        description="Inspect and drive the hyprwhspr status and history files",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: $XDG_CONFIG_HOME/hyprwhspr-rs/status.yaml)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, INFO)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"hyprwhspr-status v{__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Show the current status")
    status.add_argument("--json", action="store_true", help="Print the raw Waybar JSON")

    history = subparsers.add_parser("history", help="Show recent transcriptions")
    history.add_argument("--limit", type=int, default=20, help="Number of entries to show")
    history.add_argument("--json", action="store_true", help="Print raw JSON")

    watch = subparsers.add_parser("watch", help="Print the status JSON on every change")
    watch.add_argument("--interval", type=float, default=0.25, help="Poll interval in seconds")
    watch.add_argument("--keepalive", type=float, default=30.0,
                       help="Re-emit the current status after this many seconds without changes")

    simulate = subparsers.add_parser("simulate", help="Publish one simulated dictation cycle")
    simulate.add_argument("text", nargs="*", default=["test transcription"],
                          help="Transcribed text to record")
    simulate.add_argument("--fail", type=str, metavar="MESSAGE",
                          help="End the cycle with a transcription failure instead")
    simulate.add_argument("--delay", type=float, default=0.5,
                          help="Seconds between simulated events")

    subparsers.add_parser("clear-history", help="Remove all stored transcriptions")
    return parser


def main(argv=None) -> None:
    """Main entry point for the hyprwhspr-status command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        config = StatusConfig(args.config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"❌ {e}", style="red")
        sys.exit(2)

    setup_logging(config, args.log_level or config.get_log_level())

    try:
        exit_code = COMMANDS[args.command](config, args, console)
    except KeyboardInterrupt:
        exit_code = 130
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        logging.error(f"Application error: {e}", exc_info=True)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
