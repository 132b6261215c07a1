from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .app import TagEditApp
from .commands import doctor as cmd_doctor
from .commands import edit as cmd_edit
from .commands import register as cmd_register
from .commands import show as cmd_show
from .config import Settings, load_settings
from .models import MediaFileRecord, TagEditError, TagEditRequest

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

# CLI option -> (request field, record attribute)
EDIT_OPTIONS = (
    ("track", "track_number"),
    ("artist", "artist"),
    ("album", "album"),
    ("title", "title"),
    ("year", "year"),
    ("genre", "genre"),
)


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(settings: Settings, level_name: Optional[str]) -> None:
    level = getattr(logging, (level_name or settings.logging.level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    console = logging.StreamHandler()
    console.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(console)

    if settings.logging.warnings_log:
        settings.logging.warnings_log.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.logging.warnings_log, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(logging.Formatter("%(asctime)s " + LOG_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger("mutagen").setLevel(logging.WARNING)


def build_request(args: argparse.Namespace, current: Optional[MediaFileRecord] = None) -> TagEditRequest:
    values: dict[str, Optional[str]] = {}
    for option, attr in EDIT_OPTIONS:
        value = getattr(args, option)
        if value is None and current is not None:
            existing = getattr(current, attr)
            value = None if existing is None else str(existing)
        values[option] = value
    return TagEditRequest(file_id=args.id, **values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edit descriptive tags of indexed audio files")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default=None, help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    register_parser = subparsers.add_parser(
        "register", help="Add audio files (and their directories) to the index"
    )
    register_parser.add_argument("paths", nargs="+", type=Path)

    show_parser = subparsers.add_parser("show", help="Print an indexed record")
    show_parser.add_argument("id", type=int)

    edit_parser = subparsers.add_parser(
        "edit",
        help="Set the tags of an indexed file; omitted fields are cleared unless --keep-unset is given",
    )
    edit_parser.add_argument("id", type=int)
    edit_parser.add_argument("--track")
    edit_parser.add_argument("--artist")
    edit_parser.add_argument("--album")
    edit_parser.add_argument("--title")
    edit_parser.add_argument("--year")
    edit_parser.add_argument("--genre")
    edit_parser.add_argument(
        "--keep-unset",
        action="store_true",
        help="Fill omitted fields from the indexed record instead of clearing them",
    )
    edit_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the changes an edit would make without writing the file",
    )

    subparsers.add_parser("doctor", help="Run basic config/index/codec checks")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    configure_logging(settings, args.log_level)

    if args.command == "doctor":
        report = cmd_doctor.run(settings)
        for line in report.checks:
            print(line)
        if not report.ok:
            raise SystemExit(1)
        return

    app = TagEditApp.create(settings)
    try:
        match args.command:
            case "register":
                failed = cmd_register.run(app.index, args.paths)
                if failed:
                    raise SystemExit(1)
            case "show":
                try:
                    cmd_show.run(app.index, args.id)
                except TagEditError as exc:
                    raise SystemExit(str(exc))
            case "edit":
                current = None
                if args.keep_unset:
                    try:
                        current = app.index.get_by_id(args.id)
                    except TagEditError as exc:
                        raise SystemExit(str(exc))
                request = build_request(args, current)
                if not cmd_edit.run(app.service, request, dry_run=args.dry_run):
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    finally:
        app.close()


if __name__ == "__main__":
    main()
