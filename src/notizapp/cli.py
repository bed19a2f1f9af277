"""CLI for notizapp - notes with a trash can."""

import argparse
import json
import logging
import platform
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from . import __version__
from .config import BACKENDS
from .core.errors import NotFoundError
from .core.model import ACTIVE, TRASH, Note
from .presenter import NoteForm
from .runtime import build_runtime


def resolve_id(ref: str, notes: Sequence[Note], collection: str) -> str:
    """
    Resolve a full id or a unique id prefix against ``notes``.

    Raises NotFoundError when nothing matches and ValueError when the prefix
    is ambiguous.
    """
    ref = ref.strip().lower()
    if any(n.id == ref for n in notes):
        return ref
    matches = [n.id for n in notes if ref and n.id.startswith(ref)]
    if not matches:
        raise NotFoundError(collection, ref)
    if len(matches) > 1:
        raise ValueError(f"Id prefix {ref!r} is ambiguous ({len(matches)} notes match)")
    return matches[0]


def _print_notes(notes: Sequence[Note], args: argparse.Namespace, empty: str) -> None:
    if args.json:
        print(json.dumps([n.to_dict() for n in notes], indent=2, ensure_ascii=False))
        return
    if not notes:
        print(empty)
        return
    for note in notes:
        print(f"{note.id[:8]}  {note.title}")
        for line in note.text.splitlines() or [""]:
            print(f"          {line}")


def _report(args: argparse.Namespace, verb: str, note: Note) -> None:
    if args.json:
        print(json.dumps(note.to_dict(), ensure_ascii=False))
    elif not args.quiet:
        print(f"{verb} {note.id[:8]}  {note.title}")


def cmd_add(args: argparse.Namespace, rt: Any) -> int:
    """Create a new note."""
    form = NoteForm(rt.store, title=args.title, text=args.text)
    note = form.submit()
    if note is None:
        print(form.error_message, file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(note.to_dict(), ensure_ascii=False))
    else:
        print(note.id)
    return 0


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List active notes."""
    _print_notes(rt.store.list_active(), args, "No notes.")
    return 0


def cmd_trash(args: argparse.Namespace, rt: Any) -> int:
    """List trashed notes."""
    _print_notes(rt.store.list_trashed(), args, "Trash is empty.")
    return 0


def cmd_rm(args: argparse.Namespace, rt: Any) -> int:
    """Move a note to the trash."""
    nid = resolve_id(args.id, rt.store.list_active(), ACTIVE)
    _report(args, "Trashed", rt.store.delete(nid))
    return 0


def cmd_restore(args: argparse.Namespace, rt: Any) -> int:
    """Move a trashed note back to the active list."""
    nid = resolve_id(args.id, rt.store.list_trashed(), TRASH)
    _report(args, "Restored", rt.store.restore(nid))
    return 0


def cmd_purge(args: argparse.Namespace, rt: Any) -> int:
    """Remove a trashed note for good."""
    try:
        nid = resolve_id(args.id, rt.store.list_trashed(), TRASH)
    except NotFoundError:
        nid = args.id
    note = rt.store.purge(nid)
    if note is None:
        if not args.quiet:
            print(f"Nothing to purge: {args.id} is not in the trash")
        return 0
    _report(args, "Purged", note)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notiz", description="Personal notes with a trash can"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=(
            f"notizapp {__version__} "
            f"(python {platform.python_version()}, platform {platform.platform()})"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/notiz.toml, data/notiz.toml)",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="Path to data directory (overrides config)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Storage backend (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    parser_add = subparsers.add_parser("add", help="Create a new note")
    parser_add.add_argument("title", help="Note title")
    parser_add.add_argument("text", help="Note text")

    subparsers.add_parser("ls", help="List notes")
    subparsers.add_parser("trash", help="List notes in the trash")

    parser_rm = subparsers.add_parser("rm", help="Move a note to the trash")
    parser_rm.add_argument("id", help="Note ID or unique prefix")

    parser_restore = subparsers.add_parser("restore", help="Restore a note from the trash")
    parser_restore.add_argument("id", help="Note ID or unique prefix")

    parser_purge = subparsers.add_parser("purge", help="Permanently remove a trashed note")
    parser_purge.add_argument("id", help="Note ID or unique prefix")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "add": cmd_add,
        "ls": cmd_ls,
        "trash": cmd_trash,
        "rm": cmd_rm,
        "restore": cmd_restore,
        "purge": cmd_purge,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        return 1

    try:
        rt = build_runtime(
            data_path=args.data,
            config_path=args.config,
            backend=args.backend,
        )
        return handler(args, rt)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
