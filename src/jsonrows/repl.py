"""RowEditorRepl: line-oriented row editor for JSON / YAML documents.

Also provides the ``jsonrows-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

from .document import Document
from .errors import JsonRowsError
from .loader import load_document, save_document
from .model import TypeTag
from .yaml_converter import to_json_text, to_yaml

_LOG = logging.getLogger(__name__)

BANNER = (
    "jsonrows  (:q to quit  |  :rows  :types  :json  :yaml  :schema  :reset  |  "
    "add  del <i>  key <i> <name>  type <i> <tag>  set <i> <value>)"
)
PROMPT = "ROWS> "


# ---------------------------------------------------------------------------
# RowEditorRepl class (programmatic use)
# ---------------------------------------------------------------------------

class RowEditorRepl:
    """Stateful editor session over one Document.

    Usage::

        repl = RowEditorRepl()
        repl.load({"name": "x", "price": 19.99})
        repl.change_type(2, "string")   # 1-based row index
        repl.set_value(1, "y")
        repl.doc.export_json()          # → {"name": "y", "price": 19.99}
        repl.reset()                    # clear state
    """

    def __init__(self) -> None:
        self.doc = Document()
        self.path: str | None = None

    def load(self, obj: Any) -> None:
        self.doc.set_source(obj)

    def open(self, path: str) -> None:
        self.doc.set_source(load_document(path))
        self.path = path

    def save(self, path: str | None = None) -> str:
        target = path or self.path
        if target is None:
            raise JsonRowsError("no file name given")
        save_document(target, self.doc.export_json())
        self.path = target
        return target

    def add(self) -> int:
        self.doc.add_row()
        return len(self.doc)

    def delete(self, number: int) -> None:
        self.doc.delete_row(self._index(number))

    def set_key(self, number: int, key: str) -> None:
        self.doc.set_key(self._index(number), key)

    def set_value(self, number: int, raw: Any) -> bool:
        """Store *raw* in row *number*; returns whether it is valid for its type."""
        index = self._index(number)
        self.doc.set_value(index, raw)
        return self.doc.validate(index)

    def change_type(self, number: int, tag: TypeTag | str) -> None:
        self.doc.change_type(self._index(number), tag)

    def reset(self) -> None:
        """Clear all rows and forget the current file."""
        self.doc = Document()
        self.path = None

    def _index(self, number: int) -> int:
        if not 1 <= number <= len(self.doc):
            raise JsonRowsError(f"no row {number} (have {len(self.doc)})")
        return number - 1


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Any) -> str:
    """Format a display value for a one-line listing."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    text = str(value)
    return " ".join(text.split()) if "\n" in text else text


def _show_rows(repl: RowEditorRepl, dest: IO[str]) -> None:
    """Print every row as ``n. [mark] key <type> value``."""
    if not len(repl.doc):
        print("  (no rows)", file=dest)
        return
    rows = repl.doc.rows
    width = max(len(row.key or "(empty)") for row in rows)
    type_width = max(len(str(row.type)) for row in rows)
    for i, row in enumerate(rows):
        mark = "✓" if repl.doc.validate(i) else "✗"
        key = row.key or "(empty)"
        shown = _fmt_inline(repl.doc.display_value(i))
        print(f"  {i + 1:>3}. {mark} {key:<{width}}  <{str(row.type):<{type_width}}>  {shown}", file=dest)


def _show_types(dest: IO[str]) -> None:
    for tag in TypeTag:
        print(f"  {tag}", file=dest)


def _parse_number(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise JsonRowsError(f"not a row number: {text!r}") from None


def _row_args(rest: str) -> tuple[int, str]:
    """Split ``"<n> <remainder>"`` into the row number and the remainder."""
    number, _, remainder = rest.partition(" ")
    if not number:
        raise JsonRowsError("missing row number")
    return _parse_number(number), remainder.strip()


def _run_command(repl: RowEditorRepl, line: str, dest: IO[str]) -> None:
    command, _, rest = line.partition(" ")
    rest = rest.strip()

    if command == "add":
        print(f"  row {repl.add()} added", file=dest)
    elif command == "del":
        number, _ = _row_args(rest)
        repl.delete(number)
    elif command == "key":
        number, key = _row_args(rest)
        repl.set_key(number, key)
    elif command == "type":
        number, tag = _row_args(rest)
        try:
            repl.change_type(number, tag)
        except ValueError as exc:
            raise JsonRowsError(str(exc)) from None
        _show_invalid(repl, number, dest)
    elif command == "set":
        number, value = _row_args(rest)
        repl.set_value(number, value)
        _show_invalid(repl, number, dest)
    else:
        raise JsonRowsError(f"unknown command: {command}")


def _show_invalid(repl: RowEditorRepl, number: int, dest: IO[str]) -> None:
    index = number - 1
    if not repl.doc.validate(index):
        print(f"  Invalid {repl.doc.rows[index].type} value", file=dest)


def _process_line(repl: RowEditorRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line or line.startswith("#"):
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    try:
        # ── Control commands ──────────────────────────────────────────────
        if line == ":rows":
            _show_rows(repl, dest)
        elif line == ":types":
            _show_types(dest)
        elif line == ":reset":
            repl.reset()
        elif line == ":json":
            print(to_json_text(repl.doc.export_json()), file=dest)
        elif line == ":yaml":
            print(to_yaml(repl.doc.export_json()), end="", file=dest)
        elif line == ":schema":
            print(to_json_text(repl.doc.export_schema()), file=dest)
        elif line.startswith(":load "):
            repl.open(line[6:].strip())
            print(f"  {len(repl.doc)} rows loaded", file=dest)
        elif line == ":save" or line.startswith(":save "):
            print(f"  saved {repl.save(line[6:].strip() or None)}", file=dest)

        # ── Batch file ────────────────────────────────────────────────────
        elif line.startswith("?<< "):
            filepath = line[4:].strip()
            try:
                with open(filepath, encoding="utf-8") as fh:
                    for file_line in fh:
                        if not _process_line(repl, file_line.rstrip("\n"), dest):
                            break
            except OSError as exc:
                print(f"Error reading '{filepath}': {exc}", file=sys.stderr)

        # ── Row edits ─────────────────────────────────────────────────────
        else:
            _run_command(repl, line, dest)
    except JsonRowsError as exc:
        _LOG.debug("command failed: %s", line)
        print(f"Error: {exc}", file=sys.stderr)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Interactive row editor (``jsonrows-repl`` / ``python -m jsonrows.repl``).

    An optional first argument names a file to open.
    """
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")
    repl = RowEditorRepl()
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print(BANNER)
    if args:
        _process_line(repl, f":load {args[0]}", dest)

    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


if __name__ == "__main__":
    main()
