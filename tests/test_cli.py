"""Tests for CLI helpers: _fmt_inline, _show_rows, _show_types, _process_line."""

import io
import json

import pytest

from jsonrows import RowEditorRepl
from jsonrows.repl import (
    _fmt_inline,
    _process_line,
    _show_rows,
    _show_types,
)


def _run(repl, *lines):
    buf = io.StringIO()
    for line in lines:
        _process_line(repl, line, buf)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# _fmt_inline
# ---------------------------------------------------------------------------

def test_fmt_inline_bool():
    assert _fmt_inline(True) == "true"

def test_fmt_inline_none():
    assert _fmt_inline(None) == "null"

def test_fmt_inline_collapses_newlines():
    assert _fmt_inline('{\n  "a": 1\n}') == '{ "a": 1 }'

def test_fmt_inline_text():
    assert _fmt_inline("a, b") == "a, b"


# ---------------------------------------------------------------------------
# _show_rows / _show_types
# ---------------------------------------------------------------------------

def test_show_rows_empty():
    buf = io.StringIO()
    _show_rows(RowEditorRepl(), buf)
    assert "no rows" in buf.getvalue()

def test_show_rows_with_entries():
    repl = RowEditorRepl()
    repl.load({"price": 5.5, "tags": ["a", "b"]})
    buf = io.StringIO()
    _show_rows(repl, buf)
    out = buf.getvalue()
    assert "price" in out
    assert "<number" in out
    assert "a, b" in out
    assert "✓" in out

def test_show_rows_marks_invalid():
    repl = RowEditorRepl()
    repl.load({"n": 1})
    repl.set_value(1, "many")
    buf = io.StringIO()
    _show_rows(repl, buf)
    assert "✗" in buf.getvalue()

def test_show_rows_empty_key():
    repl = RowEditorRepl()
    repl.add()
    buf = io.StringIO()
    _show_rows(repl, buf)
    assert "(empty)" in buf.getvalue()

def test_show_types():
    buf = io.StringIO()
    _show_types(buf)
    out = buf.getvalue()
    assert "array of strings" in out
    assert "location" in out
    assert len(out.splitlines()) == 11


# ---------------------------------------------------------------------------
# _process_line
# ---------------------------------------------------------------------------

def test_process_line_quit():
    repl = RowEditorRepl()
    buf = io.StringIO()
    assert _process_line(repl, ":q", buf) is False
    assert _process_line(repl, ":quit", buf) is False

def test_process_line_empty_and_comment():
    repl = RowEditorRepl()
    buf = io.StringIO()
    assert _process_line(repl, "", buf) is True
    assert _process_line(repl, "   ", buf) is True
    assert _process_line(repl, "# note", buf) is True
    assert buf.getvalue() == ""

def test_add_key_set_json():
    repl = RowEditorRepl()
    out = _run(repl, "add", "key 1 name", "set 1 Joe Smith", ":json")
    assert "row 1 added" in out
    assert '"name": "Joe Smith"' in out

def test_type_change_keeps_invalid_value():
    repl = RowEditorRepl()
    out = _run(repl, "add", "key 1 age", "set 1 abc", "type 1 number")
    assert "Invalid number value" in out
    assert repl.doc.rows[0].value == "abc"

def test_type_with_spaced_tag():
    repl = RowEditorRepl()
    _run(repl, "add", "key 1 tags", "set 1 a, b", "type 1 tag list")
    assert repl.doc.export_json() == {"tags": ["a", "b"]}

def test_set_invalid_reports():
    repl = RowEditorRepl()
    repl.load({"site": "https://example.com"})
    out = _run(repl, "set 1 not a url")
    assert "Invalid url value" in out

def test_del():
    repl = RowEditorRepl()
    repl.load({"a": 1, "b": 2})
    _run(repl, "del 1")
    assert repl.doc.export_json() == {"b": 2}

def test_reset():
    repl = RowEditorRepl()
    repl.load({"a": 1})
    _run(repl, ":reset")
    assert len(repl.doc) == 0

def test_yaml_output():
    repl = RowEditorRepl()
    repl.load({"a": 1, "tags": ["x"]})
    assert _run(repl, ":yaml") == "a: 1\ntags:\n- x\n"

def test_schema_output():
    repl = RowEditorRepl()
    repl.load({"age": 30})
    assert json.loads(_run(repl, ":schema")) == [
        {"key": "age", "type": "number", "value": 30},
    ]

@pytest.mark.parametrize("line", [
    "bogus",
    "del",
    "del x",
    "del 5",
    "type 1 integer",
    ":load /nonexistent/file.json",
    ":save",
])
def test_errors_go_to_stderr(line, capsys):
    repl = RowEditorRepl()
    repl.add()
    buf = io.StringIO()
    assert _process_line(repl, line, buf) is True
    assert "Error" in capsys.readouterr().err
    assert len(repl.doc) == 1


# ---------------------------------------------------------------------------
# Files: :load, :save, ?<<
# ---------------------------------------------------------------------------

def test_load_and_save(tmp_path):
    src = tmp_path / "in.yaml"
    src.write_text("name: x\ncount: 3\n", encoding="utf-8")
    out = tmp_path / "out.json"
    repl = RowEditorRepl()
    text = _run(repl, f":load {src}", "set 2 4", f":save {out}")
    assert "2 rows loaded" in text
    assert "saved" in text
    assert json.loads(out.read_text(encoding="utf-8")) == {"name": "x", "count": 4}

def test_save_reuses_loaded_path(tmp_path):
    src = tmp_path / "doc.json"
    src.write_text('{"a": true}', encoding="utf-8")
    repl = RowEditorRepl()
    _run(repl, f":load {src}", "set 1 false", ":save")
    assert json.loads(src.read_text(encoding="utf-8")) == {"a": False}

def test_batch_file(tmp_path):
    script = tmp_path / "edit.txt"
    script.write_text(
        "add\n"
        "key 1 city\n"
        "set 1 Paris\n"
        ":json\n",
        encoding="utf-8",
    )
    repl = RowEditorRepl()
    out = _run(repl, f"?<< {script}")
    assert '"city": "Paris"' in out

def test_batch_file_stops_at_quit(tmp_path):
    script = tmp_path / "edit.txt"
    script.write_text("add\n:q\nadd\n", encoding="utf-8")
    repl = RowEditorRepl()
    _run(repl, f"?<< {script}")
    assert len(repl.doc) == 1

def test_batch_file_missing(capsys):
    repl = RowEditorRepl()
    _run(repl, "?<< /nonexistent/script.txt")
    assert "Error reading" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Entrypoint smoke test
# ---------------------------------------------------------------------------

def test_main_exits_on_eof(monkeypatch, capsys):
    from jsonrows.repl import main
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    main([])
    assert "jsonrows" in capsys.readouterr().out

def test_main_opens_file_and_runs_commands(tmp_path, monkeypatch, capsys):
    from jsonrows.repl import main
    src = tmp_path / "doc.json"
    src.write_text('{"a": 1}', encoding="utf-8")
    monkeypatch.setattr("sys.stdin", io.StringIO(":json\n:q\n"))
    main([str(src)])
    out = capsys.readouterr().out
    assert "1 rows loaded" in out
    assert '"a": 1' in out
