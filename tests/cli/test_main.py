"""
Tests for the Command Line Interface.

Verifies that:
1. Arguments are dispatched to the matching handler.
2. `rewrite` handles single files (stdout or --out), directories and failures.
3. `check` reports usage errors without writing.
4. `rules` lists the recognized functions.
"""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from gettext_rewriter import __version__
from gettext_rewriter.cli.__main__ import main
from gettext_rewriter.utils.console import _THEME, reset_console, set_console

GOOD_SOURCE = "msg = gettext('  hello   world ')\n"
BAD_SOURCE = "msg = ngettext('a', 'b')\n"


@pytest.fixture
def recorded():
  """Routes console output and logs to a wide, recording console."""
  capture = Console(record=True, width=300, file=io.StringIO(), theme=_THEME)
  set_console(capture)
  yield capture
  reset_console()


def test_version(capsys):
  with pytest.raises(SystemExit) as excinfo:
    main(["--version"])

  assert excinfo.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_command_required():
  with pytest.raises(SystemExit):
    main([])


def test_dispatch_rewrite():
  with patch("gettext_rewriter.cli.commands.handle_rewrite", return_value=0) as mock_handler:
    assert main(["rewrite", "src", "--out", "dst", "--fail-fast", "--interpolate", "fmt"]) == 0

  mock_handler.assert_called_once_with(Path("src"), Path("dst"), True, "fmt", None)


def test_dispatch_rewrite_defaults():
  with patch("gettext_rewriter.cli.commands.handle_rewrite", return_value=0) as mock_handler:
    main(["rewrite", "a.py"])

  mock_handler.assert_called_once_with(Path("a.py"), None, None, None, None)


def test_dispatch_check():
  with patch("gettext_rewriter.cli.commands.handle_check", return_value=1) as mock_handler:
    assert main(["check", "src"]) == 1

  mock_handler.assert_called_once_with(Path("src"), None)


def test_rules(recorded):
  assert main(["rules"]) == 0

  text = recorded.export_text()
  assert "npgettext_raw" in text
  assert "gettext_noop_raw" in text
  assert "tagged f-string" in text


def test_rewrite_file_to_stdout(tmp_path, capsys, recorded):
  infile = tmp_path / "messages.py"
  infile.write_text(GOOD_SOURCE, encoding="utf-8")

  assert main(["rewrite", str(infile)]) == 0
  assert capsys.readouterr().out == "msg = gettext('hello world')\n"


def test_rewrite_file_to_out(tmp_path, recorded):
  infile = tmp_path / "messages.py"
  infile.write_text("msg = _(f'Hi {name}')\n", encoding="utf-8")
  outfile = tmp_path / "out" / "messages.py"

  assert main(["rewrite", str(infile), "--out", str(outfile), "--interpolate", "fmt"]) == 0
  assert outfile.read_text(encoding="utf-8") == "msg = fmt(gettext('Hi %(name)s'), {'name': name}, True)\n"
  assert "Rewrote 1 calls" in recorded.export_text()


def test_rewrite_file_with_errors(tmp_path, recorded):
  infile = tmp_path / "bad.py"
  infile.write_text(BAD_SOURCE, encoding="utf-8")
  outfile = tmp_path / "bad_out.py"

  assert main(["rewrite", str(infile), "--out", str(outfile)]) == 1
  assert not outfile.exists()
  assert "1:7: Expecting 3 arguments passed to 'ngettext', got 2" in recorded.export_text()


def test_rewrite_missing_input(tmp_path, recorded):
  assert main(["rewrite", str(tmp_path / "nope.py")]) == 1
  assert "Input not found" in recorded.export_text()


def test_rewrite_invalid_interpolate_name(tmp_path, recorded):
  infile = tmp_path / "messages.py"
  infile.write_text(GOOD_SOURCE, encoding="utf-8")

  assert main(["rewrite", str(infile), "--interpolate", "not valid"]) == 1
  assert "Invalid configuration" in recorded.export_text()


def test_rewrite_json_trace(tmp_path, recorded):
  infile = tmp_path / "messages.py"
  infile.write_text(GOOD_SOURCE, encoding="utf-8")
  outfile = tmp_path / "out.py"
  trace = tmp_path / "trace.json"

  assert main(["rewrite", str(infile), "--out", str(outfile), "--json-trace", str(trace)]) == 0

  events = json.loads(trace.read_text(encoding="utf-8"))
  mutations = [e for e in events if e["type"] == "ast_mutation"]
  assert mutations[0]["metadata"]["after"] == "gettext('hello world')"


def test_rewrite_directory(tmp_path, recorded):
  src = tmp_path / "src"
  (src / "pkg").mkdir(parents=True)
  (src / "a.py").write_text(GOOD_SOURCE, encoding="utf-8")
  (src / "pkg" / "b.py").write_text("x = N_('one', 'many', n)\n", encoding="utf-8")
  (src / "notes.txt").write_text("gettext('  untouched ')", encoding="utf-8")
  out = tmp_path / "out"

  assert main(["rewrite", str(src), "--out", str(out), "--json-trace", str(tmp_path / "unused.json")]) == 0

  assert (out / "a.py").read_text(encoding="utf-8") == "msg = gettext('hello world')\n"
  assert (out / "pkg" / "b.py").read_text(encoding="utf-8") == "x = ngettext('one', 'many', n)\n"
  assert not (out / "notes.txt").exists()
  assert (out / "a.trace.json").exists()
  assert (out / "pkg" / "b.trace.json").exists()
  assert "Batch Complete: 2/2" in recorded.export_text()


def test_rewrite_directory_with_failures(tmp_path, recorded):
  src = tmp_path / "src"
  src.mkdir()
  (src / "good.py").write_text(GOOD_SOURCE, encoding="utf-8")
  (src / "bad.py").write_text(BAD_SOURCE, encoding="utf-8")
  out = tmp_path / "out"

  assert main(["rewrite", str(src), "--out", str(out)]) == 1

  assert (out / "good.py").exists()
  assert not (out / "bad.py").exists()
  text = recorded.export_text()
  assert "Rewrite Report" in text
  assert "1 Passed, 1 with Issues" in text


def test_rewrite_directory_requires_out(tmp_path, recorded):
  assert main(["rewrite", str(tmp_path)]) == 1
  assert "requires --out" in recorded.export_text()


def test_rewrite_directory_uses_toml_include(tmp_path, recorded):
  (tmp_path / "pyproject.toml").write_text('[tool.gettext_rewriter]\ninclude = ["*.pyw"]\n', encoding="utf-8")
  src = tmp_path / "src"
  src.mkdir()
  (src / "a.py").write_text(GOOD_SOURCE, encoding="utf-8")
  (src / "b.pyw").write_text(GOOD_SOURCE, encoding="utf-8")
  out = tmp_path / "out"

  assert main(["rewrite", str(src), "--out", str(out)]) == 0
  assert (out / "b.pyw").exists()
  assert not (out / "a.py").exists()


def test_check(tmp_path, recorded):
  src = tmp_path / "src"
  src.mkdir()
  (src / "good.py").write_text(GOOD_SOURCE, encoding="utf-8")
  (src / "bad.py").write_text(BAD_SOURCE, encoding="utf-8")

  assert main(["check", str(src)]) == 1

  text = recorded.export_text()
  assert "bad.py:1:7: Expecting 3 arguments" in text
  assert "1 of 2 files" in text
  assert (src / "good.py").read_text(encoding="utf-8") == GOOD_SOURCE


def test_check_clean(tmp_path, recorded):
  infile = tmp_path / "good.py"
  infile.write_text(GOOD_SOURCE, encoding="utf-8")

  assert main(["check", str(infile)]) == 0
  assert "no gettext usage errors" in recorded.export_text()
