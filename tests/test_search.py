"""Tests for regex content search."""

import json
import shutil

import pytest

from conftest import FakeContentBackend, unavailable, write
from repoqa.repository import (
    ContentMatch,
    ContentSearchEngine,
    GrepContentBackend,
    IgnoreRules,
    Outcome,
    RipgrepContentBackend,
)


def rg_message(kind, path, line_number=None, text=None):
    data = {"path": {"text": path}}
    if kind == "match":
        data.update({"line_number": line_number, "lines": {"text": text}})
    return json.dumps({"type": kind, "data": data})


def test_parse_ripgrep_json():
    output = "\n".join([
        rg_message("begin", "/r/a.py"),
        rg_message("match", "/r/a.py", 3, "def helper():\n"),
        json.dumps({"type": "match", "data": {
            "path": {"text": "/r/b.py"},
            "line_number": 7,
            "lines": {"bytes": "aGVscGVyIFx4ZmY="},
        }}),
        rg_message("end", "/r/a.py"),
        json.dumps({"type": "summary", "data": {}}),
        "not json",
    ])

    matches = RipgrepContentBackend.parse_output(output)

    assert matches == [
        ContentMatch("/r/a.py", 3, "def helper():"),
        ContentMatch("/r/b.py", 7, "helper \\xff"),
    ]


def test_parse_grep_output_keeps_colons_in_content():
    output = "/r/a.py:3:url = 'http://x'\n/r/b.py:notanumber:x\nbroken line\n"

    assert GrepContentBackend.parse_output(output) == [ContentMatch("/r/a.py", 3, "url = 'http://x'")]


def test_ripgrep_command_carries_include_and_exclusions(tmp_path):
    backend = RipgrepContentBackend(IgnoreRules(("node_modules/", "dist/")))

    cmd = backend.build_command("foo", tmp_path, "*.{ts,tsx}")

    assert cmd[:4] == ["rg", "--json", "--regexp", "foo"]
    assert cmd[4:10] == ["--glob", "*.{ts,tsx}", "--glob", "!dist", "--glob", "!node_modules"]
    assert cmd[-1] == str(tmp_path)


def test_grep_command(tmp_path):
    cmd = GrepContentBackend().build_command("-foo", tmp_path, "*.py")

    assert cmd == ["grep", "-rnIE", "--include", "*.py", "-e", "-foo", str(tmp_path)]


def test_primary_results_filtered_and_ordered_by_mtime(sample_repo):
    app = str(sample_repo / "src" / "app.py")
    util = str(sample_repo / "src" / "util.py")
    vendored = str(sample_repo / "node_modules" / "lib" / "index.js")
    backend = FakeContentBackend("rg", [
        ContentMatch(util, 1, "def helper():"),
        ContentMatch(vendored, 1, "helper"),
        ContentMatch(app, 4, "    return util.helper()"),
        ContentMatch(app, 1, "import util"),
    ])

    result = ContentSearchEngine(backends=[backend]).search("helper", sample_repo)

    assert result.outcome == Outcome.OK
    assert [(m.file, m.line) for m in result.items] == [(app, 4), (app, 1), (util, 1)]


def test_fallback_keeps_backend_order(sample_repo):
    util = str(sample_repo / "src" / "util.py")
    vendored = str(sample_repo / "node_modules" / "lib" / "index.js")
    engine = ContentSearchEngine(backends=[
        FakeContentBackend("rg", error=unavailable("rg")),
        FakeContentBackend("grep", [ContentMatch(util, 1, "a"), ContentMatch(vendored, 1, "b")]),
    ])

    result = engine.search("helper", sample_repo)

    assert result.outcome == Outcome.DEGRADED
    assert [m.file for m in result.items] == [util, vendored]


def test_long_lines_are_truncated(sample_repo):
    engine = ContentSearchEngine(backends=[
        FakeContentBackend("rg", [ContentMatch(str(sample_repo / "README.md"), 1, "x" * 5000)]),
    ])

    result = engine.search("x", sample_repo)

    assert len(result.items[0].content) == 2000


def test_caps_matches(sample_repo):
    app = str(sample_repo / "src" / "app.py")
    engine = ContentSearchEngine(backends=[
        FakeContentBackend("rg", [ContentMatch(app, i, "line") for i in range(1, 151)]),
    ])

    result = engine.search("line", sample_repo)

    assert result.count == 100
    assert result.truncated is True
    assert result.items[0].line == 1


def test_all_backends_failing_is_soft(sample_repo):
    engine = ContentSearchEngine(backends=[
        FakeContentBackend("rg", error=unavailable("rg")),
        FakeContentBackend("grep", error=unavailable("grep")),
    ])

    result = engine.search("helper", sample_repo)

    assert result.failed
    assert result.items == []


@pytest.mark.skipif(shutil.which("rg") is None, reason="ripgrep not installed")
def test_ripgrep_on_disk(sample_repo):
    result = ContentSearchEngine().search("helper", sample_repo, include="*.py")

    assert result.backend == "rg"
    files = {m.file for m in result.items}
    assert files == {str(sample_repo / "src" / "app.py"), str(sample_repo / "src" / "util.py")}


@pytest.mark.skipif(shutil.which("grep") is None, reason="grep not installed")
def test_grep_backend_on_disk(sample_repo):
    write(sample_repo / "blob.bin", "helper\x00\x01")
    engine = ContentSearchEngine(backends=[GrepContentBackend()])

    result = engine.search("return [0-9]+", sample_repo)

    assert [(m.file, m.line, m.content) for m in result.items] == [
        (str(sample_repo / "src" / "util.py"), 2, "    return 42"),
    ]


def test_grep_command_expands_brace_include(tmp_path):
    cmd = GrepContentBackend().build_command("needle", tmp_path, "*.{ts,tsx}")

    assert cmd == ["grep", "-rnIE", "--include", "*.ts", "--include", "*.tsx", "-e", "needle", str(tmp_path)]


@pytest.mark.skipif(shutil.which("grep") is None, reason="grep not installed")
def test_grep_fallback_honours_brace_include(tmp_path):
    write(tmp_path / "a.ts", "needle\n")
    write(tmp_path / "b.tsx", "needle\n")
    write(tmp_path / "c.js", "needle\n")
    engine = ContentSearchEngine(backends=[GrepContentBackend()])

    result = engine.search("needle", tmp_path, include="*.{ts,tsx}")

    assert result.backend == "grep"
    assert sorted(m.file for m in result.items) == [str(tmp_path / "a.ts"), str(tmp_path / "b.tsx")]


def test_nul_byte_in_pattern_is_soft(sample_repo):
    engine = ContentSearchEngine(backends=[RipgrepContentBackend(), GrepContentBackend()])

    result = engine.search("a\x00b", sample_repo)

    assert result.failed
    assert result.items == []
