"""Tests for IgnoreRules."""

from repoqa.repository import DEFAULT_IGNORE_PATTERNS, IgnoreRules


def test_default_fragments_present():
    rules = IgnoreRules.default()

    for name in ("node_modules", ".git", "__pycache__", "venv", "zig-out", ".coverage"):
        assert rules.is_ignored_name(name)
    assert len(rules.patterns) == len(DEFAULT_IGNORE_PATTERNS)


def test_segment_matching_at_any_depth():
    rules = IgnoreRules.default()

    assert rules.is_ignored("node_modules/react/index.js")
    assert rules.is_ignored("packages/web/node_modules/react/index.js")
    assert not rules.is_ignored("src/builder.py")
    assert not rules.is_ignored("src/rebuild/main.py")


def test_only_path_below_root_is_checked(tmp_path):
    rules = IgnoreRules.default()
    root = tmp_path / "build" / "checkout"

    assert not rules.is_ignored(str(root / "src" / "main.py"), root)
    assert rules.is_ignored(str(root / "dist" / "main.js"), root)


def test_filter_preserves_order():
    rules = IgnoreRules.default()
    paths = ["b.py", "dist/x.js", "a.py", "venv/lib/site.py"]

    assert rules.filter(paths) == ["b.py", "a.py"]


def test_extend_returns_new_rules():
    rules = IgnoreRules.default()
    extended = rules.extend(["fixtures/"])

    assert extended.is_ignored("tests/fixtures/data.json")
    assert not rules.is_ignored("tests/fixtures/data.json")


def test_exclusion_globs():
    globs = IgnoreRules(("node_modules/", ".git/")).exclusion_globs()

    assert globs == ["!.git", "!node_modules"]
