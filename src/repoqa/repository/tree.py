"""
Directory tree built from flat relative paths, plus a text renderer.
"""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, Iterable, List, Sequence, Set

INDENT = "  "


@dataclass
class TreeNode:
    """One directory level: child directories by name and file names"""
    dirs: Dict[str, "TreeNode"] = field(default_factory=dict)
    files: Set[str] = field(default_factory=set)

    def add(self, parts: Sequence[str]) -> None:
        """Insert a file given its path segments; every ancestor becomes a node."""
        if not parts:
            return
        node = self
        for part in parts[:-1]:
            node = node.dirs.setdefault(part, TreeNode())
        node.files.add(parts[-1])


def build_tree(relative_paths: Iterable[str]) -> TreeNode:
    """Build a tree from paths relative to the tree's root."""
    root = TreeNode()
    for path in relative_paths:
        parts = [p for p in PurePath(path).parts if p not in ("", ".")]
        root.add(parts)
    return root


def render_tree(node: TreeNode, depth: int = 0) -> str:
    """
    Render depth-first: subdirectories before files, both sorted,
    two spaces of indentation per level.
    """
    lines: List[str] = []
    _render(node, depth, lines)
    return "".join(lines)


def _render(node: TreeNode, depth: int, lines: List[str]) -> None:
    indent = INDENT * depth
    for name in sorted(node.dirs):
        lines.append(f"{indent}{name}/\n")
        _render(node.dirs[name], depth + 1, lines)
    for name in sorted(node.files):
        lines.append(f"{indent}{name}\n")
