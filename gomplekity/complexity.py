"""Cyclomatic complexity analysis of Go files and its tree view."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .gosource import GoSyntaxError, analyze_source

__all__ = ["AnalysisError", "FunctionComplexity", "TreeNode", "ComplexityTree", "ComplexityAnalyzer"]

_COLORS = {"low": "green", "medium": "yellow", "high": "red", "critical": "brown"}


class AnalysisError(Exception):
    """Raised when a directory or file cannot be analysed."""


@dataclass
class FunctionComplexity:
    name: str
    file: str
    line: int
    column: int
    complexity: int


@dataclass
class TreeNode:
    """A node of the complexity tree: root, file or function."""

    name: str
    node_type: str
    complexity: int = 0
    level: str = "low"
    color: str = "green"
    children: list[TreeNode] = field(default_factory=list)
    parent: TreeNode | None = field(default=None, repr=False, compare=False)


@dataclass
class ComplexityTree:
    root: TreeNode


def _is_source(name: str) -> bool:
    return name.endswith(".go") and not name.endswith("_test.go")


def _entries(directory: str) -> list[os.DirEntry]:
    return sorted(os.scandir(directory), key=lambda e: e.name)


class ComplexityAnalyzer:
    """Measures Go functions and classifies them by thresholds."""

    def __init__(self, medium_threshold: int = 10, high_threshold: int = 15, critical_threshold: int = 20):
        self.medium_threshold = medium_threshold
        self.high_threshold = high_threshold
        self.critical_threshold = critical_threshold

    def _walk(self, path: str):
        try:
            entries = _entries(path)
        except OSError as err:
            raise AnalysisError(str(err)) from err
        for entry in entries:
            if entry.is_dir():
                yield from self._walk(entry.path)
            elif _is_source(entry.name):
                yield entry.path

    def analyze_directory(self, directory: str) -> list[FunctionComplexity]:
        """Analyse every non-test Go file under a directory, recursively."""
        if not os.path.exists(directory):
            raise AnalysisError(f"lstat {directory}: no such file or directory")
        if os.path.isdir(directory):
            paths = self._walk(directory)
        else:
            paths = [directory] if _is_source(directory) else []
        return [fn for path in paths for fn in self._analyze_wrapped(path)]

    def analyze_top_directory_only(self, directory: str) -> list[FunctionComplexity]:
        """Analyse the non-test Go files directly inside a directory."""
        try:
            entries = _entries(directory)
        except OSError as err:
            raise AnalysisError(f"failed to read directory {directory}: {err}") from err
        return [
            fn
            for entry in entries
            if not entry.is_dir() and _is_source(entry.name)
            for fn in self._analyze_wrapped(os.path.join(directory, entry.name))
        ]

    def _analyze_wrapped(self, path: str) -> list[FunctionComplexity]:
        try:
            return self.analyze_file(path)
        except AnalysisError as err:
            raise AnalysisError(f"failed to analyze file {path}: {err}") from err

    def analyze_file(self, filename: str) -> list[FunctionComplexity]:
        """Analyse a single Go file."""
        try:
            with open(filename, "rb") as handle:
                stats = analyze_source(handle.read().decode("utf-8"), filename)
        except (OSError, UnicodeDecodeError, GoSyntaxError) as err:
            raise AnalysisError(f"failed to parse file: {err}") from err
        return [FunctionComplexity(s.name, filename, s.line, s.column, s.complexity) for s in stats]

    def get_complexity_level(self, complexity: int) -> str:
        if complexity < self.medium_threshold:
            return "low"
        if complexity < self.high_threshold:
            return "medium"
        if complexity < self.critical_threshold:
            return "high"
        return "critical"

    def get_complexity_color(self, complexity: int) -> str:
        return _COLORS.get(self.get_complexity_level(complexity), "gray")

    def _node(self, name: str, node_type: str, total: int, measure: int, parent: TreeNode) -> TreeNode:
        return TreeNode(
            name=name,
            node_type=node_type,
            complexity=total,
            level=self.get_complexity_level(measure),
            color=self.get_complexity_color(measure),
            parent=parent,
        )

    def build_complexity_tree(self, functions: list[FunctionComplexity]) -> ComplexityTree:
        """Group functions under file nodes named by base file name."""
        root = TreeNode(name="Project Root", node_type="root")
        by_file: dict[str, list[FunctionComplexity]] = {}
        for fn in functions:
            by_file.setdefault(os.path.basename(fn.file), []).append(fn)

        for file_name, file_functions in by_file.items():
            total = sum(fn.complexity for fn in file_functions)
            file_node = self._node(file_name, "file", total, int(total / len(file_functions)), root)
            file_node.children = [
                self._node(fn.name, "function", fn.complexity, fn.complexity, file_node)
                for fn in file_functions
            ]
            root.children.append(file_node)
        return ComplexityTree(root=root)