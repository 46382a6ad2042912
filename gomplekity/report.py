"""Text reports of complexity results and of the complexity tree."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass

from .complexity import ComplexityAnalyzer, ComplexityTree, FunctionComplexity, TreeNode

__all__ = [
    "PackageComplexity",
    "calculate_package_complexity",
    "format_complexity_report",
    "format_tree",
]

_EMOJI = {"low": "🟢", "medium": "🟡", "high": "🔴", "critical": "🟤"}


@dataclass
class PackageComplexity:
    """Complexity statistics of the functions in one directory."""

    package_name: str
    functions: list[FunctionComplexity]
    total_complexity: int
    average_complexity: float
    max_complexity: int
    min_complexity: int


def _package_of(path: str) -> str:
    directory = os.path.normpath(os.path.dirname(path) or ".")
    return "main" if directory == "." else directory


def calculate_package_complexity(functions) -> dict[str, PackageComplexity]:
    """Group functions by directory and summarise each group."""
    grouped: dict[str, list[FunctionComplexity]] = {}
    for fn in functions:
        grouped.setdefault(_package_of(fn.file), []).append(fn)

    packages: dict[str, PackageComplexity] = {}
    for name, members in grouped.items():
        values = [fn.complexity for fn in members]
        total = sum(values)
        packages[name] = PackageComplexity(
            package_name=name,
            functions=members,
            total_complexity=total,
            average_complexity=total / len(members),
            max_complexity=max(values),
            min_complexity=min(values),
        )
    return packages


def format_complexity_report(
    functions,
    analyzer: ComplexityAnalyzer,
    medium_threshold: int,
    high_threshold: int,
    critical_threshold: int,
) -> str:
    """The detailed report: package statistics, every function and a summary."""
    lines = [
        "🌳 Complexity Analysis Report",
        "================================",
        f"Thresholds: Low < {medium_threshold}, Medium ≥ {medium_threshold}, "
        f"High ≥ {high_threshold}, Critical ≥ {critical_threshold}",
        "",
        "📦 Package Statistics:",
    ]
    for name, pkg in calculate_package_complexity(functions).items():
        lines.append(
            f"  {name}: avg={pkg.average_complexity:.1f}, max={pkg.max_complexity}, "
            f"min={pkg.min_complexity}, total={pkg.total_complexity} "
            f"({len(pkg.functions)} functions)"
        )
    lines += ["", "🔍 Function Details:"]

    counts: Counter[str] = Counter()
    for fn in functions:
        level = analyzer.get_complexity_level(fn.complexity)
        counts[level] += 1
        lines.append(
            f"{_EMOJI.get(level, '')} {fn.name} ({level}): {fn.complexity} - {fn.file}:{fn.line}"
        )

    lines += [
        "",
        "📊 Summary:",
        f"🟢 Low complexity: {counts['low']} functions",
        f"🟡 Medium complexity: {counts['medium']} functions",
        f"🔴 High complexity: {counts['high']} functions",
        f"🟤 Critical complexity: {counts['critical']} functions",
        f"📈 Total functions: {len(functions)}",
    ]
    return "\n".join(lines) + "\n"


def _node_lines(node: TreeNode, depth: int):
    info = "" if node.node_type == "root" else f" (complexity: {node.complexity})"
    emoji = _EMOJI.get(node.level, "⚪")
    yield f"{'  ' * depth}{emoji} {node.name} [{node.node_type}]{info}"
    for child in node.children:
        yield from _node_lines(child, depth + 1)


def format_tree(tree: ComplexityTree) -> str:
    """An indented listing of the tree, one node per line."""
    lines = ["🌳 Complexity Tree Structure", "=============================", *_node_lines(tree.root, 0)]
    return "\n".join(lines) + "\n\n"