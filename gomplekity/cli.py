"""Command line entry point: analyse a directory and draw its complexity tree."""

from __future__ import annotations

import argparse
import os
import sys
from collections import Counter

from .complexity import AnalysisError, ComplexityAnalyzer
from .raster import svg_to_png
from .report import format_complexity_report, format_tree
from .tree import generate

__all__ = ["color_distribution", "generate_tree_visualization", "usage", "main"]

LEVELS = ("low", "medium", "high", "critical")
MIN_SHARE = 0.1

_USAGE = """\
Gomplekity - Go Complexity Tree Visualizer

USAGE:
  gomplekity [OPTIONS]

OPTIONS:
  -output string
        Output file path (extension determines format: .svg or .png)
  -dir string
        Target directory to analyze (default ".")
  -medium int
        Medium complexity starts from this value (10+) (default 10)
  -high int
        High complexity starts from this value (15+) (default 15)
  -critical int
        Critical complexity starts from this value (20+) (default 20)
  -verbose
        Show detailed complexity analysis
  -svg
        Generate SVG output instead of PNG (default is PNG)
  -help
        Show this help message

EXAMPLES:
  gomplekity
  gomplekity -dir ./src -output complexity.png
  gomplekity -dir ./src -output complexity.svg -svg
  gomplekity -medium 8 -high 12 -critical 16 -verbose"""


def color_distribution(functions, analyzer: ComplexityAnalyzer) -> tuple[float, float, float, float]:
    """Shares of green, yellow, red and brown leaves; each present level gets at least 10%."""
    counts = Counter(analyzer.get_complexity_level(fn.complexity) for fn in functions)
    per_level = [counts[level] for level in LEVELS]
    total_functions = len(functions) or 1
    ratios = [
        max(count / total_functions, MIN_SHARE) if count > 0 else count / total_functions
        for count in per_level
    ]
    total = sum(ratios)
    if total > 0:
        ratios = [ratio / total for ratio in ratios]
    green, yellow, red, brown = ratios
    return green, yellow, red, brown


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:].lower() if dot >= 0 else ""


def generate_tree_visualization(functions, analyzer, output_file, svg_output) -> str:
    """Draw the tree for these functions, save it and return the file name used."""
    green, yellow, red, brown = color_distribution(functions, analyzer)
    svg = generate(green, yellow, red, brown)

    filename = output_file
    if not filename:
        filename = "complexity_tree.svg" if svg_output else "complexity_tree.png"
    else:
        ext = _extension(filename)
        if ext == ".svg":
            svg_output = True
        elif ext == ".png":
            svg_output = False

    if svg_output:
        try:
            with open(filename, "w", encoding="utf-8") as handle:
                handle.write(svg)
        except OSError as err:
            raise OSError(f"Error writing SVG file: {err}") from err
    else:
        try:
            svg_to_png(svg, filename)
        except (OSError, ValueError) as err:
            raise OSError(f"Error writing PNG file: {err}") from err

    print(f"✅ Tree visualization saved to: {filename}")
    print(
        f"📊 Color distribution: 🟢{green * 100:.1f}% 🟡{yellow * 100:.1f}% "
        f"🔴{red * 100:.1f}% 🟤{brown * 100:.1f}%"
    )
    return filename


def usage() -> None:
    """Print the help text."""
    print(_USAGE)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gomplekity", add_help=False, allow_abbrev=False)
    parser.add_argument("-output", "--output", default="")
    parser.add_argument("-dir", "--dir", dest="directory", default=".")
    parser.add_argument("-medium", "--medium", type=int, default=10)
    parser.add_argument("-high", "--high", type=int, default=15)
    parser.add_argument("-critical", "--critical", type=int, default=20)
    parser.add_argument("-verbose", "--verbose", action="store_true")
    parser.add_argument("-help", "--help", "-h", dest="help", action="store_true")
    parser.add_argument("-svg", "--svg", action="store_true")
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    if args.help:
        usage()
        return 0

    if args.verbose:
        print(f"Analyzing directory: {args.directory}")
        print(
            f"Complexity thresholds: Low<={args.medium - 1}, Medium≥{args.medium}, "
            f"High≥{args.high}, Critical≥{args.critical}"
        )
        if args.output:
            print(f"Output file: {args.output}")

    analyzer = ComplexityAnalyzer(args.medium, args.high, args.critical)
    try:
        functions = analyzer.analyze_directory(args.directory)
    except AnalysisError as err:
        print(f"Error analyzing directory: {err}")
        return 1

    if args.verbose:
        print(format_complexity_report(functions, analyzer, args.medium, args.high, args.critical), end="")
        print()
        print(format_tree(analyzer.build_complexity_tree(functions)), end="")

    try:
        generate_tree_visualization(functions, analyzer, args.output, args.svg)
    except OSError as err:
        print(f"❌ {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())