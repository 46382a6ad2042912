# gomplekity

`gomplekity` reads the Go source files in a directory and measures the
cyclomatic complexity of every top-level function and method. It then
draws a tree whose leaves are coloured by complexity: green for low,
yellow for medium, red for high and brown for critical. The picture is
written as PNG or SVG.

## Installation

```
pip install .
```

Pillow is the only dependency. To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
gomplekity [OPTIONS]
```

| Option | Meaning | Default |
| --- | --- | --- |
| `-output PATH` | Output file; a `.svg` or `.png` extension chooses the format | `complexity_tree.png`, or `complexity_tree.svg` with `-svg` |
| `-dir PATH` | Directory to analyse, walked recursively | `.` |
| `-medium N` | Medium complexity starts at this value | `10` |
| `-high N` | High complexity starts at this value | `15` |
| `-critical N` | Critical complexity starts at this value | `20` |
| `-verbose` | Print the settings, a per-package and per-function report and the file tree | off |
| `-svg` | Write SVG instead of PNG | off |
| `-help` | Show the help text | |

Each option may also be written with two dashes (`--dir`), and `-h` is
the same as `-help`. Files ending in `_test.go` are not analysed.

Examples:

```
gomplekity
gomplekity -dir ./src -output complexity.png
gomplekity -dir ./src -output complexity.svg -svg
gomplekity -medium 8 -high 12 -critical 16 -verbose
```

After writing the picture the command prints where it was saved and how
the leaf colours were distributed. If the directory cannot be read or a
file cannot be analysed, it prints `Error analyzing directory: ...` and
exits with status 1; a failure to write the picture also exits with 1.

## How complexity is counted

A function's complexity starts at 1. Each `if`, `for` and `case`
keyword, and each `&&` and `||`, in the function's text adds one;
`default` adds nothing. Function literals inside a function count
towards that function. Methods are named `(Receiver).Name` or
`(*Receiver).Name`.

A function is classified as low below the medium threshold, medium below
the high threshold, high below the critical threshold and critical from
there on.

## How the picture is coloured

The share of each colour follows the share of functions at each level.
Every level that has at least one function gets at least 10%, and the
shares are then scaled to add up to 100%. With no functions at all the
tree falls back to 40% green, 30% yellow, 20% red and 10% brown. Leaf
positions, sizes and the grass are random, so two runs give different
pictures.

## Library use

```python
from gomplekity.complexity import ComplexityAnalyzer
from gomplekity.report import format_complexity_report, format_tree

analyzer = ComplexityAnalyzer(10, 15, 20)
functions = analyzer.analyze_directory("path/to/project")

for fn in functions:
    print(fn.name, fn.complexity, analyzer.get_complexity_level(fn.complexity))

print(format_complexity_report(functions, analyzer, 10, 15, 20), end="")
print(format_tree(analyzer.build_complexity_tree(functions)), end="")
```

- `gomplekity.gosource.analyze_source(source, filename)` measures Go
  source held in a string and returns `FuncStat` records; it raises
  `GoSyntaxError` when the text cannot be lexed, has no `package` clause
  or has unbalanced brackets.
- `ComplexityAnalyzer` offers `analyze_directory` (recursive),
  `analyze_top_directory_only`, `analyze_file`, `get_complexity_level`,
  `get_complexity_color` and `build_complexity_tree`. Failures raise
  `AnalysisError`.
- `gomplekity.report.calculate_package_complexity` groups functions by
  directory (files in the current directory count as `main`) and returns
  a `PackageComplexity` for each.
- `gomplekity.cli.color_distribution(functions, analyzer)` returns the
  four colour shares used for the picture.
- `gomplekity.tree.generate(green, yellow, red, brown, rng=None)` returns
  the SVG text of the tree; pass a `random.Random` to make it repeatable.
- `gomplekity.raster.svg_to_png(svg, filename)` saves such SVG text as a
  PNG, and `render_svg` returns it as a Pillow image.

## Limits

- Analysis works on tokens, not a full Go parse or type check: a file
  with invalid Go that still lexes and has balanced brackets is measured
  anyway.
- In the file tree, files are grouped by base name, so `a/util.go` and
  `b/util.go` share one node.
- The PNG renderer draws only what the tree uses: `rect`, `line` and
  `path` elements with `M`, `L`, `H`, `V`, `Q` and `Z` commands, solid
  colours, opacity and transforms. Gradients are replaced with solid
  colours. It is not a general SVG renderer.