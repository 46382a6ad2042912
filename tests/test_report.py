from gomplekity.complexity import ComplexityAnalyzer, ComplexityTree, FunctionComplexity, TreeNode
from gomplekity.report import (
    calculate_package_complexity,
    format_complexity_report,
    format_tree,
)


def _fn(name, file, complexity, line=1):
    return FunctionComplexity(name, file, line, 1, complexity)


def _analyzer():
    return ComplexityAnalyzer(10, 15, 20)


def test_packages_grouped_by_directory():
    functions = [_fn("A", "pkg/a.go", 3), _fn("B", "pkg/b.go", 7), _fn("M", "main.go", 2)]
    packages = calculate_package_complexity(functions)
    assert set(packages) == {"pkg", "main"}
    pkg = packages["pkg"]
    assert pkg.package_name == "pkg"
    assert [fn.name for fn in pkg.functions] == ["A", "B"]
    assert pkg.min_complexity == 3
    assert pkg.max_complexity == 7
    assert pkg.total_complexity == 10
    assert pkg.average_complexity == 5.0


def test_single_function_package_statistics():
    packages = calculate_package_complexity([_fn("F", "./only.go", 4)])
    main = packages["main"]
    assert main.average_complexity == main.total_complexity == main.min_complexity == main.max_complexity
    assert main.total_complexity == 4


def test_empty_function_list_gives_no_packages():
    assert calculate_package_complexity([]) == {}


def test_report_contents():
    functions = [_fn("Foo", "main.go", 2, line=3), _fn("Big", "lib/big.go", 21, line=8)]
    text = format_complexity_report(functions, _analyzer(), 10, 15, 20)
    lines = text.splitlines()
    assert lines[0] == "🌳 Complexity Analysis Report"
    assert lines[2] == "Thresholds: Low < 10, Medium ≥ 10, High ≥ 15, Critical ≥ 20"
    assert "  main: avg=2.0, max=2, min=2, total=2 (1 functions)" in lines
    assert "🟢 Foo (low): 2 - main.go:3" in lines
    assert "🟤 Big (critical): 21 - lib/big.go:8" in lines
    assert "🟢 Low complexity: 1 functions" in lines
    assert "🟤 Critical complexity: 1 functions" in lines
    assert lines[-1] == "📈 Total functions: 2"


def test_report_summary_counts_match_total():
    functions = [_fn(f"F{i}", "a.go", c) for i, c in enumerate([1, 11, 16, 25, 3])]
    lines = format_complexity_report(functions, _analyzer(), 10, 15, 20).splitlines()
    summary = [line for line in lines if line.endswith(" functions") and "complexity:" in line]
    assert sum(int(line.split(": ")[1].split()[0]) for line in summary) == len(functions)


def test_format_tree_lists_nodes():
    analyzer = _analyzer()
    tree = analyzer.build_complexity_tree([_fn("Small", "x/a.go", 3), _fn("Big", "x/a.go", 16)])
    text = format_tree(tree)
    lines = text.split("\n")
    assert lines[0] == "🌳 Complexity Tree Structure"
    assert lines[2] == "🟢 Project Root [root]"
    assert lines[3] == "  🟢 a.go [file] (complexity: 19)"
    assert lines[4] == "    🟢 Small [function] (complexity: 3)"
    assert lines[5] == "    🔴 Big [function] (complexity: 16)"
    assert text.endswith("\n\n")


def test_format_tree_unknown_level_uses_white():
    tree = ComplexityTree(root=TreeNode(name="Odd", node_type="file", complexity=5, level="other"))
    assert format_tree(tree).splitlines()[2] == "⚪ Odd [file] (complexity: 5)"