import pytest

from gomplekity.gosource import GoSyntaxError, Token, analyze_source, tokenize

SIMPLE = """package sample

import "fmt"

func SimpleFunction() {
	fmt.Print("hi")
}

func AddTwoNumbers(x, y int) int {
	return x + y
}

func GreetUser(who string) string {
	return "hi " + who
}
"""

BASIC = """package sample

import "fmt"

func CheckPositive(v int) bool {
	if v <= 0 {
		return false
	}
	return true
}

func GetGrade(points int) string {
	if points < 70 {
		return "F"
	} else if points < 80 {
		return "C"
	} else if points < 90 {
		return "B"
	}
	return "A"
}

func ProcessNumbers(values []int) {
	for _, v := range values {
		if v%2 == 1 {
			fmt.Println("odd", v)
		} else {
			fmt.Println("even", v)
		}
	}
}
"""

CONDITIONAL = """package sample

func ValidateInput(text string, lo, hi int) bool {
	if len(text) == 0 {
		return false
	}
	if len(text) < lo {
		return false
	}
	if len(text) > hi {
		return false
	}
	for _, r := range text {
		if r > 126 || r < 32 {
			return false
		}
	}
	return true
}

func CalculateDiscount(amount float64, tier string, count int) float64 {
	rate := 0.0
	if tier == "gold" {
		rate = 0.25
	} else if tier == "silver" {
		rate = 0.15
	}
	if count >= 20 {
		rate += 0.04
	} else if count >= 8 {
		rate += 0.01
	}
	if amount > 500 {
		rate += 0.02
	}
	return amount * (1 - rate)
}
"""

LOOPS = """package sample

func FindPattern(hay []int, needle []int) []int {
	var found []int
	for start := 0; start+len(needle) <= len(hay); start++ {
		ok := true
		for k := 0; k < len(needle); k++ {
			if hay[start+k] != needle[k] {
				ok = false
				break
			}
		}
		if ok {
			found = append(found, start)
		}
	}
	return found
}

func ProcessMatrix(grid [][]int) [][]int {
	out := make([][]int, len(grid))
	for r := 0; r < len(grid); r++ {
		out[r] = make([]int, len(grid[r]))
		for c := 0; c < len(grid[r]); c++ {
			v := grid[r][c]
			if r == 0 || c == 0 {
				out[r][c] = v
			} else if v > 0 {
				out[r][c] = v * 3
			} else if v < 0 {
				out[r][c] = -v
			} else {
				out[r][c] = 0
			}
		}
	}
	return out
}

func ValidateAndProcess(words []string) map[string]int {
	ranks := make(map[string]int)
	for _, w := range words {
		if len(w) == 0 {
			continue
		}
		if len(w) < 3 {
			ranks[w] = 0
			continue
		}
		total := 0
		for _, ch := range w {
			if ch >= '0' && ch <= '9' {
				total += 5
			} else if ch >= 'a' && ch <= 'z' {
				total += 1
			} else if ch >= 'A' && ch <= 'Z' {
				total += 2
			}
		}
		if total > 40 {
			ranks[w] = 2
		} else if total > 10 {
			ranks[w] = 1
		} else {
			ranks[w] = 0
		}
	}
	return ranks
}
"""

NESTED = """package sample

import "strings"

func ComplexValidation(record map[string]interface{}, schema map[string]string) []string {
	var problems []string
	for field, kind := range schema {
		v, present := record[field]
		if !present {
			problems = append(problems, "absent "+field)
			continue
		}
		switch kind {
		case "required":
			if v == nil || v == "" {
				problems = append(problems, "blank")
			}
		case "string":
			if s, ok := v.(string); ok {
				if s == "" {
					problems = append(problems, "empty")
				} else if len(s) > 100 {
					problems = append(problems, "long")
				}
			} else {
				problems = append(problems, "type")
			}
		case "number":
			if n, ok := v.(float64); ok {
				if n < 0 {
					problems = append(problems, "below")
				} else if n > 999 {
					problems = append(problems, "above")
				}
			} else {
				problems = append(problems, "type")
			}
		case "email":
			if s, ok := v.(string); ok {
				if strings.Count(s, "@") == 0 {
					problems = append(problems, "missing")
				} else if strings.Count(s, "@") > 1 {
					problems = append(problems, "extra")
				}
			} else {
				problems = append(problems, "type")
			}
		}
	}
	return problems
}
"""

COMPLEX = """package sample

import (
	"errors"
	"sort"
	"strings"
)

func SuperComplexProcessor(rows []map[string]interface{}, opts map[string]string) ([]map[string]interface{}, error) {
	var out []map[string]interface{}
	for _, row := range rows {
		next := make(map[string]interface{})
		for k, v := range row {
			if mode, found := opts["op_"+k]; found {
				switch mode {
				case "upper":
					if s, ok := v.(string); ok {
						next[k] = strings.ToUpper(s)
					} else {
						return nil, errors.New("upper")
					}
				case "lower":
					if s, ok := v.(string); ok {
						next[k] = strings.ToLower(s)
					} else {
						return nil, errors.New("lower")
					}
				case "twice":
					if f, ok := v.(float64); ok {
						next[k] = f + f
					} else if n, ok := v.(int); ok {
						next[k] = n + n
					} else {
						return nil, errors.New("twice")
					}
				case "check":
					if s, ok := v.(string); ok {
						if len(s) < 2 {
							return nil, errors.New("short")
						}
						if len(s) > 40 {
							return nil, errors.New("long")
						}
						if strings.HasPrefix(s, "bad") {
							return nil, errors.New("bad")
						}
						next[k] = s
					} else {
						return nil, errors.New("check")
					}
				case "order":
					if items, ok := v.([]interface{}); ok {
						var names []interface{}
						for _, it := range items {
							if s, ok := it.(string); ok {
								names = append(names, s)
							} else {
								return nil, errors.New("order item")
							}
						}
						sort.Slice(names, func(a, b int) bool {
							return names[a].(string) < names[b].(string)
						})
						next[k] = names
					} else {
						return nil, errors.New("order")
					}
				default:
					next[k] = v
				}
			} else {
				next[k] = v
			}
		}
		if len(next) == 0 {
			continue
		}
		for _, must := range []string{"key", "label"} {
			if _, has := next[must]; !has {
				return nil, errors.New("required")
			}
		}
		out = append(out, next)
	}
	return out, nil
}
"""


@pytest.mark.parametrize(
    "source, expected",
    [
        (SIMPLE, {"SimpleFunction": 1, "AddTwoNumbers": 1, "GreetUser": 1}),
        (BASIC, {"CheckPositive": 2, "GetGrade": 4, "ProcessNumbers": 3}),
        (CONDITIONAL, {"ValidateInput": 7, "CalculateDiscount": 6}),
        (LOOPS, {"FindPattern": 5, "ProcessMatrix": 7, "ValidateAndProcess": 13}),
        (NESTED, {"ComplexValidation": 18}),
        (COMPLEX, {"SuperComplexProcessor": 23}),
    ],
)
def test_testdata_complexities(source, expected):
    stats = analyze_source(source, "x.go")
    assert {s.name: s.complexity for s in stats} == expected


def test_positions_and_order():
    stats = analyze_source(BASIC, "basic.go")
    assert [(s.name, s.line, s.column) for s in stats] == [
        ("CheckPositive", 5, 1),
        ("GetGrade", 12, 1),
        ("ProcessNumbers", 23, 1),
    ]


def test_method_names():
    src = (
        "package p\n"
        "func (s *Server) Run() {}\n"
        "func (Value) Get() int { return 1 }\n"
        "func (l List[T]) Len() int { return 0 }\n"
    )
    assert [s.name for s in analyze_source(src)] == ["(*Server).Run", "(Value).Get", "(List).Len"]


def test_top_level_func_literal_is_not_a_declaration():
    src = "package p\nvar f = func() { if x {} }\nfunc g() {}\n"
    stats = analyze_source(src)
    assert [(s.name, s.complexity) for s in stats] == [("g", 1)]


def test_interface_in_result_type_and_select_cases():
    src = (
        "package p\n"
        "func h() map[string]interface{} {\n"
        "\tif a && b {}\n"
        "\tselect {\n\tcase <-c:\n\tdefault:\n\t}\n"
        "\treturn nil\n}\n"
    )
    assert analyze_source(src)[0].complexity == 4


def test_tokenize_kinds_and_byte_columns():
    tokens = tokenize('x := "é"; y')
    assert tokens == [
        Token("ident", "x", 1, 1),
        Token("op", ":=", 1, 3),
        Token("string", '"é"', 1, 6),
        Token("op", ";", 1, 10),
        Token("ident", "y", 1, 12),
    ]


def test_tokenize_skips_comments_and_tracks_lines():
    tokens = tokenize("// c\nfunc /* a\nb */ f `raw\nx` 0x1F")
    assert [(t.kind, t.value, t.line) for t in tokens] == [
        ("keyword", "func", 2),
        ("ident", "f", 3),
        ("raw", "`raw\nx`", 3),
        ("number", "0x1F", 4),
    ]


@pytest.mark.parametrize(
    "source",
    [
        'package p\nvar s = "open\n',
        "package p\n/* never closed",
        "package p\nfunc f() {",
        "package p\nfunc f() }",
        "func f() {}",
        "package p\nvar x = 1 # 2",
    ],
)
def test_syntax_errors(source):
    with pytest.raises(GoSyntaxError) as info:
        analyze_source(source, "bad.go")
    assert str(info.value).startswith("bad.go:")