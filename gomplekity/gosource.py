"""Lexing of Go source and cyclomatic complexity of its function declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["GoSyntaxError", "Token", "FuncStat", "tokenize", "analyze_source"]

KEYWORDS = frozenset(
    """break case chan const continue default defer else fallthrough for func go
    goto if import interface map package range return select struct switch type var""".split()
)

_OPERATORS = sorted(
    "<<= >>= &^= ... && || <- ++ -- == != <= >= := += -= *= /= %= &= |= ^= << >> &^ "
    "~ + - * / % & | ^ < > = ! ( ) [ ] { } , ; . :".split(),
    key=len,
    reverse=True,
)

_TOKEN_RE = re.compile(
    "|".join(
        f"(?P<{name}>{pattern})"
        for name, pattern in [
            ("space", r"[ \t\r\n\ufeff]+"),
            ("comment", r"//[^\n]*|/\*(?s:.*?)\*/"),
            ("raw", r"`[^`]*`"),
            ("string", r'"(?:[^"\\\n]|\\.)*"'),
            ("char", r"'(?:[^'\\\n]|\\.)+'"),
            ("number", r"\.?[0-9](?:[eEpP][+-]|[0-9a-zA-Z_.])*"),
            ("ident", r"[^\W\d]\w*"),
            ("op", "|".join(map(re.escape, _OPERATORS))),
        ]
    )
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}


class GoSyntaxError(ValueError):
    """Raised when Go source cannot be lexed or its structure is broken."""

    def __init__(self, message: str, line: int = 0, column: int = 0, filename: str = ""):
        self.message, self.line, self.column, self.filename = message, line, column, filename
        where = f"{line}:{column}: " if line else ""
        super().__init__(f"{filename + ':' if filename else ''}{where}{message}")


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based line and byte column."""

    kind: str
    value: str
    line: int
    column: int

    def is_op(self, *values: str) -> bool:
        return self.kind == "op" and self.value in values


@dataclass(frozen=True)
class FuncStat:
    """Complexity of one top-level function or method."""

    name: str
    line: int
    column: int
    complexity: int


def tokenize(source: str) -> list[Token]:
    """Split Go source into tokens, dropping whitespace and comments."""
    tokens: list[Token] = []
    pos, line, line_start = 0, 1, 0
    while pos < len(source):
        column = len(source[line_start:pos].encode("utf-8")) + 1
        match = _TOKEN_RE.match(source, pos)
        if source.startswith("/*", pos) and "*/" not in source[pos + 2 :]:
            raise GoSyntaxError("comment not terminated", line, column)
        if match is None:
            raise GoSyntaxError(f"unexpected character {source[pos]!r}", line, column)
        kind, text = match.lastgroup, match.group()
        if kind not in ("space", "comment"):
            if kind == "ident" and text in KEYWORDS:
                kind = "keyword"
            tokens.append(Token(kind, text, line, column))
        if "\n" in text:
            line += text.count("\n")
            line_start = pos + text.rfind("\n") + 1
        pos = match.end()
    return tokens


def _bracket_pairs(tokens: list[Token]) -> dict[int, int]:
    pairs: dict[int, int] = {}
    stack: list[int] = []
    for index, tok in enumerate(tokens):
        if tok.is_op("(", "[", "{"):
            stack.append(index)
        elif tok.is_op(")", "]", "}"):
            if not stack or _OPENERS[tokens[stack[-1]].value] != tok.value:
                raise GoSyntaxError(f"unexpected {tok.value!r}", tok.line, tok.column)
            pairs[stack.pop()] = index
    if stack:
        tok = tokens[stack[-1]]
        raise GoSyntaxError(f"unclosed {tok.value!r}", tok.line, tok.column)
    return pairs


def _starts_declaration(prev: Token | None, tok: Token) -> bool:
    if prev is None or prev.is_op(";"):
        return True
    if prev.kind == "op" and not prev.is_op(")", "]", "}"):
        return False
    return prev.line != tok.line


def _receiver_name(toks: list[Token], at: Token) -> str:
    if len(toks) > 1 and toks[0].kind == "ident" and not toks[1].is_op(")", "[", "."):
        toks = toks[1:]
    star = ""
    if toks and toks[0].is_op("*"):
        star, toks = "*", toks[1:]
    if not toks or toks[0].kind != "ident":
        raise GoSyntaxError("invalid receiver", at.line, at.column)
    return star + toks[0].value


def _function(tokens: list[Token], pairs: dict[int, int], start: int) -> tuple[FuncStat, int]:
    func_tok = tokens[start]

    def need(i: int) -> Token:
        if i >= len(tokens):
            raise GoSyntaxError("unexpected end of file", func_tok.line, func_tok.column)
        return tokens[i]

    i, receiver = start + 1, None
    if need(i).is_op("("):
        receiver = _receiver_name(tokens[i + 1 : pairs[i]], tokens[i])
        i = pairs[i] + 1
    name_tok = need(i)
    if name_tok.kind != "ident":
        raise GoSyntaxError("expected function name", name_tok.line, name_tok.column)
    i += 1
    if need(i).is_op("["):
        i = pairs[i] + 1
    if not need(i).is_op("("):
        raise GoSyntaxError("expected '('", tokens[i].line, tokens[i].column)
    i = pairs[i] + 1

    # Skip the result list up to the body; a line break without a body ends the declaration.
    while i < len(tokens):
        tok, prev = tokens[i], tokens[i - 1]
        if tok.is_op(";") or tok.line != prev.line:
            break
        if tok.is_op(")", "]", "}"):
            raise GoSyntaxError(f"unexpected {tok.value!r}", tok.line, tok.column)
        if tok.is_op("(", "[", "{"):
            body = tok.is_op("{") and prev.value not in ("interface", "struct")
            i = pairs[i] + 1
            if body:
                break
            continue
        i += 1

    complexity = 1 + sum(
        1
        for tok in tokens[start:i]
        if (tok.kind == "keyword" and tok.value in ("if", "for", "case")) or tok.is_op("&&", "||")
    )
    name = f"({receiver}).{name_tok.value}" if receiver else name_tok.value
    return FuncStat(name, func_tok.line, func_tok.column, complexity), i


def analyze_source(source: str, filename: str = "<source>") -> list[FuncStat]:
    """Return the cyclomatic complexity of every function declared in a Go file."""
    try:
        tokens = tokenize(source)
        if len(tokens) < 2 or tokens[0].value != "package" or tokens[1].kind != "ident":
            first = tokens[0] if tokens else Token("eof", "", 1, 1)
            raise GoSyntaxError("expected 'package'", first.line, first.column)
        pairs = _bracket_pairs(tokens)
        stats: list[FuncStat] = []
        depth, prev, i = 0, None, 0
        while i < len(tokens):
            tok = tokens[i]
            if depth == 0 and tok.value == "func" and tok.kind == "keyword" and _starts_declaration(prev, tok):
                stat, i = _function(tokens, pairs, i)
                stats.append(stat)
                prev = tokens[i - 1]
                continue
            if tok.is_op("(", "[", "{"):
                depth += 1
            elif tok.is_op(")", "]", "}"):
                depth -= 1
            prev, i = tok, i + 1
        return stats
    except GoSyntaxError as err:
        raise GoSyntaxError(err.message, err.line, err.column, filename) from None