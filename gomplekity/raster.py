"""Rendering of the tree's SVG documents to PNG images."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET

from PIL import Image, ImageColor, ImageDraw

__all__ = ["fix_gradients_in_svg", "render_svg", "svg_to_png"]

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 400

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_NUMBER_RE = re.compile(r"\s*(" + _NUMBER + ")")
_PATH_TOKEN_RE = re.compile(r"[MmLlHhVvQqZz]|" + _NUMBER)
_TRANSFORM_RE = re.compile(r"(\w+)\s*\(([^)]*)\)")

_IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
_DEFAULT_STYLE = {"fill": "black", "stroke": "none", "stroke-width": "1"}
_SKIPPED = {"defs", "title", "desc", "metadata", "style", "linearGradient", "radialGradient"}


def fix_gradients_in_svg(svg_content: str) -> str:
    """Replace the tree's gradient fills with solid colours and drop their definitions."""
    svg_content = svg_content.replace("url(#trunkGrad)", "#8d6e63")
    svg_content = svg_content.replace("url(#groundDepth)", "#4caf50")
    return re.sub(r"<defs>.*?</defs>", "", svg_content)


def _number(value, default: float = 0.0) -> float:
    if value is None:
        return default
    match = _NUMBER_RE.match(value)
    if match is None:
        raise ValueError(f"invalid number {value!r}")
    return float(match.group(1))


def _numbers(text: str) -> list[float]:
    return [float(v) for v in re.split(r"[\s,]+", text.strip()) if v]


def _multiply(m, n):
    a1, b1, c1, d1, e1, f1 = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def _apply(m, point):
    a, b, c, d, e, f = m
    x, y = point
    return (a * x + c * y + e, b * x + d * y + f)


def _parse_transform(text: str):
    matrix = _IDENTITY
    for name, args in _TRANSFORM_RE.findall(text):
        values = _numbers(args)
        if name == "translate" and len(values) in (1, 2):
            step = (1.0, 0.0, 0.0, 1.0, values[0], values[1] if len(values) == 2 else 0.0)
        elif name == "scale" and len(values) in (1, 2):
            step = (values[0], 0.0, 0.0, values[-1], 0.0, 0.0)
        elif name == "rotate" and len(values) == 1:
            rad = math.radians(values[0])
            step = (math.cos(rad), math.sin(rad), -math.sin(rad), math.cos(rad), 0.0, 0.0)
        elif name == "matrix" and len(values) == 6:
            step = tuple(values)
        else:
            raise ValueError(f"invalid transform {name}({args})")
        matrix = _multiply(matrix, step)
    return matrix


def _parse_path(d: str) -> list[tuple[list, bool]]:
    """Flatten path data into (points, closed) subpaths."""
    tokens = _PATH_TOKEN_RE.findall(d)
    if _PATH_TOKEN_RE.sub("", d).strip(" \t\r\n,"):
        raise ValueError(f"invalid path data {d!r}")
    subpaths: list[tuple[list, bool]] = []
    points: list | None = None
    x = y = 0.0
    start = (0.0, 0.0)
    command = None
    i = 0

    def take(count: int) -> list[float]:
        nonlocal i
        chunk = tokens[i : i + count]
        if len(chunk) < count or any(t.isalpha() for t in chunk):
            raise ValueError(f"invalid path data {d!r}")
        i += count
        return [float(t) for t in chunk]

    while i < len(tokens):
        if tokens[i].isalpha():
            command = tokens[i]
            i += 1
            if command in "Zz":
                if points is not None:
                    subpaths[-1] = (points, True)
                    x, y = start
                points = None
                continue
        elif command is None or command in "Zz":
            raise ValueError(f"invalid path data {d!r}")

        op = command.upper()
        ox, oy = (x, y) if command.islower() else (0.0, 0.0)
        if op == "M" or points is None:
            if op == "M":
                px, py = take(2)
                x, y = ox + px, oy + py
                command = "l" if command.islower() else "L"
            points, start = [(x, y)], (x, y)
            subpaths.append((points, False))
            if op == "M":
                continue
        if op == "L":
            px, py = take(2)
            x, y = ox + px, oy + py
        elif op == "H":
            x = ox + take(1)[0]
        elif op == "V":
            y = oy + take(1)[0]
        elif op == "Q":
            cx, cy, px, py = take(4)
            cx, cy, ex, ey = ox + cx, oy + cy, ox + px, oy + py
            for k in range(1, 8):
                t = k / 8
                u = 1 - t
                points.append((u * u * x + 2 * u * t * cx + t * t * ex, u * u * y + 2 * u * t * cy + t * t * ey))
            x, y = ex, ey
        points.append((x, y))
    return subpaths


def _geometry(tag: str, get) -> list[tuple[list, bool]]:
    if tag == "path":
        return _parse_path(get("d", ""))
    if tag == "rect":
        x, y = _number(get("x")), _number(get("y"))
        w, h = _number(get("width")), _number(get("height"))
        if w <= 0 or h <= 0:
            return []
        return [([(x, y), (x + w, y), (x + w, y + h), (x, y + h)], True)]
    if tag == "line":
        return [([(_number(get("x1")), _number(get("y1"))), (_number(get("x2")), _number(get("y2")))], False)]
    return []


def _rgba(value: str, opacity: float):
    value = value.strip()
    if not value or value == "none" or value.startswith("url("):
        return None
    alpha = max(0, min(255, round(255 * opacity)))
    return ImageColor.getrgb(value)[:3] + (alpha,) if alpha else None


def _blit(image: Image.Image, shapes, pad: float, draw_shape) -> None:
    """Draw shapes on a small overlay and composite it over the image."""
    xs = [x for points in shapes for x, _ in points]
    ys = [y for points in shapes for _, y in points]
    if not xs:
        return
    left, top = max(0, math.floor(min(xs) - pad)), max(0, math.floor(min(ys) - pad))
    right = min(image.width, math.ceil(max(xs) + pad) + 1)
    bottom = min(image.height, math.ceil(max(ys) + pad) + 1)
    if right <= left or bottom <= top:
        return
    overlay = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    for points in shapes:
        draw_shape(draw, [(x - left, y - top) for x, y in points])
    image.alpha_composite(overlay, dest=(left, top))


def _paint(image, subpaths, matrix, style, opacity) -> None:
    shapes = [([_apply(matrix, p) for p in points], closed) for points, closed in subpaths]

    fill = _rgba(style["fill"], opacity)
    polygons = [points for points, _ in shapes if len(points) >= 3]
    if fill and polygons:
        _blit(image, polygons, 1, lambda draw, pts: draw.polygon(pts, fill=fill))

    stroke = _rgba(style["stroke"], opacity)
    a, b, c, d, _, _ = matrix
    width = _number(style["stroke-width"], 1.0) * math.sqrt(abs(a * d - b * c))
    if stroke and width > 0:
        pixels = max(1, round(width))
        lines = [points + [points[0]] if closed else points for points, closed in shapes if len(points) >= 2]
        _blit(image, lines, pixels, lambda draw, pts: draw.line(pts, fill=stroke, width=pixels))


def _render(elem, image, matrix, inherited: dict, opacity: float) -> None:
    tag = elem.tag.rsplit("}", 1)[-1]
    if tag in _SKIPPED:
        return
    attrs = {k.rsplit("}", 1)[-1]: v for k, v in elem.attrib.items()}
    for declaration in attrs.get("style", "").split(";"):
        if ":" in declaration:
            key, value = declaration.split(":", 1)
            attrs[key.strip()] = value.strip()
    style = {key: attrs.get(key, value) for key, value in inherited.items()}
    opacity *= _number(attrs.get("opacity"), 1.0)
    if "transform" in attrs:
        matrix = _multiply(matrix, _parse_transform(attrs["transform"]))
    if tag in ("svg", "g"):
        for child in elem:
            _render(child, image, matrix, style, opacity)
        return
    subpaths = _geometry(tag, attrs.get)
    if subpaths:
        _paint(image, subpaths, matrix, style, opacity)


def render_svg(svg_content: str) -> Image.Image:
    """Rasterise an SVG document at its own size onto a transparent RGBA image."""
    try:
        root = ET.fromstring(svg_content)
        if root.tag.rsplit("}", 1)[-1] != "svg":
            raise ValueError("root element is not <svg>")
        matrix = _IDENTITY
        view_box = root.get("viewBox")
        if view_box:
            values = _numbers(view_box)
            if len(values) != 4:
                raise ValueError(f"invalid viewBox {view_box!r}")
            min_x, min_y, width, height = values
            matrix = (1.0, 0.0, 0.0, 1.0, -min_x, -min_y)
        else:
            width, height = (
                0.0 if v is None or v.strip().endswith("%") else _number(v)
                for v in (root.get("width"), root.get("height"))
            )
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT
        image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        _render(root, image, matrix, _DEFAULT_STYLE, 1.0)
    except (ET.ParseError, ValueError) as err:
        raise ValueError(f"failed to parse SVG: {err}") from err
    return image


def svg_to_png(svg_content: str, filename: str) -> None:
    """Render the SVG with its gradients made solid and save it as a PNG file."""
    image = render_svg(fix_gradients_in_svg(svg_content))
    try:
        image.save(filename, format="PNG")
    except OSError as err:
        raise OSError(f"failed to create PNG file: {err}") from err