"""
Immutable SVG document builder for laser cut files.

An SvgDocument holds a page size, an ordered list of named style classes and
an explicit list of shape elements. Every add/define/remove call returns a
new document; nothing is mutated in place. Rendering goes through svgwrite.

The effective style of an element is its classes merged in order, then its
inline style string, with later keys overriding earlier ones.
"""
import io
import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import svgwrite

from geometry_primitives import Point2D

logger = logging.getLogger(__name__)

DEFAULT_CLASS = "default"
LASER_CLASS = "lasercutter"

CLASS_NAME_PATTERN = re.compile(r"^[_\-a-zA-Z][_\-a-zA-Z0-9]+$")
COORD_FORMAT = "{:.3f}"


class SvgDocumentError(ValueError):
    """Invalid operation on an SvgDocument."""


class StyleKey(Enum):
    """Style properties accepted in class definitions and inline styles."""
    STROKE = "stroke"
    STROKE_WIDTH = "stroke-width"
    STROKE_OPACITY = "stroke-opacity"
    STROKE_LINECAP = "stroke-linecap"
    STROKE_LINEJOIN = "stroke-linejoin"
    STROKE_DASHARRAY = "stroke-dasharray"
    FILL = "fill"
    FILL_OPACITY = "fill-opacity"
    OPACITY = "opacity"

    @classmethod
    def parse(cls, key: Union["StyleKey", str]) -> "StyleKey":
        if isinstance(key, cls):
            return key
        name = str(key).strip().replace("_", "-")
        try:
            return cls(name)
        except ValueError:
            raise SvgDocumentError(f"Unsupported style key: {key}") from None


Style = Tuple[Tuple[StyleKey, str], ...]
StyleInput = Union[Mapping[Union[StyleKey, str], object], Iterable[Tuple[Union[StyleKey, str], object]]]


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def make_style(entries: StyleInput) -> Style:
    """Normalize a mapping or sequence of (key, value) pairs into a Style."""
    if isinstance(entries, Mapping):
        entries = entries.items()
    return tuple((StyleKey.parse(k), _format_value(v)) for k, v in entries)


def parse_style(style_string: str) -> Style:
    """Parse an inline style string such as 'stroke: red; fill: none'."""
    entries = []
    for statement in style_string.split(";"):
        if not statement.strip():
            continue
        parts = statement.split(":")
        if len(parts) != 2:
            raise SvgDocumentError(f"Invalid style statement: {statement!r}")
        entries.append((parts[0].strip(), parts[1].strip()))
    return make_style(entries)


def merge_styles(*sources: Style) -> Dict[StyleKey, str]:
    """Merge styles left to right. A key keeps its first position, last value wins."""
    merged: Dict[StyleKey, str] = {}
    for source in sources:
        for key, value in source:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class StyleClass:
    """A named set of style properties."""
    name: str
    style: Style

    def to_css(self) -> str:
        body = " ".join(f"{key.value}:{value};" for key, value in self.style)
        return f".{self.name} {{{body}}}\n"


BUILTIN_CLASSES = (
    StyleClass(DEFAULT_CLASS, make_style({
        "stroke": "#000000", "stroke-width": 50, "stroke-opacity": 1, "fill": "none",
    })),
    StyleClass(LASER_CLASS, make_style({
        "stroke": "#ff0000", "stroke-width": 1, "stroke-opacity": 1, "fill": "none",
    })),
)

ELEMENT_KINDS = ("line", "rect", "circle", "ellipse", "polyline", "polygon")


@dataclass(frozen=True)
class SvgElement:
    """One shape in the document."""
    kind: str
    params: Tuple[Tuple[str, float], ...] = ()   # scalar attributes, e.g. x1, y1
    points: Tuple[Point2D, ...] = ()             # polyline/polygon vertices
    style: str = ""                              # inline style string
    class_names: Tuple[str, ...] = (DEFAULT_CLASS,)

    @property
    def attributes(self) -> Dict[str, float]:
        return dict(self.params)


@dataclass(frozen=True)
class SvgDocument:
    """An SVG page under construction. Units are thou by default."""
    width: float = 24000.0
    height: float = 12000.0
    units_per_inch: float = 1000.0
    classes: Tuple[StyleClass, ...] = BUILTIN_CLASSES
    elements: Tuple[SvgElement, ...] = ()

    # ─── Classes ──────────────────────────────────────────────────────────

    @property
    def class_names(self) -> List[str]:
        return [c.name for c in self.classes]

    def has_class(self, name: str) -> bool:
        return any(c.name == name for c in self.classes)

    def get_class(self, name: str) -> StyleClass:
        for c in self.classes:
            if c.name == name:
                return c
        raise SvgDocumentError(f"Class {name} does not exist. Create it before using it.")

    def define_class(self, name: str, style: StyleInput) -> "SvgDocument":
        """Return a document with the class added, or overwritten in place if it exists."""
        if not CLASS_NAME_PATTERN.match(name):
            raise SvgDocumentError(
                f"{name} is not a valid class name. Class names start with a letter, "
                "hyphen, or underscore, followed by at least one letter, number, "
                "hyphen, or underscore."
            )
        if name == DEFAULT_CLASS and self.has_class(name):
            raise SvgDocumentError(f"Class name '{DEFAULT_CLASS}' is reserved.")

        new_class = StyleClass(name, make_style(style))
        if self.has_class(name):
            logger.warning("Class %s already exists, overwriting it", name)
            classes = tuple(new_class if c.name == name else c for c in self.classes)
        else:
            classes = self.classes + (new_class,)
        return replace(self, classes=classes)

    def remove_class(self, name: str) -> "SvgDocument":
        """Return a document without the class.

        Elements that referred only to this class fall back to the default class.
        """
        if name == DEFAULT_CLASS:
            raise SvgDocumentError("Cannot delete default class.")
        if not self.has_class(name):
            raise SvgDocumentError(f"Cannot delete class {name} - it doesn't exist.")

        users = self.find_elements_by_class(name)
        if users:
            logger.warning(
                "%d elements refer to class %s; they lose it and fall back to '%s' if left bare",
                len(users), name, DEFAULT_CLASS,
            )
        elements = []
        for element in self.elements:
            remaining = tuple(c for c in element.class_names if c != name)
            elements.append(replace(element, class_names=remaining or (DEFAULT_CLASS,)))
        classes = tuple(c for c in self.classes if c.name != name)
        return replace(self, classes=classes, elements=tuple(elements))

    def find_elements_by_class(self, name: str) -> List[int]:
        return [i for i, e in enumerate(self.elements) if name in e.class_names]

    def resolve_style(self, element: SvgElement) -> Dict[str, str]:
        """Effective style of an element: its classes in order, then inline style."""
        sources = [self.get_class(c).style for c in element.class_names]
        sources.append(parse_style(element.style))
        return {key.value: value for key, value in merge_styles(*sources).items()}

    # ─── Shapes ───────────────────────────────────────────────────────────

    def add_line(self, x1, y1, x2, y2, style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("line", (("x1", x1), ("y1", y1), ("x2", x2), ("y2", y2)), (), style, class_names)

    def add_lines(self, points: Sequence[Point2D], style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        """Add one line element per consecutive pair of points."""
        doc = self
        for (x1, y1), (x2, y2) in zip(points[:-1], points[1:]):
            doc = doc.add_line(x1, y1, x2, y2, style, class_names)
        return doc

    def add_rect(self, x, y, width, height, style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("rect", (("x", x), ("y", y), ("width", width), ("height", height)), (), style, class_names)

    def add_circle(self, cx, cy, r, style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("circle", (("cx", cx), ("cy", cy), ("r", r)), (), style, class_names)

    def add_ellipse(self, cx, cy, rx, ry, style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("ellipse", (("cx", cx), ("cy", cy), ("rx", rx), ("ry", ry)), (), style, class_names)

    def add_polyline(self, points: Iterable[Point2D], style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("polyline", (), tuple(points), style, class_names)

    def add_polygon(self, points: Iterable[Point2D], style: str = "", class_names=DEFAULT_CLASS) -> "SvgDocument":
        return self._add("polygon", (), tuple(points), style, class_names)

    def _add(self, kind, params, points, style, class_names) -> "SvgDocument":
        if kind not in ELEMENT_KINDS:
            raise SvgDocumentError(f"Unknown SVG element type: {kind}")
        if isinstance(class_names, str):
            class_names = (class_names,)
        class_names = tuple(class_names) or (DEFAULT_CLASS,)
        for name in class_names:
            if not self.has_class(name):
                raise SvgDocumentError(f"Class {name} does not exist. Create it before using it.")
        # Fail on a bad inline style now rather than at render time
        parse_style(style)
        element = SvgElement(
            kind=kind,
            params=tuple((k, float(v)) for k, v in params),
            points=tuple((float(x), float(y)) for x, y in points),
            style=style,
            class_names=class_names,
        )
        return replace(self, elements=self.elements + (element,))

    # ─── Output ───────────────────────────────────────────────────────────

    def css(self) -> str:
        return "".join(c.to_css() for c in self.classes)

    def to_drawing(self, filename: str = "noname.svg") -> svgwrite.Drawing:
        dwg = svgwrite.Drawing(
            filename,
            size=(
                f"{self.width / self.units_per_inch:g}in",
                f"{self.height / self.units_per_inch:g}in",
            ),
            viewBox=f"0 0 {self.width:g} {self.height:g}",
            debug=False,
        )
        dwg.defs.add(dwg.style(self.css()))
        for element in self.elements:
            dwg.add(_element_to_svgwrite(dwg, element))
        return dwg

    def to_svg(self) -> str:
        """Render the document, XML declaration included."""
        buf = io.StringIO()
        self.to_drawing().write(buf)
        return buf.getvalue()

    def save(self, filepath: str) -> str:
        self.to_drawing(filepath).save()
        logger.info("Saved SVG: %s (%d elements)", filepath, len(self.elements))
        return filepath


def _fmt(value: float) -> str:
    return COORD_FORMAT.format(value)


def _element_to_svgwrite(dwg: svgwrite.Drawing, element: SvgElement):
    attrs = {"class_": " ".join(element.class_names)}
    if element.style:
        attrs["style"] = element.style
    a = element.attributes
    if element.kind == "line":
        return dwg.line(start=(_fmt(a["x1"]), _fmt(a["y1"])), end=(_fmt(a["x2"]), _fmt(a["y2"])), **attrs)
    if element.kind == "rect":
        return dwg.rect(insert=(_fmt(a["x"]), _fmt(a["y"])), size=(_fmt(a["width"]), _fmt(a["height"])), **attrs)
    if element.kind == "circle":
        return dwg.circle(center=(_fmt(a["cx"]), _fmt(a["cy"])), r=_fmt(a["r"]), **attrs)
    if element.kind == "ellipse":
        return dwg.ellipse(center=(_fmt(a["cx"]), _fmt(a["cy"])), r=(_fmt(a["rx"]), _fmt(a["ry"])), **attrs)
    points = [(_fmt(x), _fmt(y)) for x, y in element.points]
    if element.kind == "polyline":
        return dwg.polyline(points=points, **attrs)
    if element.kind == "polygon":
        return dwg.polygon(points=points, **attrs)
    raise SvgDocumentError(f"Unknown SVG element type: {element.kind}")
