"""
Scene - A minimal vector-graphics element tree and its SVG markup.

Layout engines compute geometry; the family renderers turn that geometry
into SceneElement trees that the host's drawing surface consumes, either
as objects or as serialized markup. Attribute values are stored as
strings exactly as they will be written.
"""

from dataclasses import dataclass, field
from typing import Optional
from xml.sax.saxutils import escape, quoteattr

SVG_NS = "http://www.w3.org/2000/svg"


def fmt(value: float) -> str:
    """Format a coordinate: integers without a trailing .0, floats rounded."""
    rounded = round(float(value), 3)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


@dataclass
class SceneElement:
    """One element of the scene (svg, g, rect, circle, path, text...)."""
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list["SceneElement"] = field(default_factory=list)
    text: Optional[str] = None

    def append(self, child: "SceneElement") -> "SceneElement":
        self.children.append(child)
        return child

    def iter(self):
        """Depth-first iteration over this element and its descendants."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def find_node_group(self, node_id: str) -> Optional["SceneElement"]:
        """The group rendered for a diagram node (for host click routing)."""
        for element in self.iter():
            if element.attrs.get("data-node-id") == node_id:
                return element
        return None

    def to_markup(self) -> str:
        """Serialize as SVG/XML markup."""
        parts: list[str] = []
        self._write(parts)
        return "".join(parts)

    def _write(self, parts: list[str]) -> None:
        attrs = "".join(f" {key}={quoteattr(value)}" for key, value in self.attrs.items())
        if not self.children and self.text is None:
            parts.append(f"<{self.tag}{attrs}/>")
            return
        parts.append(f"<{self.tag}{attrs}>")
        if self.text is not None:
            parts.append(escape(self.text))
        for child in self.children:
            child._write(parts)
        parts.append(f"</{self.tag}>")


def element(tag: str, text: Optional[str] = None, **attrs) -> SceneElement:
    """
    Build an element; keyword names map to attributes.

    Underscores become dashes (stroke_width -> stroke-width) and a
    trailing underscore is dropped (class_ -> class).
    """
    converted: dict[str, str] = {}
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        converted[name] = fmt(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
    return SceneElement(tag=tag, attrs=converted, text=text)


def svg_root(width: float, height: float, css_class: str) -> SceneElement:
    return element(
        "svg",
        xmlns=SVG_NS,
        width=width,
        height=height,
        viewBox=f"0 0 {fmt(width)} {fmt(height)}",
        class_=css_class,
    )


# --- Colours ---

def string_hash(value: str) -> int:
    """
    Polynomial rolling hash h = h*31 + code point, as signed 32-bit.

    Matches the hash browsers compute with 32-bit integer arithmetic, so
    colours stay identical across implementations.
    """
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def palette_color(key: str, palette: list[str]) -> str:
    """Deterministic palette entry for a key."""
    return palette[abs(string_hash(key)) % len(palette)]


def darken_color(color: str, factor: float) -> str:
    """Darken a #rrggbb colour by `factor` (0..1); returns rgb(r, g, b)."""
    hex_value = color.lstrip("#")
    channels = [int(hex_value[i:i + 2], 16) for i in (0, 2, 4)]
    # half-up rounding, not Python's round-half-even
    r, g, b = (max(0, int(c * (1 - factor) + 0.5)) for c in channels)
    return f"rgb({r}, {g}, {b})"
