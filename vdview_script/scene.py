from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .symbols import SymbolTable


MAX_DRAW_ELEMENTS = 500

DiagnosticKind = Literal[
    "source_unavailable",
    "malformed",
    "unrecognized",
    "unresolved",
    "capacity",
    "duplicate",
]


@dataclass(frozen=True)
class Point:
    x: int
    y: int
    label: str


@dataclass(frozen=True)
class LineRef:
    label1: str
    label2: str


@dataclass(frozen=True)
class Segment:
    p1: Point
    p2: Point


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    line_no: int
    text: str
    message: str

    def __str__(self) -> str:
        if self.line_no > 0:
            return f"[line {self.line_no}] {self.message}: {self.text}"
        return f"{self.message}: {self.text}"


@dataclass
class Scene:
    """Parsed points and label-pair line references, bounded per category."""

    symbols: "SymbolTable"
    max_points: int = MAX_DRAW_ELEMENTS
    max_lines: int = MAX_DRAW_ELEMENTS
    points: list[Point] = field(default_factory=list)
    lines: list[LineRef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_points < 0 or self.max_lines < 0:
            raise ValueError("max_points/max_lines must be >= 0")

    @property
    def points_full(self) -> bool:
        return len(self.points) >= self.max_points

    @property
    def lines_full(self) -> bool:
        return len(self.lines) >= self.max_lines

    def add_point(self, point: Point) -> bool:
        if self.points_full:
            return False
        self.points.append(point)
        return True

    def add_line(self, line: LineRef) -> bool:
        if self.lines_full:
            return False
        self.lines.append(line)
        return True

    def resolve(self, line: LineRef) -> Segment | None:
        p1 = self.symbols.lookup(line.label1)
        p2 = self.symbols.lookup(line.label2)
        if p1 is None or p2 is None:
            return None
        return Segment(p1=p1, p2=p2)

    def segments(self) -> list[Segment]:
        out: list[Segment] = []
        for line in self.lines:
            segment = self.resolve(line)
            if segment is not None:
                out.append(segment)
        return out

    def is_empty(self) -> bool:
        return not self.points and not self.lines
