from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
from typing import Iterator

from .scene import MAX_DRAW_ELEMENTS, Diagnostic, DiagnosticKind, LineRef, Point, Scene
from .symbols import DuplicateLabelError, SymbolTable

LOGGER = logging.getLogger(__name__)

_INT = r"\s*([+-]?[0-9]+)\s*"
_KEYWORD_RE = re.compile(r"^(point|line)\s*\(")
_POINT_RE = re.compile(r"^point\s*\(" + _INT + "," + _INT + r",([^)]*)\)\s*(?:#.*)?$")
_LINE_RE = re.compile(r"^line\s*\(([^,)]*),([^,)]*)\)\s*(?:#.*)?$")


@dataclass
class ParseResult:
    scene: Scene
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def default_table_capacity(max_points: int) -> int:
    """Smallest prime strictly greater than twice ``max_points``."""
    candidate = 2 * max(0, max_points) + 1
    while not _is_prime(candidate):
        candidate += 1
    return candidate


class ScriptParser:
    """Two-pass parser for drawing scripts.

    Pass one collects ``point(x,y,label)`` instructions into the scene and the
    symbol table. Pass two collects ``line(a,b)`` instructions whose labels
    both resolve, so lines may reference points defined later in the text.
    Malformed instructions are reported as diagnostics and skipped.
    """

    def __init__(
        self,
        max_points: int = MAX_DRAW_ELEMENTS,
        max_lines: int = MAX_DRAW_ELEMENTS,
        table_capacity: int | None = None,
    ) -> None:
        if max_points < 0 or max_lines < 0:
            raise ValueError("max_points/max_lines must be >= 0")
        if table_capacity is None:
            table_capacity = default_table_capacity(max_points)
        if table_capacity <= max_points:
            raise ValueError("table_capacity must be > max_points")
        self.max_points = max_points
        self.max_lines = max_lines
        self.table_capacity = table_capacity

    def parse(self, text: str) -> ParseResult:
        scene = Scene(
            symbols=SymbolTable(self.table_capacity),
            max_points=self.max_points,
            max_lines=self.max_lines,
        )
        result = ParseResult(scene=scene)
        self._collect_points(text, result)
        self._collect_lines(text, result)
        LOGGER.info(
            "Finished parsing. Loaded %d points and %d lines.",
            len(scene.points),
            len(scene.lines),
        )
        return result

    def _collect_points(self, text: str, result: ParseResult) -> None:
        scene = result.scene
        for line_no, instr in _instructions(text):
            keyword = _keyword(instr)
            if keyword is None:
                _report(result, "unrecognized", line_no, instr, "Unrecognized line format")
                continue
            if keyword != "point":
                continue
            m = _POINT_RE.match(instr)
            if m is None:
                _report(result, "malformed", line_no, instr, "Failed to parse point format")
                continue
            label = _clean_label(m.group(3))
            if not label:
                _report(result, "malformed", line_no, instr, "Point label is empty")
                continue
            if scene.points_full:
                _report(
                    result,
                    "capacity",
                    line_no,
                    instr,
                    f"Max points ({scene.max_points}) reached. Skipping point",
                )
                continue
            point = Point(x=int(m.group(1)), y=int(m.group(2)), label=label)
            try:
                scene.symbols.insert(label, point)
            except DuplicateLabelError:
                _report(result, "duplicate", line_no, instr, f"Duplicate point label {label!r}")
                continue
            scene.add_point(point)
            LOGGER.debug("Parsed Point: (%d, %d, %r)", point.x, point.y, point.label)

    def _collect_lines(self, text: str, result: ParseResult) -> None:
        scene = result.scene
        for line_no, instr in _instructions(text):
            if _keyword(instr) != "line":
                continue
            m = _LINE_RE.match(instr)
            if m is None:
                _report(result, "malformed", line_no, instr, "Failed to parse line format")
                continue
            label1 = _clean_label(m.group(1))
            label2 = _clean_label(m.group(2))
            if not label1 or not label2:
                _report(result, "malformed", line_no, instr, "Line label is empty")
                continue
            missing = [label for label in (label1, label2) if scene.symbols.lookup(label) is None]
            if missing:
                names = ", ".join(repr(label) for label in missing)
                _report(result, "unresolved", line_no, instr, f"Undefined point label {names}")
                continue
            if not scene.add_line(LineRef(label1=label1, label2=label2)):
                _report(
                    result,
                    "capacity",
                    line_no,
                    instr,
                    f"Max lines ({scene.max_lines}) reached. Skipping line",
                )
                continue
            LOGGER.debug("Parsed Line: %r to %r", label1, label2)


def parse_script(
    text: str,
    *,
    max_points: int = MAX_DRAW_ELEMENTS,
    max_lines: int = MAX_DRAW_ELEMENTS,
    table_capacity: int | None = None,
) -> ParseResult:
    parser = ScriptParser(max_points=max_points, max_lines=max_lines, table_capacity=table_capacity)
    return parser.parse(text)


def load_script(
    path: str | Path,
    *,
    max_points: int = MAX_DRAW_ELEMENTS,
    max_lines: int = MAX_DRAW_ELEMENTS,
    table_capacity: int | None = None,
) -> ParseResult:
    parser = ScriptParser(max_points=max_points, max_lines=max_lines, table_capacity=table_capacity)
    script_path = Path(path)
    try:
        text = script_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        LOGGER.warning(
            "Could not open drawing file %s (%s). Proceeding without drawing data.",
            script_path,
            exc,
        )
        result = parser.parse("")
        result.diagnostics.append(
            Diagnostic(
                kind="source_unavailable",
                line_no=0,
                text=str(script_path),
                message="Could not open drawing file",
            )
        )
        return result
    LOGGER.info("Parsing drawing file: %s", script_path)
    return parser.parse(text)


def format_scene(scene: Scene) -> str:
    out = [f"point({p.x},{p.y},{_format_label(p.label)})" for p in scene.points]
    out.extend(f"line({_format_label(line.label1)},{_format_label(line.label2)})" for line in scene.lines)
    return "\n".join(out) + ("\n" if out else "")


def _instructions(text: str) -> Iterator[tuple[int, str]]:
    for line_no, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield line_no, stripped


def _keyword(instr: str) -> str | None:
    m = _KEYWORD_RE.match(instr)
    return m.group(1) if m else None


def _clean_label(raw: str) -> str:
    label = raw.strip()
    # Older scripts quote labels: point(10,20,"A").
    if len(label) >= 2 and label[0] == '"' and label[-1] == '"':
        label = label[1:-1].strip()
    return label


def _format_label(label: str) -> str:
    # Re-quote labels that would otherwise lose their quotes on the next parse.
    if len(label) >= 2 and label[0] == '"' and label[-1] == '"':
        return f'"{label}"'
    return label


def _report(result: ParseResult, kind: DiagnosticKind, line_no: int, text: str, message: str) -> None:
    diagnostic = Diagnostic(kind=kind, line_no=line_no, text=text, message=message)
    result.diagnostics.append(diagnostic)
    LOGGER.warning("%s", diagnostic)


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True
