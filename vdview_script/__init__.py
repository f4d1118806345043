from .parser import ParseResult, ScriptParser, default_table_capacity, format_scene, load_script, parse_script
from .scene import MAX_DRAW_ELEMENTS, Diagnostic, LineRef, Point, Scene, Segment
from .symbols import DuplicateLabelError, SymbolTable, SymbolTableOverflowError, label_hash

__all__ = [
    "Diagnostic",
    "DuplicateLabelError",
    "LineRef",
    "MAX_DRAW_ELEMENTS",
    "ParseResult",
    "Point",
    "Scene",
    "ScriptParser",
    "Segment",
    "SymbolTable",
    "SymbolTableOverflowError",
    "default_table_capacity",
    "format_scene",
    "label_hash",
    "load_script",
    "parse_script",
]
