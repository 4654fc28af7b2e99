from __future__ import annotations

import logging
import re
from pathlib import Path

import sexpdata

from pinout.exceptions import StructureError

logger = logging.getLogger(__name__)

_TSTAMP_RE = re.compile(r"(  )?\(tstamp .*?\)")

_MISSING = object()


class _TextParser(sexpdata.Parser):
    """Parser that keeps every unquoted atom as written.

    Netlist fields such as pin numbers (``01``) or net names (``INF``) are
    text, never numbers or booleans.
    """

    def atom(self, token):
        return sexpdata.Symbol(token)


def strip_timestamps(text: str) -> str:
    """Remove volatile ``(tstamp ...)`` forms so equal netlists parse equal."""
    return _TSTAMP_RE.sub("", text)


def loads(text: str) -> SExpr:
    try:
        values = _TextParser(strip_timestamps(text)).parse()
    except Exception as exc:
        raise StructureError(f"Failed to parse netlist: {exc}") from exc
    if len(values) != 1:
        raise StructureError(f"Expected one top-level expression, found {len(values)}")
    return SExpr(values[0])


def load(path: str | Path) -> SExpr:
    logger.debug("Reading netlist %s", path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise StructureError(f"Failed to read netlist {path}: not valid UTF-8") from exc
    return loads(text)


def _atom_text(value) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, sexpdata.Quoted):
        return _atom_text(value.x)
    return str(value)


def _is_list(value) -> bool:
    return isinstance(value, list)


class SExpr:
    """Read-only view of one node in a parsed s-expression tree.

    Indexing by a string looks up the first child list headed by that symbol
    and returns its tail, so ``doc["design"]["sheet"]`` walks
    ``(design ... (sheet ...))``. Indexing by an int picks a positional
    element. Neither form raises; a missing node reads as empty text.
    """

    def __init__(self, value, path: str = ""):
        self._value = value
        self.path = path

    def __repr__(self) -> str:
        if self._value is _MISSING:
            return f"SExpr(<missing> at {self.path or '/'})"
        return f"SExpr({sexpdata.dumps(self._value)!s})"

    @property
    def value(self):
        return None if self._value is _MISSING else self._value

    @property
    def exists(self) -> bool:
        return self._value is not _MISSING

    @property
    def tag(self) -> str | None:
        if _is_list(self._value) and self._value and not _is_list(self._value[0]):
            return _atom_text(self._value[0])
        return None

    def _child_path(self, key) -> str:
        return f"{self.path}.{key}" if self.path else str(key)

    def __getitem__(self, key) -> SExpr:
        path = self._child_path(key)
        if not _is_list(self._value):
            return SExpr(_MISSING, path)
        if isinstance(key, int):
            try:
                return SExpr(self._value[key], path)
            except IndexError:
                return SExpr(_MISSING, path)
        for child in self._value:
            if _is_list(child) and child and _atom_text(child[0]) == key:
                return SExpr(child[1:], path)
        return SExpr(_MISSING, path)

    def require(self, key) -> SExpr:
        node = self[key]
        if not node.exists:
            raise StructureError(f"Missing required field `{node.path}`")
        return node

    def all(self, key: str) -> list[SExpr]:
        if not _is_list(self._value):
            return []
        path = self._child_path(key)
        return [
            SExpr(child[1:], path)
            for child in self._value
            if _is_list(child) and child and _atom_text(child[0]) == key
        ]

    def list_iter(self) -> list[SExpr]:
        if not _is_list(self._value):
            raise StructureError(f"`{self.path or '/'}` was not a list")
        return [SExpr(child, self._child_path(i)) for i, child in enumerate(self._value)]

    def tail(self) -> SExpr:
        """The node's elements after its head symbol."""
        return SExpr(self._value[1:], self.path) if self.tag is not None else self

    def text(self) -> str:
        value = self._value
        if _is_list(value):
            if not value:
                return ""
            if len(value) == 1 and not _is_list(value[0]):
                return _atom_text(value[0])
            raise StructureError(
                f"Expected a single value at `{self.path}`, found "
                f"`{sexpdata.dumps(value)}`. Use text_join if these should be one"
            )
        return _atom_text(value)

    def text_join(self, sep: str = " ") -> str:
        return sep.join(_atom_text(atom) for atom in self._atoms(self._value))

    def _atoms(self, value):
        if _is_list(value):
            for item in value:
                yield from self._atoms(item)
        elif value is not _MISSING and value is not None:
            yield value
