"""
Permissive, path-queryable JSON values

A JSONResult wraps raw JSON text and parses it on first use. Lookups never raise:
a missing key, an out-of-range index or malformed input all produce an empty
result whose ``exists`` is False. Callers that need strict validation use valid().

Path syntax:
    name.first        object keys separated by dots
    friends.1         integer segments index arrays
    friends.#         length of an array
    friends.#.first   apply the rest of the path to every element
    fav\\.movie        backslash escapes a dot (or a wildcard character)
    ch*ld / c?ild     wildcards match the first object key in document order
"""

import json
import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

_MISSING = object()
_UNPARSED = object()

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})


class JSONType(Enum):
    """Kind of value held by a JSONResult"""

    NULL = "null"
    FALSE = "false"
    NUMBER = "number"
    STRING = "string"
    TRUE = "true"
    JSON = "json"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)


class JSONResult:
    """
    A JSON value that can be queried with dotted paths.

    Results are cheap to create; the underlying document is decoded once, on the
    first query, and shared by every result derived from it.
    """

    def __init__(self, raw: str | None = "", value: Any = _UNPARSED):
        self._raw = raw
        self._value = value

    @classmethod
    def _of(cls, value: Any) -> "JSONResult":
        """Wrap an already-decoded value (raw text is rendered on demand)"""
        return cls(raw=None, value=value)

    def _resolve(self) -> Any:
        if self._value is _UNPARSED:
            text = (self._raw or "").strip()
            if not text:
                self._value = _MISSING
            else:
                try:
                    self._value = _loads(text)
                except ValueError:
                    self._value = _MISSING
        return self._value

    @property
    def raw(self) -> str:
        """JSON text of this value ("" when absent)"""
        if self._raw is None:
            value = self._resolve()
            self._raw = "" if value is _MISSING else json.dumps(value, separators=(",", ":"))
        return self._raw

    @property
    def exists(self) -> bool:
        return self._resolve() is not _MISSING

    @property
    def type(self) -> JSONType:
        value = self._resolve()
        if value is _MISSING or value is None:
            return JSONType.NULL
        if value is True:
            return JSONType.TRUE
        if value is False:
            return JSONType.FALSE
        if isinstance(value, (int, float)):
            return JSONType.NUMBER
        if isinstance(value, str):
            return JSONType.STRING
        return JSONType.JSON

    def is_object(self) -> bool:
        return isinstance(self._resolve(), dict)

    def is_array(self) -> bool:
        return isinstance(self._resolve(), list)

    def value(self) -> Any:
        """Decoded Python value, or None when absent"""
        value = self._resolve()
        return None if value is _MISSING else value

    def as_str(self) -> str:
        """String form: strings verbatim, other values as their JSON text"""
        kind = self.type
        if kind == JSONType.NULL:
            return ""
        if kind == JSONType.STRING:
            return self._resolve()
        return self.raw if kind == JSONType.JSON else json.dumps(self._resolve())

    def as_float(self) -> float:
        kind = self.type
        if kind == JSONType.TRUE:
            return 1.0
        if kind == JSONType.NUMBER:
            try:
                return float(self._resolve())
            except OverflowError:
                return 0.0
        if kind == JSONType.STRING:
            try:
                return float(self._resolve())
            except ValueError:
                return 0.0
        return 0.0

    def as_int(self) -> int:
        kind = self.type
        if kind == JSONType.STRING:
            try:
                return int(self._resolve().strip())
            except ValueError:
                pass
        elif kind == JSONType.NUMBER and isinstance(self._resolve(), int):
            return self._resolve()
        number = self.as_float()
        # NaN and infinities have no integer value
        return int(number) if math.isfinite(number) else 0

    def as_bool(self) -> bool:
        kind = self.type
        if kind == JSONType.TRUE:
            return True
        if kind == JSONType.STRING:
            return self._resolve() in _TRUE_STRINGS
        if kind == JSONType.NUMBER:
            return self._resolve() != 0
        return False

    def as_list(self) -> list["JSONResult"]:
        """
        Array elements as results.

        A non-array value is returned as a one-element list; null and absent
        values give an empty list.
        """
        value = self._resolve()
        if isinstance(value, list):
            return [JSONResult._of(item) for item in value]
        if value is _MISSING or value is None:
            return []
        return [self]

    def as_dict(self) -> dict[str, "JSONResult"]:
        value = self._resolve()
        if isinstance(value, dict):
            return {key: JSONResult._of(item) for key, item in value.items()}
        return {}

    def for_each(self, callback: Callable[[Any, "JSONResult"], bool]) -> None:
        """
        Call ``callback(key, value)`` for every member until it returns False.

        Keys are object keys, array indexes, or None for a scalar value.
        """
        value = self._resolve()
        if isinstance(value, dict):
            items: Any = value.items()
        elif isinstance(value, list):
            items = enumerate(value)
        elif value is _MISSING:
            return
        else:
            items = [(None, value)]

        for key, item in items:
            if callback(key, JSONResult._of(item)) is False:
                break

    def get(self, path: str) -> "JSONResult":
        """Look up a dotted path (see module docstring). Never raises."""
        value = self._resolve()
        if value is _MISSING or not path:
            return JSONResult()
        return JSONResult._of(_walk(value, _split_path(path)))

    def get_many(self, *paths: str) -> list["JSONResult"]:
        return [self.get(path) for path in paths]

    def __bool__(self) -> bool:
        return self.exists

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONResult):
            return NotImplemented
        return self._resolve() == other._resolve()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.exists:
            return "JSONResult(<absent>)"
        return f"JSONResult({self.raw})"


class _Segment:
    """One path component; ``pattern`` is set when it holds unescaped wildcards"""

    __slots__ = ("text", "pattern")

    def __init__(self, text: str, pattern: re.Pattern[str] | None = None):
        self.text = text
        self.pattern = pattern

    def matches(self, key: str) -> bool:
        if self.pattern is not None:
            return self.pattern.fullmatch(key) is not None
        return key == self.text


def _split_path(path: str) -> list[_Segment]:
    segments = []
    text: list[str] = []
    regex: list[str] = []
    wildcard = False

    chars = iter(path)
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            text.append(escaped)
            regex.append(re.escape(escaped))
        elif char == ".":
            segments.append(_make_segment(text, regex, wildcard))
            text, regex, wildcard = [], [], False
        elif char == "*":
            text.append(char)
            regex.append(".*")
            wildcard = True
        elif char == "?":
            text.append(char)
            regex.append(".")
            wildcard = True
        else:
            text.append(char)
            regex.append(re.escape(char))

    segments.append(_make_segment(text, regex, wildcard))
    return segments


def _make_segment(text: list[str], regex: list[str], wildcard: bool) -> _Segment:
    if wildcard:
        return _Segment("".join(text), re.compile("".join(regex), re.DOTALL))
    return _Segment("".join(text))


def _walk(value: Any, segments: list[_Segment]) -> Any:
    for position, segment in enumerate(segments):
        if isinstance(value, list):
            if segment.pattern is None and segment.text == "#":
                rest = segments[position + 1 :]
                if not rest:
                    return len(value)
                mapped = (_walk(item, rest) for item in value)
                return [item for item in mapped if item is not _MISSING]
            if segment.pattern is None and segment.text.isdecimal():
                index = int(segment.text)
                if index < len(value):
                    value = value[index]
                    continue
            return _MISSING

        if isinstance(value, dict):
            if segment.pattern is None:
                if segment.text in value:
                    value = value[segment.text]
                    continue
                return _MISSING
            for key in value:
                if segment.matches(key):
                    value = value[key]
                    break
            else:
                return _MISSING
            continue

        return _MISSING

    return value


def parse(text: str) -> JSONResult:
    """Wrap JSON text without validating it"""
    return JSONResult(raw=text)


def parse_bytes(data: bytes) -> JSONResult:
    """Wrap a JSON byte payload; undecodable bytes are replaced, not rejected"""
    return JSONResult(raw=data.decode("utf-8", errors="replace"))


def valid(text: str | bytes) -> bool:
    """Strictly check that ``text`` is a single well-formed JSON document"""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError:
            return False
    try:
        _loads(text)
    except ValueError:
        return False
    return True
