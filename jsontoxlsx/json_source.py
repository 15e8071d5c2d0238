"""JSON input: top-level sniffing and lazy array decoding."""

# Module responsibilities:
# - Decide from the first token whether the input is an object, an array or neither.
# - Yield array elements one at a time from fixed-size chunks so large arrays stream.

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any, Iterator, Optional

from .errors import JsonSourceError
from .utils.log import get_logger

logger = get_logger("json_source")

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER_TAIL = re.compile(r"[0-9.eE+\-]*")
DEFAULT_CHUNK_SIZE = 65536


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    NONE = "none"


@dataclass
class JsonDocument:
    """A decoded object, a lazy iterator of array elements, or nothing."""

    kind: JsonKind
    value: Any = None


class _Reader:
    """Chunked text buffer that drops consumed input."""

    def __init__(self, handle: IO[str], chunk_size: int) -> None:
        self._handle = handle
        self._chunk_size = chunk_size
        self.buffer = ""
        self.pos = 0
        self.eof = False

    def fill(self) -> bool:
        """Read one more chunk; False once the input is exhausted."""

        if self.eof:
            return False
        chunk = self._handle.read(self._chunk_size)
        if not chunk:
            self.eof = True
            return False
        self.buffer = self.buffer[self.pos :] + chunk
        self.pos = 0
        return True

    def skip_whitespace(self) -> Optional[str]:
        """Advance past whitespace and return the next character, or None at EOF."""

        while True:
            self.pos = _WHITESPACE.match(self.buffer, self.pos).end()
            if self.pos < len(self.buffer):
                return self.buffer[self.pos]
            if not self.fill():
                return None

    def rest(self) -> str:
        remainder = self.buffer[self.pos :] + self._handle.read()
        self.buffer, self.pos, self.eof = "", 0, True
        return remainder


def _decode_value(reader: _Reader, decoder: json.JSONDecoder) -> Any:
    while True:
        try:
            value, end = decoder.raw_decode(reader.buffer, reader.pos)
        except json.JSONDecodeError as exc:
            if reader.fill():
                continue
            raise JsonSourceError(f"Malformed JSON array element: {exc}") from exc
        # A number running into the end of the buffer may continue in the next chunk.
        if (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and _NUMBER_TAIL.match(reader.buffer, end).end() == len(reader.buffer)
            and reader.fill()
        ):
            continue
        reader.pos = end
        return value


def _iter_elements(reader: _Reader) -> Iterator[Any]:
    decoder = json.JSONDecoder()
    if reader.skip_whitespace() == "]":
        reader.pos += 1
        return
    count = 0
    while True:
        if reader.skip_whitespace() is None:
            raise JsonSourceError("Unexpected end of JSON array")
        yield _decode_value(reader, decoder)
        count += 1
        delimiter = reader.skip_whitespace()
        if delimiter == ",":
            reader.pos += 1
            continue
        if delimiter == "]":
            reader.pos += 1
            logger.debug("JSON array exhausted", extra={"elements": count})
            return
        raise JsonSourceError(f"Expected ',' or ']' after array element, found {delimiter!r}")


def iter_array(handle: IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Any]:
    """Lazily yield the elements of the JSON array read from ``handle``."""

    reader = _Reader(handle, chunk_size)
    first = reader.skip_whitespace()
    if first != "[":
        raise JsonSourceError(f"Expected a JSON array, found {first!r}")
    reader.pos += 1
    return _iter_elements(reader)


def open_json(handle: IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> JsonDocument:
    """Sniff the first token of ``handle`` and prepare the matching document.

    Objects are decoded eagerly, arrays lazily. Any other input, empty input
    included, gives a document of kind ``NONE``.

    Raises:
        JsonSourceError: When an object cannot be decoded.
    """

    reader = _Reader(handle, chunk_size)
    first = reader.skip_whitespace()
    if first == "{":
        try:
            value = json.loads(reader.rest())
        except json.JSONDecodeError as exc:
            raise JsonSourceError(f"Malformed JSON object: {exc}") from exc
        return JsonDocument(kind=JsonKind.OBJECT, value=value)
    if first == "[":
        reader.pos += 1
        return JsonDocument(kind=JsonKind.ARRAY, value=_iter_elements(reader))
    logger.warning("JSON input is neither an object nor an array", extra={"token": first})
    return JsonDocument(kind=JsonKind.NONE)
