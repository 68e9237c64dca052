"""Entry file codecs.

Two encodings of an ordered list of ``FriendLink`` records:

* ``friends.ts``: a TypeScript module exporting ``FRIEND_LINKS``. Parsed with a
  small tokenizer and recursive-descent parser over the grammar below, and
  written back in one canonical layout::

      file   := { "export" "interface" IDENT block }
                "export" "const" IDENT [ ":" IDENT "[" "]" ] "="
                "[" [ object { "," object } [ "," ] ] "]" [ ";" ] EOF
      object := "{" field { "," field } [ "," ] "}"
      field  := IDENT ":" ( STRING | "true" | "false" )

* JSON Lines: one object per line with the same key names.

Keys must appear in canonical order: ``name``, ``description``, ``url``,
``avatar``, then optionally ``addDate``, ``recommended``, ``disconnected``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from Friend_Links.models.entry import FriendLink
from Friend_Links.utils.exceptions import EntrySourceError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REQUIRED_KEYS: Final[tuple[str, ...]] = ("name", "description", "url", "avatar")
OPTIONAL_KEYS: Final[tuple[str, ...]] = ("addDate", "recommended", "disconnected")
FIELD_ORDER: Final[tuple[str, ...]] = REQUIRED_KEYS + OPTIONAL_KEYS
FLAG_KEYS: Final[frozenset[str]] = frozenset({"recommended", "disconnected"})

ARRAY_NAME: Final[str] = "FRIEND_LINKS"
TYPE_NAME: Final[str] = "FriendLink"

TS_HEADER: Final[str] = f"""export interface {TYPE_NAME} {{
    name: string;
    description: string;
    url: string;
    avatar: string;
    addDate?: string;
    recommended?: boolean;
    disconnected?: boolean;
}}

export const {ARRAY_NAME}: {TYPE_NAME}[] = [
"""

_ENTRY_INDENT: Final[str] = " " * 4
_FIELD_INDENT: Final[str] = " " * 8

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<string>"(?:[^"\\\n]|\\.)*")
  | (?P<ident>[A-Za-z_$][A-Za-z0-9_$]*)
  | (?P<punct>[{}\[\]:;,=?])
  | (?P<bad>.)
    """,
    re.VERBOSE | re.DOTALL,
)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, dropping whitespace and comments.

    Raises:
        EntrySourceError: On a character no token can start with, such as an
            unterminated string.
    """
    tokens: list[Token] = []
    line = 1
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup or "bad"
        value = match.group()
        if kind == "bad":
            raise EntrySourceError(f"unexpected character {value!r}", line=line)
        if kind not in ("ws", "comment"):
            tokens.append(Token(kind, value, line))
        line += value.count("\n")
    tokens.append(Token("eof", "", line))
    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _Parser:
    """Recursive-descent parser over the token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind != "eof":
            self._pos += 1
        return token

    def _accept(self, kind: str, value: str | None = None) -> Token | None:
        token = self._peek()
        if token.kind == kind and (value is None or token.value == value):
            return self._advance()
        return None

    def _expect(self, kind: str, value: str | None = None) -> Token:
        token = self._accept(kind, value)
        if token is None:
            found = self._peek()
            wanted = repr(value) if value is not None else kind
            shown = repr(found.value) if found.kind != "eof" else "end of file"
            raise EntrySourceError(f"expected {wanted}, found {shown}", line=found.line)
        return token

    def parse_file(self) -> list[FriendLink]:
        while self._peek().value == "export" and self._tokens[self._pos + 1].value == "interface":
            self._advance()
            self._advance()
            self._expect("ident")
            self._skip_block()

        self._expect("ident", "export")
        self._expect("ident", "const")
        self._expect("ident")
        if self._accept("punct", ":"):
            self._expect("ident")
            self._expect("punct", "[")
            self._expect("punct", "]")
        self._expect("punct", "=")
        entries = self._parse_array()
        self._accept("punct", ";")
        self._expect("eof")
        return entries

    def _skip_block(self) -> None:
        opening = self._expect("punct", "{")
        depth = 1
        while depth:
            token = self._advance()
            if token.kind == "eof":
                raise EntrySourceError("unterminated interface block", line=opening.line)
            if token.value == "{":
                depth += 1
            elif token.value == "}":
                depth -= 1

    def _parse_array(self) -> list[FriendLink]:
        self._expect("punct", "[")
        entries: list[FriendLink] = []
        while not self._accept("punct", "]"):
            entries.append(self._parse_object())
            if not self._accept("punct", ","):
                self._expect("punct", "]")
                break
        return entries

    def _parse_object(self) -> FriendLink:
        opening = self._expect("punct", "{")
        record: dict[str, str | bool] = {}
        last_index = -1
        while not self._accept("punct", "}"):
            key_token = self._expect("ident")
            key = key_token.value
            if key not in FIELD_ORDER:
                raise EntrySourceError(f"unknown field {key!r}", line=key_token.line)
            index = FIELD_ORDER.index(key)
            if index <= last_index:
                raise EntrySourceError(
                    f"field {key!r} is repeated or out of order", line=key_token.line
                )
            last_index = index
            self._expect("punct", ":")
            record[key] = self._parse_value(key, key_token.line)
            if not self._accept("punct", ","):
                self._expect("punct", "}")
                break

        missing = [key for key in REQUIRED_KEYS if key not in record]
        if missing:
            raise EntrySourceError(
                f"entry is missing required field(s): {', '.join(missing)}",
                line=opening.line,
            )
        return _build_entry(record, line=opening.line)

    def _parse_value(self, key: str, line: int) -> str | bool:
        token = self._advance()
        if key in FLAG_KEYS:
            if token.kind == "ident" and token.value in ("true", "false"):
                return token.value == "true"
            raise EntrySourceError(f"field {key!r} must be true or false", line=line)
        if token.kind != "string":
            raise EntrySourceError(f"field {key!r} must be a string", line=line)
        try:
            value: str = json.loads(token.value, strict=False)
        except json.JSONDecodeError as exc:
            raise EntrySourceError(f"bad string escape in {key!r}: {exc.msg}", line=line) from exc
        return value


def _build_entry(record: dict[str, str | bool], *, line: int | None = None) -> FriendLink:
    try:
        return FriendLink.model_validate(record)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise EntrySourceError(f"invalid entry: {problems}", line=line) from exc


# ---------------------------------------------------------------------------
# friends.ts
# ---------------------------------------------------------------------------


def parse_friends_ts(text: str) -> list[FriendLink]:
    """Parse a ``friends.ts`` module into entries, preserving order.

    Raises:
        EntrySourceError: On any syntax error, unknown or out-of-order field,
            or missing/empty required field.
    """
    return _Parser(tokenize(text)).parse_file()


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _encode_ts_entry(entry: FriendLink) -> str:
    fields: list[str] = []
    for key, value in entry.to_record().items():
        rendered = "true" if value is True else _quote(str(value))
        fields.append(f"{_FIELD_INDENT}{key}: {rendered}")
    body = ",\n".join(fields)
    return f"{_ENTRY_INDENT}{{\n{body}\n{_ENTRY_INDENT}}}"


def encode_friends_ts(entries: Sequence[FriendLink]) -> str:
    """Render entries in the canonical ``friends.ts`` layout.

    Unset optional fields are omitted, never written as false or null.
    """
    body = ",\n".join(_encode_ts_entry(entry) for entry in entries)
    if body:
        body += ",\n"
    return f"{TS_HEADER}{body}];\n"


# ---------------------------------------------------------------------------
# JSON Lines
# ---------------------------------------------------------------------------


def parse_jsonl(text: str) -> list[FriendLink]:
    """Parse one JSON object per non-blank line.

    Raises:
        EntrySourceError: On invalid JSON, a non-object line, unknown keys,
            or an invalid entry.
    """
    entries: list[FriendLink] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        try:
            record = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise EntrySourceError(f"invalid JSON: {exc.msg}", line=line_no) from exc
        if not isinstance(record, dict):
            raise EntrySourceError("each line must be a JSON object", line=line_no)
        unknown = sorted(set(record) - set(FIELD_ORDER))
        if unknown:
            raise EntrySourceError(f"unknown field(s): {', '.join(unknown)}", line=line_no)
        entries.append(_build_entry(record, line=line_no))
    return entries


def encode_jsonl(entries: Sequence[FriendLink]) -> str:
    """Render entries as JSON Lines with canonical key order."""
    return "".join(json.dumps(entry.to_record(), ensure_ascii=False) + "\n" for entry in entries)


# ---------------------------------------------------------------------------
# Codec selection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EntryCodec:
    """A named parse/encode pair for one file format."""

    name: str
    parse: Callable[[str], list[FriendLink]]
    encode: Callable[[Sequence[FriendLink]], str]


TS_CODEC: Final[EntryCodec] = EntryCodec("friends.ts", parse_friends_ts, encode_friends_ts)
JSONL_CODEC: Final[EntryCodec] = EntryCodec("jsonl", parse_jsonl, encode_jsonl)

_CODECS_BY_SUFFIX: Final[dict[str, EntryCodec]] = {
    ".ts": TS_CODEC,
    ".jsonl": JSONL_CODEC,
}


def codec_for_path(path: str | Path) -> EntryCodec:
    """Pick a codec from the file suffix.

    Raises:
        EntrySourceError: If the suffix is not ``.ts`` or ``.jsonl``.
    """
    suffix = Path(path).suffix.lower()
    codec = _CODECS_BY_SUFFIX.get(suffix)
    if codec is None:
        raise EntrySourceError(
            f"unsupported entry file type {suffix or '(none)'!r}; use .ts or .jsonl",
            path=str(path),
        )
    return codec
