"""
Parser for the user list files the network pages are generated from.

The input looks like JSON but only a narrow subset is accepted:

    [
      { "id_str" : "1", "name" : "Alice", "location" : "Reno", "follows" : ["2","3"] },
      { "id_str" : "2", "name" : "Bob", "follows" : [] }
    ]

Every value is either a double quoted string or a bracketed list of quoted
ids. There are no nested objects and no escape sequences. Anything before
the first '[' is ignored, and nothing after the closing ']' is read.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from errors import NetworkError, malformed
from user_record import UserRecord

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"
SEPARATORS = WHITESPACE + ","


class TokenKind(Enum):
    OPEN_ARRAY = "open_array"
    OPEN_RECORD = "open_record"
    CLOSE_RECORD = "close_record"
    CLOSE_ARRAY = "close_array"
    FIELD_TITLE = "field_title"
    FIELD_VALUE = "field_value"
    LIST_VALUE = "list_value"


@dataclass
class Token:
    kind: TokenKind
    text: str
    offset: int


def line_col(text: str, offset: int) -> Tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


class LineTracker:
    """Line and column lookups for offsets visited in increasing order.

    Only the text between the previous and the current offset is scanned.
    """

    def __init__(self, text: str):
        self.text = text
        self.scanned = 0
        self.line = 1
        self.line_start = 0

    def locate(self, offset: int) -> Tuple[int, int]:
        if offset < self.scanned:
            return line_col(self.text, offset)
        self.line += self.text.count("\n", self.scanned, offset)
        newline = self.text.rfind("\n", self.scanned, offset)
        if newline != -1:
            self.line_start = newline + 1
        self.scanned = offset
        return self.line, offset - self.line_start + 1


class Tokenizer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str, offset: int | None = None) -> NetworkError:
        line, column = line_col(self.text, self.pos if offset is None else offset)
        return malformed(f"{message} at line {line}, column {column}")

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip(self, chars: str):
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1

    def read_until(self, delimiter: str, what: str) -> str:
        start = self.pos
        end = self.text.find(delimiter, start)
        if end == -1:
            raise self.error(f"unterminated {what}", start - 1)
        self.pos = end + 1
        return self.text[start:end]

    def tokens(self) -> Iterator[Token]:
        start = self.text.find("[")
        if start == -1:
            raise self.error("no opening '[' found", len(self.text))
        self.pos = start + 1
        yield Token(TokenKind.OPEN_ARRAY, "[", start)

        while True:
            self.skip(SEPARATORS)
            char = self.peek()
            if char == "]":
                yield Token(TokenKind.CLOSE_ARRAY, char, self.pos)
                return
            if char == "{":
                yield Token(TokenKind.OPEN_RECORD, char, self.pos)
                self.pos += 1
                yield from self.record_tokens()
            elif not char:
                raise self.error("expected ']' before end of input")
            else:
                raise self.error(f"unexpected {char!r} between records")

    def record_tokens(self) -> Iterator[Token]:
        while True:
            self.skip(SEPARATORS)
            char = self.peek()
            if char == "}":
                yield Token(TokenKind.CLOSE_RECORD, char, self.pos)
                self.pos += 1
                return
            if not char:
                raise self.error("unterminated record")
            if char != '"':
                raise self.error(f"expected a quoted field title, found {char!r}")

            offset = self.pos
            self.pos += 1
            title = self.read_until('"', "field title")
            yield Token(TokenKind.FIELD_TITLE, title, offset)

            self.skip(WHITESPACE)
            if self.peek() != ":":
                raise self.error(f"expected ':' after field {title!r}")
            self.pos += 1
            self.skip(WHITESPACE)

            offset = self.pos
            char = self.peek()
            if char == '"':
                self.pos += 1
                yield Token(TokenKind.FIELD_VALUE, self.read_until('"', "string value"), offset)
            elif char == "[":
                self.pos += 1
                yield Token(TokenKind.LIST_VALUE, self.read_until("]", "list value"), offset)
            else:
                raise self.error(f"expected a quoted or bracketed value for field {title!r}")


def tokenize(text: str) -> Iterator[Token]:
    return Tokenizer(text).tokens()


def parse_unsigned(value: str, field: str, where: str = "") -> int:
    if not (value.isascii() and value.isdigit()):
        raise malformed(f"field {field!r} value {value!r} is not an unsigned integer{where}")
    return int(value)


def parse_follows(raw: str, where: str = "") -> List[int]:
    """Split the raw text of a follows list, e.g. '"2", "3"', into ids."""
    follows = []
    if not raw.strip():
        return follows
    for item in raw.split(","):
        item = item.strip()
        if len(item) < 2 or item[0] != '"' or item[-1] != '"':
            raise malformed(f"follows entry {item!r} is not a quoted id{where}")
        follows.append(parse_unsigned(item[1:-1], "follows", where))
    return follows


def build_record(fields: List[Tuple[str, Token]], where: str = "") -> UserRecord:
    values = {}
    for title, value in fields:
        if title == "follows":
            if value.kind is not TokenKind.LIST_VALUE:
                raise malformed(f"field 'follows' must be a list{where}")
            values["follows"] = parse_follows(value.text, where)
            continue

        if value.kind is not TokenKind.FIELD_VALUE:
            raise malformed(f"field {title!r} must be a quoted string{where}")
        if title == "id_str":
            values["id"] = parse_unsigned(value.text, title, where)
        elif title == "name":
            if not value.text:
                raise malformed(f"field 'name' is empty{where}")
            values["name"] = value.text
        elif title in ("location", "pic_url"):
            values[title] = value.text
        else:
            raise malformed(f"{title!r} is not a recognized user attribute{where}")

    record = UserRecord(**values)
    if not record.is_valid():
        raise malformed(f"record needs a positive id_str and a name{where}")
    return record


def parse_records(text: str) -> List[UserRecord]:
    """Parse every record in the input, in source order.

    The first malformed record aborts the parse, so either every record is
    returned or a NetworkError is raised.
    """
    records = []
    fields = []
    title = ""
    where = ""
    lines = LineTracker(text)
    for token in tokenize(text):
        if token.kind is TokenKind.OPEN_RECORD:
            fields = []
            line, column = lines.locate(token.offset)
            where = f" (record {len(records) + 1} at line {line}, column {column})"
        elif token.kind is TokenKind.FIELD_TITLE:
            title = token.text
        elif token.kind in (TokenKind.FIELD_VALUE, TokenKind.LIST_VALUE):
            fields.append((title, token))
        elif token.kind is TokenKind.CLOSE_RECORD:
            record = build_record(fields, where)
            logger.debug(f"Parsed user {record.id} ({record.name}) following {len(record.follows)}")
            records.append(record)

    logger.debug(f"Parsed {len(records)} user records")
    return records
