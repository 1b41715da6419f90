"""
CSV encoding/decoding for the submissions file.

One record is always exactly one physical line: newlines inside values are
flattened to spaces on encode, so the decoder can split the document on line
breaks before scanning each row for quoted fields.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

_LINE_BREAK = re.compile(r"\r?\n")
_NEWLINE_CHARS = re.compile(r"[\r\n]")


@dataclass(frozen=True)
class CsvDocument:
    headers: list[str] = field(default_factory=list)
    records: list[dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def encode_field(value: Any) -> str:
    """Quote a single value when it contains a comma or a double quote."""
    if value is None:
        return ""
    s = _NEWLINE_CHARS.sub(" ", str(value)).strip()
    if "," in s or '"' in s:
        return '"' + s.replace('"', '""') + '"'
    return s


def encode_row(values: Iterable[Any]) -> str:
    return ",".join(encode_field(v) for v in values) + "\n"


def decode_line(line: str) -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def decode_document(text: str) -> CsvDocument:
    """
    Decode a full CSV document (header line + one record per line).

    The header is split naively on commas. Rows shorter than the header are
    padded with empty strings; fields beyond the header are dropped.
    """
    body = (text or "").strip()
    if not body:
        return CsvDocument()

    header_line, *rows = _LINE_BREAK.split(body)
    headers = header_line.split(",")

    records: list[dict[str, str]] = []
    for line in rows:
        cols = decode_line(line)
        records.append({h: (cols[idx] if idx < len(cols) else "") for idx, h in enumerate(headers)})
    return CsvDocument(headers=headers, records=records)
