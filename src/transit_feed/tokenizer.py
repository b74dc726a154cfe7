"""CSV tokenizer for GTFS text files.

Splits file text into logical rows and rows into cells, following the
RFC 4180 quoting rules GTFS relies on: commas and line breaks inside a
quoted cell are literal, and ``""`` inside a quoted cell is one quote.

Every function here is pure; nothing is cached between calls.
"""

from __future__ import annotations

from transit_feed.errors import TransitError, TransitErrorKind

QUOTE = '"'
COMMA = ","
BOM = "\ufeff"

_NEEDS_QUOTING = (QUOTE, COMMA, "\n", "\r")


def split_records(text: str) -> list[str]:
    """Split file text into row strings.

    Line breaks (``\\n``, ``\\r\\n`` or ``\\r``) end a row unless they sit
    inside an open quoted cell. Zero-length rows are dropped, so a trailing
    newline or blank line never produces an empty record.

    Raises:
        TransitError: QUOTE_EXPECTED if a quoted cell is still open at the
            end of the text.
    """
    if text.startswith(BOM):
        text = text[1:]

    records: list[str] = []
    start = 0
    in_quotes = False
    # A quote opens a quoted cell only as a cell's first character.
    cell_start = True
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if in_quotes:
            if char == QUOTE:
                if i + 1 < length and text[i + 1] == QUOTE:
                    i += 1
                else:
                    in_quotes = False
        elif char == QUOTE and cell_start:
            in_quotes = True
        elif char in "\r\n":
            if i > start:
                records.append(text[start:i])
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            start = i + 1
            cell_start = True
            i += 1
            continue
        cell_start = char == COMMA and not in_quotes
        i += 1

    if in_quotes:
        msg = f"unterminated quoted cell starting in row {len(records) + 1}"
        raise TransitError(TransitErrorKind.QUOTE_EXPECTED, msg)

    if start < length:
        records.append(text[start:])
    return records


def read_record(row: str) -> list[str]:
    """Split one row into its cells.

    A zero-length row yields no cells. A trailing comma yields a trailing
    empty cell.

    Raises:
        TransitError: QUOTE_EXPECTED for an unclosed quoted cell,
            COMMA_EXPECTED when text follows a closing quote.
    """
    if not row:
        return []

    cells: list[str] = []
    index = 0
    while True:
        if index == len(row):
            # Row ended right after a comma.
            cells.append("")
            break
        value, index = read_cell(row, index)
        cells.append(value)
        if index == len(row):
            break
        index += 1  # skip the comma
    return cells


def read_cell(row: str, start: int) -> tuple[str, int]:
    """Read the cell beginning at ``start``.

    Returns:
        The unescaped cell value and the index of the delimiter that ended
        it (a comma, or ``len(row)``).

    Raises:
        TransitError: EMPTY_SUBSTRING if there is nothing left to read.
    """
    if start >= len(row):
        raise TransitError(TransitErrorKind.EMPTY_SUBSTRING, f"no cell at offset {start}")

    if row[start] != QUOTE:
        end = row.find(COMMA, start)
        if end == -1:
            end = len(row)
        return row[start:end], end

    chunks: list[str] = []
    index = start + 1
    while True:
        close = row.find(QUOTE, index)
        if close == -1:
            msg = f"quoted cell at offset {start} is never closed"
            raise TransitError(TransitErrorKind.QUOTE_EXPECTED, msg)
        chunks.append(row[index:close])
        if close + 1 < len(row) and row[close + 1] == QUOTE:
            chunks.append(QUOTE)
            index = close + 2
            continue
        index = close + 1
        break

    if index < len(row) and row[index] != COMMA:
        msg = f"unexpected {row[index]!r} after quoted cell at offset {index}"
        raise TransitError(TransitErrorKind.COMMA_EXPECTED, msg)
    return "".join(chunks), index


def quote_cell(value: str) -> str:
    """Quote a cell value if it needs it, doubling embedded quotes."""
    if any(char in value for char in _NEEDS_QUOTING):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def format_record(cells: list[str]) -> str:
    """Join cells into one row string that ``read_record`` reads back unchanged."""
    if cells == [""]:
        # A zero-length row reads back as no cells at all.
        return QUOTE * 2
    return COMMA.join(quote_cell(cell) for cell in cells)
