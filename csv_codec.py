"""CSV line tokenizing and field escaping.

Pure functions, no I/O. The tokenizer works on a single line that the
caller has already split out of the file.
"""

from typing import List, Optional

# Leading characters that spreadsheet applications treat as a formula.
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")

_NEEDS_QUOTING = (",", '"', "\n")


def parse_line(line: str) -> List[str]:
    """Split one CSV line into fields.

    A comma outside quotes ends a field. A double quote toggles quoted mode,
    and a doubled quote inside quoted mode is a literal quote. A trailing
    comma produces a trailing empty field.

    Args:
        line: A single CSV line without its line terminator.

    Returns:
        Fields in column order.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def quote_field(value: Optional[str]) -> str:
    """Wrap a value in double quotes if it contains a comma, quote or newline.

    Internal double quotes are doubled.
    """
    if not value:
        return ""
    if any(token in value for token in _NEEDS_QUOTING):
        return '"' + value.replace('"', '""') + '"'
    return value


def escape_field(value: Optional[str]) -> str:
    """Make a value safe to write as a CSV field.

    Values starting with a formula character get a single quote prefix so a
    spreadsheet shows them as text, then the result is quoted as needed.

    Args:
        value: Raw field content. None and "" both yield "".

    Returns:
        The escaped field.
    """
    if not value:
        return ""
    if value.startswith(FORMULA_PREFIXES):
        value = "'" + value
    return quote_field(value)
