# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Text transformations for YAML scalars.

Covers line-break normalization, flow and block folding, quoted-string
unescaping, block-scalar chomping and numeric literal conversion. All helpers
are pure functions over strings.
"""

import functools
import re

# ###############
# Public Interface
# ###############


def normalize_breaks(text: str) -> str:
    """Replace CRLF and lone CR line breaks with LF."""
    return _BREAKS.sub("\n", text)


def fold_flow(text: str) -> str:
    """Fold a flow scalar (plain or quoted).

    Blanks around each line break are removed and escaped line breaks are
    dropped. A single line break becomes a space and a run of n + 1 line breaks
    becomes n newlines. Leading and trailing blanks of the whole scalar are
    preserved.
    """
    lead_match = _LEADING_BLANKS.match(text)
    lead = lead_match.group() if lead_match else ""
    rest = text[len(lead) :]
    trail_match = _TRAILING_BLANKS.search(rest)
    if trail_match is None:
        body, trail = rest, ""
    else:
        body, trail = rest[: trail_match.start()], rest[trail_match.start() :]
    body = _LINE_BLANKS.sub("", body)
    body = _SINGLE_BREAK.sub(r"\1 ", body)
    body = _BREAK_RUN.sub(r"\1\2", body)
    return lead + body + trail


def fold_block(text: str) -> str:
    """Fold the content of a ``>`` block scalar.

    Adjacent lines that do not start with whitespace are joined with a space
    and a run of blank lines between them loses one newline. More-indented
    lines and the trailing newlines are kept as they are.
    """
    body = text.rstrip("\n")
    trail = text[len(body) :]
    body = _FOLD_ADJACENT.sub(r"\1 ", body)
    body = _FOLD_BLANK_RUN.sub(r"\1\2", body)
    return body + trail


def unescape_double_quoted(text: str) -> str:
    """Resolve backslash escapes of a double-quoted scalar in a single pass.

    Unknown escape sequences are left untouched.
    """
    return _ESCAPE.sub(_replace_escape, text)


def unescape_single_quoted(text: str) -> str:
    """Turn doubled single quotes into one quote."""
    return text.replace("''", "'")


def decode_plain(text: str) -> str:
    """Decode the raw text of a plain scalar token."""
    return fold_flow(_OUTER_WHITESPACE.sub("", normalize_breaks(text)))


def decode_double_quoted(text: str) -> str:
    """Decode the raw text of a double-quoted scalar token, quotes included."""
    return unescape_double_quoted(fold_flow(normalize_breaks(text)[1:-1]))


def decode_single_quoted(text: str) -> str:
    """Decode the raw text of a single-quoted scalar token, quotes included."""
    return unescape_single_quoted(fold_flow(normalize_breaks(text)[1:-1]))


def parse_integer(text: str, radix: int) -> int:
    """Convert an integer literal with an optional sign and radix prefix.

    Args:
        text: The literal, e.g. ``"-42"``, ``"0o17"`` or ``"+0x1F"``.
        radix: 10, 8 or 16.

    Raises:
        ValueError: If a digit is not valid in *radix*.
    """
    sign, digits = _split_sign(text)
    if radix != 10 and digits[:2].lower() in ("0o", "0x"):
        digits = digits[2:]
    result = 0
    for char in digits:
        digit = _DIGIT_VALUES.get(char)
        if digit is None or digit >= radix:
            raise ValueError(f"invalid digit {char!r} for radix {radix}")
        result = result * radix + digit
    return sign * result


def parse_sexagesimal(text: str) -> int:
    """Convert a base-60 literal such as ``"12:30:00"`` to an integer."""
    sign, digits = _split_sign(text)
    result = 0
    for group in digits.split(":"):
        result = result * 60 + parse_integer(group, 10)
    return sign * result


def decode_block_scalar(header: str, block: str) -> str:
    """Finish the body of a ``|`` or ``>`` block scalar.

    Args:
        header: The header token text, e.g. ``"|"``, ``">-"`` or ``"|2+ # note"``.
        block: The captured body with the enclosing indentation already removed.

    Returns:
        The scalar content after indentation stripping, chomping and, for
        folded scalars, line folding.

    Raises:
        ValueError: If the header is malformed or the body's indentation is
            inconsistent with it.
    """
    header_match = _BLOCK_HEADER.match(header)
    if header_match is None:
        raise ValueError("invalid chomp or indent header")
    indicator = header_match.group(2)
    digits = "".join(char for char in indicator if char.isdigit())
    indent = int(digits) if digits else 0
    block = normalize_breaks(block)

    detected = _DETECT_INDENT.match(block)
    found = len(_BLANK_LINES_PREFIX.sub("", detected.group(), count=1)) if detected else 0
    effective = indent if indent > 0 else found
    if _too_many_spaces(effective).match(block):
        raise ValueError("leading all-space line must not have too many spaces")
    if indent > 0 and found < indent:
        raise ValueError("less indented block scalar than the indicated level")

    start, following = _indent_strippers(effective)
    text = following.sub("\n", start.sub("", block, count=1))
    if "-" in indicator:
        text = _STRIP_TRAILING.sub("", text)
    elif "+" not in indicator:
        text = _CLIP_TRAILING.sub("\n", text)
    if header_match.group(1) == ">":
        text = fold_block(text)
    return text


# ################
# Implementation
# ################

_BREAKS = re.compile(r"\r\n|\r")
_LEADING_BLANKS = re.compile(r"^[ \t]+")
_TRAILING_BLANKS = re.compile(r"[ \t]+$")
_OUTER_WHITESPACE = re.compile(r"^[ \t\n]+|[ \t\n]+$")
_LINE_BLANKS = re.compile(r"^[ \t]+|[ \t]+$|\\\n", re.MULTILINE)
_SINGLE_BREAK = re.compile(r"(^|.)\n(?=.|$)")
_BREAK_RUN = re.compile(r"(.)\n(\n+)")

_FOLD_ADJACENT = re.compile(r"^([^ \t\n].*)\n(?=[^ \t\n])", re.MULTILINE)
_FOLD_BLANK_RUN = re.compile(r"^([^ \t\n].*)\n(\n+)(?![ \t])", re.MULTILINE)

_BLOCK_HEADER = re.compile(r"([|>])([1-9][-+]|[-+]?[1-9]?)(?: |$)")
_DETECT_INDENT = re.compile(r"(?: *\n)* +(?! |\n|$)")
_BLANK_LINES_PREFIX = re.compile(r"^(?: *\n)*")
_STRIP_TRAILING = re.compile(r"(?:\n *)*\Z")
_CLIP_TRAILING = re.compile(r"(?=[^ ])(?:\n *)*\Z")

_SIGN = re.compile(r"^[-+]")

_DIGIT_VALUES: dict[str, int] = {
    **{str(d): d for d in range(10)},
    **{chr(ord("a") + i): 10 + i for i in range(26)},
    **{chr(ord("A") + i): 10 + i for i in range(26)},
}

_ESCAPE = re.compile(r"\\(?:([0abtnvfre \"\\/N_LP])|x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8}))")

_ESCAPE_CHARACTERS: dict[str, str] = {
    "0": "\0",
    "a": "\x07",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\x0b",
    "f": "\x0c",
    "r": "\r",
    "e": "\x1b",
    " ": " ",
    '"': '"',
    "\\": "\\",
    "/": "/",
    "N": "\x85",
    "_": "\xa0",
    "L": "\u2028",
    "P": "\u2029",
}


def _replace_escape(match: re.Match[str]) -> str:
    simple, *hexadecimal = match.groups()
    if simple is not None:
        return _ESCAPE_CHARACTERS[simple]
    code = next(group for group in hexadecimal if group is not None)
    code_point = int(code, 16)
    if code_point > 0x10FFFF:
        return match.group()
    return chr(code_point)


def _split_sign(text: str) -> tuple[int, str]:
    sign_match = _SIGN.match(text)
    if sign_match is None:
        return 1, text
    return (-1 if sign_match.group() == "-" else 1), text[1:]


@functools.lru_cache(maxsize=64)
def _too_many_spaces(indent: int) -> re.Pattern[str]:
    """Match a leading all-space line indented deeper than the content."""
    return re.compile(rf"(?: {{0,{indent}}}\n)* {{{indent + 1},}}\n")


@functools.lru_cache(maxsize=64)
def _indent_strippers(indent: int) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """Patterns removing up to *indent* spaces at the start of the first and every following line."""
    return re.compile(rf"^ {{0,{indent}}}"), re.compile(rf"\n {{0,{indent}}}")
