# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error type raised by the YAML lexer and parser."""

# ###############
# Public Interface
# ###############

SNIPPET_LENGTH = 50


class ParseError(Exception):
    """Raised when YAML text cannot be tokenized or parsed.

    The message always ends with a short, escaped excerpt of the input that was
    not yet consumed when the failure was detected.

    Attributes:
        message: The full message, ``<reason>, near "<snippet>"``.
        reason: The failure description without the snippet.
        snippet: The escaped excerpt of the remaining input.
        line: 1-based line of the offending token, if known.
        column: 1-based column of the offending token, if known.
    """

    def __init__(self, reason: str, remaining: str, line: int | None = None, column: int | None = None) -> None:
        self.reason = reason
        self.snippet = format_snippet(remaining)
        self.message = f'{reason}, near "{self.snippet}"'
        self.line = line
        self.column = column
        super().__init__(self.message)


def format_snippet(text: str) -> str:
    """Truncate *text* to the snippet length and escape line breaks and quotes."""
    return text[:SNIPPET_LENGTH].replace("\r", "\\r").replace("\n", "\\n").replace('"', '\\"')
