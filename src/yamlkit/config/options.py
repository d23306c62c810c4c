# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Options controlling numeric range checks and JSON key conversion.

Options can be stored in a ``.yamlkit.yaml`` file, which is itself read with
the yamlkit parser.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

OPTIONS_FILE_NAME = ".yamlkit.yaml"


class OptionsError(Exception):
    """Raised when an options file cannot be read or is invalid."""


class ParserOptions(BaseModel):
    """Behaviour switches for parsing and JSON conversion.

    Attributes:
        integer_overflow: ``"widen"`` keeps integers of any size; ``"error"``
            rejects literals outside the signed 64-bit range.
        non_string_keys: ``"stringify"`` converts null, boolean and numeric
            mapping keys to strings when producing JSON; ``"reject"`` fails.
        json_indent: Indentation used by the CLI when printing JSON, or None
            for compact output.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    integer_overflow: Literal["widen", "error"] = Field(alias="integer-overflow", default="widen")
    non_string_keys: Literal["stringify", "reject"] = Field(alias="non-string-keys", default="stringify")
    json_indent: int | None = Field(alias="json-indent", default=None, ge=0)


def load_options(path: Path) -> ParserOptions:
    """Load and validate parser options from a YAML file.

    An empty file, or one holding only comments, yields the defaults.

    Args:
        path: Path to the options file.

    Returns:
        A validated ParserOptions instance.

    Raises:
        OptionsError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    from yamlkit.parser.errors import ParseError
    from yamlkit.parser.parser import parse_one

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OptionsError(f"Cannot read options file '{path}': {exc}") from exc

    try:
        data = parse_one(raw).to_python()
    except ParseError as exc:
        raise OptionsError(f"Invalid YAML in options file '{path}': {exc}") from exc
    except ValueError as exc:
        raise OptionsError(f"Invalid options file '{path}': {exc}") from exc

    if data is None:
        data = {}

    try:
        options = ParserOptions.model_validate(data)
    except ValidationError as exc:
        raise OptionsError(f"Invalid options file '{path}': {exc}") from exc
    logger.debug("Loaded parser options from %s", path)
    return options


def find_options_file(directory: Path) -> Path | None:
    """Return the options file in *directory*, or None if there is none."""
    candidate = directory / OPTIONS_FILE_NAME
    return candidate if candidate.is_file() else None
