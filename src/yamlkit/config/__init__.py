# Copyright 2026 yamlkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser options and their on-disk configuration file."""

from yamlkit.config.options import (
    OPTIONS_FILE_NAME,
    OptionsError,
    ParserOptions,
    find_options_file,
    load_options,
)

__all__ = [
    "OPTIONS_FILE_NAME",
    "OptionsError",
    "ParserOptions",
    "find_options_file",
    "load_options",
]
