"""Annotation keys shared by schema documents and the converters."""

from __future__ import annotations

DISPLAY_NAME = "displayName"
DISPLAY_NAMES = "displayNames"
DESCRIPTION = "description"
DISPLAY_PROMPT = "displayPrompt"
WEIGHT = "weight"
KEY_INDEX = "keyIndex"
BY_DEFAULT = "by_default"
MAX_LENGTH = "maxLength"
INPUT_TYPE = "inputType"
MIN_ROW_COUNT = "minRowCount"

VERSION = "version"
DEPENDENCIES = "dependencies"
FQN = "fqn"
