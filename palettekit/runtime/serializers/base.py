# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from __future__ import annotations

import json
from enum import Enum


class SerializerFormat(Enum):
    """Output format for serializers."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"


def dump(data: object, format: SerializerFormat = SerializerFormat.JSON) -> str:
    """Encode ``data`` as compact or indented JSON."""
    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
