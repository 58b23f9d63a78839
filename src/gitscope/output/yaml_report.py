"""YAML reporter. Same document shape as the JSON reporter."""

from __future__ import annotations

from typing import Any

import yaml

from gitscope.output.json_report import to_dict


def render(result: Any) -> str:
    """Return a YAML document for *result*."""
    return yaml.safe_dump(to_dict(result), sort_keys=False, allow_unicode=True)
