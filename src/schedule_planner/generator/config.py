"""Generation settings loaded from a JSON config file."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from ..exceptions import CatalogError, InvalidInputError
from ..normalization import normalize_course_code
from .constants import DEFAULT_MAX_RESULTS
from .policy import OverridePolicy


@dataclass
class GenerationConfig:
    """Settings for one generation run.

    Expected JSON format:
        {
            "max_results": 200,
            "strict": false,
            "filters": {"MAT1620": ["MAT1620-1", "MAT1620-3"]},
            "overrides": {"MAT1620:tutorial": true}
        }
    """

    max_results: int = DEFAULT_MAX_RESULTS
    section_filter: dict[str, list[str]] = field(default_factory=dict)
    override_policy: OverridePolicy = field(default_factory=OverridePolicy)
    strict: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a GenerationConfig from a dictionary."""
        try:
            max_results = int(data.get("max_results", DEFAULT_MAX_RESULTS))
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"max_results must be an integer, got {data.get('max_results')!r}",
                "max_results",
            ) from None

        filters = data.get("filters", {}) or {}
        if not isinstance(filters, dict):
            raise InvalidInputError("filters must map course codes to section ids", "filters")

        return cls(
            max_results=max_results,
            section_filter={
                normalize_course_code(code): list(ids) for code, ids in filters.items()
            },
            override_policy=OverridePolicy.from_dict(data.get("overrides", {}) or {}),
            strict=bool(data.get("strict", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_results": self.max_results,
            "strict": self.strict,
            "filters": self.section_filter,
            "overrides": self.override_policy.to_dict(),
        }


def load_generation_config(path: Path | str | None) -> GenerationConfig:
    """Load generation settings from a JSON file.

    Args:
        path: Path to the config file, or None for defaults

    Returns:
        GenerationConfig (defaults when path is None)
    """
    if path is None:
        return GenerationConfig()

    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(path, str(e)) from e

    if not isinstance(data, dict):
        raise CatalogError(path, "config must be a JSON object")

    return GenerationConfig.from_dict(data)
