"""Export functions for generation outcomes."""

import json
from pathlib import Path

from .models import GenerationOutcome, GenerationResult
from .summary import summarize


def export_outcome_json(outcome: GenerationOutcome, output_path: Path | str) -> None:
    """Export a generation outcome to a JSON file.

    Each result is written together with its summary.

    Args:
        outcome: GenerationOutcome to export
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = outcome.to_dict()
    for result_dict, result in zip(data["results"], outcome.results):
        result_dict["summary"] = summarize(result).to_dict()

    with open(output, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def selected_section_ids(result: GenerationResult) -> set[str]:
    """Section ids to persist in the saved-selection store for a result."""
    return {section.id for section in result.sections}
