"""Conflict-free section combination generator.

This package encodes weekly occupancy as 48-bit masks and enumerates every
valid one-section-per-course assignment with a backtracking search. When no
combination exists it reports the course pairs that collided most often.

Main entry points:
- generate: Run a generation and get a GenerationOutcome
- summarize: Display statistics for one GenerationResult
- OverridePolicy: Per (course, activity type) permission to overlap

Usage:
    from schedule_planner.generator import generate, summarize

    outcome = generate(courses, max_results=100)
    for result in outcome.results:
        print(summarize(result).description)
"""

from .bitmask import (
    OccupancyMask,
    activity_mask,
    bit_index_to_block,
    block_to_bit_index,
    blocks_to_mask,
    combine_masks,
    count_set_bits,
    has_overlap,
    mask_to_blocks,
    section_mask,
)
from .combinations import CancellationToken, CombinationGenerator, generate
from .config import GenerationConfig, load_generation_config
from .constants import DEFAULT_MAX_RESULTS, DEFAULT_TOP_PAIRS, TOTAL_BLOCKS
from .diagnostics import ConflictStats, build_top_pairs
from .excel_generator import ScheduleGridExporter, generate_schedule_excel
from .exporter import export_outcome_json, selected_section_ids
from .models import (
    ConflictExample,
    GenerationOutcome,
    GenerationResult,
    ScheduleSummary,
    SearchSpaceStats,
    TopPair,
)
from .policy import OverridePolicy
from .summary import search_space_stats, summarize

__all__ = [
    # Generation
    "generate",
    "CombinationGenerator",
    "CancellationToken",
    "OverridePolicy",
    # Configuration
    "GenerationConfig",
    "load_generation_config",
    # Models
    "ConflictExample",
    "GenerationOutcome",
    "GenerationResult",
    "ScheduleSummary",
    "SearchSpaceStats",
    "TopPair",
    # Diagnostics
    "ConflictStats",
    "build_top_pairs",
    # Encoding
    "OccupancyMask",
    "activity_mask",
    "bit_index_to_block",
    "block_to_bit_index",
    "blocks_to_mask",
    "combine_masks",
    "count_set_bits",
    "has_overlap",
    "mask_to_blocks",
    "section_mask",
    # Summaries and export
    "summarize",
    "search_space_stats",
    "export_outcome_json",
    "selected_section_ids",
    "ScheduleGridExporter",
    "generate_schedule_excel",
    # Constants
    "DEFAULT_MAX_RESULTS",
    "DEFAULT_TOP_PAIRS",
    "TOTAL_BLOCKS",
]
