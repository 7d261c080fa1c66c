"""Storage of analysis documents."""

from memo_analyzer.storage.documents import (
    ANALYSIS_SUFFIX,
    analysis_path,
    build_document,
    load_analysis,
    load_document,
    load_summaries,
    save_analysis,
)

__all__ = [
    "ANALYSIS_SUFFIX",
    "analysis_path",
    "build_document",
    "load_analysis",
    "load_document",
    "load_summaries",
    "save_analysis",
]
