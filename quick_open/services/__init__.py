"""Services for Quick Open."""

from quick_open.services.fuzzy import fuzzy_match, fuzzy_score, rank, ScoringWeights
from quick_open.services.indexer import FileIndexer, scan, scan_content
from quick_open.services.orchestrator import SearchOrchestrator

__all__ = [
    "fuzzy_match",
    "fuzzy_score",
    "rank",
    "ScoringWeights",
    "FileIndexer",
    "scan",
    "scan_content",
    "SearchOrchestrator",
]
