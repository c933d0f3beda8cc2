"""Case file loading and evidence lookup."""

from timeline_engine.cases.loader import find_case, get_evidence_type, list_cases, load_case
from timeline_engine.cases.lookup import EvidenceIndex

__all__ = ["EvidenceIndex", "find_case", "get_evidence_type", "list_cases", "load_case"]
