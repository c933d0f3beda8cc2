"""Data models for case files."""

from timeline_engine.models.evidence import (
    UNKNOWN_EVIDENCE_TYPE,
    CaseData,
    EvidenceItem,
    EvidenceType,
    GameSettings,
)

__all__ = ["CaseData", "EvidenceItem", "EvidenceType", "GameSettings", "UNKNOWN_EVIDENCE_TYPE"]
