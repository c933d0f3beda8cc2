"""Resolve what a player typed to an evidence id."""

from typing import Iterable

from rapidfuzz import fuzz, process

from ..models import EvidenceItem

MATCH_THRESHOLD = 85


class EvidenceIndex:
    """Case-insensitive lookup of evidence by id or name, with fuzzy fallback."""

    def __init__(self, items: Iterable[EvidenceItem]):
        self._key_to_id: dict[str, str] = {}
        for item in items:
            self._key_to_id[item.name.lower()] = item.id
            self._key_to_id[item.id.lower()] = item.id

    def lookup(self, text: str) -> tuple[str | None, float]:
        """Look up an evidence item by id or name.

        Returns:
            Tuple of (evidence_id, confidence)
        """
        text_lower = text.lower().strip()

        if text_lower in self._key_to_id:
            return self._key_to_id[text_lower], 1.0

        if text_lower.startswith("the "):
            stripped = text_lower[4:]
            if stripped in self._key_to_id:
                return self._key_to_id[stripped], 0.95

        if self._key_to_id:
            result = process.extractOne(text_lower, self._key_to_id.keys(), scorer=fuzz.ratio)
            if result and result[1] >= MATCH_THRESHOLD:
                return self._key_to_id[result[0]], result[1] / 100

        return None, 0.0

    def resolve(self, text: str) -> str:
        """Best evidence id for ``text``; unmatched text is returned unchanged."""
        evidence_id, _ = self.lookup(text)
        return evidence_id or text
