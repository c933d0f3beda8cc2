"""Shared fixtures for timeline engine tests."""

import json

import pytest

from timeline_engine.config import get_settings
from timeline_engine.models import CaseData, EvidenceItem


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from any TLE_* environment and the settings cache."""
    monkeypatch.delenv("TLE_CASES_DIR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_item():
    """Factory for evidence items. ``hour`` gives a timestamp on 2024-03-15."""

    def _make(
        evidence_id: str,
        hour: int | None = None,
        anchor: bool = False,
        discovered_hour: int | None = None,
        hidden: bool = False,
        **kwargs,
    ) -> EvidenceItem:
        fields = {
            "id": evidence_id,
            "name": f"Evidence {evidence_id}",
            "type": "document",
            "time_happened": f"2024-03-15T{hour:02d}:00:00" if hour is not None else None,
            "time_discovered": (
                f"2024-03-15T{discovered_hour:02d}:30:00" if discovered_hour is not None else None
            ),
            "time_happened_anchor": anchor,
            "is_hidden": hidden,
        }
        fields.update(kwargs)
        return EvidenceItem(**fields)

    return _make


def case_dict(evidence: list[dict] | None = None) -> dict:
    """A case file payload in the on-disk camelCase layout."""
    if evidence is None:
        evidence = [
            {
                "id": "e1",
                "name": "Broken watch",
                "description": "Stopped at 9:15",
                "type": "forensic",
                "timeHappened": "2024-03-15T09:15:00",
                "timeHappenedAnchor": True,
                "isHidden": False,
            },
            {
                "id": "e2",
                "name": "Taxi receipt",
                "description": "Downtown fare",
                "type": "document",
                "timeHappened": "2024-03-15T10:40:00",
                "isHidden": False,
            },
            {
                "id": "e3",
                "name": "Witness statement",
                "description": "Heard a scream",
                "type": "witness",
                "timeDiscovered": "2024-03-15T11:05:00",
                "timeDiscoveredAnchor": True,
                "isHidden": False,
            },
            {
                "id": "e4",
                "name": "Torn letter",
                "description": "Unsigned",
                "type": "mystery",
                "timeHappened": "2024-03-15T08:00:00",
                "isHidden": False,
            },
            {
                "id": "e5",
                "name": "Locked diary",
                "description": "Not yet opened",
                "type": "document",
                "isHidden": False,
            },
            {
                "id": "e6",
                "name": "Secret ledger",
                "description": "Hidden from players",
                "type": "document",
                "timeHappened": "2024-03-15T07:00:00",
                "isHidden": True,
            },
        ]
    return {
        "evidence": evidence,
        "gameSettings": {
            "caseTitle": "The Wong Case",
            "objective": "Reconstruct the night of the murder.",
        },
        "evidenceTypes": [
            {"id": "forensic", "name": "Forensic", "color": "bg-red-100 text-red-800"},
            {"id": "document", "name": "Document", "color": "bg-blue-100 text-blue-800"},
            {"id": "witness", "name": "Witness", "color": "bg-green-100 text-green-800"},
        ],
    }


@pytest.fixture
def case_data() -> CaseData:
    return CaseData.model_validate(case_dict())


@pytest.fixture
def case_file(tmp_path):
    """The sample case written to ``<tmp>/cases/wong.json``."""
    cases_dir = tmp_path / "cases"
    cases_dir.mkdir()
    path = cases_dir / "wong.json"
    path.write_text(json.dumps(case_dict()), encoding="utf-8")
    return path


@pytest.fixture
def case_payload() -> dict:
    return case_dict()
