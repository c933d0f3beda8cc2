"""Load case definitions from JSON files."""

import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from ..config import get_settings
from ..errors import CaseFormatError, CaseNotFoundError
from ..models import UNKNOWN_EVIDENCE_TYPE, CaseData, EvidenceItem, EvidenceType

logger = logging.getLogger(__name__)


def load_case(path: Path) -> CaseData:
    """
    Load a case file and validate it against the case schema.

    Raises:
        CaseNotFoundError: if the file does not exist
        CaseFormatError: if the file is not valid JSON or not a valid case
    """
    if not path.is_file():
        raise CaseNotFoundError(f"Case file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CaseFormatError(f"Case file {path} is not valid JSON: {e}") from e

    try:
        case = CaseData.model_validate(data)
    except ValidationError as e:
        raise CaseFormatError(f"Case file {path} does not match the case schema:\n{e}") from e

    logger.info("Loaded case %r (%d evidence items) from %s",
                case.game_settings.case_title, len(case.evidence), path)
    return case


def find_case(case_ref: str, cases_dir: Optional[Path] = None) -> Path:
    """
    Resolve a case reference to a file.

    ``case_ref`` is either a path to an existing file or a case id looked up
    as ``<cases_dir>/<case_id>.json``.
    """
    direct = Path(case_ref)
    if direct.is_file():
        return direct

    base = cases_dir if cases_dir is not None else get_settings().cases_dir
    candidate = base / f"{case_ref}.json"
    if candidate.is_file():
        return candidate

    raise CaseNotFoundError(f"No case named {case_ref!r} (looked for {direct} and {candidate})")


def list_cases(cases_dir: Optional[Path] = None) -> list[str]:
    """Case ids available in ``cases_dir``."""
    base = cases_dir if cases_dir is not None else get_settings().cases_dir
    if not base.is_dir():
        return []
    return sorted(p.stem for p in base.glob("*.json"))


def get_evidence_type(item: EvidenceItem, evidence_types: Sequence[EvidenceType]) -> EvidenceType:
    """Category of ``item``, or the "Unknown" category if its type is not defined."""
    for evidence_type in evidence_types:
        if evidence_type.id == item.type:
            return evidence_type
    return UNKNOWN_EVIDENCE_TYPE
