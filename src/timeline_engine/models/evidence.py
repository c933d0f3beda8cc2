"""Case-file models: evidence items, evidence types and whole cases.

Field aliases follow the camelCase keys of the case JSON files, so a case can
be validated straight from ``json.load`` output.
"""

from pydantic import BaseModel, ConfigDict, Field


class CaseModel(BaseModel):
    """Base class accepting both the case-file keys and Python field names."""

    model_config = ConfigDict(populate_by_name=True)


class EvidenceItem(CaseModel):
    """A piece of evidence with up to two timestamps."""

    id: str
    name: str
    description: str = ""
    type: str = "unknown"  # EvidenceType id
    location: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    is_hidden: bool = Field(default=False, alias="isHidden")

    time_happened: str | None = Field(default=None, alias="timeHappened")
    time_discovered: str | None = Field(default=None, alias="timeDiscovered")
    time_happened_anchor: bool = Field(default=False, alias="timeHappenedAnchor")
    time_discovered_anchor: bool = Field(default=False, alias="timeDiscoveredAnchor")
    time_happened_description: str | None = Field(default=None, alias="timeHappenedDescription")
    time_discovered_description: str | None = Field(default=None, alias="timeDiscoveredDescription")

    @property
    def is_anchor(self) -> bool:
        """True if either timestamp is flagged as an anchor."""
        return self.time_happened_anchor or self.time_discovered_anchor

    @property
    def has_timestamp(self) -> bool:
        return bool(self.time_happened or self.time_discovered)


class EvidenceType(CaseModel):
    """A category of evidence (document, witness, forensic, ...)."""

    id: str
    name: str
    color: str = ""
    default_image_url: str | None = Field(default=None, alias="defaultImageUrl")


UNKNOWN_EVIDENCE_TYPE = EvidenceType(
    id="unknown",
    name="Unknown",
    color="bg-gray-100 text-gray-800",
)


class GameSettings(CaseModel):
    """Display metadata for a case."""

    case_title: str = Field(alias="caseTitle")
    objective: str = ""
    question_text: str | None = Field(default=None, alias="questionText")


class CaseData(CaseModel):
    """A complete case definition as stored in a case file."""

    evidence: list[EvidenceItem] = Field(default_factory=list)
    game_settings: GameSettings = Field(alias="gameSettings")
    evidence_types: list[EvidenceType] = Field(default_factory=list, alias="evidenceTypes")

    def get_evidence(self, evidence_id: str) -> EvidenceItem | None:
        """Look up an evidence item by id."""
        for item in self.evidence:
            if item.id == evidence_id:
                return item
        return None
