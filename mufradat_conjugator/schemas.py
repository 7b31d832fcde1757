"""Pydantic model of a stored verb conjugation record."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

# tense -> person -> number -> gender -> surface form. Left loose so that
# validate_conjugation can report bad axis keys and non-string cells.
ConjugationTable = Dict[str, Any]


class VerbConjugation(BaseModel):
    """
    A verb's full conjugation record as exchanged on the wire.

    Fields are populated by name or by their camelCase alias; structural
    rules are checked by validation.validate_conjugation, not here, so that
    a malformed record can still be loaded and reported on.
    """
    verb_id: str = Field(..., alias="verbId", description="Vocabulary entry id")
    root_form: str = Field(..., alias="rootForm", description="Root or citation form as entered")
    conjugations: ConjugationTable = Field(default_factory=dict, description="Nested conjugation table")
    patterns: List[str] = Field(default_factory=list, description="Pattern ids, e.g. form1")
    irregularities: List[str] = Field(default_factory=list, description="hollow, defective, doubled")
    created_at: Optional[str] = Field(default=None, alias="createdAt", description="ISO-8601 timestamp")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt", description="ISO-8601 timestamp")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "verbId": "v-101",
                    "rootForm": "كتب",
                    "conjugations": {
                        "perfect": {"3rd": {"singular": {"masculine": "كَتَبَ"}}}
                    },
                    "patterns": ["form1"],
                    "irregularities": [],
                    "createdAt": "2024-01-01T00:00:00+00:00",
                    "updatedAt": "2024-01-01T00:00:00+00:00"
                }
            ]
        }
    }

    def to_wire(self) -> Dict[str, Any]:
        """Dump with camelCase keys, as stored and cached."""
        return self.model_dump(by_alias=True)


class PatternInfoResponse(BaseModel):
    """Catalog lookup result for a pattern id."""
    name: str = Field(..., description="Display name, e.g. Form I (فَعَلَ)")
    pattern: str = Field(..., description="Vocalised template")
    description: str = Field(..., description="Short gloss of the form's meaning")
    examples: List[str] = Field(default_factory=list, description="Example verbs")
