#!/usr/bin/env python3
"""
Conjugation Engine

Wires the pieces together for a single request:

    surface form ──► extract_root_letters ─┐
                 └─► identify_pattern ─────┼─► generated cache ─► generate_conjugations
                                           │                          │
                         irregularities ───┴─► overlays (Form I) ◄────┘
                                                   │
                                   build_record ─► validate_conjugation

Persistence stays with the caller: get_record() takes a loader for the
system of record and build_record() hands back a validated record.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .analyzer import DEFAULT_PATTERN, extract_root_letters, identify_pattern
from .cache import ConjugationCache
from .config import ConjugatorConfig, config as default_config
from .conjugator import generate_conjugations
from .errors import RecordValidationError
from .irregular import generate_irregular_conjugations, parse_irregularities
from .paradigms import ConjugationForms
from .schemas import PatternInfoResponse, VerbConjugation
from .validation import validate_conjugation, validate_conjugation_table
from .verb_forms import FormPattern, VerbForm, get_pattern_info, require_pattern

logger = logging.getLogger(__name__)


@dataclass
class ConjugationResult:
    """Outcome of conjugating one root in one pattern."""
    root_form: str                    # As supplied by the caller
    root_letters: List[str]
    pattern_id: str
    pattern_info: FormPattern
    forms: ConjugationForms
    irregularities: List[str] = field(default_factory=list)
    from_cache: bool = False

    @property
    def root(self) -> str:
        return ''.join(self.root_letters)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape of a generation response."""
        return {
            'rootForm': self.root_form,
            'pattern': self.pattern_id,
            'patternInfo': self.pattern_info.to_dict(),
            'conjugations': self.forms.to_dict(),
            'irregularities': list(self.irregularities),
        }


class ConjugationEngine:
    """
    Front door for conjugation requests.

    Usage:
        engine = ConjugationEngine()
        result = engine.conjugate("كتب")
        result.forms.get('perfect', '3rd', 'singular', 'masculine')  # كَتَبَ
    """

    def __init__(self, cache: Optional[ConjugationCache] = None,
                 config: Optional[ConjugatorConfig] = None):
        self.config = config or default_config
        self.cache = cache if cache is not None else ConjugationCache(config=self.config)

    def resolve_pattern(self, root_form: str, pattern_id: Optional[str] = None) -> str:
        """Explicit pattern if given, otherwise the one identified from the surface form."""
        if pattern_id:
            return pattern_id
        identified = identify_pattern(root_form)
        if identified == DEFAULT_PATTERN:
            return self.config.default_pattern
        return identified

    def regular_forms(self, root_letters: List[str], pattern_id: str) -> Tuple[ConjugationForms, bool]:
        """Regular paradigm and whether it came from the generated cache."""
        cached = self.cache.get_generated_conjugations(root_letters, pattern_id)
        if cached is not None:
            return cached, True

        forms = generate_conjugations(root_letters, pattern_id)
        self.cache.cache_generated_conjugations(root_letters, pattern_id, forms)
        return forms, False

    def conjugate(self, root_form: str, pattern_id: Optional[str] = None,
                  irregularities: Iterable[str] = ()) -> ConjugationResult:
        """
        Conjugate a root or surface form.

        Args:
            root_form: Bare root ("كتب") or an inflected/derived form ("استغفر")
            pattern_id: "form1".."form10"; identified from root_form when omitted
            irregularities: Tags from "hollow", "defective", "doubled"

        Raises:
            NonTriliteralRootError: if no triliteral root can be extracted
            PatternNotFoundError: if pattern_id is not a catalog id
            UnknownIrregularityError: for an unrecognised irregularity tag
        """
        letters = extract_root_letters(root_form)
        pattern_id = self.resolve_pattern(root_form, pattern_id)
        info = require_pattern(pattern_id)
        classes = parse_irregularities(irregularities)

        forms, from_cache = self.regular_forms(letters, pattern_id)

        tags = [c.value for c in classes]
        if classes:
            if info.form == VerbForm.I:
                forms = forms.merge(generate_irregular_conjugations(letters, classes))
            else:
                logger.warning(
                    f"Irregularity overlays cover Form I only; ignoring {tags} for {pattern_id}")

        logger.info(f"Conjugated {''.join(letters)} in {pattern_id} ({len(forms)} cells)")
        return ConjugationResult(
            root_form=root_form,
            root_letters=letters,
            pattern_id=pattern_id,
            pattern_info=info,
            forms=forms,
            irregularities=tags,
            from_cache=from_cache,
        )

    def build_record(self, verb_id: str, root_form: str, pattern_id: Optional[str] = None,
                     irregularities: Iterable[str] = (),
                     conjugations: Optional[Mapping] = None,
                     created_at: Optional[str] = None) -> VerbConjugation:
        """
        Assemble a validated record ready for persistence.

        When conjugations are supplied they are stored as given, with any
        irregularity overlays merged on top; otherwise they are generated.

        Raises:
            RecordValidationError: carrying every problem found
        """
        tags = [c.value for c in parse_irregularities(irregularities)]
        if conjugations is None:
            result = self.conjugate(root_form, pattern_id, tags)
            pattern_id = result.pattern_id
            table = result.forms.to_dict()
        else:
            pattern_id = pattern_id or self.resolve_pattern(root_form)
            table = dict(conjugations) if isinstance(conjugations, Mapping) else {}
            # A malformed table is reported below with everything else
            if tags and not validate_conjugation_table(table):
                overlay = generate_irregular_conjugations(extract_root_letters(root_form), tags)
                table = ConjugationForms.from_dict(table).merge(overlay).to_dict()

        now = datetime.now(timezone.utc).isoformat()
        record = VerbConjugation(
            verb_id=verb_id,
            root_form=root_form.strip() if isinstance(root_form, str) else root_form,
            conjugations=table,
            patterns=[pattern_id],
            irregularities=tags,
            created_at=created_at or now,
            updated_at=now,
        )

        errors = validate_conjugation(record)
        if errors:
            raise RecordValidationError(errors)
        return record

    def get_record(self, verb_id: str,
                   loader: Callable[[str], Optional[VerbConjugation]]) -> Optional[VerbConjugation]:
        """
        Cache-aside lookup of a stored record.

        Args:
            verb_id: The verb's id
            loader: Reads the system of record; returns None when absent

        Returns:
            The record, or None when neither cache nor loader has it
        """
        record = self.cache.get_conjugation(verb_id)
        if record is not None:
            return record

        record = loader(verb_id)
        if record is None:
            logger.debug(f"No conjugation stored for {verb_id}")
            return None

        if not isinstance(record, VerbConjugation):
            record = VerbConjugation.model_validate(record)
        self.cache.cache_conjugation(record)
        return record

    def pattern_info(self, pattern_id: str) -> Optional[PatternInfoResponse]:
        """Catalog entry for display, or None for an unknown id."""
        entry = get_pattern_info(pattern_id)
        if entry is None:
            return None
        return PatternInfoResponse(**entry.to_dict())
