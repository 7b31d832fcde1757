"""
Structural validation of conjugation records.

validate_conjugation() never raises: it walks the whole record and returns
every problem it finds, so one round trip reports them all.
"""

from datetime import datetime
from typing import Any, List, Mapping, Union

from .paradigms import Gender, Number, Person, Tense, is_valid_cell
from .root_types import IRREGULARITY_TAGS
from .schemas import VerbConjugation
from .verb_forms import PATTERN_CATALOG

MAX_ROOT_FORM_LENGTH = 50

_AXES = (Tense, Person, Number, Gender)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_iso_timestamp(value: str) -> bool:
    # fromisoformat() rejects a trailing Z before Python 3.11
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def _check_conjugations(conjugations: Mapping, errors: List[str]) -> None:
    """Report axis keys outside the paradigm and cells that are not strings."""

    def walk(node: Any, path: List[str]) -> None:
        depth = len(path)
        if depth == 4:
            if not is_valid_cell(*path):
                errors.append(f"conjugations.{'.'.join(path)} is not a valid paradigm cell")
            elif not isinstance(node, str):
                errors.append(f"conjugations.{'.'.join(path)} must be a string")
            return

        if not isinstance(node, Mapping):
            where = '.'.join(['conjugations'] + path)
            errors.append(f"{where} must be a mapping")
            return

        axis = _AXES[depth]
        allowed = {member.value for member in axis}
        for key, child in node.items():
            if key not in allowed:
                where = '.'.join(['conjugations'] + path + [str(key)])
                errors.append(f"{where}: unknown {axis.__name__.lower()} '{key}'")
                continue
            walk(child, path + [key])

    walk(conjugations, [])


def validate_conjugation_table(conjugations: Any) -> List[str]:
    """Structural errors in a wire-shaped conjugation table; empty when usable."""
    if not isinstance(conjugations, Mapping) or not conjugations:
        return ['conjugations object is required and must not be empty']
    errors: List[str] = []
    _check_conjugations(conjugations, errors)
    return errors


def validate_conjugation(record: Union[VerbConjugation, Mapping[str, Any]]) -> List[str]:
    """
    Validate a conjugation record.

    Args:
        record: A VerbConjugation or a plain mapping in wire shape
            (camelCase keys)

    Returns:
        List of error messages; empty when the record is valid
    """
    if isinstance(record, VerbConjugation):
        record = record.to_wire()
    if not isinstance(record, Mapping):
        return ['record must be a mapping']

    errors: List[str] = []

    if _is_blank(record.get('verbId')):
        errors.append('verbId is required')

    root_form = record.get('rootForm')
    if _is_blank(root_form):
        errors.append('rootForm is required')
    elif len(root_form) > MAX_ROOT_FORM_LENGTH:
        errors.append(f'rootForm must be at most {MAX_ROOT_FORM_LENGTH} characters')

    errors.extend(validate_conjugation_table(record.get('conjugations')))

    patterns = record.get('patterns', [])
    irregularities = record.get('irregularities', [])

    if not isinstance(patterns, list):
        errors.append('patterns must be a list')
        patterns = []
    if not isinstance(irregularities, list):
        errors.append('irregularities must be a list')
        irregularities = []

    if not patterns and irregularities:
        errors.append('patterns must name at least one pattern when irregularities are given')
    for pattern_id in patterns:
        if not isinstance(pattern_id, str):
            errors.append(f'patterns entries must be strings, got {pattern_id!r}')
        elif pattern_id not in PATTERN_CATALOG:
            errors.append(f"Unknown pattern: '{pattern_id}'")

    for tag in irregularities:
        if not isinstance(tag, str) or tag not in IRREGULARITY_TAGS:
            errors.append(f"Unknown irregularity: {tag!r}")

    for field_name in ('createdAt', 'updatedAt'):
        value = record.get(field_name)
        if value is None:
            continue
        if not isinstance(value, str) or not _is_iso_timestamp(value):
            errors.append(f'{field_name} must be an ISO-8601 timestamp')

    return errors


def is_valid_conjugation(record: Union[VerbConjugation, Mapping[str, Any]]) -> bool:
    return not validate_conjugation(record)
