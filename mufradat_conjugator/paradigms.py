#!/usr/bin/env python3
"""
Arabic Verb Conjugation Paradigms

This module contains the conjugation tables for all persons, numbers, and genders
in perfect, imperfect, and imperative tenses, and the ConjugationForms container
that holds a generated paradigm.

Paradigm structure:
- Person: 1st (متكلم), 2nd (مخاطب), 3rd (غائب)
- Number: singular (مفرد), dual (مثنى), plural (جمع)
- Gender: masculine (مذكر), feminine (مؤنث), common (مشترك)
- Tense: perfect (ماضي), imperfect (مضارع), imperative (أمر)

Suffixes start with the vowel (or sukun) that the final radical carries, so
a stem ending in a bare radical plus a suffix gives the full surface form.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .root_types import FATHA, DAMMA, KASRA, SHADDA, SUKUN


class Tense(str, Enum):
    PERFECT = 'perfect'        # ماضي
    IMPERFECT = 'imperfect'    # مضارع
    IMPERATIVE = 'imperative'  # أمر


class Person(str, Enum):
    FIRST = '1st'   # متكلم
    SECOND = '2nd'  # مخاطب
    THIRD = '3rd'   # غائب


class Number(str, Enum):
    SINGULAR = 'singular'  # مفرد
    DUAL = 'dual'          # مثنى
    PLURAL = 'plural'      # جمع


class Gender(str, Enum):
    MASCULINE = 'masculine'  # مذكر
    FEMININE = 'feminine'    # مؤنث
    COMMON = 'common'        # مشترك (1st person, 2nd dual)


SlotKey = Tuple[Person, Number, Gender]
CellKey = Tuple[Tense, Person, Number, Gender]


@dataclass(frozen=True)
class ConjugationSlot:
    """A single conjugation slot in the paradigm."""
    person: Person
    number: Number
    gender: Gender
    prefix: str     # imperfect person marker (ي، ت، أ، ن), vowel added per form
    suffix: str     # ending, starting with the final radical's vowel
    name_ar: str
    name_en: str

    @property
    def key(self) -> SlotKey:
        return (self.person, self.number, self.gender)

    @property
    def consonantal(self) -> bool:
        """True when the suffix starts with a consonant (final radical takes sukun)."""
        return self.suffix.startswith(SUKUN)


def _slots(rows) -> Dict[SlotKey, ConjugationSlot]:
    table = {}
    for person, number, gender, prefix, suffix, name_ar, name_en in rows:
        slot = ConjugationSlot(person, number, gender, prefix, suffix, name_ar, name_en)
        table[slot.key] = slot
    return table


_P1, _P2, _P3 = Person.FIRST, Person.SECOND, Person.THIRD
_SG, _DU, _PL = Number.SINGULAR, Number.DUAL, Number.PLURAL
_M, _F, _C = Gender.MASCULINE, Gender.FEMININE, Gender.COMMON


# ============================================
# PERFECT TENSE PARADIGM (الماضي)
# ============================================

PERFECT_PARADIGM: Dict[SlotKey, ConjugationSlot] = _slots([
    # Third person (الغائب)
    (_P3, _SG, _M, '', FATHA, 'هو', '3ms'),                                 # فَعَلَ
    (_P3, _SG, _F, '', FATHA + 'ت' + SUKUN, 'هي', '3fs'),                   # فَعَلَتْ
    (_P3, _DU, _M, '', FATHA + 'ا', 'هما', '3md'),                          # فَعَلَا
    (_P3, _DU, _F, '', FATHA + 'ت' + FATHA + 'ا', 'هما', '3fd'),            # فَعَلَتَا
    (_P3, _PL, _M, '', DAMMA + 'وا', 'هم', '3mp'),                          # فَعَلُوا
    (_P3, _PL, _F, '', SUKUN + 'ن' + FATHA, 'هن', '3fp'),                   # فَعَلْنَ
    # Second person (المخاطب)
    (_P2, _SG, _M, '', SUKUN + 'ت' + FATHA, 'أنتَ', '2ms'),                 # فَعَلْتَ
    (_P2, _SG, _F, '', SUKUN + 'ت' + KASRA, 'أنتِ', '2fs'),                 # فَعَلْتِ
    (_P2, _DU, _C, '', SUKUN + 'ت' + DAMMA + 'م' + FATHA + 'ا', 'أنتما', '2d'),  # فَعَلْتُمَا
    (_P2, _PL, _M, '', SUKUN + 'ت' + DAMMA + 'م' + SUKUN, 'أنتم', '2mp'),   # فَعَلْتُمْ
    (_P2, _PL, _F, '', SUKUN + 'ت' + DAMMA + 'ن' + SHADDA + FATHA, 'أنتن', '2fp'),  # فَعَلْتُنَّ
    # First person (المتكلم)
    (_P1, _SG, _C, '', SUKUN + 'ت' + DAMMA, 'أنا', '1s'),                   # فَعَلْتُ
    (_P1, _PL, _C, '', SUKUN + 'ن' + FATHA + 'ا', 'نحن', '1p'),             # فَعَلْنَا
])


# ============================================
# IMPERFECT TENSE PARADIGM (المضارع المرفوع)
# ============================================

# Prefix + stem + suffix. The prefix vowel depends on the form:
# damma for II, III, IV (يُفَعِّلُ), fatha elsewhere (يَفْعَلُ).
IMPERFECT_PARADIGM: Dict[SlotKey, ConjugationSlot] = _slots([
    # Third person
    (_P3, _SG, _M, 'ي', DAMMA, 'هو', '3ms'),                                # يَفْعَلُ
    (_P3, _SG, _F, 'ت', DAMMA, 'هي', '3fs'),                                # تَفْعَلُ
    (_P3, _DU, _M, 'ي', FATHA + 'ان' + KASRA, 'هما', '3md'),                # يَفْعَلَانِ
    (_P3, _DU, _F, 'ت', FATHA + 'ان' + KASRA, 'هما', '3fd'),                # تَفْعَلَانِ
    (_P3, _PL, _M, 'ي', DAMMA + 'ون' + FATHA, 'هم', '3mp'),                 # يَفْعَلُونَ
    (_P3, _PL, _F, 'ي', SUKUN + 'ن' + FATHA, 'هن', '3fp'),                  # يَفْعَلْنَ
    # Second person
    (_P2, _SG, _M, 'ت', DAMMA, 'أنتَ', '2ms'),                              # تَفْعَلُ
    (_P2, _SG, _F, 'ت', KASRA + 'ين' + FATHA, 'أنتِ', '2fs'),               # تَفْعَلِينَ
    (_P2, _DU, _C, 'ت', FATHA + 'ان' + KASRA, 'أنتما', '2d'),               # تَفْعَلَانِ
    (_P2, _PL, _M, 'ت', DAMMA + 'ون' + FATHA, 'أنتم', '2mp'),               # تَفْعَلُونَ
    (_P2, _PL, _F, 'ت', SUKUN + 'ن' + FATHA, 'أنتن', '2fp'),                # تَفْعَلْنَ
    # First person
    (_P1, _SG, _C, 'أ', DAMMA, 'أنا', '1s'),                                # أَفْعَلُ
    (_P1, _PL, _C, 'ن', DAMMA, 'نحن', '1p'),                                # نَفْعَلُ
])


# ============================================
# IMPERATIVE PARADIGM (الأمر)
# ============================================

# Built on the jussive stem without the person prefix; 2nd person only.
IMPERATIVE_PARADIGM: Dict[SlotKey, ConjugationSlot] = _slots([
    (_P2, _SG, _M, '', SUKUN, 'أنتَ', '2ms'),                               # افْعَلْ
    (_P2, _SG, _F, '', KASRA + 'ي', 'أنتِ', '2fs'),                         # افْعَلِي
    (_P2, _DU, _C, '', FATHA + 'ا', 'أنتما', '2d'),                         # افْعَلَا
    (_P2, _PL, _M, '', DAMMA + 'وا', 'أنتم', '2mp'),                        # افْعَلُوا
    (_P2, _PL, _F, '', SUKUN + 'ن' + FATHA, 'أنتن', '2fp'),                 # افْعَلْنَ
])


PARADIGMS: Dict[Tense, Dict[SlotKey, ConjugationSlot]] = {
    Tense.PERFECT: PERFECT_PARADIGM,
    Tense.IMPERFECT: IMPERFECT_PARADIGM,
    Tense.IMPERATIVE: IMPERATIVE_PARADIGM,
}

# Every linguistically valid cell, in canonical order
VALID_CELLS: Tuple[CellKey, ...] = tuple(
    (tense,) + slot_key
    for tense, paradigm in PARADIGMS.items()
    for slot_key in paradigm
)
_CELL_ORDER = {key: index for index, key in enumerate(VALID_CELLS)}


def cell_key(tense, person, number, gender) -> CellKey:
    """Coerce wire strings or enum members into a cell key."""
    return (Tense(tense), Person(person), Number(number), Gender(gender))


def is_valid_cell(tense, person, number, gender) -> bool:
    """Whether the cell exists in the paradigm (e.g. no 1st-person imperative)."""
    try:
        return cell_key(tense, person, number, gender) in _CELL_ORDER
    except ValueError:
        return False


def cell_label(key: CellKey) -> str:
    """Short label for a cell, e.g. "3ms.perfect"."""
    tense, person, number, gender = key
    return f"{PARADIGMS[tense][(person, number, gender)].name_en}.{tense.value}"


class ConjugationForms:
    """
    Sparse tense → person → number → gender → surface form container.

    A cell that is absent is "not applicable" (get() returns None); a cell
    holding an empty string means generation produced nothing for it.
    Only cells listed in VALID_CELLS can be stored.
    """

    def __init__(self, cells: Optional[Mapping[CellKey, str]] = None):
        self._cells: Dict[CellKey, str] = {}
        if cells:
            for key, form in cells.items():
                self.set(*key, form)

    def set(self, tense, person, number, gender, form: str) -> None:
        key = cell_key(tense, person, number, gender)
        if key not in _CELL_ORDER:
            raise ValueError(
                f"Not a valid paradigm cell: {'/'.join(k.value for k in key)}")
        if not isinstance(form, str):
            raise TypeError(f"Surface form must be a string, got {type(form).__name__}")
        self._cells[key] = form

    def get(self, tense, person, number, gender) -> Optional[str]:
        try:
            key = cell_key(tense, person, number, gender)
        except ValueError:
            return None
        return self._cells.get(key)

    def __contains__(self, key) -> bool:
        try:
            return cell_key(*key) in self._cells
        except (TypeError, ValueError):
            return False

    def cells(self) -> Iterator[Tuple[CellKey, str]]:
        """Iterate (cell key, form) pairs in canonical paradigm order."""
        for key in sorted(self._cells, key=_CELL_ORDER.__getitem__):
            yield key, self._cells[key]

    def tenses(self) -> List[Tense]:
        present = {key[0] for key in self._cells}
        return [tense for tense in Tense if tense in present]

    def failed_cells(self) -> List[CellKey]:
        """Cells that were generated as empty strings."""
        return [key for key, form in self.cells() if form == '']

    def merge(self, overlay: 'ConjugationForms') -> 'ConjugationForms':
        """Return a new container: this one's cells, replaced by overlay's cells."""
        merged = ConjugationForms()
        merged._cells.update(self._cells)
        merged._cells.update(overlay._cells)
        return merged

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Dict[str, str]]]]:
        """Nested wire shape: {"perfect": {"3rd": {"singular": {"masculine": ...}}}}."""
        data: Dict[str, Dict[str, Dict[str, Dict[str, str]]]] = {}
        for (tense, person, number, gender), form in self.cells():
            data.setdefault(tense.value, {}) \
                .setdefault(person.value, {}) \
                .setdefault(number.value, {})[gender.value] = form
        return data

    @classmethod
    def from_dict(cls, data: Mapping) -> 'ConjugationForms':
        """
        Build from the nested wire shape.

        Raises:
            ValueError: on axis keys outside the paradigm
            TypeError: on non-string cell values
        """
        forms = cls()
        for tense, persons in data.items():
            for person, numbers in persons.items():
                for number, genders in numbers.items():
                    for gender, form in genders.items():
                        forms.set(tense, person, number, gender, form)
        return forms

    def __len__(self) -> int:
        return len(self._cells)

    def __bool__(self) -> bool:
        return bool(self._cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConjugationForms):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"ConjugationForms({len(self._cells)} cells, tenses={[t.value for t in self.tenses()]})"
