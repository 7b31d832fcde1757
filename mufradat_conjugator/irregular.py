#!/usr/bin/env python3
"""
Irregular Verb Handling (الأفعال المعتلة والمضعفة)

Weak and doubled roots do not follow the regular Form I paradigm:
- أجوف (hollow):     قَالَ / قُلْتُ، يَقُولُ / يَقُلْنَ، قُلْ
- ناقص (defective):  دَعَا / دَعَوْتُ، يَدْعُو، اُدْعُ
                     رَمَى / رَمَيْتُ، يَرْمِي، اِرْمِ
                     نَسِيَ / نَسِيتُ، يَنْسَى، اِنْسَ
- مضعّف (doubled):   مَدَّ / مَدَدْتُ، يَمُدُّ / يَمْدُدْنَ، مُدَّ

Each class produces an overlay: a sparse ConjugationForms holding only the
cells that differ from the regular Form I grid. Overlays are merged in the
order hollow, defective, doubled; the later class wins on a shared cell.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .conjugator import generate_conjugations
from .errors import UnknownIrregularityError
from .paradigms import (
    IMPERATIVE_PARADIGM, IMPERFECT_PARADIGM, PERFECT_PARADIGM,
    ConjugationForms, ConjugationSlot, Tense
)
from .root_types import (
    FATHA, DAMMA, KASRA, SHADDA, SUKUN, WAW, YA, ALIF, ALIF_MAQSURA,
    IRREGULARITY_ORDER, Irregularity, RootLike, root_letters
)
from .verb_forms import FormIVowelClass, form_i_vowel_class

logger = logging.getLogger(__name__)

Grid = Dict[Tense, Dict[str, str]]


def _grid() -> Grid:
    return {tense: {} for tense in Tense}


def _imperative_prefix(vowel_class: FormIVowelClass) -> str:
    return ALIF + (DAMMA if vowel_class.present_vowel == DAMMA else KASRA)


# ============================================
# HOLLOW (الأجوف)
# ============================================

def _hollow(letters: Sequence[str], vowel_class: FormIVowelClass) -> Grid:
    fa, ain, lam = letters

    # Long vowel of the imperfect and its short counterpart
    if vowel_class == FormIVowelClass.FA_IL_A:
        long_letter, short = ALIF, FATHA        # نَامَ يَنَامُ
    elif ain == WAW:
        long_letter, short = WAW, DAMMA         # قَالَ يَقُولُ
    else:
        long_letter, short = YA, KASRA          # بَاعَ يَبِيعُ

    # Perfect before consonant suffixes: قُلْتُ but بِعْتُ، نِمْتُ
    if ain == WAW and vowel_class != FormIVowelClass.FA_IL_A:
        perfect_short = DAMMA
    else:
        perfect_short = KASRA

    grid = _grid()
    for slot in PERFECT_PARADIGM.values():
        if slot.consonantal:
            form = fa + perfect_short + lam + slot.suffix
        else:
            form = fa + FATHA + ALIF + lam + slot.suffix
        grid[Tense.PERFECT][slot.name_en] = form

    for slot in IMPERFECT_PARADIGM.values():
        prefix = slot.prefix + FATHA
        if slot.consonantal:
            form = prefix + fa + short + lam + slot.suffix
        else:
            form = prefix + fa + short + long_letter + lam + slot.suffix
        grid[Tense.IMPERFECT][slot.name_en] = form

    for slot in IMPERATIVE_PARADIGM.values():
        # Closed syllable shortens the vowel: قُلْ، قُلْنَ
        if slot.consonantal:
            form = fa + short + lam + slot.suffix
        else:
            form = fa + short + long_letter + lam + slot.suffix
        grid[Tense.IMPERATIVE][slot.name_en] = form

    return grid


# ============================================
# DEFECTIVE (الناقص)
# ============================================

# Endings written after the middle radical, keyed by slot label.
# Slots not listed fall back to a rule on the regular suffix.

_WAW_PERFECT = {                                   # دَعَا
    '3ms': FATHA + ALIF,
    '3fs': FATHA + 'ت' + SUKUN,
    '3md': FATHA + WAW + FATHA + ALIF,
    '3fd': FATHA + 'ت' + FATHA + ALIF,
    '3mp': FATHA + WAW + SUKUN + ALIF,
}
_YA_PERFECT = {                                    # رَمَى
    '3ms': FATHA + ALIF_MAQSURA,
    '3fs': FATHA + 'ت' + SUKUN,
    '3md': FATHA + YA + FATHA + ALIF,
    '3fd': FATHA + 'ت' + FATHA + ALIF,
    '3mp': FATHA + WAW + SUKUN + ALIF,
}
_IA_PERFECT = {                                    # نَسِيَ
    '3ms': KASRA + YA + FATHA,
    '3fs': KASRA + YA + FATHA + 'ت' + SUKUN,
    '3md': KASRA + YA + FATHA + ALIF,
    '3fd': KASRA + YA + FATHA + 'ت' + FATHA + ALIF,
    '3mp': DAMMA + WAW + ALIF,
}

# Imperfect endings keyed by the regular suffix
_WAW_IMPERFECT = {                                 # يَدْعُو
    DAMMA: DAMMA + WAW,
    FATHA + 'ان' + KASRA: DAMMA + WAW + FATHA + 'ان' + KASRA,
    DAMMA + 'ون' + FATHA: DAMMA + 'ون' + FATHA,
    SUKUN + 'ن' + FATHA: DAMMA + WAW + 'ن' + FATHA,
    KASRA + 'ين' + FATHA: KASRA + 'ين' + FATHA,
}
_YA_IMPERFECT = {                                  # يَرْمِي
    DAMMA: KASRA + YA,
    FATHA + 'ان' + KASRA: KASRA + YA + FATHA + 'ان' + KASRA,
    DAMMA + 'ون' + FATHA: DAMMA + 'ون' + FATHA,
    SUKUN + 'ن' + FATHA: KASRA + YA + 'ن' + FATHA,
    KASRA + 'ين' + FATHA: KASRA + 'ين' + FATHA,
}
_IA_IMPERFECT = {                                  # يَنْسَى
    DAMMA: FATHA + ALIF_MAQSURA,
    FATHA + 'ان' + KASRA: FATHA + YA + FATHA + 'ان' + KASRA,
    DAMMA + 'ون' + FATHA: FATHA + WAW + SUKUN + 'ن' + FATHA,
    SUKUN + 'ن' + FATHA: FATHA + YA + SUKUN + 'ن' + FATHA,
    KASRA + 'ين' + FATHA: FATHA + YA + SUKUN + 'ن' + FATHA,
}

_WAW_IMPERATIVE = {                                # اُدْعُ
    '2ms': DAMMA,
    '2fs': KASRA + YA,
    '2d': DAMMA + WAW + FATHA + ALIF,
    '2mp': DAMMA + WAW + ALIF,
    '2fp': DAMMA + WAW + 'ن' + FATHA,
}
_YA_IMPERATIVE = {                                 # اِرْمِ
    '2ms': KASRA,
    '2fs': KASRA + YA,
    '2d': KASRA + YA + FATHA + ALIF,
    '2mp': DAMMA + WAW + ALIF,
    '2fp': KASRA + YA + 'ن' + FATHA,
}
_IA_IMPERATIVE = {                                 # اِنْسَ
    '2ms': FATHA,
    '2fs': FATHA + YA + SUKUN,
    '2d': FATHA + YA + FATHA + ALIF,
    '2mp': FATHA + WAW + SUKUN + ALIF,
    '2fp': FATHA + YA + SUKUN + 'ن' + FATHA,
}


def _defective(letters: Sequence[str], vowel_class: FormIVowelClass) -> Grid:
    fa, ain, lam = letters

    if vowel_class == FormIVowelClass.FA_IL_A:
        perfect, imperfect, imperative = _IA_PERFECT, _IA_IMPERFECT, _IA_IMPERATIVE
        # نَسِيتُ: long ī before the consonant suffix
        closed = KASRA + YA
        keep_sukun = False
    elif lam == WAW:
        perfect, imperfect, imperative = _WAW_PERFECT, _WAW_IMPERFECT, _WAW_IMPERATIVE
        closed = FATHA + WAW                    # دَعَوْتُ
        keep_sukun = True
    else:
        perfect, imperfect, imperative = _YA_PERFECT, _YA_IMPERFECT, _YA_IMPERATIVE
        closed = FATHA + YA                     # رَمَيْتُ
        keep_sukun = True

    grid = _grid()
    perfect_stem = fa + FATHA + ain
    for slot in PERFECT_PARADIGM.values():
        if slot.name_en in perfect:
            ending = perfect[slot.name_en]
        else:
            suffix = slot.suffix if keep_sukun else slot.suffix[len(SUKUN):]
            ending = closed + suffix
        grid[Tense.PERFECT][slot.name_en] = perfect_stem + ending

    jussive_stem = fa + SUKUN + ain
    for slot in IMPERFECT_PARADIGM.values():
        grid[Tense.IMPERFECT][slot.name_en] = (
            slot.prefix + FATHA + jussive_stem + imperfect[slot.suffix])

    prefix = _imperative_prefix(vowel_class)
    for slot in IMPERATIVE_PARADIGM.values():
        grid[Tense.IMPERATIVE][slot.name_en] = prefix + jussive_stem + imperative[slot.name_en]

    return grid


# ============================================
# DOUBLED (المضعّف)
# ============================================

def _doubled(letters: Sequence[str], vowel_class: FormIVowelClass) -> Grid:
    fa, ain, _ = letters
    present = vowel_class.present_vowel
    geminate = ain + SHADDA

    # Consonant-initial suffixes keep the two radicals apart (مَدَدْتُ،
    # يَمْدُدْنَ، اُمْدُدْنَ) and stay regular.
    grid = _grid()
    for slot in PERFECT_PARADIGM.values():
        if not slot.consonantal:
            grid[Tense.PERFECT][slot.name_en] = fa + FATHA + geminate + slot.suffix

    for slot in IMPERFECT_PARADIGM.values():
        if not slot.consonantal:
            grid[Tense.IMPERFECT][slot.name_en] = (
                slot.prefix + FATHA + fa + present + geminate + slot.suffix)

    for slot in IMPERATIVE_PARADIGM.values():
        if slot.suffix == SUKUN:
            grid[Tense.IMPERATIVE][slot.name_en] = fa + present + geminate + FATHA  # مُدَّ
        elif not slot.consonantal:
            grid[Tense.IMPERATIVE][slot.name_en] = fa + present + geminate + slot.suffix

    return grid


# ============================================
# OVERLAYS
# ============================================

def _applies(irregularity: Irregularity, letters: Sequence[str]) -> bool:
    """Whether the root has the radical the class acts on."""
    fa, ain, lam = letters
    if irregularity == Irregularity.HOLLOW:
        return ain in (WAW, YA)
    if irregularity == Irregularity.DEFECTIVE:
        return lam in (WAW, YA, ALIF_MAQSURA)
    return ain == lam


_BUILDERS: Dict[Irregularity, Callable[[Sequence[str], FormIVowelClass], Grid]] = {
    Irregularity.HOLLOW: _hollow,
    Irregularity.DEFECTIVE: _defective,
    Irregularity.DOUBLED: _doubled,
}

_SLOT_TABLES: Dict[Tense, Dict[str, ConjugationSlot]] = {
    Tense.PERFECT: {s.name_en: s for s in PERFECT_PARADIGM.values()},
    Tense.IMPERFECT: {s.name_en: s for s in IMPERFECT_PARADIGM.values()},
    Tense.IMPERATIVE: {s.name_en: s for s in IMPERATIVE_PARADIGM.values()},
}


def parse_irregularities(irregularities: Iterable) -> List[Irregularity]:
    """
    Turn tags into Irregularity members, deduplicated, in merge order.

    Raises:
        UnknownIrregularityError: for a tag outside hollow/defective/doubled
    """
    requested = set()
    for tag in irregularities:
        try:
            requested.add(Irregularity(tag))
        except ValueError:
            raise UnknownIrregularityError(tag) from None
    return [i for i in IRREGULARITY_ORDER if i in requested]


def irregularity_overlay(
    root: RootLike,
    irregularity: Irregularity,
    regular: Optional[ConjugationForms] = None
) -> ConjugationForms:
    """
    Overlay for a single irregularity class.

    Only cells that differ from the regular Form I paradigm are kept; a
    class whose radical condition does not hold for the root gives an
    empty overlay.
    """
    letters = root_letters(root)
    overlay = ConjugationForms()

    if not _applies(irregularity, letters):
        logger.warning(f"Irregularity '{irregularity.value}' does not apply to root {''.join(letters)}")
        return overlay

    if regular is None:
        regular = generate_conjugations(letters, 'form1')

    grid = _BUILDERS[irregularity](letters, form_i_vowel_class(letters))
    for tense, cells in grid.items():
        for label, form in cells.items():
            slot = _SLOT_TABLES[tense][label]
            if regular.get(tense, *slot.key) != form:
                overlay.set(tense, *slot.key, form)

    logger.debug(f"{irregularity.value} overlay for {''.join(letters)}: {len(overlay)} cells")
    return overlay


def generate_irregular_conjugations(root: RootLike, irregularities: Iterable) -> ConjugationForms:
    """
    Build the merged overlay for a root's irregularity tags.

    Args:
        root: The triliteral root (e.g., "قول", "دعو", "مدد")
        irregularities: Tags drawn from "hollow", "defective", "doubled"

    Returns:
        Sparse ConjugationForms to merge over the Form I paradigm

    Raises:
        UnknownIrregularityError: for an unrecognised tag
        NonTriliteralRootError: if the root is not exactly three letters
    """
    classes = parse_irregularities(irregularities)
    letters = root_letters(root)

    merged = ConjugationForms()
    if not classes:
        return merged

    regular = generate_conjugations(letters, 'form1')
    for irregularity in classes:
        merged = merged.merge(irregularity_overlay(letters, irregularity, regular))
    return merged


def conjugate_irregular(root: RootLike, irregularities: Iterable) -> ConjugationForms:
    """Full Form I paradigm of a weak or doubled root, overlays applied."""
    overlay = generate_irregular_conjugations(root, irregularities)
    return generate_conjugations(root, 'form1').merge(overlay)


# ============================================
# TESTING
# ============================================

if __name__ == '__main__':
    from .paradigms import cell_label

    print("="*70)
    print("IRREGULAR VERB OVERLAYS")
    print("="*70)

    for root, tags in [("قول", ["hollow"]), ("بيع", ["hollow"]),
                       ("دعو", ["defective"]), ("رمي", ["defective"]),
                       ("نسي", ["defective"]), ("مدد", ["doubled"])]:
        print(f"\n{root} {tags}")
        for key, form in conjugate_irregular(root, tags).cells():
            print(f"  {cell_label(key):18} {form}")
