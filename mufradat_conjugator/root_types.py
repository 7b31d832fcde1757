#!/usr/bin/env python3
"""
Arabic Root Type Classification

Root Types (أنواع الجذور) covered for triliteral roots:
1. صحيح سالم (Sound Regular) - All letters are strong consonants
2. مهموز (Hamzated) - Contains hamza (ء), first, middle or last radical
3. مضعّف (Doubled) - Second and third radicals identical
4. مثال (Assimilated) - First radical is و or ي
5. أجوف (Hollow) - Second radical is و or ي
6. ناقص (Defective) - Third radical is و or ي
7. لفيف مفروق (Doubly Weak - Separated) - First and third are weak
8. لفيف مقرون (Doubly Weak - Adjacent) - Second and third are weak

Also holds the orthographic helpers shared by the rest of the package:
diacritic constants, root normalisation and letter/mark clustering.
"""

from enum import Enum, auto
from typing import List, Sequence, Tuple, Union
from dataclasses import dataclass

from .errors import NonTriliteralRootError


# ============================================
# LETTERS AND DIACRITICS
# ============================================

FATHA = '\u064e'    # fatha
DAMMA = '\u064f'    # damma
KASRA = '\u0650'    # kasra
SHADDA = '\u0651'   # shadda
SUKUN = '\u0652'    # sukun

TANWEEN = {'\u064b', '\u064c', '\u064d'}
DAGGER_ALIF = '\u0670'
TATWEEL = '\u0640'

DIACRITICS = {FATHA, DAMMA, KASRA, SHADDA, SUKUN, DAGGER_ALIF} | TANWEEN

# Weak letters
WAW = 'و'
YA = 'ي'
ALIF = 'ا'
ALIF_MAQSURA = 'ى'
WEAK_LETTERS = {WAW, YA, ALIF, ALIF_MAQSURA}

# Hollow roots with ي as middle radical; the perfect (باع) shows only alif
HOLLOW_YA_ROOTS = frozenset({
    'بيع', 'سير', 'طير', 'عيش', 'غيب', 'زيد', 'صير', 'ميل',
    'طيب', 'عيب', 'كيل', 'بيت', 'ضيف', 'صيد', 'سيل', 'جيء',
    'شيء', 'ضيع', 'غير', 'لين', 'حيض', 'فيض', 'نيل', 'هيم',
})

# Hamza forms
HAMZA = 'أ'
HAMZA_FORMS = {'ء', 'أ', 'إ', 'ؤ', 'ئ', 'آ'}

ROOT_SEPARATORS = {'-', ' ', TATWEEL, '\u200c', '\u200f'}

RootLike = Union[str, Sequence[str]]


def is_hamza(char: str) -> bool:
    """Check if character is any form of hamza."""
    return char in HAMZA_FORMS


def is_weak(char: str) -> bool:
    """Check if character is a weak letter (و، ي، ا، ى)."""
    return char in WEAK_LETTERS


def is_waw(char: str) -> bool:
    return char == WAW


def is_ya(char: str) -> bool:
    """Check if character is ya or alif maqsura."""
    return char in {YA, ALIF_MAQSURA}


def strip_diacritics(text: str) -> str:
    """Remove short vowels, shadda, sukun, tanween and tatweel."""
    return ''.join(ch for ch in text if ch not in DIACRITICS and ch != TATWEEL)


def split_clusters(text: str) -> List[Tuple[str, str]]:
    """
    Split vocalised text into (letter, marks) pairs.

    Marks before the first letter are dropped; separators and tatweel are
    skipped.

        split_clusters("عَلَّمَ") -> [('ع', 'َ'), ('ل', 'َّ'), ('م', 'َ')]
    """
    clusters: List[Tuple[str, str]] = []
    for ch in text:
        if ch in DIACRITICS:
            if clusters:
                letter, marks = clusters[-1]
                clusters[-1] = (letter, marks + ch)
        elif ch in ROOT_SEPARATORS or ch.isspace():
            continue
        else:
            clusters.append((ch, ''))
    return clusters


def normalize_root(root: RootLike) -> str:
    """
    Normalize a root:
    - Accept a string ("كتب", "ك-ت-ب") or a sequence of letters
    - Remove dashes, spaces, tatweel
    - Remove diacritics (tashkeel)
    """
    if not isinstance(root, str):
        root = ''.join(root)
    return ''.join(letter for letter, _ in split_clusters(root))


def root_letters(root: RootLike) -> List[str]:
    """
    Normalize a root and return its three radicals.

    Raises:
        NonTriliteralRootError: if the root is not exactly three letters
    """
    letters = list(normalize_root(root))
    if len(letters) != 3:
        raise NonTriliteralRootError(root, letters)
    return letters


# ============================================
# ROOT CLASSIFICATION
# ============================================

class RootType(Enum):
    """Arabic triliteral verb root types."""
    SOUND = auto()                    # صحيح سالم (e.g., كتب، علم)

    HAMZATED_FIRST = auto()           # مهموز الفاء (e.g., أخذ، أكل)
    HAMZATED_MIDDLE = auto()          # مهموز العين (e.g., سأل)
    HAMZATED_LAST = auto()            # مهموز اللام (e.g., قرأ)

    DOUBLED = auto()                  # مضعّف (e.g., شدّ، مدّ، ردّ)

    ASSIMILATED_WAW = auto()          # مثال واوي (e.g., وجد، وصل)
    ASSIMILATED_YA = auto()           # مثال يائي (e.g., يسر)
    HOLLOW_WAW = auto()               # أجوف واوي (e.g., قول، نوم)
    HOLLOW_YA = auto()                # أجوف يائي (e.g., سير، بيع)
    DEFECTIVE_WAW = auto()            # ناقص واوي (e.g., دعو، غزو)
    DEFECTIVE_YA = auto()             # ناقص يائي (e.g., رمي، بني)

    DOUBLE_WEAK_SEPARATED = auto()    # لفيف مفروق (e.g., وقي، وفي)
    DOUBLE_WEAK_ADJACENT = auto()     # لفيف مقرون (e.g., روي، طوي)


ROOT_TYPE_NAMES = {
    RootType.SOUND: ("صحيح سالم", "Sound"),
    RootType.HAMZATED_FIRST: ("مهموز الفاء", "Hamzated (First)"),
    RootType.HAMZATED_MIDDLE: ("مهموز العين", "Hamzated (Middle)"),
    RootType.HAMZATED_LAST: ("مهموز اللام", "Hamzated (Last)"),
    RootType.DOUBLED: ("مضعّف", "Doubled"),
    RootType.ASSIMILATED_WAW: ("مثال واوي", "Assimilated (Waw)"),
    RootType.ASSIMILATED_YA: ("مثال يائي", "Assimilated (Ya)"),
    RootType.HOLLOW_WAW: ("أجوف واوي", "Hollow (Waw)"),
    RootType.HOLLOW_YA: ("أجوف يائي", "Hollow (Ya)"),
    RootType.DEFECTIVE_WAW: ("ناقص واوي", "Defective (Waw)"),
    RootType.DEFECTIVE_YA: ("ناقص يائي", "Defective (Ya)"),
    RootType.DOUBLE_WEAK_SEPARATED: ("لفيف مفروق", "Doubly Weak (Separated)"),
    RootType.DOUBLE_WEAK_ADJACENT: ("لفيف مقرون", "Doubly Weak (Adjacent)"),
}


class Irregularity(str, Enum):
    """Irregularity classes that trigger phonological overlays."""
    HOLLOW = "hollow"
    DEFECTIVE = "defective"
    DOUBLED = "doubled"


# Overlay application order; later classes win on shared cells
IRREGULARITY_ORDER = (Irregularity.HOLLOW, Irregularity.DEFECTIVE, Irregularity.DOUBLED)
IRREGULARITY_TAGS = frozenset(i.value for i in Irregularity)


@dataclass(frozen=True)
class RootInfo:
    """Information about a classified root."""
    root: str
    letters: Tuple[str, str, str]
    root_type: RootType
    weak_positions: Tuple[int, ...]   # 0-indexed positions of weak letters
    hamza_positions: Tuple[int, ...]  # 0-indexed positions of hamza

    @property
    def type_name_ar(self) -> str:
        return ROOT_TYPE_NAMES[self.root_type][0]

    @property
    def type_name_en(self) -> str:
        return ROOT_TYPE_NAMES[self.root_type][1]


def _root_type(letters: List[str], weak: List[int], hamza: List[int]) -> RootType:
    fa, ain, lam = letters

    if ain == lam and not is_weak(ain):
        return RootType.DOUBLED

    if len(weak) >= 2:
        if 0 in weak and 2 in weak:
            return RootType.DOUBLE_WEAK_SEPARATED
        if 1 in weak and 2 in weak:
            return RootType.DOUBLE_WEAK_ADJACENT

    if len(weak) == 1:
        pos = weak[0]
        waw = is_waw(letters[pos])
        if pos == 0:
            return RootType.ASSIMILATED_WAW if waw else RootType.ASSIMILATED_YA
        if pos == 1:
            return RootType.HOLLOW_WAW if waw else RootType.HOLLOW_YA
        return RootType.DEFECTIVE_WAW if waw else RootType.DEFECTIVE_YA

    if hamza:
        return (RootType.HAMZATED_FIRST, RootType.HAMZATED_MIDDLE,
                RootType.HAMZATED_LAST)[hamza[0]]

    return RootType.SOUND


def classify_root(root: RootLike) -> RootInfo:
    """
    Classify an Arabic triliteral verb root by its type.

    Args:
        root: The root string (e.g., "كتب", "ك-ت-ب", "قول")

    Returns:
        RootInfo with classification details

    Raises:
        NonTriliteralRootError: if the root is not exactly three letters
    """
    letters = root_letters(root)
    weak = [i for i, letter in enumerate(letters) if is_weak(letter)]
    hamza = [i for i, letter in enumerate(letters) if is_hamza(letter)]

    return RootInfo(
        root=''.join(letters),
        letters=tuple(letters),
        root_type=_root_type(letters, weak, hamza),
        weak_positions=tuple(weak),
        hamza_positions=tuple(hamza),
    )


_TYPE_IRREGULARITIES = {
    RootType.HOLLOW_WAW: [Irregularity.HOLLOW],
    RootType.HOLLOW_YA: [Irregularity.HOLLOW],
    RootType.DEFECTIVE_WAW: [Irregularity.DEFECTIVE],
    RootType.DEFECTIVE_YA: [Irregularity.DEFECTIVE],
    RootType.DOUBLE_WEAK_SEPARATED: [Irregularity.DEFECTIVE],
    RootType.DOUBLE_WEAK_ADJACENT: [Irregularity.DEFECTIVE],
    RootType.DOUBLED: [Irregularity.DOUBLED],
}


def detect_irregularities(root: RootLike) -> List[str]:
    """
    Suggest irregularity tags for a root from its letters.

    Doubly weak roots only report the defective class: their weak medial
    radical behaves as a consonant (رَوَى، طَوَى).
    """
    info = classify_root(root)
    return [tag.value for tag in _TYPE_IRREGULARITIES.get(info.root_type, [])]
