"""
Arabic Verb Analyzer

Works backwards from a surface verb form:
- Root extraction (strip inflectional affixes and derived-form markers)
- Pattern identification (which of forms I-X a citation form belongs to)

Both operate on letter/diacritic clusters so that shadda survives
affix stripping: مدّوا -> م د د, علّم -> form2.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import NonTriliteralRootError
from .root_types import (
    ALIF, HOLLOW_YA_ROOTS, SHADDA, WAW, YA, RootLike, detect_irregularities, split_clusters
)

logger = logging.getLogger(__name__)

Cluster = Tuple[str, str]

# Derived-form markers, stripped before inflection: Form X, VII,
# hamzat al-wasl, Form IV / 1st person singular hamza
DERIVED_PREFIXES = ['است', 'ان', 'ا', 'أ', 'إ']
HAMZA_PREFIXES = ('أ', 'إ')

# Inflectional endings, longest first
SUFFIXES = ['تما', 'تم', 'تن', 'تا', 'نا', 'وا', 'ون', 'ين', 'ان', 'ات',
            'ت', 'ة', 'ن', 'ا', 'ي']

# Imperfect person markers, plus the Form X remnant after ي/ت/ن
IMPERFECT_PREFIXES = ['ست', 'ي', 'ت', 'ن']

DEFAULT_PATTERN = 'form1'


def _letters(clusters: List[Cluster]) -> str:
    return ''.join(letter for letter, _ in clusters)


def _weight(clusters: List[Cluster]) -> int:
    """Letter count, with a shadda-bearing final letter counted twice."""
    if clusters and SHADDA in clusters[-1][1]:
        return len(clusters) + 1
    return len(clusters)


def _strip_prefixes(clusters: List[Cluster], prefixes: List[str]) -> List[Cluster]:
    stripped = True
    while stripped and _weight(clusters) > 3:
        stripped = False
        word = _letters(clusters)
        for prefix in prefixes:
            if word.startswith(prefix) and _weight(clusters[len(prefix):]) >= 3:
                clusters = clusters[len(prefix):]
                stripped = True
                break
    return clusters


def _strip_suffixes(clusters: List[Cluster]) -> List[Cluster]:
    stripped = True
    while stripped and _weight(clusters) > 3:
        stripped = False
        word = _letters(clusters)
        for suffix in SUFFIXES:
            if word.endswith(suffix) and _weight(clusters[:-len(suffix)]) >= 3:
                clusters = clusters[:-len(suffix)]
                stripped = True
                break
    return clusters


def _strip_infix(clusters: List[Cluster]) -> List[Cluster]:
    """Drop the Form III/VI long alif or the Form VIII ت after the first radical."""
    if len(clusters) == 4 and clusters[1][0] in ('ا', 'ت'):
        return clusters[:1] + clusters[2:]
    return clusters


def _stem_length(word: str) -> int:
    """Letter count once the longest matching inflectional suffix is removed."""
    for suffix in SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 3:
            return len(word) - len(suffix)
    return len(word)


def _restore_hollow(letters: List[str]) -> List[str]:
    """قال -> ق و ل, باع -> ب ي ع: the alif stands for the weak middle radical."""
    if len(letters) == 3 and letters[1] == ALIF:
        as_ya = letters[0] + YA + letters[2]
        letters = [letters[0], YA if as_ya in HOLLOW_YA_ROOTS else WAW, letters[2]]
    return letters


def extract_root_letters(surface_form: RootLike) -> List[str]:
    """
    Recover the three radicals of a surface verb form.

    A bare root comes back unchanged; affixes are only stripped while the
    skeleton is longer than three letters.

        extract_root_letters("يَكْتُبُونَ") -> ['ك', 'ت', 'ب']
        extract_root_letters("استغفر")     -> ['غ', 'ف', 'ر']
        extract_root_letters("مدّ")         -> ['م', 'د', 'د']

    Raises:
        NonTriliteralRootError: if the residue is not exactly three letters
    """
    if not isinstance(surface_form, str):
        surface_form = ''.join(surface_form)
    clusters = split_clusters(surface_form)

    prefixes = DERIVED_PREFIXES
    if _stem_length(_letters(clusters)) <= 3:
        # Initial hamza is a radical here (أكلوا), not the Form IV prefix
        prefixes = [p for p in prefixes if p not in HAMZA_PREFIXES]

    clusters = _strip_prefixes(clusters, prefixes)
    clusters = _strip_suffixes(clusters)
    clusters = _strip_prefixes(clusters, IMPERFECT_PREFIXES)
    clusters = _strip_infix(clusters)

    letters = [letter for letter, _ in clusters]
    if len(clusters) == 2 and SHADDA in clusters[-1][1]:
        # Geminate written once with shadda
        letters.append(letters[-1])
    letters = _restore_hollow(letters)

    if len(letters) != 3:
        raise NonTriliteralRootError(surface_form, letters)

    logger.debug(f"Extracted root {''.join(letters)} from {surface_form}")
    return letters


# ============================================
# PATTERN IDENTIFICATION
# ============================================

def _has_shadda(marks: List[str], index: int) -> bool:
    return index < len(marks) and SHADDA in marks[index]


def identify_pattern(surface_form) -> str:
    """
    Identify the verb form of a citation (perfect 3ms) form.

    Features are checked in a fixed priority order and the first match
    wins; anything unmatched, including empty or non-string input, is
    Form I. Never raises.

    Known ambiguities: the 1st person imperfect (أكتب) reads as Form IV,
    and ن-initial Form VIII verbs (انتقل) are taken as VIII rather than VII
    because VIII is checked first.
    """
    if not isinstance(surface_form, str):
        return DEFAULT_PATTERN

    clusters = split_clusters(surface_form)
    L = [letter for letter, _ in clusters]
    M = [marks for _, marks in clusters]
    n = len(L)
    word = ''.join(L)

    # Form X: است + three radicals
    if word.startswith('است') and n >= 6:
        return 'form10'
    # Form V: تَفَعَّلَ
    if n >= 4 and L[0] == 'ت' and _has_shadda(M, 2):
        return 'form5'
    # Form II: فَعَّلَ
    if n >= 3 and _has_shadda(M, 1):
        return 'form2'
    # Form IX: افْعَلَّ
    if n >= 4 and L[0] in 'اإ' and _has_shadda(M, 3):
        return 'form9'
    # Form VI: تَفَاعَلَ
    if n >= 5 and L[0] == 'ت' and L[2] == 'ا':
        return 'form6'
    # Longer words must still have a four-letter stem under their suffix
    four_letter_stem = n == 4 or (n > 4 and _stem_length(word) >= 4)

    # Form IV: أَفْعَلَ
    if four_letter_stem and L[0] in 'أإ' and not any(_has_shadda(M, i) for i in (1, 2, 3)):
        return 'form4'
    # Form III: فَاعَلَ
    if four_letter_stem and L[1] == 'ا':
        return 'form3'
    # Form VIII: افْتَعَلَ
    if n >= 5 and L[0] in 'اإ' and L[2] == 'ت':
        return 'form8'
    # Form VII: انْفَعَلَ
    if n >= 5 and L[0] in 'اإ' and L[1] == 'ن':
        return 'form7'

    return DEFAULT_PATTERN


@dataclass
class VerbAnalysis:
    """What can be read off a single surface verb form."""
    word: str
    pattern_id: str
    root: Optional[str] = None       # None when no triliteral root was found
    irregularities: List[str] = field(default_factory=list)


def analyze(surface_form: str) -> VerbAnalysis:
    """
    Analyze a surface verb form.

    Usage:
        info = analyze("استغفر")
        print(info.root, info.pattern_id)  # غفر form10
    """
    info = VerbAnalysis(word=surface_form, pattern_id=identify_pattern(surface_form))
    try:
        letters = extract_root_letters(surface_form)
    except NonTriliteralRootError as e:
        logger.debug(f"No root for {surface_form}: {e}")
        return info

    info.root = ''.join(letters)
    info.irregularities = detect_irregularities(letters)
    return info
