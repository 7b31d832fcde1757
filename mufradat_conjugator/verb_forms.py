#!/usr/bin/env python3
"""
Arabic Verb Forms (أوزان الفعل)

The 10 derived forms of the Arabic triliteral verb:
Form I   (فَعَلَ)      - Basic meaning
Form II  (فَعَّلَ)     - Intensive, causative, denominative
Form III (فَاعَلَ)     - Reciprocal, attempt
Form IV  (أَفْعَلَ)    - Causative, transitive
Form V   (تَفَعَّلَ)   - Reflexive of II, gradual
Form VI  (تَفَاعَلَ)   - Reciprocal reflexive, pretense
Form VII (انْفَعَلَ)   - Passive, reflexive, inchoative
Form VIII (افْتَعَلَ)  - Reflexive, middle voice
Form IX  (افْعَلَّ)    - Colors and physical defects (rare)
Form X   (اسْتَفْعَلَ) - Requestative, considerative

The catalog is built once at import time and exposed through a read-only
mapping keyed by pattern id ("form1".."form10") in that order.
"""

from enum import Enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import PatternNotFoundError
from .root_types import (
    FATHA, DAMMA, KASRA, RootLike, is_ya, normalize_root
)


class VerbForm(Enum):
    """Arabic verb forms I-X."""
    I = 1
    II = 2
    III = 3
    IV = 4
    V = 5
    VI = 6
    VII = 7
    VIII = 8
    IX = 9
    X = 10

    @property
    def pattern_id(self) -> str:
        return f"form{self.value}"


@dataclass(frozen=True)
class FormPattern:
    """Catalog entry for a verb form."""
    pattern_id: str
    form: VerbForm
    name: str
    pattern: str             # Canonical template, ف-ع-ل as the root letters
    description: str
    examples: Tuple[str, ...]
    present_pattern: str     # المضارع
    active_participle: str   # اسم الفاعل
    passive_participle: str  # اسم المفعول ("—" when the form has none)
    verbal_nouns: Tuple[str, ...]  # مصدر

    def to_dict(self) -> Dict[str, object]:
        """Wire shape of a catalog lookup."""
        return {
            'name': self.name,
            'pattern': self.pattern,
            'description': self.description,
            'examples': list(self.examples),
        }


def _entry(form: VerbForm, name: str, pattern: str, description: str,
           examples: List[str], present: str, active: str, passive: str,
           verbal_nouns: List[str]) -> FormPattern:
    return FormPattern(
        pattern_id=form.pattern_id,
        form=form,
        name=name,
        pattern=pattern,
        description=description,
        examples=tuple(examples),
        present_pattern=present,
        active_participle=active,
        passive_participle=passive,
        verbal_nouns=tuple(verbal_nouns),
    )


_FORMS: List[FormPattern] = [
    _entry(VerbForm.I, 'Form I (فَعَلَ)', 'فَعَلَ',
           'Basic triliteral verb form',
           ['كَتَبَ', 'قَرَأَ', 'ذَهَبَ'],
           'يَفْعُلُ', 'فَاعِل', 'مَفْعُول',
           ['فَعْل', 'فِعَال', 'فُعُول', 'فَعَلَان']),

    _entry(VerbForm.II, 'Form II (فَعَّلَ)', 'فَعَّلَ',
           'Intensive/causative form with doubled middle radical',
           ['عَلَّمَ', 'كَبَّرَ', 'قَدَّسَ'],
           'يُفَعِّلُ', 'مُفَعِّل', 'مُفَعَّل',
           ['تَفْعِيل', 'تَفْعِلَة']),

    _entry(VerbForm.III, 'Form III (فَاعَلَ)', 'فَاعَلَ',
           'Form with alif after first radical',
           ['جَاهَدَ', 'قَاتَلَ', 'سَافَرَ'],
           'يُفَاعِلُ', 'مُفَاعِل', 'مُفَاعَل',
           ['مُفَاعَلَة', 'فِعَال']),

    _entry(VerbForm.IV, 'Form IV (أَفْعَلَ)', 'أَفْعَلَ',
           'Causative form with hamza prefix',
           ['أَرْسَلَ', 'أَنْزَلَ', 'أَكْرَمَ'],
           'يُفْعِلُ', 'مُفْعِل', 'مُفْعَل',
           ['إِفْعَال']),

    _entry(VerbForm.V, 'Form V (تَفَعَّلَ)', 'تَفَعَّلَ',
           'Reflexive of Form II',
           ['تَعَلَّمَ', 'تَكَبَّرَ', 'تَقَدَّسَ'],
           'يَتَفَعَّلُ', 'مُتَفَعِّل', 'مُتَفَعَّل',
           ['تَفَعُّل']),

    _entry(VerbForm.VI, 'Form VI (تَفَاعَلَ)', 'تَفَاعَلَ',
           'Reciprocal form',
           ['تَجَاهَدَ', 'تَقَاتَلَ', 'تَسَافَرَ'],
           'يَتَفَاعَلُ', 'مُتَفَاعِل', 'مُتَفَاعَل',
           ['تَفَاعُل']),

    _entry(VerbForm.VII, 'Form VII (انْفَعَلَ)', 'انْفَعَلَ',
           'Passive/reflexive form',
           ['انْكَسَرَ', 'انْقَطَعَ', 'انْفَتَحَ'],
           'يَنْفَعِلُ', 'مُنْفَعِل', '—',
           ['انْفِعَال']),

    _entry(VerbForm.VIII, 'Form VIII (افْتَعَلَ)', 'افْتَعَلَ',
           'Reflexive form with ta infix',
           ['اجْتَمَعَ', 'اخْتَارَ', 'افْتَرَقَ'],
           'يَفْتَعِلُ', 'مُفْتَعِل', 'مُفْتَعَل',
           ['افْتِعَال']),

    _entry(VerbForm.IX, 'Form IX (افْعَلَّ)', 'افْعَلَّ',
           'Form for colors and defects',
           ['احْمَرَّ', 'اصْفَرَّ', 'اخْضَرَّ'],
           'يَفْعَلُّ', 'مُفْعَلّ', '—',
           ['افْعِلَال']),

    _entry(VerbForm.X, 'Form X (اسْتَفْعَلَ)', 'اسْتَفْعَلَ',
           'Seeking/requesting form',
           ['اسْتَغْفَرَ', 'اسْتَكْبَرَ', 'اسْتَقْبَلَ'],
           'يَسْتَفْعِلُ', 'مُسْتَفْعِل', 'مُسْتَفْعَل',
           ['اسْتِفْعَال']),
]

# Read-only view; dicts keep insertion order, so iteration is form1..form10
PATTERN_CATALOG: Mapping[str, FormPattern] = MappingProxyType(
    {entry.pattern_id: entry for entry in _FORMS}
)
PATTERN_IDS: Tuple[str, ...] = tuple(PATTERN_CATALOG)

del _FORMS


def get_pattern_info(pattern_id) -> Optional[FormPattern]:
    """
    Look up a verb form by id.

    Returns None for anything that is not one of "form1".."form10";
    an unknown pattern is a normal, displayable condition.
    """
    if not isinstance(pattern_id, str):
        return None
    return PATTERN_CATALOG.get(pattern_id)


def require_pattern(pattern_id) -> FormPattern:
    """Look up a verb form, raising PatternNotFoundError when it is unknown."""
    entry = get_pattern_info(pattern_id)
    if entry is None:
        raise PatternNotFoundError(pattern_id)
    return entry


def list_patterns() -> List[FormPattern]:
    """List all verb form patterns in catalog order."""
    return list(PATTERN_CATALOG.values())


# ============================================
# FORM I VOWEL PATTERNS
# ============================================

# Form I has variable vowel patterns in past and present.
# Values are (past middle vowel, present middle vowel).

class FormIVowelClass(Enum):
    """Form I vowel patterns (past-present)."""
    FA_AL_A = (FATHA, FATHA)    # فَعَلَ - يَفْعَلُ (e.g., فَتَحَ - يَفْتَحُ)
    FA_AL_I = (FATHA, KASRA)    # فَعَلَ - يَفْعِلُ (e.g., ضَرَبَ - يَضْرِبُ)
    FA_AL_U = (FATHA, DAMMA)    # فَعَلَ - يَفْعُلُ (e.g., نَصَرَ - يَنْصُرُ)
    FA_IL_A = (KASRA, FATHA)    # فَعِلَ - يَفْعَلُ (e.g., عَلِمَ - يَعْلَمُ)
    FA_UL_U = (DAMMA, DAMMA)    # فَعُلَ - يَفْعُلُ (e.g., كَرُمَ - يَكْرُمُ)

    @property
    def past_vowel(self) -> str:
        return self.value[0]

    @property
    def present_vowel(self) -> str:
        return self.value[1]


# Common Form I patterns for specific roots
FORM_I_PATTERNS: Mapping[str, FormIVowelClass] = MappingProxyType({
    # a-a pattern (فَعَلَ - يَفْعَلُ)
    'فتح': FormIVowelClass.FA_AL_A,
    'منع': FormIVowelClass.FA_AL_A,
    'قطع': FormIVowelClass.FA_AL_A,
    'ذهب': FormIVowelClass.FA_AL_A,
    'قرأ': FormIVowelClass.FA_AL_A,
    'سأل': FormIVowelClass.FA_AL_A,

    # a-i pattern (فَعَلَ - يَفْعِلُ)
    'ضرب': FormIVowelClass.FA_AL_I,
    'جلس': FormIVowelClass.FA_AL_I,
    'نزل': FormIVowelClass.FA_AL_I,
    'رجع': FormIVowelClass.FA_AL_I,
    'عرف': FormIVowelClass.FA_AL_I,
    'فرر': FormIVowelClass.FA_AL_I,

    # a-u pattern (فَعَلَ - يَفْعُلُ)
    'كتب': FormIVowelClass.FA_AL_U,
    'نصر': FormIVowelClass.FA_AL_U,
    'قتل': FormIVowelClass.FA_AL_U,
    'دخل': FormIVowelClass.FA_AL_U,
    'خرج': FormIVowelClass.FA_AL_U,

    # i-a pattern (فَعِلَ - يَفْعَلُ)
    'علم': FormIVowelClass.FA_IL_A,
    'فهم': FormIVowelClass.FA_IL_A,
    'شرب': FormIVowelClass.FA_IL_A,
    'سمع': FormIVowelClass.FA_IL_A,
    'نوم': FormIVowelClass.FA_IL_A,
    'خوف': FormIVowelClass.FA_IL_A,
    'نسي': FormIVowelClass.FA_IL_A,
    'رضي': FormIVowelClass.FA_IL_A,
    'بقي': FormIVowelClass.FA_IL_A,
    'خشي': FormIVowelClass.FA_IL_A,
    'شمم': FormIVowelClass.FA_IL_A,

    # u-u pattern (فَعُلَ - يَفْعُلُ) - stative verbs
    'كرم': FormIVowelClass.FA_UL_U,
    'حسن': FormIVowelClass.FA_UL_U,
    'كبر': FormIVowelClass.FA_UL_U,
})


def form_i_vowel_class(root: RootLike) -> FormIVowelClass:
    """
    Vowel class of a Form I verb.

    Known roots come from FORM_I_PATTERNS. Otherwise roots with a ya in
    second or third position take a-i (بَاعَ يَبِيعُ، رَمَى يَرْمِي) and
    everything else takes a-u (كَتَبَ يَكْتُبُ).
    """
    key = normalize_root(root)
    if key in FORM_I_PATTERNS:
        return FORM_I_PATTERNS[key]
    if len(key) == 3 and (is_ya(key[1]) or is_ya(key[2])):
        return FormIVowelClass.FA_AL_I
    return FormIVowelClass.FA_AL_U


# ============================================
# TESTING
# ============================================

if __name__ == '__main__':
    print("="*70)
    print("ARABIC VERB FORMS (أوزان الفعل)")
    print("="*70)

    for entry in list_patterns():
        print(f"\n{entry.name} [{entry.pattern_id}]:")
        print(f"  Past:    {entry.pattern}")
        print(f"  Present: {entry.present_pattern}")
        print(f"  Active:  {entry.active_participle}")
        print(f"  Passive: {entry.passive_participle}")
        print(f"  Masdar:  {', '.join(entry.verbal_nouns)}")
        print(f"  Meaning: {entry.description}")
