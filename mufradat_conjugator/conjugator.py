#!/usr/bin/env python3
"""
Arabic Verb Conjugator

Main conjugation engine: takes a triliteral root and one of the ten verb
forms and produces the regular paradigm (perfect, imperfect, imperative).

Each form is described by a FormTemplate whose stems are written with
ف / ع / ل standing for the three radicals. Generation substitutes the root
letters into those slots, in order and unchanged, so stripping the
vowel marks and affix letters from any cell gives back the root.

Weak-root phonology (hollow, defective, doubled) lives in irregular.py as
overlays on top of this regular grid.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .paradigms import (
    PARADIGMS, ConjugationForms, ConjugationSlot,
    Gender, Number, Person, Tense, cell_label
)
from .root_types import (
    FATHA, DAMMA, KASRA, SHADDA, SUKUN, RootLike, root_letters
)
from .verb_forms import (
    FormIVowelClass, VerbForm, form_i_vowel_class, require_pattern
)

logger = logging.getLogger(__name__)

# Radical slots in stem templates
FA, AIN, LAM = 'ف', 'ع', 'ل'


@dataclass(frozen=True)
class FormTemplate:
    """Stem templates for one verb form."""
    perfect_stem: str
    imperfect_prefix_vowel: str
    imperfect_stem: str
    imperative_prefix: str
    # Stems used before consonant-initial suffixes; only Form IX differs
    perfect_stem_consonantal: Optional[str] = None
    imperfect_stem_consonantal: Optional[str] = None
    # Final radical written geminated (Form IX)
    geminate_final: bool = False

    def perfect(self, consonantal: bool) -> str:
        if consonantal and self.perfect_stem_consonantal:
            return self.perfect_stem_consonantal
        return self.perfect_stem

    def imperfect(self, consonantal: bool) -> str:
        if consonantal and self.imperfect_stem_consonantal:
            return self.imperfect_stem_consonantal
        return self.imperfect_stem


@dataclass
class ConjugatedForm:
    """A single conjugated verb form."""
    form: str                    # The conjugated word
    root: str                    # The root
    pattern_id: str              # form1..form10
    tense: Tense
    person: Person
    number: Number
    gender: Gender
    label: str                   # e.g., "3ms.perfect" or "2fp.imperative"


# ============================================
# FORM TEMPLATES
# ============================================

def form_i_template(vowel_class: FormIVowelClass) -> FormTemplate:
    """Form I: فَعَلَ / يَفْعُلُ / اُفْعُلْ with the vowels of the root's class."""
    past, present = vowel_class.past_vowel, vowel_class.present_vowel
    imperfect = FA + SUKUN + AIN + present + LAM                       # ـفْعُلـ
    return FormTemplate(
        perfect_stem=FA + FATHA + AIN + past + LAM,                    # فَعَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem=imperfect,
        # Hamzat al-wasl takes damma before a damma stem vowel (اُكْتُبْ)
        imperative_prefix='ا' + (DAMMA if present == DAMMA else KASRA),
    )


DERIVED_FORM_TEMPLATES: Dict[VerbForm, FormTemplate] = {
    VerbForm.II: FormTemplate(
        perfect_stem=FA + FATHA + AIN + SHADDA + FATHA + LAM,          # فَعَّلـ
        imperfect_prefix_vowel=DAMMA,
        imperfect_stem=FA + FATHA + AIN + SHADDA + KASRA + LAM,        # يُفَعِّلـ
        imperative_prefix='',
    ),
    VerbForm.III: FormTemplate(
        perfect_stem=FA + FATHA + 'ا' + AIN + FATHA + LAM,             # فَاعَلـ
        imperfect_prefix_vowel=DAMMA,
        imperfect_stem=FA + FATHA + 'ا' + AIN + KASRA + LAM,           # يُفَاعِلـ
        imperative_prefix='',
    ),
    VerbForm.IV: FormTemplate(
        perfect_stem='أ' + FATHA + FA + SUKUN + AIN + FATHA + LAM,     # أَفْعَلـ
        imperfect_prefix_vowel=DAMMA,
        imperfect_stem=FA + SUKUN + AIN + KASRA + LAM,                 # يُفْعِلـ
        imperative_prefix='أ' + FATHA,                                 # أَفْعِلْ
    ),
    VerbForm.V: FormTemplate(
        perfect_stem='ت' + FATHA + FA + FATHA + AIN + SHADDA + FATHA + LAM,   # تَفَعَّلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem='ت' + FATHA + FA + FATHA + AIN + SHADDA + FATHA + LAM,
        imperative_prefix='',
    ),
    VerbForm.VI: FormTemplate(
        perfect_stem='ت' + FATHA + FA + FATHA + 'ا' + AIN + FATHA + LAM,      # تَفَاعَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem='ت' + FATHA + FA + FATHA + 'ا' + AIN + FATHA + LAM,
        imperative_prefix='',
    ),
    VerbForm.VII: FormTemplate(
        perfect_stem='ا' + 'ن' + SUKUN + FA + FATHA + AIN + FATHA + LAM,      # انْفَعَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem='ن' + SUKUN + FA + FATHA + AIN + KASRA + LAM,          # يَنْفَعِلـ
        imperative_prefix='ا' + KASRA,
    ),
    VerbForm.VIII: FormTemplate(
        perfect_stem='ا' + FA + SUKUN + 'ت' + FATHA + AIN + FATHA + LAM,      # افْتَعَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem=FA + SUKUN + 'ت' + FATHA + AIN + KASRA + LAM,          # يَفْتَعِلـ
        imperative_prefix='ا' + KASRA,
    ),
    VerbForm.IX: FormTemplate(
        perfect_stem='ا' + FA + SUKUN + AIN + FATHA + LAM + SHADDA,           # افْعَلّـ
        perfect_stem_consonantal='ا' + FA + SUKUN + AIN + FATHA + LAM + FATHA + LAM,  # افْعَلَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem=FA + SUKUN + AIN + FATHA + LAM + SHADDA,               # يَفْعَلّـ
        imperfect_stem_consonantal=FA + SUKUN + AIN + FATHA + LAM + KASRA + LAM,  # يَفْعَلِلـ
        imperative_prefix='ا' + KASRA,
        geminate_final=True,
    ),
    VerbForm.X: FormTemplate(
        perfect_stem='ا' + 'س' + SUKUN + 'ت' + FATHA + FA + SUKUN + AIN + FATHA + LAM,  # اسْتَفْعَلـ
        imperfect_prefix_vowel=FATHA,
        imperfect_stem='س' + SUKUN + 'ت' + FATHA + FA + SUKUN + AIN + KASRA + LAM,      # يَسْتَفْعِلـ
        imperative_prefix='ا' + KASRA,
    ),
}


def fill_template(template: str, letters: Sequence[str]) -> str:
    """Substitute the three radicals into the ف / ع / ل slots of a template."""
    slots = {FA: letters[0], AIN: letters[1], LAM: letters[2]}
    return ''.join(slots.get(ch, ch) for ch in template)


class ArabicConjugator:
    """
    Regular paradigm generator for triliteral roots in forms I-X.

    Stateless: every call is a pure function of (root, pattern).
    """

    def template_for(self, root: RootLike, pattern_id: str = 'form1') -> FormTemplate:
        """Resolve the stem templates for a root in a given form."""
        form = require_pattern(pattern_id).form
        if form == VerbForm.I:
            return form_i_template(form_i_vowel_class(root))
        return DERIVED_FORM_TEMPLATES[form]

    def generate_conjugations(self, root: RootLike, pattern_id: str = 'form1') -> ConjugationForms:
        """
        Generate the full regular paradigm of a root.

        Args:
            root: The triliteral root ("كتب", "ك-ت-ب" or ['ك', 'ت', 'ب'])
            pattern_id: One of "form1".."form10"

        Returns:
            ConjugationForms with perfect, imperfect and imperative grids

        Raises:
            NonTriliteralRootError: if the root is not exactly three letters
            PatternNotFoundError: if pattern_id is not a catalog id
        """
        letters = root_letters(root)
        template = self.template_for(letters, pattern_id)

        forms = ConjugationForms()
        for tense, paradigm in PARADIGMS.items():
            for slot in paradigm.values():
                surface = self._build(tense, slot, template)
                forms.set(tense, slot.person, slot.number, slot.gender,
                          fill_template(surface, letters))

        logger.debug(f"Generated {len(forms)} cells for {''.join(letters)} ({pattern_id})")
        return forms

    def _build(self, tense: Tense, slot: ConjugationSlot, template: FormTemplate) -> str:
        """Assemble one cell as a template string (radicals still as slots)."""
        consonantal = slot.consonantal

        if tense == Tense.PERFECT:
            return template.perfect(consonantal) + slot.suffix

        if tense == Tense.IMPERFECT:
            prefix = slot.prefix + template.imperfect_prefix_vowel
            return prefix + template.imperfect(consonantal) + slot.suffix

        suffix = slot.suffix
        if template.geminate_final and suffix == SUKUN:
            # A geminated final cannot carry sukun: افْعَلَّ not افْعَلّْ
            return template.imperative_prefix + template.imperfect(False) + FATHA
        return template.imperative_prefix + template.imperfect(consonantal) + suffix

    # ============================================
    # FLAT VIEWS
    # ============================================

    def conjugate_root(
        self,
        root: RootLike,
        pattern_id: str = 'form1',
        tenses: Optional[List[Tense]] = None
    ) -> List[ConjugatedForm]:
        """
        Conjugate a root and return one ConjugatedForm per cell.

        Args:
            root: The Arabic root (e.g., "كتب")
            pattern_id: The verb form ("form1".."form10")
            tenses: Which tenses to include (default: all)
        """
        forms = self.generate_conjugations(root, pattern_id)
        wanted = set(Tense(t) for t in tenses) if tenses is not None else set(Tense)
        root_str = ''.join(root_letters(root))

        result = []
        for key, surface in forms.cells():
            tense, person, number, gender = key
            if tense not in wanted:
                continue
            result.append(ConjugatedForm(
                form=surface,
                root=root_str,
                pattern_id=pattern_id,
                tense=tense,
                person=person,
                number=number,
                gender=gender,
                label=cell_label(key),
            ))
        return result

    def get_all_forms(self, root: RootLike, pattern_id: str = 'form1') -> Dict[str, str]:
        """
        Get a dictionary of all conjugated forms for a root.

        Returns:
            Dict mapping labels to forms, e.g., {"3ms.perfect": "كَتَبَ", ...}
        """
        return {f.label: f.form for f in self.conjugate_root(root, pattern_id)}


_conjugator = ArabicConjugator()


def generate_conjugations(root: RootLike, pattern_id: str = 'form1') -> ConjugationForms:
    """Generate the regular paradigm of a root (see ArabicConjugator.generate_conjugations)."""
    return _conjugator.generate_conjugations(root, pattern_id)


# ============================================
# TESTING
# ============================================

if __name__ == '__main__':
    print("="*70)
    print("ARABIC CONJUGATOR TEST")
    print("="*70)

    conjugator = ArabicConjugator()

    test_cases = [
        ("كتب", "form1", "to write"),
        ("علم", "form2", "to teach"),
        ("قتل", "form3", "to fight"),
        ("رسل", "form4", "to send"),
        ("حمر", "form9", "to turn red"),
        ("غفر", "form10", "to ask forgiveness"),
    ]

    for root, pattern_id, meaning in test_cases:
        print(f"\n{'='*50}")
        print(f"Root: {root} ({pattern_id}) - {meaning}")
        print("="*50)
        for label, form in conjugator.get_all_forms(root, pattern_id).items():
            print(f"  {label:18} {form}")
