#!/usr/bin/env python3
"""
Tests for the regular paradigm generator and the ConjugationForms container.
"""

import pytest

from mufradat_conjugator.conjugator import ArabicConjugator, generate_conjugations
from mufradat_conjugator.errors import NonTriliteralRootError, PatternNotFoundError
from mufradat_conjugator.paradigms import (
    VALID_CELLS, ConjugationForms, Gender, Number, Person, Tense, is_valid_cell
)
from mufradat_conjugator.root_types import (
    FATHA, DAMMA, KASRA, SHADDA, SUKUN, strip_diacritics
)
from mufradat_conjugator.verb_forms import PATTERN_IDS


def is_subsequence(needle, haystack):
    it = iter(haystack)
    return all(ch in it for ch in needle)


ROOTS = ["كتب", "علم", "رسل", "غفر", "قتل", "حمر", "قول", "رمي", "مدد"]


# ============================================
# CONCRETE FORMS
# ============================================

def test_kataba_form_i():
    forms = generate_conjugations("كتب", "form1")
    assert forms.get("perfect", "3rd", "singular", "masculine") == "كَتَبَ"
    assert forms.get("imperfect", "3rd", "singular", "masculine") == "يَكْتُبُ"
    assert forms.get("imperative", "2nd", "singular", "masculine") == "اُكْتُبْ"


@pytest.mark.parametrize("person, number, gender, expected", [
    ("3rd", "singular", "feminine", "كَتَبَتْ"),
    ("3rd", "plural", "masculine", "كَتَبُوا"),
    ("3rd", "plural", "feminine", "كَتَبْنَ"),
    ("2nd", "singular", "masculine", "كَتَبْتَ"),
    ("1st", "singular", "common", "كَتَبْتُ"),
    ("1st", "plural", "common", "كَتَبْنَا"),
])
def test_kataba_perfect_cells(person, number, gender, expected):
    forms = generate_conjugations("كتب", "form1")
    assert forms.get("perfect", person, number, gender) == expected


def test_kataba_imperfect_cells():
    forms = generate_conjugations("كتب", "form1")
    assert forms.get("imperfect", "3rd", "plural", "masculine") == "يَكْتُبُونَ"
    assert forms.get("imperfect", "2nd", "singular", "feminine") == "تَكْتُبِينَ"
    assert forms.get("imperfect", "1st", "singular", "common") == "أَكْتُبُ"


def test_form_i_vowel_class_shapes_the_stem():
    forms = generate_conjugations("علم", "form1")
    # عَلِمَ يَعْلَمُ اِعْلَمْ
    assert forms.get("perfect", "3rd", "singular", "masculine") == "عَلِمَ"
    assert forms.get("imperfect", "3rd", "singular", "masculine") == "يَعْلَمُ"
    assert forms.get("imperative", "2nd", "singular", "masculine") == "اِعْلَمْ"


def test_allama_form_ii_has_shadda_on_the_middle_radical():
    forms = generate_conjugations("علم", "form2")
    perfect = forms.get("perfect", "3rd", "singular", "masculine")
    assert "ل" + SHADDA in perfect
    assert perfect == "ع" + FATHA + "ل" + SHADDA + FATHA + "م" + FATHA
    # Forms II-IV take damma on the imperfect prefix: يُعَلِّمُ
    imperfect = forms.get("imperfect", "3rd", "singular", "masculine")
    assert imperfect == "ي" + DAMMA + "ع" + FATHA + "ل" + SHADDA + KASRA + "م" + DAMMA


def test_arsala_form_iv_starts_with_hamza():
    forms = generate_conjugations("رسل", "form4")
    perfect = forms.get("perfect", "3rd", "singular", "masculine")
    assert perfect.startswith("أ")
    assert forms.get("imperative", "2nd", "singular", "masculine").startswith("أ")


def test_form_ix_geminates_the_final_radical():
    forms = generate_conjugations("حمر", "form9")
    # احْمَرَّ
    assert forms.get("perfect", "3rd", "singular", "masculine") == (
        "ا" + "ح" + SUKUN + "م" + FATHA + "ر" + SHADDA + FATHA)
    # احْمَرَرْتُ: separated before a consonant suffix
    assert forms.get("perfect", "1st", "singular", "common") == (
        "ا" + "ح" + SUKUN + "م" + FATHA + "ر" + FATHA + "ر" + SUKUN + "ت" + DAMMA)
    # احْمَرَّ, never a sukun on the geminate
    imperative = forms.get("imperative", "2nd", "singular", "masculine")
    assert imperative.endswith("ر" + SHADDA + FATHA)


@pytest.mark.parametrize("gender_number, expected", [
    # اِحْمَرَّ
    (("singular", "masculine"), "ا" + KASRA + "ح" + SUKUN + "م" + FATHA + "ر" + SHADDA + FATHA),
    # اِحْمَرِّي
    (("singular", "feminine"), "ا" + KASRA + "ح" + SUKUN + "م" + FATHA + "ر" + SHADDA + KASRA + "ي"),
    # اِحْمَرِرْنَ
    (("plural", "feminine"), "ا" + KASRA + "ح" + SUKUN + "م" + FATHA + "ر" + KASRA + "ر" + SUKUN + "ن" + FATHA),
])
def test_form_ix_imperative(gender_number, expected):
    number, gender = gender_number
    forms = generate_conjugations("حمر", "form9")
    assert forms.get("imperative", "2nd", number, gender) == expected


def test_form_x_istaghfara():
    forms = generate_conjugations("غفر", "form10")
    assert forms.get("perfect", "3rd", "singular", "masculine") == (
        "ا" + "س" + SUKUN + "ت" + FATHA + "غ" + SUKUN + "ف" + FATHA + "ر" + FATHA)
    assert forms.get("imperfect", "3rd", "singular", "masculine") == (
        "ي" + FATHA + "س" + SUKUN + "ت" + FATHA + "غ" + SUKUN + "ف" + KASRA + "ر" + DAMMA)


# ============================================
# INVARIANTS
# ============================================

@pytest.mark.parametrize("pattern_id", PATTERN_IDS)
def test_grid_shape(pattern_id):
    forms = generate_conjugations("كتب", pattern_id)
    assert len(forms) == len(VALID_CELLS) == 31
    assert forms.tenses() == [Tense.PERFECT, Tense.IMPERFECT, Tense.IMPERATIVE]
    assert forms.failed_cells() == []

    imperative_persons = {key[1] for key, _ in forms.cells() if key[0] == Tense.IMPERATIVE}
    assert imperative_persons == {Person.SECOND}
    assert forms.get("imperative", "1st", "singular", "common") is None


@pytest.mark.parametrize("root", ROOTS)
@pytest.mark.parametrize("pattern_id", PATTERN_IDS)
def test_root_letters_survive_in_order(root, pattern_id):
    forms = generate_conjugations(root, pattern_id)
    for key, surface in forms.cells():
        assert is_subsequence(root, strip_diacritics(surface)), (key, surface)


@pytest.mark.parametrize("root", ROOTS)
def test_form_i_citation_skeleton_is_the_root(root):
    forms = generate_conjugations(root, "form1")
    citation = forms.get("perfect", "3rd", "singular", "masculine")
    assert strip_diacritics(citation) == root


def test_root_can_be_given_as_letters_or_with_separators():
    expected = generate_conjugations("كتب")
    assert generate_conjugations(["ك", "ت", "ب"]) == expected
    assert generate_conjugations("ك-ت-ب") == expected
    assert generate_conjugations("كَتَبَ") == expected


@pytest.mark.parametrize("root", ["كت", "دحرج", "", "ك"])
def test_non_triliteral_roots_are_rejected(root):
    with pytest.raises(NonTriliteralRootError):
        generate_conjugations(root, "form1")


@pytest.mark.parametrize("pattern_id", ["form0", "form11", "", None, "I"])
def test_unknown_pattern_is_rejected(pattern_id):
    with pytest.raises(PatternNotFoundError):
        generate_conjugations("كتب", pattern_id)


def test_root_is_checked_before_pattern():
    with pytest.raises(NonTriliteralRootError):
        generate_conjugations("كت", "form99")


def test_generation_is_deterministic():
    assert generate_conjugations("قتل", "form3") == generate_conjugations("قتل", "form3")


# ============================================
# FLAT VIEWS
# ============================================

def test_conjugate_root_labels():
    conjugator = ArabicConjugator()
    forms = conjugator.conjugate_root("كتب", "form1")

    assert len(forms) == 31
    first = forms[0]
    assert first.label == "3ms.perfect"
    assert first.form == "كَتَبَ"
    assert first.root == "كتب"
    assert first.pattern_id == "form1"


def test_conjugate_root_filters_tenses():
    conjugator = ArabicConjugator()
    forms = conjugator.conjugate_root("كتب", "form1", tenses=["imperative"])
    assert [f.label for f in forms] == [
        "2ms.imperative", "2fs.imperative", "2d.imperative",
        "2mp.imperative", "2fp.imperative",
    ]


def test_get_all_forms():
    all_forms = ArabicConjugator().get_all_forms("كتب", "form1")
    assert all_forms["3ms.perfect"] == "كَتَبَ"
    assert all_forms["3ms.imperfect"] == "يَكْتُبُ"
    assert len(all_forms) == 31


# ============================================
# CONTAINER
# ============================================

def test_missing_cell_is_not_an_empty_string():
    forms = ConjugationForms()
    forms.set("perfect", "3rd", "singular", "masculine", "")

    assert forms.get("perfect", "3rd", "singular", "masculine") == ""
    assert forms.get("perfect", "3rd", "singular", "feminine") is None
    assert forms.failed_cells() == [
        (Tense.PERFECT, Person.THIRD, Number.SINGULAR, Gender.MASCULINE)]


def test_set_rejects_cells_outside_the_paradigm():
    forms = ConjugationForms()
    with pytest.raises(ValueError):
        forms.set("imperative", "1st", "singular", "common", "x")
    with pytest.raises(ValueError):
        forms.set("past", "3rd", "singular", "masculine", "x")
    with pytest.raises(TypeError):
        forms.set("perfect", "3rd", "singular", "masculine", 5)

    assert not is_valid_cell("imperative", "3rd", "singular", "masculine")
    assert is_valid_cell("imperative", "2nd", "dual", "common")


def test_merge_replaces_only_overlay_cells():
    base = generate_conjugations("كتب", "form1")
    overlay = ConjugationForms()
    overlay.set("perfect", "3rd", "singular", "masculine", "X")

    merged = base.merge(overlay)

    assert merged.get("perfect", "3rd", "singular", "masculine") == "X"
    assert merged.get("imperfect", "3rd", "singular", "masculine") == "يَكْتُبُ"
    # Neither input is modified
    assert base.get("perfect", "3rd", "singular", "masculine") == "كَتَبَ"
    assert len(overlay) == 1


def test_wire_shape():
    forms = generate_conjugations("كتب", "form1")
    data = forms.to_dict()

    assert set(data) == {"perfect", "imperfect", "imperative"}
    assert data["perfect"]["3rd"]["singular"]["masculine"] == "كَتَبَ"
    assert set(data["imperative"]) == {"2nd"}
    assert ConjugationForms.from_dict(data) == forms


def test_from_dict_rejects_unknown_axis_keys():
    with pytest.raises(ValueError):
        ConjugationForms.from_dict({"past": {"3rd": {"singular": {"masculine": "x"}}}})


def test_empty_container_is_falsy():
    assert not ConjugationForms()
    assert len(ConjugationForms()) == 0
