#!/usr/bin/env python3
"""
Tests for the pattern catalog and Form I vowel classes.
"""

import pytest

from mufradat_conjugator.errors import PatternNotFoundError
from mufradat_conjugator.root_types import SHADDA, strip_diacritics
from mufradat_conjugator.verb_forms import (
    PATTERN_CATALOG, PATTERN_IDS, FormIVowelClass, VerbForm,
    form_i_vowel_class, get_pattern_info, list_patterns, require_pattern
)


# (pattern_id, roman numeral, consonant skeleton of the template)
CATALOG_CASES = [
    ("form1", "I", "فعل"),
    ("form2", "II", "فعل"),
    ("form3", "III", "فاعل"),
    ("form4", "IV", "أفعل"),
    ("form5", "V", "تفعل"),
    ("form6", "VI", "تفاعل"),
    ("form7", "VII", "انفعل"),
    ("form8", "VIII", "افتعل"),
    ("form9", "IX", "افعل"),
    ("form10", "X", "استفعل"),
]


@pytest.mark.parametrize("pattern_id, roman, skeleton", CATALOG_CASES)
def test_every_form_is_in_the_catalog(pattern_id, roman, skeleton):
    entry = get_pattern_info(pattern_id)

    assert entry is not None
    assert entry.pattern_id == pattern_id
    assert entry.form == VerbForm[roman]
    assert entry.name == f"Form {roman} ({entry.pattern})"
    assert strip_diacritics(entry.pattern) == skeleton
    assert entry.description
    assert len(entry.examples) >= 1


def test_form_i_entry_verbatim():
    entry = get_pattern_info("form1")
    assert entry.name == "Form I (فَعَلَ)"
    assert entry.pattern == "فَعَلَ"
    assert "كَتَبَ" in entry.examples


def test_form_ii_template_doubles_the_middle_radical():
    assert SHADDA in get_pattern_info("form2").pattern
    assert SHADDA in get_pattern_info("form5").pattern


@pytest.mark.parametrize("pattern_id", [
    "form0", "form11", "FORM1", "Form I", "", " form1", None, 1, ["form1"],
])
def test_unknown_pattern_is_absent_not_an_error(pattern_id):
    assert get_pattern_info(pattern_id) is None


def test_require_pattern_raises_for_unknown_ids():
    with pytest.raises(PatternNotFoundError) as excinfo:
        require_pattern("form42")
    assert excinfo.value.pattern_id == "form42"
    # Callers that only know about KeyError still catch it
    assert isinstance(excinfo.value, KeyError)
    assert "form42" in str(excinfo.value)


def test_listing_order_is_stable():
    expected = tuple(f"form{n}" for n in range(1, 11))
    assert PATTERN_IDS == expected
    assert tuple(entry.pattern_id for entry in list_patterns()) == expected
    assert tuple(PATTERN_CATALOG) == expected


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        PATTERN_CATALOG["form11"] = PATTERN_CATALOG["form1"]


def test_to_dict_wire_shape():
    data = get_pattern_info("form10").to_dict()
    assert set(data) == {"name", "pattern", "description", "examples"}
    assert isinstance(data["examples"], list)
    assert data["pattern"] == get_pattern_info("form10").pattern


def test_verb_form_pattern_ids():
    assert VerbForm.I.pattern_id == "form1"
    assert VerbForm.X.pattern_id == "form10"


@pytest.mark.parametrize("root, expected", [
    ("كتب", FormIVowelClass.FA_AL_U),   # كَتَبَ يَكْتُبُ (lexicon)
    ("علم", FormIVowelClass.FA_IL_A),   # عَلِمَ يَعْلَمُ (lexicon)
    ("فتح", FormIVowelClass.FA_AL_A),   # فَتَحَ يَفْتَحُ (lexicon)
    ("ك-ت-ب", FormIVowelClass.FA_AL_U), # separators ignored
    ("بيع", FormIVowelClass.FA_AL_I),   # ya in second position
    ("رمي", FormIVowelClass.FA_AL_I),   # ya in third position
    ("رسم", FormIVowelClass.FA_AL_U),   # default
])
def test_form_i_vowel_class(root, expected):
    assert form_i_vowel_class(root) == expected
