#!/usr/bin/env python3
"""
Tests for the conjugation engine facade.
"""

from datetime import datetime

import pytest

from mufradat_conjugator.cache import CacheBackend, ConjugationCache, InMemoryCacheBackend
from mufradat_conjugator.config import ConjugatorConfig
from mufradat_conjugator.conjugator import generate_conjugations
from mufradat_conjugator.engine import ConjugationEngine
from mufradat_conjugator.errors import (
    CacheBackendError, NonTriliteralRootError, PatternNotFoundError,
    RecordValidationError, UnknownIrregularityError
)
from mufradat_conjugator.root_types import FATHA
from mufradat_conjugator.schemas import VerbConjugation


P3MS = ("perfect", "3rd", "singular", "masculine")


class DownBackend(CacheBackend):
    def get(self, key):
        raise CacheBackendError("connection refused")

    def set(self, key, value, ttl=None):
        raise CacheBackendError("connection refused")


@pytest.fixture
def engine():
    config = ConjugatorConfig()
    return ConjugationEngine(ConjugationCache(InMemoryCacheBackend(), config), config)


# ============================================
# CONJUGATE
# ============================================

def test_conjugate_bare_root(engine):
    result = engine.conjugate("كتب")

    assert result.pattern_id == "form1"
    assert result.root_letters == ["ك", "ت", "ب"]
    assert result.root == "كتب"
    assert result.pattern_info.name == "Form I (فَعَلَ)"
    assert result.forms.get(*P3MS) == "كَتَبَ"
    assert result.irregularities == []


def test_conjugate_identifies_pattern_from_surface_form(engine):
    result = engine.conjugate("استغفر")
    assert result.pattern_id == "form10"
    assert result.root == "غفر"
    assert result.forms == generate_conjugations("غفر", "form10")


def test_explicit_pattern_wins(engine):
    result = engine.conjugate("علم", "form2")
    assert result.pattern_id == "form2"
    assert result.forms == generate_conjugations("علم", "form2")


def test_second_request_is_served_from_cache(engine):
    first = engine.conjugate("كتب", "form1")
    second = engine.conjugate("كتب", "form1")

    assert not first.from_cache
    assert second.from_cache
    assert first.forms == second.forms
    assert engine.cache.get_cache_stats()["hits"] >= 1


def test_irregular_overlay_is_applied(engine):
    result = engine.conjugate("قول", irregularities=["hollow"])

    assert result.forms.get(*P3MS) == "ق" + FATHA + "ا" + "ل" + FATHA
    assert result.irregularities == ["hollow"]
    # The generated cache only ever holds the regular paradigm
    cached = engine.cache.get_generated_conjugations("قول", "form1")
    assert cached == generate_conjugations("قول", "form1")


def test_overlays_only_apply_to_form_i(engine):
    result = engine.conjugate("قول", "form2", ["hollow"])
    assert result.forms == generate_conjugations("قول", "form2")


def test_default_pattern_comes_from_config():
    config = ConjugatorConfig(default_pattern="form2")
    engine = ConjugationEngine(ConjugationCache(InMemoryCacheBackend(), config), config)

    assert engine.conjugate("كتب").pattern_id == "form2"
    # An identified pattern is not overridden
    assert engine.conjugate("استغفر").pattern_id == "form10"


@pytest.mark.parametrize("root_form, pattern_id, tags, error", [
    ("كت", None, [], NonTriliteralRootError),
    ("دحرج", None, [], NonTriliteralRootError),
    ("كتب", "form11", [], PatternNotFoundError),
    ("قول", None, ["assimilated"], UnknownIrregularityError),
])
def test_preconditions(engine, root_form, pattern_id, tags, error):
    with pytest.raises(error):
        engine.conjugate(root_form, pattern_id, tags)


def test_cache_outage_falls_back_to_generation():
    engine = ConjugationEngine(ConjugationCache(DownBackend(), ConjugatorConfig()))
    result = engine.conjugate("كتب")

    assert result.forms.get(*P3MS) == "كَتَبَ"
    assert not result.from_cache


def test_result_wire_shape(engine):
    data = engine.conjugate("كتب").to_dict()
    assert set(data) == {"rootForm", "pattern", "patternInfo", "conjugations", "irregularities"}
    assert data["pattern"] == "form1"
    assert data["patternInfo"]["pattern"] == "فَعَلَ"
    assert data["conjugations"]["perfect"]["3rd"]["singular"]["masculine"] == "كَتَبَ"


# ============================================
# RECORDS
# ============================================

def test_build_record(engine):
    record = engine.build_record("verb123", "كتب")

    assert record.verb_id == "verb123"
    assert record.root_form == "كتب"
    assert record.patterns == ["form1"]
    assert record.irregularities == []
    assert record.conjugations["perfect"]["3rd"]["singular"]["masculine"] == "كَتَبَ"
    datetime.fromisoformat(record.created_at)
    datetime.fromisoformat(record.updated_at)

    wire = record.to_wire()
    assert {"verbId", "rootForm", "createdAt", "updatedAt"} <= set(wire)


def test_build_record_keeps_created_at(engine):
    record = engine.build_record("verb123", "كتب", created_at="2024-01-01T00:00:00+00:00")
    assert record.created_at == "2024-01-01T00:00:00+00:00"
    assert record.updated_at != record.created_at


def test_build_record_with_irregularities(engine):
    record = engine.build_record("v-qala", "قول", irregularities=["hollow"])
    assert record.irregularities == ["hollow"]
    assert record.conjugations["perfect"]["3rd"]["singular"]["masculine"] == "قَالَ"


def test_build_record_with_supplied_conjugations(engine):
    table = {"perfect": {"3rd": {"singular": {"masculine": "كَتَبَ"}}}}
    record = engine.build_record("verb123", "كتب", "form1", conjugations=table)
    assert record.conjugations == table


def test_build_record_reports_all_validation_errors(engine):
    with pytest.raises(RecordValidationError) as excinfo:
        engine.build_record("", "كتب")
    assert excinfo.value.errors == ["verbId is required"]
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("tags", [[], ["hollow"]])
def test_malformed_supplied_table_is_a_validation_error(engine, tags):
    table = {"perfect": {"4th": {"singular": {"masculine": "x"}}}}
    with pytest.raises(RecordValidationError) as excinfo:
        engine.build_record("", "قول", "form1", tags, conjugations=table)
    assert excinfo.value.errors == [
        "verbId is required",
        "conjugations.perfect.4th: unknown person '4th'",
    ]


def test_supplied_table_gets_overlay_merged(engine):
    table = {"perfect": {"3rd": {"singular": {"masculine": "قَوَلَ"}}}}
    record = engine.build_record("v-qala", "قول", "form1", ["hollow"], conjugations=table)
    assert record.conjugations["perfect"]["3rd"]["singular"]["masculine"] == "قَالَ"
    assert record.conjugations["perfect"]["1st"]["singular"]["common"] == "قُلْتُ"


def test_hollow_surface_form_conjugates_its_root(engine):
    result = engine.conjugate("قالوا", irregularities=["hollow"])
    assert result.pattern_id == "form1"
    assert result.root == "قول"
    assert result.forms.get("perfect", "1st", "singular", "common") == "قُلْتُ"


def test_get_record_is_cache_aside(engine):
    stored = engine.build_record("verb123", "كتب")
    calls = []

    def loader(verb_id):
        calls.append(verb_id)
        return stored if verb_id == "verb123" else None

    assert engine.get_record("verb123", loader) == stored
    assert engine.get_record("verb123", loader) == stored
    assert calls == ["verb123"]

    assert engine.get_record("missing", loader) is None
    assert calls == ["verb123", "missing"]


def test_get_record_accepts_wire_dicts(engine):
    wire = engine.build_record("verb123", "كتب").to_wire()
    record = engine.get_record("verb123", lambda verb_id: wire)

    assert isinstance(record, VerbConjugation)
    assert record.verb_id == "verb123"
    assert engine.cache.has_conjugation("verb123")


def test_pattern_info(engine):
    info = engine.pattern_info("form4")
    assert info.name.startswith("Form IV")
    assert info.examples
    assert engine.pattern_info("form0") is None
