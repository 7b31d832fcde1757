# Arabic Conjugation Engine
# Triliteral verb paradigms for forms I-X, weak-root overlays, records and caching

from .root_types import (
    RootType, Irregularity, classify_root, detect_irregularities,
    normalize_root, root_letters
)
from .verb_forms import (
    VerbForm, FormPattern, PATTERN_CATALOG, PATTERN_IDS,
    get_pattern_info, list_patterns, require_pattern
)
from .paradigms import ConjugationForms, Tense, Person, Number, Gender
from .conjugator import ArabicConjugator, generate_conjugations
from .irregular import generate_irregular_conjugations
from .analyzer import analyze, extract_root_letters, identify_pattern
from .schemas import VerbConjugation
from .validation import validate_conjugation
from .cache import ConjugationCache, InMemoryCacheBackend
from .engine import ConjugationEngine, ConjugationResult
from .errors import (
    ConjugatorError, NonTriliteralRootError, PatternNotFoundError,
    UnknownIrregularityError, RecordValidationError, CacheBackendError
)

__version__ = "0.1.0"

__all__ = [
    'RootType',
    'Irregularity',
    'classify_root',
    'detect_irregularities',
    'normalize_root',
    'root_letters',
    'VerbForm',
    'FormPattern',
    'PATTERN_CATALOG',
    'PATTERN_IDS',
    'get_pattern_info',
    'list_patterns',
    'require_pattern',
    'ConjugationForms',
    'Tense',
    'Person',
    'Number',
    'Gender',
    'ArabicConjugator',
    'generate_conjugations',
    'generate_irregular_conjugations',
    'analyze',
    'extract_root_letters',
    'identify_pattern',
    'VerbConjugation',
    'validate_conjugation',
    'ConjugationCache',
    'InMemoryCacheBackend',
    'ConjugationEngine',
    'ConjugationResult',
    'ConjugatorError',
    'NonTriliteralRootError',
    'PatternNotFoundError',
    'UnknownIrregularityError',
    'RecordValidationError',
    'CacheBackendError',
]
