"""
Provider-free fallbacks: template generation, statistical quality analysis
and phrase-substitution rewriting. These are the terminal links of the
provider chain and never depend on network access.
"""

from .generation import generate_locally, LOCAL_SOURCE
from .quality import analyze_locally, GENERIC_PHRASES
from .rewrite import apply_substitutions, PHRASE_SUBSTITUTIONS

__all__ = [
    'generate_locally',
    'LOCAL_SOURCE',
    'analyze_locally',
    'GENERIC_PHRASES',
    'apply_substitutions',
    'PHRASE_SUBSTITUTIONS'
]
