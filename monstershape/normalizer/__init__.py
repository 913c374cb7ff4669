"""Record normalization components.

Modules:
- `record_normalizer`: map a document tree onto the fixed record schema.
- `attack_text`: render attack descriptions from an ordered rule table.
"""

from .attack_text import ATTACK_TEXT_RULES, AttackFields, TemplateRule, render_attack_text
from .record_normalizer import RecordNormalizer, normalize

__all__ = [
    "ATTACK_TEXT_RULES",
    "AttackFields",
    "RecordNormalizer",
    "TemplateRule",
    "normalize",
    "render_attack_text",
]
