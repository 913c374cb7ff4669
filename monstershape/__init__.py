"""Top-level package for monstershape.

This package converts YAML monster descriptions into normalized JSON records
for downstream rendering. The single-file entry point is `transform`; batch
builds go through `MonsterBuildPipeline`.
"""

from .document.parser import GrammarVariant, parse
from .normalizer.record_normalizer import normalize
from .pipeline import MonsterBuildPipeline
from .transform import transform

__all__ = [
    "GrammarVariant",
    "MonsterBuildPipeline",
    "__version__",
    "normalize",
    "parse",
    "transform",
]

__version__ = "0.1.0"
