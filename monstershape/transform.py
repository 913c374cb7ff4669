"""Single-file transform boundary.

Responsibilities:
- Thread an immutable per-call context through parse, normalize, and serialize.
- Convert every failure for one file into a single `TransformError`.

Key types:
- `TransformContext`: source name, grammar, and options for one invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from .config import TransformOptions
from .document.parser import DocumentParser, GrammarVariant
from .errors import EmptyInputError, NormalizationError, ParseError, TransformError
from .models.datatypes import MonsterRecord
from .normalizer.record_normalizer import RecordNormalizer
from .serialization import serialize_record


COMPONENT_NAME = "monstershape"
_UTF8_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class TransformContext:
    """Everything one transform call needs; created fresh for every file."""

    source_name: str
    grammar: GrammarVariant
    options: TransformOptions

    @classmethod
    def create(cls, source_name: str, options: TransformOptions | None = None) -> TransformContext:
        resolved = options if options is not None else TransformOptions()
        return cls(source_name=source_name, grammar=resolved.grammar, options=resolved)


def decode_source(raw: str | bytes, context: TransformContext) -> str:
    """Decode source bytes as UTF-8 and drop a leading byte-order mark."""

    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(
                source_name=context.source_name,
                grammar=context.grammar.value,
                detail=f"source is not valid UTF-8: {exc}",
            ) from exc
    else:
        text = raw
    return text[1:] if text.startswith(_UTF8_BOM) else text


def normalize_source(raw: str | bytes, context: TransformContext) -> MonsterRecord:
    """Parse and normalize one source document.

    Raises:
        ParseError, EmptyInputError, NormalizationError: Unwrapped core failures.
    """

    text = decode_source(raw, context)
    parser = DocumentParser(context.grammar, allow_empty=context.options.allow_empty)
    tree = parser.parse(text, context.source_name)
    return RecordNormalizer().normalize(tree)


def transform(
    raw: str | bytes,
    options: TransformOptions | None = None,
    source_name: str = "<document>",
) -> bytes:
    """Transform one source document into serialized record bytes.

    Either the complete output is returned or `TransformError` is raised.
    """

    context = TransformContext.create(source_name, options)
    try:
        record = normalize_source(raw, context)
    except EmptyInputError as exc:
        raise TransformError(
            stage="parse",
            source_name=source_name,
            detail=exc.detail,
            hint="Add monster fields to the file or allow empty input.",
            component=COMPONENT_NAME,
        ) from exc
    except ParseError as exc:
        raise TransformError(
            stage="parse",
            source_name=source_name,
            detail=f"Failed to parse `{source_name}` with grammar `{exc.grammar}`: {exc.detail}",
            hint="Fix the YAML syntax or choose a less restrictive grammar.",
            component=COMPONENT_NAME,
        ) from exc
    except NormalizationError as exc:
        raise TransformError(
            stage="normalize",
            source_name=source_name,
            detail=f"Invalid field in `{source_name}`: {exc}",
            component=COMPONENT_NAME,
        ) from exc

    try:
        return serialize_record(
            record,
            key_filter=context.options.key_filter,
            sort_keys=context.options.sort_keys,
            indent=context.options.indent,
        )
    except (TypeError, ValueError) as exc:
        raise TransformError(
            stage="serialize",
            source_name=source_name,
            detail=f"Failed to encode record for `{source_name}`: {exc}",
            hint="Use a stricter grammar so only JSON-compatible values are produced.",
            component=COMPONENT_NAME,
        ) from exc


def output_name(path: str | PurePath, extension: str = ".json") -> str:
    """Return the file name of `path` with its extension replaced."""

    return PurePath(path).with_suffix(extension).name
