"""Domain exceptions for parse, normalization, and transform diagnostics."""

from __future__ import annotations


class MonstershapeError(RuntimeError):
    """Base class for all errors raised by the monster transform."""


class ParseError(MonstershapeError):
    """Raised when source text is malformed or uses a disallowed construct."""

    def __init__(
        self,
        *,
        source_name: str,
        grammar: str,
        detail: str,
    ) -> None:
        """Initialize a parse error with source and grammar diagnostics."""

        super().__init__(f"{source_name}: {detail}")
        self.source_name = source_name
        self.grammar = grammar
        self.detail = detail


class EmptyInputError(MonstershapeError):
    """Raised when a zero-length document reaches a grammar that requires content."""

    def __init__(self, *, source_name: str, grammar: str) -> None:
        """Initialize an empty-input error for one source document."""

        detail = f"File {source_name} is empty; grammar `{grammar}` requires a document."
        super().__init__(detail)
        self.source_name = source_name
        self.grammar = grammar
        self.detail = detail


class NormalizationError(MonstershapeError):
    """Raised when a present source field has an incompatible shape."""

    def __init__(self, *, field_path: str, detail: str) -> None:
        """Initialize a normalization error scoped to a source field path."""

        super().__init__(f"`{field_path}`: {detail}")
        self.field_path = field_path
        self.detail = detail


class TransformError(MonstershapeError):
    """Raised at the transform boundary for any failure of one source file."""

    def __init__(
        self,
        *,
        stage: str,
        source_name: str,
        detail: str,
        hint: str | None = None,
        component: str = "monstershape",
    ) -> None:
        """Initialize a stage-scoped transform error."""

        super().__init__(detail)
        self.stage = stage
        self.source_name = source_name
        self.detail = detail
        self.hint = hint
        self.component = component
