"""Translation errors and the source spans they carry."""

from __future__ import annotations

from pydantic import BaseModel


class SourceLocation(BaseModel):
    """Structured source span from tree-sitter AST nodes."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def is_unknown(self) -> bool:
        return (
            self.start_line == 0
            and self.start_col == 0
            and self.end_line == 0
            and self.end_col == 0
        )

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


NO_SOURCE_LOCATION = SourceLocation(start_line=0, start_col=0, end_line=0, end_col=0)


def source_location_of(node) -> SourceLocation:
    """Build a SourceLocation from a tree-sitter node (1-based lines)."""
    if node is None:
        return NO_SOURCE_LOCATION
    s, e = node.start_point, node.end_point
    return SourceLocation(
        start_line=s[0] + 1,
        start_col=s[1],
        end_line=e[0] + 1,
        end_col=e[1],
    )


class TranslationError(Exception):
    """Base class: translation of the whole unit was aborted."""

    def __init__(
        self,
        message: str,
        node_type: str = "",
        location: SourceLocation = NO_SOURCE_LOCATION,
    ):
        self.message = message
        self.node_type = node_type
        self.location = location
        super().__init__(str(self))

    @classmethod
    def at(cls, node, message: str) -> TranslationError:
        """Build an error pointing at *node*."""
        node_type = node.type if node is not None else ""
        return cls(message, node_type=node_type, location=source_location_of(node))

    def __str__(self) -> str:
        if self.location.is_unknown():
            return self.message
        return f"{self.message} (at {self.location})"


class UnsupportedConstruct(TranslationError):
    """A node kind, or a shape of a supported kind, has no translation rule."""


class MalformedInput(TranslationError):
    """The source tree violates a structural assumption of the translator."""
