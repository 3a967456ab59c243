"""Rename plan data models."""

from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MarkerKind(str, Enum):
    """How a line in the edited listing requests deletion of its file."""

    EMPTY_LINE = "empty_line"
    PREFIX_SYMBOL = "prefix_symbol"


class DeletionMarker(BaseModel):
    """Deletion marker configuration, resolved once when the listing is validated.

    An empty line always marks a deletion since it can never name a file. With
    ``PREFIX_SYMBOL``, any line starting with ``symbol`` does too.
    """

    model_config = ConfigDict(frozen=True)

    kind: MarkerKind = Field(default=MarkerKind.EMPTY_LINE, description="Marker representation")
    symbol: str | None = Field(default=None, description="Prefix character for PREFIX_SYMBOL markers")

    @model_validator(mode="after")
    def _check_symbol(self) -> "DeletionMarker":
        if self.kind == MarkerKind.PREFIX_SYMBOL:
            if self.symbol is None or len(self.symbol) != 1 or self.symbol.isspace():
                raise ValueError("A prefix deletion marker must be a single non-whitespace character")
        elif self.symbol is not None:
            raise ValueError("Only prefix deletion markers take a symbol")
        return self

    @classmethod
    def empty_line(cls) -> "DeletionMarker":
        return cls(kind=MarkerKind.EMPTY_LINE)

    @classmethod
    def prefix(cls, symbol: str) -> "DeletionMarker":
        return cls(kind=MarkerKind.PREFIX_SYMBOL, symbol=symbol)

    def matches(self, line: str) -> bool:
        """Return True if the (trimmed) line marks a deletion."""
        if not line:
            return True
        return self.kind == MarkerKind.PREFIX_SYMBOL and line.startswith(self.symbol or "")

    def __str__(self) -> str:
        if self.kind == MarkerKind.PREFIX_SYMBOL:
            return f"prefix '{self.symbol}'"
        return "empty line"


class OutputKind(str, Enum):
    UNCHANGED = "unchanged"
    DELETE = "delete"
    TARGET = "target"


class OutputSpec(BaseModel):
    """The desired fate of one input entry."""

    model_config = ConfigDict(frozen=True)

    kind: OutputKind = Field(description="Disposition requested by the edited listing")
    target: str | None = Field(default=None, description="New filename, only set for TARGET")

    @model_validator(mode="after")
    def _check_target(self) -> "OutputSpec":
        if (self.kind == OutputKind.TARGET) != bool(self.target):
            raise ValueError("A non-empty target is required for TARGET outputs and only for them")
        return self

    @classmethod
    def unchanged(cls) -> "OutputSpec":
        return cls(kind=OutputKind.UNCHANGED)

    @classmethod
    def delete(cls) -> "OutputSpec":
        return cls(kind=OutputKind.DELETE)

    @classmethod
    def to(cls, target: str) -> "OutputSpec":
        return cls(kind=OutputKind.TARGET, target=target)

    def __str__(self) -> str:
        if self.kind == OutputKind.TARGET:
            return f"Target('{self.target}')"
        return self.kind.value.capitalize()


class RenameOp(BaseModel):
    """A single move of ``source`` to ``destination``."""

    model_config = ConfigDict(frozen=True)

    source: Path = Field(description="Current path of the file")
    destination: Path = Field(description="Path the file is moved to")

    def __str__(self) -> str:
        return f"RenameOp('{self.source}' -> '{self.destination}')"


class DeleteOp(BaseModel):
    """A single removal of ``path``."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path of the file to remove")

    def __str__(self) -> str:
        return f"DeleteOp('{self.path}')"


class Plan(BaseModel):
    """Ordered deletions followed by ordered renames.

    A plan is immutable once built and is applied deletions first.
    """

    model_config = ConfigDict(frozen=True)

    deletes: tuple[DeleteOp, ...] = Field(default=(), description="Removals, applied first")
    renames: tuple[RenameOp, ...] = Field(default=(), description="Moves, applied after all removals")

    def __len__(self) -> int:
        return len(self.deletes) + len(self.renames)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def operations(self) -> Iterator[DeleteOp | RenameOp]:
        """Iterate over all operations in execution order."""
        yield from self.deletes
        yield from self.renames


class PlanOptions(BaseModel):
    """User configuration for building and applying a plan."""

    force: bool = Field(default=False, description="Allow overwriting existing regular files")
    delete: bool = Field(default=False, description="Allow deletion dispositions")
    git: bool = Field(default=False, description="Use git for tracked files")
    marker: DeletionMarker = Field(default_factory=DeletionMarker.empty_line, description="Deletion marker")
