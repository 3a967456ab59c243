"""Error types raised while planning and applying a batch rename."""


class RelistError(Exception):
    """Base class for all errors reported to the user.

    Attributes:
        path: The offending filename, when the error concerns one.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ValidationError(RelistError):
    """The edited listing is malformed. Raised before any filesystem change."""


class CountMismatch(ValidationError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Number of output filenames ({actual}) does not match number of input filenames ({expected})"
        )
        self.expected = expected
        self.actual = actual


class DuplicateInput(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(f"The input file '{path}' is listed more than once", path)


class MissingInput(ValidationError):
    def __init__(self, path: str, reason: str = "does not exist") -> None:
        super().__init__(f"The input file '{path}' {reason}", path)


class DuplicateOutput(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(f"The output filename '{path}' is listed more than once", path)


class CaseCollision(ValidationError):
    def __init__(self, path: str, other: str) -> None:
        super().__init__(
            f"The output filenames '{other}' and '{path}' differ only in case",
            path,
        )
        self.other = other


class ConflictError(RelistError):
    """A requested operation conflicts with the current filesystem state or options."""


class DirectoryOverwrite(ConflictError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot overwrite directory '{path}'", path)


class DeleteNotEnabled(ConflictError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot delete '{path}', use --delete to enable deletions", path)


class OverwriteNotForced(ConflictError):
    def __init__(self, path: str) -> None:
        super().__init__(f"The output file '{path}' already exists, use --force to overwrite", path)


class TempNameExhausted(RelistError):
    def __init__(self, path: str, attempts: int) -> None:
        super().__init__(f"Could not find a free temporary name for '{path}' after {attempts} attempts", path)
        self.attempts = attempts


class ExternalIOFailure(RelistError):
    """A filesystem, editor, or external tool call failed.

    The underlying exception is chained as ``__cause__`` by the raiser.
    """

    def __init__(self, path: str | None, message: str) -> None:
        text = f"{path}: {message}" if path else message
        super().__init__(text, path)
        self.detail = message
