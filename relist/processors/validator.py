"""Structural validation of the input list and the edited listing."""

from collections.abc import Callable, Sequence
from pathlib import Path, PurePath

from relist.errors import CaseCollision, CountMismatch, DuplicateInput, DuplicateOutput, MissingInput
from relist.models.plan import DeletionMarker, OutputSpec


def lexists(path: Path) -> bool:
    """Like `Path.exists`, but also true for dangling symlinks."""
    return path.exists() or path.is_symlink()


def path_key(name: str) -> str:
    """Case-sensitive identity of a filename.

    Only lexical noise is removed (``./`` prefixes, repeated or trailing slashes);
    ``..`` components are kept since they may cross symlinks.
    """
    return str(PurePath(name))


def split_listing(text: str, expected: int) -> list[str]:
    """Split edited text into trimmed lines, one per input entry.

    Trailing blank lines beyond ``expected`` are dropped, since editors commonly
    append a final newline.

    Raises:
        CountMismatch: If the number of lines differs from ``expected``.
    """
    lines = [line.strip() for line in text.splitlines()]
    while len(lines) > expected and not lines[-1]:
        lines.pop()

    if len(lines) != expected:
        raise CountMismatch(expected, len(lines))
    return lines


def validate_inputs(
    inputs: Sequence[str],
    marker: DeletionMarker,
    exists: Callable[[Path], bool] = lexists,
) -> None:
    """Check that input entries are unique, exist, and are not deletion markers.

    Raises:
        MissingInput: If an entry does not exist or looks like a deletion marker.
        DuplicateInput: If an entry is listed twice.
    """
    seen: set[str] = set()
    for name in inputs:
        if marker.matches(name):
            raise MissingInput(name, f"is a reserved deletion marker ({marker})")

        key = path_key(name)
        if key in seen:
            raise DuplicateInput(name)
        seen.add(key)

        if not exists(Path(name)):
            raise MissingInput(name)


def validate_listing(
    inputs: Sequence[str],
    edited_text: str,
    marker: DeletionMarker,
    exists: Callable[[Path], bool] = lexists,
) -> list[OutputSpec]:
    """Turn the edited listing into one OutputSpec per input entry.

    Args:
        inputs: Filenames shown to the user, in listing order.
        edited_text: The listing as returned by the editor.
        marker: Deletion marker in effect.
        exists: Filesystem existence check.

    Returns:
        Output specs in positional correspondence with ``inputs``.

    Raises:
        ValidationError: Any of the validation error subclasses. Nothing on disk is
            changed by this function.
    """
    lines = split_listing(edited_text, len(inputs))
    validate_inputs(inputs, marker, exists)

    outputs: list[OutputSpec] = []
    seen: dict[str, str] = {}
    seen_folded: dict[str, str] = {}

    for name, line in zip(inputs, lines):
        if marker.matches(line):
            outputs.append(OutputSpec.delete())
            continue

        key = path_key(line)
        if key in seen:
            raise DuplicateOutput(line)
        folded = key.lower()
        if folded in seen_folded:
            raise CaseCollision(line, seen_folded[folded])
        seen[key] = line
        seen_folded[folded] = line

        outputs.append(OutputSpec.unchanged() if key == path_key(name) else OutputSpec.to(line))

    return outputs
