"""Per-entry disposition of the edited listing against the filesystem."""

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from relist.errors import DeleteNotEnabled, DirectoryOverwrite, OverwriteNotForced
from relist.models.plan import DeleteOp, OutputKind, OutputSpec, PlanOptions, RenameOp
from relist.processors.validator import lexists


@dataclass
class Classification:
    """Operations emitted by the classifier, before cycle resolution."""

    deletes: list[DeleteOp] = field(default_factory=list)
    renames: list[RenameOp] = field(default_factory=list)
    # Sources of the renames; the initial pending set for cycle resolution
    pending: set[Path] = field(default_factory=set)


def _same_file(source: Path, destination: Path) -> bool:
    """True for a case-only rename on a case-insensitive filesystem."""
    try:
        return os.path.samefile(source, destination)
    except OSError:
        return False


def classify(inputs: Sequence[str], outputs: Sequence[OutputSpec], options: PlanOptions) -> Classification:
    """Decide what to do with each (input, output) pair.

    Only read-only filesystem queries are performed.

    Args:
        inputs: Validated input filenames.
        outputs: Output specs in positional correspondence with ``inputs``.
        options: ``force`` and ``delete`` gate overwrites and deletions.

    Returns:
        Classification with deletions, renames and the initial pending set.

    Raises:
        DirectoryOverwrite: If a target is a directory that is not itself being moved.
        DeleteNotEnabled: If a deletion is requested without ``options.delete``.
        OverwriteNotForced: If a target is an unrelated existing file without ``options.force``.
    """
    input_paths = {Path(name) for name in inputs}
    result = Classification()

    for name, output in zip(inputs, outputs):
        source = Path(name)

        if output.kind == OutputKind.DELETE:
            if not options.delete:
                raise DeleteNotEnabled(name)
            result.deletes.append(DeleteOp(path=source))
            continue

        if output.kind != OutputKind.TARGET or not output.target:
            continue

        target = output.target
        destination = Path(target)

        if destination.is_dir():
            if destination not in input_paths and not _same_file(source, destination):
                raise DirectoryOverwrite(target)
        elif lexists(destination):
            if destination not in input_paths and not _same_file(source, destination) and not options.force:
                raise OverwriteNotForced(target)

        result.renames.append(RenameOp(source=source, destination=destination))
        result.pending.add(source)

    return result
