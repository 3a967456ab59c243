"""Rewrites rename chains and cycles into a safe order using temporary hops."""

import logging
from collections.abc import Sequence
from pathlib import Path

from relist.models.plan import RenameOp
from relist.processors.temp_names import TempNameGenerator


logger = logging.getLogger(__name__)


def _is_blocked(destination: Path, pending: set[Path]) -> bool:
    """True if ``destination`` or one of its ancestors has not moved out of the way yet."""
    return destination in pending or any(parent in pending for parent in destination.parents)


def resolve_cycles(
    renames: Sequence[RenameOp],
    pending: set[Path],
    temp_names: TempNameGenerator,
) -> list[RenameOp]:
    """Order renames so that no move overwrites a file that has not moved yet.

    A single forward pass over ``renames``. When an operation's destination, or
    a directory above it, is still the current path of a pending source, it is
    split in two: the source moves to a temporary path in place, and the move
    from the temporary path to the real destination is deferred until after
    every original operation. Deferred hops are never re-examined; their
    temporary paths are absent from both the inputs and the targets.

    Example:
        ``a -> b, b -> a`` becomes ``a -> a.temp_NNNN, b -> a, a.temp_NNNN -> b``.

    Args:
        renames: Classified rename operations, in listing order.
        pending: Sources whose content has not been relocated yet. Consumed by
                 this call; it is only meaningful while the plan is being built.
        temp_names: Generator for the temporary paths.

    Returns:
        A new list of rename operations, safe to apply in order.

    Raises:
        TempNameExhausted: If no temporary path could be found.
    """
    resolved: list[RenameOp] = []
    deferred: list[RenameOp] = []

    for op in renames:
        if _is_blocked(op.destination, pending):
            temporary = temp_names.generate(op.source)
            logger.debug("Breaking %s via temporary %s", op, temporary)
            resolved.append(op.model_copy(update={"destination": temporary}))
            deferred.append(RenameOp(source=temporary, destination=op.destination))
        else:
            resolved.append(op)
        pending.discard(op.source)

    return resolved + deferred
