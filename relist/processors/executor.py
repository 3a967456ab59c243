"""Applies a rename plan to the filesystem."""

import logging

from relist.models.plan import Plan, PlanOptions
from relist.services import Deleter, FilesystemMover, GitAwareDeleter, GitAwareMover, Mover, TrashDeleter


logger = logging.getLogger(__name__)


class PlanExecutor:
    """Applies deletions, then renames, stopping at the first failure.

    The executor trusts the plan: it has already been validated, so any conflict
    that shows up now (e.g. a file changed by another process) surfaces as an
    ``ExternalIOFailure`` from the services. Applied operations are not undone.
    """

    def __init__(self, deleter: Deleter, mover: Mover) -> None:
        """Initialize the executor.

        Args:
            deleter: Removal strategy.
            mover: Move strategy, also responsible for creating parent directories.
        """
        self.deleter = deleter
        self.mover = mover

    @classmethod
    def from_options(cls, options: PlanOptions) -> "PlanExecutor":
        """Build an executor with the trash or git-aware services selected by ``options``."""
        if options.git:
            return cls(deleter=GitAwareDeleter(), mover=GitAwareMover())
        return cls(deleter=TrashDeleter(), mover=FilesystemMover())

    def execute(self, plan: Plan) -> int:
        """Apply every operation of ``plan`` in order.

        Returns:
            Number of operations applied.

        Raises:
            ExternalIOFailure: On the first failed operation. Later operations are
                not attempted.
        """
        applied = 0

        for delete_op in plan.deletes:
            self.deleter.delete(delete_op.path)
            logger.info("Deleted %s", delete_op.path)
            applied += 1

        for rename_op in plan.renames:
            self.mover.ensure_parent_dirs(rename_op.destination)
            self.mover.move(rename_op.source, rename_op.destination)
            logger.info("Renamed %s -> %s", rename_op.source, rename_op.destination)
            applied += 1

        return applied
