"""Builds a rename plan from the input list and the edited listing."""

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from relist.models.plan import OutputKind, Plan, PlanOptions
from relist.processors.classifier import classify
from relist.processors.cycle_resolver import resolve_cycles
from relist.processors.temp_names import TempNameGenerator
from relist.processors.validator import validate_listing


logger = logging.getLogger(__name__)


class RenamePlanner:
    """Compiles an edited listing into an ordered, safe Plan."""

    def __init__(self, options: PlanOptions, rng: random.Random | None = None) -> None:
        """Initialize the planner.

        Args:
            options: Flags gating overwrites and deletions, and the deletion marker.
            rng: Random source for temporary names.
        """
        self.options = options
        self.rng = rng

    def build_plan(self, inputs: Sequence[str], edited_text: str) -> Plan:
        """Validate, classify and order the requested changes.

        Nothing on disk is modified; only existence and type checks are made.

        Args:
            inputs: Filenames that were shown in the editor, in order.
            edited_text: The listing as saved by the user.

        Returns:
            The plan to hand to the executor. Empty if nothing changed.

        Raises:
            RelistError: Any validation, conflict or temporary-name error.
        """
        outputs = validate_listing(inputs, edited_text, self.options.marker)
        classification = classify(inputs, outputs, self.options)

        reserved = {Path(name) for name in inputs}
        reserved.update(Path(out.target) for out in outputs if out.kind == OutputKind.TARGET and out.target)
        temp_names = TempNameGenerator(reserved=reserved, rng=self.rng)

        renames = resolve_cycles(classification.renames, classification.pending, temp_names)
        plan = Plan(deletes=tuple(classification.deletes), renames=tuple(renames))

        logger.info(
            "Planned %d deletion(s) and %d rename(s) for %d file(s)",
            len(plan.deletes),
            len(plan.renames),
            len(inputs),
        )
        return plan
