"""Unit tests for plan data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from relist.models.plan import (
    DeleteOp,
    DeletionMarker,
    MarkerKind,
    OutputKind,
    OutputSpec,
    Plan,
    PlanOptions,
    RenameOp,
)


class TestDeletionMarker:
    """Tests for DeletionMarker."""

    def test_default_is_empty_line(self):
        marker = DeletionMarker()

        assert marker.kind == MarkerKind.EMPTY_LINE
        assert marker.symbol is None

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("", True),
            ("file.txt", False),
            ("#file.txt", False),
        ],
    )
    def test_empty_line_matches(self, line, expected):
        assert DeletionMarker.empty_line().matches(line) is expected

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("", True),
            ("#file.txt", True),
            ("#", True),
            ("file.txt", False),
            ("file#.txt", False),
        ],
    )
    def test_prefix_matches(self, line, expected):
        assert DeletionMarker.prefix("#").matches(line) is expected

    @pytest.mark.parametrize("symbol", ["", "##", " "])
    def test_prefix_requires_single_character(self, symbol):
        with pytest.raises(ValidationError):
            DeletionMarker.prefix(symbol)

    def test_empty_line_rejects_symbol(self):
        with pytest.raises(ValidationError):
            DeletionMarker(kind=MarkerKind.EMPTY_LINE, symbol="#")

    def test_str_representation(self):
        assert str(DeletionMarker.empty_line()) == "empty line"
        assert str(DeletionMarker.prefix("-")) == "prefix '-'"


class TestOutputSpec:
    """Tests for OutputSpec."""

    def test_constructors(self):
        assert OutputSpec.unchanged().kind == OutputKind.UNCHANGED
        assert OutputSpec.delete().kind == OutputKind.DELETE

        target = OutputSpec.to("new.txt")
        assert target.kind == OutputKind.TARGET
        assert target.target == "new.txt"

    def test_target_requires_name(self):
        with pytest.raises(ValidationError):
            OutputSpec(kind=OutputKind.TARGET)

    def test_delete_rejects_name(self):
        with pytest.raises(ValidationError):
            OutputSpec(kind=OutputKind.DELETE, target="x.txt")

    def test_str_representation(self):
        assert str(OutputSpec.to("b.txt")) == "Target('b.txt')"
        assert str(OutputSpec.delete()) == "Delete"


class TestPlan:
    """Tests for Plan."""

    @pytest.fixture
    def sample_plan(self):
        return Plan(
            deletes=(DeleteOp(path=Path("gone.txt")),),
            renames=(
                RenameOp(source=Path("a.txt"), destination=Path("b.txt")),
                RenameOp(source=Path("c.txt"), destination=Path("d.txt")),
            ),
        )

    def test_empty_plan(self):
        plan = Plan()

        assert plan.is_empty
        assert len(plan) == 0
        assert list(plan.operations()) == []

    def test_len_counts_all_operations(self, sample_plan):
        assert len(sample_plan) == 3
        assert not sample_plan.is_empty

    def test_operations_yield_deletes_first(self, sample_plan):
        ops = list(sample_plan.operations())

        assert isinstance(ops[0], DeleteOp)
        assert ops[1].source == Path("a.txt")
        assert ops[2].source == Path("c.txt")

    def test_plan_is_immutable(self, sample_plan):
        with pytest.raises(ValidationError):
            sample_plan.renames = ()

    def test_rename_op_is_immutable(self):
        op = RenameOp(source=Path("a"), destination=Path("b"))

        with pytest.raises(ValidationError):
            op.destination = Path("c")

    def test_rename_op_str(self):
        op = RenameOp(source=Path("a.txt"), destination=Path("b.txt"))

        assert str(op) == "RenameOp('a.txt' -> 'b.txt')"


class TestPlanOptions:
    """Tests for PlanOptions defaults."""

    def test_defaults(self):
        options = PlanOptions()

        assert not options.force
        assert not options.delete
        assert not options.git
        assert options.marker == DeletionMarker.empty_line()
