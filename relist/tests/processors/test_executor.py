"""Unit tests for PlanExecutor."""

from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from relist.errors import ExternalIOFailure
from relist.models.plan import DeleteOp, Plan, PlanOptions, RenameOp
from relist.processors.executor import PlanExecutor
from relist.services import FilesystemMover, GitAwareDeleter, GitAwareMover, TrashDeleter
from relist.tests.fakes import InMemoryMover, RecordingDeleter


def _rename(src: str, dst: str) -> RenameOp:
    return RenameOp(source=Path(src), destination=Path(dst))


class TestPlanExecutor:
    """Tests for PlanExecutor with in-memory services."""

    def test_empty_plan(self):
        executor = PlanExecutor(deleter=RecordingDeleter(), mover=InMemoryMover({}))

        assert executor.execute(Plan()) == 0

    def test_deletes_run_before_renames(self):
        services = MagicMock()
        plan = Plan(deletes=(DeleteOp(path=Path("b")),), renames=(_rename("a", "b"),))

        applied = PlanExecutor(deleter=services.deleter, mover=services.mover).execute(plan)

        assert applied == 2
        assert services.mock_calls == [
            call.deleter.delete(Path("b")),
            call.mover.ensure_parent_dirs(Path("b")),
            call.mover.move(Path("a"), Path("b")),
        ]

    def test_renames_applied_in_order(self):
        files = {Path("a"): "A", Path("b"): "B"}
        plan = Plan(renames=(_rename("a", "a.tmp"), _rename("b", "a"), _rename("a.tmp", "b")))

        PlanExecutor(deleter=RecordingDeleter(), mover=InMemoryMover(files)).execute(plan)

        assert files == {Path("a"): "B", Path("b"): "A"}

    def test_parent_dirs_ensured_for_each_rename(self):
        files = {Path("a"): "A"}
        mover = InMemoryMover(files)

        PlanExecutor(deleter=RecordingDeleter(), mover=mover).execute(Plan(renames=(_rename("a", "x/y/a"),)))

        assert mover.created_dirs == [Path("x/y")]

    def test_stops_at_first_failed_rename(self):
        files = {Path("a"): "A", Path("c"): "C"}
        plan = Plan(renames=(_rename("a", "a2"), _rename("missing", "m2"), _rename("c", "c2")))

        with pytest.raises(ExternalIOFailure, match="missing"):
            PlanExecutor(deleter=RecordingDeleter(), mover=InMemoryMover(files)).execute(plan)

        # Applied operations are not rolled back; later ones are not attempted
        assert files == {Path("a2"): "A", Path("c"): "C"}

    def test_failed_delete_halts_before_renames(self):
        files = {Path("a"): "A", Path("b"): "B"}
        deleter = RecordingDeleter(fail_on={Path("b")})
        plan = Plan(deletes=(DeleteOp(path=Path("b")),), renames=(_rename("a", "c"),))

        with pytest.raises(ExternalIOFailure):
            PlanExecutor(deleter=deleter, mover=InMemoryMover(files)).execute(plan)

        assert files == {Path("a"): "A", Path("b"): "B"}

    def test_logs_each_operation(self, caplog):
        files = {Path("a"): "A"}

        with caplog.at_level("INFO", logger="relist.processors.executor"):
            PlanExecutor(deleter=RecordingDeleter(), mover=InMemoryMover(files)).execute(
                Plan(renames=(_rename("a", "b"),))
            )

        assert "Renamed a -> b" in caplog.text


class TestExecutorOnDisk:
    """Tests for PlanExecutor against the real filesystem."""

    def test_missing_source_is_fatal(self, tmp_path):
        plan = Plan(renames=(RenameOp(source=tmp_path / "gone", destination=tmp_path / "new"),))

        with pytest.raises(ExternalIOFailure) as excinfo:
            PlanExecutor(deleter=RecordingDeleter(), mover=FilesystemMover()).execute(plan)

        assert excinfo.value.path == str(tmp_path / "gone")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_creates_missing_parents(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("A")
        destination = tmp_path / "one" / "two" / "a.txt"

        PlanExecutor(deleter=RecordingDeleter(), mover=FilesystemMover()).execute(
            Plan(renames=(RenameOp(source=source, destination=destination),))
        )

        assert destination.read_text() == "A"


class TestFromOptions:
    """Tests for service selection."""

    def test_default_services(self):
        executor = PlanExecutor.from_options(PlanOptions())

        assert isinstance(executor.deleter, TrashDeleter)
        assert isinstance(executor.mover, FilesystemMover)

    def test_git_services(self):
        executor = PlanExecutor.from_options(PlanOptions(git=True))

        assert isinstance(executor.deleter, GitAwareDeleter)
        assert isinstance(executor.mover, GitAwareMover)
