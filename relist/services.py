"""External collaborators: the editor, deletion and move strategies."""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

import click
from send2trash import send2trash

from relist.errors import ExternalIOFailure


logger = logging.getLogger(__name__)


class Editor(ABC):
    """Lets the user edit the filename listing."""

    @abstractmethod
    def edit(self, text: str) -> str:
        """Return the edited text.

        Raises:
            ExternalIOFailure: If the editor could not be run.
        """
        pass


class ClickEditor(Editor):
    """Opens the listing in ``$VISUAL``/``$EDITOR`` (or an explicit command) via click."""

    def __init__(self, editor: str | None = None, extension: str = ".txt") -> None:
        self.editor = editor
        self.extension = extension

    def edit(self, text: str) -> str:
        # An unsaved session leaves the listing as it was.
        try:
            edited = click.edit(text, editor=self.editor, extension=self.extension, require_save=False)
        except click.ClickException as e:
            raise ExternalIOFailure(self.editor, e.format_message()) from e
        return text if edited is None else edited


def run_git(*args: str) -> subprocess.CompletedProcess[str]:
    """Run a git subcommand in the current directory, capturing its output."""
    logger.debug("Running git %s", " ".join(args))
    return subprocess.run(["git", *args], capture_output=True, text=True, check=False)


def is_git_tracked(path: Path) -> bool:
    """Return True if git tracks ``path`` (or, for a directory, anything below it)."""
    try:
        result = run_git("ls-files", "--error-unmatch", "--", str(path))
    except FileNotFoundError:
        # git is not installed
        return False
    return result.returncode == 0


def is_git_committed(path: Path) -> bool:
    """Return True if ``path`` exists in the HEAD commit, not only in the index."""
    try:
        result = run_git("ls-tree", "--name-only", "HEAD", "--", str(path))
    except FileNotFoundError:
        return False
    return result.returncode == 0 and bool(result.stdout.strip())


def _check_git(result: subprocess.CompletedProcess[str], path: Path) -> None:
    if result.returncode != 0:
        message = result.stderr.strip() or f"git exited with status {result.returncode}"
        raise ExternalIOFailure(str(path), message)


class Deleter(ABC):
    """Removes a file or directory."""

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Remove ``path``.

        Raises:
            ExternalIOFailure: If the removal failed.
        """
        pass


class TrashDeleter(Deleter):
    """Moves paths to the platform trash or recycle bin."""

    def delete(self, path: Path) -> None:
        try:
            send2trash(str(path))
        except OSError as e:
            raise ExternalIOFailure(str(path), str(e)) from e


class GitAwareDeleter(Deleter):
    """Uses ``git rm`` for committed paths and falls back to another deleter otherwise.

    A path that is only staged is unstaged with ``git rm --cached`` first, since
    git refuses to remove it outright without discarding the staged content.
    """

    def __init__(self, fallback: Deleter | None = None) -> None:
        self.fallback = fallback or TrashDeleter()

    def delete(self, path: Path) -> None:
        if not is_git_tracked(path):
            self.fallback.delete(path)
            return
        if not is_git_committed(path):
            _check_git(run_git("rm", "--cached", "-r", "-q", "--", str(path)), path)
            self.fallback.delete(path)
            return
        _check_git(run_git("rm", "-r", "-q", "--", str(path)), path)


class Mover(ABC):
    """Moves a file or directory to a new path."""

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """Move ``source`` to ``destination``, replacing an existing file.

        Raises:
            ExternalIOFailure: If the move failed.
        """
        pass

    def ensure_parent_dirs(self, path: Path) -> None:
        """Create every missing ancestor directory of ``path``.

        Raises:
            ExternalIOFailure: If a directory could not be created.
        """
        parent = path.parent
        if parent.is_dir():
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExternalIOFailure(str(parent), str(e)) from e
        logger.info("Created directory %s", parent)


class FilesystemMover(Mover):
    """Plain filesystem rename."""

    def move(self, source: Path, destination: Path) -> None:
        try:
            source.replace(destination)
        except OSError as e:
            raise ExternalIOFailure(str(source), str(e)) from e


class GitAwareMover(Mover):
    """Uses ``git mv`` for tracked paths and falls back to another mover otherwise."""

    def __init__(self, fallback: Mover | None = None) -> None:
        self.fallback = fallback or FilesystemMover()

    def move(self, source: Path, destination: Path) -> None:
        if not is_git_tracked(source):
            self.fallback.move(source, destination)
            return
        _check_git(run_git("mv", "-f", "--", str(source), str(destination)), source)
