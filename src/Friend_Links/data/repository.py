"""File-backed persistence for entries and failure reports.

Writes go to a temporary file in the target directory and are moved into place
with ``os.replace``, so a crash never leaves a half-written entry file behind.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter

from Friend_Links.data.codec import EntryCodec, codec_for_path
from Friend_Links.models.check import FailureRecord
from Friend_Links.models.entry import FriendLink
from Friend_Links.utils.exceptions import EntrySourceError

logger = logging.getLogger(__name__)

_FAILURE_LIST = TypeAdapter(list[FailureRecord])


def _target_mode(path: Path) -> int:
    """Permission bits the written file should end up with.

    An existing file keeps its mode; a new one gets the umask default, as if
    created with ``open()``.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_text(path: Path, text: str) -> None:
    """Replace *path* with *text* in one step, creating parent directories.

    The file mode of an existing *path* is preserved.

    Raises:
        EntrySourceError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = _target_mode(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise EntrySourceError(f"cannot write file: {exc.strerror or exc}", path=str(path)) from exc


class EntryRepository:
    """Load and save the entry list in the format implied by its suffix.

    Usage::

        repo = EntryRepository(Path("data/friends.ts"))
        entries = repo.load()
        repo.save(updated_entries)
    """

    def __init__(self, path: str | Path, codec: EntryCodec | None = None) -> None:
        self._path = Path(path)
        self._codec = codec if codec is not None else codec_for_path(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def codec(self) -> EntryCodec:
        return self._codec

    def load(self) -> list[FriendLink]:
        """Read and parse every entry.

        Raises:
            EntrySourceError: If the file is missing, unreadable or malformed.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise EntrySourceError(
                f"cannot read entry file: {exc.strerror or exc}", path=str(self._path)
            ) from exc

        try:
            entries = self._codec.parse(text)
        except EntrySourceError as exc:
            if exc.path is None:
                exc.path = str(self._path)
            raise

        logger.info("Loaded %d entries from %s", len(entries), self._path)
        return entries

    def save(self, entries: Sequence[FriendLink]) -> None:
        """Write *entries* in canonical form, replacing the file atomically."""
        atomic_write_text(self._path, self._codec.encode(entries))
        logger.info("Wrote %d entries to %s", len(entries), self._path)


def write_failure_report(records: Sequence[FailureRecord], path: str | Path) -> Path:
    """Persist the failure list as a JSON array of ``{name, url, reason}``.

    Returns:
        The path written.
    """
    target = Path(path)
    payload = _FAILURE_LIST.dump_json(list(records), indent=2).decode("utf-8")
    atomic_write_text(target, payload)
    logger.info("Saved %d failure record(s) to %s", len(records), target)
    return target

