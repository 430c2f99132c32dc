"""Transient file store for uploaded recordings and synthesized replies.

One directory serves two purposes:

- **Scratch space** for uploads awaiting transcription.  The remote API needs
  a named file stream, so the upload is written to disk, sent, and removed
  again by :meth:`AudioStore.scratch_file` whatever the outcome.
- **Hosting** for synthesized ``.mp3`` replies, served by the gateway under
  ``/audio/<name>``.

Names are 16 random hex characters, so concurrent writers never collide and
no locking is needed.

Eviction
--------
:meth:`AudioStore.sweep` deletes every file whose mtime is older than the
retention window, whether or not its URL was ever fetched.
:meth:`AudioStore.start_sweeper` runs that sweep on a daemon thread at a
fixed interval.  Filesystem errors during a sweep are logged at debug level
and skipped; a transient error must never take the process down.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

# Random bytes per generated file name (hex-encoded → 16 characters).
_NAME_BYTES = 8


class AudioStore:
    """Directory-backed store with time-based eviction.

    Attributes:
        root:                   Directory holding every artifact.
        retention_seconds:      Maximum artifact age before a sweep removes it.
        sweep_interval_seconds: Delay between background sweeps.
    """

    def __init__(
        self,
        root: Path,
        *,
        public_base_url: str,
        retention_seconds: float = 5 * 60,
        sweep_interval_seconds: float = 10 * 60,
    ) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.retention_seconds = retention_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._public_base_url = public_base_url.rstrip("/")
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None

    # ── Naming ────────────────────────────────────────────────────────────────

    @staticmethod
    def new_name(suffix: str = ".mp3") -> str:
        return secrets.token_hex(_NAME_BYTES) + suffix

    def new_artifact_path(self, suffix: str = ".mp3") -> Path:
        """Reserve a fresh, unused path inside the store (file not created)."""
        return self.root / self.new_name(suffix)

    def public_url(self, name: str) -> str:
        """Absolute URL the game client uses to download ``name``."""
        return f"{self._public_base_url}/audio/{name}"

    # ── Scratch files ─────────────────────────────────────────────────────────

    @contextmanager
    def scratch_file(self, data: bytes, suffix: str = ".webm") -> Iterator[Path]:
        """Write ``data`` to a uniquely named file and delete it on exit.

        The file is removed on normal exit and when the body raises.

        Raises:
            OSError: if the file cannot be written.
        """
        path = self.root / f"tmp_{self.new_name(suffix)}"
        try:
            path.write_bytes(data)
            yield path
        finally:
            path.unlink(missing_ok=True)

    # ── Eviction ──────────────────────────────────────────────────────────────

    def sweep(self, now: float | None = None) -> int:
        """Delete files older than the retention window.

        Args:
            now: Reference epoch time; defaults to ``time.time()``.

        Returns:
            Number of files removed.
        """
        now = time.time() if now is None else now
        cutoff = now - self.retention_seconds
        removed = 0
        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            logger.debug("AudioStore: cannot list %s: %s", self.root, exc)
            return 0

        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                if entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    removed += 1
            except OSError as exc:
                logger.debug("AudioStore: skipping %s during sweep: %s", entry.name, exc)

        if removed:
            logger.info("AudioStore: swept %d expired file(s)", removed)
        return removed

    def start_sweeper(self) -> None:
        """Start the background sweep thread (no-op if already running)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name="npc-relay-audio-sweeper",
            daemon=True,
        )
        self._sweeper.start()

    def stop_sweeper(self, timeout: float | None = 5.0) -> None:
        """Signal the sweep thread to exit and wait for it briefly."""
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout)
            self._sweeper = None

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def _sweep_loop(self) -> None:
        # Event.wait doubles as an interruptible sleep.
        while not self._stop_event.wait(self.sweep_interval_seconds):
            self.sweep()
