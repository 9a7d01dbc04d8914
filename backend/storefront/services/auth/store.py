"""Durable local slot holding the serialized admin session."""
import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def load(self) -> dict[str, Any] | None: ...

    def save(self, payload: dict[str, Any]) -> None: ...

    def clear(self) -> None: ...


class FileSessionStore:
    """Session slot backed by a single JSON file, written atomically."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        """Return the stored payload, or None when the slot is empty or unreadable."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None
        return payload if isinstance(payload, dict) else None

    def save(self, payload: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=str(self.path.parent), delete=False, encoding="utf-8"
        ) as tf:
            json.dump(payload, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)
        try:
            shutil.move(str(temp_path), str(self.path))
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemorySessionStore:
    """Process-local slot, used by the read API and tests."""

    def __init__(self, payload: dict[str, Any] | None = None):
        self._payload = dict(payload) if payload is not None else None

    def load(self) -> dict[str, Any] | None:
        return dict(self._payload) if self._payload is not None else None

    def save(self, payload: dict[str, Any]) -> None:
        self._payload = dict(payload)

    def clear(self) -> None:
        self._payload = None
