"""Single-slot JSON file holding the most recently issued OAuth token."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Durable fallback for the access token.

    Every successful authorization overwrites the slot. Failures never raise:
    a failed write is logged and reported as ``False``, and a missing or
    unreadable file reads as ``None``.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, token_payload: Dict[str, Any]) -> bool:
        try:
            if self._path.parent and not self._path.parent.exists():
                self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(token_payload, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not write token file %s: %s", self._path, exc)
            return False
        return True

    def load(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not read token file %s: %s", self._path, exc)
            return None

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring malformed token file %s: %s", self._path, exc)
            return None
        return data if isinstance(data, dict) else None

    def get_access_token(self) -> Optional[str]:
        record = self.load()
        if not record:
            return None
        return record.get("access_token") or None


__all__ = ["TokenStore"]
