from __future__ import annotations

from typing import Optional, Protocol

from .model import Settings


class SettingsRepository(Protocol):
    def get(self) -> Optional[Settings]:
        """Return the singleton settings row, or None when none has been saved yet."""

        raise NotImplementedError
