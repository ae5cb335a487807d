"""Storefront user entity."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """A chat user, identified externally by their Telegram id."""
    telegram_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    id: Optional[int] = None
    joined_at: Optional[datetime] = None
    last_active: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        if self.username:
            return f"@{self.username}"
        return str(self.telegram_id)
