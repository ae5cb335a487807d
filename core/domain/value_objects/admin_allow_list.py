"""Admin allow-list value object."""
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class AdminAllowList:
    """
    Telegram ids allowed to perform administrative operations.

    Built once at startup from configuration and queried by exact
    integer membership.

    Examples:
        >>> admins = AdminAllowList.from_csv("111, 222")
        >>> admins.is_admin(111)
        True
    """
    telegram_ids: FrozenSet[int] = frozenset()

    @classmethod
    def of(cls, telegram_ids: Iterable[int]) -> "AdminAllowList":
        return cls(telegram_ids=frozenset(int(t) for t in telegram_ids))

    @classmethod
    def from_csv(cls, raw: Optional[str]) -> "AdminAllowList":
        """
        Parse a comma-separated id list.

        Blank entries are skipped; anything else that is not an integer
        raises ValueError so a typo in configuration fails at startup.
        """
        if not raw:
            return cls()

        ids = set()
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                ids.add(int(part))
            except ValueError:
                raise ValueError(f"Invalid admin Telegram id in allow-list: {part!r}")
        return cls(telegram_ids=frozenset(ids))

    def is_admin(self, telegram_id: Optional[int]) -> bool:
        if telegram_id is None:
            return False
        return telegram_id in self.telegram_ids

    def __iter__(self):
        return iter(sorted(self.telegram_ids))

    def __len__(self) -> int:
        return len(self.telegram_ids)
