"""Data models for vocabulary groups."""

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class Group:
    """An ordered set of items unlocked one after another.

    Groups are owned by the surrounding application. The engine only
    reads them and writes back the unlock flag and session counters.
    """

    name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    item_ids: list[str] = field(default_factory=list)
    unlocked: bool = False
    completed_sessions: int = 0
    accuracy: int = 0  # 0-100, lifetime across the group's items

    def __contains__(self, item_id: str) -> bool:
        return item_id in self.item_ids

    def __str__(self) -> str:
        return f"{self.name} ({len(self.item_ids)} items)"
