import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping

from syft_access_tree.engine.grouping import ParentKey
from syft_access_tree.spec.folder import Folder

logger = logging.getLogger(__name__)

INITIAL_FOLDERS_PER_LEVEL = 10
FOLDERS_INCREMENT = 10


@dataclass(frozen=True)
class LevelState:
    """Pagination state for the children of one parent."""

    folders: tuple[Folder, ...]
    visible_count: int

    @property
    def total_count(self) -> int:
        return len(self.folders)

    @property
    def has_more(self) -> bool:
        return self.visible_count < self.total_count

    @property
    def remaining(self) -> int:
        return self.total_count - self.visible_count

    @property
    def visible_folders(self) -> tuple[Folder, ...]:
        return self.folders[: self.visible_count]


@dataclass(frozen=True)
class LevelCounts:
    visible_count: int = 0
    total_count: int = 0
    has_more: bool = False


class LevelDisclosureStore:
    def __init__(self):
        self._levels: dict[ParentKey, LevelState] = {}

    def rebuild(
        self,
        grouped: Mapping[ParentKey, list[Folder]],
        initial_page_size: int = INITIAL_FOLDERS_PER_LEVEL,
    ) -> None:
        """Replace all levels. Previous disclosure counts are discarded."""
        self._levels = {
            parent_key: LevelState(
                folders=tuple(folders),
                visible_count=min(initial_page_size, len(folders)),
            )
            for parent_key, folders in grouped.items()
        }
        logger.debug(
            f"Rebuilt {len(self._levels)} levels with {self.total_folder_count} folders"
        )

    def clear(self) -> None:
        self._levels = {}

    def show_more(
        self, parent_key: ParentKey, increment: int = FOLDERS_INCREMENT
    ) -> LevelState | None:
        level = self._levels.get(parent_key)
        if level is None:
            logger.debug(f"No level for parent {parent_key!r}, ignoring show more")
            return None
        if not level.has_more:
            return level

        visible_count = min(level.visible_count + max(increment, 0), level.total_count)
        updated = replace(level, visible_count=visible_count)
        self._levels[parent_key] = updated
        return updated

    def visible_folders(self) -> list[Folder]:
        visible: list[Folder] = []
        for level in self._levels.values():
            visible.extend(level.visible_folders)
        return visible

    def levels_with_more(self) -> list[ParentKey]:
        return [key for key, level in self._levels.items() if level.has_more]

    def counts_for(self, parent_key: ParentKey) -> LevelCounts:
        level = self._levels.get(parent_key)
        if level is None:
            return LevelCounts()
        return LevelCounts(
            visible_count=level.visible_count,
            total_count=level.total_count,
            has_more=level.has_more,
        )

    def snapshot(self) -> Mapping[ParentKey, LevelState]:
        return MappingProxyType(dict(self._levels))

    @property
    def total_folder_count(self) -> int:
        return sum(level.total_count for level in self._levels.values())

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, parent_key: object) -> bool:
        return parent_key in self._levels
