"""
World Skills Cache Store

In-memory store of season-wide world skills standings, one partition per
(program, grade). Partitions are filled by an explicit refresh with data the
caller already fetched; the store never performs I/O itself.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from constants.program_categories import ProgramCategory, PROGRAM_CONFIGS


@dataclass(frozen=True)
class CacheKey:
    """Partition key: one program and one grade level"""
    program: ProgramCategory
    grade: str

    def __str__(self) -> str:
        return f"{self.program.name}/{self.grade}"


@dataclass
class WorldSkillsEntry:
    """One team's season-best skills result."""
    team_id: int
    team_number: str
    rank: int
    combined: int = 0
    programming: int = 0
    driver: int = 0
    highest_programming: int = 0
    highest_driver: int = 0
    event_sku: str = ""
    event_region: str = ""
    event_region_id: int = 0

    @classmethod
    def from_api_dict(cls, data: Dict[str, Any]) -> "WorldSkillsEntry":
        """Build an entry from a world skills API row."""
        team = data.get("team") or {}
        scores = data.get("scores") or {}
        return cls(
            team_id=team.get("id", 0),
            team_number=team.get("team", "") or "",
            rank=data.get("rank", 0),
            combined=scores.get("score", 0),
            programming=scores.get("programming", 0),
            driver=scores.get("driver", 0),
            highest_programming=scores.get("maxProgramming", 0),
            highest_driver=scores.get("maxDriver", 0),
            event_sku=(data.get("event") or {}).get("sku", "") or "",
            event_region=team.get("eventRegion", "") or "",
            event_region_id=team.get("eventRegionId", 0) or 0,
        )


@dataclass
class WorldSkillsCache:
    """World skills entries for one partition, indexed by team id."""
    entries: List[WorldSkillsEntry] = field(default_factory=list)
    refreshed_at: Optional[datetime] = None

    def __post_init__(self):
        self._by_team = {entry.team_id: entry for entry in self.entries}

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, team_id: int) -> Optional[WorldSkillsEntry]:
        return self._by_team.get(team_id)


@dataclass
class RefreshLogEntry:
    """Audit entry for a partition refresh"""
    timestamp: datetime
    key: CacheKey
    item_count: int
    success: bool
    details: Dict[str, Any] = field(default_factory=dict)


class SkillsCacheStore:
    """
    World skills caches keyed by (program, grade).

    Usage:
        store = SkillsCacheStore()
        store.populate(ProgramCategory.ADC, fetch=lambda grade: api_rows_for(grade))
        entry = store.world_skills_for(team, ProgramCategory.ADC)
    """

    def __init__(self, store_name: str = "world_skills"):
        self.store_name = store_name
        self.data: Dict[CacheKey, WorldSkillsCache] = {}
        self.refresh_log: List[RefreshLogEntry] = []
        self.logger = logging.getLogger(f"Store.{store_name}")
        self._lock = threading.RLock()

    def refresh(
        self,
        program: ProgramCategory,
        grade: str,
        entries: Iterable[Any]
    ) -> WorldSkillsCache:
        """
        Replace one partition.

        Args:
            program: Program of the partition
            grade: Grade level of the partition
            entries: WorldSkillsEntry objects or world skills API rows

        Returns:
            The new cache for the partition
        """
        key = CacheKey(program, grade)
        parsed = [
            entry if isinstance(entry, WorldSkillsEntry) else WorldSkillsEntry.from_api_dict(entry)
            for entry in entries
        ]
        cache = WorldSkillsCache(entries=parsed, refreshed_at=datetime.now())

        with self._lock:
            self.data[key] = cache
            self._log_refresh(key, len(cache), True)

        self.logger.info("%s cache populated with %d teams", key, len(cache))
        return cache

    def populate(
        self,
        program: ProgramCategory,
        fetch: Callable[[str], Iterable[Any]]
    ) -> Dict[CacheKey, WorldSkillsCache]:
        """
        Refresh every partition of a program.

        A partition whose fetch raises is left as it was and logged; the
        remaining partitions are still refreshed.

        Args:
            program: Program to refresh
            fetch: Callable returning world skills rows for a grade

        Returns:
            Caches successfully refreshed, keyed by partition
        """
        refreshed = {}
        for grade in PROGRAM_CONFIGS[program].skills_partitions:
            key = CacheKey(program, grade)
            try:
                rows = fetch(grade)
            except Exception as e:
                self.logger.error("Failed to fetch world skills for %s: %s", key, e)
                with self._lock:
                    self._log_refresh(key, 0, False, {"error": str(e)})
                continue
            refreshed[key] = self.refresh(program, grade, rows)
        return refreshed

    def get(self, program: ProgramCategory, grade: str) -> Optional[WorldSkillsCache]:
        with self._lock:
            return self.data.get(CacheKey(program, grade))

    def world_skills_for(self, team: Any, program: ProgramCategory) -> Optional[WorldSkillsEntry]:
        """
        World skills entry for a team.

        The partition is chosen from the team's grade; grades without their
        own partition use the program's default partition.
        """
        partition = PROGRAM_CONFIGS[program].partition_for_grade(getattr(team, "grade", "") or "")
        cache = self.get(program, partition)
        if cache is None:
            return None
        return cache.get(team.id)

    def clear(self, program: Optional[ProgramCategory] = None) -> None:
        """Drop every partition, or only those of one program."""
        with self._lock:
            if program is None:
                self.data.clear()
            else:
                for key in [k for k in self.data if k.program == program]:
                    del self.data[key]

    def size(self) -> int:
        return len(self.data)

    def get_statistics(self) -> Dict[str, Any]:
        """Partition sizes and refresh counts."""
        with self._lock:
            return {
                'store_name': self.store_name,
                'partitions': {str(key): len(cache) for key, cache in self.data.items()},
                'successful_refreshes': sum(1 for entry in self.refresh_log if entry.success),
                'failed_refreshes': sum(1 for entry in self.refresh_log if not entry.success),
            }

    def _log_refresh(self, key: CacheKey, item_count: int, success: bool,
                     details: Optional[Dict[str, Any]] = None) -> None:
        self.refresh_log.append(RefreshLogEntry(
            timestamp=datetime.now(),
            key=key,
            item_count=item_count,
            success=success,
            details=details or {}
        ))
