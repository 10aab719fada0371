"""
Ranking Tables

Ordered, read-only collections of qualifier rankings (one division) and
skills rankings (one event).

A team's position for cutoff purposes is its 1-based index after a stable
sort ascending by the competition-assigned rank, so equal ranks keep their
original table order.
"""

import logging
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar

from .eligibility_models import QualifierRanking, SkillsRanking


logger = logging.getLogger(__name__)

R = TypeVar('R', QualifierRanking, SkillsRanking)


class _RankedTable(Generic[R]):
    """
    Shared behavior for ranking tables.

    Holds at most one ranking per team: the first occurrence wins and later
    duplicates are dropped. Dropped rows stay in ``dropped`` so input
    validation can report them.
    """

    table_name = "ranked"

    def __init__(self, rankings: Iterable[R] = ()):
        self._rankings: List[R] = []
        self._by_team: Dict[int, R] = {}
        self.dropped: List[R] = []

        for ranking in rankings:
            if not self._accepts(ranking):
                self.dropped.append(ranking)
                continue
            if ranking.team_id in self._by_team:
                logger.debug(
                    "Duplicate %s ranking for team %s dropped (kept rank %s, dropped rank %s)",
                    self.table_name, ranking.team_id,
                    self._by_team[ranking.team_id].rank, ranking.rank
                )
                self.dropped.append(ranking)
                continue
            self._rankings.append(ranking)
            self._by_team[ranking.team_id] = ranking

        # sorted() is stable: ties in rank keep table order
        self._sorted: List[R] = sorted(self._rankings, key=lambda r: r.rank)
        self._positions: Dict[int, int] = {
            ranking.team_id: position
            for position, ranking in enumerate(self._sorted, start=1)
        }

    def _accepts(self, ranking: R) -> bool:
        return True

    def _derive(self, rankings: List[R]) -> "_RankedTable[R]":
        return type(self)(rankings)

    def __len__(self) -> int:
        return len(self._rankings)

    def __iter__(self) -> Iterator[R]:
        return iter(self._rankings)

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._by_team

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} teams)"

    @property
    def is_empty(self) -> bool:
        return not self._rankings

    def get(self, team_id: int) -> Optional[R]:
        """Ranking for a team, or None if the team has no entry."""
        return self._by_team.get(team_id)

    def team_ids(self) -> List[int]:
        """Team ids in table order."""
        return [ranking.team_id for ranking in self._rankings]

    def filter(self, predicate: Callable[[R], bool]) -> "_RankedTable[R]":
        """New table of the same type with only the rankings matching predicate."""
        return self._derive([ranking for ranking in self._rankings if predicate(ranking)])

    def sorted_by_rank(self) -> List[R]:
        """Rankings stable-sorted ascending by rank."""
        return list(self._sorted)

    def position_of(self, team_id: int) -> Optional[int]:
        """1-based position of a team in rank order, None if absent."""
        return self._positions.get(team_id)

    def top(self, cutoff: int) -> List[int]:
        """Team ids occupying positions 1..cutoff."""
        return [ranking.team_id for ranking in self._sorted[:max(cutoff, 0)]]


class RankingTable(_RankedTable[QualifierRanking]):
    """
    Qualifier rankings for one division of one event.

    Rankings without a usable rank (below 1, as the API client produces for
    missing fields) are dropped.
    """

    table_name = "qualifier"

    def __init__(self, rankings: Iterable[QualifierRanking] = (), division_id: Optional[int] = None):
        self.division_id = division_id
        super().__init__(rankings)

    def _accepts(self, ranking: QualifierRanking) -> bool:
        if ranking.rank < 1:
            logger.debug(
                "Qualifier ranking for team %s has invalid rank %s; ignored",
                ranking.team_id, ranking.rank
            )
            return False
        return True

    def _derive(self, rankings: List[QualifierRanking]) -> "RankingTable":
        return RankingTable(rankings, division_id=self.division_id)

    @classmethod
    def from_api_rows(cls, rows: Sequence[Dict[str, Any]], division_id: Optional[int] = None) -> "RankingTable":
        """Build a table from results API rankings rows."""
        return cls([QualifierRanking.from_api_dict(row) for row in rows], division_id=division_id)


class SkillsTable(_RankedTable[SkillsRanking]):
    """
    Skills rankings for one event.

    A rank of 0 means the team has no skills runs; such entries are treated
    as absent.
    """

    table_name = "skills"

    def _accepts(self, ranking: SkillsRanking) -> bool:
        return ranking.is_ranked

    def _derive(self, rankings: List[SkillsRanking]) -> "SkillsTable":
        return SkillsTable(rankings)

    @classmethod
    def from_api_entries(cls, rows: Sequence[Dict[str, Any]]) -> "SkillsTable":
        """
        Build a table from results API skills rows.

        The API returns one row per team per mission; consecutive rows for the
        same team are merged into a single SkillsRanking.
        """
        rankings = []
        index = 0
        while index < len(rows):
            bundle = [rows[index]]
            team_id = (rows[index].get("team") or {}).get("id")
            if index + 1 < len(rows) and (rows[index + 1].get("team") or {}).get("id") == team_id:
                bundle.append(rows[index + 1])
                index += 1
            rankings.append(SkillsRanking.from_api_entries(bundle))
            index += 1
        return cls(rankings)
