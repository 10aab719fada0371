"""
Award Eligibility Data Models

Data structures for teams, qualifier and skills rankings, award descriptors
and the eligibility verdicts produced from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Sequence, Union

from .eligibility_exceptions import (
    InvalidRankingDataException,
    UnknownAwardCategoryException,
    UnknownGradeBandException,
)


MIDDLE_SCHOOL = "Middle School"


class AwardCategory(Enum):
    """Capstone award categories; each value is the title marker substring."""
    ALL_AROUND = "All-Around Champion"
    EXCELLENCE = "Excellence Award"

    @property
    def marker(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: Union["AwardCategory", str]) -> "AwardCategory":
        """
        Resolve a category from an enum member, enum name or marker string.

        Accepts "AllAround", "All-Around Champion", "ALL_AROUND",
        "Excellence", "Excellence Award", ...

        Raises:
            UnknownAwardCategoryException: If the value matches no category
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.replace("-", "").replace("_", "").replace(" ", "").lower()
            for category in cls:
                if normalized in (
                    category.name.replace("_", "").lower(),
                    category.value.replace("-", "").replace(" ", "").lower(),
                ):
                    return category
        raise UnknownAwardCategoryException(value)


class AwardMode(Enum):
    """Whether an award category is issued once or once per grade band"""
    COMBINED = "combined"
    SPLIT = "split"


class GradeBand(Enum):
    """Binary grade partition used for split awards"""
    MIDDLE_SCHOOL = "Middle School"
    NOT_MIDDLE_SCHOOL = "Not Middle School"

    @classmethod
    def from_value(cls, value: Union["GradeBand", str]) -> "GradeBand":
        """
        Resolve a band; "High School" is an alias of the non-middle band.

        Raises:
            UnknownGradeBandException: If the value names no band
        """
        if isinstance(value, cls):
            return value
        if value == MIDDLE_SCHOOL:
            return cls.MIDDLE_SCHOOL
        if value in ("Not Middle School", "High School"):
            return cls.NOT_MIDDLE_SCHOOL
        raise UnknownGradeBandException(value)


@dataclass
class Team:
    """
    Team identity as listed on an event roster.

    Owned by the caller; the engine never mutates it.
    """
    id: int
    number: str = ""
    name: str = ""
    grade: str = ""
    city: str = ""
    region: str = ""
    country: str = ""
    organization: str = ""

    @property
    def location(self) -> str:
        """Location string (e.g., 'Austin, Texas, United States')."""
        parts = [self.city, self.region, self.country]
        return ", ".join(part for part in parts if part)

    @classmethod
    def placeholder(cls, team_id: int, number: str = "") -> "Team":
        """Minimal identity for a team known only from a ranking record."""
        return cls(id=team_id, number=number)

    @classmethod
    def from_api_dict(cls, data: Dict[str, Any]) -> "Team":
        """Build a Team from a results API team payload."""
        location = data.get("location") or {}
        return cls(
            id=data.get("id", 0),
            number=data.get("number", "") or "",
            name=data.get("team_name", "") or "",
            grade=data.get("grade", "") or "",
            city=location.get("city", "") or "",
            region=location.get("region", "") or "",
            country=location.get("country", "") or "",
            organization=data.get("organization", "") or "",
        )


@dataclass
class QualifierRanking:
    """
    One team's standing in the qualification matches of a division.

    Only team_id and rank matter for eligibility; the remaining fields are
    part of the shared record type.
    """
    team_id: int
    rank: int
    team_number: str = ""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    wp: int = 0
    ap: int = 0
    sp: int = 0
    high_score: int = 0
    average_points: float = 0.0
    total_points: int = 0
    division_id: Optional[int] = None

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '7-2-1')."""
        return f"{self.wins}-{self.losses}-{self.ties}"

    @classmethod
    def from_api_dict(cls, data: Dict[str, Any]) -> "QualifierRanking":
        """
        Build a ranking from a results API rankings row.

        Missing numeric fields default to -1, matching the API client.

        Raises:
            InvalidRankingDataException: If the row has no team id
        """
        team = data.get("team") or {}
        if "id" not in team:
            raise InvalidRankingDataException(
                "Qualifier ranking row has no team id", table="qualifier"
            )
        division = data.get("division") or {}
        return cls(
            team_id=team["id"],
            team_number=team.get("name", "") or "",
            rank=data.get("rank", -1),
            wins=data.get("wins", -1),
            losses=data.get("losses", -1),
            ties=data.get("ties", -1),
            wp=data.get("wp", -1),
            ap=data.get("ap", -1),
            sp=data.get("sp", -1),
            high_score=data.get("high_score", -1),
            average_points=data.get("average_points", -1.0),
            total_points=data.get("total_points", -1),
            division_id=division.get("id"),
        )


@dataclass
class SkillsRanking:
    """
    One team's combined skills standing at an event.

    ChallengeA is the programming/autonomous mission, ChallengeB the
    driver/piloting mission. A rank of 0 means unranked.
    """
    team_id: int
    rank: int
    team_number: str = ""
    programming_score: int = 0
    programming_attempts: int = 0
    driver_score: int = 0
    driver_attempts: int = 0

    @property
    def combined_score(self) -> int:
        return self.programming_score + self.driver_score

    @property
    def is_ranked(self) -> bool:
        return self.rank > 0

    @classmethod
    def from_api_entries(cls, bundle: Sequence[Dict[str, Any]]) -> "SkillsRanking":
        """
        Merge the per-mission API rows of one team into a single ranking.

        Args:
            bundle: One or two rows with "type" of "driver" or "programming"

        Raises:
            InvalidRankingDataException: If the bundle is empty or mixes teams
        """
        if not bundle:
            raise InvalidRankingDataException("Empty skills bundle", table="skills")

        team_ids = {(row.get("team") or {}).get("id") for row in bundle}
        if len(team_ids) != 1 or None in team_ids:
            raise InvalidRankingDataException(
                "Skills bundle must contain rows for exactly one team",
                table="skills",
                context_dict={"team_ids": sorted(str(t) for t in team_ids)}
            )

        first = bundle[0]
        team = first.get("team") or {}
        ranking = cls(
            team_id=team["id"],
            team_number=team.get("name", "") or "",
            rank=first.get("rank", 0) or 0,
        )
        for row in bundle:
            skills_type = row.get("type", "")
            if skills_type == "driver":
                ranking.driver_score = row.get("score", 0) or 0
                ranking.driver_attempts = row.get("attempts", 0) or 0
            elif skills_type == "programming":
                ranking.programming_score = row.get("score", 0) or 0
                ranking.programming_attempts = row.get("attempts", 0) or 0
        return ranking


@dataclass
class AwardDescriptor:
    """
    An award offered in a division.

    Category and grade scope are derived from the free-text title.
    """
    title: str
    order: int = 0
    division_id: Optional[int] = None
    winners: List[int] = field(default_factory=list)
    qualifications: List[str] = field(default_factory=list)

    @property
    def is_decided(self) -> bool:
        """True once winners have been announced."""
        return len(self.winners) > 0

    @classmethod
    def from_api_dict(cls, data: Dict[str, Any], division_id: Optional[int] = None) -> "AwardDescriptor":
        """Build an award, keeping only winners from the given division."""
        winners = []
        for winner in data.get("teamWinners") or []:
            winner_division = (winner.get("division") or {}).get("id")
            if division_id is None or winner_division == division_id:
                team_id = (winner.get("team") or {}).get("id")
                if team_id is not None:
                    winners.append(team_id)
        return cls(
            title=data.get("title", "") or "",
            order=data.get("order", 0) or 0,
            division_id=division_id,
            winners=winners,
            qualifications=list(data.get("qualifications") or []),
        )


@dataclass
class EligibilitySnapshot:
    """
    The inputs a verdict was decided from, kept for display.

    Ranks are 1-based positions in the (possibly grade-filtered) table after
    a stable sort by rank; None means the team has no entry.
    """
    qualifier_rank: Optional[int] = None
    qualifier_cutoff: Optional[int] = None
    skills_rank: Optional[int] = None
    skills_cutoff: Optional[int] = None
    challenge_a_score: Optional[int] = None
    challenge_a_attempts: Optional[int] = None
    challenge_b_score: Optional[int] = None
    challenge_b_attempts: Optional[int] = None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {
            "qualifier_rank": self.qualifier_rank,
            "qualifier_cutoff": self.qualifier_cutoff,
            "skills_rank": self.skills_rank,
            "skills_cutoff": self.skills_cutoff,
            "challenge_a_score": self.challenge_a_score,
            "challenge_a_attempts": self.challenge_a_attempts,
            "challenge_b_score": self.challenge_b_score,
            "challenge_b_attempts": self.challenge_b_attempts,
        }


@dataclass
class EligibilityVerdict:
    """
    Eligible/ineligible determination for one team.

    reasons is empty if and only if the team is eligible. evaluated is False
    when ranking or skills data was missing and no rule could be applied.
    """
    team: Team
    eligible: bool
    reasons: List[str] = field(default_factory=list)
    snapshot: EligibilitySnapshot = field(default_factory=EligibilitySnapshot)
    evaluated: bool = True

    @property
    def team_id(self) -> int:
        return self.team.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team.id,
            "team_number": self.team.number,
            "eligible": self.eligible,
            "reasons": list(self.reasons),
            "snapshot": self.snapshot.to_dict(),
            "evaluated": self.evaluated,
        }


@dataclass
class EligibilityReport:
    """
    Result of one eligibility run for a (division, category, grade band).

    eligible and ineligible follow the event's team order. out_of_band lists
    roster teams excluded from a split award's pool.
    """
    category: AwardCategory
    mode: AwardMode
    grade_band: Optional[GradeBand]
    award_offered: bool
    eligible: List[Team] = field(default_factory=list)
    ineligible: List[Team] = field(default_factory=list)
    out_of_band: List[Team] = field(default_factory=list)
    reasons_by_team_id: Dict[int, List[str]] = field(default_factory=dict)
    precomputed_by_team_id: Dict[int, EligibilitySnapshot] = field(default_factory=dict)
    verdicts: Dict[int, EligibilityVerdict] = field(default_factory=dict)
    qualifier_cutoff: Optional[int] = None
    skills_cutoff: Optional[int] = None
    evaluated: bool = True
    requirements: List[str] = field(default_factory=list)
    world_skills_by_team_id: Dict[int, Any] = field(default_factory=dict)

    @property
    def eligible_ids(self) -> List[int]:
        return [team.id for team in self.eligible]

    @property
    def ineligible_ids(self) -> List[int]:
        return [team.id for team in self.ineligible]

    def is_eligible(self, team_id: int) -> bool:
        verdict = self.verdicts.get(team_id)
        return verdict is not None and verdict.eligible

    def get_summary(self) -> str:
        """Get human-readable summary"""
        band = f" ({self.grade_band.value})" if self.grade_band else ""
        return (
            f"{self.category.value}{band} [{self.mode.value}]: "
            f"{len(self.eligible)} eligible, {len(self.ineligible)} ineligible"
        )
