"""
Eligibility Input Validator

Checks the shape of ranking, skills, roster and award inputs before an
eligibility run. Findings are reported, never raised: the engine degrades
gracefully on every problem found here.

Usage Example:
    from award_system.input_validator import EligibilityInputValidator

    validator = EligibilityInputValidator()
    result = validator.validate(teams, qualifier_rankings, skills_rankings, awards)

    if not result.valid:
        for error in result.errors:
            print(error)
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import logging

from .award_mode_resolver import AwardModeResolver, HIGH_MARKER, MIDDLE_MARKER
from .eligibility_models import (
    AwardCategory,
    AwardDescriptor,
    QualifierRanking,
    SkillsRanking,
    Team,
)


class ValidationSeverity(Enum):
    """Severity levels for validation findings"""
    ERROR = "error"        # Input violates an invariant; affected rows are ignored
    WARNING = "warning"    # Input is unusual; results may surprise
    INFO = "info"


@dataclass
class ValidationError:
    """
    Single validation finding.

    Attributes:
        severity: Finding severity level
        category: Finding category (e.g., "qualifier", "skills", "awards")
        message: Human-readable message
        context: Additional context (team ids, titles, etc.)
    """
    severity: ValidationSeverity
    category: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        result = f"[{self.severity.value.upper()}] {self.category}: {self.message}"
        if self.context:
            result += f"\n  Context: {self.context}"
        return result


@dataclass
class ValidationResult:
    """Result of a validation run."""
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    info: List[ValidationError] = field(default_factory=list)
    total_checks: int = 0

    def add_error(
        self,
        severity: ValidationSeverity,
        category: str,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Add a finding to the result"""
        error = ValidationError(severity=severity, category=category, message=message, context=context or {})
        if severity == ValidationSeverity.ERROR:
            self.errors.append(error)
            self.valid = False
        elif severity == ValidationSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.info.append(error)

    def get_summary(self) -> str:
        """Get human-readable summary"""
        return (
            f"Validation Result: {'PASS' if self.valid else 'FAIL'}\n"
            f"  Total Checks: {self.total_checks}\n"
            f"  Errors: {len(self.errors)}\n"
            f"  Warnings: {len(self.warnings)}\n"
            f"  Info: {len(self.info)}"
        )


class EligibilityInputValidator:
    """
    Validator for eligibility inputs.

    Checks:
    - Qualifier rankings (duplicates, ranks below 1)
    - Skills rankings (duplicates, negative values, scores without attempts)
    - Roster coverage (ranking teams missing from the roster)
    - Award taxonomy (grade-specific award without its counterpart)
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._resolver = AwardModeResolver()

    def validate(
        self,
        teams: Sequence[Team],
        qualifier_rankings: Sequence[QualifierRanking],
        skills_rankings: Sequence[SkillsRanking],
        awards: Sequence[AwardDescriptor] = ()
    ) -> ValidationResult:
        result = ValidationResult()

        self._validate_qualifier(result, qualifier_rankings)
        self._validate_skills(result, skills_rankings)
        self._validate_roster(result, teams, qualifier_rankings, skills_rankings)
        self._validate_awards(result, awards)

        self._logger.debug(
            "Input validation complete: %d checks, %d errors, %d warnings",
            result.total_checks, len(result.errors), len(result.warnings)
        )
        return result

    def _validate_qualifier(self, result: ValidationResult, rankings: Sequence[QualifierRanking]):
        """Duplicate teams and unusable ranks (2 checks)."""
        result.total_checks += 2

        for team_id, count in Counter(r.team_id for r in rankings).items():
            if count > 1:
                result.add_error(
                    ValidationSeverity.ERROR, "qualifier",
                    f"Team {team_id} has {count} qualifier rankings (expected at most 1)",
                    {"team_id": team_id, "count": count}
                )

        for ranking in rankings:
            if ranking.rank < 1:
                result.add_error(
                    ValidationSeverity.ERROR, "qualifier",
                    f"Team {ranking.team_id} has invalid qualifier rank {ranking.rank}",
                    {"team_id": ranking.team_id, "rank": ranking.rank}
                )

    def _validate_skills(self, result: ValidationResult, rankings: Sequence[SkillsRanking]):
        """Duplicates, negative values, scores without attempts (3 checks)."""
        result.total_checks += 3

        ranked = [r for r in rankings if r.is_ranked]
        for team_id, count in Counter(r.team_id for r in ranked).items():
            if count > 1:
                result.add_error(
                    ValidationSeverity.ERROR, "skills",
                    f"Team {team_id} has {count} skills rankings (expected at most 1)",
                    {"team_id": team_id, "count": count}
                )

        for ranking in rankings:
            values = {
                "rank": ranking.rank,
                "programming_score": ranking.programming_score,
                "programming_attempts": ranking.programming_attempts,
                "driver_score": ranking.driver_score,
                "driver_attempts": ranking.driver_attempts,
            }
            negative = {name: value for name, value in values.items() if value < 0}
            if negative:
                result.add_error(
                    ValidationSeverity.ERROR, "skills",
                    f"Team {ranking.team_id} has negative skills values",
                    {"team_id": ranking.team_id, **negative}
                )

            if ranking.programming_score > 0 and ranking.programming_attempts == 0:
                result.add_error(
                    ValidationSeverity.WARNING, "skills",
                    f"Team {ranking.team_id} has a programming score without attempts",
                    {"team_id": ranking.team_id}
                )
            if ranking.driver_score > 0 and ranking.driver_attempts == 0:
                result.add_error(
                    ValidationSeverity.WARNING, "skills",
                    f"Team {ranking.team_id} has a driver score without attempts",
                    {"team_id": ranking.team_id}
                )

    def _validate_roster(
        self,
        result: ValidationResult,
        teams: Sequence[Team],
        qualifier_rankings: Sequence[QualifierRanking],
        skills_rankings: Sequence[SkillsRanking]
    ):
        """Ranking teams missing from the roster (1 check)."""
        result.total_checks += 1

        roster_ids = {team.id for team in teams}
        missing = sorted(
            {r.team_id for r in qualifier_rankings if r.team_id not in roster_ids}
            | {r.team_id for r in skills_rankings if r.is_ranked and r.team_id not in roster_ids}
        )
        if missing:
            result.add_error(
                ValidationSeverity.WARNING, "roster",
                f"{len(missing)} ranked team(s) missing from the event roster",
                {"team_ids": missing}
            )

    def _validate_awards(self, result: ValidationResult, awards: Sequence[AwardDescriptor]):
        """Grade-specific awards without a counterpart (1 check per category)."""
        for category in AwardCategory:
            result.total_checks += 1
            titles = [award.title for award in self._resolver.awards_for(awards, category)]
            has_middle = any(MIDDLE_MARKER in title for title in titles)
            has_high = any(HIGH_MARKER in title for title in titles)
            if has_middle != has_high:
                result.add_error(
                    ValidationSeverity.WARNING, "awards",
                    f"{category.value} is offered for only one grade band; treating as combined",
                    {"titles": titles}
                )
