"""
Award Rules

Configuration table mapping each capstone award category to its threshold
and required criteria, plus the human-readable requirement list shown next
to eligibility results.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Type, Union

from config.eligibility_settings import EligibilitySettings
from constants.program_categories import ProgramCategory, PROGRAM_CONFIGS

from .eligibility_models import AwardCategory


@dataclass(frozen=True)
class AwardRule:
    """
    Eligibility rule set for one award category.

    Attributes:
        category: Award category the rule applies to
        threshold: Fraction of each ranked population that qualifies
        require_challenge_b: Whether a driver/piloting score > 0 is required
        minimum_cutoff: Smallest cutoff returned for any population
    """
    category: AwardCategory
    threshold: float
    require_challenge_b: bool
    minimum_cutoff: int = 1

    @property
    def display_name(self) -> str:
        return self.category.value

    @property
    def threshold_percent(self) -> int:
        return int(round(self.threshold * 100))


def build_award_rules(settings: Type[EligibilitySettings] = EligibilitySettings) -> Dict[AwardCategory, AwardRule]:
    """Rule table for every category, read from settings."""
    return {
        AwardCategory.ALL_AROUND: AwardRule(
            category=AwardCategory.ALL_AROUND,
            threshold=settings.ALL_AROUND_THRESHOLD,
            require_challenge_b=settings.REQUIRE_DRIVER_SCORE_ALL_AROUND,
            minimum_cutoff=settings.MINIMUM_CUTOFF,
        ),
        AwardCategory.EXCELLENCE: AwardRule(
            category=AwardCategory.EXCELLENCE,
            threshold=settings.EXCELLENCE_THRESHOLD,
            require_challenge_b=settings.REQUIRE_DRIVER_SCORE_EXCELLENCE,
            minimum_cutoff=settings.MINIMUM_CUTOFF,
        ),
    }


def rule_for(
    category: Union[AwardCategory, str],
    settings: Type[EligibilitySettings] = EligibilitySettings
) -> AwardRule:
    return build_award_rules(settings)[AwardCategory.from_value(category)]


def requirements_for(
    category: Union[AwardCategory, str],
    program: Optional[ProgramCategory] = None,
    settings: Type[EligibilitySettings] = EligibilitySettings
) -> List[str]:
    """
    Requirement bullets for an award, worded with the program's mission names.

    Args:
        category: Award category
        program: Program whose skills mission labels to use
        settings: Settings class providing thresholds

    Returns:
        Ordered list of requirement sentences
    """
    rule = rule_for(category, settings)
    program = program or ProgramCategory.from_display_name(settings.DEFAULT_PROGRAM)
    config = PROGRAM_CONFIGS[program]
    percent = rule.threshold_percent

    requirements = [
        f"Be ranked in the top {percent}% of qualification rankings at the "
        f"conclusion of qualifying matches.",
        f"Be ranked in the top {percent}% of overall skills rankings at the "
        f"conclusion of {config.challenge_a_label.lower()} and "
        f"{config.challenge_b_label.lower()} skills matches.",
    ]
    if rule.require_challenge_b:
        requirements.append(
            f"Participation in both the {config.challenge_b_label} Skills Mission and the "
            f"{config.challenge_a_label} Skills Mission is required, with a score of "
            f"greater than 0 in each Mission."
        )
    else:
        requirements.append(
            f"A score of greater than 0 in the {config.challenge_a_label} Skills Mission."
        )
    return requirements
