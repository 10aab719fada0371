"""
Award Mode Resolver

Decides from a division's award titles whether a capstone award category is
issued once for the whole division (combined) or once per grade band
(split). Titles are free text maintained by event partners, so anything
short of a clear middle-school + high-school pair resolves to combined.
"""

import logging
from typing import Iterable, List, Optional, Union

from .eligibility_models import AwardCategory, AwardDescriptor, AwardMode, GradeBand
from .ranking_tables import RankingTable


logger = logging.getLogger(__name__)

MIDDLE_MARKER = "Middle"
HIGH_MARKER = "High"


class AwardModeResolver:
    """
    Resolves combined vs split mode for an award category.

    Usage:
        resolver = AwardModeResolver()
        mode = resolver.resolve(division_awards, AwardCategory.EXCELLENCE)
    """

    def awards_for(
        self,
        awards: Iterable[AwardDescriptor],
        category: Union[AwardCategory, str]
    ) -> List[AwardDescriptor]:
        """Awards whose title carries the category marker, sorted by order."""
        category = AwardCategory.from_value(category)
        matching = [award for award in awards if category.marker in award.title]
        return sorted(matching, key=lambda award: award.order)

    def is_offered(self, awards: Iterable[AwardDescriptor], category: Union[AwardCategory, str]) -> bool:
        return len(self.awards_for(awards, category)) > 0

    def resolve(
        self,
        awards: Iterable[AwardDescriptor],
        category: Union[AwardCategory, str]
    ) -> AwardMode:
        """
        Resolve the award mode.

        Args:
            awards: All awards offered in the division
            category: Award category to resolve

        Returns:
            SPLIT if both a middle-school and a high-school award of the
            category exist, COMBINED otherwise (including no award at all)
        """
        category_awards = self.awards_for(awards, category)
        has_middle = any(MIDDLE_MARKER in award.title for award in category_awards)
        has_high = any(HIGH_MARKER in award.title for award in category_awards)

        mode = AwardMode.SPLIT if has_middle and has_high else AwardMode.COMBINED
        logger.debug(
            "Resolved %s mode=%s from titles %s",
            AwardCategory.from_value(category).value, mode.value,
            [award.title for award in category_awards]
        )
        return mode

    def band_for_award(self, award: AwardDescriptor) -> Optional[GradeBand]:
        """Grade band named by an award title, None for ungraded titles."""
        if MIDDLE_MARKER in award.title:
            return GradeBand.MIDDLE_SCHOOL
        if HIGH_MARKER in award.title:
            return GradeBand.NOT_MIDDLE_SCHOOL
        return None

    def category_for_award(self, award: AwardDescriptor) -> Optional[AwardCategory]:
        """Capstone category of an award, None for other awards."""
        for category in AwardCategory:
            if category.marker in award.title:
                return category
        return None

    def eligibility_available(self, award: AwardDescriptor, qualifier_table: RankingTable) -> bool:
        """
        Whether showing eligible teams makes sense for an award.

        Only capstone awards without announced winners in a division that has
        qualifier rankings qualify.
        """
        return (
            self.category_for_award(award) is not None
            and not award.is_decided
            and not qualifier_table.is_empty
        )
