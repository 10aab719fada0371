"""
Grade Classifier

Resolves the grade band used to partition teams for split awards.

The partition is binary: exactly "Middle School" is the middle-school band,
every other grade (High School, College, Elementary, unknown) falls into
"Not Middle School".
"""

from typing import Dict, Iterable, List, Optional, Union

from .eligibility_models import GradeBand, Team, MIDDLE_SCHOOL


class GradeClassifier:
    """Maps teams to grade bands."""

    def grade_of(self, team: Optional[Team]) -> str:
        """Team grade string, "" when the team or its grade is unknown."""
        if team is None:
            return ""
        return team.grade or ""

    def band_of(self, team: Optional[Team]) -> GradeBand:
        if self.grade_of(team) == MIDDLE_SCHOOL:
            return GradeBand.MIDDLE_SCHOOL
        return GradeBand.NOT_MIDDLE_SCHOOL

    def matches_band(self, team: Optional[Team], band: Union[GradeBand, str]) -> bool:
        """
        Whether a team belongs to a band.

        Args:
            team: Roster team (None for teams known only from rankings)
            band: GradeBand, "Middle School", "Not Middle School" or "High School"
        """
        return self.band_of(team) == GradeBand.from_value(band)

    def partition(self, teams: Iterable[Team]) -> Dict[GradeBand, List[Team]]:
        """Split teams into both bands, preserving order."""
        partitions: Dict[GradeBand, List[Team]] = {band: [] for band in GradeBand}
        for team in teams:
            partitions[self.band_of(team)].append(team)
        return partitions
