"""
Eligibility Evaluator

Applies an award's rule set to one team and explains the outcome.

Criteria, in reporting order:
1. Qualifier rank within the top threshold of the qualifier table
2. Skills rank within the top threshold of the skills table
3. Programming (autonomous) skills score > 0
4. Driver (piloting) skills score > 0, when the rule requires it

Every failing criterion adds one reason; evaluation never stops at the
first failure. Pure calculation logic - no I/O and no state carried
between calls.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .award_rules import AwardRule
from .cutoff_calculator import CutoffPopulation, ThresholdCutoffCalculator
from .eligibility_models import (
    AwardMode,
    EligibilitySnapshot,
    EligibilityVerdict,
    GradeBand,
    SkillsRanking,
    Team,
)
from .grade_classifier import GradeClassifier
from .ranking_tables import RankingTable, SkillsTable


logger = logging.getLogger(__name__)

NOT_EVALUATED_REASON = "No ranking or skills data available"

PopulationArg = Union[CutoffPopulation, Tuple[int, int], int, None]


class EligibilityEvaluator:
    """
    Evaluates a single award rule set per team.

    Usage:
        evaluator = EligibilityEvaluator(rule_for(AwardCategory.ALL_AROUND))
        verdict = evaluator.evaluate(team, qualifier_table, skills_table, AwardMode.COMBINED)

    In SPLIT mode, when the evaluator knows the roster, the tables are
    narrowed to the evaluated team's grade band before cutoffs are computed.
    Without a roster, split-mode tables must already be band-filtered; the
    evaluator warns once and uses them as given.
    """

    def __init__(
        self,
        rule: AwardRule,
        roster: Optional[Iterable[Team]] = None,
        classifier: Optional[GradeClassifier] = None
    ):
        self.rule = rule
        self.calculator = ThresholdCutoffCalculator(rule.threshold, rule.minimum_cutoff)
        self.classifier = classifier or GradeClassifier()
        self.roster: Optional[Dict[int, Team]] = (
            {team.id: team for team in roster} if roster is not None else None
        )
        self._band_cache: Optional[Tuple[RankingTable, SkillsTable, GradeBand, RankingTable, SkillsTable]] = None
        self._warned_split_without_roster = False

    # ------------------------------------------------------------------
    # Cutoffs and grade filtering
    # ------------------------------------------------------------------

    def cutoffs_for(
        self,
        qualifier_table: RankingTable,
        skills_table: SkillsTable,
        population_for_cutoff: PopulationArg = None
    ) -> CutoffPopulation:
        """
        Qualifier and skills cutoffs.

        Args:
            qualifier_table: Qualifier rankings (possibly band-filtered)
            skills_table: Skills rankings (possibly band-filtered)
            population_for_cutoff: Override population sizes; a single int
                applies to both tables

        Returns:
            CutoffPopulation holding the two cutoffs
        """
        population = self._population(qualifier_table, skills_table, population_for_cutoff)
        return self.calculator.cutoffs(population)

    def tables_for_band(
        self,
        qualifier_table: RankingTable,
        skills_table: SkillsTable,
        band: GradeBand
    ) -> Tuple[RankingTable, SkillsTable]:
        """
        Narrow both tables to teams in a grade band.

        Ranking teams missing from the roster have no known grade and fold
        into the non-middle band.
        """
        cached = self._band_cache
        if cached and cached[0] is qualifier_table and cached[1] is skills_table and cached[2] == band:
            return cached[3], cached[4]

        roster = self.roster or {}

        def in_band(ranking) -> bool:
            return self.classifier.band_of(roster.get(ranking.team_id)) == band

        filtered_qualifier = qualifier_table.filter(in_band)
        filtered_skills = skills_table.filter(in_band)
        self._band_cache = (qualifier_table, skills_table, band, filtered_qualifier, filtered_skills)

        logger.debug(
            "Band %s: %d/%d qualifier rankings, %d/%d skills rankings",
            band.value, len(filtered_qualifier), len(qualifier_table),
            len(filtered_skills), len(skills_table)
        )
        return filtered_qualifier, filtered_skills

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        team: Team,
        qualifier_table: RankingTable,
        skills_table: SkillsTable,
        mode: AwardMode = AwardMode.COMBINED,
        population_for_cutoff: PopulationArg = None
    ) -> EligibilityVerdict:
        """
        Evaluate one team.

        Args:
            team: Team to evaluate
            qualifier_table: Division qualifier rankings
            skills_table: Event skills rankings
            mode: COMBINED or SPLIT award mode
            population_for_cutoff: Optional population size override

        Returns:
            EligibilityVerdict with reasons for every failed criterion
        """
        if mode == AwardMode.SPLIT:
            if self.roster is not None:
                qualifier_table, skills_table = self.tables_for_band(
                    qualifier_table, skills_table, self.classifier.band_of(team)
                )
            elif not self._warned_split_without_roster:
                self._warned_split_without_roster = True
                logger.warning(
                    "%s evaluated in split mode without a roster; tables are used as given "
                    "and must already be filtered to one grade band",
                    self.rule.display_name
                )

        cutoffs = self.cutoffs_for(qualifier_table, skills_table, population_for_cutoff)
        skills_entry = skills_table.get(team.id)

        snapshot = EligibilitySnapshot(
            qualifier_rank=qualifier_table.position_of(team.id),
            qualifier_cutoff=cutoffs.qualifier,
            skills_rank=skills_table.position_of(team.id),
            skills_cutoff=cutoffs.skills,
            challenge_a_score=skills_entry.programming_score if skills_entry else None,
            challenge_a_attempts=skills_entry.programming_attempts if skills_entry else None,
            challenge_b_score=skills_entry.driver_score if skills_entry else None,
            challenge_b_attempts=skills_entry.driver_attempts if skills_entry else None,
        )

        reasons: List[str] = []
        reasons.extend(self._check_rank("Qualifier Ranking", snapshot.qualifier_rank, cutoffs.qualifier))
        reasons.extend(self._check_rank("Skills Ranking", snapshot.skills_rank, cutoffs.skills))
        reasons.extend(self._check_challenge_a(skills_entry))
        if self.rule.require_challenge_b:
            reasons.extend(self._check_challenge_b(skills_entry))

        return EligibilityVerdict(
            team=team,
            eligible=not reasons,
            reasons=reasons,
            snapshot=snapshot,
        )

    @staticmethod
    def not_evaluated(team: Team) -> EligibilityVerdict:
        """Verdict for a team when ranking or skills data is missing."""
        return EligibilityVerdict(
            team=team,
            eligible=False,
            reasons=[NOT_EVALUATED_REASON],
            snapshot=EligibilitySnapshot(),
            evaluated=False,
        )

    # ------------------------------------------------------------------
    # Criteria
    # ------------------------------------------------------------------

    def _check_rank(self, label: str, position: Optional[int], cutoff: int) -> List[str]:
        if position is None:
            return [f"{label}: Not ranked (cutoff: {cutoff})"]
        if position > cutoff:
            return [f"{label}: {position} (cutoff: {cutoff})"]
        return []

    def _check_challenge_a(self, entry: Optional[SkillsRanking]) -> List[str]:
        if entry is None:
            return ["No programming score"]
        if entry.programming_score > 0:
            return []
        if entry.programming_attempts == 0:
            return ["No programming attempts"]
        return [f"Programming score: {entry.programming_score} (attempts: {entry.programming_attempts})"]

    def _check_challenge_b(self, entry: Optional[SkillsRanking]) -> List[str]:
        if entry is None or entry.driver_score <= 0:
            return ["No driver score"]
        return []

    def _population(
        self,
        qualifier_table: RankingTable,
        skills_table: SkillsTable,
        population_for_cutoff: PopulationArg
    ) -> CutoffPopulation:
        if population_for_cutoff is None:
            return CutoffPopulation(qualifier=len(qualifier_table), skills=len(skills_table))
        if isinstance(population_for_cutoff, CutoffPopulation):
            return population_for_cutoff
        if isinstance(population_for_cutoff, int):
            return CutoffPopulation(qualifier=population_for_cutoff, skills=population_for_cutoff)
        qualifier_size, skills_size = population_for_cutoff
        return CutoffPopulation(qualifier=qualifier_size, skills=skills_size)
