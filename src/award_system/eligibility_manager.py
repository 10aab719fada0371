"""
Award Eligibility Manager

Runs one eligibility computation for a (division, award category, grade band):
tables are built from raw rankings, the award mode is resolved from the
division's award titles, each in-scope team is evaluated and the verdicts
are partitioned into the report shown next to the award.

Pure business logic - no network access, no UI. The caller supplies data it
already fetched and receives an EligibilityReport.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, Union

from config.eligibility_settings import EligibilitySettings
from constants.program_categories import ProgramCategory

from .award_mode_resolver import AwardModeResolver
from .award_rules import build_award_rules, requirements_for
from .eligibility_evaluator import EligibilityEvaluator
from .eligibility_exceptions import UnknownAwardCategoryException
from .eligibility_models import (
    AwardCategory,
    AwardDescriptor,
    AwardMode,
    EligibilityReport,
    EligibilityVerdict,
    GradeBand,
    QualifierRanking,
    SkillsRanking,
    Team,
)
from .grade_classifier import GradeClassifier
from .input_validator import EligibilityInputValidator
from .ranking_tables import RankingTable, SkillsTable
from .result_aggregator import ResultAggregator


logger = logging.getLogger(__name__)

QualifierInput = Union[RankingTable, Iterable[QualifierRanking]]
SkillsInput = Union[SkillsTable, Iterable[SkillsRanking]]


class AwardEligibilityManager:
    """
    Computes award eligibility for a division.

    Usage:
        manager = AwardEligibilityManager()
        report = manager.compute_eligibility(
            teams, qualifier_rankings, skills_rankings, division_awards,
            AwardCategory.EXCELLENCE, grade_band=GradeBand.MIDDLE_SCHOOL
        )
        for team in report.eligible:
            print(team.number)

    When a SkillsCacheStore and a program are injected, world skills entries
    for the evaluated teams are attached to the report.
    """

    def __init__(
        self,
        settings: Type[EligibilitySettings] = EligibilitySettings,
        skills_cache: Optional[Any] = None,
        program: Optional[ProgramCategory] = None
    ):
        self.settings = settings
        self.skills_cache = skills_cache
        self.program = program
        self.rules = build_award_rules(settings)
        self.resolver = AwardModeResolver()
        self.classifier = GradeClassifier()
        self.validator = EligibilityInputValidator()
        self.aggregator = ResultAggregator()

    def compute_eligibility(
        self,
        teams: Sequence[Team],
        qualifier_rankings: QualifierInput,
        skills_rankings: SkillsInput,
        awards: Sequence[AwardDescriptor],
        category: Union[AwardCategory, str],
        grade_band: Optional[Union[GradeBand, str]] = None
    ) -> EligibilityReport:
        """
        Compute the eligibility report for one award category.

        Args:
            teams: Event roster in display order
            qualifier_rankings: Division qualifier rankings (list or RankingTable)
            skills_rankings: Event skills rankings (list or SkillsTable)
            awards: All awards offered in the division
            category: Award category to evaluate
            grade_band: Band to evaluate when the award is split; ignored for
                combined awards

        Returns:
            EligibilityReport. Empty qualifier or skills data yields a report
            with every team not evaluated rather than an error.

        Raises:
            UnknownAwardCategoryException: If category names no capstone award
        """
        category = AwardCategory.from_value(category)
        rule = self.rules[category]
        teams = list(teams)
        awards = list(awards)

        qualifier_table = self._qualifier_table(qualifier_rankings)
        skills_table = self._skills_table(skills_rankings)
        self._log_validation(teams, qualifier_table, skills_table, awards)

        mode = self.resolver.resolve(awards, category)
        award_offered = self.resolver.is_offered(awards, category)
        band = None
        if mode == AwardMode.SPLIT:
            band = GradeBand.from_value(grade_band or self.settings.DEFAULT_SPLIT_BAND)

        candidates = self._candidate_teams(teams, qualifier_table, skills_table)
        if band is not None:
            in_scope = [team for team in candidates if self.classifier.band_of(team) == band]
            out_of_band = [team for team in candidates if self.classifier.band_of(team) != band]
        else:
            in_scope, out_of_band = candidates, []

        report = EligibilityReport(
            category=category,
            mode=mode,
            grade_band=band,
            award_offered=award_offered,
            out_of_band=out_of_band,
            requirements=requirements_for(category, self.program, self.settings),
        )

        if qualifier_table.is_empty or skills_table.is_empty:
            logger.info(
                "%s: no ranking or skills data (%d qualifier, %d skills); %d teams not evaluated",
                category.value, len(qualifier_table), len(skills_table), len(in_scope)
            )
            verdicts = {team.id: EligibilityEvaluator.not_evaluated(team) for team in in_scope}
            report.evaluated = False
        else:
            evaluator = EligibilityEvaluator(rule, roster=teams, classifier=self.classifier)
            if band is not None:
                pool_qualifier, pool_skills = evaluator.tables_for_band(qualifier_table, skills_table, band)
            else:
                pool_qualifier, pool_skills = qualifier_table, skills_table

            cutoffs = evaluator.cutoffs_for(pool_qualifier, pool_skills)
            report.qualifier_cutoff = cutoffs.qualifier
            report.skills_cutoff = cutoffs.skills
            logger.debug(
                "%s%s cutoffs: qualifier %d of %d, skills %d of %d",
                category.value, f" ({band.value})" if band else "",
                cutoffs.qualifier, len(pool_qualifier), cutoffs.skills, len(pool_skills)
            )

            verdicts = {
                team.id: evaluator.evaluate(team, qualifier_table, skills_table, mode)
                for team in in_scope
            }

        aggregated = self.aggregator.aggregate(in_scope, verdicts)
        report.eligible = aggregated.eligible
        report.ineligible = aggregated.ineligible
        report.reasons_by_team_id = aggregated.reasons_by_team_id
        report.precomputed_by_team_id = aggregated.precomputed_by_team_id
        report.verdicts = aggregated.verdicts
        report.world_skills_by_team_id = self._world_skills(in_scope)

        self._log_exclusions(report)
        logger.info(report.get_summary())
        return report

    def compute_for_award(
        self,
        award: AwardDescriptor,
        teams: Sequence[Team],
        qualifier_rankings: QualifierInput,
        skills_rankings: SkillsInput,
        awards: Optional[Sequence[AwardDescriptor]] = None
    ) -> EligibilityReport:
        """
        Compute eligibility for a specific award, taking category and grade
        band from its title.

        Args:
            award: The award the user selected
            teams: Event roster
            qualifier_rankings: Division qualifier rankings
            skills_rankings: Event skills rankings
            awards: All division awards (defaults to just this award)

        Raises:
            UnknownAwardCategoryException: If the award is not a capstone award
        """
        category = self.resolver.category_for_award(award)
        if category is None:
            raise UnknownAwardCategoryException(
                award.title,
                message=f"Award '{award.title}' has no eligibility criteria"
            )

        return self.compute_eligibility(
            teams,
            qualifier_rankings,
            skills_rankings,
            awards if awards is not None else [award],
            category,
            grade_band=self.resolver.band_for_award(award),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _qualifier_table(self, rankings: QualifierInput) -> RankingTable:
        if isinstance(rankings, RankingTable):
            return rankings
        return RankingTable(rankings)

    def _skills_table(self, rankings: SkillsInput) -> SkillsTable:
        if isinstance(rankings, SkillsTable):
            return rankings
        return SkillsTable(rankings)

    def _candidate_teams(
        self,
        teams: List[Team],
        qualifier_table: RankingTable,
        skills_table: SkillsTable
    ) -> List[Team]:
        """Roster teams first, then teams known only from ranking records."""
        candidates: List[Team] = []
        seen = set()
        for team in teams:
            if team.id in seen:
                continue
            seen.add(team.id)
            candidates.append(team)

        for ranking in list(qualifier_table) + list(skills_table):
            if ranking.team_id in seen:
                continue
            seen.add(ranking.team_id)
            logger.debug("Team %s is ranked but not on the roster", ranking.team_id)
            candidates.append(Team.placeholder(ranking.team_id, ranking.team_number))

        return candidates

    def _log_validation(
        self,
        teams: List[Team],
        qualifier_table: RankingTable,
        skills_table: SkillsTable,
        awards: Sequence[AwardDescriptor]
    ) -> None:
        qualifier_rows = list(qualifier_table) + qualifier_table.dropped
        skills_rows = list(skills_table) + skills_table.dropped
        result = self.validator.validate(teams, qualifier_rows, skills_rows, awards)
        for finding in result.errors + result.warnings:
            logger.warning("%s", finding)

    def _world_skills(self, teams: List[Team]) -> Dict[int, Any]:
        if self.skills_cache is None or self.program is None:
            return {}
        entries = {}
        for team in teams:
            entry = self.skills_cache.world_skills_for(team, self.program)
            if entry is not None:
                entries[team.id] = entry
        return entries

    def _log_exclusions(self, report: EligibilityReport) -> None:
        if not self.settings.LOG_EXCLUDED_TEAMS or not logger.isEnabledFor(logging.DEBUG):
            return
        for team in report.ineligible:
            verdict: EligibilityVerdict = report.verdicts[team.id]
            logger.debug(
                "Team %s not eligible for %s: %s",
                team.number or team.id, report.category.value, "; ".join(verdict.reasons)
            )
