"""
Integration Tests for Award Eligibility Manager

Runs the full pipeline: tables, mode resolution, grade filtering,
evaluation and aggregation.
"""

import logging

import pytest

from award_system.eligibility_evaluator import NOT_EVALUATED_REASON
from award_system.eligibility_exceptions import UnknownAwardCategoryException, UnknownGradeBandException
from award_system.eligibility_manager import AwardEligibilityManager
from award_system.eligibility_models import AwardCategory, AwardMode, GradeBand
from award_system.ranking_tables import RankingTable, SkillsTable
from constants.program_categories import ProgramCategory
from stores.skills_cache_store import SkillsCacheStore, WorldSkillsEntry


MIDDLE_SCHOOL_IDS = [3, 6, 9, 12, 15, 18]


@pytest.fixture
def manager():
    return AwardEligibilityManager()


@pytest.fixture
def twenty_team_event(make_team, make_qualifier, make_skills):
    """
    20 teams, six of them middle school (ids 3, 6, ..., 18).
    Team N is ranked N in qualifiers and in skills.
    """
    teams = [
        make_team(i, grade="Middle School" if i in MIDDLE_SCHOOL_IDS else "High School")
        for i in range(1, 21)
    ]
    qualifier = [make_qualifier(i, i) for i in range(1, 21)]
    skills = [make_skills(i, i) for i in range(1, 21)]
    return teams, qualifier, skills


@pytest.fixture
def split_excellence(make_award):
    return [
        make_award("Excellence Award (Middle School)", order=1),
        make_award("Excellence Award (High School)", order=2),
    ]


class TestSplitAwards:
    """Split-mode eligibility pools."""

    def test_middle_school_cutoff_uses_band_population(self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_eligibility(
            teams, qualifier, skills, split_excellence,
            AwardCategory.EXCELLENCE, grade_band=GradeBand.MIDDLE_SCHOOL
        )

        assert report.mode == AwardMode.SPLIT
        assert report.grade_band == GradeBand.MIDDLE_SCHOOL
        assert report.qualifier_cutoff == 3
        assert report.skills_cutoff == 3
        assert report.eligible_ids == [3, 6, 9]
        assert report.ineligible_ids == [12, 15, 18]
        assert report.reasons_by_team_id[12] == [
            "Qualifier Ranking: 4 (cutoff: 3)",
            "Skills Ranking: 4 (cutoff: 3)",
        ]

    def test_out_of_band_teams_are_neither_eligible_nor_ineligible(
            self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_eligibility(
            teams, qualifier, skills, split_excellence,
            AwardCategory.EXCELLENCE, grade_band="Middle School"
        )

        assert len(report.out_of_band) == 14
        assert set(report.verdicts) == set(MIDDLE_SCHOOL_IDS)
        assert not report.is_eligible(1)

    def test_default_band_is_not_middle_school(self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_eligibility(teams, qualifier, skills, split_excellence, "Excellence")

        assert report.grade_band == GradeBand.NOT_MIDDLE_SCHOOL
        assert report.qualifier_cutoff == 6
        assert report.eligible_ids == [1, 2, 4, 5, 7, 8]

    def test_compute_for_award_takes_band_from_title(self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_for_award(split_excellence[0], teams, qualifier, skills, split_excellence)

        assert report.grade_band == GradeBand.MIDDLE_SCHOOL
        assert report.eligible_ids == [3, 6, 9]

    def test_compute_for_award_alone_is_combined(self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_for_award(split_excellence[0], teams, qualifier, skills)

        assert report.mode == AwardMode.COMBINED
        assert report.grade_band is None
        assert report.qualifier_cutoff == 8


    def test_unknown_band_raises(self, manager, twenty_team_event, split_excellence):
        teams, qualifier, skills = twenty_team_event

        with pytest.raises(UnknownGradeBandException):
            manager.compute_eligibility(
                teams, qualifier, skills, split_excellence,
                AwardCategory.EXCELLENCE, grade_band="Elementary"
            )


class TestCombinedAwards:
    """Combined-mode and degenerate inputs."""

    def test_combined_award_uses_whole_event(self, manager, twenty_team_event, make_award):
        teams, qualifier, skills = twenty_team_event

        report = manager.compute_eligibility(
            teams, qualifier, skills, [make_award("Excellence Award")], AwardCategory.EXCELLENCE
        )

        assert report.mode == AwardMode.COMBINED
        assert report.award_offered
        assert report.eligible_ids == list(range(1, 9))
        assert report.out_of_band == []
        assert len(report.eligible) + len(report.ineligible) == 20

    def test_no_award_offered_still_evaluates(self, manager, ten_team_event):
        teams, qualifier, skills = ten_team_event

        report = manager.compute_eligibility(teams, qualifier, skills, [], AwardCategory.ALL_AROUND)

        assert not report.award_offered
        assert report.mode == AwardMode.COMBINED
        assert report.eligible_ids == [1, 2, 3, 4, 5]

    def test_accepts_prebuilt_tables(self, manager, ten_team_event):
        teams, qualifier, skills = ten_team_event

        report = manager.compute_eligibility(
            teams, RankingTable(qualifier), SkillsTable(skills), [], AwardCategory.ALL_AROUND
        )

        assert report.eligible_ids == [1, 2, 3, 4, 5]

    def test_empty_skills_marks_all_not_evaluated(self, manager, ten_team_event):
        teams, qualifier, _ = ten_team_event

        report = manager.compute_eligibility(teams, qualifier, [], [], AwardCategory.ALL_AROUND)

        assert not report.evaluated
        assert report.eligible == []
        assert report.ineligible_ids == list(range(1, 11))
        assert all(reasons == [NOT_EVALUATED_REASON] for reasons in report.reasons_by_team_id.values())
        assert report.qualifier_cutoff is None

    def test_empty_qualifier_marks_all_not_evaluated(self, manager, ten_team_event):
        teams, _, skills = ten_team_event

        report = manager.compute_eligibility(teams, [], skills, [], AwardCategory.EXCELLENCE)

        assert not report.evaluated
        assert len(report.ineligible) == 10

    def test_ranking_only_team_uses_placeholder(self, manager, ten_team_event, make_qualifier):
        teams, qualifier, skills = ten_team_event

        report = manager.compute_eligibility(
            teams, qualifier + [make_qualifier(42, 11)], skills, [], AwardCategory.ALL_AROUND
        )

        placeholder = report.ineligible[-1]
        assert placeholder.id == 42
        assert placeholder.number == "42A"
        assert placeholder.name == ""
        assert "Skills Ranking: Not ranked (cutoff: 5)" in report.reasons_by_team_id[42]

    def test_bad_ranking_rows_warned_once(self, manager, ten_team_event, make_qualifier, caplog):
        teams, qualifier, skills = ten_team_event
        rows = qualifier + [make_qualifier(2, 9), make_qualifier(11, -1)]

        with caplog.at_level(logging.DEBUG, logger="award_system"):
            manager.compute_eligibility(teams, rows, skills, [], AwardCategory.EXCELLENCE)

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len([m for m in warnings if "invalid qualifier rank" in m]) == 1
        assert len([m for m in warnings if "qualifier rankings (expected at most 1)" in m]) == 1

    def test_requirements_attached(self, ten_team_event):
        teams, qualifier, skills = ten_team_event
        manager = AwardEligibilityManager(program=ProgramCategory.VIQRC)

        report = manager.compute_eligibility(teams, qualifier, skills, [], AwardCategory.ALL_AROUND)

        assert len(report.requirements) == 3
        assert "Autonomous Coding Skills Mission" in report.requirements[2]

    def test_unknown_category_raises(self, manager, ten_team_event):
        teams, qualifier, skills = ten_team_event

        with pytest.raises(UnknownAwardCategoryException):
            manager.compute_eligibility(teams, qualifier, skills, [], "Judges Award")

    def test_compute_for_non_capstone_award_raises(self, manager, ten_team_event, make_award):
        teams, qualifier, skills = ten_team_event

        with pytest.raises(UnknownAwardCategoryException):
            manager.compute_for_award(make_award("Design Award"), teams, qualifier, skills)


class TestWorldSkillsAttachment:

    def test_world_skills_entries_attached(self, ten_team_event):
        teams, qualifier, skills = ten_team_event
        store = SkillsCacheStore()
        store.refresh(ProgramCategory.ADC, "High School", [
            WorldSkillsEntry(team_id=1, team_number="1A", rank=12, combined=180),
        ])
        manager = AwardEligibilityManager(skills_cache=store, program=ProgramCategory.ADC)

        report = manager.compute_eligibility(teams, qualifier, skills, [], AwardCategory.EXCELLENCE)

        assert set(report.world_skills_by_team_id) == {1}
        assert report.world_skills_by_team_id[1].rank == 12

    def test_no_store_means_no_entries(self, manager, ten_team_event):
        teams, qualifier, skills = ten_team_event

        report = manager.compute_eligibility(teams, qualifier, skills, [], AwardCategory.EXCELLENCE)

        assert report.world_skills_by_team_id == {}
