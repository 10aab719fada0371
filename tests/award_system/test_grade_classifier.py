"""
Unit Tests for Grade Classifier
"""

import pytest

from award_system.eligibility_exceptions import UnknownGradeBandException
from award_system.eligibility_models import GradeBand
from award_system.grade_classifier import GradeClassifier


class TestGradeClassifier:
    """Tests for binary grade banding."""

    @pytest.fixture
    def classifier(self):
        return GradeClassifier()

    def test_middle_school_band(self, classifier, make_team):
        assert classifier.band_of(make_team(1, grade="Middle School")) == GradeBand.MIDDLE_SCHOOL

    @pytest.mark.parametrize("grade", ["High School", "College", "Elementary", "", "middle school"])
    def test_other_grades_fold_to_not_middle_school(self, classifier, make_team, grade):
        assert classifier.band_of(make_team(1, grade=grade)) == GradeBand.NOT_MIDDLE_SCHOOL

    def test_unknown_team_is_not_middle_school(self, classifier):
        assert classifier.grade_of(None) == ""
        assert classifier.band_of(None) == GradeBand.NOT_MIDDLE_SCHOOL

    def test_matches_band_accepts_strings(self, classifier, make_team):
        high = make_team(1, grade="High School")
        middle = make_team(2, grade="Middle School")

        assert classifier.matches_band(high, "High School")
        assert classifier.matches_band(high, "Not Middle School")
        assert classifier.matches_band(middle, "Middle School")
        assert not classifier.matches_band(middle, GradeBand.NOT_MIDDLE_SCHOOL)

    def test_matches_band_rejects_unknown_band(self, classifier, make_team):
        with pytest.raises(UnknownGradeBandException) as exc_info:
            classifier.matches_band(make_team(1), "Elementary")
        assert exc_info.value.error_code == "ELIG_BAND_005"
        assert exc_info.value.context_dict["invalid_band"] == "Elementary"

    def test_partition_preserves_order(self, classifier, make_team):
        teams = [
            make_team(1, grade="High School"),
            make_team(2, grade="Middle School"),
            make_team(3, grade="College"),
            make_team(4, grade="Middle School"),
        ]

        partitions = classifier.partition(teams)

        assert [t.id for t in partitions[GradeBand.MIDDLE_SCHOOL]] == [2, 4]
        assert [t.id for t in partitions[GradeBand.NOT_MIDDLE_SCHOOL]] == [1, 3]
