"""
Pytest configuration for test discovery and imports.

Provides factory fixtures for:
- Roster teams
- Qualifier and skills rankings
- Division award lists
"""

import sys
from pathlib import Path
import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src must come before tests/ so packages like constants and config are
    not shadowed by test directories of the same name.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root)]:
        if path in new_path:
            new_path.remove(path)

    new_path.insert(0, str(project_root))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# ELIGIBILITY FIXTURES
# ============================================================================

@pytest.fixture
def make_team():
    """Factory for roster teams; number defaults to '<id>A'."""
    from award_system.eligibility_models import Team

    def _create_team(team_id, grade="High School", number=None):
        return Team(id=team_id, number=number or f"{team_id}A", name=f"Team {team_id}", grade=grade)
    return _create_team


@pytest.fixture
def make_qualifier():
    """Factory for qualifier rankings."""
    from award_system.eligibility_models import QualifierRanking

    def _create_qualifier(team_id, rank, wins=0, losses=0, ties=0):
        return QualifierRanking(
            team_id=team_id, rank=rank, team_number=f"{team_id}A",
            wins=wins, losses=losses, ties=ties
        )
    return _create_qualifier


@pytest.fixture
def make_skills():
    """Factory for skills rankings; every mission has one attempt by default."""
    from award_system.eligibility_models import SkillsRanking

    def _create_skills(team_id, rank, programming=50, driver=50,
                       programming_attempts=1, driver_attempts=1):
        return SkillsRanking(
            team_id=team_id, rank=rank, team_number=f"{team_id}A",
            programming_score=programming, programming_attempts=programming_attempts,
            driver_score=driver, driver_attempts=driver_attempts
        )
    return _create_skills


@pytest.fixture
def make_award():
    """Factory for division awards."""
    from award_system.eligibility_models import AwardDescriptor

    def _create_award(title, order=0, winners=None):
        return AwardDescriptor(title=title, order=order, winners=list(winners or []))
    return _create_award


@pytest.fixture
def ten_team_event(make_team, make_qualifier, make_skills):
    """
    Ten high school teams; team N is ranked N in qualifiers and in skills,
    and every team has positive programming and driver scores.
    """
    teams = [make_team(i) for i in range(1, 11)]
    qualifier = [make_qualifier(i, i) for i in range(1, 11)]
    skills = [make_skills(i, i) for i in range(1, 11)]
    return teams, qualifier, skills
