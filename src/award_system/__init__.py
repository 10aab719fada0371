"""
Award System

Capstone award eligibility (All-Around Champion, Excellence Award) computed
from qualifier rankings, skills rankings and a division's award list.
"""

from .eligibility_models import (
    AwardCategory,
    AwardDescriptor,
    AwardMode,
    EligibilityReport,
    EligibilitySnapshot,
    EligibilityVerdict,
    GradeBand,
    QualifierRanking,
    SkillsRanking,
    Team,
)
from .ranking_tables import RankingTable, SkillsTable
from .grade_classifier import GradeClassifier
from .cutoff_calculator import CutoffPopulation, ThresholdCutoffCalculator, cutoff
from .award_mode_resolver import AwardModeResolver
from .award_rules import AwardRule, build_award_rules, requirements_for, rule_for
from .eligibility_evaluator import EligibilityEvaluator
from .result_aggregator import AggregatedResult, ResultAggregator
from .input_validator import EligibilityInputValidator
from .eligibility_manager import AwardEligibilityManager
from .batch_runner import BatchResult, EligibilityBatchRunner, EligibilityJob

__all__ = [
    'AwardCategory',
    'AwardDescriptor',
    'AwardMode',
    'EligibilityReport',
    'EligibilitySnapshot',
    'EligibilityVerdict',
    'GradeBand',
    'QualifierRanking',
    'SkillsRanking',
    'Team',
    'RankingTable',
    'SkillsTable',
    'GradeClassifier',
    'CutoffPopulation',
    'ThresholdCutoffCalculator',
    'cutoff',
    'AwardModeResolver',
    'AwardRule',
    'build_award_rules',
    'requirements_for',
    'rule_for',
    'EligibilityEvaluator',
    'AggregatedResult',
    'ResultAggregator',
    'EligibilityInputValidator',
    'AwardEligibilityManager',
    'BatchResult',
    'EligibilityBatchRunner',
    'EligibilityJob',
]
