"""
Result Aggregator

Partitions evaluated teams into eligible and ineligible lists and builds
lookup maps for presentation code.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from .eligibility_evaluator import EligibilityEvaluator
from .eligibility_models import EligibilitySnapshot, EligibilityVerdict, Team


@dataclass
class AggregatedResult:
    """
    Eligible/ineligible partition of a team list.

    Both lists keep the input team order; the maps are keyed by team id.
    """
    eligible: List[Team] = field(default_factory=list)
    ineligible: List[Team] = field(default_factory=list)
    reasons_by_team_id: Dict[int, List[str]] = field(default_factory=dict)
    precomputed_by_team_id: Dict[int, EligibilitySnapshot] = field(default_factory=dict)
    verdicts: Dict[int, EligibilityVerdict] = field(default_factory=dict)


class ResultAggregator:
    """Pure partitioning of verdicts; holds no state."""

    def aggregate(
        self,
        teams: Iterable[Team],
        verdicts: Mapping[int, EligibilityVerdict]
    ) -> AggregatedResult:
        """
        Partition teams by their verdicts.

        Args:
            teams: Teams in event iteration order
            verdicts: Verdicts keyed by team id (an iterable of verdicts is
                also accepted)

        Returns:
            AggregatedResult; a team without a verdict is reported as not
            evaluated and ineligible
        """
        if not isinstance(verdicts, Mapping):
            verdicts = {verdict.team_id: verdict for verdict in verdicts}

        result = AggregatedResult()
        for team in teams:
            if team.id in result.verdicts:
                continue
            verdict = verdicts.get(team.id) or EligibilityEvaluator.not_evaluated(team)

            result.verdicts[team.id] = verdict
            result.reasons_by_team_id[team.id] = list(verdict.reasons)
            result.precomputed_by_team_id[team.id] = verdict.snapshot
            if verdict.eligible:
                result.eligible.append(team)
            else:
                result.ineligible.append(team)

        return result
