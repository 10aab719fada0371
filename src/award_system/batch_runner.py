"""
Eligibility Batch Runner

Recomputes eligibility for many (event, division, award category) jobs at
once. Jobs share no mutable state, so they run in parallel on a thread pool;
a failing job is recorded and the others continue.
"""

import logging
import threading
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config.eligibility_settings import EligibilitySettings

from .eligibility_exceptions import (
    EligibilityComputationException,
    EligibilityException,
    wrap_exception,
)
from .eligibility_manager import AwardEligibilityManager
from .eligibility_models import (
    AwardCategory,
    AwardDescriptor,
    EligibilityReport,
    GradeBand,
    QualifierRanking,
    SkillsRanking,
    Team,
)


logger = logging.getLogger(__name__)

JobKey = Tuple[int, int, AwardCategory, Optional[GradeBand]]


@dataclass
class EligibilityJob:
    """One independent eligibility computation."""
    event_id: int
    division_id: int
    category: AwardCategory
    teams: Sequence[Team] = field(default_factory=list)
    qualifier_rankings: Sequence[QualifierRanking] = field(default_factory=list)
    skills_rankings: Sequence[SkillsRanking] = field(default_factory=list)
    awards: Sequence[AwardDescriptor] = field(default_factory=list)
    grade_band: Optional[GradeBand] = None

    def __post_init__(self):
        self.category = AwardCategory.from_value(self.category)
        if self.grade_band is not None:
            self.grade_band = GradeBand.from_value(self.grade_band)

    @property
    def key(self) -> JobKey:
        return (self.event_id, self.division_id, self.category, self.grade_band)


@dataclass
class BatchResult:
    """Reports, failures and cancellations of a batch run, keyed by job."""
    reports: Dict[JobKey, EligibilityReport] = field(default_factory=dict)
    errors: Dict[JobKey, EligibilityException] = field(default_factory=dict)
    cancelled: List[JobKey] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> int:
        return len(self.reports)

    @property
    def failed(self) -> int:
        return len(self.errors)

    def get_summary(self) -> str:
        return (
            f"Batch: {self.succeeded} succeeded, {self.failed} failed, "
            f"{len(self.cancelled)} cancelled in {self.elapsed_seconds:.2f}s"
        )


class EligibilityBatchRunner:
    """
    Runs eligibility jobs on a worker pool.

    Usage:
        runner = EligibilityBatchRunner(AwardEligibilityManager(), max_workers=4)
        result = runner.run(jobs)
        print(result.get_summary())

    cancel() may be called from another thread; jobs that have not started
    are skipped and reported as cancelled.
    """

    def __init__(
        self,
        manager: Optional[AwardEligibilityManager] = None,
        max_workers: Optional[int] = None
    ):
        self.manager = manager or AwardEligibilityManager()
        self.max_workers = max_workers or EligibilitySettings.BATCH_MAX_WORKERS
        self._cancel_requested = threading.Event()
        self._futures: List[Future] = []
        self._lock = threading.Lock()

    def run(self, jobs: Iterable[EligibilityJob]) -> BatchResult:
        """
        Run every job and collect the outcomes.

        Args:
            jobs: Jobs to run

        Returns:
            BatchResult; never raises for a failing job
        """
        jobs = list(jobs)
        self._cancel_requested.clear()
        result = BatchResult()
        start = time.time()

        if len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                with self._lock:
                    self._futures = []
                    future_to_job = {}
                    for job in jobs:
                        future = executor.submit(self._run_job, job)
                        future_to_job[future] = job
                        self._futures.append(future)

                for future in as_completed(future_to_job):
                    self._collect(result, future_to_job[future], future)
        else:
            # Single job - run directly without thread overhead
            for job in jobs:
                try:
                    report = self._run_job(job)
                except EligibilityException as e:
                    self._record_failure(result, job, e)
                    continue
                self._record_report(result, job, report)

        with self._lock:
            self._futures = []

        result.elapsed_seconds = time.time() - start
        logger.info(result.get_summary())
        return result

    def cancel(self) -> None:
        """Skip every job that has not started yet."""
        self._cancel_requested.set()
        with self._lock:
            pending = [future for future in self._futures if future.cancel()]
        logger.info("Batch cancellation requested; %d queued jobs cancelled", len(pending))

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested.is_set()

    def _run_job(self, job: EligibilityJob) -> Optional[EligibilityReport]:
        if self._cancel_requested.is_set():
            return None
        try:
            return self.manager.compute_eligibility(
                job.teams,
                job.qualifier_rankings,
                job.skills_rankings,
                job.awards,
                job.category,
                grade_band=job.grade_band,
            )
        except Exception as e:
            raise wrap_exception(
                e,
                f"Eligibility computation failed for event {job.event_id} division {job.division_id}",
                exception_class=EligibilityComputationException,
                event_id=job.event_id,
                division_id=job.division_id,
                category=job.category.value,
            )

    def _collect(self, result: BatchResult, job: EligibilityJob, future: Future) -> None:
        try:
            report = future.result()
        except CancelledError:
            result.cancelled.append(job.key)
            return
        except EligibilityException as e:
            self._record_failure(result, job, e)
            return
        self._record_report(result, job, report)

    def _record_report(self, result: BatchResult, job: EligibilityJob,
                       report: Optional[EligibilityReport]) -> None:
        if report is None:
            result.cancelled.append(job.key)
        else:
            result.reports[job.key] = report

    def _record_failure(self, result: BatchResult, job: EligibilityJob, error: EligibilityException) -> None:
        logger.error("Eligibility job %s failed: %s", job.key, error)
        result.errors[job.key] = error
