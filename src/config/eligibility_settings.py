"""
Centralized Award Eligibility Settings

Thresholds and rule toggles for the capstone award eligibility engine.
Change these settings to match a season's judging guide.
"""


class EligibilitySettings:
    """
    Award eligibility controls.

    Thresholds are fractions of the ranked population; cutoffs always round
    up and never drop below MINIMUM_CUTOFF.
    """

    # ================================================================
    # THRESHOLDS
    # ================================================================

    ALL_AROUND_THRESHOLD = 0.5
    # Top 50% of qualifier rankings and of skills rankings

    EXCELLENCE_THRESHOLD = 0.4
    # Top 40% of qualifier rankings and of skills rankings

    MINIMUM_CUTOFF = 1
    # An empty or tiny population still yields one eligible slot

    # ================================================================
    # RULE TOGGLES
    # ================================================================

    REQUIRE_DRIVER_SCORE_ALL_AROUND = True
    # True:  Driver/piloting skills score must be > 0
    # False: Driver/piloting score is reported but not required

    REQUIRE_DRIVER_SCORE_EXCELLENCE = False
    # Excellence only requires the programming/autonomous score

    DEFAULT_SPLIT_BAND = "Not Middle School"
    # Band evaluated for a split award when the caller names none

    # ================================================================
    # RUNTIME
    # ================================================================

    DEFAULT_PROGRAM = "ADC"
    # Program used for requirement labels when none is injected

    BATCH_MAX_WORKERS = 4
    # Worker threads for multi-division batch recomputation

    LOG_EXCLUDED_TEAMS = True
    # True:  Log every ineligible team with its reasons at DEBUG
    # False: Only log summary counts
