"""
Competition Program Constants

Explicit program categories and their configuration table. Code that needs
program-specific labels or world-skills cache partitions looks them up here
instead of comparing free-text program names.

Example:
    config = PROGRAM_CONFIGS[ProgramCategory.ADC]
    config.challenge_a_label   # "Autonomous Flight"
    config.skills_partitions   # ("Middle School", "High School")
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ProgramCategory(Enum):
    """Competition programs supported by the results API"""
    ADC = "Aerial Drone Competition"
    VIQRC = "VEX IQ Robotics Competition"
    V5RC = "VEX V5 Robotics Competition"
    VURC = "VEX U Robotics Competition"
    VAIRC = "VEX AI Robotics Competition"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def config(self) -> "ProgramConfig":
        return PROGRAM_CONFIGS[self]

    @classmethod
    def from_display_name(cls, name: str) -> "ProgramCategory":
        """
        Resolve a program from its display name or enum name.

        Args:
            name: "Aerial Drone Competition", "ADC", "adc", ...

        Returns:
            Matching ProgramCategory

        Raises:
            ValueError: If no program matches
        """
        cleaned = (name or "").strip()
        for program in cls:
            if cleaned == program.value or cleaned.upper() == program.name:
                return program
        raise ValueError(f"Unknown program: '{name}'")


@dataclass(frozen=True)
class ProgramConfig:
    """
    Static configuration for one program.

    Attributes:
        program_id: Results API program id
        skills_partitions: Grades that have their own world-skills cache
        default_partition: Partition used when a team's grade has none
        challenge_a_label: Name of the autonomous/programming skills mission
        challenge_b_label: Name of the driver/piloting skills mission
    """
    program_id: int
    skills_partitions: Tuple[str, ...]
    default_partition: str
    challenge_a_label: str
    challenge_b_label: str

    def partition_for_grade(self, grade: str) -> str:
        """Cache partition holding world-skills entries for a grade."""
        if grade in self.skills_partitions:
            return grade
        return self.default_partition


PROGRAM_CONFIGS = {
    ProgramCategory.ADC: ProgramConfig(
        program_id=44,
        skills_partitions=("Middle School", "High School"),
        default_partition="High School",
        challenge_a_label="Autonomous Flight",
        challenge_b_label="Piloting",
    ),
    ProgramCategory.VIQRC: ProgramConfig(
        program_id=41,
        skills_partitions=("Elementary", "Middle School"),
        default_partition="Middle School",
        challenge_a_label="Autonomous Coding",
        challenge_b_label="Driver",
    ),
    ProgramCategory.V5RC: ProgramConfig(
        program_id=1,
        skills_partitions=("Middle School", "High School"),
        default_partition="High School",
        challenge_a_label="Programming",
        challenge_b_label="Driver",
    ),
    ProgramCategory.VURC: ProgramConfig(
        program_id=4,
        skills_partitions=("College",),
        default_partition="College",
        challenge_a_label="Programming",
        challenge_b_label="Driver",
    ),
    ProgramCategory.VAIRC: ProgramConfig(
        program_id=57,
        skills_partitions=("High School", "College"),
        default_partition="College",
        challenge_a_label="Programming",
        challenge_b_label="Driver",
    ),
}
