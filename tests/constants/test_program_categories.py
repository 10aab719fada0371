"""
Tests for program categories and their configuration table.
"""

import dataclasses

import pytest

from constants.program_categories import ProgramCategory, PROGRAM_CONFIGS


class TestProgramCategory:

    @pytest.mark.parametrize("name,expected", [
        ("Aerial Drone Competition", ProgramCategory.ADC),
        ("ADC", ProgramCategory.ADC),
        ("viqrc", ProgramCategory.VIQRC),
        ("  VEX V5 Robotics Competition ", ProgramCategory.V5RC),
    ])
    def test_from_display_name(self, name, expected):
        assert ProgramCategory.from_display_name(name) == expected

    def test_unknown_program(self):
        with pytest.raises(ValueError):
            ProgramCategory.from_display_name("FIRST Robotics Competition")

    def test_every_program_configured(self):
        assert set(PROGRAM_CONFIGS) == set(ProgramCategory)
        for program in ProgramCategory:
            config = program.config
            assert config.default_partition in config.skills_partitions


class TestProgramConfig:

    def test_adc_labels(self):
        config = PROGRAM_CONFIGS[ProgramCategory.ADC]

        assert config.challenge_a_label == "Autonomous Flight"
        assert config.challenge_b_label == "Piloting"
        assert config.program_id == 44

    def test_config_fields(self):
        names = [field.name for field in dataclasses.fields(PROGRAM_CONFIGS[ProgramCategory.V5RC])]

        assert names == [
            "program_id", "skills_partitions", "default_partition",
            "challenge_a_label", "challenge_b_label",
        ]

    @pytest.mark.parametrize("program,grade,expected", [
        (ProgramCategory.ADC, "Middle School", "Middle School"),
        (ProgramCategory.ADC, "Elementary", "High School"),
        (ProgramCategory.VIQRC, "High School", "Middle School"),
        (ProgramCategory.VAIRC, "", "College"),
    ])
    def test_partition_for_grade(self, program, grade, expected):
        assert PROGRAM_CONFIGS[program].partition_for_grade(grade) == expected
