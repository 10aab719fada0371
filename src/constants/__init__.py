"""
Constants package for the award eligibility engine

Program categories and their per-program configuration.
"""

from .program_categories import ProgramCategory, ProgramConfig, PROGRAM_CONFIGS

__all__ = [
    'ProgramCategory',
    'ProgramConfig',
    'PROGRAM_CONFIGS',
]
