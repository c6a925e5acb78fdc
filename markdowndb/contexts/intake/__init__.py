"""
Intake Context

Responsibilities:
- Loads job and profile templates from text or files
- Exposes typed, read-only views over parsed templates

Owns: JobTemplate, ProfileTemplate
Never: Modifies template text (fixing context)
"""

from markdowndb.contexts.intake.job_data_structure import JobTemplate
from markdowndb.contexts.intake.profile_data_structure import ProfileTemplate

__all__ = [
    "JobTemplate",
    "ProfileTemplate",
]
