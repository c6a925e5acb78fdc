"""
MarkdownDB - structured job and profile templates for job application tracking

A small toolkit for the line-oriented MarkdownDB template format used to store
job postings and user profiles as editable plain text.

Architecture:
- Templating Context: Template text parsing into a structured document
- Validation Context: Schema-driven validation with classified diagnostics
- Fixing Context: Fix proposals and minimal text edits that apply them
"""

__version__ = "0.1.0"
