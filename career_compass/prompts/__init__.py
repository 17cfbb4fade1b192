"""Prompt templates for LLM interactions.

Each module contains system/user prompt pairs and builder functions for a
specific domain.

Modules:
    career_recommendation: Assessment → career recommendation prompt
"""
