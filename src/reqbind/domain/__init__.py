"""Domain layer — request types, fields, violations, and mappings.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
