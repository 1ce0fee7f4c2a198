"""
Shared utility functions.

This subpackage includes:
- YAML configuration loading for the feature toolkit
- directory management helpers
- lightweight logging helpers used by the scripts.
"""
