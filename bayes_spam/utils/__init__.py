"""
Shared utility functions.

This subpackage includes:
- loading of the global training configuration
- directory creation helpers for results, models and logs
- lightweight logging helpers used across the project.
"""
