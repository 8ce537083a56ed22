"""Infrastructure utilities module.

Contains utility modules for:
- Logging configuration
"""
