"""
SwapCycles: section swap-cycle detection for student enrollments.

Models students enrolled in sections, each holding a list of preferred
sections, and counts the distinct cycles of students who could all be
satisfied by rotating their current assignments.
"""

__version__ = "1.0.0"
__author__ = "SwapCycles Development Team"
__description__ = "Section swap-cycle detection for student enrollments"
