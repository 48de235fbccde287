"""
Phase model definition for menstrual cycle phases.
"""
from enum import Enum

class CyclePhase(str, Enum):
    """
    Coarse position of a date within an idealized cycle.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"
    UNKNOWN = "unknown"  # No period on or before the date, or more than 28 days since it
