"""Week Planner: weekly activity grid with conflict detection and export."""

__version__ = "0.1.0"
