"""Vendor auto-assignment services."""

from .service import AssignmentOutcome, AutoAssignmentCoordinator
from .tracker import AssignmentState, AssignmentTracker

__all__ = ["AssignmentOutcome", "AutoAssignmentCoordinator", "AssignmentState", "AssignmentTracker"]
