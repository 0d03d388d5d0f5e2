"""Service layer: data access composed with the expansion engine."""
from .generation_flow import GenerationFlow, Notification, Step
from .shift_service import ShiftService

__all__ = ["ShiftService", "GenerationFlow", "Notification", "Step"]
