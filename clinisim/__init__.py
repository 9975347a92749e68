"""Time-step simulation of patients, treatments and resources in a therapy clinic."""

__version__ = "1.0.0"
__all__ = ["containers", "resources", "treatments", "patient", "waitlists", "ui", "scheduler"]