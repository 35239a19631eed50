"""Domain layer: complaint model, escalation value objects, events and errors."""
