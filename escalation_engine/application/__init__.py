"""Application layer: ports and services of the escalation engine."""
