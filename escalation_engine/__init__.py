"""
Complaint Auto-Escalation Engine

Periodic background process for a complaint-tracking workflow: scans open
complaints, decides which ones have waited too long, escalates each of them
exactly once, records an audit entry and notifies the affected users.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
