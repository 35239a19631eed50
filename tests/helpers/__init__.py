"""Test helpers for escalation engine tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    make_complaint: Complaint factory with ages relative to a reference time

Usage:
    from tests.helpers import FakeTimeAuthority, make_complaint
"""

from tests.helpers.complaint_factory import make_complaint
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority", "make_complaint"]
