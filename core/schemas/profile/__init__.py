"""Profile schemas."""

from core.schemas.profile.profile_summary import ProfileSummary

__all__ = ["ProfileSummary"]
