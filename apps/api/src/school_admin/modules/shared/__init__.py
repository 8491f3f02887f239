"""
Shared module - Base model and helpers used by every resource module.
"""

from school_admin.modules.shared.models import BaseModel, generate_short_id, utc_now

__all__ = ["BaseModel", "generate_short_id", "utc_now"]
