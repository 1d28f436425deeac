"""Policy flags for composites."""

from multisource.policy.flags import PolicyFlags, FLAG_NAMES

__all__ = ["PolicyFlags", "FLAG_NAMES"]
