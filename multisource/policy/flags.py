"""
Policy flags consulted by the resolution engine.

Four independent per-composite booleans. They are plain runtime state:
changing one affects the next operation only, nothing already stored is
re-validated.
"""

from pydantic import BaseModel, ConfigDict


class PolicyFlags(BaseModel):
    """
    Conflict and mutation policy of a composite.

    - allow_duplicates: a read may resolve a key found in several sources
      (the last source in list order wins)
    - error_if_missing: reads and writes of unknown keys raise
    - allow_override: writes may create own keys that nothing defines
    - allow_deletion: deletes may reach into sources
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    allow_duplicates: bool = True
    error_if_missing: bool = False
    allow_override: bool = True
    allow_deletion: bool = False


FLAG_NAMES = tuple(PolicyFlags.model_fields.keys())
