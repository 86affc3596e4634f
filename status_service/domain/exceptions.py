"""Status domain exceptions.

Domain outcomes are returned as values; only collaborator malfunctions are
raised. The API layer turns these into 500 responses.
"""

from __future__ import annotations


class StorageFailure(Exception):
    """The order store or exception recorder failed outside its contract."""
