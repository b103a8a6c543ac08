"""Exception taxonomy for diagram construction.

Every error is raised before a single draw primitive is emitted, so a
caller either receives a complete diagram or one of these exceptions.
"""

from __future__ import annotations

from typing import Iterable


class ConsortError(Exception):
    """Base class for all diagram construction failures."""


class InvalidGridSpec(ConsortError, ValueError):
    """Grid dimensions are zero, negative or otherwise unusable."""


class UnknownLayerReference(ConsortError, LookupError):
    """A template cell refers to a dataset field that does not exist."""

    def __init__(self, fields: Iterable[str], available: Iterable[str] = ()) -> None:
        self.fields = sorted(set(fields))
        self.available = sorted(set(available))
        super().__init__(
            f"Template references unknown dataset field(s): {', '.join(self.fields)}"
            + (f" (available: {', '.join(self.available)})" if self.available else "")
        )


class InvalidDatasetError(ConsortError, ValueError):
    """Dataset values cannot be interpreted as layer/column positions."""


class FlowConsistencyError(InvalidDatasetError):
    """A subject appears at a layer without being present at the layer before."""
