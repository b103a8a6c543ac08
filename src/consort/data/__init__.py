"""Sample data and dataset validation."""

from .sample import make_sample_dataset
from .validation import validate_dataset

__all__ = ["make_sample_dataset", "validate_dataset"]
