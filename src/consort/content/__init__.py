"""Cell content: the reference template and the count resolver."""

from .resolver import resolve_content, resolve_exclusions
from .template import REFERENCE_TEMPLATE

__all__ = ["REFERENCE_TEMPLATE", "resolve_content", "resolve_exclusions"]
