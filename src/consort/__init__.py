"""Draw CONSORT participant-flow diagrams from subject-level data.

The package computes a grid layout, counts subjects per diagram cell and
emits box/label/arrow primitives that matplotlib turns into an image::

    from consort import build_diagram, make_sample_dataset

    diagram = build_diagram(make_sample_dataset())
"""

from .content.template import REFERENCE_TEMPLATE
from .core.errors import (
    ConsortError,
    FlowConsistencyError,
    InvalidDatasetError,
    InvalidGridSpec,
    UnknownLayerReference,
)
from .core.models import ConsortDiagram, Extent, GridGeometry, GridSpec
from .data.sample import make_sample_dataset
from .layout.geometry import compute_grid_geometry
from .pipeline import build_diagram, draw_consort_diagram

__version__ = "0.1.0"

__all__ = [
    "REFERENCE_TEMPLATE",
    "ConsortDiagram",
    "ConsortError",
    "Extent",
    "FlowConsistencyError",
    "GridGeometry",
    "GridSpec",
    "InvalidDatasetError",
    "InvalidGridSpec",
    "UnknownLayerReference",
    "build_diagram",
    "compute_grid_geometry",
    "draw_consort_diagram",
    "make_sample_dataset",
]
