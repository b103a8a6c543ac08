"""Grid geometry for CONSORT diagrams."""

from .geometry import check_grid_spec, compute_grid_geometry

__all__ = ["check_grid_spec", "compute_grid_geometry"]
