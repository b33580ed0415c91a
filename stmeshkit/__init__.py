"""Geometry building blocks for 4D space-time meshing: boxes, bitsets, problem types, signed distance functions, radius schemes, boundary regions and voxel thinning."""

__version__ = "1.0.0"

__all__ = [
    "bitset",
    "boundary_region_manager",
    "problem_types",
    "radius_schemes",
    "rle_bitset",
    "sdf",
    "sdf_mixins",
    "utility",
    "voxel_complex",
]