# stmeshkit

Geometry building blocks for meshing 4D space-time domains. The package
provides:

- `stmeshkit.utility`: axis-aligned boxes (`AlignedBox` with `sizes`,
  `contains` and `extend`), enumeration of the 2**D corners of a box
  (`all_corners`), an orthonormal basis of the orthogonal complement of a
  matrix's columns (`kernel`) and a 64-bit hash for coordinate vectors
  (`matrix_hash`).
- `stmeshkit.bitset` and `stmeshkit.rle_bitset`: a fixed-size bitset (`Bitset`)
  and a bitset that also keeps a run-length encoding of its set bits
  (`RleBitset`, `Run`). `RleBitset` collects updates per worker id
  (`register_threads`, `set`, `commit`, `unregister_threads`) and visits its
  set bits with `iterate_set`, which shares the index space out in equal
  contiguous parts, one per worker id, and processes them one after another.
  Two `RleBitset`s compare equal when their runs are equal.
- `stmeshkit.problem_types`: descriptions of the fields stored per node for
  various simulation problems (`ProblemType`, `DataEntry`, `ProblemTypeEnum`,
  `generic_problem_type`, `problem_type_from_name`, and the `NAME_MAP` and
  `PROBLEM_TYPE_MAP` tables).
- `stmeshkit.sdf` and `stmeshkit.sdf_mixins`: signed distance functions
  (negative inside) for hyperspheres, hypercubes and capped 3D cylinders, plus
  mixins adding central-difference normals, unsigned distance and rejection
  sampling inside the bounding box.
- `stmeshkit.radius_schemes`: callables giving a target element radius at a
  point (`Constant`, `BoundaryDistanceRadius`, `LFSRadius`), each with an
  optional mapper applied to the distance.
- `stmeshkit.boundary_region_manager`: assignment of boundary region ids to
  cell faces (`NoopBoundaryManager`, always 0; `HypercubeBoundaryManager`,
  whose regions are numbered from 1, later regions taking precedence).
- `stmeshkit.voxel_complex`: topology-preserving parallel thinning of binary
  voxel images of any dimension (`VoxelComplex`, `Face`), with
  `fix_one_neighbor` to keep the end points of thin branches.

## Installation

```
pip install .
```

## Examples

Signed distance to a hypersphere:

```python
import numpy as np
from stmeshkit.sdf import HyperSphere

sphere = HyperSphere(1.0, np.zeros(4))
sphere.signed_distance(np.array([2.0, 0.0, 0.0, 0.0]))  # 1.0
box = sphere.bounding_box()
box.sizes()  # array([2., 2., 2., 2.])
```

Thinning a voxel image down to its skeleton. Nested data is indexed
`data[z][y][x]`; coordinates passed to the complex are `(x, y, z)`:

```python
from stmeshkit.voxel_complex import VoxelComplex

data = [[[False] * 7 for _ in range(5)] for _ in range(3)]
for y, x in [(2, 3), (1, 3), (3, 3), (2, 1), (2, 2), (2, 4), (2, 5)]:
    data[1][y][x] = True

complex_ = VoxelComplex(data)
while complex_.thinning_step(1):
    pass
remaining = [coords for coords in complex_.voxels() if complex_[coords]]
```

Splitting a node's data vector into named fields:

```python
from stmeshkit.problem_types import problem_type_from_name

ins = problem_type_from_name("ins")
ins.entries()  # 4
{entry.name: values for entry, values in ins.split([1.0, 2.0, 3.0, 0.5])}
# {'velocity': array([1., 2., 3.]), 'pressure': array([0.5])}
```

## What the package does not do

It contains no mesher, no Delaunay triangulation, no mesh file readers or
writers and no image readers or distance transforms. `BoundaryDistanceRadius`
and `LFSRadius` work with any object that supplies `signed_distance(point)` or
`distance_to_thinned_at(point)`; the package provides the former through its
signed distance functions but nothing that computes the latter from an image.
There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```