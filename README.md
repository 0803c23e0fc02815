# flagalgebra

Building blocks for flag algebra computations. Flag algebras are a proof
technique that turns inequalities between subgraph densities into
semi-definite programs.

## Modules

- `flagalgebra.iterators`: generators that yield tuples of integers.
  - `subsets(n)`: every subset of `range(n)`.
  - `functions(n, k)`: every function from `range(n)` to `range(k)`.
  - `choose(n, k, fixed)`: the `k`-subsets of `range(n)` that contain `range(fixed)`.
  - `split(n, k, fixed)`: the ways to split `range(n)` into two parts that both contain `range(fixed)`.
  - `injections(n, k, fixed)`: the injections from `range(k)` to `range(n)` that fix `range(fixed)`.
  - `permutations(n)`: every permutation of `range(n)`.

  `choose` and `injections` raise `ValueError` when their arguments do not fit.
- `flagalgebra.basis`: the identifiers `Type` (size and index of a type) and
  `Basis` (flag size and type).
  - Bases can be multiplied (`*`) and divided (`/`) like the spaces of the algebra.
  - `Basis.filename()` gives the name of the file that lists the flags of a basis.
  - `Savable` is an abstract base class. A subclass implements `filename()` and
    `create()`. `get(flag_name)` then loads the object from
    `data/<flag_name>/<filename>.dat`, a gzip-compressed pickle. If that file is
    missing or unreadable, it computes the object and saves it there.
- `flagalgebra.operator`: identifiers of the operators of the algebra.
  - `SplitCount` is multiplication, `SubflagCount` is expansion to larger flags,
    `Unlabeling` and `Unlabel` average over labels, and `MulAndUnlabel` is a
    Cauchy–Schwarz square.
  - Each gives its input and output bases, its denominator (`denom()`) and the
    name of its cache file (`filename()`).
- `flagalgebra.sdpa`: `SdpaCoeff`, one coefficient line of an SDPA file.
  - `SdpaCoeff.parse` reads a line and `str()` writes one.
  - The errors are `SdpaError` and its subclasses `SdpaParseError` and `SdpNotSolved`.
- `flagalgebra.sdpa_problem`: SDPA problems and CSDP certificates, and calls to the solver.
  - `SdpaProblem` and `SdpaCertificate` read and write these files.
  - `SdpaProblem.to_certificate_minimization` and
    `SdpaCertificate.to_certificate_minimization` rewrite a solved problem so
    that the solver minimises the weight of the certificate.
  - `sum_duplicates` and `push_identities` work on lists of coefficients.
  - `csdp` runs the `csdp` executable.
  - `csdp_minimize_certificate` runs `csdp`, then tries to minimise the certificate.
- `flagalgebra.certificate`: `Certificate` and `CSMode`.
  - `Certificate` holds the vector `y` and the block matrices Z and X read
    from a CSDP certificate.
  - It gives primal and dual values, thresholding of `y` and the diagonal of a block.
  - `CSMode` names the symmetry reduction of a Cauchy–Schwarz block.
- `flagalgebra.draw`: SVG pictures, returned as strings.
  - `draw_graph`, `draw_directed` and `draw_colored_edges` draw graphs,
    directed graphs and edge-coloured graphs.
  - `save_svg` writes a picture to a file.

## Installation

```
pip install .
```

Solving problems requires the `csdp` executable on your `PATH`.

## Examples

Counting combinatorial objects:

```python
from flagalgebra.iterators import choose, injections, permutations

assert sum(1 for _ in choose(10, 3, 0)) == 120
assert sum(1 for _ in injections(5, 3, 0)) == 60
assert sum(1 for _ in permutations(6)) == 720
```

Operator denominators:

```python
from flagalgebra.basis import Type
from flagalgebra.operator import SplitCount

assert SplitCount(5, 7, Type(2, 1)).denom() == 56
```

Parsing SDPA lines and merging duplicate coefficients:

```python
from flagalgebra.sdpa import SdpaCoeff
from flagalgebra.sdpa_problem import sum_duplicates

a = SdpaCoeff.parse("1 1 2 2 0.5")
b = SdpaCoeff.parse("1 1 2 2 0.25")
merged = sum_duplicates([a, b])
print(merged[0])  # 1 1 2 2 0.75
```

Solving an SDPA file with CSDP:

```python
from flagalgebra.sdpa_problem import csdp

value = csdp("problem.sdpa", None)
```

`csdp` returns the primal value. The solver writes its certificate next to
the problem, in `problem.sdpa.cert.sdpa`. If the solver ends with a code from
1 to 10, `csdp` raises `SdpNotSolved`; any other failure raises `RuntimeError`.

The certificate can be read back in two ways:

- `SdpaCertificate.load` reads it as a flat list of coefficients.
- `Certificate.from_file(name, ineq_blocks, cs_sizes)` reads it as block
  matrices. You give it the layout of the blocks: a
  `(number of inequalities, is_equality)` pair for each group of inequalities,
  and the size of each Cauchy–Schwarz block.

Drawing a triangle:

```python
from flagalgebra.draw import draw_graph, save_svg

svg = draw_graph(3, [(0, 1), (1, 2), (2, 0)], None, 0)
save_svg(svg, "triangle.svg")
```

## What the package does not do

- It has no classes of flags such as graphs or oriented graphs.
- It does not generate lists of flags.
- It does not compute the matrices of the operators. `Basis` and the classes
  in `flagalgebra.operator` only identify these objects: their sizes,
  denominators and file names.
- It has no algebra of weighted flag sums and no way to state a flag
  optimisation problem and turn it into an SDPA file. It works with SDPA files
  that already exist.
- It has no command-line program.

## Running the tests

```
pip install .[test]
pytest
```