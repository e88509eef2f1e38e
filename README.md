# antrs

Typed reading of AnnData (H5AD) style single-cell RNA-seq data.

An AnnData file is a tree of groups and datasets. `obs` describes the
observations (cells), `var` describes the variables (genes), and `X` holds
the count matrix in compressed sparse row (CSR) form. `antrs.anndata` turns
such a tree into plain Python dataclasses and enums.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Input

The parsers work on any mapping-like tree:

- a *group* is a mapping from member names to sub-groups or datasets;
- a *dataset* is any iterable of values. String values may be `str` or
  UTF-8 encoded `bytes`; codes and indices are read with `int`, counts with
  `float`, and flags with `bool`.

Plain nested dictionaries work, and so do group objects from an HDF5 reader
that support `group[name]` lookup.

Expected layout:

- `obs/_index` – observation names
- `obs/batch`, `obs/library` – categorical columns, each a group with
  `categories` (strings) and `codes` (integers indexing into `categories`)
- `var/_index` – variable names
- `var/genes` – gene names
- `var/is_hvg` – highly-variable-gene flags
- `X/data`, `X/indices`, `X/indptr` – the count matrix in CSR form
- `obsm`, `varm`, `obsp`, `varmp`, `layers` – optional; their contents are
  not read, and each becomes an empty placeholder object whether present or
  not

## Usage

```python
from antrs.anndata import AnnData, ParseError

tree = {
    "obs": {
        "_index": ["cell1", "cell2"],
        "batch": {"categories": ["batch1", "batch2"], "codes": [0, 1]},
        "library": {"categories": ["libA", "libB"], "codes": [1, 0]},
    },
    "var": {
        "_index": ["g1", "g2", "g3"],
        "genes": ["GeneA", "GeneB", "GeneC"],
        "is_hvg": [True, False, True],
    },
    "X": {
        "data": [1.0, 2.0, 3.0],
        "indices": [0, 2, 1],
        "indptr": [0, 2, 3],
    },
}

adata = AnnData.parse(tree)
print(len(adata.obs), len(adata.var))  # 2 3
print(adata.obs.batch)    # [BatchInCompressed.batch1, BatchInCompressed.batch2]
print(adata.x.rows)       # [[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]]
```

The pieces can also be parsed on their own:

- `ObsInCompressed.parse(group)` – fields `library`, `batch`, `index`;
  `len()` is the number of observations
- `VarInCompressed.parse(group)` – fields `index`, `genes`, `is_hvg`;
  `len()` is the number of variables
- `BatchInCompressed.parse(group)` / `LibraryInCompressed.parse(group)` –
  decode a categorical group into a list of enum members
- `Count.parse(group, n_obs, n_vars)` – expand a CSR group into a dense
  `n_obs` × `n_vars` list of float rows (`Count.rows`); entries not stored
  are `0.0`, and rows beyond the end of `indptr` stay all zero

Categorical columns accept only their known categories: `batch1`/`batch2`
for `BatchInCompressed` and `libA`/`libB` for `LibraryInCompressed`.

The module `antrs.arith` also provides `add(left, right)`, which returns the
sum of its two arguments.

## Errors

- `MissingMemberError` (a subclass of both `ParseError` and `KeyError`) is
  raised when a required group or dataset is absent.
- `ParseError` is raised for an unknown category (`Unknown batch: ...`,
  `Unknown library: ...`), a code with no matching category
  (`Unknown code: ...`), and, in `Count.parse`, when `data` and `indices`
  differ in length, `indptr` describes more rows than `n_obs`, an `indptr`
  range is invalid, or a column index is outside `n_vars`.

Values that cannot be converted (for example a non-numeric code) raise the
usual Python `ValueError` or `TypeError` from the conversion.

## What it does not do

`antrs` does not open `.h5ad` files itself and has no HDF5 dependency: you
open the file with an HDF5 reader of your choice and pass the resulting
group tree (or an equivalent mapping) to the parsers. It only reads; it
never writes AnnData data. It provides no command-line program.