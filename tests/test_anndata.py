import pytest

from antrs.anndata import (
    AnnData,
    BatchInCompressed,
    Count,
    LayersInCompressed,
    LibraryInCompressed,
    MissingMemberError,
    ObsInCompressed,
    ObsmInCompressed,
    ParseError,
    VarInCompressed,
)


def _contents():
    return {
        "obs": {
            "batch": {"categories": [b"batch1", b"batch2"], "codes": [0, 1, 1]},
            "library": {"categories": ["libA", "libB"], "codes": [1, 0, 0]},
            "_index": ["cell0", "cell1", "cell2"],
        },
        "var": {
            "_index": ["g0", "g1", "g2", "g3"],
            "genes": [b"GeneA", b"GeneB", b"GeneC", b"GeneD"],
            "is_hvg": [1, 0, 0, 1],
        },
        "X": {
            "data": [1.5, 2.0, 3.0, 4.0],
            "indices": [0, 3, 1, 2],
            "indptr": [0, 2, 3, 4],
        },
    }


def test_library_parse_maps_codes():
    group = {"categories": ["libA", "libB"], "codes": [1, 0, 1]}
    assert LibraryInCompressed.parse(group) == [
        LibraryInCompressed.libB,
        LibraryInCompressed.libA,
        LibraryInCompressed.libB,
    ]


def test_batch_parse_decodes_bytes():
    group = {"categories": [b"batch2", b"batch1"], "codes": [0, 1]}
    assert BatchInCompressed.parse(group) == [
        BatchInCompressed.batch2,
        BatchInCompressed.batch1,
    ]


def test_unknown_category_raises():
    group = {"categories": ["libA", "libC"], "codes": [0]}
    with pytest.raises(ParseError, match="Unknown library: libC"):
        LibraryInCompressed.parse(group)


def test_unknown_code_raises():
    group = {"categories": ["batch1"], "codes": [0, 5]}
    with pytest.raises(ParseError, match="Unknown code: 5"):
        BatchInCompressed.parse(group)


def test_missing_dataset_raises():
    with pytest.raises(MissingMemberError):
        BatchInCompressed.parse({"codes": [0]})


def test_obs_parse():
    obs = ObsInCompressed.parse(_contents()["obs"])
    assert len(obs) == 3
    assert obs.index == ["cell0", "cell1", "cell2"]
    assert obs.batch[0] is BatchInCompressed.batch1
    assert obs.library[0] is LibraryInCompressed.libB


def test_var_parse():
    var = VarInCompressed.parse(_contents()["var"])
    assert len(var) == 4
    assert var.genes == ["GeneA", "GeneB", "GeneC", "GeneD"]
    assert var.is_hvg == [True, False, False, True]


def test_count_parse_places_values():
    count = Count.parse(_contents()["X"], 3, 4)
    assert len(count.rows) == 3
    assert all(len(row) == 4 for row in count.rows)
    assert count.rows[0][0] == 1.5
    assert count.rows[0][3] == 2.0
    assert count.rows[2][2] == 4.0
    assert sum(map(sum, count.rows)) == sum(_contents()["X"]["data"])


def test_count_length_mismatch():
    group = {"data": [1.0, 2.0], "indices": [0], "indptr": [0, 1]}
    with pytest.raises(ParseError):
        Count.parse(group, 1, 2)


def test_count_column_out_of_range():
    group = {"data": [1.0], "indices": [7], "indptr": [0, 1]}
    with pytest.raises(ParseError):
        Count.parse(group, 1, 2)


def test_anndata_parse_defaults_optional_groups():
    adata = AnnData.parse(_contents())
    assert len(adata.obs) == 3
    assert len(adata.var) == 4
    assert adata.obsm == ObsmInCompressed()
    assert adata.layers == LayersInCompressed()
    assert adata.x.rows[1][1] == 3.0


def test_anndata_missing_x():
    contents = _contents()
    del contents["X"]
    with pytest.raises(MissingMemberError, match="X"):
        AnnData.parse(contents)