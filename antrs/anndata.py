"""Reading AnnData (H5AD) layouts from mapping-like HDF5 groups.

A *group* is any mapping from member names to sub-groups or datasets, such as
an ``h5py.Group`` or a plain ``dict``. A *dataset* is any iterable of values;
string values may be ``str`` or UTF-8 encoded ``bytes``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Any, TypeVar


class ParseError(Exception):
    """Raised when an AnnData structure cannot be read."""


class MissingMemberError(ParseError, KeyError):
    """Raised when a required group or dataset is absent."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing member: {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


def _member(group: Mapping[str, Any], name: str) -> Any:
    try:
        return group[name]
    except (KeyError, TypeError) as exc:
        raise MissingMemberError(name) from exc


def _as_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def _read_strings(dataset: Iterable[Any]) -> list[str]:
    return [_as_str(value) for value in dataset]


_E = TypeVar("_E", bound=enum.Enum)


def _parse_categorical(
    group: Mapping[str, Any], enum_cls: type[_E], kind: str
) -> list[_E]:
    by_name = {member.value: member for member in enum_cls}
    code_to_category: dict[int, _E] = {}
    for code, name in enumerate(_read_strings(_member(group, "categories"))):
        try:
            code_to_category[code] = by_name[name]
        except KeyError:
            raise ParseError(f"Unknown {kind}: {name}") from None
    result = []
    for raw_code in _member(group, "codes"):
        code = int(raw_code)
        try:
            result.append(code_to_category[code])
        except KeyError:
            raise ParseError(f"Unknown code: {code}") from None
    return result


class LibraryInCompressed(enum.Enum):
    """Library category of an observation."""

    libA = "libA"
    libB = "libB"

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> list[LibraryInCompressed]:
        """Decode a categorical group into a list of libraries."""
        return _parse_categorical(group, cls, "library")


class BatchInCompressed(enum.Enum):
    """Batch category of an observation."""

    batch1 = "batch1"
    batch2 = "batch2"

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> list[BatchInCompressed]:
        """Decode a categorical group into a list of batches."""
        return _parse_categorical(group, cls, "batch")


@dataclass
class ObsInCompressed:
    """Per-observation annotations."""

    library: list[LibraryInCompressed]
    batch: list[BatchInCompressed]
    index: list[str]

    def __len__(self) -> int:
        return len(self.index)

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> ObsInCompressed:
        batch = BatchInCompressed.parse(_member(group, "batch"))
        library = LibraryInCompressed.parse(_member(group, "library"))
        index = _read_strings(_member(group, "_index"))
        return cls(library=library, batch=batch, index=index)


@dataclass
class VarInCompressed:
    """Per-variable (gene) annotations."""

    index: list[str]
    genes: list[str]
    is_hvg: list[bool]

    def __len__(self) -> int:
        return len(self.index)

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> VarInCompressed:
        index = _read_strings(_member(group, "_index"))
        genes = _read_strings(_member(group, "genes"))
        is_hvg = [bool(value) for value in _member(group, "is_hvg")]
        return cls(index=index, genes=genes, is_hvg=is_hvg)


@dataclass
class ObsmInCompressed:
    """Multi-dimensional observation annotations (none are read)."""

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> ObsmInCompressed:
        return cls()


@dataclass
class VarmInCompressed:
    """Multi-dimensional variable annotations (none are read)."""

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> VarmInCompressed:
        return cls()


@dataclass
class ObspInCompressed:
    """Pairwise observation annotations (none are read)."""

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> ObspInCompressed:
        return cls()


@dataclass
class VarmpInCompressed:
    """Pairwise variable annotations (none are read)."""

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> VarmpInCompressed:
        return cls()


@dataclass
class LayersInCompressed:
    """Additional data layers (none are read)."""

    @classmethod
    def parse(cls, group: Mapping[str, Any]) -> LayersInCompressed:
        return cls()


@dataclass
class Count:
    """Dense count matrix, one row per observation."""

    rows: list[list[float]] = field(default_factory=list)

    @classmethod
    def parse(cls, group: Mapping[str, Any], n_obs: int, n_vars: int) -> Count:
        """Expand a CSR-encoded group into an ``n_obs`` x ``n_vars`` matrix."""
        data = [float(value) for value in _member(group, "data")]
        indices = [int(value) for value in _member(group, "indices")]
        indptr = [int(value) for value in _member(group, "indptr")]
        if len(data) != len(indices):
            raise ParseError(
                f"data and indices differ in length: {len(data)} != {len(indices)}"
            )
        rows = [[0.0] * n_vars for _ in range(n_obs)]
        for row, (start, end) in enumerate(pairwise(indptr)):
            if row >= n_obs:
                raise ParseError(f"Row {row} out of range for {n_obs} observations")
            if not 0 <= start <= end <= len(data):
                raise ParseError(f"Invalid index pointer range: {start}..{end}")
            for col, value in zip(indices[start:end], data[start:end]):
                if not 0 <= col < n_vars:
                    raise ParseError(
                        f"Column {col} out of range for {n_vars} variables"
                    )
                rows[row][col] = value
        return cls(rows)


def _optional(contents: Mapping[str, Any], name: str, parser: Any, default: Any) -> Any:
    try:
        return parser(_member(contents, name))
    except ParseError:
        return default()


@dataclass
class AnnData:
    """An annotated data matrix."""

    obs: ObsInCompressed
    var: VarInCompressed
    obsm: ObsmInCompressed
    varm: VarmInCompressed
    obsp: ObspInCompressed
    varmp: VarmpInCompressed
    layers: LayersInCompressed
    x: Count

    @classmethod
    def parse(cls, contents: Mapping[str, Any]) -> AnnData:
        obs = ObsInCompressed.parse(_member(contents, "obs"))
        var = VarInCompressed.parse(_member(contents, "var"))
        obsm = _optional(contents, "obsm", ObsmInCompressed.parse, ObsmInCompressed)
        varm = _optional(contents, "varm", VarmInCompressed.parse, VarmInCompressed)
        obsp = _optional(contents, "obsp", ObspInCompressed.parse, ObspInCompressed)
        varmp = _optional(
            contents, "varmp", VarmpInCompressed.parse, VarmpInCompressed
        )
        layers = _optional(
            contents, "layers", LayersInCompressed.parse, LayersInCompressed
        )
        x = Count.parse(_member(contents, "X"), len(obs), len(var))
        return cls(
            obs=obs,
            var=var,
            obsm=obsm,
            varm=varm,
            obsp=obsp,
            varmp=varmp,
            layers=layers,
            x=x,
        )