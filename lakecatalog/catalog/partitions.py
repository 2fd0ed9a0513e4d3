"""Partition spec matching.

Two matching modes are used by the catalog:

- exact: a full spec identifies one partition. Its key set must equal the
  table's declared partition keys, and two full specs are the same partition
  when they hold the same key/value pairs.
- subset: a partial spec filters partitions. A stored full spec is included
  when it contains every key/value pair of the partial spec.

Values are opaque strings compared by equality.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator


class CatalogPartitionSpec(BaseModel):
    """Key/value descriptor of a partition.

    Equality and hashing ignore insertion order; iteration keeps it.
    """

    partition_spec: dict[str, str] = Field(
        default_factory=dict, description="Partition key to value"
    )

    model_config = {"frozen": True}

    def __init__(self, partition_spec: Mapping[str, str] | None = None, **data: Any) -> None:
        if partition_spec is not None:
            data["partition_spec"] = dict(partition_spec)
        super().__init__(**data)

    @field_validator("partition_spec")
    @classmethod
    def validate_entries(cls, v: dict[str, str]) -> dict[str, str]:
        """Keys must be non-empty."""
        for key in v:
            if not key:
                raise ValueError("Partition spec keys cannot be empty")
        return v

    @classmethod
    def of(cls, **entries: str) -> "CatalogPartitionSpec":
        """Build a spec from keyword arguments."""
        return cls(entries)

    def keys(self) -> set[str]:
        return set(self.partition_spec)

    def items(self) -> Iterable[tuple[str, str]]:
        return self.partition_spec.items()

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.partition_spec.get(key, default)

    def __getitem__(self, key: str) -> str:
        return self.partition_spec[key]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.partition_spec)

    def __len__(self) -> int:
        return len(self.partition_spec)

    def __contains__(self, key: object) -> bool:
        return key in self.partition_spec

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogPartitionSpec):
            return NotImplemented
        return self.partition_spec == other.partition_spec

    def __hash__(self) -> int:
        return hash(frozenset(self.partition_spec.items()))

    def __str__(self) -> str:
        entries = ", ".join(f"{k}={v}" for k, v in self.partition_spec.items())
        return f"{{{entries}}}"


def matches_partition_keys(
    spec: CatalogPartitionSpec, partition_keys: Iterable[str]
) -> bool:
    """
    Check that a full spec names exactly the table's partition keys.

    Args:
        spec: Candidate full spec
        partition_keys: Declared partition keys of the table

    Returns:
        True when the key sets are equal (same size, same names)
    """
    keys = list(partition_keys)
    return len(spec) == len(keys) and spec.keys() == set(keys)


def contains_partial_spec(
    full_spec: CatalogPartitionSpec, partial_spec: CatalogPartitionSpec | None
) -> bool:
    """
    Check whether a full spec satisfies a partial-spec filter.

    An empty or missing filter matches everything. The filter does not need
    to name any declared partition key.
    """
    if not partial_spec:
        return True
    return all(full_spec.get(key) == value for key, value in partial_spec.items())


def filter_partition_specs(
    specs: Iterable[CatalogPartitionSpec],
    partial_spec: CatalogPartitionSpec | None = None,
) -> list[CatalogPartitionSpec]:
    """Keep the specs matching ``partial_spec``, preserving input order."""
    return [spec for spec in specs if contains_partial_spec(spec, partial_spec)]
