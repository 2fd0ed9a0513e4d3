"""Tests for partition spec matching."""

from lakecatalog.catalog.partitions import (
    CatalogPartitionSpec,
    contains_partial_spec,
    filter_partition_specs,
    matches_partition_keys,
)


class TestCatalogPartitionSpec:
    """Tests for CatalogPartitionSpec value semantics."""

    def test_equality_ignores_order(self):
        """Test specs with the same pairs in different order are equal."""
        a = CatalogPartitionSpec({"third": "2000", "second": "bob"})
        b = CatalogPartitionSpec({"second": "bob", "third": "2000"})

        assert a == b
        assert hash(a) == hash(b)

    def test_different_values_not_equal(self):
        """Test a differing value makes specs unequal."""
        assert CatalogPartitionSpec({"second": "bob"}) != CatalogPartitionSpec({"second": "alice"})

    def test_iteration_keeps_insertion_order(self):
        """Test keys iterate in insertion order."""
        spec = CatalogPartitionSpec({"third": "2000", "second": "bob"})

        assert list(spec) == ["third", "second"]

    def test_str(self):
        """Test the message rendering."""
        spec = CatalogPartitionSpec({"third": "2000", "second": "bob"})

        assert str(spec) == "{third=2000, second=bob}"

    def test_of_and_keyword_forms(self):
        """Test alternative constructors build equal specs."""
        assert CatalogPartitionSpec.of(second="bob") == CatalogPartitionSpec(
            partition_spec={"second": "bob"}
        )

    def test_mapping_helpers(self):
        """Test dict-like access helpers."""
        spec = CatalogPartitionSpec({"second": "bob"})

        assert spec["second"] == "bob"
        assert spec.get("third") is None
        assert "second" in spec
        assert len(spec) == 1
        assert spec.keys() == {"second"}


class TestMatchesPartitionKeys:
    """Tests for exact key matching."""

    def test_same_keys_any_order(self):
        spec = CatalogPartitionSpec({"third": "2000", "second": "bob"})

        assert matches_partition_keys(spec, ["second", "third"])

    def test_subset_does_not_match(self):
        spec = CatalogPartitionSpec({"third": "2010"})

        assert not matches_partition_keys(spec, ["second", "third"])

    def test_extra_key_does_not_match(self):
        spec = CatalogPartitionSpec({"second": "bob", "third": "2000", "first": "x"})

        assert not matches_partition_keys(spec, ["second", "third"])


class TestSubsetFiltering:
    """Tests for partial spec filtering."""

    specs = [
        CatalogPartitionSpec({"third": "2000", "second": "bob"}),
        CatalogPartitionSpec({"third": "2010", "second": "bob"}),
    ]

    def test_empty_filter_matches_everything(self):
        """Test a missing or empty filter keeps every spec."""
        assert filter_partition_specs(self.specs) == self.specs
        assert filter_partition_specs(self.specs, CatalogPartitionSpec({})) == self.specs

    def test_filter_on_one_key(self):
        """Test filtering by one key keeps order."""
        assert filter_partition_specs(self.specs, CatalogPartitionSpec({"second": "bob"})) == self.specs
        assert filter_partition_specs(self.specs, CatalogPartitionSpec({"third": "2000"})) == [
            self.specs[0]
        ]

    def test_filter_on_unknown_key(self):
        """Test a filter naming an undeclared key matches nothing."""
        assert filter_partition_specs(self.specs, CatalogPartitionSpec({"first": "x"})) == []

    def test_contains_partial_spec(self):
        assert contains_partial_spec(self.specs[0], CatalogPartitionSpec({"second": "bob"}))
        assert not contains_partial_spec(self.specs[0], CatalogPartitionSpec({"second": "amy"}))
