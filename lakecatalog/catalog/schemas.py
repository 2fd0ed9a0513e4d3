"""Pydantic schemas for catalog entities."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

COMMENT_PROPERTY = "comment"
STREAMING_PROPERTY = "is_streaming"


class ColumnSchema(BaseModel):
    """Column schema definition. The type is stored, never interpreted."""

    name: str = Field(..., description="Column name")
    type: str = Field(..., description="Column type (opaque)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate column name."""
        if not v:
            raise ValueError("Column name cannot be empty")
        return v

    model_config = {"frozen": True}


class TableSchema(BaseModel):
    """Ordered column list compared structurally."""

    columns: list[ColumnSchema] = Field(default_factory=list, description="Table columns")

    @model_validator(mode="after")
    def validate_unique_columns(self) -> "TableSchema":
        """Column names must be unique."""
        names = [col.name for col in self.columns]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate column names: {duplicates}")
        return self

    @classmethod
    def of(cls, *fields: tuple[str, str]) -> "TableSchema":
        """Build a schema from ``(name, type)`` pairs."""
        return cls(columns=[ColumnSchema(name=name, type=type_) for name, type_ in fields])

    @property
    def field_names(self) -> list[str]:
        return [col.name for col in self.columns]

    model_config = {"frozen": True}


class CatalogEntity(BaseModel):
    """Properties shared by every catalog entry."""

    properties: dict[str, str] = Field(default_factory=dict, description="Custom properties")
    comment: str | None = Field(None, description="Free-form comment")

    model_config = {"frozen": True}

    @property
    def description(self) -> str | None:
        return self.comment

    @property
    def detailed_description(self) -> str | None:
        return self.description

    def copy(self):  # type: ignore[override]
        """Return an equal, independent instance."""
        return self.model_copy(deep=True)


class CatalogDatabase(CatalogEntity):
    """Database descriptor."""


class CatalogBaseTable(CatalogEntity):
    """
    Common capability of tables and views.

    ``kind`` is the explicit discriminant; altering an entry only succeeds
    when the stored and new values share it.
    """

    kind: str
    table_schema: TableSchema = Field(
        default_factory=TableSchema, description="Column names and types"
    )

    @property
    def description(self) -> str | None:
        return self.properties.get(COMMENT_PROPERTY, self.comment)


class CatalogTable(CatalogBaseTable):
    """Table descriptor, optionally partitioned."""

    kind: Literal["table"] = "table"
    partition_keys: list[str] = Field(
        default_factory=list, description="Ordered partition columns"
    )

    @model_validator(mode="after")
    def validate_partition_keys(self) -> "CatalogTable":
        """Partition keys must be unique and, when a schema is given, declared in it."""
        if len(set(self.partition_keys)) != len(self.partition_keys):
            raise ValueError(f"Duplicate partition keys: {self.partition_keys}")

        if self.table_schema.columns:
            column_names = set(self.table_schema.field_names)
            for key in self.partition_keys:
                if key not in column_names:
                    raise ValueError(f"Partition column '{key}' not found in schema")

        return self

    @property
    def is_partitioned(self) -> bool:
        return bool(self.partition_keys)

    @property
    def is_streaming(self) -> bool:
        return self.properties.get(STREAMING_PROPERTY, "false").lower() == "true"

    @property
    def detailed_description(self) -> str | None:
        if self.is_partitioned:
            return f"{self.description or 'table'} (partitioned by {', '.join(self.partition_keys)})"
        return self.description


class CatalogView(CatalogBaseTable):
    """View descriptor."""

    kind: Literal["view"] = "view"
    original_query: str = Field(..., description="Query as written by the user")
    expanded_query: str = Field(..., description="Query with fully qualified names")

    @property
    def detailed_description(self) -> str | None:
        return f"{self.description or 'view'}: {self.expanded_query}"


BaseTable = Annotated[Union[CatalogTable, CatalogView], Field(discriminator="kind")]


class CatalogFunction(CatalogEntity):
    """User-defined function reference. Never loaded or invoked."""

    kind: str = "function"
    class_name: str = Field(..., description="Implementation class or identifier")

    @property
    def description(self) -> str | None:
        return self.comment or self.class_name


class CatalogPartition(CatalogEntity):
    """Partition descriptor."""

    kind: str = "partition"


class CatalogTableStatistics(BaseModel):
    """Table or partition level statistics. ``-1`` means unknown."""

    row_count: int = Field(-1, ge=-1, description="Number of rows")
    file_count: int = Field(-1, ge=-1, description="Number of data files")
    total_size: int = Field(-1, ge=-1, description="Total size in bytes")
    raw_data_size: int = Field(-1, ge=-1, description="Raw data size in bytes")
    properties: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ColumnStatisticsData(BaseModel):
    """Statistics of a single column. Unset values are unknown."""

    min: str | int | float | None = None
    max: str | int | float | None = None
    ndv: int | None = Field(None, ge=0, description="Number of distinct values")
    null_count: int | None = Field(None, ge=0)
    avg_length: float | None = Field(None, ge=0)
    max_length: int | None = Field(None, ge=0)
    true_count: int | None = Field(None, ge=0)
    false_count: int | None = Field(None, ge=0)

    model_config = {"frozen": True}


class CatalogColumnStatistics(BaseModel):
    """Per-column statistics of a table or partition."""

    column_statistics_data: dict[str, ColumnStatisticsData] = Field(default_factory=dict)
    properties: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


UNKNOWN_TABLE_STATISTICS = CatalogTableStatistics()
UNKNOWN_COLUMN_STATISTICS = CatalogColumnStatistics()
