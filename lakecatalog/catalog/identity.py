"""Two-level object identity for catalog entries."""

from pydantic import BaseModel, Field, field_validator

from lakecatalog.exceptions import InvalidIdentifierError


class ObjectPath(BaseModel):
    """Identity of a table, view or function: ``database.object``.

    Equality and hashing are structural and case-sensitive.

    Usage:
        path = ObjectPath(database_name="db1", object_name="t1")
        same = ObjectPath.parse("db1.t1")
        assert path == same
    """

    database_name: str = Field(..., description="Owning database name")
    object_name: str = Field(..., description="Object name within the database")

    model_config = {"frozen": True}

    @field_validator("database_name", "object_name")
    @classmethod
    def validate_segment(cls, v: str) -> str:
        """Reject empty segments."""
        if not v or not v.strip():
            raise ValueError("Object path segments cannot be empty")
        return v

    @classmethod
    def parse(cls, text: str) -> "ObjectPath":
        """
        Parse a dotted ``database.object`` string.

        Args:
            text: Full name with exactly two non-empty segments

        Returns:
            Parsed ObjectPath

        Raises:
            InvalidIdentifierError: If the text does not have exactly two
                non-empty segments
        """
        if not isinstance(text, str):
            raise InvalidIdentifierError(repr(text))

        parts = text.split(".")
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise InvalidIdentifierError(text)

        return cls(database_name=parts[0], object_name=parts[1])

    @property
    def full_name(self) -> str:
        """Dotted ``database.object`` form."""
        return f"{self.database_name}.{self.object_name}"

    def with_object_name(self, object_name: str) -> "ObjectPath":
        """Same database, different object name."""
        return ObjectPath(database_name=self.database_name, object_name=object_name)

    def __str__(self) -> str:
        return self.full_name
