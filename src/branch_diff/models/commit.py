"""Commit model for branch history."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, model_validator


class Commit(BaseModel):
    """A commit reachable from the target branch but not from the base."""

    hash: str
    short_hash: str = Field(default="", alias="shortHash")
    message: str
    author: str
    date: str
    parents: List[str] = []

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _derive_short_hash(cls, data: Any) -> Any:
        if isinstance(data, dict) and "hash" in data:
            data = dict(data)
            data["short_hash"] = data["hash"][:7]
            data.pop("shortHash", None)
        return data

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on message, author and short hash."""
        needle = query.lower()
        return (
            needle in self.message.lower()
            or needle in self.author.lower()
            or needle in self.short_hash.lower()
        )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
