"""Branch listing model."""

from typing import Any, Dict, List

from pydantic import BaseModel


class BranchListing(BaseModel):
    """Local and remote branch names plus the checked-out branch."""

    local: List[str] = []
    remote: List[str] = []
    current: str = ""

    model_config = {"frozen": True}

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
