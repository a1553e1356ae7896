"""Delivery API keys issued for a space."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .common import SystemMetadata


@dataclass
class ApiKey:
    """A key for the delivery surface; the token itself is in `access_token`."""
    name: str = ""
    description: Optional[str] = None
    access_token: str = ""
    metadata: SystemMetadata = field(default_factory=SystemMetadata)

    @property
    def id(self) -> str:
        return self.metadata.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiKey":
        return cls(
            name=data.get("name", ""),
            description=data.get("description"),
            access_token=data.get("accessToken", ""),
            metadata=SystemMetadata.from_dict(data.get("sys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": self.name}
        if self.description:
            body["description"] = self.description
        return body
