"""Domain models for Kai call definitions, zones and parsed drink orders."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class CallDefinition:
    """A call type configured in Kai (``call-config``); ``description`` is what drinks match against."""

    id: int
    description: str
    raw: dict = field(default_factory=dict, compare=False, hash=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {**self.raw, "id": self.id, "description": self.description}


@dataclass(slots=True, frozen=True)
class ZoneEntry:
    """A Kai zone; ``description`` is the cabinet location code BOD reports."""

    id: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "description": self.description}


@dataclass(slots=True)
class OrderLine:
    name: str
    modifiers: list[str] = field(default_factory=list)

    def render(self) -> str:
        if not self.modifiers:
            return self.name
        return f"{self.name} (with {', '.join(self.modifiers)})"


@dataclass(slots=True)
class OrderRequest:
    """Canonical drink order: first cart line's drink, cabinet location and resolved zone."""

    drink: str
    location: str
    zone: Optional[int]
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "drink": self.drink,
            "location": self.location,
            "zone": self.zone,
            "description": self.description,
        }


@dataclass(slots=True)
class DispatchResult:
    payload: dict[str, Any]
    response: Any = None
    dry_run: bool = False
