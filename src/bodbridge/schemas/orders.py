"""Pydantic models for the inbound beverage-on-demand order notification."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")


class BodModifier(_Envelope):
    name: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class BodCartItem(_Envelope):
    name: str = Field(..., min_length=1, description="Menu item name, e.g. 'Coffee'.")
    modified: list[BodModifier] | None = Field(default=None, description="Modifiers chosen for the item.")


class BodOrder(_Envelope):
    cart: list[BodCartItem] = Field(..., description="Ordered items; the first decides the call.")


class BodCabinet(_Envelope):
    location: str = Field(..., alias="Location", min_length=1, description="Cabinet location code.")


class BodOrderEnvelope(_Envelope):
    order: BodOrder
    cabinet: BodCabinet
