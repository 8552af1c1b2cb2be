"""Pydantic request/response models for the /test diagnostic endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class FindCallRequest(BaseModel):
    drink: str = Field(..., min_length=1, description="Drink name to match against Kai calls.")


class CreateCallRequest(BaseModel):
    id_call_config: int = Field(default=481, description="Kai call-config id to create a call for.")
    drink: str = "Diet Pepsi"
    location: str = "JJ0103"
    zone: Optional[int] = Field(default=None, description="Kai zone id; resolved from location when omitted.")
    description: str = "Test call"


class CallPayloadModel(BaseModel):
    idCallConfig: int
    idZone: Optional[int]
    description: str
