"""Gift data models."""

from pydantic import BaseModel, Field

GiftValue = str | bool | int | float


class Gift(BaseModel):
    """Gift reshaped from the external gifts API."""

    id: str
    name: str
    description: str | None = None
    data: dict[str, GiftValue] = Field(default_factory=dict)
