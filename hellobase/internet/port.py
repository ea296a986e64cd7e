"""TCP port number value."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Port(BaseModel):
    """A TCP port number, 0 through 65535; 0 lets the OS pick a free port."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=0, le=65535, strict=True, description="Port number")

    @classmethod
    def of(cls, value: Union[int, "Port"]) -> "Port":
        """Coerce an int or Port into a Port, raising pydantic.ValidationError if out of range."""
        if isinstance(value, Port):
            return value
        return cls(number=value)

    def __str__(self) -> str:
        return str(self.number)


__all__ = ["Port"]
