"""Base entity class for named objects."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Base class for all named objects in batterylog.

    Every entity gets a logger named after its module, class and name,
    so log lines can be traced to a specific device or runner. Runtime
    resources such as open files and threads are kept in private
    attributes so they never leak into the model's fields.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(
        min_length=1, description="Human-readable name for this entity"
    )

    def __init__(self, **data: Any) -> None:
        """Initialize Entity and its per-instance logger."""
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}."
            f"{self.name}"
        )

    def __repr__(self) -> str:
        """Return string representation showing all fields."""
        fields = []
        for field_name, field_value in self.model_dump().items():
            if isinstance(field_value, str):
                fields.append(f"{field_name}='{field_value}'")
            else:
                fields.append(f"{field_name}={field_value}")

        return f"{self.__class__.__name__}({', '.join(fields)})"
