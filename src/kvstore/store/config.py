"""Store backend configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

PERSISTENT_BACKENDS = ("directory", "json_file")


class StoreConfig(BaseModel):
    """Which backend to open and where.

    Attributes:
        backend: Backend variant to construct
        directory: Backing directory, required by persistent backends
        name: File name of a json_file store (".json" is appended when missing)
        indent: JSON indentation for json_file stores, None for compact output
        on_corrupt: What a json_file store does with undecodable content on open
    """

    model_config = ConfigDict(extra="forbid")

    backend: Literal["memory", "directory", "json_file"] = Field(default="memory")
    directory: Path | None = Field(default=None)
    name: str = Field(default="store", min_length=1)
    indent: int | None = Field(default=None, ge=0)
    on_corrupt: Literal["reset", "fail"] = Field(default="reset")

    @model_validator(mode="after")
    def require_directory_for_persistent_backends(self) -> Self:
        if self.backend in PERSISTENT_BACKENDS and self.directory is None:
            raise ValueError(f"Backend '{self.backend}' requires a directory")
        return self
