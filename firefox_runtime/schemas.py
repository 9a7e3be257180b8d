"""
Typed provisioning schemas for Firefox Runtime.

Provides Pydantic models for the filesystem actions the launch policy can
request. The policy only describes actions; provisioning.py executes them.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnsureDirRequest(BaseModel):
    """Request to create a directory if it does not exist yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ensure_dir"] = "ensure_dir"
    path: str = Field(description="Directory to create (parent must exist)")
    mode: int = Field(
        default=0o755,
        ge=0,
        le=0o7777,
        description="Permission bits for a newly created directory",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v:
            raise ValueError("Path cannot be empty")
        return v

    def describe(self) -> str:
        return f"mkdir {self.path} (mode {self.mode:o})"


class SymlinkRequest(BaseModel):
    """Request to link a manifest into the user's native messaging hosts.

    The link is only created when the source exists and the destination
    does not.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["symlink"] = "symlink"
    source: str = Field(description="Existing file the link points to")
    destination: str = Field(description="Path of the link to create")

    @field_validator("source", "destination")
    @classmethod
    def validate_paths(cls, v: str) -> str:
        if not v:
            raise ValueError("Path cannot be empty")
        return v

    def describe(self) -> str:
        return f"symlink {self.destination} -> {self.source}"


ProvisionRequest = Union[EnsureDirRequest, SymlinkRequest]
