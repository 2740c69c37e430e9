"""Remote directory listing shapes (GitHub contents API)."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _ListingBase(BaseModel):
    # The API sends more keys than we use (_links, etc.)
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    path: str
    size: int = Field(ge=0)
    sha: str
    url: str
    html_url: str
    git_url: str


class DirListing(_ListingBase):
    """A subdirectory within a tree."""

    type: Literal["dir"]


class FileListing(_ListingBase):
    """A file within a tree."""

    type: Literal["file"]
    sha: str = Field(pattern=r"^[0-9a-f]+$")  # Git blob sha, recorded as the file hash
    download_url: str


Listing = Annotated[DirListing | FileListing, Field(discriminator="type")]

TREE_ADAPTER: TypeAdapter[list[Listing]] = TypeAdapter(list[Listing])
