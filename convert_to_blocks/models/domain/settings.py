"""Settings Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, Field


class PostTypesUpdate(BaseModel):
    """Schema for replacing the supported post types.

    ``post_types`` accepts any JSON value; anything that is not a list is
    saved as an empty selection.
    """

    post_types: Any = Field(
        default=None, description="Content type identifiers to convert"
    )


class SelectionStateItem(BaseModel):
    """A known content type paired with whether it is selected."""

    name: str = Field(..., description="Content type identifier")
    selected: bool = Field(..., description="Whether the type is in the selection")


class PostTypesRead(BaseModel):
    """Schema for reading the supported post types."""

    option_name: str = Field(..., description="Name of the persisted option")
    post_types: list[Any] = Field(
        default_factory=list, description="Currently selected content types"
    )
    selection: list[SelectionStateItem] = Field(
        default_factory=list,
        description="Every public content type with its selection state",
    )


class ContentTypeList(BaseModel):
    """Public content types that may be selected."""

    content_types: list[str] = Field(
        default_factory=list, description="Selectable content type identifiers"
    )
