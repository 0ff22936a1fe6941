"""Board Schemas: inline base64 board image plus the player's rack."""

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeBoardRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    image_base64: str = Field(alias="imageBase64", min_length=1)
    mime_type: str = Field(alias="mimeType")
    letters: str = Field(pattern=r"^[A-Za-z]*$")


class AnalyzeBoardResponse(BaseModel):
    analysis: str
