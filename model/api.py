from pydantic import AliasChoices, BaseModel, Field


class UploadPhotoRequest(BaseModel):
    key: str | None = None
    title: str | None = ""
    content: str | None = Field(
        default=None, validation_alias=AliasChoices("content", "contentBase64")
    )
    extension: str | None = Field(
        default=None, validation_alias=AliasChoices("extension", "ext")
    )
    idempotencyToken: str | None = Field(
        default=None, validation_alias=AliasChoices("idempotencyToken", "nonce")
    )


class UploadPhotoResponse(BaseModel):
    ok: bool = True
    filename: str
    rawLocator: str
    raw: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str
