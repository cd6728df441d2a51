from pydantic import BaseModel, Field
from util.constants import FILENAME_WIDTH, INDEX_SEPARATOR, MAX_NUMBER
from util.functions import zero_pad


class Entry(BaseModel):
    number: int = Field(ge=1, le=MAX_NUMBER)
    extension: str
    title: str = ""

    @property
    def filename(self) -> str:
        return f"{zero_pad(self.number, FILENAME_WIDTH)}.{self.extension}"

    def index_line(self) -> str:
        return f"{self.filename}{INDEX_SEPARATOR}{self.title}\n"


class IdempotencyClaim(BaseModel):
    token: str
    createdAt: int  # epoch ms


class UploadResult(BaseModel):
    filename: str
    rawLocator: str
