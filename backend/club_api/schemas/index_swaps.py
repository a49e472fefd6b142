"""IndexSwap Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class IndexSwapCreate(BaseModel):
    student_name: str = Field(..., min_length=1)
    module_name: str = Field(..., min_length=1)
    module_code: str = Field(..., min_length=1)
    have_index: str = Field(..., min_length=1)
    want_index: str = Field(..., min_length=1)
    email: str | None = None
    phone_number: str | None = None
    tele_handle: str | None = None

    def natural_key(self) -> dict[str, str]:
        return {
            "student_name": self.student_name,
            "module_name": self.module_name,
            "module_code": self.module_code,
            "have_index": self.have_index,
            "want_index": self.want_index,
        }


class IndexSwapUpdate(BaseModel):
    student_name: str | None = Field(None, min_length=1)
    module_name: str | None = Field(None, min_length=1)
    module_code: str | None = Field(None, min_length=1)
    have_index: str | None = Field(None, min_length=1)
    want_index: str | None = Field(None, min_length=1)
    email: str | None = None
    phone_number: str | None = None
    tele_handle: str | None = None


class IndexSwapResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_name: str
    module_name: str
    module_code: str
    have_index: str
    want_index: str
    email: str | None
    phone_number: str | None
    tele_handle: str | None
