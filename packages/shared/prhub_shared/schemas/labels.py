from pydantic import BaseModel, Field
from uuid import UUID


class LabelCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class LabelRead(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}
