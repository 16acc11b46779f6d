from pydantic import BaseModel, ConfigDict


class ChildCreate(BaseModel):
    name: str


class ChildProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | int
    name: str
