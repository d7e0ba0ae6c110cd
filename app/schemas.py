from datetime import datetime
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


#request body
class TaskPayload(BaseModel):
    # omitted fields become empty strings; id and timestamps in the body are ignored
    title: str = ""
    description: str = ""
    status: str = ""


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime


#envelopes
class Envelope(BaseModel):
    status: int
    message: str


class DataEnvelope(Envelope, Generic[DataT]):
    data: DataT


TaskEnvelope = DataEnvelope[TaskResponse]
TaskListEnvelope = DataEnvelope[List[TaskResponse]]
