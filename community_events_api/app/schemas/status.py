from datetime import datetime

from pydantic import BaseModel


class StatusRead(BaseModel):
    status: str
    message: str
    timestamp: datetime
    database: str
