from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ReservationOut(BaseModel):
    """
    Detached snapshot of a reservation row.
    The cache holds these so they outlive the request's DB session.
    """
    id:          str
    carName:     str
    carCategory: Optional[str] = None
    source:      Optional[str] = None
    createdAt:   datetime

    model_config = {"from_attributes": True}
