from pydantic import BaseModel


class CarOut(BaseModel):
    id:           int
    name:         str
    category:     str
    pricePerDay:  int      # DH per day
    seats:        int
    transmission: str
    fuel:         str
    image:        str
