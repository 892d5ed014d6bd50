import uuid
from sqlalchemy import Column, String
from sqlalchemy.sql import func
from app.database import Base, UtcDateTime


def _new_id() -> str:
    return str(uuid.uuid4())


class Reservation(Base):
    """
    A booking request captured by the public site (WhatsApp / web form).
    The admin back-office only reads and deletes these rows.
    """
    __tablename__ = "reservations"

    id          = Column(String(36), primary_key=True, default=_new_id)
    carName     = Column("car_name", String(150), nullable=False, index=True)
    carCategory = Column("car_category", String(100), nullable=True)
    source      = Column(String(50), nullable=True)
    createdAt   = Column("created_at", UtcDateTime, server_default=func.now(),
                         nullable=False, index=True)

    def __repr__(self):
        return f"<Reservation id={self.id} car={self.carName}>"
