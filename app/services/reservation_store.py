import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.reservation import Reservation
from app.schemas.reservation import ReservationOut
from app.utils.audit import log_action
from app.utils.exceptions import StoreException, ReservationNotFoundException

logger = logging.getLogger(__name__)


class ReservationStore(ABC):
    """
    What the back-office needs from the reservation backend.

    list() returns newest-first detached snapshots. Failures surface as
    StoreException; unknown ids as ReservationNotFoundException.
    """

    @abstractmethod
    def list(self) -> List[ReservationOut]:
        raise NotImplementedError

    @abstractmethod
    def filter_by(self, **equalities) -> List[ReservationOut]:
        raise NotImplementedError

    @abstractmethod
    def get(self, reservation_id: str) -> ReservationOut:
        raise NotImplementedError

    @abstractmethod
    def delete(self, reservation_id: str, actor_id: int | None = None) -> None:
        raise NotImplementedError


class SqlReservationStore(ReservationStore):

    _FILTERABLE = {
        "id":          Reservation.id,
        "carName":     Reservation.carName,
        "carCategory": Reservation.carCategory,
        "source":      Reservation.source,
    }

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[ReservationOut]:
        return self.filter_by()

    def filter_by(self, **equalities) -> List[ReservationOut]:
        unknown = set(equalities) - set(self._FILTERABLE)
        if unknown:
            raise ValueError(f"Cannot filter reservations by {sorted(unknown)}")
        try:
            q = self.db.query(Reservation)
            for name, value in equalities.items():
                q = q.filter(self._FILTERABLE[name] == value)
            rows = q.order_by(Reservation.createdAt.desc(), Reservation.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Reservation query failed: {e}")
            raise StoreException() from e
        return [ReservationOut.model_validate(r) for r in rows]

    def get(self, reservation_id: str) -> ReservationOut:
        try:
            row = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Reservation lookup failed for {reservation_id}: {e}")
            raise StoreException() from e
        if not row:
            raise ReservationNotFoundException(reservation_id)
        return ReservationOut.model_validate(row)

    def delete(self, reservation_id: str, actor_id: int | None = None) -> None:
        try:
            row = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
            if not row:
                raise ReservationNotFoundException(reservation_id)
            log_action(self.db, actor_id, "DELETE", "Reservation", reservation_id,
                       f"Deleted reservation for {row.carName}")
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Reservation delete failed for {reservation_id}: {e}")
            raise StoreException("Could not delete the reservation. Please retry.") from e
