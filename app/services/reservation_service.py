import logging
from datetime import date, timezone, tzinfo

from app.schemas.common import paginate
from app.services.reservation_cache import ReservationCache
from app.services.reservation_store import ReservationStore
from app.utils import reservation_stats as stats

logger = logging.getLogger(__name__)


class ReservationService:

    def list_reservations(
        self, store: ReservationStore, cache: ReservationCache,
        page: int, limit: int,
        search: str | None,
        start_date: date | None, end_date: date | None,
        tz: tzinfo = timezone.utc,
    ) -> tuple[list[dict], int]:
        items = cache.get(store)
        items = stats.search(items, search)
        if start_date or end_date:
            items = stats.created_between(items, start_date, end_date, tz)
        page_items, total = paginate(items, page, limit)
        return [stats.display_row(r, tz) for r in page_items], total

    def get_reservation(self, store: ReservationStore, reservation_id: str, tz: tzinfo = timezone.utc) -> dict:
        return stats.display_row(store.get(reservation_id), tz)

    def delete_reservation(
        self, store: ReservationStore, cache: ReservationCache,
        reservation_id: str, actor_id: int | None,
    ) -> None:
        store.delete(reservation_id, actor_id)
        cache.invalidate()
        logger.info(f"Reservation {reservation_id} deleted by user {actor_id}")


reservation_service = ReservationService()
