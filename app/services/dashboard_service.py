from datetime import datetime, timezone, tzinfo

from app.services.reservation_cache import ReservationCache
from app.services.reservation_store import ReservationStore
from app.utils.reservation_stats import build_dashboard


class DashboardService:

    def overview(
        self, store: ReservationStore, cache: ReservationCache,
        now: datetime, tz: tzinfo = timezone.utc,
        days: int = 7, top: int = 5,
    ) -> dict:
        # store.list() is newest-first, which is what the "recent" block expects
        return build_dashboard(cache.get(store), now, tz, days=days, top=top)


dashboard_service = DashboardService()
