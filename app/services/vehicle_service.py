from app.data.cars import CARS, Car
from app.schemas.vehicle import CarOut
from app.utils.exceptions import NotFoundException


class VehicleService:
    """Read-only view over the compiled-in fleet."""

    def __init__(self, cars: tuple[Car, ...] = CARS):
        self._cars = cars

    def list_vehicles(self, category: str | None = None) -> list[dict]:
        cars = self._cars
        if category:
            cars = tuple(c for c in cars if c.category.lower() == category.strip().lower())
        return [CarOut(**c._asdict()).model_dump() for c in cars]

    def get_vehicle(self, vehicle_id: int) -> dict:
        car = next((c for c in self._cars if c.id == vehicle_id), None)
        if not car:
            raise NotFoundException("Vehicle")
        return CarOut(**car._asdict()).model_dump()

    def list_categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for c in self._cars:
            seen.setdefault(c.category, None)
        return list(seen)


vehicle_service = VehicleService()
