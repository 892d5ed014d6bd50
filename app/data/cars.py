"""Fleet shown on the public site and in the admin vehicles page. Edited by hand, never at runtime."""
from typing import NamedTuple


class Car(NamedTuple):
    id:           int
    name:         str
    category:     str
    pricePerDay:  int       # DH
    seats:        int
    transmission: str
    fuel:         str
    image:        str


CARS: tuple[Car, ...] = (
    Car(1, "Dacia Logan",        "Economique", 250, 5, "Manuelle",    "Diesel",  "/cars/dacia-logan.jpg"),
    Car(2, "Renault Clio 5",     "Economique", 300, 5, "Manuelle",    "Diesel",  "/cars/renault-clio.jpg"),
    Car(3, "Peugeot 208",        "Citadine",   320, 5, "Manuelle",    "Essence", "/cars/peugeot-208.jpg"),
    Car(4, "Hyundai Accent",     "Berline",    350, 5, "Automatique", "Essence", "/cars/hyundai-accent.jpg"),
    Car(5, "Dacia Duster",       "SUV",        450, 5, "Manuelle",    "Diesel",  "/cars/dacia-duster.jpg"),
    Car(6, "Volkswagen Touareg", "Luxe",       900, 5, "Automatique", "Diesel",  "/cars/vw-touareg.jpg"),
)
