"""New Zealand street address factory."""

from __future__ import annotations

import random

from faker import Faker

from rental_workpaper.generators.base import DEFAULT_LOCALE
from rental_workpaper.models.base import Address

# Main rental markets, weighted roughly by share of rental stock
CITY_WEIGHTS: dict[str, float] = {
    "Auckland": 0.40,
    "Wellington": 0.15,
    "Christchurch": 0.15,
    "Hamilton": 0.08,
    "Tauranga": 0.07,
    "Dunedin": 0.06,
    "Palmerston North": 0.05,
    "Nelson": 0.04,
}


class AddressFactory:
    """Generate realistic New Zealand addresses.

    Street names and postcodes come from Faker's ``en_NZ`` provider;
    cities are drawn from :data:`CITY_WEIGHTS` unless ``use_faker_cities``
    is set.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    use_faker_cities : bool
        Use Faker's generated town names instead of the main rental markets.
    """

    def __init__(self, seed: int | None = None, use_faker_cities: bool = False) -> None:
        self._fake = Faker(DEFAULT_LOCALE)
        if seed is not None:
            self._fake.seed_instance(seed)
        self._use_faker_cities = use_faker_cities
        self._cities = list(CITY_WEIGHTS.keys())
        self._weights = list(CITY_WEIGHTS.values())

    def generate(self, city: str | None = None) -> Address:
        """Generate an address, optionally in a specific city.

        Parameters
        ----------
        city : str | None
            City name. If ``None``, picks one by weight.

        Returns
        -------
        Address
            Generated address.
        """
        if city is None:
            if self._use_faker_cities:
                city = self._fake.city()
            else:
                city = random.choices(self._cities, weights=self._weights, k=1)[0]

        return Address(
            address_line1=f"{random.randint(1, 400)} {self._fake.street_name()}",
            address_line2=random.choice(["", "", "", f"Unit {random.randint(1, 40)}"]),
            suburb=self._fake.city(),
            city=city,
            postcode=f"{random.randint(100, 9999):04d}",
            country="NZ",
        )
