"""Sample data generators."""

from rental_workpaper.generators.address import AddressFactory
from rental_workpaper.generators.base import BaseGenerator
from rental_workpaper.generators.rental import (
    EvidenceGenerator,
    ExpenseLineGenerator,
    PropertyGenerator,
    WorkpaperInputGenerator,
)

__all__ = [
    "AddressFactory",
    "BaseGenerator",
    "EvidenceGenerator",
    "ExpenseLineGenerator",
    "PropertyGenerator",
    "WorkpaperInputGenerator",
]
