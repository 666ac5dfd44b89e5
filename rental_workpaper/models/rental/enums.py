"""Enumeration types for rental workpaper entities."""

from enum import Enum


class PropertyType(str, Enum):
    HOUSE = "House"
    APARTMENT = "Apartment"
    TOWNHOUSE = "Townhouse"
    UNIT = "Unit"
    LIFESTYLE = "Lifestyle"
    COMMERCIAL = "Commercial"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    INTEREST = "Interest"
    RATES = "Rates"
    INSURANCE = "Insurance"
    PROPERTY_MANAGEMENT = "PropertyManagement"
    BODY_CORPORATE = "BodyCorporate"
    REPAIRS_MAINTENANCE = "RepairsMaintenance"
    CLEANING = "Cleaning"
    ADVERTISING = "Advertising"
    LEGAL_FEES = "LegalFees"
    ACCOUNTING_FEES = "AccountingFees"
    UTILITIES = "Utilities"
    TRAVEL = "Travel"
    OTHER = "Other"


class WorkpaperStatus(str, Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    READY_TO_REVIEW = "ReadyToReview"
    COMPLETE = "Complete"
    LOCKED = "Locked"


# Display and lifecycle order
STATUS_ORDER: tuple[WorkpaperStatus, ...] = tuple(WorkpaperStatus)


class ActivityType(str, Enum):
    CREATED = "Created"
    ADDED_EXPENSE = "AddedExpense"
    UPDATED_EXPENSE = "UpdatedExpense"
    REMOVED_EXPENSE = "RemovedExpense"
    LINKED_EVIDENCE = "LinkedEvidence"
    ADDED_EVIDENCE = "AddedEvidence"
    REMOVED_EVIDENCE = "RemovedEvidence"
    STATUS_CHANGE = "StatusChange"


class Severity(str, Enum):
    BLOCKING = "blocking"
    WARNING = "warning"
    INFO = "info"
