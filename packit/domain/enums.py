"""Domain enums."""

from enum import Enum


class Category(str, Enum):
    CLOTHING = "Clothing"
    TOILETRIES = "Toiletries"
    ELECTRONICS = "Electronics"
    DOCUMENTS = "Documents"
    MEDICATIONS = "Medications"
    SHOES = "Shoes"
    ACCESSORIES = "Accessories"
    OTHER = "Other"

    @classmethod
    def coerce(cls, value: object) -> "Category":
        """Map loose backend/user input onto a category, unknown values become OTHER."""
        if isinstance(value, Category):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.OTHER


class TravelClass(str, Enum):
    ECONOMY = "Economy"
    PREMIUM_ECONOMY = "Premium Economy"
    BUSINESS = "Business"
    FIRST = "First"


class WizardStep(str, Enum):
    DETAILS = "details"
    ITEMS = "items"
    SUGGESTIONS = "suggestions"
    WEIGHT = "weight"
    STRATEGY = "strategy"
    SAVING = "saving"
    SAVED = "saved"


STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.DETAILS,
    WizardStep.ITEMS,
    WizardStep.SUGGESTIONS,
    WizardStep.WEIGHT,
    WizardStep.STRATEGY,
)
