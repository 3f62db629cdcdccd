"""Domain constants."""

DEFAULT_AIRLINE_LIMIT_KG = 23.0
DEFAULT_SUITCASE_L = 40.0

# carry-on, medium, large
SUITCASE_SIZES: tuple[int, ...] = (40, 60, 90)

NEAR_LIMIT_RATIO = 0.9
LUGGAGE_TYPE = "suitcase"
