"""Registration form validation utilities."""
import re
from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple

from src.models.roster import ValidationResult
from src.utils.date_utils import calculate_age, parse_date

# Letters (including Latin-1 accented), whitespace, hyphen and apostrophe
NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s\-']+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{5}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
MINIMUM_AGE = 18

FORM_FIELDS = ("firstName", "lastName", "email", "dateOfBirth", "city", "postalCode")


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_name(name: Any) -> Tuple[bool, str]:
    """
    Validate a first or last name.

    Args:
        name: Raw name value

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Le nom/prénom est requis") if absent, empty or not a string
        - (False, "... au moins 2 caractères") if too short
        - (False, "... pas dépasser 50 caractères") if too long
        - (False, "... que des lettres, espaces et tirets") if it has other characters
    """
    if not _is_present(name):
        return False, "Le nom/prénom est requis"

    trimmed = name.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        return False, "Le nom/prénom doit contenir au moins 2 caractères"
    if len(trimmed) > NAME_MAX_LENGTH:
        return False, "Le nom/prénom ne doit pas dépasser 50 caractères"
    if not NAME_PATTERN.match(trimmed):
        return False, "Le nom/prénom ne peut contenir que des lettres, espaces et tirets"
    return True, ""


def validate_email(email: Any) -> Tuple[bool, str]:
    """
    Validate an email address (local@domain.tld shape, at most 100 characters).

    Returns:
        Tuple of (is_valid: bool, error_message: str)
    """
    if not _is_present(email):
        return False, "L'email est requis"

    trimmed = email.strip()
    if not EMAIL_PATTERN.match(trimmed):
        return False, "L'email est invalide"
    if len(trimmed) > EMAIL_MAX_LENGTH:
        return False, "L'email ne doit pas dépasser 100 caractères"
    return True, ""


def validate_date_of_birth(date_str: Any, today: Optional[date] = None) -> Tuple[bool, str]:
    """
    Validate date of birth; the registrant must be at least 18 years old.

    Args:
        date_str: Date in YYYY-MM-DD format
        today: Reference date for the age computation (defaults to today)

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "La date de naissance est requise") if absent
        - (False, "La date est invalide") if it does not parse to a calendar date
        - (False, "Vous devez avoir au moins 18 ans") if younger than 18
    """
    if not _is_present(date_str):
        return False, "La date de naissance est requise"

    try:
        birth_date = parse_date(date_str)
    except ValueError:
        return False, "La date est invalide"

    if calculate_age(birth_date, today) < MINIMUM_AGE:
        return False, "Vous devez avoir au moins 18 ans"
    return True, ""


def validate_postal_code(postal_code: Any) -> Tuple[bool, str]:
    """Validate a French postal code (exactly 5 digits)."""
    if not _is_present(postal_code):
        return False, "Le code postal est requis"

    if not POSTAL_CODE_PATTERN.match(postal_code.strip()):
        return False, "Le code postal doit contenir 5 chiffres"
    return True, ""


def validate_city(city: Any) -> Tuple[bool, str]:
    """Validate a city name; same character rules as names."""
    if not _is_present(city):
        return False, "La ville est requise"

    trimmed = city.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        return False, "La ville doit contenir au moins 2 caractères"
    if len(trimmed) > NAME_MAX_LENGTH:
        return False, "La ville ne doit pas dépasser 50 caractères"
    if not NAME_PATTERN.match(trimmed):
        return False, "La ville ne peut contenir que des lettres, espaces et tirets"
    return True, ""


def validate_form(form_data: Any, today: Optional[date] = None) -> ValidationResult:
    """
    Validate every field of a registration form.

    All validators run, so the result lists every failing field at once.

    Args:
        form_data: Mapping with firstName, lastName, email, dateOfBirth,
            city and postalCode (missing keys count as absent)
        today: Reference date for the age check

    Returns:
        ValidationResult with is_valid and a field -> message error map
    """
    if not isinstance(form_data, Mapping):
        form_data = {}

    checks = {
        "firstName": validate_name(form_data.get("firstName")),
        "lastName": validate_name(form_data.get("lastName")),
        "email": validate_email(form_data.get("email")),
        "dateOfBirth": validate_date_of_birth(form_data.get("dateOfBirth"), today),
        "postalCode": validate_postal_code(form_data.get("postalCode")),
        "city": validate_city(form_data.get("city")),
    }

    errors = {field: message for field, (is_valid, message) in checks.items() if not is_valid}
    return ValidationResult(is_valid=not errors, errors=errors)


def normalize_email(email: str) -> str:
    """
    Normalize email for duplicate comparison.

    Behavior:
        - Trims leading/trailing whitespace
        - Converts to lowercase
        - Example: " Jean@X.com " → "jean@x.com"
    """
    return email.strip().lower()


def normalize_form(form_data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of the form with string values trimmed."""
    return {
        key: value.strip() if isinstance(value, str) else value
        for key, value in form_data.items()
    }
