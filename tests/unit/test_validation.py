"""Unit tests for validation utilities."""
import pytest
from datetime import date

from src.utils.date_utils import years_before
from src.utils.validation import (
    normalize_email,
    normalize_form,
    validate_city,
    validate_date_of_birth,
    validate_email,
    validate_form,
    validate_name,
    validate_postal_code,
)

TODAY = date(2026, 10, 19)


@pytest.fixture
def valid_form():
    """A form where every field satisfies its rule."""
    return {
        "firstName": "Jean",
        "lastName": "Dupont",
        "email": "jean.dupont@example.com",
        "dateOfBirth": years_before(TODAY, 25).isoformat(),
        "city": "Paris",
        "postalCode": "75001",
    }


class TestValidateName:
    """Test first/last name validation."""

    @pytest.mark.parametrize("name", ["Jean", "Jo", "Éloïse", "Jean-Pierre", "O'Connor", "Marie Claire"])
    def test_valid_names(self, name):
        """Letters, accents, spaces, hyphens and apostrophes are accepted."""
        assert validate_name(name) == (True, "")

    @pytest.mark.parametrize("name", [None, "", 42, ["Jean"]])
    def test_missing_or_wrong_type_is_required(self, name):
        """Absent, empty and non-string values share the required message."""
        assert validate_name(name) == (False, "Le nom/prénom est requis")

    def test_single_character_too_short(self):
        """One character is below the minimum length."""
        is_valid, message = validate_name("J")
        assert not is_valid
        assert "au moins 2 caractères" in message

    def test_whitespace_only_fails_on_length(self):
        """Whitespace-only is trimmed to empty and fails on length, not presence."""
        is_valid, message = validate_name("   ")
        assert not is_valid
        assert "au moins 2 caractères" in message

    def test_surrounding_whitespace_ignored(self):
        """Leading/trailing spaces are not counted."""
        assert validate_name("  Jo  ") == (True, "")

    def test_exactly_50_chars_accepted(self):
        """Name with exactly 50 characters should be accepted."""
        assert validate_name("A" * 50) == (True, "")

    def test_51_chars_rejected(self):
        """Name longer than 50 characters is rejected."""
        is_valid, message = validate_name("A" * 51)
        assert not is_valid
        assert "50 caractères" in message

    @pytest.mark.parametrize("name", ["Jean2", "Jean_Pierre", "Jean@", "张三"])
    def test_invalid_characters(self, name):
        """Digits, symbols and non-Latin scripts are rejected."""
        is_valid, message = validate_name(name)
        assert not is_valid
        assert "que des lettres" in message

    def test_caller_value_not_mutated(self):
        """Validation does not change the caller's value."""
        value = "  Jean  "
        validate_name(value)
        assert value == "  Jean  "


class TestValidateEmail:
    """Test email validation."""

    def test_valid_email(self):
        assert validate_email("jean.dupont@example.com") == (True, "")

    def test_valid_email_with_whitespace(self):
        """Surrounding whitespace is trimmed before checking."""
        assert validate_email("  jean@example.com ") == (True, "")

    @pytest.mark.parametrize("email", [None, "", 123])
    def test_missing_is_required(self, email):
        assert validate_email(email) == (False, "L'email est requis")

    @pytest.mark.parametrize("email", ["jean", "jean@example", "@example.com", "jean @example.com", "jean@@example.com"])
    def test_malformed_email(self, email):
        assert validate_email(email) == (False, "L'email est invalide")

    def test_email_over_100_chars(self):
        """Shape is checked before length."""
        email = "a" * 95 + "@x.com"
        assert len(email) == 101
        assert validate_email(email) == (False, "L'email ne doit pas dépasser 100 caractères")

    def test_email_exactly_100_chars(self):
        email = "a" * 94 + "@x.com"
        assert len(email) == 100
        assert validate_email(email) == (True, "")


class TestValidateDateOfBirth:
    """Test date of birth validation."""

    def test_adult_is_valid(self):
        assert validate_date_of_birth("1990-05-14", today=TODAY) == (True, "")

    def test_exactly_18_today_is_valid(self):
        """Eighteenth birthday today counts as 18."""
        assert validate_date_of_birth("2008-10-19", today=TODAY) == (True, "")

    def test_one_day_short_of_18_is_invalid(self):
        """Eighteenth birthday tomorrow is still 17."""
        assert validate_date_of_birth("2008-10-20", today=TODAY) == (
            False, "Vous devez avoir au moins 18 ans"
        )

    def test_earlier_month_next_year_is_invalid(self):
        """Birth month not reached yet decrements the age."""
        is_valid, message = validate_date_of_birth("2008-11-01", today=TODAY)
        assert not is_valid
        assert "18 ans" in message

    def test_future_date_is_under_age(self):
        is_valid, message = validate_date_of_birth("2030-01-01", today=TODAY)
        assert not is_valid
        assert "18 ans" in message

    @pytest.mark.parametrize("value", [None, "", 19900514])
    def test_missing_is_required(self, value):
        assert validate_date_of_birth(value, today=TODAY) == (
            False, "La date de naissance est requise"
        )

    @pytest.mark.parametrize("value", ["not-a-date", "1990-13-01", "1990-02-30", "14/05/1990", "   "])
    def test_invalid_format(self, value):
        """Unparseable dates have their own message, distinct from required."""
        assert validate_date_of_birth(value, today=TODAY) == (False, "La date est invalide")

    def test_iso_datetime_accepted(self):
        assert validate_date_of_birth("1990-05-14T00:00:00", today=TODAY) == (True, "")

    def test_defaults_to_current_date(self):
        """Without a pinned clock a clearly adult birth date passes."""
        assert validate_date_of_birth("1950-01-01") == (True, "")


class TestValidatePostalCode:
    """Test postal code validation."""

    def test_valid_postal_code(self):
        assert validate_postal_code("75001") == (True, "")

    def test_valid_with_whitespace(self):
        assert validate_postal_code(" 75001 ") == (True, "")

    @pytest.mark.parametrize("value", [None, "", 75001])
    def test_missing_is_required(self, value):
        assert validate_postal_code(value) == (False, "Le code postal est requis")

    @pytest.mark.parametrize("value", ["750", "750013", "75A01", "75 01", "７５００１"])
    def test_not_five_digits(self, value):
        """Too short, too long, letters and non-ASCII digits are all rejected."""
        is_valid, message = validate_postal_code(value)
        assert not is_valid
        assert "5 chiffres" in message


class TestValidateCity:
    """Test city validation."""

    @pytest.mark.parametrize("city", ["Paris", "Saint-Étienne", "L'Haÿ-les-Roses", "Aix en Provence"])
    def test_valid_cities(self, city):
        assert validate_city(city) == (True, "")

    @pytest.mark.parametrize("city", [None, ""])
    def test_missing_is_required(self, city):
        assert validate_city(city) == (False, "La ville est requise")

    def test_too_short(self):
        assert validate_city("P") == (False, "La ville doit contenir au moins 2 caractères")

    def test_too_long(self):
        assert validate_city("P" * 51) == (False, "La ville ne doit pas dépasser 50 caractères")

    def test_digits_rejected(self):
        is_valid, message = validate_city("Paris 15")
        assert not is_valid
        assert "que des lettres" in message


class TestValidateForm:
    """Test whole-form validation."""

    def test_valid_form(self, valid_form):
        result = validate_form(valid_form, today=TODAY)
        assert result.is_valid is True
        assert result.errors == {}

    def test_every_failing_field_reported(self):
        """No short-circuit: all failing fields appear in one pass."""
        result = validate_form({
            "firstName": "J",
            "lastName": "",
            "email": "invalid",
            "dateOfBirth": "2015-01-01",
            "city": "P4ris",
            "postalCode": "750",
        }, today=TODAY)

        assert result.is_valid is False
        assert set(result.errors) == {"firstName", "lastName", "email", "dateOfBirth", "city", "postalCode"}
        assert "5 chiffres" in result.errors["postalCode"]

    def test_error_count_matches_failing_fields(self, valid_form):
        valid_form["email"] = "nope"
        valid_form["postalCode"] = "750013"
        result = validate_form(valid_form, today=TODAY)

        assert result.is_valid is False
        assert set(result.errors) == {"email", "postalCode"}

    def test_missing_keys_are_absent(self):
        result = validate_form({}, today=TODAY)
        assert len(result.errors) == 6
        assert result.errors["dateOfBirth"] == "La date de naissance est requise"

    def test_non_mapping_input(self):
        result = validate_form(None, today=TODAY)
        assert result.is_valid is False
        assert len(result.errors) == 6

    def test_form_not_mutated(self, valid_form):
        valid_form["firstName"] = "  Jean  "
        snapshot = dict(valid_form)
        validate_form(valid_form, today=TODAY)
        assert valid_form == snapshot


class TestNormalization:
    """Test normalization helpers."""

    def test_normalize_email(self):
        assert normalize_email(" Jean@X.com ") == "jean@x.com"

    def test_normalize_form_trims_strings_only(self):
        form = {"firstName": "  Jean ", "age": 30}
        assert normalize_form(form) == {"firstName": "Jean", "age": 30}
        assert form["firstName"] == "  Jean "
