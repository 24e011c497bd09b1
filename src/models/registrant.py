"""Registrant data model for the roster."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Registrant:
    """Person confirmed by the remote store. Immutable once created."""

    id: Union[int, str]
    first_name: str
    last_name: str
    email: str
    date_of_birth: str  # YYYY-MM-DD
    city: str
    postal_code: str
    registered_at: str  # ISO 8601 format

    def __post_init__(self):
        """Validate registrant data."""
        if self.id is None or (isinstance(self.id, str) and not self.id.strip()):
            raise ValueError("Registrant id cannot be empty")
        if isinstance(self.id, bool) or not isinstance(self.id, (int, str)):
            raise ValueError(f"Registrant id must be an integer or a string: {self.id!r}")

        for field_name in ("first_name", "last_name", "email", "date_of_birth",
                           "city", "postal_code", "registered_at"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise ValueError(f"{field_name} must be a string, got {type(value).__name__}")

        if not self.email.strip():
            raise ValueError("Email cannot be empty")

        # Validate ISO 8601 timestamp format
        try:
            datetime.fromisoformat(self.registered_at.replace('Z', '+00:00'))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp format: {self.registered_at}") from e

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys of the registration form."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "dateOfBirth": self.date_of_birth,
            "city": self.city,
            "postalCode": self.postal_code,
            "registeredAt": self.registered_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registrant":
        """
        Rebuild a registrant from to_dict() output.

        Raises:
            KeyError: If a field is missing
            ValueError: If a field is invalid
        """
        return cls(
            id=data["id"],
            first_name=data["firstName"],
            last_name=data["lastName"],
            email=data["email"],
            date_of_birth=data["dateOfBirth"],
            city=data["city"],
            postal_code=data["postalCode"],
            registered_at=data["registeredAt"],
        )
