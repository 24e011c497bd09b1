"""
Remote roster gateway.

All reads and writes of registrants against the authoritative store go
through a RosterGateway. HttpRosterGateway talks to a JSONPlaceholder-style
REST API (GET/POST /users, DELETE /users/{id}).
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union

import httpx

from src.models.registrant import Registrant
from src.utils.date_utils import now_iso
from src.utils.exceptions import BusinessError, ServerError, TransportError

logger = logging.getLogger(__name__)

# The remote shape carries no birth date
PLACEHOLDER_DATE_OF_BIRTH = "2001-01-01"

UNAVAILABLE_MESSAGE = "Le serveur est temporairement indisponible. Veuillez réessayer plus tard."
INVALID_DATA_MESSAGE = "Les données envoyées sont invalides."


class RosterGateway(Protocol):
    """Operations the roster needs from the remote store."""

    async def list_all(self) -> List[Registrant]:
        ...

    async def create(self, candidate: Mapping[str, Any]) -> Registrant:
        ...

    async def remove(self, registrant_id: Union[int, str]) -> None:
        ...


def split_name(full_name: str) -> Tuple[str, str]:
    """Split on the first space: "Jean Pierre Dupont" → ("Jean", "Pierre Dupont")."""
    first_name, _, last_name = (full_name or "").strip().partition(" ")
    return first_name, last_name.strip()


def registrant_to_remote(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the create payload from a validated form."""
    return {
        "name": f"{candidate['firstName']} {candidate['lastName']}",
        "email": candidate["email"],
        "address": {
            "city": candidate["city"],
            "zipcode": candidate["postalCode"],
        },
    }


def registrant_from_remote(
    row: Mapping[str, Any],
    fallback: Optional[Mapping[str, Any]] = None,
) -> Registrant:
    """
    Map a remote user row to a Registrant.

    Args:
        row: {id, name, email, address: {city, zipcode}} as sent by the store
        fallback: Form values used for anything the row lacks; its
            dateOfBirth replaces the placeholder

    Raises:
        KeyError, TypeError, ValueError: If the row cannot be mapped
    """
    fallback = fallback or {}
    address = row.get("address") or {}

    if row.get("name"):
        first_name, last_name = split_name(row["name"])
    else:
        first_name, last_name = fallback.get("firstName", ""), fallback.get("lastName", "")

    return Registrant(
        id=row["id"],
        first_name=first_name,
        last_name=last_name,
        email=row.get("email") or fallback.get("email", ""),
        date_of_birth=fallback.get("dateOfBirth", PLACEHOLDER_DATE_OF_BIRTH),
        city=address.get("city") or fallback.get("city", ""),
        postal_code=address.get("zipcode") or fallback.get("postalCode", ""),
        registered_at=row.get("registeredAt") or now_iso(),
    )


def _business_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return INVALID_DATA_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return INVALID_DATA_MESSAGE


class HttpRosterGateway:
    """
    Gateway backed by an HTTP JSON API.

    One httpx.AsyncClient is created per gateway and reused for every call;
    close it with aclose() or use the gateway as an async context manager.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "HttpRosterGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request, turning transport faults and 5xx into gateway errors."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"{method} {url} failed without response: {e}")
            raise TransportError(UNAVAILABLE_MESSAGE) from e

        if response.status_code >= 500:
            logger.warning(f"{method} {url} returned {response.status_code}")
            raise ServerError(UNAVAILABLE_MESSAGE, status=response.status_code)
        return response

    async def list_all(self) -> List[Registrant]:
        """
        Fetch every registrant.

        Raises:
            ServerError: On a 4xx/5xx status or an unexpected body
            TransportError: If the store could not be reached
        """
        response = await self._request("GET", "/users")
        if response.is_error:
            raise ServerError(UNAVAILABLE_MESSAGE, status=response.status_code)

        try:
            rows = response.json()
            if not isinstance(rows, list):
                raise TypeError(f"expected a list, got {type(rows).__name__}")
            return [registrant_from_remote(row) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"GET /users returned an unexpected body: {e}")
            raise ServerError(UNAVAILABLE_MESSAGE, status=response.status_code) from e

    async def create(self, candidate: Mapping[str, Any]) -> Registrant:
        """
        Create a registrant from a validated form.

        Raises:
            BusinessError: If the store rejects the data (4xx)
            ServerError: On a 5xx status or an unexpected body
            TransportError: If the store could not be reached
        """
        response = await self._request("POST", "/users", json=registrant_to_remote(candidate))
        if response.is_error:
            message = _business_message(response)
            logger.info(f"POST /users rejected with {response.status_code}: {message}")
            raise BusinessError(message, status=response.status_code)

        try:
            row = response.json()
            return registrant_from_remote(row, fallback=candidate)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"POST /users returned an unexpected body: {e}")
            raise ServerError(UNAVAILABLE_MESSAGE, status=response.status_code) from e

    async def remove(self, registrant_id: Union[int, str]) -> None:
        """
        Delete a registrant by id.

        Raises:
            ServerError: On a 4xx/5xx status
            TransportError: If the store could not be reached
        """
        response = await self._request("DELETE", f"/users/{registrant_id}")
        if response.is_error:
            raise ServerError(UNAVAILABLE_MESSAGE, status=response.status_code)
