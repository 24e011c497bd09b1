"""Roster state management: remote-first loading, deduplicated adds, cache mirror."""
import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

from src.models.registrant import Registrant
from src.models.roster import AddResult, FailureKind, RemoveResult, RosterState
from src.services.roster_gateway import UNAVAILABLE_MESSAGE, RosterGateway
from src.services.storage_service import RosterCache
from src.utils.exceptions import BusinessError, FileWriteError, GatewayError
from src.utils.validation import normalize_email, normalize_form

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Cet email est déjà utilisé par un autre inscrit"
NOT_FOUND_MESSAGE = "Inscrit introuvable"


class RosterStateManager:
    """
    Owns the in-memory roster for one session.

    The gateway and cache are injected by the composition root; nothing here
    is process-global. Callers are expected to issue one add/remove at a time.
    """

    def __init__(self, gateway: RosterGateway, cache: RosterCache):
        self._gateway = gateway
        self._cache = cache
        self._registrants: List[Registrant] = []
        self._state = RosterState.UNINITIALIZED
        self._last_error: Optional[str] = None

    @property
    def state(self) -> RosterState:
        return self._state

    @property
    def is_degraded(self) -> bool:
        return self._state == RosterState.DEGRADED

    @property
    def last_error(self) -> Optional[str]:
        """Message of the remote failure that left the roster degraded."""
        return self._last_error

    @property
    def registrants(self) -> Tuple[Registrant, ...]:
        return tuple(self._registrants)

    @property
    def count(self) -> int:
        return len(self._registrants)

    def is_email_taken(self, email: str) -> bool:
        """Case-insensitive lookup against the current roster."""
        wanted = normalize_email(email)
        return any(normalize_email(r.email) == wanted for r in self._registrants)

    async def load(self) -> RosterState:
        """
        Populate the roster, remote first.

        Returns:
            READY if the remote list was loaded and mirrored to the cache,
            DEGRADED if the cached copy (or an empty roster) is used instead

        Raises:
            RuntimeError: If the roster was already loaded
        """
        if self._state != RosterState.UNINITIALIZED:
            raise RuntimeError(f"Roster already loaded (state: {self._state.value})")

        self._state = RosterState.LOADING
        try:
            registrants = await self._gateway.list_all()
        except GatewayError as e:
            logger.warning(f"Remote roster unavailable, falling back to cache: {e.message}")
            cached = self._cache.read()
            self._registrants = list(cached) if cached is not None else []
            self._last_error = e.message
            self._state = RosterState.DEGRADED
            logger.info(f"Roster degraded with {self.count} cached registrant(s)")
            return self._state

        self._registrants = list(registrants)
        self._mirror()
        self._state = RosterState.READY
        logger.info(f"Roster loaded with {self.count} registrant(s)")
        return self._state

    async def add(self, form_data: Mapping[str, Any]) -> AddResult:
        """
        Register a person whose form already passed validate_form().

        Args:
            form_data: Validated registration form (camelCase keys)

        Returns:
            AddResult
            - success with the server-confirmed registrant
            - BUSINESS failure on duplicate email or remote data rejection
            - SERVER failure if the remote store is unavailable

        Behavior:
            - Duplicate emails are rejected locally without a remote call
            - Roster and cache are left unchanged on any failure
        """
        candidate = normalize_form(form_data)

        if self.is_email_taken(candidate.get("email", "")):
            return AddResult.failure(DUPLICATE_EMAIL_MESSAGE, FailureKind.BUSINESS)

        try:
            registrant = await self._gateway.create(candidate)
        except BusinessError as e:
            return AddResult.failure(e.message, FailureKind.BUSINESS)
        except GatewayError as e:
            logger.warning(f"Registration failed on remote store: {e.message}")
            return AddResult.failure(UNAVAILABLE_MESSAGE, FailureKind.SERVER)

        self._registrants.append(registrant)
        self._mirror()
        logger.info(f"Registered {registrant.email} (id={registrant.id})")
        return AddResult.ok(registrant)

    async def remove(self, registrant_id: Union[int, str]) -> RemoveResult:
        """
        Delete a registrant remotely, then drop it from the roster and cache.

        Ids are compared as strings, so "3" from a form matches the store's 3.
        """
        target = next((r for r in self._registrants if str(r.id) == str(registrant_id)), None)
        if target is None:
            return RemoveResult(success=False, error=NOT_FOUND_MESSAGE, kind=FailureKind.BUSINESS)

        try:
            await self._gateway.remove(target.id)
        except GatewayError as e:
            logger.warning(f"Removal of {target.id} failed on remote store: {e.message}")
            return RemoveResult(success=False, error=UNAVAILABLE_MESSAGE, kind=FailureKind.SERVER)

        self._registrants = [r for r in self._registrants if r is not target]
        self._mirror()
        return RemoveResult(success=True)

    def _mirror(self) -> None:
        """Overwrite the cache with the full roster. The remote store stays authoritative."""
        try:
            self._cache.write(self._registrants)
        except FileWriteError as e:
            logger.error(f"Could not mirror roster to cache: {e}")
