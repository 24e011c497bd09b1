"""Per-session wiring of the roster for the Streamlit pages."""
import asyncio
import logging
from typing import Any, Awaitable, MutableMapping, Optional

import streamlit as st

from src.services.roster_gateway import HttpRosterGateway
from src.services.roster_service import RosterStateManager
from src.services.storage_service import RosterCache
from src.utils.settings import get_settings

logger = logging.getLogger(__name__)


def _session(state: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if state is None else state


def _event_loop(state: MutableMapping[str, Any]) -> asyncio.AbstractEventLoop:
    # The gateway's HTTP client is bound to the loop it first ran on,
    # so each session keeps one loop for its whole lifetime.
    if "roster_loop" not in state:
        state["roster_loop"] = asyncio.new_event_loop()
    return state["roster_loop"]


def run_async(coro: Awaitable[Any], state: Optional[MutableMapping[str, Any]] = None) -> Any:
    """Run a coroutine to completion on the session's event loop."""
    return _event_loop(_session(state)).run_until_complete(coro)


def get_roster(state: Optional[MutableMapping[str, Any]] = None) -> RosterStateManager:
    """
    Return the session's roster, creating and loading it on first use.

    Args:
        state: Session mapping (defaults to st.session_state)

    Behavior:
        - Builds one gateway per session and keeps it in session state
        - Runs load() once; later calls reuse the loaded instance
        - If load() raises, the gateway is closed and dropped before re-raising
    """
    state = _session(state)
    if "roster" in state:
        return state["roster"]

    settings = get_settings()
    if "roster_gateway" not in state:
        state["roster_gateway"] = HttpRosterGateway(settings.api_url, timeout=settings.api_timeout)
    gateway = state["roster_gateway"]

    roster = RosterStateManager(gateway, RosterCache(settings.cache_dir))
    try:
        roster_state = run_async(roster.load(), state)
    except Exception:
        logger.exception("Roster load failed, closing gateway")
        del state["roster_gateway"]
        run_async(gateway.aclose(), state)
        raise

    logger.info(f"Session roster initialised in state {roster_state.value}")
    state["roster"] = roster
    return roster
