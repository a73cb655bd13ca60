# services/portal_login.py

"""
Name + password login for the player portal.

The password is not stored anywhere: it is the player's own full name,
lowercased with all whitespace removed ("Lionel Messi" -> "lionelmessi").
That is a deliberately weak credential for a closed roster; keep it unless
the club decides to issue real passwords.
"""

import re
from datetime import datetime, timezone
from typing import Callable, List, Optional

from core.errors import PlayerLookupError, PortalLoginError, extract_supabase_error
from core.logging_config import logger
from core.portal_auth import PlayerSession
from core.supabase_client import get_supabase_client


PLAYER_COLUMNS = "id, name, division"
MIN_NAME_LENGTH = 3

NAME_TOO_SHORT = "Ingresa tu nombre completo."
MISSING_PASSWORD = "Ingresa tu contraseña."
PLAYER_NOT_FOUND = "Jugador no encontrado."
AMBIGUOUS_NAME = "Hay {count} jugadores con ese nombre. Contactá al coordinador."
INCORRECT_PASSWORD = "Contraseña incorrecta."
CONNECTION_ERROR = "Error de conexión. Intenta nuevamente."

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[\W_]+")
# PostgREST filter syntax and ilike wildcards
_FILTER_UNSAFE = re.compile(r"[%*_\\,()]")


# -----------------------------------------------------
# Password derivation
# -----------------------------------------------------
def normalize_password(value: str) -> str:
    return _WHITESPACE.sub("", (value or "").strip().lower())


def derive_player_password(full_name: str) -> str:
    return normalize_password(full_name)


# -----------------------------------------------------
# Player lookup (Supabase "players" table)
# -----------------------------------------------------
def _compact(value: str) -> str:
    return _NON_WORD.sub("", (value or "").lower())


def compact_name_matches(stored_name: str, typed_name: str) -> bool:
    """
    Loose match used when the term search finds nothing, e.g. a user
    typing "lionelmessi" or "messilionel" for "Lionel Messi".
    """
    typed = _compact(typed_name)
    stored = _compact(stored_name)
    if not typed or not stored:
        return False

    if typed in stored or stored in typed:
        return True

    tokens = _WHITESPACE.split((stored_name or "").lower().strip())
    if len(tokens) == 2:
        return _compact(tokens[1] + tokens[0]) == typed

    return False


def find_players_by_name(name: str) -> List[dict]:
    """
    Case-insensitive search: every typed term must appear in the name.
    Falls back to compact matching over the roster when that finds nothing.
    Raises PlayerLookupError if the database can't be reached.
    """
    terms = [_FILTER_UNSAFE.sub("", t) for t in name.split()]
    terms = [t for t in terms if t]

    # Nothing searchable left: an unfiltered query would return the whole roster
    if not terms:
        return []

    client = get_supabase_client()
    if client is None:
        raise PlayerLookupError("Supabase client not configured")

    try:
        query = client.table("players").select(PLAYER_COLUMNS)
        for term in terms:
            query = query.ilike("name", f"%{term}%")
        players = query.execute().data or []

        if players:
            return players

        roster = client.table("players").select(PLAYER_COLUMNS).execute().data or []
    except Exception as e:
        raise PlayerLookupError(extract_supabase_error(e)) from e

    return [p for p in roster if compact_name_matches(p.get("name", ""), name)]


# -----------------------------------------------------
# Login
# -----------------------------------------------------
def authenticate_player(
    name: Optional[str],
    password: Optional[str],
    lookup: Optional[Callable[[str], List[dict]]] = None,
) -> PlayerSession:
    """
    Returns the session payload for the single player matching `name`.
    Every failure raises PortalLoginError carrying the message to show.
    """
    name = (name or "").strip()
    if len(name) < MIN_NAME_LENGTH:
        raise PortalLoginError(NAME_TOO_SHORT, "invalid")

    if not password or not password.strip():
        raise PortalLoginError(MISSING_PASSWORD, "invalid")

    lookup = lookup or find_players_by_name
    try:
        players = lookup(name)
    except PlayerLookupError as e:
        logger.error(f"Player lookup failed during portal login: {e}")
        raise PortalLoginError(CONNECTION_ERROR, "unavailable") from e

    if not players:
        raise PortalLoginError(PLAYER_NOT_FOUND, "not_found")

    # Never guess between players; the coordinator sorts out duplicates
    if len(players) > 1:
        logger.info(f"Ambiguous portal login for '{name}': {len(players)} matches")
        raise PortalLoginError(AMBIGUOUS_NAME.format(count=len(players)), "ambiguous")

    player = players[0]
    if normalize_password(password) != derive_player_password(player.get("name", "")):
        logger.info(f"Incorrect portal password for player {player.get('id')}")
        raise PortalLoginError(INCORRECT_PASSWORD, "wrong_password")

    return PlayerSession(
        player_id=str(player["id"]),
        name=player["name"],
        division=player.get("division") or "",
    )


def touch_last_seen(player_id: str) -> bool:
    """Best effort; a failed update never blocks the portal."""
    client = get_supabase_client()
    if client is None:
        return False

    try:
        (
            client.table("players")
            .update({"last_seen": datetime.now(timezone.utc).isoformat()})
            .eq("id", player_id)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Could not update last_seen for player {player_id}: {extract_supabase_error(e)}")
        return False

    return True
