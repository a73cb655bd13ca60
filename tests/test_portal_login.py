# tests/test_portal_login.py

"""
Tests for the player portal name/password login.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from core.config import settings
from core.errors import PlayerLookupError, PortalLoginError
from core.portal_auth import decode_player_token
from services.portal_login import (
    AMBIGUOUS_NAME,
    CONNECTION_ERROR,
    INCORRECT_PASSWORD,
    MISSING_PASSWORD,
    NAME_TOO_SHORT,
    PLAYER_NOT_FOUND,
    authenticate_player,
    compact_name_matches,
    derive_player_password,
    find_players_by_name,
    normalize_password,
)


MESSI = {"id": "player-10", "name": "Lionel Messi", "division": "Primera"}
MESSI_RESERVA = {"id": "player-30", "name": "Lionel Messi", "division": "Reserva"}


def lookup_returning(*players):
    return lambda name: list(players)


def test_password_normalization():
    assert normalize_password("  Lionel  MESSI ") == "lionelmessi"
    assert derive_player_password("Lionel Messi") == "lionelmessi"
    assert derive_player_password("Ángel Di María") == "ángeldimaría"


def test_single_match_with_derived_password():
    session = authenticate_player("Lionel Messi", "lionelmessi", lookup=lookup_returning(MESSI))
    assert session.player_id == "player-10"
    assert session.name == "Lionel Messi"
    assert session.division == "Primera"


def test_password_is_normalized_before_comparing():
    session = authenticate_player("messi", " Lionel Messi ", lookup=lookup_returning(MESSI))
    assert session.player_id == "player-10"


@pytest.mark.parametrize(
    "name, password, players, message, kind",
    [
        ("Li", "x", [MESSI], NAME_TOO_SHORT, "invalid"),
        ("   Li   ", "x", [MESSI], NAME_TOO_SHORT, "invalid"),
        ("Lionel", "", [MESSI], MISSING_PASSWORD, "invalid"),
        ("Lionel", "   ", [MESSI], MISSING_PASSWORD, "invalid"),
        ("Diego Maradona", "diegomaradona", [], PLAYER_NOT_FOUND, "not_found"),
        ("Lionel Messi", "lionelmessi", [MESSI, MESSI_RESERVA], AMBIGUOUS_NAME.format(count=2), "ambiguous"),
        ("Lionel Messi", "messi", [MESSI], INCORRECT_PASSWORD, "wrong_password"),
        ("Lionel Messi", "messilionel", [MESSI], INCORRECT_PASSWORD, "wrong_password"),
    ],
)
def test_login_errors(name, password, players, message, kind):
    with pytest.raises(PortalLoginError) as exc_info:
        authenticate_player(name, password, lookup=lookup_returning(*players))

    assert exc_info.value.message == message
    assert exc_info.value.kind == kind


def test_ambiguous_name_never_picks_a_player():
    exact = {"id": "player-1", "name": "Juan Perez", "division": "Cuarta"}
    similar = {"id": "player-2", "name": "Juan Perez Gomez", "division": "Quinta"}

    with pytest.raises(PortalLoginError) as exc_info:
        authenticate_player("Juan Perez", "juanperez", lookup=lookup_returning(exact, similar))

    assert exc_info.value.kind == "ambiguous"


def test_lookup_failure_is_a_connection_error():
    def failing_lookup(name):
        raise PlayerLookupError("timeout")

    with pytest.raises(PortalLoginError) as exc_info:
        authenticate_player("Lionel Messi", "lionelmessi", lookup=failing_lookup)

    assert exc_info.value.message == CONNECTION_ERROR


def test_compact_name_matching():
    assert compact_name_matches("Lionel Messi", "lionelmessi")
    assert compact_name_matches("Lionel Messi", "messilionel")
    assert compact_name_matches("Lionel Messi", "Messi")
    assert not compact_name_matches("Lionel Messi", "cristiano")
    assert not compact_name_matches("Lionel Messi", "   ")


# ------------------------------------------------------------------
# Supabase lookup
# ------------------------------------------------------------------
def test_find_players_filters_every_term(mock_supabase_client):
    query = Mock()
    query.ilike.return_value = query
    query.execute.return_value = Mock(data=[MESSI])
    mock_supabase_client.table.return_value.select.return_value = query

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        players = find_players_by_name("Lionel  Messi")

    assert players == [MESSI]
    query.ilike.assert_any_call("name", "%Lionel%")
    query.ilike.assert_any_call("name", "%Messi%")
    assert query.ilike.call_count == 2


def test_find_players_falls_back_to_compact_match(mock_supabase_client):
    query = Mock()
    query.ilike.return_value = query
    query.execute.side_effect = [
        Mock(data=[]),
        Mock(data=[MESSI, {"id": "player-7", "name": "Angel Di Maria", "division": "Primera"}]),
    ]
    mock_supabase_client.table.return_value.select.return_value = query

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        players = find_players_by_name("messilionel")

    assert players == [MESSI]


@pytest.mark.parametrize("name", ["***", "(((", "___", "%%%", "\\\\\\", "*,_ ()%"])
def test_find_players_with_only_wildcards_matches_nobody(mock_supabase_client, name):
    query = Mock()
    query.ilike.return_value = query
    query.execute.return_value = Mock(data=[MESSI])
    mock_supabase_client.table.return_value.select.return_value = query

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        assert find_players_by_name(name) == []

    mock_supabase_client.table.assert_not_called()
    query.execute.assert_not_called()


def test_find_players_strips_underscore_wildcard(mock_supabase_client):
    query = Mock()
    query.ilike.return_value = query
    query.execute.return_value = Mock(data=[MESSI])
    mock_supabase_client.table.return_value.select.return_value = query

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        find_players_by_name("Lio_nel M%essi")

    query.ilike.assert_any_call("name", "%Lionel%")
    query.ilike.assert_any_call("name", "%Messi%")


def test_wildcard_name_cannot_log_in_as_only_player(mock_supabase_client):
    query = Mock()
    query.ilike.return_value = query
    query.execute.return_value = Mock(data=[MESSI])
    mock_supabase_client.table.return_value.select.return_value = query

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        with pytest.raises(PortalLoginError) as exc_info:
            authenticate_player("***", "lionelmessi")

    assert exc_info.value.kind == "not_found"
    assert exc_info.value.message == PLAYER_NOT_FOUND


def test_find_players_raises_lookup_error(mock_supabase_client):
    mock_supabase_client.table.return_value.select.return_value.ilike.return_value.execute.side_effect = Exception("boom")

    with patch("services.portal_login.get_supabase_client", return_value=mock_supabase_client):
        with pytest.raises(PlayerLookupError):
            find_players_by_name("Lionel")


def test_find_players_without_client():
    with patch("services.portal_login.get_supabase_client", return_value=None):
        with pytest.raises(PlayerLookupError):
            find_players_by_name("Lionel")


# ------------------------------------------------------------------
# POST /portal/login
# ------------------------------------------------------------------
def test_login_endpoint_success_sets_session_cookie(client: TestClient):
    with patch("services.portal_login.find_players_by_name", return_value=[MESSI]):
        with patch("routers.portal.touch_last_seen") as touch:
            response = client.post(
                "/portal/login",
                data={"name": "Lionel Messi", "password": "lionelmessi"},
            )

    assert response.status_code == 303
    assert response.headers["location"] == "/portal/dashboard"
    touch.assert_called_once_with("player-10")

    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert "path=/" in set_cookie
    assert f"max-age={7 * 24 * 60 * 60}" in set_cookie

    session = decode_player_token(response.cookies.get(settings.PLAYER_SESSION_COOKIE))
    assert session.player_id == "player-10"
    assert session.division == "Primera"


@pytest.mark.parametrize(
    "players, password, status_code, message",
    [
        ([], "lionelmessi", 404, PLAYER_NOT_FOUND),
        ([MESSI, MESSI_RESERVA], "lionelmessi", 409, AMBIGUOUS_NAME.format(count=2)),
        ([MESSI], "wrong", 401, INCORRECT_PASSWORD),
        ([MESSI], "", 400, MISSING_PASSWORD),
    ],
)
def test_login_endpoint_errors(client: TestClient, players, password, status_code, message):
    with patch("services.portal_login.find_players_by_name", return_value=players):
        response = client.post(
            "/portal/login",
            data={"name": "Lionel Messi", "password": password},
        )

    assert response.status_code == status_code
    assert response.json() == {"error": message}
    assert settings.PLAYER_SESSION_COOKIE not in response.cookies


def test_login_endpoint_connection_error(client: TestClient):
    with patch("services.portal_login.find_players_by_name", side_effect=PlayerLookupError("down")):
        response = client.post(
            "/portal/login",
            data={"name": "Lionel Messi", "password": "lionelmessi"},
        )

    assert response.status_code == 503
    assert response.json() == {"error": CONNECTION_ERROR}


def test_login_endpoint_is_rate_limited(client: TestClient):
    with patch("services.portal_login.find_players_by_name", return_value=[]):
        for _ in range(settings.LOGIN_MAX_ATTEMPTS):
            assert client.post("/portal/login", data={"name": "Nadie Nadie", "password": "x"}).status_code == 404

        response = client.post("/portal/login", data={"name": "Nadie Nadie", "password": "x"})

    assert response.status_code == 429
    assert "Retry-After" in response.headers
