# core/errors.py


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Supabase Auth / GoTrue errors
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Errors with args (PostgREST, httpx)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


class RedirectRequired(Exception):
    """
    Raised from dependencies when the caller must be sent elsewhere.
    main.py turns it into a RedirectResponse, so the handler never runs.
    """

    def __init__(self, location: str, status_code: int = 307):
        super().__init__(location)
        self.location = location
        self.status_code = status_code


class PortalLoginError(Exception):
    """User-facing player login failure. `kind` selects the HTTP status."""

    def __init__(self, message: str, kind: str):
        super().__init__(message)
        self.message = message
        self.kind = kind


class PlayerLookupError(Exception):
    """The players table could not be queried."""
