"""Error types raised by the campus route core and mapped to HTTP statuses in app.py."""


class CampusRouteError(Exception):
    """Base class for campus route errors."""

    status_code = 500


class NotFoundError(CampusRouteError):
    """
    One or both place names did not resolve against the gazetteer.

    `suggestions` always carries both slots, {"origin": [...], "destination": [...]};
    a side that resolved fine gets an empty list.
    """

    status_code = 400

    def __init__(self, suggestions=None):
        super().__init__("not found")
        self.suggestions = {"origin": [], "destination": []}
        self.suggestions.update(suggestions or {})

    def to_dict(self):
        return {"error": "not found", "suggestions": self.suggestions}


class ServiceUnavailableError(CampusRouteError):
    """The external geocoding service failed (network or malformed response)."""

    status_code = 503


class InternalError(CampusRouteError):
    """Unexpected failure, e.g. a malformed input shape."""

    status_code = 500
