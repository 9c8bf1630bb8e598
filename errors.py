# errors.py
from typing import Optional


class PokedexError(Exception):
    """Base error for anything that goes wrong while answering a query."""

    http_status = 500

    def __init__(self, identifier: str, message: Optional[str] = None):
        self.identifier = identifier
        self.message = message or f"Error looking up {identifier}"
        super().__init__(self.message)


class NotFound(PokedexError):
    # PokeAPI has no record for the identifier
    http_status = 404

    def __init__(self, identifier: str, message: Optional[str] = None):
        super().__init__(identifier, message or f"not found: {identifier}")


class UpstreamError(PokedexError):
    # reachable, but a failure status or a body we could not use
    http_status = 502

    def __init__(self, identifier: str, message: Optional[str] = None):
        super().__init__(identifier, message or f"Upstream error: {identifier}")
