"""User Service: a small API-key gated HTTP service for the /user resource."""

__version__ = "1.0.0"
