"""Security, token storage and rate limiting shared by the API layer."""
