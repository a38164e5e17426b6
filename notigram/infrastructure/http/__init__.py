"""Shared HTTP plumbing for remote service clients."""

from notigram.infrastructure.http.base_api_client import BaseServiceAPIClient

__all__ = ["BaseServiceAPIClient"]
