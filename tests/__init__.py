"""Test suite for Notigram.

Test structure:
- unit/: Unit tests - domain objects, services, trigger, adapters in isolation
- integration/: Integration tests - HTTP adapters and the wired notifier
  against pytest-httpx mocked transports

No test reaches a real network service.
"""
