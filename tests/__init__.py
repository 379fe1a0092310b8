"""Unit tests for the translation service.

This package contains test modules for all components of the service.
Tests use pytest with asyncio support; HTTP backends are replaced by local aiohttp test servers
and the Redis client by mocks.
"""
