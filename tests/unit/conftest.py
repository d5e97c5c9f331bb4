"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

import json
from typing import Any

import pytest
import respx
from eth_abi import encode
from httpx import Response

from plantnames.resolution.base import SourceConfig

RPC_URL = "https://rpc-1.test/v1"
BACKUP_RPC_URL = "https://rpc-2.test/v1"


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Source Configuration Fixtures
# ============================================================================


@pytest.fixture
def source_config() -> SourceConfig:
    """Create a source config with a primary and a backup endpoint."""
    return SourceConfig(rpc_urls=[RPC_URL, BACKUP_RPC_URL], timeout=5.0)


@pytest.fixture
def single_endpoint_config() -> SourceConfig:
    return SourceConfig(rpc_urls=[RPC_URL], timeout=5.0)


# ============================================================================
# JSON-RPC Response Helpers
# ============================================================================


def encode_name(name: str) -> bytes:
    """ABI-encode a getPlantName return value."""
    return encode(["string"], [name])


def encode_multicall(results: list[tuple[bool, bytes]]) -> bytes:
    """ABI-encode an aggregate3 return value."""
    return encode(["(bool,bytes)[]"], [results])


def rpc_result(data: bytes | str, request_id: int = 1) -> Response:
    """Successful JSON-RPC response carrying hex data."""
    result = data if isinstance(data, str) else "0x" + data.hex()
    return Response(200, json={"jsonrpc": "2.0", "id": request_id, "result": result})


def rpc_error(message: str = "execution reverted", code: int = 3) -> Response:
    """JSON-RPC error object response."""
    return Response(
        200,
        json={"jsonrpc": "2.0", "id": 1, "error": {"code": code, "message": message}},
    )


def mock_rate_limit_response(retry_after: int = 1) -> Response:
    """Create a mock 429 rate limit response."""
    return Response(
        status_code=429,
        json={"error": "Rate limit exceeded"},
        headers={"Retry-After": str(retry_after)},
    )


def request_params(request: Any) -> list[Any]:
    """Extract the JSON-RPC params from a recorded request."""
    return json.loads(request.content)["params"]


@pytest.fixture
def rpc_responses():
    """Provide helper functions for building node responses."""
    return {
        "name": encode_name,
        "multicall": encode_multicall,
        "result": rpc_result,
        "error": rpc_error,
        "rate_limit": mock_rate_limit_response,
        "params": request_params,
    }
