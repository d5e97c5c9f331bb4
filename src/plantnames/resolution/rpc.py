"""JSON-RPC name source reading getPlantName through eth_call."""

from __future__ import annotations

import itertools
import logging
import math
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar

import httpx
from eth_utils import to_checksum_address

from plantnames.core.exceptions import (
    AbiDecodeError,
    EndpointsExhaustedError,
    RateLimitError,
    RemoteCallError,
)
from plantnames.core.models import CallResult
from plantnames.core.types import CallStatus
from plantnames.resolution.abi import (
    decode_aggregate3,
    decode_plant_name,
    encode_aggregate3,
    encode_get_plant_name,
    from_hex,
    to_hex,
)
from plantnames.resolution.base import AbstractNameSource, SourceConfig

logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a Retry-After header; None when absent or given as an HTTP-date."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return max(seconds, 0.0) if math.isfinite(seconds) else None


class JsonRpcNameSource(AbstractNameSource):
    """
    Reads plant names from an EVM node over JSON-RPC.

    Single lookups are a plain ``eth_call`` of ``getPlantName``; batches are
    wrapped in one Multicall3 ``aggregate3`` call with ``allowFailure`` set on
    every sub-call, so each id reports its own status.

    Several RPC URLs may be configured. Each call walks them in order and
    returns the first answer; the error from the last one is raised if all
    of them fail.
    """

    SOURCE_NAME: ClassVar[str] = "json_rpc"

    def __init__(self, config: SourceConfig) -> None:
        if not config.rpc_urls:
            raise ValueError("At least one RPC URL is required")
        self.config = config
        self._contract = to_checksum_address(config.contract_address)
        self._multicall = to_checksum_address(config.multicall_address)
        self._client: httpx.AsyncClient | None = None
        self._request_ids = itertools.count(1)

    @property
    def rpc_urls(self) -> list[str]:
        return list(self.config.rpc_urls)

    @asynccontextmanager
    async def _get_client(self, url: str) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise RemoteCallError(
                message=f"HTTP error: {e}",
                source=url,
            ) from e

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "plantnames/1.0",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, url: str, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request to one endpoint and return its result."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }

        async with self._get_client(url) as client:
            response = await client.post(url, json=payload)

        if response.status_code == 429:
            raise RateLimitError(
                message="Rate limit exceeded",
                source=url,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
            )
        if not response.is_success:
            raise RemoteCallError(
                message=f"HTTP {response.status_code} from node",
                source=url,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCallError(message="Node returned invalid JSON", source=url) from e

        if not isinstance(body, dict):
            raise RemoteCallError(message="Node returned a non-object JSON-RPC response", source=url)
        if error := body.get("error"):
            if not isinstance(error, dict):
                raise RemoteCallError(message=f"JSON-RPC error: {error}", source=url)
            raise RemoteCallError(
                message=f"JSON-RPC error: {error.get('message', error)}",
                source=url,
                details={"code": error.get("code"), "data": error.get("data")},
            )
        if "result" not in body:
            raise RemoteCallError(message="JSON-RPC response without result", source=url)
        return body["result"]

    async def _request(self, method: str, params: list[Any]) -> Any:
        """Send a JSON-RPC request, failing over across endpoints."""
        last_error: RemoteCallError | None = None

        for url in self.config.rpc_urls:
            try:
                return await self._post(url, method, params)
            except RemoteCallError as e:
                last_error = e
                logger.warning(f"{method} failed on {url}: {e.message}")

        raise EndpointsExhaustedError(
            message=f"All {len(self.config.rpc_urls)} RPC endpoints failed for {method}",
            source=self.source_name,
            details={"last_error": last_error.message if last_error else None},
        ) from last_error

    async def eth_call(self, to: str, data: bytes, block_number: int) -> bytes:
        """Execute a read-only call at a block height and return the raw output."""
        result = await self._request(
            "eth_call",
            [{"to": to, "data": to_hex(data)}, hex(block_number)],
        )
        if not isinstance(result, str):
            raise AbiDecodeError(f"eth_call returned {type(result).__name__}, expected hex")
        return from_hex(result)

    async def fetch_name(self, entity_id: int, block_number: int) -> str:
        """Read ``getPlantName(entity_id)`` at ``block_number``."""
        output = await self.eth_call(
            self._contract,
            encode_get_plant_name(entity_id),
            block_number,
        )
        return decode_plant_name(output)

    async def fetch_names(
        self,
        entity_ids: list[int],
        block_number: int,
    ) -> list[CallResult]:
        """Read several names through one Multicall3 ``aggregate3`` call."""
        if not entity_ids:
            return []

        calls = [encode_get_plant_name(entity_id) for entity_id in entity_ids]
        output = await self.eth_call(
            self._multicall,
            encode_aggregate3(self._contract, calls),
            block_number,
        )

        results = []
        for success, return_data in decode_aggregate3(output):
            if not success:
                results.append(CallResult(status=CallStatus.FAILURE, error="call reverted"))
                continue
            try:
                name = decode_plant_name(return_data)
            except AbiDecodeError as e:
                results.append(CallResult(status=CallStatus.FAILURE, error=e.message))
                continue
            results.append(CallResult(status=CallStatus.SUCCESS, result=name))

        return results
