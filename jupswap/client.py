"""Asynchronous client for the swap API's quote and swap endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

import httpx

from .quote import QuoteRequest, QuoteResponse
from .swap import SwapInstructionsResponse, SwapRequest, SwapResponse

T = TypeVar("T")


class ClientError(Exception):
    """A call to the swap API did not give a usable answer."""


class RequestFailedError(ClientError):
    """The API answered with a status outside the 2xx range."""

    def __init__(self, status: int, body: str, reason: str = "") -> None:
        self.status = status
        self.body = body
        self.reason = reason
        shown = f"{status} {reason}".rstrip()
        super().__init__(f"Request failed with status {shown}: {body}")


class DeserializationError(ClientError):
    """The request could not be sent or its answer could not be read."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to deserialize response: {cause}")


@dataclass
class JupiterSwapApiClient:
    """Client for one API base path; ``timeout`` of None waits without limit."""

    base_path: str
    timeout: Optional[float] = None

    async def _call(
        self,
        method: str,
        path: str,
        decode: Callable[[Any], T],
        *,
        params: Optional[list[tuple[str, str]]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> T:
        url = f"{self.base_path}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as http:
                response = await http.request(method, url, params=params, json=body)
        except httpx.HTTPError as exc:
            raise DeserializationError(exc) from exc
        if not response.is_success:
            raise RequestFailedError(
                response.status_code, response.text, response.reason_phrase
            )
        try:
            return decode(response.json())
        except (ValueError, TypeError) as exc:
            raise DeserializationError(exc) from exc

    async def quote(self, quote_request: QuoteRequest) -> QuoteResponse:
        """GET /quote."""
        params = quote_request.query_params() + quote_request.extra_params()
        return await self._call("GET", "quote", QuoteResponse.from_dict, params=params)

    async def swap(
        self,
        swap_request: SwapRequest,
        extra_args: Optional[Mapping[str, str]] = None,
    ) -> SwapResponse:
        """POST /swap, with optional extra query arguments."""
        params = (
            [(str(key), str(value)) for key, value in extra_args.items()]
            if extra_args
            else None
        )
        return await self._call(
            "POST",
            "swap",
            SwapResponse.from_dict,
            params=params,
            body=swap_request.to_dict(),
        )

    async def swap_instructions(self, swap_request: SwapRequest) -> SwapInstructionsResponse:
        """POST /swap-instructions."""
        return await self._call(
            "POST",
            "swap-instructions",
            SwapInstructionsResponse.from_dict,
            body=swap_request.to_dict(),
        )