"""MCP server exposing fahrtkasse API capabilities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import httpx
from fastmcp import FastMCP

from fahrtkasse.core.settings import get_settings
from fahrtkasse.persistence.http_backend import build_api_error

ExportFormat = Literal["json", "csv"]
ParamValue = str | int | float | bool | None
ParamsMapping = Mapping[str, ParamValue]


class APIRequester(Protocol):
    """Requester abstraction to simplify HTTP boundary testing."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object: ...


@dataclass(slots=True, frozen=True)
class HTTPAPIRequester:
    """HTTP client wrapper for the fahrtkasse API."""

    base_url: str
    timeout_seconds: float

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
        ) as client:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=dict(json_body) if json_body is not None else None,
            )

        if not response.is_success:
            raise RuntimeError(build_api_error(response))
        if response.headers.get("content-type", "").startswith("application/json"):
            return _parse_json_response(response)
        return response.text


def _parse_json_response(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise RuntimeError(
            f"API returned a non-JSON response with status {response.status_code}."
        ) from exc


def _normalize_base_url(value: str) -> str:
    return value.rstrip("/")


def create_mcp_server(
    *,
    api_base_url: str | None = None,
    timeout_seconds: float | None = None,
    requester: APIRequester | None = None,
) -> FastMCP:
    """Create MCP server with curated tools mapped to REST endpoints."""

    settings = get_settings()
    resolved_base_url = _normalize_base_url(api_base_url or settings.api_base_url)
    resolved_timeout = (
        settings.api_timeout_seconds if timeout_seconds is None else timeout_seconds
    )
    if resolved_timeout <= 0:
        raise ValueError("MCP API timeout must be greater than zero.")

    mcp = FastMCP(name="Fahrtkasse")
    api_requester: APIRequester = requester or HTTPAPIRequester(
        base_url=resolved_base_url,
        timeout_seconds=resolved_timeout,
    )

    @mcp.tool
    async def get_payments_state() -> object:
        """Return the shared amount, every participant and the last save time."""

        return await api_requester.request("GET", "/v1/payments")

    @mcp.tool
    async def save_payments_state(
        total_amount: str,
        participants: list[dict[str, Any]],
    ) -> object:
        """Replace the whole payment state; every participant not sent is removed."""

        payload: dict[str, object] = {
            "totalAmount": total_amount,
            "participants": [
                {
                    "name": str(item.get("name", "")),
                    "paidAmount": item.get("paidAmount", item.get("paid_amount", 0)),
                }
                for item in participants
            ],
        }
        return await api_requester.request(
            "POST",
            "/v1/payments",
            json_body=payload,
        )

    @mcp.tool
    async def get_payments_summary() -> object:
        """Return roster totals and each participant's remaining amount and status."""

        return await api_requester.request("GET", "/v1/payments/summary")

    @mcp.tool
    async def export_payments(format: ExportFormat = "json") -> object:
        """Export the payment state as JSON or CSV text."""

        return await api_requester.request(
            "GET",
            "/v1/payments/export",
            params={"format": format},
        )

    return mcp
