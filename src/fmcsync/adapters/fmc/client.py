"""HTTP client for the FMC configuration API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from fmcsync.adapters.http_resilience import ResilientClient
from fmcsync.config.fmc import get_fmc_config
from fmcsync.domain.ports.remote import RemoteError, RemoteNotFoundError, RemoteTimeoutError

from .schema import AccessPolicyPayload, FmcErrorResponse, PagedReferences

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fmcsync.config.fmc import FmcConfig
    from fmcsync.config.http_resilience import ResilienceConfig
    from fmcsync.domain.context import ReconcileContext

    from .schema import ObjectReference

log = getLogger(__name__)

CONFIG_API_PREFIX = "/api/fmc_config/v1/domain"
ACCESS_POLICIES_PATH = "policy/accesspolicies"
PAGE_LIMIT = 100


class FmcAPIError(RemoteError):
    """Raised when the FMC API rejects a request or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FmcNotFoundError(FmcAPIError, RemoteNotFoundError):
    """Raised when FMC answers 404 for an object identity."""


class FmcTimeoutError(FmcAPIError, RemoteTimeoutError):
    """Raised when FMC did not answer within the allotted time."""


def _error_message(response: httpx.Response) -> str:
    try:
        payload = FmcErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        text = response.text.strip()
        return f"HTTP {response.status_code}: {text}" if text else f"HTTP {response.status_code}"
    return payload.message or f"HTTP {response.status_code}"


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    message = _error_message(response)
    if response.status_code == httpx.codes.NOT_FOUND:
        raise FmcNotFoundError(message, status_code=response.status_code)
    raise FmcAPIError(message, status_code=response.status_code)


@dataclass(slots=True)
class FmcClient:
    """Low-level client for one FMC domain; each call opens and closes a session."""

    config: FmcConfig = field(default_factory=get_fmc_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=ResilientClient
    )

    def domain_path(self, path: str) -> str:
        return f"{CONFIG_API_PREFIX}/{self.config.domain_uuid}/{path}"

    def create_access_policy(
        self, payload: AccessPolicyPayload, *, timeout: float | None = None
    ) -> AccessPolicyPayload:
        return asyncio.run(self._create_access_policy_async(payload, timeout=timeout))

    def get_access_policy(
        self, policy_id: str, *, timeout: float | None = None
    ) -> AccessPolicyPayload:
        return asyncio.run(self._get_access_policy_async(policy_id, timeout=timeout))

    def delete_access_policy(self, policy_id: str, *, timeout: float | None = None) -> None:
        asyncio.run(self._delete_access_policy_async(policy_id, timeout=timeout))

    def list_references(self, path: str) -> list[ObjectReference]:
        return asyncio.run(self._list_references_async(path))

    async def _create_access_policy_async(
        self, payload: AccessPolicyPayload, *, timeout: float | None
    ) -> AccessPolicyPayload:
        async with self.client_factory(self.config.resilience) as client:
            response = await self._perform(
                client.post(
                    self.domain_path(ACCESS_POLICIES_PATH),
                    json=payload.to_wire(),
                    timeout=self._timeout(timeout),
                )
            )
        return self._parse_policy(response)

    async def _get_access_policy_async(
        self, policy_id: str, *, timeout: float | None
    ) -> AccessPolicyPayload:
        async with self.client_factory(self.config.resilience) as client:
            response = await self._perform(
                client.get(
                    self.domain_path(f"{ACCESS_POLICIES_PATH}/{policy_id}"),
                    timeout=self._timeout(timeout),
                )
            )
        return self._parse_policy(response)

    async def _delete_access_policy_async(
        self, policy_id: str, *, timeout: float | None
    ) -> None:
        async with self.client_factory(self.config.resilience) as client:
            try:
                await self._perform(
                    client.delete(
                        self.domain_path(f"{ACCESS_POLICIES_PATH}/{policy_id}"),
                        timeout=self._timeout(timeout),
                    )
                )
            except FmcNotFoundError:
                log.info("Access policy %s already absent; treating delete as done", policy_id)

    async def _list_references_async(self, path: str) -> list[ObjectReference]:
        references: list[ObjectReference] = []
        offset = 0
        async with self.client_factory(self.config.lookup_resilience) as client:
            while True:
                response = await self._perform(
                    client.get(
                        self.domain_path(path),
                        params={"offset": offset, "limit": PAGE_LIMIT},
                    )
                )
                try:
                    page = PagedReferences.model_validate(response.json())
                except (ValueError, ValidationError) as exc:
                    raise FmcAPIError(f"Unexpected FMC list payload for {path}") from exc
                references.extend(page.items)
                offset += PAGE_LIMIT
                if not page.items or offset >= page.paging.count:
                    break
        return references

    def _timeout(self, remaining: float | None) -> float:
        configured = self.config.resilience.timeout_seconds
        return configured if remaining is None else min(configured, remaining)

    @staticmethod
    async def _perform(request: Awaitable[httpx.Response]) -> httpx.Response:
        try:
            response = await request
        except httpx.TimeoutException as exc:
            raise FmcTimeoutError(f"FMC request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise FmcAPIError(f"FMC request failed: {exc}") from exc
        _raise_for_status(response)
        return response

    @staticmethod
    def _parse_policy(response: httpx.Response) -> AccessPolicyPayload:
        try:
            return AccessPolicyPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise FmcAPIError(
                "Unexpected FMC access policy payload", status_code=response.status_code
            ) from exc


@dataclass(slots=True)
class AccessPolicyClient:
    """Remote client port for access policies backed by ``FmcClient``."""

    fmc: FmcClient

    def create(self, ctx: ReconcileContext, wire: AccessPolicyPayload) -> AccessPolicyPayload:
        return self.fmc.create_access_policy(wire, timeout=ctx.remaining())

    def get(self, ctx: ReconcileContext, identity: str) -> AccessPolicyPayload:
        return self.fmc.get_access_policy(identity, timeout=ctx.remaining())

    def delete(self, ctx: ReconcileContext, identity: str) -> None:
        self.fmc.delete_access_policy(identity, timeout=ctx.remaining())
