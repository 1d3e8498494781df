"""Loan record store HTTP client (create / fetch / update applications)"""

import httpx
from typing import Any, Dict
from loan_wizard.domain.exceptions import LoanServiceError
from loan_wizard.config import settings
from loan_wizard.infrastructure.observability.metrics import remote_call_latency_histogram


class LoanServiceClient:
    """Client for the remote loan application record store"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.loan_service_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Issue one request against the record store.

        Raises:
            LoanServiceError: On timeout, network failure, HTTP error status, or a non-object body
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                with remote_call_latency_histogram.labels(operation=operation).time():
                    response = await client.request(method, path, **kwargs)
                    response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object")
                return data

            except httpx.TimeoutException as e:
                raise LoanServiceError(
                    f"Failed to {operation} loan application: timeout after {self.timeout}s"
                ) from e
            except httpx.HTTPStatusError as e:
                raise LoanServiceError(
                    f"Failed to {operation} loan application: status {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                raise LoanServiceError(f"Failed to {operation} loan application: {e}") from e
            except ValueError as e:
                raise LoanServiceError(f"Failed to {operation} loan application: invalid response ({e})") from e

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new application; the returned record carries the assigned id"""
        return await self._request("create", "POST", "/entities", json=data)

    async def get_by_id(self, application_id: str) -> Dict[str, Any]:
        return await self._request("fetch", "GET", f"/entities/{application_id}")

    async def update(self, application_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """PATCH an existing application; the store merges fields server-side"""
        return await self._request("update", "PATCH", f"/entities/{application_id}", json=data)
