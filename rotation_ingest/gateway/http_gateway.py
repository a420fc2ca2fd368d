"""requests-based gateway that streams rotated files to an ingestion endpoint."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional
from urllib.parse import quote, urlparse

from rotation_ingest.config import AppCredentialsAuth, AuthMode, IngestionProperties
from rotation_ingest.gateway.base import IngestionGateway, StatusEntry
from rotation_ingest.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    import requests


LOGGER = get_logger(__name__)
INGEST_PATH = "/v1/rest/ingest/{database}/{table}"
DEFAULT_TIMEOUT = 30.0

TokenProvider = Callable[[AuthMode], str]


class HttpIngestionGateway(IngestionGateway):
    """Posts whole files to ``{endpoint}/v1/rest/ingest/{database}/{table}``.

    Token acquisition is left to the caller: when ``token_provider`` is given it
    is asked for a bearer token before every request, otherwise requests are sent
    unauthenticated (useful behind a local proxy or in tests).
    """

    def __init__(
        self,
        endpoint: str,
        auth: AuthMode,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional["requests.Session"] = None,
    ) -> None:
        self.endpoint = self._validate_endpoint(endpoint)
        self.auth = auth
        self.token_provider = token_provider
        self.timeout = timeout
        self._closed = False
        if session is None:
            import requests

            session = requests.Session()
        self.session = session
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/octet-stream",
            }
        )
        LOGGER.debug(
            "Opened ingestion session to %s using %s auth",
            self.endpoint,
            "app credential" if isinstance(auth, AppCredentialsAuth) else "identity",
        )

    @classmethod
    def open(cls, endpoint: str, auth: AuthMode, **kwargs: Any) -> "HttpIngestionGateway":
        """Gateway factory used by the strategy when none is injected."""

        return cls(endpoint, auth, **kwargs)

    @staticmethod
    def _validate_endpoint(endpoint: str) -> str:
        parsed = urlparse(endpoint.strip())
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"Malformed ingestion endpoint: {endpoint!r}")
        return endpoint.strip().rstrip("/")

    def ingest_url(self, properties: IngestionProperties) -> str:
        return self.endpoint + INGEST_PATH.format(
            database=quote(properties.database, safe=""),
            table=quote(properties.table, safe=""),
        )

    def submit(self, path: str | Path, properties: IngestionProperties) -> list[StatusEntry]:
        if self._closed:
            raise RuntimeError("Ingestion gateway is closed")

        params = {"streamFormat": properties.data_format}
        if properties.mapping is not None:
            params["mappingName"] = properties.mapping.name
        headers: dict[str, str] = {}
        if self.token_provider is not None:
            headers["Authorization"] = f"Bearer {self.token_provider(self.auth)}"

        url = self.ingest_url(properties)
        LOGGER.debug("Submitting %s to %s", path, url)
        with open(path, "rb") as body:
            response = self.session.post(
                url,
                params=params,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        self._raise_with_context(response, url)
        return self._parse_statuses(response)

    def _raise_with_context(self, response: "requests.Response", url: str) -> None:
        import requests

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            hint = ""
            if status in {401, 403}:
                hint = " Check the configured app credentials or identity."
            elif status == 404:
                hint = " Check datasetName and tableName."
            raise RuntimeError(f"Ingestion endpoint responded with HTTP {status} for {url}.{hint}") from exc

    @staticmethod
    def _parse_statuses(response: "requests.Response") -> list[StatusEntry]:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        items = payload.get("statuses") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            return []
        return [
            StatusEntry(
                status=str(item.get("status", "")),
                failure_status=str(item.get("failureStatus", "")),
                error_code=str(item.get("errorCode", "")),
            )
            for item in items
            if isinstance(item, dict)
        ]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.session.close()

    def __enter__(self) -> "HttpIngestionGateway":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # pragma: no cover - trivial
        self.close()


__all__ = ["DEFAULT_TIMEOUT", "HttpIngestionGateway", "TokenProvider"]
