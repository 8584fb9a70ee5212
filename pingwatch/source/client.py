"""HTTP client for the ping data server."""

import time

import httpx
import structlog

from pingwatch.source.config import SourceConfig
from pingwatch.source.constants import (
    COMPONENT_SOURCE,
    ENV_CONFIG_PATH,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    PING_DATA_PATH,
)
from pingwatch.source.errors import (
    FetchErrorClass,
    PayloadError,
    SourceError,
    SourceFetchError,
)
from pingwatch.source.metrics import SourceMetrics
from pingwatch.source.redact import redact_url_credentials
from pingwatch.source.wire import parse_env_config, parse_ping_payload
from pingwatch.status.models import ProbeRecord


logger = structlog.get_logger()


class HttpProbeSource:
    """Probe source backed by the ping data server.

    Provides:
    - ``/ping-data`` record fetches with an optional endpoint filter
    - ``/env-config`` lookup of the configured endpoint set
    - per-item rejection of malformed payload rows
    - metrics collection

    Each call makes a single request bounded by the configured timeout.
    """

    def __init__(
        self,
        config: SourceConfig | None = None,
        run_id: str | None = None,
        metrics: SourceMetrics | None = None,
    ) -> None:
        """Initialize the HTTP source.

        Args:
            config: Source configuration.
            run_id: Optional run identifier for logging.
            metrics: Optional metrics instance.
        """
        self._config = config or SourceConfig()
        self._metrics = metrics or SourceMetrics.get_instance()
        self._log = logger.bind(
            component=COMPONENT_SOURCE,
            base_url=redact_url_credentials(self._config.base_url),
        )
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def fetch_records(
        self, endpoint_id: str | None = None, limit: int | None = None
    ) -> list[ProbeRecord]:
        """Fetch probe records from ``/ping-data``.

        Args:
            endpoint_id: Restrict to one endpoint when given.
            limit: Maximum number of records; configured default when None.

        Returns:
            Parsed probe records in payload order.

        Raises:
            SourceFetchError: If the request fails or returns a non-2xx status.
            PayloadError: If the body is not a JSON array.
        """
        params: dict[str, str] = {"limit": str(limit or self._config.fetch_limit)}
        if endpoint_id is not None:
            params["url"] = endpoint_id

        payload = self._get_json(PING_DATA_PATH, params)
        try:
            parsed = parse_ping_payload(payload)
        except PayloadError:
            self._metrics.record_failure(FetchErrorClass.INVALID_PAYLOAD)
            raise

        for index, reason in parsed.rejected:
            self._log.warning("probe_record_rejected", index=index, reason=reason)
        self._metrics.record_records(len(parsed.records), len(parsed.rejected))

        self._log.info(
            "probe_records_fetched",
            endpoint_id=endpoint_id,
            records=len(parsed.records),
            rejected=len(parsed.rejected),
        )
        return parsed.records

    def fetch_configured_endpoints(self) -> set[str]:
        """Fetch ``TARGET_URLS`` from ``/env-config``.

        A failed lookup is logged and yields an empty set, which disables
        endpoint filtering for the pass.

        Returns:
            Configured endpoint identifiers.
        """
        try:
            payload = self._get_json(ENV_CONFIG_PATH)
            try:
                endpoints = parse_env_config(payload)
            except PayloadError:
                self._metrics.record_failure(FetchErrorClass.INVALID_PAYLOAD)
                raise
        except SourceError as e:
            self._log.warning(
                "env_config_unavailable",
                error=str(e),
                error_class=e.error_class.value,
            )
            return set()

        self._log.info("env_config_loaded", endpoints=sorted(endpoints))
        return endpoints

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> object:
        """GET a server route and decode its JSON body.

        Args:
            path: Server route.
            params: Query parameters.

        Returns:
            Decoded JSON body.

        Raises:
            SourceFetchError: If the request fails or returns a non-2xx status.
            PayloadError: If the body is not valid JSON.
        """
        url = self._config.url_for(path)
        safe_url = redact_url_credentials(url)
        start_time = time.perf_counter()

        try:
            response = httpx.get(
                url,
                params=params,
                headers={
                    "User-Agent": self._config.user_agent,
                    "Accept": "application/json",
                },
                timeout=self._config.timeout_seconds,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            raise self._failure(
                f"Request timed out: {e}", FetchErrorClass.NETWORK_TIMEOUT, safe_url
            ) from e
        except httpx.ConnectError as e:
            raise self._failure(
                f"Connection failed: {e}", FetchErrorClass.CONNECTION_ERROR, safe_url
            ) from e
        except httpx.HTTPError as e:
            raise self._failure(
                f"Request failed: {e}", FetchErrorClass.UNKNOWN, safe_url
            ) from e
        finally:
            self._metrics.record_request((time.perf_counter() - start_time) * 1000)

        status_code = response.status_code
        if not HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
            raise self._failure(
                f"Unexpected status {status_code} from {safe_url}",
                _classify_status_code(status_code),
                safe_url,
                status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            self._metrics.record_failure(FetchErrorClass.INVALID_PAYLOAD)
            msg = f"Response from {safe_url} is not valid JSON: {e}"
            raise PayloadError(msg, url=safe_url) from e

    def _failure(
        self,
        message: str,
        error_class: FetchErrorClass,
        url: str,
        status_code: int | None = None,
    ) -> SourceFetchError:
        self._metrics.record_failure(error_class)
        self._log.warning(
            "source_request_failed",
            url=url,
            error_class=error_class.value,
            status_code=status_code,
        )
        return SourceFetchError(message, error_class, url=url, status_code=status_code)


def _classify_status_code(status_code: int) -> FetchErrorClass:
    if HTTP_STATUS_BAD_REQUEST <= status_code < HTTP_STATUS_SERVER_ERROR_MIN:
        return FetchErrorClass.HTTP_4XX
    if HTTP_STATUS_SERVER_ERROR_MIN <= status_code < HTTP_STATUS_SERVER_ERROR_MAX:
        return FetchErrorClass.HTTP_5XX
    return FetchErrorClass.UNKNOWN
