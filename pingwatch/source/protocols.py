"""Protocols for ping data sources."""

from typing import Protocol

from pingwatch.status.models import ProbeRecord


class ProbeSource(Protocol):
    """Supplies probe records and the configured endpoint set."""

    def fetch_records(
        self, endpoint_id: str | None = None, limit: int | None = None
    ) -> list[ProbeRecord]:
        """Fetch a bounded lookback of probe records.

        Args:
            endpoint_id: Restrict to one endpoint when given.
            limit: Maximum number of records; source default when None.

        Returns:
            Probe records in any order.
        """
        ...

    def fetch_configured_endpoints(self) -> set[str]:
        """Fetch the endpoints that should be tracked.

        Returns:
            Endpoint identifiers; empty means unknown, show everything.
        """
        ...
