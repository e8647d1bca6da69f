"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, make_asgi_app


attachments_deleted_total = Counter(
    "attachments_deleted_total",
    "Total number of attachments permanently deleted by purge runs.",
)

attachment_delete_failures_total = Counter(
    "attachment_delete_failures_total",
    "Number of attachment deletions that the content store did not confirm.",
)


def create_metrics_app():
    """Return the ASGI app serving the default registry."""

    return make_asgi_app()
