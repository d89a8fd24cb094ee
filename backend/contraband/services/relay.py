"""
Forward activity log lines to a Discord webhook.
Set DISCORD_WEBHOOK_URL in .env. If not configured, forward() logs locally and returns False.
"""
import logging

import httpx

from contraband.core.errors import RelayFailure

logger = logging.getLogger(__name__)


class WebhookRelay:
    """Posts {"content": prefix + message} to the webhook with a bounded timeout."""

    def __init__(
        self,
        webhook_url: str = "",
        *,
        timeout: float = 5.0,
        prefix: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.webhook_url = (webhook_url or "").strip()
        self.timeout = timeout
        self.prefix = prefix
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    def forward(self, message: str) -> bool:
        """
        Send one message. Returns True when the webhook accepted it, False when no webhook is set.
        Raises RelayFailure if the webhook is unreachable or answers with a non-2xx status.
        """
        if not self.is_configured():
            logger.info("[LOG] %s", message)
            logger.debug("DISCORD_WEBHOOK_URL not set; not forwarding")
            return False
        payload = {"content": f"{self.prefix}{message}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            raise RelayFailure(f"Webhook request failed: {e}") from e
        if not resp.is_success:
            raise RelayFailure(f"Failed to forward to Discord (status {resp.status_code})")
        return True
