"""Webhook delivery.

Posts a digest to a Discord-compatible webhook:

```
POST <webhook url>
Content-Type: application/json

{"content": "<message>"}
```

Delivery is best-effort. A network error, a non-2xx response or a malformed
webhook URL is logged and reported as False, never raised. There is no retry.
"""

from __future__ import annotations

import logging

import httpx

from calendar_digest.config import ConfigurationError

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """Sends messages to a chat webhook.

    Example:
        ```python
        notifier = WebhookNotifier(settings.discord_webhook_url)
        notifier.deliver("本日の予定はこちらです\\n- Standup")
        ```
    """

    def __init__(
        self,
        endpoint: str | None,
        client: httpx.Client | None = None,
    ):
        """Initialize the notifier.

        Args:
            endpoint: Webhook URL (checked when a message is delivered)
            client: HTTP client to use; a short-lived one is created per
                delivery when omitted
        """
        self.endpoint = endpoint
        self._client = client

    def deliver(self, message: str) -> bool:
        """Post a message to the webhook.

        Returns:
            True if the webhook accepted the message, False otherwise

        Raises:
            ConfigurationError: If no endpoint is configured
        """
        if not self.endpoint:
            raise ConfigurationError("discord_webhook_url")

        try:
            if self._client is not None:
                response = self._post(self._client, message)
            else:
                with httpx.Client() as client:
                    response = self._post(client, message)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to send notification to webhook: {e}")
            return False

        logger.info(f"Notification sent ({response.status_code})")
        return True

    def _post(self, client: httpx.Client, message: str) -> httpx.Response:
        return client.post(
            self.endpoint,
            json={"content": message},
            headers={"Content-Type": "application/json"},
        )
