"""HTTP client for the push-delivery service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class NotificationClient:
    """Small wrapper around the push gateway endpoints."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        configured_base = settings.PUSH_SERVICE_URL if base_url is None else base_url
        self._base_url = configured_base.rstrip("/") if configured_base else ""
        self._timeout = timeout or settings.PUSH_SERVICE_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url)

    def send_push(
        self,
        *,
        token: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Deliver one push message; returns ``False`` when nothing was delivered."""
        if not self.is_configured:
            logger.info("Push service URL not configured; skipping push dispatch")
            return False

        url = f"{self._base_url}/api/v1/push/send"
        payload = {
            "token": token,
            "title": title,
            "body": body,
            "data": {key: str(value) for key, value in (data or {}).items()},
        }

        try:
            response = httpx.post(url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Push service returned HTTP %s while sending '%s': %s",
                exc.response.status_code,
                title,
                exc.response.text,
            )
            return False
        except httpx.RequestError as exc:
            logger.warning("Failed to reach push service: %s", exc)
            return False

        return True


__all__ = ["NotificationClient"]
