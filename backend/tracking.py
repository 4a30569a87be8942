import asyncio
import logging

import httpx

import config

USER_AGENT = "Mozilla/5.0 (compatible; profile-peek-backend)"


class Tracker:
    """
    Best-effort analytics. Events are sent in background tasks so the
    request that produced them never waits on, or fails because of, the
    tracking endpoint.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint: str | None = None, domain: str | None = None):
        self.client = client
        self.endpoint = endpoint if endpoint is not None else config.TRACKING_URL
        self.domain = domain or config.TRACKING_DOMAIN
        self._pending: set[asyncio.Task] = set()

    def track(self, event_name: str, props: dict[str, str]) -> None:
        if not self.endpoint:
            logging.info(f"Tracking disabled, dropping event '{event_name}': {props}")
            return
        task = asyncio.create_task(self._send_event(event_name, props))
        # Hold a reference until the task is done so it isn't garbage collected mid-flight.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send_event(self, event_name: str, props: dict[str, str]) -> None:
        body = {
            "name": event_name,
            "url": f"https://{self.domain}/backend",
            "domain": self.domain,
            "props": props,
        }
        try:
            response = await self.client.post(
                self.endpoint,
                json=body,
                headers={"User-Agent": USER_AGENT, "X-Forwarded-For": "127.0.0.1"},
            )
            if response.is_success:
                return
            logging.warning(f"Failed to track event '{event_name}': {response.status_code} - {response.text}")
        except httpx.HTTPError as e:
            logging.warning(f"Error sending event '{event_name}': {e}")

    async def drain(self) -> None:
        """Waits for events that are still in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # --- Event helpers ---

    def track_search_request(self, url: str) -> None:
        self.track("search_request", {"url": url})
        logging.info(f"Search request tracked for url: {url}")

    def track_cache_hit(self, url: str) -> None:
        self.track("cache_hit", {"url": url})
        logging.info(f"Cache hit tracked for url: {url}")

    def track_error(self, msg: str) -> None:
        self.track("error", {"msg": msg})
        logging.info(f"Error tracked: {msg}")
