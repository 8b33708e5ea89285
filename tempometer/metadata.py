"""One-shot track metadata lookup against a SoundCloud-style REST API."""

import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass

from tempometer.config import settings

logger = logging.getLogger(__name__)

USER_AGENT = "tempometer/0.1.0"


@dataclass
class TrackResponse:
    status_code: int  # 0 when no HTTP response was received
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def track_url(track_id: str, client_id: str, base_url: str | None = None) -> str:
    base = (base_url or settings.api_base_url).rstrip("/")
    query = urllib.parse.urlencode({"client_id": client_id})
    return f"{base}/tracks/{urllib.parse.quote(str(track_id))}?{query}"


def fetch_track(
    track_id: str,
    client_id: str,
    base_url: str | None = None,
    timeout: float | None = None,
) -> TrackResponse:
    """GET a track's metadata. No retries."""
    url = track_url(track_id, client_id, base_url)
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout or settings.http_timeout) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            return TrackResponse(status_code=resp.status, text=body)
    except urllib.error.HTTPError as e:
        logger.info(f"Track {track_id}: HTTP {e.code}")
        return TrackResponse(status_code=e.code)
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        logger.warning(f"Track {track_id}: request failed ({e})")
        return TrackResponse(status_code=0)
