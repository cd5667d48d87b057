"""
SportsData.io Proxy Service

Forwards requests to the SportsData.io NFL API with the server-side API
key attached, so the key never reaches browsers.
API Documentation: https://sportsdata.io/developers/api-documentation/nfl
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from app.config import SPORTSDATA_API_KEY, SPORTSDATA_BASE_URL, SPORTSDATA_TIMEOUT
from app.errors import ServiceNotConfiguredError, UpstreamError
from app.utils.logging import get_logger

logger = get_logger(__name__)

PROXY_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "NFL-Predictor-App/1.0",
}

# Cache policy advertised to CDNs for successful proxy responses
CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


def build_params(query: Optional[Mapping[str, str]], api_key: str) -> Dict[str, str]:
    params = {k: v for k, v in (query or {}).items() if k != "key"}
    params["key"] = api_key
    return params


async def fetch(path: str, query: Optional[Mapping[str, str]] = None, method: str = "GET") -> Any:
    """
    Proxy one request and return the decoded JSON body.

    Raises ServiceNotConfiguredError without an API key and UpstreamError on
    non-2xx answers (carrying the upstream status) or transport failures
    (status 502).
    """
    if not SPORTSDATA_API_KEY:
        logger.error("SPORTSDATA_API_KEY environment variable is not set")
        raise ServiceNotConfiguredError("SportsData API is not configured")

    path = path.strip("/")
    url = f"{SPORTSDATA_BASE_URL}/{path}"
    params = build_params(query, SPORTSDATA_API_KEY)

    logger.info(f"Proxying {method} request to: {url}")

    try:
        async with httpx.AsyncClient(timeout=SPORTSDATA_TIMEOUT) as client:
            response = await client.request(method, url, params=params, headers=PROXY_HEADERS)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"SportsData API error: {status} {e.response.reason_phrase}")
        raise UpstreamError(
            "Failed to fetch data from SportsData API",
            status_code=status,
            reason=e.response.reason_phrase,
        )
    except httpx.HTTPError as e:
        logger.error(f"SportsData API request failed: {e}")
        raise UpstreamError("Error while fetching data from SportsData API", status_code=502, reason=str(e))
    except ValueError as e:
        logger.error(f"SportsData API returned invalid JSON: {e}")
        raise UpstreamError("SportsData API returned an invalid response", status_code=502, reason=str(e))
