"""
Rockfall REST API Client

Thin client for the rockfall risk API, used by the dashboard when it runs
against a remote service instead of scoring in-process.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging

import pandas as pd
import requests

from . import config
from .exceptions import APIClientError

logger = logging.getLogger(__name__)


class RockfallAPIClient:
    """Client for the Rockfall Risk API"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.API_URL).rstrip("/")
        if not self.base_url:
            raise ValueError("No API URL configured (set ROCKFALL_API_URL)")
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT_S
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling {method} {url}: {e}")
            raise APIClientError(f"{method} {path} failed: {e}") from e

    def health(self) -> Dict:
        return self._request("GET", "/health")

    def assess(self, reading: Mapping[str, float]) -> Dict:
        """
        Assess a single reading

        Returns:
            Dictionary with probability, level and factors
        """
        return self._request("POST", "/api/v1/risk/assess", json=dict(reading))

    def assess_batch(self, readings: List[Mapping[str, float]]) -> Dict:
        return self._request("POST", "/api/v1/risk/batch", json={"readings": [dict(r) for r in readings]})

    def search_mines(self, query: Optional[str] = None) -> List[Dict]:
        params = {"q": query} if query else None
        return self._request("GET", "/api/v1/mines", params=params)["mines"]

    def select_mine(self, mine_id: str, seed: Optional[int] = None) -> Dict:
        params = {"seed": seed} if seed is not None else None
        return self._request("POST", f"/api/v1/mines/{mine_id}/select", params=params)

    def get_forecast(
        self,
        mine_id: str,
        current_level: str,
        time_range: str = "24h",
        seed: Optional[int] = None
    ) -> pd.DataFrame:
        """
        Get the probability forecast for a mine

        Returns:
            DataFrame with one row per forecast point
        """
        params = {"current_level": current_level, "time_range": time_range}
        if seed is not None:
            params["seed"] = seed

        data = self._request("GET", f"/api/v1/mines/{mine_id}/forecast", params=params)
        points = data.get("points", [])
        if not points:
            return pd.DataFrame()

        df = pd.DataFrame(points)
        df["timestamp"] = pd.to_datetime(df["timestamp"])
        logger.info(f"Retrieved {len(df)} forecast points for mine {mine_id}")
        return df
