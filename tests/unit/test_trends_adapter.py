"""Unit-Tests fuer den Google Trends Adapter."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from idea_radar.infrastructure.adapters.trends_adapter import (
    GoogleTrendsAdapter,
    parse_trends_body,
)

_DUMMY_REQUEST = httpx.Request("GET", "https://trends.google.com/trends/api/dailytrends")

_BODY = ')]}\',\n{"default": {"trendingSearchesDays": []}}'


def _response(text: str, status: int = 200) -> httpx.Response:
    """Create httpx.Response with request instance (needed for raise_for_status)."""
    return httpx.Response(status, text=text, request=_DUMMY_REQUEST)


class TestParseTrendsBody:
    def test_strips_xssi_prefix(self):
        assert parse_trends_body(_BODY) == {"default": {"trendingSearchesDays": []}}

    def test_plain_json(self):
        assert parse_trends_body('{"default": {}}') == {"default": {}}

    def test_non_object_rejected(self):
        with pytest.raises(ValueError):
            parse_trends_body("[1, 2]")


class TestGoogleTrendsAdapter:
    def test_base_url(self):
        assert "trends.google.com" in GoogleTrendsAdapter.BASE_URL

    async def test_fetch_daily_params(self):
        mock_get = AsyncMock(return_value=_response(_BODY))
        with patch("httpx.AsyncClient.get", mock_get):
            data = await GoogleTrendsAdapter().fetch_daily("KR", 958)
        assert data["default"]["trendingSearchesDays"] == []
        params = mock_get.call_args.kwargs["params"]
        assert params["geo"] == "KR"
        assert params["cat"] == 958

    async def test_no_category_param_without_code(self):
        mock_get = AsyncMock(return_value=_response(_BODY))
        with patch("httpx.AsyncClient.get", mock_get):
            await GoogleTrendsAdapter().fetch_daily("US")
        assert "cat" not in mock_get.call_args.kwargs["params"]

    async def test_http_error_propagates(self):
        mock_get = AsyncMock(return_value=_response("rate limited", status=429))
        with patch("httpx.AsyncClient.get", mock_get):
            with pytest.raises(httpx.HTTPStatusError):
                await GoogleTrendsAdapter().fetch_daily("US")
