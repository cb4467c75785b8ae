"""Tests for the prober and up/down classification."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from statuspage.monitor.prober import PROBE_FAILURE, classify, probe
from statuspage.monitor.records import SystemStatus


class TestClassify:
    @pytest.mark.parametrize("code", [200, 204, 299, 301, 399])
    def test_up(self, code: int) -> None:
        assert classify(code) == SystemStatus.GREEN

    @pytest.mark.parametrize("code", [0, 100, 199, 400, 404, 502, 503, PROBE_FAILURE])
    def test_down(self, code: int) -> None:
        assert classify(code) == SystemStatus.RED

    def test_never_yellow(self) -> None:
        assert all(classify(c) != SystemStatus.YELLOW for c in range(0, 600))


def _patched_client(mock_client_cls: MagicMock) -> MagicMock:
    client = mock_client_cls.return_value.__enter__.return_value
    return client


class TestProbe:
    @patch("statuspage.monitor.prober.httpx.Client")
    def test_returns_status_code(self, mock_client_cls: MagicMock) -> None:
        _patched_client(mock_client_cls).get.return_value = MagicMock(status_code=204)

        assert probe("https://wavy.fm", timeout=10) == 204
        mock_client_cls.assert_called_once_with(timeout=10, follow_redirects=True)
        _patched_client(mock_client_cls).get.assert_called_once_with("https://wavy.fm")

    @patch("statuspage.monitor.prober.httpx.Client")
    def test_error_status_is_returned_not_raised(self, mock_client_cls: MagicMock) -> None:
        _patched_client(mock_client_cls).get.return_value = MagicMock(status_code=503)
        assert probe("https://api.wavy.fm/healthz") == 503

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectTimeout("timed out"),
            httpx.ReadTimeout("timed out"),
            httpx.ConnectError("connection refused"),
            httpx.TooManyRedirects("loop"),
        ],
    )
    @patch("statuspage.monitor.prober.httpx.Client")
    def test_transport_failure_returns_sentinel(self, mock_client_cls: MagicMock, exc: Exception) -> None:
        _patched_client(mock_client_cls).get.side_effect = exc
        assert probe("https://wavy.fm") == PROBE_FAILURE

    @patch("statuspage.monitor.prober.httpx.Client")
    def test_unresolvable_host_is_down(self, mock_client_cls: MagicMock) -> None:
        _patched_client(mock_client_cls).get.side_effect = httpx.ConnectError(
            "[Errno -2] Name or service not known",
        )
        code = probe("http://unresolvable.invalid/nope", timeout=1)
        assert code == PROBE_FAILURE
        assert classify(code) == SystemStatus.RED

    def test_invalid_url_is_down(self) -> None:
        assert probe("not a url", timeout=1) == PROBE_FAILURE
