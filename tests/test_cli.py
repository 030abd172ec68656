"""Tests for the command-line client."""

import httpx
import pytest

from restaurant_booking import cli


@pytest.fixture
def mock_server(monkeypatch):
    """Route the CLI's HTTP client to an in-process handler."""
    requests = []
    real_client = httpx.Client

    def install(handler):
        def record(request):
            requests.append(request)
            return handler(request)

        monkeypatch.setattr(
            cli.httpx,
            "Client",
            lambda **kwargs: real_client(transport=httpx.MockTransport(record), **kwargs),
        )
        return requests

    return install


class TestBookingCLI:
    """Tests for BookingCLI.ask."""

    def test_returns_final_output(self, mock_server):
        requests = mock_server(
            lambda request: httpx.Response(
                200, json={"success": True, "final_output": "Table booked."}
            )
        )
        booking_cli = cli.BookingCLI()

        answer = booking_cli.ask("Book the first one for two")

        assert answer == "Table booked."
        [request] = requests
        assert request.url.path == "/process-request"
        assert booking_cli.session_id in request.content.decode()

    def test_server_error(self, mock_server):
        mock_server(
            lambda request: httpx.Response(400, json={"success": False, "error": "Input too long"})
        )

        answer = cli.BookingCLI().ask("x")

        assert "status 400" in answer
        assert "Input too long" in answer

    def test_server_unreachable(self, mock_server):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        mock_server(refuse)

        assert "Cannot reach the server" in cli.BookingCLI().ask("hello")

    def test_session_id_per_run(self):
        assert cli.BookingCLI().session_id != cli.BookingCLI().session_id
