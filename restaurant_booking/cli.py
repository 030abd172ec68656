"""Command-line client for the booking agent endpoint of the server.

Run without arguments for an interactive conversation, or pass a request as
arguments for a single answer::

    restaurant-booking "Find a quiet ramen shop near Taipei Main Station"
"""

import logging
import sys
import uuid

import httpx

from restaurant_booking.config import get_config, setup_logging

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"quit", "exit", "q"}
NEW_SESSION_COMMAND = "new"
REQUEST_TIMEOUT = 120.0


def new_session_id() -> str:
    return f"cli-{uuid.uuid4().hex[:12]}"


class BookingCLI:
    """Sends natural-language requests to ``/process-request``.

    All requests of one CLI run share a session id, so the agent remembers
    earlier searches when asked to book "the second one".
    """

    def __init__(self) -> None:
        self.config = get_config()
        setup_logging(self.config)
        self.session_id = new_session_id()
        logger.info(f"CLI session_id: {self.session_id}")

    def run(self) -> None:
        """Read requests from stdin until the user quits."""
        print(f"\nRestaurant booking assistant ({self.config.server_url})")
        print('Try: "Find a romantic Italian place in Taipei for a date"')
        print(f"Commands: '{NEW_SESSION_COMMAND}' starts over, 'quit' exits.\n")

        while True:
            try:
                user_input = input("> ").strip()
            except (KeyboardInterrupt, EOFError):
                print()
                break

            if not user_input:
                continue
            if user_input.lower() in EXIT_COMMANDS:
                break
            if user_input.lower() == NEW_SESSION_COMMAND:
                self.session_id = new_session_id()
                print(f"Started a new conversation ({self.session_id}).")
                continue

            print(self.ask(user_input))

        print("Enjoy your meal!")

    def ask(self, user_input: str) -> str:
        """Send one request and return the text to show the user.

        Args:
            user_input: User's natural language request

        Returns:
            The agent's answer, or a description of what went wrong
        """
        try:
            with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                response = client.post(
                    f"{self.config.server_url}/process-request",
                    json={"user_input": user_input, "session_id": self.session_id},
                )
        except httpx.TimeoutException:
            logger.exception("Request timed out")
            return "⚠ The request timed out. Please try again."
        except httpx.HTTPError:
            logger.exception("Cannot reach server")
            return (
                f"⚠ Cannot reach the server at {self.config.server_url}. "
                "Start it with: restaurant-booking-server"
            )

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_success:
            return payload.get("final_output", "")

        error = payload.get("error") or payload.get("detail") or response.text
        return f"⚠ Server error (status {response.status_code}): {error}"


def main() -> None:
    """Entry point of the ``restaurant-booking`` console script."""
    try:
        booking_cli = BookingCLI()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    if len(sys.argv) > 1:
        print(booking_cli.ask(" ".join(sys.argv[1:])))
    else:
        booking_cli.run()


if __name__ == "__main__":
    main()
