"""Restaurant booking agent that drives the search and reservation tools."""

import logging

from agents import Agent, Tool

from restaurant_booking.agents.prompts import load_prompt
from restaurant_booking.agents.tools import ALL_TOOLS
from restaurant_booking.config import get_config
from restaurant_booking.guardrails import (
    input_validation_guardrail,
    output_validation_guardrail,
)

logger = logging.getLogger(__name__)


class BookingAgent:
    """Conversational agent for finding and booking restaurants.

    Attributes:
        tools: Function tools exposed to the model
        config: Application configuration
        _agent: The underlying Agent instance (created lazily)
    """

    def __init__(self, tools: list[Tool] | None = None) -> None:
        """Initialize the booking agent.

        Args:
            tools: Tools to expose (defaults to all five restaurant tools)
        """
        self.tools = list(ALL_TOOLS) if tools is None else tools
        self.config = get_config()
        self._agent: Agent | None = None

        logger.info("BookingAgent initialized")

    def create(self) -> Agent:
        """Create and return the configured booking agent.

        Returns:
            Configured agent with restaurant tools and guardrails

        Note:
            The agent is created lazily on first call and cached.
        """
        if self._agent is None:
            config = self.config
            instructions = load_prompt(
                "booking_agent",
                default_latitude=config.default_latitude,
                default_longitude=config.default_longitude,
                default_radius=config.default_search_radius,
            )

            self._agent = Agent(
                name="Restaurant Booking Agent",
                model=config.agent_model,
                instructions=instructions,
                tools=self.tools,
                input_guardrails=[input_validation_guardrail],
                output_guardrails=[output_validation_guardrail],
            )
            logger.info("Booking agent created successfully")

        return self._agent

    @property
    def agent(self) -> Agent:
        """Get the agent instance (creates it if needed).

        Returns:
            The booking agent
        """
        return self.create()
