"""FastAPI server exposing the restaurant tools and the booking agent."""

import logging
import os
import uuid
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

import uvicorn
from agents import Agent, InputGuardrailTripwireTriggered, Runner, SQLiteSession
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from restaurant_booking.agents import BookingAgent
from restaurant_booking.config import get_config, setup_logging
from restaurant_booking.guardrails import redact
from restaurant_booking.models.tool_args import (
    CheckAvailabilityArgs,
    MakeReservationArgs,
    PlaceLookupArgs,
    SearchRestaurantsArgs,
)
from restaurant_booking.services.places_catalog import GooglePlacesCatalog
from restaurant_booking.services.tool_handlers import ToolHandlers, set_tool_handlers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpTool:
    """An HTTP-callable tool."""

    title: str
    description: str
    args_model: type[BaseModel]
    invoke: Callable[[ToolHandlers, BaseModel], Awaitable[str]]


TOOLS: dict[str, HttpTool] = {
    "search_restaurants": HttpTool(
        title="Search for restaurants",
        description=(
            "Search for restaurants based on location, cuisine, keyword, mood, "
            "event, radius, price level, and locale"
        ),
        args_model=SearchRestaurantsArgs,
        invoke=lambda h, a: h.search_restaurants(**a.model_dump()),
    ),
    "get_restaurant_details": HttpTool(
        title="Get detailed restaurant information",
        description="Get comprehensive details about a specific restaurant using its place ID",
        args_model=PlaceLookupArgs,
        invoke=lambda h, a: h.get_restaurant_details(**a.model_dump()),
    ),
    "get_booking_instructions": HttpTool(
        title="Get booking instructions for a restaurant",
        description="Get detailed instructions on how to make a reservation at a specific restaurant",
        args_model=PlaceLookupArgs,
        invoke=lambda h, a: h.get_booking_instructions(**a.model_dump()),
    ),
    "check_availability": HttpTool(
        title="Check restaurant availability",
        description="Check if a restaurant has availability for a specific date, time, and party size",
        args_model=CheckAvailabilityArgs,
        invoke=lambda h, a: h.check_availability(**a.model_dump()),
    ),
    "make_reservation": HttpTool(
        title="Make a restaurant reservation",
        description="Attempt to make a reservation at a restaurant",
        args_model=MakeReservationArgs,
        invoke=lambda h, a: h.make_reservation(**a.model_dump()),
    ),
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info(
        f"Starting Restaurant Booking Server on {config.server_host}:{config.server_port}"
    )

    if not config.has_places_config():
        logger.warning(
            "GOOGLE_MAPS_API_KEY not set - restaurant tools will return errors"
        )

    catalog = GooglePlacesCatalog()
    handlers = ToolHandlers(catalog)
    set_tool_handlers(handlers)
    _app.state.tool_handlers = handlers
    logger.info("✓ Tool handlers initialized")

    if config.has_agent_config():
        # The SDK reads the key from os.environ, not from our Config
        if "OPENAI_API_KEY" not in os.environ:
            os.environ["OPENAI_API_KEY"] = config.openai_api_key
        _app.state.booking_agent = BookingAgent().create()
        logger.info("✓ Booking agent initialized")

    yield

    await catalog.aclose()
    set_tool_handlers(None)
    logger.info("Shutting down Restaurant Booking Server")


app = FastAPI(
    title="Restaurant Booking API",
    description="Restaurant search, recommendation and booking tools",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_tool_handlers(request: Request) -> ToolHandlers:
    """Dependency to get the tool handlers from app state.

    Raises:
        HTTPException: If the handlers are not initialized
    """
    handlers = getattr(request.app.state, "tool_handlers", None)
    if handlers is None:
        raise HTTPException(status_code=503, detail="Tools not initialized yet")
    return handlers


def get_booking_agent(request: Request) -> Agent:
    """Dependency to get the booking agent from app state.

    Raises:
        HTTPException: If the agent is not configured
    """
    agent = getattr(request.app.state, "booking_agent", None)
    if agent is None:
        raise HTTPException(
            status_code=503, detail="Booking agent not configured (OPENAI_API_KEY)"
        )
    return agent


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "ok", "service": "restaurant-booking-server"}


@app.get("/tools")
async def list_tools():
    """List the available tools and their argument schemas."""
    return {
        "tools": [
            {
                "name": name,
                "title": tool.title,
                "description": tool.description,
                "inputSchema": tool.args_model.model_json_schema(by_alias=True),
            }
            for name, tool in TOOLS.items()
        ]
    }


@app.post("/tools/{tool_name}")
async def call_tool(
    tool_name: str,
    request: Request,
    handlers: ToolHandlers = Depends(get_tool_handlers),
):
    """Invoke a tool with JSON arguments.

    Returns:
        {"content": [{"type": "text", "text": "..."}]}
    """
    tool = TOOLS.get(tool_name)
    if tool is None:
        return JSONResponse(
            status_code=404, content={"error": f"Unknown tool: {tool_name}"}
        )

    try:
        args = tool.args_model.model_validate(await request.json())
    except ValueError as e:
        # pydantic.ValidationError and JSON decoding errors are both ValueErrors
        errors = e.errors(include_url=False) if isinstance(e, ValidationError) else str(e)
        return JSONResponse(
            status_code=422,
            content={"error": f"Invalid arguments for {tool_name}", "detail": errors},
        )

    logger.info(f"Calling tool {tool_name}")
    text = await tool.invoke(handlers, args)
    return {"content": [{"type": "text", "text": text}]}


@app.post("/process-request")
async def process_request(
    request: Request,
    booking_agent: Agent = Depends(get_booking_agent),
):
    """Run a natural-language request through the booking agent.

    Request body:
        {
            "user_input": "Find a romantic place for a date night in Taipei",
            "session_id": "optional-session-id"  # Optional: for conversation memory
        }

    Returns:
        {"success": true, "final_output": "...", "session_id": "session-123"}
    """
    try:
        data = await request.json()
        user_input = data.get("user_input")
        session_id = data.get("session_id")

        if not user_input:
            return JSONResponse(
                status_code=400,
                content={"error": "Missing user_input field"},
            )

        if not session_id:
            session_id = f"session-{uuid.uuid4().hex[:12]}"
            logger.debug(f"Generated session: {session_id}")

        # Conversation memory stays in the orchestration layer
        session = SQLiteSession(session_id, get_config().conversation_db)

        logger.info(f"Processing: {user_input[:80]}...")
        result = await Runner.run(booking_agent, input=user_input, session=session)

        return {
            "success": True,
            "message": "Request processed successfully",
            "final_output": str(result.final_output),
            "session_id": session_id,
        }

    except InputGuardrailTripwireTriggered as e:
        logger.warning("Request blocked by input guardrail")
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": str(e.guardrail_result.output.output_info),
            },
        )
    except Exception as e:
        logger.exception("Error processing request")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": redact(str(e)),
                "message": f"Error processing request: {redact(str(e))}",
            },
        )


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server.
    """
    setup_logging()
    config = get_config()

    uvicorn.run(
        "restaurant_booking.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
