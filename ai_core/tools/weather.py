"""
Weather Tool
============

An example tool returning simulated weather for a location. Useful for
wiring checks and demos: it needs no API key and always succeeds.
"""

import random
from typing import Literal

from pydantic import BaseModel, Field

from ai_core.tools import Tool, ToolRegistry, tool_registry
from ai_core.utils.logger import Logger

logger = Logger("WeatherTool")


class WeatherInput(BaseModel):
    location: str = Field(description="The city and state, e.g. San Francisco, CA")
    unit: Literal["celsius", "fahrenheit"] = "celsius"


async def _get_weather(params: WeatherInput) -> dict:
    temperature = random.randint(0, 29)
    logger.debug(f"Simulated weather for {params.location}: {temperature}")
    return {
        "location": params.location,
        "temperature": temperature,
        "unit": params.unit,
        "condition": "Sunny",
    }


weather_tool = Tool(
    name="get_weather",
    description="Get the current weather for a location",
    schema=WeatherInput,
    execute=_get_weather
)


def register_weather_tool(registry: ToolRegistry | None = None) -> Tool:
    """
    Register the weather tool.

    Args:
        registry: Target registry (defaults to the process-wide one)

    Returns:
        The registered tool
    """
    if registry is None:
        registry = tool_registry
    registry.register(weather_tool)
    return weather_tool
