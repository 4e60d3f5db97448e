"""AI itinerary generator backed by OpenAI.

Security: Reads API key from settings (environment) only, never hardcoded.
Without a key the generator is unavailable and returns no items.
"""

import json
import logging
import re
from datetime import date, timedelta
from typing import Any, Protocol

from openai import AsyncOpenAI

from tripflow.config import Settings, get_settings
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import ItineraryItemDraft
from tripflow.utils.metrics import record_generation

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a world-class travel agent.
Generate a detailed itinerary in JSON format based on the user's request.
Respond with a JSON object of the form {"items": [...]} where each item has:
- dayOffset: integer number of days after the trip start date (0 = first day)
- time: local time as "HH:MM"
- type: one of FLIGHT, HOTEL, ACTIVITY, FOOD, TRANSIT, NOTE
- title: short name of the item
- location: place or address
- notes: optional extra information
Infer specific times if not provided."""

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})")


class ItineraryGenerator(Protocol):
    """Protocol for itinerary generator implementations."""

    async def generate_itinerary(
        self, trip_id: str, prompt: str, start_date: date
    ) -> list[ItineraryItemDraft]:
        """Generate draft items for a trip from a free-text request.

        Args:
            trip_id: Trip the drafts belong to
            prompt: User's free-text request
            start_date: Trip start date; day offsets count from here

        Returns:
            Draft items with absolute dates (not yet persisted)
        """
        ...


def build_user_content(prompt: str, start_date: date) -> str:
    """User message sent alongside the fixed system instruction."""
    return f"Plan a trip starting {start_date.isoformat()}. Request: {prompt}"


def parse_generated_items(raw: str | None) -> list[dict[str, Any]]:
    """Parse model output into raw item dicts.

    Accepts a bare JSON array or an object with an "items" array.

    Raises:
        json.JSONDecodeError: If the output is not valid JSON
        ValueError: If the JSON has an unexpected shape
    """
    data = json.loads(raw or "[]")
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of itinerary items")
    for entry in data:
        if not isinstance(entry, dict):
            raise ValueError(f"Expected itinerary item object, got {type(entry).__name__}")
    return data


def _normalize_time(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def _coerce_type(value: Any) -> ActivityType:
    try:
        return ActivityType(str(value).upper())
    except ValueError:
        logger.debug(f"Unknown activity type {value!r}, using NOTE")
        return ActivityType.NOTE


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def draft_from_generated(
    trip_id: str, start_date: date, entry: dict[str, Any]
) -> ItineraryItemDraft:
    """Map one generated item to a draft dated start_date + dayOffset."""
    offset = int(entry.get("dayOffset") or 0)
    return ItineraryItemDraft(
        trip_id=trip_id,
        date=start_date + timedelta(days=offset),
        time=_normalize_time(entry.get("time")),
        type=_coerce_type(entry.get("type")),
        title=str(entry.get("title") or ""),
        location=_optional_str(entry.get("location")),
        notes=_optional_str(entry.get("notes")),
    )


class UnconfiguredItineraryGenerator:
    """Generator used when no API key is configured; always returns no items."""

    async def generate_itinerary(
        self, trip_id: str, prompt: str, start_date: date
    ) -> list[ItineraryItemDraft]:
        """Return an empty draft list."""
        logger.warning("No OpenAI API key configured, itinerary generation unavailable")
        record_generation("unconfigured")
        return []


class OpenAIItineraryGenerator:
    """OpenAI-backed itinerary generator."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def generate_itinerary(
        self, trip_id: str, prompt: str, start_date: date
    ) -> list[ItineraryItemDraft]:
        """Generate drafts using the OpenAI API.

        Raises:
            openai.OpenAIError: If the API call fails
            json.JSONDecodeError / ValueError: If the reply is malformed
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_content(prompt, start_date)},
                ],
                response_format={"type": "json_object"},
                temperature=0.7,
            )
            entries = parse_generated_items(response.choices[0].message.content)
            drafts = [draft_from_generated(trip_id, start_date, entry) for entry in entries]
        except Exception as e:
            logger.error(f"Itinerary generation failed: {e}")
            record_generation("error")
            raise

        logger.info(f"Generated {len(drafts)} itinerary items for trip {trip_id}")
        record_generation("success")
        return drafts


def get_itinerary_generator(settings: Settings | None = None) -> ItineraryGenerator:
    """Factory function to get appropriate generator based on config.

    Returns:
        OpenAIItineraryGenerator if API key is configured,
        UnconfiguredItineraryGenerator otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for itinerary generation")
        return OpenAIItineraryGenerator(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
        )
    return UnconfiguredItineraryGenerator()


async def generate_itinerary(trip_id: str, prompt: str, start_date: date) -> list[ItineraryItemDraft]:
    """Main entry point for AI itinerary generation.

    Args:
        trip_id: Trip the drafts belong to
        prompt: User's free-text request
        start_date: Trip start date

    Returns:
        Draft items; empty when no API key is configured
    """
    generator = get_itinerary_generator()
    return await generator.generate_itinerary(trip_id, prompt, start_date)
