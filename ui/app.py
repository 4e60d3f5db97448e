"""Streamlit UI for TripFlow - trip dashboard and day-by-day planner.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio  # noqa: E402
from datetime import date  # noqa: E402

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from tripflow.api.routes.itinerary import GENERATION_FAILED_MESSAGE  # noqa: E402
from tripflow.config import get_settings  # noqa: E402
from tripflow.db.seed_dev import DEV_USER_ID  # noqa: E402
from tripflow.itinerary.controller import ItineraryController  # noqa: E402
from tripflow.itinerary.presentation import MENU_OPTIONS, editable_fields, type_label  # noqa: E402
from tripflow.models.common import ActivityType  # noqa: E402
from tripflow.models.itinerary import ItineraryItem, ItineraryItemPatch  # noqa: E402
from ui.helpers import (  # noqa: E402
    ApiTripGateway,
    default_trip_draft,
    format_day_header,
    format_trip_range,
)

# Page config
st.set_page_config(
    page_title="TripFlow",
    page_icon="✈️",
    layout="wide",
)

# Initialize session state
if "gateway" not in st.session_state:
    st.session_state.gateway = ApiTripGateway(get_settings().api_url, DEV_USER_ID)
if "controller" not in st.session_state:
    st.session_state.controller = None
if "error" not in st.session_state:
    st.session_state.error = None

gateway: ApiTripGateway = st.session_state.gateway


def _open_trip(trip_id: str) -> None:
    trips = asyncio.run(gateway.list_trips(gateway.user_id))
    trip = next((t for t in trips if t.id == trip_id), None)
    if trip is None:
        st.session_state.error = "Trip not found"
        return
    controller = ItineraryController(gateway, trip)
    asyncio.run(controller.load())
    st.session_state.controller = controller
    st.session_state.error = None


def _close_trip() -> None:
    st.session_state.controller = None


def _render_item(controller: ItineraryController, item: ItineraryItem) -> None:
    col_time, col_type, col_fields, col_delete = st.columns([1, 1.2, 4, 0.5])

    with col_time:
        new_time = st.text_input(
            "Time", value=item.time or "", key=f"time_{item.id}", label_visibility="collapsed"
        )
        if new_time != (item.time or ""):
            try:
                patch = ItineraryItemPatch(time=new_time or None)
            except ValueError:
                st.warning("Use HH:MM")
            else:
                asyncio.run(controller.update_item(item.id, patch))

    with col_type:
        types = list(ActivityType)
        new_type = st.selectbox(
            "Type",
            options=types,
            index=types.index(item.type),
            format_func=type_label,
            key=f"type_{item.id}",
            label_visibility="collapsed",
        )
        if new_type != item.type:
            asyncio.run(controller.update_item(item.id, ItineraryItemPatch(type=new_type)))

    with col_fields:
        for field in editable_fields(item.type):
            key = f"{field.detail_key or field.attribute}_{item.id}"
            if field.is_detail:
                current = str(item.details.get(field.detail_key, ""))
            else:
                current = getattr(item, field.attribute) or ""
            value = st.text_input(
                field.placeholder, value=current, placeholder=field.placeholder, key=key
            )
            if value == current:
                continue
            if field.is_detail:
                asyncio.run(controller.update_item_details(item.id, {field.detail_key: value}))
            else:
                asyncio.run(
                    controller.update_item(
                        item.id, ItineraryItemPatch(**{field.attribute: value})
                    )
                )

    with col_delete:
        if st.button("🗑️", key=f"delete_{item.id}"):
            try:
                asyncio.run(controller.delete_item(item.id))
            except httpx.HTTPError as e:
                st.session_state.error = f"Failed to delete item: {e}"
            st.rerun()


def _render_planner(controller: ItineraryController) -> None:
    trip = controller.trip

    if st.button("← Back to trips"):
        _close_trip()
        st.rerun()

    if trip.cover_image:
        st.image(trip.cover_image, use_container_width=True)
    st.title(trip.title)
    st.caption(format_trip_range(trip))
    if trip.notes:
        st.info(trip.notes)

    # AI generation
    with st.form("generate_form"):
        prompt = st.text_input("Ask AI to plan", placeholder="e.g. 3 days of hiking and food")
        if st.form_submit_button("✨ Generate", type="primary") and prompt.strip():
            with st.spinner("Generating itinerary..."):
                try:
                    # The API persists generated items server-side; reload to pick them up
                    asyncio.run(gateway.generate(trip.id, prompt))
                    asyncio.run(controller.load())
                    st.session_state.error = None
                except httpx.HTTPError:
                    st.session_state.error = GENERATION_FAILED_MESSAGE
            st.rerun()

    if st.session_state.error:
        st.error(st.session_state.error)

    for day in controller.days():
        st.subheader(format_day_header(day.day_number, day.date))

        if not day.items:
            st.caption("_Nothing planned yet_")
        for item in day.items:
            _render_item(controller, item)

        with st.popover("➕ Add Item"):
            for option in MENU_OPTIONS:
                if st.button(option.label, key=f"add_{day.date.isoformat()}_{option.type.value}"):
                    asyncio.run(controller.add_item(day.date, option.type))
                    st.rerun()

        st.divider()


def _render_dashboard() -> None:
    st.title("✈️ My Trips")

    with st.form("new_trip_form"):
        title = st.text_input("Trip title", placeholder="e.g. Weekend in Lisbon")
        if st.form_submit_button("➕ New Trip", type="primary"):
            if not title.strip():
                st.session_state.error = "Trip title is required"
            else:
                draft = default_trip_draft(gateway.user_id, title.strip(), date.today())
                trip = asyncio.run(gateway.create_trip(draft))
                _open_trip(trip.id)
            st.rerun()

    if st.session_state.error:
        st.error(st.session_state.error)

    try:
        trips = asyncio.run(gateway.list_trips(gateway.user_id))
    except httpx.HTTPError as e:
        st.error(f"❌ Cannot reach the API at {gateway.base_url}: {e}")
        return

    if not trips:
        st.info("No trips yet. Create one above.")
        return

    columns = st.columns(3)
    for index, trip in enumerate(trips):
        with columns[index % 3]:
            if trip.cover_image:
                st.image(trip.cover_image, use_container_width=True)
            st.markdown(f"### {trip.title}")
            st.caption(f"{format_trip_range(trip)} · {trip.num_days} days")
            if st.button("Open", key=f"open_{trip.id}"):
                _open_trip(trip.id)
                st.rerun()


if st.session_state.controller is not None:
    _render_planner(st.session_state.controller)
else:
    _render_dashboard()
