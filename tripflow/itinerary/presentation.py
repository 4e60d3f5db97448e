"""Display policy for itinerary items: add-menu options and editable fields per variant.

This is presentation only; storage accepts any fields for any variant.
"""

from dataclasses import dataclass

from tripflow.models.common import ActivityType


@dataclass(frozen=True)
class MenuOption:
    """Entry of the per-day "Add Item" menu."""

    type: ActivityType
    label: str


MENU_OPTIONS: tuple[MenuOption, ...] = (
    MenuOption(ActivityType.FLIGHT, "Flight"),
    MenuOption(ActivityType.HOTEL, "Hotel"),
    MenuOption(ActivityType.ACTIVITY, "Activity"),
    MenuOption(ActivityType.FOOD, "Food & Drink"),
    MenuOption(ActivityType.TRANSIT, "Transit"),
    MenuOption(ActivityType.CUSTOM, "Others"),
)


@dataclass(frozen=True)
class EditableField:
    """One input shown for an item.

    `detail_key` is set for fields stored in the item's detail mapping;
    otherwise `attribute` names a top-level item field.
    """

    attribute: str
    placeholder: str
    detail_key: str | None = None

    @property
    def is_detail(self) -> bool:
        return self.detail_key is not None


_FLIGHT_FIELDS = (
    EditableField("details", "Flight #", detail_key="flightNumber"),
    EditableField("details", "FROM", detail_key="from"),
    EditableField("details", "TO", detail_key="to"),
    EditableField("location", "Gate / Terminal"),
)

_HOTEL_FIELDS = (
    EditableField("title", "Hotel Name"),
    EditableField("location", "Address"),
)

_FOOD_FIELDS = (
    EditableField("title", "Restaurant Name"),
    EditableField("location", "Address"),
)


def editable_fields(item_type: ActivityType) -> tuple[EditableField, ...]:
    """Inputs exposed for a variant."""
    if item_type == ActivityType.FLIGHT:
        return _FLIGHT_FIELDS
    if item_type == ActivityType.HOTEL:
        return _HOTEL_FIELDS
    if item_type == ActivityType.FOOD:
        return _FOOD_FIELDS

    title_placeholder = (
        "Custom Item Name" if item_type == ActivityType.CUSTOM else "Activity Title"
    )
    return (
        EditableField("title", title_placeholder),
        EditableField("location", "Location / Details"),
    )


def type_label(item_type: ActivityType) -> str:
    """Label for the type selector; CUSTOM shows as OTHERS."""
    if item_type == ActivityType.CUSTOM:
        return "OTHERS"
    return item_type.value
