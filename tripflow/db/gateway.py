"""Persistence gateway protocol and instrumentation wrapper."""

import time
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from tripflow.models.itinerary import ItineraryItem, ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import Trip, TripDraft
from tripflow.utils.logging import StructuredGatewayLogger
from tripflow.utils.metrics import PrometheusGatewayMetrics

T = TypeVar("T")


class TripGateway(Protocol):
    """Uniform CRUD interface over trips and itinerary items.

    Implemented identically by the remote SQL backend and the local mock backend.
    """

    async def list_trips(self, user_id: str) -> list[Trip]:
        """List all trips owned by a user.

        Args:
            user_id: Owning user ID

        Returns:
            Trips in backend-defined order
        """
        ...

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Persist a new trip under a freshly generated ID.

        Args:
            draft: Trip fields without ID

        Returns:
            Stored trip
        """
        ...

    async def list_itinerary(self, trip_id: str) -> list[ItineraryItem]:
        """List items of a trip ordered by (date, time); absent time sorts first.

        Args:
            trip_id: Owning trip ID

        Returns:
            Ordered items
        """
        ...

    async def add_itinerary_item(self, draft: ItineraryItemDraft) -> ItineraryItem:
        """Persist a new itinerary item under a freshly generated ID.

        Args:
            draft: Item fields without ID

        Returns:
            Stored item
        """
        ...

    async def update_itinerary_item(
        self, item_id: str, trip_id: str, patch: ItineraryItemPatch
    ) -> None:
        """Merge the patch's set fields into a stored item.

        Args:
            item_id: Item ID
            trip_id: Owning trip ID
            patch: Partial fields
        """
        ...

    async def delete_itinerary_item(self, item_id: str, trip_id: str) -> None:
        """Delete an item. Deleting a missing item is not an error.

        Args:
            item_id: Item ID
            trip_id: Owning trip ID
        """
        ...


class InstrumentedGateway:
    """TripGateway wrapper recording latency, errors and a structured log per call."""

    def __init__(
        self,
        inner: TripGateway,
        backend: str,
        metrics: PrometheusGatewayMetrics | None = None,
        struct_logger: StructuredGatewayLogger | None = None,
    ) -> None:
        self.inner = inner
        self.backend = backend
        self._metrics = metrics or PrometheusGatewayMetrics()
        self._logger = struct_logger or StructuredGatewayLogger()

    async def _call(
        self,
        operation: str,
        fn: Callable[[], Awaitable[T]],
        *,
        trip_id: str | None = None,
        item_id: str | None = None,
    ) -> T:
        start = time.perf_counter()
        try:
            result = await fn()
        except Exception as e:
            latency_ms = (time.perf_counter() - start) * 1000
            self._metrics.record_latency(operation, self.backend, "error", latency_ms)
            self._metrics.inc_error(operation, self.backend, type(e).__name__)
            self._logger.log_call(
                operation,
                self.backend,
                "error",
                latency_ms,
                trip_id=trip_id,
                item_id=item_id,
                error_reason=str(e)[:200],
            )
            raise

        latency_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_latency(operation, self.backend, "success", latency_ms)
        self._logger.log_call(
            operation, self.backend, "success", latency_ms, trip_id=trip_id, item_id=item_id
        )
        return result

    async def list_trips(self, user_id: str) -> list[Trip]:
        return await self._call("list_trips", lambda: self.inner.list_trips(user_id))

    async def create_trip(self, draft: TripDraft) -> Trip:
        return await self._call("create_trip", lambda: self.inner.create_trip(draft))

    async def list_itinerary(self, trip_id: str) -> list[ItineraryItem]:
        return await self._call(
            "list_itinerary", lambda: self.inner.list_itinerary(trip_id), trip_id=trip_id
        )

    async def add_itinerary_item(self, draft: ItineraryItemDraft) -> ItineraryItem:
        return await self._call(
            "add_itinerary_item",
            lambda: self.inner.add_itinerary_item(draft),
            trip_id=draft.trip_id,
        )

    async def update_itinerary_item(
        self, item_id: str, trip_id: str, patch: ItineraryItemPatch
    ) -> None:
        await self._call(
            "update_itinerary_item",
            lambda: self.inner.update_itinerary_item(item_id, trip_id, patch),
            trip_id=trip_id,
            item_id=item_id,
        )

    async def delete_itinerary_item(self, item_id: str, trip_id: str) -> None:
        await self._call(
            "delete_itinerary_item",
            lambda: self.inner.delete_itinerary_item(item_id, trip_id),
            trip_id=trip_id,
            item_id=item_id,
        )
