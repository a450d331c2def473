"""Data update coordinator for the frient keypad integration."""

from __future__ import annotations

from collections.abc import Callable
import logging

from frient_lib import CapabilityEvent

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .hub import FrientKeypadHub, KeypadSnapshot

_LOGGER = logging.getLogger(__name__)


class FrientKeypadDataUpdateCoordinator(DataUpdateCoordinator[KeypadSnapshot | None]):
    """Push keypad snapshots to entities whenever the driver emits."""

    def __init__(
        self,
        hass: HomeAssistant,
        hub: FrientKeypadHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(hass, _LOGGER, name=DOMAIN, config_entry=entry)
        self._hub = hub
        self._unsubscribe: Callable[[], None] | None = None

    async def async_start(self) -> None:
        """Subscribe to hub events and seed snapshot data."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = self._hub.subscribe(self._handle_event)
        self._set_snapshot()

    async def async_stop(self) -> None:
        """Stop coordinating updates."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @callback
    def _handle_event(self, event: CapabilityEvent) -> None:
        """Handle a capability event on the Home Assistant event loop."""
        _LOGGER.debug(
            "Keypad event %s.%s=%s", event.capability, event.attribute, event.value
        )
        self._set_snapshot()

    def _set_snapshot(self) -> None:
        self.async_set_updated_data(self._hub.get_snapshot())
