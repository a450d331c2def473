"""Tamper binary sensor for the frient keypad."""

from __future__ import annotations

from frient_lib.const import TAMPER_DETECTED

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import FrientKeypadDataUpdateCoordinator
from .entity import build_unique_id, device_info_for_entry
from .hub import FrientKeypadHub


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the keypad tamper sensor from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: FrientKeypadHub = data[DATA_HUB]
    coordinator: FrientKeypadDataUpdateCoordinator = data[DATA_COORDINATOR]
    async_add_entities([FrientKeypadTamperSensor(coordinator, hub, entry)])


class FrientKeypadTamperSensor(
    CoordinatorEntity[FrientKeypadDataUpdateCoordinator], BinarySensorEntity
):
    """Tamper state reported through the IAS Zone cluster."""

    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.TAMPER
    _attr_entity_category = EntityCategory.DIAGNOSTIC
    _attr_translation_key = "tamper"

    def __init__(
        self,
        coordinator: FrientKeypadDataUpdateCoordinator,
        hub: FrientKeypadHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the tamper sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = build_unique_id(hub.ieee, "binary_sensor", "tamper")
        self._attr_device_info = device_info_for_entry(hub, entry)

    @property
    def is_on(self) -> bool | None:
        """Return True when tamper is detected."""
        snapshot = self.coordinator.data
        if snapshot is None or snapshot.tamper is None:
            return None
        return snapshot.tamper == TAMPER_DETECTED
