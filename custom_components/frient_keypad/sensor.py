"""Sensors for the frient keypad integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import FrientKeypadDataUpdateCoordinator
from .entity import build_unique_id, device_info_for_entry
from .hub import FrientKeypadHub, KeypadSnapshot


@dataclass(frozen=True, slots=True, kw_only=True)
class FrientKeypadSensorDescription(SensorEntityDescription):
    """Describe a keypad sensor."""

    key: str
    value_fn: Callable[[KeypadSnapshot], Any]
    attributes_fn: Callable[[KeypadSnapshot], dict[str, Any]] | None = None


SENSORS: tuple[FrientKeypadSensorDescription, ...] = (
    FrientKeypadSensorDescription(
        key="battery",
        device_class=SensorDeviceClass.BATTERY,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=PERCENTAGE,
        entity_category=EntityCategory.DIAGNOSTIC,
        value_fn=lambda snapshot: snapshot.battery,
    ),
    FrientKeypadSensorDescription(
        key="lock_codes",
        translation_key="lock_codes",
        value_fn=lambda snapshot: len(snapshot.lock_codes),
        attributes_fn=lambda snapshot: {"slots": dict(snapshot.lock_codes)},
    ),
    FrientKeypadSensorDescription(
        key="last_code_change",
        translation_key="last_code_change",
        value_fn=lambda snapshot: snapshot.last_code_change,
        attributes_fn=lambda snapshot: dict(snapshot.last_code_change_data),
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up keypad sensors from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: FrientKeypadHub = data[DATA_HUB]
    coordinator: FrientKeypadDataUpdateCoordinator = data[DATA_COORDINATOR]
    async_add_entities(
        FrientKeypadSensor(coordinator, hub, entry, description) for description in SENSORS
    )


class FrientKeypadSensor(CoordinatorEntity[FrientKeypadDataUpdateCoordinator], SensorEntity):
    """Representation of a keypad sensor."""

    _attr_has_entity_name = True
    entity_description: FrientKeypadSensorDescription

    def __init__(
        self,
        coordinator: FrientKeypadDataUpdateCoordinator,
        hub: FrientKeypadHub,
        entry: ConfigEntry,
        description: FrientKeypadSensorDescription,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self.entity_description = description
        self._attr_unique_id = build_unique_id(hub.ieee, "sensor", description.key)
        self._attr_device_info = device_info_for_entry(hub, entry)

    @property
    def native_value(self) -> Any:
        """Return the current value."""
        snapshot = self.coordinator.data
        if snapshot is None:
            return None
        return self.entity_description.value_fn(snapshot)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return per-sensor attributes."""
        snapshot = self.coordinator.data
        attributes_fn = self.entity_description.attributes_fn
        if snapshot is None or attributes_fn is None:
            return None
        return attributes_fn(snapshot)
