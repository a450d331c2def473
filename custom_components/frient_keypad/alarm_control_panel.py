"""Alarm control panel platform for the frient keypad."""

from __future__ import annotations

from typing import Any

from frient_lib.const import (
    CMD_ARM_AWAY,
    CMD_ARM_STAY,
    CMD_DELETE_CODE,
    CMD_DISARM,
    CMD_NAME_SLOT,
    CMD_REFRESH,
    CMD_RELOAD_ALL_CODES,
    CMD_REQUEST_CODE,
    CMD_SET_CODE,
    CMD_SET_CODE_LENGTH,
    CMD_UPDATE_CODES,
    LOCK_CODES,
    REFRESH,
    SECURITY_SYSTEM,
)
from frient_lib.types import SecurityStatus
import voluptuous as vol

from homeassistant.components.alarm_control_panel import (
    AlarmControlPanelEntity,
    AlarmControlPanelEntityFeature,
    AlarmControlPanelState,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv, entity_platform
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    ATTR_CODE_NAME,
    ATTR_CODE_PIN,
    ATTR_CODE_SLOT,
    ATTR_CODES,
    ATTR_LENGTH,
    DATA_COORDINATOR,
    DATA_HUB,
    DOMAIN,
    SERVICE_DELETE_CODE,
    SERVICE_NAME_SLOT,
    SERVICE_REFRESH,
    SERVICE_RELOAD_ALL_CODES,
    SERVICE_REQUEST_CODE,
    SERVICE_SET_CODE,
    SERVICE_SET_CODE_LENGTH,
    SERVICE_UPDATE_CODES,
)
from .coordinator import FrientKeypadDataUpdateCoordinator
from .entity import build_unique_id, device_info_for_entry
from .hub import FrientKeypadHub

_STATUS_TO_HA: dict[str, AlarmControlPanelState] = {
    SecurityStatus.DISARMED.value: AlarmControlPanelState.DISARMED,
    SecurityStatus.ARMED_STAY.value: AlarmControlPanelState.ARMED_HOME,
    SecurityStatus.ARMED_AWAY.value: AlarmControlPanelState.ARMED_AWAY,
}

_SLOT = vol.All(vol.Coerce(int), vol.Range(min=1))


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the keypad alarm control panel from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    hub: FrientKeypadHub = data[DATA_HUB]
    coordinator: FrientKeypadDataUpdateCoordinator = data[DATA_COORDINATOR]
    async_add_entities([FrientKeypadAlarmControlPanel(coordinator, hub, entry)])

    platform = entity_platform.async_get_current_platform()
    platform.async_register_entity_service(
        SERVICE_SET_CODE,
        {
            vol.Required(ATTR_CODE_SLOT): _SLOT,
            vol.Optional(ATTR_CODE_PIN): cv.string,
            vol.Optional(ATTR_CODE_NAME): cv.string,
        },
        "async_set_code",
    )
    platform.async_register_entity_service(
        SERVICE_DELETE_CODE, {vol.Required(ATTR_CODE_SLOT): _SLOT}, "async_delete_code"
    )
    platform.async_register_entity_service(
        SERVICE_NAME_SLOT,
        {vol.Required(ATTR_CODE_SLOT): _SLOT, vol.Required(ATTR_CODE_NAME): cv.string},
        "async_name_slot",
    )
    platform.async_register_entity_service(
        SERVICE_UPDATE_CODES,
        {vol.Required(ATTR_CODES): vol.Any(dict, cv.string)},
        "async_update_codes",
    )
    platform.async_register_entity_service(
        SERVICE_RELOAD_ALL_CODES, None, "async_reload_all_codes"
    )
    platform.async_register_entity_service(
        SERVICE_REQUEST_CODE, {vol.Required(ATTR_CODE_SLOT): _SLOT}, "async_request_code"
    )
    platform.async_register_entity_service(
        SERVICE_SET_CODE_LENGTH,
        {vol.Required(ATTR_LENGTH): vol.All(vol.Coerce(int), vol.Range(min=1))},
        "async_set_code_length",
    )
    platform.async_register_entity_service(SERVICE_REFRESH, None, "async_refresh")


class FrientKeypadAlarmControlPanel(
    CoordinatorEntity[FrientKeypadDataUpdateCoordinator], AlarmControlPanelEntity
):
    """Representation of the keypad security system."""

    _attr_has_entity_name = True
    _attr_name = None
    _attr_code_arm_required = False
    _attr_supported_features = (
        AlarmControlPanelEntityFeature.ARM_AWAY
        | AlarmControlPanelEntityFeature.ARM_HOME
    )

    def __init__(
        self,
        coordinator: FrientKeypadDataUpdateCoordinator,
        hub: FrientKeypadHub,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the keypad entity."""
        super().__init__(coordinator)
        self._hub = hub
        self._attr_unique_id = build_unique_id(hub.ieee, "alarm_control_panel", "security_system")
        self._attr_device_info = device_info_for_entry(hub, entry)

    @property
    def alarm_state(self) -> AlarmControlPanelState | None:
        """Return the current state."""
        snapshot = self.coordinator.data
        if snapshot is None or snapshot.status is None:
            return None
        return _STATUS_TO_HA.get(snapshot.status)

    @property
    def changed_by(self) -> str | None:
        """Return the user that last changed the state."""
        snapshot = self.coordinator.data
        if snapshot is None:
            return None
        return snapshot.last_context.get("userName") or snapshot.last_context.get("source")

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the context of the last transition."""
        snapshot = self.coordinator.data
        if snapshot is None:
            return {}
        return dict(snapshot.last_context)

    @property
    def available(self) -> bool:
        """Return if the entity is available."""
        return self._hub.is_ready and super().available

    async def async_alarm_arm_away(self, code: str | None = None) -> None:
        """Arm away."""
        self._hub.async_capability_command(SECURITY_SYSTEM, CMD_ARM_AWAY)

    async def async_alarm_arm_home(self, code: str | None = None) -> None:
        """Arm stay."""
        self._hub.async_capability_command(SECURITY_SYSTEM, CMD_ARM_STAY)

    async def async_alarm_disarm(self, code: str | None = None) -> None:
        """Disarm."""
        self._hub.async_capability_command(SECURITY_SYSTEM, CMD_DISARM)

    async def async_set_code(
        self, code_slot: int, code_pin: str | None = None, code_name: str | None = None
    ) -> None:
        """Set or replace the code at a slot."""
        self._hub.async_capability_command(
            LOCK_CODES,
            CMD_SET_CODE,
            {"codeSlot": code_slot, "codePIN": code_pin, "codeName": code_name},
        )

    async def async_delete_code(self, code_slot: int) -> None:
        """Delete the code at a slot."""
        self._hub.async_capability_command(LOCK_CODES, CMD_DELETE_CODE, {"codeSlot": code_slot})

    async def async_name_slot(self, code_slot: int, code_name: str) -> None:
        """Rename a slot."""
        self._hub.async_capability_command(
            LOCK_CODES, CMD_NAME_SLOT, {"codeSlot": code_slot, "codeName": code_name}
        )

    async def async_update_codes(self, codes: dict[str, Any] | str) -> None:
        """Apply a bulk slot update."""
        self._hub.async_capability_command(LOCK_CODES, CMD_UPDATE_CODES, {"codes": codes})

    async def async_reload_all_codes(self) -> None:
        """Re-emit the lock code table."""
        self._hub.async_capability_command(LOCK_CODES, CMD_RELOAD_ALL_CODES)

    async def async_request_code(self, code_slot: int) -> None:
        """Report a slot."""
        self._hub.async_capability_command(LOCK_CODES, CMD_REQUEST_CODE, {"codeSlot": code_slot})

    async def async_set_code_length(self, length: int) -> None:
        """Set the code length override."""
        self._hub.async_capability_command(LOCK_CODES, CMD_SET_CODE_LENGTH, {"length": length})

    async def async_refresh(self) -> None:
        """Read battery voltage and re-send the panel status."""
        self._hub.async_capability_command(REFRESH, CMD_REFRESH)
