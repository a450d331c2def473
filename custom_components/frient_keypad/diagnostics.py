"""Diagnostics support for the frient keypad."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from frient_lib.const import (
    FIELD_LOCK_CODE_PINS,
    FIELD_USER_MAP,
    PREF_DELETE_PIN_MAP,
    PREF_DELETE_RFID_MAP,
    PREF_PIN_MAP,
    PREF_RFID_MAP,
)

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_ENDPOINT, CONF_IEEE, DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import FrientKeypadDataUpdateCoordinator
from .hub import FrientKeypadHub

TO_REDACT_OPTIONS = {PREF_PIN_MAP, PREF_RFID_MAP, PREF_DELETE_PIN_MAP, PREF_DELETE_RFID_MAP}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    hub: FrientKeypadHub | None = data.get(DATA_HUB) if data else None
    coordinator: FrientKeypadDataUpdateCoordinator | None = (
        data.get(DATA_COORDINATOR) if data else None
    )
    snapshot = coordinator.data if coordinator is not None else None

    return {
        "entry_id": entry.entry_id,
        "ieee": entry.data.get(CONF_IEEE),
        "endpoint_id": entry.data.get(CONF_ENDPOINT),
        "options": async_redact_data(dict(entry.options), TO_REDACT_OPTIONS),
        "ready": hub.is_ready if hub is not None else False,
        "fields": redact_fields(hub.get_diagnostics_fields()) if hub is not None else {},
        "snapshot": asdict(snapshot) if snapshot is not None else None,
    }


def redact_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Mask pins and rfids in persisted device fields."""
    redacted = dict(fields)
    pins = redacted.get(FIELD_LOCK_CODE_PINS)
    if isinstance(pins, Mapping):
        redacted[FIELD_LOCK_CODE_PINS] = {slot: "***" for slot in pins}
    user_map = redacted.get(FIELD_USER_MAP)
    if isinstance(user_map, Mapping):
        redacted[FIELD_USER_MAP] = {
            section: [dict(entry) for entry in entries.values()]
            for section, entries in user_map.items()
            if isinstance(entries, Mapping)
        }
    return redacted
