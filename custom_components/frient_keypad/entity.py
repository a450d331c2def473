"""Shared entity helpers for the frient keypad integration."""

from __future__ import annotations

from frient_lib.const import DEFAULT_MODEL, MANUFACTURER

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import CONNECTION_ZIGBEE, DeviceInfo

from .const import DOMAIN
from .hub import FrientKeypadHub


def device_info_for_entry(hub: FrientKeypadHub, entry: ConfigEntry) -> DeviceInfo:
    """Build device info for entities tied to a config entry."""
    return DeviceInfo(
        connections={(CONNECTION_ZIGBEE, hub.ieee)},
        identifiers={(DOMAIN, hub.ieee)},
        name=entry.title,
        manufacturer=MANUFACTURER,
        model=DEFAULT_MODEL,
    )


def build_unique_id(ieee: str, domain: str, key: str) -> str:
    """Build a stable unique ID in <ieee>:<domain>:<key> format."""
    return f"{ieee}:{domain}:{key}"
