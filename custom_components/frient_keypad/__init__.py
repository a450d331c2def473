"""Set up the frient keypad integration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_VENDOR_PATH = Path(__file__).resolve().parent / "vendor" / "frient"
if _VENDOR_PATH.exists() and str(_VENDOR_PATH) not in sys.path:
    sys.path.insert(0, str(_VENDOR_PATH))

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady, HomeAssistantError

from .const import CONF_IEEE, DATA_COORDINATOR, DATA_HUB, DOMAIN
from .coordinator import FrientKeypadDataUpdateCoordinator
from .hub import FrientKeypadHub

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.ALARM_CONTROL_PANEL,
    Platform.BINARY_SENSOR,
    Platform.SENSOR,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a frient keypad from a config entry."""
    hub = FrientKeypadHub(hass, entry)
    try:
        await hub.async_start()
    except HomeAssistantError as err:
        _LOGGER.exception("Failed to start keypad %s", entry.data.get(CONF_IEEE))
        await hub.async_stop()
        raise ConfigEntryNotReady("The keypad driver could not be started") from err

    coordinator = FrientKeypadDataUpdateCoordinator(hass, hub, entry)
    await coordinator.async_start()
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        DATA_HUB: hub,
        DATA_COORDINATOR: coordinator,
    }
    entry.async_on_unload(entry.add_update_listener(_async_options_updated))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a frient keypad config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if data is not None:
        coordinator: FrientKeypadDataUpdateCoordinator | None = data.get(DATA_COORDINATOR)
        hub: FrientKeypadHub | None = data.get(DATA_HUB)
        if coordinator is not None:
            await coordinator.async_stop()
        if hub is not None:
            await hub.async_stop()
    return unload_ok


async def _async_options_updated(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Push changed preferences into the running driver."""
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if data is None:
        return
    hub: FrientKeypadHub = data[DATA_HUB]
    _LOGGER.debug("Options updated for %s", hub.ieee)
    hub.async_apply_options(entry.options)
