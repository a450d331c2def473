"""Hub wrapper binding one frient keypad driver to ZHA."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any

from frient_lib import (
    BindRequest,
    CapabilityEvent,
    ClusterCommand,
    ConfigureReporting,
    DeviceRecord,
    KeypadDriver,
    ReadAttribute,
)
from frient_lib.const import (
    ATTR_BATTERY,
    ATTR_CODE_CHANGED,
    ATTR_LOCK_CODES,
    ATTR_SECURITY_SYSTEM_STATUS,
    ATTR_TAMPER,
    DEFAULT_MODEL,
    FIELD_LAST_CONTEXT,
    FIELD_LOCK_CODES,
    MANUFACTURER,
)

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import Event, HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from .const import (
    CONF_ENDPOINT,
    CONF_IEEE,
    DOMAIN,
    EVENT_ZHA,
    STORAGE_SAVE_DELAY,
    STORAGE_VERSION,
    ZHA_DOMAIN,
    ZHA_SERVICE_CLUSTER_COMMAND,
)

_LOGGER = logging.getLogger(__name__)

EVENT_KEYPAD = f"{DOMAIN}_event"

# Positional argument names for zha_event payloads that carry a list.
_POSITIONAL_ARGS: dict[str, tuple[str, ...]] = {
    "arm": ("arm_mode", "arm_disarm_code", "zone_id"),
    "status_change_notification": ("zone_status", "extended_status", "zone_id", "delay"),
}


@dataclass(slots=True)
class KeypadSnapshot:
    """Read-only view of the keypad state for entities."""

    status: str | None = None
    tamper: str | None = None
    battery: int | None = None
    lock_codes: dict[str, str] = field(default_factory=dict)
    last_code_change: str | None = None
    last_code_change_data: dict[str, Any] = field(default_factory=dict)
    last_context: dict[str, Any] = field(default_factory=dict)


class FrientKeypadHub:
    """Manage a single keypad driver, its storage and its ZHA wiring."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        """Initialize the hub wrapper."""
        self._hass = hass
        self._entry = entry
        self._ieee: str = entry.data[CONF_IEEE]
        self._endpoint_id: int = int(entry.data[CONF_ENDPOINT])
        self._store: Store[dict[str, Any]] = Store(
            hass, STORAGE_VERSION, f"{DOMAIN}.{entry.entry_id}", private=True
        )
        self._record: DeviceRecord | None = None
        self._driver: KeypadDriver | None = None
        self._zha_unsubscribe: Callable[[], None] | None = None
        self._callbacks: set[Callable[[CapabilityEvent], None]] = set()
        self._last_code_change: str | None = None
        self._last_code_change_data: dict[str, Any] = {}

    @property
    def ieee(self) -> str:
        """Return the keypad IEEE address."""
        return self._ieee

    @property
    def driver(self) -> KeypadDriver:
        """Return the driver, raising when the hub is not started."""
        if self._driver is None:
            raise HomeAssistantError("Keypad is not loaded.")
        return self._driver

    @property
    def is_ready(self) -> bool:
        """Return if the driver is running."""
        return self._driver is not None

    async def async_start(self) -> None:
        """Load persisted state, run lifecycle handlers and listen to ZHA."""
        stored = await self._store.async_load() or {}
        latest = {
            (item[0], item[1], item[2]): item[3]
            for item in stored.get("latest", [])
            if isinstance(item, list) and len(item) == 4
        }
        first_start = not stored
        self._record = DeviceRecord(
            self._ieee,
            manufacturer=MANUFACTURER,
            model=DEFAULT_MODEL,
            preferences=self._entry.options,
            persisted=stored.get("fields"),
            latest_state=latest,
            emit=self._handle_emit,
            send=self._handle_send,
            persist=self._handle_persist,
        )
        self._driver = KeypadDriver(self._record)
        if first_start:
            _LOGGER.info("Keypad %s added", self._ieee)
            self._driver.added()
            self._driver.do_configure()
        self._driver.init()
        self._zha_unsubscribe = self._hass.bus.async_listen(
            EVENT_ZHA, self._handle_zha_event
        )

    async def async_stop(self) -> None:
        """Stop listening and flush pending storage writes."""
        if self._zha_unsubscribe is not None:
            self._zha_unsubscribe()
            self._zha_unsubscribe = None
        if self._record is not None:
            await self._store.async_save(self._data_to_save())
        self._driver = None
        self._record = None

    @callback
    def async_apply_options(self, options: Mapping[str, Any]) -> None:
        """Push changed options into the driver."""
        self.driver.info_changed(options)

    def subscribe(self, callback: Callable[[CapabilityEvent], None]) -> Callable[[], None]:
        """Subscribe to capability events."""
        self._callbacks.add(callback)
        return lambda: self._callbacks.discard(callback)

    def get_snapshot(self) -> KeypadSnapshot | None:
        """Return the latest keypad state."""
        record = self._record
        if record is None:
            return None
        latest = {key[2]: value for key, value in record.latest_states().items()}
        names = record.get_field(FIELD_LOCK_CODES) or {}
        return KeypadSnapshot(
            status=latest.get(ATTR_SECURITY_SYSTEM_STATUS),
            tamper=latest.get(ATTR_TAMPER),
            battery=latest.get(ATTR_BATTERY),
            lock_codes=dict(names),
            last_code_change=self._last_code_change,
            last_code_change_data=dict(self._last_code_change_data),
            last_context=record.get_field(FIELD_LAST_CONTEXT) or {},
        )

    def get_diagnostics_fields(self) -> dict[str, Any]:
        """Return the persisted device fields."""
        if self._record is None:
            return {}
        return self._record.persisted_fields()

    @callback
    def async_capability_command(
        self, capability: str, command: str, args: Mapping[str, Any] | None = None
    ) -> None:
        """Run a capability command on the driver."""
        if not self.driver.handle_capability_command(capability, command, args):
            raise HomeAssistantError(f"Unsupported command {capability}.{command}")

    # -------------------------
    # ZHA inbound
    # -------------------------

    @callback
    def _handle_zha_event(self, event: Event) -> None:
        data = event.data or {}
        if data.get("device_ieee") != self._ieee or self._driver is None:
            return
        cluster_id = data.get("cluster_id")
        command = data.get("command")
        if not isinstance(cluster_id, int) or not isinstance(command, str):
            return
        args = _event_args(command, data)
        if command == "attribute_updated":
            attribute = args.get("attribute_name")
            if attribute is None:
                return
            self._driver.handle_attribute(
                cluster_id, str(attribute), args.get("attribute_value", args.get("value"))
            )
            return
        _LOGGER.debug(
            "zha_event for %s: cluster=0x%04X command=%s", self._ieee, cluster_id, command
        )
        self._driver.handle_cluster_command(cluster_id, command, args)

    # -------------------------
    # Driver collaborators
    # -------------------------

    def _handle_emit(self, event: CapabilityEvent) -> None:
        if event.attribute == ATTR_CODE_CHANGED:
            self._last_code_change = str(event.value)
            self._last_code_change_data = dict(event.data or {})
        if event.state_change or event.attribute in (
            ATTR_SECURITY_SYSTEM_STATUS,
            ATTR_CODE_CHANGED,
        ):
            self._hass.bus.async_fire(
                EVENT_KEYPAD,
                {
                    "device_ieee": self._ieee,
                    "capability": event.capability,
                    "attribute": event.attribute,
                    "value": event.value if event.attribute != ATTR_LOCK_CODES else None,
                    "data": dict(event.data or {}),
                },
            )
        self._store.async_delay_save(self._data_to_save, STORAGE_SAVE_DELAY)
        for cb in list(self._callbacks):
            cb(event)

    def _handle_persist(self, fields: dict[str, Any]) -> None:
        _LOGGER.debug("Persisting %s fields for %s", len(fields), self._ieee)
        self._store.async_delay_save(self._data_to_save, STORAGE_SAVE_DELAY)

    def _handle_send(self, message: Any) -> None:
        if isinstance(message, ClusterCommand):
            self._hass.async_create_task(self._async_issue_cluster_command(message))
        elif isinstance(message, (BindRequest, ConfigureReporting, ReadAttribute)):
            # ZHA owns binding, reporting and attribute polls for paired devices.
            _LOGGER.debug("Deferring %s for %s to ZHA", message, self._ieee)
        else:
            _LOGGER.warning("Unknown outgoing message %r", message)

    async def _async_issue_cluster_command(self, message: ClusterCommand) -> None:
        service_data = {
            "ieee": self._ieee,
            "endpoint_id": self._endpoint_id,
            "cluster_id": message.cluster_id,
            "cluster_type": "out" if message.server_to_client else "in",
            "command": message.command_id,
            "command_type": "client" if message.server_to_client else "server",
            "params": {key: _wire_value(value) for key, value in message.args.items()},
        }
        _LOGGER.debug("Sending %s to %s: %s", message.command, self._ieee, service_data)
        try:
            await self._hass.services.async_call(
                ZHA_DOMAIN, ZHA_SERVICE_CLUSTER_COMMAND, service_data, blocking=True
            )
        except HomeAssistantError as err:
            _LOGGER.warning("Sending %s to %s failed: %s", message.command, self._ieee, err)

    def _data_to_save(self) -> dict[str, Any]:
        record = self._record
        if record is None:
            return {}
        return {
            "fields": record.persisted_fields(),
            "latest": [
                [key[0], key[1], key[2], value]
                for key, value in record.latest_states().items()
                if key[2] != ATTR_LOCK_CODES
            ],
        }


def _event_args(command: str, data: Mapping[str, Any]) -> dict[str, Any]:
    params = data.get("params")
    if isinstance(params, Mapping) and params:
        return dict(params)
    args = data.get("args")
    if isinstance(args, Mapping):
        return dict(args)
    if isinstance(args, (list, tuple)):
        names = _POSITIONAL_ARGS.get(command, ())
        return dict(zip(names, args))
    return {}


def _wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return int(value.value)
    return value

