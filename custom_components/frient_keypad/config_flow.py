"""Config flow for the frient keypad integration."""

from __future__ import annotations

import re
from typing import Any

from frient_lib.const import (
    DEFAULT_ENDPOINT_ID,
    DEFAULT_PANEL_STATUS_LENGTH,
    PREF_DELETE_PIN_MAP,
    PREF_DELETE_RFID_MAP,
    PREF_EXIT_DELAY,
    PREF_LENGTH,
    PREF_MAX_CODE_LENGTH,
    PREF_MAX_CODES,
    PREF_MIN_CODE_LENGTH,
    PREF_PIN_MAP,
    PREF_RFID_MAP,
    PREF_SHOW_PIN_SNAPSHOT,
)
import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_NAME
from homeassistant.core import callback
from homeassistant.helpers import config_validation as cv

from .const import CONF_ENDPOINT, CONF_IEEE, DOMAIN

DEFAULT_NAME = "frient Keypad"

_IEEE_RE = re.compile(r"^([0-9a-f]{2}:){7}[0-9a-f]{2}$")

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_IEEE): cv.string,
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): cv.string,
        vol.Optional(CONF_ENDPOINT, default=DEFAULT_ENDPOINT_ID): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=240)
        ),
    }
)


class FrientKeypadConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for a frient keypad."""

    VERSION = 1
    MINOR_VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Return the options flow handler."""
        return FrientKeypadOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}
        if user_input is not None:
            ieee = normalize_ieee(user_input[CONF_IEEE])
            if ieee is None:
                errors[CONF_IEEE] = "invalid_ieee"
            else:
                await self.async_set_unique_id(ieee)
                self._abort_if_unique_id_configured()
                return self.async_create_entry(
                    title=user_input.get(CONF_NAME) or DEFAULT_NAME,
                    data={CONF_IEEE: ieee, CONF_ENDPOINT: user_input[CONF_ENDPOINT]},
                    options={},
                )

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )


class FrientKeypadOptionsFlow(OptionsFlow):
    """Edit the keypad preferences."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Show and store the preferences form."""
        errors: dict[str, str] = {}
        if user_input is not None:
            min_len = user_input.get(PREF_MIN_CODE_LENGTH)
            max_len = user_input.get(PREF_MAX_CODE_LENGTH)
            if min_len is not None and max_len is not None and min_len > max_len:
                errors[PREF_MAX_CODE_LENGTH] = "invalid_code_length"
            else:
                return self.async_create_entry(data=user_input)

        options = self.config_entry.options
        return self.async_show_form(
            step_id="init",
            data_schema=_options_schema(options),
            errors=errors,
        )


def _options_schema(options: dict[str, Any] | Any) -> vol.Schema:
    def _suggested(key: str) -> dict[str, Any]:
        value = options.get(key)
        return {"suggested_value": value} if value is not None else {}

    code_length = vol.All(vol.Coerce(int), vol.Range(min=1, max=16))
    return vol.Schema(
        {
            vol.Optional(PREF_MIN_CODE_LENGTH, description=_suggested(PREF_MIN_CODE_LENGTH)): code_length,
            vol.Optional(PREF_MAX_CODE_LENGTH, description=_suggested(PREF_MAX_CODE_LENGTH)): code_length,
            vol.Optional(PREF_MAX_CODES, description=_suggested(PREF_MAX_CODES)): vol.All(
                vol.Coerce(int), vol.Range(min=1)
            ),
            vol.Optional(PREF_PIN_MAP, default=options.get(PREF_PIN_MAP, "")): cv.string,
            vol.Optional(PREF_RFID_MAP, default=options.get(PREF_RFID_MAP, "")): cv.string,
            vol.Optional(PREF_DELETE_PIN_MAP, default=options.get(PREF_DELETE_PIN_MAP, "")): cv.string,
            vol.Optional(PREF_DELETE_RFID_MAP, default=options.get(PREF_DELETE_RFID_MAP, "")): cv.string,
            vol.Optional(
                PREF_SHOW_PIN_SNAPSHOT, default=options.get(PREF_SHOW_PIN_SNAPSHOT, True)
            ): cv.boolean,
            vol.Optional(PREF_EXIT_DELAY, default=options.get(PREF_EXIT_DELAY, False)): cv.boolean,
            vol.Optional(
                PREF_LENGTH, default=options.get(PREF_LENGTH, DEFAULT_PANEL_STATUS_LENGTH)
            ): vol.All(vol.Coerce(int), vol.Range(min=0, max=255)),
        }
    )


def normalize_ieee(value: str) -> str | None:
    """Return a lower-case colon separated IEEE address, or None."""
    text = value.strip().lower().replace("-", ":")
    if ":" not in text and len(text) == 16:
        text = ":".join(text[i : i + 2] for i in range(0, 16, 2))
    if not _IEEE_RE.match(text):
        return None
    return text
