"""Constants for frient_keypad."""

from logging import Logger, getLogger

LOGGER: Logger = getLogger(__package__)

DOMAIN = "frient_keypad"

CONF_IEEE = "ieee"
CONF_ENDPOINT = "endpoint_id"

DATA_HUB = "hub"
DATA_COORDINATOR = "coordinator"

STORAGE_VERSION = 1
STORAGE_SAVE_DELAY = 1.0

EVENT_ZHA = "zha_event"
ZHA_DOMAIN = "zha"
ZHA_SERVICE_CLUSTER_COMMAND = "issue_zigbee_cluster_command"

SERVICE_SET_CODE = "set_code"
SERVICE_DELETE_CODE = "delete_code"
SERVICE_NAME_SLOT = "name_slot"
SERVICE_UPDATE_CODES = "update_codes"
SERVICE_RELOAD_ALL_CODES = "reload_all_codes"
SERVICE_REQUEST_CODE = "request_code"
SERVICE_SET_CODE_LENGTH = "set_code_length"
SERVICE_REFRESH = "refresh"

ATTR_CODE_SLOT = "code_slot"
ATTR_CODE_PIN = "code_pin"
ATTR_CODE_NAME = "code_name"
ATTR_CODES = "codes"
ATTR_LENGTH = "length"
