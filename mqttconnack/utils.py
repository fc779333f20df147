# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import logging

import yaml

from mqttconnack.mqtt.packet import PROTOCOL_VERSION_V3_1, PROTOCOL_VERSION_V3_1_1


logger = logging.getLogger(__name__)

# YAML reads 3.1 as a float and 3.1.1 as a string, so both are matched as strings
_PROTOCOL_VERSION_NAMES = {
    '3.1': PROTOCOL_VERSION_V3_1,
    '3': PROTOCOL_VERSION_V3_1,
    '3.1.1': PROTOCOL_VERSION_V3_1_1,
    '4': PROTOCOL_VERSION_V3_1_1,
}


def read_yaml_config(config_file):
    config = None
    try:
        with open(config_file, 'r') as stream:
            config = yaml.safe_load(stream)
    except yaml.YAMLError as exc:
        logger.error("Invalid config_file %s: %s" % (config_file, exc))
    return config


def merge_config(defaults: dict, overrides) -> dict:
    """
    Return a copy of defaults updated with the not None values of overrides
    :param defaults: base configuration
    :param overrides: configuration read from file or command line, may be None
    :return: merged configuration
    """
    config = dict(defaults)
    if overrides:
        config.update((k, v) for k, v in overrides.items() if v is not None)
    return config


def parse_protocol_version(value) -> int:
    """
    Convert a protocol version given as a name (3.1, 3.1.1) or a protocol level (3, 4)
    :return: PROTOCOL_VERSION_V3_1 or PROTOCOL_VERSION_V3_1_1
    """
    try:
        return _PROTOCOL_VERSION_NAMES[str(value).strip()]
    except KeyError:
        raise ValueError("Unknown protocol version '%s'" % value)


def parse_bool(value) -> bool:
    """
    Convert a configuration flag given as a bool or as a string (true/false, yes/no, on/off, 1/0)
    """
    if isinstance(value, bool):
        return value
    name = str(value).strip().lower()
    if name in ('true', 'yes', 'on', '1'):
        return True
    if name in ('false', 'no', 'off', '0'):
        return False
    raise ValueError("Invalid boolean value '%s'" % value)
