# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
"""
mqtt_connack - MQTT CONNACK packet encoder/decoder

Usage:
    mqtt_connack --version
    mqtt_connack (-h | --help)
    mqtt_connack decode HEX_DATA [-c CONFIG_FILE] [-p PROTOCOL_VERSION] [-d]
    mqtt_connack encode [-r RETURN_CODE] [-s] [-c CONFIG_FILE] [-p PROTOCOL_VERSION] [-d]

Options:
    -h --help              Show this screen.
    --version              Show version.
    -c CONFIG_FILE         Configuration file (YAML format)
    -p PROTOCOL_VERSION    MQTT protocol version: 3.1 or 3.1.1 (or protocol level 3 or 4)
    -r RETURN_CODE         Return code to encode, from 0 to 255 (decimal or 0x prefixed)
    -s                     Set the session present flag
    -d                     Enable debug messages
"""

import asyncio
import logging
import os
import sys
from docopt import docopt

from mqttconnack.adapters import BufferReader
from mqttconnack.errors import MQTTException
from mqttconnack.mqtt.connack import ConnackPacket, return_code_name
from mqttconnack.utils import read_yaml_config, merge_config, parse_bool, parse_protocol_version
from mqttconnack.version import get_version

logger = logging.getLogger(__name__)

default_config = {
    'protocol_version': '3.1.1',
    'session_present': False,
    'return_code': 0,
}


def _load_config(arguments):
    if arguments['-c']:
        config = read_yaml_config(arguments['-c'])
    else:
        config = read_yaml_config(os.path.join(os.path.dirname(os.path.realpath(__file__)), 'default_connack.yaml'))
        logger.debug("Using default configuration")
    config = merge_config(default_config, config)
    return merge_config(config, {
        'protocol_version': arguments['-p'],
        'return_code': arguments['-r'],
        'session_present': True if arguments['-s'] else None,
    })


def _decode(hex_data, protocol_version):
    data = bytes.fromhex(hex_data)
    loop = asyncio.new_event_loop()
    try:
        packet = loop.run_until_complete(ConnackPacket.from_stream(BufferReader(data), protocol_version))
    finally:
        loop.close()
    print("session_present=%s return_code=%s (%s)" %
          (packet.session_present, format(packet.return_code, '#04x'), return_code_name(packet.return_code)))


def _encode(config, protocol_version):
    return_code = config['return_code']
    if isinstance(return_code, str):
        return_code = int(return_code, 0)
    packet = ConnackPacket.build(parse_bool(config['session_present']), return_code)
    print(packet.to_bytes(protocol_version).hex())


def main(argv=None):
    arguments = docopt(__doc__, argv=argv, version=get_version())
    formatter = "[%(asctime)s] :: %(levelname)s - %(message)s"

    if arguments['-d']:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=formatter)

    try:
        config = _load_config(arguments)
        protocol_version = parse_protocol_version(config['protocol_version'])
        if arguments['decode']:
            _decode(arguments['HEX_DATA'], protocol_version)
        else:
            _encode(config, protocol_version)
    except OSError as oe:
        logger.error("Can't read configuration: %s" % oe)
        return 1
    except ValueError as ve:
        logger.error("Invalid argument: %s" % ve)
        return 1
    except MQTTException as me:
        logger.error("CONNACK codec error: %r" % me)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
