# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
from mqttconnack.mqtt.packet import (
    CONNACK, PROTOCOL_VERSION_V3_1, PROTOCOL_VERSION_V3_1_1, MQTTFixedHeader)
from mqttconnack.mqtt.connack import (
    ConnackPacket, ConnackVariableHeader,
    CONNECTION_ACCEPTED, UNACCEPTABLE_PROTOCOL_VERSION, IDENTIFIER_REJECTED,
    SERVER_UNAVAILABLE, BAD_USERNAME_PASSWORD, NOT_AUTHORIZED)
