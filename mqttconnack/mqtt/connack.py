# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import logging

from mqttconnack.mqtt.packet import (
    CONNACK, PROTOCOL_VERSION_V3_1_1, MQTTPacket, MQTTFixedHeader, MQTTVariableHeader)
from mqttconnack.codecs import int_to_bytes, read_exactly
from mqttconnack.errors import TruncatedPayloadException
from mqttconnack.adapters import ReaderAdapter

CONNECTION_ACCEPTED = 0x00
UNACCEPTABLE_PROTOCOL_VERSION = 0x01
IDENTIFIER_REJECTED = 0x02
SERVER_UNAVAILABLE = 0x03
BAD_USERNAME_PASSWORD = 0x04
NOT_AUTHORIZED = 0x05

RETURN_CODE_NAMES = {
    CONNECTION_ACCEPTED: "connection accepted",
    UNACCEPTABLE_PROTOCOL_VERSION: "unacceptable protocol version",
    IDENTIFIER_REJECTED: "identifier rejected",
    SERVER_UNAVAILABLE: "server unavailable",
    BAD_USERNAME_PASSWORD: "bad user name or password",
    NOT_AUTHORIZED: "not authorized",
}

SESSION_PRESENT_FLAG = 0x01
# acknowledge flags (3.1.1) or topic name compression response (3.1), then return code
CONNACK_VARIABLE_HEADER_LENGTH = 2

logger = logging.getLogger(__name__)


def return_code_name(return_code: int) -> str:
    return RETURN_CODE_NAMES.get(return_code, "unknown return code")


class ConnackVariableHeader(MQTTVariableHeader):

    __slots__ = ('session_present', 'return_code')

    def __init__(self, session_present=False, return_code=CONNECTION_ACCEPTED):
        super().__init__()
        self.session_present = session_present
        self.return_code = return_code

    @classmethod
    async def from_stream(cls, reader: ReaderAdapter, fixed_header: MQTTFixedHeader, protocol_version: int):
        if fixed_header.remaining_length < CONNACK_VARIABLE_HEADER_LENGTH:
            raise TruncatedPayloadException(
                "CONNACK remaining length %d is lower than %d" %
                (fixed_header.remaining_length, CONNACK_VARIABLE_HEADER_LENGTH))
        # extra bytes are consumed so the stream stays aligned on the next packet
        data = await read_exactly(reader, fixed_header.remaining_length)
        if protocol_version == PROTOCOL_VERSION_V3_1_1:
            session_present = bool(data[0] & SESSION_PRESENT_FLAG)
        else:
            session_present = False
        return_code = data[1]
        if return_code not in RETURN_CODE_NAMES:
            logger.debug("Forwarding unknown CONNACK return code %s" % hex(return_code))
        return cls(session_present, return_code)

    def to_bytes(self, protocol_version: int) -> bytes:
        # Connect acknowledge flags
        if protocol_version == PROTOCOL_VERSION_V3_1_1 and self.session_present:
            flags = SESSION_PRESENT_FLAG
        else:
            flags = 0x00
        return int_to_bytes(flags, 1) + int_to_bytes(self.return_code, 1)

    def __eq__(self, other):
        if not isinstance(other, ConnackVariableHeader):
            return NotImplemented
        return bool(self.session_present) == bool(other.session_present) and self.return_code == other.return_code

    __hash__ = None

    def __repr__(self):
        return type(self).__name__ + '(session_present={0}, return_code={1})'\
            .format(self.session_present, hex(self.return_code))


class ConnackPacket(MQTTPacket):
    VARIABLE_HEADER = ConnackVariableHeader
    PACKET_TYPE = CONNACK
    FLAG_BITS = 0x00

    @property
    def return_code(self):
        return self.variable_header.return_code

    @return_code.setter
    def return_code(self, return_code):
        self.variable_header.return_code = return_code

    @property
    def session_present(self):
        return self.variable_header.session_present

    @session_present.setter
    def session_present(self, session_present):
        self.variable_header.session_present = session_present

    def __init__(self, fixed: MQTTFixedHeader=None, variable_header: ConnackVariableHeader=None):
        if variable_header is None:
            variable_header = ConnackVariableHeader()
        super().__init__(fixed, variable_header)

    def __eq__(self, other):
        if not isinstance(other, ConnackPacket):
            return NotImplemented
        return self.fixed_header.packet_type == other.fixed_header.packet_type and \
            self.variable_header == other.variable_header

    __hash__ = None

    @classmethod
    def build(cls, session_present=False, return_code=CONNECTION_ACCEPTED):
        v_header = ConnackVariableHeader(session_present, return_code)
        packet = ConnackPacket(variable_header=v_header)
        return packet
