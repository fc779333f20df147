# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import logging
from datetime import datetime

from mqttconnack.codecs import bytes_to_int, decode_remaining_length, encode_remaining_length, read_or_raise
from mqttconnack.errors import CodecException, MalformedFixedHeaderException, MQTTConnackException
from mqttconnack.adapters import ReaderAdapter, WriterAdapter


RESERVED_0 = 0x00
CONNECT = 0x01
CONNACK = 0x02
PUBLISH = 0x03
PUBACK = 0x04
PUBREC = 0x05
PUBREL = 0x06
PUBCOMP = 0x07
SUBSCRIBE = 0x08
SUBACK = 0x09
UNSUBSCRIBE = 0x0a
UNSUBACK = 0x0b
PINGREQ = 0x0c
PINGRESP = 0x0d
DISCONNECT = 0x0e
RESERVED_15 = 0x0f

# Protocol level byte sent in CONNECT
PROTOCOL_VERSION_V3_1 = 0x03
PROTOCOL_VERSION_V3_1_1 = 0x04
PROTOCOL_VERSIONS = (PROTOCOL_VERSION_V3_1, PROTOCOL_VERSION_V3_1_1)

PACKET_TYPE_OFFSET = 4
FLAG_BITS_MASK = 0x0f

logger = logging.getLogger(__name__)


def check_protocol_version(protocol_version):
    if protocol_version not in PROTOCOL_VERSIONS:
        raise CodecException("Unsupported protocol version: %r" % protocol_version)


class MQTTFixedHeader:

    __slots__ = ('packet_type', 'remaining_length', 'flags')

    def __init__(self, packet_type, flags=0, length=0):
        self.packet_type = packet_type
        self.remaining_length = length
        self.flags = flags

    def to_bytes(self) -> bytes:
        out = bytearray()
        packet_type = (self.packet_type << PACKET_TYPE_OFFSET) | self.flags
        if packet_type > 0xff:
            raise CodecException('packet_type encoding exceed 1 byte length: value=%d' % packet_type)
        out.append(packet_type)
        out.extend(encode_remaining_length(self.remaining_length))
        return bytes(out)

    @staticmethod
    def split_first_byte(first_byte: int):
        """
        Split the first fixed header byte
        :return: tuple (packet type, flags)
        """
        return (first_byte & 0xf0) >> PACKET_TYPE_OFFSET, first_byte & FLAG_BITS_MASK

    @classmethod
    async def from_first_byte(cls, first_byte: int, reader: ReaderAdapter):
        """
        Build a fixed header from its already read first byte, decoding the remaining length from stream
        :return: FixedHeader instance
        """
        packet_type, flags = cls.split_first_byte(first_byte)
        remaining_length, _ = await decode_remaining_length(reader)
        return cls(packet_type, flags, remaining_length)

    def __repr__(self):
        return type(self).__name__ + '(length={0}, flags={1})'.\
            format(self.remaining_length, hex(self.flags))


class MQTTVariableHeader:

    def to_bytes(self, protocol_version: int) -> bytes:
        """
        Serialize header data to a byte array conforming to MQTT protocol
        :return: serialized data
        """
        raise NotImplementedError

    @classmethod
    async def from_stream(cls, reader: ReaderAdapter, fixed_header: MQTTFixedHeader, protocol_version: int):
        raise NotImplementedError


class MQTTPacket:
    """
    Base class of packets made of a fixed header and a variable header.

    Subclasses set PACKET_TYPE, VARIABLE_HEADER and FLAG_BITS, the fixed header flags required since MQTT 3.1.1.
    """

    __slots__ = ('fixed_header', 'variable_header', 'protocol_ts')

    FIXED_HEADER = MQTTFixedHeader
    VARIABLE_HEADER = None
    PACKET_TYPE = None
    FLAG_BITS = 0x00

    def __init__(self, fixed: MQTTFixedHeader=None, variable_header: MQTTVariableHeader=None):
        if fixed is None:
            fixed = self.FIXED_HEADER(self.PACKET_TYPE, self.FLAG_BITS)
        elif fixed.packet_type != self.PACKET_TYPE:
            raise MQTTConnackException(
                "Invalid fixed packet type %s for %s init" % (fixed.packet_type, type(self).__name__))
        self.fixed_header = fixed
        self.variable_header = variable_header
        self.protocol_ts = None

    @classmethod
    def check_first_byte(cls, first_byte: int, protocol_version: int):
        packet_type, flags = cls.FIXED_HEADER.split_first_byte(first_byte)
        if packet_type != cls.PACKET_TYPE:
            raise MalformedFixedHeaderException(
                "Invalid packet type %d for %s" % (packet_type, cls.__name__))
        # [MQTT-2.2.2-2] 3.1 left these flags unspecified
        if protocol_version == PROTOCOL_VERSION_V3_1_1 and flags != cls.FLAG_BITS:
            raise MalformedFixedHeaderException(
                "[MQTT-2.2.2-2] Invalid flag bits %s for %s" % (hex(flags), cls.__name__))

    @classmethod
    async def parse(cls, first_byte: int, protocol_version: int, reader: ReaderAdapter):
        """
        Decode a packet whose first fixed header byte has already been read
        :param first_byte: first fixed header byte
        :param protocol_version: PROTOCOL_VERSION_V3_1 or PROTOCOL_VERSION_V3_1_1
        :param reader: stream to read the remaining length and variable header from
        :return: packet instance
        """
        check_protocol_version(protocol_version)
        cls.check_first_byte(first_byte, protocol_version)
        fixed_header = await cls.FIXED_HEADER.from_first_byte(first_byte, reader)
        variable_header = None
        if cls.VARIABLE_HEADER:
            variable_header = await cls.VARIABLE_HEADER.from_stream(reader, fixed_header, protocol_version)
        instance = cls(fixed_header, variable_header)
        instance.protocol_ts = datetime.now()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("<-in-- %r" % instance)
        return instance

    @classmethod
    async def from_stream(cls, reader: ReaderAdapter, protocol_version: int=PROTOCOL_VERSION_V3_1_1):
        first_byte = await read_or_raise(reader, 1)
        return await cls.parse(bytes_to_int(first_byte), protocol_version, reader)

    def to_bytes(self, protocol_version: int=PROTOCOL_VERSION_V3_1_1) -> bytes:
        check_protocol_version(protocol_version)
        if self.variable_header:
            variable_header_bytes = self.variable_header.to_bytes(protocol_version)
        else:
            variable_header_bytes = b''

        if protocol_version == PROTOCOL_VERSION_V3_1_1:
            flags = self.FLAG_BITS
        else:
            flags = 0x00
        fixed_header = self.FIXED_HEADER(self.fixed_header.packet_type, flags, len(variable_header_bytes))

        return fixed_header.to_bytes() + variable_header_bytes

    async def to_stream(self, writer: WriterAdapter, protocol_version: int=PROTOCOL_VERSION_V3_1_1):
        writer.write(self.to_bytes(protocol_version))
        await writer.drain()
        self.protocol_ts = datetime.now()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("-out-> %r" % self)

    def __repr__(self):
        return type(self).__name__ + '(ts={0!s}, fixed={1!r}, variable={2!r})'.\
            format(self.protocol_ts, self.fixed_header, self.variable_header)
