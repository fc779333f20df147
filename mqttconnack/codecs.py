# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import asyncio
from struct import pack, error as struct_error
from mqttconnack.errors import (
    CodecException, NoDataException, TruncatedPayloadException, VariableLengthOverflowException)

# 4 bytes of 7 bits each
MAX_REMAINING_LENGTH = 268435455
MAX_REMAINING_LENGTH_BYTES = 4


def bytes_to_hex_str(data):
    """
    converts a sequence of bytes into its displayable hex representation, ie: 0x??????
    :param data: byte sequence
    :return: Hexadecimal displayable representation
    """
    return '0x' + ''.join(format(b, '02x') for b in data)


def bytes_to_int(data):
    """
    convert a sequence of bytes to an integer using big endian byte ordering
    :param data: byte sequence
    :return: integer value
    """
    return int.from_bytes(data, byteorder='big')


def int_to_bytes(int_value: int, length: int) -> bytes:
    """
    convert an integer to a sequence of bytes using big endian byte ordering
    :param int_value: integer value to convert
    :param length: byte length (1 or 2)
    :return: byte sequence
    """
    if length == 1:
        fmt = "!B"
    elif length == 2:
        fmt = "!H"
    else:
        raise CodecException("Unsupported integer length: %d" % length)
    try:
        return pack(fmt, int_value)
    except struct_error:
        raise CodecException("Value %r doesn't fit in %d byte(s)" % (int_value, length))


async def read_or_raise(reader, n=-1):
    """
    Read a given byte number from Stream. NoDataException is raised if read gives no data
    :param reader: reader adapter
    :param n: number of bytes to read
    :return: bytes read
    """
    data = await reader.read(n)
    if not data:
        raise NoDataException("No more data")
    return data


async def read_exactly(reader, n: int) -> bytes:
    """
    Read exactly n bytes from a reader adapter.
    TruncatedPayloadException is raised if the stream ends before n bytes are available
    :param reader: reader adapter
    :param n: number of bytes to read
    :return: bytes read
    """
    try:
        data = await reader.read(n)
    except asyncio.IncompleteReadError as e:
        data = e.partial
    if len(data) < n:
        raise TruncatedPayloadException(
            "Expected %d bytes, stream ended after %d: %s" % (n, len(data), bytes_to_hex_str(data)))
    return data


def encode_remaining_length(length: int) -> bytes:
    """
    Encode a remaining length value according to MQTT specifications (2.2.3)
    :param length: value to encode, from 0 to MAX_REMAINING_LENGTH
    :return: 1 to 4 bytes
    """
    if length < 0 or length > MAX_REMAINING_LENGTH:
        raise CodecException("Remaining length out of range: %d" % length)
    encoded = bytearray()
    while True:
        length_byte = length % 0x80
        length //= 0x80
        if length > 0:
            length_byte |= 0x80
        encoded.append(length_byte)
        if length <= 0:
            break
    return bytes(encoded)


async def decode_remaining_length(reader):
    """
    Decode a remaining length value according to MQTT specifications (2.2.3)
    :param reader: reader adapter
    :return: tuple (decoded value, number of bytes read)
    """
    multiplier = 1
    value = 0
    buffer = bytearray()
    while True:
        encoded_byte = await read_exactly(reader, 1)
        buffer.append(encoded_byte[0])
        value += (encoded_byte[0] & 0x7f) * multiplier
        if (encoded_byte[0] & 0x80) == 0:
            break
        if len(buffer) >= MAX_REMAINING_LENGTH_BYTES:
            raise VariableLengthOverflowException(
                "Invalid remaining length bytes:%s" % bytes_to_hex_str(buffer))
        multiplier *= 128
    return value, len(buffer)
