# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.


class MQTTConnackException(Exception):
    """
    mqttconnack base exception
    """
    pass


class MQTTException(Exception):
    """
    Base class for all errors refering to MQTT specifications
    """
    pass


class CodecException(MQTTException):
    """
    Exceptions thrown by packet encode/decode functions
    """
    pass


class NoDataException(CodecException):
    """
    Exceptions thrown when a stream gives no more data
    """
    pass


class TruncatedPayloadException(NoDataException):
    """
    Stream ended before the announced number of bytes could be read
    """
    pass


class MalformedFixedHeaderException(CodecException):
    """
    Fixed header byte doesn't match the packet type or its reserved flag bits
    """
    pass


class VariableLengthOverflowException(CodecException):
    """
    Remaining length continuation bit still set after 4 bytes
    """
    pass
