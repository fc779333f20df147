# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import io
from asyncio import StreamReader, StreamWriter
from websockets.exceptions import ConnectionClosed


class ReaderAdapter:
    """
    Byte source packets are decoded from.

    Codecs only rely on read(n): a sized read suspends until n bytes are available and returns less (possibly
    nothing) only when the underlying channel is closed.
    """

    async def read(self, n=-1) -> bytes:
        """
        Read up to n bytes. If n is not provided, or set to -1, read until EOF and return all read bytes.
        If the EOF was received and the internal buffer is empty, return an empty bytes object.
        :return: packet read as bytes data
        """
        raise NotImplementedError


class WriterAdapter:
    """
    Byte sink serialized packets are written to.
    """

    def write(self, data):
        """
        write some data to the protocol layer
        """
        raise NotImplementedError

    async def drain(self):
        """
        Let the write buffer of the underlying transport a chance to be flushed.
        """


class WebSocketsReader(ReaderAdapter):
    """
    Reader adapter for MQTT over WebSockets.

    Binary messages received from a websockets connection are concatenated until the requested size is
    available. A closed connection ends the stream.
    """
    def __init__(self, protocol):
        self._protocol = protocol
        self._stream = io.BytesIO(b'')

    async def read(self, n=-1) -> bytes:
        await self._feed_buffer(n)
        return self._stream.read(n)

    async def _feed_buffer(self, n=1):
        buffer = bytearray(self._stream.read())
        while len(buffer) < n:
            try:
                message = await self._protocol.recv()
            except ConnectionClosed:
                message = None
            if message is None:
                break
            if not isinstance(message, bytes):
                raise TypeError("message must be bytes")
            buffer.extend(message)
        self._stream = io.BytesIO(buffer)


class WebSocketsWriter(WriterAdapter):
    """
    Writer adapter for MQTT over WebSockets.

    Written data is buffered and sent as a single binary message on drain.
    """
    def __init__(self, protocol):
        self._protocol = protocol
        self._stream = io.BytesIO(b'')

    def write(self, data):
        self._stream.write(data)

    async def drain(self):
        data = self._stream.getvalue()
        if len(data):
            await self._protocol.send(data)
        self._stream = io.BytesIO(b'')


class StreamReaderAdapter(ReaderAdapter):
    """
    Asyncio Streams API reader adapter, for MQTT over TCP.
    """
    def __init__(self, reader: StreamReader):
        self._reader = reader

    async def read(self, n=-1) -> bytes:
        if n == -1:
            data = await self._reader.read(n)
        else:
            # raises IncompleteReadError (carrying the partial data) on EOF
            data = await self._reader.readexactly(n)
        return data


class StreamWriterAdapter(WriterAdapter):
    """
    Asyncio Streams API writer adapter, for MQTT over TCP.
    """
    def __init__(self, writer: StreamWriter):
        self._writer = writer

    def write(self, data):
        self._writer.write(data)

    async def drain(self):
        await self._writer.drain()


class BufferReader(ReaderAdapter):
    """
    In-memory byte source
    """
    def __init__(self, buffer: bytes):
        self._stream = io.BytesIO(buffer)

    async def read(self, n=-1) -> bytes:
        return self._stream.read(n)


class BufferWriter(WriterAdapter):
    """
    In-memory byte sink
    """
    def __init__(self, buffer=b''):
        self._stream = io.BytesIO(buffer)

    def write(self, data):
        self._stream.write(data)

    def get_buffer(self):
        return self._stream.getvalue()
