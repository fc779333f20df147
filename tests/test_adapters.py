# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.
import unittest
import asyncio

from websockets.exceptions import ConnectionClosed

from mqttconnack.adapters import (
    BufferReader, BufferWriter, StreamReaderAdapter, StreamWriterAdapter, WebSocketsReader, WebSocketsWriter)


class ClosedConnection(ConnectionClosed):
    def __init__(self):
        Exception.__init__(self, "connection closed")


class FakeWebSocket:
    def __init__(self, messages, closed_exc=None):
        self.messages = list(messages)
        self.closed_exc = closed_exc

    async def recv(self):
        if self.messages:
            return self.messages.pop(0)
        if self.closed_exc:
            raise self.closed_exc
        return None


class FakeWebSocketSender:
    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(message)


class FakeStreamWriter:
    def __init__(self):
        self.data = bytearray()
        self.drained = False

    def write(self, data):
        self.data.extend(data)

    async def drain(self):
        self.drained = True


class TestBufferAdapters(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()

    def tearDown(self):
        self.loop.close()

    def test_buffer_reader(self):
        reader = BufferReader(b'\x20\x02\x00\x00')
        self.assertEqual(self.loop.run_until_complete(reader.read(1)), b'\x20')
        self.assertEqual(self.loop.run_until_complete(reader.read()), b'\x02\x00\x00')
        self.assertEqual(self.loop.run_until_complete(reader.read(1)), b'')

    def test_buffer_writer(self):
        writer = BufferWriter()
        writer.write(b'\x20\x02')
        writer.write(b'\x00\x00')
        self.loop.run_until_complete(writer.drain())
        self.assertEqual(writer.get_buffer(), b'\x20\x02\x00\x00')


class TestStreamAdapters(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()

    def tearDown(self):
        self.loop.close()

    def test_stream_reader_adapter(self):
        async def read():
            stream = asyncio.StreamReader()
            stream.feed_data(b'\x20\x02\x01\x05')
            stream.feed_eof()
            reader = StreamReaderAdapter(stream)
            first = await reader.read(2)
            rest = await reader.read()
            return first, rest

        first, rest = self.loop.run_until_complete(read())
        self.assertEqual(first, b'\x20\x02')
        self.assertEqual(rest, b'\x01\x05')

    def test_stream_reader_adapter_incomplete(self):
        async def read():
            stream = asyncio.StreamReader()
            stream.feed_data(b'\x20')
            stream.feed_eof()
            return await StreamReaderAdapter(stream).read(2)

        with self.assertRaises(asyncio.IncompleteReadError):
            self.loop.run_until_complete(read())

    def test_stream_writer_adapter(self):
        stream = FakeStreamWriter()
        writer = StreamWriterAdapter(stream)
        writer.write(b'\x20\x02\x00\x00')
        self.loop.run_until_complete(writer.drain())
        self.assertEqual(bytes(stream.data), b'\x20\x02\x00\x00')
        self.assertTrue(stream.drained)


class TestWebSocketsReader(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()

    def tearDown(self):
        self.loop.close()

    def test_read_across_messages(self):
        reader = WebSocketsReader(FakeWebSocket([b'\x20', b'\x02\x01', b'\x00']))
        self.assertEqual(self.loop.run_until_complete(reader.read(1)), b'\x20')
        self.assertEqual(self.loop.run_until_complete(reader.read(3)), b'\x02\x01\x00')

    def test_read_keeps_buffered_data(self):
        reader = WebSocketsReader(FakeWebSocket([b'\x20\x02\x01\x00']))
        self.assertEqual(self.loop.run_until_complete(reader.read(2)), b'\x20\x02')
        self.assertEqual(self.loop.run_until_complete(reader.read(2)), b'\x01\x00')

    def test_read_connection_closed(self):
        reader = WebSocketsReader(FakeWebSocket([b'\x20'], ClosedConnection()))
        self.assertEqual(self.loop.run_until_complete(reader.read(2)), b'\x20')

    def test_read_text_message(self):
        reader = WebSocketsReader(FakeWebSocket(['text']))
        with self.assertRaises(TypeError):
            self.loop.run_until_complete(reader.read(1))


class TestWebSocketsWriter(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()

    def tearDown(self):
        self.loop.close()

    def test_drain_sends_one_message(self):
        protocol = FakeWebSocketSender()
        writer = WebSocketsWriter(protocol)
        writer.write(b'\x20\x02')
        writer.write(b'\x01\x00')
        self.loop.run_until_complete(writer.drain())
        self.assertEqual(protocol.sent, [b'\x20\x02\x01\x00'])

    def test_drain_resets_buffer(self):
        protocol = FakeWebSocketSender()
        writer = WebSocketsWriter(protocol)
        writer.write(b'\x20\x02\x00\x00')
        self.loop.run_until_complete(writer.drain())
        self.loop.run_until_complete(writer.drain())
        writer.write(b'\x20\x02\x00\x05')
        self.loop.run_until_complete(writer.drain())
        self.assertEqual(protocol.sent, [b'\x20\x02\x00\x00', b'\x20\x02\x00\x05'])

    def test_drain_empty(self):
        protocol = FakeWebSocketSender()
        self.loop.run_until_complete(WebSocketsWriter(protocol).drain())
        self.assertEqual(protocol.sent, [])
