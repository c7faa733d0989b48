"""In-memory backends shared by the tests."""

import json

from gelf_logger import Backend, MessageCompression


class RecordingBackend(Backend):
    """Backend keeping every WireMessage and encoded payload in memory."""

    name = "recording"

    def __init__(self, compression=MessageCompression.NONE):
        super().__init__(compression=compression)
        self.wires = []
        self.payloads = []
        self.closed = False

    def log_message(self, message):
        self.wires.append(message)
        super().log_message(message)

    def send(self, payload):
        self.payloads.append(payload)

    def close(self):
        self.closed = True

    def sent_json(self):
        """Decoded GELF objects, in send order."""
        return [
            json.loads(self.compression.decompress(payload))
            for payload in self.payloads
        ]


class FailingBackend(Backend):
    """Backend whose transport always fails."""

    name = "failing"

    def __init__(self, error):
        super().__init__(compression=MessageCompression.NONE)
        self.error = error

    def send(self, payload):
        raise self.error
