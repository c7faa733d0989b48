"""
MQTT Backend
============

Bounded Context: GELF over MQTT

Publishes each encoded GELF payload to an MQTT topic, for deployments where
a bridge (or a Graylog MQTT input plugin) moves messages from the broker into
Graylog.

Design:
- Connection management (connect, disconnect)
- QoS 0 (fire-and-forget) by default
- Thread-safe (paho-mqtt network loop + threading.Event)
- Structured diagnostics for connection events
"""

import threading
from typing import Any, Optional

import paho.mqtt.client as mqtt

from ..compression import MessageCompression
from ..errors import TransportError
from ..logging import LogEvent, StructuredLogger
from .base import Backend


class MqttBackend(Backend):
    """
    GELF backend publishing to an MQTT broker.

    Attributes:
        broker_host: MQTT broker hostname
        broker_port: MQTT broker port
        topic: Topic receiving GELF payloads
        client_id: MQTT client identifier
        qos: Quality of Service (default: 0)

    Thread Safety:
        Thread-safe via paho-mqtt's loop_start() and threading.Event

    Example:
        >>> backend = MqttBackend(broker_host="localhost", topic="logs/gelf")
        >>> backend.connect()
        >>> logger = Logger(backend, "edge-07")
    """

    name = "mqtt"

    def __init__(
        self,
        broker_host: str,
        topic: str,
        broker_port: int = 1883,
        client_id: str = "gelf_logger",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0,
        compression: MessageCompression = MessageCompression.default(),
        logger: Optional[StructuredLogger] = None
    ):
        """
        Initialize MQTT backend.

        Args:
            broker_host: MQTT broker hostname
            topic: Topic to publish GELF payloads to
            broker_port: MQTT broker port (default: 1883)
            client_id: Unique client identifier
            username: MQTT authentication username (optional)
            password: MQTT authentication password (optional)
            qos: Quality of Service (0, 1 or 2)
            compression: Payload compression (default: gzip)
            logger: Structured logger for diagnostics
        """
        super().__init__(compression=compression, logger=logger)
        if qos not in {0, 1, 2}:
            raise ValueError(f"MQTT QoS must be 0, 1, or 2, got {qos}")

        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic = topic
        self.client_id = client_id
        self.qos = qos

        self.client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id)
        if username and password:
            self.client.username_pw_set(username, password)

        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect

        self._connected = threading.Event()

    @property
    def broker(self) -> str:
        return f"{self.broker_host}:{self.broker_port}"

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: Any,
        flags: Any,
        reason_code: Any,
        properties: Any = None
    ) -> None:
        if not reason_code.is_failure:
            self._connected.set()
            self.logger.info(
                event=LogEvent.BACKEND_CONNECTED,
                message="Connected to MQTT broker",
                metadata={
                    'broker': self.broker,
                    'client_id': self.client_id,
                    'topic': self.topic
                }
            )
        else:
            self.logger.error(
                event=LogEvent.CONNECTION_ERROR,
                message=f"Failed to connect to broker ({reason_code})",
                metadata={'broker': self.broker}
            )

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: Any,
        flags: Any,
        reason_code: Any,
        properties: Any = None
    ) -> None:
        self._connected.clear()
        self.logger.warning(
            event=LogEvent.BACKEND_DISCONNECTED,
            message="Disconnected from MQTT broker",
            metadata={'broker': self.broker, 'reason_code': str(reason_code)}
        )

    def connect(self, timeout: float = 10.0) -> bool:
        """
        Connect to the MQTT broker and start the network loop.

        Returns:
            True if connected within timeout, False otherwise
        """
        try:
            self.client.connect(self.broker_host, self.broker_port)
            self.client.loop_start()
        except OSError as e:
            self.logger.error(
                event=LogEvent.CONNECTION_ERROR,
                message="Failed to connect to broker",
                exc_info=e,
                metadata={'broker': self.broker}
            )
            return False

        if self._connected.wait(timeout=timeout):
            return True

        self.logger.error(
            event=LogEvent.CONNECTION_ERROR,
            message="Connection timeout",
            metadata={'broker': self.broker, 'timeout': timeout}
        )
        return False

    def disconnect(self) -> None:
        """Stop the network loop and disconnect gracefully."""
        self.client.loop_stop()
        self.client.disconnect()
        self._connected.clear()

    def close(self) -> None:
        self.disconnect()

    def is_connected(self) -> bool:
        """Check if currently connected to broker."""
        return self._connected.is_set()

    def send(self, payload: bytes) -> None:
        if not self._connected.is_set():
            raise TransportError(f"Not connected to broker {self.broker}", self.name)

        result = self.client.publish(
            topic=self.topic,
            payload=payload,
            qos=self.qos,
            retain=False
        )
        if result.rc != mqtt.MQTT_ERR_SUCCESS:
            self.logger.warning(
                event=LogEvent.BACKEND_SEND_FAILED,
                message=f"Publish failed (rc={result.rc})",
                metadata={'topic': self.topic}
            )
            raise TransportError(f"Publish to '{self.topic}' failed (rc={result.rc})", self.name)
