"""
Listener for unsolicited CoIoT status announcements.

Devices multicast their compact status to ``224.0.1.187:5683`` using the
non-standard CoAP code 0.30. The observer joins that group, drops every
other message, and turns each announcement into correlated readings using
the sending device's descriptor.
"""
from __future__ import annotations

import logging
import socket
import struct
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from coiotlink.core.errors import DecodeError, ReceiveTimeoutError, TransportError
from coiotlink.domain.cache import DescriptorCache
from coiotlink.domain.response import Response
from coiotlink.observer_app.config import CoIoTSettings
from coiotlink.observer_app.logging import create_logger, log_event
from coiotlink.parsing.descriptor import Descriptor
from coiotlink.parsing.identity import DeviceIdentity
from coiotlink.parsing.readings import AnyReading, correlate_all
from coiotlink.parsing.status import Status
from coiotlink.transports.coap import CoapTransport

MAX_DATAGRAM = 65535

DescriptorFetcher = Callable[[str], Descriptor]
SocketFactory = Callable[..., Any]


class ObserverState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    FILTERING = "filtering"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Announcement:
    """
    One processed status push.

    Attributes:
        sender: ``(host, port)`` the datagram came from.
        identity: Parsed device id, or ``None`` when absent or malformed.
        sequence: Announcement serial, for consumer-side deduplication.
        validity: How long the announced values stay valid.
        status: The decoded status stream.
        readings: Status entries joined with the device descriptor.
    """
    sender: tuple[str, int]
    identity: Optional[DeviceIdentity]
    sequence: Optional[int]
    validity: Optional[timedelta]
    status: Status
    readings: list[AnyReading] = field(default_factory=list)


class MulticastObserver:
    """
    Blocking, single-threaded multicast listener.

    ``announcements()`` yields one ``Announcement`` per accepted packet in
    receipt order. A receive timeout or a socket failure ends the loop with
    a ``TransportError``; malformed packets and failed descriptor fetches are
    logged and skipped. ``stop()`` may be called from another thread.
    """

    def __init__(
        self,
        settings: CoIoTSettings,
        fetch_descriptor: Optional[DescriptorFetcher] = None,
        cache: Optional[DescriptorCache] = None,
        logger: Optional[logging.Logger] = None,
        socket_factory: SocketFactory = socket.socket,
    ) -> None:
        self.settings = settings
        self.logger = logger or create_logger("coiotlink.observer", settings.log_ring_size)
        self.cache = cache if cache is not None else (DescriptorCache() if settings.cache_descriptors else None)
        self.state = ObserverState.IDLE
        self._fetch = fetch_descriptor or self._fetch_over_coap
        self._socket_factory = socket_factory
        self._sock: Any = None
        self._stopping = False

    # ---- helpers ----
    def _fetch_over_coap(self, host: str) -> Descriptor:
        transport = CoapTransport(host, port=self.settings.coap_port, timeout=self.settings.request_timeout)
        return transport.get_descriptor()

    def _log(self, event: str, details: Optional[dict] = None, level: int = logging.INFO) -> None:
        log_event(self.logger, event, details, level)

    # ---- socket lifecycle ----
    def open(self) -> None:
        group = self.settings.multicast_group
        interface = self.settings.listen_interface
        port = self.settings.multicast_port
        sock = self._socket_factory(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((interface, port))
            membership = struct.pack("4s4s", socket.inet_aton(group), socket.inet_aton(interface))
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership)
            sock.settimeout(self.settings.receive_timeout)
        except OSError as exc:
            sock.close()
            self.state = ObserverState.STOPPED
            raise TransportError(f"Could not join {group}:{port} on {interface}: {exc}") from exc
        self._sock = sock
        self._stopping = False
        self.state = ObserverState.LISTENING
        self._log("multicast_joined", {"group": group, "port": port, "interface": interface})

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        self.state = ObserverState.STOPPED

    def stop(self) -> None:
        """Ask a running loop to end; wakes a blocked receive where the OS allows it."""
        self._stopping = True
        sock = self._sock
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as exc:
            # unconnected UDP sockets may refuse shutdown; the receive timeout still bounds the wait
            self._log("socket_shutdown_failed", {"error": str(exc)}, logging.DEBUG)

    def __enter__(self) -> "MulticastObserver":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---- loop ----
    def announcements(self) -> Iterator[Announcement]:
        if self._sock is None:
            self.open()
        try:
            while not self._stopping:
                self.state = ObserverState.LISTENING
                try:
                    data, sender = self._sock.recvfrom(MAX_DATAGRAM)
                except socket.timeout as exc:
                    if self._stopping:
                        break
                    self._log("receive_timeout", {"timeout": self.settings.receive_timeout}, logging.WARNING)
                    raise ReceiveTimeoutError(
                        f"No datagram within {self.settings.receive_timeout}s"
                    ) from exc
                except OSError as exc:
                    if self._stopping:
                        break
                    raise TransportError(f"Receive failed: {exc}") from exc
                if self._stopping:
                    break
                self.state = ObserverState.FILTERING
                announcement = self.handle_datagram(data, sender)
                if announcement is not None:
                    yield announcement
        finally:
            self.close()

    def handle_datagram(self, data: bytes, sender: tuple[str, int]) -> Optional[Announcement]:
        """Decode and filter one datagram; ``None`` when it is skipped."""
        try:
            response = Response.from_datagram(data, sender)
        except DecodeError as exc:
            self._log("packet_malformed", {"sender": sender, "error": str(exc), "payload": data}, logging.WARNING)
            return None
        if not response.is_status_push:
            self._log("packet_ignored", {"sender": sender, "code": response.code}, logging.DEBUG)
            return None
        return self._process(response, sender)

    def _process(self, response: Response, sender: tuple[str, int]) -> Optional[Announcement]:
        try:
            identity = response.identity
        except DecodeError as exc:
            self._log("identity_malformed", {"sender": sender, "error": str(exc)}, logging.WARNING)
            identity = None

        try:
            status = response.decode_status()
        except DecodeError as exc:
            self._log("status_malformed", {"sender": sender, "error": str(exc)}, logging.WARNING)
            return None

        descriptor = self._descriptor_for(sender[0], identity)
        if descriptor is None:
            return None

        announcement = Announcement(
            sender=sender,
            identity=identity,
            sequence=response.msg_seq_no,
            validity=response.validity_duration,
            status=status,
            readings=correlate_all(status.entries, descriptor),
        )
        self._log(
            "announcement",
            {
                "sender": sender,
                "device": str(identity) if identity else None,
                "sequence": announcement.sequence,
                "entries": len(status.entries),
            },
        )
        return announcement

    def _descriptor_for(self, host: str, identity: Optional[DeviceIdentity]) -> Optional[Descriptor]:
        use_cache = self.cache is not None and identity is not None
        if use_cache:
            cached = self.cache.get(identity)
            if cached is not None:
                return cached
        try:
            descriptor = self._fetch(host)
        except (TransportError, DecodeError) as exc:
            if use_cache:
                self.cache.invalidate(identity.device_serial)
            self._log("descriptor_fetch_failed", {"host": host, "error": str(exc)}, logging.WARNING)
            return None
        if use_cache:
            self.cache.put(identity, descriptor)
        return descriptor
