"""Wake-on-LAN functionality.

PACKET STRUCTURE:

    OFS  BYTES  DESCRIPTION
    0    6      Synchronization stream (0xFF x 6)
    6    96     Target MAC repeated 16 times
"""

import logging
import re
import socket
from dataclasses import dataclass

from woa.core.errors import AddressParseError, SendError

logger = logging.getLogger(__name__)

BROADCAST_IP = "255.255.255.255"
DEFAULT_PORT = 9

SYNC_STREAM = b"\xff" * 6
MAC_REPEAT = 16
PACKET_SIZE = len(SYNC_STREAM) + 6 * MAC_REPEAT

# Either all colons or all hyphens, never mixed.
_MAC_RE = re.compile(r"^[0-9A-Fa-f]{2}([:\-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$")


@dataclass(frozen=True)
class HardwareAddress:
    """A 6-octet link-layer address."""

    octets: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.octets, bytes):
            raise AddressParseError(self.octets, "hardware address must be bytes")
        if len(self.octets) != 6:
            raise AddressParseError(
                self.octets.hex(), f"hardware address must be 6 bytes, got {len(self.octets)}"
            )

    @classmethod
    def parse(cls, text: str) -> "HardwareAddress":
        """
        Parse colon- or hyphen-delimited MAC notation.

        Args:
            text: MAC address, e.g. "AA:BB:CC:DD:EE:FF" or "aa-bb-cc-dd-ee-ff"

        Raises:
            AddressParseError: If text is not exactly 6 hex octets
        """
        if not isinstance(text, str):
            raise AddressParseError(text)
        value = text.strip()
        if not _MAC_RE.match(value):
            raise AddressParseError(text)
        return cls(bytes.fromhex(value.replace(value[2], "")))

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.octets)


def build_magic_packet(address: HardwareAddress) -> bytes:
    """Return the 102-byte magic packet for ``address``."""
    return SYNC_STREAM + address.octets * MAC_REPEAT


def broadcast(payload: bytes, ip_address: str = BROADCAST_IP, port: int = DEFAULT_PORT) -> None:
    """
    Send a magic packet as a single UDP broadcast datagram.

    Args:
        payload: Packet from build_magic_packet()
        ip_address: Broadcast IP address (default: 255.255.255.255)
        port: UDP port for WOL packet (default: 9)

    Raises:
        SendError: If the socket cannot be opened or the send fails
    """
    if len(payload) != PACKET_SIZE:
        raise ValueError(f"magic packet must be {PACKET_SIZE} bytes, got {len(payload)}")
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.sendto(payload, (ip_address, port))
    except OSError as exc:
        raise SendError(f"failed to send magic packet to {ip_address}:{port}: {exc}") from exc


def wake(
    mac_address: str, ip_address: str = BROADCAST_IP, port: int = DEFAULT_PORT
) -> HardwareAddress:
    """
    Send a Wake-on-LAN magic packet to wake a remote machine.

    Args:
        mac_address: MAC address of the target machine (e.g., "AA:BB:CC:DD:EE:FF")
        ip_address: Broadcast IP address (default: 255.255.255.255)
        port: UDP port for WOL packet (default: 9)

    Returns:
        The parsed hardware address the packet was built for
    """
    address = HardwareAddress.parse(mac_address)
    logger.info("Sending WOL magic packet to %s via %s:%d", address, ip_address, port)
    broadcast(build_magic_packet(address), ip_address=ip_address, port=port)
    logger.debug("WOL packet sent successfully")
    return address
