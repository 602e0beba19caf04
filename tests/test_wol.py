"""Tests for Wake-on-LAN functionality."""

from unittest.mock import MagicMock, patch

import pytest
from wakeonlan import create_magic_packet

from woa.core.errors import AddressParseError, SendError
from woa.core.wol import HardwareAddress, broadcast, build_magic_packet, wake


class TestHardwareAddress:
    """Tests for MAC parsing."""

    def test_parse_colon_notation(self) -> None:
        addr = HardwareAddress.parse("AA:BB:CC:DD:EE:FF")
        assert addr.octets == bytes.fromhex("aabbccddeeff")

    def test_parse_hyphen_notation(self) -> None:
        addr = HardwareAddress.parse("aa-bb-cc-dd-ee-ff")
        assert addr.octets == bytes.fromhex("aabbccddeeff")

    def test_parse_strips_whitespace(self) -> None:
        assert HardwareAddress.parse("  01:02:03:04:05:06\n").octets == bytes(range(1, 7))

    def test_str_is_lowercase_colon(self) -> None:
        assert str(HardwareAddress.parse("AA-BB-CC-DD-EE-0F")) == "aa:bb:cc:dd:ee:0f"

    @pytest.mark.parametrize(
        "text",
        [
            "AA:BB:CC:DD:EE",
            "AA:BB:CC:DD:EE:FF:00",
            "AA:BB-CC:DD:EE:FF",
            "GG:BB:CC:DD:EE:FF",
            "AABBCCDDEEFF",
            "",
        ],
    )
    def test_parse_rejects_malformed(self, text: str) -> None:
        with pytest.raises(AddressParseError) as exc_info:
            HardwareAddress.parse(text)
        assert exc_info.value.value == text

    def test_wrong_byte_length_rejected_at_construction(self) -> None:
        with pytest.raises(AddressParseError):
            HardwareAddress(b"\x01\x02\x03\x04\x05")

    def test_non_bytes_rejected_at_construction(self) -> None:
        with pytest.raises(AddressParseError):
            HardwareAddress("abcdef")  # type: ignore[arg-type]

    def test_address_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            HardwareAddress.parse("not-a-mac")


class TestBuildMagicPacket:
    """Tests for payload construction."""

    def test_packet_layout(self) -> None:
        addr = HardwareAddress.parse("01:02:03:04:05:06")

        packet = build_magic_packet(addr)

        assert len(packet) == 102
        assert packet[:6] == b"\xff" * 6
        for i in range(16):
            assert packet[6 + 6 * i : 12 + 6 * i] == addr.octets

    def test_packet_exact_hex(self) -> None:
        packet = build_magic_packet(HardwareAddress.parse("01:02:03:04:05:06"))
        assert packet.hex() == "ff" * 6 + "010203040506" * 16

    def test_matches_reference_implementation(self) -> None:
        """Payload should be byte-identical to the wakeonlan library's packet."""
        mac = "AA:BB:CC:DD:EE:FF"
        assert build_magic_packet(HardwareAddress.parse(mac)) == create_magic_packet(mac)


class TestBroadcast:
    """Tests for the UDP sender."""

    @patch("woa.core.wol.socket.socket")
    def test_sends_single_broadcast_datagram(self, mock_socket: MagicMock) -> None:
        sock = mock_socket.return_value.__enter__.return_value
        payload = build_magic_packet(HardwareAddress.parse("AA:BB:CC:DD:EE:FF"))

        broadcast(payload)

        sock.setsockopt.assert_called_once()
        sock.sendto.assert_called_once_with(payload, ("255.255.255.255", 9))

    @patch("woa.core.wol.socket.socket")
    def test_custom_broadcast_and_port(self, mock_socket: MagicMock) -> None:
        sock = mock_socket.return_value.__enter__.return_value
        payload = build_magic_packet(HardwareAddress.parse("AA:BB:CC:DD:EE:FF"))

        broadcast(payload, ip_address="192.168.1.255", port=7)

        sock.sendto.assert_called_once_with(payload, ("192.168.1.255", 7))

    @patch("woa.core.wol.socket.socket")
    def test_socket_error_raises_send_error(self, mock_socket: MagicMock) -> None:
        sock = mock_socket.return_value.__enter__.return_value
        sock.sendto.side_effect = OSError("Network is unreachable")
        payload = build_magic_packet(HardwareAddress.parse("AA:BB:CC:DD:EE:FF"))

        with pytest.raises(SendError, match="Network is unreachable"):
            broadcast(payload)
        assert sock.sendto.call_count == 1

    @patch("woa.core.wol.socket.socket")
    def test_wrong_length_payload_never_hits_network(self, mock_socket: MagicMock) -> None:
        with pytest.raises(ValueError):
            broadcast(b"\xff" * 6)
        mock_socket.assert_not_called()


class TestWake:
    """Tests for wake function."""

    @patch("woa.core.wol.broadcast")
    def test_wake_broadcasts_magic_packet(self, mock_broadcast: MagicMock) -> None:
        result = wake("01:02:03:04:05:06")

        assert result == HardwareAddress(bytes(range(1, 7)))
        mock_broadcast.assert_called_once_with(
            bytes.fromhex("ff" * 6 + "010203040506" * 16),
            ip_address="255.255.255.255",
            port=9,
        )

    @patch("woa.core.wol.broadcast")
    def test_wake_custom_broadcast(self, mock_broadcast: MagicMock) -> None:
        wake("AA:BB:CC:DD:EE:FF", ip_address="10.0.0.255", port=7)

        _, kwargs = mock_broadcast.call_args
        assert kwargs == {"ip_address": "10.0.0.255", "port": 7}

    @patch("woa.core.wol.broadcast")
    def test_wake_malformed_mac_sends_nothing(self, mock_broadcast: MagicMock) -> None:
        with pytest.raises(AddressParseError):
            wake("AA:BB:CC")
        mock_broadcast.assert_not_called()
