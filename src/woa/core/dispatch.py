"""Resolve a wake target and send it the right kind of wake-up."""

import logging
from dataclasses import dataclass
from typing import Optional, cast

from woa.config.loader import Config
from woa.core.errors import TargetSelectionError
from woa.core.http import send_http
from woa.core.machine import HTTPWake, WakeMethod, select_method
from woa.core.wol import BROADCAST_IP, DEFAULT_PORT, HardwareAddress, wake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WakeReport:
    """What was sent for a single wake invocation."""

    target: str
    method: WakeMethod
    address: Optional[HardwareAddress] = None
    endpoint: Optional[str] = None
    status_code: Optional[int] = None


def dispatch(
    config: Optional[Config],
    mac: Optional[str] = None,
    name: Optional[str] = None,
    ip_address: str = BROADCAST_IP,
    port: int = DEFAULT_PORT,
) -> WakeReport:
    """
    Wake a machine given either its MAC address or its configured name.

    Workflow:
        1. Check that exactly one of mac / name was supplied
        2. Resolve the target (parse the MAC, or look the name up)
        3. Select UDP or HTTP for the target
        4. Send one magic packet or one HTTP request

    Args:
        config: Resolved configuration, only consulted for name lookups
        mac: Explicit MAC address to wake
        name: Name of a configured machine to wake
        ip_address: Broadcast IP for magic packets
        port: UDP port for magic packets

    Returns:
        WakeReport describing what was sent

    Raises:
        TargetSelectionError: If both or neither of mac / name are given
        AddressParseError: If the MAC address is malformed
        MachineNotFoundError: If no machine has the given name
        SendError: If the packet or request could not be sent
    """
    if (mac is None) == (name is None):
        raise TargetSelectionError("either a MAC address or a machine name must be specified")

    if mac is not None:
        address = wake(mac, ip_address=ip_address, port=port)
        return WakeReport(target=str(address), method=WakeMethod.UDP, address=address)

    if config is None:
        raise TargetSelectionError("a configuration is required to wake a machine by name")
    machine = config.find_machine(name)  # type: ignore[arg-type]
    method = select_method(machine)
    logger.debug("Machine '%s' resolved, wake method %s", machine.name, method.value)

    if method is WakeMethod.HTTP:
        http = cast(HTTPWake, machine.http)
        status_code = send_http(http)
        return WakeReport(
            target=machine.name,
            method=method,
            endpoint=http.endpoint,
            status_code=status_code,
        )

    address = wake(machine.mac, ip_address=ip_address, port=port)
    return WakeReport(target=machine.name, method=method, address=address)
