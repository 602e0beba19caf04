"""Wakeable machine model and wake method selection."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WakeMethod(str, Enum):
    """How a machine is woken up."""

    UDP = "udp"
    HTTP = "http"


class HTTPWake(BaseModel):
    """HTTP request that wakes a machine, sent verbatim."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    method: str = "GET"
    body: Optional[str] = None


class Machine(BaseModel):
    """A single wakeable target from the configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    mac: str = ""
    # Informational only; the wake path never uses it.
    ip: Optional[str] = None
    http: Optional[HTTPWake] = None

    @property
    def wake_method(self) -> WakeMethod:
        return select_method(self)


def select_method(machine: Machine) -> WakeMethod:
    """Return HTTP when the machine carries an ``http`` section, UDP otherwise."""
    if machine.http is not None:
        return WakeMethod.HTTP
    return WakeMethod.UDP
