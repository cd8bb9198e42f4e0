# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

UNKNOWN_SSID = '<unknown ssid>'


class Availability(Enum):
    AVAILABLE = 'available'
    NOT_CONNECTED = 'notConnected'
    PERMISSION_DENIED = 'permissionDenied'
    LOCATION_DISABLED = 'locationDisabled'
    RESTRICTED_BY_OS = 'restrictedByOs'
    UNKNOWN = 'unknown'

    def __repr__(self) -> str:
        return self.value


class Transport(Enum):
    WIFI = 'wifi'
    ETHERNET = 'ethernet'
    CELLULAR = 'cellular'
    OTHER = 'other'
    NONE = 'none'

    def __repr__(self) -> str:
        return self.value


@dataclass
class WifiConnection(object):
    ssid: Optional[str]
    bssid: Optional[str]


@dataclass
class WifiQueryResult(object):
    availability: Availability
    ssid: Optional[str] = None
    bssid: Optional[str] = None
    ip_address: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'availability': self.availability.value,
            'ssid': self.ssid,
            'bssid': self.bssid,
            'ipAddress': self.ip_address
        }


class IWifiSource(object):

    def get_interface(self) -> str:
        raise NotImplementedError()

    def get_active_transport(self) -> Transport:
        raise NotImplementedError()

    def get_connection(self) -> WifiConnection:
        raise NotImplementedError()


def clean_ssid(ssid: Optional[str]) -> Optional[str]:
    return ssid.replace('"', '') if ssid is not None else None
