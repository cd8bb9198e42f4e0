# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from context_logger import get_logger

from wifi_utility import IPlatformAccess

log = get_logger('CapabilityDetector')

AUTO = 'auto'


def to_bool(value: Any) -> bool:
    return str(value).lower() in ('true', 'yes', 'on', '1')


class WifiBackend(Enum):
    NETWORK_MANAGER = 'network-manager'
    WPA_SUPPLICANT = 'wpa-supplicant'

    def __repr__(self) -> str:
        return self.value


@dataclass
class CapabilityConfig:
    wlan_interface: str = AUTO
    wifi_backend: str = AUTO
    authorization_required: str = AUTO
    location_service_required: str = AUTO
    ip_interface: str = ''


@dataclass
class PlatformCapabilities:
    wlan_interface: str
    wifi_backend: WifiBackend
    authorization_required: bool
    location_service_required: bool
    ip_interface: Optional[str] = None


class ICapabilityDetector(object):

    def detect(self, config: CapabilityConfig) -> PlatformCapabilities:
        raise NotImplementedError()


class CapabilityDetector(ICapabilityDetector):
    NETWORK_MANAGER_NAME = 'org.freedesktop.NetworkManager'
    POLKIT_NAME = 'org.freedesktop.PolicyKit1'
    GEOCLUE_NAME = 'org.freedesktop.GeoClue2'

    def __init__(self, platform: IPlatformAccess, system_bus: Any) -> None:
        self._platform = platform
        self._system_bus = system_bus

    def detect(self, config: CapabilityConfig) -> PlatformCapabilities:
        wlan_interface = self._select_interface(config.wlan_interface)

        if config.wifi_backend == AUTO:
            if self._is_service_available(self.NETWORK_MANAGER_NAME):
                wifi_backend = WifiBackend.NETWORK_MANAGER
            else:
                wifi_backend = WifiBackend.WPA_SUPPLICANT
        else:
            try:
                wifi_backend = WifiBackend(config.wifi_backend)
            except ValueError:
                raise ValueError(f'Unsupported Wi-Fi backend: {config.wifi_backend}')

        authorization_required = self._resolve_flag(config.authorization_required, self.POLKIT_NAME)
        location_service_required = self._resolve_flag(config.location_service_required, self.GEOCLUE_NAME)

        if config.ip_interface == 'wlan':
            ip_interface: Optional[str] = wlan_interface
        else:
            ip_interface = config.ip_interface or None

        capabilities = PlatformCapabilities(
            wlan_interface, wifi_backend, authorization_required, location_service_required, ip_interface)

        log.info('Detected platform capabilities', capabilities=capabilities)

        return capabilities

    def _select_interface(self, interface: str) -> str:
        interfaces = self._platform.get_wlan_interfaces()

        if interface in interfaces:
            log.info('Selected specified interface', interfaces=interfaces, selected=interface)
            return interface

        if not interfaces:
            raise ValueError('No wireless interfaces found')

        if interface != AUTO:
            log.warning('Specified interface not found, using first available',
                        interfaces=interfaces, specified=interface, selected=interfaces[0])

        return interfaces[0]

    def _resolve_flag(self, value: str, service_name: str) -> bool:
        if value == AUTO:
            return self._is_service_available(service_name)

        return to_bool(value)

    def _is_service_available(self, name: str) -> bool:
        try:
            available = bool(self._system_bus.name_has_owner(name)) or name in self._system_bus.list_activatable_names()
        except Exception as error:
            log.warning('Failed to query D-Bus service', service=name, error=error)
            return False

        log.debug('Queried D-Bus service', service=name, available=available)

        return available
