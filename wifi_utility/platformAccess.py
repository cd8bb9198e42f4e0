# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

import ipaddress
from typing import Optional

import netifaces
from context_logger import get_logger

log = get_logger('PlatformAccess')


class IPlatformAccess(object):

    def get_wlan_interfaces(self) -> list[str]:
        raise NotImplementedError()

    def get_default_interface(self) -> Optional[str]:
        raise NotImplementedError()

    def get_ipv4_address(self, interface: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError()


class PlatformAccess(IPlatformAccess):

    def get_wlan_interfaces(self) -> list[str]:
        return [interface for interface in netifaces.interfaces() if interface.startswith('wl')]

    def get_default_interface(self) -> Optional[str]:
        if gateway := netifaces.gateways().get('default'):
            if default_gateway := gateway.get(netifaces.AF_INET):
                return str(default_gateway[1])

        return None

    def get_ipv4_address(self, interface: Optional[str] = None) -> Optional[str]:
        """Returns the first non-loopback IPv4 address, optionally only from the given interface."""
        try:
            interfaces = [interface] if interface else netifaces.interfaces()
        except Exception as error:
            log.warning('Failed to list interfaces', error=error)
            return None

        for name in interfaces:
            if ip_address := self._get_interface_ipv4_address(name):
                return ip_address

        return None

    def _get_interface_ipv4_address(self, interface: str) -> Optional[str]:
        try:
            for address in netifaces.ifaddresses(interface).get(netifaces.AF_INET, []):
                if (ip_address := address.get('addr')) and not ipaddress.IPv4Address(ip_address).is_loopback:
                    return str(ip_address)
        except Exception as error:
            log.warning('Failed to look up IP address', interface=interface, error=error)

        return None
