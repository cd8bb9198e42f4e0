# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from typing import Any, Optional

import dbus
from context_logger import get_logger
from dbus import SystemBus, Interface, DBusException

from wifi_dbus import ServiceError, PropertyError, InterfaceError, byte_array_to_str, byte_array_to_mac
from wifi_info import IWifiSource, Transport, WifiConnection
from wifi_utility import IPlatformAccess

log = get_logger('WpaSupplicantDbus')


class WpaSupplicantDbus(IWifiSource):
    _CONNECTED_STATE = 'completed'
    _NO_OBJECT_PATH = '/'

    def __init__(self, interface: str, system_bus: SystemBus, platform: IPlatformAccess) -> None:
        self._interface = interface
        self._platform = platform
        self._dbus_interface = WpaSupplicantInterface(interface, system_bus)
        self._dbus_network = WpaSupplicantNetwork(system_bus)
        self._dbus_bss = WpaSupplicantBss(system_bus)

    def get_interface(self) -> str:
        return self._interface

    def get_active_transport(self) -> Transport:
        default_interface = self._platform.get_default_interface()

        if default_interface is None:
            return Transport.NONE

        if default_interface != self._interface:
            return self._guess_transport(default_interface)

        self._dbus_interface.initialize()
        state = str(self._dbus_interface.get_state())

        log.debug('Resolved interface state', interface=self._interface, state=state)

        return Transport.WIFI if state == self._CONNECTED_STATE else Transport.NONE

    def get_connection(self) -> WifiConnection:
        self._dbus_interface.initialize()

        ssid: Optional[str] = None
        bssid: Optional[str] = None

        bss_path = str(self._dbus_interface.get_current_BSS())
        if bss_path != self._NO_OBJECT_PATH:
            ssid = self._dbus_bss.get_ssid(bss_path)
            bssid = self._dbus_bss.get_bssid(bss_path)

        if not ssid:
            network_path = str(self._dbus_interface.get_current_network())
            if network_path != self._NO_OBJECT_PATH:
                ssid = self._dbus_network.get_network_ssid(network_path)

        return WifiConnection(ssid or None, bssid)

    def _guess_transport(self, interface: str) -> Transport:
        if interface.startswith(('eth', 'en')):
            return Transport.ETHERNET
        if interface.startswith(('ww', 'rmnet')):
            return Transport.CELLULAR
        return Transport.OTHER


class WpaSupplicant(object):
    _BASE_NAME = 'fi.w1.wpa_supplicant1'
    _BASE_PATH = '/fi/w1/wpa_supplicant1'

    def __init__(self, system_bus: SystemBus) -> None:
        self._system_bus = system_bus

    def __get_interface(self) -> Interface:
        try:
            obj = self._system_bus.get_object(self._BASE_NAME, self._BASE_PATH)
            return Interface(obj, self._BASE_NAME)
        except DBusException as error:
            raise ServiceError(error)

    def get_interface(self, interface: str) -> Any:
        wpa_interface = self.__get_interface()
        try:
            return wpa_interface.GetInterface(interface)
        except DBusException as error:
            raise InterfaceError(error)

    def _get_properties(self, object_path: str, interface_name: str) -> Any:
        try:
            obj = self._system_bus.get_object(self._BASE_NAME, object_path)
            properties_interface = Interface(obj, dbus.PROPERTIES_IFACE)
            return properties_interface.GetAll(interface_name)
        except DBusException as error:
            raise PropertyError(error)

    def _get_property(self, object_path: str, interface_name: str, property_name: str) -> Any:
        try:
            obj = self._system_bus.get_object(self._BASE_NAME, object_path)
            properties_interface = Interface(obj, dbus.PROPERTIES_IFACE)
            return properties_interface.Get(interface_name, property_name)
        except DBusException as error:
            raise PropertyError(error)


class WpaSupplicantInterface(WpaSupplicant):
    INTERFACE_NAME = 'fi.w1.wpa_supplicant1.Interface'
    _DEFAULT_INTERFACE_PATH = '/fi/w1/wpa_supplicant1/Interfaces/0'

    def __init__(self, interface: str, system_bus: SystemBus) -> None:
        super(WpaSupplicantInterface, self).__init__(system_bus)
        self._interface_path = self._DEFAULT_INTERFACE_PATH
        self.interface = interface

    def initialize(self) -> None:
        self._interface_path = self.get_interface_path()

    def get_interface_path(self) -> Any:
        try:
            return self.get_interface(self.interface)
        except InterfaceError as error:
            log.warning('Interface not managed by wpa_supplicant, using default path',
                        interface=self.interface, path=self._DEFAULT_INTERFACE_PATH, error=error)
            return self._DEFAULT_INTERFACE_PATH

    def get_state(self) -> Any:
        return self._get_property(self._interface_path, self.INTERFACE_NAME, 'State')

    def get_current_BSS(self) -> Any:
        return self._get_property(self._interface_path, self.INTERFACE_NAME, 'CurrentBSS')

    def get_current_network(self) -> Any:
        return self._get_property(self._interface_path, self.INTERFACE_NAME, 'CurrentNetwork')


class WpaSupplicantNetwork(WpaSupplicant):
    _NETWORK_NAME = 'fi.w1.wpa_supplicant1.Network'

    def __init__(self, system_bus: SystemBus) -> None:
        super(WpaSupplicantNetwork, self).__init__(system_bus)

    def network_properties(self, network_path: str) -> Any:
        return self._get_properties(network_path, self._NETWORK_NAME)['Properties']

    def get_network_ssid(self, network_path: str) -> Optional[str]:
        ssid = self.network_properties(network_path).get('ssid')
        return str(ssid) if ssid is not None else None


class WpaSupplicantBss(WpaSupplicant):
    _BSS_NAME = 'fi.w1.wpa_supplicant1.BSS'

    def __init__(self, system_bus: SystemBus) -> None:
        super(WpaSupplicantBss, self).__init__(system_bus)

    def get_ssid(self, bss_path: str) -> str:
        return byte_array_to_str(self._get_property(bss_path, self._BSS_NAME, 'SSID'))

    def get_bssid(self, bss_path: str) -> Optional[str]:
        return byte_array_to_mac(self._get_property(bss_path, self._BSS_NAME, 'BSSID'))
