# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from typing import Optional

import gi

gi.require_version('NM', '1.0')

from context_logger import get_logger

from gi.repository import GLib, NM
from gi.repository.NM import DeviceWifi, Client

from wifi_dbus import ServiceError, bytes_to_str
from wifi_info import IWifiSource, Transport, WifiConnection

log = get_logger('NetworkManagerDbus')


class NetworkManagerDbus(IWifiSource):
    _TRANSPORTS = {
        NM.SETTING_WIRELESS_SETTING_NAME: Transport.WIFI,
        NM.SETTING_WIRED_SETTING_NAME: Transport.ETHERNET,
        NM.SETTING_GSM_SETTING_NAME: Transport.CELLULAR,
        NM.SETTING_CDMA_SETTING_NAME: Transport.CELLULAR,
    }

    def __init__(self, interface: str, client: Client) -> None:
        self._interface = interface
        self._client = client

    def get_interface(self) -> str:
        return self._interface

    def get_active_transport(self) -> Transport:
        try:
            connection = self._client.get_primary_connection()
        except GLib.Error as error:
            raise ServiceError(error)

        if connection is None:
            return Transport.NONE

        connection_type = connection.get_connection_type()
        transport = self._TRANSPORTS.get(connection_type, Transport.OTHER)

        log.debug('Resolved primary connection', connection_type=connection_type, transport=transport)

        return transport

    def get_connection(self) -> WifiConnection:
        if device := self._get_device():
            if ap := device.get_active_access_point():
                bssid = ap.get_bssid()
                return WifiConnection(bytes_to_str(ap.get_ssid()), bssid.lower() if bssid else None)
        else:
            log.warning('Wireless device not found', interface=self._interface)

        return WifiConnection(None, None)

    def _get_device(self) -> Optional[DeviceWifi]:
        return next((dev for dev in self._client.get_devices() if
                     dev.get_iface() == self._interface and isinstance(dev, DeviceWifi)), None)
