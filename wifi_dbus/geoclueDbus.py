# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

import dbus
from context_logger import get_logger
from dbus import SystemBus, Interface, DBusException

from wifi_dbus import PropertyError
from wifi_info import ILocationService

log = get_logger('GeoClueLocationService')


class GeoClueLocationService(ILocationService):
    _BASE_NAME = 'org.freedesktop.GeoClue2'
    _MANAGER_PATH = '/org/freedesktop/GeoClue2/Manager'
    _MANAGER_NAME = 'org.freedesktop.GeoClue2.Manager'
    _ACCURACY_LEVEL_NONE = 0

    def __init__(self, system_bus: SystemBus) -> None:
        self._system_bus = system_bus

    def is_enabled(self) -> bool:
        try:
            obj = self._system_bus.get_object(self._BASE_NAME, self._MANAGER_PATH)
            properties_interface = Interface(obj, dbus.PROPERTIES_IFACE)
            accuracy_level = int(properties_interface.Get(self._MANAGER_NAME, 'AvailableAccuracyLevel'))
        except DBusException as error:
            raise PropertyError(error)

        log.debug('Queried location service', accuracy_level=accuracy_level)

        return accuracy_level > self._ACCURACY_LEVEL_NONE
