# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

import os
from typing import Any

import dbus
from context_logger import get_logger
from dbus import SystemBus, Interface, DBusException

from wifi_dbus import ServiceError
from wifi_info import IAuthorization, AuthorizationStatus, StatusCallback

log = get_logger('PolkitAuthorization')


class PolkitAuthorization(IAuthorization):
    """Authorization backed by the polkit authority.

    A check without user interaction reports the current status, a challenge
    meaning the user has not decided yet. An interactive check shows the
    authentication agent prompt and replies asynchronously on the main loop.
    Its reply is final, so a challenge still open there means no agent could
    ask the user and the request is denied.
    """

    _BASE_NAME = 'org.freedesktop.PolicyKit1'
    _AUTHORITY_PATH = '/org/freedesktop/PolicyKit1/Authority'
    _AUTHORITY_NAME = 'org.freedesktop.PolicyKit1.Authority'
    _FLAG_NONE = 0
    _FLAG_ALLOW_USER_INTERACTION = 1
    # DBUS_TIMEOUT_INFINITE
    _INTERACTIVE_TIMEOUT = 0x7fffffff / 1000.0

    def __init__(self, system_bus: SystemBus, action_id: str, allow_user_interaction: bool = True) -> None:
        self._system_bus = system_bus
        self._action_id = action_id
        self._allow_user_interaction = allow_user_interaction

    def get_status(self) -> AuthorizationStatus:
        try:
            result = self._get_authority().CheckAuthorization(
                self._get_subject(), self._action_id, dbus.Dictionary({}, 'ss'), dbus.UInt32(self._FLAG_NONE), '')
        except (DBusException, ServiceError) as error:
            log.error('Failed to check authorization', action_id=self._action_id, error=error)
            return AuthorizationStatus.UNAVAILABLE

        return self._to_status(result)

    def can_request(self) -> bool:
        return self._allow_user_interaction

    def request(self, on_status_changed: StatusCallback) -> None:
        def on_reply(result: Any) -> None:
            status = self._to_status(result, interactive=True)
            log.info('Authorization request answered', action_id=self._action_id, status=status)
            on_status_changed(status)

        def on_error(error: DBusException) -> None:
            log.error('Authorization request failed', action_id=self._action_id, error=error)
            on_status_changed(AuthorizationStatus.UNAVAILABLE)

        log.info('Requesting authorization', action_id=self._action_id)

        self._get_authority().CheckAuthorization(
            self._get_subject(), self._action_id, dbus.Dictionary({}, 'ss'),
            dbus.UInt32(self._FLAG_ALLOW_USER_INTERACTION), '',
            reply_handler=on_reply, error_handler=on_error, timeout=self._INTERACTIVE_TIMEOUT)

    def _get_authority(self) -> Interface:
        try:
            obj = self._system_bus.get_object(self._BASE_NAME, self._AUTHORITY_PATH)
            return Interface(obj, self._AUTHORITY_NAME)
        except DBusException as error:
            raise ServiceError(error)

    def _get_subject(self) -> Any:
        details = dbus.Dictionary({'pid': dbus.UInt32(os.getpid()), 'start-time': dbus.UInt64(0)}, 'sv')
        return dbus.Struct(('unix-process', details), signature='sa{sv}')

    def _to_status(self, result: Any, interactive: bool = False) -> AuthorizationStatus:
        is_authorized, is_challenge, details = result

        if is_authorized:
            return AuthorizationStatus.GRANTED
        elif is_challenge and not interactive and not details.get('polkit.dismissed'):
            return AuthorizationStatus.NOT_DETERMINED
        else:
            return AuthorizationStatus.DENIED
