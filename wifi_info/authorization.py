# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Callable


class AuthorizationStatus(Enum):
    NOT_DETERMINED = 'notDetermined'
    GRANTED = 'granted'
    DENIED = 'denied'
    RESTRICTED = 'restricted'
    UNAVAILABLE = 'unavailable'

    def __repr__(self) -> str:
        return self.value


StatusCallback = Callable[[AuthorizationStatus], None]


class IAuthorization(object):

    def get_status(self) -> AuthorizationStatus:
        raise NotImplementedError()

    def can_request(self) -> bool:
        raise NotImplementedError()

    def request(self, on_status_changed: StatusCallback) -> None:
        """Asks the user for authorization without blocking.

        The callback receives the final status exactly once. It may receive
        NOT_DETERMINED before that while the decision is still open.
        """
        raise NotImplementedError()


class ILocationService(object):

    def is_enabled(self) -> bool:
        raise NotImplementedError()


class NoAuthorization(IAuthorization):

    def get_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.GRANTED

    def can_request(self) -> bool:
        return False

    def request(self, on_status_changed: StatusCallback) -> None:
        on_status_changed(AuthorizationStatus.GRANTED)


class AlwaysEnabledLocationService(ILocationService):

    def is_enabled(self) -> bool:
        return True
