# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from concurrent.futures import Future
from typing import Any, Callable

from context_logger import get_logger

from wifi_info import IWifiInfoProvider, WifiOperation, WifiQueryResult

log = get_logger('WifiInfoChannel')


class MethodNotImplementedError(Exception):
    pass


class WifiInfoChannel(object):

    def __init__(self, provider: IWifiInfoProvider) -> None:
        self._handlers: dict[str, Callable[[], Future]] = {
            WifiOperation.WIFI_INFO.value: provider.get_wifi_info,
            WifiOperation.WIFI_NAME.value: provider.get_wifi_name,
            WifiOperation.WIFI_BSSID.value: provider.get_wifi_bssid,
            WifiOperation.WIFI_IP_ADDRESS.value: provider.get_wifi_ip_address,
        }

    def get_methods(self) -> list[str]:
        return list(self._handlers)

    def handle(self, method: str) -> Future:
        reply: Future = Future()

        if handler := self._handlers.get(method):
            log.debug('Dispatching method call', method=method)
            future = handler()
            future.add_done_callback(lambda done: self._forward(done, reply))
            reply.add_done_callback(lambda done: future.cancel() if done.cancelled() else None)
        else:
            log.warning('Method not implemented', method=method, methods=self.get_methods())
            reply.set_exception(MethodNotImplementedError(method))

        return reply

    def _forward(self, future: Future, reply: Future) -> None:
        if reply.done():
            return

        if future.cancelled():
            reply.cancel()
        else:
            reply.set_result(self._to_reply(future.result()))

    def _to_reply(self, value: Any) -> Any:
        return value.to_dict() if isinstance(value, WifiQueryResult) else value
