# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

import itertools
from concurrent.futures import Future, InvalidStateError
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Any, Optional

from context_logger import get_logger

from wifi_info import (IWifiSource, IAuthorization, ILocationService, AuthorizationStatus, Availability, Transport,
                       WifiQueryResult, UNKNOWN_SSID, clean_ssid)
from wifi_utility import IPlatformAccess, PlatformCapabilities

log = get_logger('WifiInfoProvider')


class WifiOperation(Enum):
    WIFI_INFO = 'getWifiInfo'
    WIFI_NAME = 'getWifiName'
    WIFI_BSSID = 'getWifiBSSID'
    WIFI_IP_ADDRESS = 'getWifiIPAddress'

    def __repr__(self) -> str:
        return self.value


@dataclass
class WifiRequest(object):
    request_id: int
    operation: WifiOperation
    future: Future


class IWifiInfoProvider(object):

    def get_wifi_info(self) -> Future:
        raise NotImplementedError()

    def get_wifi_name(self) -> Future:
        raise NotImplementedError()

    def get_wifi_bssid(self) -> Future:
        raise NotImplementedError()

    def get_wifi_ip_address(self) -> Future:
        raise NotImplementedError()

    def get_pending_count(self) -> int:
        raise NotImplementedError()


class WifiInfoProvider(IWifiInfoProvider):
    """Resolves Wi-Fi information behind the platform authorization gate.

    Requests needing a user decision are parked in a map keyed by request id.
    A single authorization prompt serves all of them, and every parked request
    is resumed in arrival order once the prompt is answered.
    """

    def __init__(self, wifi_source: IWifiSource, authorization: IAuthorization, location_service: ILocationService,
                 platform: IPlatformAccess, capabilities: PlatformCapabilities) -> None:
        self._wifi_source = wifi_source
        self._authorization = authorization
        self._location_service = location_service
        self._platform = platform
        self._capabilities = capabilities
        self._request_ids = itertools.count(1)
        self._pending: dict[int, WifiRequest] = {}
        self._awaiting_decision = False
        self._lock = Lock()

    def get_wifi_info(self) -> Future:
        return self._submit(WifiOperation.WIFI_INFO)

    def get_wifi_name(self) -> Future:
        return self._submit(WifiOperation.WIFI_NAME)

    def get_wifi_bssid(self) -> Future:
        return self._submit(WifiOperation.WIFI_BSSID)

    def get_wifi_ip_address(self) -> Future:
        future: Future = Future()
        ip_address = self._get_ip_address()
        log.info('Request completed', operation=WifiOperation.WIFI_IP_ADDRESS, ip_address=ip_address)
        future.set_result(ip_address)
        return future

    def get_pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def _submit(self, operation: WifiOperation) -> Future:
        request = WifiRequest(next(self._request_ids), operation, Future())
        request.future.add_done_callback(lambda future: self._on_request_done(request))

        log.debug('Request received', request_id=request.request_id, operation=operation)

        self._process(request)

        return request.future

    def _process(self, request: WifiRequest, status: Optional[AuthorizationStatus] = None) -> None:
        try:
            if self._capabilities.authorization_required:
                if status is None:
                    status = self._authorization.get_status()

                log.debug('Checking authorization', request_id=request.request_id, status=status)

                if status == AuthorizationStatus.NOT_DETERMINED:
                    if self._authorization.can_request():
                        self._await_decision(request)
                    else:
                        log.warning('Authorization cannot be requested', request_id=request.request_id)
                        self._complete(request, self._create_result(request, Availability.PERMISSION_DENIED))
                    return

                if status != AuthorizationStatus.GRANTED:
                    log.warning('Authorization not granted', request_id=request.request_id, status=status)
                    self._complete(request, self._create_result(request, Availability.PERMISSION_DENIED))
                    return

            if self._capabilities.location_service_required and not self._location_service.is_enabled():
                log.warning('Location services disabled', request_id=request.request_id)
                self._complete(request, self._create_result(request, Availability.LOCATION_DISABLED))
                return

            self._complete(request, self._query_native(request))
        except Exception as error:
            log.error('Failed to query Wi-Fi information', request_id=request.request_id, error=error)
            self._complete(request, self._create_result(request, Availability.UNKNOWN))

    def _query_native(self, request: WifiRequest) -> WifiQueryResult:
        transport = self._wifi_source.get_active_transport()

        if transport != Transport.WIFI:
            log.info('Active network is not Wi-Fi', request_id=request.request_id, transport=transport)
            return self._create_result(request, Availability.NOT_CONNECTED)

        connection = self._wifi_source.get_connection()
        ssid = clean_ssid(connection.ssid)

        if not ssid or ssid == UNKNOWN_SSID:
            log.info('SSID withheld by the system', request_id=request.request_id, bssid=connection.bssid)
            return self._create_result(request, Availability.RESTRICTED_BY_OS, bssid=connection.bssid)

        return self._create_result(request, Availability.AVAILABLE, ssid, connection.bssid)

    def _await_decision(self, request: WifiRequest) -> None:
        with self._lock:
            self._pending[request.request_id] = request
            issue_request = not self._awaiting_decision
            self._awaiting_decision = True
            pending_count = len(self._pending)

        if not issue_request:
            log.info('Authorization already requested, request queued',
                     request_id=request.request_id, pending=pending_count)
            return

        log.info('Requesting authorization', request_id=request.request_id)

        try:
            self._authorization.request(self._on_authorization_changed)
        except Exception as error:
            log.error('Failed to request authorization', error=error)
            for pending_request in self._take_pending():
                self._complete(pending_request, self._create_result(pending_request, Availability.UNKNOWN))

    def _on_authorization_changed(self, status: AuthorizationStatus) -> None:
        if status == AuthorizationStatus.NOT_DETERMINED:
            log.debug('Authorization still undetermined, waiting for decision')
            return

        requests = self._take_pending()

        log.info('Authorization changed', status=status, pending=len(requests))

        for request in requests:
            self._process(request, status)

    def _take_pending(self) -> list[WifiRequest]:
        with self._lock:
            requests = list(self._pending.values())
            self._pending.clear()
            self._awaiting_decision = False
            return requests

    def _on_request_done(self, request: WifiRequest) -> None:
        if request.future.cancelled():
            with self._lock:
                self._pending.pop(request.request_id, None)
            log.info('Request cancelled', request_id=request.request_id, operation=request.operation)

    def _complete(self, request: WifiRequest, result: WifiQueryResult) -> None:
        with self._lock:
            self._pending.pop(request.request_id, None)

        value: Any = result
        if request.operation == WifiOperation.WIFI_NAME:
            value = result.ssid
        elif request.operation == WifiOperation.WIFI_BSSID:
            value = result.bssid

        try:
            request.future.set_result(value)
            log.info('Request completed', request_id=request.request_id, operation=request.operation,
                     availability=result.availability)
        except InvalidStateError:
            log.debug('Request already finished', request_id=request.request_id)

    def _create_result(self, request: WifiRequest, availability: Availability,
                       ssid: Optional[str] = None, bssid: Optional[str] = None) -> WifiQueryResult:
        ip_address = self._get_ip_address() if request.operation == WifiOperation.WIFI_INFO else None
        return WifiQueryResult(availability, ssid, bssid, ip_address)

    def _get_ip_address(self) -> Optional[str]:
        return self._platform.get_ipv4_address(self._capabilities.ip_interface)
