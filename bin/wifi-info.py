#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

import json
import os
import pathlib
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from concurrent.futures import Future, CancelledError
from pathlib import Path
from signal import signal, SIGINT, SIGTERM
from threading import Thread
from typing import Any

import gi

gi.require_version("NM", "1.0")

from _dbus_glib_bindings import DBusGMainLoop
from common_utility import ConfigLoader
from context_logger import setup_logging, get_logger
from dbus import SystemBus
from gi.repository import GLib, NM

from wifi_dbus import NetworkManagerDbus, WpaSupplicantDbus, PolkitAuthorization, GeoClueLocationService
from wifi_info import (
    IWifiSource,
    IAuthorization,
    ILocationService,
    NoAuthorization,
    AlwaysEnabledLocationService,
    WifiInfoProvider,
    WifiInfoChannel,
    WifiOperation,
    MethodNotImplementedError,
)
from wifi_utility import PlatformAccess, CapabilityDetector, CapabilityConfig, WifiBackend, AUTO, to_bool

APPLICATION_NAME = "wifi-info"

log = get_logger("WifiInfoApp")


def main() -> None:
    resource_root = _get_resource_root()
    arguments = _get_arguments()

    setup_logging(APPLICATION_NAME)

    log.info(f"Started {APPLICATION_NAME}", arguments=arguments)

    config = ConfigLoader(Path(f"{resource_root}/config/{APPLICATION_NAME}.conf.default")).load(arguments)

    _update_logging(arguments, config)

    log.info("Retrieved configuration", configuration=config)

    method = config.get("method", WifiOperation.WIFI_INFO.value)
    capability_config = CapabilityConfig(
        wlan_interface=config.get("wlan_interface", AUTO),
        wifi_backend=config.get("wifi_backend", AUTO),
        authorization_required=str(config.get("authorization_required", AUTO)),
        location_service_required=str(config.get("location_service_required", AUTO)),
        ip_interface=config.get("ip_interface", ""),
    )
    action_id = config.get("authorization_action_id", "org.freedesktop.NetworkManager.network-control")
    allow_interaction = to_bool(config.get("authorization_allow_interaction", True))

    system_bus = SystemBus(DBusGMainLoop(set_as_default=True))

    platform = PlatformAccess()
    capabilities = CapabilityDetector(platform, system_bus).detect(capability_config)

    wifi_source: IWifiSource
    if capabilities.wifi_backend == WifiBackend.NETWORK_MANAGER:
        wifi_source = NetworkManagerDbus(capabilities.wlan_interface, NM.Client.new(None))
    else:
        wifi_source = WpaSupplicantDbus(capabilities.wlan_interface, system_bus, platform)

    authorization: IAuthorization
    if capabilities.authorization_required:
        authorization = PolkitAuthorization(system_bus, action_id, allow_interaction)
    else:
        authorization = NoAuthorization()

    location_service: ILocationService
    if capabilities.location_service_required:
        location_service = GeoClueLocationService(system_bus)
    else:
        location_service = AlwaysEnabledLocationService()

    provider = WifiInfoProvider(wifi_source, authorization, location_service, platform, capabilities)
    channel = WifiInfoChannel(provider)

    event_loop = GLib.MainLoop()
    event_thread = Thread(target=event_loop.run)
    replies: list[Future] = []

    def handler(signum: int, frame: Any) -> None:
        log.info(f"Shutting down {APPLICATION_NAME}", signum=signum)
        for pending_reply in replies:
            pending_reply.cancel()

    signal(SIGINT, handler)
    signal(SIGTERM, handler)

    event_thread.start()

    try:
        reply = channel.handle(method)
        replies.append(reply)
        print(json.dumps(reply.result(), indent=2))
    except CancelledError:
        log.warning("Request cancelled", method=method)
    except MethodNotImplementedError:
        log.error("Method not implemented", method=method, methods=channel.get_methods())
        raise SystemExit(1)
    finally:
        event_loop.quit()
        event_thread.join(1)


def _get_arguments() -> dict[str, Any]:
    parser = ArgumentParser(formatter_class=ArgumentDefaultsHelpFormatter)
    default_config = f"/etc/effective-range/{APPLICATION_NAME}/{APPLICATION_NAME}.conf"

    parser.add_argument("method", help="method to call", nargs="?", default=WifiOperation.WIFI_INFO.value)

    parser.add_argument("-c", "--config-file", help="configuration file", default=default_config)

    parser.add_argument("-f", "--log-file", help="log file path")
    parser.add_argument("-l", "--log-level", help="logging level")

    parser.add_argument("--wlan-interface", help="preferred wlan interface")
    parser.add_argument("--wifi-backend", help="Wi-Fi backend (auto, network-manager, wpa-supplicant)")
    parser.add_argument("--authorization-required", help="authorization gating (auto, true, false)")
    parser.add_argument("--authorization-action-id", help="polkit action guarding Wi-Fi information")
    parser.add_argument("--authorization-allow-interaction", help="interactive authorization prompt (true, false)")
    parser.add_argument("--location-service-required", help="location service gating (auto, true, false)")
    parser.add_argument("--ip-interface", help="restrict IP address lookup to interface ('wlan' for selected)")

    args = parser.parse_args()
    if args.config_file == default_config and not pathlib.Path(args.config_file).exists():
        args.config_file = f"/etc/effective-range/{APPLICATION_NAME}/{APPLICATION_NAME}.conf.default"
    return {k: v for k, v in vars(args).items() if v is not None}


def _get_resource_root() -> str:
    return str(Path(os.path.dirname(__file__)).parent.absolute())


def _update_logging(arguments: dict[str, Any], configuration: dict[str, Any]) -> None:
    log_level = configuration.get("log_level", "INFO")
    log_file = configuration.get("log_file")
    if log_level != "INFO" or log_file != arguments.get("log_file"):
        setup_logging(APPLICATION_NAME, log_level, log_file, warn_on_overwrite=False)


if __name__ == "__main__":
    main()
