# SPDX-FileCopyrightText: 2024 Ferenc Nandor Janky <ferenj@effective-range.com>
# SPDX-FileCopyrightText: 2024 Attila Gombos <attila.gombos@effective-range.com>
# SPDX-License-Identifier: MIT

from typing import Any, Optional

from gi.repository import GLib


class ServiceError(Exception):
    pass


class InterfaceError(Exception):
    pass


class PropertyError(Exception):
    pass


def bytes_to_str(glib_bytes: Optional[GLib.Bytes]) -> Optional[str]:
    if glib_bytes is None:
        return None

    data = glib_bytes.get_data()
    return data.decode('utf-8', errors='replace') if data else ''


def byte_array_to_str(byte_array: Any) -> str:
    return bytes(bytearray(byte_array)).decode('utf-8', errors='replace')


def byte_array_to_mac(byte_array: Any) -> Optional[str]:
    octets = bytes(bytearray(byte_array))
    return ':'.join(f'{octet:02x}' for octet in octets) if octets else None
