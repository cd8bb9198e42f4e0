import unittest
from unittest import TestCase
from unittest.mock import MagicMock

from context_logger import setup_logging
from parameterized import parameterized

from wifi_utility import (IPlatformAccess, CapabilityDetector, CapabilityConfig, PlatformCapabilities, WifiBackend,
                          to_bool)

ALL_SERVICES = ['org.freedesktop.NetworkManager', 'org.freedesktop.PolicyKit1', 'org.freedesktop.GeoClue2']


class CapabilityDetectorTest(TestCase):

    @classmethod
    def setUpClass(cls):
        setup_logging('wifi-info', 'DEBUG', warn_on_overwrite=False)

    def setUp(self):
        print()

    def test_capabilities_detected_from_system_bus(self):
        # Given
        platform, system_bus = create_components(ALL_SERVICES)
        detector = CapabilityDetector(platform, system_bus)

        # When
        result = detector.detect(CapabilityConfig())

        # Then
        self.assertEqual(PlatformCapabilities('wlan0', WifiBackend.NETWORK_MANAGER, True, True, None), result)

    def test_capabilities_detected_when_services_missing(self):
        # Given
        platform, system_bus = create_components([])
        detector = CapabilityDetector(platform, system_bus)

        # When
        result = detector.detect(CapabilityConfig())

        # Then
        self.assertEqual(PlatformCapabilities('wlan0', WifiBackend.WPA_SUPPLICANT, False, False, None), result)

    def test_activatable_service_detected(self):
        # Given
        platform, system_bus = create_components([])
        system_bus.list_activatable_names.return_value = ['org.freedesktop.GeoClue2']
        detector = CapabilityDetector(platform, system_bus)

        # When
        result = detector.detect(CapabilityConfig())

        # Then
        self.assertTrue(result.location_service_required)
        self.assertFalse(result.authorization_required)

    def test_configured_values_override_detection(self):
        # Given
        platform, system_bus = create_components(ALL_SERVICES)
        detector = CapabilityDetector(platform, system_bus)
        config = CapabilityConfig('wlan1', 'wpa-supplicant', 'false', 'False', 'wlan')

        # When
        result = detector.detect(config)

        # Then
        self.assertEqual(PlatformCapabilities('wlan1', WifiBackend.WPA_SUPPLICANT, False, False, 'wlan1'), result)

    def test_ip_interface_configured_by_name(self):
        # Given
        platform, system_bus = create_components([])
        detector = CapabilityDetector(platform, system_bus)
        config = CapabilityConfig(ip_interface='eth0', authorization_required='true')

        # When
        result = detector.detect(config)

        # Then
        self.assertEqual('eth0', result.ip_interface)
        self.assertTrue(result.authorization_required)

    @parameterized.expand([
        ('auto', 'wlan0'),
        ('wlan1', 'wlan1'),
        ('wlan5', 'wlan0'),
    ])
    def test_ip_interface_follows_selected_wlan_interface(self, wlan_interface, expected):
        # Given
        platform, system_bus = create_components([])
        detector = CapabilityDetector(platform, system_bus)
        config = CapabilityConfig(wlan_interface=wlan_interface, ip_interface='wlan')

        # When
        result = detector.detect(config)

        # Then
        self.assertEqual(expected, result.wlan_interface)
        self.assertEqual(expected, result.ip_interface)

    def test_first_interface_selected_when_specified_is_not_available(self):
        # Given
        platform, system_bus = create_components([])
        detector = CapabilityDetector(platform, system_bus)

        # When
        result = detector.detect(CapabilityConfig(wlan_interface='wlan5'))

        # Then
        self.assertEqual('wlan0', result.wlan_interface)

    def test_error_raised_when_no_interface_available(self):
        # Given
        platform, system_bus = create_components([])
        platform.get_wlan_interfaces.return_value = []
        detector = CapabilityDetector(platform, system_bus)

        # When, Then
        self.assertRaises(ValueError, detector.detect, CapabilityConfig())

    def test_error_raised_when_backend_not_supported(self):
        # Given
        platform, system_bus = create_components([])
        detector = CapabilityDetector(platform, system_bus)

        # When, Then
        self.assertRaises(ValueError, detector.detect, CapabilityConfig(wifi_backend='iwd'))

    def test_service_treated_as_missing_when_bus_query_fails(self):
        # Given
        platform, system_bus = create_components(ALL_SERVICES)
        system_bus.name_has_owner.side_effect = Exception('Bus unavailable')
        detector = CapabilityDetector(platform, system_bus)

        # When
        result = detector.detect(CapabilityConfig())

        # Then
        self.assertEqual(PlatformCapabilities('wlan0', WifiBackend.WPA_SUPPLICANT, False, False, None), result)


class ToBoolTest(TestCase):

    @parameterized.expand([
        ('true', True),
        ('Yes', True),
        ('ON', True),
        ('1', True),
        (True, True),
        ('false', False),
        ('off', False),
        ('', False),
        (False, False),
    ])
    def test_to_bool(self, value, expected):
        # When
        result = to_bool(value)

        # Then
        self.assertEqual(expected, result)


def create_components(services):
    platform = MagicMock(spec=IPlatformAccess)
    platform.get_wlan_interfaces.return_value = ['wlan0', 'wlan1']
    system_bus = MagicMock()
    system_bus.name_has_owner.side_effect = lambda name: name in services
    system_bus.list_activatable_names.return_value = []

    return platform, system_bus


if __name__ == '__main__':
    unittest.main()
