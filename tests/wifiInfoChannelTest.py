import unittest
from concurrent.futures import Future
from unittest import TestCase
from unittest.mock import MagicMock

from context_logger import setup_logging

from wifi_info import WifiInfoChannel, IWifiInfoProvider, MethodNotImplementedError, WifiQueryResult, Availability


class WifiInfoChannelTest(TestCase):

    @classmethod
    def setUpClass(cls):
        setup_logging('wifi-info', 'DEBUG', warn_on_overwrite=False)

    def setUp(self):
        print()

    def test_get_methods(self):
        # Given
        channel = WifiInfoChannel(MagicMock(spec=IWifiInfoProvider))

        # When
        result = channel.get_methods()

        # Then
        self.assertEqual(['getWifiInfo', 'getWifiName', 'getWifiBSSID', 'getWifiIPAddress'], result)

    def test_get_wifi_info_converted_to_dict(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        provider.get_wifi_info.return_value = completed(
            WifiQueryResult(Availability.AVAILABLE, 'test-ssid', 'aa:bb:cc:dd:ee:ff', '192.168.1.10'))
        channel = WifiInfoChannel(provider)

        # When
        result = channel.handle('getWifiInfo').result(0)

        # Then
        self.assertEqual({
            'availability': 'available',
            'ssid': 'test-ssid',
            'bssid': 'aa:bb:cc:dd:ee:ff',
            'ipAddress': '192.168.1.10'
        }, result)

    def test_get_wifi_name(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        provider.get_wifi_name.return_value = completed('test-ssid')
        channel = WifiInfoChannel(provider)

        # When
        result = channel.handle('getWifiName').result(0)

        # Then
        self.assertEqual('test-ssid', result)

    def test_get_wifi_bssid(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        provider.get_wifi_bssid.return_value = completed(None)
        channel = WifiInfoChannel(provider)

        # When
        result = channel.handle('getWifiBSSID').result(0)

        # Then
        self.assertIsNone(result)

    def test_get_wifi_ip_address(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        provider.get_wifi_ip_address.return_value = completed('192.168.1.10')
        channel = WifiInfoChannel(provider)

        # When
        result = channel.handle('getWifiIPAddress').result(0)

        # Then
        self.assertEqual('192.168.1.10', result)

    def test_reply_completed_when_pending_request_completes(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        pending: Future = Future()
        provider.get_wifi_name.return_value = pending
        channel = WifiInfoChannel(provider)
        reply = channel.handle('getWifiName')

        # When
        pending.set_result('test-ssid')

        # Then
        self.assertEqual('test-ssid', reply.result(0))

    def test_pending_request_cancelled_when_reply_cancelled(self):
        # Given
        provider = MagicMock(spec=IWifiInfoProvider)
        pending: Future = Future()
        provider.get_wifi_info.return_value = pending
        channel = WifiInfoChannel(provider)
        reply = channel.handle('getWifiInfo')

        # When
        reply.cancel()

        # Then
        self.assertTrue(pending.cancelled())

    def test_unknown_method_not_implemented(self):
        # Given
        channel = WifiInfoChannel(MagicMock(spec=IWifiInfoProvider))

        # When
        reply = channel.handle('getWifiFrequency')

        # Then
        self.assertRaises(MethodNotImplementedError, reply.result, 0)


def completed(value):
    future: Future = Future()
    future.set_result(value)
    return future


if __name__ == '__main__':
    unittest.main()
