#!/usr/bin/env python3
import unittest

from oci_telegram_proxy.detection import (
    ALARM_NOTIFICATION,
    CONFIRMATION_REQUEST,
    HEALTH_CHECK,
    METHOD_REJECTED,
    classify_method,
    classify_payload,
    confirmation_from_headers,
)


class TestClassifyMethod(unittest.TestCase):
    def test_health_check(self):
        self.assertEqual(classify_method('GET').kind, HEALTH_CHECK)
        self.assertEqual(classify_method('head').kind, HEALTH_CHECK)

    def test_post_continues(self):
        self.assertIsNone(classify_method('POST'))

    def test_other_methods_rejected(self):
        for method in ['PUT', 'DELETE', 'PATCH', 'OPTIONS', '']:
            self.assertEqual(classify_method(method).kind, METHOD_REJECTED, method)


class TestConfirmationSignals(unittest.TestCase):
    def test_header_url_case_insensitive(self):
        signaled, url = confirmation_from_headers({'X-OCI-NS-ConfirmationURL': 'https://x/y'})
        self.assertTrue(signaled)
        self.assertEqual(url, 'https://x/y')

    def test_header_message_type_without_url(self):
        signaled, url = confirmation_from_headers({'x-oci-ns-messagetype': 'SUBSCRIPTION_CONFIRMATION'})
        self.assertTrue(signaled)
        self.assertIsNone(url)

    def test_other_message_type_is_not_confirmation(self):
        signaled, url = confirmation_from_headers({'x-oci-ns-messagetype': 'NOTIFICATION'})
        self.assertFalse(signaled)
        self.assertIsNone(url)

    def test_no_headers(self):
        self.assertEqual(confirmation_from_headers(None), (False, None))

    def test_body_event_type(self):
        payload = {'eventType': 'com.oraclecloud.ons.subscriptionconfirmation', 'confirmationUrl': 'https://body/url'}
        result = classify_payload(payload, {})
        self.assertEqual(result.kind, CONFIRMATION_REQUEST)
        self.assertEqual(result.confirmation_url, 'https://body/url')

    def test_body_event_type_without_url(self):
        result = classify_payload({'eventType': 'com.oraclecloud.ons.subscriptionconfirmation'})
        self.assertEqual(result.kind, CONFIRMATION_REQUEST)
        self.assertIsNone(result.confirmation_url)

    def test_body_url_alternative_spelling(self):
        result = classify_payload({'ConfirmationURL': 'https://other/spelling'})
        self.assertEqual(result.kind, CONFIRMATION_REQUEST)
        self.assertEqual(result.confirmation_url, 'https://other/spelling')

    def test_header_url_takes_precedence(self):
        result = classify_payload(
            {'confirmationUrl': 'https://body/url'},
            {'x-oci-ns-confirmationurl': 'https://header/url'},
        )
        self.assertEqual(result.confirmation_url, 'https://header/url')

    def test_header_type_with_body_url(self):
        result = classify_payload(
            {'ConfirmationURL': 'https://body/url'},
            {'x-oci-ns-messagetype': 'subscription_confirmation'},
        )
        self.assertEqual(result.kind, CONFIRMATION_REQUEST)
        self.assertEqual(result.confirmation_url, 'https://body/url')


class TestClassifyPayload(unittest.TestCase):
    def test_alarm_notification(self):
        payload = {'type': 'OK_TO_FIRING', 'severity': 'CRITICAL'}
        result = classify_payload(payload, {'content-type': 'application/json'})
        self.assertEqual(result.kind, ALARM_NOTIFICATION)
        self.assertIs(result.payload, payload)

    def test_non_object_payload_is_alarm(self):
        for payload in [[], 'text', 3, None]:
            self.assertEqual(classify_payload(payload).kind, ALARM_NOTIFICATION)


if __name__ == '__main__':
    unittest.main()
