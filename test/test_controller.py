#!/usr/bin/env python3
import os
import unittest
from unittest.mock import Mock, patch

from oci_telegram_proxy.controller import create_app


class TestWebhookEndpoint(unittest.TestCase):
    def setUp(self):
        self.client = create_app().test_client()

    def test_health_check_on_any_path(self):
        for path in ['/', '/oci/alarms']:
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.get_data(as_text=True), 'Oracle Cloud Infrastructure Webhook Endpoint - Ready')

    def test_method_not_allowed(self):
        resp = self.client.delete('/')
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.get_data(as_text=True), 'Method not allowed')

    def test_options_not_allowed(self):
        for path in ['/', '/oci/alarms']:
            resp = self.client.options(path)
            self.assertEqual(resp.status_code, 405)
            self.assertEqual(resp.get_data(as_text=True), 'Method not allowed')

    def test_empty_body(self):
        resp = self.client.post('/', data='')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_data(as_text=True), 'Empty request body')
        self.assertTrue(resp.content_type.startswith('text/plain'))

    @patch('oci_telegram_proxy.services.requests.get')
    def test_subscription_confirmation_header(self, mock_get):
        mock_get.return_value = Mock(status_code=200, text='ok')
        resp = self.client.post('/', data='{}', headers={'X-OCI-NS-ConfirmationURL': 'https://x/y'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_data(as_text=True), 'Subscription confirmed successfully')
        mock_get.assert_called_once()
        self.assertEqual(mock_get.call_args[0][0], 'https://x/y')

    @patch('oci_telegram_proxy.services.requests.post')
    def test_alarm_forwarded(self, mock_post):
        mock_post.return_value = Mock(status_code=200, text='{"ok":true}')
        body = '{"type": "OK_TO_FIRING", "alarmMetaData": [{"alarmSummary": "Alarm "cpu" high"}]}'
        with patch.dict(os.environ, {'TELEGRAM_BOT_TOKEN': 'tok', 'TELEGRAM_CHAT_ID': '7'}):
            resp = self.client.post('/', data=body, content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_data(as_text=True), 'Message sent successfully')
        text = mock_post.call_args[1]['json']['text']
        self.assertIn('🔥', text)
        self.assertIn('Alarm "cpu" high', text)

    @patch('oci_telegram_proxy.services.requests.post')
    def test_missing_configuration(self, mock_post):
        with patch.dict(os.environ, {'TELEGRAM_BOT_TOKEN': '', 'TELEGRAM_CHAT_ID': ''}):
            resp = self.client.post('/', data='{"type": "OK_TO_FIRING"}')
        self.assertEqual(resp.status_code, 500)
        self.assertIn('TELEGRAM_BOT_TOKEN', resp.get_data(as_text=True))
        mock_post.assert_not_called()


if __name__ == '__main__':
    unittest.main()
