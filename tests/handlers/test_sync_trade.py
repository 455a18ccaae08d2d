import json
import os
import unittest
from unittest.mock import patch

from handlers.sync_trade import handler


@patch.dict(os.environ, {'SYNC_API_KEY': 'bot-secret'})
class TestSyncTrade(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        self.payload = {
            'user_id': 'user123',
            'symbol': 'XAUUSD',
            'ticket': 998877,
            'profit': -12.5,
            'volume': 0.1,
            'entry_time': 1672912800,
            'exit_time': 1672920000,
            'type': 1
        }

    def _event(self, api_key='bot-secret', body=None):
        headers = {'x-api-key': api_key} if api_key else {}
        return {
            'requestContext': {'http': {'method': 'POST'}},
            'headers': headers,
            'body': json.dumps(self.payload if body is None else body)
        }

    def test_sync_trade(self):
        response = handler(self._event(), None)

        self.assertEqual(response['statusCode'], 200)
        body = json.loads(response['body'])
        self.assertTrue(body['success'])
        self.assertEqual(body['trade']['id'], 'imp_mt5_998877')
        self.assertEqual(body['trade']['type'], 'SHORT')
        self.assertEqual(body['trade']['status'], 'LOSS')
        self.assertEqual(body['trade']['setup'], 'MT5 Bot')

    def test_wrong_api_key(self):
        """Test the bot is rejected without the shared key."""
        for api_key in ('wrong', None):
            with self.subTest(api_key=api_key):
                response = handler(self._event(api_key=api_key), None)
                self.assertEqual(response['statusCode'], 401)

    def test_invalid_payload(self):
        response = handler(self._event(body={'symbol': 'XAUUSD'}), None)
        self.assertEqual(response['statusCode'], 400)

    def test_malformed_json(self):
        event = self._event()
        event['body'] = '{not json'
        response = handler(event, None)
        self.assertEqual(response['statusCode'], 400)


if __name__ == '__main__':
    unittest.main()
