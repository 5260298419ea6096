"""Tests for the cardquiz console client."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from cli.api_client import CardQuizAPIClient
from cli.console import ConsoleUI


def http_error(payload):
    response = MagicMock()
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return requests.HTTPError('400 Client Error', response=response)


class TestAPIClient(unittest.TestCase):
    """Tests for CardQuizAPIClient."""

    def setUp(self):
        self.client = CardQuizAPIClient('http://quiz.local:8000/')
        self.client.session = MagicMock()
        self.response = self.client.session.get.return_value
        self.response.json.return_value = {'ok': True}

    def test_base_url_trailing_slash(self):
        self.assertEqual(self.client.base_url, 'http://quiz.local:8000')

    def test_next_question(self):
        self.assertEqual(self.client.next_question(), {'ok': True})
        self.client.session.get.assert_called_once_with('http://quiz.local:8000/api/next', params=None)
        self.response.raise_for_status.assert_called_once()

    def test_history_limit(self):
        self.client.get_history(limit=5)
        self.client.session.get.assert_called_once_with(
            'http://quiz.local:8000/api/history', params={'limit': 5})

    def test_submit_answer(self):
        self.client.submit_answer('pikachu', '32,000')
        self.client.session.post.assert_called_once_with(
            'http://quiz.local:8000/api/submit', json={'name': 'pikachu', 'price': '32,000'})

    def test_import_cards(self):
        self.client.import_cards('[]', fmt='json')
        self.client.session.post.assert_called_once_with(
            'http://quiz.local:8000/api/cards/import', json={'format': 'json', 'content': '[]'})

    def test_update_settings(self):
        self.client.update_settings(user='bob', tolerance_pct=5)
        self.client.session.put.assert_called_once_with(
            'http://quiz.local:8000/api/settings', json={'user': 'bob', 'tolerance_pct': 5})

    def test_export_returns_text(self):
        self.response.text = 'ts,user\n'
        self.assertEqual(self.client.export_results(), 'ts,user\n')

    def test_http_error_raised(self):
        self.response.raise_for_status.side_effect = http_error({'detail': 'nope'})
        with self.assertRaises(requests.HTTPError):
            self.client.get_status()

    def test_error_detail(self):
        self.assertEqual(CardQuizAPIClient.error_detail(http_error({'detail': 'No cards'})), 'No cards')
        self.assertEqual(CardQuizAPIClient.error_detail(http_error(ValueError())), '400 Client Error')


class TestPromptAnswer(unittest.TestCase):
    """Tests for ConsoleUI.prompt_answer."""

    def setUp(self):
        self.client = MagicMock()
        self.ui = ConsoleUI(self.client)

    def prompt(self, *inputs):
        with patch('builtins.input', side_effect=list(inputs)), patch('builtins.print'):
            return self.ui.prompt_answer()

    def test_name_then_price(self):
        self.assertEqual(self.prompt(' ピカチュウ ', '32000'), ('ピカチュウ', '32000'))

    def test_blank_input_reprompts(self):
        self.assertEqual(self.prompt('', 'pikachu', '', '1'), ('pikachu', '1'))

    def test_exit(self):
        self.assertIsNone(self.prompt('EXIT'))

    def test_exit_after_name(self):
        self.assertIsNone(self.prompt('pikachu', 'exit'))

    def test_skip(self):
        self.assertIs(self.prompt('next'), False)

    def test_status_command(self):
        self.client.get_status.return_value = {
            'user': 'alice', 'total': 0, 'correct': 0, 'rate': 0, 'recent': [],
            'tolerance_pct': 10, 'strict_name': False, 'grade_filter': 'all',
            'pool_size': 3, 'card_count': 3
        }
        self.assertEqual(self.prompt('status', 'pikachu', '1'), ('pikachu', '1'))
        self.client.get_status.assert_called_once()


class TestRun(unittest.TestCase):
    """Tests for the main loop."""

    def test_server_down(self):
        client = MagicMock()
        client.base_url = 'http://localhost:8000'
        client.health_check.side_effect = requests.ConnectionError()
        with patch('builtins.print') as mock_print:
            ConsoleUI(client).run()
        client.next_question.assert_not_called()
        self.assertIn('Cannot connect', mock_print.call_args_list[0].args[0])

    def test_answer_then_quit(self):
        client = MagicMock()
        client.health_check.return_value = {'service': 'cardquiz'}
        client.get_status.return_value = {'user': 'alice', 'summary_display': '0/0 correct (0%)'}
        client.next_question.return_value = {'card_id': 'c1', 'img': '', 'grade': '10',
                                             'pool_size': 1, 'miss_count': 0}
        client.submit_answer.return_value = {
            'correct': True, 'name_ok': True, 'price_ok': True,
            'answered_name': 'pikachu', 'answered_price': 32000.0,
            'correct_name': 'ピカチュウ', 'correct_price': 32000.0,
            'summary_display': '1/1 correct (100%)'
        }
        with patch('builtins.input', side_effect=['pikachu', '32000', 'exit']), \
                patch('builtins.print'):
            ConsoleUI(client).run()
        client.submit_answer.assert_called_once_with('pikachu', '32000')
        self.assertEqual(client.next_question.call_count, 2)

    def test_rejected_answer_asks_again(self):
        client = MagicMock()
        client.health_check.return_value = {'service': 'cardquiz'}
        client.get_status.return_value = {'user': 'alice', 'summary_display': '0/0 correct (0%)'}
        client.next_question.return_value = {'card_id': 'c1', 'img': '', 'grade': '10',
                                             'pool_size': 1, 'miss_count': 0}
        rejected = http_error({'detail': 'Both a card name and a price are required'})
        rejected.response.status_code = 400
        client.submit_answer.side_effect = [rejected, {
            'correct': True, 'name_ok': True, 'price_ok': True,
            'answered_name': 'pikachu', 'answered_price': 32000.0,
            'correct_name': 'ピカチュウ', 'correct_price': 32000.0,
            'summary_display': '1/1 correct (100%)'
        }]
        client.error_detail.return_value = 'Both a card name and a price are required'
        with patch('builtins.input', side_effect=['pikachu', 'abc', 'pikachu', '32000', 'exit']), \
                patch('builtins.print'):
            ConsoleUI(client).run()
        self.assertEqual(client.submit_answer.call_args_list[1].args, ('pikachu', '32000'))
        self.assertEqual(client.submit_answer.call_count, 2)
        self.assertEqual(client.next_question.call_count, 2)


if __name__ == '__main__':
    unittest.main()
