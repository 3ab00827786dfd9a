"""Tests for the kingdom spellers API server."""

import asyncio
import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

import server.app as server_app
from core.config import CORRECT_DELAY_MS, WRONG_DELAY_MS, STARTING_LIVES, UNDO_STACK
from core.interfaces import Speaker, WordBankSource
from core.scheduler import VirtualScheduler
from server.file_word_banks import FileWordBankSource
from server.speech import NullSpeaker, SystemSpeaker, create_speaker


class MockWordBankSource(WordBankSource):
    """In-memory word banks for testing."""

    def __init__(self, banks: dict):
        self.banks = banks

    def list_grades(self) -> list[int]:
        return sorted(self.banks)

    def get_bank(self, grade: int) -> dict | None:
        bank = self.banks.get(grade)
        return dict(bank) if bank is not None else None


class MockSpeaker(Speaker):
    def __init__(self):
        self.spoken = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)


class TestGameAPI(unittest.TestCase):
    """Endpoint tests. Startup is skipped so the patched globals stay in place."""

    def setUp(self):
        self.scheduler = VirtualScheduler()
        self.speaker = MockSpeaker()
        server_app.scheduler = self.scheduler
        server_app.speaker = self.speaker
        server_app.word_source = MockWordBankSource({
            1: {'cat': 'a small pet'},
            2: {'dog': 'it barks', 'frog': 'it hops'},
            3: {},
        })
        server_app.undo_policy = 'toggle'
        server_app.games.clear()
        server_app.user_grades.clear()
        self.client = TestClient(server_app.app)

    def game(self, user_id='default'):
        return server_app.games[user_id]

    def correct_tile_id(self, user_id='default'):
        current = self.game(user_id).round
        blank = current.first_empty_slot()
        for tile in current.tiles:
            if not tile.is_decoy and not tile.is_placed and tile.letter == current.word[blank]:
                return tile.tile_id

    def decoy_tile_id(self, user_id='default'):
        current = self.game(user_id).round
        return next(t.tile_id for t in current.tiles if t.is_decoy and not t.is_placed)

    def test_health(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['service'], 'kingdom-spellers')

    def test_grades(self):
        response = self.client.get('/api/grades')
        self.assertEqual(response.json()['grades'], [1, 2, 3])

    def test_state_for_new_user(self):
        response = self.client.get('/api/state', params={'user_id': 'alice'})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['grade'], 1)
        self.assertEqual(data['lives'], STARTING_LIVES)
        self.assertEqual(data['xp'], 0)
        self.assertEqual(data['tier'], 1)
        self.assertEqual(data['mood'], 'idle')
        self.assertEqual(len(data['slots']), 3)
        self.assertEqual(len(data['tiles']), 4)
        self.assertEqual(data['definition'], 'a small pet')
        self.assertNotIn('word', data)
        self.assertEqual(data['word_length'], 3)
        self.assertEqual(data['round_id'], self.game('alice').round.round_id)
        self.assertFalse(data['judged'])

    def test_users_are_separate(self):
        self.client.get('/api/state', params={'user_id': 'alice'})
        self.client.get('/api/state', params={'user_id': 'bob'})
        self.assertIsNot(self.game('alice'), self.game('bob'))

    def test_tap_correct_tile_then_advance(self):
        self.client.get('/api/state')
        response = self.client.post('/api/tap', json={'tile_id': self.correct_tile_id()})
        data = response.json()
        self.assertEqual(data['mood'], 'correct')
        self.assertEqual(data['display_key'], 'esquire_cheer')
        self.assertTrue(data['locked'])
        self.assertEqual(data['xp'], 10)

        self.scheduler.advance(CORRECT_DELAY_MS)
        data = self.client.get('/api/state').json()
        self.assertFalse(data['locked'])
        self.assertEqual(data['mood'], 'idle')
        # Single-word bank: every correct word finishes a pass
        self.assertEqual(data['tier'], 2)

    def test_wrong_tile_costs_a_life(self):
        self.client.get('/api/state')
        data = self.client.post('/api/place', json={'tile_id': self.decoy_tile_id()}).json()
        self.assertEqual(data['lives'], STARTING_LIVES - 1)
        self.assertEqual(data['mood'], 'incorrect')

        self.scheduler.advance(WRONG_DELAY_MS)
        data = self.client.get('/api/state').json()
        self.assertFalse(data['locked'])
        self.assertTrue(all(not t['placed'] for t in data['tiles']))

    def test_game_over_and_restart(self):
        self.client.get('/api/state')
        for _ in range(STARTING_LIVES):
            self.client.post('/api/tap', json={'tile_id': self.decoy_tile_id()})
            self.scheduler.advance(WRONG_DELAY_MS)
        data = self.client.get('/api/state').json()
        self.assertTrue(data['game_over'])
        self.assertEqual(data['lives'], 0)

        data = self.client.post('/api/restart', json={}).json()
        self.assertFalse(data['game_over'])
        self.assertEqual(data['lives'], STARTING_LIVES)
        self.assertFalse(data['locked'])

    def test_remove_endpoint(self):
        self.client.post('/api/grade', json={'grade': 2})
        game = self.game()
        game.init_round(game.round.word, 4)
        tile_id = game.round.tiles[0].tile_id
        self.client.post('/api/tap', json={'tile_id': tile_id})
        data = self.client.post('/api/remove', json={'slot_index': 0}).json()
        self.assertIsNone(data['slots'][0]['letter'])
        self.assertTrue(all(not t['placed'] for t in data['tiles']))

    def test_undo_endpoint_with_stack_policy(self):
        server_app.undo_policy = UNDO_STACK
        self.client.post('/api/grade', json={'grade': 2})
        game = self.game()
        game.init_round(game.round.word, 4)
        self.client.post('/api/tap', json={'tile_id': game.round.tiles[0].tile_id})
        data = self.client.post('/api/undo', json={}).json()
        self.assertEqual(data['undo_policy'], UNDO_STACK)
        self.assertTrue(all(s['letter'] is None for s in data['slots']))

    def test_switch_grade(self):
        self.client.post('/api/tap', json={'tile_id': 1})
        data = self.client.post('/api/grade', json={'grade': 2}).json()
        self.assertEqual(data['grade'], 2)
        self.assertEqual(data['xp'], 0)
        self.assertEqual(data['words_total'], 2)

    def test_source_without_default_grade(self):
        server_app.word_source = MockWordBankSource({2: {'dog': 'it barks'}, 5: {'frog': 'it hops'}})
        response = self.client.get('/api/state', params={'user_id': 'alice'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['grade'], 2)

        response = self.client.post('/api/grade', json={'grade': 5, 'user_id': 'bob'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['grade'], 5)
        self.assertEqual(self.game('bob').round.word, 'frog')

    def test_new_user_switch_grade_builds_requested_bank(self):
        data = self.client.post('/api/grade', json={'grade': 2, 'user_id': 'carol'}).json()
        self.assertEqual(data['grade'], 2)
        self.assertEqual(data['words_total'], 2)
        self.assertIn(self.game('carol').round.word, ('dog', 'frog'))

    def test_unknown_grade(self):
        response = self.client.post('/api/grade', json={'grade': 9})
        self.assertEqual(response.status_code, 404)

    def test_empty_grade(self):
        response = self.client.post('/api/grade', json={'grade': 3})
        self.assertEqual(response.status_code, 400)

    def test_speak(self):
        self.client.post('/api/speak', json={})
        self.assertEqual(self.speaker.spoken, ['cat'])


class TestFileWordBankSource(unittest.TestCase):
    """Tests for JSON word bank loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'banks.json')
        with open(self.path, 'w') as f:
            json.dump({'1': {'cat': 'pet'}, '2': {'dog': 'barks'}}, f)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_list_grades(self):
        self.assertEqual(FileWordBankSource(self.path).list_grades(), [1, 2])

    def test_get_bank(self):
        source = FileWordBankSource(self.path)
        self.assertEqual(source.get_bank(2), {'dog': 'barks'})
        self.assertIsNone(source.get_bank(5))

    def test_missing_file(self):
        source = FileWordBankSource(os.path.join(self.tmpdir.name, 'nope.json'))
        with self.assertRaises(FileNotFoundError):
            source.list_grades()

    def write(self, text):
        path = os.path.join(self.tmpdir.name, 'bad.json')
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_malformed_json(self):
        source = FileWordBankSource(self.write('{"1": {"cat": '))
        with self.assertRaises(ValueError):
            source.list_grades()

    def test_non_numeric_grade(self):
        source = FileWordBankSource(self.write('{"first": {"cat": "pet"}}'))
        with self.assertRaises(ValueError):
            source.list_grades()

    def test_grade_must_map_to_words(self):
        source = FileWordBankSource(self.write('{"1": ["cat", "dog"]}'))
        with self.assertRaises(ValueError):
            source.get_bank(1)


class TestStartup(unittest.TestCase):
    """Startup reads the environment and refuses unusable word bank files."""

    def setUp(self):
        self.saved = (server_app.word_source, server_app.speaker, server_app.undo_policy)
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        server_app.word_source, server_app.speaker, server_app.undo_policy = self.saved
        self.tmpdir.cleanup()

    def bank_file(self, text):
        path = os.path.join(self.tmpdir.name, 'banks.json')
        with open(path, 'w') as f:
            f.write(text)
        return path

    def start(self, **env):
        env.setdefault('SPELLERS_SPEECH', 'none')
        env.setdefault('SPELLERS_UNDO_POLICY', 'toggle')
        with patch.dict(os.environ, env):
            asyncio.run(server_app.startup())

    def test_loads_bank_file(self):
        self.start(SPELLERS_WORD_BANK_FILE=self.bank_file('{"2": {"dog": "barks"}}'))
        self.assertIsInstance(server_app.word_source, FileWordBankSource)
        self.assertEqual(server_app.word_source.list_grades(), [2])

    def test_missing_bank_file_fails(self):
        with self.assertRaises(RuntimeError):
            self.start(SPELLERS_WORD_BANK_FILE=os.path.join(self.tmpdir.name, 'nope.json'))

    def test_malformed_bank_file_fails(self):
        with self.assertRaises(RuntimeError):
            self.start(SPELLERS_WORD_BANK_FILE=self.bank_file('not json'))

    def test_non_numeric_grade_fails(self):
        with self.assertRaises(RuntimeError):
            self.start(SPELLERS_WORD_BANK_FILE=self.bank_file('{"first": {"cat": "pet"}}'))

    def test_empty_bank_file_fails(self):
        with self.assertRaises(RuntimeError):
            self.start(SPELLERS_WORD_BANK_FILE=self.bank_file('{}'))

    def test_bad_undo_policy_fails(self):
        with self.assertRaises(RuntimeError):
            self.start(SPELLERS_UNDO_POLICY='sideways')


class TestSpeech(unittest.TestCase):
    """Tests for server speakers."""

    def test_create_speaker(self):
        self.assertIsInstance(create_speaker('none'), NullSpeaker)
        self.assertIsInstance(create_speaker('anything'), NullSpeaker)

    def test_null_speaker(self):
        NullSpeaker().speak('cat')

    def test_system_speaker_without_command(self):
        speaker = SystemSpeaker(commands=[['no-such-tts-command-xyz']])
        self.assertIsNone(speaker.command)
        speaker.speak('cat')

    @patch('server.speech.shutil.which', return_value='/usr/bin/espeak')
    @patch('server.speech.subprocess.Popen')
    def test_system_speaker_reaps_finished_commands(self, popen, which):
        running, finished = MagicMock(), MagicMock()
        running.poll.return_value = None
        finished.poll.return_value = 0
        popen.side_effect = [finished, running, MagicMock()]
        speaker = SystemSpeaker(commands=[['espeak']])

        speaker.speak('cat')
        speaker.speak('dog')
        self.assertEqual(speaker.reap(), 1)
        finished.poll.assert_called()

        speaker.speak('frog')
        self.assertEqual(popen.call_args.args[0], ['espeak', 'frog'])
        self.assertEqual(len(speaker._processes), 2)


if __name__ == '__main__':
    unittest.main()
