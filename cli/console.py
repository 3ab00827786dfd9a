"""Console UI for kingdom spellers."""

import time

from core.config import CORRECT_DELAY_MS, MOOD_CORRECT, MOOD_INCORRECT, UNDO_STACK
from cli.api_client import SpellersAPIClient

POLL_INTERVAL = 0.25  # seconds between state polls while feedback is showing
MAX_WAIT = 3.0        # give up waiting for the server after this long


class ConsoleUI:
    """Console user interface for kingdom spellers."""

    def __init__(self, client: SpellersAPIClient, sleep=time.sleep, grade: int | None = None):
        self.client = client
        self.sleep = sleep
        self.grade = grade

    @staticmethod
    def format_word(state: dict) -> str:
        return ' '.join(slot['letter'] or '_' for slot in state['slots'])

    @staticmethod
    def format_tiles(state: dict) -> str:
        parts = []
        for i, tile in enumerate(state['tiles'], 1):
            letter = tile['letter'].upper() if tile['placed'] else tile['letter']
            mark = '*' if tile['placed'] else ' '
            parts.append(f"[{i}]{letter}{mark}")
        return '  '.join(parts)

    def print_header(self, state: dict):
        max_tier = state['max_tier'] or '-'
        print('=' * 50)
        print(f"Grade {state['grade']} | Tier {state['tier']}/{max_tier} | "
              f"XP {state['xp']} ({state['rank']}) | Lives {state['lives']}")
        print(f"Word {state['cursor'] + 1}/{state['words_total']}")
        print('=' * 50)

    def print_puzzle(self, state: dict):
        print(f"\nclue: {state['definition']}")
        print(f"\n    {self.format_word(state)}\n")
        print(f"tiles: {self.format_tiles(state)}")

    def print_status(self, state: dict):
        print('\n' + '=' * 50)
        print('STATUS')
        print('=' * 50)
        print(f"Grade: {state['grade']}")
        print(f"Tier: {state['tier']} (max {state['max_tier'] or 'none'})")
        print(f"XP: {state['xp']}  Rank: {state['rank']}")
        print(f"Lives: {state['lives']}")
        print(f"Undo mode: {state['undo_policy']}")
        print('=' * 50 + '\n')

    def print_feedback(self, state: dict):
        if state['mood'] == MOOD_CORRECT:
            print(f"\n*** Hooray! {self.format_word(state)} is right! +XP ***\n")
        elif state['mood'] == MOOD_INCORRECT:
            print(f"\nOops, {self.format_word(state)} is not right.")
            if not state['game_over']:
                print(f"{state['lives']} lives left. Try again!\n")

    def print_help(self, state: dict):
        undo = '"undo" to take back the last letter' if state['undo_policy'] == UNDO_STACK \
            else 'a placed tile\'s number or "remove N" to take a letter back'
        print('Type a tile number to place it, '
              f'{undo}, "say" to hear the word, "status", '
              '"restart", "grade N", "exit" to quit\n')

    def starting_state(self) -> dict:
        """The first puzzle, in the grade asked for on the command line if any."""
        if self.grade is None:
            return self.client.get_state()
        try:
            return self.client.switch_grade(self.grade)
        except Exception as e:
            print(f"Could not switch to grade {self.grade}: {e}")
            return self.client.get_state()

    def wait_for_unlock(self, state: dict) -> dict:
        """Poll the server until the feedback delay is over."""
        waited = 0.0
        self.sleep(CORRECT_DELAY_MS / 1000)
        state = self.client.get_state()
        while state['locked'] and not state['game_over'] and waited < MAX_WAIT:
            self.sleep(POLL_INTERVAL)
            waited += POLL_INTERVAL
            state = self.client.get_state()
        return state

    def handle_command(self, user_input: str, state: dict) -> dict | None:
        """Run one command. Returns the new state, or None to quit."""
        command = user_input.strip().lower()
        parts = command.split()

        if command == 'exit':
            return None
        if command == 'say':
            return self.client.speak()
        if command == 'status':
            self.print_status(state)
            return state
        if command == 'restart':
            return self.client.restart()
        if command == 'undo':
            return self.client.undo()
        if len(parts) == 2 and parts[0] == 'remove' and parts[1].isdigit():
            return self.client.remove_tile(int(parts[1]) - 1)
        if len(parts) == 2 and parts[0] == 'grade' and parts[1].isdigit():
            return self.client.switch_grade(int(parts[1]))
        if command.isdigit():
            index = int(command) - 1
            if 0 <= index < len(state['tiles']):
                return self.client.tap_tile(state['tiles'][index]['id'])
            print('No tile with that number.')
            return state

        print('Unknown command.')
        self.print_help(state)
        return state

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to kingdom spellers server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        state = self.starting_state()
        print('\nWelcome to Kingdom Spellers!')
        self.print_help(state)

        while True:
            self.print_header(state)
            if state['game_over']:
                print('\nGAME OVER - you used all your lives.')
                answer = input('Play again? (y/n) ').strip().lower()
                if answer != 'y':
                    print('Goodbye!')
                    return
                state = self.client.restart()
                continue

            self.print_puzzle(state)
            user_input = input('==> ')
            if not user_input.strip():
                continue

            try:
                new_state = self.handle_command(user_input, state)
            except Exception as e:
                print(f"Error talking to server: {e}")
                continue
            if new_state is None:
                print('Goodbye!')
                return
            state = new_state

            if state['locked']:
                self.print_feedback(state)
                try:
                    state = self.wait_for_unlock(state)
                except Exception as e:
                    print(f"Error getting state: {e}")
