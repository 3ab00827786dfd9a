"""Speech implementations for the game server."""

import logging
import shutil
import subprocess

from core.interfaces import Speaker

logger = logging.getLogger(__name__)

# Text-to-speech commands tried in order
SPEECH_COMMANDS = [
    ['espeak', '-v', 'en-us'],
    ['say'],
]


class NullSpeaker(Speaker):
    """Speaker for headless servers: only logs."""

    def speak(self, text: str) -> None:
        logger.debug(f"speak: {text}")


class SystemSpeaker(Speaker):
    """Speaks through the first text-to-speech command found on PATH.

    Playback runs in the background. Handles of running commands are kept
    and finished ones are reaped on the next call to speak.
    """

    def __init__(self, commands: list[list[str]] = None):
        self.command = None
        self._processes: list[subprocess.Popen] = []
        for cmd in commands or SPEECH_COMMANDS:
            if shutil.which(cmd[0]):
                self.command = cmd
                break
        if self.command is None:
            logger.warning("No text-to-speech command found; speech disabled")

    def speak(self, text: str) -> None:
        if self.command is None:
            return
        self.reap()
        # Don't wait for playback to finish
        process = subprocess.Popen(self.command + [text],
                                   stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        self._processes.append(process)

    def reap(self) -> int:
        """Forget commands that have exited. Returns how many are still running."""
        self._processes = [p for p in self._processes if p.poll() is None]
        return len(self._processes)


def create_speaker(kind: str) -> Speaker:
    """Build a speaker from the SPELLERS_SPEECH setting."""
    if kind == 'system':
        return SystemSpeaker()
    return NullSpeaker()
