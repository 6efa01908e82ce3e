"""
Background worker thread for audio cue playback.

The tap detection tick runs on the tracking server's processing thread and must
never wait on the sound device. Cues are therefore sent as commands to a worker
thread that owns the CueSoundPlayer.
"""

import logging
import queue
import threading
from typing import Optional

from tap_reset.config import WorkerConfig

logger = logging.getLogger(__name__)


class AudioCommand:
    """Represents an audio command to be executed."""

    def __init__(self, command_type, **kwargs):
        """
        Initialize an audio command.

        Args:
            command_type (str): Type of command ('play_cue', 'set_volume')
            **kwargs: Command-specific parameters
        """
        self.command_type = command_type
        self.params = kwargs

    def __repr__(self):
        return f"AudioCommand({self.command_type!r}, {self.params!r})"


class AudioWorker(threading.Thread):
    """
    Background thread for handling all audio playback operations.

    This worker processes audio commands from a queue, preventing audio
    operations from blocking the tap detection tick. Failures are logged
    and never reach the caller.
    """

    def __init__(self, cue_player, stop_event: Optional[threading.Event] = None,
                 queue_maxsize=WorkerConfig.AUDIO_QUEUE_MAXSIZE):
        """
        Initialize the audio worker.

        Args:
            cue_player (CueSoundPlayer): Player for the gesture cue clips
            stop_event (threading.Event): Event to signal shutdown
            queue_maxsize (int): Maximum size of command queue
        """
        super().__init__(daemon=True, name="AudioWorker")

        self.cue_player = cue_player
        self.stop_event = stop_event or threading.Event()
        self.command_queue = queue.Queue(maxsize=queue_maxsize)

        logger.info("AudioWorker initialized")

    def enqueue_command(self, command):
        """
        Add an audio command to the queue (non-blocking).

        Args:
            command (AudioCommand): Command to execute

        Returns:
            bool: True if command was enqueued, False if queue was full
        """
        try:
            self.command_queue.put_nowait(command)
            return True
        except queue.Full:
            logger.warning(f"Audio queue full, dropping command: {command.command_type}")
            return False

    def play_cue(self, cue):
        """Enqueue playback of a cue clip."""
        return self.enqueue_command(AudioCommand('play_cue', cue=cue))

    def run(self):
        """Main worker loop - processes audio commands from queue."""
        logger.info("AudioWorker started")

        while not self.stop_event.is_set():
            try:
                # Wait for command with timeout to allow checking stop_event
                command = self.command_queue.get(timeout=WorkerConfig.QUEUE_GET_TIMEOUT)
            except queue.Empty:
                continue

            try:
                self._execute_command(command)
            finally:
                self.command_queue.task_done()

        logger.info("AudioWorker stopped")

    def _execute_command(self, command):
        """
        Execute a single audio command.

        Args:
            command (AudioCommand): Command to execute
        """
        try:
            cmd_type = command.command_type
            params = command.params

            if cmd_type == 'play_cue':
                self.cue_player.play(params['cue'])

            elif cmd_type == 'set_volume':
                self.cue_player.set_volume(params['volume'])

            else:
                logger.warning(f"Unknown audio command type: {cmd_type}")

        except Exception as e:
            logger.error(f"Error executing command {command.command_type}: {e}", exc_info=True)

    def stop(self, timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT):
        """Signal the worker to stop and wait for it to exit."""
        logger.info("Stopping AudioWorker...")
        self.stop_event.set()
        if self.is_alive():
            self.join(timeout)
