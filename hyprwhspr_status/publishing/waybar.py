"""Signals Waybar so signal-driven custom modules refresh immediately."""

import logging
import subprocess

logger = logging.getLogger(__name__)

DEFAULT_SIGNAL_NUMBER = 8
PKILL = "/usr/bin/pkill"


class WaybarNotifier:
    """Sends ``SIGRTMIN+N`` to running waybar processes."""

    def __init__(self, signal_number: int = DEFAULT_SIGNAL_NUMBER, enabled: bool = True):
        self.signal_number = signal_number
        self.enabled = enabled

    def command(self) -> list:
        return [PKILL, f"-RTMIN+{self.signal_number}", "waybar"]

    def notify(self) -> bool:
        """Signal waybar; returns False if the signal could not be sent.

        pkill exiting 1 (no waybar running) is not a failure.
        """
        if not self.enabled:
            return False
        try:
            subprocess.run(self.command(), check=False, timeout=1.0,
                           stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            return True
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"Failed to signal waybar: {e}")
            return False
