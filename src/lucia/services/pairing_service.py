import logging
import time
from enum import Enum
from typing import Callable, Optional

from lucia.api.hue_api import HueApi
from lucia.errors import PollingTimeout
from lucia.models.pairing import Credential, PairingStatus

logger = logging.getLogger(__name__)


class PairingState(Enum):
    WAITING = "waiting"
    PAIRED = "paired"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class PairingService:
    """
    Polls the bridge for a new user until the link button has been pressed.

    ``run`` keeps asking the bridge while it answers "link button not
    pressed", sleeping ``poll_interval`` seconds between attempts, and gives
    up with ``PollingTimeout`` once ``max_duration`` seconds have passed since
    the first attempt. Any other failure ends the loop immediately.
    """

    def __init__(self, api: HueApi, poll_interval: float, max_duration: float,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        if poll_interval <= 0:
            raise ValueError(f"'poll_interval' must be positive!\n{poll_interval=}")
        if max_duration <= 0:
            raise ValueError(f"'max_duration' must be positive!\n{max_duration=}")
        self.api = api
        self.poll_interval = poll_interval
        self.max_duration = max_duration
        self._sleep = sleep
        self._clock = clock
        self.state = PairingState.WAITING
        self.attempts = 0

    def run(self, device_label: str, on_poll: Optional[Callable[[int], None]] = None) -> Credential:
        self.state = PairingState.WAITING
        self.attempts = 0
        start = self._clock()
        while True:
            self.attempts += 1
            if on_poll is not None:
                on_poll(self.attempts)
            try:
                outcome = self.api.pair(device_label)
            except Exception:
                self.state = PairingState.FAILED
                raise

            if outcome.status is PairingStatus.SUCCESS:
                self.state = PairingState.PAIRED
                logger.info("paired with bridge after %d attempt(s)", self.attempts)
                return outcome.credential
            if outcome.status is PairingStatus.TRANSPORT_ERROR:
                self.state = PairingState.FAILED
                raise outcome.transport_error

            elapsed = self._clock() - start
            if elapsed >= self.max_duration:
                self.state = PairingState.TIMED_OUT
                raise PollingTimeout(
                    f"link button was not pressed within {self.max_duration}s ({self.attempts} attempts)")
            logger.debug("link button not pressed yet (attempt %d, %.1fs elapsed)", self.attempts, elapsed)
            self._sleep(self.poll_interval)
