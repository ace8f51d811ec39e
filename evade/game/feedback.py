"""
Audio and haptic feedback for Evade.

Sounds are synthesized with numpy when the mixer starts, so the game ships
no audio assets. Haptics are forwarded to an optional callback (a rumble
device or a test spy); the desktop build has none by default.

Classes:
    FeedbackManager: Plays the sound and vibration for each FeedbackEvent
"""

from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np
import pygame

from evade import config
from evade.logging import get_logger
from evade.models import FeedbackEvent

log = get_logger('feedback')

SAMPLE_RATE = 22050

HapticsCallback = Callable[[List[int]], None]

DEFAULT_VIBRATION: Dict[FeedbackEvent, List[int]] = {
    FeedbackEvent.BARRIER: config.VIBRATE_BARRIER,
    FeedbackEvent.DASH: config.VIBRATE_DASH,
    FeedbackEvent.DENIED: config.VIBRATE_DENIED,
    FeedbackEvent.GAME_OVER: config.VIBRATE_GAME_OVER,
}


def _envelope(num_samples: int, fade_in: float, fade_out: float) -> np.ndarray:
    envelope = np.ones(num_samples)
    fade_in_samples = int(num_samples * fade_in)
    fade_out_samples = int(num_samples * fade_out)
    if fade_in_samples:
        envelope[:fade_in_samples] = np.linspace(0, 1, fade_in_samples)
    if fade_out_samples:
        envelope[-fade_out_samples:] = np.linspace(1, 0, fade_out_samples)
    return envelope


def _to_stereo(wave: np.ndarray, amplitude: float) -> np.ndarray:
    """Scale a [-1, 1] wave to 16-bit and duplicate it into two channels."""
    samples = (np.clip(wave, -1.0, 1.0) * 32767 * amplitude).astype(np.int16)
    return np.column_stack((samples, samples))


def generate_sweep(
    frequency_start: float,
    frequency_end: float,
    duration: float,
    amplitude: float = 0.3,
) -> np.ndarray:
    """Sine tone sliding linearly between two frequencies.

    Returns:
        int16 array of shape (samples, 2)
    """
    num_samples = int(SAMPLE_RATE * duration)
    frequencies = np.linspace(frequency_start, frequency_end, num_samples)
    phase = np.cumsum(2.0 * np.pi * frequencies / SAMPLE_RATE)
    wave = np.sin(phase) * _envelope(num_samples, 0.1, 0.2)
    return _to_stereo(wave, amplitude)


def generate_shimmer(duration: float = 0.3, amplitude: float = 0.3) -> np.ndarray:
    """Bright chord with a fast tremolo, used when a barrier goes up."""
    num_samples = int(SAMPLE_RATE * duration)
    t = np.linspace(0, duration, num_samples, False)
    chord = sum(np.sin(2.0 * np.pi * f * t) for f in (659.25, 783.99, 1046.50)) / 3
    tremolo = 0.75 + 0.25 * np.sin(2.0 * np.pi * 18 * t)
    wave = chord * tremolo * _envelope(num_samples, 0.05, 0.4)
    return _to_stereo(wave, amplitude)


def generate_whoosh(duration: float = 0.2, amplitude: float = 0.25, seed: int = 69) -> np.ndarray:
    """Filtered noise burst, used for the dash."""
    num_samples = int(SAMPLE_RATE * duration)
    noise = np.random.default_rng(seed).uniform(-1.0, 1.0, num_samples)
    # Moving average as a cheap low-pass
    kernel = np.ones(8) / 8
    wave = np.convolve(noise, kernel, mode='same') * _envelope(num_samples, 0.3, 0.6)
    return _to_stereo(wave / max(1e-9, np.abs(wave).max()), amplitude)


def generate_buzz(duration: float = 0.08, amplitude: float = 0.2) -> np.ndarray:
    """Short square-wave buzz for a refused action."""
    num_samples = int(SAMPLE_RATE * duration)
    t = np.linspace(0, duration, num_samples, False)
    wave = np.sign(np.sin(2.0 * np.pi * 110 * t)) * _envelope(num_samples, 0.0, 0.3)
    return _to_stereo(wave, amplitude)


SOUND_GENERATORS: Dict[FeedbackEvent, Callable[[], np.ndarray]] = {
    FeedbackEvent.COLLECT: lambda: generate_sweep(523.25, 1046.50, 0.12),
    FeedbackEvent.BARRIER: generate_shimmer,
    FeedbackEvent.DASH: generate_whoosh,
    FeedbackEvent.GAME_OVER: lambda: generate_sweep(392.00, 98.00, 0.6, amplitude=0.35),
    FeedbackEvent.DENIED: generate_buzz,
}


class FeedbackManager:
    """Plays sounds and vibrations for gameplay events.

    Every call is fire-and-forget: when audio is disabled or failed to
    start, notify() still forwards haptics and otherwise does nothing.

    Attributes:
        sounds: Generated sound per event
        audio_enabled: Whether the mixer is up and sound is wanted
        vibration_enabled: Whether haptic patterns are forwarded
        volume: Volume in percent (0-100)

    Examples:
        >>> manager = FeedbackManager(audio_enabled=False)
        >>> manager.notify(FeedbackEvent.COLLECT)
    """

    def __init__(
        self,
        audio_enabled: bool = True,
        volume: int = config.DEFAULT_VOLUME,
        vibration_enabled: bool = True,
        haptics: Optional[HapticsCallback] = None,
    ):
        self.audio_enabled = audio_enabled and config.AUDIO_ENABLED
        self.vibration_enabled = vibration_enabled
        self.haptics = haptics
        self.volume = max(0, min(100, volume))
        self.sounds: Dict[FeedbackEvent, pygame.mixer.Sound] = {}

        if self.audio_enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        """Start the mixer and synthesize every sound.

        A mixer failure disables audio for the rest of the run.
        """
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            log.warning("Audio initialization failed: %s", e)
            self.audio_enabled = False
            return

        for event, generate in SOUND_GENERATORS.items():
            try:
                self.sounds[event] = pygame.sndarray.make_sound(generate())
            except (pygame.error, ValueError) as e:
                log.warning("Could not generate %s sound: %s", event.value, e)

        self._apply_volume()
        log.debug("Generated %d sounds", len(self.sounds))

    def _apply_volume(self) -> None:
        for sound in self.sounds.values():
            sound.set_volume(self.volume / 100)

    def set_volume(self, percent: int) -> None:
        self.volume = max(0, min(100, percent))
        self._apply_volume()

    def set_enabled(self, enabled: bool) -> None:
        """Turn sound on or off.

        Sounds are synthesized the first time sound is turned on, so a run
        that started muted by settings can be unmuted without a restart.
        """
        if not enabled or not config.AUDIO_ENABLED:
            self.audio_enabled = False
            return
        self.audio_enabled = True
        if not self.sounds:
            self._init_audio()

    def set_vibration(self, enabled: bool) -> None:
        self.vibration_enabled = enabled

    def notify(
        self,
        event: Union[FeedbackEvent, str],
        vibration: Optional[Sequence[int]] = None,
    ) -> None:
        """Play the sound for an event and forward its vibration pattern.

        Args:
            event: Event or its string value ('collect', 'gameOver', ...)
            vibration: Pattern in milliseconds; defaults to the event's pattern
        """
        event = FeedbackEvent(event)

        if self.audio_enabled and self.volume > 0:
            sound = self.sounds.get(event)
            if sound is not None:
                sound.play()

        pattern = list(vibration) if vibration is not None else DEFAULT_VIBRATION.get(event)
        if pattern and self.vibration_enabled and self.haptics is not None:
            self.haptics(pattern)
