"""Note stabilization - Turn noisy per-frame pitch into stable note events.

Each sample passes through, in order:
- Noise gate (RMS amplitude below threshold)
- Detection cooldown (too soon after the last emitted note)
- No-pitch filter (estimator found no positive fundamental)
- Note change tracking (a new note restarts the hold timer)
- Hold gate (new note has not persisted long enough)

Samples surviving every step are emitted as NoteEvents. With all timing
thresholds at 0 the stabilizer passes every voiced, above-gate sample through.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from ..core import InvalidConfiguration, NoteEvent, NoteMapper, TunerConfig

logger = logging.getLogger(__name__)

NoteCallback = Callable[[NoteEvent], None]


class Sample(NamedTuple):
    """One analysed audio frame."""

    amplitude_rms: float
    frequency: Optional[float]  # None = no pitch detected
    timestamp_ms: int


@dataclass
class StabilizerState:
    """Mutable timing state of one stabilizer."""

    current_note: Optional[int] = None
    current_note_start: Optional[int] = None
    last_emission: Optional[int] = None


@dataclass
class StabilizerStats:
    """Counts of how samples were handled."""

    processed: int = 0
    gated: int = 0
    cooldown: int = 0
    no_pitch: int = 0
    held: int = 0
    emitted: int = 0
    note_changes: int = 0

    @property
    def total_discarded(self) -> int:
        """Samples that did not produce an event."""
        return self.processed - self.emitted


class NoteStabilizer:
    """Suppress transient notes in a stream of pitch estimates.

    Owns its StabilizerState; calls must be made in timestamp order from a
    single caller.
    """

    def __init__(
        self,
        noise_gate_threshold: float = 0.05,
        detection_cooldown_ms: int = 0,
        note_switch_threshold_ms: int = 0,
        reference_pitch: float = 440.0,
        config: Optional[TunerConfig] = None,
        mapper: Optional[NoteMapper] = None,
        on_note_detected: Optional[NoteCallback] = None,
    ):
        """Initialize NoteStabilizer.

        Args:
            noise_gate_threshold: RMS below which samples are ignored
            detection_cooldown_ms: Minimum time between emitted notes
            note_switch_threshold_ms: Time a new note must persist before it is reported
            reference_pitch: Frequency in Hz of note 69
            config: Optional TunerConfig, overrides the keyword settings
            mapper: NoteMapper to use (default: built from config.reference_pitch)
            on_note_detected: Callback invoked with every emitted NoteEvent

        Raises:
            InvalidConfiguration: If a setting is out of range, or the mapper's
                reference pitch differs from the configured one
        """
        if config is not None:
            self.config = config
        else:
            self.config = TunerConfig(
                reference_pitch=reference_pitch,
                noise_gate_threshold=noise_gate_threshold,
                detection_cooldown_ms=detection_cooldown_ms,
                note_switch_threshold_ms=note_switch_threshold_ms,
            )
        self.config.validate()

        if mapper is None:
            mapper = NoteMapper(config=self.config)
        elif mapper.reference_pitch != self.config.reference_pitch:
            raise InvalidConfiguration(
                f"Mapper reference pitch {mapper.reference_pitch} does not match "
                f"configured {self.config.reference_pitch}"
            )
        self.mapper = mapper
        self.on_note_detected = on_note_detected

        self._state = StabilizerState()
        self.stats = StabilizerStats()

    @property
    def state(self) -> StabilizerState:
        """Snapshot of the current state."""
        return replace(self._state)

    def reset(self) -> None:
        """Forget the current note, the last emission and the stats."""
        self._state = StabilizerState()
        self.stats = StabilizerStats()

    def accepts(self, amplitude_rms: float, timestamp_ms: int) -> bool:
        """Check the noise gate and cooldown without touching state.

        Lets callers skip pitch estimation for frames that would be
        discarded anyway.
        """
        return self._rejection(amplitude_rms, timestamp_ms) is None

    def process(
        self,
        amplitude_rms: float,
        frequency: Optional[float],
        timestamp_ms: int,
    ) -> Optional[NoteEvent]:
        """Feed one sample.

        Args:
            amplitude_rms: RMS amplitude of the frame
            frequency: Estimated fundamental in Hz, or None for no pitch
            timestamp_ms: Frame time in milliseconds

        Returns:
            The emitted NoteEvent, or None if the sample was suppressed
        """
        self.stats.processed += 1

        rejection = self._rejection(amplitude_rms, timestamp_ms)
        if rejection == "gate":
            self.stats.gated += 1
            return None
        if rejection == "cooldown":
            self.stats.cooldown += 1
            return None

        if not self._has_pitch(frequency):
            self.stats.no_pitch += 1
            return None

        state = self._state
        note = self.mapper.map_frequency(frequency)

        if note != state.current_note:
            logger.debug(
                "Note change %s -> %s at %d ms", state.current_note, note, timestamp_ms
            )
            state.current_note = note
            state.current_note_start = timestamp_ms
            self.stats.note_changes += 1

        if timestamp_ms - state.current_note_start < self.config.note_switch_threshold_ms:
            self.stats.held += 1
            return None

        event = self.mapper.describe(frequency)
        state.last_emission = timestamp_ms
        self.stats.emitted += 1
        logger.debug(
            "Emit %s (%+d cents, %.2f Hz) at %d ms",
            event.label,
            event.cents,
            event.frequency,
            timestamp_ms,
        )

        if self.on_note_detected is not None:
            self.on_note_detected(event)
        return event

    def process_stream(self, samples: Iterable[Sample]) -> Iterator[NoteEvent]:
        """Lazily yield the events emitted for a sequence of samples."""
        for amplitude_rms, frequency, timestamp_ms in samples:
            event = self.process(amplitude_rms, frequency, timestamp_ms)
            if event is not None:
                yield event

    def _rejection(self, amplitude_rms: float, timestamp_ms: int) -> Optional[str]:
        # NaN amplitude counts as below the gate
        if not amplitude_rms >= self.config.noise_gate_threshold:
            return "gate"
        last = self._state.last_emission
        if last is not None and timestamp_ms - last < self.config.detection_cooldown_ms:
            return "cooldown"
        return None

    @staticmethod
    def _has_pitch(frequency: Optional[float]) -> bool:
        # NaN and inf come from unvoiced librosa frames
        return frequency is not None and math.isfinite(frequency) and frequency > 0
