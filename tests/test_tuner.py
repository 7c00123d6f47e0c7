"""Tests for frame analysis, tuner sessions, audio loading and tone output."""

import numpy as np
import pytest
import soundfile as sf

from note_tuner.analysis import (
    PitchEstimator,
    PyinEstimator,
    YinEstimator,
    frame_rms,
    get_estimator,
)
from note_tuner.core import NoteMapper, TunerConfig
from note_tuner.detection import Tuner
from note_tuner.input import AudioLoader
from note_tuner.output import ToneGenerator

SR = 22050
BLOCK = 4096


def sine(freq: float, n_samples: int, amplitude: float = 0.5, sr: int = SR) -> np.ndarray:
    t = np.arange(n_samples) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


class FixedEstimator(PitchEstimator):
    """Returns a scripted frequency and counts calls."""

    def __init__(self, frequency=440.0):
        self.frequency = frequency
        self.calls = 0

    def estimate(self, buffer):
        self.calls += 1
        return self.frequency


class TestFrameRms:
    """Tests for RMS amplitude."""

    def test_silence(self):
        assert frame_rms(np.zeros(BLOCK)) == 0.0

    def test_empty(self):
        assert frame_rms(np.array([])) == 0.0

    def test_constant(self):
        assert frame_rms(np.full(100, -0.5)) == pytest.approx(0.5)

    def test_sine(self):
        audio = sine(440.0, SR, amplitude=1.0)
        assert frame_rms(audio) == pytest.approx(1 / np.sqrt(2), abs=1e-3)


class TestPitchEstimators:
    """Tests for the librosa-backed estimators."""

    @pytest.fixture
    def mapper(self):
        return NoteMapper()

    def test_yin_on_sine(self, mapper):
        estimator = YinEstimator(sr=SR, frame_length=BLOCK)
        freq = estimator.estimate(sine(440.0, BLOCK))
        assert freq is not None
        assert mapper.map_frequency(freq) == 69
        assert abs(freq - 440.0) < 5.0

    def test_yin_low_e(self, mapper):
        estimator = YinEstimator(sr=SR, frame_length=BLOCK)
        freq = estimator.estimate(sine(82.41, BLOCK))
        assert mapper.map_frequency(freq) == 40

    def test_pyin_on_sine(self, mapper):
        estimator = PyinEstimator(sr=SR, frame_length=BLOCK)
        freq = estimator.estimate(sine(440.0, BLOCK))
        assert freq is not None
        assert mapper.map_frequency(freq) == 69

    def test_short_buffer_is_padded(self):
        estimator = YinEstimator(sr=SR, frame_length=BLOCK)
        assert estimator._fit(np.ones(100)).shape == (BLOCK,)
        assert estimator._fit(np.ones(BLOCK + 50)).shape == (BLOCK,)

    def test_get_estimator(self):
        assert isinstance(get_estimator("yin"), YinEstimator)
        assert isinstance(get_estimator("PYIN", sr=16000), PyinEstimator)

    def test_get_estimator_unknown(self):
        with pytest.raises(ValueError):
            get_estimator("crepe")


class TestTuner:
    """Tests for tuner sessions."""

    def test_loud_frame_emits(self):
        tuner = Tuner(estimator=FixedEstimator(440.0))
        event = tuner.process_frame(sine(440.0, BLOCK), 0)
        assert event is not None
        assert event.label == "A4"

    def test_silent_frame_skips_estimation(self):
        estimator = FixedEstimator(440.0)
        tuner = Tuner(estimator=estimator)

        assert tuner.process_frame(np.zeros(BLOCK), 0) is None
        assert estimator.calls == 0
        assert tuner.stats.gated == 1

    def test_cooldown_skips_estimation(self):
        estimator = FixedEstimator(440.0)
        tuner = Tuner(estimator=estimator, config=TunerConfig(detection_cooldown_ms=500))
        frames = [(sine(440.0, BLOCK), t) for t in (0, 186, 372, 557)]

        events = tuner.detect(frames)

        assert len(events) == 2  # 0 ms and 557 ms
        assert estimator.calls == 2
        assert tuner.stats.cooldown == 2

    def test_unvoiced_frame(self):
        tuner = Tuner(estimator=FixedEstimator(None))
        assert tuner.process_frame(sine(440.0, BLOCK), 0) is None
        assert tuner.stats.no_pitch == 1

    def test_callback(self):
        received = []
        tuner = Tuner(estimator=FixedEstimator(466.16), on_note_detected=received.append)
        tuner.process_frame(sine(466.16, BLOCK), 0)
        assert [e.value for e in received] == [70]

    def test_run_is_lazy(self):
        estimator = FixedEstimator(440.0)
        tuner = Tuner(estimator=estimator)
        frames = ((sine(440.0, BLOCK), t) for t in range(0, 1000, 100))

        events = tuner.run(frames)
        next(events)

        assert estimator.calls == 1

    def test_reset(self):
        tuner = Tuner(estimator=FixedEstimator(440.0))
        tuner.process_frame(sine(440.0, BLOCK), 0)
        tuner.reset()
        assert tuner.estimates == 0
        assert tuner.stats.processed == 0
        assert tuner.stabilizer.state.current_note is None

    def test_sine_end_to_end(self):
        audio = sine(440.0, BLOCK * 5)
        loader = AudioLoader(target_sr=SR)
        tuner = Tuner(config=TunerConfig(block_size=BLOCK))

        events = tuner.detect(loader.frames(audio, SR, BLOCK))

        assert len(events) == 5
        assert all(e.value == 69 for e in events)
        assert all(abs(e.cents) <= 20 for e in events)

    def test_hold_time_end_to_end(self):
        """A 186 ms block grid with a 300 ms hold drops the first two blocks."""
        audio = sine(440.0, BLOCK * 5)
        loader = AudioLoader(target_sr=SR)
        tuner = Tuner(config=TunerConfig(note_switch_threshold_ms=300))

        events = tuner.detect(loader.frames(audio, SR, BLOCK))

        assert len(events) == 3
        assert tuner.stats.held == 2


class TestAudioLoader:
    """Tests for AudioLoader."""

    def test_frames_timestamps(self):
        loader = AudioLoader(target_sr=SR)
        frames = list(loader.frames(np.ones(10000, dtype=np.float32), SR, BLOCK))

        assert [t for _, t in frames] == [0, 186, 372]
        assert all(len(block) == BLOCK for block, _ in frames)

    def test_last_block_padded(self):
        loader = AudioLoader(target_sr=SR)
        frames = list(loader.frames(np.ones(5000, dtype=np.float32), SR, BLOCK))

        last, _ = frames[-1]
        assert last[:904].sum() == 904
        assert last[904:].sum() == 0

    def test_short_audio_warns(self):
        loader = AudioLoader(target_sr=SR)
        with pytest.warns(UserWarning):
            frames = list(loader.frames(np.ones(100, dtype=np.float32), SR, BLOCK))
        assert len(frames) == 1

    def test_load_wav(self, tmp_path):
        path = tmp_path / "tone.wav"
        sf.write(str(path), sine(440.0, SR), SR)

        loader = AudioLoader(target_sr=SR)
        audio, sr = loader.load(str(path))

        assert sr == SR
        assert len(audio) == SR
        assert loader.get_duration(audio, sr) == pytest.approx(1.0)

    def test_normalize(self):
        loader = AudioLoader(normalize=True)
        normalized = loader._normalize(np.array([0.5, -0.5, 0.25, -0.25]))
        assert np.abs(normalized).max() == 1.0

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not audio")
        with pytest.raises(ValueError):
            AudioLoader().load(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))


class TestToneGenerator:
    """Tests for reference tone synthesis."""

    def test_length_and_peak(self):
        tone = ToneGenerator(sr=SR, amplitude=0.5).generate(440.0, duration=0.5)
        assert len(tone) == SR // 2
        assert tone.dtype == np.float32
        assert np.abs(tone).max() <= 0.5 + 1e-6

    def test_fades(self):
        tone = ToneGenerator(sr=SR, fade=0.01).generate(440.0)
        assert tone[0] == 0.0
        assert abs(tone[-1]) < 1e-6

    def test_note_frequency(self):
        tone = ToneGenerator(sr=SR).generate_note(69, duration=1.0)
        spectrum = np.abs(np.fft.rfft(tone))
        peak_hz = np.argmax(spectrum) * SR / len(tone)
        assert abs(peak_hz - 440.0) <= 1.0

    def test_custom_reference(self):
        generator = ToneGenerator(sr=SR, mapper=NoteMapper(reference_pitch=442.0))
        tone = generator.generate_note(69, duration=1.0)
        spectrum = np.abs(np.fft.rfft(tone))
        assert abs(np.argmax(spectrum) * SR / len(tone) - 442.0) <= 1.0

    def test_invalid_frequency(self):
        with pytest.raises(ValueError):
            ToneGenerator().generate(0.0)

    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_invalid_duration(self, duration):
        with pytest.raises(ValueError):
            ToneGenerator().generate(440.0, duration)

    def test_write(self, tmp_path):
        path = ToneGenerator(sr=SR).write(str(tmp_path / "a4.wav"), 440.0, duration=0.25)
        data, sr = sf.read(str(path))
        assert sr == SR
        assert len(data) == int(0.25 * SR)
