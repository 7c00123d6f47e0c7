"""Global constants for Note Tuner."""

# Semitone labels, index 0 = C
NOTE_NAMES = ["C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B"]

# Tuning reference
REFERENCE_NOTE = 69  # A4
DEFAULT_REFERENCE_PITCH = 440.0

# Stabilizer defaults (0 ms = disabled)
DEFAULT_NOISE_GATE = 0.05
DEFAULT_COOLDOWN_MS = 0
DEFAULT_NOTE_SWITCH_MS = 0

# Audio processing defaults
DEFAULT_SR = 22050
DEFAULT_BLOCK_SIZE = 4096
DEFAULT_FMIN = 65.0  # C2
DEFAULT_FMAX = 2093.0  # C7
