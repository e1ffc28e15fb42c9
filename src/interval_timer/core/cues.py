"""
Audio cues for phase changes.

The cue player subscribes to the timer engine and plays ``work``, ``rest``
or ``complete`` as phases start.  A missing sound or a failing backend is
logged and skipped; it never interrupts the countdown.
"""

from pathlib import Path
from typing import Callable, Final

from loguru import logger
from rich.console import Console

from .engine import PhaseStarted, TimerEvent, WorkoutCompleted
from .models import Phase

# Display name -> file stem of the bundled sound
SOUND_TYPES: Final[dict[str, str]] = {
    "Beep": "beep",
    "Chime": "chime",
    "Bell": "bell",
}

SOUND_EXTENSIONS: Final[tuple[str, ...]] = (".wav", ".mp3", ".aiff", ".caf")

CueBackend = Callable[[str, Path | None], None]

_bell_console = Console(stderr=True)


class CueNotFound(LookupError):
    """Raised when no sound file exists for a cue."""

    pass


def sound_file_name(sound_type: str) -> str:
    """File stem for a sound type display name; unknown names fall back to beep."""
    return SOUND_TYPES.get(sound_type.strip().capitalize(), "beep")


def sound_type_from_file_name(stem: str) -> str:
    for display, file_stem in SOUND_TYPES.items():
        if file_stem == stem:
            return display
    return "Beep"


def cue_name_for(event: TimerEvent) -> str | None:
    """Map an engine event to its cue name."""
    if isinstance(event, WorkoutCompleted):
        return "complete"
    if isinstance(event, PhaseStarted):
        if event.phase is Phase.WORK:
            return "work"
        if event.phase is Phase.REST:
            return "rest"
    return None


def terminal_bell_backend(cue: str, path: Path | None) -> None:
    _bell_console.bell()


class CuePlayer:
    """
    Engine listener that plays a cue for each phase event.

    With a ``sound_dir``, a cue resolves to ``<cue>.<ext>`` or, failing that,
    the selected sound type's file; the resolved path is handed to the
    backend.  Without one, the backend is called with no path.
    """

    def __init__(
        self,
        sound_dir: str | Path | None = None,
        sound_type: str = "Beep",
        backend: CueBackend | None = None,
        enabled: bool = True,
    ):
        self.sound_dir = Path(sound_dir) if sound_dir is not None else None
        self.sound_type = sound_type
        self.backend = backend or terminal_bell_backend
        self.enabled = enabled

    def resolve(self, cue: str) -> Path | None:
        """
        Find the sound file for a cue.

        Raises:
            CueNotFound: If a sound directory is set but holds no matching file
        """
        if self.sound_dir is None:
            return None
        for stem in (cue, sound_file_name(self.sound_type)):
            for ext in SOUND_EXTENSIONS:
                candidate = self.sound_dir / f"{stem}{ext}"
                if candidate.is_file():
                    return candidate
        raise CueNotFound(f"No sound for cue {cue!r} in {self.sound_dir}")

    def play(self, cue: str) -> bool:
        """
        Play one cue.

        Returns:
            True if the backend was invoked successfully
        """
        if not self.enabled:
            return False
        try:
            path = self.resolve(cue)
        except CueNotFound as e:
            logger.debug(f"Skipping cue: {e}")
            return False
        try:
            self.backend(cue, path)
        except Exception as e:
            logger.warning(f"Cue {cue!r} failed to play: {e}")
            return False
        return True

    def __call__(self, event: TimerEvent) -> None:
        cue = cue_name_for(event)
        if cue is not None:
            self.play(cue)
