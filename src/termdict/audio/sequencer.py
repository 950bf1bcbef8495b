"""
Audio sequencer — ordered, failure-tolerant pronunciation playback.

An audio reference field may hold several space-separated references. They
are played strictly one at a time, in order:

- after an entry finishes, wait a short gap (≈200ms) before the next one so
  the audio device is not contended;
- when an entry fails (decode error, missing resource), skip to the next one
  immediately, with no user-visible error;
- after the last entry the sequence stops silently: no loop, no retry.

Manifesto:
    The sequencing rules live in a framework-independent state machine
    (:class:`PlaybackMachine`) with an explicit transition table. The asyncio
    driver :func:`play` only feeds it events, so the rules are testable
    without any audio device.

Architecture:
    ::

        ┌──────┐  start (n>0)   ┌─────────────┐  finished/failed (i+1<n)
        │ Idle │ ─────────────► │ Playing(i)  │ ───────────────────────┐
        └──────┘                └─────────────┘ ◄──────────────────────┘
            │ start (n=0)              │ finished/failed (i+1=n)
            ▼                          ▼
        ┌──────┐ ◄─────────────────────┘
        │ Done │   (terminal, events ignored)
        └──────┘

        finished → next entry after ``gap`` seconds
        failed   → next entry immediately

Examples:
    >>> build_plan("a.mp3  b.mp3   c.mp3").entries
    ('a.mp3', 'b.mp3', 'c.mp3')
    >>> len(build_plan("   "))
    0

Tags:
    audio, playback, state-machine, asyncio, termdict
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from termdict.core.errors import PlaybackFailure
from termdict.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_GAP_SECONDS = 0.2


@dataclass(frozen=True, slots=True)
class PlaybackPlan:
    """Audio references to attempt, in original order, blanks removed."""

    entries: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> str:
        return self.entries[index]

    def to_list(self) -> list[str]:
        return list(self.entries)


def build_plan(audio_ref: str | None) -> PlaybackPlan:
    """Split *audio_ref* on whitespace runs; ``None``/blank gives an empty plan."""
    if not audio_ref:
        return PlaybackPlan()
    return PlaybackPlan(tuple(str(audio_ref).split()))


# =============================================================================
# STATE MACHINE
# =============================================================================


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    DONE = "done"


class PlaybackEvent(str, Enum):
    START = "start"
    ENTRY_FINISHED = "entry_finished"
    ENTRY_FAILED = "entry_failed"


@dataclass(frozen=True, slots=True)
class PlaybackState:
    """Current phase; ``index`` is set only while playing."""

    phase: Phase = Phase.IDLE
    index: int | None = None

    @classmethod
    def playing(cls, index: int) -> PlaybackState:
        return cls(Phase.PLAYING, index)

    @property
    def is_done(self) -> bool:
        return self.phase is Phase.DONE


IDLE = PlaybackState()
DONE = PlaybackState(Phase.DONE)


@dataclass(frozen=True, slots=True)
class Step:
    """Result of a transition: the new state and the wait before acting on it."""

    state: PlaybackState
    delay: float = 0.0


def transition(
    state: PlaybackState,
    event: PlaybackEvent,
    length: int,
    gap: float = DEFAULT_GAP_SECONDS,
) -> Step:
    """Pure transition table for a plan of *length* entries.

    Raises:
        ValueError: an entry event while idle, or ``START`` while not idle.
    """
    if state.is_done:
        return Step(DONE)

    if event is PlaybackEvent.START:
        if state.phase is not Phase.IDLE:
            raise ValueError(f"Cannot start playback from {state.phase.value}")
        return Step(PlaybackState.playing(0) if length > 0 else DONE)

    if state.phase is not Phase.PLAYING or state.index is None:
        raise ValueError(f"{event.value} received while {state.phase.value}")

    following = state.index + 1
    if following >= length:
        return Step(DONE)
    delay = gap if event is PlaybackEvent.ENTRY_FINISHED else 0.0
    return Step(PlaybackState.playing(following), delay)


class PlaybackMachine:
    """Stateful wrapper around :func:`transition` for one plan."""

    def __init__(self, plan: PlaybackPlan, gap: float = DEFAULT_GAP_SECONDS) -> None:
        self.plan = plan
        self.gap = gap
        self.state = IDLE

    @property
    def current(self) -> str | None:
        """Reference being played, if any."""
        if self.state.phase is Phase.PLAYING and self.state.index is not None:
            return self.plan[self.state.index]
        return None

    def _apply(self, event: PlaybackEvent) -> Step:
        step = transition(self.state, event, len(self.plan), self.gap)
        self.state = step.state
        return step

    def start(self) -> Step:
        return self._apply(PlaybackEvent.START)

    def entry_finished(self) -> Step:
        return self._apply(PlaybackEvent.ENTRY_FINISHED)

    def entry_failed(self) -> Step:
        return self._apply(PlaybackEvent.ENTRY_FAILED)


# =============================================================================
# ASYNCIO DRIVER
# =============================================================================


Player = Callable[[str], Awaitable[object]]


@dataclass
class PlaybackReport:
    """What happened during one run of :func:`play`."""

    played: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


async def play(
    plan: PlaybackPlan,
    player: Player,
    *,
    gap: float = DEFAULT_GAP_SECONDS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> PlaybackReport:
    """Play *plan* strictly in sequence with *player*.

    ``player(ref)`` must complete when the entry has finished playing and
    raise when it cannot be played. Failures are logged and skipped; they
    never propagate.
    """
    machine = PlaybackMachine(plan, gap)
    report = PlaybackReport()
    machine.start()

    while (ref := machine.current) is not None:
        try:
            await player(ref)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            failure = PlaybackFailure(f"Failed to play {ref}: {exc}", cause=exc).with_context(
                segment=machine.state.index, ref=ref
            )
            logger.debug("audio_entry_failed", **failure.to_dict())
            report.failed.append(ref)
            step = machine.entry_failed()
        else:
            report.played.append(ref)
            step = machine.entry_finished()

        if step.delay and not step.state.is_done:
            await sleep(step.delay)

    return report


__all__ = [
    "DEFAULT_GAP_SECONDS",
    "PlaybackEvent",
    "PlaybackMachine",
    "PlaybackPlan",
    "PlaybackReport",
    "PlaybackState",
    "Phase",
    "Step",
    "build_plan",
    "play",
    "transition",
]
