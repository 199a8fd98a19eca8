"""player.py — RSVP playback: show one word at a time at a fixed rate."""

import asyncio
from typing import Callable

from models import PlaybackSession, PlaybackStatus, validate_wpm

# Upper bound for a pause/stop to take effect. The loop waits on events and
# normally reacts immediately; this is the bound callers can rely on.
POLL_INTERVAL_MS = 100

WordCallback = Callable[[str, int, int], None]
StatusCallback = Callable[[PlaybackSession], None]


def word_delay_ms(wpm) -> float:
    """Per-word display time in milliseconds."""
    return 60000 / validate_wpm(wpm)


class RSVPPlayer:
    """
    Drives PlaybackSessions. Each started session gets exactly one display
    loop, run as an asyncio task on the current event loop.

    on_word(word, index, total) is called for every word shown.
    on_status(session) is called after every status change.
    """

    def __init__(self, on_word: WordCallback, on_status: StatusCallback | None = None):
        self.on_word = on_word
        self.on_status = on_status

    def _set_status(self, session: PlaybackSession, status: PlaybackStatus) -> None:
        if session.status is status:
            return
        session.status = status
        if self.on_status:
            self.on_status(session)

    def start(self, session: PlaybackSession, wpm=None) -> asyncio.Task:
        """Reset the session to the first word and begin playback. Must be called inside a running loop."""
        wpm = validate_wpm(session.wpm if wpm is None else wpm)
        loop = asyncio.get_running_loop()

        # A restart supersedes whatever loop the session still has; it exits on its own stop event.
        if session._task is not None and not session._task.done():
            session._stopped.set()
            session._resumed.set()

        session.wpm = wpm
        session.delay_ms = word_delay_ms(wpm)
        session.index = 0
        session._stopped = asyncio.Event()
        session._resumed = asyncio.Event()
        session._resumed.set()
        self._set_status(session, PlaybackStatus.RUNNING)
        session._task = loop.create_task(self._display_loop(session, session._stopped, session._resumed))
        return session._task

    async def play(self, session: PlaybackSession, wpm=None) -> PlaybackStatus:
        """Start the session and wait until it completes or is stopped."""
        task = self.start(session, wpm)
        await task
        if session._task is not task:
            # Superseded by a later start on the same session.
            return PlaybackStatus.STOPPED
        return session.status

    def pause(self, session: PlaybackSession) -> None:
        if session.status is PlaybackStatus.RUNNING:
            session._resumed.clear()
            self._set_status(session, PlaybackStatus.PAUSED)

    def resume(self, session: PlaybackSession) -> None:
        if session.status is PlaybackStatus.PAUSED:
            self._set_status(session, PlaybackStatus.RUNNING)
            session._resumed.set()

    def stop(self, session: PlaybackSession) -> None:
        """Cancel playback. The index stays where the last word left it."""
        if not session.is_active:
            return
        session._stopped.set()
        session._resumed.set()
        self._set_status(session, PlaybackStatus.STOPPED)

    async def _display_loop(self, session, stopped: asyncio.Event, resumed: asyncio.Event) -> None:
        delay_s = session.delay_ms / 1000
        total = session.total

        finished = False
        try:
            while session.index < total:
                if stopped.is_set():
                    return
                if not resumed.is_set():
                    # Paused: nothing advances until resume() or stop() sets the event.
                    await resumed.wait()
                    continue

                word = session.words[session.index]
                self.on_word(word, session.index, total)
                session.index += 1

                try:
                    await asyncio.wait_for(stopped.wait(), timeout=delay_s)
                except asyncio.TimeoutError:
                    pass
            finished = True
        finally:
            # Only the session's current loop may change its status.
            if session._stopped is stopped:
                if finished and not stopped.is_set():
                    self._set_status(session, PlaybackStatus.COMPLETED)
                elif session.is_active:
                    self._set_status(session, PlaybackStatus.STOPPED)
