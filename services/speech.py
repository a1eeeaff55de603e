# -*- coding: utf-8 -*-

import threading
from typing import List, Optional

from loguru import logger


class NullSpeech:
    """Speech sink that only remembers what it was asked to say."""

    def __init__(self):
        self.spoken: List[str] = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)

    def shutdown(self) -> None:
        pass


class Pyttsx3Speech:
    """
    pyttsx3 voice on a single worker thread.

    speak() never blocks the UI loop. A new request replaces anything still
    waiting and interrupts the utterance in flight (flush, no queue).
    """

    def __init__(self, rate: int = 180, volume: float = 1.0):
        self.rate = rate
        self.volume = volume

        self._engine = None
        self._lock = threading.Lock()
        self._wake = threading.Event()
        self._pending: Optional[str] = None
        self._closed = False
        self._thread: Optional[threading.Thread] = None

    def _ensure_started(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="drill-speech", daemon=True
        )
        self._thread.start()

    def _init_engine(self):
        import pyttsx3

        eng = pyttsx3.init()
        eng.setProperty("rate", self.rate)
        eng.setProperty("volume", self.volume)
        return eng

    def speak(self, text: str) -> None:
        if not text or self._closed:
            return
        with self._lock:
            self._pending = text
            eng = self._engine
        self._ensure_started()
        if eng is not None:
            try:
                eng.stop()
            except RuntimeError as e:
                logger.debug(f"Speech interrupt failed: {e}")
        self._wake.set()

    def _run(self) -> None:
        try:
            eng = self._init_engine()
        except Exception as e:
            # no driver (headless box, missing espeak): run silently
            logger.warning(f"Text-to-speech unavailable: {e}")
            self._closed = True
            return
        with self._lock:
            self._engine = eng

        while not self._closed:
            self._wake.wait()
            self._wake.clear()
            with self._lock:
                text, self._pending = self._pending, None
            if not text or self._closed:
                continue
            try:
                eng.say(text)
                eng.runAndWait()
            except RuntimeError as e:
                logger.warning(f"Speech failed for '{text}': {e}")

    def shutdown(self) -> None:
        self._closed = True
        self._wake.set()
        with self._lock:
            eng = self._engine
        if eng is not None:
            try:
                eng.stop()
            except RuntimeError as e:
                logger.debug(f"Speech shutdown: {e}")
