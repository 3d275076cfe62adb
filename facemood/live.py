# facemood/live.py
"""
Live (real-time) emotion session.

Owns the camera between start() and stop() and drives the per-frame loop:
capture -> locate faces -> keep the largest MAX_FACES -> crop/normalize ->
classify -> interpret -> draw, then publish the results and annotated frame.

Lifecycle: idle -> running -> stopped (stopped behaves like idle; start again).
- Collaborators (cascade, model, labels) load in the background; ticks that
  arrive before they are ready are skipped, up to LIVE_MAX_NOT_READY_TICKS in a row.
- Any other exception inside a tick stops the session (no retry).

This module also provides a live overlay window (run_live_overlay).
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Sequence, Tuple

import cv2

from facemood.capture import CameraSource
from facemood.classifier import Classifier
from facemood.config import Settings
from facemood.detector import FaceLocator
from facemood.errors import CameraUnavailableError, StartupError
from facemood.models import DetectionResult, LiveStatus
from facemood.pipeline import load_collaborators, process_frame
from facemood.surface import FrameBuffer

logger = logging.getLogger(__name__)

Loader = Callable[[Settings], Tuple[FaceLocator, Classifier, Sequence[str]]]

MSG_LOADING = "Loading models..."
MSG_READY = "Ready - press start"
MSG_RUNNING = "Running..."
MSG_STOPPED = "Camera stopped"


class LiveSession:
    """Single-camera live classification session."""
    def __init__(self, settings: Settings,
                 camera: Optional[CameraSource] = None,
                 loader: Optional[Loader] = None):
        self.s = settings
        self.camera = camera if camera is not None else CameraSource(settings.CAMERA_INDEX)
        self.surface = FrameBuffer()
        self._loader = loader or load_collaborators
        self._lock = threading.Lock()

        self._run = False
        self._state = "idle"
        self._message = MSG_LOADING
        self._worker: Optional[threading.Thread] = None
        self._token = threading.Event()
        self._token.set()  # no worker yet
        self._load_thread: Optional[threading.Thread] = None

        self._locator: Optional[FaceLocator] = None
        self._classifier: Optional[Classifier] = None
        self._labels: Optional[List[str]] = None
        self._load_error: Optional[str] = None

        self._results: List[DetectionResult] = []
        self._started_at: Optional[float] = None
        self._frames = 0
        self._not_ready = 0
        self._last_error: Optional[str] = None

    # ---- startup loading ----
    @property
    def ready(self) -> bool:
        return self._locator is not None and self._classifier is not None and self._labels is not None

    def load(self, background: bool = True) -> None:
        """Load collaborators; with background=True returns immediately."""
        if self._load_thread is not None and self._load_thread.is_alive():
            return
        with self._lock:
            self._load_error = None
            if not self._run:
                self._message = MSG_LOADING
        if background:
            self._load_thread = threading.Thread(target=self._load, daemon=True)
            self._load_thread.start()
        else:
            self._load()

    def collaborators(self) -> Optional[Tuple[FaceLocator, Classifier, List[str]]]:
        """Loaded (locator, classifier, labels), or None while not ready."""
        with self._lock:
            if self._locator is None or self._classifier is None or self._labels is None:
                return None
            return self._locator, self._classifier, list(self._labels)

    def reload(self) -> bool:
        """Retry a failed startup. Returns True when a load was (re)started."""
        if self.ready:
            return False
        self.load()
        return True

    def _load(self) -> None:
        try:
            locator, classifier, labels = self._loader(self.s)
        except Exception as e:
            logger.exception("[live] startup loading failed")
            with self._lock:
                self._load_error = str(e)
                self._message = f"Error: {e}"
            return
        with self._lock:
            self._locator, self._classifier, self._labels = locator, classifier, list(labels)
            if not self._run:
                self._message = MSG_READY
        logger.debug(f"[live] collaborators loaded; classes={self._labels}")

    # ---- lifecycle ----
    def start(self) -> str:
        """Acquire the camera and begin cycling.

        Returns "started", "already_running" or "failed" (see status().message).
        """
        with self._lock:
            if self._run:
                return "already_running"
            previous = self._worker
        # a worker left over from a timed-out stop or a failed tick must exit first
        if previous is not None and previous is not threading.current_thread():
            previous.join(self.s.LIVE_STOP_TIMEOUT)

        with self._lock:
            if self._run:
                return "already_running"
            if self._worker is not None and self._worker.is_alive():
                self._message = "Previous cycle still running; try again"
                return "failed"
            if self._load_error is not None:
                self._message = f"Error: {self._load_error}"
                return "failed"
            try:
                self.camera.open()
            except CameraUnavailableError as e:
                logger.warning(f"[live] camera unavailable: {e}")
                self._message = f"Could not open camera: {e}"
                return "failed"

            self._run = True
            self._state = "running"
            self._message = MSG_RUNNING
            self._started_at = time.time()
            self._frames = 0
            self._not_ready = 0
            self._last_error = None
            self._token = threading.Event()
            self._worker = threading.Thread(target=self._loop, args=(self._token,), daemon=True)
            self._worker.start()
        logger.debug("[live] session started")
        return "started"

    def stop(self) -> str:
        """Stop cycling, release the camera, clear the surface and results.

        Returns "stopped" or "not_running".
        """
        with self._lock:
            if not self._run:
                return "not_running"
            self._run = False
            self._token.set()
            worker = self._worker

        # the in-flight tick finishes; it will not publish
        if worker is not None and worker is not threading.current_thread():
            worker.join(self.s.LIVE_STOP_TIMEOUT)
            if worker.is_alive():
                logger.warning("[live] tick still running after stop timeout; releasing camera anyway")

        with self._lock:
            try:
                self.camera.release()
            finally:
                self.surface.clear()
                self._results = []
                self._state = "stopped"
                self._message = MSG_STOPPED if self._last_error is None else f"Error: {self._last_error}"
        logger.debug("[live] session stopped")
        return "stopped"

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker exits. Returns True if it has."""
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    # ---- state ----
    @property
    def running(self) -> bool:
        return self._run

    def results(self) -> List[DetectionResult]:
        with self._lock:
            return list(self._results)

    def status(self) -> LiveStatus:
        with self._lock:
            return LiveStatus(
                state=self._state,
                running=self._run,
                ready=self.ready,
                message=self._message,
                started_at=self._started_at,
                frames_processed=self._frames,
                face_count=len(self._results),
                faces=list(self._results),
                last_error=self._last_error,
            )

    # ---- loop ----
    def _loop(self, token: threading.Event) -> None:
        while not token.is_set():
            try:
                self._tick(token)
            except Exception as e:
                self._fail(token, e)
                return
            time.sleep(max(0.0, self.s.LIVE_TICK_INTERVAL))

    def run_cycle(self) -> bool:
        """Run one tick of the current session. Returns False when the tick was skipped.

        Raises StartupError when loading failed or the not-ready budget is spent.
        """
        return self._tick(self._token)

    def _tick(self, token: threading.Event) -> bool:
        if token.is_set():
            return False
        with self._lock:
            locator, classifier, labels = self._locator, self._classifier, self._labels
            load_error = self._load_error
        if load_error is not None:
            raise StartupError(load_error)

        frame = self.camera.read() if labels is not None else None
        if locator is None or classifier is None or labels is None or frame is None:
            self._not_ready += 1
            if self._not_ready > self.s.LIVE_MAX_NOT_READY_TICKS:
                what = "camera frames" if labels is not None else "models"
                raise StartupError(f"Gave up waiting for {what} after {self._not_ready - 1} ticks")
            return False
        self._not_ready = 0

        annotated, detections = process_frame(frame, locator, classifier, labels, self.s)

        with self._lock:
            if token.is_set() or token is not self._token:
                return False
            self._results = [d.result for d in detections]
            self._frames += 1
            self.surface.publish(annotated)
        return True

    def _fail(self, token: threading.Event, err: Exception) -> None:
        logger.exception("[live] cycle failed; stopping session")
        with self._lock:
            if token is not self._token:
                return
            self._last_error = str(err)
            self._message = f"Error: {err}"
            if token.is_set():
                # stop() is already tearing the session down
                return
            # camera goes before the flag so a restart never inherits a closing device
            self.camera.release()
            token.set()
            self._run = False
            self._state = "stopped"


# -----------------------------------------------------------------------------
# Live camera overlay window
# -----------------------------------------------------------------------------
def run_live_overlay(settings: Settings, camera_index: Optional[int] = None) -> None:
    """
    Open webcam, run a LiveSession and show the annotated surface.

    Press 'q' to quit.
    """
    cam_idx = settings.CAMERA_INDEX if camera_index is None else camera_index
    session = LiveSession(settings, camera=CameraSource(cam_idx))
    session.load()
    if session.start() != "started":
        raise RuntimeError(session.status().message)

    try:
        while session.running:
            frame = session.surface.snapshot()
            if frame is not None:
                cv2.imshow("Face Emotion (q to quit)", frame)
            if (cv2.waitKey(1) & 0xFF) == ord("q"):
                break
    finally:
        session.stop()
        cv2.destroyAllWindows()

    err = session.status().last_error
    if err:
        raise RuntimeError(err)
