"""
Background conversion with last-request-wins ordering.

Requests get increasing sequence numbers on submit. Workers convert them in
any order, but a result is only published when its number is higher than
the one already published, so an old request finishing late never replaces
the output of a newer one.
"""

import queue
import sys
import threading

from .convert import convert
from .decode import decode
from .glyphs import default_glyph_table

SENTINEL = object()


class LatestConverter:
    def __init__(self, glyph_table=None, workers=2, on_result=None):
        self.glyph_table = glyph_table
        self.on_result = on_result
        self._workers_count = max(1, int(workers))
        self._queue = queue.Queue()
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._deliver_lock = threading.Lock()
        self._next_seq = 0
        self._published_seq = -1
        self._published_art = None
        self._errors = {}
        self._threads = []

    def start(self):
        if self._threads:
            return self
        if self.glyph_table is None:
            self.glyph_table = default_glyph_table()
        for i in range(self._workers_count):
            t = threading.Thread(target=self._worker, name=f"glyphart-worker-{i}", daemon=True)
            t.start()
            self._threads.append(t)
        return self

    def stop(self, timeout=1.0):
        if not self._threads:
            return
        self._queue.put(SENTINEL)
        for t in self._threads:
            t.join(timeout=timeout)
        self._threads = []
        # fresh queue so the converter can be started again
        self._queue = queue.Queue()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def submit(self, image, config):
        """Queue a conversion; image is a DecodedImage or encoded bytes."""
        with self._lock:
            seq = self._next_seq
            self._next_seq += 1
        self._queue.put((seq, image, config))
        return seq

    def latest(self):
        with self._lock:
            if self._published_seq < 0:
                return None
            return self._published_seq, self._published_art

    def error(self, seq):
        with self._lock:
            return self._errors.get(seq)

    def wait(self, seq, timeout=None):
        """Block until request seq (or a newer one) is published or failed.

        Returns the latest (seq, art), or None on timeout.
        """
        with self._cond:
            done = self._cond.wait_for(
                lambda: self._published_seq >= seq or seq in self._errors, timeout=timeout)
            if not done or self._published_seq < 0:
                return None
            return self._published_seq, self._published_art

    def _stale(self, seq):
        with self._lock:
            return seq < self._published_seq

    def _publish(self, seq, art):
        # held across the check and the callback so on_result sees
        # sequence numbers in increasing order only
        with self._deliver_lock:
            with self._cond:
                if seq <= self._published_seq:
                    return False
                self._published_seq = seq
                self._published_art = art
                for old in [s for s in self._errors if s < seq]:
                    del self._errors[old]
                self._cond.notify_all()
            if self.on_result is not None:
                self.on_result(seq, art)
        return True

    def _fail(self, seq, exc):
        print(f"[worker error] request {seq}: {exc}", file=sys.stderr)
        with self._cond:
            # errors older than the published result are of no interest
            if seq > self._published_seq:
                self._errors[seq] = exc
            self._cond.notify_all()

    def _worker(self):
        while True:
            item = self._queue.get()
            try:
                if item is SENTINEL:
                    self._queue.put(SENTINEL)
                    return
                seq, image, config = item
                if self._stale(seq):
                    continue
                try:
                    if isinstance(image, (bytes, bytearray)):
                        image = decode(bytes(image))
                    art = convert(image, config, self.glyph_table)
                except Exception as e:
                    self._fail(seq, e)
                    continue
                self._publish(seq, art)
            finally:
                self._queue.task_done()
