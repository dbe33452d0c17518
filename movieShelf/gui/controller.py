from __future__ import annotations
from typing import Any, Mapping, Optional

from PySide6.QtCore import QObject, QThread, Signal, Slot

from movieShelf.catalog.analytics.enrichment import EnrichmentBatch, EnrichmentTracker, ReviewMeta
from movieShelf.catalog.analytics.view import FilterBy, SortBy, ViewState, empty_message
from movieShelf.catalog.core.models import Movie, Review
from movieShelf.catalog.core.movie_repo import MovieRepo
from movieShelf.catalog.core.review_repo import ReviewRepo
from movieShelf.catalog.errors import FetchFailure, MutationFailure, ValidationFailure
from movieShelf.gui.workers import _EnrichWorker, _StatsWorker
from movieShelf.utils import log_debug


class CatalogController(QObject):
    """
    View-model for the browsing and admin pages.

    Holds the current `ViewState`, re-projects the cached collection on every
    change, and runs aggregation on worker threads. Views only connect to the
    signals; they never touch the repositories.
    """
    movies_changed   = Signal(object)        # projected list[Movie]
    enrichment_ready = Signal(object)        # EnrichmentBatch
    stats_ready      = Signal(object)        # CatalogStats
    stats_failed     = Signal(str)
    load_failed      = Signal(str)           # blocking: no partial render
    notice           = Signal(str)           # non-blocking notification
    invalid          = Signal(str, str)      # field, message

    def __init__(
        self,
        movies: MovieRepo,
        reviews: ReviewRepo,
        threaded: bool = True,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.movies   = movies
        self.reviews  = reviews
        self.threaded = threaded
        self.state    = ViewState()
        self.batch    = EnrichmentBatch(0)
        self._tracker = EnrichmentTracker()
        self._running: set[tuple[QThread, QObject]] = set()

    # ───────────────────────── loading / projection ──────────────────────
    def load(self) -> bool:
        """(Re)fetch the collection; emits `load_failed` instead of a partial list."""
        try:
            self.movies.fetch_all()
        except FetchFailure as e:
            self.load_failed.emit(str(e))
            return False
        self._publish()
        self.refresh_enrichment()
        return True

    def visible(self) -> list[Movie]:
        return self.state.apply(self.movies.movies)

    def empty_text(self) -> str:
        return empty_message(self.state)

    def meta_for(self, movie_id: str) -> ReviewMeta:
        return self.batch.for_movie(movie_id)

    def set_query(self, query: str) -> None:
        self._set_state(self.state.with_query(query))

    def set_filter(self, filter_by: FilterBy | str) -> None:
        self._set_state(self.state.with_filter(filter_by))

    def set_sort(self, sort_by: SortBy | str) -> None:
        self._set_state(self.state.with_sort(sort_by))

    def _set_state(self, state: ViewState) -> None:
        self.state = state
        self._publish()

    def _publish(self) -> None:
        self.movies_changed.emit(self.visible())

    # ───────────────────────── aggregation ───────────────────────────────
    def refresh_enrichment(self) -> int:
        """Start a new enrichment generation for the loaded movies."""
        generation = self._tracker.begin()
        worker = _EnrichWorker(generation, list(self.movies.movies), self.reviews)
        worker.finished.connect(self._on_enriched)
        self._start_worker(worker)
        return generation

    @Slot(int, object)
    def _on_enriched(self, generation: int, batch: EnrichmentBatch) -> None:
        if not self._tracker.is_current(generation):
            log_debug(f"discarding stale enrichment batch {generation}")
            return
        self.batch = batch
        self.enrichment_ready.emit(batch)
        if batch.failures:
            self.notice.emit(f"Review info unavailable for {len(batch.failures)} movie(s)")

    def load_stats(self) -> None:
        worker = _StatsWorker(list(self.movies.movies), self.reviews)
        worker.finished.connect(self.stats_ready)
        worker.failed.connect(self.stats_failed)
        self._start_worker(worker)

    # ───────────────────────── client actions ────────────────────────────
    def toggle_watched(self, movie_id: str) -> bool:
        return self._mutate(self.movies.toggle_watched, movie_id)

    def toggle_favorite(self, movie_id: str) -> bool:
        return self._mutate(self.movies.toggle_favorite, movie_id)

    def add_review(self, movie_id: str, text: str, spoiler: bool = False) -> Optional[Review]:
        try:
            review = self.reviews.add(movie_id, text, spoiler)
        except ValidationFailure as e:
            self.invalid.emit(e.field or "", str(e))
            return None
        except MutationFailure as e:
            self.notice.emit(str(e))
            return None
        self.refresh_enrichment()
        return review

    # ───────────────────────── admin actions ─────────────────────────────
    def create_movie(self, fields: Mapping[str, Any]) -> bool:
        return self._admin(self.movies.create, fields)

    def update_movie(self, movie_id: str, fields: Mapping[str, Any]) -> bool:
        return self._admin(self.movies.update, movie_id, fields)

    def delete_movie(self, movie_id: str) -> bool:
        return self._admin(self.movies.delete, movie_id)

    def _admin(self, fn, *args) -> bool:
        """Run an admin write, then re-fetch the whole collection."""
        try:
            fn(*args)
        except ValidationFailure as e:
            self.invalid.emit(e.field or "", str(e))
            return False
        except MutationFailure as e:
            self.notice.emit(str(e))
            return False
        return self.load()

    def _mutate(self, fn, *args) -> bool:
        try:
            fn(*args)
        except MutationFailure as e:
            self.notice.emit(str(e))
            return False
        self._publish()
        return True

    # ───────────────────────── worker plumbing ───────────────────────────
    def _start_worker(self, worker: QObject) -> None:
        if not self.threaded:
            worker.run()
            return

        thr = QThread()
        worker.moveToThread(thr)
        pair = (thr, worker)
        self._running.add(pair)

        worker.finished.connect(thr.quit)
        if hasattr(worker, "failed"):
            worker.failed.connect(thr.quit)
        thr.finished.connect(lambda: self._running.discard(pair))
        thr.finished.connect(worker.deleteLater)
        thr.finished.connect(thr.deleteLater)

        thr.started.connect(worker.run)
        thr.start()
