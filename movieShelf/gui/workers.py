from PySide6.QtCore import QObject, Signal, Slot

from movieShelf.catalog.analytics.dashboard import catalog_stats
from movieShelf.catalog.analytics.enrichment import EnrichmentBatch, ReviewMeta, enrich_movies
from movieShelf.catalog.core.models import Movie
from movieShelf.catalog.core.review_repo import ReviewRepo
from movieShelf.utils import log_debug

# ───────────────────────── Worker skeletons ───────────────────────────────
class _EnrichWorker(QObject):
    """Review counts + snippets for one generation of the loaded movies."""
    finished = Signal(int, object)    # generation, EnrichmentBatch

    def __init__(self, generation: int, movies: list[Movie], reviews: ReviewRepo):
        super().__init__()
        self.generation = generation
        self.movies  = list(movies)
        self.reviews = reviews

    @Slot()
    def run(self):
        # per-movie failures are folded into the batch
        try:
            batch = enrich_movies(self.movies, self.reviews, generation=self.generation)
        except Exception as e:
            log_debug(f"enrich-worker error: {e}")
            err = ReviewMeta(error=str(e) or type(e).__name__)
            batch = EnrichmentBatch(self.generation, {m.id: err for m in self.movies})
        self.finished.emit(self.generation, batch)


class _StatsWorker(QObject):
    finished = Signal(object)         # CatalogStats
    failed   = Signal(str)

    def __init__(self, movies: list[Movie], reviews: ReviewRepo):
        super().__init__()
        self.movies  = list(movies)
        self.reviews = reviews

    @Slot()
    def run(self):
        try:
            stats = catalog_stats(self.movies, self.reviews)
        except Exception as e:
            log_debug(f"stats-worker error: {e}")
            self.failed.emit(str(e) or "Failed to load statistics")
            return
        self.finished.emit(stats)
