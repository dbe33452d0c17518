"""
gui
~~~
Qt view-model glue. No widgets and no direct SQL here – everything goes
through the repositories in `movieShelf.catalog.core`.

    from movieShelf.gui import CatalogController
"""

from movieShelf.gui.controller import CatalogController

__all__ = ["CatalogController"]
