"""
layer.py

Ordered collection of features sharing one color and style.

A layer starts hidden. The first time it is shown it asks its loader to add
features (`add_feature`), after which hiding and showing only flip the flag.
Rendering is expected on a worker thread while the UI thread may call
`interrupt`; the layer's `CancellationToken` is handed to every feature at
render and hit-test time.
"""
from typing import Callable, List, Optional, Sequence, Tuple, Union
import logging
import threading

from spatialview.cancel import CancellationToken
from spatialview.config import RENDERING
from spatialview.converter import Converter
from spatialview.feature import Feature
from spatialview.primitives import Envelope, Point
from spatialview.rendering import ClipRect, DrawingSurface

logger = logging.getLogger(__name__)


class Layer:
    def __init__(self, layer_id: int, color: Optional[Sequence[float]] = None,
                 loader: Optional[Callable[['Layer'], None]] = None):
        self._layer_id = layer_id
        self.color = tuple(color) if color is not None else RENDERING['default_color']
        self._loader = loader
        self._loaded = False
        self._show = False
        self._fill_polygons = False
        self._features: List[Feature] = []
        self._features_lock = threading.Lock()
        self._envelope = Envelope()
        self._render_progress = 0.0
        self._token = CancellationToken()

    @property
    def layer_id(self) -> int:
        return self._layer_id

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def features(self) -> Tuple[Feature, ...]:
        with self._features_lock:
            return tuple(self._features)

    # ── visibility and loading ───────────────────────────────────────────────

    def hidden(self) -> bool:
        return not self._show

    def set_show(self, flag: bool) -> None:
        self._show = bool(flag)
        if self._show and not self._loaded:
            self._loaded = True
            self.load_data()

    def load_data(self) -> None:
        """Fetch rows from the data source; runs once, on first show."""
        if self._loader is not None:
            self._loader(self)

    @property
    def fill_polygons(self) -> bool:
        return self._fill_polygons

    @fill_polygons.setter
    def fill_polygons(self, fill: bool) -> None:
        self._fill_polygons = bool(fill)

    # ── features ─────────────────────────────────────────────────────────────

    def add_feature(self, row_id: int, data: Union[bytes, str], is_text: bool = False) -> Feature:
        feature = Feature(row_id, data, is_text)
        with self._features_lock:
            self._envelope = self._envelope.union(feature.get_envelope())
            self._features.append(feature)
        return feature

    def get_envelope(self) -> Envelope:
        """Union of all feature envelopes in geodetic degrees."""
        return self._envelope

    # ── render / hit test ────────────────────────────────────────────────────

    def query_render_progress(self) -> float:
        return self._render_progress

    def render(self, converter: Converter) -> None:
        features = self.features
        self._render_progress = 0.0
        if not features:
            self._render_progress = 1.0
            return

        step = 1.0 / len(features)
        for feature in features:
            if self._token.cancelled or converter.token.cancelled:
                break
            if not feature.render(converter, self._token):
                if self._token.cancelled or converter.token.cancelled:
                    break
                # only this feature was interrupted; it keeps its previous shapes
                logger.debug('layer %s: feature %s skipped', self._layer_id, feature.row_id)
            self._render_progress += step
        else:
            self._render_progress = 1.0
            return
        logger.debug('layer %s: render interrupted at %.0f%%', self._layer_id, self._render_progress * 100)

    def feature_within(self, p: Point) -> Optional[Feature]:
        for feature in self.features:
            if self._token.cancelled:
                break
            if feature.within(p, self._token):
                return feature
        return None

    def repaint(self, surface: DrawingSurface, scale: float, clip_area: Optional[ClipRect] = None) -> None:
        surface.save()
        surface.set_line_width(RENDERING['line_width'])
        surface.set_source_rgba(*self.color)
        try:
            for feature in self.features:
                if self._token.cancelled:
                    break
                feature.repaint(surface, scale, clip_area, self._fill_polygons, self._token)
        finally:
            surface.restore()

    def interrupt(self) -> None:
        self._token.cancel()
        for feature in self.features:
            feature.interrupt()
