"""
Presentation state and browser-event handling.

The browser side only samples raw metrics (see VIEWPORT_SAMPLER_JS); every
decision made from them lives in the pure functions below.
"""

from dataclasses import asdict, dataclass, replace
from typing import Optional

SAMPLE_INTERVAL_MS = 100
RESIZE_DEBOUNCE_MS = 250
RESIZE_TICK_MS = 50
REVEAL_THRESHOLD = 0.2

CHART_MIN_WIDTH = 320
CHART_MAX_WIDTH = 800
PAGE_PADDING = 40

COUNT_UP_DURATION_MS = 2000
COUNT_UP_TICK_MS = 50

SKILL_VIEW_MODES = ('cloud', 'bar')


# ============================================
# SKILLS VIEW MODE
# ============================================

@dataclass(frozen=True)
class SkillsViewState:
    mode: str = 'cloud'

    def __post_init__(self):
        if self.mode not in SKILL_VIEW_MODES:
            raise ValueError(f"Unknown skills view mode: {self.mode!r}")

    def toggle(self):
        return SkillsViewState('bar' if self.mode == 'cloud' else 'cloud')

    @property
    def button_label(self):
        return 'Switch to Bar Chart' if self.mode == 'cloud' else 'Switch to Word Cloud'

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        return cls(**data) if data else cls()


# ============================================
# RESIZE
# ============================================

@dataclass(frozen=True)
class ResizeDebounce:
    """
    Width waiting to be drawn, when it was last seen to change, and the last
    width charts were drawn at.

    The timer component only ticks; the debounce delay is measured against
    `armed_at`, so every width change restarts the countdown.
    """
    pending: Optional[int] = None
    settled: Optional[int] = None
    armed_at: Optional[float] = None

    def observe(self, width, now_ms):
        """
        Record a sampled viewport width at time `now_ms`.

        Returns (state, armed); armed means the timer must be running.
        """
        current = self.pending if self.pending is not None else self.settled
        if width is None or width == current:
            return self, False
        if width == self.settled:
            # Resized back before the delay elapsed
            return replace(self, pending=None, armed_at=None), False
        return replace(self, pending=width, armed_at=now_ms), True

    def fire(self, now_ms, wait_ms=RESIZE_DEBOUNCE_MS):
        """
        Timer tick at `now_ms`: returns (state, width to redraw at or None).

        A pending width settles only once it has been stable for `wait_ms`.
        """
        if self.pending is None:
            return self, None
        if now_ms - self.armed_at < wait_ms:
            return self, None
        return ResizeDebounce(pending=None, settled=self.pending), self.pending

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        return cls(**data) if data else cls()


def chart_width(viewport_width):
    """Chart width for a viewport, capped at the design width."""
    return max(CHART_MIN_WIDTH, min(viewport_width - PAGE_PADDING, CHART_MAX_WIDTH))


# ============================================
# SCROLL
# ============================================

def scroll_progress(scroll_y, document_height, viewport_height):
    """Percentage of the scrollable distance covered, 0..100."""
    scrollable = document_height - viewport_height
    if scrollable <= 0:
        return 0.0
    return max(0.0, min(100.0, scroll_y / scrollable * 100))


def reveal_chapters(revealed, ratios, threshold=REVEAL_THRESHOLD):
    """
    Add every chapter whose visible ratio reached the threshold.

    Chapters never leave the revealed set.
    """
    newly_visible = {chapter for chapter, ratio in (ratios or {}).items() if ratio >= threshold}
    return sorted(set(revealed or []) | newly_visible)


def chapter_class(chapter, revealed):
    return 'chapter visible' if chapter in revealed else 'chapter'


# ============================================
# INTRO COUNTER
# ============================================

def count_up_value(end, elapsed_ms, duration_ms=COUNT_UP_DURATION_MS):
    """Counter value `elapsed_ms` into a linear count from 0 to `end`."""
    if duration_ms <= 0 or elapsed_ms >= duration_ms:
        return end
    return round(end * max(elapsed_ms, 0) / duration_ms)


COUNT_UP_TICKS = COUNT_UP_DURATION_MS // COUNT_UP_TICK_MS


# Samples viewport metrics and the visible share of every .chapter element.
# Returns no_update when nothing moved, so the Python side only runs on change.
VIEWPORT_SAMPLER_JS = """
function(n, previous) {
    var doc = document.documentElement;
    var viewportHeight = window.innerHeight;
    var chapters = {};
    document.querySelectorAll('.chapter').forEach(function (el) {
        var rect = el.getBoundingClientRect();
        var visible = Math.min(rect.bottom, viewportHeight) - Math.max(rect.top, 0);
        var ratio = rect.height > 0 ? Math.max(0, visible) / rect.height : 0;
        try {
            chapters[JSON.parse(el.id).index] = Math.round(ratio * 100) / 100;
        } catch (e) {
            chapters[el.id] = Math.round(ratio * 100) / 100;
        }
    });
    var metrics = {
        scroll_y: window.scrollY,
        document_height: doc.scrollHeight,
        viewport_height: viewportHeight,
        viewport_width: window.innerWidth,
        chapters: chapters
    };
    if (previous && JSON.stringify(previous) === JSON.stringify(metrics)) {
        return window.dash_clientside.no_update;
    }
    return metrics;
}
"""
