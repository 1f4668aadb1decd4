"""
Rendering Engine
=================
Diffing terminal screen plus a Braille sub-pixel canvas.

TerminalSink implements the DrawSink primitives by scaling the fixed
1920x1080 logical viewport onto whatever Braille grid the terminal has.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
import math

from blessed import Terminal

from .camera import VIEWPORT_WIDTH, VIEWPORT_HEIGHT


HUD_ROWS = 1

# ANSI 256 color constants for the HUD
NEON_CYAN = 51
NEON_YELLOW = 226
NEON_RED = 196
GRAY_MED = 245
GRAY_DARK = 238
WHITE = 255

DEFAULT_FG = 7
BLANK = (' ', DEFAULT_FG)


class ScreenBuffer:
    """
    Two flat grids of (char, color) glyphs.

    Frames are composed into the pending grid. flush() compares it with
    what is already on screen and emits escapes only for glyphs that
    differ, so the terminal never has to be cleared between frames.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self._shown: List[Tuple[str, int]] = []
        self._pending: List[Tuple[str, int]] = []
        self._allocate()

    def _allocate(self):
        size = self.width * self.height
        self._shown = [BLANK] * size
        self._pending = [BLANK] * size

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self._allocate()

    def wipe(self):
        self._pending = [BLANK] * (self.width * self.height)

    def put(self, x: int, y: int, char: str, color: int = DEFAULT_FG):
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pending[y * self.width + x] = (char, color)

    def write(self, x: int, y: int, text: str, color: int = DEFAULT_FG):
        for offset, char in enumerate(text):
            self.put(x + offset, y, char, color)

    def glyph(self, x: int, y: int) -> Tuple[str, int]:
        return self._pending[y * self.width + x]

    def flush(self) -> str:
        """Escape string that turns the shown frame into the pending one."""
        out = []
        active_color: Optional[int] = None
        for index, (glyph, shown) in enumerate(zip(self._pending, self._shown)):
            if glyph == shown:
                continue
            char, color = glyph
            out.append(self.term.move_xy(index % self.width, index // self.width))
            if color != active_color:
                out.append(self.term.normal + self.term.color(color))
                active_color = color
            out.append(char)

        self._shown, self._pending = self._pending, self._shown
        return ''.join(out)


class BrailleCanvas:
    """
    Each character cell holds a 2x4 dot grid (U+2800 block).

    Color is per cell: the last dot set decides it.
    """

    # Braille dot bit per (column, row) inside a cell
    DOTS = {
        (0, 0): 0x01, (0, 1): 0x02, (0, 2): 0x04, (0, 3): 0x40,
        (1, 0): 0x08, (1, 1): 0x10, (1, 2): 0x20, (1, 3): 0x80,
    }
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.canvas: List[List[int]] = []
        self.colors: List[List[int]] = []
        self.clear()

    def clear(self):
        self.canvas = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[WHITE] * self.char_width for _ in range(self.char_height)]

    def set_pixel(self, px: int, py: int, color: int = WHITE):
        """Off-canvas dots are dropped."""
        if px < 0 or py < 0 or px >= self.pixel_width or py >= self.pixel_height:
            return
        row, col = py // 4, px // 2
        self.canvas[row][col] |= self.DOTS[(px % 2, py % 4)]
        self.colors[row][col] = color

    def get_char(self, cx: int, cy: int) -> Tuple[str, int]:
        """('', WHITE) for empty or out-of-range cells."""
        if not (0 <= cx < self.char_width and 0 <= cy < self.char_height):
            return '', WHITE
        bits = self.canvas[cy][cx]
        if not bits:
            return '', WHITE
        return chr(self.BASE + bits), self.colors[cy][cx]

    def lit_cells(self) -> Iterator[Tuple[int, int, str, int]]:
        """(cx, cy, char, color) for every cell with at least one dot."""
        for cy, row in enumerate(self.canvas):
            for cx, bits in enumerate(row):
                if bits:
                    yield cx, cy, chr(self.BASE + bits), self.colors[cy][cx]


# =============================================================================
# RASTERIZATION
# =============================================================================

def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int]]:
    """Bresenham line, both endpoints included."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def ellipse_outline_points(cx: float, cy: float, rx: float, ry: float) -> Iterator[Tuple[int, int]]:
    """Sample an ellipse outline densely enough to leave no gaps."""
    steps = max(8, int(2 * math.pi * max(rx, ry)) + 1)
    for i in range(steps):
        angle = 2 * math.pi * i / steps
        yield int(round(cx + rx * math.cos(angle))), int(round(cy + ry * math.sin(angle)))


def filled_ellipse_rows(cx: float, cy: float, rx: float, ry: float,
                        max_y: int) -> Iterator[Tuple[int, int, int]]:
    """Yield (y, x_start, x_end) spans covering a filled ellipse, clipped to [0, max_y)."""
    ry = max(ry, 0.5)
    rx = max(rx, 0.5)
    y_start = max(0, int(math.floor(cy - ry)))
    y_end = min(max_y - 1, int(math.ceil(cy + ry)))
    for y in range(y_start, y_end + 1):
        t = (y - cy) / ry
        if abs(t) > 1:
            continue
        half = rx * math.sqrt(1 - t * t)
        yield y, int(round(cx - half)), int(round(cx + half))


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


class TerminalSink:
    """
    DrawSink that rasterizes onto a BrailleCanvas.

    Coordinates arrive in the logical 1920x1080 viewport and are scaled
    to the canvas. Stroke width is always one pixel at this resolution.
    """

    def __init__(self, canvas: BrailleCanvas, term: Terminal = None,
                 viewport_w: int = VIEWPORT_WIDTH, viewport_h: int = VIEWPORT_HEIGHT):
        self.canvas = canvas
        self.term = term
        self.sx = canvas.pixel_width / viewport_w
        self.sy = canvas.pixel_height / viewport_h
        self._palette: Dict[Tuple[int, int, int], int] = {}

    def color_index(self, color) -> int:
        """Nearest terminal color for an RGBA tuple (alpha ignored)."""
        rgb = (int(color[0]), int(color[1]), int(color[2]))
        index = self._palette.get(rgb)
        if index is None:
            index = self.term.rgb_downconvert(*rgb) if self.term is not None else WHITE
            self._palette[rgb] = index
        return index

    def _to_px(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.sx, y * self.sy

    def fill_circle(self, x, y, radius, color):
        if not _finite(x, y, radius):
            return
        cx, cy = self._to_px(x, y)
        idx = self.color_index(color)
        for row, x_start, x_end in filled_ellipse_rows(
                cx, cy, radius * self.sx, radius * self.sy, self.canvas.pixel_height):
            for px in range(max(0, x_start), min(self.canvas.pixel_width - 1, x_end) + 1):
                self.canvas.set_pixel(px, row, idx)

    def stroke_circle(self, x, y, radius, width, color):
        if not _finite(x, y, radius):
            return
        cx, cy = self._to_px(x, y)
        idx = self.color_index(color)
        for px, py in ellipse_outline_points(cx, cy, radius * self.sx, radius * self.sy):
            self.canvas.set_pixel(px, py, idx)

    def stroke_line(self, x1, y1, x2, y2, width, color):
        if not _finite(x1, y1, x2, y2):
            return
        ax, ay = self._to_px(x1, y1)
        bx, by = self._to_px(x2, y2)
        idx = self.color_index(color)
        for px, py in line_points(int(round(ax)), int(round(ay)), int(round(bx)), int(round(by))):
            self.canvas.set_pixel(px, py, idx)

    def stroke_rect(self, x, y, w, h, width, color):
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
            self.stroke_line(ax, ay, bx, by, width, color)


@dataclass
class GameRenderer:
    """Braille playfield on top, one HUD row underneath."""
    term: Terminal
    screen: ScreenBuffer = field(init=False)
    braille: BrailleCanvas = field(init=False)
    sink: TerminalSink = field(init=False)

    show_fps: bool = False
    current_fps: float = 60.0

    def __post_init__(self):
        self.screen = ScreenBuffer(self.term)
        self._build_canvas()

    def _build_canvas(self):
        rows = max(1, self.screen.height - HUD_ROWS)
        self.braille = BrailleCanvas(self.screen.width, rows)
        self.sink = TerminalSink(self.braille, self.term)

    @property
    def width(self) -> int:
        return self.screen.width

    @property
    def height(self) -> int:
        return self.screen.height

    @property
    def hud_row(self) -> int:
        return self.screen.height - HUD_ROWS

    def begin_frame(self):
        self.screen.wipe()
        self.braille.clear()

    def end_frame(self) -> str:
        """Copy the Braille layer onto the screen and return the diff to print."""
        for cx, cy, char, color in self.braille.lit_cells():
            self.screen.put(cx, cy, char, color)
        return self.screen.flush()

    def render_hud(self, life: int, enemies: int, projectiles: int, debug: bool):
        y = self.hud_row
        self.screen.write(0, y, ' ' * self.width, GRAY_DARK)
        fields = [
            (f'LIFE:{life:>4}', NEON_CYAN if life > 30 else NEON_RED),
            (f'  ENEMIES:{enemies}', NEON_YELLOW),
            (f'  PROJECTILES:{projectiles}', GRAY_MED),
        ]
        if debug:
            fields.append(('  DEBUG', NEON_RED))
        if self.show_fps:
            fields.append((f'  FPS:{self.current_fps:4.0f}', GRAY_MED))

        x = 1
        for text, color in fields:
            self.screen.write(x, y, text, color)
            x += len(text)

    def resize(self, width: int, height: int):
        self.screen.resize(width, height)
        self._build_canvas()
