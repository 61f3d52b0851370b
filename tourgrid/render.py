"""
Tour Rendering Utilities

Text and image renderings of a tour grid, plus debug image management.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image, ImageDraw, ImageFont

from tourgrid.solver import Position, TourGrid


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

# Image layout
CELL_PX = 48
MARGIN_PX = 8

# Colors
BACKGROUND = "white"
GRID_LINE = "#9e9e9e"
VISITED_FILL = "#e3f2fd"
HIGHLIGHT_FILL = "#ffe082"
PATH_LINE = "#1976d2"
TEXT_COLOR = "#212121"


def format_grid(grid: TourGrid, empty: str = ".") -> str:
    """
    Render the grid as a right-aligned text table.

    Args:
        grid: Grid to render
        empty: Marker for unvisited cells

    Returns:
        Multi-line string, one row per line
    """
    width = max(len(str(grid.cell_count)), len(empty))
    lines = []
    for row in grid.grid:
        cells = [(str(v) if v > 0 else empty).rjust(width) for v in row]
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_tour_image(grid: TourGrid, highlight: Optional[Iterable] = None,
                      cell_px: int = CELL_PX) -> Image.Image:
    """
    Draw the grid, its step numbers and the visiting path.

    Args:
        grid: Grid to render
        highlight: Positions to fill with the highlight color
        cell_px: Cell side length in pixels

    Returns:
        RGB PIL Image
    """
    size = grid.size
    side = size * cell_px + 2 * MARGIN_PX
    img = Image.new("RGB", (side, side), BACKGROUND)
    draw = ImageDraw.Draw(img)

    try:
        font = ImageFont.truetype("arial.ttf", max(10, cell_px // 3))
    except OSError:
        font = ImageFont.load_default()

    marked = {Position.of(p) for p in highlight} if highlight else set()

    def cell_box(r: int, c: int):
        x0 = MARGIN_PX + c * cell_px
        y0 = MARGIN_PX + r * cell_px
        return [x0, y0, x0 + cell_px, y0 + cell_px]

    def center(pos: Position):
        x0, y0, _, _ = cell_box(pos.row, pos.col)
        return (x0 + cell_px // 2, y0 + cell_px // 2)

    for r in range(size):
        for c in range(size):
            value = grid.grid[r][c]
            if Position(r, c) in marked:
                fill = HIGHLIGHT_FILL
            elif value > 0:
                fill = VISITED_FILL
            else:
                fill = BACKGROUND
            draw.rectangle(cell_box(r, c), fill=fill, outline=GRID_LINE)

    path = grid.path()
    if len(path) > 1:
        draw.line([center(p) for p in path], fill=PATH_LINE, width=2)

    for pos in path:
        x, y = center(pos)
        draw.text((x - cell_px // 4, y - cell_px // 4), str(grid.grid[pos.row][pos.col]),
                  fill=TEXT_COLOR, font=font)

    return img


def save_tour_image(grid: TourGrid, path, highlight: Optional[Iterable] = None) -> Path:
    """
    Render the grid and save it as PNG.

    Args:
        grid: Grid to render
        path: Output file path
        highlight: Positions to highlight (e.g. the solve start)

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_tour_image(grid, highlight=highlight).save(path, "PNG")
    return path


def save_debug_image(grid: TourGrid, highlight: Optional[Iterable] = None) -> Path:
    """
    Save a timestamped tour image into DEBUG_DIR and prune old ones.

    Returns:
        Path written
    """
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    path = save_tour_image(grid, DEBUG_DIR / f"tour_{timestamp}.png", highlight)

    # Cleanup old debug images
    _cleanup_debug_images()
    return path


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob("tour_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        old_file.unlink(missing_ok=True)
