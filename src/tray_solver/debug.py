"""
Board Debug Utilities

Functions for saving rendered board images and managing debug output.
"""

import colorsys
from pathlib import Path
from typing import Iterable, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .board import Board
from .piece import Piece


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

CELL_SIZE = 24
MARGIN = 8
CAPTION_HEIGHT = 20

FREE_COLOR = "#f5f5f5"
GRID_COLOR = "#bdbdbd"
GOAL_COLOR = "#d32f2f"


def piece_color(index: int) -> str:
    """
    Get a stable fill color for a piece index.

    Args:
        index: Piece handle

    Returns:
        Hex color code string
    """
    hue = (index * 0.618033988749895) % 1.0
    r, g, b = colorsys.hsv_to_rgb(hue, 0.45, 0.90)
    return f"#{int(r * 255):02x}{int(g * 255):02x}{int(b * 255):02x}"


def render_board(board: Board, goal: Optional[Iterable[Piece]] = None,
                 cell_size: int = CELL_SIZE, caption: str = "") -> Image.Image:
    """
    Draw a board.

    Annotations include:
    - Grid lines
    - Pieces filled with per-index colors and labeled with their index
    - Goal pieces outlined in red
    - A caption with the extent, piece and free-cell counts

    Args:
        board: Board to draw
        goal: Goal pieces to outline (optional)
        cell_size: Pixel size of one cell
        caption: Extra caption text

    Returns:
        RGB PIL Image
    """
    width = board.cols * cell_size + 2 * MARGIN
    height = board.rows * cell_size + 2 * MARGIN + CAPTION_HEIGHT
    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    def box(top: int, left: int, bottom: int, right: int):
        return [MARGIN + left * cell_size, MARGIN + top * cell_size,
                MARGIN + (right + 1) * cell_size - 1, MARGIN + (bottom + 1) * cell_size - 1]

    draw.rectangle(box(0, 0, board.rows - 1, board.cols - 1), fill=FREE_COLOR)
    for r in range(board.rows + 1):
        y = MARGIN + r * cell_size
        draw.line([MARGIN, y, MARGIN + board.cols * cell_size, y], fill=GRID_COLOR)
    for c in range(board.cols + 1):
        x = MARGIN + c * cell_size
        draw.line([x, MARGIN, x, MARGIN + board.rows * cell_size], fill=GRID_COLOR)

    for index, piece in enumerate(board.pieces):
        draw.rectangle(box(piece.top, piece.left, piece.bottom, piece.right),
                       fill=piece_color(index), outline="black")
        x0, y0, _, _ = box(piece.top, piece.left, piece.bottom, piece.right)
        draw.text((x0 + 3, y0 + 2), str(index), fill="black", font=font)

    for piece in goal or ():
        draw.rectangle(box(piece.top, piece.left, piece.bottom, piece.right),
                       outline=GOAL_COLOR, width=2)

    summary = f"{board.rows}x{board.cols}, pieces: {board.piece_count}, free: {board.free_count}"
    if caption:
        summary = f"{summary}, {caption}"
    draw.text((MARGIN, height - CAPTION_HEIGHT + 4), summary, fill="blue", font=font)
    return image


def save_board_image(board: Board, path: Union[str, Path],
                     goal: Optional[Iterable[Piece]] = None, caption: str = "") -> Path:
    """
    Render a board and save it as PNG, then prune old debug images.

    Args:
        board: Board to draw
        path: Output file path (relative paths land in DEBUG_DIR)
        goal: Goal pieces to outline (optional)
        caption: Extra caption text

    Returns:
        Path of the written file
    """
    path = Path(path)
    if not path.is_absolute() and path.parent == Path("."):
        path = DEBUG_DIR / path
    path.parent.mkdir(parents=True, exist_ok=True)

    render_board(board, goal, caption=caption).save(path, "PNG")

    _cleanup_debug_images(path.parent)
    return path


def _cleanup_debug_images(directory: Path) -> None:
    """Remove old board images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not directory.exists():
        return

    # Get all board images sorted by modification time
    debug_files = sorted(
        directory.glob("board_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except FileNotFoundError:
            continue
