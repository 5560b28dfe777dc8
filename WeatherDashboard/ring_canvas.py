"""PIL-backed canvas that renders the temperature ring chart to PNG."""
import io
from typing import List, Tuple

from PIL import Image, ImageDraw

from layout import BACKGROUND, DrawOp, calculate_ring


class RingCanvas:
    """
    Square RGB canvas for ring charts.

    Useful both for serving the chart image and for inspecting pixels in tests.
    """

    def __init__(self, size: int = 200):
        """
        Initialize ring canvas.

        Args:
            size: Width and height in pixels
        """
        self._size = size
        self.clear()

    @property
    def width(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        return self._size

    def clear(self) -> None:
        self._image = Image.new("RGB", (self._size, self._size), BACKGROUND)
        self._draw = ImageDraw.Draw(self._image)

    def draw_arc(self, box, start: float, end: float,
                 fill: Tuple[int, int, int], outline: Tuple[int, int, int]) -> None:
        self._draw.pieslice(box, start=start, end=end, fill=fill, outline=outline, width=1)

    def draw_cutout(self, box, fill: Tuple[int, int, int]) -> None:
        self._draw.ellipse(box, fill=fill)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        return self._image.getpixel((x, y))

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()


def render_ops(canvas: RingCanvas, ops: List[DrawOp]) -> None:
    """Execute drawing operations on a canvas, in order."""
    canvas.clear()
    for op in ops:
        if op.op_type == "arc":
            canvas.draw_arc(op.kwargs["box"], op.kwargs["start"], op.kwargs["end"],
                            op.kwargs["fill"], op.kwargs["outline"])
        elif op.op_type == "cutout":
            canvas.draw_cutout(op.kwargs["box"], op.kwargs["fill"])
        else:
            raise ValueError(f"Unknown draw operation: {op.op_type}")


def render_ring(percentage: int, size: int = 200) -> RingCanvas:
    canvas = RingCanvas(size=size)
    render_ops(canvas, calculate_ring(percentage, size))
    return canvas


def render_ring_png(percentage: int, size: int = 200) -> bytes:
    return render_ring(percentage, size).to_png()
