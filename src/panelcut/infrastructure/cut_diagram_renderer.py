"""ASCII cut diagrams for optimized layouts.

Draws each consumed stock piece as a scaled character grid showing the
placed parts, their sizes and rotation markers.
"""

from __future__ import annotations

from collections import Counter

from panelcut.domain.results import OptimizationResult, Placement, SheetUsage

# Terminal characters are roughly twice as tall as they are wide
CHAR_ASPECT = 0.5


class CutDiagramRenderer:
    """Renders sheet layouts as text for terminal display.

    Attributes:
        show_dimensions: Whether to print part sizes inside each box.
        show_labels: Whether to print part names inside each box.
        min_height: Minimum grid height in lines.
    """

    def __init__(
        self,
        show_dimensions: bool = True,
        show_labels: bool = True,
        min_height: int = 6,
    ) -> None:
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.min_height = min_height

    def render_ascii(
        self,
        usage: SheetUsage,
        width: int = 80,
        total_sheets: int = 1,
        sheet_number: int = 1,
    ) -> str:
        """Generate an ASCII diagram for one stock piece.

        Args:
            usage: The consumed stock piece and its placements.
            width: Output width in characters, borders included.
            total_sheets: Total number of pieces, for the header.
            sheet_number: 1-based position of this piece, for the header.

        Returns:
            Multi-line string with a header and a bordered grid.
        """
        stock = usage.stock
        usable_width = max(width - 2, 10)
        scale_x = usable_width / stock.length

        grid_height = int(usable_width * (stock.width / stock.length) * CHAR_ASPECT)
        grid_height = max(grid_height, self.min_height)
        scale_y = grid_height / stock.width

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in usage.placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        waste_pct = 100.0 - usage.efficiency
        lines = [
            f"{usage.sheet_id} ({sheet_number} of {total_sheets}) - "
            f"{stock.describe()} - {usage.piece_count} parts, {waste_pct:.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: Placement,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = int(placement.x * scale_x)
        y1 = int(placement.y * scale_y)
        x2 = int((placement.x + placement.footprint_width) * scale_x)
        y2 = int((placement.y + placement.footprint_height) * scale_y)

        # Clamp to grid bounds
        x1 = max(0, min(x1, grid_width - 1))
        x2 = max(0, min(x2, grid_width - 1))
        y1 = max(0, min(y1, grid_height - 1))
        y2 = max(0, min(y2, grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        texts: list[str] = []
        if self.show_labels:
            texts.append(placement.name or placement.part_id)
        if self.show_dimensions:
            dims = f"{placement.length:.0f}x{placement.width:.0f}"
            texts.append(dims + "R" if placement.rotated else dims)

        for offset, text in enumerate(texts, start=1):
            row = y1 + offset
            if row >= y2:
                break
            text = text[: max(x2 - x1 - 1, 0)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, result: OptimizationResult, width: int = 80) -> str:
        """Generate ASCII diagrams for every stock piece, plus a summary line."""
        if not result.success or not result.sheet_usages:
            return "No sheets to display."

        total = result.total_sheets
        parts: list[str] = []
        for number, usage in enumerate(result.sheet_usages, start=1):
            parts.append(self.render_ascii(usage, width, total, number))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total} sheet{'s' if total != 1 else ''}, "
            f"{100.0 - result.efficiency:.1f}% total waste"
        )
        for description, count in self._sheets_by_stock(result).items():
            parts.append(f"  {description}: {count} sheet{'s' if count != 1 else ''}")
        return "\n".join(parts)

    def render_waste_summary(self, result: OptimizationResult) -> str:
        """Text summary of sheet usage and waste per stock piece."""
        if not result.success:
            return f"CUT OPTIMIZATION FAILED\n{result.message}"

        lines = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {result.total_sheets}",
            f"Total Parts: {result.total_placements}",
            f"Total Waste: {result.total_waste:,.0f} mm² "
            f"({100.0 - result.efficiency:.1f}%)",
            "",
            "Sheets by Stock:",
        ]
        for description, count in self._sheets_by_stock(result).items():
            lines.append(f"  {description}: {count} sheet{'s' if count != 1 else ''}")
        lines.append("")
        lines.append("Per Sheet:")
        for usage in result.sheet_usages:
            lines.append(
                f"  {usage.sheet_id}: {usage.piece_count} parts, "
                f"{usage.efficiency:.1f}% used, {usage.waste_area:,.0f} mm² waste"
            )
        return "\n".join(lines)

    @staticmethod
    def _sheets_by_stock(result: OptimizationResult) -> Counter[str]:
        return Counter(usage.stock.describe() for usage in result.sheet_usages)
