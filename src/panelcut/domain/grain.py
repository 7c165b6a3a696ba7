"""Grain direction policy for sheet placements.

Sheet grain is a hard constraint: when both the part and the stock carry a
grain direction, exactly one rotation state is legal and the other is never
attempted.
"""

from __future__ import annotations

from .value_objects import (
    EPSILON,
    GrainDirection,
    MaterialType,
    Orientation,
    PartRequirement,
    StockDefinition,
)


class GrainPolicy:
    """Decides which orientations of a part are legal on a stock row.

    A part in its natural orientation has its length along the stock
    length (x axis). Rotating swaps length and width.
    """

    @staticmethod
    def rotation_required(
        part_grain: GrainDirection | str | None,
        stock_grain: GrainDirection | str | None,
    ) -> bool | None:
        """Return the single legal rotation state, or None if unconstrained.

        Args:
            part_grain: Grain requested for the part.
            stock_grain: Grain of the stock sheet.

        Returns:
            None when either grain is unset (both rotations legal),
            otherwise True iff the grains differ.
        """
        part = GrainDirection.parse(part_grain)
        stock = GrainDirection.parse(stock_grain)
        if part is None or stock is None:
            return None
        return part != stock

    @staticmethod
    def is_aligned(
        part_grain: GrainDirection | str | None,
        stock_grain: GrainDirection | str | None,
        rotated: bool,
    ) -> bool:
        """Alignment label of a placement.

        An unset grain on either side is treated as aligned.
        """
        part = GrainDirection.parse(part_grain)
        stock = GrainDirection.parse(stock_grain)
        if part is None or stock is None:
            return True
        return (stock == part and not rotated) or (stock != part and rotated)

    def orientations(
        self,
        part: PartRequirement,
        stock: StockDefinition,
    ) -> list[Orientation]:
        """Legal footprints of ``part`` on ``stock``, preferred first.

        Dimensional lumber has a single footprint of the part length by
        the stock width. Sheet goods yield one or two orientations
        depending on the grain constraint; square parts yield one.
        """
        if stock.material_type == MaterialType.DIMENSIONAL:
            return [Orientation(part.length, stock.width, rotated=False, aligned=True)]

        natural = Orientation(
            part.length,
            part.width,
            rotated=False,
            aligned=self.is_aligned(part.grain_direction, stock.grain_direction, False),
        )
        rotated = Orientation(
            part.width,
            part.length,
            rotated=True,
            aligned=self.is_aligned(part.grain_direction, stock.grain_direction, True),
        )

        required = self.rotation_required(part.grain_direction, stock.grain_direction)
        if required is True:
            return [rotated]
        if required is False:
            return [natural]

        if abs(part.length - part.width) <= EPSILON:
            return [natural]
        return [natural, rotated]

    def fits_stock(self, part: PartRequirement, stock: StockDefinition) -> bool:
        """Check whether some legal orientation fits the bare stock footprint."""
        return any(
            o.width <= stock.length + EPSILON and o.height <= stock.width + EPSILON
            for o in self.orientations(part, stock)
        )

    def fits_any_rotation(self, part: PartRequirement, stock: StockDefinition) -> bool:
        """Like fits_stock, but ignoring the grain constraint."""
        if stock.material_type == MaterialType.DIMENSIONAL:
            return (
                part.length <= stock.length + EPSILON
                and part.width <= stock.width + EPSILON
            )
        natural = part.length <= stock.length + EPSILON and part.width <= stock.width + EPSILON
        rotated = part.width <= stock.length + EPSILON and part.length <= stock.width + EPSILON
        return natural or rotated
