"""Tests for the per-sheet free-space catalogue."""

from __future__ import annotations

import pytest

from panelcut.domain.results import Placement
from panelcut.domain.services.free_space import FreeSpaceCatalogue
from panelcut.domain.strategy import OptimizationWeights, PlacementMode
from panelcut.domain.value_objects import FreeRegion, Orientation


@pytest.fixture
def catalogue() -> FreeSpaceCatalogue:
    """Empty 100x50 sheet without kerf."""
    return FreeSpaceCatalogue(100, 50)


class TestInitialState:
    """Tests for a fresh catalogue."""

    def test_seeded_with_whole_sheet(self, catalogue: FreeSpaceCatalogue) -> None:
        assert catalogue.regions == (FreeRegion(0, 0, 100, 50),)
        assert catalogue.residual_regions() == catalogue.regions


class TestAccepts:
    """Tests for kerf clearance when matching a footprint to a region."""

    def test_full_sheet_part_rejected_with_kerf(self) -> None:
        """Kerf is required on both axes, even where the region meets the sheet edge."""
        catalogue = FreeSpaceCatalogue(100, 50, kerf=3)
        assert not catalogue.accepts(catalogue.regions[0], Orientation(100, 50, rotated=False))
        assert catalogue.find_candidate([Orientation(100, 50, rotated=False)], []) is None

    def test_full_sheet_part_accepted_without_kerf(self, catalogue: FreeSpaceCatalogue) -> None:
        assert catalogue.accepts(catalogue.regions[0], Orientation(100, 50, rotated=False))

    def test_kerf_needed_on_each_axis(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 50, kerf=3)
        region = catalogue.regions[0]
        assert catalogue.accepts(region, Orientation(97, 47, rotated=False))
        assert not catalogue.accepts(region, Orientation(98, 47, rotated=False))
        assert not catalogue.accepts(region, Orientation(97, 48, rotated=False))

    def test_waste_subtracts_kerf_on_both_axes(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 50, kerf=3)
        found = catalogue.candidates([Orientation(50, 20, rotated=False)], OptimizationWeights())
        assert len(found) == 1
        assert found[0].waste == pytest.approx(47 * 27)

    def test_interior_region_needs_kerf(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 50, kerf=3)
        region = FreeRegion(0, 0, 50, 50)
        assert not catalogue.accepts(region, Orientation(50, 50, rotated=False))
        assert catalogue.accepts(region, Orientation(47, 50, rotated=False))


class TestPlace:
    """Tests for committing a placement."""

    def test_regions_after_corner_placement(self, catalogue: FreeSpaceCatalogue) -> None:
        candidate = catalogue.find_candidate([Orientation(20, 10, rotated=False)], [])
        assert candidate is not None
        assert (candidate.x, candidate.y) == (0, 0)

        catalogue.place(candidate)

        assert catalogue.regions == (
            FreeRegion(20, 0, 80, 50),
            FreeRegion(0, 10, 100, 40),
        )

    def test_regions_reserve_kerf(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 50, kerf=2)
        candidate = catalogue.find_candidate([Orientation(20, 10, rotated=False)], [])
        assert candidate is not None

        catalogue.place(candidate)

        assert catalogue.regions == (
            FreeRegion(22, 0, 78, 50),
            FreeRegion(0, 12, 100, 38),
        )

    def test_other_regions_are_cut_too(self) -> None:
        """Regions overlapping the placement but not chosen are also reduced."""
        catalogue = FreeSpaceCatalogue(100, 100)
        first = catalogue.find_candidate([Orientation(40, 40, rotated=False)], [])
        assert first is not None
        catalogue.place(first)

        second = catalogue.find_candidate([Orientation(30, 30, rotated=False)], [])
        assert second is not None
        catalogue.place(second)

        placed = [FreeRegion(0, 0, 40, 40), second.rect()]
        for region in catalogue.regions:
            for rect in placed:
                assert not (
                    region.x < rect.right
                    and rect.x < region.right
                    and region.y < rect.bottom
                    and rect.y < region.bottom
                )

    def test_exact_fill_empties_catalogue(self) -> None:
        catalogue = FreeSpaceCatalogue(50, 50)
        candidate = catalogue.find_candidate([Orientation(50, 50, rotated=False)], [])
        assert candidate is not None

        catalogue.place(candidate)

        assert catalogue.regions == ()


class TestFindCandidate:
    """Tests for candidate selection."""

    def test_no_fit_returns_none(self, catalogue: FreeSpaceCatalogue) -> None:
        assert catalogue.find_candidate([Orientation(120, 10, rotated=False)], []) is None

    def test_best_fit_prefers_lower_waste(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 100)
        # Leaves regions (60,0,40,100) and (0,40,100,60)
        first = catalogue.find_candidate([Orientation(60, 40, rotated=False)], [])
        assert first is not None
        catalogue.place(first)

        # 20x60 fills the bottom strip's height exactly
        candidate = catalogue.find_candidate(
            [Orientation(20, 60, rotated=False)],
            [Placement(0, 1, 0, 0, False, 60, 40)],
        )

        assert candidate is not None
        assert candidate.waste == 0
        assert (candidate.x, candidate.y) == (0, 40)

    def test_first_fit_takes_lowest_region(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 100)
        first = catalogue.find_candidate([Orientation(60, 40, rotated=False)], [])
        assert first is not None
        catalogue.place(first)

        candidate = catalogue.find_candidate(
            [Orientation(20, 60, rotated=False)],
            [Placement(0, 1, 0, 0, False, 60, 40)],
            mode=PlacementMode.FIRST_FIT,
        )

        assert candidate is not None
        assert candidate.region_index == 0
        assert (candidate.x, candidate.y) == (60, 0)

    def test_aligned_orientation_preferred(self, catalogue: FreeSpaceCatalogue) -> None:
        """A cross-grain orientation loses even when it scores better."""
        aligned = Orientation(30, 10, rotated=False, aligned=True)
        crossed = Orientation(100, 50, rotated=True, aligned=False)

        candidate = catalogue.find_candidate([aligned, crossed], [])

        assert candidate is not None
        assert candidate.orientation is aligned

    def test_weights_change_the_choice(self) -> None:
        """A rotation penalty can outweigh the waste saved by rotating."""
        catalogue = FreeSpaceCatalogue(100, 60)
        natural = Orientation(60, 40, rotated=False)
        rotated = Orientation(40, 60, rotated=True)

        by_waste = catalogue.find_candidate([natural, rotated], [])
        by_grain = catalogue.find_candidate(
            [natural, rotated], [], weights=OptimizationWeights(0.0, 0.0, 1.0)
        )

        assert by_waste is not None and by_grain is not None
        assert by_waste.orientation is rotated
        assert by_grain.orientation is natural

    def test_candidates_report_strips(self, catalogue: FreeSpaceCatalogue) -> None:
        found = catalogue.candidates([Orientation(100, 10, rotated=False)], OptimizationWeights())
        assert len(found) == 1
        assert found[0].leftover_strips == 1
        assert found[0].waste == 0


class TestIsValid:
    """Tests for candidate re-validation."""

    def test_duplicate_position_rejected(self, catalogue: FreeSpaceCatalogue) -> None:
        candidate = catalogue.find_candidate([Orientation(10, 10, rotated=False)], [])
        assert candidate is not None
        existing = [Placement(0, 1, 0, 0, False, 5, 5)]
        assert not catalogue.is_valid(candidate, existing)

    def test_overlap_rejected(self, catalogue: FreeSpaceCatalogue) -> None:
        candidate = catalogue.find_candidate([Orientation(10, 10, rotated=False)], [])
        assert candidate is not None
        existing = [Placement(0, 1, 5, 5, False, 10, 10)]
        assert not catalogue.is_valid(candidate, existing)

    def test_kerf_gap_enforced(self) -> None:
        catalogue = FreeSpaceCatalogue(100, 50, kerf=3)
        candidate = catalogue.find_candidate([Orientation(10, 10, rotated=False)], [])
        assert candidate is not None
        # Neighbour starting 2mm to the right leaves less than one kerf
        existing = [Placement(0, 1, 12, 0, False, 10, 10)]
        assert not catalogue.is_valid(candidate, existing)

    def test_clear_candidate_accepted(self, catalogue: FreeSpaceCatalogue) -> None:
        candidate = catalogue.find_candidate([Orientation(10, 10, rotated=False)], [])
        assert candidate is not None
        existing = [Placement(0, 1, 50, 0, False, 10, 10)]
        assert catalogue.is_valid(candidate, existing)
