"""Tests for the layout engine"""

import pytest

from lollipops.constants import DomainLabelStyle
from lollipops.errors import DataError
from lollipops.layout import (
    auto_width,
    axis_spacing,
    blend_colors,
    compute_layout,
    next_better,
    stagger_offsets,
    thin_axis_ticks,
    tick_order,
    visible_motifs,
)
from lollipops.models import Feature, FeatureSet, Tick
from lollipops.mutations import lollipop_radius, parse_changelist
from lollipops.settings import Settings

# canvas_width 423 leaves 393px for TP53: exactly one pixel per residue
UNIT_SCALE = Settings(canvas_width=423)


class TestBlendColors:
    def test_average_with_white(self):
        assert blend_colors("#FF0000", "#FFFFFF") == "#FF7F7F"

    def test_lowercase_input(self):
        assert blend_colors("#9cff00", "#ffffff") == "#CDFF7F"


class TestAutoWidth:
    """Tests for auto_width"""

    def test_region_label_drives_width(self, settings, make_measurer):
        """A label needing 200px in 10% of the sequence needs 2000px of backbone"""
        features = FeatureSet(length=1000, regions=(Feature(100, 200, text="x" * 189),))
        width = auto_width(features, settings, make_measurer(char_width=1))
        assert width == pytest.approx(2030)

    def test_minimum_width(self, settings, measurer):
        features = FeatureSet(length=100)
        assert auto_width(features, settings, measurer) == pytest.approx(430)

    def test_point_regions_ignored(self, settings, measurer):
        features = FeatureSet(length=100, regions=(Feature(50, 50, text="x" * 500),))
        assert auto_width(features, settings, measurer) == pytest.approx(430)

    def test_widest_requirement_wins(self, tp53, settings, measurer):
        # P53_TAD: 42px + 11 over 23 of 393 residues
        expected = (42 + 11) / (23 / 393) + 30
        assert auto_width(tp53, settings, measurer) == pytest.approx(expected)


class TestAxisTicks:
    """Tests for next_better and thin_axis_ticks"""

    @pytest.fixture
    def ticks(self):
        return [Tick(0, 0), Tick(5, 5), Tick(10, 1), Tick(50, 99)]

    def test_tick_order(self):
        ticks = [Tick(10, 1), Tick(5, 5), Tick(10, 5)]
        assert [(t.position, t.priority) for t in sorted(ticks, key=tick_order)] == [
            (5, 5),
            (10, 5),
            (10, 1),
        ]

    def test_next_better_finds_higher_priority(self, ticks):
        assert next_better(ticks, 0, 10) == 1

    def test_next_better_none_in_range(self, ticks):
        assert next_better(ticks, 1, 10) == 1
        assert next_better(ticks, 3, 10) == 3

    def test_next_better_never_returns_lower_priority(self, ticks):
        for i in range(len(ticks)):
            j = next_better(ticks, i, 10)
            assert j >= i
            assert ticks[j].priority >= ticks[i].priority
            assert ticks[j].position - ticks[i].position <= 10

    def test_next_better_ignores_ticks_out_of_range(self):
        ticks = [Tick(0, 0), Tick(11, 9)]
        assert next_better(ticks, 0, 10) == 0
        assert next_better(ticks, 0, 11) == 1

    def test_thinning(self, ticks):
        drawn = thin_axis_ticks(ticks, 10)
        assert [t.position for t in drawn] == [5, 50]

    def test_thinning_keeps_spacing(self):
        ticks = [Tick(p, 1) for p in range(0, 100, 3)]
        drawn = [t.position for t in thin_axis_ticks(ticks, 10)]
        assert drawn[0] == 0
        assert all(b - a >= 10 for a, b in zip(drawn, drawn[1:]))

    def test_duplicate_positions_labelled_once(self):
        ticks = [Tick(20, 5), Tick(20, 5), Tick(80, 5)]
        assert [t.position for t in thin_axis_ticks(ticks, 10)] == [20, 80]

    def test_axis_spacing(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        assert axis_spacing(layout, UNIT_SCALE) == 20


class TestStagger:
    """Tests for stagger_offsets"""

    def test_neighbour_lifts_marker(self):
        pops = [Tick(100, 10), Tick(103, 10)]
        assert stagger_offsets(pops, [4.0, 4.0], 6) == [12.5, 0.0]

    def test_distant_markers_not_lifted(self):
        pops = [Tick(100, 10), Tick(200, 10)]
        assert stagger_offsets(pops, [4.0, 4.0], 6) == [0.0, 0.0]

    def test_uses_neighbour_radius(self):
        pops = [Tick(100, 10), Tick(102, 10)]
        assert stagger_offsets(pops, [4.0, 6.0], 6) == [18.5, 0.0]

    def test_lifts_accumulate(self):
        pops = [Tick(100, 10), Tick(101, 10), Tick(102, 10)]
        assert stagger_offsets(pops, [4.0, 4.0, 4.0], 6) == [25.0, 12.5, 0.0]


class TestVisibleMotifs:
    """Tests for visible_motifs"""

    def test_all_shown(self, tp53, settings):
        assert len(visible_motifs(tp53, settings)) == 3

    def test_hide_motifs(self, tp53):
        assert visible_motifs(tp53, Settings(hide_motifs=True)) == []

    def test_hide_disordered(self, tp53):
        motifs = visible_motifs(tp53, Settings(hide_disordered=True))
        assert [m.type for m in motifs] == ["coiled_coil"]

    def test_suppressed_and_point_motifs(self, settings):
        features = FeatureSet(
            length=100,
            motifs=(
                Feature(10, 20, type="pfamb"),
                Feature(30, 30, type="sig_p"),
                Feature(40, 50, type="sig_p"),
            ),
        )
        assert [(m.start, m.end) for m in visible_motifs(features, settings)] == [(40, 50)]


class TestComputeLayout:
    """Tests for compute_layout"""

    def test_single_mutation(self, tp53, settings, measurer):
        layout = compute_layout(tp53, parse_changelist(["R273C"]), settings, measurer)

        assert len(layout.lollipops) == 1
        pop = layout.lollipops[0]
        assert pop.position == 273
        assert pop.radius == 4.0
        assert pop.color == "#ff0000"
        assert pop.priority == 10

    def test_positions_scale_linearly(self, tp53, measurer):
        layout = compute_layout(tp53, parse_changelist(["R273C"]), UNIT_SCALE, measurer)

        assert layout.scale == pytest.approx(1.0)
        assert layout.lollipops[0].x == pytest.approx(288)
        assert layout.x_for(0) == pytest.approx(15)
        assert layout.x_for(393) == pytest.approx(408)
        assert layout.regions[1].x == pytest.approx(110)
        assert layout.regions[1].width == pytest.approx(193)

    def test_vertical_structure(self, tp53, measurer):
        ticks = parse_changelist(["A100B", "C103D"])
        layout = compute_layout(tp53, ticks, UNIT_SCALE, measurer)

        first, second = layout.lollipops
        assert first.y == pytest.approx(19.0)
        assert second.y == pytest.approx(31.5)
        assert layout.stem_bottom == pytest.approx(59.5)
        assert layout.content_start_y == pytest.approx(54.5)
        assert layout.backbone_y == pytest.approx(59.5)
        assert layout.canvas_height == pytest.approx(123.5)

    def test_merged_count_grows_marker(self, tp53, settings, measurer):
        layout = compute_layout(tp53, parse_changelist(["R273C@4"]), settings, measurer)
        assert layout.lollipops[0].radius == pytest.approx(lollipop_radius(4, 4.0))

    def test_no_mutations(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        assert layout.lollipops == ()
        assert layout.content_start_y == pytest.approx(15)
        assert layout.canvas_height == pytest.approx(79)

    def test_labels_add_padding(self, tp53, measurer):
        layout = compute_layout(
            tp53, [], Settings(canvas_width=423, show_labels=True), measurer
        )
        assert layout.content_start_y == pytest.approx(30)

    def test_hide_axis(self, tp53, measurer):
        shown = compute_layout(tp53, [], UNIT_SCALE, measurer)
        hidden = compute_layout(tp53, [], Settings(canvas_width=423, hide_axis=True), measurer)

        assert shown.canvas_height - hidden.canvas_height == pytest.approx(25)
        assert shown.axis_y == pytest.approx(49)
        assert shown.legend_y == pytest.approx(64)
        assert hidden.legend_y == pytest.approx(39)

    def test_ticks_sorted(self, tp53, measurer):
        ticks = parse_changelist(["R273C", "R175H", "R248Q@3"])
        layout = compute_layout(tp53, ticks, UNIT_SCALE, measurer)
        keys = [tick_order(t) for t in layout.ticks]
        assert keys == sorted(keys)
        assert layout.ticks[0].position == 0
        assert layout.ticks[-1].position == 393

    def test_motif_ticks(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        motif_positions = {t.position for t in layout.ticks if t.priority == 1}
        assert motif_positions == {320, 356}

    def test_disorder_block_on_backbone(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        disorder = layout.motifs[0]
        assert disorder.feature.is_disorder
        assert disorder.y == pytest.approx(layout.backbone_y)
        assert disorder.height == pytest.approx(14)

    def test_motif_block_blended(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        coiled = layout.motifs[1]
        assert coiled.fill == "#CDFF7F"
        assert coiled.y == pytest.approx(layout.content_start_y + 3)
        assert coiled.height == pytest.approx(18)

    def test_domain_labels(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        assert layout.domain_labels == ("", "P53 DNA-binding domain", "P53..")

    def test_domain_labels_off(self, tp53, measurer):
        settings = Settings(canvas_width=423, domain_label_style=DomainLabelStyle.OFF)
        layout = compute_layout(tp53, [], settings, measurer)
        assert layout.domain_labels == ("", "", "")

    def test_legend(self, tp53, measurer):
        settings = Settings(canvas_width=423, show_legend=True)
        layout = compute_layout(tp53, [], settings, measurer)

        assert list(layout.legend) == [
            "Disordered region",
            "Coiled-coil motif",
            "P53 transactivation motif",
            "P53 tetramerisation motif",
        ]
        assert layout.legend["P53 transactivation motif"] == "#ff5353"
        assert layout.canvas_height == pytest.approx(79 + 5 * 14)

    def test_legend_read_only(self, tp53, measurer):
        settings = Settings(canvas_width=423, show_legend=True)
        layout = compute_layout(tp53, [], settings, measurer)
        with pytest.raises(TypeError):
            layout.legend["Extra"] = "#000000"

    def test_legend_disabled(self, tp53, measurer):
        assert compute_layout(tp53, [], UNIT_SCALE, measurer).legend is None

    def test_title(self, tp53, measurer):
        layout = compute_layout(tp53, [], UNIT_SCALE, measurer)
        assert layout.title == "TP53, Cellular tumor antigen p53 (393aa)"

    def test_zero_length_rejected(self, settings, measurer):
        with pytest.raises(DataError):
            compute_layout(FeatureSet(length=0), [], settings, measurer)

    def test_inverted_feature_rejected(self, settings, measurer):
        features = FeatureSet(length=100, regions=(Feature(50, 10, text="bad"),))
        with pytest.raises(DataError, match="starts after it ends"):
            compute_layout(features, [], settings, measurer)

    def test_canvas_too_narrow(self, tp53, measurer):
        with pytest.raises(DataError):
            compute_layout(tp53, [], Settings(canvas_width=30), measurer)

    def test_deterministic(self, tp53, settings, measurer):
        ticks = parse_changelist(["R273C", "R248Q@3"])
        assert compute_layout(tp53, ticks, settings, measurer) == compute_layout(
            tp53, ticks, settings, measurer
        )
