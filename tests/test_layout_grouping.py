import unittest

from merge_designer.domain.models import FieldGroup, MergeField
from merge_designer.services.layout_grouping import (
    VerticalSpacer,
    gap_spaces,
    group_fields_by_line,
    infer_alignment,
    layout_lines,
    line_height_twips,
)


def make_field(field_id, x, y, font_size=12, visible=True):
    return MergeField(
        id=field_id, name=field_id, text=field_id, font_size=font_size,
        color="#000000", x=x, y=y, visible=visible,
    )


class TestGroupFieldsByLine(unittest.TestCase):

    def test_groups_nearby_fields_and_orders_by_y(self):
        fields = [make_field("a", 10, 50), make_field("b", 80, 52), make_field("c", 50, 10)]

        groups = group_fields_by_line(fields)

        self.assertEqual(len(groups), 2)
        self.assertEqual([f.id for f in groups[0].fields], ["c"])
        self.assertEqual(groups[0].y_position, 10)
        self.assertEqual([f.id for f in groups[1].fields], ["a", "b"])
        self.assertAlmostEqual(groups[1].y_position, 51)

    def test_members_sorted_left_to_right(self):
        fields = [make_field("right", 90, 20), make_field("left", 5, 21), make_field("mid", 40, 19)]

        groups = group_fields_by_line(fields)

        self.assertEqual([f.id for f in groups[0].fields], ["left", "mid", "right"])

    def test_empty_input(self):
        self.assertEqual(group_fields_by_line([]), [])

    def test_membership_anchored_on_first_member(self):
        # 10 -> 14 -> 15 all lie within 5 of 10; 16 does not.
        fields = [make_field("a", 0, 10), make_field("b", 0, 14), make_field("c", 0, 15), make_field("d", 0, 16)]

        groups = group_fields_by_line(fields)

        self.assertEqual([[f.id for f in g.fields] for g in groups], [["a", "b", "c"], ["d"]])

    def test_ties_keep_input_order(self):
        fields = [make_field("first", 30, 40), make_field("second", 30, 40)]

        groups = group_fields_by_line(fields)

        self.assertEqual([f.id for f in groups[0].fields], ["first", "second"])

    def test_does_not_mutate_input(self):
        fields = [make_field("b", 50, 60), make_field("a", 50, 10)]
        group_fields_by_line(fields)
        self.assertEqual([f.id for f in fields], ["b", "a"])


class TestInferAlignment(unittest.TestCase):

    def _group(self, *xs):
        return FieldGroup(fields=[make_field(str(x), x, 50) for x in xs], y_position=50)

    def test_single_field_bands(self):
        self.assertEqual(infer_alignment(self._group(20)), "left")
        self.assertEqual(infer_alignment(self._group(50)), "center")
        self.assertEqual(infer_alignment(self._group(90)), "right")

    def test_single_middle_field_uses_default(self):
        self.assertEqual(infer_alignment(self._group(50), default="right"), "right")

    def test_wide_line_aligns_left(self):
        self.assertEqual(infer_alignment(self._group(10, 60)), "left")

    def test_narrow_line_centers(self):
        self.assertEqual(infer_alignment(self._group(40, 60)), "center")


class TestVerticalSpacing(unittest.TestCase):

    def test_line_height_from_font_size(self):
        self.assertEqual(line_height_twips(10), 240)

    def test_line_height_takes_points_not_half_points(self):
        # 12pt text is 240 twips tall, so the line is 288 with leading.
        self.assertEqual(line_height_twips(12), 288)
        self.assertEqual(line_height_twips(12.5), 300)

    def test_spacing_is_relative_to_previous_target(self):
        spacer = VerticalSpacer(usable_height=1000)

        self.assertEqual(spacer.spacing_for(50, 240), 380)
        self.assertEqual(spacer.cumulative_height, 620)
        # 600 - 620 - 120 < 0: never moves backwards
        self.assertEqual(spacer.spacing_for(60, 240), 0)
        self.assertEqual(spacer.cumulative_height, 720)

    def test_layout_lines_skips_hidden_fields(self):
        fields = [make_field("shown", 50, 50, font_size=10), make_field("hidden", 50, 80, visible=False)]

        placements = layout_lines(fields, usable_height=1000)

        self.assertEqual(len(placements), 1)
        self.assertEqual(placements[0].spacing_before, 380)
        self.assertEqual(placements[0].alignment, "center")

    def test_layout_lines_average_font_size(self):
        fields = [make_field("a", 40, 30, font_size=10), make_field("b", 60, 30, font_size=20)]

        placements = layout_lines(fields, usable_height=1000)

        self.assertEqual(placements[0].font_size, 15)
        self.assertEqual(placements[0].line_height, 360)


class TestGapSpaces(unittest.TestCase):

    def test_minimum_two_spaces(self):
        self.assertEqual(gap_spaces(50, 50), 2)
        self.assertEqual(gap_spaces(10, 12), 2)

    def test_proportional_to_distance(self):
        self.assertEqual(gap_spaces(10, 50), 20)


if __name__ == "__main__":
    unittest.main()
