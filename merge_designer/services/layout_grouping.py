"""Layout grouping engine.

Turns absolutely positioned fields (x%, y%) into an ordered sequence of
text lines suitable for a flowing word-processor document:

* fields whose ``y`` lies within ``LINE_GROUP_THRESHOLD`` points of the
  first field of the current line share that line;
* each line gets an alignment inferred from the horizontal positions of
  its fields;
* the line's average ``y`` is converted into "spacing before" the
  paragraph, measured in twips, relative to where the previous line was
  targeted.

The thresholds below are kept at the values existing exported documents
were produced with.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence

from merge_designer.domain.models import FieldGroup, MergeField
from merge_designer.utils.normalize import clamp_font_size

LINE_GROUP_THRESHOLD = 5.0
WIDE_LINE_SPREAD = 40.0
LEFT_BAND_MAX = 35.0
RIGHT_BAND_MIN = 65.0

TWIPS_PER_POINT = 20
LINE_HEIGHT_FACTOR = 1.2

MIN_GAP_SPACES = 2
GAP_SPACES_PER_PERCENT = 0.5

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _close_group(members: List[MergeField]) -> FieldGroup:
    y_position = sum(f.y for f in members) / len(members)
    return FieldGroup(fields=sorted(members, key=lambda f: f.x), y_position=y_position)


def group_fields_by_line(fields: Sequence[MergeField]) -> List[FieldGroup]:
    """Cluster fields into lines ordered top to bottom.

    Membership is tested against the y of the line's first field, not
    against the nearest neighbour, so a slowly drifting run of fields can
    span more than the threshold. Sorting is stable: ties keep input order.
    """
    if not fields:
        return []

    groups = []
    current: List[MergeField] = []
    group_start_y = 0.0
    for merge_field in sorted(fields, key=lambda f: f.y):
        if current and abs(merge_field.y - group_start_y) <= LINE_GROUP_THRESHOLD:
            current.append(merge_field)
            continue
        if current:
            groups.append(_close_group(current))
        current = [merge_field]
        group_start_y = merge_field.y
    groups.append(_close_group(current))
    return groups


def infer_alignment(group: FieldGroup, default: str = ALIGN_CENTER) -> str:
    """Paragraph alignment for a line.

    A lone field near either edge hugs that edge; a lone field in the
    middle band takes ``default`` (the document's text alignment). A line
    of several fields is left aligned when it spreads wider than
    ``WIDE_LINE_SPREAD``, centered otherwise.
    """
    if not group.fields:
        return default
    if len(group.fields) == 1:
        x = group.fields[0].x
        if x < LEFT_BAND_MAX:
            return ALIGN_LEFT
        if x > RIGHT_BAND_MIN:
            return ALIGN_RIGHT
        return default
    if group.max_x - group.min_x > WIDE_LINE_SPREAD:
        return ALIGN_LEFT
    return ALIGN_CENTER


def average_font_size(group: FieldGroup) -> float:
    if not group.fields:
        return float(clamp_font_size(None))
    return sum(clamp_font_size(f.font_size) for f in group.fields) / len(group.fields)


def line_height_twips(font_size: float) -> int:
    """Line height in twips for a font size in points (not half-points): pt × 20 × 1.2."""
    return round_half_up(font_size * TWIPS_PER_POINT * LINE_HEIGHT_FACTOR)


def gap_spaces(left_x: float, right_x: float) -> int:
    """Number of literal spaces standing in for the gap between two fields on a line."""
    return max(MIN_GAP_SPACES, round_half_up((right_x - left_x) * GAP_SPACES_PER_PERCENT))


@dataclass
class LinePlacement:
    group: FieldGroup
    alignment: str
    spacing_before: int
    line_height: int
    font_size: float


class VerticalSpacer:
    """Converts line y-positions into forward-only spacing within a usable height.

    Spacing is measured from where the previous line was targeted, never
    from the rendered height of earlier text.
    """

    def __init__(self, usable_height: float):
        self.usable_height = usable_height
        self.cumulative_height = 0.0

    def spacing_for(self, y_position: float, line_height: int) -> int:
        target = round_half_up(y_position / 100 * self.usable_height)
        center_offset = line_height / 2
        spacing_before = max(0.0, target - self.cumulative_height - center_offset)
        self.cumulative_height = target + center_offset
        return round_half_up(spacing_before)


def layout_lines(
    fields: Sequence[MergeField],
    usable_height: float,
    default_alignment: str = ALIGN_CENTER,
) -> List[LinePlacement]:
    """Group, align and vertically place the visible fields of one record."""
    spacer = VerticalSpacer(usable_height)
    placements = []
    for group in group_fields_by_line([f for f in fields if f.visible]):
        font_size = average_font_size(group)
        line_height = line_height_twips(font_size)
        placements.append(
            LinePlacement(
                group=group,
                alignment=infer_alignment(group, default_alignment),
                spacing_before=spacer.spacing_for(group.y_position, line_height),
                line_height=line_height,
                font_size=font_size,
            )
        )
    return placements
