"""
Tests for ui/renderer.py and ui/drawing.py using a recording surface.

Covers:
  - Draw order for interactive and ambient frames
  - Layer gating and draw mode branches
  - Ambient idle override
  - Head fill color per expression
  - Eye shapes per expression
  - Label block line advance and icon placement
  - Highlight layer delegation
"""
import pytest

from superintendent.core.expression_service import Expression
from superintendent.ui.drawing import EYE_SHAPES, EyeShapeKind, draw_label_block
from superintendent.ui.layout import Rect, compute_layout
from superintendent.ui.render_mode import (
    AMBIENT, INTERACTIVE, DrawMode, HighlightLayer, Layer, RenderParameters,
)
from superintendent.ui.renderer import FaceRenderer
from superintendent.ui.surface import RecordingSurface
from superintendent.ui.theme import Theme

from conftest import HEAD_RADIUS, ICON, ICON_WIDTH, StubFont, make_styles


NORMAL = Theme.rgb(Theme.FACE_NORMAL)
ALERT = Theme.rgb(Theme.ALERT)
PRIMARY = Theme.rgb(Theme.FG_PRIMARY)


def face_commands(surface):
    """Commands from the head outline onwards."""
    circles = [i for i, c in enumerate(surface.commands) if c.op == 'circle']
    return surface.commands[circles[0]:] if circles else []


# ==================== Frame composition ====================

class TestInteractiveFrame:

    def test_draw_order(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, INTERACTIVE, Expression.IDLE)

        assert surface.ops() == [
            'clear',
            'text',                          # clock
            'text', 'text', 'text', 'text',  # label block
            'icon',
            'text',                          # additional line
            'circle', 'circle',              # head outline, head fill
            'circle', 'circle',              # eyes
        ]
        assert surface.texts() == [
            '9:05:03', *Theme.LABEL_LINES, Theme.ADDITIONAL_TEXT,
        ]

    def test_background_is_first(self, renderer, surface, bounds, morning, styles):
        renderer.render(surface, bounds, morning, INTERACTIVE)
        assert surface.commands[0].params['color'] == styles.background

    def test_clock_centered_on_anchor(self, renderer, surface, bounds, afternoon):
        renderer.render(surface, bounds, afternoon, INTERACTIVE)
        clock = surface.of('text')[0]
        assert clock.params['text'] == '14:00:00'
        assert (clock.params['x'], clock.params['y']) == (227, 227)

    def test_uses_supplied_expression(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, INTERACTIVE, Expression.HAPPY)
        assert len(surface.of('arc')) == 2


class TestAmbientFrame:

    def test_clock_without_seconds(self, renderer, surface, bounds, morning, afternoon):
        renderer.render(surface, bounds, morning, AMBIENT)
        assert surface.texts()[0] == '9:05'

        surface.reset()
        renderer.render(surface, bounds, afternoon, AMBIENT)
        assert surface.texts()[0] == '14:00'

    def test_draw_order(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, AMBIENT)
        assert surface.ops() == [
            'clear', 'text',
            'circle', 'circle', 'circle', 'circle',
            'text', 'text',
        ]
        assert surface.texts() == ['9:05', Theme.ADDITIONAL_TEXT, Theme.AMBIENT_TEXT]

    @pytest.mark.parametrize("expression", list(Expression))
    def test_face_always_idle(self, renderer, surface, bounds, morning, expression):
        renderer.render(surface, bounds, morning, AMBIENT, expression)

        assert surface.of('arc') == []
        head_fill = surface.of('circle')[1]
        assert head_fill.params['color'] == NORMAL

    def test_no_label_block(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, AMBIENT)
        assert surface.of('icon') == []
        assert not set(Theme.LABEL_LINES) & set(surface.texts())

    def test_ambient_text_uses_alert_color(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, AMBIENT)
        ambient = [c for c in surface.of('text') if c.params['text'] == Theme.AMBIENT_TEXT][0]
        assert ambient.params['color'] == ALERT


class TestLayerGating:

    def test_interactive_without_base_draws_clock_only(self, renderer, surface, bounds, morning):
        params = RenderParameters(DrawMode.INTERACTIVE, Layer.COMPLICATIONS_OVERLAY)
        renderer.render(surface, bounds, morning, params, Expression.ANGRY)
        assert surface.ops() == ['clear', 'text']
        assert surface.texts() == ['9:05:03']

    def test_without_overlay_skips_clock(self, renderer, surface, bounds, morning):
        params = RenderParameters(DrawMode.INTERACTIVE, Layer.BASE)
        renderer.render(surface, bounds, morning, params)
        assert '9:05:03' not in surface.texts()
        assert surface.texts()[0] == Theme.LABEL_LINES[0]

    def test_ambient_without_overlay_is_blank(self, renderer, surface, bounds, morning):
        params = RenderParameters(DrawMode.AMBIENT, Layer.BASE | Layer.COMPLICATIONS)
        renderer.render(surface, bounds, morning, params)
        assert surface.ops() == ['clear']

    @pytest.mark.parametrize("mode", [DrawMode.LOW_BATTERY_INTERACTIVE, DrawMode.MUTE])
    def test_other_modes_draw_full_clock_only(self, renderer, surface, bounds, morning, mode):
        renderer.render(surface, bounds, morning, RenderParameters(mode, Layer.ALL))
        assert surface.ops() == ['clear', 'text']
        assert surface.texts() == ['9:05:03']

    def test_layer_membership(self):
        params = RenderParameters(DrawMode.INTERACTIVE, Layer.BASE | Layer.COMPLICATIONS)
        assert params.has_layer(Layer.BASE)
        assert params.has_layer(Layer.COMPLICATIONS)
        assert not params.has_layer(Layer.COMPLICATIONS_OVERLAY)
        assert not params.has_layer(Layer.NONE)


# ==================== Face ====================

class TestFace:

    @pytest.mark.parametrize("expression", list(Expression))
    def test_head_fill_color(self, renderer, surface, bounds, morning, expression):
        renderer.render(surface, bounds, morning, INTERACTIVE, expression)
        outline, fill = surface.of('circle')[:2]

        expected = ALERT if expression is Expression.ANGRY else NORMAL
        assert fill.params['color'] == expected
        assert fill.params['filled'] is True
        assert fill.params['radius'] == pytest.approx(HEAD_RADIUS * 0.975)

    def test_head_outline(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, INTERACTIVE)
        outline = surface.of('circle')[0]
        assert outline.params['filled'] is False
        assert outline.params['radius'] == HEAD_RADIUS
        assert outline.params['stroke_width'] == HEAD_RADIUS / 8
        assert outline.params['color'] == PRIMARY
        assert (outline.params['cx'], outline.params['cy']) == pytest.approx((227, 454 * 5 / 7))


class TestEyes:

    EXPECTED = {
        Expression.IDLE: (None, None),
        Expression.HAPPY: ((180, 180), (180, 180)),
        Expression.BORED: ((180, -180), (180, -180)),
        Expression.CONFUSED: (None, (10, 180)),
        Expression.SUSPICIOUS: (None, (180, -180)),
        Expression.SAD: ((-20, 180), (20, 180)),
        Expression.ANGRY: ((20, 180), (-20, 180)),
    }

    @pytest.mark.parametrize("expression", list(Expression))
    def test_shape_table(self, expression):
        for shape, expected in zip(EYE_SHAPES[expression], self.EXPECTED[expression]):
            if expected is None:
                assert shape.kind is EyeShapeKind.CIRCLE
            else:
                assert shape.kind is EyeShapeKind.WEDGE
                assert (shape.start_angle, shape.sweep_angle) == expected
                assert shape.use_center is True

    def test_every_expression_is_distinct(self):
        assert len(set(EYE_SHAPES.values())) == len(Expression)

    @pytest.mark.parametrize("expression", list(Expression))
    def test_rendered_eyes(self, renderer, surface, bounds, morning, expression):
        renderer.render(surface, bounds, morning, INTERACTIVE, expression)
        layout = renderer.layout_for(bounds)
        eyes = face_commands(surface)[2:]
        assert len(eyes) == 2

        for command, center, expected in zip(
                eyes, (layout.left_eye_center, layout.right_eye_center), self.EXPECTED[expression]):
            assert command.params['color'] == PRIMARY
            if expected is None:
                assert command.op == 'circle'
                assert (command.params['cx'], command.params['cy']) == (center.x, center.y)
                assert command.params['radius'] == layout.eye_radius
            else:
                assert command.op == 'arc'
                assert (command.params['start'], command.params['sweep']) == expected
                assert command.params['use_center'] is True
                assert command.params['bounds'].center.x == pytest.approx(center.x)


# ==================== Label block ====================

class TestLabelBlock:

    @pytest.mark.parametrize("ascent,descent", [(15, 5), (11, 3), (30, 9)])
    def test_line_advance(self, ascent, descent):
        styles = make_styles(label_font=StubFont(ascent, descent))
        layout = compute_layout(454, 454, HEAD_RADIUS, ICON_WIDTH)
        surface = RecordingSurface()

        end = draw_label_block(surface, layout, styles)

        line_height = ascent + descent
        lines = surface.of('text')
        for i, command in enumerate(lines):
            assert command.params['y'] == pytest.approx(layout.label_origin.y + i * line_height)
            assert command.params['x'] == layout.label_origin.x
        assert end == pytest.approx(layout.label_origin.y + len(lines) * line_height)

    def test_time_line_is_dimmed(self, styles):
        layout = compute_layout(454, 454, HEAD_RADIUS, ICON_WIDTH)
        surface = RecordingSurface()
        draw_label_block(surface, layout, styles)

        colors = {c.params['text']: c.params['color'] for c in surface.of('text')}
        assert colors['>TIME'] == Theme.rgb(Theme.FG_SECONDARY)
        for line in ('>NAVIGATION', '>SYSTEM', '>INTEL'):
            assert colors[line] == PRIMARY

    def test_icon_below_navigation_line(self, styles):
        layout = compute_layout(454, 454, HEAD_RADIUS, ICON_WIDTH)
        surface = RecordingSurface()
        draw_label_block(surface, layout, styles)

        icon = surface.commands[-1]
        assert icon.op == 'icon'
        assert icon.params['icon'] is ICON
        assert icon.params['tint'] == PRIMARY
        line_height = styles.label.metrics().line_height
        assert icon.params['bounds'] == layout.icon_bounds(layout.label_origin.y + line_height)
        assert icon.params['bounds'].height == pytest.approx(layout.icon_height, abs=1)


# ==================== Layout caching & highlight ====================

class TestLayoutCaching:

    def test_layout_reused_across_frames(self, renderer, surface, bounds, morning):
        renderer.render(surface, bounds, morning, INTERACTIVE)
        first = renderer.layout_for(bounds)
        renderer.render(surface, bounds, morning, AMBIENT)
        assert renderer.layout_for(bounds) is first

    def test_layout_follows_resize(self, renderer, surface, morning):
        renderer.render(surface, Rect(0, 0, 400, 400), morning, INTERACTIVE)
        surface.reset()
        renderer.render(surface, Rect(0, 0, 300, 600), morning, INTERACTIVE)
        assert surface.of('text')[0].params['x'] == 150
        assert surface.of('text')[0].params['y'] == 300


class FakeSlot:

    def __init__(self, enabled):
        self.enabled = enabled
        self.calls = []

    def render_highlight_layer(self, surface, zoned_time, params):
        self.calls.append((surface, zoned_time, params))


class TestHighlightLayer:

    def test_tint_then_enabled_slots(self, styles, surface, bounds, morning):
        slots = [FakeSlot(True), FakeSlot(False), FakeSlot(True)]
        renderer = FaceRenderer(styles, HEAD_RADIUS, ICON_WIDTH, complication_slots=slots)
        params = RenderParameters(highlight_layer=HighlightLayer((0, 0, 0, 128), highlighted_slot=1))

        renderer.render_highlight_layer(surface, bounds, morning, params)

        assert surface.ops() == ['clear']
        assert surface.commands[0].params['color'] == (0, 0, 0, 128)
        assert [len(s.calls) for s in slots] == [1, 0, 1]
        assert slots[0].calls[0] == (surface, morning, params)

    def test_requires_highlight_parameters(self, renderer, surface, bounds, morning):
        with pytest.raises(ValueError):
            renderer.render_highlight_layer(surface, bounds, morning, INTERACTIVE)

    def test_shared_assets(self, renderer):
        assets = renderer.create_shared_assets()
        assets.on_destroy()
