import logging
import pytest
from xml.etree import ElementTree as ET
from dmplbuilder.builder import InvalidArgumentError, UnhandledUnitError
from dmplbuilder.render.svg import SvgBuilder, format_number

SVG_NS = "{http://www.w3.org/2000/svg}"


def parse(svg: SvgBuilder) -> ET.Element:
    return ET.fromstring(svg.compile())


def lines(svg: SvgBuilder):
    return parse(svg).findall(f"{SVG_NS}line")


def paths(svg: SvgBuilder):
    return parse(svg).findall(f"{SVG_NS}path")


class TestFormatNumber:
    def test_integers(self):
        assert format_number(0) == "0"
        assert format_number(-42) == "-42"

    def test_integral_floats_drop_fraction(self):
        assert format_number(10.0) == "10"
        assert format_number(-3.0) == "-3"

    def test_floats_are_rounded_to_14_digits(self):
        assert format_number(0.1 * 3) == "0.3"
        assert format_number(29.999999999999993) == "30"
        assert format_number(1.5) == "1.5"

    def test_strings_pass_through(self):
        assert format_number("regular") == "regular"


class TestDocument:
    def test_empty_document(self, svg):
        output = svg.compile()
        assert output.splitlines()[0] == (
            '<svg xmlns="http://www.w3.org/2000/svg" width="0mm" '
            'height="0mm" viewBox="0 0 0 0">'
        )
        assert output.endswith("</svg>")

    def test_document_is_well_formed(self, svg):
        svg.plot(10, 20).arc(5, 5, 270)
        root = parse(svg)
        assert root.tag == f"{SVG_NS}svg"
        assert root.find(f"{SVG_NS}defs/{SVG_NS}style") is not None

    def test_style_defines_all_tools(self, svg):
        output = svg.compile()
        for tool in ("regular", "kiss", "flex", "through"):
            assert f".{tool} {{" in output

    def test_style_colors(self, svg):
        style = parse(svg).find(f"{SVG_NS}defs/{SVG_NS}style").text
        kiss = style.split(".kiss {")[1].split("}")[0]
        assert "rgb(0,0,255)" in kiss
        assert "stroke-dasharray" in kiss
        through = style.split(".through {")[1].split("}")[0]
        assert "rgb(255,0,0)" in through
        assert "stroke-dasharray" not in through

    def test_size_follows_extent(self, svg):
        svg.plot(100, 200)
        root = parse(svg)
        assert root.get("width") == "10mm"
        assert root.get("height") == "20mm"
        assert root.get("viewBox") == "0 0 100 200"

    def test_compile_is_repeatable(self, svg):
        svg.plot(1, 2).plot(3, 4)
        assert svg.compile() == svg.compile()


class TestPlot:
    def test_plot_draws_a_line(self, svg):
        svg.plot(100, 200)
        assert svg.instructions == [
            '<line x1="0" y1="0" x2="100" y2="200" class="regular" />'
        ]

    def test_plots_are_relative(self, svg):
        svg.plot(10, 10).plot(5, -20)
        (first, second) = lines(svg)
        assert second.get("x1") == "10"
        assert second.get("y1") == "10"
        assert second.get("x2") == "15"
        assert second.get("y2") == "-10"

    def test_cursor_is_the_sum_of_all_deltas(self, svg):
        deltas = [(10, 5), (-30, 7), (12, -40), (0, 100), (8, 8)]
        visited = []
        x = y = 0
        for dx, dy in deltas:
            svg.plot(dx, dy)
            x, y = x + dx, y + dy
            visited.append((x, y))
        assert svg.position == (x, y)
        assert svg.extent == (
            max(0, *(p[0] for p in visited)),
            max(0, *(p[1] for p in visited)),
        )

    def test_extent_never_shrinks(self, svg):
        svg.plot(50, 60).plot(-100, -100)
        assert svg.position == (-50, -40)
        assert svg.extent == (50, 60)

    def test_extent_starts_at_origin(self, svg):
        svg.plot(-10, -10)
        assert svg.extent == (0, 0)

    def test_pen_up_moves_without_drawing(self, svg):
        svg.pen_up().plot(10, 10).pen_down().plot(5, 5)
        (line,) = lines(svg)
        assert (line.get("x1"), line.get("y1")) == ("10", "10")
        assert (line.get("x2"), line.get("y2")) == ("15", "15")
        assert svg.extent == (15, 15)

    def test_pen_up_still_grows_extent(self, svg):
        svg.pen_up().plot(30, 40)
        assert svg.instructions == []
        assert svg.extent == (30, 40)

    def test_flip_axes(self, svg):
        svg.plot(1, 2).flip_axes().plot(10, 20)
        assert svg.position == (21, 12)
        assert svg.instructions[-1] == (
            '<line x1="1" y1="2" x2="21" y2="12" class="regular" />'
        )


class TestTools:
    @pytest.mark.parametrize(
        "method, tool",
        [
            ("regular_cut", "regular"),
            ("kiss_cut", "kiss"),
            ("through_cut", "through"),
            ("flex_cut", "flex"),
        ],
    )
    def test_named_cuts(self, svg, method, tool):
        getattr(svg, method)().plot(1, 1)
        assert svg.tool == tool
        assert lines(svg)[0].get("class") == tool

    def test_tool_applies_to_following_lines_only(self, svg):
        svg.plot(1, 1).flex_cut().plot(1, 1)
        assert [line.get("class") for line in lines(svg)] == [
            "regular",
            "flex",
        ]

    @pytest.mark.parametrize("pen", [2, 3, 4])
    def test_pen_without_tool_falls_back_to_regular(self, svg, pen, caplog):
        svg.flex_cut()
        with caplog.at_level(logging.WARNING):
            svg.change_pen(pen)
        assert svg.tool == "regular"
        assert f"Pen {pen}" in caplog.text

    @pytest.mark.parametrize("pen", [-1, 7, 1984])
    def test_invalid_pen_is_rejected(self, svg, pen):
        svg.kiss_cut()
        with pytest.raises(InvalidArgumentError, match=rf"\[{pen}\]"):
            svg.change_pen(pen)
        assert svg.tool == "kiss"


class TestMeasuringUnit:
    def test_default_is_millimeters(self, svg):
        assert svg.unit == "mm"
        assert svg.scale == 0.1

    def test_thousandth_inch(self, svg):
        svg.set_measuring_unit(1).plot(1000, 2000)
        root = parse(svg)
        assert root.get("width") == "1in"
        assert root.get("height") == "2in"
        assert root.get("viewBox") == "0 0 1000 2000"

    def test_five_thousandth_inch(self, svg):
        svg.set_measuring_unit(5).plot(200, 400)
        root = parse(svg)
        assert root.get("width") == "1in"
        assert root.get("height") == "2in"

    def test_float_unit_is_stored_as_table_entry(self, svg):
        svg.set_measuring_unit(5.0)
        assert type(svg.measuring_unit) is int
        assert (svg.unit, svg.scale) == ("in", 0.005)

    def test_back_to_millimeters(self, svg):
        svg.set_measuring_unit(5).set_measuring_unit("M")
        assert (svg.unit, svg.scale) == ("mm", 0.1)

    @pytest.mark.parametrize("unit", [2, 3, 4, 9, "mm"])
    def test_unhandled_unit(self, svg, unit):
        message = f"Unhandled unit: {unit}"
        with pytest.raises(UnhandledUnitError, match=message):
            svg.set_measuring_unit(unit)
        assert (svg.unit, svg.scale) == ("mm", 0.1)
        assert svg.measuring_unit == "M"


class TestArc:
    def test_arc_path(self, svg):
        svg.arc(30, 40, 90)
        (path,) = paths(svg)
        assert path.get("d") == "M 0 0 a 50 50 0 1 1 30 -10"
        assert path.get("class") == "regular"

    def test_arc_grows_extent_by_radius(self, svg):
        svg.plot(10, 10).arc(30, 40, 90)
        assert svg.extent == (90, 100)

    def test_arc_does_not_move_cursor(self, svg):
        svg.plot(10, 10).arc(30, 40, 90)
        assert svg.position == (10, 10)
        assert paths(svg)[0].get("d").startswith("M 10 10 a 50 50 ")

    def test_clockwise_reflex_arc_sweeps_backwards(self, svg):
        svg.arc(30, 40, -270)
        assert paths(svg)[0].get("d") == "M 0 0 a 50 50 0 1 0 30 -10"

    def test_sweep_follows_shifted_angle(self, svg):
        # -90 + 180 is still positive
        svg.arc(30, 40, -90)
        assert paths(svg)[0].get("d") == "M 0 0 a 50 50 0 1 1 30 90"

    def test_arc_with_flipped_axes(self, svg):
        svg.flip_axes().arc(40, 30, 90)
        assert paths(svg)[0].get("d") == "M 0 0 a 50 50 0 1 1 30 -10"

    def test_arc_drawn_even_when_pen_is_up(self, svg):
        svg.pen_up().arc(30, 40, 90)
        assert len(paths(svg)) == 1

    def test_arc_uses_active_tool(self, svg):
        svg.through_cut().arc(3, 4, 180)
        assert paths(svg)[0].get("class") == "through"


class TestNoOps:
    def test_shapes_are_not_drawn(self, svg):
        svg.circle(10, 10, 5).ellipse(1, 2, 3, 4, 5, 6).curve(1, 2, 3, 4, 5)
        assert svg.instructions == []
        assert svg.position == (0, 0)
        assert svg.extent == (0, 0)

    def test_settings_without_visual_effect(self, svg):
        before = svg.compile()
        result = (
            svg.pressure(80).velocity(100).cut_off().push_command("V10;")
        )
        assert result is svg
        assert svg.compile() == before
