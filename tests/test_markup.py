from __future__ import annotations

import unittest

from PIL import Image

from framesvg.markup import PathBuilder, SvgMarkupBackend, format_number, image_data_uri, polygon_path, svg_attributes


class FormatNumberTests(unittest.TestCase):
    def test_significant_digits_without_trailing_zeros(self) -> None:
        self.assertEqual(format_number(123.456), "123.5")
        self.assertEqual(format_number(2.0), "2")
        self.assertEqual(format_number(12345.6), "12350")
        self.assertEqual(format_number(0.000123456), "0.0001235")
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(-7.25), "-7.25")

    def test_precision_is_configurable(self) -> None:
        self.assertEqual(format_number(3.14159265358979, 2), "3.1")
        self.assertEqual(format_number(3.14159265358979, 8), "3.1415927")

    def test_non_finite_rejected(self) -> None:
        with self.assertRaises(ValueError):
            format_number(float("nan"))
        with self.assertRaises(ValueError):
            format_number(float("inf"))


class PathBuilderTests(unittest.TestCase):
    def test_segments(self) -> None:
        path = PathBuilder().move_to((0, 0)).line_to((1.23456, 2)).line_by((1, -1)).close()
        self.assertEqual(str(path), "M0 0 L1.235 2 l1 -1 z")
        self.assertEqual(len(path), 4)

    def test_polygon_path_closes(self) -> None:
        self.assertEqual(str(polygon_path([(0, 0), (1, 0), (1, 1)])), "M0 0 L1 0 L1 1 z")
        self.assertEqual(str(polygon_path([])), "")


class SvgMarkupBackendTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = SvgMarkupBackend()

    def test_circle(self) -> None:
        self.assertEqual(
            self.backend.circle(1.23456, 2, 3, {"fill": "red"}),
            '<circle cx="1.235" cy="2" r="3" fill="red"/>',
        )

    def test_rect_normalises_negative_extent(self) -> None:
        self.assertEqual(self.backend.rect(10, 50, 20, -30), '<rect x="10" y="20" width="20" height="30"/>')
        self.assertEqual(self.backend.rect(10, 0, -4, 5), '<rect x="6" y="0" width="4" height="5"/>')

    def test_ellipse_carries_both_radii(self) -> None:
        self.assertEqual(self.backend.ellipse(1, 2, 3, 4), '<ellipse cx="1" cy="2" rx="3" ry="4"/>')

    def test_poly(self) -> None:
        self.assertEqual(
            self.backend.poly("polyline", [(0, 0), (1.5, 2)], {"fill": "none"}),
            '<polyline fill="none" points="0,0 1.5,2"/>',
        )
        with self.assertRaises(ValueError):
            self.backend.poly("spline", [(0, 0)])  # type: ignore[arg-type]

    def test_text_content_is_escaped(self) -> None:
        self.assertEqual(self.backend.text(0, 0, "a<b & c"), '<text x="0" y="0">a&lt;b &amp; c</text>')

    def test_rotated_text(self) -> None:
        self.assertEqual(
            self.backend.text_rotated(10, 20, -90, "y"),
            '<text x="10" y="20" transform="rotate(-90,10,20)">y</text>',
        )

    def test_groups(self) -> None:
        self.assertEqual(self.backend.group_open("f1"), '<g id="f1">')
        self.assertEqual(self.backend.group_open(None, {"clip-path": "url(#clipf1)"}), '<g clip-path="url(#clipf1)">')
        self.assertEqual(self.backend.group_close(), "</g>")

    def test_clip_path(self) -> None:
        path = polygon_path([(0, 0), (1, 0), (1, 1)])
        self.assertEqual(self.backend.clip_path("clipA", path), '<clipPath id="clipA"><path d="M0 0 L1 0 L1 1 z"/></clipPath>')

    def test_canvas_wraps_html_canvas(self) -> None:
        out = self.backend.canvas("c1", 1, 2, 30, 40)
        self.assertTrue(out.startswith('<foreignObject x="1" y="2" width="30" height="40">'))
        self.assertIn('<canvas xmlns="http://www.w3.org/1999/xhtml" id="c1" width="30" height="40">', out)
        self.assertTrue(out.endswith("</foreignObject>"))

    def test_header_with_stylesheet(self) -> None:
        header = self.backend.header(600, 400, "plot.css")
        first, second = header.split("\n")
        self.assertEqual(first, '<?xml-stylesheet type="text/css" href="plot.css" ?>')
        self.assertIn('width="600" height="400" viewBox="0 0 600 400"', second)
        self.assertEqual(self.backend.footer(), "</svg>")

    def test_precision_applies_to_all_coordinates(self) -> None:
        backend = SvgMarkupBackend(precision=2)
        self.assertEqual(backend.line(1.234, 5.678, 9.87, 0.0123), '<line x1="1.2" y1="5.7" x2="9.9" y2="0.012"/>')
        with self.assertRaises(ValueError):
            SvgMarkupBackend(precision=0)


class AttributeTests(unittest.TestCase):
    def test_values_are_escaped(self) -> None:
        self.assertEqual(svg_attributes({"title": 'say "hi" & go'}), 'title="say &quot;hi&quot; &amp; go"')

    def test_order_is_kept(self) -> None:
        self.assertEqual(svg_attributes({"stroke": "black", "fill": "none"}), 'stroke="black" fill="none"')

    def test_invalid_names_rejected(self) -> None:
        with self.assertRaises(ValueError):
            svg_attributes({"bad name": "1"})


class ImageDataUriTests(unittest.TestCase):
    def test_png_data_uri(self) -> None:
        uri = image_data_uri(Image.new("RGBA", (3, 2), (255, 0, 0, 128)))
        self.assertTrue(uri.startswith("data:image/png;base64,"))

    def test_jpeg_converts_alpha(self) -> None:
        uri = image_data_uri(Image.new("RGBA", (3, 2)), image_format="jpeg")
        self.assertTrue(uri.startswith("data:image/jpeg;base64,"))


if __name__ == "__main__":
    unittest.main()
