from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from framesvg import DocumentConfig, svg
from framesvg.reader import SvgDocument
from framesvg.style import DEFAULT_TOKENS, merge_attributes, validate_style_tokens


class DocumentConfigTests(unittest.TestCase):
    def _write(self, body: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "framesvg.toml"
        path.write_text(body, encoding="utf-8")
        return path

    def test_defaults(self) -> None:
        config = DocumentConfig()
        self.assertEqual((config.canvas_width, config.canvas_height, config.precision), (600, 400, 4))
        self.assertIsNone(config.stylesheet)
        self.assertIs(config.tokens, DEFAULT_TOKENS)

    def test_from_toml_reads_document_table(self) -> None:
        path = self._write(
            """
[document]
canvas_width = 800
canvas_height = 300
precision = 6
stylesheet = "plot.css"

[document.style]
grid_stroke = "#ddd"
x_label_dy = 16

[document.root_style]
fill = "white"
"""
        )
        config = DocumentConfig.from_toml(path)
        self.assertEqual((config.canvas_width, config.canvas_height, config.precision), (800, 300, 6))
        self.assertEqual(config.stylesheet, "plot.css")
        self.assertEqual(config.tokens.grid_stroke, "#ddd")
        self.assertEqual(config.tokens.x_label_dy, 16.0)
        self.assertEqual(config.root_style, {"fill": "white"})

    def test_frame_style_table_applies_to_child_frames(self) -> None:
        path = self._write(
            """
[document]
canvas_width = 200
canvas_height = 100

[document.frame_style]
stroke = "red"
stroke-dasharray = "2 2"
"""
        )
        config = DocumentConfig.from_toml(path)
        self.assertEqual(config.frame_style, {"stroke": "red", "stroke-dasharray": "2 2"})

        root = svg(config=config)
        root.frame("plain", {"x_min": 0, "x_max": 1, "y_min": 0, "y_max": 1})
        root.frame("filled", {"x_min": 0, "x_max": 1, "y_min": 0, "y_max": 1}, style={"fill": "white", "stroke": "blue"})
        rects = SvgDocument.from_markup(root.render()).rects
        self.assertEqual(rects[0].attrs["fill"], "beige")
        self.assertNotIn("stroke-dasharray", rects[0].attrs)
        self.assertEqual(
            rects[1].attrs,
            {"stroke": "red", "fill": "none", "stroke-width": "1", "stroke-dasharray": "2 2"},
        )
        self.assertEqual(rects[2].attrs["stroke"], "blue")
        self.assertEqual(rects[2].attrs["fill"], "white")
        self.assertEqual(rects[2].attrs["stroke-dasharray"], "2 2")

    def test_frame_style_must_be_a_table(self) -> None:
        with self.assertRaises(ValueError):
            DocumentConfig.from_mapping({"frame_style": "red"})

    def test_missing_document_table_uses_defaults(self) -> None:
        config = DocumentConfig.from_toml(self._write('title = "unrelated"\n'))
        self.assertEqual(config, DocumentConfig())

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            DocumentConfig.from_toml(Path(tempfile.gettempdir()) / "framesvg-does-not-exist.toml")

    def test_unknown_field_rejected(self) -> None:
        with self.assertRaises(ValueError):
            DocumentConfig.from_toml(self._write("[document]\ncanvas_depth = 3\n"))

    def test_invalid_values_rejected(self) -> None:
        bad = [
            {"canvas_width": 0},
            {"canvas_height": -5},
            {"canvas_width": True},
            {"precision": 0},
            {"precision": 2.5},
            {"stylesheet": 3},
            {"style": "dark"},
        ]
        for raw in bad:
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    DocumentConfig.from_mapping(raw)

    def test_direct_construction_validates(self) -> None:
        with self.assertRaises(ValueError):
            DocumentConfig(canvas_width=-1)
        with self.assertRaises(ValueError):
            DocumentConfig(precision=0)


class StyleTokenTests(unittest.TestCase):
    def test_unknown_token(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown style token"):
            validate_style_tokens({"grid_colour": "red"})

    def test_token_types(self) -> None:
        for overrides in ({"frame_stroke": ""}, {"grid_stroke_width": -1}, {"y_label_dx": float("nan")}):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    validate_style_tokens(overrides)

    def test_merge_attributes_formats_values(self) -> None:
        merged = merge_attributes({"stroke": "black", "stroke-width": 1.0}, {"stroke-width": 2.5, "visible": True})
        self.assertEqual(merged, {"stroke": "black", "stroke-width": "2.5", "visible": "true"})

    def test_merge_attributes_rejects_empty_name(self) -> None:
        with self.assertRaises(ValueError):
            merge_attributes({}, {"": "x"})


class SvgFactoryTests(unittest.TestCase):
    def test_arguments_override_config(self) -> None:
        config = DocumentConfig(canvas_width=100, canvas_height=50, root_style={"fill": "white", "opacity": "0.5"})
        root = svg(300, style={"fill": "navy"}, config=config)
        self.assertEqual((root.document.canvas_width, root.document.canvas_height), (300, 50))
        rect = SvgDocument.from_markup(root.render()).rects[0]
        self.assertEqual(rect.attrs["fill"], "navy")
        self.assertEqual(rect.attrs["opacity"], "0.5")

    def test_tokens_drive_scaffolding_styles(self) -> None:
        config = DocumentConfig(tokens=validate_style_tokens({"grid_stroke": "red", "grid_stroke_width": 2}))
        root = svg(config=config)
        root.frame("f", {"x_min": 0, "x_max": 10, "y_min": 0, "y_max": 10}).grid(5, 5)
        path = SvgDocument.from_markup(root.render()).paths[0]
        self.assertEqual(path.attrs, {"stroke": "red", "stroke-width": "2"})

    def test_no_stylesheet_line_by_default(self) -> None:
        self.assertTrue(svg().render().startswith("<svg "))


if __name__ == "__main__":
    unittest.main()
