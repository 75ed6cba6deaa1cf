"""Tests for the poster command line."""
import fitz
import pytest
from PIL import Image

from poster import build_parser, main, resolve_options
from poster_format import Orientation, PageFormat


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["in.png"])
        assert args.columns is None
        assert args.rows is None
        assert args.orientation is None
        assert args.format is PageFormat.A4
        assert args.overlap == 10.0
        assert args.output is None

    def test_format_and_orientation(self):
        args = build_parser().parse_args(["-f", "letter", "-o", "Landscape", "in.png"])
        assert args.format is PageFormat.LETTER
        assert args.orientation is Orientation.LANDSCAPE

    @pytest.mark.parametrize("argv", [
        ["-c", "0", "in.png"],
        ["-r", "two", "in.png"],
        ["-f", "B5", "in.png"],
        ["-o", "diagonal", "in.png"],
    ])
    def test_rejects_bad_values(self, argv, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)

    def test_resolve_uses_suggestion(self):
        args = build_parser().parse_args(["in.png"])
        suggestion, options = resolve_options(args, (4000, 3000))
        assert tuple(suggestion) == (3, 2, Orientation.LANDSCAPE)
        assert (options.columns, options.rows, options.orientation) == tuple(suggestion)

    def test_resolve_overrides(self):
        args = build_parser().parse_args(["-c", "4", "-o", "portrait", "in.png"])
        _, options = resolve_options(args, (4000, 3000))
        assert (options.columns, options.rows, options.orientation) == (
            4, 2, Orientation.PORTRAIT)


class TestMain:

    def test_preview(self, make_png, capsys):
        assert main([str(make_png(400, 300)), "--preview"]) == 0
        out = capsys.readouterr().out
        assert "Suggested grid: 3 columns x 2 rows, landscape" in out
        assert "6 total pages + 1 assembly guide" in out

    def test_generate(self, make_png, tmp_path):
        out = tmp_path / "out.pdf"
        assert main([str(make_png(400, 300)), str(out), "-q"]) == 0
        with fitz.open(str(out)) as doc:
            assert doc.page_count == 7
            assert doc[0].rect.width > doc[0].rect.height

    def test_default_output_name(self, make_png, tmp_path, monkeypatch):
        image = make_png(400, 300)
        monkeypatch.chdir(tmp_path)
        assert main([str(image), "-q", "-c", "2", "-r", "2", "-o", "portrait"]) == 0
        out = tmp_path / "poster-2x2.pdf"
        with fitz.open(str(out)) as doc:
            assert doc.page_count == 5
            assert doc[0].rect.width < doc[0].rect.height

    def test_pdf_input(self, make_pdf, tmp_path):
        out = tmp_path / "out.pdf"
        assert main([str(make_pdf(200, 100)), str(out), "-q", "-c", "2", "-r", "1"]) == 0
        with fitz.open(str(out)) as doc:
            assert doc.page_count == 3

    def test_grid_out_of_range(self, make_png, tmp_path, capsys):
        out = tmp_path / "out.pdf"
        assert main([str(make_png(100, 100)), str(out), "-c", "11"]) == 1
        assert "Error: columns must be an integer between 1 and 10" in capsys.readouterr().err
        assert not out.exists()

    def test_overlap_out_of_range(self, make_png, tmp_path, capsys):
        assert main([str(make_png(100, 100)), str(tmp_path / "o.pdf"), "--overlap", "60"]) == 1
        assert "Error: Overlap" in capsys.readouterr().err

    def test_margin_too_large(self, make_png, tmp_path, capsys):
        assert main([str(make_png(100, 100)), str(tmp_path / "o.pdf"), "-q",
                     "--margin", "200"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_negative_margin(self, make_png, tmp_path, capsys):
        out = tmp_path / "o.pdf"
        assert main([str(make_png(100, 100)), str(out), "-q", "--margin=-5"]) == 1
        assert "Error: Margins must not be negative" in capsys.readouterr().err
        assert not out.exists()

    def test_oversized_image(self, make_png, monkeypatch, capsys):
        path = make_png(400, 400)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        assert main([str(path), "--preview"]) == 1
        assert "Input error:" in capsys.readouterr().err

    def test_unsupported_input(self, tmp_path, capsys):
        path = tmp_path / "anim.gif"
        Image.new('RGB', (10, 10)).save(path, format='GIF')
        assert main([str(path)]) == 1
        assert "Input error:" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "none.png")]) == 1
        assert "Input error:" in capsys.readouterr().err

    def test_bad_color(self, make_png, capsys):
        assert main([str(make_png(10, 10)), "--line-color", "#zz"]) == 1
        assert "Error: Invalid hex color" in capsys.readouterr().err
