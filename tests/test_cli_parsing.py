"""Tests for CLI argument parsing and command handlers."""

from unittest.mock import patch

import pytest

from pdfrearrange import cli
from pdfrearrange.cli import _parse_crop, _parse_order, _parse_rotation, build_parser
from pdfrearrange.editor.session import EditorSession
from pdfrearrange.services.cropper import CropRegion
from pdfrearrange.utils.exceptions import ValidationError


class TestParseOrder:
    def test_converts_to_zero_indexed(self):
        assert _parse_order("3,1,2") == [2, 0, 1]

    def test_strips_whitespace_and_empty_parts(self):
        assert _parse_order(" 2 , 1 ,") == [1, 0]

    def test_zero_raises(self):
        with pytest.raises(ValidationError):
            _parse_order("0,1")

    def test_non_numeric_raises(self):
        with pytest.raises(ValidationError):
            _parse_order("a,b")

    def test_empty_raises(self):
        with pytest.raises(ValidationError):
            _parse_order(" , ")


class TestParseRotation:
    def test_valid(self):
        assert _parse_rotation("1:90") == (0, 90)
        assert _parse_rotation("3:-90") == (2, -90)

    @pytest.mark.parametrize("text", ["190", "1:abc", "x:90"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            _parse_rotation(text)


class TestParseCrop:
    def test_valid(self):
        assert _parse_crop("2:10,20,30,40") == (1, CropRegion(10, 20, 30, 40))

    def test_missing_page(self):
        with pytest.raises(ValidationError):
            _parse_crop("10,20,30,40")


class TestBuildParser:
    def test_arrange_arguments(self):
        args = build_parser().parse_args(
            ["arrange", "in.pdf", "-o", "out.pdf", "--order", "2,1", "--rotate", "1:90",
             "--rotate", "2:180", "--crop", "1:0,0,5,5"]
        )
        assert args.command == "arrange"
        assert args.order == "2,1"
        assert args.rotate == ["1:90", "2:180"]
        assert args.crop == ["1:0,0,5,5"]
        assert args.scale is None

    def test_order_and_reverse_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["arrange", "in.pdf", "-o", "out.pdf", "--order", "1", "--reverse"]
            )

    def test_output_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["arrange", "in.pdf"])


class TestMain:
    @pytest.fixture
    def input_pdf(self, tmp_path, make_pdf):
        path = tmp_path / "input.pdf"
        path.write_bytes(make_pdf(3))
        return path

    @pytest.fixture(autouse=True)
    def fake_session(self, renderer):
        with patch.object(cli, "_make_session", lambda _scale: EditorSession(renderer)):
            yield

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "arrange" in capsys.readouterr().out

    def test_arrange_writes_output(self, input_pdf, tmp_path, pdf_pages):
        output = tmp_path / "rearranged.pdf"
        code = cli.main(
            ["arrange", str(input_pdf), "-o", str(output), "--order", "3,1,2", "--rotate", "1:90"]
        )
        assert code == 0
        pages = pdf_pages(output.read_bytes())
        assert [w for w, _, _ in pages] == [120, 100, 110]
        assert [r for _, _, r in pages] == [0, 90, 0]

    def test_arrange_reverse_and_crop(self, input_pdf, tmp_path, pdf_pages):
        output = tmp_path / "out.pdf"
        code = cli.main(
            ["arrange", str(input_pdf), "-o", str(output), "--reverse", "--crop", "1:0,0,20,30"]
        )
        assert code == 0
        pages = pdf_pages(output.read_bytes())
        assert [(w, h) for w, h, _ in pages] == [(120, 220), (110, 210), (20, 30)]

    def test_missing_input(self, tmp_path, capsys):
        code = cli.main(["arrange", str(tmp_path / "nope.pdf"), "-o", str(tmp_path / "o.pdf")])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_incomplete_order_fails(self, input_pdf, tmp_path, capsys):
        output = tmp_path / "out.pdf"
        code = cli.main(["arrange", str(input_pdf), "-o", str(output), "--order", "1,2"])
        assert code == 1
        assert "Error:" in capsys.readouterr().err
        assert not output.exists()

    def test_unknown_page_fails(self, input_pdf, tmp_path):
        output = tmp_path / "out.pdf"
        code = cli.main(["arrange", str(input_pdf), "-o", str(output), "--rotate", "9:90"])
        assert code == 1
        assert not output.exists()

    def test_invalid_pdf_fails(self, tmp_path, capsys):
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"not a pdf")
        code = cli.main(["arrange", str(bad), "-o", str(tmp_path / "o.pdf")])
        assert code == 1
        assert "Could not load PDF" in capsys.readouterr().err

    def test_info(self, input_pdf, capsys):
        assert cli.main(["info", str(input_pdf)]) == 0
        out = capsys.readouterr().out
        assert "Pages:      3" in out
        assert "Page 3: 120x220 px" in out
