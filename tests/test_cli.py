"""Tests for the command-line interface"""

import json
from unittest.mock import patch

import pytest
import requests

from lollipops.cli import build_parser, main, settings_from_args
from lollipops.constants import DomainLabelStyle
from lollipops.fonts import HeuristicMeasurer


@pytest.fixture(autouse=True)
def heuristic_fonts():
    """Keep CLI runs independent of installed fonts"""
    with patch("lollipops.cli.create_measurer", return_value=HeuristicMeasurer()) as mock:
        yield mock


@pytest.fixture
def features_file(tmp_path, tp53_json):
    path = tmp_path / "tp53.json"
    path.write_text(json.dumps(tp53_json))
    return path


class TestParser:
    """Tests for argument parsing"""

    def test_settings_from_args(self):
        args = build_parser().parse_args(
            ["--legend", "--show-motifs", "--domain-labels", "fit", "-w", "700", "TP53"]
        )
        settings = settings_from_args(args)

        assert settings.show_legend is True
        assert settings.hide_motifs is False
        assert settings.hide_disordered is True
        assert settings.domain_label_style == DomainLabelStyle.FIT
        assert settings.canvas_width == 700

    def test_defaults(self):
        args = build_parser().parse_args(["TP53", "R273C"])
        assert args.args == ["TP53", "R273C"]
        assert args.dpi == 72.0
        assert args.domain_source == "pfam"
        assert settings_from_args(args).hide_motifs is True

    def test_colors_lowercased(self):
        args = build_parser().parse_args(["--mut-color", "#FF00FF", "TP53"])
        assert args.mut_color == "#ff00ff"

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["-U", "P04637", "--features", "tp53.json"],
            ["--dpi", "0", "TP53"],
            ["-w", "-5", "TP53"],
            ["--mut-color", "red", "TP53"],
            ["--domain-labels", "sometimes", "TP53"],
            ["--domain-source", "smart", "TP53"],
            ["--log-level", "chatty", "TP53"],
        ],
    )
    def test_usage_errors(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "lollipops" in capsys.readouterr().out


class TestMain:
    """End-to-end runs of main()"""

    def test_feature_file(self, features_file, tmp_path):
        output = tmp_path / "out.svg"
        assert main(["--features", str(features_file), "R273C", "R175H", "-o", str(output)]) == 0
        assert output.read_bytes().endswith(b"</svg>")

    def test_png_output(self, features_file, tmp_path):
        output = tmp_path / "out.png"
        argv = ["--features", str(features_file), "R273C", "-o", str(output), "--dpi", "144"]
        assert main(argv) == 0
        assert output.read_bytes().startswith(b"\x89PNG")

    def test_default_output_name(self, features_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["--features", str(features_file), "R273C"]) == 0
        assert (tmp_path / "tp53.svg").exists()

    @patch("lollipops.cli.fetch_features")
    @patch("lollipops.cli.lookup_accession", return_value="P04637")
    def test_gene_symbol(self, mock_lookup, mock_fetch, tp53, tmp_path, monkeypatch):
        mock_fetch.return_value = tp53
        monkeypatch.chdir(tmp_path)

        assert main(["TP53", "R273C", "R248Q#00ff00@3"]) == 0

        mock_lookup.assert_called_once_with("TP53")
        mock_fetch.assert_called_once_with("P04637", "pfam")
        assert (tmp_path / "TP53.svg").exists()

    @patch("lollipops.cli.fetch_features")
    @patch("lollipops.cli.lookup_accession")
    def test_accession(self, mock_lookup, mock_fetch, tp53, tmp_path):
        mock_fetch.return_value = tp53
        output = tmp_path / "p53.svg"

        argv = ["-U", "P04637", "--domain-source", "interpro", "R273C", "-o", str(output)]
        assert main(argv) == 0

        mock_lookup.assert_not_called()
        mock_fetch.assert_called_once_with("P04637", "interpro")
        assert output.exists()

    def test_bad_mutation(self, features_file, tmp_path):
        output = tmp_path / "out.svg"
        assert main(["--features", str(features_file), "R273C@x", "-o", str(output)]) == 1
        assert not output.exists()

    def test_missing_feature_file(self, tmp_path):
        assert main(["--features", str(tmp_path / "missing.json"), "R273C"]) == 1

    @patch("lollipops.cli.lookup_accession", side_effect=requests.ConnectionError("offline"))
    def test_network_error(self, mock_lookup):
        assert main(["TP53", "R273C"]) == 1

    def test_custom_font_passed_through(self, features_file, tmp_path, heuristic_fonts):
        output = tmp_path / "out.svg"
        main(["--features", str(features_file), "R273C", "-o", str(output), "-f", "Arial.ttf"])
        heuristic_fonts.assert_called_once_with("Arial.ttf")

    def test_unicode_digit_count(self, features_file, tmp_path):
        output = tmp_path / "out.svg"
        assert main(["--features", str(features_file), "R273C@²", "-o", str(output)]) == 1
        assert not output.exists()

    @patch("lollipops.cli.set_log_level")
    def test_log_level(self, mock_set_level, features_file, tmp_path):
        output = tmp_path / "out.svg"
        argv = ["--log-level", "debug", "--features", str(features_file), "R273C", "-o", str(output)]
        assert main(argv) == 0
        mock_set_level.assert_called_once_with("DEBUG")

    @patch("lollipops.cli.set_log_level")
    def test_log_level_default_untouched(self, mock_set_level, features_file, tmp_path):
        assert main(["--features", str(features_file), "R273C", "-o", str(tmp_path / "o.svg")]) == 0
        mock_set_level.assert_not_called()
