import pytest

from autometrics.cli import build_parser, main
from autometrics.sloth import DEFAULT_OBJECTIVES, format_rate, generate_sloth_file


def test_defaults_written_to_file(tmp_path):
    path = tmp_path / "slo.yml"
    assert main(["generate-sloth-file", "-o", str(path)]) == 0
    expected = generate_sloth_file(list(DEFAULT_OBJECTIVES), 1.0 / 60.0)
    assert path.read_text(encoding="utf-8") == expected


def test_repeated_objectives(tmp_path):
    path = tmp_path / "slo.yml"
    argv = ["generate-sloth-file", "--objectives", "99.9", "--objectives", "95", "-o", str(path)]
    assert main(argv) == 0
    text = path.read_text(encoding="utf-8")
    assert text.count("  - name: success-rate-") == 2
    assert "objective: 99.9\n" in text
    assert "objective: 90\n" not in text


def test_threshold_is_per_minute(capsys):
    assert main(["generate-sloth-file", "-a", "60", "--objectives", "99"]) == 0
    out = capsys.readouterr().out
    assert f">= {format_rate(1.0)}\n" in out


def test_parser_defaults():
    args = build_parser().parse_args(["generate-sloth-file"])
    assert args.objectives is None
    assert args.alerting_traffic_threshold == 1.0
    assert args.output is None


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        main([])


def test_write_error_returns_failure(tmp_path, capsys):
    status = main(["generate-sloth-file", "-o", str(tmp_path / "nope" / "slo.yml")])
    assert status == 1
    assert "Error writing SLO file" in capsys.readouterr().err