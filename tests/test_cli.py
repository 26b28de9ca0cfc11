import json

import pytest

from squart.cli import main, parse_position


def test_generate_json_snapshot(capsys):
    main(["generate", "--rows", "5", "--cols", "5", "--seed", "test", "--inactive", "0", "--json"])

    snapshot = json.loads(capsys.readouterr().out)
    assert snapshot["moves"] == {"horizontal": 20, "vertical": 20}
    assert snapshot["seed"] == "test"


def test_generate_with_placements(capsys):
    main([
        "generate", "--rows", "5", "--cols", "5", "--seed", "test", "--inactive", "0",
        "--place", "0,0", "--place", "0,0",
    ])

    output = capsys.readouterr().out
    assert " 0 |  H  H  .  .  ." in output
    assert "Rejected placement at 0,0" in output
    assert "To move:       vertical" in output


def test_invalid_board_size_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--rows", "4"])
    assert excinfo.value.code == 2
    assert "dimensions" in capsys.readouterr().err


def test_parse_position():
    assert parse_position("3,4") == (3, 4)


def test_campaign_commands(tmp_path, capsys):
    save_path = str(tmp_path / "campaign.json")

    main(["campaign", "--save-path", save_path, "complete", "neo-aurora", "aurora-core", "--winner", "vertical"])
    output = capsys.readouterr().out
    assert "completed aurora-core -> vertical" in output
    assert "available aurora-docks" in output

    main(["campaign", "--save-path", save_path, "reset"])
    output = capsys.readouterr().out
    assert "available aurora-core" in output
    assert "Extra mission [final-showdown]: locked" in output
