"""Tests for the command-line wrapper."""

import numpy as np
from PIL import Image

from main import main


def write_dot(path):
    pixels = np.full((5, 5), 255, dtype=np.uint8)
    pixels[2, 2] = 0
    Image.fromarray(pixels).save(path)


def test_missing_arguments(capsys):
    assert main([]) == 1
    assert "--in and --out are required" in capsys.readouterr().out


def test_wrong_extension(tmp_path, capsys):
    assert main(['--in', str(tmp_path / 'a.jpg'), '--out', str(tmp_path / 'b.png')]) == 1
    assert "in/out file should be png" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    assert main(['--in', str(tmp_path / 'a.png'), '--out', str(tmp_path / 'b.png')]) == 1
    assert "File not found" in capsys.readouterr().out
    assert not (tmp_path / 'b.png').exists()


def test_generate(tmp_path, capsys):
    write_dot(tmp_path / 'dot.png')
    code = main(['--in', str(tmp_path / 'dot.png'), '--out', str(tmp_path / 'dot_sdf.png')])

    assert code == 0
    assert "Output:" in capsys.readouterr().out
    with Image.open(tmp_path / 'dot_sdf.png') as img:
        field = np.array(img)
    assert field[2, 2] == 125
    assert field[2, 3] == 131


def test_flags_override_config_and_preset(tmp_path):
    write_dot(tmp_path / 'dot.png')
    config = tmp_path / 'sdf.yaml'
    config.write_text("sdf:\n  scale: 5\n  bias: 50\n")

    code = main([
        '--in', str(tmp_path / 'dot.png'), '--out', str(tmp_path / 'dot_sdf.png'),
        '--preset', 'tight', '--config', str(config), '--bias', '100',
    ])

    assert code == 0
    with Image.open(tmp_path / 'dot_sdf.png') as img:
        field = np.array(img)
    # scale from the config file, bias from the flag
    assert field[2, 2] == 95
    assert field[2, 3] == 105


def test_unknown_preset(tmp_path, capsys):
    write_dot(tmp_path / 'dot.png')
    code = main(['--in', str(tmp_path / 'dot.png'), '--out', str(tmp_path / 'o.png'), '--preset', 'nope'])
    assert code == 1
    assert "Unknown preset" in capsys.readouterr().out


def test_list_presets(capsys):
    assert main(['--list-presets']) == 0
    out = capsys.readouterr().out
    assert "default" in out
    assert "midgray" in out


def test_config_with_non_string_keys(tmp_path, capsys):
    write_dot(tmp_path / 'dot.png')
    config = tmp_path / 'sdf.yaml'
    config.write_text("1: 2\n")

    code = main([
        '--in', str(tmp_path / 'dot.png'), '--out', str(tmp_path / 'o.png'),
        '--config', str(config),
    ])
    assert code == 1
    assert "non-string keys" in capsys.readouterr().out
