"""Tests for image parsing, exporting and the file-level entry point."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

import sdfgen
from sdfgen.core import (
    ImageParser, ImageExporter, ImageIOError, ImageFormatError, generate_sdf,
)


def write_glyph(path):
    """Save a black square on white as an RGB PNG, return its pixels."""
    pixels = np.full((16, 20, 3), 255, dtype=np.uint8)
    pixels[4:12, 6:14] = 0
    Image.fromarray(pixels).save(path)
    return pixels


class TestImageParser:
    """Test cases for ImageParser."""

    def test_parse_rgb(self, tmp_path):
        pixels = write_glyph(tmp_path / 'glyph.png')
        parsed = ImageParser.parse(tmp_path / 'glyph.png')
        assert np.array_equal(parsed, pixels)

    def test_parse_16bit(self, tmp_path):
        pixels = np.array([[100, 1000], [60000, 0]], dtype=np.uint16)
        Image.fromarray(pixels).save(tmp_path / 'deep.png')

        parsed = ImageParser.parse(tmp_path / 'deep.png')
        assert parsed.tolist() == pixels.tolist()

    def test_parse_bilevel(self, tmp_path):
        img = Image.new('1', (3, 1), 1)
        img.putpixel((1, 0), 0)
        img.save(tmp_path / 'mono.png')

        parsed = ImageParser.parse(tmp_path / 'mono.png')
        assert parsed[:, :, 0].tolist() == [[255, 0, 255]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageParser.parse(tmp_path / 'missing.png')

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / 'notes.txt'
        path.write_text("hello")
        with pytest.raises(ImageFormatError):
            ImageParser.parse(path)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / 'broken.png'
        path.write_bytes(b"definitely not a png")

        with pytest.raises(ImageIOError) as info:
            ImageParser.parse(path)
        assert info.value.operation == 'decode'
        assert info.value.path == path
        assert 'could not be decoded' in str(info.value)

    def test_open_failure(self, tmp_path):
        # Exists and has a png suffix, but is a directory
        path = tmp_path / 'folder.png'
        path.mkdir()

        with pytest.raises(ImageIOError) as info:
            ImageParser.parse(path)
        assert info.value.operation == 'open'
        assert info.value.path == path
        assert 'could not be opened' in str(info.value)


class TestImageExporter:
    """Test cases for ImageExporter."""

    def test_to_png(self, tmp_path):
        field = np.arange(12, dtype=np.uint8).reshape(3, 4) * 20
        path = ImageExporter.to_png(field, tmp_path / 'out' / 'field.png')

        with Image.open(path) as img:
            assert img.mode == 'L'
            assert np.array_equal(np.array(img), field)

    def test_rejects_multichannel(self, tmp_path):
        with pytest.raises(ValueError):
            ImageExporter.to_png(np.zeros((2, 2, 3), dtype=np.uint8), tmp_path / 'x.png')

    def test_create_failure(self, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text("a file, not a directory")

        with pytest.raises(ImageIOError) as info:
            ImageExporter.to_png(np.zeros((2, 2), dtype=np.uint8), blocker / 'x.png')
        assert info.value.operation == 'create'
        assert 'could not be created' in str(info.value)

    def test_encode_failure(self, tmp_path, monkeypatch):
        def refuse(self, fp, format=None, **params):
            raise OSError("encoder exploded")

        monkeypatch.setattr(Image.Image, 'save', refuse)
        path = tmp_path / 'field.png'

        with pytest.raises(ImageIOError) as info:
            ImageExporter.to_png(np.zeros((2, 2), dtype=np.uint8), path)
        assert info.value.operation == 'encode'
        assert info.value.path == path
        assert 'could not be encoded' in str(info.value)
        assert not path.exists()

    @pytest.mark.skipif(not Path('/dev/full').exists(), reason="needs /dev/full")
    def test_flush_failure(self):
        with pytest.raises(ImageIOError) as info:
            ImageExporter.to_png(np.zeros((64, 64), dtype=np.uint8), '/dev/full')
        assert info.value.operation == 'flush'
        assert info.value.path == Path('/dev/full')
        assert 'could not be flushed' in str(info.value)


def test_generate_file(tmp_path):
    pixels = write_glyph(tmp_path / 'glyph.png')
    out = sdfgen.generate(tmp_path / 'glyph.png', tmp_path / 'glyph_sdf.png')

    with Image.open(out) as img:
        result = np.array(img)
    assert np.array_equal(result, generate_sdf(pixels))
    assert result[8, 10] < 128
    assert result[0, 0] > 128
