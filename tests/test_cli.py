import pytest

from pngme import Png, __version__
from pngme.cli import main


def test_encode_decode(png_file, capsys):
    assert main(['encode', str(png_file), 'ruSt', 'hidden message']) == 0
    assert 'Encoded 14 bytes in a ruSt chunk' in capsys.readouterr().out
    assert main(['decode', str(png_file), 'ruSt']) == 0
    assert capsys.readouterr().out == 'hidden message\n'


def test_encode_output_file(png_file, tmp_path):
    output = tmp_path / 'output.png'
    assert main(['encode', str(png_file), 'ruSt', 'hidden message', str(output)]) == 0
    assert Png.from_bytes(output.read_bytes()).chunk_by_type('ruSt') is not None
    assert Png.from_bytes(png_file.read_bytes()).chunk_by_type('ruSt') is None


def test_decode_no_matching_chunk(png_file, capsys):
    assert main(['decode', str(png_file), 'ruSt']) == 0
    assert 'No matching chunk' in capsys.readouterr().out


def test_remove(png_file, capsys):
    main(['encode', str(png_file), 'ruSt', 'hidden message'])
    capsys.readouterr()
    assert main(['remove', str(png_file), 'ruSt']) == 0
    assert 'Removed ruSt chunk (14 bytes)' in capsys.readouterr().out
    assert Png.from_bytes(png_file.read_bytes()).chunk_by_type('ruSt') is None


def test_remove_missing_chunk_fails(png_file, capsys):
    assert main(['remove', str(png_file), 'ruSt']) == 1
    assert 'Error: no chunk of type ruSt' in capsys.readouterr().err


def test_print(png_file, capsys):
    assert main(['print', str(png_file)]) == 0
    out = capsys.readouterr().out
    assert 'PNG file with 4 chunks' in out
    assert 'Type: IHDR' in out


def test_invalid_chunk_type(png_file, capsys):
    assert main(['encode', str(png_file), 'Ru1t', 'message']) == 1
    assert 'Error:' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(['print', str(tmp_path / 'missing.png')]) == 1
    assert 'missing.png' in capsys.readouterr().err


def test_corrupted_file(png_file, capsys):
    png_file.write_bytes(png_file.read_bytes()[:-2])
    assert main(['print', str(png_file)]) == 1
    assert 'truncated input' in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--version'])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_missing_command():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
